from __future__ import annotations

import pytest

from api.app_runner.utils import (
    resolve_camera_config,
    resolve_double_render,
    resolve_fps,
    resolve_snow_config,
    resolve_window_size,
)


def test_resolve_fps_priority_and_clamp() -> None:
    assert resolve_fps(30, {"window": {"fps": 60}}) == 30
    assert resolve_fps(None, {"window": {"fps": 24}}) == 24
    assert resolve_fps(0) == 1
    assert resolve_fps(None, {"window": {"fps": "fast"}}) == 60
    assert resolve_fps(None, None) == 60
    with pytest.raises(ValueError):
        resolve_fps("fast")  # type: ignore[arg-type]


def test_resolve_window_size() -> None:
    assert resolve_window_size(None, None, {}) == (1280, 720)
    assert resolve_window_size(None, 600, {"window": {"width": 800, "height": 700}}) == (800, 600)
    with pytest.raises(ValueError):
        resolve_window_size(0, 100)
    with pytest.raises(ValueError):
        resolve_window_size("wide", 100)  # type: ignore[arg-type]


def test_resolve_snow_config_from_yaml_and_override() -> None:
    cfg = {"snow": {"count": 10, "y_range": [1, 2], "floor": -3, "ceiling": 4}}
    snow = resolve_snow_config(cfg)
    assert snow.count == 10
    assert snow.y_range == (1.0, 2.0)
    assert snow.x_range == (-5.0, 5.0)
    assert snow.floor == -3.0
    assert snow.ceiling == 4.0
    assert resolve_snow_config(cfg, count=3).count == 3
    with pytest.raises(ValueError):
        resolve_snow_config({"snow": {"count": -1}})
    with pytest.raises(ValueError):
        resolve_snow_config({"snow": {"x_range": 5}})


def test_resolve_camera_config() -> None:
    cam = resolve_camera_config({"camera": {"position": [1, 2, 3], "fov": 45}})
    assert cam.position == (1.0, 2.0, 3.0)
    assert cam.fov == 45.0
    assert cam.near == 0.01
    with pytest.raises(ValueError):
        resolve_camera_config({"camera": {"position": [1, 2]}})


def test_resolve_double_render_priority() -> None:
    cfg = {"frame_loop": {"double_render": False}}
    assert resolve_double_render(None, {}) is True
    assert resolve_double_render(None, cfg) is False
    assert resolve_double_render(None, cfg, True) is True
    assert resolve_double_render(False, {}, True) is False
