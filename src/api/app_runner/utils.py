"""
どこで: `api.app_runner.utils`（純粋関数/小ヘルパ）。
何を: FPS・ウィンドウサイズ・雪・カメラの設定値を YAML/引数から解決して型付きで返す。
なぜ: `api.app` を薄く保ち、設定解決をウィンドウ無しでテストできるようにするため。

優先順位はいずれも「明示引数 > 環境変数（該当項目のみ） > YAML > 既定値」。
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from common.types import Range
from engine.animation.particles import SnowConfig
from engine.render.camera import CameraConfig
from util.constants import DEFAULT_WINDOW_SIZE
from util.utils import config_section as _section


def resolve_fps(
    requested_fps: int | None, cfg: Mapping[str, Any] | None = None, *, default: int = 60
) -> int:
    """FPS を解決して 1 以上の int を返す。

    - 明示指定があればそれを優先（数値化できない値は `ValueError`）。
    - それ以外は `window.fps`。読めなければ既定値。
    """
    if requested_fps is not None:
        try:
            return max(1, int(requested_fps))
        except (TypeError, ValueError) as e:
            raise ValueError(f"invalid fps: {requested_fps!r}") from e
    raw = _section(cfg, "window").get("fps", default)
    try:
        return max(1, int(raw))
    except (TypeError, ValueError):
        return max(1, int(default))


def resolve_window_size(
    width: int | None, height: int | None, cfg: Mapping[str, Any] | None = None
) -> tuple[int, int]:
    """ウィンドウサイズ（px）を解決する。0 以下は `ValueError`。"""
    win = _section(cfg, "window")
    w = width if width is not None else win.get("width", DEFAULT_WINDOW_SIZE[0])
    h = height if height is not None else win.get("height", DEFAULT_WINDOW_SIZE[1])
    try:
        wi, hi = int(w), int(h)
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid window size: {(w, h)!r}") from e
    if wi <= 0 or hi <= 0:
        raise ValueError(f"window size must be positive, got: {(wi, hi)}")
    return wi, hi


def _as_range(value: Any, default: Range, name: str) -> Range:
    if value is None:
        return default
    try:
        lo, hi = float(value[0]), float(value[1])
    except (TypeError, ValueError, IndexError, KeyError) as e:
        raise ValueError(f"{name} must be a [lo, hi] pair, got {value!r}") from e
    return (lo, hi)


def _as_float(value: Any, default: float, name: str) -> float:
    if value is None:
        return default
    try:
        v = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(v):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return v


def resolve_snow_config(
    cfg: Mapping[str, Any] | None = None, *, count: int | None = None
) -> SnowConfig:
    """`snow` セクションから `SnowConfig` を作る。`count` を与えると個数だけ上書きする。"""
    snow = _section(cfg, "snow")
    d = SnowConfig()
    raw_count = count if count is not None else snow.get("count", d.count)
    try:
        n = int(raw_count)
    except (TypeError, ValueError) as e:
        raise ValueError(f"snow count must be an integer, got {raw_count!r}") from e
    if n < 0:
        raise ValueError(f"snow count must be >= 0, got {n}")
    return SnowConfig(
        count=n,
        x_range=_as_range(snow.get("x_range"), d.x_range, "snow.x_range"),
        y_range=_as_range(snow.get("y_range"), d.y_range, "snow.y_range"),
        z_range=_as_range(snow.get("z_range"), d.z_range, "snow.z_range"),
        fall_speed=_as_float(snow.get("fall_speed"), d.fall_speed, "snow.fall_speed"),
        floor=_as_float(snow.get("floor"), d.floor, "snow.floor"),
        ceiling=_as_float(snow.get("ceiling"), d.ceiling, "snow.ceiling"),
    )


def resolve_camera_config(cfg: Mapping[str, Any] | None = None) -> CameraConfig:
    cam = _section(cfg, "camera")
    d = CameraConfig()
    raw_pos = cam.get("position")
    if raw_pos is None:
        position = d.position
    else:
        try:
            position = (float(raw_pos[0]), float(raw_pos[1]), float(raw_pos[2]))
        except (TypeError, ValueError, IndexError, KeyError) as e:
            raise ValueError(f"camera.position must be [x, y, z], got {raw_pos!r}") from e
    return CameraConfig(
        position=position,
        fov=_as_float(cam.get("fov"), d.fov, "camera.fov"),
        near=_as_float(cam.get("near"), d.near, "camera.near"),
        far=_as_float(cam.get("far"), d.far, "camera.far"),
    )


def resolve_double_render(
    requested: bool | None,
    cfg: Mapping[str, Any] | None = None,
    env_value: bool | None = None,
) -> bool:
    """二重描画の有無。明示引数 > 環境変数 > `frame_loop.double_render` > True。"""
    if requested is not None:
        return bool(requested)
    if env_value is not None:
        return bool(env_value)
    return bool(_section(cfg, "frame_loop").get("double_render", True))


__all__ = [
    "resolve_fps",
    "resolve_window_size",
    "resolve_snow_config",
    "resolve_camera_config",
    "resolve_double_render",
]
