from __future__ import annotations

import logging

import numpy as np
import pytest

from engine.animation.particles import ParticleField
from engine.core.geometry import Geometry
from engine.core.node import Material
from engine.core.scene_graph import SceneGraph
from engine.render.camera import PerspectiveCamera
from engine.runtime.frame_loop import FrameLoop, FrameState


class _SpyParticles:
    def __init__(self, log: list) -> None:
        self.log = log
        self.elapsed: list[float] = []

    def advance(self, elapsed: float) -> int:
        self.log.append("advance")
        self.elapsed.append(elapsed)
        return 0


def _loop(renderer, *, double_render: bool = True):  # noqa: ANN001
    particles = _SpyParticles(renderer.calls)
    loop = FrameLoop(
        renderer, SceneGraph(), PerspectiveCamera(), particles, double_render=double_render
    )
    return loop, particles


# What this tests
# - 1 フレーム = clear → render → advance → render（既定の二重描画）。
@pytest.mark.smoke
def test_tick_order_with_double_render(fake_renderer) -> None:
    loop, _ = _loop(fake_renderer)
    loop.tick(0.016)
    assert fake_renderer.calls == ["clear", "render", "advance", "render"]


def test_single_render_mode(fake_renderer) -> None:
    loop, _ = _loop(fake_renderer, double_render=False)
    loop.tick(0.016)
    assert fake_renderer.calls == ["clear", "advance", "render"]


def test_first_tick_moves_idle_to_running_with_zero_elapsed(fake_renderer) -> None:
    loop, particles = _loop(fake_renderer)
    assert loop.state is FrameState.IDLE
    loop.tick(3.0)
    assert loop.state is FrameState.RUNNING
    loop.tick(0.5)
    assert particles.elapsed == [0.0, 0.5]
    assert loop.frame_count == 2


def test_negative_dt_is_clamped(fake_renderer) -> None:
    loop, particles = _loop(fake_renderer)
    loop.tick(0.0)
    loop.tick(-0.2)
    assert particles.elapsed == [0.0, 0.0]


def test_render_error_is_logged_and_frame_continues(fake_renderer, caplog) -> None:
    fake_renderer.fail_on = {1}
    loop, _ = _loop(fake_renderer)
    with caplog.at_level(logging.WARNING, logger="engine.runtime.frame_loop"):
        loop.tick(0.016)
    assert fake_renderer.calls == ["clear", "render", "advance", "render"]
    assert loop.render_failures == 1
    assert "Error rendering scene: boom #1" in caplog.text
    loop.tick(0.016)
    assert loop.frame_count == 2
    assert loop.render_failures == 1


def test_second_render_sees_advanced_particles(fake_renderer) -> None:
    flake = Geometry.from_lines([np.zeros((2, 3), dtype=np.float32)])
    field = ParticleField.initialize(
        4,
        (0.0, 1.0),
        (2.0, 2.0),
        (0.0, 1.0),
        geometry=flake,
        material=Material((1.0, 1.0, 1.0, 1.0)),
    )
    seen: list[float] = []
    fake_renderer.on_render = lambda: seen.append(float(field.positions[0, 1]))
    loop = FrameLoop(fake_renderer, SceneGraph(), PerspectiveCamera(), field)
    loop.tick(0.0)
    loop.tick(0.5)
    assert seen == [2.0, 2.0, 2.0, 1.5]
