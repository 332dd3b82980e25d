"""共通フィクスチャ。

- 乱数シード固定
- 小さな Geometry 試料
- GL/ウィンドウを使わない Renderer/Surface の偽実装
"""

from __future__ import annotations

import numpy as np
import pytest

from engine.core.geometry import Geometry
from engine.render.types import RenderError


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def geom_empty() -> Geometry:
    return Geometry.from_lines([])


@pytest.fixture()
def geom_two_lines() -> Geometry:
    a = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]], dtype=np.float32)
    b = np.array([[0.0, 1.0, 0.0], [1.0, 1.0, 0.0], [2.0, 1.0, 0.0]], dtype=np.float32)
    return Geometry.from_lines([a, b])


class FakeRenderer:
    """呼び出し順を記録するだけの Renderer。`fail_on` 回目の render で RenderError。"""

    def __init__(self, fail_on: set[int] | None = None) -> None:
        self.calls: list[str] = []
        self.viewports: list[tuple[int, int, int, int]] = []
        self.fail_on = fail_on or set()
        self.render_count = 0
        self.on_render = None

    def clear_buffers(self) -> None:
        self.calls.append("clear")

    def render(self, scene, camera) -> None:  # noqa: ANN001
        self.render_count += 1
        self.calls.append("render")
        if self.on_render is not None:
            self.on_render()
        if self.render_count in self.fail_on:
            raise RenderError(f"boom #{self.render_count}")

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        self.viewports.append((x, y, width, height))


class FakeSurface:
    """サイズを外から差し替えられる描画面。"""

    def __init__(self, width: int, height: int) -> None:
        self.size = (width, height)
        self.resize_callbacks: list = []

    def get_framebuffer_size(self) -> tuple[int, int]:
        return self.size

    def add_resize_callback(self, func) -> None:  # noqa: ANN001
        self.resize_callbacks.append(func)

    def resize(self, width: int, height: int) -> None:
        self.size = (width, height)
        for cb in self.resize_callbacks:
            cb(width, height)


@pytest.fixture()
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture()
def fake_surface() -> FakeSurface:
    return FakeSurface(1280, 720)
