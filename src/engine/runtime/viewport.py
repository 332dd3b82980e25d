"""
どこで: `engine.runtime.viewport`。
何を: 描画面のサイズ変化に合わせて Renderer のビューポートとカメラのアスペクト比を更新する。
なぜ: リサイズ時も初回フレームも、画面の縦横比どおりに描画されるようにするため。
"""

from __future__ import annotations

import logging
from typing import Any

from engine.render.types import Camera, Renderer, Surface

logger = logging.getLogger(__name__)


class ViewportController:
    """リサイズ通知を受けてビューポート/アスペクト比を同期する。

    幅または高さが 0 以下のとき（最小化など）は更新全体をスキップし、直前の値を保つ。
    """

    def __init__(self, surface: Surface, renderer: Renderer, camera: Camera) -> None:
        self._surface = surface
        self._renderer = renderer
        self._camera = camera
        self.last_size: tuple[int, int] | None = None

    def handle_resize(self, *_: Any) -> bool:
        """現在の描画面サイズを反映する。反映したら True、スキップしたら False。

        pyglet の `on_resize(width, height)` から直接呼べるよう引数は無視し、
        常に描画面から実ピクセルサイズを読み直す。
        """
        width, height = self._surface.get_framebuffer_size()
        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            logger.debug("skip viewport update for degenerate size %dx%d", width, height)
            return False
        self._renderer.set_viewport(0, 0, width, height)
        self._camera.set_aspect(width / height)
        self.last_size = (width, height)
        return True

    def attach(self, window: Any | None = None) -> None:
        """リサイズイベントを購読し、初回フレーム前に 1 度だけ即時反映する。

        `window` 省略時は描画面自身の `add_resize_callback` を使う。
        """
        target = window if window is not None else self._surface
        target.add_resize_callback(self.handle_resize)
        self.handle_resize()


__all__ = ["ViewportController"]
