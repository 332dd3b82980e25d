"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（MSAA/深度バッファ）と描画/リサイズコールバック登録を提供。
なぜ: シーン/レンダラ層から GUI 依存を切り離し、最小インターフェイスで統一するため。

使用例:
    win = RenderWindow(1280, 720, caption="Snowglobe")
    win.add_resize_callback(viewport.handle_resize)
    win.add_draw_callback(frame_clock.tick)
    pyglet.app.run(1 / 60)
"""

from typing import Callable

import pyglet
from pyglet.gl import Config

from util.constants import WINDOW_GL_CONFIG


class RenderWindow(pyglet.window.Window):
    def __init__(self, width: int, height: int, *, caption: str = "Snowglobe"):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            caption: タイトルバー文字列。
        """
        # 細い線を滑らかにするために MSAA、前後関係のために深度を確保
        config = Config(**WINDOW_GL_CONFIG)
        super().__init__(
            width=width, height=height, caption=caption, config=config, resizable=True
        )
        self._draw_callbacks: list[Callable[[], None]] = []
        self._resize_callbacks: list[Callable[[int, int], None]] = []

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中に呼び出す描画関数を登録する。

        - 関数は引数を取らず、副作用で描画を行うこと。
        - 登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def add_resize_callback(self, func: Callable[[int, int], None]) -> None:
        """`on_resize` 時に `(width, height)` で呼び出す関数を登録する。"""
        self._resize_callbacks.append(func)

    def on_draw(self):  # Pyglet 既定のイベント名
        """ウィンドウ描画イベントハンドラ。クリアは Renderer 側が行う。"""
        for cb in self._draw_callbacks:
            cb()

    def on_resize(self, width, height):  # Pyglet 既定のイベント名
        # 既定ハンドラ（2D 射影の再設定）は使わない
        for cb in self._resize_callbacks:
            cb(width, height)
        return pyglet.event.EVENT_HANDLED
