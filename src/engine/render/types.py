"""
どこで: `engine.render` 型定義。
何を: 描画協調者の Protocol（Renderer/Surface/Camera）と `RenderError`。
なぜ: FrameLoop/ViewportController を GL 実装から切り離し、偽実装で単体テストできるようにするため。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from engine.core.scene_graph import SceneGraph


class RenderError(RuntimeError):
    """1 フレームの描画失敗（一過性）。FrameLoop はログして次フレームへ進む。"""


class Camera(Protocol):
    def set_position(self, x: float, y: float, z: float) -> None: ...

    def set_aspect(self, ratio: float) -> None: ...


class Renderer(Protocol):
    def clear_buffers(self) -> None: ...

    def render(self, scene: "SceneGraph", camera: Camera) -> None:
        """シーンを描画する。失敗時は `RenderError`。"""
        ...

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None: ...


class Surface(Protocol):
    """描画面（ウィンドウ）。ピクセルサイズを返す。"""

    def get_framebuffer_size(self) -> tuple[int, int]: ...


__all__ = ["RenderError", "Camera", "Renderer", "Surface"]
