"""
どこで: `engine.runtime` サブパッケージ。
何を: フレーム駆動（`FrameLoop`）とリサイズ追従（`ViewportController`）を提供。
なぜ: ウィンドウのイベントループから呼ばれる処理を、GL 実装から独立した形でまとめるため。
"""

from .frame_loop import FrameLoop, FrameState
from .viewport import ViewportController

__all__ = ["FrameLoop", "FrameState", "ViewportController"]
