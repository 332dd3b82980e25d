"""
どこで: `engine.runtime.frame_loop`。
何を: 1 フレームの手順（クリア → 描画 → 雪の更新 → 描画）を実行する `FrameLoop`。
なぜ: 描画と更新の順序を 1 箇所に固定し、Renderer の一過性エラーでループを止めないため。

状態:
- `IDLE`: 最初のフレーム前。最初の `tick()` で `RUNNING` へ遷移する。
- `RUNNING`: 以降ウィンドウが閉じられるまで 1 表示更新につき 1 回 `tick()` される。

`double_render=True`（既定）では更新前にも 1 回描画する。更新前の描画は直後の描画で
上書きされるため、False にすると描画は更新後の 1 回だけになる。
"""

from __future__ import annotations

import enum
import logging

from engine.animation.particles import ParticleField
from engine.core.scene_graph import SceneGraph
from engine.render.types import Camera, RenderError, Renderer

logger = logging.getLogger(__name__)


class FrameState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


class FrameLoop:
    """シーン/カメラ/雪片を明示的に受け取り、毎フレーム Renderer へ委譲する。"""

    def __init__(
        self,
        renderer: Renderer,
        scene: SceneGraph,
        camera: Camera,
        particles: ParticleField,
        *,
        double_render: bool = True,
    ) -> None:
        self._renderer = renderer
        self._scene = scene
        self._camera = camera
        self._particles = particles
        self.double_render = bool(double_render)
        self.state = FrameState.IDLE
        self.frame_count = 0
        self.render_failures = 0

    def tick(self, dt: float) -> None:
        """1 フレームを進める。最初のフレームは経過時間 0 として扱う。"""
        if self.state is FrameState.IDLE:
            self.state = FrameState.RUNNING
            elapsed = 0.0
        else:
            elapsed = max(0.0, float(dt))

        self._renderer.clear_buffers()
        if self.double_render:
            self._render()
        self._particles.advance(elapsed)
        self._render()
        self.frame_count += 1

    def _render(self) -> None:
        try:
            self._renderer.render(self._scene, self._camera)
        except RenderError as e:
            # 一過性の失敗。同じフレームは再試行しない
            self.render_failures += 1
            logger.warning("Error rendering scene: %s", e)


__all__ = ["FrameLoop", "FrameState"]
