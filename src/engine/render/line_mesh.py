"""
どこで: `engine.render` の低レベルメッシュ層。
何を: 1 つの `Geometry` に対応する VBO/IBO と、インスタンス行列バッファ・VAO を管理する `LineMesh`。
なぜ: 不変 Geometry は一度だけ GPU に送り、同形状の多数ノード（雪片など）を 1 回の
      インスタンス描画で済ませるため。
"""

from __future__ import annotations

from typing import Any

import numpy as np

_MAT4_BYTES = 16 * 4


class LineMesh:
    """
    GPU 上の描画データを 1 形状ぶん保持する。

    VBO (Vertex Buffer Object): 頂点座標（float32 xyz）。形状ごとに 1 度だけ書き込む。
    IBO (Index Buffer Object): 頂点の順序。ポリライン境界に Primitive Restart Index を挟む。
    Instance VBO: インスタンスごとのワールド行列（mat4）。毎描画で書き換える。
    VAO (Vertex Array Object): 上記を関連付け、`render()` 一発で描けるようにする。
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        vertices: np.ndarray,
        indices: np.ndarray,
        *,
        initial_instances: int = 16,
    ):
        self.ctx = ctx
        self.program = program
        self.vbo = ctx.buffer(np.ascontiguousarray(vertices, dtype=np.float32).tobytes())
        self.ibo = ctx.buffer(np.ascontiguousarray(indices, dtype=np.uint32).tobytes())
        reserve = max(1, initial_instances) * _MAT4_BYTES
        self.instance_vbo = ctx.buffer(reserve=reserve, dynamic=True)
        self.index_count: int = int(len(indices))
        self.vao = self._build_vao()

    def _build_vao(self) -> Any:
        # 32bit インデックスでは 0xFFFFFFFF が固定の Primitive Restart Index になる
        return self.ctx.vertex_array(
            self.program,
            [
                (self.vbo, "3f", "in_vert"),
                (self.instance_vbo, "16f/i", "in_model"),
            ],
            index_buffer=self.ibo,
            index_element_size=4,
        )

    def _ensure_instance_capacity(self, nbytes: int) -> None:
        """インスタンス数が増えたらバッファを再確保し、VAO を張り直す。"""
        if nbytes <= self.instance_vbo.size:
            return
        self.vao.release()
        self.instance_vbo.release()
        self.instance_vbo = self.ctx.buffer(reserve=nbytes * 2, dynamic=True)
        self.vao = self._build_vao()

    def render(self, mode: int, models: np.ndarray) -> None:
        """`models (K, 4, 4)`（行優先, 列ベクトル規約）を K インスタンスとして描画する。"""
        count = int(models.shape[0])
        if self.index_count == 0 or count == 0:
            return
        # GLSL の mat4 は列優先なので転置して詰める
        data = np.ascontiguousarray(models.transpose(0, 2, 1), dtype=np.float32)
        self._ensure_instance_capacity(data.nbytes)
        self.instance_vbo.write(data.tobytes())
        self.vao.render(mode, vertices=self.index_count, instances=count)

    def release(self) -> None:
        """GPUのメモリを解放する（終了時に使う）"""
        self.vao.release()
        self.vbo.release()
        self.ibo.release()
        self.instance_vbo.release()
