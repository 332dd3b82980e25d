"""
どこで: `engine.render` の高レベル描画。
何を: `SceneGraph` を走査し、同一 Geometry/Material のノードをまとめて ModernGL でインスタンス描画。
なぜ: クリア/ビューポート/描画/GPU リソース寿命を一箇所に集約し、FrameLoop からは
      `clear_buffers()`/`render()`/`set_viewport()` の 3 操作だけに見せるため。
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

import moderngl as mgl
import numpy as np

from common.types import RGBA
from engine.core.geometry import Geometry
from engine.core.node import HelperNode, Light, Material, MeshNode, Node
from engine.core.scene_graph import SceneGraph
from engine.core.transform import compose_matrices
from util.color import scale_rgb
from util.constants import DEFAULT_CLEAR_COLOR, PRIMITIVE_RESTART_INDEX

from .camera import PerspectiveCamera
from .line_mesh import LineMesh
from .shader import Shader
from .types import RenderError

BatchKey = tuple[int, Material, bool]


class SceneRenderer:
    """
    SceneGraph を毎フレーム GPU に送り込む作業を管理。

    - Geometry は不変なので `id(geometry)` をキーに LineMesh を 1 度だけ作って再利用する。
    - ノードは (Geometry, Material, ライティング有無) でバッチ化し、ワールド行列を
      ベクトル化して 1 バッチ 1 ドローコールで描く。
    """

    def __init__(
        self,
        mgl_context: Any,
        *,
        clear_color: Sequence[float] = DEFAULT_CLEAR_COLOR,
        debug: bool = False,
    ):
        self.ctx = mgl_context
        self._logger = logging.getLogger(__name__)
        self._debug = bool(debug)
        self.program = Shader.create_shader(mgl_context)
        self.clear_color: RGBA = (
            float(clear_color[0]),
            float(clear_color[1]),
            float(clear_color[2]),
            float(clear_color[3]) if len(clear_color) > 3 else 1.0,
        )
        # id(geometry) -> (geometry, mesh)。geometry を保持して id の再利用を防ぐ。
        self._meshes: dict[int, tuple[Geometry, LineMesh]] = {}

    # --------------------------------------------------------------------- #
    # Renderer protocol                                                      #
    # --------------------------------------------------------------------- #
    def clear_buffers(self) -> None:
        """カラー/深度バッファをクリア色で初期化する（ウィンドウはステンシルを持たない）。"""
        r, g, b, a = self.clear_color
        self.ctx.clear(r, g, b, a, depth=1.0)

    def set_viewport(self, x: int, y: int, width: int, height: int) -> None:
        self.ctx.viewport = (int(x), int(y), int(width), int(height))

    def render(self, scene: SceneGraph, camera: PerspectiveCamera) -> None:
        """シーンをカメラから描画する。GL 側の失敗は `RenderError` に包んで送出。"""
        try:
            self._render(scene, camera)
        except mgl.Error as e:
            raise RenderError(str(e)) from e

    def release(self) -> None:
        """GPU リソースを解放。"""
        for _geometry, mesh in self._meshes.values():
            mesh.release()
        self._meshes.clear()
        self.program.release()

    # --------------------------------------------------------------------- #
    # Internal helpers                                                      #
    # --------------------------------------------------------------------- #
    def _render(self, scene: SceneGraph, camera: PerspectiveCamera) -> None:
        self.ctx.enable(mgl.DEPTH_TEST)
        vp = camera.view_projection()
        self.program["view_projection"].write(np.ascontiguousarray(vp.T).tobytes())
        brightness = lighting_factor(scene.lights())

        parent_cache: dict[int, np.ndarray] = {}
        for (geom_id, material, lit), nodes in batch_nodes(scene.traverse()).items():
            geometry = nodes[0].geometry
            mesh = self._mesh_for(geometry)
            models = world_matrices(scene, nodes, parent_cache)
            color = scale_rgb(material.color, brightness) if lit else material.color
            self.program["color"].value = color
            mesh.render(mgl.LINE_STRIP, models)
            if self._debug and self._logger.isEnabledFor(logging.DEBUG):
                self._logger.debug(
                    "draw %s x%d (verts=%d)",
                    material.name or geom_id,
                    len(nodes),
                    geometry.n_vertices,
                )

    def _mesh_for(self, geometry: Geometry) -> LineMesh:
        entry = self._meshes.get(id(geometry))
        if entry is not None:
            return entry[1]
        verts, inds = _geometry_to_vertices_indices(geometry, PRIMITIVE_RESTART_INDEX)
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(
                "Uploading geometry: verts=%d (%.1f KB), inds=%d (%.1f KB)",
                len(verts),
                verts.nbytes / 1024.0,
                len(inds),
                inds.nbytes / 1024.0,
            )
        mesh = LineMesh(self.ctx, self.program, verts, inds)
        self._meshes[id(geometry)] = (geometry, mesh)
        return mesh


# ---------- utility -------------------------------------------------------- #
def lighting_factor(lights: Iterable[Light]) -> float:
    """ライト強度の合計を 0–1 にクランプした明るさ係数。ライトが無ければ 1.0（無照明）。"""
    total = None
    for light in lights:
        total = (total or 0.0) + float(light.intensity)
    if total is None:
        return 1.0
    return max(0.0, min(1.0, total))


def batch_nodes(nodes: Iterable[Node]) -> dict[BatchKey, list[MeshNode]]:
    """描画対象ノードを (Geometry, Material, lit) でまとめる。走査順は各バッチ内で保持。"""
    batches: dict[BatchKey, list[MeshNode]] = {}
    for node in nodes:
        if not isinstance(node, MeshNode):
            continue
        key = (id(node.geometry), node.material, not isinstance(node, HelperNode))
        batches.setdefault(key, []).append(node)
    return batches


def world_matrices(
    scene: SceneGraph,
    nodes: Sequence[MeshNode],
    parent_cache: dict[int, np.ndarray] | None = None,
) -> np.ndarray:
    """ノード列のワールド行列 (K, 4, 4) を求める。ローカル行列はベクトル化して構築する。"""
    cache = parent_cache if parent_cache is not None else {}
    positions = np.array([n.transform.position for n in nodes], dtype=np.float32)
    rotations = np.array([n.transform.rotation for n in nodes], dtype=np.float32)
    scales = np.array([n.transform.scale for n in nodes], dtype=np.float32)
    local = compose_matrices(positions, rotations, scales)

    parents = [n.parent if n.parent is not None else scene.root for n in nodes]
    parent_mats = []
    for p in parents:
        m = cache.get(id(p))
        if m is None:
            m = scene.world_matrix(p)
            cache[id(p)] = m
        parent_mats.append(m)
    return np.matmul(np.stack(parent_mats), local).astype(np.float32, copy=False)


def _geometry_to_vertices_indices(
    geometry: Geometry,
    primitive_restart_index: int,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Geometry オブジェクトを VBO/IBO に変換。
    各ポリラインの終端の直後に Primitive Restart Index を挿入し、
    全ポリラインを 1 回の LINE_STRIP 描画で扱えるようにする。"""
    coords = geometry.coords
    offsets = geometry.offsets

    num_lines = len(offsets) - 1
    total_verts = len(coords)
    total_inds = total_verts + num_lines

    # ベクトル化: 連結 arange + PR マスク挿入
    indices = np.empty(total_inds, dtype=np.uint32)
    # 再始動位置（各ライン終端の直後）: offsets[1:] + 行番号
    restart_pos = offsets[1:].astype(np.int64) + np.arange(num_lines, dtype=np.int64)
    mask = np.zeros(total_inds, dtype=bool)
    mask[restart_pos] = True
    indices[~mask] = np.arange(total_verts, dtype=np.uint32)
    indices[mask] = np.uint32(primitive_restart_index)
    return coords, indices


__all__ = [
    "SceneRenderer",
    "lighting_factor",
    "batch_nodes",
    "world_matrices",
]
