"""
どこで: `engine.core.node`。
何を: シーングラフの要素（`Node`/`MeshNode`/`HelperNode`/ライト）と不変の `Material`。
なぜ: 変換・形状・色を 1 つのノードにまとめ、Renderer から一様に走査できるようにするため。

所有関係:
- ノードは `SceneGraph.attach()` で親に 1 度だけ追加される（取り外し/付け替えは無い）。
- `Geometry` と `Material` は不変。複数ノード（目/ボタン/雪片など）で共有してよい。
"""

from __future__ import annotations

from dataclasses import dataclass

from common.types import RGBA, Vec3

from .geometry import Geometry
from .transform import Transform


@dataclass(frozen=True)
class Material:
    """単色マテリアル。`color` は RGBA(0–1)。"""

    color: RGBA
    name: str = ""


class Node:
    """変換と子リストを持つ最小単位（グループとしても使う）。"""

    def __init__(self, name: str = "", transform: Transform | None = None) -> None:
        self.name = name
        self.transform = transform if transform is not None else Transform()
        self.parent: Node | None = None
        self.children: list[Node] = []

    # 変換への短縮アクセス
    @property
    def position(self):
        return self.transform.position

    @property
    def rotation(self):
        return self.transform.rotation

    def set_position(self, x: float, y: float, z: float) -> None:
        self.transform.set_position(x, y, z)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"{type(self).__name__}({self.name!r})"


class MeshNode(Node):
    """形状とマテリアルを持つ描画対象ノード。"""

    def __init__(
        self,
        geometry: Geometry,
        material: Material,
        *,
        name: str = "",
        transform: Transform | None = None,
    ) -> None:
        super().__init__(name, transform)
        self.geometry = geometry
        self.material = material


class HelperNode(MeshNode):
    """デバッグ用の補助形状（座標軸など）。メッシュ数には数えない。"""


class Light(Node):
    """光源の基底。`intensity` は明るさ係数として Renderer が合算する。"""

    def __init__(self, color: RGBA, intensity: float, *, name: str = "") -> None:
        super().__init__(name)
        self.color = color
        self.intensity = float(intensity)


class AmbientLight(Light):
    """環境光。"""


class PointLight(Light):
    """点光源。位置はノード変換で持つ。"""

    def __init__(
        self,
        color: RGBA,
        intensity: float,
        *,
        position: Vec3 = (0.0, 0.0, 0.0),
        name: str = "",
    ) -> None:
        super().__init__(color, intensity, name=name)
        self.set_position(*position)


__all__ = ["Material", "Node", "MeshNode", "HelperNode", "Light", "AmbientLight", "PointLight"]
