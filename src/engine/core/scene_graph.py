"""
どこで: `engine.core.scene_graph`。
何を: 単一ルートのノード木 `SceneGraph`（追加・走査・ワールド行列合成）。
なぜ: 起動時に組み立てた静的シーンを Renderer が決定的な順序で描画できるようにするため。

不変条件:
- すべてのノードは 1 度だけ追加され、プロセス終了まで残る（detach/reparent は無い）。
- 走査順は深さ優先・追加順で安定（不透明ワイヤーフレームなので深度ソートは不要）。
- ワールド行列はキャッシュしない。`world_matrix()` が祖先のローカル行列を都度合成する。
"""

from __future__ import annotations

from typing import Iterable, Iterator, TypeVar

import numpy as np

from .node import HelperNode, Light, MeshNode, Node

N = TypeVar("N", bound=Node)


class SceneGraphError(RuntimeError):
    """シーングラフの誤用（二重追加・未登録の親など）。"""


class SceneGraph:
    """ルートノードが全ノードを所有する木構造。"""

    def __init__(self, name: str = "scene") -> None:
        self.root = Node(name)
        self._members: set[int] = {id(self.root)}
        self._count = 0

    def attach(self, node: Node, parent: Node | None = None) -> None:
        """`node` を `parent`（省略時はルート）の子として追加する。

        例外:
            SceneGraphError: 既に追加済みのノード、またはグラフ外の親を指定した場合。
        """
        target = self.root if parent is None else parent
        if id(node) in self._members:
            raise SceneGraphError(f"node already attached: {node!r}")
        if id(target) not in self._members:
            raise SceneGraphError(f"parent is not part of this scene: {target!r}")
        node.parent = target
        target.children.append(node)
        self._members.add(id(node))
        self._count += 1

    def attach_all(self, nodes: Iterable[Node], parent: Node | None = None) -> None:
        for node in nodes:
            self.attach(node, parent)

    def contains(self, node: Node) -> bool:
        return id(node) in self._members

    # ---- 走査 ----
    def traverse(self) -> Iterator[Node]:
        """ルートを除く全ノードを深さ優先・追加順で返す。"""
        stack: list[Iterator[Node]] = [iter(self.root.children)]
        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                continue
            yield node
            if node.children:
                stack.append(iter(node.children))

    def nodes_of(self, kind: type[N]) -> Iterator[N]:
        for node in self.traverse():
            if isinstance(node, kind):
                yield node

    def meshes(self) -> Iterator[MeshNode]:
        """描画対象メッシュ（HelperNode を除く）。"""
        for node in self.nodes_of(MeshNode):
            if not isinstance(node, HelperNode):
                yield node

    def helpers(self) -> Iterator[HelperNode]:
        return self.nodes_of(HelperNode)

    def lights(self) -> Iterator[Light]:
        return self.nodes_of(Light)

    # ---- 変換 ----
    def world_matrix(self, node: Node) -> np.ndarray:
        """祖先のローカル行列を合成したワールド行列（4x4 float32）。"""
        if not self.contains(node):
            raise SceneGraphError(f"node is not part of this scene: {node!r}")
        m = node.transform.matrix()
        cur = node.parent
        while cur is not None:
            m = cur.transform.matrix() @ m
            cur = cur.parent
        return m

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Node]:
        return self.traverse()


__all__ = ["SceneGraph", "SceneGraphError"]
