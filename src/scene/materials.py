"""
どこで: `scene.materials`。
何を: 色名から単色 `Material` を引く小さなファクトリ（同じ色は同じインスタンス）。
なぜ: 同色ノードが 1 つの Material を共有し、Renderer のバッチにまとまるようにするため。
"""

from __future__ import annotations

from functools import lru_cache

from engine.core.node import Material
from util.color import normalize_color

WHITE = "White"
BROWN = "Brown"
RED = "Red"
BLACK = "Black"
ORANGE = "Orange"


@lru_cache(maxsize=64)
def material(color: str) -> Material:
    """色名/Hex 文字列から Material を返す。不正な色は `ValueError`。"""
    return Material(normalize_color(color), name=color.strip().lower())


__all__ = ["material", "WHITE", "BROWN", "RED", "BLACK", "ORANGE"]
