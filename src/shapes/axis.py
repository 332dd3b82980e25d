from __future__ import annotations

from engine.core.geometry import Geometry

from .base import require_positive, segment
from .registry import shape

_DIRECTIONS = {"x": (1.0, 0.0, 0.0), "y": (0.0, 1.0, 0.0), "z": (0.0, 0.0, 1.0)}


@shape
def axis(size: float = 1.0, direction: str = "x") -> Geometry:
    """原点から軸方向へ `size` だけ伸びる線分（座標軸ヘルパ用）。"""
    s = require_positive("size", size)
    key = str(direction).lower()
    if key not in _DIRECTIONS:
        raise ValueError(f"direction must be one of x/y/z, got {direction!r}")
    dx, dy, dz = _DIRECTIONS[key]
    return Geometry.from_lines([segment((0.0, 0.0, 0.0), (dx * s, dy * s, dz * s))])
