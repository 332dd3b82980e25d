from __future__ import annotations

import numpy as np

from engine.core.geometry import Geometry

from .base import require_positive, segment
from .registry import shape


@shape
def box(width: float = 1.0, height: float = 1.0, depth: float = 1.0) -> Geometry:
    """直方体（幅=X, 高さ=Y, 奥行=Z）の 12 辺を生成します。"""
    hx = require_positive("width", width) / 2.0
    hy = require_positive("height", height) / 2.0
    hz = require_positive("depth", depth) / 2.0

    def face(z: float) -> np.ndarray:
        return np.array(
            [(-hx, -hy, z), (hx, -hy, z), (hx, hy, z), (-hx, hy, z), (-hx, -hy, z)],
            dtype=np.float32,
        )

    lines = [face(hz), face(-hz)]
    for x, y in ((-hx, -hy), (hx, -hy), (hx, hy), (-hx, hy)):
        lines.append(segment((x, y, -hz), (x, y, hz)))
    return Geometry.from_lines(lines)
