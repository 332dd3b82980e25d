from __future__ import annotations

import numpy as np

from engine.core.geometry import Geometry

from .base import require_positive, require_segments, ring_xz, segment
from .registry import shape


@shape
def cone(
    radius: float = 0.5,
    height: float = 1.0,
    radial_segments: int = 16,
    height_segments: int = 1,
    bottom: bool = True,
) -> Geometry:
    """円錐（頂点は +Y 側）を生成します。"""
    r = require_positive("radius", radius)
    h = require_positive("height", height)
    rs = require_segments("radial_segments", radial_segments, 3)
    hs = require_segments("height_segments", height_segments, 1)

    half = h / 2.0
    # 底面から頂点へ向かって半径が線形に縮む中間リング
    lines: list[np.ndarray] = [
        ring_xz(r * (1.0 - k / hs), -half + h * k / hs, rs) for k in range(hs)
    ]
    apex = (0.0, half, 0.0)
    angles = 2.0 * np.pi * np.arange(rs) / rs
    for a in angles:
        x, z = r * np.cos(a), r * np.sin(a)
        lines.append(segment((x, -half, z), apex))
        if bottom:
            lines.append(segment((0.0, -half, 0.0), (x, -half, z)))
    return Geometry.from_lines(lines)
