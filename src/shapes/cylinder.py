from __future__ import annotations

import numpy as np

from engine.core.geometry import Geometry

from .base import require_positive, require_segments, ring_xz, segment
from .registry import shape


@shape
def cylinder(
    radius: float = 0.5,
    height: float = 1.0,
    radial_segments: int = 16,
    height_segments: int = 1,
    top: bool = True,
    bottom: bool = True,
) -> Geometry:
    """円柱（高さ方向は Y）を生成します。`top/bottom` で上下の蓋（放射線）を付けます。"""
    r = require_positive("radius", radius)
    h = require_positive("height", height)
    rs = require_segments("radial_segments", radial_segments, 3)
    hs = require_segments("height_segments", height_segments, 1)

    half = h / 2.0
    lines: list[np.ndarray] = [ring_xz(r, y, rs) for y in np.linspace(half, -half, hs + 1)]
    angles = 2.0 * np.pi * np.arange(rs) / rs
    xs = r * np.cos(angles)
    zs = r * np.sin(angles)
    for x, z in zip(xs, zs):
        lines.append(segment((x, -half, z), (x, half, z)))
    for enabled, y in ((top, half), (bottom, -half)):
        if enabled:
            for x, z in zip(xs, zs):
                lines.append(segment((0.0, y, 0.0), (x, y, z)))
    return Geometry.from_lines(lines)
