from __future__ import annotations

import numpy as np

from engine.core.geometry import Geometry

from .base import require_positive, require_segments
from .registry import shape


def _generate_grid(width: float, height: float, nx: int, ny: int) -> list[np.ndarray]:
    """XY 平面上のグリッド線（縦 nx+1 本・横 ny+1 本）を生成します。"""
    hw, hh = width / 2.0, height / 2.0
    xs = np.linspace(-hw, hw, nx + 1)
    ys = np.linspace(-hh, hh, ny + 1)

    vertical = np.zeros((nx + 1, 2, 3), dtype=np.float32)
    vertical[:, :, 0] = xs[:, np.newaxis]
    vertical[:, 0, 1] = -hh
    vertical[:, 1, 1] = hh

    horizontal = np.zeros((ny + 1, 2, 3), dtype=np.float32)
    horizontal[:, 0, 0] = -hw
    horizontal[:, 1, 0] = hw
    horizontal[:, :, 1] = ys[:, np.newaxis]

    return [*vertical, *horizontal]


@shape
def plane(
    width: float = 1.0, height: float = 1.0, width_segments: int = 10, height_segments: int = 10
) -> Geometry:
    """XY 平面上の矩形（+Z 向き）をグリッド線で生成します。床には X 軸回転で寝かせて使います。"""
    w = require_positive("width", width)
    h = require_positive("height", height)
    nx = require_segments("width_segments", width_segments, 1)
    ny = require_segments("height_segments", height_segments, 1)
    return Geometry.from_lines(_generate_grid(w, h, nx, ny))
