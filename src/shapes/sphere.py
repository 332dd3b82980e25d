from __future__ import annotations

from functools import lru_cache

import numpy as np

from engine.core.geometry import Geometry

from .base import require_positive, require_segments, ring_xz
from .registry import shape


@lru_cache(maxsize=128)
def _sphere_latlon(width_segments: int, height_segments: int) -> tuple[np.ndarray, ...]:
    """緯度リングと経度線（極→極）で半径 1 の球ワイヤーフレームを生成。

    引数:
        width_segments: 周方向の分割数（経度線の本数）
        height_segments: 極軸方向の分割数（緯度リング数 + 1）

    返り値:
        線分列の頂点配列タプル（float32, 半径 1）
    """
    lines: list[np.ndarray] = []

    # 緯度リング（極は除外）
    for i in range(1, height_segments):
        theta = np.pi * i / height_segments
        lines.append(ring_xz(float(np.sin(theta)), float(np.cos(theta)), width_segments))

    # 経度線（北極 → 南極）
    theta = np.linspace(0.0, np.pi, height_segments + 1)
    sin_t = np.sin(theta)
    cos_t = np.cos(theta)
    for j in range(width_segments):
        phi = 2.0 * np.pi * j / width_segments
        line = np.empty((height_segments + 1, 3), dtype=np.float32)
        line[:, 0] = sin_t * np.cos(phi)
        line[:, 1] = cos_t
        line[:, 2] = sin_t * np.sin(phi)
        lines.append(line)

    for arr in lines:
        arr.setflags(write=False)
    return tuple(lines)


@shape
def sphere(radius: float = 0.5, width_segments: int = 32, height_segments: int = 16) -> Geometry:
    """球（Y 軸が極軸）を生成します。"""
    r = require_positive("radius", radius)
    ws = require_segments("width_segments", width_segments, 3)
    hs = require_segments("height_segments", height_segments, 2)
    return Geometry.from_lines(line * np.float32(r) for line in _sphere_latlon(ws, hs))
