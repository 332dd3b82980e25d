from __future__ import annotations

import numpy as np
from numba import njit

from engine.core.geometry import Geometry

from .base import require_positive, require_segments
from .registry import shape


@njit(fastmath=True, cache=True)
def _tube_ring(radius: float, tube: float, segments: int, cos_u: float, sin_u: float):
    """主円上の角度 u における管断面の円 1 本を生成します。"""
    v = 2 * np.pi * np.arange(segments + 1) / segments
    r = radius + tube * np.cos(v)
    vertices = np.empty((len(v), 3), dtype=np.float32)
    vertices[:, 0] = r * cos_u
    vertices[:, 1] = r * sin_u
    vertices[:, 2] = tube * np.sin(v)
    return vertices


@njit(fastmath=True, cache=True)
def _sweep_line(
    radius: float, tube: float, arc: float, segments: int, cos_v: float, sin_v: float
):
    """管断面の角度 v を固定し、主円に沿って arc まで掃引した線 1 本を生成します。"""
    u = arc * np.arange(segments + 1) / segments
    r = radius + tube * cos_v
    vertices = np.empty((len(u), 3), dtype=np.float32)
    vertices[:, 0] = r * np.cos(u)
    vertices[:, 1] = r * np.sin(u)
    vertices[:, 2] = tube * sin_v
    return vertices


@shape
def torus(
    radius: float = 0.5,
    tube: float = 0.2,
    radial_segments: int = 16,
    tubular_segments: int = 32,
    arc: float = 2 * np.pi,
) -> Geometry:
    """トーラス（XY 平面上, +X から反時計回りに `arc` ラジアン分）を生成します。

    `arc=π` で半円のトーラス（口元・マフラーの端）になります。
    """
    r = require_positive("radius", radius)
    t = require_positive("tube", tube)
    # radial: 管断面の分割数 / tubular: 主円（arc）方向の分割数
    ts = require_segments("radial_segments", radial_segments, 3)
    rs = require_segments("tubular_segments", tubular_segments, 1)
    a = require_positive("arc", arc)
    a = min(a, 2 * np.pi)

    closed = a >= 2 * np.pi - 1e-9
    # 閉じたトーラスは始点と終点の断面が重なるので 1 本省く
    ring_count = rs if closed else rs + 1
    u_values = a * np.arange(ring_count) / rs
    cos_u = np.cos(u_values)
    sin_u = np.sin(u_values)
    v_values = 2 * np.pi * np.arange(ts) / ts
    cos_v = np.cos(v_values)
    sin_v = np.sin(v_values)

    lines: list[np.ndarray] = []
    for i in range(ring_count):
        lines.append(_tube_ring(r, t, ts, cos_u[i], sin_u[i]))
    for j in range(ts):
        lines.append(_sweep_line(r, t, a, rs, cos_v[j], sin_v[j]))
    return Geometry.from_lines(lines)
