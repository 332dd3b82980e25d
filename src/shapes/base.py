"""
どこで: `shapes.base`（形状ジェネレータ共通ヘルパ）。
何を: 引数検証と、Y 軸を上とする円環/線分の頂点生成を提供する。
なぜ: 各シェイプ関数を「原点基準・Y-up の素の形状を返す純関数」に揃えるため。

座標規約:
- Y 軸が上。円柱/円錐の高さ方向・球の極軸はいずれも Y。
- 形状は原点中心。配置（位置/回転/スケール）は `Transform` が担う。
"""

from __future__ import annotations

import numpy as np


def require_positive(name: str, value: float) -> float:
    """正の有限値であることを検証して float で返す。"""
    v = float(value)
    if not np.isfinite(v) or v <= 0.0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return v


def require_segments(name: str, value: int, minimum: int = 1) -> int:
    """分割数が `minimum` 以上の整数であることを検証して返す。"""
    try:
        v = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e
    if v < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value!r}")
    return v


def ring_xz(radius: float, y: float, segments: int) -> np.ndarray:
    """高さ `y` の XZ 平面上の閉じた円（segments+1 点, float32）。"""
    angles = np.linspace(0.0, 2.0 * np.pi, segments + 1)
    out = np.empty((segments + 1, 3), dtype=np.float32)
    out[:, 0] = radius * np.cos(angles)
    out[:, 1] = y
    out[:, 2] = radius * np.sin(angles)
    return out


def segment(a: tuple[float, float, float], b: tuple[float, float, float]) -> np.ndarray:
    """2 点を結ぶ線分（2x3 float32）。"""
    return np.array([a, b], dtype=np.float32)


__all__ = ["require_positive", "require_segments", "ring_xz", "segment"]
