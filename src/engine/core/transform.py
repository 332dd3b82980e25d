"""
どこで: `engine.core.transform`。
何を: ノードのローカル変換 `Transform`（位置/回転/スケール）と行列ヘルパ。
なぜ: 親相対の配置を 1 箇所で表現し、ワールド行列はシーングラフ側で都度合成するため。

規約:
- 回転は各軸ラジアン。適用順は X→Y→Z（`Geometry.rotate` と同じ）。
- ローカル行列は `T @ R @ S`（スケール → 回転 → 平行移動の順に頂点へ作用）。
- `position/rotation/scale` は float32 の (3,) 配列。セッタは就地更新するため、
  外部配列のビュー（雪片アリーナの 1 行など）を渡せば変更がそのまま共有される。
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from common.types import Vec3


def rotation_matrix(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    """X→Y→Z 順の回転を表す 3x3 行列（float32）を返す。"""
    cx, sx = math.cos(x), math.sin(x)
    cy, sy = math.cos(y), math.sin(y)
    cz, sz = math.cos(z), math.sin(z)
    rx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]], dtype=np.float64)
    ry = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]], dtype=np.float64)
    rz = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]], dtype=np.float64)
    return (rz @ ry @ rx).astype(np.float32)


def compose_matrix(
    position: Sequence[float], rotation: Sequence[float], scale: Sequence[float]
) -> np.ndarray:
    """位置/回転/スケールから 4x4 のローカル行列 `T @ R @ S` を構築する。"""
    m = np.eye(4, dtype=np.float32)
    rot = rotation_matrix(*(float(v) for v in rotation))
    m[:3, :3] = rot * np.asarray(scale, dtype=np.float32)
    m[:3, 3] = np.asarray(position, dtype=np.float32)
    return m


def compose_matrices(
    positions: np.ndarray, rotations: np.ndarray, scales: np.ndarray
) -> np.ndarray:
    """`compose_matrix` のベクトル化版。入力は各 (N, 3)、出力は (N, 4, 4) float32。"""
    p = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    r = np.asarray(rotations, dtype=np.float64).reshape(-1, 3)
    s = np.asarray(scales, dtype=np.float64).reshape(-1, 3)
    n = p.shape[0]
    cx, sx = np.cos(r[:, 0]), np.sin(r[:, 0])
    cy, sy = np.cos(r[:, 1]), np.sin(r[:, 1])
    cz, sz = np.cos(r[:, 2]), np.sin(r[:, 2])
    # Rz @ Ry @ Rx を成分で展開
    rot = np.empty((n, 3, 3), dtype=np.float64)
    rot[:, 0, 0] = cz * cy
    rot[:, 0, 1] = cz * sy * sx - sz * cx
    rot[:, 0, 2] = cz * sy * cx + sz * sx
    rot[:, 1, 0] = sz * cy
    rot[:, 1, 1] = sz * sy * sx + cz * cx
    rot[:, 1, 2] = sz * sy * cx - cz * sx
    rot[:, 2, 0] = -sy
    rot[:, 2, 1] = cy * sx
    rot[:, 2, 2] = cy * cx
    out = np.zeros((n, 4, 4), dtype=np.float32)
    out[:, :3, :3] = rot * s[:, None, :]
    out[:, :3, 3] = p
    out[:, 3, 3] = 1.0
    return out


def _as_vec3(value: Sequence[float] | np.ndarray, name: str) -> np.ndarray:
    arr = np.asarray(value, dtype=np.float32)
    if arr.shape != (3,):
        raise ValueError(f"{name} は長さ 3 である必要があります: {arr.shape}")
    return arr


class Transform:
    """位置・回転・スケールの組（親相対）。"""

    __slots__ = ("position", "rotation", "scale")

    def __init__(
        self,
        position: Vec3 | np.ndarray = (0.0, 0.0, 0.0),
        rotation: Vec3 | np.ndarray = (0.0, 0.0, 0.0),
        scale: Vec3 | np.ndarray = (1.0, 1.0, 1.0),
    ) -> None:
        # float32 の (3,) 配列はコピーせずそのまま保持する（ビュー共有のため）
        self.position = _as_vec3(position, "position")
        self.rotation = np.array(_as_vec3(rotation, "rotation"), dtype=np.float32)
        self.scale = np.array(_as_vec3(scale, "scale"), dtype=np.float32)

    # ---- setters（就地更新） ----
    def set_position(self, x: float, y: float, z: float) -> None:
        self.position[:] = (x, y, z)

    def set_position_y(self, y: float) -> None:
        self.position[1] = y

    def set_rotation(self, x: float, y: float, z: float) -> None:
        self.rotation[:] = (x, y, z)

    def set_rotation_x(self, angle: float) -> None:
        self.rotation[0] = angle

    def set_rotation_y(self, angle: float) -> None:
        self.rotation[1] = angle

    def set_rotation_z(self, angle: float) -> None:
        self.rotation[2] = angle

    def set_scale(self, sx: float, sy: float, sz: float) -> None:
        self.scale[:] = (sx, sy, sz)

    # ---- derived ----
    def matrix(self) -> np.ndarray:
        """ローカル 4x4 行列（float32）。"""
        return compose_matrix(self.position, self.rotation, self.scale)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        p = ", ".join(f"{v:.3g}" for v in self.position)
        r = ", ".join(f"{v:.3g}" for v in self.rotation)
        s = ", ".join(f"{v:.3g}" for v in self.scale)
        return f"Transform(pos=({p}), rot=({r}), scale=({s}))"


__all__ = ["Transform", "rotation_matrix", "compose_matrix", "compose_matrices"]
