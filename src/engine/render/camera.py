"""
どこで: `engine.render.camera`。
何を: 透視投影カメラ `PerspectiveCamera` と、マウス操作で注視点周りを回る `OrbitControl`。
なぜ: アスペクト比はビューポート制御、姿勢は入力処理と、更新経路を分けて持たせるため。

行列はすべて行優先の numpy 配列（列ベクトル規約 `p' = M @ p`）。GL へ書き込む際に転置する。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from common.types import Vec3


def _normalize(v: np.ndarray) -> np.ndarray:
    n = float(np.linalg.norm(v))
    if n <= 1e-12:
        raise ValueError("ゼロ長ベクトルは正規化できません")
    return v / n


def perspective_matrix(fov_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    """OpenGL 互換の透視投影行列（4x4 float32）。"""
    f = 1.0 / math.tan(math.radians(fov_deg) / 2.0)
    m = np.zeros((4, 4), dtype=np.float32)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = 2.0 * far * near / (near - far)
    m[3, 2] = -1.0
    return m


def look_at_matrix(eye: np.ndarray, target: np.ndarray, up: np.ndarray) -> np.ndarray:
    """視点 `eye` から `target` を見るビュー行列（4x4 float32）。"""
    eye = np.asarray(eye, dtype=np.float64)
    z = _normalize(eye - np.asarray(target, dtype=np.float64))
    x = _normalize(np.cross(np.asarray(up, dtype=np.float64), z))
    y = np.cross(z, x)
    m = np.eye(4, dtype=np.float64)
    m[0, :3], m[1, :3], m[2, :3] = x, y, z
    m[:3, 3] = -m[:3, :3] @ eye
    return m.astype(np.float32)


@dataclass(frozen=True)
class CameraConfig:
    """カメラの初期値（YAML `camera` セクションに対応）。"""

    position: Vec3 = (0.0, -1.0, 5.0)
    fov: float = 30.0
    near: float = 0.01
    far: float = 1000.0


class PerspectiveCamera:
    """透視投影カメラ。既定は原点を注視する。"""

    def __init__(
        self,
        aspect: float = 1.0,
        *,
        fov: float = 30.0,
        near: float = 0.01,
        far: float = 1000.0,
        position: Vec3 = (0.0, 0.0, 5.0),
        target: Vec3 = (0.0, 0.0, 0.0),
    ) -> None:
        if not (0.0 < fov < 180.0):
            raise ValueError(f"fov must be in (0, 180), got {fov}")
        if not (0.0 < near < far):
            raise ValueError(f"require 0 < near < far, got near={near}, far={far}")
        self.fov = float(fov)
        self.near = float(near)
        self.far = float(far)
        self.aspect = 1.0
        self.set_aspect(aspect)
        self.position = np.array(position, dtype=np.float32)
        self.target = np.array(target, dtype=np.float32)
        self.up = np.array((0.0, 1.0, 0.0), dtype=np.float32)

    def set_position(self, x: float, y: float, z: float) -> None:
        self.position[:] = (x, y, z)

    def set_aspect(self, ratio: float) -> None:
        r = float(ratio)
        if not math.isfinite(r) or r <= 0.0:
            raise ValueError(f"aspect ratio must be positive and finite, got {ratio}")
        self.aspect = r

    def look_at(self, x: float, y: float, z: float) -> None:
        self.target[:] = (x, y, z)

    def view_matrix(self) -> np.ndarray:
        return look_at_matrix(self.position, self.target, self.up)

    def projection_matrix(self) -> np.ndarray:
        return perspective_matrix(self.fov, self.aspect, self.near, self.far)

    def view_projection(self) -> np.ndarray:
        return self.projection_matrix() @ self.view_matrix()


class OrbitControl:
    """注視点を中心とした球面座標でカメラを回す/寄せる。

    - 左ドラッグ: 方位角/仰角を回転
    - スクロール: 距離を拡縮（`min_distance`〜`max_distance`）
    """

    def __init__(
        self,
        camera: PerspectiveCamera,
        *,
        rotate_speed: float = 0.01,
        zoom_speed: float = 0.1,
        min_distance: float = 0.5,
        max_distance: float = 100.0,
    ) -> None:
        self.camera = camera
        self.rotate_speed = float(rotate_speed)
        self.zoom_speed = float(zoom_speed)
        self.min_distance = float(min_distance)
        self.max_distance = float(max_distance)
        offset = camera.position.astype(np.float64) - camera.target.astype(np.float64)
        self.distance = float(np.linalg.norm(offset)) or 1.0
        # 仰角は Y 軸からの角度（0..π）、方位角は +Z から +X 方向
        self.polar = math.acos(max(-1.0, min(1.0, offset[1] / self.distance)))
        self.azimuth = math.atan2(offset[0], offset[2])

    def rotate(self, d_azimuth: float, d_polar: float) -> None:
        eps = 1e-3
        self.azimuth += d_azimuth
        self.polar = min(math.pi - eps, max(eps, self.polar + d_polar))
        self._apply()

    def zoom(self, steps: float) -> None:
        factor = (1.0 - self.zoom_speed) ** steps
        self.distance = min(self.max_distance, max(self.min_distance, self.distance * factor))
        self._apply()

    def _apply(self) -> None:
        s = math.sin(self.polar)
        offset = (
            self.distance * s * math.sin(self.azimuth),
            self.distance * math.cos(self.polar),
            self.distance * s * math.cos(self.azimuth),
        )
        t = self.camera.target
        self.camera.set_position(t[0] + offset[0], t[1] + offset[1], t[2] + offset[2])

    # ---- pyglet イベント（window.push_handlers(control) で結線） ----
    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):  # noqa: ANN001
        self.rotate(-dx * self.rotate_speed, dy * self.rotate_speed)

    def on_mouse_scroll(self, x, y, scroll_x, scroll_y):  # noqa: ANN001
        self.zoom(scroll_y)


__all__ = [
    "CameraConfig",
    "PerspectiveCamera",
    "OrbitControl",
    "perspective_matrix",
    "look_at_matrix",
]
