"""
どこで: `scene.snowman`（シーン構築）。
何を: 雪だるまの各パーツ（体・腕と指・頭・マフラー・顔・ボタン・帽子・床）と、
      ライト・座標軸ヘルパ・雪片を組み立てて `SceneGraph` に追加する。
なぜ: 起動時に 1 度だけ静的なシーンを作り、以後はフレームループが雪片の位置だけを動かすため。

構成:
- 各パーツは `build_*()` が `Composite`（名前 + MeshNode 列）として返す。グループは構築時だけの
  まとまりで、グラフ上では全ノードがルート直下に並ぶ。
- 指の Z 回転は腕の Z 回転を構築時に値コピーする（以後は連動しない）。
- 座標は Y が上。寸法・配置はすべてここに定数として持つ。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np

from api.shapes import G
from common.types import Vec3
from engine.animation.particles import ParticleField, SnowConfig
from engine.core.geometry import Geometry
from engine.core.node import AmbientLight, HelperNode, MeshNode, Node, PointLight
from engine.core.scene_graph import SceneGraph
from engine.core.transform import Transform
from engine.render.camera import CameraConfig, PerspectiveCamera

from .materials import BLACK, BROWN, ORANGE, RED, WHITE, material

logger = logging.getLogger(__name__)

PI = math.pi
ARM_ROTATION_Z = PI / 3.75
FINGER_COUNT = 3


class Composite(NamedTuple):
    """1 つの構築ルーチンが作るノードのまとまり。"""

    name: str
    nodes: tuple[MeshNode, ...]


@dataclass
class SceneBundle:
    """構築済みシーン一式。ランナーとテストはこれを受け取る。"""

    scene: SceneGraph
    camera: PerspectiveCamera
    particles: ParticleField
    composites: list[Composite] = field(default_factory=list)

    def composite(self, name: str) -> Composite:
        for c in self.composites:
            if c.name == name:
                return c
        raise KeyError(name)


def _mesh(
    geometry: Geometry,
    color: str,
    name: str,
    *,
    position: Vec3 = (0.0, 0.0, 0.0),
    rotation: Vec3 = (0.0, 0.0, 0.0),
    scale: Vec3 = (1.0, 1.0, 1.0),
) -> MeshNode:
    return MeshNode(
        geometry,
        material(color),
        name=name,
        transform=Transform(position, rotation, scale),
    )


# ---- パーツ -------------------------------------------------------------- #
def build_body() -> Composite:
    geom = G.sphere(radius=1.0, width_segments=32, height_segments=32)
    return Composite("body", (_mesh(geom, WHITE, "body"),))


def _build_arm(
    side: str, sign: float, finger_x: float, finger_y: float, finger_z0: float
) -> Composite:
    """腕 1 本と指 3 本。`sign` は左 = -1、右 = +1。"""
    arm_geom = G.cylinder(
        radius=0.07, height=0.7, radial_segments=16, height_segments=16, top=True, bottom=False
    )
    arm = _mesh(
        arm_geom,
        BROWN,
        f"{side}_arm",
        position=(0.8 * sign, 0.5, 0.0),
        rotation=(0.0, 0.0, -ARM_ROTATION_Z * sign),
        scale=(1.0, 1.7, 1.0),
    )

    finger_geom = G.cylinder(
        radius=0.03, height=0.3, radial_segments=16, height_segments=16, top=True, bottom=False
    )
    fingers: list[MeshNode] = []
    for i in range(FINGER_COUNT):
        finger = _mesh(
            finger_geom,
            BROWN,
            f"{side}_finger_{i}",
            position=(finger_x, finger_y, finger_z0 - 0.1 * i),
        )
        # 外側 2 本を扇状に開く
        if i == 0:
            finger.transform.set_rotation_x(PI / 6)
        elif i == FINGER_COUNT - 1:
            finger.transform.set_rotation_x(-PI / 6)
        finger.transform.set_rotation_z(float(arm.rotation[2]))
        fingers.append(finger)
    return Composite(f"{side}_arm", (arm, *fingers))


def build_left_arm() -> Composite:
    return _build_arm("left", -1.0, finger_x=-1.20, finger_y=0.90, finger_z0=0.08)


def build_right_arm() -> Composite:
    return _build_arm("right", 1.0, finger_x=1.22, finger_y=0.95, finger_z0=0.10)


def build_head() -> Composite:
    geom = G.sphere(radius=0.8, width_segments=32, height_segments=32)
    return Composite("head", (_mesh(geom, WHITE, "head", position=(0.0, 1.5, 0.0)),))


def build_scarf() -> Composite:
    geom = G.cylinder(
        radius=0.65, height=0.2, radial_segments=16, height_segments=16, top=True, bottom=False
    )
    return Composite("scarf", (_mesh(geom, RED, "scarf", position=(0.0, 0.8, 0.0)),))


def build_scarf_end() -> Composite:
    geom = G.torus(radius=0.25, tube=0.08, radial_segments=16, tubular_segments=32, arc=PI)
    node = _mesh(geom, RED, "scarf_end", position=(0.3, 0.7, 0.5), rotation=(PI / 6, 0.0, 0.0))
    return Composite("scarf_end", (node,))


def build_loose_end() -> Composite:
    geom = G.box(width=0.1, height=0.1, depth=0.5)
    node = _mesh(geom, RED, "loose_end", position=(0.55, 0.5, 0.55), rotation=(PI / 2, 0.0, 0.0))
    return Composite("loose_end", (node,))


def build_bottom() -> Composite:
    geom = G.sphere(radius=1.2, width_segments=32, height_segments=32)
    return Composite("bottom", (_mesh(geom, WHITE, "bottom", position=(0.0, -1.5, 0.0)),))


def build_eyes() -> Composite:
    geom = G.sphere(radius=0.15, width_segments=16, height_segments=16)
    left = _mesh(geom, BLACK, "left_eye", position=(-0.4, 1.8, 0.5))
    right = _mesh(geom, BLACK, "right_eye", position=(0.4, 1.8, 0.5))
    return Composite("eyes", (left, right))


def build_nose() -> Composite:
    geom = G.cone(radius=0.15, height=0.6, radial_segments=16, height_segments=16, bottom=True)
    node = _mesh(geom, ORANGE, "nose", position=(0.0, 1.5, 0.9), rotation=(PI / 2, 0.0, 0.0))
    return Composite("nose", (node,))


def build_mouth() -> Composite:
    geom = G.torus(radius=0.2, tube=0.05, radial_segments=16, tubular_segments=32, arc=PI)
    node = _mesh(geom, BLACK, "mouth", position=(0.0, 1.2, 0.7), rotation=(0.0, 0.0, PI))
    return Composite("mouth", (node,))


BUTTON_POSITIONS: tuple[Vec3, ...] = ((0.0, 0.5, 0.9), (0.0, 0.0, 1.0), (0.0, -0.5, 0.9))


def build_buttons() -> Composite:
    geom = G.sphere(radius=0.1, width_segments=16, height_segments=16)
    nodes = tuple(
        _mesh(geom, BLACK, f"button_{i}", position=pos) for i, pos in enumerate(BUTTON_POSITIONS)
    )
    return Composite("buttons", nodes)


def build_hat() -> Composite:
    base_geom = G.cylinder(
        radius=0.4, height=0.6, radial_segments=32, height_segments=34, top=True, bottom=False
    )
    brim_geom = G.cylinder(
        radius=0.6, height=0.01, radial_segments=32, height_segments=34, top=True, bottom=False
    )
    base = _mesh(base_geom, BLACK, "hat", position=(0.0, 2.5, 0.0))
    brim = _mesh(brim_geom, BLACK, "hat_brim", position=(0.0, 2.2, 0.0))
    return Composite("hat", (base, brim))


def build_floor() -> Composite:
    geom = G.plane(width=10.0, height=10.0)
    node = _mesh(geom, WHITE, "floor", position=(0.0, -2.0, 0.0), rotation=(-PI / 2, 0.0, 0.0))
    return Composite("floor", (node,))


# 追加順 = 描画順
COMPOSITE_BUILDERS = (
    build_body,
    build_left_arm,
    build_right_arm,
    build_head,
    build_scarf,
    build_scarf_end,
    build_loose_end,
    build_bottom,
    build_eyes,
    build_nose,
    build_mouth,
    build_buttons,
    build_hat,
    build_floor,
)


# ---- ライト/ヘルパ/雪 ------------------------------------------------------ #
def build_lights() -> list[Node]:
    white = material(WHITE).color
    return [
        AmbientLight(white, 0.8, name="ambient"),
        PointLight(white, 5.0, position=(1.0, 0.0, 2.0), name="point"),
    ]


_AXIS_COLORS = (("x", RED), ("y", "Green"), ("z", "Blue"))


def build_axes(size: float = 0.5) -> tuple[Node, list[HelperNode]]:
    """座標軸ヘルパ（X 赤・Y 緑・Z 青）。グループノードと子の HelperNode を返す。"""
    group = Node("axes")
    helpers = [
        HelperNode(G.axis(size=size, direction=d), material(color), name=f"axis_{d}")
        for d, color in _AXIS_COLORS
    ]
    return group, helpers


def build_snow(config: SnowConfig, *, rng: np.random.Generator | None = None) -> ParticleField:
    return ParticleField.initialize(
        config.count,
        config.x_range,
        config.y_range,
        config.z_range,
        geometry=G.sphere(radius=0.01, width_segments=8, height_segments=8),
        material=material(WHITE),
        rng=rng,
        fall_speed=config.fall_speed,
        floor=config.floor,
        ceiling=config.ceiling,
    )


def build_scene(
    *,
    snow: SnowConfig | None = None,
    camera: CameraConfig | None = None,
    seed: int | None = None,
    show_axes: bool = True,
) -> SceneBundle:
    """シーン一式（メッシュ 24 個 + ライト + 座標軸 + 雪片）を構築して返す。

    `seed` を与えると雪片の初期配置が決定的になる。
    """
    snow_cfg = snow if snow is not None else SnowConfig()
    cam_cfg = camera if camera is not None else CameraConfig()

    graph = SceneGraph()
    composites = [builder() for builder in COMPOSITE_BUILDERS]
    for comp in composites:
        graph.attach_all(comp.nodes)
    graph.attach_all(build_lights())
    if show_axes:
        group, helpers = build_axes()
        graph.attach(group)
        graph.attach_all(helpers, parent=group)

    rng = np.random.default_rng(seed)
    particles = build_snow(snow_cfg, rng=rng)
    graph.attach_all(particles.nodes)

    cam = PerspectiveCamera(
        1.0, fov=cam_cfg.fov, near=cam_cfg.near, far=cam_cfg.far, position=cam_cfg.position
    )

    mesh_count = sum(len(c.nodes) for c in composites)
    logger.info(
        "scene built: %d meshes in %d composites, %d snowflakes",
        mesh_count,
        len(composites),
        len(particles),
    )
    return SceneBundle(graph, cam, particles, composites)

