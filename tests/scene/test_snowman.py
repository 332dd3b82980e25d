from __future__ import annotations

import math

import numpy as np
import pytest

from engine.animation.particles import SnowConfig
from engine.core.node import AmbientLight, HelperNode, PointLight
from scene import build_scene
from scene.materials import material


@pytest.fixture(scope="module")
def bundle():  # noqa: ANN201
    return build_scene(snow=SnowConfig(count=50), seed=1)


# What this tests
# - 雪片を除くメッシュは 24 個、雪片は設定数ぶんグラフに入る。
@pytest.mark.smoke
def test_mesh_counts(bundle) -> None:
    composite_meshes = sum(len(c.nodes) for c in bundle.composites)
    assert composite_meshes == 24
    assert len(list(bundle.scene.meshes())) == 24 + 50
    assert len(bundle.particles) == 50


def test_composite_names(bundle) -> None:
    names = [c.name for c in bundle.composites]
    assert names == [
        "body",
        "left_arm",
        "right_arm",
        "head",
        "scarf",
        "scarf_end",
        "loose_end",
        "bottom",
        "eyes",
        "nose",
        "mouth",
        "buttons",
        "hat",
        "floor",
    ]


def test_fingers_copy_arm_rotation_z(bundle) -> None:
    for side, sign in (("left_arm", 1.0), ("right_arm", -1.0)):
        arm, *fingers = bundle.composite(side).nodes
        assert len(fingers) == 3
        assert arm.rotation[2] == pytest.approx(sign * math.pi / 3.75, rel=1e-6)
        assert all(f.rotation[2] == arm.rotation[2] for f in fingers)
        assert fingers[0].rotation[0] == pytest.approx(math.pi / 6, rel=1e-6)
        assert fingers[1].rotation[0] == 0.0
        assert fingers[2].rotation[0] == pytest.approx(-math.pi / 6, rel=1e-6)


def test_left_arm_layout(bundle) -> None:
    arm, *fingers = bundle.composite("left_arm").nodes
    assert np.allclose(arm.position, [-0.8, 0.5, 0.0])
    assert np.allclose(arm.transform.scale, [1.0, 1.7, 1.0])
    assert np.allclose([f.position[2] for f in fingers], [0.08, -0.02, -0.12], atol=1e-6)


def test_shared_geometry_and_material(bundle) -> None:
    eyes = bundle.composite("eyes").nodes
    buttons = bundle.composite("buttons").nodes
    assert eyes[0].geometry is eyes[1].geometry
    assert len({id(b.geometry) for b in buttons}) == 1
    assert eyes[0].material is material("Black")
    assert all(p.geometry is bundle.particles.nodes[0].geometry for p in bundle.particles.nodes)


def test_colors(bundle) -> None:
    nose = bundle.composite("nose").nodes[0]
    assert nose.material.color == pytest.approx((1.0, 165 / 255, 0.0, 1.0))
    assert bundle.composite("scarf").nodes[0].material.color == (1.0, 0.0, 0.0, 1.0)
    assert bundle.composite("body").nodes[0].material.color == (1.0, 1.0, 1.0, 1.0)


def test_lights_and_axes(bundle) -> None:
    lights = list(bundle.scene.lights())
    assert [type(light) for light in lights] == [AmbientLight, PointLight]
    assert lights[0].intensity == 0.8
    assert lights[1].intensity == 5.0
    assert np.allclose(lights[1].position, [1.0, 0.0, 2.0])
    helpers = list(bundle.scene.helpers())
    assert len(helpers) == 3
    assert all(isinstance(h, HelperNode) for h in helpers)


def test_axes_can_be_hidden() -> None:
    b = build_scene(snow=SnowConfig(count=0), show_axes=False)
    assert list(b.scene.helpers()) == []


def test_camera_defaults(bundle) -> None:
    cam = bundle.camera
    assert np.allclose(cam.position, [0.0, -1.0, 5.0])
    assert cam.fov == 30.0
    assert cam.aspect == 1.0


def test_seed_makes_snow_deterministic() -> None:
    a = build_scene(snow=SnowConfig(count=20), seed=3)
    b = build_scene(snow=SnowConfig(count=20), seed=3)
    assert np.array_equal(a.particles.positions, b.particles.positions)


def test_snow_nodes_are_attached_and_move(bundle) -> None:
    nodes = set(map(id, bundle.particles.nodes))
    attached = [n for n in bundle.scene.traverse() if id(n) in nodes]
    assert len(attached) == 50
    y0 = float(attached[0].position[1])
    bundle.particles.advance(0.1)
    assert float(attached[0].position[1]) == pytest.approx(y0 - 0.1, abs=1e-5)
