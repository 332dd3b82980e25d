from __future__ import annotations

import math

import numpy as np
import pytest

from engine.core.geometry import Geometry
from shapes import get_shape, is_shape_registered, list_shapes


@pytest.mark.smoke
def test_builtin_shapes_are_registered() -> None:
    for name in ("sphere", "cylinder", "cone", "torus", "box", "plane", "axis"):
        assert is_shape_registered(name)
        assert name in list_shapes()


def test_sphere_radius_and_y_poles() -> None:
    g = get_shape("sphere")(radius=2.0, width_segments=8, height_segments=6)
    assert isinstance(g, Geometry)
    r = np.linalg.norm(g.coords, axis=1)
    assert np.allclose(r, 2.0, atol=1e-5)
    lo, hi = g.coords.min(axis=0), g.coords.max(axis=0)
    assert hi[1] == pytest.approx(2.0, abs=1e-5)
    assert lo[1] == pytest.approx(-2.0, abs=1e-5)
    # 緯度リング 5 本 + 経度線 8 本
    assert len(g) == 5 + 8


def test_cylinder_height_along_y_and_caps() -> None:
    g = get_shape("cylinder")(radius=0.5, height=2.0, radial_segments=8, top=True, bottom=False)
    lo, hi = g.coords.min(axis=0), g.coords.max(axis=0)
    assert lo[1] == pytest.approx(-1.0)
    assert hi[1] == pytest.approx(1.0)
    assert hi[0] == pytest.approx(0.5, abs=1e-6)
    # リング 2 + 側線 8 + 上蓋の放射線 8
    assert len(g) == 2 + 8 + 8


def test_cone_apex_is_plus_y() -> None:
    g = get_shape("cone")(radius=0.15, height=0.6, radial_segments=6)
    assert g.coords[:, 1].max() == pytest.approx(0.3)
    apex_rows = np.isclose(g.coords[:, 1], 0.3)
    assert np.allclose(g.coords[apex_rows][:, [0, 2]], 0.0)


def test_half_torus_lies_in_upper_xy_half() -> None:
    g = get_shape("torus")(
        radius=0.25, tube=0.08, radial_segments=8, tubular_segments=16, arc=math.pi
    )
    assert g.coords[:, 1].min() >= -0.08 - 1e-6
    assert g.coords[:, 0].max() == pytest.approx(0.33, abs=1e-5)
    assert np.abs(g.coords[:, 2]).max() == pytest.approx(0.08, abs=1e-5)
    # 断面 17 本 + 掃引線 8 本
    assert len(g) == 17 + 8


def test_full_torus_skips_duplicate_ring() -> None:
    g = get_shape("torus")(radius=1.0, tube=0.1, radial_segments=4, tubular_segments=12)
    assert len(g) == 12 + 4


def test_box_dimensions() -> None:
    g = get_shape("box")(width=0.1, height=0.2, depth=0.5)
    lo, hi = g.coords.min(axis=0), g.coords.max(axis=0)
    assert np.allclose(hi - lo, [0.1, 0.2, 0.5], atol=1e-6)
    assert len(g) == 2 + 4


def test_plane_in_xy() -> None:
    g = get_shape("plane")(width=10.0, height=4.0, width_segments=2, height_segments=2)
    assert np.allclose(g.coords[:, 2], 0.0)
    lo, hi = g.coords.min(axis=0), g.coords.max(axis=0)
    assert np.allclose(lo[:2], [-5.0, -2.0])
    assert np.allclose(hi[:2], [5.0, 2.0])
    assert len(g) == 3 + 3


def test_axis_direction() -> None:
    g = get_shape("axis")(size=0.5, direction="y")
    assert np.allclose(g.coords, [[0.0, 0.0, 0.0], [0.0, 0.5, 0.0]])
    with pytest.raises(ValueError):
        get_shape("axis")(direction="w")


@pytest.mark.parametrize(
    "name, params",
    [
        ("sphere", {"radius": -1.0}),
        ("sphere", {"width_segments": 2}),
        ("cylinder", {"height": 0.0}),
        ("cone", {"radius": float("nan")}),
        ("torus", {"tube": -0.1}),
        ("box", {"depth": 0.0}),
        ("plane", {"width_segments": 0}),
    ],
)
def test_invalid_parameters_raise_value_error(name: str, params: dict) -> None:
    with pytest.raises(ValueError):
        get_shape(name)(**params)
