from __future__ import annotations

import math

import numpy as np
import pytest

from engine.render.camera import OrbitControl, PerspectiveCamera, look_at_matrix, perspective_matrix


def test_set_aspect_validates() -> None:
    cam = PerspectiveCamera()
    cam.set_aspect(16 / 9)
    assert cam.aspect == pytest.approx(16 / 9)
    for bad in (0.0, -1.0, float("inf"), float("nan")):
        with pytest.raises(ValueError):
            cam.set_aspect(bad)


def test_invalid_frustum_raises() -> None:
    with pytest.raises(ValueError):
        PerspectiveCamera(fov=0.0)
    with pytest.raises(ValueError):
        PerspectiveCamera(near=1.0, far=0.5)


def test_projection_uses_aspect() -> None:
    m = perspective_matrix(90.0, 2.0, 0.1, 100.0)
    assert m[1, 1] == pytest.approx(1.0)
    assert m[0, 0] == pytest.approx(0.5)
    assert m[3, 2] == -1.0


def test_view_matrix_moves_target_onto_negative_z() -> None:
    view = look_at_matrix(np.array([0.0, -1.0, 5.0]), np.zeros(3), np.array([0.0, 1.0, 0.0]))
    p = view @ np.array([0.0, 0.0, 0.0, 1.0])
    assert np.allclose(p[:2], [0.0, 0.0], atol=1e-6)
    assert p[2] == pytest.approx(-math.sqrt(26.0), rel=1e-6)


def test_center_projects_to_screen_center() -> None:
    cam = PerspectiveCamera(1.5, position=(0.0, -1.0, 5.0))
    clip = cam.view_projection() @ np.array([0.0, 0.0, 0.0, 1.0])
    ndc = clip[:3] / clip[3]
    assert np.allclose(ndc[:2], [0.0, 0.0], atol=1e-6)
    assert -1.0 < ndc[2] < 1.0


def test_orbit_keeps_distance_and_zoom_clamps() -> None:
    cam = PerspectiveCamera(position=(0.0, 0.0, 5.0))
    orbit = OrbitControl(cam, min_distance=1.0, max_distance=10.0)
    orbit.rotate(math.pi / 2, 0.0)
    assert np.allclose(cam.position, [5.0, 0.0, 0.0], atol=1e-5)
    assert np.linalg.norm(cam.position) == pytest.approx(5.0, rel=1e-5)
    orbit.zoom(100)
    assert np.linalg.norm(cam.position) == pytest.approx(1.0, rel=1e-5)
    orbit.on_mouse_scroll(0, 0, 0, -100)
    assert np.linalg.norm(cam.position) == pytest.approx(10.0, rel=1e-5)
