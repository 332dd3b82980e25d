from __future__ import annotations

import math

import numpy as np
import pytest

from engine.core.transform import Transform, compose_matrices, compose_matrix, rotation_matrix


def test_rotation_matrix_applies_x_then_z() -> None:
    # +Y を X 軸に π/2 → +Z。その後 Z 軸回転は +Z を動かさない
    rot = rotation_matrix(math.pi / 2, 0.0, math.pi / 2)
    assert np.allclose(rot @ np.array([0.0, 1.0, 0.0]), [0.0, 0.0, 1.0], atol=1e-6)
    # +X は X 回転で不変、Z 回転で +Y
    assert np.allclose(rot @ np.array([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-6)


def test_compose_matrix_is_translate_rotate_scale() -> None:
    m = compose_matrix((1.0, 2.0, 3.0), (0.0, 0.0, math.pi / 2), (2.0, 1.0, 1.0))
    p = m @ np.array([1.0, 0.0, 0.0, 1.0])
    # scale → (2,0,0), rotZ → (0,2,0), translate → (1,4,3)
    assert np.allclose(p[:3], [1.0, 4.0, 3.0], atol=1e-6)


def test_compose_matrices_matches_scalar_version() -> None:
    rng = np.random.default_rng(0)
    pos = rng.uniform(-1, 1, size=(5, 3))
    rot = rng.uniform(-math.pi, math.pi, size=(5, 3))
    scl = rng.uniform(0.5, 2.0, size=(5, 3))
    batch = compose_matrices(pos, rot, scl)
    assert batch.shape == (5, 4, 4)
    for i in range(5):
        assert np.allclose(batch[i], compose_matrix(pos[i], rot[i], scl[i]), atol=1e-5)


def test_position_shares_float32_view() -> None:
    arena = np.zeros((2, 3), dtype=np.float32)
    t = Transform(arena[1])
    arena[1, 1] = 7.0
    assert t.position[1] == 7.0
    t.set_position_y(3.0)
    assert arena[1, 1] == 3.0


def test_rotation_and_scale_are_copied() -> None:
    rot = np.zeros(3, dtype=np.float32)
    t = Transform(rotation=rot)
    t.set_rotation_z(1.0)
    assert rot[2] == 0.0
    assert t.rotation[2] == pytest.approx(1.0)


def test_invalid_vector_length_raises() -> None:
    with pytest.raises(ValueError):
        Transform(position=(1.0, 2.0))
