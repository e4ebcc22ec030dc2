import math

import numpy as np
import pytest

from modelview import linalg


def _apply(matrix, point):
    return (matrix @ np.array([*point, 1.0]))[:3]


def test_identity_is_neutral_for_translate_and_scale():
    m = linalg.identity()
    assert np.allclose(linalg.translate(m, (0, 0, 0)), m)
    assert np.allclose(linalg.scale(m, (1, 1, 1)), m)


def test_translate_moves_origin_to_offset():
    m = linalg.translate(linalg.identity(), (4.0, -2.0, 0.5))
    assert np.allclose(_apply(m, (0, 0, 0)), (4.0, -2.0, 0.5))


def test_translate_rejects_wrong_vector_size():
    with pytest.raises(ValueError):
        linalg.translate(linalg.identity(), (1.0, 2.0))


def test_scale_multiplies_components():
    m = linalg.scale(linalg.identity(), (2.0, 3.0, 4.0))
    assert np.allclose(np.diag(m), (2.0, 3.0, 4.0, 1.0))


@pytest.mark.parametrize("axis", [(1, 0, 0), (0, 1, 0), (0, 0, 1), (1, 2, 3)])
def test_rotation_is_orthonormal_and_keeps_axis(axis):
    m = linalg.rotate(linalg.identity(), 0.7, axis)
    r = m[:3, :3]
    assert np.allclose(r @ r.T, np.eye(3))
    assert math.isclose(np.linalg.det(r), 1.0, rel_tol=1e-9)
    assert np.allclose(_apply(m, axis), axis)


def test_rotation_inverse_cancels():
    m = linalg.rotate(linalg.identity(), 1.1, (0, 1, 1))
    back = linalg.rotate(m, -1.1, (0, 1, 1))
    assert np.allclose(back, linalg.identity())


def test_rotation_is_counter_clockwise_about_z():
    m = linalg.rotate(linalg.identity(), math.pi / 2, (0, 0, 1))
    assert np.allclose(_apply(m, (1, 0, 0)), (0, 1, 0))


def test_rotate_rejects_zero_axis():
    with pytest.raises(ValueError):
        linalg.rotate(linalg.identity(), 1.0, (0, 0, 0))


def test_perspective_maps_near_and_far_planes():
    near, far = 0.1, 100.0
    p = linalg.perspective(math.radians(45.0), 4 / 3, near, far)
    for depth, expected in ((near, -1.0), (far, 1.0)):
        clip = p @ np.array([0.0, 0.0, -depth, 1.0])
        assert math.isclose(clip[2] / clip[3], expected, abs_tol=1e-9)
    assert p[3, 2] == -1.0


def test_perspective_aspect_stretches_x():
    p = linalg.perspective(1.0, 2.0, 0.1, 10.0)
    assert math.isclose(p[1, 1], 2.0 * p[0, 0])


def test_perspective_rejects_zero_aspect():
    with pytest.raises(ValueError):
        linalg.perspective(1.0, 0.0, 0.1, 10.0)


def test_look_at_places_eye_at_origin_and_target_ahead():
    eye, target = (3.0, 1.0, 5.0), (0.0, 0.5, -1.0)
    v = linalg.look_at(eye, target, (0, 1, 0))
    assert np.allclose(_apply(v, eye), (0, 0, 0))
    ahead = _apply(v, target)
    distance = np.linalg.norm(np.subtract(target, eye))
    assert np.allclose(ahead[:2], (0, 0))
    assert math.isclose(ahead[2], -distance)
    assert np.allclose(v[:3, :3] @ v[:3, :3].T, np.eye(3))


def test_look_at_rejects_coincident_eye_and_target():
    with pytest.raises(ValueError):
        linalg.look_at((1, 1, 1), (1, 1, 1), (0, 1, 0))