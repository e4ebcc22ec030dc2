import numpy as np

from modelview.transform import Transform


def _apply(matrix, point):
    return (matrix @ np.array([*point, 1.0]))[:3]


def test_default_transform_is_identity():
    assert np.allclose(Transform().model_matrix(), np.eye(4))


def test_position_becomes_translation_column():
    t = Transform(position=(1.5, -2.0, 3.0))
    assert np.allclose(t.model_matrix()[:3, 3], (1.5, -2.0, 3.0))


def test_scale_only_gives_diagonal():
    t = Transform(scale=(2.0, 0.5, 3.0))
    assert np.allclose(t.model_matrix(), np.diag([2.0, 0.5, 3.0, 1.0]))


def test_full_turn_returns_to_identity():
    t = Transform(rotation=(360.0, 360.0, 360.0))
    assert np.allclose(t.model_matrix(), np.eye(4))


def test_rotation_about_x_leaves_x_axis_fixed():
    t = Transform(rotation=(37.0, 0.0, 0.0))
    assert np.allclose(_apply(t.model_matrix(), (1, 0, 0)), (1, 0, 0))


def test_rotation_preserves_lengths():
    t = Transform(rotation=(10.0, 75.0, -40.0))
    moved = _apply(t.model_matrix(), (1.0, 2.0, 2.0))
    assert np.isclose(np.linalg.norm(moved), np.linalg.norm((1.0, 2.0, 2.0)))


def test_rotation_is_mutable_in_place():
    t = Transform()
    t.rotation[1] += 180.0
    rotated = _apply(t.model_matrix(), (1, 0, 0))
    assert np.allclose(rotated, (-1, 0, 0))