# sunshadow/tests/core/test_common_types.py

import math
import numpy as np
import pytest

from sunshadow.core.common_types import (
    ShadowFrustum, SunAngle, as_vector3, euler_xyz_to_rotation_matrix,
    rotation_matrix_to_euler_xyz, vector3,
)


def _rx(a):
    c, s = math.cos(a), math.sin(a)
    return np.array([[1, 0, 0], [0, c, -s], [0, s, c]])


def _ry(a):
    c, s = math.cos(a), math.sin(a)
    return np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]])


def _rz(a):
    c, s = math.cos(a), math.sin(a)
    return np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]])


def test_zero_rotation_is_identity():
    np.testing.assert_allclose(euler_xyz_to_rotation_matrix([0.0, 0.0, 0.0]), np.eye(3), atol=1e-12)


def test_quarter_turn_about_z_maps_east_to_north():
    rotation = euler_xyz_to_rotation_matrix([0.0, 0.0, math.pi / 2])
    np.testing.assert_allclose(rotation @ np.array([1.0, 0.0, 0.0]), [0.0, 1.0, 0.0], atol=1e-12)


def test_euler_xyz_composes_x_then_y_then_z_matrices():
    angles = (0.3, -0.7, 1.2)
    expected = _rx(angles[0]) @ _ry(angles[1]) @ _rz(angles[2])
    np.testing.assert_allclose(euler_xyz_to_rotation_matrix(angles), expected, atol=1e-12)


def test_rotation_matrix_back_to_euler():
    angles = vector3(0.4, 0.25, -2.0)
    recovered = rotation_matrix_to_euler_xyz(euler_xyz_to_rotation_matrix(angles))
    np.testing.assert_allclose(recovered, angles, atol=1e-9)


def test_as_vector3_copies_and_rejects_bad_shapes():
    source = [1, 2, 3]
    vec = as_vector3(source)
    assert vec.dtype == float
    np.testing.assert_array_equal(vec, [1.0, 2.0, 3.0])
    with pytest.raises(ValueError):
        as_vector3([1.0, 2.0])


def test_symmetric_frustum():
    frustum = ShadowFrustum.symmetric(10.0, 0.5, 50.0)
    assert (frustum.left, frustum.right, frustum.bottom, frustum.top) == (-10.0, 10.0, -10.0, 10.0)
    assert frustum.width == 20.0
    assert frustum.height == 20.0
    assert frustum.far == 50.0


def test_sun_angle_degrees_and_horizon():
    angle = SunAngle(azimuth=math.pi, altitude=-math.pi / 18)
    assert angle.azimuth_degrees == pytest.approx(180.0)
    assert angle.altitude_degrees == pytest.approx(-10.0)
    assert not angle.is_above_horizon
