# sunshadow/tests/scene/test_ground_clamp.py

import numpy as np
import pytest

from sunshadow.models.model_definitions import BoxModel, CylinderModel, SphereModel, create_default_shape
from sunshadow.scene.ground_clamp import clamp_z, rendered_position, resting_height

USER_Z_SAMPLES = [-3.0, -0.5, 0.0, 0.25, 0.5, 1.0, 2.0, 10.0]


def _shapes():
    return [
        BoxModel(id="box", width=2.0, depth=3.0, height=4.0),
        SphereModel(id="sphere", radius=0.75),
        CylinderModel(id="cyl", radius_top=0.2, radius_bottom=1.0, height=3.0),
    ]


def test_sphere_resting_on_ground():
    sphere = SphereModel(id="s", radius=0.5, position=np.array([0.0, 0.0, 0.0]))
    assert rendered_position(sphere)[2] == 0.5


def test_sphere_may_float_above_ground():
    sphere = SphereModel(id="s", radius=0.5, position=np.array([0.0, 0.0, 2.0]))
    assert rendered_position(sphere)[2] == 2.0


def test_cylinder_rests_on_its_half_height():
    cylinder = CylinderModel(id="c", height=4.0, position=np.array([0.0, 0.0, 0.0]))
    assert rendered_position(cylinder)[2] == 2.0


def test_cylinder_may_float_above_ground():
    cylinder = CylinderModel(id="c", height=4.0, position=np.array([0.0, 0.0, 3.5]))
    assert rendered_position(cylinder)[2] == 3.5


@pytest.mark.parametrize("user_z", USER_Z_SAMPLES)
def test_box_height_ignores_user_z(user_z):
    box = BoxModel(id="b", height=3.0, position=np.array([1.0, 2.0, user_z]))
    assert rendered_position(box)[2] == 1.5


@pytest.mark.parametrize("user_z", USER_Z_SAMPLES)
def test_clamp_is_idempotent(user_z):
    for shape in _shapes():
        once = clamp_z(shape, user_z)
        assert clamp_z(shape, once) == once


@pytest.mark.parametrize("user_z", USER_Z_SAMPLES)
def test_clamp_never_goes_below_resting_height(user_z):
    for shape in _shapes():
        assert clamp_z(shape, user_z) >= resting_height(shape)


def test_clamp_is_monotonic_in_the_floor():
    user_z = 1.0
    previous = None
    for radius in [0.0, 0.25, 0.5, 1.0, 1.5, 3.0]:
        sphere = SphereModel(id="s", radius=radius, position=np.array([0.0, 0.0, user_z]))
        z = rendered_position(sphere)[2]
        assert z >= radius
        if previous is not None:
            assert z >= previous
        previous = z

    previous = None
    for height in [0.5, 1.0, 2.0, 4.0, 8.0]:
        cylinder = CylinderModel(id="c", height=height, position=np.array([0.0, 0.0, user_z]))
        z = rendered_position(cylinder)[2]
        assert z >= height / 2
        if previous is not None:
            assert z >= previous
        previous = z


def test_zero_radius_sphere_keeps_user_z():
    sphere = SphereModel(id="s", radius=0.0, position=np.array([0.0, 0.0, 1.5]))
    assert rendered_position(sphere)[2] == 1.5


def test_x_and_y_pass_through_and_stored_position_is_untouched():
    for shape in _shapes():
        shape.position = np.array([3.0, -4.0, -1.0])
        rendered = rendered_position(shape)
        assert rendered[0] == 3.0
        assert rendered[1] == -4.0
        np.testing.assert_array_equal(shape.position, [3.0, -4.0, -1.0])
        assert rendered is not shape.position


@pytest.mark.parametrize("shape_type, expected_z", [("box", 0.5), ("sphere", 0.5), ("cylinder", 0.5)])
def test_default_shapes_rest_on_ground(shape_type, expected_z):
    assert rendered_position(create_default_shape(shape_type, "x"))[2] == expected_z


def test_unknown_shape_type_raises():
    with pytest.raises(TypeError):
        resting_height(object())
