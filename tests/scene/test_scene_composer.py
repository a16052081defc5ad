# sunshadow/tests/scene/test_scene_composer.py

import math

import numpy as np
import pytest

from sunshadow.config import SceneConfig
from sunshadow.core.common_types import SunAngle
from sunshadow.models.model_definitions import BoxModel, ShapeType, SphereModel
from sunshadow.scene.scene_composer import compose_frame

NOON_LIKE_SUN = SunAngle(azimuth=math.pi, altitude=math.pi / 4)


@pytest.fixture
def shapes():
    return [
        BoxModel(id="box", width=2.0, depth=1.0, height=3.0, position=np.array([1.0, 2.0, 7.0]),
                 rotation=np.array([0.0, 0.0, 0.5])),
        SphereModel(id="ball", radius=0.5, position=np.array([-1.0, 0.0, 2.0]), cast_shadow=False),
    ]


def test_shape_records_follow_insertion_order(shapes):
    frame = compose_frame(NOON_LIKE_SUN, shapes)
    assert [record.id for record in frame.shapes] == ["box", "ball"]
    assert [record.type for record in frame.shapes] == [ShapeType.BOX, ShapeType.SPHERE]


def test_shape_record_contents(shapes):
    box_record, ball_record = compose_frame(NOON_LIKE_SUN, shapes).shapes
    np.testing.assert_allclose(box_record.rendered_position, [1.0, 2.0, 1.5])
    np.testing.assert_allclose(box_record.rotation, [0.0, 0.0, 0.5])
    assert box_record.dimensions == {"width": 2.0, "depth": 1.0, "height": 3.0}
    assert box_record.cast_shadow is True
    assert ball_record.cast_shadow is False
    assert ball_record.receive_shadow is True
    np.testing.assert_allclose(ball_record.rendered_position, [-1.0, 0.0, 2.0])


def test_composing_does_not_move_stored_positions(shapes):
    compose_frame(NOON_LIKE_SUN, shapes)
    np.testing.assert_array_equal(shapes[0].position, [1.0, 2.0, 7.0])


def test_light_follows_projection_and_config():
    config = SceneConfig(light_distance=20.0, shadow_frustum_half_size=15.0, light_intensity=1.5)
    frame = compose_frame(SunAngle(azimuth=0.0, altitude=0.0), [], config)
    np.testing.assert_allclose(frame.light.position, [0.0, 20.0, 0.0], atol=1e-9)
    np.testing.assert_array_equal(frame.light.target, [0.0, 0.0, 0.0])
    assert frame.light.frustum.right == 15.0
    assert frame.light.intensity == 1.5
    assert frame.light.ambient_intensity == 0.2
    assert frame.light.shadow_map_size == 2048
    np.testing.assert_allclose(frame.sun_marker.position, frame.light.position)
    assert frame.sun_marker.radius == 0.3


def test_default_camera_and_ground():
    frame = compose_frame(NOON_LIKE_SUN, [])
    np.testing.assert_array_equal(frame.camera.position, [10.0, -10.0, 10.0])
    np.testing.assert_array_equal(frame.camera.up, [0.0, 0.0, 1.0])
    assert frame.camera.fov == 50.0
    assert frame.camera.max_polar_angle == pytest.approx(math.pi / 2)
    assert frame.ground.size == 100.0
    assert frame.ground.receive_shadow is True
    assert frame.up_axis == "z"


def test_sun_readout_labels():
    frame = compose_frame(SunAngle(azimuth=0.0, altitude=0.0), [])
    texts = [label.text for label in frame.labels]
    assert "Sun Position: 0, 10, 0" in texts
    assert "Azimuth: 0°, Altitude: 0°" in texts


def test_sun_readout_rounding():
    frame = compose_frame(SunAngle(azimuth=math.radians(200.4), altitude=math.radians(35.6)), [])
    texts = [label.text for label in frame.labels]
    assert "Azimuth: 200°, Altitude: 36°" in texts
    x, y, z = frame.light.position
    assert f"Sun Position: {round(x, 2):g}, {round(y, 2):g}, {round(z, 2):g}" in texts


def test_cardinal_labels_match_world_axes():
    labels = {label.text: label.position for label in compose_frame(NOON_LIKE_SUN, []).labels}
    assert labels["N"][1] > 0
    assert labels["S"][1] < 0
    assert labels["E"][0] > 0
    assert labels["W"][0] < 0


def test_y_up_copy_converts_every_position(shapes):
    frame = compose_frame(NOON_LIKE_SUN, shapes)
    y_up = frame.to_y_up()

    assert y_up.up_axis == "y"
    assert frame.up_axis == "z"
    x, y, z = frame.light.position
    np.testing.assert_allclose(y_up.light.position, [x, z, -y])
    np.testing.assert_allclose(y_up.camera.up, [0.0, 1.0, 0.0])
    np.testing.assert_allclose(y_up.camera.position, [10.0, 10.0, 10.0])
    np.testing.assert_allclose(y_up.ground.normal, [0.0, 1.0, 0.0])
    np.testing.assert_allclose(y_up.shapes[0].rendered_position, [1.0, 1.5, -2.0])
    np.testing.assert_allclose(y_up.shapes[0].rotation, [0.0, 0.5, 0.0], atol=1e-9)
    assert y_up.light.frustum == frame.light.frustum
    np.testing.assert_allclose(frame.shapes[0].rendered_position, [1.0, 2.0, 1.5])
    assert y_up.to_y_up() is y_up


def test_material_comes_from_config():
    default = compose_frame(NOON_LIKE_SUN, []).material
    assert (default.color, default.roughness, default.metalness) == ("#B0B0B0", 0.7, 0.1)

    config = SceneConfig(material_color="#FF0000", material_roughness=0.2, material_metalness=0.9)
    frame = compose_frame(NOON_LIKE_SUN, [], config)
    assert (frame.material.color, frame.material.roughness, frame.material.metalness) == ("#FF0000", 0.2, 0.9)
    assert frame.to_y_up().material == frame.material


def test_noon_light_and_marker_sit_south():
    frame = compose_frame(NOON_LIKE_SUN, [])
    assert frame.light.position[1] < 0
    assert frame.sun_marker.position[1] < 0
    assert frame.light.position[2] > 0
