# sunshadow/scene/scene_composer.py

import logging
import numpy as np
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Union

from sunshadow.config import SceneConfig
from sunshadow.core.common_types import ShadowFrustum, SunAngle, Vector3D, as_vector3
from sunshadow.core.frames import point_to_y_up, rotation_to_y_up
from sunshadow.models.model_definitions import Shape, ShapeType, shape_dimensions
from sunshadow.scene.ground_clamp import rendered_position
from sunshadow.sun.sun_projector import SunDirectionProjector

logger = logging.getLogger(__name__)

# Compass labels drawn just above the ground, 8 units from the origin.
CARDINAL_LABELS = (
    ("N", (0.0, 8.0, 0.01)),
    ("S", (0.0, -8.0, 0.01)),
    ("E", (8.0, 0.0, 0.01)),
    ("W", (-8.0, 0.0, 0.01)),
)


@dataclass
class ShapeRenderRecord:
    """Everything a renderer needs to instantiate one shape's geometry."""
    id: str
    type: ShapeType
    rendered_position: Vector3D
    rotation: Vector3D
    dimensions: Dict[str, Union[float, int]]
    cast_shadow: bool
    receive_shadow: bool


@dataclass
class LightSource:
    """
    Attributes:
        position: Directional light placement.
        target: Point the light shines toward.
        frustum: Orthographic shadow-camera extents.
    """
    position: Vector3D
    target: Vector3D
    frustum: ShadowFrustum
    intensity: float
    ambient_intensity: float
    shadow_map_size: int
    shadow_bias: float


@dataclass
class SunMarker:
    position: Vector3D
    radius: float


@dataclass
class GroundPlane:
    size: float
    normal: Vector3D = field(default_factory=lambda: np.array([0.0, 0.0, 1.0]))
    receive_shadow: bool = True


@dataclass
class CameraSetup:
    position: Vector3D
    up: Vector3D
    target: Vector3D
    fov: float
    max_polar_angle: float


@dataclass
class ShapeMaterial:
    """Surface shared by every shape mesh."""
    color: str
    roughness: float
    metalness: float


@dataclass
class SceneLabel:
    text: str
    position: Vector3D


@dataclass
class SceneFrame:
    """
    One renderable frame: light, sun marker, shapes, ground, camera, text labels and shape material.

    All coordinates are in the frame named by up_axis ("z" by default).
    """
    sun_angle: SunAngle
    light: LightSource
    sun_marker: SunMarker
    shapes: List[ShapeRenderRecord]
    ground: GroundPlane
    camera: CameraSetup
    labels: List[SceneLabel]
    material: ShapeMaterial
    up_axis: str = "z"

    def to_y_up(self) -> 'SceneFrame':
        """Returns a copy re-expressed for a Y-up renderer. Frustum extents are in light space and kept."""
        if self.up_axis == "y":
            return self
        return replace(
            self,
            light=replace(self.light, position=point_to_y_up(self.light.position),
                          target=point_to_y_up(self.light.target)),
            sun_marker=replace(self.sun_marker, position=point_to_y_up(self.sun_marker.position)),
            shapes=[replace(record, rendered_position=point_to_y_up(record.rendered_position),
                            rotation=rotation_to_y_up(record.rotation))
                    for record in self.shapes],
            ground=replace(self.ground, normal=point_to_y_up(self.ground.normal)),
            camera=replace(self.camera, position=point_to_y_up(self.camera.position),
                           up=point_to_y_up(self.camera.up), target=point_to_y_up(self.camera.target)),
            labels=[replace(label, position=point_to_y_up(label.position)) for label in self.labels],
            up_axis="y",
        )


def _format_coordinate(value: float) -> str:
    # + 0.0 folds negative zero into zero
    return f"{round(float(value), 2) + 0.0:g}"


def sun_labels(sun_angle: SunAngle, light_position: Vector3D) -> List[SceneLabel]:
    """Readouts of the light placement and the sun angles, laid on the ground near the origin."""
    x, y, z = light_position
    position_text = f"Sun Position: {_format_coordinate(x)}, {_format_coordinate(y)}, {_format_coordinate(z)}"
    angle_text = (f"Azimuth: {round(sun_angle.azimuth_degrees)}°, "
                  f"Altitude: {round(sun_angle.altitude_degrees)}°")
    return [
        SceneLabel(text=position_text, position=np.array([0.0, 2.0, 0.01])),
        SceneLabel(text=angle_text, position=np.array([0.0, 1.0, 0.01])),
    ]


def shape_render_record(shape: Shape) -> ShapeRenderRecord:
    return ShapeRenderRecord(
        id=shape.id,
        type=shape.shape_type,
        rendered_position=rendered_position(shape),
        rotation=np.array(shape.rotation, dtype=float),
        dimensions=shape_dimensions(shape),
        cast_shadow=shape.cast_shadow,
        receive_shadow=shape.receive_shadow,
    )


def compose_frame(sun_angle: SunAngle, shapes: Iterable[Shape], config: Optional[SceneConfig] = None,
                  projector: Optional[SunDirectionProjector] = None) -> SceneFrame:
    """
    Assembles the Z-up frame for the current sun angle and shapes.

    Shapes appear in iteration order with their ground-clamped positions; their
    stored positions are left untouched.
    """
    config = config or SceneConfig()
    if projector is None:
        projector = SunDirectionProjector(config.shadow_frustum_half_size, config.shadow_frustum_near,
                                          config.shadow_frustum_far)
    projection = projector.project(sun_angle, config.light_distance)

    light = LightSource(
        position=projection.light_position,
        target=projection.target,
        frustum=projection.shadow_frustum,
        intensity=config.light_intensity,
        ambient_intensity=config.ambient_intensity,
        shadow_map_size=config.shadow_map_size,
        shadow_bias=config.shadow_bias,
    )
    records = [shape_render_record(shape) for shape in shapes]
    labels = sun_labels(sun_angle, projection.light_position)
    labels.extend(SceneLabel(text=text, position=np.array(position)) for text, position in CARDINAL_LABELS)

    frame = SceneFrame(
        sun_angle=sun_angle,
        light=light,
        sun_marker=SunMarker(position=projection.light_position.copy(), radius=config.sun_marker_radius),
        shapes=records,
        ground=GroundPlane(size=config.ground_size),
        camera=CameraSetup(
            position=as_vector3(config.camera_position),
            up=as_vector3(config.camera_up),
            target=np.array([0.0, 0.0, 0.0]),
            fov=config.camera_fov,
            max_polar_angle=config.max_polar_angle,
        ),
        labels=labels,
        material=ShapeMaterial(color=config.material_color, roughness=config.material_roughness,
                               metalness=config.material_metalness),
    )
    logger.debug(f"Composed frame with {len(records)} shapes, light at {light.position}.")
    return frame
