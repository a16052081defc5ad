# sunshadow/models/model_definitions.py

import numpy as np
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import ClassVar, Dict, Tuple, Union

# Import base types from common_types
from sunshadow.core.common_types import Vector3D


class ShapeType(str, Enum):
    BOX = "box"
    SPHERE = "sphere"
    CYLINDER = "cylinder"


@dataclass
class ShapeBase:
    """
    Fields shared by every placeable solid.

    Attributes:
        id: Unique identifier, supplied by the caller and used verbatim.
        position: User-specified anchor in the Z-up world frame. The rendered height is
                  derived from it by the ground clamp and never written back here.
        rotation: Euler angles in radians, XYZ order.
        cast_shadow: Whether the solid occludes sunlight.
        receive_shadow: Whether shadows of other solids are drawn on it.
    """
    id: str
    position: Vector3D = field(default_factory=lambda: np.array([0.0, 0.0, 0.0]))
    rotation: Vector3D = field(default_factory=lambda: np.array([0.0, 0.0, 0.0]))
    cast_shadow: bool = True
    receive_shadow: bool = True

    shape_type: ClassVar[ShapeType]


@dataclass
class BoxModel(ShapeBase):
    """
    Axis-aligned box before rotation.

    Attributes:
        width: Extent along X (east-west).
        depth: Extent along Y (north-south).
        height: Extent along Z (vertical).
    """
    width: float = 1.0
    depth: float = 1.0
    height: float = 1.0

    shape_type: ClassVar[ShapeType] = ShapeType.BOX


@dataclass
class SphereModel(ShapeBase):
    """
    Attributes:
        radius: Sphere radius.
        width_segments: Tessellation count around the vertical axis (longitude lines).
        height_segments: Tessellation count from pole to pole (latitude lines).
    """
    radius: float = 0.5
    width_segments: int = 16
    height_segments: int = 16

    shape_type: ClassVar[ShapeType] = ShapeType.SPHERE


@dataclass
class CylinderModel(ShapeBase):
    """
    Right circular frustum along Z. Either radius may be 0 to form a cone.

    Attributes:
        radius_top: Radius of the upper cap.
        radius_bottom: Radius of the lower cap.
        height: Extent along Z.
        radial_segments: Tessellation count around Z.
    """
    radius_top: float = 0.5
    radius_bottom: float = 0.5
    height: float = 1.0
    radial_segments: int = 16

    shape_type: ClassVar[ShapeType] = ShapeType.CYLINDER


# The closed set of shape variants. Per-variant logic switches over exactly these.
Shape = Union[BoxModel, SphereModel, CylinderModel]

SHAPE_CLASSES: Dict[ShapeType, type] = {
    ShapeType.BOX: BoxModel,
    ShapeType.SPHERE: SphereModel,
    ShapeType.CYLINDER: CylinderModel,
}

_BASE_FIELD_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(ShapeBase))


def create_default_shape(shape_type: Union[ShapeType, str], shape_id: str) -> Shape:
    """
    Creates a shape of the requested variant with canonical default dimensions,
    zero position and rotation, and shadow casting/receiving enabled.

    Args:
        shape_type: A ShapeType or its string value ("box", "sphere", "cylinder").
        shape_id: Identifier used verbatim. Uniqueness is the caller's responsibility.

    Raises:
        ValueError: If shape_type does not name a known variant.
    """
    shape_cls = SHAPE_CLASSES[ShapeType(shape_type)]
    return shape_cls(id=shape_id)


def shape_dimensions(shape: Shape) -> Dict[str, Union[float, int]]:
    """Returns the variant-specific dimension fields of a shape, keyed by field name."""
    if not isinstance(shape, (BoxModel, SphereModel, CylinderModel)):
        raise TypeError(f"Unsupported shape type: {type(shape).__name__}")
    return {f.name: getattr(shape, f.name) for f in fields(shape) if f.name not in _BASE_FIELD_NAMES}


def editable_field_names(shape: Shape) -> Tuple[str, ...]:
    return tuple(f.name for f in fields(shape) if f.name != "id")


if __name__ == '__main__':
    for kind in ShapeType:
        example = create_default_shape(kind, f"example-{kind.value}")
        print(f"{kind.value}: {example}")
        print(f"  Dimensions: {shape_dimensions(example)}")
