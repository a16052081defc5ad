# sunshadow/scene/ground_clamp.py
"""
Keeps solids visually resting on the ground plane.

Shapes are authored with Z = 0 at their own local centre, so without an offset
half of every solid would sink below the ground. The clamp only changes the
rendered height; X and Y pass through, and the stored position is never modified.

Rules:
    box:      z = height / 2, always. The user Z is ignored, so a box cannot be elevated.
    sphere:   z = max(user z, radius)
    cylinder: z = max(user z, height / 2)

Dimensions are not validated here.
"""

import logging
import numpy as np

from sunshadow.core.common_types import Vector3D
from sunshadow.models.model_definitions import BoxModel, CylinderModel, Shape, SphereModel

logger = logging.getLogger(__name__)


def resting_height(shape: Shape) -> float:
    """Height of the shape's centre when it sits exactly on the ground."""
    if isinstance(shape, BoxModel):
        return shape.height / 2
    if isinstance(shape, SphereModel):
        return shape.radius
    if isinstance(shape, CylinderModel):
        return shape.height / 2
    raise TypeError(f"Unsupported shape type: {type(shape).__name__}")


def clamp_z(shape: Shape, z: float) -> float:
    """
    Applies the shape's ground clamp to an arbitrary vertical coordinate.

    Idempotent: clamp_z(shape, clamp_z(shape, z)) == clamp_z(shape, z).
    """
    if isinstance(shape, BoxModel):
        return shape.height / 2
    return max(z, resting_height(shape))


def rendered_position(shape: Shape) -> Vector3D:
    """Position at which the shape is drawn. Returns a new array."""
    x, y, user_z = shape.position
    z = clamp_z(shape, float(user_z))
    if z != user_z:
        logger.debug(f"Ground clamp moved {shape.shape_type.value} '{shape.id}' from z={user_z} to z={z}.")
    return np.array([x, y, z], dtype=float)
