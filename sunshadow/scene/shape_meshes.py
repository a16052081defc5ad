# sunshadow/scene/shape_meshes.py

import logging
import numpy as np
import trimesh
from typing import Optional

from sunshadow.core.common_types import Vector3D, euler_xyz_to_rotation_matrix
from sunshadow.models.model_definitions import BoxModel, CylinderModel, Shape, SphereModel, shape_dimensions
from sunshadow.scene.ground_clamp import rendered_position

# Configure a logger for this module
logger = logging.getLogger(__name__)

# Below this sun-direction Z component the ground projection runs off to infinity.
_MIN_SUN_ELEVATION_COMPONENT = 1e-6


def create_local_mesh(shape: Shape) -> Optional[trimesh.Trimesh]:
    """
    Builds the shape's geometry centred on its local origin, Z up.

    Boxes use trimesh.creation.box, spheres a UV sphere with the shape's segment
    counts, and cylinders are revolved from their (bottom radius, top radius, height)
    profile so that unequal radii give a frustum or cone.

    Returns:
        A trimesh.Trimesh, or None when the dimensions cannot form a solid
        (a non-positive size, or a cylinder with both radii at zero).
    """
    dimensions = shape_dimensions(shape)
    if isinstance(shape, BoxModel):
        if min(shape.width, shape.depth, shape.height) <= 0:
            logger.warning(f"Box '{shape.id}' has non-positive dimensions {dimensions}. No mesh created.")
            return None
        return trimesh.creation.box(extents=[shape.width, shape.depth, shape.height])

    if isinstance(shape, SphereModel):
        if shape.radius <= 0 or shape.width_segments < 1 or shape.height_segments < 1:
            logger.warning(f"Sphere '{shape.id}' has degenerate dimensions {dimensions}. No mesh created.")
            return None
        return trimesh.creation.uv_sphere(radius=shape.radius,
                                          count=[shape.height_segments, shape.width_segments])

    if isinstance(shape, CylinderModel):
        if shape.height <= 0 or shape.radial_segments < 3 or shape.radius_top < 0 or shape.radius_bottom < 0 \
                or (shape.radius_top == 0 and shape.radius_bottom == 0):
            logger.warning(f"Cylinder '{shape.id}' has degenerate dimensions {dimensions}. No mesh created.")
            return None
        half_height = shape.height / 2
        profile = np.array([
            [0.0, -half_height],
            [shape.radius_bottom, -half_height],
            [shape.radius_top, half_height],
            [0.0, half_height],
        ])
        return trimesh.creation.revolve(linestring=profile, sections=shape.radial_segments)

    raise TypeError(f"Unsupported shape type: {type(shape).__name__}")


def shape_transform(shape: Shape) -> np.ndarray:
    """4x4 homogeneous transform from the shape's local frame to the Z-up world frame."""
    transform_matrix = np.eye(4)
    transform_matrix[:3, :3] = euler_xyz_to_rotation_matrix(shape.rotation)
    transform_matrix[:3, 3] = rendered_position(shape)
    return transform_matrix


def shape_to_mesh(shape: Shape) -> Optional[trimesh.Trimesh]:
    """Geometry of the shape placed in the world: rotated, then moved to its ground-clamped position."""
    local_mesh = create_local_mesh(shape)
    if local_mesh is None:
        return None
    world_mesh = local_mesh.apply_transform(shape_transform(shape))
    world_mesh.metadata['name'] = shape.id
    logger.debug(f"Built mesh for {shape.shape_type.value} '{shape.id}' "
                 f"with {len(world_mesh.vertices)} vertices and {len(world_mesh.faces)} faces.")
    return world_mesh


def project_shadow_on_ground(mesh: trimesh.Trimesh, light_position: Vector3D) -> np.ndarray:
    """
    Projects every face of a world-frame mesh onto the ground plane along the sunlight.

    Each vertex p slides along the sun direction d until it reaches z = 0:
        ground = p - d * (p_z / d_z)
    The union of the projected triangles is the shadow of a convex solid.

    Args:
        mesh: Mesh in the Z-up world frame.
        light_position: Light placement from the projector; its direction from the origin is
                        taken as the direction toward the sun.

    Returns:
        (F, 3, 2) array of ground triangles. Empty when the sun is at or below the horizon.
    """
    sun_direction = np.asarray(light_position, dtype=float)
    sun_direction = sun_direction / np.linalg.norm(sun_direction)
    if sun_direction[2] <= _MIN_SUN_ELEVATION_COMPONENT:
        logger.debug("Sun at or below the horizon, no ground shadow projected.")
        return np.empty((0, 3, 2))

    vertices = np.asarray(mesh.vertices, dtype=float)
    slide = vertices[:, 2] / sun_direction[2]
    projected = vertices[:, :2] - np.outer(slide, sun_direction[:2])
    return projected[mesh.faces]
