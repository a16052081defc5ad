# sunshadow/core/frames.py
"""
World frame conventions.

Everything in sunshadow is computed in a right-handed, Z-up world frame:
X east, Y north, Z up, ground plane at Z = 0. Many 3D engines default to Y-up,
so this module is the one place where positions, directions and rotations are
re-expressed for a Y-up consumer. The basis change is a -90 degree rotation
about X, which maps (x, y, z) -> (x, z, -y): up stays up, north becomes -Z.
"""

import math
import numpy as np
import quaternion  # For numpy-quaternion library
from typing import Sequence

from sunshadow.core.common_types import (
    Vector3D, RotationMatrix, Quaternion,
    euler_xyz_to_quaternion, rotation_matrix_to_euler_xyz,
)

WORLD_UP: Vector3D = np.array([0.0, 0.0, 1.0])
WORLD_NORTH: Vector3D = np.array([0.0, 1.0, 0.0])
WORLD_EAST: Vector3D = np.array([1.0, 0.0, 0.0])

Z_UP_TO_Y_UP_QUATERNION: Quaternion = np.quaternion(math.cos(-math.pi / 4), math.sin(-math.pi / 4), 0.0, 0.0)
Z_UP_TO_Y_UP: RotationMatrix = np.array([
    [1.0, 0.0, 0.0],
    [0.0, 0.0, 1.0],
    [0.0, -1.0, 0.0],
])


def point_to_y_up(point: Sequence[float]) -> Vector3D:
    """Re-expresses a Z-up position or direction in the Y-up frame."""
    return Z_UP_TO_Y_UP @ np.asarray(point, dtype=float)


def point_from_y_up(point: Sequence[float]) -> Vector3D:
    return Z_UP_TO_Y_UP.T @ np.asarray(point, dtype=float)


def orientation_to_y_up(orientation: Quaternion) -> Quaternion:
    """Conjugates a Z-up orientation by the basis change so it acts on Y-up coordinates."""
    return Z_UP_TO_Y_UP_QUATERNION * orientation * Z_UP_TO_Y_UP_QUATERNION.conjugate()


def rotation_to_y_up(rotation: Sequence[float]) -> Vector3D:
    """
    Converts Euler XYZ angles authored in the Z-up frame into Euler XYZ angles
    producing the same physical orientation in the Y-up frame.
    """
    q_y_up = orientation_to_y_up(euler_xyz_to_quaternion(rotation))
    return rotation_matrix_to_euler_xyz(quaternion.as_rotation_matrix(q_y_up))
