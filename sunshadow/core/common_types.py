# sunshadow/core/common_types.py

import math
import numpy as np
import quaternion  # For numpy-quaternion library
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

# --- Basic Geometric Types ---

# Vector3D: A 3-element NumPy array representing a vector in the Z-up world frame.
# X points east, Y points north, Z points up. Used for positions, rotations (Euler XYZ), directions.
Vector3D = np.ndarray  # np.array([x, y, z])

# RotationMatrix: A 3x3 NumPy array representing a rotation in 3D space.
RotationMatrix = np.ndarray

# Quaternion: Using the numpy-quaternion library.
# np.quaternion(w, x, y, z)
Quaternion = np.quaternion


def vector3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vector3D:
    """Builds a float Vector3D from its components."""
    return np.array([x, y, z], dtype=float)


def as_vector3(values: Sequence[float]) -> Vector3D:
    """
    Converts any 3-element sequence into a fresh float Vector3D.

    Raises:
        ValueError: If the input does not hold exactly three components.
    """
    arr = np.array(values, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components for a Vector3D, got shape {arr.shape}.")
    return arr


def _axis_quaternion(angle: float, axis: int) -> Quaternion:
    half = angle / 2.0
    components = [0.0, 0.0, 0.0]
    components[axis] = math.sin(half)
    return np.quaternion(math.cos(half), *components)


def euler_xyz_to_quaternion(rotation: Sequence[float]) -> Quaternion:
    """
    Converts Euler angles (radians, XYZ order) into a unit quaternion.

    The XYZ order composes as R = Rx @ Ry @ Rz, which is the convention
    the renderers consuming our scene frames use for mesh rotations.
    """
    rx, ry, rz = (float(v) for v in rotation)
    return _axis_quaternion(rx, 0) * _axis_quaternion(ry, 1) * _axis_quaternion(rz, 2)


def euler_xyz_to_rotation_matrix(rotation: Sequence[float]) -> RotationMatrix:
    return quaternion.as_rotation_matrix(euler_xyz_to_quaternion(rotation))


def rotation_matrix_to_euler_xyz(matrix: RotationMatrix) -> Vector3D:
    """Inverse of euler_xyz_to_rotation_matrix. Gimbal lock resolves with z = 0."""
    m = np.asarray(matrix, dtype=float)
    ry = math.asin(min(max(m[0, 2], -1.0), 1.0))
    if abs(m[0, 2]) < 0.9999999:
        rx = math.atan2(-m[1, 2], m[2, 2])
        rz = math.atan2(-m[0, 1], m[0, 0])
    else:
        rx = math.atan2(m[2, 1], m[1, 1])
        rz = 0.0
    return vector3(rx, ry, rz)


# --- Time and Place ---

@dataclass(frozen=True)
class GeoTime:
    """
    The observer's place and moment: a calendar datetime plus geographic coordinates.

    Attributes:
        date: The moment of observation. Naive datetimes are interpreted as UTC by the
              ephemeris; aware datetimes are converted.
        latitude: Degrees in [-90, 90], north positive.
        longitude: Degrees in [-180, 180], east positive.
    """
    date: datetime
    latitude: float
    longitude: float

    def __str__(self) -> str:
        return f"{self.date.isoformat()} @ ({self.latitude:.4f}, {self.longitude:.4f})"


@dataclass(frozen=True)
class SunAngle:
    """
    Celestial position of the sun as seen from a GeoTime.

    Attributes:
        azimuth: Radians from local north, increasing clockwise (east = pi/2, south = pi).
        altitude: Radians above the horizon; negative when the sun is below it.
    """
    azimuth: float
    altitude: float

    @property
    def azimuth_degrees(self) -> float:
        return math.degrees(self.azimuth)

    @property
    def altitude_degrees(self) -> float:
        return math.degrees(self.altitude)

    @property
    def is_above_horizon(self) -> bool:
        return self.altitude > 0.0


@dataclass(frozen=True)
class ShadowFrustum:
    """
    Orthographic volume of the directional light's shadow camera, in light space.

    The extents are fixed constants and are not fitted to the scene: geometry outside
    [left, right] x [bottom, top] x [near, far] casts clipped shadows.
    """
    left: float
    right: float
    top: float
    bottom: float
    near: float
    far: float

    @classmethod
    def symmetric(cls, half_size: float, near: float, far: float) -> 'ShadowFrustum':
        return cls(left=-half_size, right=half_size, top=half_size, bottom=-half_size, near=near, far=far)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom


if __name__ == '__main__':
    rotation = vector3(0.0, 0.0, math.pi / 2)
    print(f"Euler XYZ {rotation} -> quaternion {euler_xyz_to_quaternion(rotation)}")
    print(f"Rotation matrix:\n{euler_xyz_to_rotation_matrix(rotation)}")
    print(f"Frustum: {ShadowFrustum.symmetric(10.0, 0.5, 50.0)}")
