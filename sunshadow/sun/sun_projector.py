# sunshadow/sun/sun_projector.py

import logging
import math
import numpy as np
from dataclasses import dataclass, field

from sunshadow.core.common_types import SunAngle, ShadowFrustum, Vector3D, vector3

DEFAULT_LIGHT_DISTANCE = 10.0

# Shadow camera extents. These are tuning constants, not fitted to the scene:
# anything beyond +/- DEFAULT_FRUSTUM_HALF_SIZE from the light axis gets a clipped shadow.
DEFAULT_FRUSTUM_HALF_SIZE = 10.0
DEFAULT_FRUSTUM_NEAR = 0.5
DEFAULT_FRUSTUM_FAR = 50.0


@dataclass(frozen=True)
class SunProjection:
    """
    Where the light sits in the Z-up world frame and the shadow volume it renders with.

    Attributes:
        light_position: Point at which the directional light is placed, on the sun's side.
        shadow_frustum: Orthographic shadow-camera extents in light space.
        target: Point the light looks at (the world origin).
    """
    light_position: Vector3D
    shadow_frustum: ShadowFrustum
    target: Vector3D = field(default_factory=lambda: np.array([0.0, 0.0, 0.0]))

    @property
    def sun_direction(self) -> Vector3D:
        """Unit vector from the target toward the sun. The light never sits on its target."""
        offset = self.light_position - self.target
        return offset / np.linalg.norm(offset)

    @property
    def ray_direction(self) -> Vector3D:
        """Unit vector along which sunlight travels."""
        return -self.sun_direction


class SunDirectionProjector:
    """
    Turns an azimuth/altitude pair into a light placement in the Z-up world frame.

    Azimuth is measured clockwise from north (+Y) toward east (+X), so the light
    lands on the sun's side of the sky. With r = distance:
        horizontal = r * cos(altitude)
        x = horizontal * sin(azimuth)
        y = horizontal * cos(azimuth)
        z = r * sin(altitude)

    Equivalently, with a south-based azimuth a_s = azimuth - pi this is
    x = -horizontal * sin(a_s), y = -horizontal * cos(a_s).

    Negative altitudes are not special-cased; they give a light below the ground plane.
    The distance must be positive.
    """

    def __init__(self, frustum_half_size: float = DEFAULT_FRUSTUM_HALF_SIZE,
                 frustum_near: float = DEFAULT_FRUSTUM_NEAR, frustum_far: float = DEFAULT_FRUSTUM_FAR):
        self.shadow_frustum = ShadowFrustum.symmetric(frustum_half_size, frustum_near, frustum_far)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def light_position(self, sun_angle: SunAngle, distance: float = DEFAULT_LIGHT_DISTANCE) -> Vector3D:
        """
        Point on the sun's side of the sky, distance units from the origin.

        Raises:
            ValueError: If distance is not a positive number.
        """
        if not distance > 0:
            self.logger.error(f"Light distance must be positive, got {distance}.")
            raise ValueError(f"Light distance must be positive, got {distance}.")
        horizontal_radius = distance * math.cos(sun_angle.altitude)
        x = horizontal_radius * math.sin(sun_angle.azimuth)
        y = horizontal_radius * math.cos(sun_angle.azimuth)
        z = distance * math.sin(sun_angle.altitude)
        return vector3(x, y, z)

    def project(self, sun_angle: SunAngle, distance: float = DEFAULT_LIGHT_DISTANCE) -> SunProjection:
        position = self.light_position(sun_angle, distance)
        if not sun_angle.is_above_horizon:
            self.logger.debug(f"Sun below horizon (altitude {sun_angle.altitude_degrees:.2f} deg), "
                              f"light placed at {position}.")
        return SunProjection(light_position=position, shadow_frustum=self.shadow_frustum)


_default_projector = SunDirectionProjector()


def project_sun_direction(sun_angle: SunAngle, distance: float = DEFAULT_LIGHT_DISTANCE) -> SunProjection:
    return _default_projector.project(sun_angle, distance)
