# sunshadow/app/simulator_state.py
"""
Composition layer of the simulator.

SimulatorState owns the editable state: the current GeoTime, the SunAngle derived
from it, the shapes and the selection. Edits arrive one at a time from the UI event
loop and each is applied completely before returning. The sun angle is recomputed
inside the same call that changes the GeoTime, so it always matches it.

The input boundary lives here too. Latitude, longitude, date and time edits are
parsed and range-checked; a rejected edit logs a warning, returns False and leaves
the previous value in place.
"""

import logging
import math
import uuid
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional, Union

from sunshadow.config import SceneConfig
from sunshadow.core.common_types import GeoTime, SunAngle
from sunshadow.models.model_definitions import Shape, ShapeType, create_default_shape
from sunshadow.models.shape_collection import ShapeCollection
from sunshadow.scene.scene_composer import SceneFrame, compose_frame
from sunshadow.sun.sun_position import SunPositionResolver
from sunshadow.sun.sun_projector import SunDirectionProjector

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)
HOURS_RANGE = (0, 23)
MINUTES_RANGE = (0, 59)


def parse_bounded_float(value: Any, lower: float, upper: float) -> Optional[float]:
    """Parses a number or numeric string. Returns None if unparsable, NaN or outside [lower, upper]."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(parsed) or not lower <= parsed <= upper:
        return None
    return parsed


def parse_bounded_int(value: Any, lower: int, upper: int) -> Optional[int]:
    """Parses an integer, truncating fractional input. Returns None if unparsable or outside [lower, upper]."""
    try:
        parsed = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    if not lower <= parsed <= upper:
        return None
    return parsed


def parse_date(value: Union[date, datetime, str]) -> Optional[datetime]:
    """Accepts a date, datetime or ISO 8601 string. Returns None if it cannot be read as a date."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


class SimulatorState:
    def __init__(self, config: Optional[SceneConfig] = None, resolver: Optional[SunPositionResolver] = None,
                 now: Optional[Callable[[], datetime]] = None,
                 id_factory: Optional[Callable[[], str]] = None):
        self.config = config or SceneConfig()
        self.resolver = resolver or SunPositionResolver()
        self.projector = SunDirectionProjector(self.config.shadow_frustum_half_size,
                                               self.config.shadow_frustum_near,
                                               self.config.shadow_frustum_far)
        self.shapes = ShapeCollection()
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        start = now() if now is not None else datetime.now(timezone.utc)
        self._geotime = GeoTime(date=start, latitude=self.config.default_latitude,
                                longitude=self.config.default_longitude)
        self._sun_angle = self.resolver.resolve_geotime(self._geotime)
        self.logger.info(f"Simulator initialised at {self._geotime}.")

    @property
    def geotime(self) -> GeoTime:
        return self._geotime

    @property
    def sun_angle(self) -> SunAngle:
        return self._sun_angle

    def _apply_geotime(self, geotime: GeoTime) -> None:
        # Resolve first so a failing ephemeris leaves both values as they were
        sun_angle = self.resolver.resolve_geotime(geotime)
        self._geotime = geotime
        self._sun_angle = sun_angle

    # --- Time and place edits ---

    def set_latitude(self, value: Any) -> bool:
        latitude = parse_bounded_float(value, *LATITUDE_RANGE)
        if latitude is None:
            self.logger.warning(f"Rejected latitude {value!r}, keeping {self._geotime.latitude}.")
            return False
        self._apply_geotime(replace(self._geotime, latitude=latitude))
        return True

    def set_longitude(self, value: Any) -> bool:
        longitude = parse_bounded_float(value, *LONGITUDE_RANGE)
        if longitude is None:
            self.logger.warning(f"Rejected longitude {value!r}, keeping {self._geotime.longitude}.")
            return False
        self._apply_geotime(replace(self._geotime, longitude=longitude))
        return True

    def set_date(self, value: Union[date, datetime, str]) -> bool:
        """Changes the calendar day, keeping the current hour and minute."""
        new_date = parse_date(value)
        if new_date is None:
            self.logger.warning(f"Rejected date {value!r}, keeping {self._geotime.date.isoformat()}.")
            return False
        current = self._geotime.date
        new_date = new_date.replace(hour=current.hour, minute=current.minute)
        if new_date.tzinfo is None:
            new_date = new_date.replace(tzinfo=current.tzinfo)
        self._apply_geotime(replace(self._geotime, date=new_date))
        return True

    def set_time(self, hours: Any, minutes: Any) -> bool:
        """Changes the hour and minute of the current day."""
        parsed_hours = parse_bounded_int(hours, *HOURS_RANGE)
        parsed_minutes = parse_bounded_int(minutes, *MINUTES_RANGE)
        if parsed_hours is None or parsed_minutes is None:
            self.logger.warning(f"Rejected time {hours!r}:{minutes!r}, keeping {self._geotime.date.time()}.")
            return False
        new_date = self._geotime.date.replace(hour=parsed_hours, minute=parsed_minutes)
        self._apply_geotime(replace(self._geotime, date=new_date))
        return True

    # --- Shape edits ---

    def add_shape(self, shape_type: Union[ShapeType, str]) -> Shape:
        """Creates a default shape with a fresh id, appends it and selects it."""
        shape = self.shapes.add(create_default_shape(shape_type, self._id_factory()))
        self.shapes.select(shape.id)
        return shape

    def update_shape(self, shape_id: str, **changes) -> Shape:
        return self.shapes.update(shape_id, **changes)

    def update_shape_vector(self, shape_id: str, vector_name: str, axis: str, value: float) -> Shape:
        return self.shapes.update_vector(shape_id, vector_name, axis, value)

    def delete_shape(self, shape_id: str) -> Optional[Shape]:
        return self.shapes.remove(shape_id)

    def select_shape(self, shape_id: Optional[str]) -> None:
        self.shapes.select(shape_id)

    @property
    def selected_shape_id(self) -> Optional[str]:
        return self.shapes.selected_id

    def compose_frame(self) -> SceneFrame:
        return compose_frame(self._sun_angle, self.shapes, self.config, self.projector)
