# sunshadow/config.py
"""
Scene configuration.

Defaults reproduce the stock viewer: Shanghai as the starting location, a light
10 units from the origin, a fixed +/-10 unit shadow camera, and a camera looking
down at the origin from the south-east with Z as its up axis. Any subset of the
fields can be overridden from a YAML file.
"""

import logging
import math
import yaml
from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class SceneConfig:
    """Tunable constants for sun placement, shadows, camera and materials."""
    # Starting location (Shanghai)
    default_latitude: float = 31.2304
    default_longitude: float = 121.4737

    # Sun light
    light_distance: float = 10.0
    light_intensity: float = 2.5
    ambient_intensity: float = 0.2
    sun_marker_radius: float = 0.3

    # Shadow camera, fixed and not fitted to the scene
    shadow_frustum_half_size: float = 10.0
    shadow_frustum_near: float = 0.5
    shadow_frustum_far: float = 50.0
    shadow_map_size: int = 2048
    shadow_bias: float = 0.0

    # Ground and view
    ground_size: float = 100.0
    camera_position: List[float] = field(default_factory=lambda: [10.0, -10.0, 10.0])
    camera_up: List[float] = field(default_factory=lambda: [0.0, 0.0, 1.0])
    camera_fov: float = 50.0
    max_polar_angle: float = math.pi / 2

    # Shape material
    material_color: str = "#B0B0B0"
    material_roughness: float = 0.7
    material_metalness: float = 0.1

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'SceneConfig':
        """
        Builds a config from a mapping, falling back to defaults for missing keys.

        Raises:
            ValueError: If the mapping holds a key that is not a config field.
        """
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown scene config key(s): {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Optional[str] = None) -> SceneConfig:
    """
    Loads a SceneConfig from a YAML file. With no path, returns the defaults.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the file holds unknown keys or is not a mapping.
    """
    if path is None:
        return SceneConfig()

    with open(path, 'r', encoding='utf-8') as config_file:
        raw = yaml.safe_load(config_file)
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Scene config '{path}' must contain a mapping, got {type(raw).__name__}.")
    config = SceneConfig.from_dict(raw)
    logger.info(f"Loaded scene config from {path}")
    return config
