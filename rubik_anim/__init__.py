"""Self-running 3x3 cube animation engine."""

from .config import ConfigError, EngineConfig, load_config
from .cubies import CubieSet, GridStateError
from .engine import CubeAnimationEngine, Frame
from .geometry import ROTATION_SEQUENCE, Face

__all__ = [
    "ConfigError",
    "CubeAnimationEngine",
    "CubieSet",
    "EngineConfig",
    "Face",
    "Frame",
    "GridStateError",
    "ROTATION_SEQUENCE",
    "load_config",
]
