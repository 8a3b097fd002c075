"""Engine configuration and YAML loading."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .geometry import SIGN_CONVENTIONS


class ConfigError(ValueError):
    """Raised when an engine configuration is invalid."""


@dataclass
class EngineConfig:
    unit_size: float = 1.0
    gap: float = 1e-5
    epsilon: float = 1e-9
    rotation_duration: float = 0.85  # seconds per quarter turn
    rotation_pause: float = 1.0
    sequence_pause: float = 1.0
    start_delay: float = 0.0
    overshoot: bool = False
    overshoot_degrees: float = 3.0
    overshoot_duration: float | None = None  # falls back to rotation_duration
    spin_speed: float = 0.05  # rad/s around Y, half of it around X
    sign_convention: str = "uniform"
    snap_positions: bool = True

    @property
    def spacing(self) -> float:
        return self.unit_size + self.gap

    @property
    def overshoot_phase_duration(self) -> float:
        return self.rotation_duration if self.overshoot_duration is None else self.overshoot_duration

    def validate(self) -> "EngineConfig":
        if self.unit_size <= 0:
            raise ConfigError("unit_size must be positive")
        if self.gap < 0 or self.gap >= self.unit_size:
            raise ConfigError("gap must be non-negative and smaller than unit_size")
        if not 0 < self.epsilon < 0.5:
            raise ConfigError("epsilon must be positive and below 0.5")
        for name in ("overshoot", "snap_positions"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be true or false")
        if self.rotation_duration <= 0:
            raise ConfigError("rotation_duration must be positive")
        if self.overshoot_duration is not None and self.overshoot_duration <= 0:
            raise ConfigError("overshoot_duration must be positive or null")
        for name in ("rotation_pause", "sequence_pause", "start_delay", "spin_speed", "overshoot_degrees"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be non-negative")
        if self.sign_convention not in SIGN_CONVENTIONS:
            allowed = ", ".join(sorted(SIGN_CONVENTIONS))
            raise ConfigError(f"sign_convention must be one of: {allowed}")
        return self

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def config_from_dict(data: dict[str, Any] | None) -> EngineConfig:
    data = dict(data or {})
    known = {f.name for f in fields(EngineConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
    try:
        return EngineConfig(**data).validate()
    except TypeError as exc:
        raise ConfigError(f"Invalid config value: {exc}") from exc


def load_config(path: str | Path) -> EngineConfig:
    """Load a YAML config file. An empty file yields the defaults."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping")
    return config_from_dict(data)
