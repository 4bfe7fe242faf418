"""Structured configuration objects for pools."""

from __future__ import annotations

import copy
from dataclasses import asdict, dataclass, fields
from typing import Any, Self

from resourcepool.constants import DEFAULT_ALLOW_ACTIVE, DEFAULT_AUTO_OPEN, DEFAULT_POOL_NAME
from resourcepool.exceptions import ConfigurationError

__all__: list[str] = ["PoolConfig"]


@dataclass(kw_only=True)
class PoolConfig:
    """A configuration for a resource pool."""

    allow_active: bool = DEFAULT_ALLOW_ACTIVE
    auto_open: bool = DEFAULT_AUTO_OPEN
    name: str = DEFAULT_POOL_NAME

    @classmethod
    def from_dict(cls, *, config_dict: dict[str, Any]) -> Self:
        """Create a configuration from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in config_dict.items() if key in known})

    def copy(self) -> Self:
        """Create a deep copy of the configuration."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return asdict(self)

    def update(self, **kwargs: Any) -> Self:
        """Create a new config with updated values."""
        new_config = self.copy()
        for key, value in kwargs.items():
            if not hasattr(new_config, key):
                raise ConfigurationError(f"Unknown configuration key: '{key}'", config_key=key)
            setattr(new_config, key, value)
        new_config.validate()
        return new_config

    def validate(self) -> None:
        """Validate the integrity and correctness of the configuration values."""
        for key in ("allow_active", "auto_open"):
            if not isinstance(getattr(self, key), bool):
                raise ConfigurationError(f"Invalid value for '{key}': must be a boolean", config_key=key)

        if not isinstance(self.name, str) or not self.name:
            raise ConfigurationError("Invalid value for 'name': cannot be empty", config_key="name")

    def __post_init__(self) -> None:
        """Validate the configuration after initialization."""
        self.validate()
