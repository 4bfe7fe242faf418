"""Exception hierarchy for pool and resource errors."""

from __future__ import annotations

import re
from typing import Any

from resourcepool.constants import POOL_CLOSED_MESSAGE

__all__: list[str] = [
    "ConfigurationError",
    "PoolClosedError",
    "PoolError",
    "ResourceActiveError",
    "ResourceClosedError",
    "ResourceError",
]

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class PoolError(Exception):
    """Base exception for all errors raised by this package."""

    _base_attributes = frozenset({"message", "details"})

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base pool error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def category(self) -> str:
        """Return a snake_case category derived from the class name."""
        name = type(self).__name__
        if name.endswith("Error") and name != "Error":
            name = name[: -len("Error")]
        return _CAMEL_BOUNDARY.sub("_", name).lower()

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception to a dictionary for serialization."""
        data: dict[str, Any] = {
            "type": type(self).__name__,
            "category": self.category,
            "message": self.message,
            "details": self.details,
        }
        data.update(self._extra_attributes())
        return data

    def _extra_attributes(self) -> dict[str, Any]:
        """Collect subclass-specific attributes."""
        return {
            key: value
            for key, value in vars(self).items()
            if key not in self._base_attributes and not key.startswith("_") and value is not None
        }

    def __repr__(self) -> str:
        """Return a representation listing every populated attribute."""
        parts = [f"message={self.message!r}"]
        if self.details:
            parts.append(f"details={self.details!r}")
        parts.extend(f"{key}={value!r}" for key, value in self._extra_attributes().items())
        return f"{type(self).__name__}({', '.join(parts)})"

    def __str__(self) -> str:
        """Return the human-readable message."""
        return self.message


class ConfigurationError(PoolError):
    """Raised when a pool configuration is invalid."""

    def __init__(self, message: str, *, config_key: str | None = None, **kwargs: Any) -> None:
        """Initialize the configuration error."""
        super().__init__(message, **kwargs)
        self.config_key = config_key


class PoolClosedError(PoolError):
    """Raised when a closed or closing pool is used."""

    def __init__(self, message: str = POOL_CLOSED_MESSAGE, *, pool_name: str | None = None, **kwargs: Any) -> None:
        """Initialize the pool closed error."""
        super().__init__(message, **kwargs)
        self.pool_name = pool_name


class ResourceError(PoolError):
    """Raised for errors concerning an individual resource."""

    def __init__(self, message: str, *, resource: Any = None, **kwargs: Any) -> None:
        """Initialize the resource error."""
        super().__init__(message, **kwargs)
        self.resource = resource


class ResourceActiveError(ResourceError):
    """Raised when closing a resource that is still active."""

    def __init__(self, message: str = "Resource is active.", *, actives: int | None = None, **kwargs: Any) -> None:
        """Initialize the resource active error."""
        super().__init__(message, **kwargs)
        self.actives = actives


class ResourceClosedError(ResourceError):
    """Raised when opening a resource that has already been closed."""

    def __init__(self, message: str = "Resource is closed.", **kwargs: Any) -> None:
        """Initialize the resource closed error."""
        super().__init__(message, **kwargs)
