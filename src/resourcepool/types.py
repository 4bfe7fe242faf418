"""Core data types and interface protocols for the library."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any, Protocol, TypeAlias, runtime_checkable

__all__: list[str] = [
    "ActiveResource",
    "Factory",
    "ManagedResource",
    "Matcher",
    "PoolState",
    "Predicate",
    "ReadyResource",
    "ResourceState",
    "Timestamp",
    "Where",
]


Predicate: TypeAlias = Callable[[Any, Any], bool]
Matcher: TypeAlias = str | re.Pattern[str] | Predicate | object
Where: TypeAlias = Mapping[str, Matcher]
Factory: TypeAlias = Callable[..., Any]
Timestamp: TypeAlias = float


@runtime_checkable
class ManagedResource(Protocol):
    """A protocol for anything a pool can open and close."""

    async def open(self) -> None:
        """Open the resource."""
        ...

    async def close(self, *, allow_active: bool = False) -> None:
        """Close the resource."""
        ...


@runtime_checkable
class ReadyResource(Protocol):
    """A protocol for resources that can report readiness."""

    async def ready(self) -> None:
        """Wait until the resource is ready."""
        ...


@runtime_checkable
class ActiveResource(Protocol):
    """A protocol for resources tracking an active handle count."""

    actives: int

    def active(self) -> None:
        """Mark one more active handle."""
        ...

    def inactive(self) -> None:
        """Release one active handle."""
        ...


class PoolState(StrEnum):
    """Enumeration of pool lifecycle states."""

    IDLE = "idle"
    OPENING = "opening"
    OPENED = "opened"
    CLOSING = "closing"
    CLOSED = "closed"


class ResourceState(StrEnum):
    """Enumeration of base resource lifecycle states."""

    IDLE = "idle"
    OPENING = "opening"
    OPENED = "opened"
    CLOSING = "closing"
    CLOSED = "closed"
