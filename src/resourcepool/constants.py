"""Default values shared across the package."""

from __future__ import annotations

from typing import Final

__all__: list[str] = [
    "DEFAULT_ALLOW_ACTIVE",
    "DEFAULT_AUTO_OPEN",
    "DEFAULT_POOL_NAME",
    "GLOB_WORD_CHARACTERS",
    "POOL_CLOSED_MESSAGE",
]

DEFAULT_ALLOW_ACTIVE: Final[bool] = False
DEFAULT_AUTO_OPEN: Final[bool] = True
DEFAULT_POOL_NAME: Final[str] = "pool"

GLOB_WORD_CHARACTERS: Final[str] = "a-zA-Z0-9|_%@"
POOL_CLOSED_MESSAGE: Final[str] = "Pool is closed."
