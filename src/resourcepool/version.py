"""Version information for the resourcepool package."""

from __future__ import annotations

__all__: list[str] = [
    "MAJOR",
    "MINOR",
    "PATCH",
    "__author__",
    "__description__",
    "__license__",
    "__version__",
    "__version_info__",
    "get_version",
    "get_version_info",
]

__version__ = "0.3.0"
__version_info__ = (0, 3, 0)
__author__ = "resourcepool contributors"
__license__ = "MIT"
__description__ = "An asyncio container coordinating the lifecycle of lazily-opened resources."

MAJOR, MINOR, PATCH = __version_info__


def get_version() -> str:
    """Return the version string."""
    return __version__


def get_version_info() -> tuple[int, int, int]:
    """Return the version tuple."""
    return __version_info__
