"""An asyncio container coordinating the lifecycle of lazily-opened resources."""

from .config import PoolConfig
from .exceptions import (
    ConfigurationError,
    PoolClosedError,
    PoolError,
    ResourceActiveError,
    ResourceClosedError,
    ResourceError,
)
from .guard import Guard
from .pool import Pool, create_pool
from .query import compile_glob, translate_glob
from .resource import Resource
from .types import ManagedResource, PoolState, ResourceState
from .version import __version__

__all__: list[str] = [
    "ConfigurationError",
    "Guard",
    "ManagedResource",
    "Pool",
    "PoolClosedError",
    "PoolConfig",
    "PoolError",
    "PoolState",
    "Resource",
    "ResourceActiveError",
    "ResourceClosedError",
    "ResourceError",
    "ResourceState",
    "__version__",
    "compile_glob",
    "create_pool",
    "translate_glob",
]
