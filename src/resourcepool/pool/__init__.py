"""Lifecycle coordination for groups of resources."""

from .pool import Pool, create_pool

__all__: list[str] = ["Pool", "create_pool"]
