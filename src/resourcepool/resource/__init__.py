"""Base resource handle used as the default pool factory."""

from .resource import Resource

__all__: list[str] = ["Resource"]
