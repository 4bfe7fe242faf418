"""Wait-group primitive tracking in-flight asynchronous operations."""

from __future__ import annotations

import asyncio

from resourcepool.utils import get_logger

__all__: list[str] = ["Guard"]

logger = get_logger(name=__name__)


class Guard:
    """Count outstanding operations and signal when they have all settled.

    A guard may be shared by several pools. Their outstanding operations are
    then aggregated into a single readiness signal.
    """

    def __init__(self) -> None:
        """Initialize an idle guard."""
        self._count = 0
        self._settled: asyncio.Event | None = None

    @property
    def count(self) -> int:
        """Return the number of outstanding operations."""
        return self._count

    @property
    def is_settled(self) -> bool:
        """Return True if no operations are outstanding."""
        return self._count == 0

    def wait(self, n: int = 1) -> None:
        """Register `n` more outstanding operations."""
        if n <= 0:
            raise ValueError("'n' must be a strictly positive integer.")

        self._count += n
        if self._settled is not None:
            self._settled.clear()

    def done(self) -> None:
        """Mark one outstanding operation as settled."""
        if self._count == 0:
            raise RuntimeError("Guard.done() called more times than Guard.wait().")

        self._count -= 1
        if self._count == 0:
            logger.debug("Guard settled")
            if self._settled is not None:
                self._settled.set()

    async def ready(self) -> None:
        """Wait until the outstanding count reaches zero."""
        if self._settled is None:
            self._settled = asyncio.Event()
            if self._count == 0:
                self._settled.set()

        if self._count == 0:
            await asyncio.sleep(0)
            return

        await self._settled.wait()

    def __repr__(self) -> str:
        """Return a representation showing the outstanding count."""
        return f"{type(self).__name__}({self._count})"
