"""Base implementation of a lazily-opened, closable resource."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Self

from resourcepool.exceptions import ResourceActiveError, ResourceClosedError, ResourceError
from resourcepool.types import ResourceState
from resourcepool.utils import get_logger

__all__: list[str] = ["Resource"]

logger = get_logger(name=__name__)

Hook = Callable[[], Awaitable[None]]


class Resource:
    """A resource handle with an idempotent open and a tolerant close.

    Subclasses implement `_open` and `_close`. Both are called at most once.
    Hooks passed to the constructor are used when a subclass does not
    override them.
    """

    def __init__(self, *, on_open: Hook | None = None, on_close: Hook | None = None) -> None:
        """Initialize the resource in the idle state."""
        self.actives = 0
        self.opened = False
        self.opening = False
        self.closed = False
        self.closing = False
        self._on_open = on_open
        self._on_close = on_close
        self._lock: asyncio.Lock | None = None
        self._close_task: asyncio.Task[None] | None = None

    @property
    def state(self) -> ResourceState:
        """Get the current lifecycle state of the resource."""
        if self.closed:
            return ResourceState.CLOSED
        if self.closing:
            return ResourceState.CLOSING
        if self.opened:
            return ResourceState.OPENED
        if self.opening:
            return ResourceState.OPENING
        return ResourceState.IDLE

    async def __aenter__(self) -> Self:
        """Enter async context, opening the resource."""
        await self.open()
        return self

    async def __aexit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        """Exit async context, closing the resource."""
        await self.close(allow_active=True)

    def active(self) -> None:
        """Mark one more active handle on the resource."""
        self.actives += 1

    def inactive(self) -> None:
        """Release one active handle on the resource."""
        if self.actives == 0:
            raise ResourceError("Resource has no active handles.", resource=self)
        self.actives -= 1

    async def open(self) -> None:
        """Open the resource, waiting for an in-flight open if there is one."""
        if self.closed or self.closing:
            raise ResourceClosedError(resource=self)
        if self.opened:
            return

        async with self._get_lock():
            if self.opened:
                return
            if self.closed or self.closing:
                raise ResourceClosedError(resource=self)

            self.opening = True
            try:
                await self._open()
            finally:
                self.opening = False
            self.opened = True
            logger.debug("Opened %r", self)

    async def close(self, *, allow_active: bool = False) -> None:
        """Close the resource, joining a close that is already in progress."""
        if self.closed:
            return

        if self._close_task is None:
            if self.actives > 0 and not allow_active:
                raise ResourceActiveError(resource=self, actives=self.actives)
            self.closing = True
            self._close_task = asyncio.create_task(self._run_close())

        await asyncio.shield(self._close_task)

    async def _open(self) -> None:
        """Perform the actual open. Subclasses may override this."""
        if self._on_open is not None:
            await self._on_open()

    async def _close(self) -> None:
        """Perform the actual close. Subclasses may override this."""
        if self._on_close is not None:
            await self._on_close()

    async def _run_close(self) -> None:
        """Close once any in-flight open has finished."""
        try:
            async with self._get_lock():
                if self.opened:
                    await self._close()
        except BaseException:
            self.closing = False
            self._close_task = None
            raise

        self.closing = False
        self.opened = False
        self.closed = True
        logger.debug("Closed %r", self)

    def _get_lock(self) -> asyncio.Lock:
        """Return the lock serializing open and close."""
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    def __repr__(self) -> str:
        """Return a representation showing the lifecycle state."""
        return f"<{type(self).__name__} state={self.state} actives={self.actives}>"
