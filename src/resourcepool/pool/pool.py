"""Coordinator tracking the lifecycle of a group of resources."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Self

from resourcepool.config import PoolConfig
from resourcepool.exceptions import PoolClosedError, ResourceError
from resourcepool.guard import Guard
from resourcepool.query import matches
from resourcepool.resource.resource import Resource
from resourcepool.types import Factory, ManagedResource, PoolState, ReadyResource, Where
from resourcepool.utils import format_duration, get_logger, get_timestamp

__all__: list[str] = ["Pool", "create_pool"]

logger = get_logger(name=__name__)

_OWNER_ATTRIBUTE = "_resourcepool_owner"
_POSITIONAL_KINDS = frozenset(
    {inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.VAR_POSITIONAL}
)


@dataclass(kw_only=True)
class _Membership:
    """Bookkeeping for one resource tracked by a pool."""

    resource: Any
    settled: bool = False
    released: bool = False


class Pool:
    """A container of resources that tracks their opening, closing and active state.

    Pools can be added to other pools. `list` and `query` then recurse into
    the child pool, and `size` and `actives` include its resources.
    """

    def __init__(
        self, factory: Factory | None = None, *, config: PoolConfig | None = None, guard: Guard | None = None
    ) -> None:
        """Initialize the pool and schedule its opening if configured."""
        self._config = config.copy() if config is not None else PoolConfig()
        self.factory: Factory = factory if factory is not None else Resource
        self.guard = guard if guard is not None else Guard()
        self.opened = False
        self.opening = False
        self.closed = False
        self.closing = False
        self._resources: dict[int, _Membership] = {}
        self._opening_task: asyncio.Task[None] | None = None
        self._open_tasks: set[asyncio.Task[None]] = set()
        self._stats = {
            "total_added": 0,
            "total_removed": 0,
            "total_open_failures": 0,
            "total_close_failures": 0,
            "max_concurrent": 0,
        }
        self._created_at = get_timestamp()

        if self._config.auto_open:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("No running loop; pool '%s' opens on first use", self.name)
            else:
                loop.call_soon(self._begin_open)

    @property
    def actives(self) -> int:
        """Return the number of active handles across all tracked resources."""
        return sum(getattr(member.resource, "actives", 0) or 0 for member in list(self._resources.values()))

    @property
    def allow_active(self) -> bool:
        """Return the default close policy for active resources."""
        return self._config.allow_active

    @property
    def config(self) -> PoolConfig:
        """Return a copy of the pool configuration."""
        return self._config.copy()

    @property
    def name(self) -> str:
        """Return the pool name used in logs and errors."""
        return self._config.name

    @property
    def size(self) -> int:
        """Return the number of tracked resources, including those of nested pools."""
        members = list(self._resources.values())
        return len(members) + sum(m.resource.size for m in members if isinstance(m.resource, Pool))

    @property
    def state(self) -> PoolState:
        """Get the current lifecycle state of the pool."""
        if self.closed:
            return PoolState.CLOSED
        if self.closing:
            return PoolState.CLOSING
        if self.opened:
            return PoolState.OPENED
        if self.opening:
            return PoolState.OPENING
        return PoolState.IDLE

    async def __aenter__(self) -> Self:
        """Enter async context, opening the pool."""
        await self.open()
        return self

    async def __aexit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        """Exit async context, closing the pool unless already closed."""
        if not (self.closed or self.closing):
            await self.close()

    def add(self, resource: Any, *, auto_open: bool = True) -> Any:
        """Add a resource to the pool and return it.

        The resource's `close` is replaced by a wrapper that removes it from
        the pool once the close settles. With `auto_open` the resource is
        opened in the background and dropped from the pool if that fails.
        Otherwise its `open` is wrapped so the caller can open it later with
        the same clean-up on failure.
        """
        self._ensure_not_closed()
        if not isinstance(resource, ManagedResource):
            raise TypeError(f"{type(resource).__name__} does not provide open() and close().")

        key = id(resource)
        member = self._resources.get(key)
        if member is not None and member.resource is resource:
            logger.debug("Resource %r already tracked by pool '%s'", resource, self.name)
            return resource
        if getattr(resource.close, _OWNER_ATTRIBUTE, None) is self:
            raise ResourceError("Resource was released by this pool and cannot be added again.", resource=resource)

        loop = asyncio.get_running_loop() if auto_open else None

        member = _Membership(resource=resource)
        native_open = resource.open
        self.guard.wait()
        self._resources[key] = member
        self._stats["total_added"] += 1
        self._stats["max_concurrent"] = max(self._stats["max_concurrent"], len(self._resources))
        self._wrap_close(member)

        if loop is not None:
            task = loop.create_task(self._open_member(member, native_open))
            self._open_tasks.add(task)
            task.add_done_callback(self._open_tasks.discard)
        else:
            self._wrap_open(member, native_open)

        logger.debug("Added %r to pool '%s' (total: %d)", resource, self.name, len(self._resources))
        return resource

    def get_stats(self) -> dict[str, Any]:
        """Get statistics about the pool and its resources."""
        stats: dict[str, Any] = dict(self._stats)
        stats["current_count"] = len(self._resources)
        stats["size"] = self.size
        stats["actives"] = self.actives
        stats["pending_opens"] = sum(1 for m in self._resources.values() if not m.settled)
        stats["state"] = self.state.value
        stats["uptime"] = get_timestamp() - self._created_at
        return stats

    def list(self, *, include_closed: bool = False) -> list[Any]:
        """Return the tracked resources, skipping closed or closing ones by default."""
        self._ensure_not_closed()

        resources = [member.resource for member in self._resources.values()]
        if include_closed:
            return resources
        return [r for r in resources if not getattr(r, "closed", False) and not getattr(r, "closing", False)]

    def query(self, where: Where | None = None, *, include_closed: bool = False) -> list[Any]:
        """Return the leaf resources matching every key of `where`.

        Nested pools are replaced by their own query results, so the result
        never contains a pool. Each resource appears at most once.
        """
        self._ensure_not_closed()

        clause = dict(where or {})
        found: dict[int, Any] = {}
        for item in self.list(include_closed=include_closed):
            candidates = item.query(clause, include_closed=include_closed) if isinstance(item, Pool) else [item]
            for candidate in candidates:
                if id(candidate) not in found and matches(clause, candidate):
                    found[id(candidate)] = candidate
        return list(found.values())

    def resource(self, *args: Any, **kwargs: Any) -> Any:
        """Create a resource with the pool factory and add it to the pool."""
        self._ensure_not_closed()
        return self.add(self.factory(*args, **kwargs))

    async def close(self, allow_active: bool | None = None) -> None:
        """Close the pool and every tracked resource concurrently.

        Every resource close is attempted. If any of them fail, the first
        error is raised once all of them have settled.
        """
        if self.closed or self.closing:
            await asyncio.sleep(0)
            raise PoolClosedError(pool_name=self.name)

        policy = self.allow_active if allow_active is None else allow_active
        started_at = get_timestamp()
        self.closing = True
        self.opened = False
        self.opening = False

        members = [member.resource for member in self._resources.values()]
        logger.info("Closing pool '%s' with %d resources", self.name, len(members))

        results = await asyncio.gather(
            *(resource.close(allow_active=policy) for resource in members), return_exceptions=True
        )
        if not members:
            await asyncio.sleep(0)
        errors = [result for result in results if isinstance(result, BaseException)]
        for resource, result in zip(members, results):
            if isinstance(result, BaseException):
                self._stats["total_close_failures"] += 1
                logger.error("Failed to close %r in pool '%s': %s", resource, self.name, result, exc_info=result)

        self.closing = False
        self.closed = True
        if self._opening_task is not None and not self._opening_task.done() and self.guard.count:
            self._opening_task.cancel()
        logger.info(
            "Pool '%s' closed in %s (%d errors)",
            self.name,
            format_duration(seconds=get_timestamp() - started_at),
            len(errors),
        )

        if errors:
            raise errors[0]

    async def open(self) -> None:
        """Open the pool, waiting until every pending resource open has settled."""
        if self.closed or self.closing:
            await asyncio.sleep(0)
            raise PoolClosedError(pool_name=self.name)
        if self.opened:
            await asyncio.sleep(0)
            return

        opening_task = self._begin_open()
        if opening_task is None:
            return
        try:
            await asyncio.shield(opening_task)
        except asyncio.CancelledError:
            # the opening pass is cancelled only when the pool closes under it
            if opening_task.cancelled() and self.closed:
                raise PoolClosedError(pool_name=self.name) from None
            raise

    async def ready(self) -> None:
        """Wait for every resource exposing `ready` and then for the guard.

        The first error raised by a resource is re-raised once all of them
        have settled.
        """
        if self.closed or self.closing:
            await asyncio.sleep(0)
            raise PoolClosedError(pool_name=self.name)

        pending = [resource.ready() for resource in self.list() if isinstance(resource, ReadyResource)]
        results = await asyncio.gather(*pending, return_exceptions=True)
        await self.guard.ready()

        for result in results:
            if isinstance(result, BaseException):
                raise result

    def _begin_open(self) -> asyncio.Task[None] | None:
        """Start the single opening pass unless it is running or not needed."""
        if self.closed or self.closing or self.opened:
            return None
        if self._opening_task is None:
            self.opening = True
            self._opening_task = asyncio.get_running_loop().create_task(self._settle_open())
        return self._opening_task

    def _ensure_not_closed(self) -> None:
        """Raise if the pool is closed or closing."""
        if self.closed or self.closing:
            raise PoolClosedError(pool_name=self.name)

    async def _open_member(self, member: _Membership, native_open: Callable[[], Awaitable[None]]) -> None:
        """Open a resource in the background, dropping it on failure."""
        try:
            await native_open()
        except Exception as e:
            self._stats["total_open_failures"] += 1
            self._release(member)
            logger.warning("Failed to open %r in pool '%s': %s", member.resource, self.name, e, exc_info=True)
        finally:
            self._settle(member)

    def _release(self, member: _Membership) -> None:
        """Remove a resource from the pool exactly once."""
        if member.released:
            return

        member.released = True
        key = id(member.resource)
        if self._resources.get(key) is member:
            del self._resources[key]
            self._stats["total_removed"] += 1
            logger.debug("Removed %r from pool '%s' (total: %d)", member.resource, self.name, len(self._resources))

    def _settle(self, member: _Membership) -> None:
        """Tell the guard that a resource's open has settled, exactly once."""
        if member.settled:
            return

        member.settled = True
        self.guard.done()

    async def _settle_open(self) -> None:
        """Mark the pool opened once the guard settles."""
        await self.guard.ready()
        self.opening = False
        if not (self.closed or self.closing):
            self.opened = True
            logger.info("Pool '%s' opened with %d resources", self.name, len(self._resources))

    def _wrap_close(self, member: _Membership) -> None:
        """Replace the resource's close with one that releases it from the pool."""
        resource = member.resource
        native_close = resource.close
        call_native = _policy_caller(native_close)
        default_allow_active = self.allow_active

        async def close(allow_active: bool | None = None) -> None:
            policy = default_allow_active if allow_active is None else allow_active
            try:
                await call_native(policy)
            finally:
                self._release(member)
                self._settle(member)

        setattr(close, _OWNER_ATTRIBUTE, self)
        resource.close = close

    def _wrap_open(self, member: _Membership, native_open: Callable[[], Awaitable[None]]) -> None:
        """Replace the resource's open with one that drops it from the pool on failure."""

        async def open() -> None:
            try:
                await native_open()
            except Exception:
                self._stats["total_open_failures"] += 1
                self._release(member)
                raise
            finally:
                self._settle(member)

        member.resource.open = open

    def __contains__(self, resource: object) -> bool:
        """Return True if the resource is directly tracked by this pool."""
        member = self._resources.get(id(resource))
        return member is not None and member.resource is resource

    def __len__(self) -> int:
        """Return the number of directly tracked resources."""
        return len(self._resources)

    def __repr__(self) -> str:
        """Return a representation showing name, state and size."""
        return f"<{type(self).__name__} name={self.name!r} state={self.state} size={self.size}>"


def create_pool(factory: Factory | None = None, **kwargs: Any) -> Pool:
    """Create a pool, accepting configuration fields as keyword arguments."""
    guard: Guard | None = kwargs.pop("guard", None)
    config: PoolConfig | None = kwargs.pop("config", None)
    if kwargs:
        config = (config or PoolConfig()).update(**kwargs)
    return Pool(factory, config=config, guard=guard)


def _policy_caller(native_close: Callable[..., Awaitable[None]]) -> Callable[[bool], Awaitable[None]]:
    """Adapt a close callable to the number of arguments it accepts."""
    try:
        parameters = inspect.signature(native_close).parameters.values()
    except (TypeError, ValueError):
        return lambda policy: native_close(allow_active=policy)

    kinds = {p.kind for p in parameters}
    names = {p.name for p in parameters}
    if "allow_active" in names or inspect.Parameter.VAR_KEYWORD in kinds:
        return lambda policy: native_close(allow_active=policy)
    if kinds & _POSITIONAL_KINDS:
        return lambda policy: native_close(policy)
    return lambda policy: native_close()
