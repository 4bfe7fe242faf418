"""Unit tests for the resourcepool.types module."""

import pytest

from resourcepool import Pool, PoolConfig, Resource
from resourcepool.types import ActiveResource, ManagedResource, PoolState, ReadyResource, ResourceState


class TestEnumerations:

    @pytest.mark.parametrize(
        "member, expected_value",
        [
            (PoolState.IDLE, "idle"),
            (PoolState.OPENING, "opening"),
            (PoolState.OPENED, "opened"),
            (PoolState.CLOSING, "closing"),
            (PoolState.CLOSED, "closed"),
        ],
    )
    def test_pool_state(self, member: PoolState, expected_value: str) -> None:
        assert member.value == expected_value

    def test_resource_state_mirrors_pool_state(self) -> None:
        assert [state.value for state in ResourceState] == [state.value for state in PoolState]


class TestProtocols:

    def test_resource_conformance(self) -> None:
        resource = Resource()

        assert isinstance(resource, ManagedResource)
        assert isinstance(resource, ActiveResource)
        assert not isinstance(resource, ReadyResource)

    def test_pool_conformance(self) -> None:
        pool = Pool(config=PoolConfig(auto_open=False))

        assert isinstance(pool, ManagedResource)
        assert isinstance(pool, ReadyResource)

    def test_non_conforming_object(self) -> None:
        assert not isinstance(object(), ManagedResource)
