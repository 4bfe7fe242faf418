"""Unit tests for the resourcepool.exceptions module."""

import pytest

from resourcepool import (
    ConfigurationError,
    PoolClosedError,
    PoolError,
    ResourceActiveError,
    ResourceClosedError,
    ResourceError,
)


class TestSubclassExceptions:

    @pytest.mark.parametrize(
        "exc, expected_category",
        [
            (ConfigurationError("Bad", config_key="name"), "configuration"),
            (PoolClosedError(), "pool_closed"),
            (ResourceActiveError(), "resource_active"),
            (ResourceClosedError(), "resource_closed"),
            (ResourceError("Broken"), "resource"),
        ],
    )
    def test_category_derivation(self, exc: PoolError, expected_category: str) -> None:
        assert exc.category == expected_category
        assert isinstance(exc, PoolError)

    def test_pool_closed_defaults(self) -> None:
        exc = PoolClosedError()

        assert str(exc) == "Pool is closed."
        assert repr(exc) == "PoolClosedError(message='Pool is closed.')"

    def test_pool_closed_with_name(self) -> None:
        exc = PoolClosedError(pool_name="files")

        data = exc.to_dict()

        assert data["type"] == "PoolClosedError"
        assert data["category"] == "pool_closed"
        assert data["pool_name"] == "files"
        assert "pool_name='files'" in repr(exc)

    def test_resource_active_attributes(self) -> None:
        exc = ResourceActiveError(actives=3)

        assert exc.message == "Resource is active."
        assert exc.to_dict()["actives"] == 3
        assert isinstance(exc, ResourceError)


class TestPoolErrorBase:

    def test_category_without_error_suffix(self) -> None:
        class CustomFault(PoolError):
            pass

        exc = CustomFault("Something failed")

        assert exc.category == "custom_fault"

    def test_initialization_defaults(self) -> None:
        exc = PoolError("Base error")

        assert exc.message == "Base error"
        assert exc.details == {}
        assert str(exc) == "Base error"
        assert exc.category == "pool"

    def test_repr_with_details(self) -> None:
        exc = PoolError("Msg", details={"info": "debug"})

        assert repr(exc) == "PoolError(message='Msg', details={'info': 'debug'})"

    def test_to_dict_structure(self) -> None:
        exc = PoolError("Base error")

        data = exc.to_dict()

        assert data == {"type": "PoolError", "category": "pool", "message": "Base error", "details": {}}
