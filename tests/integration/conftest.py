"""
Configuration and fixtures for resourcepool integration tests.
"""

import itertools
from collections.abc import Callable, Iterator

import pytest

from resourcepool import Resource


class File(Resource):
    """A file-like resource that never touches the filesystem."""

    def __init__(self, filename: str, fd: int) -> None:
        super().__init__()
        self.filename = filename
        self.fd = fd


@pytest.fixture
def file_factory() -> Iterator[Callable[[str], File]]:
    """Provide a factory handing out files with unique descriptors."""
    descriptors = itertools.count(20)

    def factory(filename: str) -> File:
        return File(filename, next(descriptors))

    yield factory
