"""Benchmark for querying a tree of pools."""

import re
from typing import Any

import pytest
from pytest_benchmark.fixture import BenchmarkFixture

from resourcepool import Pool, PoolConfig, Resource


class File(Resource):
    def __init__(self, filename: str, fd: int) -> None:
        super().__init__()
        self.filename = filename
        self.fd = fd


@pytest.fixture(scope="module")
def tree() -> Pool:
    config = PoolConfig(auto_open=False)
    root = Pool(config=config)
    fd = 0
    for branch in range(10):
        child = Pool(File, config=config)
        for index in range(100):
            fd += 1
            extension = "js" if index % 2 else "json"
            child.add(File(f"branch{branch}/file{index}.{extension}", fd), auto_open=False)
        root.add(child, auto_open=False)
    return root


@pytest.mark.parametrize(
    "where",
    [
        None,
        {"filename": "*.js"},
        {"filename": re.compile(r"file9\d\.json$")},
        {"fd": 500},
        {"fd": lambda fd, _: fd % 7 == 0},
    ],
    ids=["all", "glob", "regex", "literal", "predicate"],
)
def test_query(benchmark: BenchmarkFixture, tree: Pool, where: Any) -> None:
    results = benchmark(tree.query, where)

    assert results
    assert tree.size == 1010
