"""Matching of resources against `where` clauses."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any

from resourcepool.constants import GLOB_WORD_CHARACTERS
from resourcepool.types import Matcher, Where

__all__: list[str] = ["compile_glob", "matches", "matches_key", "translate_glob"]

_LEADING_STAR = re.compile(r"^\*")
_WORD_STAR = re.compile(rf"([{GLOB_WORD_CHARACTERS}]+)\*")
_SLASH_STAR = re.compile(r"/\*")
_BACKSLASHES = re.compile(r"\\+")

_MISSING = object()


def translate_glob(pattern: str) -> str:
    """Translate a wildcard pattern into regular expression source.

    The rewrites are applied in order: a leading `*`, a `*` following a run of
    word characters, `/*`, and any run of backslashes all become `.*`. The rest
    of the pattern is kept as regular expression syntax.
    """
    source = _LEADING_STAR.sub(".*", pattern)
    source = _WORD_STAR.sub(r"\1.*", source)
    source = _SLASH_STAR.sub(".*", source)
    return _BACKSLASHES.sub(".*", source)


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a wildcard pattern into an anchored regular expression."""
    return re.compile(rf"^(?:{translate_glob(pattern)})$")


def matches(where: Where | None, resource: Any) -> bool:
    """Return True if the resource satisfies every key of the clause."""
    if not where:
        return True
    return all(matches_key(matcher, getattr(resource, key, _MISSING), resource) for key, matcher in where.items())


def matches_key(matcher: Matcher, value: Any, resource: Any) -> bool:
    """Check a single attribute value against a matcher."""
    if value is _MISSING:
        value = None

    if isinstance(matcher, (str, re.Pattern)) and value is not None:
        pattern = compile_glob(matcher) if isinstance(matcher, str) else matcher
        if pattern.search(str(value)):
            return True

    if matcher is value or _strict_equals(matcher, value):
        return True

    if callable(matcher) and not isinstance(matcher, re.Pattern):
        return matcher(value, resource) is True

    return False


def _strict_equals(left: Any, right: Any) -> bool:
    # bool never equals a number; int and float compare by value
    if type(left) in (int, float) and type(right) in (int, float):
        return left == right
    return type(left) is type(right) and left == right
