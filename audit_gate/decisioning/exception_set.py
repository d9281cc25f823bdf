"""
Caller-supplied advisory exceptions.

An exception is an advisory ID that should not fail the build. The set
normalizes tokens to strings, drops duplicates, and keeps a stable numeric
display order for summary messages.
"""
from typing import Iterable, Iterator, List

from .numeric import numeric_id


class ExceptionSet:
    """Read-only set of excepted advisory IDs."""

    def __init__(self, tokens: Iterable = ()):
        unique = list(dict.fromkeys(str(token) for token in tokens))
        # sorted() is stable, so equal numeric values keep first-seen order
        self._ordered: List[str] = sorted(unique, key=numeric_id)
        self._ids = frozenset(self._ordered)

    def contains(self, advisory_id) -> bool:
        return str(advisory_id) in self._ids

    def all_ids(self) -> List[str]:
        """Exception IDs in ascending numeric order."""
        return list(self._ordered)

    def __contains__(self, advisory_id) -> bool:
        return self.contains(advisory_id)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        return f"ExceptionSet({self._ordered!r})"
