"""
Ordering of classified advisories for human scanning.

Un-excepted production advisories come first, then everything else;
within each group IDs ascend numerically. The sort is stable, so advisories
with identical keys keep their input order.
"""
from typing import Iterable, List, Tuple

from .advisory import Advisory
from .numeric import numeric_id


def sort_key(advisory: Advisory) -> Tuple[int, int]:
    return (0 if advisory.is_failing else 1, numeric_id(advisory.id))


def sort_advisories(advisories: Iterable[Advisory]) -> List[Advisory]:
    return sorted(advisories, key=sort_key)
