"""Numeric sort key shared by exception IDs and advisory IDs."""
import re


_LEADING_INTEGER = re.compile(r'\s*([+-]?\d+)')


def numeric_id(token: str) -> int:
    """
    Integer value of the leading digits of an ID.

    "1234" -> 1234, "42abc" -> 42, "GHSA-xxxx" -> 0. Tokens without leading
    digits all share the value 0 and keep their relative input order.
    """
    match = _LEADING_INTEGER.match(token)
    return int(match.group(1)) if match else 0
