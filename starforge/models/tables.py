"""Helpers for the roll-keyed lookup tables used by every generator."""

from __future__ import annotations

from typing import Iterable, Mapping, TypeVar

from ..errors import DomainViolationError

T = TypeVar("T")


def expand_ranges(rows: Iterable[tuple[tuple[int, int], T]]) -> dict[int, T]:
    """Turn ``[((lo, hi), entry), ...]`` into a dict keyed by every roll in lo..hi."""
    table: dict[int, T] = {}
    for (low, high), entry in rows:
        for roll in range(low, high + 1):
            table[roll] = entry
    return table


def lookup_roll(table: Mapping[int, T], roll: int, table_name: str) -> T:
    """Fetch ``table[roll]``; a roll outside the table is a caller error."""
    try:
        return table[roll]
    except KeyError:
        raise DomainViolationError(
            f"Roll {roll} is outside the {table_name} table "
            f"({min(table)}-{max(table)})"
        ) from None


def lookup_code(table: Mapping[str, T], code: str, table_name: str) -> T:
    """Fetch a d66-keyed entry such as ``table["3-5"]``."""
    try:
        return table[code]
    except KeyError:
        raise DomainViolationError(f"Code {code!r} is not a valid {table_name} d66 key") from None


def midpoint(low: float, high: float) -> float:
    return (low + high) / 2
