"""Batch Partition — pure grouping and correlation for eager association loading.

Invariants:
    - collect_keys() returns each distinct primary key once, in first-seen order
    - index_by_key() groups remote records by exact equality of the foreign key,
      keeping the remote API's result order inside each group
    - Records whose foreign key is missing or unhashable (a JSON list or object)
      are ignored: they match no local record
    - matches_for() never returns a shared list: callers may mutate what they get

Design Decisions:
    - Hash index over linear scan: O(R + M) partitioning instead of O(R * M)
    - Pure functions, no IO: the resolver owns the fetch, this module owns the math
"""

from collections.abc import Hashable, Iterable
from typing import Any

from remote_association.core.record_protocols import read_field


def collect_keys(records: Iterable[Any], primary_key: str) -> list[Any]:
    """Distinct primary-key values across records."""
    return list(dict.fromkeys(read_field(r, primary_key) for r in records))


def index_by_key(remote_records: Iterable[Any], foreign_key: str) -> dict[Hashable, list[Any]]:
    """Group remote records by their correlation value."""
    index: dict[Hashable, list[Any]] = {}
    for remote in remote_records:
        try:
            key = read_field(remote, foreign_key)
        except (AttributeError, KeyError):
            continue
        if not isinstance(key, Hashable):
            continue
        index.setdefault(key, []).append(remote)
    return index


def matches_for(index: dict[Hashable, list[Any]], key: Any) -> list[Any]:
    return list(index.get(key, ()))
