#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/collection.py
# [PROJECT] ChannelLedger
# [ROLE] Keying, grouping, stable ordering and dedupe helpers
# [VERSION] v1.0
# [UPDATED] 2026-10-19
# ==============================================================================

from typing import Callable, Dict, Hashable, Iterable, List, Sequence, TypeVar

T = TypeVar("T")


def key_by(items: Iterable[T], key: Callable[[T], Hashable]) -> Dict[Hashable, T]:
    """Map key -> item. On repeated keys the last item wins."""
    return {key(item): item for item in items}


def group_by(items: Iterable[T], key: Callable[[T], Hashable]) -> Dict[Hashable, List[T]]:
    """Map key -> items, groups in first-seen order, items in input order."""
    groups: Dict[Hashable, List[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


def _missing_last(value):
    # None and "" sort after every real value
    return (value is None or value == "", value if value is not None else "")


def order_by(items: Iterable[T], keys: Sequence[Callable[[T], object]]) -> List[T]:
    """
    Sort ascending by each key in turn.

    The sort is stable: items with equal keys keep their input order.
    Missing values (None or empty string) sort after present ones, for
    every key position.
    """
    return sorted(items, key=lambda item: tuple(_missing_last(k(item)) for k in keys))


def uniq_by(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """Drop items whose key was already seen, keeping the first occurrence."""
    seen = set()
    out: List[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        out.append(item)
    return out
