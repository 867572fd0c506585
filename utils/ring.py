# utils/ring.py
"""Helpers for the newest-first bounded sequences kept by the desk."""
from __future__ import annotations

from typing import Callable, Optional, Tuple, TypeVar

T = TypeVar("T")


def bounded_prepend(items: Tuple[T, ...], item: T, capacity: int) -> Tuple[T, ...]:
    """Return a new tuple with *item* first, dropping the oldest past *capacity*."""
    if capacity <= 0:
        raise ValueError("capacity must be positive")
    return (item,) + items[: capacity - 1]


def replace_first(
    items: Tuple[T, ...],
    match: Callable[[T], bool],
    transform: Callable[[T], T],
) -> Tuple[Tuple[T, ...], Optional[T]]:
    """Swap the first matching element for ``transform(element)``.

    Returns the new tuple and the replacement (``None`` when nothing matched,
    in which case the original tuple comes back untouched).
    """
    for idx, current in enumerate(items):
        if match(current):
            updated = transform(current)
            return items[:idx] + (updated,) + items[idx + 1 :], updated
    return items, None
