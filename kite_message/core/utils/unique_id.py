"""Unique ids for builder entities (embeds, fields, components)."""

from __future__ import annotations

import itertools
import time
from collections.abc import Callable

IdFactory = Callable[[], int]

# Seeded from wall-clock millis so ids stay unique across saved drafts.
_counter = itertools.count(int(time.time() * 1000))


def get_unique_id() -> int:
    """Return the next process-wide unique id."""
    return next(_counter)


def sequential_ids(start: int = 1) -> IdFactory:
    """Deterministic id factory, handy for tests and fixtures.

    Example:
        >>> next_id = sequential_ids(10)
        >>> next_id(), next_id()
        (10, 11)
    """
    counter = itertools.count(start)
    return lambda: next(counter)
