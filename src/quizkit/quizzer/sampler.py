"""Random selection of the questions asked in one session."""

from __future__ import annotations

import random
from typing import Optional, Sequence, TypeVar

__all__ = ["SAMPLE_SIZE", "sample_questions"]

SAMPLE_SIZE = 50

T = TypeVar("T")


def sample_questions(
    bank: Sequence[T],
    size: int = SAMPLE_SIZE,
    *,
    rng: Optional[random.Random] = None,
) -> list[T]:
    """Return ``min(len(bank), size)`` distinct entries in random order.

    ``random.Random.sample`` performs a partial Fisher-Yates shuffle, so every
    ordering of every subset is equally likely. Pass ``rng`` for
    reproducible draws.
    """
    if size < 0:
        raise ValueError("size must be >= 0")
    rng = rng or random.Random()
    return rng.sample(list(bank), min(len(bank), size))
