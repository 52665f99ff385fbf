"""Shuffled, repetition-padded image sequence for filling the grid."""

from __future__ import annotations

import math
import random
from typing import Sequence, TypeVar

from infinigrid.engine.errors import EmptyCatalogError

T = TypeVar('T')


def shuffled(items: Sequence[T], rng: random.Random) -> list[T]:
    """Return a Fisher-Yates permutation of `items` (input is not modified)."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def build_pool(
    catalog: Sequence[T],
    min_length: int,
    rng: random.Random | None = None,
    *,
    avoid_seam_repeats: bool = False,
) -> list[T]:
    """
    Build an image pool at least `min_length` long.

    The pool is a concatenation of independent permutations of the catalog, so
    each segment of `len(catalog)` entries holds every image exactly once.
    Neighbouring segments may still repeat an image across the seam unless
    `avoid_seam_repeats` is set, which swaps the first image of a segment away
    when it equals the last image of the previous one.

    Raises:
        EmptyCatalogError: if the catalog has no images.
    """
    if not catalog:
        raise EmptyCatalogError()
    if min_length <= 0:
        return []

    rng = rng if rng is not None else random.Random()
    repetitions = math.ceil(min_length / len(catalog))

    pool: list[T] = []
    for _ in range(repetitions):
        segment = shuffled(catalog, rng)
        if avoid_seam_repeats and pool and len(segment) > 1 and segment[0] == pool[-1]:
            swap_with = rng.randint(1, len(segment) - 1)
            segment[0], segment[swap_with] = segment[swap_with], segment[0]
        pool.extend(segment)
    return pool
