"""
Task Selection Rules - pure helpers for composing the daily bundle.

AICODE-NOTE: Pure functions without DB access.
The selection use-case fetches candidates through task_repo and uses these
helpers to pick from them.
"""

import random
from collections.abc import Iterable, Mapping, Sequence
from typing import Literal, Protocol, TypeVar

SelectionSource = Literal["interest_based", "random", "trending", "challenge"]

# Composition order and quota per source (sums to 5)
SELECTION_PLAN: tuple[tuple[SelectionSource, int], ...] = (
    ("interest_based", 2),
    ("random", 1),
    ("trending", 1),
    ("challenge", 1),
)

TRENDING_WINDOW_DAYS = 7


class Identified(Protocol):
    id: int


class Ranked(Identified, Protocol):
    completion_count: int


T = TypeVar("T", bound=Identified)
R = TypeVar("R", bound=Ranked)


def without_excluded(candidates: Iterable[T], exclude_ids: set[int]) -> list[T]:
    """Drop excluded ids and duplicate ids, keeping first occurrence."""
    seen: set[int] = set(exclude_ids)
    result: list[T] = []
    for item in candidates:
        if item.id in seen:
            continue
        seen.add(item.id)
        result.append(item)
    return result


def pick_random(
    candidates: Sequence[T],
    count: int,
    exclude_ids: set[int],
    rng: random.Random | None = None,
) -> list[T]:
    """
    Uniformly pick up to `count` distinct candidates not in `exclude_ids`.

    random.sample draws an unbiased random permutation prefix.
    """
    if count <= 0:
        return []
    pool = without_excluded(candidates, exclude_ids)
    return (rng or random).sample(pool, min(count, len(pool)))


def has_tag_overlap(tags: Iterable[str], interests: Iterable[str]) -> bool:
    return not set(tags).isdisjoint(interests)


def rank_trending(
    candidates: Sequence[R],
    window_counts: Mapping[int, int],
    exclude_ids: set[int],
) -> list[R]:
    """
    Rank by completions in the trending window, lifetime count breaks ties.

    Only tasks that have window completions are ranked. When none of them is
    eligible the whole pool is ranked by lifetime completion_count instead.
    """
    pool = without_excluded(candidates, exclude_ids)
    trending = [task for task in pool if window_counts.get(task.id, 0) > 0]
    if trending:
        return sorted(
            trending,
            key=lambda task: (window_counts[task.id], task.completion_count),
            reverse=True,
        )
    return sorted(pool, key=lambda task: task.completion_count, reverse=True)
