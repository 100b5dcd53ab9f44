import random
from dataclasses import dataclass

from dailyfive.core.domain.selection_rules import (
    SELECTION_PLAN,
    has_tag_overlap,
    pick_random,
    rank_trending,
    without_excluded,
)


@dataclass
class FakeTask:
    id: int
    completion_count: int = 0


def test_plan_sums_to_five() -> None:
    assert sum(quota for _, quota in SELECTION_PLAN) == 5
    assert [source for source, _ in SELECTION_PLAN] == [
        "interest_based",
        "random",
        "trending",
        "challenge",
    ]


def test_without_excluded_drops_duplicates() -> None:
    tasks = [FakeTask(1), FakeTask(2), FakeTask(1), FakeTask(3)]

    assert [t.id for t in without_excluded(tasks, {3})] == [1, 2]


def test_pick_random_respects_exclusion_and_count() -> None:
    tasks = [FakeTask(i) for i in range(1, 11)]
    rng = random.Random(7)

    picked = pick_random(tasks, 3, {1, 2, 3}, rng)

    assert len(picked) == 3
    assert len({t.id for t in picked}) == 3
    assert not {t.id for t in picked} & {1, 2, 3}


def test_pick_random_shortage_returns_all_available() -> None:
    tasks = [FakeTask(1), FakeTask(2)]

    assert {t.id for t in pick_random(tasks, 5, set())} == {1, 2}
    assert pick_random(tasks, 0, set()) == []
    assert pick_random(tasks, 2, {1, 2}) == []


def test_has_tag_overlap() -> None:
    assert has_tag_overlap(["fitness", "health"], ["health"])
    assert not has_tag_overlap(["fitness"], ["music"])
    assert not has_tag_overlap([], ["music"])


def test_rank_trending_by_window_then_lifetime() -> None:
    tasks = [FakeTask(1, 50), FakeTask(2, 5), FakeTask(3, 10), FakeTask(4, 0)]

    ranked = rank_trending(tasks, {2: 4, 3: 4, 4: 1}, exclude_ids=set())

    assert [t.id for t in ranked] == [3, 2, 4]


def test_rank_trending_falls_back_to_lifetime() -> None:
    tasks = [FakeTask(1, 5), FakeTask(2, 50), FakeTask(3, 10)]

    # Only window completions are for an excluded task
    ranked = rank_trending(tasks, {2: 9}, exclude_ids={2})

    assert [t.id for t in ranked] == [3, 1]
