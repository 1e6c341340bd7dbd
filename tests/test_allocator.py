import random

import pytest

from groupseeding.distribution.allocator import (
    BlockFill,
    RoundRobinFill,
    SnakeDraftFill,
    allocate,
    allocate_tier,
    fill_strategy_for,
)
from groupseeding.distribution.models import (
    DistributionConfig,
    DistributionStrategy,
    TierRule,
)
from groupseeding.player import Player


class _BoundedShell(list):
    """Group shell that fails the test the moment it would overflow."""

    def __init__(self, capacity):
        super().__init__()
        self.capacity = capacity

    def append(self, item):
        assert len(self) < self.capacity, "group exceeded its capacity"
        super().append(item)


def _ranked(count):
    # P1 strongest -> Pn weakest
    return [
        Player(f"P{i}", float(count - i + 1), player_id=f"P{i}")
        for i in range(1, count + 1)
    ]


def _names(group):
    return [p.id for p in group.players]


def _single_tier(strategy, groups=2, capacity=4, minimum=2, rules=None):
    return DistributionConfig(
        selected_tiers=("Gold",),
        groups_per_tier=groups,
        min_per_group=minimum,
        max_per_group=capacity,
        strategy=strategy,
        tier_rules=rules or {},
    )


def test_balanced_worked_example():
    config = _single_tier(DistributionStrategy.BALANCED)
    allocation = allocate(config, _ranked(8))
    assert [_names(g) for g in allocation.groups] == [
        ["P1", "P3", "P5", "P7"],
        ["P2", "P4", "P6", "P8"],
    ]
    assert allocation.cursor == 8


def test_top_heavy_worked_example():
    config = _single_tier(DistributionStrategy.TOP_HEAVY)
    allocation = allocate(config, _ranked(8))
    assert [_names(g) for g in allocation.groups] == [
        ["P1", "P2", "P3", "P4"],
        ["P5", "P6", "P7", "P8"],
    ]


def test_snake_draft_worked_example():
    config = _single_tier(DistributionStrategy.SNAKE_DRAFT)
    allocation = allocate(config, _ranked(8))
    assert [_names(g) for g in allocation.groups] == [
        ["P1", "P4", "P5", "P8"],
        ["P2", "P3", "P6", "P7"],
    ]


@pytest.mark.parametrize("groups, capacity", [(1, 5), (3, 4), (4, 3), (5, 6)])
def test_snake_draft_fills_every_group_exactly(groups, capacity):
    config = _single_tier(DistributionStrategy.SNAKE_DRAFT, groups, capacity)
    allocation = allocate(config, _ranked(groups * capacity))
    assert [g.size for g in allocation.groups] == [capacity] * groups
    assert allocation.cursor == groups * capacity


def test_snake_draft_reverses_direction_each_sweep():
    config = _single_tier(DistributionStrategy.SNAKE_DRAFT, groups=3, capacity=6)
    allocation = allocate(config, _ranked(7))
    assert [_names(g) for g in allocation.groups] == [
        ["P1", "P6", "P7"],
        ["P2", "P5"],
        ["P3", "P4"],
    ]


def test_top_heavy_fills_group_zero_before_group_one():
    config = _single_tier(DistributionStrategy.TOP_HEAVY, groups=3, capacity=4)
    allocation = allocate(config, _ranked(6))
    assert [_names(g) for g in allocation.groups] == [
        ["P1", "P2", "P3", "P4"],
        ["P5", "P6"],
        [],
    ]


def test_balanced_sizes_differ_by_at_most_one_while_unsaturated():
    for count in range(0, 13):
        config = _single_tier(DistributionStrategy.BALANCED, groups=4, capacity=3)
        sizes = [g.size for g in allocate(config, _ranked(count)).groups]
        assert max(sizes) - min(sizes) <= 1


def test_leftover_players_stay_behind_cursor():
    config = _single_tier(DistributionStrategy.BALANCED, groups=2, capacity=3)
    allocation = allocate(config, _ranked(10))
    assert allocation.cursor == 6
    assert [g.size for g in allocation.groups] == [3, 3]


def test_cursor_is_shared_across_tiers_in_order():
    config = DistributionConfig(
        selected_tiers=("Gold", "Silber"),
        groups_per_tier=1,
        min_per_group=1,
        max_per_group=3,
    )
    allocation = allocate(config, _ranked(7))
    assert [(g.tier, _names(g)) for g in allocation.groups] == [
        ("Gold", ["P1", "P2", "P3"]),
        ("Silber", ["P4", "P5", "P6"]),
    ]
    assert allocation.cursor == 6


def test_skipped_tier_creates_no_groups_and_consumes_no_players():
    config = DistributionConfig(
        selected_tiers=("Gold", "Silber"),
        groups_per_tier=2,
        max_per_group=2,
        tier_rules={"Gold": TierRule(custom_group_count=5, skip=True)},
    )
    allocation = allocate(config, _ranked(4))
    assert {g.tier for g in allocation.groups} == {"Silber"}
    assert [_names(g) for g in allocation.groups] == [["P1", "P3"], ["P2", "P4"]]


def test_tier_with_zero_groups_places_nobody():
    for strategy in DistributionStrategy:
        config = _single_tier(strategy, groups=0)
        allocation = allocate(config, _ranked(5))
        assert allocation.groups == ()
        assert allocation.cursor == 0


def test_allocate_tier_reports_start_and_placed():
    config = _single_tier(DistributionStrategy.BALANCED, groups=2, capacity=2)
    tier_allocation = allocate_tier(
        "Gold", config, _ranked(10), 3, fill_strategy_for(config.strategy)
    )
    assert tier_allocation.start == 3
    assert tier_allocation.cursor == 7
    assert tier_allocation.placed == 4
    assert [_names(g) for g in tier_allocation.groups] == [["P4", "P6"], ["P5", "P7"]]


def test_fill_strategy_for_maps_every_strategy():
    assert isinstance(fill_strategy_for(DistributionStrategy.BALANCED), RoundRobinFill)
    assert isinstance(fill_strategy_for(DistributionStrategy.RANDOM), RoundRobinFill)
    assert isinstance(fill_strategy_for(DistributionStrategy.TOP_HEAVY), BlockFill)
    assert isinstance(fill_strategy_for(DistributionStrategy.SNAKE_DRAFT), SnakeDraftFill)


@pytest.mark.parametrize("fill", [RoundRobinFill(), SnakeDraftFill(), BlockFill()])
def test_no_shell_ever_exceeds_capacity_during_fill(fill):
    rng = random.Random(11)
    for _ in range(40):
        capacities = [rng.randint(0, 5) for _ in range(rng.randint(1, 5))]
        shells = [_BoundedShell(cap) for cap in capacities]
        players = _ranked(rng.randint(0, 30))
        start = rng.randint(0, len(players))
        outcome = fill.fill(shells, capacities, players, start)
        placed = sum(len(shell) for shell in shells)
        assert outcome.cursor - start == placed
        assert outcome.anomaly is None


def test_snake_sweep_limit_is_reported_as_anomaly():
    config = DistributionConfig(
        selected_tiers=("Gold", "Silber"),
        groups_per_tier=2,
        min_per_group=1,
        max_per_group=4,
        strategy=DistributionStrategy.SNAKE_DRAFT,
    )
    allocation = allocate(config, _ranked(8), max_snake_sweeps=1)
    assert [_names(g) for g in allocation.groups] == [["P1"], ["P2"]]
    assert allocation.cursor == 2
    assert len(allocation.anomalies) == 1
    assert allocation.anomalies[0].tier == "Gold"


def test_snake_sweep_limit_on_full_groups_is_not_an_anomaly():
    shells = [[]]
    outcome = SnakeDraftFill(max_sweeps=2).fill(shells, [2], _ranked(5), 0)
    assert outcome.cursor == 2
    assert outcome.anomaly is None


def test_default_snake_limit_never_cuts_a_large_group_short():
    shells = [[]]
    players = _ranked(2500)
    outcome = SnakeDraftFill().fill(shells, [2500], players, 0)
    assert outcome.cursor == 2500
    assert outcome.anomaly is None
