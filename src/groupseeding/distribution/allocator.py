"""Single-pass allocation of sequenced players into group shells.

Every fill strategy works on the same shells: one list per group of a tier,
each with a fixed capacity. A placement only happens while the target shell
is below its capacity, so no group ever overflows, not even transiently.

The cursor into the sequenced pool is threaded explicitly. Each tier's
allocation starts at the cursor returned by the previous tier and hands back
the advanced cursor, which keeps allocation a pure function of its inputs.
"""

# Group Seeding
# Copyright (C) 2025  Group Seeding developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from groupseeding.constants import ANOMALY_SWEEP_LIMIT, SNAKE_DRAFT_MAX_SWEEPS
from groupseeding.distribution.models import (
    DistributionAnomaly,
    DistributionConfig,
    DistributionStrategy,
    Group,
)
from groupseeding.player import Player
from groupseeding.type_hints import GroupShell, TierKey
from groupseeding.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class FillOutcome:
    """What a fill strategy did to one tier's shells.

    Attributes:
        cursor: Index of the next unplaced player
        anomaly: Description of a contained failure, if any
    """

    cursor: int
    anomaly: Optional[str] = None


@dataclass(frozen=True)
class TierAllocation:
    """Groups produced for one tier and the cursor after it."""

    tier: TierKey
    groups: Tuple[Group, ...]
    start: int
    cursor: int
    anomaly: Optional[DistributionAnomaly] = None

    @property
    def placed(self) -> int:
        return self.cursor - self.start


@dataclass(frozen=True)
class Allocation:
    """Unpruned groups of every processed tier."""

    groups: Tuple[Group, ...]
    cursor: int
    anomalies: Tuple[DistributionAnomaly, ...] = ()


def _has_room(shells: Sequence[GroupShell], capacities: Sequence[int]) -> bool:
    return any(len(shell) < cap for shell, cap in zip(shells, capacities))


def _place(shell: GroupShell, capacity: int, player: Player) -> bool:
    """Append ``player`` if the shell has room; report whether it did."""
    if len(shell) >= capacity:
        return False
    shell.append(player)
    return True


class FillStrategy(ABC):
    """Fill pattern over a tier's group shells."""

    name: str = "fill"

    @abstractmethod
    def fill(
        self,
        shells: List[GroupShell],
        capacities: Sequence[int],
        players: Sequence[Player],
        cursor: int,
    ) -> FillOutcome:
        """Place players from ``players[cursor:]`` into ``shells``.

        Args:
            shells: One list per group, filled in place
            capacities: Limit for each shell
            players: Sequenced pool shared by all tiers
            cursor: First unplaced player

        Returns:
            FillOutcome with the advanced cursor
        """


class RoundRobinFill(FillStrategy):
    """Sweep groups 0..k-1 repeatedly, one player per group with room.

    Used for Balanced and Random; sizes within a tier differ by at most
    one while no group is full.
    """

    name = "round_robin"

    def fill(self, shells, capacities, players, cursor):
        if not shells:
            return FillOutcome(cursor)

        group_index = 0
        while cursor < len(players) and _has_room(shells, capacities):
            slot = group_index % len(shells)
            if _place(shells[slot], capacities[slot], players[cursor]):
                cursor += 1
            group_index += 1
        return FillOutcome(cursor)


class SnakeDraftFill(FillStrategy):
    """Boustrophedon fill: 0..k-1, then k-1..0, and so on.

    The loop stops after the first sweep that places nobody. Every sweep
    before that places at least one player, so the number of sweeps is at
    most the tier's total capacity plus one. ``max_sweeps`` is a backstop on
    top of that; hitting it while groups still have room is reported as an
    anomaly.
    """

    name = "snake_draft"

    def __init__(self, max_sweeps: Optional[int] = None):
        self.max_sweeps = max_sweeps

    def _sweep_limit(self, capacities: Sequence[int]) -> int:
        if self.max_sweeps is not None:
            return self.max_sweeps
        return max(SNAKE_DRAFT_MAX_SWEEPS, sum(capacities) + 1)

    def fill(self, shells, capacities, players, cursor):
        limit = self._sweep_limit(capacities)
        forward = True
        sweeps = 0

        while cursor < len(players):
            if sweeps >= limit:
                if _has_room(shells, capacities):
                    return FillOutcome(
                        cursor,
                        anomaly=(
                            f"Snake draft aborted after {sweeps} sweeps with "
                            f"{len(players) - cursor} player(s) left and free slots"
                        ),
                    )
                break

            sweeps += 1
            order = range(len(shells)) if forward else reversed(range(len(shells)))
            placed = 0
            for slot in order:
                if cursor >= len(players):
                    break
                if _place(shells[slot], capacities[slot], players[cursor]):
                    cursor += 1
                    placed += 1

            if placed == 0:
                logger.debug(
                    "Snake draft stopped after %s sweeps: all groups are full", sweeps
                )
                break
            forward = not forward

        return FillOutcome(cursor)


class BlockFill(FillStrategy):
    """Fill group 0 completely, then group 1, and so on (TopHeavy)."""

    name = "block"

    def fill(self, shells, capacities, players, cursor):
        for shell, capacity in zip(shells, capacities):
            while cursor < len(players) and _place(shell, capacity, players[cursor]):
                cursor += 1
            if cursor >= len(players):
                break
        return FillOutcome(cursor)


def fill_strategy_for(
    strategy: DistributionStrategy, max_snake_sweeps: Optional[int] = None
) -> FillStrategy:
    """Return the fill pattern that implements ``strategy``."""
    if strategy is DistributionStrategy.SNAKE_DRAFT:
        return SnakeDraftFill(max_snake_sweeps)
    if strategy is DistributionStrategy.TOP_HEAVY:
        return BlockFill()
    # Balanced and Random share round-robin mechanics
    return RoundRobinFill()


def allocate_tier(
    tier: TierKey,
    config: DistributionConfig,
    players: Sequence[Player],
    cursor: int,
    fill: FillStrategy,
) -> TierAllocation:
    """Create the tier's shells and fill them from ``players[cursor:]``.

    Args:
        tier: Tier to allocate
        config: Run configuration
        players: Sequenced pool shared by all tiers
        cursor: Where the previous tier stopped
        fill: Fill pattern to apply

    Returns:
        TierAllocation holding frozen groups and the advanced cursor
    """
    group_count = config.effective_group_count(tier)
    capacities = [config.effective_capacity(tier, index) for index in range(group_count)]
    shells: List[GroupShell] = [[] for _ in range(group_count)]

    outcome = fill.fill(shells, capacities, players, cursor)

    groups = tuple(
        Group(tier=tier, index=index, players=tuple(shell))
        for index, shell in enumerate(shells)
    )
    anomaly = None
    if outcome.anomaly:
        anomaly = DistributionAnomaly(
            tier=tier, kind=ANOMALY_SWEEP_LIMIT, message=outcome.anomaly
        )

    logger.debug(
        "Tier %s: %s group(s), capacity %s, placed %s player(s) [%s]",
        tier,
        group_count,
        capacities[0] if capacities else 0,
        outcome.cursor - cursor,
        ", ".join(str(len(shell)) for shell in shells),
    )
    return TierAllocation(
        tier=tier, groups=groups, start=cursor, cursor=outcome.cursor, anomaly=anomaly
    )


def allocate(
    config: DistributionConfig,
    players: Sequence[Player],
    max_snake_sweeps: Optional[int] = None,
) -> Allocation:
    """Allocate ``players`` over every selected tier in order.

    Skipped tiers produce no shells and consume no players. Allocation stops
    at the first anomaly; later tiers are left unprocessed.

    Args:
        config: Run configuration
        players: Sequenced pool
        max_snake_sweeps: Override for the snake draft backstop

    Returns:
        Allocation with every created group (before pruning)
    """
    fill = fill_strategy_for(config.strategy, max_snake_sweeps)
    groups: List[Group] = []
    anomalies: List[DistributionAnomaly] = []
    cursor = 0

    for tier in config.selected_tiers:
        if config.is_skipped(tier):
            logger.info("Skipping tier: %s", tier)
            continue

        tier_allocation = allocate_tier(tier, config, players, cursor, fill)
        groups.extend(tier_allocation.groups)
        cursor = tier_allocation.cursor

        if tier_allocation.anomaly is not None:
            logger.error(
                "Allocation aborted in tier %s: %s",
                tier,
                tier_allocation.anomaly.message,
            )
            anomalies.append(tier_allocation.anomaly)
            break

    return Allocation(groups=tuple(groups), cursor=cursor, anomalies=tuple(anomalies))
