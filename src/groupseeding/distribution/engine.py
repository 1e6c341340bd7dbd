"""Distribution pipeline: sequence, allocate, prune, assemble.

The engine holds no state between runs. It does not guard against being
called twice at once; callers that edit a configuration while a run is in
progress must hand the engine a snapshot (:meth:`DistributionConfig.copy`).
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

import random
from typing import List, Optional

from groupseeding.distribution.allocator import allocate
from groupseeding.distribution.models import DistributionConfig, DistributionResult
from groupseeding.distribution.pruner import prune_groups
from groupseeding.distribution.sequencer import sequence_players
from groupseeding.player import Player
from groupseeding.type_hints import PlayerPool
from groupseeding.utils import setup_logger

logger = setup_logger(__name__)


def distribute(
    players: PlayerPool,
    config: DistributionConfig,
    rng: Optional[random.Random] = None,
    max_snake_sweeps: Optional[int] = None,
) -> DistributionResult:
    """Distribute a ranked pool into the groups described by ``config``.

    Args:
        players: Ranked pool, strongest first
        config: Validated configuration
        rng: Random source for the Random strategy
        max_snake_sweeps: Override for the snake draft backstop

    Returns:
        DistributionResult with pruned groups and every unplaced player
    """
    pool = tuple(players)

    if not config.active_tiers:
        logger.info("No tiers to distribute into (selected: %s)", len(config.selected_tiers))
        return DistributionResult.empty(pool)

    if not pool:
        logger.info("No players to distribute")
        return DistributionResult.empty()

    logger.info(
        "Distributing %s player(s) into %s group(s) over %s tier(s) using %s",
        len(pool),
        config.total_groups,
        len(config.active_tiers),
        config.strategy.display_name,
    )

    sequenced = sequence_players(pool, config.strategy, rng)
    allocation = allocate(config, sequenced, max_snake_sweeps)
    kept, pruned = prune_groups(allocation.groups, config.min_per_group)

    if pruned:
        logger.warning(
            "Removed %s group(s) with less than %s player(s)",
            len(pruned),
            config.min_per_group,
        )

    unassigned: List[Player] = list(sequenced[allocation.cursor :])
    for group in pruned:
        unassigned.extend(group.players)

    result = DistributionResult(
        groups=kept,
        unassigned_players=tuple(unassigned),
        total_players=len(pool),
        pruned_group_count=len(pruned),
        anomalies=allocation.anomalies,
    )
    logger.info(
        "Distribution complete: %s group(s), %s assigned, %s unassigned",
        len(result.groups),
        result.assigned_count,
        result.unassigned_count,
    )
    return result


class DistributionEngine:
    """Runs distributions against a fixed configuration snapshot.

    Example:
        >>> engine = DistributionEngine(config)
        >>> result = engine.run(ranked_players)
    """

    def __init__(
        self,
        config: DistributionConfig,
        rng: Optional[random.Random] = None,
        max_snake_sweeps: Optional[int] = None,
    ):
        self.config = config.copy()
        self.rng = rng
        self.max_snake_sweeps = max_snake_sweeps

    def run(
        self, players: PlayerPool, rng: Optional[random.Random] = None
    ) -> DistributionResult:
        """Distribute ``players`` with the engine's configuration."""
        return distribute(
            players,
            self.config,
            rng=rng if rng is not None else self.rng,
            max_snake_sweeps=self.max_snake_sweeps,
        )
