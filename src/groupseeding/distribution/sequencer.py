"""Order the ranked pool the way the allocator will consume it."""

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

from groupseeding.distribution.models import DistributionStrategy
from groupseeding.player import Player
from groupseeding.type_hints import PlayerPool


def _sort_players_by_strength(players: PlayerPool) -> List[Player]:
    """Sort players by strength desc; equal strengths keep their ranked order."""
    return sorted(players, key=lambda p: -p.strength)


def sequence_players(
    players: PlayerPool,
    strategy: DistributionStrategy,
    rng: Optional[random.Random] = None,
) -> List[Player]:
    """Return a new list holding ``players`` in allocation order.

    - Balanced and SnakeDraft keep the upstream ranking; the fill pattern
      carries the fairness.
    - TopHeavy re-sorts by strength so block filling always yields
      strength-ordered groups.
    - Random shuffles a copy; the caller's sequence is never touched.

    Args:
        players: Ranked pool, strongest first
        strategy: Fill strategy of the run
        rng: Random source for the Random strategy (fresh one if omitted)

    Returns:
        A list that is never the caller's object
    """
    if strategy is DistributionStrategy.TOP_HEAVY:
        return _sort_players_by_strength(players)

    if strategy is DistributionStrategy.RANDOM:
        shuffled = list(players)
        (rng if rng is not None else random.Random()).shuffle(shuffled)
        return shuffled

    return list(players)
