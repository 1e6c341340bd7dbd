"""Player-to-group distribution for Group Seeding.

This package partitions a ranked player pool into capacity-bounded groups
across tiers, using one of several deterministic fill strategies.
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

from groupseeding.distribution.engine import DistributionEngine, distribute
from groupseeding.distribution.models import (
    DistributionAnomaly,
    DistributionConfig,
    DistributionResult,
    DistributionStrategy,
    Group,
    TierRule,
)
from groupseeding.distribution.preview import (
    create_preview,
    group_display_name,
    render_distribution,
)

__all__ = [
    "distribute",
    "DistributionEngine",
    "DistributionConfig",
    "DistributionStrategy",
    "DistributionResult",
    "DistributionAnomaly",
    "Group",
    "TierRule",
    "create_preview",
    "group_display_name",
    "render_distribution",
]
