"""Removal of groups that ended up too small to play."""

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

from typing import Sequence, Tuple

from groupseeding.distribution.models import Group


def prune_groups(
    groups: Sequence[Group], min_per_group: int
) -> Tuple[Tuple[Group, ...], Tuple[Group, ...]]:
    """Split groups into those that survive and those below ``min_per_group``.

    Order is preserved in both halves. Surviving groups keep their original
    index, so a tier may show gaps (e.g. groups 0 and 2) after pruning.

    Returns:
        Tuple of (kept groups, pruned groups)
    """
    kept = tuple(group for group in groups if group.size >= min_per_group)
    pruned = tuple(group for group in groups if group.size < min_per_group)
    return kept, pruned
