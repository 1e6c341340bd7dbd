"""Summaries and plain-text export of a distribution."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List

from groupseeding.constants import DEFAULT_TIER_EMOJI, TIER_EMOJI
from groupseeding.distribution.models import DistributionResult, Group
from groupseeding.type_hints import TierKey

EXPORT_HEADER = "=== Group Distribution ==="


def tier_emoji(tier: TierKey) -> str:
    return TIER_EMOJI.get(tier, DEFAULT_TIER_EMOJI)


def group_display_name(group: Group) -> str:
    """Return e.g. ``"🥇 Gold - Group 1"``."""
    return f"{tier_emoji(group.tier)} {group.tier} - Group {group.number}"


@dataclass
class GroupPreview:
    number: int
    player_count: int
    players: List[str] = field(default_factory=list)


@dataclass
class TierPreview:
    tier: TierKey
    group_count: int
    total_players: int
    groups: List[GroupPreview] = field(default_factory=list)


@dataclass
class DistributionPreview:
    """Tier by tier overview of what a distribution would create.

    Attributes:
        tiers: One entry per tier with surviving groups
        total_tiers: Number of tiers
        total_groups: Number of groups across all tiers
        total_players: Number of placed players
        unassigned_count: Players left without a group
    """

    tiers: List[TierPreview] = field(default_factory=list)
    total_tiers: int = 0
    total_groups: int = 0
    total_players: int = 0
    unassigned_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tiers": [
                {
                    "tier": tier.tier,
                    "group_count": tier.group_count,
                    "total_players": tier.total_players,
                    "groups": [
                        {
                            "number": group.number,
                            "player_count": group.player_count,
                            "players": list(group.players),
                        }
                        for group in tier.groups
                    ],
                }
                for tier in self.tiers
            ],
            "total_tiers": self.total_tiers,
            "total_groups": self.total_groups,
            "total_players": self.total_players,
            "unassigned_count": self.unassigned_count,
        }


def create_preview(result: DistributionResult) -> DistributionPreview:
    """Build a DistributionPreview from an engine result."""
    preview = DistributionPreview(unassigned_count=result.unassigned_count)

    for tier in result.tiers:
        groups = result.groups_for_tier(tier)
        preview.tiers.append(
            TierPreview(
                tier=tier,
                group_count=len(groups),
                total_players=sum(group.size for group in groups),
                groups=[
                    GroupPreview(
                        number=group.number,
                        player_count=group.size,
                        players=[player.name for player in group.players],
                    )
                    for group in groups
                ],
            )
        )

    preview.total_tiers = len(preview.tiers)
    preview.total_groups = sum(tier.group_count for tier in preview.tiers)
    preview.total_players = sum(tier.total_players for tier in preview.tiers)
    return preview


def render_distribution(result: DistributionResult) -> str:
    """Render the result as plain text suitable for the clipboard or a terminal."""
    lines = [EXPORT_HEADER, ""]

    if result.is_empty:
        lines.append("No groups.")
        lines.append("")

    for group in result.groups:
        lines.append(f"{group_display_name(group)}:")
        lines.append("-" * 50)
        for player in group.players:
            lines.append(f"  • {player.name} - Strength: {player.strength:.2f}")
        lines.append("")

    if result.unassigned_players:
        lines.append(f"Unassigned ({result.unassigned_count}):")
        for player in result.unassigned_players:
            lines.append(f"  • {player.name} - Strength: {player.strength:.2f}")
        lines.append("")

    for anomaly in result.anomalies:
        lines.append(f"WARNING [{anomaly.tier}]: {anomaly.message}")

    return "\n".join(lines).rstrip() + "\n"
