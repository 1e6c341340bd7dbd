"""Example script demonstrating the group distribution engine.

This script shows how the four fill strategies seed the same ranked pool,
how tier rules change the outcome, and how to drive the same work from the
command line.
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
import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from groupseeding.distribution import (
    DistributionConfig,
    DistributionStrategy,
    TierRule,
    create_preview,
    distribute,
    render_distribution,
)
from groupseeding.player import Player
from groupseeding.utils.validation import validate_distribution


def build_pool(count=12):
    """Ranked pool, strongest first."""
    return [
        Player(f"Player {i:02d}", strength=2000 - i * 40, player_id=f"p{i}")
        for i in range(1, count + 1)
    ]


def example_strategy_comparison():
    """Example: Same pool, same shells, every strategy."""

    print("\n" + "=" * 70)
    print("EXAMPLE 1: Strategy Comparison")
    print("=" * 70 + "\n")

    pool = build_pool(8)
    for strategy in DistributionStrategy:
        config = DistributionConfig(
            selected_tiers=("Gold",),
            groups_per_tier=2,
            max_per_group=4,
            strategy=strategy,
        )
        result = distribute(pool, config, rng=random.Random(42))
        print(f"{strategy.display_name}:")
        for group in result.groups:
            average = sum(p.strength for p in group.players) / group.size
            names = ", ".join(p.id for p in group.players)
            print(f"  Group {group.number}: {names}  (avg strength {average:.0f})")
        print()


def example_tier_rules():
    """Example: Per-tier overrides and pruning."""

    print("\n" + "=" * 70)
    print("EXAMPLE 2: Tier Rules")
    print("=" * 70 + "\n")

    config = DistributionConfig(
        selected_tiers=("Platin", "Gold", "Silber"),
        groups_per_tier=2,
        min_per_group=3,
        max_per_group=4,
        strategy=DistributionStrategy.SNAKE_DRAFT,
        tier_rules={
            "Platin": TierRule(custom_group_count=1, custom_capacity=3),
            "Gold": TierRule(skip=True),
        },
    )
    print(f"Configured groups: {config.total_groups}")
    print(f"Configured capacity: {config.total_capacity}\n")

    result = distribute(build_pool(14), config)
    print(render_distribution(result))

    preview = create_preview(result)
    print(
        f"{preview.total_tiers} tier(s), {preview.total_groups} group(s), "
        f"{preview.total_players} placed, {preview.unassigned_count} unassigned"
    )
    print(f"Pruned groups: {result.pruned_group_count}")
    print(validate_distribution(result).summary())


def example_cli_usage():
    """Example: Show CLI usage examples."""

    print("\n" + "=" * 70)
    print("EXAMPLE 3: Command-Line Interface Usage")
    print("=" * 70 + "\n")

    print("After installing the package with pip install -e ., you can use:")
    print("\n1. Two Gold groups of four, snake draft:")
    print("   $ groupseeding distribute players.json --tiers Gold --groups 2 --max 4 --strategy snake_draft")

    print("\n2. Several tiers, settings from a file, JSON output:")
    print("   $ groupseeding distribute players.json --config distribution.json --format json")

    print("\n3. Reproducible random seeding:")
    print("   $ groupseeding distribute players.json --strategy random --seed 42")

    print("\n4. Save the text export:")
    print("   $ groupseeding distribute players.json --output groups.txt")

    print("\n5. Adjust settings interactively:")
    print("   $ groupseeding shell players.json --tiers Gold Silber")

    print("\n" + "=" * 70 + "\n")


def main():
    """Run all examples."""

    print("\n" + "╔" + "=" * 68 + "╗")
    print("║" + "  GROUP SEEDING - EXAMPLES".center(68) + "║")
    print("╚" + "=" * 68 + "╝")

    example_strategy_comparison()
    example_tier_rules()
    example_cli_usage()


if __name__ == "__main__":
    main()
