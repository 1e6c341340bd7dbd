"""Command-line interface for Group Seeding.

This module provides the ``groupseeding`` command: a one-shot ``distribute``
subcommand and an interactive ``shell``.
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

import argparse
import json
import logging
import random
import sys
from typing import List, Optional

from groupseeding.constants import AVAILABLE_TIERS
from groupseeding.distribution import (
    DistributionConfig,
    DistributionStrategy,
    create_preview,
    distribute,
    render_distribution,
)
from groupseeding.exceptions import GroupSeedingException
from groupseeding.storage import load_config, load_players, save_json, save_text
from groupseeding.utils import set_log_level, setup_logger
from groupseeding.utils.validation import validate_distribution

logger = setup_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_DISTRIBUTION = 2
EXIT_INTERRUPTED = 130


def non_negative_int(value: str) -> int:
    """argparse type for counts.

    Raises:
        argparse.ArgumentTypeError: If value is not an integer >= 0
    """
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid number '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"Value must not be negative: {number}")
    return number


def strategy_type(value: str) -> DistributionStrategy:
    """argparse type accepting any spelling DistributionStrategy.parse accepts."""
    try:
        return DistributionStrategy.parse(value)
    except GroupSeedingException as e:
        raise argparse.ArgumentTypeError(str(e))


def build_config(
    args: argparse.Namespace, base: Optional[DistributionConfig] = None
) -> DistributionConfig:
    """Apply command-line overrides on top of ``base`` (or the defaults).

    Args:
        args: Parsed arguments
        base: Configuration loaded from ``--config``, if any

    Returns:
        The effective DistributionConfig
    """
    config = base if base is not None else DistributionConfig(
        selected_tiers=tuple(AVAILABLE_TIERS[:1])
    )

    changes = {}
    if args.tiers:
        changes["selected_tiers"] = tuple(args.tiers)
    if args.groups is not None:
        changes["groups_per_tier"] = args.groups
    if args.min is not None:
        changes["min_per_group"] = args.min
    if args.max is not None:
        changes["max_per_group"] = args.max
    if args.strategy is not None:
        changes["strategy"] = args.strategy

    if changes:
        config = config.with_changes(**changes)
    return config


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("players", help="JSON file with the ranked player pool")
    parser.add_argument("--config", help="Load distribution settings from JSON file")
    parser.add_argument(
        "--tiers",
        nargs="+",
        metavar="TIER",
        help=f"Tiers to distribute into, in order (default: {AVAILABLE_TIERS[0]})",
    )
    parser.add_argument(
        "--groups", type=non_negative_int, help="Groups per tier (default: 1)"
    )
    parser.add_argument(
        "--min", type=non_negative_int, help="Minimum players per group (default: 2)"
    )
    parser.add_argument(
        "--max", type=non_negative_int, help="Maximum players per group (default: 6)"
    )
    parser.add_argument(
        "--strategy",
        type=strategy_type,
        help="Fill strategy: "
        + ", ".join(strategy.value for strategy in DistributionStrategy),
    )
    parser.add_argument("--seed", type=int, help="Random seed for the random strategy")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="groupseeding",
        description="Distribute ranked players into tournament groups",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Two Gold groups of four, snake draft
  groupseeding distribute players.json --tiers Gold --groups 2 --max 4 --strategy snake_draft

  # Settings from a file, JSON output
  groupseeding distribute players.json --config distribution.json --format json

  # Try settings interactively
  groupseeding shell players.json --tiers Gold Silber
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    distribute_parser = subparsers.add_parser(
        "distribute", help="Run one distribution and print or save it"
    )
    _add_config_arguments(distribute_parser)
    distribute_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    distribute_parser.add_argument("--output", help="Write the result to this file")

    shell_parser = subparsers.add_parser(
        "shell", help="Adjust settings and re-run the distribution interactively"
    )
    _add_config_arguments(shell_parser)

    return parser


def _load_inputs(args: argparse.Namespace):
    players = load_players(args.players)
    base = load_config(args.config) if args.config else None
    return players, build_config(args, base)


def run_distribute(args: argparse.Namespace) -> int:
    """Run the distribute command."""
    players, config = _load_inputs(args)
    rng = random.Random(args.seed) if args.seed is not None else None

    result = distribute(players, config, rng=rng)
    validation = validate_distribution(result)

    payload = None
    if args.format == "json":
        payload = {
            "config": config.to_dict(),
            "result": result.to_dict(),
            "preview": create_preview(result).to_dict(),
            "validation": validation.to_dict(),
        }
        output = json.dumps(payload, indent=2, ensure_ascii=False)
    else:
        output = render_distribution(result) + "\n" + validation.summary()

    if args.output:
        if args.format == "json":
            save_json(payload, args.output)
        else:
            save_text(output + "\n", args.output)
        print(f"Result saved to: {args.output}")
    else:
        print(output)

    if not validation.is_valid:
        return EXIT_INVALID_DISTRIBUTION
    return EXIT_OK


def run_shell(args: argparse.Namespace) -> int:
    """Run the interactive shell."""
    from groupseeding.shell import DistributionShell

    players, config = _load_inputs(args)
    rng = random.Random(args.seed) if args.seed is not None else None
    return DistributionShell(players, config, rng=rng).run()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    try:
        if args.command == "shell":
            return run_shell(args)
        return run_distribute(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except GroupSeedingException as e:
        logger.error("%s", e)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
