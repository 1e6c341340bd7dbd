"""Interactive distribution shell.

Lets an organizer tweak tiers, group counts, capacities and the strategy and
re-run the distribution until it looks right.
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

import json
import random
from typing import Callable, Dict, List, Optional, Sequence

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from groupseeding.constants import APP_NAME, AVAILABLE_TIERS
from groupseeding.distribution import (
    DistributionConfig,
    DistributionResult,
    DistributionStrategy,
    TierRule,
    create_preview,
    distribute,
    render_distribution,
)
from groupseeding.exceptions import GroupSeedingException, InvalidConfigurationException
from groupseeding.player import Player
from groupseeding.storage import save_text
from groupseeding.utils import setup_logger
from groupseeding.utils.validation import (
    validate_distribution,
    validate_non_negative_integer_strict,
)

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    OKGREEN = "\033[92m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their usage
COMMANDS = {
    "tiers": "tiers TIER [TIER ...]      select tiers, in processing order",
    "groups": "groups N                   default groups per tier",
    "min": "min N                      minimum players per group",
    "max": "max N                      maximum players per group",
    "strategy": "strategy NAME              balanced | snake_draft | top_heavy | random",
    "rule": "rule TIER [groups=N] [capacity=N] [skip]   override one tier",
    "clear-rule": "clear-rule TIER            drop the override of a tier",
    "config": "config                     show current settings",
    "run": "run                        distribute and show the groups",
    "preview": "preview                    per-tier summary of the last run",
    "export": "export [FILE]              print or save the last run as text",
    "help": "help                       show this list",
    "quit": "quit                       leave the shell",
}

EXIT_WORDS = {"quit", "exit", "q"}


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for the shell."""
    tier_completer = WordCompleter(list(AVAILABLE_TIERS))
    completions: Dict[str, Optional[object]] = {cmd: None for cmd in COMMANDS}
    completions["tiers"] = tier_completer
    completions["clear-rule"] = tier_completer
    completions["rule"] = {
        tier: WordCompleter(["groups=", "capacity=", "skip"])
        for tier in AVAILABLE_TIERS
    }
    completions["strategy"] = WordCompleter(
        [strategy.value for strategy in DistributionStrategy]
    )
    return NestedCompleter.from_nested_dict(completions)


def parse_rule_arguments(arguments: Sequence[str]) -> TierRule:
    """Parse ``groups=N capacity=N skip`` into a TierRule.

    Raises:
        InvalidConfigurationException: On an unknown or malformed option
    """
    group_count = None
    capacity = None
    skip = False
    for argument in arguments:
        if argument == "skip":
            skip = True
            continue
        key, sep, value = argument.partition("=")
        if not sep:
            raise InvalidConfigurationException(f"Unknown rule option: {argument}")
        if key == "groups":
            group_count = validate_non_negative_integer_strict(value, "Group count")
        elif key == "capacity":
            capacity = validate_non_negative_integer_strict(value, "Capacity")
        else:
            raise InvalidConfigurationException(f"Unknown rule option: {key}")
    return TierRule(custom_group_count=group_count, custom_capacity=capacity, skip=skip)


class DistributionShell:
    """Command interpreter around a player pool and an editable config.

    ``handle`` is independent of the terminal so it can be driven from
    tests; ``run`` wraps it in a prompt_toolkit session.
    """

    def __init__(
        self,
        players: List[Player],
        config: DistributionConfig,
        rng: Optional[random.Random] = None,
    ):
        self.players = players
        self.config = config
        self.rng = rng
        self.last_result: Optional[DistributionResult] = None
        self.finished = False
        self._handlers: Dict[str, Callable[[List[str]], str]] = {
            "tiers": self._cmd_tiers,
            "groups": self._cmd_groups,
            "min": self._cmd_min,
            "max": self._cmd_max,
            "strategy": self._cmd_strategy,
            "rule": self._cmd_rule,
            "clear-rule": self._cmd_clear_rule,
            "config": self._cmd_config,
            "run": self._cmd_run,
            "preview": self._cmd_preview,
            "export": self._cmd_export,
            "help": self._cmd_help,
        }
        for word in EXIT_WORDS:
            self._handlers[word] = self._cmd_quit

    def handle(self, line: str) -> str:
        """Execute one command line and return the text to show."""
        parts = line.split()
        if not parts:
            return ""

        command = parts[0].lstrip("/").lower()
        handler = self._handlers.get(command)
        if handler is None:
            return f"Unknown command: {command}. Type 'help' to see available commands"

        try:
            return handler(parts[1:])
        except GroupSeedingException as e:
            return f"Error: {e}"

    # ----- settings -----

    def _cmd_tiers(self, args: List[str]) -> str:
        if not args:
            return "Usage: " + COMMANDS["tiers"]
        self.config = self.config.with_changes(selected_tiers=tuple(args))
        return f"Tiers: {', '.join(self.config.selected_tiers)}"

    def _set_count(self, field_name: str, label: str, args: List[str]) -> str:
        if len(args) != 1:
            return f"Usage: {field_name.split('_')[0]} N"
        value = validate_non_negative_integer_strict(args[0], label)
        self.config = self.config.with_changes(**{field_name: value})
        return f"{label}: {value}"

    def _cmd_groups(self, args: List[str]) -> str:
        return self._set_count("groups_per_tier", "Groups per tier", args)

    def _cmd_min(self, args: List[str]) -> str:
        return self._set_count("min_per_group", "Min per group", args)

    def _cmd_max(self, args: List[str]) -> str:
        return self._set_count("max_per_group", "Max per group", args)

    def _cmd_strategy(self, args: List[str]) -> str:
        if len(args) != 1:
            return "Usage: " + COMMANDS["strategy"]
        strategy = DistributionStrategy.parse(args[0])
        self.config = self.config.with_changes(strategy=strategy)
        return f"Strategy: {strategy.display_name}"

    def _cmd_rule(self, args: List[str]) -> str:
        if not args:
            return "Usage: " + COMMANDS["rule"]
        tier, options = args[0], args[1:]
        rule = parse_rule_arguments(options)
        self.config = self.config.with_rule(tier, rule)
        return f"Rule for {tier}: {json.dumps(rule.to_dict())}"

    def _cmd_clear_rule(self, args: List[str]) -> str:
        if len(args) != 1:
            return "Usage: " + COMMANDS["clear-rule"]
        self.config = self.config.with_rule(args[0], None)
        return f"Rule for {args[0]} removed"

    def _cmd_config(self, args: List[str]) -> str:
        return json.dumps(self.config.to_dict(), indent=2, ensure_ascii=False)

    # ----- runs -----

    def _cmd_run(self, args: List[str]) -> str:
        self.last_result = distribute(self.players, self.config.copy(), rng=self.rng)
        validation = validate_distribution(self.last_result)
        return render_distribution(self.last_result) + "\n" + validation.summary()

    def _require_result(self) -> DistributionResult:
        if self.last_result is None:
            raise GroupSeedingException("No distribution yet, use 'run' first")
        return self.last_result

    def _cmd_preview(self, args: List[str]) -> str:
        preview = create_preview(self._require_result())
        lines = [
            f"{preview.total_tiers} tier(s), {preview.total_groups} group(s), "
            f"{preview.total_players} player(s), {preview.unassigned_count} unassigned"
        ]
        for tier in preview.tiers:
            sizes = ", ".join(str(group.player_count) for group in tier.groups)
            lines.append(
                f"  {tier.tier}: {tier.group_count} group(s), "
                f"{tier.total_players} player(s) [{sizes}]"
            )
        return "\n".join(lines)

    def _cmd_export(self, args: List[str]) -> str:
        text = render_distribution(self._require_result())
        if args:
            save_text(text, args[0])
            return f"Distribution saved to: {args[0]}"
        return text

    def _cmd_help(self, args: List[str]) -> str:
        return "\n".join(COMMANDS[command] for command in COMMANDS)

    def _cmd_quit(self, args: List[str]) -> str:
        self.finished = True
        return "Goodbye!"

    # ----- terminal loop -----

    def run(self) -> int:
        """Run the interactive loop until the user quits.

        Returns:
            Exit code
        """
        style = Style.from_dict({"prompt": "#00aa00 bold"})
        session = PromptSession(
            completer=create_completer(),
            history=InMemoryHistory(),
            style=style,
        )

        print(f"{Colors.BOLD}{APP_NAME}{Colors.ENDC} - {len(self.players)} player(s) loaded")
        print("Type 'help' for commands, 'quit' to leave.\n")

        while True:
            try:
                user_input = session.prompt("groupseeding> ").strip()
            except KeyboardInterrupt:
                continue
            except EOFError:
                break

            if not user_input:
                continue

            output = self.handle(user_input)
            if self.finished:
                print(f"\n{Colors.OKGREEN}{output}{Colors.ENDC}\n")
                break
            if output.startswith("Error:") or output.startswith("Unknown command"):
                print(f"{Colors.FAIL}{output}{Colors.ENDC}")
            else:
                print(output)

        return 0
