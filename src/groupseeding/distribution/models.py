"""Core data models for group distribution.

This module defines the configuration value handed to the engine and the
immutable structures it returns.
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

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from groupseeding.constants import (
    DEFAULT_GROUPS_PER_TIER,
    DEFAULT_MAX_PER_GROUP,
    DEFAULT_MIN_PER_GROUP,
    STRATEGY_BALANCED,
    STRATEGY_NAMES,
    STRATEGY_RANDOM,
    STRATEGY_SNAKE_DRAFT,
    STRATEGY_TOP_HEAVY,
)
from groupseeding.exceptions import InvalidConfigurationException
from groupseeding.player import Player
from groupseeding.type_hints import TierKey
from groupseeding.utils.validation import (
    validate_non_negative_integer_strict,
    validate_tier_key,
)


class DistributionStrategy(Enum):
    """Fill pattern used to populate group shells."""

    BALANCED = STRATEGY_BALANCED
    SNAKE_DRAFT = STRATEGY_SNAKE_DRAFT
    TOP_HEAVY = STRATEGY_TOP_HEAVY
    RANDOM = STRATEGY_RANDOM

    @property
    def display_name(self) -> str:
        return STRATEGY_NAMES[self.value]

    @classmethod
    def parse(cls, value: Any) -> "DistributionStrategy":
        """Parse a strategy from its serialized or CamelCase name.

        Accepts ``"snake_draft"``, ``"SnakeDraft"``, ``"snake-draft"`` and
        ``"SNAKE_DRAFT"`` alike.

        Raises:
            InvalidConfigurationException: If the name is unknown
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidConfigurationException(f"Unknown strategy: {value!r}")

        key = value.strip()
        # CamelCase -> snake_case
        snake = "".join(
            f"_{char.lower()}" if char.isupper() and i > 0 else char.lower()
            for i, char in enumerate(key)
        )
        for candidate in (key.lower().replace("-", "_"), snake.replace("-", "_")):
            candidate = candidate.replace("__", "_")
            for strategy in cls:
                if strategy.value == candidate:
                    return strategy
        raise InvalidConfigurationException(
            f"Unknown strategy '{value}'. Choose one of: "
            + ", ".join(strategy.value for strategy in cls)
        )


@dataclass(frozen=True)
class TierRule:
    """Overrides for a single tier.

    Attributes:
        custom_group_count: Replaces the default group count for the tier
        custom_capacity: Replaces the default per-group player limit
        skip: If True the tier produces no groups at all
    """

    custom_group_count: Optional[int] = None
    custom_capacity: Optional[int] = None
    skip: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize rule to dictionary."""
        return {
            "custom_group_count": self.custom_group_count,
            "custom_capacity": self.custom_capacity,
            "skip": self.skip,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TierRule":
        """Deserialize rule from dictionary."""
        if not isinstance(data, dict):
            raise InvalidConfigurationException(
                f"Tier rule must be an object, got {type(data).__name__}"
            )

        group_count = data.get("custom_group_count")
        capacity = data.get("custom_capacity")
        skip = data.get("skip", False)
        if not isinstance(skip, bool):
            raise InvalidConfigurationException(
                f"skip must be true or false, got {skip!r}"
            )
        return cls(
            custom_group_count=(
                None
                if group_count is None
                else validate_non_negative_integer_strict(
                    group_count, "Custom group count"
                )
            ),
            custom_capacity=(
                None
                if capacity is None
                else validate_non_negative_integer_strict(capacity, "Custom capacity")
            ),
            skip=skip,
        )


@dataclass(frozen=True)
class DistributionConfig:
    """Settings for one distribution run.

    The engine trusts this value and only applies the defaulting rules of
    :meth:`effective_group_count` and :meth:`effective_capacity`. Callers that
    keep editing a config (e.g. a settings dialog) should hand the engine a
    :meth:`copy`.

    Attributes:
        selected_tiers: Tier keys to distribute into, in processing order
        groups_per_tier: Default number of groups per tier
        min_per_group: Smallest group that survives pruning, lower capacity clamp
        max_per_group: Default and upper capacity clamp
        strategy: Fill pattern
        tier_rules: Per-tier overrides keyed by tier
    """

    selected_tiers: Tuple[TierKey, ...] = ()
    groups_per_tier: int = DEFAULT_GROUPS_PER_TIER
    min_per_group: int = DEFAULT_MIN_PER_GROUP
    max_per_group: int = DEFAULT_MAX_PER_GROUP
    strategy: DistributionStrategy = DistributionStrategy.BALANCED
    tier_rules: Mapping[TierKey, TierRule] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "selected_tiers", tuple(self.selected_tiers))
        object.__setattr__(self, "tier_rules", dict(self.tier_rules))
        object.__setattr__(self, "strategy", DistributionStrategy.parse(self.strategy))

    def __hash__(self) -> int:
        return hash(
            (
                self.selected_tiers,
                self.groups_per_tier,
                self.min_per_group,
                self.max_per_group,
                self.strategy,
                frozenset(self.tier_rules.items()),
            )
        )

    # ----- effective values -----

    def rule_for(self, tier: TierKey) -> Optional[TierRule]:
        """Return the override for ``tier`` or None if it uses defaults."""
        return self.tier_rules.get(tier)

    def is_skipped(self, tier: TierKey) -> bool:
        rule = self.rule_for(tier)
        return rule is not None and rule.skip

    def effective_group_count(self, tier: TierKey) -> int:
        """Number of group shells to create for ``tier``.

        A skipped tier always resolves to 0, whatever count is configured.
        """
        rule = self.rule_for(tier)
        if rule is not None and rule.skip:
            return 0
        if rule is not None and rule.custom_group_count is not None:
            return max(0, rule.custom_group_count)
        return max(0, self.groups_per_tier)

    def effective_capacity(self, tier: TierKey, group_index: int = 0) -> int:
        """Player limit for group ``group_index`` of ``tier``.

        Every group of a tier currently shares the same limit. The value is
        clamped into ``[min_per_group, max_per_group]``; if the bounds are
        inverted the upper bound wins.
        """
        rule = self.rule_for(tier)
        if rule is not None and rule.custom_capacity is not None:
            capacity = rule.custom_capacity
        else:
            capacity = self.max_per_group
        capacity = min(max(capacity, self.min_per_group), self.max_per_group)
        return max(0, capacity)

    @property
    def active_tiers(self) -> List[TierKey]:
        """Selected tiers that are not skipped, in processing order."""
        return [tier for tier in self.selected_tiers if not self.is_skipped(tier)]

    @property
    def total_groups(self) -> int:
        return sum(self.effective_group_count(tier) for tier in self.selected_tiers)

    @property
    def total_capacity(self) -> int:
        """Most players the configured shells can hold before pruning."""
        return sum(
            self.effective_capacity(tier, index)
            for tier in self.selected_tiers
            for index in range(self.effective_group_count(tier))
        )

    # ----- copying -----

    def copy(self) -> "DistributionConfig":
        """Return an independent snapshot of this configuration."""
        return replace(self, tier_rules=dict(self.tier_rules))

    def with_changes(self, **changes: Any) -> "DistributionConfig":
        """Return a copy with some fields replaced."""
        if "tier_rules" not in changes:
            changes["tier_rules"] = dict(self.tier_rules)
        return replace(self, **changes)

    def with_rule(self, tier: TierKey, rule: Optional[TierRule]) -> "DistributionConfig":
        """Return a copy with the rule for ``tier`` set, or removed if None."""
        rules = dict(self.tier_rules)
        if rule is None:
            rules.pop(tier, None)
        else:
            rules[tier] = rule
        return replace(self, tier_rules=rules)

    # ----- serialization -----

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "selected_tiers": list(self.selected_tiers),
            "groups_per_tier": self.groups_per_tier,
            "min_per_group": self.min_per_group,
            "max_per_group": self.max_per_group,
            "strategy": self.strategy.value,
            "tier_rules": {
                tier: rule.to_dict() for tier, rule in self.tier_rules.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DistributionConfig":
        """Deserialize configuration from dictionary.

        Raises:
            InvalidConfigurationException: If a field has the wrong shape
        """
        if not isinstance(data, dict):
            raise InvalidConfigurationException(
                f"Configuration must be an object, got {type(data).__name__}"
            )

        raw_tiers = data.get("selected_tiers", [])
        if not isinstance(raw_tiers, (list, tuple)):
            raise InvalidConfigurationException("selected_tiers must be a list")
        tiers = []
        for raw_tier in raw_tiers:
            result = validate_tier_key(raw_tier)
            if not result:
                raise InvalidConfigurationException(result.error_message)
            tiers.append(result.sanitized_value)

        raw_rules = data.get("tier_rules", {})
        if not isinstance(raw_rules, dict):
            raise InvalidConfigurationException("tier_rules must be an object")

        return cls(
            selected_tiers=tuple(tiers),
            groups_per_tier=validate_non_negative_integer_strict(
                data.get("groups_per_tier", DEFAULT_GROUPS_PER_TIER), "Groups per tier"
            ),
            min_per_group=validate_non_negative_integer_strict(
                data.get("min_per_group", DEFAULT_MIN_PER_GROUP), "Min per group"
            ),
            max_per_group=validate_non_negative_integer_strict(
                data.get("max_per_group", DEFAULT_MAX_PER_GROUP), "Max per group"
            ),
            strategy=DistributionStrategy.parse(
                data.get("strategy", STRATEGY_BALANCED)
            ),
            tier_rules={
                str(tier): TierRule.from_dict(rule) for tier, rule in raw_rules.items()
            },
        )


@dataclass(frozen=True)
class Group:
    """A capacity-bounded bucket of players within a tier.

    Attributes:
        tier: Tier key the group belongs to
        index: 0-based position within the tier
        players: Members in assignment order
    """

    tier: TierKey
    index: int
    players: Tuple[Player, ...] = ()

    @property
    def size(self) -> int:
        return len(self.players)

    @property
    def number(self) -> int:
        """1-based group number for display."""
        return self.index + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier": self.tier,
            "index": self.index,
            "players": [player.to_dict() for player in self.players],
        }


@dataclass(frozen=True)
class DistributionAnomaly:
    """Something that should not happen but was contained.

    Attributes:
        tier: Tier being allocated when the anomaly occurred
        kind: Machine readable anomaly key
        message: Human readable description
    """

    tier: TierKey
    kind: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"tier": self.tier, "kind": self.kind, "message": self.message}


@dataclass(frozen=True)
class DistributionResult:
    """Immutable output of one distribution run.

    Attributes:
        groups: Groups that survived pruning, in tier then index order
        unassigned_players: Players not in any surviving group
        total_players: Size of the input pool
        pruned_group_count: Groups removed for being below the minimum size
        anomalies: Contained anomalies; non-empty means the result is partial
    """

    groups: Tuple[Group, ...] = ()
    unassigned_players: Tuple[Player, ...] = ()
    total_players: int = 0
    pruned_group_count: int = 0
    anomalies: Tuple[DistributionAnomaly, ...] = ()

    @classmethod
    def empty(cls, players: Tuple[Player, ...] = ()) -> "DistributionResult":
        """Result for a run with nothing to distribute."""
        return cls(
            groups=(),
            unassigned_players=tuple(players),
            total_players=len(players),
        )

    @property
    def unassigned_count(self) -> int:
        return len(self.unassigned_players)

    @property
    def assigned_count(self) -> int:
        return sum(group.size for group in self.groups)

    @property
    def has_anomaly(self) -> bool:
        return bool(self.anomalies)

    @property
    def is_empty(self) -> bool:
        return not self.groups

    @property
    def tiers(self) -> List[TierKey]:
        """Tiers that still have groups, in result order."""
        seen: List[TierKey] = []
        for group in self.groups:
            if group.tier not in seen:
                seen.append(group.tier)
        return seen

    def groups_for_tier(self, tier: TierKey) -> List[Group]:
        return [group for group in self.groups if group.tier == tier]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize result to dictionary."""
        return {
            "groups": [group.to_dict() for group in self.groups],
            "unassigned_count": self.unassigned_count,
            "unassigned_players": [p.to_dict() for p in self.unassigned_players],
            "total_players": self.total_players,
            "pruned_group_count": self.pruned_group_count,
            "anomalies": [anomaly.to_dict() for anomaly in self.anomalies],
        }
