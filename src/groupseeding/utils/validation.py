"""Validation utilities for Group Seeding.

This module provides reusable validation functions with consistent error handling,
plus the hand-off check run on a finished distribution before it is turned into
tournament classes.
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

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from groupseeding.constants import MIN_PLAYERS_PER_TIER
from groupseeding.exceptions import (
    InvalidConfigurationException,
    InvalidDistributionException,
)

if TYPE_CHECKING:
    from groupseeding.distribution.models import DistributionResult


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Name Validation ==========


def validate_name(name: Optional[str], required: bool = True) -> ValidationResult:
    """Validate a player's display name.

    Args:
        name: Name to validate
        required: Whether name is required

    Returns:
        ValidationResult with validation status
    """
    if name is not None and not isinstance(name, str):
        return ValidationResult(
            is_valid=False,
            error_message=f"Name must be text: {name!r}",
        )

    if not name or not name.strip():
        if required:
            return ValidationResult(
                is_valid=False,
                error_message="Name is required",
            )
        return ValidationResult(is_valid=True, sanitized_value=None)

    return ValidationResult(is_valid=True, sanitized_value=name.strip())


# ========== Strength Validation ==========


def validate_strength(strength: Any) -> ValidationResult:
    """Validate a strength score.

    Any finite number is accepted; booleans are rejected even though
    Python treats them as integers.

    Args:
        strength: Value to validate

    Returns:
        ValidationResult whose sanitized value is a float
    """
    if isinstance(strength, bool):
        return ValidationResult(
            is_valid=False,
            error_message=f"Strength must be a number: {strength}",
        )

    try:
        float_strength = float(strength)
    except (ValueError, TypeError, OverflowError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Strength must be a number: {strength}",
        )

    if not math.isfinite(float_strength):
        return ValidationResult(
            is_valid=False,
            error_message=f"Strength must be finite: {strength}",
        )

    return ValidationResult(is_valid=True, sanitized_value=float_strength)


# ========== Configuration Validation ==========


def validate_tier_key(tier: Any) -> ValidationResult:
    """Validate a tier key (a non-empty string such as ``"Gold"``)."""
    if not isinstance(tier, str) or not tier.strip():
        return ValidationResult(
            is_valid=False,
            error_message=f"Tier key must be a non-empty string: {tier!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=tier.strip())


def validate_non_negative_integer(
    value: Any, field_name: str = "Value"
) -> ValidationResult:
    """Validate that a value is an integer greater than or equal to zero.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult whose sanitized value is an int
    """
    if value is None:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} is required",
        )

    if isinstance(value, bool):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a whole number",
        )

    if isinstance(value, float) and not value.is_integer():
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a whole number: {value}",
        )

    try:
        int_value = int(value)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a number",
        )

    if int_value < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must not be negative",
        )
    return ValidationResult(is_valid=True, sanitized_value=int_value)


def validate_non_negative_integer_strict(value: Any, field_name: str = "Value") -> int:
    """Validate a count and return it or raise.

    Raises:
        InvalidConfigurationException: If the value is not a non-negative integer
    """
    result = validate_non_negative_integer(value, field_name)
    if not result.is_valid:
        raise InvalidConfigurationException(result.error_message)
    return result.sanitized_value


# ========== Distribution Validation ==========


@dataclass
class DistributionValidation:
    """Outcome of checking a distribution before it is materialized.

    Errors make the distribution unusable; warnings are informational.
    """

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def __bool__(self) -> bool:
        return self.is_valid

    def summary(self) -> str:
        """Human readable multi-line summary."""
        if self.is_valid and not self.has_warnings:
            return "Validation successful"

        lines = [
            "Validation passed with warnings:"
            if self.is_valid
            else "Validation failed:"
        ]
        lines.extend(f"  - {error}" for error in self.errors)
        lines.extend(f"  - {warning}" for warning in self.warnings)
        return "\n".join(lines)

    def raise_for_errors(self) -> None:
        """Raise if the distribution must not be handed downstream.

        Raises:
            InvalidDistributionException: If any error was recorded
        """
        if self.errors:
            raise InvalidDistributionException("; ".join(self.errors))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def validate_distribution(
    result: "DistributionResult", min_players_per_tier: int = MIN_PLAYERS_PER_TIER
) -> DistributionValidation:
    """Check whether a distribution can be turned into tournament classes.

    Args:
        result: Distribution produced by the engine
        min_players_per_tier: Fewest players a tier may hold in total

    Returns:
        DistributionValidation listing errors and warnings
    """
    validation = DistributionValidation()

    if not result.groups:
        validation.errors.append("No group distribution available")
        return validation

    empty_groups = [group for group in result.groups if not group.players]
    if empty_groups:
        validation.warnings.append(
            f"{len(empty_groups)} group(s) without players will be ignored"
        )

    for tier in result.tiers:
        total = sum(len(group.players) for group in result.groups_for_tier(tier))
        if total < min_players_per_tier:
            validation.errors.append(
                f"Tier '{tier}' has only {total} player(s) "
                f"(minimum: {min_players_per_tier})"
            )

    if result.unassigned_count:
        validation.warnings.append(
            f"{result.unassigned_count} player(s) could not be placed in any group"
        )

    for anomaly in result.anomalies:
        validation.warnings.append(f"Anomaly in tier '{anomaly.tier}': {anomaly.message}")

    return validation
