"""A seeded player in a distribution pool."""

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

from typing import Any, Dict, Optional

from groupseeding.exceptions import InvalidPlayerDataException
from groupseeding.utils import generate_id, setup_logger
from groupseeding.utils.validation import validate_name, validate_strength

logger = setup_logger(__name__)


class Player:
    """Represents a player waiting to be seeded into a group.

    The distribution engine treats players as opaque references: it reads
    ``strength`` for ordering and never changes any attribute.

    Attributes:
        id: Unique identifier for the player
        name: Display name
        strength: Numeric strength score (higher is stronger)
    """

    def __init__(
        self,
        name: str,
        strength: float = 0.0,
        player_id: Optional[str] = None,
    ) -> None:
        self.id: str = player_id or generate_id(self.__class__.__name__)
        self.name: str = name
        self.strength: float = float(strength)

    def __repr__(self) -> str:
        return f"Player(name={self.name!r}, strength={self.strength}, id={self.id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {"id": self.id, "name": self.name, "strength": self.strength}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary.

        Raises:
            InvalidPlayerDataException: If name or strength are invalid
        """
        if not isinstance(data, dict):
            raise InvalidPlayerDataException(
                f"Player entry must be an object, got {type(data).__name__}"
            )

        name_result = validate_name(data.get("name"))
        if not name_result:
            raise InvalidPlayerDataException(name_result.error_message)

        strength_result = validate_strength(data.get("strength", 0.0))
        if not strength_result:
            raise InvalidPlayerDataException(
                f"{strength_result.error_message} (player {name_result.sanitized_value})"
            )

        player_id = data.get("id")
        if player_id is not None:
            player_id = str(player_id)
        else:
            logger.debug("No id given for %s, generating one", name_result.sanitized_value)

        return cls(
            name=name_result.sanitized_value,
            strength=float(strength_result.sanitized_value),
            player_id=player_id,
        )
