"""Loading and saving Group Seeding JSON files."""

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
from pathlib import Path
from typing import Any, List, Union

from groupseeding.distribution.models import DistributionConfig
from groupseeding.exceptions import (
    FileLoadException,
    FileSaveException,
    InvalidPlayerDataException,
)
from groupseeding.player import Player
from groupseeding.utils import setup_logger

logger = setup_logger(__name__)

PathLike = Union[str, Path]


def _read_json(path: PathLike) -> Any:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise FileLoadException(f"File not found: {path}") from e
    except UnicodeDecodeError as e:
        raise FileLoadException(f"Cannot decode {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise FileLoadException(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise FileLoadException(f"Cannot read {path}: {e}") from e


def parse_players(data: Any) -> List[Player]:
    """Build the ranked pool from decoded JSON.

    Accepts a list of player objects or an object with a ``"players"`` list.
    The order of the list is the ranking order.

    Raises:
        InvalidPlayerDataException: If the structure or an entry is invalid
    """
    if isinstance(data, dict):
        data = data.get("players")
    if not isinstance(data, list):
        raise InvalidPlayerDataException(
            "Players must be a list or an object with a 'players' list"
        )

    players = []
    for position, entry in enumerate(data, start=1):
        try:
            players.append(Player.from_dict(entry))
        except InvalidPlayerDataException as e:
            raise InvalidPlayerDataException(f"Player #{position}: {e}") from e

    seen = set()
    for player in players:
        if player.id in seen:
            raise InvalidPlayerDataException(f"Duplicate player id: {player.id}")
        seen.add(player.id)
    return players


def load_players(path: PathLike) -> List[Player]:
    """Load a ranked player pool from a JSON file."""
    players = parse_players(_read_json(path))
    logger.info("Loaded %s player(s) from %s", len(players), path)
    return players


def load_config(path: PathLike) -> DistributionConfig:
    """Load a DistributionConfig from a JSON file."""
    config = DistributionConfig.from_dict(_read_json(path))
    logger.info("Loaded distribution config from %s", path)
    return config


def save_json(data: Any, path: PathLike) -> None:
    """Write ``data`` as pretty printed JSON.

    Raises:
        FileSaveException: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise FileSaveException(f"Cannot write {path}: {e}") from e
    logger.info("Saved %s", path)


def save_text(text: str, path: PathLike) -> None:
    """Write plain text to ``path``."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise FileSaveException(f"Cannot write {path}: {e}") from e
    logger.info("Saved %s", path)
