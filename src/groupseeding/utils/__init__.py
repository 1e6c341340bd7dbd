"""Shared helpers for Group Seeding."""

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

import logging
import uuid

ROOT_LOGGER_NAME = "groupseeding"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_root_logger() -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
    return root


def setup_logger(name: str) -> logging.Logger:
    """Return a module logger parented to the package logger.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger that propagates to the configured ``groupseeding`` logger
    """
    _configure_root_logger()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int) -> None:
    """Change the level of every Group Seeding logger at once."""
    _configure_root_logger().setLevel(level)


def generate_id(prefix: str) -> str:
    """Generate a unique identifier such as ``player_3f2a...``."""
    return f"{prefix.lower()}_{uuid.uuid4().hex}"
