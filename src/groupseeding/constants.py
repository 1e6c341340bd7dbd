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

# --- Constants ---
APP_NAME = "Group Seeding"

# Distribution defaults
DEFAULT_GROUPS_PER_TIER = 1
DEFAULT_MIN_PER_GROUP = 2
DEFAULT_MAX_PER_GROUP = 6

# A tier needs at least this many players to be turned into a tournament class
MIN_PLAYERS_PER_TIER = 2

# Backstop for the snake draft sweep loop
SNAKE_DRAFT_MAX_SWEEPS = 1000

# Strategy keys (serialized form)
STRATEGY_BALANCED = "balanced"
STRATEGY_SNAKE_DRAFT = "snake_draft"
STRATEGY_TOP_HEAVY = "top_heavy"
STRATEGY_RANDOM = "random"

STRATEGY_NAMES = {
    STRATEGY_BALANCED: "Balanced",
    STRATEGY_SNAKE_DRAFT: "Snake Draft",
    STRATEGY_TOP_HEAVY: "Top Heavy",
    STRATEGY_RANDOM: "Random",
}

# Tier keys
TIER_PLATIN = "Platin"
TIER_GOLD = "Gold"
TIER_SILBER = "Silber"
TIER_BRONZE = "Bronze"
TIER_EISEN = "Eisen"

# Standard tiers, strongest first
AVAILABLE_TIERS = [
    TIER_PLATIN,
    TIER_GOLD,
    TIER_SILBER,
    TIER_BRONZE,
    TIER_EISEN,
]

TIER_EMOJI = {
    TIER_PLATIN: "\U0001f3c6",
    TIER_GOLD: "\U0001f947",
    TIER_SILBER: "\U0001f948",
    TIER_BRONZE: "\U0001f949",
    TIER_EISEN: "⚙️",
}
DEFAULT_TIER_EMOJI = "\U0001f4cb"

# Anomaly kinds reported on a distribution result
ANOMALY_SWEEP_LIMIT = "sweep_limit_reached"
