"""Type hints used in Group Seeding."""

from typing import List, Sequence

# Stable tier identifier, e.g. "Gold"
TierKey = str

# Ranked pool handed to the engine
PlayerPool = Sequence["Player"]
# Mutable shell filled during allocation
GroupShell = List["Player"]

#  LocalWords:  TierKey PlayerPool GroupShell
