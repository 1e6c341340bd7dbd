"""Group Seeding: distribute ranked players into tournament groups."""

__version__ = "0.1.0"
