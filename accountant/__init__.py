"""Per-turn tactical decision engine for the Accountant arena game."""

__version__ = "0.1.0"
