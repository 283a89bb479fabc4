"""No-Limit Texas Hold'em rules engine."""
from pokerengine.game import InvalidActionError, Table, new_game

__version__ = "0.1.0"

__all__ = ["InvalidActionError", "Table", "new_game"]
