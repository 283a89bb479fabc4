"""Game engine module."""
from .deck import Deck, Card, Suit, Rank, parse_cards
from .hand_eval import HandRank, HandResult, best_hand, classify, evaluate_hand, tie_rank
from .player import Seat
from .betting import Action, ActionType, InvalidActionError, Street
from .pot import Pot, split_pot
from .showdown import resolve_winners
from .table import Table, new_game

__all__ = [
    "Deck",
    "Card",
    "Suit",
    "Rank",
    "parse_cards",
    "HandRank",
    "HandResult",
    "best_hand",
    "classify",
    "evaluate_hand",
    "tie_rank",
    "Seat",
    "Action",
    "ActionType",
    "InvalidActionError",
    "Street",
    "Pot",
    "split_pot",
    "resolve_winners",
    "Table",
    "new_game",
]
