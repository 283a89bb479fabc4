"""Cards and the 52-card deck."""
import random
from enum import Enum
from dataclasses import dataclass
from typing import Optional

from pokerengine.utils.logger import get_logger

logger = get_logger(__name__)


class Suit(str, Enum):
    """Card suits, in sort order."""
    SPADES = "s"
    HEARTS = "h"
    CLUBS = "c"
    DIAMONDS = "d"

    @property
    def order(self) -> int:
        """Position of the suit in sort order."""
        return _SUIT_ORDER[self]

    def __str__(self) -> str:
        return self.value


_SUIT_ORDER = {suit: idx for idx, suit in enumerate(Suit)}


class Rank(int, Enum):
    """Card ranks (2-14, where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value < 10:
            return str(self.value)
        return {10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"}[self.value]


@dataclass(frozen=True)
class Card:
    """A playing card."""
    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return str(self)

    @property
    def sort_key(self) -> tuple[int, int]:
        """Ordering used by the evaluator: rank first, then suit."""
        return (self.rank.value, self.suit.order)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"rank": self.rank.value, "suit": self.suit.value}

    @classmethod
    def from_dict(cls, data: dict) -> "Card":
        """Create from dictionary."""
        return cls(rank=Rank(data["rank"]), suit=Suit(data["suit"]))

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'Ah', 'Ts', '10s', '2c'.

        Args:
            s: Card string (rank + suit).

        Returns:
            Card instance.

        Raises:
            ValueError: If the string is not a card.
        """
        if len(s) < 2:
            raise ValueError(f"Invalid card: {s!r}")
        suit = Suit(s[-1].lower())
        rank_str = s[:-1].upper()

        rank_map = {"A": 14, "K": 13, "Q": 12, "J": 11, "T": 10}
        if rank_str in rank_map:
            return cls(rank=Rank(rank_map[rank_str]), suit=suit)
        if not rank_str.isdigit():
            raise ValueError(f"Invalid card: {s!r}")
        return cls(rank=Rank(int(rank_str)), suit=suit)


def parse_cards(cards: str) -> list[Card]:
    """Parse a space-separated list such as "Ah Kh Qh"."""
    return [Card.from_string(c) for c in cards.split()]


def full_deck() -> list[Card]:
    """All 52 cards in a fixed order."""
    return [Card(rank=rank, suit=suit) for suit in Suit for rank in Rank]


class Deck:
    """A standard 52-card deck, dealt from the tail."""

    def __init__(self, seed: Optional[int] = None):
        """Create an empty deck.

        Args:
            seed: Optional seed for a reproducible shuffle order.
        """
        self._rng = random.Random(seed)
        self._cards: list[Card] = []

    def reset(self, seed: Optional[int] = None) -> None:
        """Refill with all 52 cards and shuffle.

        Args:
            seed: Reseed the shuffle before refilling.
        """
        if seed is not None:
            self._rng.seed(seed)
        self._cards = full_deck()
        self.shuffle()
        logger.debug(f"Deck reset ({len(self._cards)} cards)")

    def shuffle(self) -> None:
        """Shuffle the remaining cards."""
        self._rng.shuffle(self._cards)

    def deal(self) -> Card:
        """Remove and return the card at the tail of the deck.

        Raises:
            ValueError: If the deck is empty.
        """
        if not self._cards:
            raise ValueError("Cannot deal from an empty deck")
        return self._cards.pop()

    def burn(self) -> Card:
        """Burn (discard) one card.

        Returns:
            The burned card.
        """
        return self.deal()

    def clear(self) -> None:
        """Remove every card."""
        self._cards = []

    @property
    def cards(self) -> tuple[Card, ...]:
        """Remaining cards, in dealing order reversed (tail is next)."""
        return tuple(self._cards)

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)
