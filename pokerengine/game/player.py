"""Seat model."""
from dataclasses import dataclass, field

from pokerengine.game.deck import Card
from pokerengine.game.hand_eval import HandRank


@dataclass
class Seat:
    """A player's seat at the table and their per-hand state."""

    name: str
    stack: int = 0
    current_bet: int = 0
    has_folded: bool = False
    has_acted: bool = False
    hole_cards: list[Card] = field(default_factory=list)
    best_combo: list[Card] = field(default_factory=list)
    hand_rank: HandRank = HandRank.HIGH_CARD

    def reset_for_new_hand(self) -> None:
        """Clear every per-hand field."""
        self.current_bet = 0
        self.has_folded = False
        self.has_acted = False
        self.hole_cards = []
        self.best_combo = []
        self.hand_rank = HandRank.HIGH_CARD

    def reset_for_round(self) -> None:
        """Clear the per-street betting fields."""
        self.current_bet = 0
        self.has_acted = False

    def commit(self, amount: int) -> int:
        """Move chips from the stack into the current-round bet.

        Args:
            amount: Chips to commit. Must not exceed the stack.

        Returns:
            The amount committed.
        """
        if amount < 0 or amount > self.stack:
            raise ValueError(f"{self.name} cannot commit {amount} from a stack of {self.stack}")
        self.stack -= amount
        self.current_bet += amount
        return amount

    def fold(self) -> None:
        """Fold the hand."""
        self.has_folded = True
        self.has_acted = True

    def receive_card(self, card: Card) -> None:
        """Take one hole card."""
        self.hole_cards.append(card)

    def win_pot(self, amount: int) -> None:
        """Win chips from the pot.

        Args:
            amount: Amount won.
        """
        self.stack += amount

    @property
    def is_active(self) -> bool:
        """Still contesting the pot."""
        return not self.has_folded

    @property
    def is_all_in(self) -> bool:
        """Has chips in the hand and nothing left behind."""
        return self.stack == 0 and len(self.hole_cards) > 0

    def to_dict(self, hide_cards: bool = True) -> dict:
        """Convert to dictionary for serialization.

        Args:
            hide_cards: If True, don't include hole cards.

        Returns:
            Seat state dictionary.
        """
        data = {
            "name": self.name,
            "stack": self.stack,
            "current_bet": self.current_bet,
            "has_folded": self.has_folded,
            "has_acted": self.has_acted,
            "is_all_in": self.is_all_in,
            "has_cards": len(self.hole_cards) > 0,
        }

        if not hide_cards:
            data["hole_cards"] = [str(c) for c in self.hole_cards]
            if self.best_combo:
                data["best_combo"] = [str(c) for c in self.best_combo]
                data["hand_rank"] = self.hand_rank.name

        return data
