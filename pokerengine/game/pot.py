"""Pot accounting and pot splitting.

There are no side pots: every chip committed during a hand goes into one
pot, and all winners share it evenly however much each of them put in.
"""
from dataclasses import dataclass, field

from pokerengine.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Pot:
    """Chips committed during the current hand."""

    main_pot: int = 0
    _contributions: dict[str, int] = field(default_factory=dict)  # seat name -> total contributed

    def add_bet(self, name: str, amount: int) -> None:
        """Add chips taken from a seat's stack.

        Args:
            name: Seat name.
            amount: Chips moved into the pot.
        """
        self._contributions[name] = self._contributions.get(name, 0) + amount
        self.main_pot += amount

    def get_total(self) -> int:
        """Get total pot amount."""
        return self.main_pot

    def get_contribution(self, name: str) -> int:
        """Get a seat's total contribution this hand."""
        return self._contributions.get(name, 0)

    def reset(self) -> None:
        """Empty the pot for a new hand."""
        self.main_pot = 0
        self._contributions = {}

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total": self.main_pot,
            "contributions": dict(self._contributions),
        }


def split_pot(amount: int, winner_count: int) -> tuple[int, int]:
    """Split a pot evenly between winners.

    Args:
        amount: Pot size.
        winner_count: Number of winners.

    Returns:
        (share per winner, chips left over). The leftover is not assigned to
        anyone.
    """
    if winner_count <= 0:
        raise ValueError("Cannot split a pot between zero winners")
    share, remainder = divmod(amount, winner_count)
    if remainder:
        logger.debug(f"Split of {amount} between {winner_count} leaves {remainder} undistributed")
    return share, remainder
