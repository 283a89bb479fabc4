"""Betting vocabulary: streets, actions and the rule-violation error."""
from enum import Enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pokerengine.game.player import Seat


class InvalidActionError(ValueError):
    """An action or call that the rules do not allow right now.

    Raised before any state is touched, so the table is unchanged and the
    caller may simply prompt again.
    """


class Street(str, Enum):
    """Betting rounds of a hand, in order."""
    PRE = "pre"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"

    @property
    def next(self) -> "Street":
        """The street that follows; SHOWDOWN is terminal."""
        return _NEXT_STREET[self]


_NEXT_STREET = {
    Street.PRE: Street.FLOP,
    Street.FLOP: Street.TURN,
    Street.TURN: Street.RIVER,
    Street.RIVER: Street.SHOWDOWN,
    Street.SHOWDOWN: Street.SHOWDOWN,
}

# Community cards dealt when entering a street
BOARD_CARDS = {
    Street.FLOP: 3,
    Street.TURN: 1,
    Street.RIVER: 1,
}


class ActionType(str, Enum):
    """Player action types."""
    BLIND = "blind"
    CHECK = "check"
    CALL = "call"
    FOLD = "fold"
    RAISE = "raise"


@dataclass(frozen=True)
class Action:
    """One entry in a table's action log."""
    type: ActionType
    player: str
    amount: int
    street: Street

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "type": self.type.value,
            "player": self.player,
            "amount": self.amount,
            "street": self.street.value,
        }


def min_raise_amount(big_blind: int, previous_raise: int, current_bet: int) -> int:
    """Smallest amount a regular (not all-in) raise may put in."""
    return max(big_blind, previous_raise + current_bet)


def get_valid_actions(seat: "Seat", current_bet: int) -> list[ActionType]:
    """Get the actions a seat could take if it were its turn.

    Args:
        seat: The seat to check.
        current_bet: Table's highest bet this round.

    Returns:
        List of valid action types (empty once the seat has folded or acted).
    """
    if seat.has_folded or seat.has_acted:
        return []

    actions = [ActionType.FOLD]

    if seat.current_bet == current_bet:
        actions.append(ActionType.CHECK)
    elif seat.current_bet < current_bet:
        actions.append(ActionType.CALL)

    # Going all-in is always a legal raise
    if seat.stack > 0:
        actions.append(ActionType.RAISE)

    return actions
