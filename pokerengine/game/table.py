"""Table state machine for No-Limit Texas Hold'em.

A ``Table`` owns its seats, deck, board and pot and is driven one call at a
time by a host (UI, network layer, simulator). Every action checks all of its
preconditions before it touches anything, so a rejected action leaves the
table exactly as it was. The table has no locks of its own; a host running
several tasks against one table must serialise the calls.
"""
from typing import Optional

from pokerengine.config import config
from pokerengine.game.betting import (
    BOARD_CARDS,
    Action,
    ActionType,
    InvalidActionError,
    Street,
    get_valid_actions,
    min_raise_amount,
)
from pokerengine.game.deck import Card, Deck
from pokerengine.game.hand_eval import describe
from pokerengine.game.player import Seat
from pokerengine.game.pot import Pot, split_pot
from pokerengine.game.showdown import resolve_winners
from pokerengine.utils.logger import get_logger

logger = get_logger(__name__)

# Two hole cards each, five board cards and three burns out of 52
MAX_SEATS_PER_DECK = 22


class Table:
    """A poker table playing one hand at a time."""

    def __init__(
        self,
        starting_stack: Optional[int] = None,
        big_blind: Optional[int] = None,
        max_players: Optional[int] = None,
        seed: Optional[int] = None,
    ):
        """Initialize a poker table.

        Args:
            starting_stack: Chips each new seat starts with.
            big_blind: Big blind, also the minimum raise.
            max_players: Maximum seats at the table.
            seed: Optional seed for reproducible shuffles.

        Raises:
            ValueError: If the stakes or seat limit are out of range.
        """
        self.starting_stack = config.starting_stack if starting_stack is None else starting_stack
        self.big_blind = config.big_blind if big_blind is None else big_blind
        self.max_players = config.max_players if max_players is None else max_players

        if self.starting_stack <= 0:
            raise ValueError(f"Starting stack must be positive, got {self.starting_stack}")
        if self.big_blind <= 0:
            raise ValueError(f"Big blind must be positive, got {self.big_blind}")
        if not 2 <= self.max_players <= MAX_SEATS_PER_DECK:
            raise ValueError(
                f"Max players must be between 2 and {MAX_SEATS_PER_DECK}, got {self.max_players}"
            )

        self.seats: list[Seat] = []
        self.button: int = 0
        self.turn_marker: int = 1
        self.street = Street.PRE
        self.deck = Deck(seed)
        self.board: list[Card] = []
        self.muck: list[Card] = []  # Burned cards
        self.pot = Pot()
        self.current_bet: int = 0
        self.previous_bet: int = 0
        self.previous_raise: int = 0
        self.actions: list[Action] = []
        self.winner_indices: list[int] = []
        self.hand_number: int = 0
        self._paid_out = False

    @property
    def small_blind(self) -> int:
        return self.big_blind // 2

    @property
    def winners(self) -> list[Seat]:
        """Seats that won the last showdown."""
        return [self.seats[idx] for idx in self.winner_indices]

    @property
    def current_seat(self) -> Seat:
        """The seat at the turn marker."""
        return self.seats[self.turn_marker]

    @property
    def is_street_complete(self) -> bool:
        """Every seat has acted (or folded) this round."""
        return bool(self.seats) and all(s.has_acted or s.has_folded for s in self.seats)

    def _invalid(self, message: str) -> InvalidActionError:
        logger.warning(f"Rejected: {message}")
        return InvalidActionError(message)

    # Seat management

    def add_player(self, name: str) -> Seat:
        """Seat a new player with the starting stack.

        Args:
            name: Player name, unique at this table.

        Returns:
            The new seat.

        Raises:
            InvalidActionError: If a hand is in progress, the name is taken
                or the table is full.
        """
        if not name:
            raise self._invalid("Player name is required")
        if self._hand_in_progress():
            raise self._invalid(f"Cannot seat {name} while a hand is in progress")
        if self.get_seat(name) is not None:
            raise self._invalid(f"{name} is already seated")
        if len(self.seats) >= self.max_players:
            raise self._invalid(f"Table is full ({self.max_players} seats)")

        seat = Seat(name=name, stack=self.starting_stack)
        self.seats.append(seat)
        # Blinds are posted from the turn marker, so keep it left of the button
        self.turn_marker = self._first_to_act()
        logger.info(f"{name} sits down at seat {len(self.seats) - 1} with {seat.stack}")
        return seat

    def get_seat(self, name: str) -> Optional[Seat]:
        """Get a seat by player name."""
        for seat in self.seats:
            if seat.name == name:
                return seat
        return None

    def _hand_in_progress(self) -> bool:
        return bool(self.actions) or any(seat.hole_cards for seat in self.seats)

    def _require_players(self) -> None:
        if len(self.seats) < 2:
            raise self._invalid(f"Need at least 2 players, have {len(self.seats)}")

    def _first_to_act(self) -> int:
        return (self.button + 1) % len(self.seats)

    def _increment_turn(self) -> None:
        self.turn_marker = (self.turn_marker + 1) % len(self.seats)

    def _record(self, action_type: ActionType, seat: Seat, amount: int = 0) -> None:
        self.actions.append(Action(type=action_type, player=seat.name, amount=amount, street=self.street))

    # Hand setup

    def init_deck(self, seed: Optional[int] = None) -> None:
        """Shuffle a fresh 52-card deck for the next hand.

        Args:
            seed: Optional seed for this shuffle.

        Raises:
            InvalidActionError: If cards are already out for this hand.
        """
        if any(seat.hole_cards for seat in self.seats) or self.board:
            raise self._invalid("Cannot reshuffle while cards are dealt; call prep_next_hand() first")
        self.deck.reset(seed)
        self.muck = []
        self.hand_number += 1
        logger.info(f"Hand #{self.hand_number}: deck shuffled, button on {self._button_name()}")

    def _button_name(self) -> str:
        return self.seats[self.button].name if self.seats else "nobody"

    def force_blinds(self) -> None:
        """Post the small then the big blind from the two seats after the button."""
        self._require_players()
        if any(action.type == ActionType.BLIND for action in self.actions):
            raise self._invalid("Blinds have already been posted this hand")

        self._place_blind(self.small_blind)
        self._place_blind(self.big_blind)

    def _place_blind(self, amount: int) -> None:
        seat = self.current_seat
        amount = min(amount, seat.stack)

        seat.commit(amount)
        self.pot.add_bet(seat.name, amount)
        self.current_bet = max(self.current_bet, seat.current_bet)
        self.previous_raise = self.big_blind
        self.previous_bet = amount

        self._record(ActionType.BLIND, seat, amount)
        logger.info(f"{seat.name} posts blind {amount}")
        self._increment_turn()

    def deal_hole_cards(self) -> None:
        """Deal two hole cards to every seat, one per pass, starting after the button.

        The turn marker is left where it was.

        Raises:
            InvalidActionError: If hole cards were already dealt this hand.
            ValueError: If the deck has not been initialised.
        """
        self._require_players()
        if any(seat.hole_cards for seat in self.seats):
            raise self._invalid("Hole cards have already been dealt this hand")
        if len(self.deck) < 2 * len(self.seats):
            raise ValueError(f"Deck has {len(self.deck)} cards; call init_deck() before dealing")

        first = self._first_to_act()
        order = [(first + offset) % len(self.seats) for offset in range(len(self.seats))]
        for _ in range(2):
            for idx in order:
                self.seats[idx].receive_card(self.deck.deal())

        logger.debug(f"Dealt hole cards to {len(self.seats)} seats, {len(self.deck)} cards left")

    # Player actions

    def _validate_turn(self, name: str) -> Seat:
        self._require_players()
        seat = self.current_seat
        if seat.name != name:
            raise self._invalid(f"It is {seat.name}'s turn, not {name}'s")
        if seat.has_folded:
            raise self._invalid(f"{name} has folded")
        if seat.has_acted:
            raise self._invalid(f"{name} has already acted this round")
        return seat

    def check(self, name: str) -> None:
        """Check.

        Raises:
            InvalidActionError: Out of turn, or facing a bet.
        """
        seat = self._validate_turn(name)
        if seat.current_bet != self.current_bet:
            raise self._invalid(f"{name} cannot check facing a bet of {self.current_bet}")

        seat.has_acted = True
        self._record(ActionType.CHECK, seat)
        logger.info(f"{name} checks")
        self._increment_turn()

    def call(self, name: str) -> None:
        """Call the outstanding bet, or as much of it as the stack covers.

        Raises:
            InvalidActionError: Out of turn, or nothing to call.
        """
        seat = self._validate_turn(name)
        if seat.current_bet >= self.current_bet:
            raise self._invalid(f"{name} has nothing to call")

        bet = min(self.current_bet - seat.current_bet, seat.stack)
        seat.commit(bet)
        self.pot.add_bet(seat.name, bet)
        self.previous_bet = bet
        seat.has_acted = True

        self._record(ActionType.CALL, seat, bet)
        logger.info(f"{name} calls {bet}")
        self._increment_turn()

    def fold(self, name: str) -> None:
        """Fold.

        Raises:
            InvalidActionError: Out of turn.
        """
        seat = self._validate_turn(name)
        seat.fold()
        self._record(ActionType.FOLD, seat)
        logger.info(f"{name} folds")
        self._increment_turn()

    def raise_bet(self, name: str, amount: int) -> None:
        """Raise by putting ``amount`` more chips in.

        Putting in the whole stack is an all-in and is always allowed. Any
        smaller amount must be at least the big blind and at least the
        previous raise plus the current bet.

        Args:
            name: Acting player.
            amount: Chips added with this action.

        Raises:
            InvalidActionError: Out of turn, or the amount is not a legal raise.
        """
        seat = self._validate_turn(name)
        if amount <= 0:
            raise self._invalid(f"{name} must raise a positive amount, got {amount}")

        all_in = amount == seat.stack
        if all_in:
            increment = amount - self.previous_bet
            new_previous_raise = max(self.previous_raise, increment)
            new_current_bet = max(self.current_bet, amount + seat.current_bet)
        else:
            minimum = min_raise_amount(self.big_blind, self.previous_raise, self.current_bet)
            if amount < minimum:
                raise self._invalid(f"{name} must raise at least {minimum}, got {amount}")
            if amount > seat.stack:
                raise self._invalid(f"{name} cannot raise {amount} with a stack of {seat.stack}")
            new_previous_raise = amount - self.previous_bet
            new_current_bet = amount + seat.current_bet

        seat.commit(amount)
        self.pot.add_bet(seat.name, amount)
        self.previous_raise = new_previous_raise
        self.current_bet = new_current_bet
        self.previous_bet = amount

        # Re-open the action for everyone else
        for other in self.seats:
            other.has_acted = False
        seat.has_acted = True

        self._record(ActionType.RAISE, seat, amount)
        if all_in:
            logger.info(f"{name} raises all-in for {amount} (bet now {self.current_bet})")
        else:
            logger.info(f"{name} raises {amount} (bet now {self.current_bet})")
        self._increment_turn()

    def advance_to_active_seat(self) -> Seat:
        """Move the turn marker past folded seats.

        The engine never skips seats on its own; hosts that want folded
        players passed over call this before prompting.

        Returns:
            The seat now at the turn marker.
        """
        self._require_players()
        for _ in range(len(self.seats)):
            if not self.current_seat.has_folded:
                break
            self._increment_turn()
        return self.current_seat

    def valid_actions(self, name: str) -> list[ActionType]:
        """Actions ``name`` may take right now (empty when it is not their turn)."""
        if len(self.seats) < 2 or self.current_seat.name != name:
            return []
        return get_valid_actions(self.current_seat, self.current_bet)

    # Street progression

    def progress_street(self) -> bool:
        """Move to the next street once every seat has acted.

        Returns:
            True if the street advanced.
        """
        if self.street == Street.SHOWDOWN or not self.is_street_complete:
            return False

        next_street = self.street.next
        count = BOARD_CARDS.get(next_street, 0)
        if count and len(self.deck) < count + 1:
            raise ValueError(f"Deck has {len(self.deck)} cards, cannot deal the {next_street.value}")

        if count:
            self.muck.append(self.deck.burn())
            for _ in range(count):
                self.board.append(self.deck.deal())

        self.street = next_street
        if next_street != Street.SHOWDOWN:
            for seat in self.seats:
                seat.reset_for_round()
            self.previous_bet = 0
            self.current_bet = 0
            self.previous_raise = 0
            self.turn_marker = self._first_to_act()

        logger.info(f"Street is now {self.street.value}, board {self.board}, pot {self.pot.get_total()}")
        return True

    # Showdown

    def find_winner(self) -> None:
        """Evaluate the live hands and record the winners.

        Raises:
            InvalidActionError: If the hand has not reached showdown.
        """
        if self.street != Street.SHOWDOWN:
            raise self._invalid(f"Cannot find a winner during {self.street.value}")

        self.winner_indices = resolve_winners(self.seats, self.board)
        for seat in self.winners:
            logger.info(f"Winner: {seat.name} with {describe(seat.best_combo)}")

    def payout_winners(self) -> dict[str, int]:
        """Share the pot evenly between the winners.

        Integer division; any odd chips stay in the pot, which is only
        emptied by ``prep_next_hand``.

        Returns:
            Dict of winner name -> amount credited.

        Raises:
            InvalidActionError: If no winners were found or the pot was
                already paid this hand.
        """
        if not self.winner_indices:
            raise self._invalid("No winners to pay; call find_winner() at showdown first")
        if self._paid_out:
            raise self._invalid("The pot has already been paid out this hand")

        share, remainder = split_pot(self.pot.get_total(), len(self.winner_indices))
        winnings: dict[str, int] = {}
        for seat in self.winners:
            seat.win_pot(share)
            winnings[seat.name] = share

        self._paid_out = True
        logger.info(f"Hand #{self.hand_number} paid {winnings}, {remainder} undistributed")
        return winnings

    def prep_next_hand(self) -> None:
        """Move the button and clear everything that belongs to the last hand."""
        if self.seats:
            self.button = (self.button + 1) % len(self.seats)

        self.pot.reset()
        self.board = []
        self.muck = []
        self.deck.clear()
        self.actions = []
        self.winner_indices = []
        self._paid_out = False

        for seat in self.seats:
            seat.reset_for_new_hand()

        self.current_bet = 0
        self.previous_bet = 0
        self.previous_raise = 0
        self.street = Street.PRE
        if self.seats:
            self.turn_marker = self._first_to_act()

        logger.info(f"Ready for next hand, button on {self._button_name()}")

    # State serialization

    def to_dict(self, viewer: Optional[str] = None) -> dict:
        """Snapshot of the table as seen by ``viewer``.

        Args:
            viewer: Player name whose hole cards are shown. Live hands are
                shown to everyone at showdown.

        Returns:
            State dictionary.
        """
        players = []
        for idx, seat in enumerate(self.seats):
            reveal = seat.name == viewer or (self.street == Street.SHOWDOWN and seat.is_active)
            data = seat.to_dict(hide_cards=not reveal)
            data["seat"] = idx
            data["is_you"] = seat.name == viewer
            players.append(data)

        current_player = self.current_seat.name if len(self.seats) >= 2 else None

        return {
            "hand_number": self.hand_number,
            "street": self.street.value,
            "button": self.button,
            "turn_marker": self.turn_marker,
            "current_player": current_player,
            "big_blind": self.big_blind,
            "small_blind": self.small_blind,
            "pot": self.pot.get_total(),
            "contributions": self.pot.to_dict()["contributions"],
            "current_bet": self.current_bet,
            "previous_bet": self.previous_bet,
            "previous_raise": self.previous_raise,
            "min_raise": min_raise_amount(self.big_blind, self.previous_raise, self.current_bet),
            "board": [str(c) for c in self.board],
            "players": players,
            "valid_actions": [a.value for a in self.valid_actions(viewer)] if viewer else [],
            "actions": [a.to_dict() for a in self.actions],
            "winners": [seat.name for seat in self.winners],
        }


def new_game(starting_stack: int, big_blind: int) -> Table:
    """Create an empty table with the given stakes."""
    return Table(starting_stack=starting_stack, big_blind=big_blind)
