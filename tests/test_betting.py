"""Tests for betting actions and their validation."""
import pytest
from pokerengine.game.betting import ActionType, InvalidActionError, Street, get_valid_actions, min_raise_amount
from pokerengine.game.player import Seat
from pokerengine.game.table import Table


def make_table(names=("Alice", "Bob", "Charlie"), stack: int = 5000, big_blind: int = 100) -> Table:
    """Create a table with seated players, a shuffled deck, blinds and hole cards."""
    table = Table(starting_stack=stack, big_blind=big_blind, seed=1)
    for name in names:
        table.add_player(name)
    table.init_deck()
    table.force_blinds()
    table.deal_hole_cards()
    return table


def snapshot(table: Table) -> tuple:
    """Everything an action could change."""
    return (
        table.pot.get_total(),
        table.current_bet,
        table.previous_bet,
        table.previous_raise,
        table.turn_marker,
        table.street,
        len(table.actions),
        [(s.stack, s.current_bet, s.has_folded, s.has_acted) for s in table.seats],
    )


class TestBlinds:
    """Test forced blinds."""

    def test_three_handed_blinds(self):
        """Test blinds come from the two seats after the button."""
        table = make_table()

        assert table.pot.get_total() == 150
        assert table.current_bet == 100
        assert table.seats[0].stack == 5000
        assert table.seats[1].stack == 4950
        assert table.seats[2].stack == 4900
        assert table.previous_raise == 100
        assert table.previous_bet == 100

    def test_blinds_do_not_count_as_acting(self):
        """Test posting a blind leaves the seat still to act."""
        table = make_table()
        assert not any(seat.has_acted for seat in table.seats)

    def test_button_acts_first_after_blinds(self):
        """Test the turn moves past both blinds."""
        table = make_table()
        assert table.turn_marker == 0
        assert table.current_seat.name == "Alice"

    def test_blinds_logged(self):
        """Test blinds appear in the action log."""
        table = make_table()
        assert [(a.type, a.player, a.amount) for a in table.actions] == [
            (ActionType.BLIND, "Bob", 50),
            (ActionType.BLIND, "Charlie", 100),
        ]

    def test_short_stack_blind_is_capped(self):
        """Test a blind larger than the stack takes the whole stack."""
        table = Table(starting_stack=5000, big_blind=100)
        for name in ("Alice", "Bob", "Charlie"):
            table.add_player(name)
        table.seats[2].stack = 30
        table.init_deck()
        table.force_blinds()

        assert table.seats[2].stack == 0
        assert table.seats[2].current_bet == 30
        assert table.pot.get_total() == 80
        assert table.current_bet == 50

    def test_cannot_post_twice(self):
        """Test blinds are only posted once per hand."""
        table = make_table()
        before = snapshot(table)

        with pytest.raises(InvalidActionError):
            table.force_blinds()
        assert snapshot(table) == before

    def test_odd_big_blind(self):
        """Test the small blind rounds down."""
        table = make_table(big_blind=25)
        assert table.seats[1].current_bet == 12
        assert table.pot.get_total() == 37


class TestCheckCallFold:
    """Test the simple actions."""

    def test_call(self):
        """Test calling matches the current bet."""
        table = make_table()
        table.call("Alice")

        alice = table.get_seat("Alice")
        assert alice.stack == 4900
        assert alice.current_bet == 100
        assert alice.has_acted
        assert table.pot.get_total() == 250
        assert table.previous_bet == 100
        assert table.turn_marker == 1

    def test_small_blind_calls_difference(self):
        """Test the small blind only adds what is missing."""
        table = make_table()
        table.call("Alice")
        table.call("Bob")

        assert table.get_seat("Bob").stack == 4900
        assert table.previous_bet == 50
        assert table.pot.get_total() == 300

    def test_big_blind_checks_option(self):
        """Test the big blind may check when called."""
        table = make_table()
        table.call("Alice")
        table.call("Bob")
        table.check("Charlie")

        assert table.get_seat("Charlie").has_acted
        assert table.is_street_complete

    def test_cannot_check_facing_bet(self):
        """Test checking with a bet outstanding is rejected."""
        table = make_table()
        before = snapshot(table)

        with pytest.raises(InvalidActionError):
            table.check("Alice")
        assert snapshot(table) == before

    def test_cannot_call_with_nothing_to_call(self):
        """Test the big blind cannot call its own bet."""
        table = make_table()
        table.call("Alice")
        table.call("Bob")
        before = snapshot(table)

        with pytest.raises(InvalidActionError):
            table.call("Charlie")
        assert snapshot(table) == before

    def test_short_call_takes_whole_stack(self):
        """Test calling more than the stack puts the stack in."""
        table = make_table()
        table.seats[0].stack = 40
        table.call("Alice")

        assert table.seats[0].stack == 0
        assert table.seats[0].current_bet == 40
        assert table.pot.get_total() == 190

    def test_fold(self):
        """Test folding marks the seat folded and acted."""
        table = make_table()
        table.fold("Alice")

        alice = table.get_seat("Alice")
        assert alice.has_folded
        assert alice.has_acted
        assert alice.stack == 5000
        assert table.pot.get_total() == 150
        assert table.turn_marker == 1

    def test_out_of_turn(self):
        """Test acting out of turn is rejected for every action."""
        table = make_table()
        before = snapshot(table)

        for action in (table.check, table.call, table.fold):
            with pytest.raises(InvalidActionError):
                action("Bob")
        with pytest.raises(InvalidActionError):
            table.raise_bet("Bob", 300)
        with pytest.raises(InvalidActionError):
            table.call("Nobody")
        assert snapshot(table) == before

    def test_folded_seat_cannot_act(self):
        """Test a folded seat is rejected when the turn comes back."""
        table = make_table()
        table.fold("Alice")
        table.call("Bob")
        table.check("Charlie")
        table.progress_street()
        table.check("Bob")
        table.check("Charlie")
        before = snapshot(table)

        with pytest.raises(InvalidActionError):
            table.check("Alice")
        assert snapshot(table) == before

    def test_already_acted(self):
        """Test a seat cannot act twice in a round."""
        table = make_table()
        table.call("Alice")
        table.call("Bob")
        table.check("Charlie")
        before = snapshot(table)

        with pytest.raises(InvalidActionError):
            table.call("Alice")
        assert snapshot(table) == before

    def test_actions_logged_with_street(self):
        """Test every action lands in the log with its street."""
        table = make_table()
        table.call("Alice")
        table.fold("Bob")

        assert [(a.type, a.player, a.street) for a in table.actions[2:]] == [
            (ActionType.CALL, "Alice", Street.PRE),
            (ActionType.FOLD, "Bob", Street.PRE),
        ]


class TestRaise:
    """Test raise validation and effects."""

    def test_min_raise_amount(self):
        """Test the minimum regular raise."""
        assert min_raise_amount(100, 100, 100) == 200
        assert min_raise_amount(100, 0, 0) == 100

    def test_raise(self):
        """Test a legal raise."""
        table = make_table()
        table.raise_bet("Alice", 200)

        alice = table.get_seat("Alice")
        assert alice.stack == 4800
        assert alice.current_bet == 200
        assert table.current_bet == 200
        assert table.previous_raise == 100
        assert table.previous_bet == 200
        assert table.pot.get_total() == 350
        assert table.turn_marker == 1

    def test_raise_reopens_action(self):
        """Test a raise clears everyone else's acted flag."""
        table = make_table()
        table.call("Alice")
        table.raise_bet("Bob", 250)

        assert not table.get_seat("Alice").has_acted
        assert table.get_seat("Bob").has_acted
        assert not table.is_street_complete

        table.call("Charlie")
        table.call("Alice")
        assert table.is_street_complete
        assert table.pot.get_total() == 900
        assert all(seat.current_bet == 300 for seat in table.seats)

    @pytest.mark.parametrize("amount", [50, 150, 199])
    def test_raise_below_minimum(self, amount):
        """Test undersized raises are rejected without side effects."""
        table = make_table()
        before = snapshot(table)

        with pytest.raises(InvalidActionError):
            table.raise_bet("Alice", amount)
        assert snapshot(table) == before

    def test_raise_below_big_blind_postflop(self):
        """Test a bet smaller than the big blind is rejected on the flop."""
        table = make_table()
        table.call("Alice")
        table.call("Bob")
        table.check("Charlie")
        table.progress_street()
        before = snapshot(table)

        with pytest.raises(InvalidActionError):
            table.raise_bet("Bob", 99)
        assert snapshot(table) == before

        table.raise_bet("Bob", 100)
        assert table.current_bet == 100

    def test_raise_above_stack(self):
        """Test raising more than the stack is rejected."""
        table = make_table()
        before = snapshot(table)

        with pytest.raises(InvalidActionError):
            table.raise_bet("Alice", 6000)
        assert snapshot(table) == before

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_raise(self, amount):
        """Test zero and negative raises are rejected."""
        table = make_table()
        before = snapshot(table)

        with pytest.raises(InvalidActionError):
            table.raise_bet("Alice", amount)
        assert snapshot(table) == before

    def test_all_in(self):
        """Test moving the whole stack in."""
        table = make_table(stack=1000)
        table.raise_bet("Alice", 1000)

        alice = table.get_seat("Alice")
        assert alice.stack == 0
        assert alice.is_all_in
        assert table.current_bet == 1000
        assert table.previous_raise == 900
        assert table.previous_bet == 1000
        assert table.pot.get_total() == 1150

    def test_all_in_calls(self):
        """Test equal stacks calling an all-in."""
        table = make_table(stack=1000)
        table.raise_bet("Alice", 1000)
        table.call("Bob")
        table.call("Charlie")

        assert table.pot.get_total() == 3000
        assert all(seat.stack == 0 for seat in table.seats)
        assert table.is_street_complete

    def test_short_all_in_is_allowed(self):
        """Test an all-in below the minimum raise is accepted."""
        table = make_table()
        table.seats[0].stack = 60
        table.raise_bet("Alice", 60)

        assert table.seats[0].stack == 0
        assert table.current_bet == 100
        assert table.previous_raise == 100
        assert table.previous_bet == 60
        assert table.pot.get_total() == 210

    def test_small_all_in_keeps_previous_raise(self):
        """Test an all-in only raises the minimum when it is a bigger raise."""
        table = make_table()
        table.raise_bet("Alice", 400)
        assert table.previous_raise == 300

        table.seats[1].stack = 500
        table.raise_bet("Bob", 500)
        assert table.current_bet == 550
        assert table.previous_raise == 300
        assert table.previous_bet == 500


class TestValidActions:
    """Test the legal action query."""

    def test_facing_bet(self):
        """Test options when facing the big blind."""
        table = make_table()
        assert table.valid_actions("Alice") == [ActionType.FOLD, ActionType.CALL, ActionType.RAISE]

    def test_not_your_turn(self):
        """Test nobody else gets options."""
        table = make_table()
        assert table.valid_actions("Bob") == []

    def test_unbet_round(self):
        """Test options with nothing to call."""
        seat = Seat(name="Alice", stack=100)
        assert get_valid_actions(seat, 0) == [ActionType.FOLD, ActionType.CHECK, ActionType.RAISE]

    def test_folded_seat(self):
        """Test a folded seat has no options."""
        seat = Seat(name="Alice", stack=100, has_folded=True)
        assert get_valid_actions(seat, 0) == []
