"""Tests for pot accounting and splitting."""
import pytest
from pokerengine.game.pot import Pot, split_pot


class TestPot:
    """Test basic pot operations."""

    def test_initial_state(self):
        """Test pot starts empty."""
        pot = Pot()
        assert pot.get_total() == 0

    def test_add_bet(self):
        """Test adding bets to pot."""
        pot = Pot()
        pot.add_bet("Alice", 50)
        pot.add_bet("Bob", 100)

        assert pot.get_total() == 150
        assert pot.get_contribution("Alice") == 50
        assert pot.get_contribution("Bob") == 100
        assert pot.get_contribution("Charlie") == 0

    def test_add_multiple_bets_same_player(self):
        """Test multiple bets from same player."""
        pot = Pot()
        pot.add_bet("Alice", 50)
        pot.add_bet("Alice", 100)

        assert pot.get_total() == 150
        assert pot.get_contribution("Alice") == 150

    def test_reset(self):
        """Test resetting pot."""
        pot = Pot()
        pot.add_bet("Alice", 100)
        pot.reset()

        assert pot.get_total() == 0
        assert pot.get_contribution("Alice") == 0

    def test_to_dict(self):
        """Test pot serialization."""
        pot = Pot()
        pot.add_bet("Alice", 100)
        pot.add_bet("Bob", 100)

        data = pot.to_dict()
        assert data["total"] == 200
        assert data["contributions"] == {"Alice": 100, "Bob": 100}


class TestSplitPot:
    """Test even pot splitting."""

    def test_single_winner(self):
        """Test one winner takes everything."""
        assert split_pot(300, 1) == (300, 0)

    def test_even_split(self):
        """Test an even two-way split."""
        assert split_pot(300, 2) == (150, 0)

    def test_odd_chips_left_over(self):
        """Test the remainder is reported, not assigned."""
        assert split_pot(301, 2) == (150, 1)
        assert split_pot(100, 3) == (33, 1)

    def test_no_winners(self):
        """Test splitting between nobody is an error."""
        with pytest.raises(ValueError):
            split_pot(100, 0)
