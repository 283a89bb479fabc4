"""Tests for logging setup."""
import logging

import pytest
from pokerengine.game.betting import InvalidActionError
from pokerengine.utils.logger import ROOT_LOGGER, get_logger, set_level


class TestLogger:
    """Test engine loggers."""

    def test_module_loggers_nest_under_root(self):
        """Test module names are kept under the engine namespace."""
        assert get_logger("pokerengine.game.table").name == "pokerengine.game.table"
        assert get_logger("host").name == "pokerengine.host"
        assert get_logger().name == ROOT_LOGGER

    def test_single_handler(self):
        """Test repeated lookups do not add handlers."""
        get_logger("a")
        get_logger("b")
        assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1

    def test_set_level(self):
        """Test the engine level can be changed at runtime."""
        root = logging.getLogger(ROOT_LOGGER)
        previous = root.level
        try:
            set_level("debug")
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)

    def test_rejections_are_logged(self, caplog):
        """Test rejected actions log a warning."""
        from pokerengine.game.table import new_game

        table = new_game(1000, 100)
        table.add_player("Alice")
        table.add_player("Bob")
        with caplog.at_level(logging.WARNING, logger=ROOT_LOGGER):
            with pytest.raises(InvalidActionError):
                table.check("Alice")
        assert any("Rejected" in record.getMessage() for record in caplog.records)
