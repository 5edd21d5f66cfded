"""
Tests for the terminal front-end.
"""

import pytest

from ..cli import main, render_board
from .conftest import ordered_cards
from ..engine_core.state import GameState


class TestRenderBoard:
    """Tests for the text grid."""

    def test_face_down_shows_positions(self):
        state = GameState(game_id="g", cards=ordered_cards())
        lines = render_board(state).splitlines()

        assert len(lines) == 4
        assert "0" in lines[0]
        assert "15" in lines[3]
        assert "I" not in render_board(state)

    def test_face_up_and_matched(self):
        state = GameState(game_id="g", cards=ordered_cards())
        state = state.with_cards({
            0: state.get_card(0).flip_up(),
            1: state.get_card(1).mark_matched(),
        })
        first_row = render_board(state).splitlines()[0]

        assert "[   I]" in first_row
        assert "(  II)" in first_row


class TestMain:
    """Tests for argument handling."""

    def test_no_command_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1
        assert "play" in capsys.readouterr().out

    def test_quit_immediately(self, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", lambda prompt="": "q")
        main(["play", "--seed", "1"])
        assert "Find all the matching pairs" in capsys.readouterr().out
