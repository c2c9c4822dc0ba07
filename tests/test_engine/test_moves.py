"""Tests for move definitions."""

import dataclasses

import pytest

from pesten_engine.moves import Draw, MoveType, Pass, PlayCard


class TestMoveTypes:
    def test_move_types(self):
        assert PlayCard(0).move_type == MoveType.PLAY
        assert Draw().move_type == MoveType.DRAW
        assert Pass().move_type == MoveType.PASS

    def test_string_forms(self):
        assert str(PlayCard(3)) == "Play card #3"
        assert str(Draw()) == "Draw"
        assert str(Pass()) == "Pass"


class TestMoveValues:
    def test_equality(self):
        assert PlayCard(2) == PlayCard(2)
        assert PlayCard(2) != PlayCard(3)
        assert Draw() == Draw()
        assert Draw() != Pass()

    def test_moves_are_frozen(self):
        move = PlayCard(1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            move.index = 2
