"""Tests for game state models."""

import dataclasses

import pytest

from pesten_engine.cards import Card, Deck, Rank, Suit, create_deck
from pesten_engine.errors import InvariantViolationError
from pesten_engine.player import Player
from pesten_engine.state import Direction, GamePhase, GameState


def _full_state() -> GameState:
    cards = create_deck()
    players = [Player(seat=i, name=f"P{i}") for i in range(4)]
    for i, player in enumerate(players):
        player.hand = cards[i * 7:(i + 1) * 7]
    return GameState(
        deck=Deck(cards[29:]),
        discard_pile=[cards[28]],
        players=players,
        phase=GamePhase.AWAITING_MOVE,
    )


class TestDirection:
    def test_reversed(self):
        assert Direction.CLOCKWISE.reversed == Direction.COUNTER_CLOCKWISE
        assert Direction.COUNTER_CLOCKWISE.reversed == Direction.CLOCKWISE

    def test_values(self):
        assert Direction.CLOCKWISE == 1
        assert Direction.COUNTER_CLOCKWISE == -1


class TestGameState:
    def test_top_card(self):
        state = _full_state()
        assert state.top_card == create_deck()[28]

    def test_invariants_hold(self):
        _full_state().check_invariants()

    def test_duplicate_card_detected(self):
        state = _full_state()
        state.players[0].hand.append(Card(Rank.ACE, Suit.SPADES))
        with pytest.raises(InvariantViolationError):
            state.check_invariants()

    def test_missing_card_detected(self):
        state = _full_state()
        state.deck.draw()
        with pytest.raises(InvariantViolationError):
            state.check_invariants()

    def test_pointer_off_table_detected(self):
        state = _full_state()
        state.current_player = 4
        with pytest.raises(InvariantViolationError):
            state.check_invariants()

    def test_game_over_follows_phase(self):
        state = _full_state()
        assert not state.game_over
        state.phase = GamePhase.GAME_OVER
        assert state.game_over


class TestSnapshot:
    def test_snapshot_copies_state(self):
        state = _full_state()
        snapshot = state.snapshot()
        state.players[0].hand.clear()
        state.discard_pile.append(state.deck.draw())
        assert snapshot.hand_sizes == (7, 7, 7, 7)
        assert snapshot.deck_count == 25
        assert len(snapshot.discard_pile) == 1

    def test_snapshot_is_frozen(self):
        snapshot = _full_state().snapshot()
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.current_player = 2

    def test_snapshot_fields(self):
        snapshot = _full_state().snapshot()
        assert snapshot.names == ("P0", "P1", "P2", "P3")
        assert snapshot.top_card == create_deck()[28]
        assert snapshot.direction == Direction.CLOCKWISE
        assert not snapshot.is_game_over
