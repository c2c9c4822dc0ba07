"""Tests for player state."""

import random

import pytest

from pesten_engine.cards import Card, Rank, Suit
from pesten_engine.errors import IndexOutOfRangeError
from pesten_engine.player import Player

TWO_H = Card(Rank.TWO, Suit.HEARTS)
FIVE_S = Card(Rank.FIVE, Suit.SPADES)
KING_C = Card(Rank.KING, Suit.CLUBS)


class TestReceiveCard:
    def test_appends_to_hand(self):
        player = Player(seat=0, name="You")
        player.receive_card(TWO_H)
        player.receive_card(FIVE_S)
        assert player.hand == [TWO_H, FIVE_S]
        assert player.hand_size == 2

    def test_missing_card_is_an_error(self):
        player = Player(seat=2, name="Player 2")
        with pytest.raises(ValueError):
            player.receive_card(None)
        assert player.hand == []


class TestPlayCard:
    def test_removes_card_at_index(self):
        player = Player(seat=0, name="You", hand=[TWO_H, FIVE_S, KING_C])
        assert player.play_card(1) == FIVE_S
        assert player.hand == [TWO_H, KING_C]

    @pytest.mark.parametrize("index", [3, 10, -1])
    def test_bad_index_fails(self, index):
        player = Player(seat=0, name="You", hand=[TWO_H, FIVE_S, KING_C])
        with pytest.raises(IndexOutOfRangeError):
            player.play_card(index)
        assert player.hand_size == 3

    def test_index_error_is_an_index_error(self):
        with pytest.raises(IndexError):
            Player(seat=0, name="You").play_card(0)

    def test_has_won_when_hand_empty(self):
        player = Player(seat=0, name="You", hand=[TWO_H])
        assert not player.has_won
        player.play_card(0)
        assert player.has_won


class TestRemoveRandomCard:
    def test_empty_hand_returns_none(self):
        assert Player(seat=1, name="P1").remove_random_card(random.Random(0)) is None

    def test_removes_a_card_from_hand(self):
        hand = [TWO_H, FIVE_S, KING_C]
        player = Player(seat=1, name="P1", hand=list(hand))
        removed = player.remove_random_card(random.Random(3))
        assert removed in hand
        assert removed not in player.hand
        assert player.hand_size == 2

    def test_every_card_can_be_chosen(self):
        rng = random.Random(11)
        seen = set()
        for _ in range(200):
            player = Player(seat=1, name="P1", hand=[TWO_H, FIVE_S, KING_C])
            seen.add(player.remove_random_card(rng))
        assert seen == {TWO_H, FIVE_S, KING_C}
