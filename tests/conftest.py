"""Shared fixtures for Pesten tests."""

from __future__ import annotations

from collections import Counter

import pytest

from pesten_engine.cards import UNIVERSE, Card, Deck
from pesten_engine.game import PestenGame
from pesten_engine.rules import INITIAL_HAND_SIZE, NUM_SEATS
from pesten_engine.state import Direction, GamePhase


def _build_stacked_deck(hands: dict[int, list[Card]], top: Card) -> list[Card]:
    """Order a full deck so that dealing gives ``hands`` and flips ``top``.

    Cards are drawn from the end of the list, one per seat per round.
    """
    draw_order = []
    for round_ in range(INITIAL_HAND_SIZE):
        for seat in range(NUM_SEATS):
            draw_order.append(hands[seat][round_])
    draw_order.append(top)

    rest = UNIVERSE - Counter(draw_order)
    return list(rest.elements()) + list(reversed(draw_order))


def _arrange(
    game: PestenGame,
    hands: dict[int, list[Card]],
    top: Card,
    current_player: int = 0,
    direction: Direction = Direction.CLOCKWISE,
    deck: list[Card] | None = None,
) -> None:
    """Put a started game into an exact position while conserving every card.

    Cards not named go into the deck, or under the top card when ``deck`` is
    given explicitly.
    """
    used: Counter[Card] = Counter([top])
    for hand in hands.values():
        used.update(hand)
    if deck is not None:
        used.update(deck)
    assert not (used - UNIVERSE), f"cards not in the universe: {used - UNIVERSE}"

    rest = list((UNIVERSE - used).elements())
    state = game.state
    if deck is None:
        state.deck = Deck(rest)
        state.discard_pile = [top]
    else:
        state.deck = Deck(deck)
        state.discard_pile = rest + [top]
    for seat, player in enumerate(state.players):
        player.hand = list(hands.get(seat, []))
    state.current_player = current_player
    state.direction = direction
    state.phase = GamePhase.AWAITING_MOVE
    state.winner = None
    game.check_invariants()


@pytest.fixture
def human_game() -> PestenGame:
    """A started game where every seat is human, seat 0 to move."""
    game = PestenGame(controllers=[None] * NUM_SEATS, seed=0)
    game.new_game(starting_seat=0)
    return game


@pytest.fixture
def stacked_deck():
    """Builder for a deck that deals known hands and top card."""
    return _build_stacked_deck


@pytest.fixture
def arrange():
    """Function that puts a started game into an exact position."""
    return _arrange
