"""Move legality and card effects for Pesten."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from pesten_engine.cards import Rank
from pesten_engine.moves import Effect

if TYPE_CHECKING:
    from pesten_engine.cards import Card

NUM_SEATS = 4
INITIAL_HAND_SIZE = 7
TWO_DRAW_COUNT = 2
JOKER_DRAW_COUNT = 5

# Ranks that may be played on anything, and on which anything may be played.
WILD_RANKS = frozenset({Rank.JOKER, Rank.JACK})

_EFFECTS = {
    Rank.TWO: Effect.FORCE_DRAW,
    Rank.JOKER: Effect.FORCE_DRAW,
    Rank.EIGHT: Effect.SKIP,
    Rank.ACE: Effect.REVERSE,
    Rank.TEN: Effect.PASS_CARDS,
    Rank.KING: Effect.PLAY_AGAIN,
}


def is_valid_move(top_card: Card, candidate: Card) -> bool:
    """Whether ``candidate`` may be played on ``top_card``.

    A Joker or Jack on top opens the board to any card, and a Joker or Jack
    can be played on anything. Otherwise rank or suit must match.
    """
    if top_card.rank in WILD_RANKS:
        return True
    if candidate.rank in WILD_RANKS:
        return True
    if candidate.rank == top_card.rank:
        return True
    return candidate.suit == top_card.suit


def card_effect(card: Card) -> Effect:
    """The special effect ``card`` fires when played."""
    return _EFFECTS.get(card.rank, Effect.NONE)


def force_draw_count(card: Card) -> int:
    """Cards the next seat must draw when ``card`` is played."""
    if card.rank == Rank.TWO:
        return TWO_DRAW_COUNT
    if card.rank == Rank.JOKER:
        return JOKER_DRAW_COUNT
    return 0


def legal_play_indices(hand: Sequence[Card], top_card: Card) -> list[int]:
    """Indices of the cards in ``hand`` that may be played on ``top_card``."""
    return [i for i, card in enumerate(hand) if is_valid_move(top_card, card)]


def next_seat(seat: int, direction: int, num_seats: int = NUM_SEATS) -> int:
    """Seat one step from ``seat`` in ``direction``, wrapping around the table."""
    return (seat + direction) % num_seats
