"""Default AI: play the first legal card, otherwise draw."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from pesten_engine.moves import Draw, PlayCard
from pesten_engine.rules import is_valid_move
from strategies.base import Strategy

if TYPE_CHECKING:
    from pesten_engine.cards import Card


class FirstLegalStrategy(Strategy):
    """Scans the hand in order and plays the first card that fits.

    No lookahead and no hand evaluation. Deterministic for a given hand
    order.
    """

    @property
    def name(self) -> str:
        return "FirstLegal"

    def choose_action(self, hand: Sequence[Card], top_card: Card) -> PlayCard | Draw:
        for index, card in enumerate(hand):
            if is_valid_move(top_card, card):
                return PlayCard(index)
        return Draw()
