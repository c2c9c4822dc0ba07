"""Per-seat player state."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from pesten_engine.cards import Card
from pesten_engine.errors import IndexOutOfRangeError


@dataclass
class Player:
    """A seat at the table and the cards it holds.

    Attributes:
        seat: Seat index, 0-3.
        name: Display name.
        hand: Cards in hand, in the order they were received.
    """

    seat: int
    name: str
    hand: list[Card] = field(default_factory=list)

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    @property
    def has_won(self) -> bool:
        return not self.hand

    def receive_card(self, card: Card) -> None:
        """Add a card to the hand."""
        if card is None:
            raise ValueError(f"Seat {self.seat} was handed a missing card")
        self.hand.append(card)

    def play_card(self, index: int) -> Card:
        """Remove and return the card at ``index``.

        Raises:
            IndexOutOfRangeError: If ``index`` is not a valid hand position.
        """
        if not 0 <= index < len(self.hand):
            raise IndexOutOfRangeError(
                f"Seat {self.seat} has {len(self.hand)} cards, no index {index}"
            )
        return self.hand.pop(index)

    def remove_random_card(self, rng: random.Random) -> Card | None:
        """Remove a uniformly random card, or return None for an empty hand."""
        if not self.hand:
            return None
        return self.hand.pop(rng.randrange(len(self.hand)))

    def clear_hand(self) -> list[Card]:
        removed = self.hand
        self.hand = []
        return removed
