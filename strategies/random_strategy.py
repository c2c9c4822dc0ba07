"""Random strategy for baseline testing."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Sequence

from pesten_engine.moves import Draw, PlayCard
from pesten_engine.rules import legal_play_indices
from strategies.base import Strategy

if TYPE_CHECKING:
    from pesten_engine.cards import Card


class RandomStrategy(Strategy):
    """Strategy that plays a uniformly random legal card, or draws.

    Useful as a baseline and for smoke testing.
    """

    def __init__(self, seed: int | None = None):
        """Initialize the random strategy.

        Args:
            seed: Optional random seed for reproducibility.
        """
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def name(self) -> str:
        return "Random"

    def choose_action(self, hand: Sequence[Card], top_card: Card) -> PlayCard | Draw:
        """Pick a random legal card; draw if none fits."""
        legal = legal_play_indices(hand, top_card)
        if not legal:
            return Draw()
        return PlayCard(self._rng.choice(legal))

    def reset_seed(self, seed: int | None = None) -> None:
        """Reset the random number generator with a new seed."""
        self._seed = seed
        self._rng = random.Random(seed)
