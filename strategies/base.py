"""Base strategy interface for Pesten AI seats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from pesten_engine.cards import Card
    from pesten_engine.moves import Draw, PlayCard
    from pesten_engine.state import GameSnapshot


class Strategy(ABC):
    """Abstract base class for AI seat policies.

    A strategy only sees the acting seat's hand and the top of the discard
    pile. It never mutates engine state; the engine applies whatever action
    it returns.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this strategy."""
        ...

    @abstractmethod
    def choose_action(self, hand: Sequence[Card], top_card: Card) -> PlayCard | Draw:
        """Decide what the acting seat does.

        Args:
            hand: The acting seat's cards, in stored order.
            top_card: Current top of the discard pile.

        Returns:
            ``PlayCard(index)`` for a card in ``hand``, or ``Draw()``. ``Pass()``
            is honoured only when nothing can be drawn; otherwise the seat draws.
        """
        ...

    def on_game_start(self, snapshot: GameSnapshot, seat: int) -> None:
        """Called when a game starts.

        Override to initialize per-game state.

        Args:
            snapshot: State right after the deal.
            seat: Which seat this strategy controls.
        """
        pass

    def on_game_end(self, snapshot: GameSnapshot, winner: int | None) -> None:
        """Called when a game ends.

        Args:
            snapshot: Final state.
            winner: Winning seat, or None if the game was abandoned.
        """
        pass
