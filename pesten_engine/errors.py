"""Exceptions raised by the Pesten engine."""

from __future__ import annotations

from enum import Enum


class MoveRejection(str, Enum):
    """Why an intent was refused."""

    NOT_STARTED = "NOT_STARTED"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    INVALID_CARD = "INVALID_CARD"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    GAME_OVER = "GAME_OVER"
    DECK_EXHAUSTED = "DECK_EXHAUSTED"
    CANNOT_PASS = "CANNOT_PASS"


class PestenError(Exception):
    """Base class for engine errors."""


class InvalidMoveError(PestenError):
    """Raised when a play, draw or pass is not allowed. State is unchanged."""

    def __init__(self, reason: MoveRejection, message: str):
        self.reason = reason
        self.message = message
        super().__init__(f"[{reason.value}] {message}")


class EmptyDeckError(PestenError):
    """Raised by ``Deck.draw`` when the draw pile is empty."""


class DeckExhaustedError(PestenError):
    """Raised when the deck is empty and the discard pile cannot refill it."""


class IndexOutOfRangeError(PestenError, IndexError):
    """Raised for hand access outside ``0 <= index < len(hand)``."""


class InvariantViolationError(PestenError, AssertionError):
    """Raised when cards were created, lost or duplicated."""
