"""Actions a seat can take, and the effects cards trigger."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto


class MoveType(IntEnum):
    """Type of action."""

    PLAY = auto()
    DRAW = auto()
    PASS = auto()  # Only when the draw pile is exhausted


class Effect(IntEnum):
    """Special effect fired by a played card."""

    NONE = auto()
    FORCE_DRAW = auto()  # 2 and Joker: next seat draws
    SKIP = auto()  # 8: next seat loses its turn
    REVERSE = auto()  # Ace: direction flips
    PASS_CARDS = auto()  # 10: every seat passes a random card along
    PLAY_AGAIN = auto()  # King: same seat plays again


@dataclass(frozen=True, slots=True)
class Move(ABC):
    """Base class for all actions."""

    @property
    @abstractmethod
    def move_type(self) -> MoveType:
        """The type of this action."""
        ...

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable description."""
        ...


@dataclass(frozen=True, slots=True)
class PlayCard(Move):
    """Play the card at ``index`` in the acting seat's hand."""

    index: int

    @property
    def move_type(self) -> MoveType:
        return MoveType.PLAY

    def __str__(self) -> str:
        return f"Play card #{self.index}"


@dataclass(frozen=True, slots=True)
class Draw(Move):
    """Draw one card and end the turn."""

    @property
    def move_type(self) -> MoveType:
        return MoveType.DRAW

    def __str__(self) -> str:
        return "Draw"


@dataclass(frozen=True, slots=True)
class Pass(Move):
    """End the turn without a card (draw pile exhausted)."""

    @property
    def move_type(self) -> MoveType:
        return MoveType.PASS

    def __str__(self) -> str:
        return "Pass"
