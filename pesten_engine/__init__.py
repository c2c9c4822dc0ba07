"""Pesten card game engine."""

from pesten_engine.cards import Card, Deck, Rank, Suit, create_deck
from pesten_engine.errors import (
    DeckExhaustedError,
    EmptyDeckError,
    IndexOutOfRangeError,
    InvalidMoveError,
    InvariantViolationError,
    MoveRejection,
    PestenError,
)
from pesten_engine.game import MoveResult, PestenGame
from pesten_engine.moves import Draw, Effect, Move, Pass, PlayCard
from pesten_engine.observer import GameObserver
from pesten_engine.player import Player
from pesten_engine.rules import is_valid_move
from pesten_engine.scheduler import AsyncioScheduler, QueueScheduler, TurnScheduler
from pesten_engine.state import Direction, GamePhase, GameSnapshot, GameState

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "create_deck",
    "DeckExhaustedError",
    "EmptyDeckError",
    "IndexOutOfRangeError",
    "InvalidMoveError",
    "InvariantViolationError",
    "MoveRejection",
    "PestenError",
    "MoveResult",
    "PestenGame",
    "Draw",
    "Effect",
    "Move",
    "Pass",
    "PlayCard",
    "GameObserver",
    "Player",
    "is_valid_move",
    "AsyncioScheduler",
    "QueueScheduler",
    "TurnScheduler",
    "Direction",
    "GamePhase",
    "GameSnapshot",
    "GameState",
]
