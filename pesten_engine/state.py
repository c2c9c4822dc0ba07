"""Game state models for Pesten."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from pesten_engine.cards import UNIVERSE, Deck
from pesten_engine.errors import InvariantViolationError

if TYPE_CHECKING:
    from pesten_engine.cards import Card
    from pesten_engine.player import Player


class GamePhase(IntEnum):
    """Current phase of the game."""

    DEALING = auto()  # Cards are being dealt
    AWAITING_MOVE = auto()  # Waiting for the current seat to play or draw
    RESOLVING_EFFECT = auto()  # A special card's effect is being applied
    GAME_OVER = auto()  # A seat has emptied its hand


class Direction(IntEnum):
    """Turn order."""

    CLOCKWISE = 1
    COUNTER_CLOCKWISE = -1

    @property
    def reversed(self) -> Direction:
        return Direction(-self.value)

    @property
    def arrow(self) -> str:
        return "↻" if self == Direction.CLOCKWISE else "↺"


@dataclass
class GameState:
    """Authoritative, mutable game state. Only ``PestenGame`` writes to it.

    Attributes:
        deck: Draw pile
        discard_pile: Played cards, the last one is on top
        players: The four seats
        current_player: Seat whose turn it is
        direction: Turn order
        phase: Current game phase
        winner: Seat that emptied its hand, or None
        turn_number: Turns started so far in this game
    """

    deck: Deck = field(default_factory=Deck)
    discard_pile: list[Card] = field(default_factory=list)
    players: list[Player] = field(default_factory=list)
    current_player: int = 0
    direction: Direction = Direction.CLOCKWISE
    phase: GamePhase = GamePhase.DEALING
    winner: int | None = None
    turn_number: int = 0

    @property
    def game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def top_card(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def current_player_state(self) -> Player:
        return self.players[self.current_player]

    def card_counts(self) -> Counter[Card]:
        """Multiset of every card in the deck, discard pile and hands."""
        counts: Counter[Card] = Counter(self.deck.cards)
        counts.update(self.discard_pile)
        for player in self.players:
            counts.update(player.hand)
        return counts

    def check_invariants(self) -> None:
        """Raise if the card universe is not conserved or the pointer is off the table.

        Raises:
            InvariantViolationError: On any violation.
        """
        counts = self.card_counts()
        if counts != UNIVERSE:
            missing = UNIVERSE - counts
            extra = counts - UNIVERSE
            raise InvariantViolationError(
                f"Card universe not conserved: missing={dict(missing)}, extra={dict(extra)}"
            )
        if not 0 <= self.current_player < len(self.players):
            raise InvariantViolationError(f"Current seat {self.current_player} is off the table")
        if self.phase != GamePhase.DEALING and not self.discard_pile:
            raise InvariantViolationError("Discard pile is empty after the deal")

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            deck=self.deck.cards,
            discard_pile=tuple(self.discard_pile),
            hands=tuple(tuple(p.hand) for p in self.players),
            names=tuple(p.name for p in self.players),
            current_player=self.current_player,
            direction=self.direction,
            phase=self.phase,
            winner=self.winner,
            turn_number=self.turn_number,
        )


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Read-only copy of the game state handed to observers.

    Attributes:
        deck: Draw pile, top card last
        discard_pile: Played cards, top card last
        hands: Cards held by each seat
        names: Display name of each seat
        current_player: Seat whose turn it is
        direction: Turn order
        phase: Game phase at the time of the snapshot
        winner: Winning seat or None
        turn_number: Turns started so far
    """

    deck: tuple[Card, ...]
    discard_pile: tuple[Card, ...]
    hands: tuple[tuple[Card, ...], ...]
    names: tuple[str, ...]
    current_player: int
    direction: Direction
    phase: GamePhase
    winner: int | None = None
    turn_number: int = 0

    @property
    def top_card(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def deck_count(self) -> int:
        return len(self.deck)

    @property
    def hand_sizes(self) -> tuple[int, ...]:
        return tuple(len(hand) for hand in self.hands)

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER
