"""Card, Suit, Rank and Deck models for Pesten."""

from __future__ import annotations

import random
from collections import Counter
from enum import IntEnum
from typing import ClassVar, Iterable

from pesten_engine.errors import EmptyDeckError

NUM_JOKERS = 2


class Suit(IntEnum):
    """Card suits. JOKER is the pseudo-suit carried by the two jokers."""

    HEARTS = 0
    SPADES = 1
    DIAMONDS = 2
    CLUBS = 3
    JOKER = 4

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        return {
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.JOKER: "🃏",
        }[self]

    @property
    def letter(self) -> str:
        if self == Suit.JOKER:
            return "X"
        return self.name[0]


class Rank(IntEnum):
    """Card ranks (Two=2 through Ace=14, then the Joker)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14
    JOKER = 15

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        if self.value <= 10:
            return str(self.value)
        if self == Rank.JOKER:
            return "X"
        return self.name[0]


STANDARD_SUITS: tuple[Suit, ...] = (Suit.HEARTS, Suit.SPADES, Suit.DIAMONDS, Suit.CLUBS)
STANDARD_RANKS: tuple[Rank, ...] = tuple(r for r in Rank if r != Rank.JOKER)


class Card:
    """An immutable playing card.

    Instances are interned per (rank, suit), so both jokers in a deck are the
    same object. Equality and hashing are by value.
    """

    __slots__ = ("_rank", "_suit")

    _instances: ClassVar[dict[tuple[Rank, Suit], Card]] = {}

    def __new__(cls, rank: Rank, suit: Suit) -> Card:
        rank = Rank(rank)
        suit = Suit(suit)
        if (rank == Rank.JOKER) != (suit == Suit.JOKER):
            raise ValueError(f"Jokers must pair Rank.JOKER with Suit.JOKER, got {rank.name}/{suit.name}")
        key = (rank, suit)
        if key not in cls._instances:
            instance = object.__new__(cls)
            instance._rank = rank
            instance._suit = suit
            cls._instances[key] = instance
        return cls._instances[key]

    @classmethod
    def joker(cls) -> Card:
        return cls(Rank.JOKER, Suit.JOKER)

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def is_joker(self) -> bool:
        return self._rank == Rank.JOKER

    @property
    def code(self) -> str:
        """Compact identifier, e.g. ``H10``, ``SK`` or ``XX`` for a joker."""
        if self.is_joker:
            return "XX"
        return f"{self._suit.letter}{self._rank.symbol}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self._rank == other._rank and self._suit == other._suit

    def __hash__(self) -> int:
        return hash((self._rank, self._suit))

    def __reduce__(self) -> tuple:
        """Support pickling."""
        return (Card, (self._rank, self._suit))

    def __repr__(self) -> str:
        return f"Card({self._rank.name}, {self._suit.name})"

    def __str__(self) -> str:
        if self.is_joker:
            return self._suit.symbol
        return f"{self._rank.symbol}{self._suit.symbol}"


def create_deck(num_jokers: int = NUM_JOKERS) -> list[Card]:
    """Create the full Pesten deck: 52 standard cards followed by the jokers."""
    deck = [Card(rank, suit) for suit in STANDARD_SUITS for rank in STANDARD_RANKS]
    deck.extend(Card.joker() for _ in range(num_jokers))
    return deck


# Multiset of every card in play; deck, discard pile and hands always sum to this.
UNIVERSE: Counter[Card] = Counter(create_deck())


class Deck:
    """Draw pile. The end of the list is the top of the stack."""

    def __init__(self, cards: Iterable[Card] | None = None):
        self._cards: list[Card] = list(cards) if cards is not None else []

    def __len__(self) -> int:
        return len(self._cards)

    def __bool__(self) -> bool:
        return bool(self._cards)

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def shuffle(self, rng: random.Random) -> None:
        """Shuffle in place (Fisher-Yates via ``Random.shuffle``)."""
        rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Remove and return the top card.

        Raises:
            EmptyDeckError: If there is nothing to draw.
        """
        if not self._cards:
            raise EmptyDeckError("Cannot draw from an empty deck")
        return self._cards.pop()

    def peek(self) -> Card | None:
        return self._cards[-1] if self._cards else None

    def add_cards(self, cards: Iterable[Card]) -> None:
        """Put cards back into the deck. Callers shuffle afterwards."""
        self._cards.extend(cards)
