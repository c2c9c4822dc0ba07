"""Game runner for Pesten simulations."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from pesten_engine.game import PestenGame
from pesten_engine.observer import GameObserver
from pesten_engine.rules import NUM_SEATS
from pesten_engine.scheduler import QueueScheduler

if TYPE_CHECKING:
    from pesten_engine.cards import Card
    from pesten_engine.moves import Effect
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    game_id: str
    winner: int | None  # None if the game hit max_turns
    turns: int
    final_hand_sizes: tuple[int, ...]
    player_strategies: tuple[str, ...]
    seed: int | None
    duration_ms: float
    cards_played: int
    effects: dict[str, int] = field(default_factory=dict)


class _PlayCounter(GameObserver):
    def __init__(self):
        self.cards_played = 0
        self.effects: dict[str, int] = {}

    def on_card_played(self, seat: int, card: Card, effect: Effect) -> None:
        self.cards_played += 1
        self.effects[effect.name] = self.effects.get(effect.name, 0) + 1


class GameRunner:
    """Runs Pesten games between four AI strategies."""

    def __init__(
        self,
        strategies: Sequence[Strategy],
        max_turns: int = 2000,
        check_invariants: bool = True,
    ):
        """Initialize the game runner.

        Args:
            strategies: One strategy per seat.
            max_turns: Turns after which the game is abandoned without a winner.
            check_invariants: Verify card conservation after every game.
        """
        if len(strategies) != NUM_SEATS:
            raise ValueError(f"Expected {NUM_SEATS} strategies, got {len(strategies)}")
        self.strategies = tuple(strategies)
        self.max_turns = max_turns
        self.check_invariants = check_invariants

    def run_game(self, seed: int | None = None) -> GameResult:
        """Run a single game.

        Args:
            seed: Random seed for reproducibility.

        Returns:
            The game's result.
        """
        start_time = time.perf_counter()
        scheduler = QueueScheduler()
        counter = _PlayCounter()
        game = PestenGame(
            controllers=self.strategies,
            names=[f"{s.name} {i}" for i, s in enumerate(self.strategies)],
            seed=seed,
            scheduler=scheduler,
            ai_delay=0.0,
            observers=[counter],
        )
        game.new_game()

        while not game.is_game_over and game.state.turn_number <= self.max_turns:
            if not scheduler.run_next():
                break

        if not game.is_game_over:
            logger.warning(f"Game with seed {seed} abandoned after {game.state.turn_number} turns")
            scheduler.clear()
            snapshot = game.snapshot()
            for strategy in self.strategies:
                strategy.on_game_end(snapshot, None)

        if self.check_invariants:
            game.check_invariants()

        snapshot = game.snapshot()
        return GameResult(
            game_id=str(uuid.uuid4()),
            winner=snapshot.winner,
            turns=snapshot.turn_number,
            final_hand_sizes=snapshot.hand_sizes,
            player_strategies=tuple(s.name for s in self.strategies),
            seed=seed,
            duration_ms=(time.perf_counter() - start_time) * 1000,
            cards_played=counter.cards_played,
            effects=counter.effects,
        )


@dataclass
class BatchSummary:
    """Aggregate statistics over a batch of games."""

    games: int
    wins: tuple[int, ...]
    unfinished: int
    avg_turns: float
    avg_duration_ms: float

    def win_rate(self, seat: int) -> float:
        return self.wins[seat] / self.games if self.games else 0.0


def run_batch(
    strategies: Sequence[Strategy],
    num_games: int,
    start_seed: int = 0,
    max_turns: int = 2000,
) -> list[GameResult]:
    """Run multiple games.

    Args:
        strategies: One strategy per seat.
        num_games: Number of games to run.
        start_seed: Starting seed (incremented for each game).
        max_turns: Per-game turn limit.

    Returns:
        List of game results.
    """
    runner = GameRunner(strategies, max_turns=max_turns)
    return [runner.run_game(seed=start_seed + i) for i in range(num_games)]


def summarize(results: Sequence[GameResult]) -> BatchSummary:
    games = len(results)
    wins = tuple(sum(1 for r in results if r.winner == seat) for seat in range(NUM_SEATS))
    return BatchSummary(
        games=games,
        wins=wins,
        unfinished=sum(1 for r in results if r.winner is None),
        avg_turns=sum(r.turns for r in results) / games if games else 0.0,
        avg_duration_ms=sum(r.duration_ms for r in results) / games if games else 0.0,
    )
