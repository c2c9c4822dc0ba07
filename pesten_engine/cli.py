"""Command-line interface for Pesten."""

from __future__ import annotations

import argparse
import logging
import time
from typing import TYPE_CHECKING, Iterable

from pesten_engine.game import PestenGame
from pesten_engine.moves import Effect
from pesten_engine.observer import GameObserver
from pesten_engine.scheduler import QueueScheduler

if TYPE_CHECKING:
    from pesten_engine.cards import Card
    from pesten_engine.state import GameSnapshot
    from strategies.base import Strategy

EFFECT_DESCRIPTIONS = {
    Effect.FORCE_DRAW: "next player draws",
    Effect.SKIP: "next player is skipped",
    Effect.REVERSE: "direction reversed",
    Effect.PASS_CARDS: "everyone passes a card",
    Effect.PLAY_AGAIN: "plays again",
}


def format_state(snapshot: GameSnapshot, viewer: int | None = 0) -> str:
    """Format a snapshot for display. ``viewer=None`` shows every hand."""
    lines = []

    lines.append("=" * 60)
    lines.append(
        f"Turn {snapshot.turn_number} | Direction: {snapshot.direction.arrow} "
        f"| Deck: {snapshot.deck_count} cards"
    )
    lines.append("=" * 60)
    lines.append(f"Top card: {snapshot.top_card}")

    for seat, hand in enumerate(snapshot.hands):
        prefix = "→ " if seat == snapshot.current_player else "  "
        name = snapshot.names[seat]
        if viewer is None or seat == viewer or snapshot.is_game_over:
            hand_str = "  ".join(f"[{i + 1}] {c}" for i, c in enumerate(hand)) or "(empty)"
            lines.append(f"{prefix}{name}: {hand_str}")
        else:
            lines.append(f"{prefix}{name}: [{len(hand)} cards]")

    if snapshot.is_game_over:
        lines.append("\n" + "=" * 60)
        lines.append(f"GAME OVER - {snapshot.names[snapshot.winner]} wins!")
        lines.append("=" * 60)

    return "\n".join(lines)


class ConsolePrinter(GameObserver):
    """Prints plays as they happen."""

    def __init__(self, names: list[str]):
        self.names = names

    def on_card_played(self, seat: int, card: Card, effect: Effect) -> None:
        suffix = f" ({EFFECT_DESCRIPTIONS[effect]})" if effect in EFFECT_DESCRIPTIONS else ""
        print(f"{self.names[seat]} plays {card}{suffix}")

    def on_game_over(self, winner: int) -> None:
        print(f"\n{self.names[winner]} has won!")


def create_seat_strategies(strategy: str, seed: int | None, seats: Iterable[int]) -> list[Strategy]:
    """Create one strategy per seat. Seat ``i`` is seeded with ``seed + i``."""
    from strategies.factory import StrategyFactory

    factory = StrategyFactory()
    return [
        factory.create(strategy, {"seed": None if seed is None else seed + seat})
        for seat in seats
    ]


def play_interactive(seed: int | None = None, strategy: str = "first-legal") -> None:
    """Play as seat 0 against three AI seats."""
    controllers = [None] + create_seat_strategies(strategy, seed, seats=range(1, 4))
    names = ["You", "Player 1", "Player 2", "Player 3"]
    scheduler = QueueScheduler()
    game = PestenGame(
        controllers=controllers,
        names=names,
        seed=seed,
        scheduler=scheduler,
        observers=[ConsolePrinter(names)],
    )
    game.new_game()

    print("\nWelcome to Pesten!")
    print("Type a card number to play it, 'd' to draw, 'p' to pass, 'q' to quit.\n")

    while not game.is_game_over:
        if not game.is_human(game.current_player):
            if not scheduler.run_next():
                break
            continue

        print(format_state(game.snapshot()))
        choice = input("\nYour move: ").strip().lower()
        if choice == "q":
            print("Goodbye!")
            return
        if choice == "d":
            result = game.request_draw(0)
        elif choice == "p":
            result = game.request_pass(0)
        else:
            try:
                index = int(choice) - 1
            except ValueError:
                print("Please enter a card number, 'd', 'p' or 'q'")
                continue
            result = game.request_play(0, index)

        if not result.ok:
            print(f"Not allowed ({result.reason.value}): {result.message}")
        elif result.card is not None and choice == "d":
            print(f"You drew {result.card}")
        print()

    print(format_state(game.snapshot()))


def watch_game(seed: int | None = None, delay: float = 0.5, strategy: str = "first-legal") -> None:
    """Watch four AIs play against each other."""
    controllers = create_seat_strategies(strategy, seed, seats=range(4))
    names = [f"{c.name} {i}" for i, c in enumerate(controllers)]
    scheduler = QueueScheduler()
    game = PestenGame(
        controllers=controllers,
        names=names,
        seed=seed,
        scheduler=scheduler,
        observers=[ConsolePrinter(names)],
    )
    game.new_game()

    print(f"\nWatching: 4 x {controllers[0].name}")
    print("Press Ctrl+C to stop.\n")

    try:
        while not game.is_game_over:
            print(format_state(game.snapshot(), viewer=None))
            if not scheduler.run_next():
                break
            time.sleep(delay)
            print("\n" + "-" * 60 + "\n")
    except KeyboardInterrupt:
        print("\nStopped.")

    print(format_state(game.snapshot(), viewer=None))


def run_simulation(num_games: int = 100, seed: int = 42, strategy: str = "first-legal") -> None:
    """Run a batch of all-AI games and print statistics."""
    from simulation.runner import run_batch, summarize
    strategies = create_seat_strategies(strategy, seed, seats=range(4))

    print(f"\nRunning {num_games} games: 4 x {strategies[0].name}")
    summary = summarize(run_batch(strategies, num_games, start_seed=seed))

    print("\nResults:")
    for seat in range(4):
        print(f"  Seat {seat} wins: {summary.wins[seat]} ({100 * summary.win_rate(seat):.1f}%)")
    print(f"  Unfinished: {summary.unfinished}")
    print(f"  Average turns: {summary.avg_turns:.1f}")
    print(f"  Average duration: {summary.avg_duration_ms:.2f}ms")


def main() -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Pesten card game")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    play_parser = subparsers.add_parser("play", help="Play against three AIs")
    play_parser.add_argument("--seed", type=int, help="Random seed")
    play_parser.add_argument("--strategy", default="first-legal", help="AI strategy")

    watch_parser = subparsers.add_parser("watch", help="Watch four AIs")
    watch_parser.add_argument("--seed", type=int, help="Random seed")
    watch_parser.add_argument(
        "--delay", type=float, default=0.5, help="Delay between moves (seconds)"
    )
    watch_parser.add_argument("--strategy", default="first-legal", help="AI strategy")

    simulate_parser = subparsers.add_parser("simulate", help="Run a batch of AI games")
    simulate_parser.add_argument("--games", type=int, default=100, help="Number of games")
    simulate_parser.add_argument("--seed", type=int, default=42, help="Random seed")
    simulate_parser.add_argument("--strategy", default="first-legal", help="AI strategy")

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play_interactive(seed=args.seed, strategy=args.strategy)
    elif args.command == "watch":
        watch_game(seed=args.seed, delay=args.delay, strategy=args.strategy)
    elif args.command == "simulate":
        run_simulation(num_games=args.games, seed=args.seed, strategy=args.strategy)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
