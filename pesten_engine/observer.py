"""Notification interface between the engine and presentation layers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from pesten_engine.cards import Card
    from pesten_engine.moves import Effect
    from pesten_engine.state import GameSnapshot


class GameObserver:
    """Receives engine notifications. Override the hooks you need."""

    def on_state_changed(self, snapshot: GameSnapshot) -> None:
        """Called after every state change."""
        pass

    def on_turn_started(self, seat: int) -> None:
        """Called when ``seat`` becomes the acting seat (again, for a King)."""
        pass

    def on_card_played(self, seat: int, card: Card, effect: Effect) -> None:
        """Called after ``seat`` put ``card`` on the discard pile, before its effect."""
        pass

    def on_game_over(self, winner: int) -> None:
        """Called once when ``winner`` empties its hand."""
        pass


class CallbackObserver(GameObserver):
    """Forwards every notification to a single callable as an event dict.

    Used by adapters that queue events, e.g. a WebSocket forwarder.
    """

    def __init__(self, callback: Callable[[dict], None]):
        self._callback = callback

    def on_state_changed(self, snapshot: GameSnapshot) -> None:
        self._callback({"type": "state_changed", "snapshot": snapshot})

    def on_turn_started(self, seat: int) -> None:
        self._callback({"type": "turn_started", "seat": seat})

    def on_card_played(self, seat: int, card: Card, effect: Effect) -> None:
        self._callback({"type": "card_played", "seat": seat, "card": card, "effect": effect})

    def on_game_over(self, winner: int) -> None:
        self._callback({"type": "game_over", "winner": winner})


class RecordingObserver(GameObserver):
    """Keeps every notification in order. Handy for tests and replays."""

    def __init__(self):
        self.events: list[tuple] = []

    def on_state_changed(self, snapshot: GameSnapshot) -> None:
        self.events.append(("state_changed", snapshot))

    def on_turn_started(self, seat: int) -> None:
        self.events.append(("turn_started", seat))

    def on_card_played(self, seat: int, card: Card, effect: Effect) -> None:
        self.events.append(("card_played", seat, card, effect))

    def on_game_over(self, winner: int) -> None:
        self.events.append(("game_over", winner))

    def of_type(self, event_type: str) -> list[tuple]:
        return [e for e in self.events if e[0] == event_type]

    @property
    def last_snapshot(self) -> GameSnapshot | None:
        snapshots = self.of_type("state_changed")
        return snapshots[-1][1] if snapshots else None

    def clear(self) -> None:
        self.events.clear()
