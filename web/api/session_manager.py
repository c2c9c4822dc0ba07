"""Game session management for the web API."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Sequence

from pesten_engine.game import PestenGame
from pesten_engine.observer import CallbackObserver
from pesten_engine.rules import NUM_SEATS
from pesten_engine.scheduler import QueueScheduler
from pesten_engine.serialization import card_to_dict, snapshot_to_client_state
from strategies.factory import StrategyFactory

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from pesten_engine.game import MoveResult

# Upper bound on AI turns run in one go, so an all-AI table cannot spin forever.
MAX_AI_TURNS_PER_REQUEST = 5000


class PlayerType(str, Enum):
    """Type of player."""
    HUMAN = "human"
    AI = "ai"


@dataclass
class SeatConfig:
    """Configuration for one seat in a game session."""
    player_type: PlayerType
    strategy_name: str | None = None  # None for human players
    strategy_params: dict[str, Any] = field(default_factory=dict)
    name: str | None = None


@dataclass
class GameSession:
    """An active game session."""

    id: str
    seat_configs: tuple[SeatConfig, ...]
    game: PestenGame
    scheduler: QueueScheduler
    created_at: datetime
    action_history: list[dict] = field(default_factory=list)
    max_ai_turns: int = MAX_AI_TURNS_PER_REQUEST

    # Callbacks for WebSocket notifications
    _state_listeners: list[Callable[[dict], None]] = field(default_factory=list)

    def __post_init__(self):
        self.game.add_observer(CallbackObserver(self._notify_listeners))

    @property
    def is_human_turn(self) -> bool:
        """Whether a human seat needs to act."""
        return not self.game.is_game_over and self.game.is_human(self.game.current_player)

    def add_listener(self, callback: Callable[[dict], None]) -> None:
        """Add a state change listener."""
        self._state_listeners.append(callback)

    def remove_listener(self, callback: Callable[[dict], None]) -> None:
        """Remove a state change listener."""
        if callback in self._state_listeners:
            self._state_listeners.remove(callback)

    def _notify_listeners(self, event: dict) -> None:
        """Notify all listeners of an engine event."""
        for listener in list(self._state_listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Listener failed for {event['type']} in game {self.id}")

    def start(self) -> None:
        """Deal a new game and let AI seats play up to the first human turn."""
        self.game.new_game()
        self.action_history.clear()
        self.run_ai_turns()

    @property
    def ai_stalled(self) -> bool:
        """Whether AI turns are still queued after hitting the per-request cap."""
        return not self.game.is_game_over and self.scheduler.pending > 0

    def run_ai_turns(self) -> int:
        """Run queued AI turns until a human seat is to act or the game ends.

        Stops after ``max_ai_turns``; call again to continue a stalled table.
        """
        ran = self.scheduler.run_pending(limit=self.max_ai_turns)
        if ran:
            logger.info(f"Game {self.id}: ran {ran} AI turn(s)")
        if self.ai_stalled:
            logger.warning(f"Game {self.id}: stopped after {ran} AI turns, turn {self.game.state.turn_number}")
        return ran

    def play(self, seat: int, hand_index: int) -> MoveResult:
        result = self.game.request_play(seat, hand_index)
        return self._after_intent("play", seat, result, hand_index=hand_index)

    def draw(self, seat: int) -> MoveResult:
        result = self.game.request_draw(seat)
        return self._after_intent("draw", seat, result)

    def pass_turn(self, seat: int) -> MoveResult:
        result = self.game.request_pass(seat)
        return self._after_intent("pass", seat, result)

    def _after_intent(self, action: str, seat: int, result: MoveResult, **details) -> MoveResult:
        if not result.ok:
            logger.info(f"Game {self.id}: seat {seat} {action} rejected ({result.reason.value})")
            return result
        self.action_history.append({
            "action": action,
            "seat": seat,
            "card": card_to_dict(result.card) if result.card is not None and action == "play" else None,
            "timestamp": datetime.now().isoformat(),
            **details,
        })
        self.run_ai_turns()
        return result

    def to_client_state(self, viewer: int | None = 0) -> dict:
        """Convert game state to client-friendly format.

        Args:
            viewer: Which seat is viewing (other hands are hidden)
        """
        legal_plays = None
        if viewer is not None and viewer == self.game.current_player and not self.game.is_game_over:
            legal_plays = self.game.legal_plays(viewer)
        state = snapshot_to_client_state(self.game.snapshot(), viewer, legal_plays)
        state["game_id"] = self.id
        state["is_human_turn"] = self.is_human_turn
        state["ai_stalled"] = self.ai_stalled
        state["seats"] = [
            {
                "type": config.player_type.value,
                "strategy": config.strategy_name,
            }
            for config in self.seat_configs
        ]
        return state


class GameSessionManager:
    """Manages all active game sessions."""

    def __init__(self, max_ai_turns: int = MAX_AI_TURNS_PER_REQUEST):
        self._sessions: dict[str, GameSession] = {}
        self.max_ai_turns = max_ai_turns
        self._strategy_factory = StrategyFactory()

    def create_session(
        self,
        seat_configs: Sequence[SeatConfig],
        seed: int | None = None,
    ) -> GameSession:
        """Create and deal a new game session.

        Raises:
            ValueError: Wrong number of seats or an unknown strategy.
        """
        if len(seat_configs) != NUM_SEATS:
            raise ValueError(f"Expected {NUM_SEATS} seats, got {len(seat_configs)}")

        controllers = []
        for config in seat_configs:
            if config.player_type == PlayerType.AI:
                controllers.append(
                    self._strategy_factory.create(
                        config.strategy_name or "first-legal",
                        config.strategy_params,
                    )
                )
            else:
                controllers.append(None)

        names = [
            config.name or ("You" if config.player_type == PlayerType.HUMAN else f"Player {i}")
            for i, config in enumerate(seat_configs)
        ]

        scheduler = QueueScheduler()
        session = GameSession(
            id=str(uuid.uuid4()),
            seat_configs=tuple(seat_configs),
            game=PestenGame(
                controllers=controllers,
                names=names,
                seed=seed,
                scheduler=scheduler,
                ai_delay=0.0,
            ),
            scheduler=scheduler,
            created_at=datetime.now(),
            max_ai_turns=self.max_ai_turns,
        )
        self._sessions[session.id] = session
        logger.info(f"Created game {session.id} (seed={seed})")
        session.start()
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """Delete a session."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.scheduler.clear()
        return True

    @property
    def session_count(self) -> int:
        return len(self._sessions)

    def list_sessions(self) -> list[dict]:
        """List all active sessions."""
        return [
            {
                "id": s.id,
                "created_at": s.created_at.isoformat(),
                "turn_number": s.game.state.turn_number,
                "is_game_over": s.game.is_game_over,
                "ai_stalled": s.ai_stalled,
                "winner": s.game.winner,
                "seats": [
                    {
                        "type": config.player_type.value,
                        "strategy": config.strategy_name,
                    }
                    for config in s.seat_configs
                ],
            }
            for s in self._sessions.values()
        ]


# Global session manager instance
session_manager = GameSessionManager()
