"""Game API routes."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, Field, field_validator

from pesten_engine.rules import NUM_SEATS
from pesten_engine.serialization import event_to_dict, move_result_to_dict
from strategies.factory import StrategyFactory
from web.api.session_manager import (
    GameSession,
    PlayerType,
    SeatConfig,
    session_manager,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["games"])


# Request/Response models
class SeatConfigRequest(BaseModel):
    """Seat configuration for game creation."""

    player_type: PlayerType = Field(..., description="'human' or 'ai'")
    strategy: str | None = Field(None, description="Strategy name for AI seats")
    strategy_params: dict[str, Any] = Field(
        default_factory=dict, description="Strategy parameters"
    )
    name: str | None = Field(None, description="Display name")


def _default_seats() -> list[SeatConfigRequest]:
    return [SeatConfigRequest(player_type=PlayerType.HUMAN)] + [
        SeatConfigRequest(player_type=PlayerType.AI, strategy="first-legal")
        for _ in range(NUM_SEATS - 1)
    ]


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    seats: list[SeatConfigRequest] = Field(
        default_factory=_default_seats, description="Exactly four seats, seat 0 first"
    )
    seed: int | None = Field(None, description="Random seed for reproducibility")

    @field_validator("seats")
    @classmethod
    def validate_seat_count(cls, v):
        if len(v) != NUM_SEATS:
            raise ValueError(f"exactly {NUM_SEATS} seats are required, got {len(v)}")
        return v


class SeatRequest(BaseModel):
    """Request naming the acting seat."""

    seat: int = Field(0, ge=0, lt=NUM_SEATS, description="Acting seat")


class PlayRequest(SeatRequest):
    """Request to play a card."""

    hand_index: int = Field(..., description="Index of the card in the seat's hand")


class StrategyInfo(BaseModel):
    """Information about an available strategy."""

    name: str
    description: str


def _get_session(game_id: str) -> GameSession:
    session = session_manager.get_session(game_id)
    if not session:
        raise HTTPException(status_code=404, detail="Game not found")
    return session


def _intent_response(session: GameSession, result, viewer: int) -> dict:
    if not result.ok:
        raise HTTPException(
            status_code=400,
            detail={"reason": result.reason.value, "message": result.message},
        )
    return {
        "result": move_result_to_dict(result),
        "state": session.to_client_state(viewer=viewer),
        "action_history": session.action_history,
    }


# REST Endpoints


@router.get("/strategies", response_model=list[StrategyInfo])
async def list_strategies():
    """List available AI strategies."""
    strategies = StrategyFactory().list_strategies()
    return [StrategyInfo(name=name, description=desc) for name, desc in strategies.items()]


@router.post("/games", response_model=dict)
async def create_game(request: CreateGameRequest):
    """Create a new game session."""
    def to_config(req: SeatConfigRequest) -> SeatConfig:
        return SeatConfig(
            player_type=req.player_type,
            strategy_name=req.strategy,
            strategy_params=req.strategy_params,
            name=req.name,
        )

    try:
        session = session_manager.create_session(
            [to_config(seat) for seat in request.seats],
            seed=request.seed,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    viewer = next(
        (i for i, seat in enumerate(request.seats) if seat.player_type == PlayerType.HUMAN),
        None,
    )
    return {
        "game_id": session.id,
        "state": session.to_client_state(viewer=viewer),
    }


@router.get("/games", response_model=list[dict])
async def list_games():
    """List all active game sessions."""
    return session_manager.list_sessions()


@router.get("/games/{game_id}")
async def get_game(game_id: str, viewer: int = 0):
    """Get current state of a game."""
    session = _get_session(game_id)
    return {
        "state": session.to_client_state(viewer=viewer),
        "action_history": session.action_history,
    }


@router.post("/games/{game_id}/play")
async def play_card(game_id: str, request: PlayRequest):
    """Play a card from the acting seat's hand."""
    session = _get_session(game_id)
    result = session.play(request.seat, request.hand_index)
    return _intent_response(session, result, request.seat)


@router.post("/games/{game_id}/draw")
async def draw_card(game_id: str, request: SeatRequest):
    """Draw a card and end the acting seat's turn."""
    session = _get_session(game_id)
    result = session.draw(request.seat)
    return _intent_response(session, result, request.seat)


@router.post("/games/{game_id}/pass")
async def pass_turn(game_id: str, request: SeatRequest):
    """Pass when no card can be drawn."""
    session = _get_session(game_id)
    result = session.pass_turn(request.seat)
    return _intent_response(session, result, request.seat)


@router.post("/games/{game_id}/restart")
async def restart_game(game_id: str, viewer: int = 0):
    """Deal a new game in the same session."""
    session = _get_session(game_id)
    session.start()
    return {"state": session.to_client_state(viewer=viewer)}


@router.post("/games/{game_id}/continue")
async def continue_game(game_id: str, viewer: int = 0):
    """Run AI turns left queued when a table hit the per-request AI turn cap."""
    session = _get_session(game_id)
    ran = session.run_ai_turns()
    return {"ai_turns": ran, "state": session.to_client_state(viewer=viewer)}


@router.delete("/games/{game_id}")
async def delete_game(game_id: str):
    """Delete a game session."""
    if session_manager.delete_session(game_id):
        return {"deleted": True}
    raise HTTPException(status_code=404, detail="Game not found")


# WebSocket endpoint for real-time game play


@router.websocket("/ws/game/{game_id}")
async def game_websocket(websocket: WebSocket, game_id: str):
    """WebSocket endpoint for real-time game updates.

    Protocol:
    Server -> Client messages:
        - game_state: Full game state for the viewer
        - state_changed: Engine state changed
        - turn_started: {seat}
        - card_played: {seat, card, effect}
        - game_over: {winner}
        - error: {reason, message}

    Client -> Server messages:
        - play: {seat, hand_index}
        - draw: {seat}
        - pass: {seat}
        - get_state: Request current state
    """
    query_params = dict(websocket.query_params)
    viewer = int(query_params.get("viewer", "0"))

    logger.info(f"WebSocket connection: game_id={game_id}, viewer={viewer}")

    session = session_manager.get_session(game_id)
    if not session:
        logger.warning(f"WebSocket: Game not found: {game_id}")
        await websocket.close(code=4004, reason="Game not found")
        return

    await websocket.accept()

    event_queue: asyncio.Queue = asyncio.Queue()

    def queue_event(event: dict):
        event_queue.put_nowait(event_to_dict(event, viewer))

    session.add_listener(queue_event)

    async def forward_events():
        while True:
            message = await event_queue.get()
            await websocket.send_json(message)

    event_task = asyncio.create_task(forward_events())

    try:
        await websocket.send_json({
            "type": "game_state",
            "state": session.to_client_state(viewer=viewer),
        })

        while True:
            data = await websocket.receive_json()
            msg_type = data.get("type", "")
            seat = data.get("seat", viewer)

            if msg_type == "play":
                hand_index = data.get("hand_index")
                if not isinstance(hand_index, int):
                    await websocket.send_json({
                        "type": "error",
                        "reason": "OUT_OF_RANGE",
                        "message": "hand_index must be an integer",
                    })
                    continue
                result = session.play(seat, hand_index)
            elif msg_type == "draw":
                result = session.draw(seat)
            elif msg_type == "pass":
                result = session.pass_turn(seat)
            elif msg_type == "get_state":
                await websocket.send_json({
                    "type": "game_state",
                    "state": session.to_client_state(viewer=viewer),
                })
                continue
            else:
                await websocket.send_json({
                    "type": "error",
                    "reason": None,
                    "message": f"Unknown message type: {msg_type}",
                })
                continue

            if not result.ok:
                await websocket.send_json({
                    "type": "error",
                    "reason": result.reason.value,
                    "message": result.message,
                })

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: game_id={game_id}, viewer={viewer}")
    finally:
        session.remove_listener(queue_event)
        event_task.cancel()
        try:
            await event_task
        except asyncio.CancelledError:
            pass
