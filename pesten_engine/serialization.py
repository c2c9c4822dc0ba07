"""Conversion of engine values into JSON-ready dicts for presentation layers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pesten_engine.cards import Card
    from pesten_engine.game import MoveResult
    from pesten_engine.moves import Effect
    from pesten_engine.state import GameSnapshot


def card_to_dict(card: Card) -> dict:
    """Convert a Card to a dictionary."""
    return {
        "code": card.code,
        "rank": card.rank.value,
        "rank_symbol": card.rank.symbol,
        "rank_name": card.rank.name,
        "suit": card.suit.value,
        "suit_symbol": card.suit.symbol,
        "suit_name": card.suit.name,
        "display": str(card),
    }


def snapshot_to_client_state(
    snapshot: GameSnapshot,
    viewer: int | None = 0,
    legal_plays: list[int] | None = None,
) -> dict[str, Any]:
    """Convert a snapshot to the state a client may see.

    Other seats' hands are hidden until the game is over.

    Args:
        snapshot: Engine snapshot.
        viewer: Seat whose hand is shown, or None to hide every hand.
        legal_plays: Playable indices for the viewer, if known.
    """
    reveal_all = snapshot.is_game_over
    top = snapshot.top_card
    return {
        "phase": snapshot.phase.name,
        "current_player": snapshot.current_player,
        "direction": snapshot.direction.value,
        "direction_arrow": snapshot.direction.arrow,
        "turn_number": snapshot.turn_number,
        "deck_count": snapshot.deck_count,
        "discard_count": len(snapshot.discard_pile),
        "top_card": card_to_dict(top) if top is not None else None,
        "winner": snapshot.winner,
        "is_game_over": snapshot.is_game_over,
        "legal_plays": legal_plays if legal_plays is not None else [],
        "players": [
            {
                "seat": seat,
                "name": snapshot.names[seat],
                "hand": (
                    [card_to_dict(c) for c in hand]
                    if seat == viewer or reveal_all
                    else [{"hidden": True} for _ in hand]
                ),
                "hand_count": len(hand),
            }
            for seat, hand in enumerate(snapshot.hands)
        ],
    }


def move_result_to_dict(result: MoveResult) -> dict[str, Any]:
    return {
        "ok": result.ok,
        "reason": result.reason.value if result.reason is not None else None,
        "card": card_to_dict(result.card) if result.card is not None else None,
        "message": result.message,
    }


def event_to_dict(event: dict, viewer: int | None = 0) -> dict[str, Any]:
    """Convert an event produced by ``CallbackObserver`` into a JSON-ready dict."""
    event_type = event["type"]
    if event_type == "state_changed":
        return {"type": event_type, "state": snapshot_to_client_state(event["snapshot"], viewer)}
    if event_type == "card_played":
        effect: Effect = event["effect"]
        return {
            "type": event_type,
            "seat": event["seat"],
            "card": card_to_dict(event["card"]),
            "effect": effect.name,
        }
    return dict(event)
