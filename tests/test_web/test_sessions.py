"""Tests for web game sessions."""

import pytest

from web.api.session_manager import GameSessionManager, PlayerType, SeatConfig

AI = SeatConfig(player_type=PlayerType.AI, strategy_name="random", strategy_params={"seed": 4})
HUMAN = SeatConfig(player_type=PlayerType.HUMAN)


class TestGameSessionManager:
    def test_requires_four_seats(self):
        with pytest.raises(ValueError):
            GameSessionManager().create_session([HUMAN] * 2)

    def test_session_lifecycle(self):
        manager = GameSessionManager()
        session = manager.create_session([HUMAN] * 4, seed=1)
        assert manager.session_count == 1
        assert manager.get_session(session.id) is session
        assert manager.delete_session(session.id)
        assert manager.session_count == 0
        assert not manager.delete_session(session.id)

    def test_human_table_waits(self):
        session = GameSessionManager().create_session([HUMAN] * 4, seed=1)
        assert session.is_human_turn
        assert not session.ai_stalled


class TestAiTurnCap:
    def test_all_ai_table_stalls_at_cap(self):
        session = GameSessionManager(max_ai_turns=5).create_session([AI] * 4, seed=2)
        assert session.ai_stalled
        assert not session.game.is_game_over
        assert session.game.state.turn_number == 6
        assert session.to_client_state()["ai_stalled"]

    def test_stalled_table_continues(self):
        session = GameSessionManager(max_ai_turns=5).create_session([AI] * 4, seed=2)
        while session.ai_stalled:
            assert session.run_ai_turns() > 0
        assert session.game.is_game_over
        session.game.check_invariants()

    def test_human_intent_continues_ai(self):
        seats = [HUMAN, AI, AI, AI]
        session = GameSessionManager().create_session(seats, seed=3)
        if session.game.is_game_over:
            pytest.skip("AI seats won before the first human turn")
        seat = session.game.current_player
        assert seat == 0
        assert session.draw(seat).ok
        assert session.game.is_game_over or session.game.current_player == 0
        assert session.action_history[-1]["action"] == "draw"
