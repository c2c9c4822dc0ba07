"""Tests for the simulation runner."""

import pytest

from simulation import GameRunner, run_batch, summarize
from strategies import FirstLegalStrategy, RandomStrategy


def _table():
    return [FirstLegalStrategy(), RandomStrategy(seed=1), FirstLegalStrategy(), RandomStrategy(seed=2)]


class TestGameRunner:
    def test_requires_four_strategies(self):
        with pytest.raises(ValueError):
            GameRunner([FirstLegalStrategy()] * 3)

    def test_game_finishes_with_winner(self):
        result = GameRunner(_table()).run_game(seed=11)
        assert result.winner in range(4)
        assert result.final_hand_sizes[result.winner] == 0
        assert result.turns > 0
        assert result.cards_played > 0
        assert sum(result.effects.values()) == result.cards_played
        assert result.player_strategies == ("FirstLegal", "Random", "FirstLegal", "Random")
        assert result.seed == 11

    def test_same_seed_same_outcome(self):
        strategies = [FirstLegalStrategy() for _ in range(4)]
        runner = GameRunner(strategies)
        first = runner.run_game(seed=21)
        second = runner.run_game(seed=21)
        assert (first.winner, first.turns, first.final_hand_sizes) == (
            second.winner,
            second.turns,
            second.final_hand_sizes,
        )

    def test_turn_limit_abandons_game(self):
        result = GameRunner([FirstLegalStrategy() for _ in range(4)], max_turns=3).run_game(seed=5)
        assert result.winner is None
        assert result.turns <= 4


class TestBatch:
    def test_run_batch_and_summarize(self):
        results = run_batch(_table(), num_games=5, start_seed=100)
        assert [r.seed for r in results] == [100, 101, 102, 103, 104]

        summary = summarize(results)
        assert summary.games == 5
        assert sum(summary.wins) + summary.unfinished == 5
        assert summary.avg_turns > 0
        assert sum(summary.win_rate(seat) for seat in range(4)) == pytest.approx(
            (5 - summary.unfinished) / 5
        )

    def test_summarize_empty(self):
        summary = summarize([])
        assert summary.games == 0
        assert summary.win_rate(0) == 0.0
