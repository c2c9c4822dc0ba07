"""Tests for AI strategies."""

import pytest

from pesten_engine.cards import Card, Rank, Suit
from pesten_engine.moves import Draw, PlayCard
from strategies import FirstLegalStrategy, RandomStrategy, StrategyFactory

TOP = Card(Rank.FIVE, Suit.HEARTS)
HAND = (
    Card(Rank.NINE, Suit.CLUBS),
    Card(Rank.FIVE, Suit.SPADES),
    Card(Rank.KING, Suit.DIAMONDS),
    Card(Rank.TWO, Suit.HEARTS),
)
DEAD_HAND = (Card(Rank.NINE, Suit.CLUBS), Card(Rank.KING, Suit.DIAMONDS))


class TestFirstLegalStrategy:
    def test_plays_first_legal_card(self):
        assert FirstLegalStrategy().choose_action(HAND, TOP) == PlayCard(1)

    def test_draws_when_nothing_fits(self):
        assert FirstLegalStrategy().choose_action(DEAD_HAND, TOP) == Draw()

    def test_wild_top_allows_first_card(self):
        assert FirstLegalStrategy().choose_action(DEAD_HAND, Card.joker()) == PlayCard(0)

    def test_plays_jack_on_anything(self):
        hand = DEAD_HAND + (Card(Rank.JACK, Suit.CLUBS),)
        assert FirstLegalStrategy().choose_action(hand, TOP) == PlayCard(2)

    def test_name(self):
        assert FirstLegalStrategy().name == "FirstLegal"


class TestRandomStrategy:
    def test_only_picks_legal_cards(self):
        strategy = RandomStrategy(seed=42)
        for _ in range(50):
            action = strategy.choose_action(HAND, TOP)
            assert isinstance(action, PlayCard)
            assert action.index in (1, 3)

    def test_draws_when_nothing_fits(self):
        assert RandomStrategy(seed=1).choose_action(DEAD_HAND, TOP) == Draw()

    def test_seed_is_reproducible(self):
        first = [RandomStrategy(seed=7).choose_action(HAND, TOP) for _ in range(5)]
        second = [RandomStrategy(seed=7).choose_action(HAND, TOP) for _ in range(5)]
        assert first == second

    def test_reset_seed(self):
        strategy = RandomStrategy(seed=3)
        first = [strategy.choose_action(HAND, TOP) for _ in range(10)]
        strategy.reset_seed(3)
        assert [strategy.choose_action(HAND, TOP) for _ in range(10)] == first


class TestStrategyFactory:
    @pytest.mark.parametrize("name", ["first-legal", "FirstLegal", "default"])
    def test_create_first_legal(self, name):
        assert isinstance(StrategyFactory().create(name), FirstLegalStrategy)

    def test_create_random_with_seed(self):
        strategy = StrategyFactory().create("random", {"seed": 5})
        assert isinstance(strategy, RandomStrategy)
        assert strategy.choose_action(HAND, TOP) == RandomStrategy(seed=5).choose_action(HAND, TOP)

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown strategy"):
            StrategyFactory().create("minimax")

    def test_list_strategies(self):
        strategies = StrategyFactory().list_strategies()
        assert set(strategies) == {"first-legal", "random"}
