"""AI strategies for Pesten seats."""

from strategies.base import Strategy
from strategies.factory import StrategyFactory
from strategies.first_legal import FirstLegalStrategy
from strategies.random_strategy import RandomStrategy

__all__ = [
    "Strategy",
    "StrategyFactory",
    "FirstLegalStrategy",
    "RandomStrategy",
]
