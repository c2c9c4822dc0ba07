"""Name-based construction of strategies for adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from strategies.base import Strategy


class StrategyFactory:
    """Factory for creating strategy instances."""

    AVAILABLE_STRATEGIES = {
        "first-legal": "Plays the first legal card in hand, else draws",
        "random": "Plays a random legal card, else draws",
    }

    def create(self, name: str, params: dict[str, Any] | None = None) -> Strategy:
        """Create a strategy instance.

        Raises:
            ValueError: If ``name`` is not a known strategy.
        """
        params = params or {}
        name_lower = name.lower()

        match name_lower:
            case "first-legal" | "firstlegal" | "default":
                from strategies.first_legal import FirstLegalStrategy
                return FirstLegalStrategy()

            case "random":
                from strategies.random_strategy import RandomStrategy
                return RandomStrategy(seed=params.get("seed"))

            case _:
                raise ValueError(f"Unknown strategy: {name}")

    def list_strategies(self) -> dict[str, str]:
        """List available strategies with descriptions."""
        return self.AVAILABLE_STRATEGIES.copy()
