"""Headless simulation of all-AI Pesten games."""

from simulation.runner import (
    BatchSummary,
    GameResult,
    GameRunner,
    run_batch,
    summarize,
)

__all__ = [
    "BatchSummary",
    "GameResult",
    "GameRunner",
    "run_batch",
    "summarize",
]
