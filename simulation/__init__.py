"""Simulation running."""

from simulation.runner import (
    GameLog,
    GameResult,
    GameRunner,
    MoveRecord,
    play_turn,
    run_batch,
    save_game_log,
)

__all__ = [
    "GameResult",
    "GameLog",
    "GameRunner",
    "MoveRecord",
    "play_turn",
    "save_game_log",
    "run_batch",
]
