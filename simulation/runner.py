"""Game runner for Dominion simulations."""

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from dominion_engine.executor import execute_move
from dominion_engine.move_generator import generate_legal_moves
from dominion_engine.state import calculate_vp, create_initial_state

if TYPE_CHECKING:
    from dominion_engine.moves import Move
    from dominion_engine.state import GameState
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed (or abandoned) game."""

    game_id: str
    winner: int | None  # 0, 1, or None for a tie or turn cap
    win_reason: str | None
    turns: int
    final_scores: tuple[int, int]
    player_strategies: tuple[str, str]
    seed: int | None
    duration_ms: float
    move_count: int
    kingdom: tuple[str, ...] = ()


@dataclass
class MoveRecord:
    """Record of a single move."""

    turn: int
    player: int
    move: str
    state_after: dict


@dataclass
class GameLog:
    """Complete log of a game."""

    game_id: str
    timestamp: str
    seed: int | None
    player_strategies: tuple[str, str]
    initial_state: dict
    moves: list[MoveRecord] = field(default_factory=list)
    result: GameResult | None = None


def play_turn(state: GameState, strategy: Strategy) -> tuple[GameState, list[Move]]:
    """Let ``strategy`` act for the current player until control leaves them.

    Control leaves when the strategy ends its turn, the game ends, or an
    attack hands a choice to the opponent. In the last case call again once
    the opponent has answered.

    Returns:
        The new state and the moves made, in order.
    """
    player = state.current_player
    moves: list[Move] = []
    while (
        not state.game_over
        and state.current_player == player
        and state.acting_player == player
    ):
        legal_moves = generate_legal_moves(state)
        move = strategy.select_move(state, legal_moves)
        state = execute_move(state, move)
        moves.append(move)
        strategy.on_move_made(state, move, player)
    return state, moves


class GameRunner:
    """Runs Dominion games between two strategies."""

    def __init__(
        self,
        strategy0: Strategy,
        strategy1: Strategy,
        max_turns: int = 200,
        log_moves: bool = True,
        kingdom: Iterable[str] | None = None,
        auto_resolve: bool = False,
    ):
        """Initialize the game runner.

        Args:
            strategy0: Strategy for player 0.
            strategy1: Strategy for player 1.
            max_turns: Turn number after which the game is abandoned.
            log_moves: Whether to log individual moves.
            kingdom: Fixed kingdom, or None to draw one per game from the seed.
            auto_resolve: Mark both players as AI so card effects resolve
                with the engine's built-in choices instead of asking the
                strategies.
        """
        self.strategies = (strategy0, strategy1)
        self.max_turns = max_turns
        self.log_moves = log_moves
        self.kingdom = tuple(kingdom) if kingdom is not None else None
        self.auto_resolve = auto_resolve

    def run_game(self, seed: int | None = None) -> tuple[GameResult, GameLog | None]:
        """Run a single game.

        Args:
            seed: Random seed for the kingdom and every shuffle.

        Returns:
            Tuple of (result, log). Log is None if log_moves is False.
        """
        start_time = time.perf_counter()
        game_id = str(uuid.uuid4())

        state = create_initial_state(
            kingdom=self.kingdom,
            seed=seed,
            ai_players=(0, 1) if self.auto_resolve else (),
            names=(self.strategies[0].name + " (P0)", self.strategies[1].name + " (P1)"),
        )

        logger.info(f"game {game_id} started, seed {seed}, kingdom {state.kingdom}")

        for i, strategy in enumerate(self.strategies):
            strategy.on_game_start(state, i)

        game_log = None
        if self.log_moves:
            game_log = GameLog(
                game_id=game_id,
                timestamp=datetime.now().isoformat(),
                seed=seed,
                player_strategies=(self.strategies[0].name, self.strategies[1].name),
                initial_state=self._state_to_dict(state),
            )

        move_count = 0

        while not state.game_over and state.turn_number <= self.max_turns:
            acting_player = state.acting_player
            legal_moves = generate_legal_moves(state)

            if not legal_moves:
                # EndTurn or an answer to the pending effect always exists
                break

            strategy = self.strategies[acting_player]
            move = strategy.select_move(state, legal_moves)
            new_state = execute_move(state, move)
            move_count += 1

            if game_log:
                game_log.moves.append(
                    MoveRecord(
                        turn=state.turn_number,
                        player=acting_player,
                        move=str(move),
                        state_after=self._state_to_dict(new_state),
                    )
                )

            for strategy in self.strategies:
                strategy.on_move_made(new_state, move, acting_player)

            state = new_state

        if not state.game_over:
            logger.warning(f"game {game_id} (seed {seed}) hit the {self.max_turns} turn cap")
        else:
            logger.info(f"game {game_id} over after {state.turn_number} turns, winner {state.winner}")

        duration_ms = (time.perf_counter() - start_time) * 1000

        result = GameResult(
            game_id=game_id,
            winner=state.winner,
            win_reason=state.win_reason.name if state.win_reason else None,
            turns=state.turn_number,
            final_scores=state.final_scores or (
                calculate_vp(state.players[0]),
                calculate_vp(state.players[1]),
            ),
            player_strategies=(self.strategies[0].name, self.strategies[1].name),
            seed=seed,
            duration_ms=duration_ms,
            move_count=move_count,
            kingdom=state.kingdom,
        )

        if game_log:
            game_log.result = result

        for strategy in self.strategies:
            strategy.on_game_end(state, state.winner)

        return result, game_log

    def _state_to_dict(self, state: GameState) -> dict:
        """Convert game state to a dictionary for logging."""
        return {
            "turn": state.turn_number,
            "current_player": state.current_player,
            "phase": state.phase.name,
            "actions": state.actions,
            "buys": state.buys,
            "coins": state.coins,
            "pending": state.pending_effect.origin if state.pending_effect else None,
            "supply": dict(state.supply),
            "trash_size": len(state.trash),
            "players": [
                {
                    "hand": list(p.hand),
                    "deck_size": len(p.deck),
                    "discard_size": len(p.discard),
                    "play_area": list(p.play_area),
                    "victory_points": calculate_vp(p),
                }
                for p in state.players
            ],
        }


def save_game_log(log: GameLog, base_dir: str = "logs/games") -> Path:
    """Save a game log to disk.

    Args:
        log: Game log to save.
        base_dir: Base directory for logs.

    Returns:
        Path to the saved file.
    """
    date_str = log.timestamp[:10]  # YYYY-MM-DD
    dir_path = Path(base_dir) / date_str
    dir_path.mkdir(parents=True, exist_ok=True)

    file_path = dir_path / f"game_{log.game_id}.json"

    data = {
        "game_id": log.game_id,
        "timestamp": log.timestamp,
        "seed": log.seed,
        "player_strategies": log.player_strategies,
        "initial_state": log.initial_state,
        "moves": [
            {
                "turn": m.turn,
                "player": m.player,
                "move": m.move,
                "state_after": m.state_after,
            }
            for m in log.moves
        ],
        "result": {
            "winner": log.result.winner,
            "win_reason": log.result.win_reason,
            "turns": log.result.turns,
            "final_scores": log.result.final_scores,
            "kingdom": log.result.kingdom,
            "duration_ms": log.result.duration_ms,
            "move_count": log.result.move_count,
        }
        if log.result
        else None,
    }

    with open(file_path, "w") as f:
        json.dump(data, f, indent=2)

    return file_path


def run_batch(
    strategy0: Strategy,
    strategy1: Strategy,
    num_games: int,
    start_seed: int = 0,
    log_moves: bool = False,
    max_turns: int = 200,
    kingdom: Iterable[str] | None = None,
) -> list[GameResult]:
    """Run multiple games.

    Args:
        strategy0: Strategy for player 0.
        strategy1: Strategy for player 1.
        num_games: Number of games to run.
        start_seed: Starting seed (incremented for each game).
        log_moves: Whether to log moves (slower).
        max_turns: Turn cap per game.
        kingdom: Fixed kingdom for every game.

    Returns:
        List of game results.
    """
    runner = GameRunner(
        strategy0, strategy1, max_turns=max_turns, log_moves=log_moves, kingdom=kingdom
    )
    results = []

    for i in range(num_games):
        result, _ = runner.run_game(seed=start_seed + i)
        results.append(result)

    return results
