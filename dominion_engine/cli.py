"""Command-line interface for Dominion."""

from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING

from dominion_engine.cards import card_name
from dominion_engine.config import EngineConfig, load_config
from dominion_engine.executor import execute_move
from dominion_engine.move_generator import generate_legal_moves
from dominion_engine.moves import (
    PlayAction,
    SelectRepeatAction,
    SelectTrashCard,
    TopdeckCard,
)
from dominion_engine.state import calculate_vp, create_initial_state

if TYPE_CHECKING:
    from dominion_engine.moves import Move
    from dominion_engine.state import GameState


def format_state(state: GameState, show_opponent_hand: bool = False) -> str:
    """Format game state for display."""
    lines = []

    lines.append("=" * 60)
    lines.append(
        f"Turn {state.turn_number} | Phase: {state.phase.name} | "
        f"Actions: {state.actions} Buys: {state.buys} Coins: ${state.coins}"
    )
    lines.append("=" * 60)

    for i, player in enumerate(state.players):
        prefix = "→ " if i == state.current_player else "  "
        lines.append(f"\n{prefix}{player.name} ({calculate_vp(player)} VP)")
        lines.append("-" * 40)

        if i == state.current_player or show_opponent_hand or not player.is_ai:
            hand_str = ", ".join(card_name(c) for c in player.hand) or "(empty)"
            lines.append(f"  Hand: {hand_str}")
        else:
            lines.append(f"  Hand: [{len(player.hand)} cards]")

        if player.play_area:
            lines.append(f"  In play: {', '.join(card_name(c) for c in player.play_area)}")
        lines.append(f"  Deck: {len(player.deck)} | Discard: {len(player.discard)}")

    supply = ", ".join(
        f"{card_name(card_id)} {count}" for card_id, count in state.supply.items()
    )
    lines.append(f"\nSupply: {supply}")
    lines.append(f"Trash: {len(state.trash)} cards")

    if state.pending_effect is not None:
        pending = state.pending_effect
        lines.append(f"\nWaiting on {state.players[pending.player].name}: {pending.origin}")

    if state.game_over:
        lines.append("\n" + "=" * 60)
        if state.is_tie:
            lines.append(f"GAME OVER - Tie! ({state.win_reason.name})")
        else:
            winner = state.players[state.winner].name
            lines.append(f"GAME OVER - {winner} wins! ({state.win_reason.name})")
        lines.append("=" * 60)

    return "\n".join(lines)


def describe_move(state: GameState, move: Move) -> str:
    """Describe a move with card names instead of hand indices."""
    hand = state.players[state.acting_player].hand
    match move:
        case PlayAction(hand_index=i):
            return f"Play {card_name(hand[i])}"
        case SelectRepeatAction(hand_index=i):
            return f"Play {card_name(hand[i])} twice"
        case SelectTrashCard(hand_index=i):
            return f"Trash {card_name(hand[i])}"
        case TopdeckCard(hand_index=i):
            return f"Put {card_name(hand[i])} on your deck"
    indices = getattr(move, "hand_indices", None)
    if indices is not None:
        chosen = ", ".join(card_name(hand[i]) for i in indices) or "nothing"
        return f"{move.move_type.name.replace('_', ' ').capitalize()}: {chosen}"
    return str(move)


def format_moves(state: GameState, moves: list[Move]) -> str:
    """Format available moves for display."""
    lines = ["Available moves:"]
    for i, move in enumerate(moves):
        lines.append(f"  {i + 1}. {describe_move(state, move)}")
    return "\n".join(lines)


def _print_new_log(state: GameState, seen: int) -> int:
    for line in state.log[seen:]:
        print(f"  {line}")
    return len(state.log)


def play_interactive(config: EngineConfig, seed: int | None = None) -> None:
    """Play an interactive game against the heuristic AI."""
    from simulation.runner import play_turn
    from strategies.heuristic import HeuristicStrategy

    ai = HeuristicStrategy(seed=seed)
    state = create_initial_state(kingdom=config.kingdom, seed=seed)
    seen = 0

    print("\nWelcome to Dominion!")
    print(f"Kingdom: {', '.join(card_name(c) for c in state.kingdom)}")
    print("Type the number of a move to play. Type 'q' to quit.\n")

    while not state.game_over:
        seen = _print_new_log(state, seen)

        if state.players[state.acting_player].is_ai:
            state, moves = play_turn(state, ai)
            print(f"\nAI made {len(moves)} moves")
            continue

        print(format_state(state))
        legal_moves = generate_legal_moves(state)
        print(f"\n{format_moves(state, legal_moves)}")

        while True:
            try:
                choice = input("\nYour move: ").strip()
                if choice.lower() == "q":
                    print("Goodbye!")
                    return

                move_idx = int(choice) - 1
                if 0 <= move_idx < len(legal_moves):
                    move = legal_moves[move_idx]
                    break
                else:
                    print(f"Please enter a number 1-{len(legal_moves)}")
            except ValueError:
                print("Please enter a valid number or 'q' to quit")

        state = execute_move(state, move)
        print()

    _print_new_log(state, seen)
    print(format_state(state))


def watch_game(config: EngineConfig, seed: int | None = None, delay: float = 0.5) -> None:
    """Watch two AIs play against each other."""
    import time

    from strategies.heuristic import HeuristicStrategy
    from strategies.random_strategy import RandomStrategy

    strategy0 = HeuristicStrategy(seed=seed)
    strategy1 = RandomStrategy(seed=seed)
    state = create_initial_state(
        kingdom=config.kingdom, seed=seed, ai_players=(), names=("Heuristic", "Random")
    )

    print("\nWatching: Heuristic vs Random")
    print("Press Ctrl+C to stop.\n")

    try:
        while not state.game_over and state.turn_number <= config.max_turns:
            print(format_state(state, show_opponent_hand=True))

            acting_player = state.acting_player
            legal_moves = generate_legal_moves(state)
            strategy = strategy0 if acting_player == 0 else strategy1
            move = strategy.select_move(state, legal_moves)

            print(f"\nPlayer {acting_player} ({strategy.name}): {describe_move(state, move)}")
            state = execute_move(state, move)

            time.sleep(delay)
            print("\n" + "-" * 60 + "\n")

    except KeyboardInterrupt:
        print("\nStopped.")

    print(format_state(state, show_opponent_hand=True))


def run_tournament(config: EngineConfig, num_games: int = 100, seed: int = 42) -> None:
    """Run a tournament between strategies."""
    from simulation.runner import run_batch
    from strategies.heuristic import HeuristicStrategy
    from strategies.random_strategy import RandomStrategy

    matchups = (
        ("Random vs Random", RandomStrategy(seed=seed), RandomStrategy(seed=seed + 1000)),
        ("Heuristic vs Random", HeuristicStrategy(seed=seed), RandomStrategy(seed=seed + 1000)),
        ("Heuristic vs Heuristic", HeuristicStrategy(seed=seed), HeuristicStrategy(seed=seed + 1000)),
    )

    for label, strategy0, strategy1 in matchups:
        print(f"\nRunning {num_games} games: {label}")
        results = run_batch(
            strategy0,
            strategy1,
            num_games,
            start_seed=seed,
            max_turns=config.max_turns,
            kingdom=config.kingdom,
        )

        p0_wins = sum(1 for r in results if r.winner == 0)
        p1_wins = sum(1 for r in results if r.winner == 1)
        unfinished = sum(1 for r in results if r.win_reason is None)
        ties = sum(1 for r in results if r.winner is None) - unfinished
        avg_turns = sum(r.turns for r in results) / len(results)
        avg_duration = sum(r.duration_ms for r in results) / len(results)

        print(f"\nResults ({label}):")
        print(f"  {strategy0.name} (P0) wins: {p0_wins} ({100*p0_wins/num_games:.1f}%)")
        print(f"  {strategy1.name} (P1) wins: {p1_wins} ({100*p1_wins/num_games:.1f}%)")
        print(f"  Ties: {ties} ({100*ties/num_games:.1f}%)")
        print(f"  Turn cap reached: {unfinished}")
        print(f"  Average turns: {avg_turns:.1f}")
        print(f"  Average duration: {avg_duration:.2f}ms")


def main() -> None:
    """Main entry point for the CLI."""
    config = load_config()

    parser = argparse.ArgumentParser(description="Dominion deck-building game engine")
    parser.add_argument("--log-level", default=config.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    play_parser = subparsers.add_parser("play", help="Play against AI")
    play_parser.add_argument("--seed", type=int, default=config.seed, help="Random seed")

    watch_parser = subparsers.add_parser("watch", help="Watch AI vs AI")
    watch_parser.add_argument("--seed", type=int, default=config.seed, help="Random seed")
    watch_parser.add_argument(
        "--delay", type=float, default=0.5, help="Delay between moves (seconds)"
    )

    tournament_parser = subparsers.add_parser("tournament", help="Run tournament")
    tournament_parser.add_argument(
        "--games", type=int, default=100, help="Number of games"
    )
    tournament_parser.add_argument(
        "--seed", type=int, default=config.seed if config.seed is not None else 42,
        help="Random seed",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play_interactive(config, seed=args.seed)
    elif args.command == "watch":
        watch_game(config, seed=args.seed, delay=args.delay)
    elif args.command == "tournament":
        run_tournament(config, num_games=args.games, seed=args.seed)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
