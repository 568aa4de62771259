"""Public game API.

Every operation here is total: an illegal move hands back the very same
state object, without a log line, so a presentation layer can retry freely.
Use ``execute_move`` directly to get the reason as an ``IllegalMoveError``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from dominion_engine.executor import IllegalMoveError, execute_move
from dominion_engine.moves import (
    BuyCard,
    CancelPendingEffect,
    DiscardAndDraw,
    DiscardCards,
    EndTurn,
    GoToBuyPhase,
    Move,
    PlayAction,
    SelectGainCard,
    SelectRepeatAction,
    SelectTrashCard,
    TopdeckCard,
    TrashCards,
)
from dominion_engine.move_generator import generate_legal_moves
from dominion_engine.state import GameState, calculate_vp, create_initial_state

logger = logging.getLogger(__name__)

__all__ = [
    "new_game",
    "apply_move",
    "play_action",
    "go_to_buy_phase",
    "buy_card",
    "end_turn",
    "discard_cards",
    "discard_and_draw",
    "trash_cards",
    "select_gain_card",
    "select_trash_card",
    "topdeck_card",
    "select_repeat_action",
    "cancel_pending_effect",
    "calculate_vp",
    "generate_legal_moves",
]


def new_game(
    kingdom: Iterable[str] | None = None,
    seed: int | None = None,
    ai_players: Iterable[int] = (1,),
    names: tuple[str, str] | None = None,
) -> GameState:
    """Start a two-player game. Player 1 is the AI unless told otherwise."""
    state = create_initial_state(kingdom=kingdom, seed=seed, ai_players=ai_players, names=names)
    logger.debug(f"new game, kingdom={state.kingdom}")
    return state


def apply_move(state: GameState, move: Move) -> GameState:
    """Execute ``move``, or return ``state`` unchanged if it is illegal."""
    try:
        return execute_move(state, move)
    except IllegalMoveError as e:
        logger.debug(f"rejected {move}: {e}")
        return state


def play_action(state: GameState, hand_index: int) -> GameState:
    return apply_move(state, PlayAction(hand_index=hand_index))


def go_to_buy_phase(state: GameState) -> GameState:
    return apply_move(state, GoToBuyPhase())


def buy_card(state: GameState, card_id: str) -> GameState:
    return apply_move(state, BuyCard(card_id=card_id))


def end_turn(state: GameState) -> GameState:
    return apply_move(state, EndTurn())


def discard_cards(state: GameState, hand_indices: Sequence[int]) -> GameState:
    return apply_move(state, DiscardCards(hand_indices=tuple(hand_indices)))


def discard_and_draw(state: GameState, hand_indices: Sequence[int]) -> GameState:
    return apply_move(state, DiscardAndDraw(hand_indices=tuple(hand_indices)))


def trash_cards(state: GameState, hand_indices: Sequence[int]) -> GameState:
    return apply_move(state, TrashCards(hand_indices=tuple(hand_indices)))


def select_gain_card(state: GameState, card_id: str) -> GameState:
    return apply_move(state, SelectGainCard(card_id=card_id))


def select_trash_card(state: GameState, hand_index: int) -> GameState:
    return apply_move(state, SelectTrashCard(hand_index=hand_index))


def topdeck_card(state: GameState, hand_index: int) -> GameState:
    return apply_move(state, TopdeckCard(hand_index=hand_index))


def select_repeat_action(state: GameState, hand_index: int) -> GameState:
    return apply_move(state, SelectRepeatAction(hand_index=hand_index))


def cancel_pending_effect(state: GameState) -> GameState:
    return apply_move(state, CancelPendingEffect())
