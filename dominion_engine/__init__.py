"""Dominion deck-building game engine."""

from dominion_engine.cards import CATALOG, Card, CardType, Effect, get_card, has_type
from dominion_engine.executor import IllegalMoveError, execute_move
from dominion_engine.game import (
    buy_card,
    cancel_pending_effect,
    discard_and_draw,
    discard_cards,
    end_turn,
    go_to_buy_phase,
    new_game,
    play_action,
    select_gain_card,
    select_repeat_action,
    select_trash_card,
    topdeck_card,
    trash_cards,
)
from dominion_engine.move_generator import generate_legal_moves
from dominion_engine.state import GamePhase, GameState, PlayerState, calculate_vp

__all__ = [
    "CATALOG",
    "Card",
    "CardType",
    "Effect",
    "get_card",
    "has_type",
    "IllegalMoveError",
    "execute_move",
    "generate_legal_moves",
    "GamePhase",
    "GameState",
    "PlayerState",
    "calculate_vp",
    "new_game",
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
]
