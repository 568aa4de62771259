"""Effect resolution for played cards."""

from __future__ import annotations

import logging
from dataclasses import replace

from dominion_engine.attacks import apply_attack
from dominion_engine.cards import Effect, card_name, get_card
from dominion_engine.deck import draw_cards
from dominion_engine.specials import apply_special
from dominion_engine.state import GameState
from dominion_engine.zones import take_from_hand

logger = logging.getLogger(__name__)


def apply_effect(state: GameState, effect: Effect, source_card_id: str) -> GameState:
    """Apply an effect descriptor for the current player.

    Order is fixed: draws, +actions, +buys, +coins, attack, special.
    """
    logger.debug(f"resolving {source_card_id}: {effect}")
    if effect.cards:
        state = draw_cards(state, state.current_player, effect.cards)
    if effect.actions or effect.buys or effect.coins:
        state = state.with_counters(
            actions=effect.actions, buys=effect.buys, coins=effect.coins
        )
    if effect.attack is not None:
        state = apply_attack(state, effect.attack)
    if effect.special is not None:
        state = apply_special(state, effect.special, source_card_id)
    return state


def resolve_card(state: GameState, card_id: str) -> GameState:
    """Apply a catalog card's effect, if it has one."""
    effect = get_card(card_id).effect
    if effect is None:
        return state
    return apply_effect(state, effect, card_id)


def play_twice(state: GameState, hand_index: int) -> GameState:
    """Move an Action card from hand to play and resolve it twice.

    If the first resolution leaves a choice pending, the second one is
    queued on ``deferred_effects`` and runs once that choice is made.
    """
    player_index = state.current_player
    player, (card_id,) = take_from_hand(state.players[player_index], [hand_index])
    player = player.with_play_area(player.play_area + (card_id,))
    state = state.with_player(player_index, player).with_log(
        f"{player.name} plays {card_name(card_id)} twice with Throne Room"
    )

    state = resolve_card(state, card_id)
    if state.pending_effect is not None:
        return replace(state, deferred_effects=(card_id,) + state.deferred_effects)
    return resolve_card(state, card_id)


def resume_deferred(state: GameState) -> GameState:
    """Run queued resolutions while no choice is pending."""
    while state.pending_effect is None and state.deferred_effects:
        card_id, rest = state.deferred_effects[0], state.deferred_effects[1:]
        state = resolve_card(replace(state, deferred_effects=rest), card_id)
    return state
