"""Attack resolution.

Attacks always hit the single non-current player. A Reaction card in the
target's hand (Moat) is revealed and the attack does nothing else.
"""

from __future__ import annotations

import logging
from typing import Callable

from dominion_engine.cards import Attack, CardType, card_name, get_card, has_type
from dominion_engine.deck import reveal_cards
from dominion_engine.state import CURSE, DiscardSelection, GameState
from dominion_engine.zones import gain_card, take_from_hand, worst_indices

logger = logging.getLogger(__name__)

MILITIA_HAND_SIZE = 3


def apply_attack(state: GameState, attack: Attack) -> GameState:
    """Apply an attack to the opponent of the current player."""
    target_index = state.opponent
    target = state.players[target_index]

    reaction = next((c for c in target.hand if has_type(c, CardType.REACTION)), None)
    if reaction is not None:
        logger.debug(f"{attack.value} blocked by {reaction}")
        return state.with_log(
            f"{target.name} reveals {card_name(reaction)} and blocks the attack!"
        )

    return _ATTACKS[attack](state, target_index)


def _discard_to_three(state: GameState, target_index: int) -> GameState:
    target = state.players[target_index]
    excess = len(target.hand) - MILITIA_HAND_SIZE
    if excess <= 0:
        return state

    if not target.is_ai:
        return state.with_pending(
            DiscardSelection(player=target_index, origin="militia", count=excess)
        )

    new_target, discarded = take_from_hand(target, worst_indices(target.hand, excess))
    new_target = new_target.with_discard(new_target.discard + discarded)
    return state.with_player(target_index, new_target).with_log(
        f"{target.name} discards {len(discarded)} cards"
    )


def _curse(state: GameState, target_index: int) -> GameState:
    target = state.players[target_index]
    if state.supply_count(CURSE) <= 0:
        return state.with_log(f"No Curses left for {target.name}")
    return gain_card(state, target_index, CURSE).with_log(f"{target.name} gains a Curse")


def _bureaucrat(state: GameState, target_index: int) -> GameState:
    target = state.players[target_index]
    index = next(
        (i for i, c in enumerate(target.hand) if get_card(c).is_victory), None
    )
    if index is None:
        return state.with_log(f"{target.name} reveals no Victory cards")

    new_target, (card_id,) = take_from_hand(target, [index])
    new_target = new_target.with_deck(new_target.deck + (card_id,))
    return state.with_player(target_index, new_target).with_log(
        f"{target.name} puts {card_name(card_id)} on their deck"
    )


def _bandit(state: GameState, target_index: int) -> GameState:
    state, revealed = reveal_cards(state, target_index, 2)
    target = state.players[target_index]

    treasures = [
        c for c in revealed if get_card(c).is_treasure and c != "copper"
    ]
    to_trash = max(treasures, key=lambda c: get_card(c).cost, default=None)
    rest = list(revealed)
    if to_trash is not None:
        rest.remove(to_trash)
        state = state.with_trash(to_trash).with_log(
            f"{target.name} trashes {card_name(to_trash)}"
        )

    target = target.with_discard(target.discard + tuple(rest))
    return state.with_player(target_index, target)


_ATTACKS: dict[Attack, Callable[[GameState, int], GameState]] = {
    Attack.DISCARD_TO_3: _discard_to_three,
    Attack.CURSE: _curse,
    Attack.BUREAUCRAT: _bureaucrat,
    Attack.BANDIT: _bandit,
}
