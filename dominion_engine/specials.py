"""Special-effect handlers, one per special tag.

Each tag has a human flow and an AI flow. The human flow usually parks a
pending effect on the state and waits for the player's choice; the AI flow
resolves in one step with a fixed heuristic. Cards whose effect needs no
choice share one function for both.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable

from dominion_engine.cards import CardType, Special, card_name, get_card
from dominion_engine.deck import draw_cards, reveal_cards
from dominion_engine.state import (
    DiscardSelection,
    GainDestination,
    GainSelection,
    GameState,
    PlayTwiceSelection,
    TopdeckSelection,
    TrashForGain,
    TrashSelection,
)
from dominion_engine.zones import (
    gain_card,
    gain_options,
    take_from_hand,
    worst_indices,
)

logger = logging.getLogger(__name__)

Handler = Callable[[GameState, str], GameState]

CHAPEL_LIMIT = 4
WORKSHOP_MAX_COST = 4
ARTISAN_MAX_COST = 5
LIBRARY_HAND_SIZE = 7
REMODEL_BONUS = 2
MINE_BONUS = 3
MONEYLENDER_COINS = 3

JUNK = ("copper", "estate", "curse")
WORKSHOP_PICKS = ("silver", "village", "smithy")


@dataclass(frozen=True, slots=True)
class SpecialHandler:
    human: Handler
    ai: Handler


def apply_special(state: GameState, special: Special, source_card_id: str) -> GameState:
    """Dispatch a special tag for the current player."""
    handler = SPECIAL_HANDLERS[special]
    player = state.current_player_state
    logger.debug(f"special {special.value} for {player.name} (ai={player.is_ai})")
    if player.is_ai:
        return handler.ai(state, source_card_id)
    return handler.human(state, source_card_id)


def _discard_from_hand(state: GameState, player_index: int, indices) -> tuple[GameState, tuple[str, ...]]:
    player, taken = take_from_hand(state.players[player_index], indices)
    player = player.with_discard(player.discard + taken)
    return state.with_player(player_index, player), taken


def _trash_from_hand(state: GameState, player_index: int, indices) -> tuple[GameState, tuple[str, ...]]:
    player, taken = take_from_hand(state.players[player_index], indices)
    return state.with_player(player_index, player).with_trash(*taken), taken


# --- cellar ---------------------------------------------------------------


def _cellar_human(state: GameState, source: str) -> GameState:
    hand_size = len(state.current_player_state.hand)
    return state.with_pending(
        DiscardSelection(
            player=state.current_player,
            origin="cellar",
            count=hand_size,
            exact=False,
            redraw=True,
        )
    )


def _cellar_ai(state: GameState, source: str) -> GameState:
    player = state.current_player_state
    junk = [
        i for i, c in enumerate(player.hand)
        if get_card(c).is_victory or get_card(c).is_curse
    ]
    if not junk:
        return state
    state, discarded = _discard_from_hand(state, state.current_player, junk)
    state = draw_cards(state, state.current_player, len(discarded))
    return state.with_log(
        f"{player.name} discards {len(discarded)} cards and draws {len(discarded)}"
    )


# --- chapel ---------------------------------------------------------------


def _chapel_human(state: GameState, source: str) -> GameState:
    return state.with_pending(
        TrashSelection(player=state.current_player, origin="chapel", max_cards=CHAPEL_LIMIT)
    )


def _chapel_ai(state: GameState, source: str) -> GameState:
    hand = state.current_player_state.hand
    chosen: list[int] = []
    for junk in JUNK:
        for i, card_id in enumerate(hand):
            if card_id == junk and len(chosen) < CHAPEL_LIMIT:
                chosen.append(i)
    if not chosen:
        return state
    state, trashed = _trash_from_hand(state, state.current_player, chosen)
    return state.with_log(
        f"{state.current_player_state.name} trashes {len(trashed)} cards"
    )


# --- workshop -------------------------------------------------------------


def _workshop_human(state: GameState, source: str) -> GameState:
    pending = GainSelection(
        player=state.current_player, origin="workshop", max_cost=WORKSHOP_MAX_COST
    )
    if not gain_options(state, pending.allows):
        return state.with_log("Nothing to gain")
    return state.with_pending(pending)


def _workshop_ai(state: GameState, source: str) -> GameState:
    options = [
        c for c in WORKSHOP_PICKS
        if state.supply_count(c) > 0 and get_card(c).cost <= WORKSHOP_MAX_COST
    ]
    if not options:
        return state
    card_id = min(options, key=lambda c: get_card(c).cost)
    return gain_card(state, state.current_player, card_id).with_log(
        f"{state.current_player_state.name} gains {card_name(card_id)}"
    )


# --- remodel / mine -------------------------------------------------------


def _remodel_human(state: GameState, source: str) -> GameState:
    if not state.current_player_state.hand:
        return state
    return state.with_pending(
        TrashForGain(player=state.current_player, origin="remodel", cost_bonus=REMODEL_BONUS)
    )


def _remodel_ai(state: GameState, source: str) -> GameState:
    player = state.current_player_state
    if not player.hand:
        return state
    index = min(range(len(player.hand)), key=lambda i: get_card(player.hand[i]).cost)
    state, (trashed,) = _trash_from_hand(state, state.current_player, [index])
    max_cost = get_card(trashed).cost + REMODEL_BONUS

    options = gain_options(state, lambda c: get_card(c).cost <= max_cost)
    if not options:
        return state.with_log(f"{player.name} trashes {card_name(trashed)}")
    gained = max(options, key=lambda c: get_card(c).cost)
    state = gain_card(state, state.current_player, gained)
    return state.with_log(
        f"{player.name} remodels {card_name(trashed)} into {card_name(gained)}"
    )


def _mine_human(state: GameState, source: str) -> GameState:
    hand = state.current_player_state.hand
    if not any(get_card(c).is_treasure for c in hand):
        return state
    return state.with_pending(
        TrashForGain(
            player=state.current_player,
            origin="mine",
            cost_bonus=MINE_BONUS,
            card_type=CardType.TREASURE,
            destination=GainDestination.HAND,
        )
    )


def _mine_ai(state: GameState, source: str) -> GameState:
    player = state.current_player_state
    for trashed, upgrade in (("silver", "gold"), ("copper", "silver")):
        if trashed in player.hand and state.supply_count(upgrade) > 0:
            break
    else:
        return state
    state, _ = _trash_from_hand(state, state.current_player, [player.hand.index(trashed)])
    state = gain_card(state, state.current_player, upgrade, GainDestination.HAND)
    return state.with_log(
        f"{player.name} mines {card_name(trashed)} into {card_name(upgrade)}"
    )


# --- artisan --------------------------------------------------------------


def start_topdeck(state: GameState, player_index: int, origin: str) -> GameState:
    """Ask for a card to put on the deck, or clear the prompt if the hand is empty."""
    if not state.players[player_index].hand:
        return state.with_pending(None)
    return state.with_pending(TopdeckSelection(player=player_index, origin=origin))


def _artisan_human(state: GameState, source: str) -> GameState:
    pending = GainSelection(
        player=state.current_player,
        origin="artisan",
        max_cost=ARTISAN_MAX_COST,
        destination=GainDestination.HAND,
        then_topdeck=True,
    )
    if not gain_options(state, pending.allows):
        return start_topdeck(state, state.current_player, "artisan")
    return state.with_pending(pending)


def _artisan_ai(state: GameState, source: str) -> GameState:
    player_index = state.current_player
    options = gain_options(state, lambda c: get_card(c).cost <= ARTISAN_MAX_COST)
    if not options:
        return state
    gained = max(options, key=lambda c: get_card(c).cost)
    state = gain_card(state, player_index, gained, GainDestination.HAND)

    player = state.players[player_index]
    index = min(range(len(player.hand)), key=lambda i: get_card(player.hand[i]).cost)
    player, (topdecked,) = take_from_hand(player, [index])
    player = player.with_deck(player.deck + (topdecked,))
    return state.with_player(player_index, player).with_log(
        f"{player.name} gains {card_name(gained)} and topdecks a card"
    )


# --- cards without a choice ----------------------------------------------


def _bureaucrat(state: GameState, source: str) -> GameState:
    if state.supply_count("silver") <= 0:
        return state
    state = gain_card(state, state.current_player, "silver", GainDestination.DECK)
    return state.with_log(
        f"{state.current_player_state.name} gains a Silver onto their deck"
    )


def _bandit(state: GameState, source: str) -> GameState:
    if state.supply_count("gold") <= 0:
        return state
    state = gain_card(state, state.current_player, "gold")
    return state.with_log(f"{state.current_player_state.name} gains a Gold")


def _council_room(state: GameState, source: str) -> GameState:
    state = draw_cards(state, state.opponent, 1)
    return state.with_log(f"{state.opponent_state.name} draws a card")


def _library(state: GameState, source: str) -> GameState:
    to_draw = LIBRARY_HAND_SIZE - len(state.current_player_state.hand)
    if to_draw <= 0:
        return state
    state = draw_cards(state, state.current_player, to_draw)
    return state.with_log(
        f"{state.current_player_state.name} draws to {LIBRARY_HAND_SIZE} cards"
    )


def _vassal(state: GameState, source: str) -> GameState:
    from dominion_engine.effects import resolve_card

    player_index = state.current_player
    state, revealed = reveal_cards(state, player_index, 1)
    if not revealed:
        return state
    (card_id,) = revealed
    player = state.players[player_index]
    state = state.with_log(f"{player.name} discards {card_name(card_id)}")

    if player.is_ai and get_card(card_id).is_action:
        player = player.with_play_area(player.play_area + (card_id,))
        state = state.with_player(player_index, player).with_log(
            f"{player.name} plays {card_name(card_id)}"
        )
        return resolve_card(state, card_id)

    player = player.with_discard(player.discard + (card_id,))
    return state.with_player(player_index, player)


def _harbinger_ai(state: GameState, source: str) -> GameState:
    player = state.current_player_state
    if not player.discard:
        return state
    index = max(range(len(player.discard)), key=lambda i: get_card(player.discard[i]).cost)
    card_id = player.discard[index]
    player = player.with_discard(player.discard[:index] + player.discard[index + 1:])
    player = player.with_deck(player.deck + (card_id,))
    return state.with_player(state.current_player, player).with_log(
        f"{player.name} topdecks {card_name(card_id)}"
    )


def _sentry_ai(state: GameState, source: str) -> GameState:
    player_index = state.current_player
    state, revealed = reveal_cards(state, player_index, 2)
    trashed = tuple(c for c in revealed if c in JUNK)
    # revealed[0] was the top card; put survivors back in the same order
    kept = tuple(c for c in revealed if c not in JUNK)
    player = state.players[player_index]
    player = player.with_deck(player.deck + tuple(reversed(kept)))
    state = state.with_player(player_index, player).with_trash(*trashed)
    if trashed:
        state = state.with_log(f"{player.name} trashes {len(trashed)} cards with Sentry")
    return state


def _nothing(state: GameState, source: str) -> GameState:
    return state


def _poacher_human(state: GameState, source: str) -> GameState:
    count = min(state.empty_piles, len(state.current_player_state.hand))
    if count <= 0:
        return state
    return state.with_pending(
        DiscardSelection(player=state.current_player, origin="poacher", count=count)
    )


def _poacher_ai(state: GameState, source: str) -> GameState:
    player = state.current_player_state
    count = min(state.empty_piles, len(player.hand))
    if count <= 0:
        return state
    state, discarded = _discard_from_hand(
        state, state.current_player, worst_indices(player.hand, count)
    )
    return state.with_log(f"{player.name} discards {len(discarded)} cards (Poacher)")


# --- throne room ----------------------------------------------------------


def _throne_room_human(state: GameState, source: str) -> GameState:
    if not any(get_card(c).is_action for c in state.current_player_state.hand):
        return state.with_log("No Action card to play twice")
    return state.with_pending(
        PlayTwiceSelection(player=state.current_player, origin="throneRoom")
    )


def _throne_room_ai(state: GameState, source: str) -> GameState:
    from dominion_engine.effects import play_twice

    hand = state.current_player_state.hand
    actions = [i for i, c in enumerate(hand) if get_card(c).is_action]
    if not actions:
        return state
    index = max(actions, key=lambda i: get_card(hand[i]).cost)
    return play_twice(state, index)


# --- merchant / moneylender ----------------------------------------------


def _merchant(state: GameState, source: str) -> GameState:
    return replace(state, merchant_bonus=True)


def _moneylender(state: GameState, source: str) -> GameState:
    player = state.current_player_state
    if "copper" not in player.hand:
        return state
    state, _ = _trash_from_hand(state, state.current_player, [player.hand.index("copper")])
    return state.with_counters(coins=MONEYLENDER_COINS).with_log(
        f"{player.name} trashes a Copper for +${MONEYLENDER_COINS}"
    )


def _shared(handler: Handler) -> SpecialHandler:
    return SpecialHandler(human=handler, ai=handler)


SPECIAL_HANDLERS: dict[Special, SpecialHandler] = {
    Special.CELLAR: SpecialHandler(human=_cellar_human, ai=_cellar_ai),
    Special.CHAPEL: SpecialHandler(human=_chapel_human, ai=_chapel_ai),
    Special.WORKSHOP: SpecialHandler(human=_workshop_human, ai=_workshop_ai),
    Special.REMODEL: SpecialHandler(human=_remodel_human, ai=_remodel_ai),
    Special.MINE: SpecialHandler(human=_mine_human, ai=_mine_ai),
    Special.ARTISAN: SpecialHandler(human=_artisan_human, ai=_artisan_ai),
    Special.BUREAUCRAT: _shared(_bureaucrat),
    Special.BANDIT: _shared(_bandit),
    Special.COUNCIL_ROOM: _shared(_council_room),
    Special.LIBRARY: _shared(_library),
    Special.VASSAL: _shared(_vassal),
    Special.HARBINGER: SpecialHandler(human=_nothing, ai=_harbinger_ai),
    Special.SENTRY: SpecialHandler(human=_nothing, ai=_sentry_ai),
    Special.POACHER: SpecialHandler(human=_poacher_human, ai=_poacher_ai),
    Special.THRONE_ROOM: SpecialHandler(human=_throne_room_human, ai=_throne_room_ai),
    Special.MERCHANT: _shared(_merchant),
    Special.MONEYLENDER: _shared(_moneylender),
}
