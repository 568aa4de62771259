"""Move execution for Dominion."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from dominion_engine.cards import card_name, get_card
from dominion_engine.deck import draw_cards
from dominion_engine.effects import play_twice, resolve_card, resume_deferred
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
from dominion_engine.specials import start_topdeck
from dominion_engine.state import (
    HAND_SIZE,
    PROVINCE,
    DiscardSelection,
    GainDestination,
    GainSelection,
    GamePhase,
    GameState,
    PlayTwiceSelection,
    TopdeckSelection,
    TrashForGain,
    TrashSelection,
    WinReason,
    calculate_vp,
)
from dominion_engine.zones import gain_card, gain_options, names, take_from_hand

logger = logging.getLogger(__name__)

GAME_END_EMPTY_PILES = 3


class IllegalMoveError(Exception):
    """Raised when an illegal move is attempted."""

    pass


def execute_move(state: GameState, move: Move) -> GameState:
    """Execute a move and return the new game state.

    Args:
        state: Current game state.
        move: Move to execute.

    Returns:
        New game state after the move.

    Raises:
        IllegalMoveError: If the move is not legal.
    """
    if state.game_over:
        raise IllegalMoveError("Game is already over")

    match move:
        case PlayAction():
            return _execute_play_action(state, move)
        case GoToBuyPhase():
            return _execute_go_to_buy_phase(state)
        case BuyCard():
            return _execute_buy_card(state, move)
        case EndTurn():
            return _execute_end_turn(state)
        case DiscardCards():
            return _execute_discard_cards(state, move)
        case DiscardAndDraw():
            return _execute_discard_and_draw(state, move)
        case TrashCards():
            return _execute_trash_cards(state, move)
        case SelectGainCard():
            return _execute_select_gain_card(state, move)
        case SelectTrashCard():
            return _execute_select_trash_card(state, move)
        case TopdeckCard():
            return _execute_topdeck_card(state, move)
        case SelectRepeatAction():
            return _execute_select_repeat_action(state, move)
        case CancelPendingEffect():
            return _execute_cancel(state)
        case _:
            raise IllegalMoveError(f"Unknown move type: {type(move)}")


# --- Validation helpers ------------------------------------------------------


def _require_no_pending(state: GameState) -> None:
    if state.pending_effect is not None:
        raise IllegalMoveError(f"Waiting on {state.pending_effect.origin}")


def _require_pending(state: GameState, kind: type):
    pending = state.pending_effect
    if not isinstance(pending, kind):
        raise IllegalMoveError(f"No {kind.__name__} pending")
    return pending


def _require_hand_index(state: GameState, player_index: int, index: int) -> str:
    hand = state.players[player_index].hand
    if not 0 <= index < len(hand):
        raise IllegalMoveError(f"No card at hand index {index}")
    return hand[index]


def _require_selection(
    state: GameState, player_index: int, indices: Sequence[int]
) -> tuple[int, ...]:
    selection = tuple(indices)
    if len(set(selection)) != len(selection):
        raise IllegalMoveError("Duplicate hand index")
    for index in selection:
        _require_hand_index(state, player_index, index)
    return selection


def _finish_pending(state: GameState) -> GameState:
    """Clear the pending effect and run anything Throne Room queued behind it."""
    return resume_deferred(state.with_pending(None))


# --- Action phase ------------------------------------------------------------


def _execute_play_action(state: GameState, move: PlayAction) -> GameState:
    """Move an Action card to play and resolve its effect."""
    _require_no_pending(state)
    if state.phase != GamePhase.ACTION:
        raise IllegalMoveError("Can only play actions during the action phase")
    if state.actions <= 0:
        raise IllegalMoveError("No actions left")

    card_id = _require_hand_index(state, state.current_player, move.hand_index)
    if not get_card(card_id).is_action:
        raise IllegalMoveError(f"{card_name(card_id)} is not an Action")

    player, _ = take_from_hand(state.current_player_state, [move.hand_index])
    player = player.with_play_area(player.play_area + (card_id,))
    state = (
        replace(state.with_player(state.current_player, player), actions=state.actions - 1)
        .with_log(f"{player.name} plays {card_name(card_id)}")
    )
    return resolve_card(state, card_id)


def _execute_go_to_buy_phase(state: GameState) -> GameState:
    """Auto-play every treasure in hand and switch to the buy phase."""
    _require_no_pending(state)
    if state.phase != GamePhase.ACTION:
        raise IllegalMoveError("Already in the buy phase")

    player = state.current_player_state
    treasures = tuple(c for c in player.hand if get_card(c).is_treasure)
    others = tuple(c for c in player.hand if not get_card(c).is_treasure)
    coins = state.coins + sum(get_card(c).coins for c in treasures)

    if state.merchant_bonus and "silver" in treasures:
        coins += 1
        state = state.with_log("Merchant bonus: +$1")

    player = player.with_hand(others).with_play_area(player.play_area + treasures)
    state = replace(
        state.with_player(state.current_player, player),
        coins=coins,
        phase=GamePhase.BUY,
    )
    if treasures:
        state = state.with_log(f"{player.name} plays treasures for ${coins}")
    return state


# --- Buy phase ---------------------------------------------------------------


def _execute_buy_card(state: GameState, move: BuyCard) -> GameState:
    _require_no_pending(state)
    if state.phase != GamePhase.BUY:
        raise IllegalMoveError("Can only buy during the buy phase")
    if state.buys <= 0:
        raise IllegalMoveError("No buys left")

    card = get_card(move.card_id)
    if card.cost > state.coins:
        raise IllegalMoveError(f"{card.name} costs {card.cost}, have {state.coins}")
    if state.supply_count(card.id) <= 0:
        raise IllegalMoveError(f"{card.name} pile is empty")

    state = gain_card(state, state.current_player, card.id)
    state = replace(state, coins=state.coins - card.cost, buys=state.buys - 1)
    return state.with_log(f"{state.current_player_state.name} buys {card.name}")


# --- Cleanup -----------------------------------------------------------------


def _execute_end_turn(state: GameState) -> GameState:
    """Clean up, draw a new hand and pass the turn."""
    _require_no_pending(state)

    player = state.current_player_state
    player = replace(
        player,
        hand=(),
        play_area=(),
        discard=player.discard + player.hand + player.play_area,
    )
    state = draw_cards(state.with_player(state.current_player, player), state.current_player, HAND_SIZE)

    next_player = state.opponent
    turn_number = state.turn_number + 1 if next_player == 0 else state.turn_number
    state = replace(
        state,
        current_player=next_player,
        phase=GamePhase.ACTION,
        actions=1,
        buys=1,
        coins=0,
        merchant_bonus=False,
        pending_effect=None,
        deferred_effects=(),
        turn_number=turn_number,
    )
    state = state.with_log(
        f"--- Turn {turn_number}: {state.players[next_player].name}'s turn ---"
    )
    return _check_game_over(state)


def _check_game_over(state: GameState) -> GameState:
    """End the game once Provinces or any three piles run out."""
    if state.supply_count(PROVINCE) == 0:
        reason = WinReason.PROVINCES_GONE
    elif state.empty_piles >= GAME_END_EMPTY_PILES:
        reason = WinReason.THREE_PILES
    else:
        return state

    scores = (calculate_vp(state.players[0]), calculate_vp(state.players[1]))
    if scores[0] > scores[1]:
        winner = 0
    elif scores[1] > scores[0]:
        winner = 1
    else:
        winner = None

    logger.info(f"game over ({reason.name}): scores {scores}, winner {winner}")
    result = "Tie!" if winner is None else f"{state.players[winner].name} wins!"
    return replace(
        state,
        game_over=True,
        winner=winner,
        win_reason=reason,
        final_scores=scores,
    ).with_log(
        f"Game Over! Scores: {state.players[0].name} {scores[0]} - "
        f"{state.players[1].name} {scores[1]}",
        result,
    )


# --- Pending effects ---------------------------------------------------------


def _execute_discard_cards(state: GameState, move: DiscardCards) -> GameState:
    """Discard exactly the requested number of cards (Militia, Poacher)."""
    pending = _require_pending(state, DiscardSelection)
    if not pending.exact:
        raise IllegalMoveError("Use discard_and_draw for this effect")
    selection = _require_selection(state, pending.player, move.hand_indices)
    if len(selection) != pending.count:
        raise IllegalMoveError(f"Must discard exactly {pending.count} cards")

    player, discarded = take_from_hand(state.players[pending.player], selection)
    player = player.with_discard(player.discard + discarded)
    state = state.with_player(pending.player, player).with_log(
        f"{player.name} discards {len(discarded)} cards"
    )
    return _finish_pending(state)


def _execute_discard_and_draw(state: GameState, move: DiscardAndDraw) -> GameState:
    """Discard any number of cards, then draw as many (Cellar)."""
    pending = _require_pending(state, DiscardSelection)
    if not pending.redraw:
        raise IllegalMoveError("This discard does not redraw")
    selection = _require_selection(state, pending.player, move.hand_indices)

    player, discarded = take_from_hand(state.players[pending.player], selection)
    player = player.with_discard(player.discard + discarded)
    state = draw_cards(state.with_player(pending.player, player), pending.player, len(discarded))
    state = state.with_log(
        f"{player.name} discards {len(discarded)} cards and draws {len(discarded)}"
    )
    return _finish_pending(state)


def _execute_trash_cards(state: GameState, move: TrashCards) -> GameState:
    """Trash up to the allowed number of cards (Chapel)."""
    pending = _require_pending(state, TrashSelection)
    selection = _require_selection(state, pending.player, move.hand_indices)
    if len(selection) > pending.max_cards:
        raise IllegalMoveError(f"Can trash at most {pending.max_cards} cards")

    player, trashed = take_from_hand(state.players[pending.player], selection)
    state = state.with_player(pending.player, player).with_trash(*trashed)
    if trashed:
        state = state.with_log(f"{player.name} trashes {names(trashed)}")
    return _finish_pending(state)


def _execute_select_gain_card(state: GameState, move: SelectGainCard) -> GameState:
    pending = _require_pending(state, GainSelection)
    card = get_card(move.card_id)
    if not pending.allows(card.id):
        raise IllegalMoveError(f"Cannot gain {card.name} here")
    if state.supply_count(card.id) <= 0:
        raise IllegalMoveError(f"{card.name} pile is empty")

    state = gain_card(state, pending.player, card.id, pending.destination)
    suffix = " to hand" if pending.destination == GainDestination.HAND else ""
    state = state.with_log(f"{state.players[pending.player].name} gains {card.name}{suffix}")

    if pending.then_topdeck:
        return start_topdeck(state, pending.player, pending.origin)
    return _finish_pending(state)


def _execute_select_trash_card(state: GameState, move: SelectTrashCard) -> GameState:
    """Trash step of Remodel and Mine; moves on to the gain step."""
    pending = _require_pending(state, TrashForGain)
    card_id = _require_hand_index(state, pending.player, move.hand_index)
    if not pending.allows(card_id):
        raise IllegalMoveError(f"Cannot trash {card_name(card_id)} here")

    player, _ = take_from_hand(state.players[pending.player], [move.hand_index])
    state = (
        state.with_player(pending.player, player)
        .with_trash(card_id)
        .with_log(f"{player.name} trashes {card_name(card_id)}")
    )

    gain = GainSelection(
        player=pending.player,
        origin=pending.origin,
        max_cost=get_card(card_id).cost + pending.cost_bonus,
        destination=pending.destination,
        card_type=pending.card_type,
    )
    if not gain_options(state, gain.allows):
        return _finish_pending(state.with_log("Nothing to gain"))
    return state.with_pending(gain)


def _execute_topdeck_card(state: GameState, move: TopdeckCard) -> GameState:
    pending = _require_pending(state, TopdeckSelection)
    _require_hand_index(state, pending.player, move.hand_index)

    player, (card_id,) = take_from_hand(state.players[pending.player], [move.hand_index])
    player = player.with_deck(player.deck + (card_id,))
    state = state.with_player(pending.player, player).with_log(
        f"{player.name} topdecks {card_name(card_id)}"
    )
    return _finish_pending(state)


def _execute_select_repeat_action(state: GameState, move: SelectRepeatAction) -> GameState:
    """Throne Room: play the chosen Action twice."""
    _require_pending(state, PlayTwiceSelection)
    card_id = _require_hand_index(state, state.current_player, move.hand_index)
    if not get_card(card_id).is_action:
        raise IllegalMoveError(f"{card_name(card_id)} is not an Action")

    state = play_twice(state.with_pending(None), move.hand_index)
    return resume_deferred(state)


def _execute_cancel(state: GameState) -> GameState:
    pending = state.pending_effect
    if pending is None:
        raise IllegalMoveError("Nothing to cancel")
    if not pending.cancelable:
        raise IllegalMoveError(f"{pending.origin} cannot be cancelled")
    return _finish_pending(state)
