"""Legal move generation for Dominion.

Identical cards are interchangeable, so selections are generated once per
distinct multiset of card ids rather than once per index combination.
"""

from __future__ import annotations

from itertools import combinations

from dominion_engine.cards import get_card
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
from dominion_engine.state import (
    DiscardSelection,
    GainSelection,
    GamePhase,
    GameState,
    PendingEffect,
    PlayTwiceSelection,
    TopdeckSelection,
    TrashForGain,
    TrashSelection,
)
from dominion_engine.zones import gain_options


def generate_legal_moves(state: GameState) -> list[Move]:
    """Generate all legal moves for the acting player.

    Args:
        state: Current game state.

    Returns:
        List of legal moves; empty once the game is over.
    """
    if state.game_over:
        return []
    if state.pending_effect is not None:
        return _generate_pending_moves(state, state.pending_effect)

    match state.phase:
        case GamePhase.ACTION:
            return _generate_action_phase_moves(state)
        case GamePhase.BUY:
            return _generate_buy_phase_moves(state)

    return []


def _distinct_indices(hand: tuple[str, ...], predicate=None) -> list[int]:
    """First hand index of each distinct card id passing ``predicate``."""
    seen: set[str] = set()
    indices = []
    for i, card_id in enumerate(hand):
        if card_id in seen or (predicate is not None and not predicate(card_id)):
            continue
        seen.add(card_id)
        indices.append(i)
    return indices


def _distinct_selections(hand: tuple[str, ...], size: int) -> list[tuple[int, ...]]:
    """Index tuples of ``size`` cards, one per distinct multiset of ids."""
    seen: set[tuple[str, ...]] = set()
    selections = []
    for combo in combinations(range(len(hand)), size):
        key = tuple(sorted(hand[i] for i in combo))
        if key in seen:
            continue
        seen.add(key)
        selections.append(combo)
    return selections


def _generate_action_phase_moves(state: GameState) -> list[Move]:
    moves: list[Move] = []
    hand = state.current_player_state.hand
    if state.actions > 0:
        for i in _distinct_indices(hand, lambda c: get_card(c).is_action):
            moves.append(PlayAction(hand_index=i))
    moves.append(GoToBuyPhase())
    moves.append(EndTurn())
    return moves


def _generate_buy_phase_moves(state: GameState) -> list[Move]:
    moves: list[Move] = []
    if state.buys > 0:
        for card_id in gain_options(state, lambda c: get_card(c).cost <= state.coins):
            moves.append(BuyCard(card_id=card_id))
    moves.append(EndTurn())
    return moves


def _generate_pending_moves(state: GameState, pending: PendingEffect) -> list[Move]:
    """Generate the moves that answer a pending effect."""
    moves: list[Move] = []
    hand = state.players[pending.player].hand

    match pending:
        case DiscardSelection(redraw=True):
            for size in range(len(hand) + 1):
                for combo in _distinct_selections(hand, size):
                    moves.append(DiscardAndDraw(hand_indices=combo))
        case DiscardSelection():
            for combo in _distinct_selections(hand, pending.count):
                moves.append(DiscardCards(hand_indices=combo))
        case TrashSelection():
            for size in range(min(pending.max_cards, len(hand)) + 1):
                for combo in _distinct_selections(hand, size):
                    moves.append(TrashCards(hand_indices=combo))
        case GainSelection():
            for card_id in gain_options(state, pending.allows):
                moves.append(SelectGainCard(card_id=card_id))
        case TrashForGain():
            for i in _distinct_indices(hand, pending.allows):
                moves.append(SelectTrashCard(hand_index=i))
        case TopdeckSelection():
            for i in _distinct_indices(hand):
                moves.append(TopdeckCard(hand_index=i))
        case PlayTwiceSelection():
            for i in _distinct_indices(hand, lambda c: get_card(c).is_action):
                moves.append(SelectRepeatAction(hand_index=i))

    if pending.cancelable:
        moves.append(CancelPendingEffect())
    return moves
