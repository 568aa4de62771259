"""Helpers that move cards between zones and the supply."""

from __future__ import annotations

from typing import Callable, Iterable

from dominion_engine.cards import card_name, get_card
from dominion_engine.state import GainDestination, GameState, InvariantViolation, PlayerState


def take_from_hand(
    player: PlayerState, indices: Iterable[int]
) -> tuple[PlayerState, tuple[str, ...]]:
    """Remove the cards at ``indices`` from hand, keeping hand order for the rest."""
    chosen = set(indices)
    for index in chosen:
        if not 0 <= index < len(player.hand):
            raise InvariantViolation(f"Hand index {index} out of range")
    kept = tuple(c for i, c in enumerate(player.hand) if i not in chosen)
    taken = tuple(c for i, c in enumerate(player.hand) if i in chosen)
    return player.with_hand(kept), taken


def gain_card(
    state: GameState,
    player_index: int,
    card_id: str,
    destination: GainDestination = GainDestination.DISCARD,
) -> GameState:
    """Move one card from the supply to a player.

    Returns the state unchanged if the pile is empty.
    """
    if state.supply_count(card_id) <= 0:
        return state
    player = state.players[player_index]
    match destination:
        case GainDestination.HAND:
            player = player.with_hand(player.hand + (card_id,))
        case GainDestination.DECK:
            player = player.with_deck(player.deck + (card_id,))
        case _:
            player = player.with_discard(player.discard + (card_id,))
    return state.with_supply_change(card_id, -1).with_player(player_index, player)


def gain_options(
    state: GameState, allowed: Callable[[str], bool]
) -> list[str]:
    """Card ids still in supply that pass ``allowed``, in supply order."""
    return [
        card_id
        for card_id, count in state.supply.items()
        if count > 0 and allowed(card_id)
    ]


def discard_priority(card_id: str) -> tuple[int, int]:
    """Sort key for cards to give up first: Victory and Curse, then cheapest."""
    card = get_card(card_id)
    junk = card.is_victory or card.is_curse
    return (0 if junk else 1, card.cost)


def worst_indices(hand: tuple[str, ...], count: int) -> list[int]:
    """Indices of the ``count`` lowest-priority cards in hand."""
    ranked = sorted(range(len(hand)), key=lambda i: discard_priority(hand[i]))
    return ranked[:count]


def names(card_ids: Iterable[str]) -> str:
    return ", ".join(card_name(c) for c in card_ids)
