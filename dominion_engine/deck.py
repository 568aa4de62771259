"""Shuffling and drawing.

Randomness comes only from ``GameState.rng_seed``: each shuffle seeds a
``random.Random`` from it and stores the generator's next value back, so a
snapshot fully determines everything that follows from it.
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Sequence

from dominion_engine.state import GameState, PlayerState


def shuffle_cards(cards: Sequence[str], seed: int) -> tuple[tuple[str, ...], int]:
    """Return a uniformly shuffled copy of ``cards`` and the next seed."""
    rng = random.Random(seed)
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return tuple(shuffled), rng.getrandbits(64)


def _reshuffle(player: PlayerState, seed: int) -> tuple[PlayerState, int]:
    """Turn the discard pile into a fresh deck."""
    deck, seed = shuffle_cards(player.discard, seed)
    return replace(player, deck=deck, discard=()), seed


def _take_from_top(
    player: PlayerState, count: int, seed: int
) -> tuple[PlayerState, tuple[str, ...], int]:
    taken: list[str] = []
    while len(taken) < count:
        if not player.deck:
            if not player.discard:
                break
            player, seed = _reshuffle(player, seed)
        taken.append(player.deck[-1])
        player = player.with_deck(player.deck[:-1])
    return player, tuple(taken), seed


def draw_cards(state: GameState, player_index: int, count: int) -> GameState:
    """Draw up to ``count`` cards into a player's hand.

    When the deck runs out the discard pile is shuffled into a new deck.
    Drawing stops early once both are empty.
    """
    if count <= 0:
        return state
    player, drawn, seed = _take_from_top(state.players[player_index], count, state.rng_seed)
    player = player.with_hand(player.hand + drawn)
    return replace(state.with_player(player_index, player), rng_seed=seed)


def reveal_cards(
    state: GameState, player_index: int, count: int
) -> tuple[GameState, tuple[str, ...]]:
    """Take up to ``count`` cards off a player's deck without placing them.

    The caller decides where the revealed cards end up. Reshuffles like
    ``draw_cards``.
    """
    player, revealed, seed = _take_from_top(state.players[player_index], count, state.rng_seed)
    return replace(state.with_player(player_index, player), rng_seed=seed), revealed
