"""Heuristic strategy: big money with a light sprinkling of actions.

The policy is the usual baseline for Dominion bots:

1. Play Actions before treasures, villages and cantrips first
2. Buy Province at $8, Gold at $6-7, Silver at $3-4
3. Switch Gold for Duchy once the Provinces run low
4. Pick up a few strong $4/$5 kingdom cards, never too many
5. Never buy Copper or Curse
6. Answer prompts by giving up junk (Curse, Estate, Copper) first
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from dominion_engine.cards import get_card
from dominion_engine.moves import (
    BuyCard,
    CancelPendingEffect,
    DiscardAndDraw,
    DiscardCards,
    EndTurn,
    GoToBuyPhase,
    PlayAction,
    SelectGainCard,
    SelectRepeatAction,
    SelectTrashCard,
    TopdeckCard,
    TrashCards,
)
from dominion_engine.state import PROVINCE
from dominion_engine.zones import discard_priority
from strategies.base import Strategy

if TYPE_CHECKING:
    from dominion_engine.moves import Move
    from dominion_engine.state import GameState

DUCHY_DANCE_PROVINCES = 4
ESTATE_DANCE_PROVINCES = 2
# At most one Action for every this many cards owned
ACTION_DENSITY = 5


class HeuristicStrategy(Strategy):
    """Strategy scoring each legal move and picking the best.

    Ties are broken with the strategy's own random generator so that a
    seeded strategy is reproducible.
    """

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return "Heuristic"

    def select_move(self, state: GameState, legal_moves: list[Move]) -> Move:
        """Select a move based on heuristic evaluation."""
        if not legal_moves:
            raise ValueError("No legal moves available")

        scored_moves = [(self._score_move(state, move), move) for move in legal_moves]
        best_score = max(score for score, _ in scored_moves)
        best_moves = [move for score, move in scored_moves if score == best_score]
        return self._rng.choice(best_moves)

    def _score_move(self, state: GameState, move: Move) -> float:
        """Score a move (higher is better)."""
        player = state.players[state.acting_player]
        hand = player.hand

        match move:
            case PlayAction(hand_index=i):
                return self._score_action(state, hand[i])

            case GoToBuyPhase():
                return 10

            case BuyCard(card_id=card_id):
                return self._score_gain(state, card_id)

            case EndTurn():
                return 0

            case DiscardCards(hand_indices=indices):
                # Keep the best cards: lose Victory and Curse, then the cheapest
                return -sum(
                    discard_priority(hand[i])[0] * 100 + get_card(hand[i]).cost
                    for i in indices
                )

            case DiscardAndDraw(hand_indices=indices):
                dead = sum(1 for i in indices if _is_dead(hand[i]))
                live = len(indices) - dead
                return dead - live * 100

            case TrashCards(hand_indices=indices):
                score = 0
                for i in indices:
                    if hand[i] in ("curse", "estate"):
                        score += 10
                    elif hand[i] == "copper":
                        score += 1
                    else:
                        score -= 100
                return score

            case SelectGainCard(card_id=card_id):
                return self._score_gain(state, card_id)

            case SelectTrashCard(hand_index=i):
                return self._score_trash(state, hand[i])

            case TopdeckCard(hand_index=i):
                card = get_card(hand[i])
                if card.is_action:
                    return 10 + card.cost
                if card.is_treasure:
                    return card.coins
                return -card.cost

            case SelectRepeatAction(hand_index=i):
                card = get_card(hand[i])
                effect = card.effect
                draws = effect.cards if effect is not None else 0
                return card.cost + draws * 2

            case CancelPendingEffect():
                return -50

        return 0

    def _score_action(self, state: GameState, card_id: str) -> float:
        card = get_card(card_id)
        effect = card.effect
        hand = state.current_player_state.hand

        if card_id == "throneRoom":
            others = sum(1 for c in hand if get_card(c).is_action) - 1
            return 150 + card.cost if others > 0 else 1
        if card_id == "moneylender" and "copper" not in hand:
            return 1

        score = 100 + card.cost
        if effect is not None and effect.actions > 0:
            # Non-terminal cards first so the terminal one still gets played
            score += 100
        return score

    def _score_gain(self, state: GameState, card_id: str) -> float:
        card = get_card(card_id)
        provinces_left = state.supply_count(PROVINCE)
        player = state.players[state.acting_player]

        match card_id:
            case "province":
                return 100
            case "duchy":
                return 85 if provinces_left <= DUCHY_DANCE_PROVINCES else -5
            case "estate":
                return 50 if provinces_left <= ESTATE_DANCE_PROVINCES else -10
            case "gold":
                return 80
            case "silver":
                return 30
            case "copper" | "curse":
                return -10

        if not card.is_action:
            return -5

        owned = player.all_cards
        owned_actions = sum(1 for c in owned if get_card(c).is_action)
        if owned_actions * ACTION_DENSITY >= len(owned):
            return -5
        if card.cost >= 4:
            return 25 + card.cost * 5
        return 20

    def _score_trash(self, state: GameState, card_id: str) -> float:
        pending = state.pending_effect
        if pending is not None and pending.origin == "mine":
            # Silver to Gold beats Copper to Silver
            return {"silver": 2, "copper": 1}.get(card_id, 0)
        if card_id in ("curse", "estate"):
            return 50
        if card_id == "gold" and state.supply_count(PROVINCE) > 0:
            return 40
        return -self._score_gain(state, card_id) - get_card(card_id).cost


def _is_dead(card_id: str) -> bool:
    """Cards that do nothing in hand."""
    card = get_card(card_id)
    return (card.is_victory or card.is_curse) and not card.is_action
