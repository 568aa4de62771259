"""Immutable game state models for Dominion."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, replace
from enum import IntEnum, auto
from types import MappingProxyType
from typing import Iterable, Mapping, Union

from dominion_engine.cards import (
    BASIC_CARDS,
    CardType,
    get_card,
    select_kingdom,
)

PROVINCE = "province"
CURSE = "curse"

STARTING_COPPERS = 7
STARTING_ESTATES = 3
HAND_SIZE = 5


class InvariantViolation(RuntimeError):
    """Raised when the engine would corrupt its own state.

    Unlike an illegal move this is never a player error and is not caught.
    """


class GamePhase(IntEnum):
    """Phase of the current player's turn."""

    ACTION = auto()  # Play Action cards
    BUY = auto()  # Treasures played, buying cards


class WinReason(IntEnum):
    """Which end condition fired."""

    PROVINCES_GONE = auto()
    THREE_PILES = auto()


class GainDestination(IntEnum):
    """Where a gained card goes."""

    DISCARD = auto()
    HAND = auto()
    DECK = auto()


@dataclass(frozen=True, slots=True)
class PlayerState:
    """State of a single player.

    Attributes:
        name: Display name used in log lines.
        deck: Draw pile; the top card is the last element.
        hand: Cards in hand, addressed by index.
        discard: Discard pile.
        play_area: Cards played this turn.
        is_ai: Whether special effects resolve with the built-in heuristics.
    """

    name: str
    deck: tuple[str, ...] = ()
    hand: tuple[str, ...] = ()
    discard: tuple[str, ...] = ()
    play_area: tuple[str, ...] = ()
    is_ai: bool = False

    @property
    def all_cards(self) -> tuple[str, ...]:
        """Every card the player owns, across all zones."""
        return self.deck + self.hand + self.discard + self.play_area

    @property
    def total_cards(self) -> int:
        return len(self.deck) + len(self.hand) + len(self.discard) + len(self.play_area)

    def with_hand(self, hand: tuple[str, ...]) -> PlayerState:
        return replace(self, hand=hand)

    def with_deck(self, deck: tuple[str, ...]) -> PlayerState:
        return replace(self, deck=deck)

    def with_discard(self, discard: tuple[str, ...]) -> PlayerState:
        return replace(self, discard=discard)

    def with_play_area(self, play_area: tuple[str, ...]) -> PlayerState:
        return replace(self, play_area=play_area)


# --- Pending effects ---------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DiscardSelection:
    """A player must discard from hand.

    Attributes:
        player: Who discards (the opponent, for Militia).
        origin: Tag of the card or attack that asked for the discard.
        count: Exact number to discard, or the maximum when not ``exact``.
        exact: Whether exactly ``count`` cards must be chosen.
        redraw: Draw as many cards as were discarded (Cellar).
    """

    player: int
    origin: str
    count: int
    exact: bool = True
    redraw: bool = False

    @property
    def cancelable(self) -> bool:
        return self.origin == "cellar"


@dataclass(frozen=True, slots=True)
class TrashSelection:
    """The player may trash up to ``max_cards`` cards from hand."""

    player: int
    origin: str
    max_cards: int

    @property
    def cancelable(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class GainSelection:
    """The player gains a card from the supply costing at most ``max_cost``.

    Attributes:
        card_type: Optional type the gained card must have.
        then_topdeck: Continue with a TopdeckSelection afterwards.
    """

    player: int
    origin: str
    max_cost: int
    destination: GainDestination = GainDestination.DISCARD
    card_type: CardType | None = None
    then_topdeck: bool = False

    @property
    def cancelable(self) -> bool:
        return self.origin == "workshop"

    def allows(self, card_id: str) -> bool:
        card = get_card(card_id)
        if card.cost > self.max_cost:
            return False
        return self.card_type is None or self.card_type in card.types


@dataclass(frozen=True, slots=True)
class TrashForGain:
    """First step of a trash-then-gain effect.

    The trashed card's cost plus ``cost_bonus`` becomes the ceiling of the
    following GainSelection.
    """

    player: int
    origin: str
    cost_bonus: int
    card_type: CardType | None = None
    destination: GainDestination = GainDestination.DISCARD

    @property
    def cancelable(self) -> bool:
        return False

    def allows(self, card_id: str) -> bool:
        return self.card_type is None or self.card_type in get_card(card_id).types


@dataclass(frozen=True, slots=True)
class TopdeckSelection:
    """The player puts a card from hand on top of their deck."""

    player: int
    origin: str

    @property
    def cancelable(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class PlayTwiceSelection:
    """The player picks an Action card from hand to play twice."""

    player: int
    origin: str

    @property
    def cancelable(self) -> bool:
        return True


PendingEffect = Union[
    DiscardSelection,
    TrashSelection,
    GainSelection,
    TrashForGain,
    TopdeckSelection,
    PlayTwiceSelection,
]


# --- Game state --------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete immutable game state.

    Attributes:
        players: The two PlayerStates.
        supply: Remaining count per card id.
        kingdom: Kingdom card ids in play this game.
        trash: Trashed cards, oldest first.
        current_player: Whose turn it is.
        phase: ACTION or BUY.
        actions: Actions left this turn.
        buys: Buys left this turn.
        coins: Coins available this turn.
        turn_number: Increments when play returns to player 0.
        game_over: Whether an end condition has fired.
        winner: 0, 1, or None (ongoing or tie).
        win_reason: Which end condition fired.
        final_scores: Victory points at game end.
        log: Human-readable event lines.
        pending_effect: Choice the engine is waiting on, if any.
        merchant_bonus: A Merchant was played this turn.
        deferred_effects: Card ids whose repeated resolution waits for the
            pending effect to clear (Throne Room).
        rng_seed: Random state used by the next shuffle.
    """

    players: tuple[PlayerState, PlayerState]
    supply: Mapping[str, int]
    kingdom: tuple[str, ...] = ()
    trash: tuple[str, ...] = ()
    current_player: int = 0
    phase: GamePhase = GamePhase.ACTION
    actions: int = 1
    buys: int = 1
    coins: int = 0
    turn_number: int = 1
    game_over: bool = False
    winner: int | None = None
    win_reason: WinReason | None = None
    final_scores: tuple[int, int] | None = None
    log: tuple[str, ...] = ()
    pending_effect: PendingEffect | None = None
    merchant_bonus: bool = False
    deferred_effects: tuple[str, ...] = ()
    rng_seed: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.supply, MappingProxyType):
            object.__setattr__(self, "supply", MappingProxyType(dict(self.supply)))

    @property
    def opponent(self) -> int:
        """The other player (not current_player)."""
        return 1 - self.current_player

    @property
    def current_player_state(self) -> PlayerState:
        return self.players[self.current_player]

    @property
    def opponent_state(self) -> PlayerState:
        return self.players[self.opponent]

    @property
    def acting_player(self) -> int:
        """Who must move next: the pending effect's player, else the current one."""
        if self.pending_effect is not None:
            return self.pending_effect.player
        return self.current_player

    @property
    def is_tie(self) -> bool:
        return self.game_over and self.winner is None

    @property
    def empty_piles(self) -> int:
        return sum(1 for count in self.supply.values() if count == 0)

    def supply_count(self, card_id: str) -> int:
        return self.supply.get(card_id, 0)

    def with_player(self, index: int, player: PlayerState) -> GameState:
        """Return new state with one player replaced."""
        players = list(self.players)
        players[index] = player
        return replace(self, players=(players[0], players[1]))

    def with_supply_change(self, card_id: str, delta: int) -> GameState:
        """Return new state with a supply pile adjusted by ``delta``."""
        remaining = self.supply_count(card_id) + delta
        if remaining < 0:
            raise InvariantViolation(f"Supply of {card_id} would go negative")
        supply = dict(self.supply)
        supply[card_id] = remaining
        return replace(self, supply=MappingProxyType(supply))

    def with_trash(self, *card_ids: str) -> GameState:
        return replace(self, trash=self.trash + card_ids)

    def with_log(self, *lines: str) -> GameState:
        return replace(self, log=self.log + lines)

    def with_pending(self, pending: PendingEffect | None) -> GameState:
        return replace(self, pending_effect=pending)

    def with_counters(
        self, *, actions: int = 0, buys: int = 0, coins: int = 0
    ) -> GameState:
        """Return new state with turn counters increased."""
        return replace(
            self,
            actions=self.actions + actions,
            buys=self.buys + buys,
            coins=self.coins + coins,
        )


# --- Setup -------------------------------------------------------------------


def create_supply(kingdom: Iterable[str], num_players: int = 2) -> dict[str, int]:
    """Build the supply pile sizes for a game."""
    victory = 8 if num_players == 2 else 12
    supply = {
        "copper": 60 - num_players * STARTING_COPPERS,
        "silver": 40,
        "gold": 30,
        "estate": victory,
        "duchy": victory,
        "province": victory,
        "curse": (num_players - 1) * 10,
    }
    for card_id in kingdom:
        supply[card_id] = victory if get_card(card_id).is_victory else 10
    return supply


def create_starting_deck() -> tuple[str, ...]:
    return ("copper",) * STARTING_COPPERS + ("estate",) * STARTING_ESTATES


def create_initial_state(
    kingdom: Iterable[str] | None = None,
    seed: int | None = None,
    ai_players: Iterable[int] = (1,),
    names: tuple[str, str] | None = None,
) -> GameState:
    """Create the initial game state.

    Args:
        kingdom: Kingdom card ids. If None, 10 are chosen at random.
        seed: Random seed for kingdom selection and every later shuffle.
        ai_players: Indices of players whose effects resolve automatically.
        names: Player display names.

    Returns:
        Initial game state with starting decks shuffled and hands dealt.
    """
    from dominion_engine.deck import shuffle_cards

    rng = random.Random(seed)
    if kingdom is None:
        kingdom = select_kingdom(rng)
    kingdom = tuple(kingdom)
    for card_id in kingdom:
        if card_id in BASIC_CARDS:
            raise ValueError(f"{card_id} is not a kingdom card")
        get_card(card_id)

    ai_players = set(ai_players)
    if names is None:
        names = tuple("AI" if i in ai_players else "You" for i in range(2))
        if names[0] == names[1]:
            names = ("Player 1", "Player 2")

    rng_seed = rng.getrandbits(64)
    players = []
    for i in range(2):
        deck, rng_seed = shuffle_cards(create_starting_deck(), rng_seed)
        players.append(
            PlayerState(
                name=names[i],
                deck=deck[:-HAND_SIZE],
                hand=tuple(reversed(deck[-HAND_SIZE:])),
                is_ai=i in ai_players,
            )
        )

    return GameState(
        players=(players[0], players[1]),
        supply=create_supply(kingdom),
        kingdom=kingdom,
        log=(f"Game started! {players[0].name} to play.",),
        rng_seed=rng_seed,
    )


# --- Scoring -----------------------------------------------------------------


def calculate_vp(player: PlayerState) -> int:
    """Victory points over every zone the player owns.

    Gardens-style cards are worth one point per ten owned cards.
    """
    cards = player.all_cards
    total_cards = len(cards)
    total = 0
    for card_id in cards:
        card = get_card(card_id)
        if card.dynamic_vp:
            total += math.floor(total_cards / 10)
        else:
            total += card.victory_points
    return total


def card_counts(state: GameState) -> dict[str, int]:
    """Count every card id across players, trash and supply."""
    counts: dict[str, int] = dict(state.supply)
    for card_id in state.trash:
        counts[card_id] = counts.get(card_id, 0) + 1
    for player in state.players:
        for card_id in player.all_cards:
            counts[card_id] = counts.get(card_id, 0) + 1
    return counts
