"""Card catalog for the Dominion base set."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from types import MappingProxyType
from typing import Mapping


class CardType(IntEnum):
    """Type tags a card can carry."""

    TREASURE = auto()
    VICTORY = auto()
    ACTION = auto()
    ATTACK = auto()
    REACTION = auto()
    CURSE = auto()

    def __str__(self) -> str:
        return self.name.title()


class Attack(str, Enum):
    """Attack tags understood by the attack resolver."""

    DISCARD_TO_3 = "discardTo3"
    CURSE = "curse"
    BUREAUCRAT = "bureaucrat"
    BANDIT = "bandit"


class Special(str, Enum):
    """Tags dispatched to a special-effect handler."""

    CELLAR = "cellar"
    CHAPEL = "chapel"
    WORKSHOP = "workshop"
    REMODEL = "remodel"
    MINE = "mine"
    ARTISAN = "artisan"
    BUREAUCRAT = "bureaucrat"
    BANDIT = "bandit"
    COUNCIL_ROOM = "councilRoom"
    LIBRARY = "library"
    VASSAL = "vassal"
    HARBINGER = "harbinger"
    SENTRY = "sentry"
    POACHER = "poacher"
    THRONE_ROOM = "throneRoom"
    MERCHANT = "merchant"
    MONEYLENDER = "moneylender"


@dataclass(frozen=True, slots=True)
class Effect:
    """Declared effect of an Action card.

    Attributes:
        cards: Cards drawn by the player.
        actions: Actions added.
        buys: Buys added.
        coins: Coins added.
        attack: Optional attack tag applied to the opponent.
        special: Optional tag dispatched to a special-effect handler.
    """

    cards: int = 0
    actions: int = 0
    buys: int = 0
    coins: int = 0
    attack: Attack | None = None
    special: Special | None = None


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable catalog entry. Game state refers to cards by ``id``."""

    id: str
    name: str
    cost: int
    types: frozenset[CardType]
    coins: int = 0
    victory_points: int = 0
    dynamic_vp: bool = False
    effect: Effect | None = None
    description: str = ""

    def __str__(self) -> str:
        return self.name

    @property
    def is_action(self) -> bool:
        return CardType.ACTION in self.types

    @property
    def is_treasure(self) -> bool:
        return CardType.TREASURE in self.types

    @property
    def is_victory(self) -> bool:
        return CardType.VICTORY in self.types

    @property
    def is_curse(self) -> bool:
        return CardType.CURSE in self.types


class UnknownCardError(KeyError):
    """Raised for a card id missing from the catalog.

    Well-formed game state never holds such an id, so this signals an
    engine bug rather than a player mistake.
    """


def _card(
    card_id: str,
    name: str,
    types: tuple[CardType, ...],
    cost: int,
    description: str,
    **kwargs,
) -> Card:
    return Card(
        id=card_id,
        name=name,
        cost=cost,
        types=frozenset(types),
        description=description,
        **kwargs,
    )


T, V, A = CardType.TREASURE, CardType.VICTORY, CardType.ACTION

_CARDS: tuple[Card, ...] = (
    # Treasure
    _card("copper", "Copper", (T,), 0, "+$1", coins=1),
    _card("silver", "Silver", (T,), 3, "+$2", coins=2),
    _card("gold", "Gold", (T,), 6, "+$3", coins=3),
    # Victory
    _card("estate", "Estate", (V,), 2, "1 VP", victory_points=1),
    _card("duchy", "Duchy", (V,), 5, "3 VP", victory_points=3),
    _card("province", "Province", (V,), 8, "6 VP", victory_points=6),
    # Curse
    _card("curse", "Curse", (CardType.CURSE,), 0, "-1 VP", victory_points=-1),
    # $2
    _card(
        "cellar", "Cellar", (A,), 2,
        "+1 Action. Discard any number of cards, then draw that many.",
        effect=Effect(actions=1, special=Special.CELLAR),
    ),
    _card(
        "chapel", "Chapel", (A,), 2,
        "Trash up to 4 cards from your hand.",
        effect=Effect(special=Special.CHAPEL),
    ),
    _card(
        "moat", "Moat", (A, CardType.REACTION), 2,
        "+2 Cards. When another player plays an Attack, you may reveal this "
        "from your hand to be unaffected by it.",
        effect=Effect(cards=2),
    ),
    # $3
    _card(
        "harbinger", "Harbinger", (A,), 3,
        "+1 Card, +1 Action. Look through your discard pile. You may put a "
        "card from it onto your deck.",
        effect=Effect(cards=1, actions=1, special=Special.HARBINGER),
    ),
    _card(
        "merchant", "Merchant", (A,), 3,
        "+1 Card, +1 Action. The first time you play a Silver this turn, +$1.",
        effect=Effect(cards=1, actions=1, special=Special.MERCHANT),
    ),
    _card(
        "vassal", "Vassal", (A,), 3,
        "+$2. Discard the top card of your deck. If it's an Action card, "
        "you may play it.",
        effect=Effect(coins=2, special=Special.VASSAL),
    ),
    _card(
        "village", "Village", (A,), 3,
        "+1 Card, +2 Actions",
        effect=Effect(cards=1, actions=2),
    ),
    _card(
        "workshop", "Workshop", (A,), 3,
        "Gain a card costing up to $4.",
        effect=Effect(special=Special.WORKSHOP),
    ),
    # $4
    _card(
        "bureaucrat", "Bureaucrat", (A, CardType.ATTACK), 4,
        "Gain a Silver onto your deck. Each other player reveals a Victory "
        "card from their hand and puts it onto their deck.",
        effect=Effect(attack=Attack.BUREAUCRAT, special=Special.BUREAUCRAT),
    ),
    _card(
        "gardens", "Gardens", (V,), 4,
        "Worth 1 VP per 10 cards you have (round down).",
        dynamic_vp=True,
    ),
    _card(
        "militia", "Militia", (A, CardType.ATTACK), 4,
        "+$2. Each other player discards down to 3 cards in hand.",
        effect=Effect(coins=2, attack=Attack.DISCARD_TO_3),
    ),
    _card(
        "moneylender", "Moneylender", (A,), 4,
        "You may trash a Copper from your hand for +$3.",
        effect=Effect(special=Special.MONEYLENDER),
    ),
    _card(
        "poacher", "Poacher", (A,), 4,
        "+1 Card, +1 Action, +$1. Discard a card per empty Supply pile.",
        effect=Effect(cards=1, actions=1, coins=1, special=Special.POACHER),
    ),
    _card(
        "remodel", "Remodel", (A,), 4,
        "Trash a card from your hand. Gain a card costing up to $2 more "
        "than it.",
        effect=Effect(special=Special.REMODEL),
    ),
    _card(
        "smithy", "Smithy", (A,), 4,
        "+3 Cards",
        effect=Effect(cards=3),
    ),
    _card(
        "throneRoom", "Throne Room", (A,), 4,
        "You may play an Action card from your hand twice.",
        effect=Effect(special=Special.THRONE_ROOM),
    ),
    # $5
    _card(
        "bandit", "Bandit", (A, CardType.ATTACK), 5,
        "Gain a Gold. Each other player reveals the top 2 cards of their "
        "deck, trashes a revealed Treasure other than Copper, and discards "
        "the rest.",
        effect=Effect(attack=Attack.BANDIT, special=Special.BANDIT),
    ),
    _card(
        "councilRoom", "Council Room", (A,), 5,
        "+4 Cards, +1 Buy. Each other player draws a card.",
        effect=Effect(cards=4, buys=1, special=Special.COUNCIL_ROOM),
    ),
    _card(
        "festival", "Festival", (A,), 5,
        "+2 Actions, +1 Buy, +$2",
        effect=Effect(actions=2, buys=1, coins=2),
    ),
    _card(
        "laboratory", "Laboratory", (A,), 5,
        "+2 Cards, +1 Action",
        effect=Effect(cards=2, actions=1),
    ),
    _card(
        "library", "Library", (A,), 5,
        "Draw until you have 7 cards in hand.",
        effect=Effect(special=Special.LIBRARY),
    ),
    _card(
        "market", "Market", (A,), 5,
        "+1 Card, +1 Action, +1 Buy, +$1",
        effect=Effect(cards=1, actions=1, buys=1, coins=1),
    ),
    _card(
        "mine", "Mine", (A,), 5,
        "You may trash a Treasure from your hand. Gain a Treasure to your "
        "hand costing up to $3 more than it.",
        effect=Effect(special=Special.MINE),
    ),
    _card(
        "sentry", "Sentry", (A,), 5,
        "+1 Card, +1 Action. Look at the top 2 cards of your deck. Trash "
        "and/or discard any number of them. Put the rest back on top.",
        effect=Effect(cards=1, actions=1, special=Special.SENTRY),
    ),
    _card(
        "witch", "Witch", (A, CardType.ATTACK), 5,
        "+2 Cards. Each other player gains a Curse.",
        effect=Effect(cards=2, attack=Attack.CURSE),
    ),
    # $6
    _card(
        "artisan", "Artisan", (A,), 6,
        "Gain a card to your hand costing up to $5. Put a card from your "
        "hand onto your deck.",
        effect=Effect(special=Special.ARTISAN),
    ),
)

del T, V, A

CATALOG: Mapping[str, Card] = MappingProxyType({card.id: card for card in _CARDS})

BASIC_CARDS: tuple[str, ...] = (
    "copper", "silver", "gold", "estate", "duchy", "province", "curse",
)

KINGDOM_CARDS: tuple[str, ...] = tuple(
    card.id for card in _CARDS if card.id not in BASIC_CARDS
)


def get_card(card_id: str) -> Card:
    """Look up a card definition by id.

    Raises:
        UnknownCardError: If the id is not in the catalog.
    """
    try:
        return CATALOG[card_id]
    except KeyError:
        raise UnknownCardError(card_id) from None


def has_type(card: Card | str, card_type: CardType) -> bool:
    """Whether a card (or card id) carries the given type tag."""
    if isinstance(card, str):
        card = get_card(card)
    return card_type in card.types


def card_name(card_id: str) -> str:
    return get_card(card_id).name


def select_kingdom(rng: random.Random, count: int = 10) -> tuple[str, ...]:
    """Pick ``count`` kingdom card ids uniformly without replacement."""
    return tuple(rng.sample(KINGDOM_CARDS, count))
