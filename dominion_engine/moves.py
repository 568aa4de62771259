"""Move types for Dominion.

Every public operation of the engine has a move object, so strategies and
the simulation runner can pick from ``generate_legal_moves`` and hand the
choice to ``execute_move``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto


class MoveType(IntEnum):
    """Type of move."""

    PLAY_ACTION = auto()
    GO_TO_BUY_PHASE = auto()
    BUY_CARD = auto()
    END_TURN = auto()
    DISCARD_CARDS = auto()  # Militia, Poacher
    DISCARD_AND_DRAW = auto()  # Cellar
    TRASH_CARDS = auto()  # Chapel
    SELECT_GAIN_CARD = auto()
    SELECT_TRASH_CARD = auto()  # Remodel, Mine
    TOPDECK_CARD = auto()  # Artisan
    SELECT_REPEAT_ACTION = auto()  # Throne Room
    CANCEL_PENDING_EFFECT = auto()


@dataclass(frozen=True, slots=True)
class Move(ABC):
    """Base class for all moves."""

    @property
    @abstractmethod
    def move_type(self) -> MoveType:
        """The type of this move."""
        ...

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable move description."""
        ...


@dataclass(frozen=True, slots=True)
class PlayAction(Move):
    """Play the Action card at ``hand_index``."""

    hand_index: int

    @property
    def move_type(self) -> MoveType:
        return MoveType.PLAY_ACTION

    def __str__(self) -> str:
        return f"Play action #{self.hand_index}"


@dataclass(frozen=True, slots=True)
class GoToBuyPhase(Move):
    """Play all treasures and move to the buy phase."""

    @property
    def move_type(self) -> MoveType:
        return MoveType.GO_TO_BUY_PHASE

    def __str__(self) -> str:
        return "Play treasures"


@dataclass(frozen=True, slots=True)
class BuyCard(Move):
    card_id: str

    @property
    def move_type(self) -> MoveType:
        return MoveType.BUY_CARD

    def __str__(self) -> str:
        return f"Buy {self.card_id}"


@dataclass(frozen=True, slots=True)
class EndTurn(Move):
    @property
    def move_type(self) -> MoveType:
        return MoveType.END_TURN

    def __str__(self) -> str:
        return "End turn"


@dataclass(frozen=True, slots=True)
class DiscardCards(Move):
    """Discard exactly the requested number of cards."""

    hand_indices: tuple[int, ...]

    @property
    def move_type(self) -> MoveType:
        return MoveType.DISCARD_CARDS

    def __str__(self) -> str:
        return f"Discard {list(self.hand_indices)}"


@dataclass(frozen=True, slots=True)
class DiscardAndDraw(Move):
    """Discard any number of cards, then draw that many."""

    hand_indices: tuple[int, ...]

    @property
    def move_type(self) -> MoveType:
        return MoveType.DISCARD_AND_DRAW

    def __str__(self) -> str:
        return f"Discard and redraw {list(self.hand_indices)}"


@dataclass(frozen=True, slots=True)
class TrashCards(Move):
    hand_indices: tuple[int, ...]

    @property
    def move_type(self) -> MoveType:
        return MoveType.TRASH_CARDS

    def __str__(self) -> str:
        return f"Trash {list(self.hand_indices)}"


@dataclass(frozen=True, slots=True)
class SelectGainCard(Move):
    card_id: str

    @property
    def move_type(self) -> MoveType:
        return MoveType.SELECT_GAIN_CARD

    def __str__(self) -> str:
        return f"Gain {self.card_id}"


@dataclass(frozen=True, slots=True)
class SelectTrashCard(Move):
    hand_index: int

    @property
    def move_type(self) -> MoveType:
        return MoveType.SELECT_TRASH_CARD

    def __str__(self) -> str:
        return f"Trash #{self.hand_index}"


@dataclass(frozen=True, slots=True)
class TopdeckCard(Move):
    hand_index: int

    @property
    def move_type(self) -> MoveType:
        return MoveType.TOPDECK_CARD

    def __str__(self) -> str:
        return f"Topdeck #{self.hand_index}"


@dataclass(frozen=True, slots=True)
class SelectRepeatAction(Move):
    """Choose the Action card a Throne Room plays twice."""

    hand_index: int

    @property
    def move_type(self) -> MoveType:
        return MoveType.SELECT_REPEAT_ACTION

    def __str__(self) -> str:
        return f"Play #{self.hand_index} twice"


@dataclass(frozen=True, slots=True)
class CancelPendingEffect(Move):
    @property
    def move_type(self) -> MoveType:
        return MoveType.CANCEL_PENDING_EFFECT

    def __str__(self) -> str:
        return "Cancel"
