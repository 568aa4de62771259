"""Tests for move generation."""

from dominion_engine.executor import execute_move
from dominion_engine.move_generator import generate_legal_moves
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
    TrashCards,
)
from dominion_engine.state import (
    DiscardSelection,
    GamePhase,
    GameState,
    PlayTwiceSelection,
    PlayerState,
    TrashForGain,
    TrashSelection,
    create_initial_state,
    create_supply,
)

KINGDOM = (
    "cellar", "chapel", "moat", "village", "workshop",
    "militia", "remodel", "smithy", "throneRoom", "witch",
)


def make_state(hand=(), opponent_hand=(), **kwargs):
    players = (
        PlayerState(name="You", hand=hand),
        PlayerState(name="AI", hand=opponent_hand),
    )
    return GameState(players=players, supply=create_supply(KINGDOM), kingdom=KINGDOM, **kwargs)


class TestActionPhaseMoves:
    def test_fresh_game(self):
        state = create_initial_state(seed=42)
        moves = generate_legal_moves(state)
        assert GoToBuyPhase() in moves
        assert EndTurn() in moves
        assert not any(isinstance(m, PlayAction) for m in moves)

    def test_one_move_per_distinct_action(self):
        state = make_state(hand=("village", "copper", "village", "smithy"))
        plays = [m for m in generate_legal_moves(state) if isinstance(m, PlayAction)]
        assert plays == [PlayAction(hand_index=0), PlayAction(hand_index=3)]

    def test_no_actions_left(self):
        state = make_state(hand=("village",), actions=0)
        moves = generate_legal_moves(state)
        assert not any(isinstance(m, PlayAction) for m in moves)
        assert GoToBuyPhase() in moves


class TestBuyPhaseMoves:
    def test_affordable_cards(self):
        state = make_state(phase=GamePhase.BUY, coins=3)
        bought = {m.card_id for m in generate_legal_moves(state) if isinstance(m, BuyCard)}
        assert {"copper", "silver", "estate", "curse", "village", "cellar"} <= bought
        assert "gold" not in bought
        assert "smithy" not in bought
        assert EndTurn() in generate_legal_moves(state)

    def test_empty_pile_not_offered(self):
        supply = create_supply(KINGDOM)
        supply["silver"] = 0
        state = GameState(
            players=(PlayerState(name="You"), PlayerState(name="AI")),
            supply=supply,
            phase=GamePhase.BUY,
            coins=3,
        )
        assert BuyCard(card_id="silver") not in generate_legal_moves(state)

    def test_no_buys_left(self):
        state = make_state(phase=GamePhase.BUY, coins=8, buys=0)
        assert generate_legal_moves(state) == [EndTurn()]


class TestPendingMoves:
    def test_militia_discard(self):
        state = make_state(
            opponent_hand=("copper", "copper", "estate", "silver", "gold"),
            pending_effect=DiscardSelection(player=1, origin="militia", count=2),
        )
        moves = generate_legal_moves(state)

        assert all(isinstance(m, DiscardCards) for m in moves)
        assert all(len(m.hand_indices) == 2 for m in moves)
        # {c,c} {c,e} {c,s} {c,g} {e,s} {e,g} {s,g}
        assert len(moves) == 7

    def test_cellar_includes_empty_and_cancel(self):
        state = make_state(
            hand=("estate", "copper"),
            pending_effect=DiscardSelection(player=0, origin="cellar", count=2, exact=False, redraw=True),
        )
        moves = generate_legal_moves(state)

        assert DiscardAndDraw(hand_indices=()) in moves
        assert DiscardAndDraw(hand_indices=(0, 1)) in moves
        assert CancelPendingEffect() in moves
        assert len(moves) == 5

    def test_chapel_limit(self):
        state = make_state(
            hand=("estate", "copper", "curse", "silver", "gold", "duchy"),
            pending_effect=TrashSelection(player=0, origin="chapel", max_cards=4),
        )
        moves = generate_legal_moves(state)
        trashes = [m for m in moves if isinstance(m, TrashCards)]
        assert max(len(m.hand_indices) for m in trashes) == 4
        assert CancelPendingEffect() in moves

    def test_trash_for_gain_filters_type(self):
        from dominion_engine.cards import CardType

        state = make_state(
            hand=("estate", "copper", "silver"),
            pending_effect=TrashForGain(
                player=0, origin="mine", cost_bonus=3, card_type=CardType.TREASURE
            ),
        )
        assert generate_legal_moves(state) == [
            SelectTrashCard(hand_index=1),
            SelectTrashCard(hand_index=2),
        ]

    def test_throne_room_choices(self):
        state = make_state(
            hand=("copper", "village", "smithy"),
            pending_effect=PlayTwiceSelection(player=0, origin="throneRoom"),
        )
        moves = generate_legal_moves(state)
        assert SelectRepeatAction(hand_index=1) in moves
        assert SelectRepeatAction(hand_index=2) in moves
        assert CancelPendingEffect() in moves
        assert len(moves) == 3

    def test_no_turn_moves_while_pending(self):
        state = make_state(
            hand=("village",),
            pending_effect=TrashSelection(player=0, origin="chapel", max_cards=4),
        )
        moves = generate_legal_moves(state)
        assert EndTurn() not in moves
        assert not any(isinstance(m, PlayAction) for m in moves)


class TestGameOver:
    def test_no_moves(self):
        state = make_state(game_over=True)
        assert generate_legal_moves(state) == []


class TestGeneratedMovesAreLegal:
    def test_every_move_executes(self):
        state = make_state(hand=("workshop", "remodel", "estate", "copper"))
        for move in generate_legal_moves(state):
            new_state = execute_move(state, move)
            for follow_up in generate_legal_moves(new_state):
                execute_move(new_state, follow_up)

    def test_gain_choices(self):
        state = execute_move(make_state(hand=("workshop",)), PlayAction(hand_index=0))
        gains = {m.card_id for m in generate_legal_moves(state) if isinstance(m, SelectGainCard)}
        assert "smithy" in gains
        assert "silver" in gains
        assert "gold" not in gains
