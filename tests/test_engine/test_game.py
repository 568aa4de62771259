"""Tests for the public game API."""

import random

import pytest

from dominion_engine import game
from dominion_engine.executor import execute_move
from dominion_engine.move_generator import generate_legal_moves
from dominion_engine.state import GamePhase, card_counts

KINGDOM = (
    "cellar", "chapel", "moat", "village", "workshop",
    "militia", "remodel", "smithy", "throneRoom", "witch",
)


class TestNewGame:
    def test_defaults(self):
        state = game.new_game(seed=1)
        assert len(state.kingdom) == 10
        assert state.players[1].is_ai
        assert not state.players[0].is_ai

    def test_fixed_kingdom(self):
        state = game.new_game(kingdom=KINGDOM, seed=1)
        assert state.kingdom == KINGDOM

    def test_custom_names(self):
        state = game.new_game(seed=1, names=("Ann", "Bob"))
        assert state.log == ("Game started! Ann to play.",)


class TestIllegalMovesReturnSameState:
    @pytest.mark.parametrize(
        "operation",
        [
            lambda s: game.play_action(s, 0),
            lambda s: game.buy_card(s, "silver"),
            lambda s: game.discard_cards(s, [0]),
            lambda s: game.discard_and_draw(s, [0]),
            lambda s: game.trash_cards(s, [0]),
            lambda s: game.select_gain_card(s, "silver"),
            lambda s: game.select_trash_card(s, 0),
            lambda s: game.topdeck_card(s, 0),
            lambda s: game.select_repeat_action(s, 0),
            lambda s: game.cancel_pending_effect(s),
        ],
    )
    def test_operation_without_context(self, operation):
        state = game.new_game(kingdom=KINGDOM, seed=5)
        # Starting hands hold no Action cards and nothing is pending
        assert operation(state) is state

    def test_go_to_buy_phase_twice(self):
        state = game.go_to_buy_phase(game.new_game(kingdom=KINGDOM, seed=5))
        assert state.phase == GamePhase.BUY
        assert game.go_to_buy_phase(state) is state

    def test_rejected_move_adds_no_log(self):
        state = game.new_game(kingdom=KINGDOM, seed=5)
        assert game.buy_card(state, "province").log == state.log

    def test_game_over_rejects_everything(self):
        from dataclasses import replace

        state = replace(game.new_game(kingdom=KINGDOM, seed=5), game_over=True)
        assert game.end_turn(state) is state
        assert game.go_to_buy_phase(state) is state


class TestTurnFlow:
    def test_buy_and_end_turn(self):
        state = game.new_game(kingdom=KINGDOM, seed=5)
        coins = sum(
            {"copper": 1}.get(card_id, 0) for card_id in state.players[0].hand
        )

        state = game.go_to_buy_phase(state)
        assert state.coins == coins

        state = game.buy_card(state, "copper")
        assert "copper" in state.players[0].discard

        state = game.end_turn(state)
        assert state.current_player == 1
        assert len(state.players[0].hand) == 5

    def test_seeded_games_replay(self):
        def play(seed):
            state = game.new_game(kingdom=KINGDOM, seed=seed, ai_players=())
            rng = random.Random(seed)
            for _ in range(300):
                moves = generate_legal_moves(state)
                if not moves:
                    break
                state = execute_move(state, rng.choice(moves))
            return state

        assert play(11).players == play(11).players
        assert play(11).log == play(11).log


class TestConservation:
    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_random_play_conserves_cards(self, seed):
        state = game.new_game(kingdom=KINGDOM, seed=seed, ai_players=(1,))
        expected = card_counts(state)
        rng = random.Random(seed)

        for _ in range(400):
            moves = generate_legal_moves(state)
            if not moves:
                break
            state = execute_move(state, rng.choice(moves))
            assert card_counts(state) == expected
            for count in state.supply.values():
                assert count >= 0
