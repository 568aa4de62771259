"""Tests for game state models."""

import pytest

from dominion_engine.cards import UnknownCardError
from dominion_engine.state import (
    DiscardSelection,
    GainSelection,
    GamePhase,
    GameState,
    InvariantViolation,
    PlayTwiceSelection,
    PlayerState,
    TrashForGain,
    TrashSelection,
    calculate_vp,
    card_counts,
    create_initial_state,
    create_supply,
)

KINGDOM = (
    "cellar", "chapel", "moat", "village", "workshop",
    "militia", "remodel", "smithy", "throneRoom", "gardens",
)


class TestPlayerState:
    def test_all_cards(self):
        player = PlayerState(
            name="P", deck=("copper",), hand=("estate",), discard=("silver",), play_area=("village",)
        )
        assert sorted(player.all_cards) == ["copper", "estate", "silver", "village"]
        assert player.total_cards == 4

    def test_with_hand_returns_new_player(self):
        player = PlayerState(name="P", hand=("copper",))
        new_player = player.with_hand(())
        assert player.hand == ("copper",)
        assert new_player.hand == ()


class TestInitialState:
    def test_fresh_game_counts(self):
        state = create_initial_state(seed=42)

        for player in state.players:
            assert len(player.hand) == 5
            assert len(player.deck) == 5
            assert player.discard == ()
            assert player.play_area == ()
            assert sorted(player.all_cards) == ["copper"] * 7 + ["estate"] * 3

        assert state.supply["copper"] == 46
        assert state.supply["province"] == 8
        assert state.supply["curse"] == 10
        assert state.supply["silver"] == 40
        assert state.supply["gold"] == 30

    def test_fresh_game_counters(self):
        state = create_initial_state(seed=42)
        assert state.current_player == 0
        assert state.phase == GamePhase.ACTION
        assert (state.actions, state.buys, state.coins) == (1, 1, 0)
        assert state.turn_number == 1
        assert not state.game_over
        assert state.pending_effect is None

    def test_random_kingdom(self):
        state = create_initial_state(seed=42)
        assert len(state.kingdom) == 10
        for card_id in state.kingdom:
            assert card_id in state.supply

    def test_fixed_kingdom(self):
        state = create_initial_state(kingdom=KINGDOM, seed=1)
        assert state.kingdom == KINGDOM
        assert state.supply["village"] == 10
        assert state.supply["gardens"] == 8

    def test_default_names(self):
        state = create_initial_state(seed=1)
        assert state.players[0].name == "You"
        assert state.players[1].name == "AI"
        assert not state.players[0].is_ai
        assert state.players[1].is_ai
        assert state.log == ("Game started! You to play.",)

    def test_names_when_no_ai(self):
        state = create_initial_state(seed=1, ai_players=())
        assert [p.name for p in state.players] == ["Player 1", "Player 2"]
        assert not any(p.is_ai for p in state.players)

    def test_same_seed_same_game(self):
        a = create_initial_state(seed=99)
        b = create_initial_state(seed=99)
        assert a.kingdom == b.kingdom
        assert a.players == b.players
        assert a.rng_seed == b.rng_seed

    def test_different_seeds_differ(self):
        states = [create_initial_state(seed=s) for s in range(5)]
        assert len({s.kingdom for s in states}) > 1

    def test_basic_card_in_kingdom_rejected(self):
        with pytest.raises(ValueError):
            create_initial_state(kingdom=("copper",) + KINGDOM[:9], seed=1)

    def test_unknown_kingdom_card_rejected(self):
        with pytest.raises(UnknownCardError):
            create_initial_state(kingdom=("platinum",) + KINGDOM[:9], seed=1)


class TestGameState:
    def _state(self, **kwargs):
        players = (PlayerState(name="You"), PlayerState(name="AI", is_ai=True))
        return GameState(players=players, supply=create_supply(KINGDOM), kingdom=KINGDOM, **kwargs)

    def test_supply_is_read_only(self):
        state = self._state()
        with pytest.raises(TypeError):
            state.supply["copper"] = 0

    def test_with_supply_change(self):
        state = self._state()
        new_state = state.with_supply_change("silver", -1)
        assert new_state.supply["silver"] == 39
        assert state.supply["silver"] == 40

    def test_supply_cannot_go_negative(self):
        supply = create_supply(KINGDOM)
        supply["gold"] = 0
        players = (PlayerState(name="You"), PlayerState(name="AI"))
        state = GameState(players=players, supply=supply)
        with pytest.raises(InvariantViolation):
            state.with_supply_change("gold", -1)

    def test_empty_piles(self):
        supply = create_supply(KINGDOM)
        supply["village"] = 0
        supply["curse"] = 0
        players = (PlayerState(name="You"), PlayerState(name="AI"))
        state = GameState(players=players, supply=supply)
        assert state.empty_piles == 2

    def test_acting_player_follows_pending(self):
        state = self._state().with_pending(
            DiscardSelection(player=1, origin="militia", count=2)
        )
        assert state.current_player == 0
        assert state.acting_player == 1

    def test_opponent(self):
        state = self._state(current_player=1)
        assert state.opponent == 0
        assert state.opponent_state.name == "You"

    def test_with_counters(self):
        state = self._state().with_counters(actions=2, coins=3)
        assert (state.actions, state.buys, state.coins) == (3, 1, 3)


class TestPendingEffects:
    def test_cancelable(self):
        assert DiscardSelection(player=0, origin="cellar", count=3, exact=False, redraw=True).cancelable
        assert not DiscardSelection(player=1, origin="militia", count=2).cancelable
        assert TrashSelection(player=0, origin="chapel", max_cards=4).cancelable
        assert GainSelection(player=0, origin="workshop", max_cost=4).cancelable
        assert not GainSelection(player=0, origin="remodel", max_cost=4).cancelable
        assert not TrashForGain(player=0, origin="remodel", cost_bonus=2).cancelable
        assert PlayTwiceSelection(player=0, origin="throneRoom").cancelable

    def test_gain_selection_allows(self):
        from dominion_engine.cards import CardType

        pending = GainSelection(player=0, origin="mine", max_cost=3, card_type=CardType.TREASURE)
        assert pending.allows("silver")
        assert pending.allows("copper")
        assert not pending.allows("village")
        assert not pending.allows("gold")


class TestScoring:
    def test_starting_deck(self):
        player = PlayerState(name="P", deck=("copper",) * 7 + ("estate",) * 3)
        assert calculate_vp(player) == 3

    def test_gardens_with_23_cards(self):
        player = PlayerState(name="P", deck=("copper",) * 22 + ("gardens",))
        assert calculate_vp(player) == 2

    def test_gardens_with_30_cards(self):
        player = PlayerState(name="P", discard=("copper",) * 29, hand=("gardens",))
        assert calculate_vp(player) == 3

    def test_curse_is_negative(self):
        player = PlayerState(name="P", discard=("curse", "curse", "estate"))
        assert calculate_vp(player) == -1

    def test_every_zone_counts(self):
        player = PlayerState(
            name="P", deck=("province",), hand=("duchy",), discard=("estate",), play_area=("estate",)
        )
        assert calculate_vp(player) == 11


class TestCardCounts:
    def test_fresh_game(self):
        state = create_initial_state(kingdom=KINGDOM, seed=3)
        counts = card_counts(state)
        assert counts["copper"] == 60
        assert counts["estate"] == 14
        assert counts["province"] == 8
