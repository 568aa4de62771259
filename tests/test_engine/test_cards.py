"""Tests for the card catalog."""

import random

import pytest

from dominion_engine.cards import (
    BASIC_CARDS,
    CATALOG,
    KINGDOM_CARDS,
    Attack,
    CardType,
    Special,
    UnknownCardError,
    card_name,
    get_card,
    has_type,
    select_kingdom,
)


class TestCatalog:
    def test_catalog_size(self):
        assert len(CATALOG) == 33
        assert len(BASIC_CARDS) == 7
        assert len(KINGDOM_CARDS) == 26

    def test_kingdom_excludes_basics(self):
        assert not set(KINGDOM_CARDS) & set(BASIC_CARDS)

    def test_ids_match_keys(self):
        for card_id, card in CATALOG.items():
            assert card.id == card_id

    def test_treasure_values(self):
        assert get_card("copper").coins == 1
        assert get_card("silver").coins == 2
        assert get_card("gold").coins == 3

    def test_victory_values(self):
        assert get_card("estate").victory_points == 1
        assert get_card("duchy").victory_points == 3
        assert get_card("province").victory_points == 6
        assert get_card("curse").victory_points == -1

    def test_costs(self):
        assert get_card("copper").cost == 0
        assert get_card("silver").cost == 3
        assert get_card("gold").cost == 6
        assert get_card("province").cost == 8
        assert get_card("artisan").cost == 6
        assert get_card("cellar").cost == 2

    def test_every_action_has_effect(self):
        for card in CATALOG.values():
            if card.is_action:
                assert card.effect is not None, card.id

    def test_gardens_is_dynamic(self):
        gardens = get_card("gardens")
        assert gardens.dynamic_vp
        assert gardens.is_victory
        assert gardens.effect is None

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            CATALOG["copper"] = get_card("gold")


class TestEffects:
    def test_village(self):
        effect = get_card("village").effect
        assert effect.cards == 1
        assert effect.actions == 2

    def test_festival(self):
        effect = get_card("festival").effect
        assert (effect.actions, effect.buys, effect.coins) == (2, 1, 2)

    def test_attacks(self):
        assert get_card("militia").effect.attack == Attack.DISCARD_TO_3
        assert get_card("witch").effect.attack == Attack.CURSE
        assert get_card("bureaucrat").effect.attack == Attack.BUREAUCRAT
        assert get_card("bandit").effect.attack == Attack.BANDIT

    def test_specials(self):
        assert get_card("throneRoom").effect.special == Special.THRONE_ROOM
        assert get_card("councilRoom").effect.special == Special.COUNCIL_ROOM
        assert Special.COUNCIL_ROOM.value == "councilRoom"

    def test_attack_cards_carry_attack_type(self):
        for card in CATALOG.values():
            if card.effect is not None and card.effect.attack is not None:
                assert CardType.ATTACK in card.types


class TestLookup:
    def test_unknown_card(self):
        with pytest.raises(UnknownCardError):
            get_card("platinum")

    def test_unknown_card_is_key_error(self):
        with pytest.raises(KeyError):
            get_card("")

    def test_has_type_by_id(self):
        assert has_type("moat", CardType.REACTION)
        assert has_type("moat", CardType.ACTION)
        assert not has_type("village", CardType.REACTION)

    def test_has_type_by_card(self):
        assert has_type(get_card("curse"), CardType.CURSE)

    def test_card_name(self):
        assert card_name("throneRoom") == "Throne Room"


class TestSelectKingdom:
    def test_ten_distinct_kingdom_cards(self):
        kingdom = select_kingdom(random.Random(7))
        assert len(kingdom) == 10
        assert len(set(kingdom)) == 10
        assert all(card_id in KINGDOM_CARDS for card_id in kingdom)

    def test_deterministic(self):
        assert select_kingdom(random.Random(3)) == select_kingdom(random.Random(3))
