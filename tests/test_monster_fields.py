"""
Tests for the monster statblock field parsers.
"""

import pytest

from srd35_extract.errors import UnknownStatblockField, UnparsedPattern, UnrecognizedValue
from srd35_extract.monsters.fields import (
    FIELD_PARSERS,
    parse_abilities,
    parse_advancement,
    parse_alignment,
    parse_armor_class,
    parse_attack,
    parse_base_attack_grapple,
    parse_challenge_rating,
    parse_environment,
    parse_feats,
    parse_field,
    parse_full_attack,
    parse_hit_dice_field,
    parse_initiative,
    parse_level_adjustment,
    parse_organization,
    parse_saves,
    parse_size_type,
    parse_skills,
    parse_space_reach,
    parse_special_attacks,
    parse_special_qualities,
    parse_speed,
    parse_treasure,
)


# ==============================================================================
# Creature basics
# ==============================================================================

class TestSizeType:
    """Tests for parse_size_type()."""

    def test_with_subtypes(self):
        result = parse_size_type("large outsider (chaotic, extraplanar, evil)")
        assert result == {
            "size": "large",
            "type": "outsider",
            "subtype": ["chaotic", "extraplanar", "evil"],
        }

    def test_two_word_type(self):
        assert parse_size_type("large magical beast") == {"size": "large", "type": "magical beast"}

    def test_unknown_size(self):
        with pytest.raises(UnrecognizedValue):
            parse_size_type("gigantic dragon")

    def test_unknown_subtype(self):
        with pytest.raises(UnrecognizedValue) as exc_info:
            parse_size_type("medium humanoid (kobold)")
        assert exc_info.value.field == "subtype"


class TestHitDice:
    """Tests for parse_hit_dice_field()."""

    def test_drops_hit_point_total(self):
        assert parse_hit_dice_field("1d8+1 (5 hp)") == {"hit_dice": 1, "hit_points": "1d8+1"}

    def test_fractional_hit_dice(self):
        assert parse_hit_dice_field("1/2 d8 (2 hp)") == {"hit_dice": 0.5, "hit_points": "(1/2)d8"}

    def test_plus_between_dice(self):
        result = parse_hit_dice_field("4d8 plus 2d10 (30 hp)")
        assert result == {"hit_dice": 6, "hit_points": "4d8 + 2d10"}


class TestInitiative:
    """Tests for parse_initiative()."""

    def test_positive(self):
        assert parse_initiative("+3 (+3 dex)") == 3

    def test_negative(self):
        assert parse_initiative("-2") == -2

    def test_no_number(self):
        with pytest.raises(UnparsedPattern):
            parse_initiative("see text")


# ==============================================================================
# Movement and defence
# ==============================================================================

class TestSpeed:
    """Tests for parse_speed()."""

    def test_multiple_modes(self):
        result = parse_speed("30 ft., fly 60 ft. (average), swim 20 ft.")
        assert result == {"base": 30, "fly": 60, "fly_type": "average", "swim": 20}

    def test_cant_run(self):
        assert parse_speed("20 ft. (can't run)") == {"run": False, "base": 20}

    def test_cant_run_with_squares(self):
        assert parse_speed("20 ft. (4 squares; can't run)") == {"run": False, "base": 20}

    def test_squares_dropped(self):
        assert parse_speed("30 ft. (6 squares), climb 20 ft.") == {"base": 30, "climb": 20}

    def test_speed_in_armor(self):
        assert parse_speed("20 ft. in chainmail") == {"chainmail": 20}

    def test_armor_exception(self):
        result = parse_speed("50 ft., swim 30 ft. in breastplate")
        assert result == {"base": 50, "breastplate": {"swim": 30}}

    def test_unknown_mode(self):
        with pytest.raises(UnparsedPattern) as exc_info:
            parse_speed("teleport 30 ft.")
        assert exc_info.value.field == "speed"

    def test_empty_mode(self):
        with pytest.raises(UnparsedPattern) as exc_info:
            parse_speed("30 ft.,, fly 20 ft.")
        assert exc_info.value.field == "speed"

    def test_same_input_same_result(self):
        raw = "50 ft., swim 30 ft. in breastplate"
        assert parse_speed(raw) == parse_speed(raw)


class TestArmorClass:
    """Tests for parse_armor_class()."""

    def test_basic(self):
        result = parse_armor_class("14 (+2 dex, +2 size), touch 16, flat-footed 12")
        assert result == {
            "total": 14,
            "touch": 16,
            "flat-footed": 12,
            "mods": {"dex": 2, "size": 2},
        }

    def test_natural_armor_and_generic_label(self):
        result = parse_armor_class("ac 16 (-1 size, +5 natural armor, +2 leather armor), touch 9, flat-footed 16")
        assert result["mods"] == {"size": -1, "natural": 5, "leather armor": 2}

    def test_literal_modifier(self):
        result = parse_armor_class("17 (+1 dex, ring of protection +1, +5 natural), touch 12, flat-footed 16")
        assert result["mods"] == {"dex": 1, "ring of protection +1": 1, "natural": 5}

    def test_broken_source_row(self):
        result = parse_armor_class("14 (+2 dex, +2 size, touch 14, flat-footed 12")
        assert result == {
            "total": 14,
            "touch": 14,
            "flat-footed": 12,
            "mods": {"dex": 2, "size": 2},
        }

    def test_exception_values_are_copies(self):
        first_result = parse_armor_class("14 (+2 dex, +2 size, touch 14, flat-footed 12")
        first_result["mods"]["dex"] = 99
        second_result = parse_armor_class("14 (+2 dex, +2 size, touch 14, flat-footed 12")
        assert second_result["mods"]["dex"] == 2

    def test_unparseable(self):
        with pytest.raises(UnparsedPattern):
            parse_armor_class("banana")


class TestBaseAttackGrapple:
    """Tests for parse_base_attack_grapple()."""

    def test_both(self):
        assert parse_base_attack_grapple("+2/+6") == {"base_attack": 2, "grapple": 6}

    def test_no_grapple(self):
        assert parse_base_attack_grapple("+0/-") == {"base_attack": 0}

    def test_stirge(self):
        assert parse_base_attack_grapple("+1/-11 (+1 when attached)") == {"base_attack": 1, "grapple": -11}

    def test_unparseable(self):
        with pytest.raises(UnparsedPattern):
            parse_base_attack_grapple("varies")


class TestSpaceReach:
    """Tests for parse_space_reach()."""

    def test_basic(self):
        assert parse_space_reach("5 ft./5 ft.") == {"space": 5, "reach": {"base": 5}}

    def test_fractional_space(self):
        assert parse_space_reach("2-1/2 ft./0 ft.") == {"space": 2.5, "reach": {"base": 0}}
        assert parse_space_reach("1/2 ft./0 ft.") == {"space": 0.5, "reach": {"base": 0}}

    def test_qualified_reach(self):
        result = parse_space_reach("10 ft./10 ft. (15 ft with longspear)")
        assert result == {"space": 10, "reach": {"base": 10, "with longspear": 15}}

    def test_missing_separator(self):
        with pytest.raises(UnparsedPattern):
            parse_space_reach("5 ft")

    def test_zero_denominator(self):
        with pytest.raises(UnparsedPattern) as exc_info:
            parse_space_reach("1/0 ft./5 ft.")
        assert exc_info.value.field == "Space"


# ==============================================================================
# Attacks and qualities
# ==============================================================================

class TestAttacks:
    """Tests for parse_attack() and parse_full_attack()."""

    def test_attack_alternatives(self):
        result = parse_attack("longsword +5 melee (1d8+2/19-20) or shortbow +3 ranged (1d6/x3)")
        assert result == ["longsword +5 melee (1d8+2/19-20)", "shortbow +3 ranged (1d6/x3)"]

    def test_attack_asterisk_removed(self):
        assert parse_attack("bite +4 melee (1d6 plus poison*)") == ["bite +4 melee (1d6 plus poison)"]

    def test_full_attack_semicolon(self):
        result = parse_full_attack("slam +5 melee (1d6+3); bite +0 melee (1d4)")
        assert result == ["slam +5 melee (1d6+3)", "bite +0 melee (1d4)"]

    def test_empty_parts_skipped(self):
        assert parse_attack("-") == []


class TestSpecialAttacksAndQualities:
    """Tests for parse_special_attacks() and parse_special_qualities()."""

    def test_special_attacks(self):
        assert parse_special_attacks("poison, improved grab") == ["poison", "improved grab"]

    def test_special_attacks_absent(self):
        assert parse_special_attacks("-") == []

    def test_special_attack_spelling(self):
        assert parse_special_attacks("paralyis") == ["paralysis"]

    def test_damage_reduction_and_spell_resistance(self):
        result = parse_special_qualities("darkvision 60 ft., low-light vision, dr 5/magic, sr 15")
        assert result == [
            "darkvision 60",
            "low-light vision",
            "damage reduction 5/magic",
            "spell resistance (15)",
        ]

    def test_immunity_phrase(self):
        result = parse_special_qualities("immunity to fire and cold, tremorsense 60 ft.")
        assert result == ["fire immunity", "cold immunity", "tremorsense 60"]

    def test_resistance_phrase(self):
        result = parse_special_qualities("resistance to cold 10 and fire 10")
        assert result == ["cold resistance (10)", "fire resistance (10)"]

    def test_trailing_period_dropped(self):
        assert parse_special_qualities("scent.") == ["scent"]

    def test_absent(self):
        assert parse_special_qualities("-") == []


# ==============================================================================
# Saves, abilities, skills, feats
# ==============================================================================

class TestSaves:
    """Tests for parse_saves()."""

    def test_basic(self):
        assert parse_saves("fort +4, ref +1, will +1") == {"fortitude": 4, "reflex": 1, "will": 1}

    def test_no_reflex(self):
        assert parse_saves("fort +0, ref -, will +0") == {"fortitude": 0, "will": 0}

    def test_poison_bonus(self):
        result = parse_saves("fort +5 (+9 against poison), ref +3, will +2")
        assert result == {"fortitude": 5, "fortitude_poison": 9, "reflex": 3, "will": 2}

    def test_unparseable(self):
        with pytest.raises(UnparsedPattern):
            parse_saves("fortitude good")


class TestAbilities:
    """Tests for parse_abilities()."""

    def test_basic(self):
        result = parse_abilities("str 11, dex 13, con 12, int 10, wis 9, cha 6")
        assert result == {
            "strength": 11,
            "dexterity": 13,
            "constitution": 12,
            "intelligence": 10,
            "wisdom": 9,
            "charisma": 6,
        }

    def test_missing_scores_are_zero(self):
        result = parse_abilities("str 10, dex 10, con -, int -, wis 11, cha 1")
        assert result["constitution"] == 0
        assert result["intelligence"] == 0

    def test_unparseable(self):
        with pytest.raises(UnparsedPattern):
            parse_abilities("str 10, dex 10")


class TestSkills:
    """Tests for parse_skills()."""

    def test_plain_and_conditional(self):
        result = parse_skills("hide +4 (+8 in forests), listen +2")
        assert result == {"hide": {"base": 4, "in forests": 8}, "listen": 2}

    def test_two_conditions(self):
        result = parse_skills("hide +10 (+14 in snow, +18 in ice)")
        assert result == {"hide": {"base": 10, "in snow": 14, "in ice": 18}}

    def test_absent(self):
        assert parse_skills("-") == {}

    def test_unparseable(self):
        with pytest.raises(UnparsedPattern):
            parse_skills("many skills")


class TestFeats:
    """Tests for parse_feats()."""

    def test_bonus_marker_and_duplicates(self):
        result = parse_feats("alertness, weapon focus (longsword)b, alertness")
        assert result == ["alertness", "weapon focus (longsword)"]

    def test_leading_and(self):
        assert parse_feats("dodge, and toughness") == ["dodge", "toughness"]

    def test_blind_fight_spelling(self):
        assert parse_feats("blind fight") == ["blind-fight"]


# ==============================================================================
# Ecology
# ==============================================================================

class TestEcology:
    """Tests for the environment, organization, rating and treasure parsers."""

    def test_environment_article(self):
        assert parse_environment("a temperate forest.") == "temperate forest"

    def test_environment_article_only_at_start(self):
        assert parse_environment("warm deserts and an underground") == "warm deserts and an underground"

    def test_environment_paren_spacing(self):
        assert parse_environment("temperate plains(near water)") == "temperate plains (near water)"

    def test_organization_list(self):
        result = parse_organization("solitary, pair, or gang (3-5)")
        assert result == ["solitary", "pair", "gang (3-5)"]

    def test_organization_or(self):
        assert parse_organization("solitary or pair") == ["solitary", "pair"]

    def test_challenge_rating(self):
        assert parse_challenge_rating("2") == ["2"]
        assert parse_challenge_rating("1/2 (see text)") == ["1/2"]

    def test_challenge_rating_alternative(self):
        assert parse_challenge_rating("4 (5 with irresistible dance)") == ["4", "5 (with irresistible dance)"]

    def test_treasure(self):
        assert parse_treasure("standard") == ["standard"]
        assert parse_treasure("none") == []

    def test_treasure_rewrites(self):
        result = parse_treasure("standard coins; double goods; standard items")
        assert result == ["standard coins", "2x goods", "standard items"]

    def test_treasure_possessions(self):
        assert parse_treasure("standard plus possessions noted below") == ["standard"]

    def test_alignment(self):
        assert parse_alignment("always chaotic evil.") == "always chaotic evil"

    def test_alignment_exception(self):
        result = parse_alignment("usually chaotic good(wood: usually neutral)")
        assert result == "usually chaotic good (wood: usually neutral)"

    def test_advancement(self):
        assert parse_advancement("4-6 hd (medium); 7-12 hd (large)") == ["4-6 hd (medium)", "7-12 hd (large)"]
        assert parse_advancement("-") == []

    def test_level_adjustment(self):
        assert parse_level_adjustment("+2") == "+2"
        assert parse_level_adjustment("-") is None


# ==============================================================================
# Registry
# ==============================================================================

class TestParseField:
    """Tests for the FIELD_PARSERS registry."""

    def test_registry_covers_all_rows(self):
        assert len(FIELD_PARSERS) == 22

    def test_single_key_row(self):
        assert parse_field("initiative", "+1") == {"initiative": 1}

    def test_multi_key_row(self):
        assert parse_field("base_attack/grapple", "+1/-3") == {"base_attack": 1, "grapple": -3}

    def test_absent_row_contributes_nothing(self):
        assert parse_field("special_attacks", "-") == {}
        assert parse_field("level_adjustment", "-") == {}

    def test_unknown_header(self):
        with pytest.raises(UnknownStatblockField) as exc_info:
            parse_field("weight", "10 lb.")
        assert exc_info.value.header == "weight"
