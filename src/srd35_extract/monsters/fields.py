"""
Statblock field parsers.

Each parser receives the cleaned, lower-cased text of one statblock cell and
returns the keys it contributes to the parsed record. An empty result means
the cell marks the field as absent. Text that matches none of a parser's known
shapes raises UnparsedPattern; nothing is guessed.
"""

from __future__ import annotations

import copy
import re
from typing import Any, Callable

from ..dice import parse_hit_dice
from ..errors import UnknownStatblockField, UnparsedPattern
from ..rewrites import apply_rewrites, rewrite_until_stable
from ..vocabulary import DEFAULT_VOCABULARIES, Vocabularies
from . import tables

FieldParser = Callable[[str, Vocabularies], dict[str, Any]]

_SIZE_TYPE_RE = re.compile(r"^(\S+)\s+([^\(]+)(\s+\(.+\))?$")
_LEADING_INT_RE = re.compile(r"^\s*([+\-]?\d+)")
_SPEED_IN_ARMOR_RE = re.compile(r"^(\d+)\s+in\s+(.+)$")
_SPEED_FLY_TYPE_RE = re.compile(r"^fly\s+(\d+)\s*\(([a-z]+)\)$")
_AC_RE = re.compile(r"^(\d+)\s+\(([^\(]+)\),\s+touch\s+(-?\d+),\s+flat-footed\s+(-?\d+)$")
_AC_LABEL_RE = re.compile(r"^([+\-]?\d+)\s+(.+)$")
_BAB_GRAPPLE_RE = re.compile(r"^([+\-]?\d+)/([+\-]?\d+)\*?$")
_BAB_ONLY_RE = re.compile(r"^([+\-]?\d+)/-$")
_SPACE_NUMBER_RE = re.compile(r"^\d+(\.\d+)?$")
_SPACE_FRACTION_RE = re.compile(r"^(\d+)/(\d+)$")
_REACH_RE = re.compile(r"^(\d+)\s+ft\s*$")
_REACH_QUALIFIED_RE = re.compile(r"^(\d+)\s+ft\s+\(([^\)]+)\)\s*$")
_REACH_PART_RE = re.compile(r"^(\d+)\s+ft\s+(.+?)\s*$")
_TRAILING_PERIOD_RE = re.compile(r"\.$")
_LEADING_AND_RE = re.compile(r"^and\s+")
_LEADING_OR_RE = re.compile(r"^\s*or\s+")
_BONUS_FEAT_RE = re.compile(r"\s*b$")
_TREASURE_SPLIT_RE = re.compile(r"[,;]\s+")


def _lookup(table: tuple[tuple[str, Any], ...], value: str) -> Any | None:
    """Return a copy of the literal entry for ``value``, if any."""
    for text, result in table:
        if text == value:
            return copy.deepcopy(result)
    return None


def _split(value: str, separator: str) -> list[str]:
    return [part.strip() for part in value.split(separator)]


# =============================================================================
# Creature basics
# =============================================================================

def parse_size_type(value: str, vocabularies: Vocabularies = DEFAULT_VOCABULARIES) -> dict[str, Any]:
    """'large outsider (chaotic, extraplanar)' -> size, type, subtype list."""
    match = _SIZE_TYPE_RE.match(value.lower())
    if not match:
        raise UnparsedPattern("size/type", value)

    result: dict[str, Any] = {
        "size": vocabularies.sizes.normalize(match.group(1)),
        "type": vocabularies.types.normalize(match.group(2)),
    }
    if match.group(3):
        inner = match.group(3).strip().removeprefix("(").removesuffix(")").strip()
        result["subtype"] = [vocabularies.subtypes.normalize(part) for part in inner.split(", ")]
    return result


def parse_hit_dice_field(value: str) -> dict[str, Any]:
    """'1/2 d8 (2 hp)' -> hit_dice 0.5, hit_points '(1/2)d8'."""
    value = apply_rewrites(value, tables.HIT_DICE_REWRITES)
    return {
        "hit_dice": parse_hit_dice(value),
        "hit_points": value,
    }


def parse_initiative(value: str) -> int:
    match = _LEADING_INT_RE.match(value)
    if not match:
        raise UnparsedPattern("initiative", value)
    return int(match.group(1))


# =============================================================================
# Movement and defence
# =============================================================================

def parse_speed(value: str) -> dict[str, Any]:
    """
    Parse a speed cell into movement modes.

    '30 ft., fly 60 ft. (average), swim 20 ft.'
        -> {'base': 30, 'fly': 60, 'fly_type': 'average', 'swim': 20}

    Raises:
        UnparsedPattern: If any comma-separated token is not a known mode.
    """
    speed: dict[str, Any] = {}
    if "can't run" in value:
        speed["run"] = False

    value = apply_rewrites(value, tables.SPEED_REWRITES)

    for part in _split(value, ","):
        if not part:
            raise UnparsedPattern("speed", part)

        exception = _lookup(tables.SPEED_EXCEPTIONS, part)
        if exception is not None:
            speed.update(exception)
            continue

        if match := _SPEED_IN_ARMOR_RE.match(part):
            speed[match.group(2)] = int(match.group(1))
            continue

        if match := _SPEED_FLY_TYPE_RE.match(part):
            speed["fly"] = int(match.group(1))
            speed["fly_type"] = match.group(2)
            continue

        for pattern, mode in tables.SPEED_PATTERNS:
            if match := pattern.match(part):
                speed[mode] = int(match.group(1))
                break
        else:
            raise UnparsedPattern("speed", part)

    return speed


def _parse_armor_class_modifier(part: str) -> dict[str, int]:
    for pattern, label in tables.ARMOR_CLASS_MODIFIERS:
        if match := pattern.match(part):
            return {label: int(match.group(1))}

    exception = _lookup(tables.ARMOR_CLASS_MODIFIER_EXCEPTIONS, part)
    if exception is not None:
        return exception

    if match := _AC_LABEL_RE.match(part):
        return {match.group(2): int(match.group(1))}

    raise UnparsedPattern("AC mod", part)


def parse_armor_class(value: str) -> dict[str, Any]:
    """
    Parse an armor class cell.

    '14 (+2 dex, +2 size), touch 16, flat-footed 12'
        -> {'total': 14, 'touch': 16, 'flat-footed': 12, 'mods': {'dex': 2, 'size': 2}}
    """
    value = apply_rewrites(value, tables.ARMOR_CLASS_REWRITES)

    exception = _lookup(tables.ARMOR_CLASS_EXCEPTIONS, value)
    if exception is not None:
        return exception

    match = _AC_RE.match(value)
    if not match:
        raise UnparsedPattern("AC", value)

    ac: dict[str, Any] = {
        "total": int(match.group(1)),
        "touch": int(match.group(3)),
        "flat-footed": int(match.group(4)),
    }
    mods: dict[str, int] = {}
    for part in _split(match.group(2), ","):
        mods.update(_parse_armor_class_modifier(part))
    if mods:
        ac["mods"] = mods
    return ac


def parse_base_attack_grapple(value: str) -> dict[str, int]:
    exception = _lookup(tables.BASE_ATTACK_EXCEPTIONS, value)
    if exception is not None:
        return exception

    if match := _BAB_GRAPPLE_RE.match(value):
        return {"base_attack": int(match.group(1)), "grapple": int(match.group(2))}
    if match := _BAB_ONLY_RE.match(value):
        return {"base_attack": int(match.group(1))}
    raise UnparsedPattern("Base Attack / Grapple", value)


# =============================================================================
# Attacks
# =============================================================================

def parse_attack(value: str) -> list[str]:
    value = apply_rewrites(value, tables.ATTACK_REWRITES)
    return [part for part in _split(value, " or ") if part not in ("", "-")]


def parse_full_attack(value: str) -> list[str]:
    value = apply_rewrites(value, tables.FULL_ATTACK_REWRITES)
    return [part for part in _split(value, " or ") if part not in ("", "-")]


def _parse_space(text: str) -> int | float:
    text = apply_rewrites(text, tables.SPACE_REWRITES).strip()
    if _SPACE_NUMBER_RE.match(text):
        number = float(text)
        return int(number) if number.is_integer() else number
    if (match := _SPACE_FRACTION_RE.match(text)) and int(match.group(2)) != 0:
        return int(match.group(1)) / int(match.group(2))
    raise UnparsedPattern("Space", text)


def _parse_reach(text: str) -> dict[str, int]:
    text = apply_rewrites(text, tables.REACH_REWRITES)

    if match := _REACH_RE.match(text):
        return {"base": int(match.group(1))}

    match = _REACH_QUALIFIED_RE.match(text)
    if not match:
        raise UnparsedPattern("Reach", text)

    reach = {"base": int(match.group(1))}
    for part in _split(match.group(2), ","):
        part_match = _REACH_PART_RE.match(part)
        if not part_match:
            raise UnparsedPattern("Reach component", part)
        reach[part_match.group(2)] = int(part_match.group(1))
    return reach


def parse_space_reach(value: str) -> dict[str, Any]:
    """'10 ft./10 ft. (15 ft with longspear)' -> space 10, reach mapping."""
    parts = value.split("./")
    if len(parts) != 2:
        raise UnparsedPattern("Space / Reach", value)

    result: dict[str, Any] = {"space": _parse_space(parts[0])}
    reach = _parse_reach(parts[1])
    if reach:
        result["reach"] = reach
    return result


def parse_special_attacks(value: str) -> list[str]:
    value = apply_rewrites(value, tables.SPECIAL_ATTACK_REWRITES)
    return [part for part in _split(value, ",") if part not in tables.SPECIAL_ATTACK_ABSENT]


def parse_special_qualities(value: str) -> list[str]:
    """Rewrite resistance/immunity prose into tags, then split on ';'."""
    value = apply_rewrites(value, tables.SPECIAL_QUALITY_REWRITES)

    qualities = []
    for part in _split(value, ";"):
        part = _TRAILING_PERIOD_RE.sub("", part).strip()
        if part in tables.SPECIAL_QUALITY_ABSENT:
            continue
        qualities.append(part)
    return qualities


# =============================================================================
# Saves, abilities, skills, feats
# =============================================================================

def _save_bonus(text: str, value: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise UnparsedPattern("saves", value) from None


def parse_saves(value: str) -> dict[str, int]:
    """'fort +4, ref -, will +1' -> fortitude and will; a '-' reflex is omitted."""
    saves: dict[str, int] = {}

    if match := tables.SAVES_RE.match(value):
        fortitude, poison, reflex, will = match.group(1), None, match.group(2), match.group(3)
    elif match := tables.SAVES_POISON_RE.match(value):
        fortitude, poison, reflex, will = match.groups()
    else:
        raise UnparsedPattern("saves", value)

    saves["fortitude"] = _save_bonus(fortitude, value)
    if poison is not None:
        saves["fortitude_poison"] = _save_bonus(poison, value)
    # Immobile creatures have no reflex save.
    if reflex != "-":
        saves["reflex"] = _save_bonus(reflex, value)
    saves["will"] = _save_bonus(will, value)
    return saves


def parse_abilities(value: str) -> dict[str, int]:
    value = apply_rewrites(value, tables.ABILITY_REWRITES)
    match = tables.ABILITIES_RE.match(value)
    if not match:
        raise UnparsedPattern("abilities", value)
    return {name: int(score) for name, score in zip(tables.ABILITY_NAMES, match.groups())}


def parse_skills(value: str) -> dict[str, Any]:
    """
    Parse a skills cell.

    'hide +4 (+8 in forests), listen +2' ->
        {'hide': {'base': 4, 'in forests': 8}, 'listen': 2}
    """
    value = apply_rewrites(value, tables.SKILL_REWRITES)
    value = rewrite_until_stable(value, tables.PAREN_SEMICOLON_RE, r"\1,")
    value = apply_rewrites(value, tables.SKILL_SPLIT_REWRITES)

    skills: dict[str, Any] = {}
    for part in _split(value, ";"):
        part = tables.SKILL_STRIKETHROUGH_RE.sub(r"\2", part, count=1)

        if part in ("", "-"):
            continue
        elif match := tables.SKILL_RE.match(part):
            skills[match.group(1)] = int(match.group(2))
        elif match := tables.SKILL_TWO_CONDITIONS_RE.match(part):
            skills[match.group(1)] = {
                "base": int(match.group(2)),
                match.group(4): int(match.group(3)),
                match.group(6): int(match.group(5)),
            }
        elif match := tables.SKILL_CONDITION_RE.match(part):
            skills[match.group(1)] = {
                "base": int(match.group(2)),
                match.group(4): int(match.group(3)),
            }
        else:
            raise UnparsedPattern("skill component", part)
    return skills


def parse_feats(value: str) -> list[str]:
    """Split feats, dropping bonus-feat markers and duplicates."""
    value = apply_rewrites(value, tables.FEAT_REWRITES)
    value = rewrite_until_stable(value, tables.PAREN_SEMICOLON_RE, r"\1,")

    feats: list[str] = []
    for part in _split(value, ";"):
        part = _TRAILING_PERIOD_RE.sub("", part, count=1)
        part = _LEADING_AND_RE.sub("", part, count=1)
        part = _BONUS_FEAT_RE.sub("", part, count=1)
        if part in ("", "-") or part in feats:
            continue
        feats.append(part)
    return feats


# =============================================================================
# Ecology
# =============================================================================

def parse_environment(value: str) -> str:
    return apply_rewrites(value, tables.ENVIRONMENT_REWRITES)


def parse_organization(value: str) -> list[str]:
    value = apply_rewrites(value, tables.ORGANIZATION_REWRITES)
    value = rewrite_until_stable(value, tables.PAREN_SEMICOLON_RE, r"\1 , ")
    value = apply_rewrites(value, tables.ORGANIZATION_SPLIT_REWRITES)

    organizations = []
    for part in _split(value, ";"):
        part = _LEADING_OR_RE.sub("", part, count=1)
        if part in ("", "none"):
            continue
        organizations.append(part)
    return organizations


def parse_challenge_rating(value: str) -> list[str]:
    value = apply_rewrites(value, tables.CHALLENGE_RATING_REWRITES)
    return [part for part in _split(value, ";") if part]


def parse_treasure(value: str) -> list[str]:
    value = apply_rewrites(value, tables.TREASURE_REWRITES)

    treasure = []
    for part in _TREASURE_SPLIT_RE.split(value):
        part = _LEADING_AND_RE.sub("", part.strip(), count=1)
        if part in tables.TREASURE_ABSENT:
            continue
        treasure.append(part)
    return treasure


def parse_alignment(value: str) -> str:
    value = _TRAILING_PERIOD_RE.sub("", value, count=1)
    exception = _lookup(tables.ALIGNMENT_EXCEPTIONS, value)
    return exception if exception is not None else value


def parse_advancement(value: str) -> list[str]:
    if value in tables.ADVANCEMENT_ABSENT:
        return []
    exception = _lookup(tables.ADVANCEMENT_EXCEPTIONS, value)
    if exception is not None:
        return exception
    return _split(value, "; ")


def parse_level_adjustment(value: str) -> str | None:
    if value in tables.LEVEL_ADJUSTMENT_ABSENT:
        return None
    return value


# =============================================================================
# Registry
# =============================================================================

def _field(key: str, parser: Callable[[str], Any]) -> FieldParser:
    """Adapt a single-value parser; empty lists and None omit the key."""
    def handler(value: str, vocabularies: Vocabularies) -> dict[str, Any]:
        result = parser(value)
        if result is None or result == [] or result == {}:
            return {}
        return {key: result}
    return handler


def _fields(parser: Callable[[str], dict[str, Any]]) -> FieldParser:
    def handler(value: str, vocabularies: Vocabularies) -> dict[str, Any]:
        return parser(value)
    return handler


# Known statblock rows, in the order they appear on the page.
FIELD_PARSERS: dict[str, FieldParser] = {
    "size/type": parse_size_type,
    "hit_dice": _fields(parse_hit_dice_field),
    "initiative": _field("initiative", parse_initiative),
    "speed": _field("speed", parse_speed),
    "armor_class": _field("armor_class", parse_armor_class),
    "base_attack/grapple": _fields(parse_base_attack_grapple),
    "attack": _field("attack", parse_attack),
    "full_attack": _field("full_attack", parse_full_attack),
    "space/reach": _fields(parse_space_reach),
    "special_attacks": _field("special_attacks", parse_special_attacks),
    "special_qualities": _field("special_qualities", parse_special_qualities),
    "saves": _field("saves", parse_saves),
    "abilities": _field("abilities", parse_abilities),
    "skills": _field("skills", parse_skills),
    "feats": _field("feats", parse_feats),
    "environment": _field("environment", parse_environment),
    "organization": _field("organization", parse_organization),
    "challenge_rating": _field("challenge_rating", parse_challenge_rating),
    "treasure": _field("treasure", parse_treasure),
    "alignment": _field("alignment", parse_alignment),
    "advancement": _field("advancement", parse_advancement),
    "level_adjustment": _field("level_adjustment", parse_level_adjustment),
}


def parse_field(
    header: str,
    value: str,
    vocabularies: Vocabularies = DEFAULT_VOCABULARIES,
) -> dict[str, Any]:
    """
    Run the parser registered for a statblock row.

    Args:
        header: Normalised row header (e.g. 'armor_class')
        value: Cleaned, lower-cased cell text
        vocabularies: Size/type/subtype vocabularies

    Returns:
        Parsed keys contributed by the row (empty when the row marks absence)

    Raises:
        UnknownStatblockField: If no parser is registered for the header
    """
    parser = FIELD_PARSERS.get(header)
    if parser is None:
        raise UnknownStatblockField(header)
    return parser(value, vocabularies)


__all__ = [
    "FieldParser",
    "FIELD_PARSERS",
    "parse_field",
    "parse_size_type",
    "parse_hit_dice_field",
    "parse_initiative",
    "parse_speed",
    "parse_armor_class",
    "parse_base_attack_grapple",
    "parse_attack",
    "parse_full_attack",
    "parse_space_reach",
    "parse_special_attacks",
    "parse_special_qualities",
    "parse_saves",
    "parse_abilities",
    "parse_skills",
    "parse_feats",
    "parse_environment",
    "parse_organization",
    "parse_challenge_rating",
    "parse_treasure",
    "parse_alignment",
    "parse_advancement",
    "parse_level_adjustment",
]
