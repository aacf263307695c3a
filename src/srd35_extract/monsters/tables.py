"""
Literal tables for the monster statblock parsers.

The dnd-wiki.org corpus is fixed, so the one-off fix-ups below are a permanent
part of the parser. Tables are ordered; rewrites run top to bottom.
"""

import re

from ..rewrites import Rewrite, every, first

# Pages that cannot be parsed as a single statblock.
SKIP_PAGES: frozenset[str] = frozenset({
    # Race
    "https://dnd-wiki.org/wiki/SRD:Lizardfolk",
    # Many strike-throughs
    "https://dnd-wiki.org/wiki/SRD:Blue",
    "https://dnd-wiki.org/wiki/SRD:Deinonychus",
    "https://dnd-wiki.org/wiki/SRD:Gelatinous_Cube",
    "https://dnd-wiki.org/wiki/SRD:Megaraptor",
    # Multiple disjunctions in statblock
    "https://dnd-wiki.org/wiki/SRD:Ghaele",
    # Multiple variants in one creature
    "https://dnd-wiki.org/wiki/SRD:Large_Animated_Object",
    "https://dnd-wiki.org/wiki/SRD:Huge_Animated_Object",
    "https://dnd-wiki.org/wiki/SRD:Colossal_Animated_Object",
    "https://dnd-wiki.org/wiki/SRD:Gargantuan_Animated_Object",
    # Too many exceptions
    "https://dnd-wiki.org/wiki/SRD:Psicrystal",
})

# =============================================================================
# Hit dice
# =============================================================================

HIT_DICE_REWRITES: tuple[Rewrite, ...] = (
    first(re.compile(r"\s+\(\d+\s+hp\)$"), ""),
    every(re.compile(r"(\d+/\d+)\s+"), r"(\1)"),
    every(re.compile(r"d(\d+)\s+\+\s+(\d+)$"), r"d\1+\2"),
    every(re.compile(r"\s+plus\s+"), " + "),
    every(re.compile(r"(\d+d\d+)\+(\d+d\d+)"), r"\1 + \2"),
)

# =============================================================================
# Speed
# =============================================================================

SPEED_REWRITES: tuple[Rewrite, ...] = (
    every(re.compile(r"\s+\(\d+\s+squares?(; can't run)?\)"), ""),
    every(re.compile(r"\s*\(can't run\)"), ""),
    every(re.compile(r"\s+ft(\.)?"), ""),
    every(";", ","),
)

# Movement modes with a rate; first match wins.
SPEED_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^base\s+speed\s+(\d+)$"), "base"),
    (re.compile(r"^base\s+land\s+speed\s+(\d+)$"), "base"),
    (re.compile(r"^climb\s+(\d+)$"), "climb"),
    (re.compile(r"^swim\s+(\d+)$"), "swim"),
    (re.compile(r"^swim\s+speed\s+(\d+)$"), "swim"),
    (re.compile(r"^burrow\s+(\d+)$"), "burrow"),
    (re.compile(r"^fly\s+(\d+)$"), "fly"),
    (re.compile(r"^(\d+)\s+wheels$"), "wheels"),
    (re.compile(r"^(\d+)\s+legs$"), "legs"),
    (re.compile(r"^(\d+)\s+multiple\s+legs$"), "multiple_legs"),
    (re.compile(r"^(\d+)$"), "base"),
)

# Armour-conditional speeds that only appear once each.
SPEED_EXCEPTIONS: tuple[tuple[str, dict], ...] = (
    ("base fly speed 20 (perfect)", {"fly": 20, "fly_type": "perfect"}),
    ("fly 15 (perfect) in chainmail", {"chainmail": {"fly": 15, "fly_type": "perfect"}}),
    ("swim 30 in breastplate", {"breastplate": {"swim": 30}}),
    ("fly 40 (average) in plate barding", {"plate barding": {"fly": 40, "fly_type": "average"}}),
)

# =============================================================================
# Armor class
# =============================================================================

ARMOR_CLASS_REWRITES: tuple[Rewrite, ...] = (
    first(",,", ","),
    first(re.compile(r"^ac\s+"), ""),
)

# Labelled bonuses, checked in priority order before the generic label rule.
ARMOR_CLASS_MODIFIERS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^([+\-]?\d+)\s+size$"), "size"),
    (re.compile(r"^([+\-]?\d+)\s+dex$"), "dex"),
    (re.compile(r"^([+\-]?\d+)\s+natural(\s+armor)?$"), "natural"),
    (re.compile(r"^([+\-]?\d+)\s+deflection$"), "deflection"),
    (re.compile(r"^([+\-]?\d+)\s+dodge$"), "dodge"),
    (re.compile(r"^([+\-]?\d+)\s+insight$"), "insight"),
)

ARMOR_CLASS_MODIFIER_EXCEPTIONS: tuple[tuple[str, dict], ...] = (
    ("ring of protection +1", {"ring of protection +1": 1}),
)

# Rows whose punctuation is broken in the source.
ARMOR_CLASS_EXCEPTIONS: tuple[tuple[str, dict], ...] = (
    (
        "14 (-1 size, +5 natural), touch 9, flat-footed - (see text)",
        {"total": 14, "touch": 9, "mods": {"size": -1, "natural": 5}},
    ),
    (
        "14 (+2 dex, +2 size, touch 14, flat-footed 12",
        {"total": 14, "touch": 14, "flat-footed": 12, "mods": {"dex": 2, "size": 2}},
    ),
    (
        "23 (+1 dex, +6 natural, +4 scale mail, +2 heavy shield, touch 11, flat-footed 22",
        {
            "total": 23,
            "touch": 11,
            "flat-footed": 22,
            "mods": {"dex": 1, "natural": 6, "scale mail": 4, "heavy shield": 2},
        },
    ),
)

# =============================================================================
# Base attack / grapple
# =============================================================================

BASE_ATTACK_EXCEPTIONS: tuple[tuple[str, dict], ...] = (
    # Stirge
    ("+1/-11 (+1 when attached)", {"base_attack": 1, "grapple": -11}),
)

# =============================================================================
# Attacks
# =============================================================================

ATTACK_REWRITES: tuple[Rewrite, ...] = (
    every("3d6 sonic or 3d6 electricity", "3d6 sonic/electricity"),
    every("*", ""),
)

FULL_ATTACK_REWRITES: tuple[Rewrite, ...] = (
    every("3d6 sonic or 3d6 electricity", "3d6 sonic/electricity"),
    every(re.compile(r"^\+2 slams"), "2 slams"),
    every("*", ""),
    every(";", " or "),
)

# =============================================================================
# Space / reach
# =============================================================================

SPACE_REWRITES: tuple[Rewrite, ...] = (
    every(" (4 squares)", ""),
    every("2-1/2 ft", "2.5 ft"),
    every(re.compile(r"\s+ft\s*$"), ""),
)

REACH_REWRITES: tuple[Rewrite, ...] = (
    every("ft.", "ft"),
    every("15ft", "15 ft"),
)

# =============================================================================
# Special attacks / qualities
# =============================================================================

SPECIAL_ATTACK_REWRITES: tuple[Rewrite, ...] = (
    every("paralyis", "paralysis"),
    every("psi-like abilities)", "psi-like abilities"),
)

# Spelling fix-ups, then resistance and immunity prose rewritten into
# ';'-separated canonical tags. Longer phrases precede their prefixes.
SPECIAL_QUALITY_REWRITES: tuple[Rewrite, ...] = (
    every("60ft", "60 ft"),
    every("lowlight", "low-light"),
    every("see in darkness", "darkvision"),
    every("twoweapon", "two-weapon"),

    first("resistance to electricity 10, fire 10, and sonic 10", "electricity resistance (10) ; fire resistance (10) ; sonic resistance (10)"),
    first("resistance to acid 10, cold 10, and electricity 10", "acid resistance (10) ; cold resistance (10) ; electricity resistance (10)"),
    first("resistance to acid 5, cold 5, and electricity 5", "acid resistance (5) ; cold resistance (5) ; electricity resistance (5)"),
    first("resistance to cold 5, electricity 5, and fire 5", "cold resistance (5) ; electricity resistance (5) ; fire resistance (5)"),
    first("resistance to acid, cold, and electricity 5", "acid resistance (5) ; cold resistance (5) ; electricity resistance (5)"),
    first("resistance to acid 10, cold 10, and fire 10", "acid resistance (10) ; cold resistance (10) ; fire resistance (10)"),
    first("resistance to cold 10 and electricity 10", "cold resistance (10) ; electricity resistance (10)"),
    first("resistance to electricity 10 and fire 10", "electricity resistance (10) ; fire resistance (10)"),
    first("resistance to cold 10 and sonic 10", "cold resistance (10) ; sonic resistance (10)"),
    first("resistance to acid 10 and cold 10", "acid resistance (10) ; cold resistance (10)"),
    first("resistance to acid 10 and fire 10", "acid resistance (10) ; fire resistance (10)"),
    first("resistance to cold 10 and fire 10", "cold resistance (10) ; fire resistance (10)"),
    first("resistance to cold, and fire 5", "cold resistance (5) ; fire resistance (5)"),
    first("resistance to cold and fire 5", "cold resistance (5) ; fire resistance (5)"),
    first("resistance to electricity 10", "electricity resistance (10)"),
    first("resistance to electricity 15", "electricity resistance (15)"),
    first("resistance to cold 10", "cold resistance (10)"),
    first("resistance to fire 10", "fire resistance (10)"),
    first("resistance to fire 5", "fire resistance (5)"),
    first("resistance to charm", "charm resistance"),

    first("immunity to fire, poison, disease, energy drain, and ability damage", "fire immunity ; poison immunity ; disease immunity ; energy drain immunity ; ability damage immunity"),
    first("immune to cold, electricity, polymorph, and mind-affecting attacks", "cold immunity ; electricity immunity ; polymorph immunity ; mind-affecting attack immunity"),
    first("immunity to fire, cold, charm, sleep, and fear", "fire immunity ; cold immunity ; charm immunity ; sleep immunity ; fear immunity"),
    first("immunity to critical hits and transformation", "critical hit immunity ; transformation immunity"),
    first("immunity to poison, petrification, and cold", "poison immunity ; petrification immunity ; cold immunity"),
    first("immunity to poison, charm, and compulsion", "poison immunity ; charm immunity ; compulsion immunity"),
    first("immunity to electricity, fire, and poison", "electricity immunity ; fire immunity ; poison immunity"),
    first("immunity to acid, cold, and petrification", "acid immunity ; cold immunity ; petrification immunity"),
    first("immunity to acid, electricity, and poison", "acid immunity ; electricity immunity ; poison immunity"),
    first("immunity to electricity and petrification", "electricity immunity ; petrification immunity"),
    first("immunity to fire, sleep, and paralysis", "fire immunity ; sleep immunity ; paralysis immunity"),
    first("immunity to sleep and charm effects", "sleep immunity ; charm effect immunity"),
    first("immunity to electricity and poison", "electricity immunity ; poison immunity"),
    first("immunity to sleep and paralysis", "sleep immunity ; paralysis immunity"),
    first("immunity to fire and poison", "fire immunity ; poison immunity"),
    first("immunity to fire and cold", "fire immunity ; cold immunity"),
    first("immunity to cold and fire", "cold immunity ; fire immunity"),
    first("immune to weapon damage", "weapon damage immunity"),
    first("immunity to electricity", "electricity immunity"),
    first("immunity to acid", "acid immunity"),
    first("immunity to cold", "cold immunity"),
    first("immunity to fire", "fire immunity"),
    first("immunity to magic", "magic immunity"),
    first("immunity to poison", "poison immunity"),
    first("immunity to psionics", "psionics immunity"),

    every(re.compile(r"\bdr\s+(\d+)/\s*"), r"damage reduction \1/"),
    every(re.compile(r"\bsr\s+(\d+)"), r" ; spell resistance (\1) ; "),
    every(re.compile(r"spell resistance\s+(\d+)"), r" ; spell resistance (\1) ; "),
    every(" ft.", " ft"),
    every(" ft", ""),
    every(",", ";"),
)

SPECIAL_QUALITY_ABSENT = frozenset({"", "-", "also see text", "none"})
SPECIAL_ATTACK_ABSENT = frozenset({"", "-", "none", "see text"})

# =============================================================================
# Saves / abilities
# =============================================================================

SAVES_RE = re.compile(
    r"^fort\s+([+\-]\d+)\*?, ref\s+([+\-]\d*)\*?, will\s+([+\-]\d+)\*?$"
)
SAVES_POISON_RE = re.compile(
    r"^fort\s+([+\-]\d+)\*? \(([+\-]\d+) against poison\), ref\s+([+\-]\d*)\*?, will\s+([+\-]\d+)\*?$"
)

ABILITY_REWRITES: tuple[Rewrite, ...] = (
    every(" (with gloves)", ""),
    every(" (with headband)", ""),
    every(" -, ", " 0, "),
    every(re.compile(r" -$"), " 0"),
    every(" , ", " 0, "),
    every("*", ""),
)

ABILITIES_RE = re.compile(
    r"^str (\d+), dex (\d+), con (\d+), int (\d+), wis (\d+), cha (\d+)$"
)
ABILITY_NAMES = ("strength", "dexterity", "constitution", "intelligence", "wisdom", "charisma")

# =============================================================================
# Skills / feats
# =============================================================================

# Matches a ';' still inside an open parenthesis.
PAREN_SEMICOLON_RE = re.compile(r"(\([^\)]+);")

SKILL_REWRITES: tuple[Rewrite, ...] = (
    every("move silently +10, (+3 following tracks)", "move silently +10 (+3 following tracks)"),
    every(",", ";"),
    every("*", ""),
    every(re.compile(r"\+\s+(\d)"), r"+\1"),
)

# Applied after semicolons inside parentheses are restored to commas.
SKILL_SPLIT_REWRITES: tuple[Rewrite, ...] = (
    every("spot +16 survival +16", "spot +16 ; survival +16"),
    every("spot +11 swim +12", "spot +11 ; swim +12"),
)

# Strike-through corrections leave two numbers; keep the second.
SKILL_STRIKETHROUGH_RE = re.compile(r"([+\-]\d+)\s+([+\-]\d+)$")
SKILL_RE = re.compile(r"^(.+) ([+\-]?\d+)$")
SKILL_TWO_CONDITIONS_RE = re.compile(r"^(.+) ([+\-]?\d+) \(([+\-]?\d+) (.+), ([+\-]?\d+) (.+)\)$")
SKILL_CONDITION_RE = re.compile(r"^(.+) ([+\-]?\d+) \(([+\-]?\d+) (.+)\)$")

FEAT_REWRITES: tuple[Rewrite, ...] = (
    every("blind fight", "blind-fight"),
    every(",", ";"),
    every(" plus human extra feat", "; human extra feat"),
)

# =============================================================================
# Environment / organization / challenge rating / treasure
# =============================================================================

ENVIRONMENT_REWRITES: tuple[Rewrite, ...] = (
    first(re.compile(r"\s*\.$"), ""),
    first(re.compile(r"^an?\s+"), ""),
    every(re.compile(r"(\S)\("), r"\1 ("),
)

ORGANIZATION_REWRITES: tuple[Rewrite, ...] = (
    every(" hyena; ", " hyena -- "),
    every("solitary solitary", "solitary"),
    every("solitary (1)", "solitary"),
    every(",", ";"),
    every(".", ""),
)

ORGANIZATION_SPLIT_REWRITES: tuple[Rewrite, ...] = (
    every(") or ", ") ; "),
    every(re.compile(r"^(\S+) or "), r"\1 ; "),
    every(re.compile(r"\s+,\s+"), ", "),
)

CHALLENGE_RATING_REWRITES: tuple[Rewrite, ...] = (
    first(" (see text)", ""),
    first("(normal)", ""),
    first(") or ", ") ; "),
    first("4 (5 with irresistible dance)", "4 ; 5 (with irresistible dance)"),
)

TREASURE_REWRITES: tuple[Rewrite, ...] = (
    every("1/10th", "1/10"),
    every(re.compile(r"\bplus\b"), " ; "),
    every(re.compile(r"\band\b"), " ; "),
    every(" (+5 str=bonus)", ""),
    every("50%", "1/2"),
    every("double", "2x"),
    every("triple", "3x"),
    every(re.compile(r"\bhalf "), "1/2 "),
    every(" (including equipment)", ""),
    every(re.compile(r" \(including (.+)\)"), r" ; \1"),
    every("possessions noted below", ""),
)

TREASURE_ABSENT = frozenset({"", "none", "possessions noted below"})

# =============================================================================
# Alignment / advancement / level adjustment
# =============================================================================

ALIGNMENT_EXCEPTIONS: tuple[tuple[str, str], ...] = (
    ("usually chaotic good(wood: usually neutral)", "usually chaotic good (wood: usually neutral)"),
)

ADVANCEMENT_ABSENT = frozenset({"-", "--", "no", "none", "by character class", "special (see below)"})

ADVANCEMENT_EXCEPTIONS: tuple[tuple[str, list[str]], ...] = (
    ("3-5 hd (medium), 6-10 hd (large), or by character class", ["3-5 hd (medium)", "6-10 hd (large)"]),
)

LEVEL_ADJUSTMENT_ABSENT = frozenset({"-", "- (improved familiar)"})
