"""
Literal tables for the spell field cleaners.
"""

import re

from ..rewrites import Rewrite, every

SEE_DESCRIPTION = "see_description"
DISMISSABLE = "dismissable"
CONCENTRATION = "concentration"

CLASS_SHORT_NAMES: dict[str, str] = {
    "Brd": "Bard",
    "Clr": "Cleric",
    "Drd": "Druid",
    "Pal": "Paladin",
    "Rgr": "Ranger",
    "Sor": "Sorcerer",
    "Wiz": "Wizard",
}

# Level entries that grant the spell to several classes at once.
SHARED_CLASS_LEVELS: dict[str, tuple[str, ...]] = {
    "Sor/Wiz": ("Sorcerer", "Wizard"),
}

# =============================================================================
# Components
# =============================================================================

COMPONENTS_SEE_TEXT = "; see text"
BARD_ONLY_MARKER = " (Brd only)"
OPTIONAL_COMPONENT_RE = re.compile(r"^\(([^\)]+)\)$")

# =============================================================================
# Caveats
# =============================================================================

SEE_TEXT_CAVEAT = (re.compile(r"(?:; | or )?see text$", re.IGNORECASE), SEE_DESCRIPTION)

# Stripped from durations in order; each sets its flag when found.
DURATION_CAVEATS: tuple[tuple[re.Pattern[str], str], ...] = (
    SEE_TEXT_CAVEAT,
    (re.compile(r"; see text for cause fear$", re.IGNORECASE), SEE_DESCRIPTION),
    (re.compile(r"\s+\(D\)"), DISMISSABLE),
    (re.compile(r"\s+or until discharged", re.IGNORECASE), DISMISSABLE),
    (re.compile(r"\s+or less", re.IGNORECASE), SEE_DESCRIPTION),
    (
        re.compile(
            r"\s+or until (completed|expended|used|you return to your body|all beams are exhausted)",
            re.IGNORECASE,
        ),
        SEE_DESCRIPTION,
    ),
    (re.compile(r"^Concentration,?\s*", re.IGNORECASE), CONCENTRATION),
)

# =============================================================================
# Casting time
# =============================================================================

CASTING_TIME_CASES: dict[str, str] = {
    "One minute": "1 minute",
    "At least 10 minutes": ">= 10 minutes",
    "1 minute or longer": ">= 1 minute",
    "1 minute/lb. created": "1 min/lb",
}

# =============================================================================
# Range
# =============================================================================

RANGE_REWRITES: tuple[Rewrite, ...] = (
    every(re.compile(r"ft\.", re.IGNORECASE), "feet"),
    every(re.compile(r"one", re.IGNORECASE), "1"),
)

RANGE_CASES: dict[str, str] = {
    "Long (400 feet + 40 feet/level)": "Long",
    "Medium (100 feet + 10 feet/level)": "Medium",
    "Medium (100 feet + 10 feet level)": "Medium",
    "Close (25 feet + 5 feet/2 levels)": "Close",
    "Close (25 feet + 5 feet/2 levels)/ 100 feet": "Close",
    "Anywhere within the area to be warded": "In Warded Area",
    "Up to 10 feet/level": "<= 10 feet/level",
    "Personal and touch": "Personal and Touch",
    "Personal or close (25 feet + 5 feet/2 levels)": "Personal or Close",
    "Personal or touch": "Personal or Touch",
}

# =============================================================================
# Duration
# =============================================================================

DURATION_REWRITES: tuple[Rewrite, ...] = (
    every(re.compile(r"one", re.IGNORECASE), "1"),
    every(re.compile(r"two", re.IGNORECASE), "2"),
    every(re.compile(r"seven", re.IGNORECASE), "7"),
    every(re.compile(r"sixty", re.IGNORECASE), "60"),
    every("min./", "min/"),
    every("minute/", "min/"),
    every("/ level", "/lvl"),
    every("/level", "/lvl"),
    every("hour/", "hr/"),
    every("caster level", "lvl"),
    every(" /", "/"),
    every("up to ", ""),
    every(re.compile(r"^\+ (\d)"), r"+\1"),
    every(" (apparent time)", ""),
    every(" plus 12 hours", ""),
    every(", then", "; then"),
    every("Permanent until discharged", "Until Triggered"),
    every(" (1 round)", ""),
    every(" (1d4 rounds)", ""),
    every(" (1d6 rounds)", ""),
    every("(1 round/lvl) or instantaneous", "Instantaneous or 1 round/lvl"),
    every("(maximum 10 rounds)", "10 rounds"),
    every("1 usage per 2 levels", "1 usage/(2 lvl)"),
    every("round per three levels", "round/(3 lvl)"),
    every("(4 rounds)", "4 rounds"),
    every(", whichever comes first", ""),
    every("1d4 rounds or 1 round", "1 or 1d4 rounds"),
    every(" or concentration (1 round/lvl)", " or 1 round/lvl"),
    every("Instantaneous/1 hour", "Instantaneous; 1 hour"),
    every("1 round/lvl and concentration + 3 rounds", "1 round/lvl; +3 rounds"),
    every("30 minutes and 2d6 rounds", "30 minutes; 2d6 rounds"),
    every("min.", "minute"),
)

DURATION_CASES: dict[str, str] = {
    "1d4+1 rounds, or 1d4+1 rounds after creatures leave the smoke cloud": "1d4+1 rounds",
    "IInstantaneous/10 minutes per HD of subject": "Instantaneous; 10 min/HD",
    "No more than 1 hr/lvl (destination is reached)": "1 hr/lvl",
    "Permanent; until released or 1d4 days + 1 day/lvl": "Permanent until discharged; 1d4 days + 1 day/lvl",
    "Until expended or 10 min/lvl": "10 min/lvl or until expended",
    "Until landing or 1 round/lvl": "1 round/lvl or until landed",
    "Up to 1 round/lvl": "Up to 1 round/lvl",
}

# =============================================================================
# Spell list pages
# =============================================================================

# Placeholder headings on the dndsrd.net spell list pages.
PLACEHOLDER_SPELLS = frozenset({
    "Greater (Spell Name)",
    "Lesser (Spell Name)",
    "Mass (Spell Name)",
})

MOJIBAKE_SUBS: tuple[tuple[str, str], ...] = (
    ("â€™", "'"),
)
