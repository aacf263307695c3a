"""
Spell field cleaners.

Each cleaner takes the raw text of one spell field and returns a SpellField
holding the source text next to its structured form. Trailing caveats
("see text", "(D)", "Concentration") become boolean flags; what remains is
normalised through ordered literal rewrites.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

from ..errors import MissingLookup, UnparsedPattern
from ..models import SpellField
from ..rewrites import apply_rewrites
from . import tables

_WHITESPACE_RE = re.compile(r"\s+")


def strip_caveat(text: str, pattern: re.Pattern[str], flag: str, structured: dict[str, Any]) -> str:
    """Remove the first match of ``pattern`` and record ``flag`` when found."""
    match = pattern.search(text)
    if not match:
        return text
    structured[flag] = True
    return text.replace(match.group(0), "", 1).strip()


# =============================================================================
# Name and page
# =============================================================================

def rename(name: str, renames: Mapping[str, str]) -> str:
    """Canonical spell name from the rename table (unchanged when absent)."""
    return renames.get(name, name)


def lookup_page(raw_name: str, pages: Mapping[str, str]) -> str:
    """
    Page reference for a spell.

    Raises:
        MissingLookup: If the spell has no page entry
    """
    if raw_name not in pages:
        raise MissingLookup("page", raw_name)
    return pages[raw_name]


# =============================================================================
# Level
# =============================================================================

def parse_level(text: str) -> SpellField:
    """
    'Sor/Wiz 3, Clr 4' -> {'Sorcerer': 3, 'Wizard': 3, 'Cleric': 4}
    """
    structured: dict[str, int] = {}

    for class_level in text.split(", "):
        parts = _WHITESPACE_RE.split(class_level.strip())
        if len(parts) != 2 or not parts[1].isdigit():
            raise UnparsedPattern("level", class_level)

        classname, level = parts[0], int(parts[1])
        if classname in tables.SHARED_CLASS_LEVELS:
            for shared in tables.SHARED_CLASS_LEVELS[classname]:
                structured[shared] = level
        else:
            structured[tables.CLASS_SHORT_NAMES.get(classname, classname)] = level

    return SpellField(raw=text, structured=structured)


# =============================================================================
# Components
# =============================================================================

def parse_components(text: str) -> SpellField:
    """
    'V, S, M/DF' -> required ['V', 'S', ['M', 'DF']]

    Parenthesised components are optional; '(Brd only)' marks a component
    required only when cast by a bard.
    """
    structured: dict[str, Any] = {"required": []}

    components = text
    if components.endswith(tables.COMPONENTS_SEE_TEXT):
        structured[tables.SEE_DESCRIPTION] = True
        components = components.replace(tables.COMPONENTS_SEE_TEXT, "", 1).strip()

    for component in (part.strip() for part in components.split(", ")):
        if "/" in component:
            structured["required"].append([part.strip() for part in component.split("/")])
        elif tables.BARD_ONLY_MARKER in component:
            component = component.replace(tables.BARD_ONLY_MARKER, "", 1).strip()
            structured["required"].append({
                component: True,
                "condition": {"class": "Bard"},
            })
        elif match := tables.OPTIONAL_COMPONENT_RE.match(component):
            structured.setdefault("optional", []).append(match.group(1))
        else:
            structured["required"].append(component)

    return SpellField(raw=text, structured=structured)


# =============================================================================
# Casting time, range, duration
# =============================================================================

def parse_casting_time(text: str) -> SpellField:
    structured: dict[str, Any] = {}
    value = strip_caveat(text, *tables.SEE_TEXT_CAVEAT, structured)
    structured["value"] = tables.CASTING_TIME_CASES.get(value, value)
    return SpellField(raw=text, structured=structured)


def parse_range(text: str) -> SpellField:
    structured: dict[str, Any] = {}
    value = strip_caveat(text, *tables.SEE_TEXT_CAVEAT, structured)
    value = apply_rewrites(value, tables.RANGE_REWRITES)
    structured["value"] = tables.RANGE_CASES.get(value, value)
    return SpellField(raw=text, structured=structured)


def parse_duration(text: str) -> SpellField:
    """
    Parse a duration.

    '1 round/level (D)' -> {'dismissable': True, 'value': '1 round/lvl'}
    """
    structured: dict[str, Any] = {}

    value = text
    for pattern, flag in tables.DURATION_CAVEATS:
        value = strip_caveat(value, pattern, flag, structured)

    value = apply_rewrites(value, tables.DURATION_REWRITES)
    # Rewrites can expose a trailing "see text".
    value = strip_caveat(value, *tables.SEE_TEXT_CAVEAT, structured)

    structured["value"] = tables.DURATION_CASES.get(value, value)
    return SpellField(raw=text, structured=structured)


__all__ = [
    "strip_caveat",
    "rename",
    "lookup_page",
    "parse_level",
    "parse_components",
    "parse_casting_time",
    "parse_range",
    "parse_duration",
]
