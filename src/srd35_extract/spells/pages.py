"""
Raw spell extraction from dndsrd.net spell list pages.

Each page lists many spells in one content cell: an ``h6`` heading per spell,
a school line, ``Key: Value`` statblock rows, then description paragraphs and
tables until the next heading. The records produced here are the input of the
spell cleaning pipeline.
"""

from __future__ import annotations

import enum
import logging
import re
from typing import Any, Iterable

from bs4 import BeautifulSoup, NavigableString, Tag

from ..errors import ExtractError, MissingElement, UnparsedPattern
from ..fetch import PageFetcher
from ..text import clean
from .tables import MOJIBAKE_SUBS, PLACEHOLDER_SPELLS

logger = logging.getLogger("srd35-extract")

CONTENT_SELECTORS = (
    "body table tbody tr:nth-child(3) td:nth-child(3)",
    # Parsers that do not synthesise tbody.
    "body table tr:nth-child(3) td:nth-child(3)",
)
STAT_BLOCK_CLASS = "stat-block"

_SCHOOL_RE = re.compile(r"^([^(\[]+)(?:\(([^\[]+)\))?(?:\[(.+)\])?$")
_ROW_RE = re.compile(r"^([^:]+)\s*:\s*(.+)$")
_SPACES_RE = re.compile(r"\s+")


class _State(enum.Enum):
    OPEN = "open"
    SCHOOL = "school"
    SPELLBLOCK = "spellblock"
    DESCRIPTION = "description"


def clean_text(text: str) -> str:
    for old, new in MOJIBAKE_SUBS:
        text = text.replace(old, new)
    return clean(text)


def parse_school(text: str) -> dict[str, Any]:
    """
    Parse a school line.

    'Conjuration (Creation) [Acid]' ->
        {'school': 'Conjuration', 'subschool': 'Creation', 'descriptors': ['Acid']}

    Raises:
        UnparsedPattern: If the line is not a school specification
    """
    match = _SCHOOL_RE.match(_SPACES_RE.sub("", text))
    if not match:
        raise UnparsedPattern("school", text)

    school: dict[str, Any] = {"school": match.group(1)}
    if match.group(2):
        school["subschool"] = match.group(2)
    if match.group(3):
        descriptors = [part for part in match.group(3).split(",") if part != "seetext"]
        if descriptors:
            school["descriptors"] = descriptors
    return school


def _row_text(node: Tag) -> str:
    content = node.get_text()
    # Mis-classed rows keep their value in the following sibling.
    if STAT_BLOCK_CLASS not in (node.get("class") or []):
        sibling = node.next_sibling
        if isinstance(sibling, NavigableString):
            content += " " + str(sibling)
        elif isinstance(sibling, Tag):
            content += " " + sibling.get_text()
    return clean_text(content)


def parse_stat_row(node: Tag) -> tuple[str, str]:
    """'Casting Time: 1 standard action' -> ('casting_time', '1 standard action')."""
    content = _row_text(node)
    match = _ROW_RE.match(content)
    if not match:
        raise UnparsedPattern("spellblock row", content)
    key = match.group(1).strip().lower().replace(" ", "_")
    return key, match.group(2).strip()


def find_content_cell(soup: BeautifulSoup, source: str = "") -> Tag:
    for selector in CONTENT_SELECTORS:
        cell = soup.select_one(selector)
        if cell is not None:
            return cell
    raise MissingElement(CONTENT_SELECTORS[0], source)


def extract_spells(html: str | bytes, source: str = "") -> list[dict[str, Any]]:
    """
    Extract raw spell records from one spell list page.

    A spell whose school line or statblock rows cannot be parsed is logged
    and dropped; extraction resumes at the next spell heading.

    Args:
        html: Page markup
        source: Page URL, used in log and error messages

    Returns:
        Raw spell records in page order

    Raises:
        MissingElement: If the page has no spell content cell
    """
    soup = BeautifulSoup(html, "lxml")
    nodes = [node for node in find_content_cell(soup, source).children if isinstance(node, Tag)]

    spells: list[dict[str, Any]] = []
    spell: dict[str, Any] | None = None
    state = _State.OPEN

    index = 0
    while index < len(nodes):
        node = nodes[index]
        index += 1

        try:
            if state is _State.OPEN:
                if node.name != "h6":
                    continue
                name = clean_text(node.get_text())
                if name in PLACEHOLDER_SPELLS:
                    continue
                spell = {"name": name}
                state = _State.SCHOOL

            elif state is _State.SCHOOL:
                if node.name == "h6":
                    raise UnparsedPattern("school", clean_text(node.get_text()))
                if node.name != "p":
                    continue
                spell.update(parse_school(node.get_text()))
                state = _State.SPELLBLOCK

            elif state is _State.SPELLBLOCK:
                if node.name == "h6":
                    # Spell without a description.
                    index -= 1
                    spells.append(spell)
                    spell = None
                    state = _State.OPEN
                    continue
                if node.name == "p":
                    # First description paragraph; handle it in the next state.
                    index -= 1
                    state = _State.DESCRIPTION
                    continue
                if not node.get_text().strip():
                    continue
                key, value = parse_stat_row(node)
                spell[key] = value

            elif state is _State.DESCRIPTION:
                if node.name == "h6":
                    index -= 1
                    spells.append(spell)
                    spell = None
                    state = _State.OPEN
                    continue
                if node.name == "table":
                    spell.setdefault("additional_tables", []).append(node.decode_contents())
                    continue
                spell.setdefault("description", []).append(clean_text(node.get_text()))

        except ExtractError as e:
            logger.warning(f"Dropping spell [{spell.get('name') if spell else '?'}] from {source or 'page'}: {e}")
            # A heading that failed mid-spell opens the next spell.
            if node.name == "h6" and state is not _State.OPEN:
                index -= 1
            spell = None
            state = _State.OPEN

    if spell is not None and state in (_State.SPELLBLOCK, _State.DESCRIPTION):
        spells.append(spell)

    return spells


def crawl_spell_pages(links: Iterable[str], fetcher: PageFetcher) -> list[dict[str, Any]]:
    """
    Fetch every spell list page and concatenate the extracted records.

    Pages that cannot be fetched or lack the content cell are logged and skipped.
    """
    spells: list[dict[str, Any]] = []
    for link in links:
        link = link.strip()
        if not link:
            continue
        try:
            page_spells = extract_spells(fetcher.fetch(link), source=link)
        except ExtractError as e:
            logger.warning(f"Failed to extract spells [{link}]: {e}", exc_info=True)
            continue
        logger.debug(f"Extracted {len(page_spells)} spells from {link}")
        spells.extend(page_spells)

    logger.info(f"Extracted {len(spells)} spells")
    return spells


__all__ = [
    "parse_school",
    "parse_stat_row",
    "find_content_cell",
    "extract_spells",
    "crawl_spell_pages",
]
