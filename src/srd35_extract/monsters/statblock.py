"""
Monster page parsing.

Locates the page title and the ``monstats`` statblock table in a dnd-wiki.org
SRD page and runs every statblock row through its field parser.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from ..errors import MissingElement
from ..models import MonsterRecord, Statblock
from ..text import clean, normalize_header
from ..vocabulary import DEFAULT_VOCABULARIES, Vocabularies
from .fields import parse_field

logger = logging.getLogger("srd35-extract")

TITLE_SELECTOR = "h1#firstHeading.firstHeading"
STATBLOCK_SELECTORS = (
    "div#mw-content-text > table.monstats",
    # Newer MediaWiki wraps page content in a parser-output div.
    "div#mw-content-text > div.mw-parser-output > table.monstats",
)
HEADER_KEY = "__header__"
NAME_PREFIX = "SRD:"


class StatblockParser:
    """Turns statblock tables into raw/parsed pairs."""

    def __init__(self, vocabularies: Vocabularies = DEFAULT_VOCABULARIES):
        self.vocabularies = vocabularies

    def parse_rows(self, rows: list[tuple[str, str]], caption: str | None = None) -> Statblock:
        """
        Parse (header, cell) pairs.

        Args:
            rows: Header and cell text as extracted from the table
            caption: Text of the table's caption cell, if any

        Returns:
            Statblock with cleaned raw text and parsed values

        Raises:
            UnknownStatblockField: If a row header is not a known field
            ExtractError: If any field value cannot be parsed
        """
        statblock = Statblock()
        if caption is not None:
            statblock.raw[HEADER_KEY] = clean(caption)

        for header_text, cell_text in rows:
            header = normalize_header(header_text)
            value = clean(cell_text.lower())
            statblock.raw[header] = value
            statblock.parsed.update(parse_field(header, value, self.vocabularies))

        return statblock

    def parse_table(self, table: Tag) -> Statblock:
        """Parse a ``table.monstats`` element; the first row holds the caption."""
        caption: str | None = None
        rows: list[tuple[str, str]] = []

        for index, row in enumerate(table.find_all("tr")):
            if index == 0:
                cells = row.find_all("th")
                if len(cells) > 1:
                    caption = cells[1].get_text()
                continue

            header = row.find("th")
            cell = row.find("td")
            if header is None or cell is None:
                raise MissingElement(f"statblock row th/td: '{clean(row.get_text())}'")
            rows.append((header.get_text(), cell.get_text()))

        return self.parse_rows(rows, caption)

    def parse_page(self, html: str | bytes, source: str = "") -> MonsterRecord:
        """
        Parse a full monster page.

        Args:
            html: Page markup
            source: Page URL, used in error messages

        Returns:
            MonsterRecord; the statblock is None when the page has no table

        Raises:
            MissingElement: If the page has no title heading
        """
        soup = BeautifulSoup(html, "lxml")

        title = soup.select_one(TITLE_SELECTOR)
        if title is None:
            raise MissingElement(TITLE_SELECTOR, source)
        name = title.get_text().strip().removeprefix(NAME_PREFIX)

        table = None
        for selector in STATBLOCK_SELECTORS:
            table = soup.select_one(selector)
            if table is not None:
                break
        if table is None:
            logger.warning(f"No statblock found for '{name}' ({source or 'unknown source'})")
            return MonsterRecord(name=name)

        return MonsterRecord(name=name, statblock=self.parse_table(table))


__all__ = ["StatblockParser", "HEADER_KEY"]
