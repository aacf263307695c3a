"""
Spell record cleaning pipeline.

Applies the name and page lookups and the field cleaners to each raw spell
record. Cleaned fields are replaced in place by their raw/structured pair;
every other key passes through untouched.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Mapping

from ..errors import ExtractError, UnparsedPattern
from ..models import SpellField
from . import fields

logger = logging.getLogger("srd35-extract")

KEY_NAME = "name"
KEY_RAW_NAME = "raw_name"
KEY_PAGE = "page"

# Field cleaners in pipeline order.
FIELD_CLEANERS: tuple[tuple[str, Callable[[str], SpellField]], ...] = (
    ("level", fields.parse_level),
    ("components", fields.parse_components),
    ("casting_time", fields.parse_casting_time),
    ("range", fields.parse_range),
    ("duration", fields.parse_duration),
)


class SpellCleaner:
    """Cleans raw spell records using the page and rename lookups."""

    def __init__(self, pages: Mapping[str, str], renames: Mapping[str, str]):
        self.pages = pages
        self.renames = renames

    def clean(self, spell: dict[str, Any]) -> dict[str, Any]:
        """
        Clean a single spell record.

        Args:
            spell: Raw spell record (not modified)

        Returns:
            New record with name, page and cleaned fields

        Raises:
            MissingLookup: If the spell has no page entry
            UnparsedPattern: If a required field is missing or malformed
        """
        record = dict(spell)

        raw_name = record.get(KEY_NAME)
        if not isinstance(raw_name, str) or not raw_name:
            raise UnparsedPattern(KEY_NAME, repr(raw_name))
        record[KEY_NAME] = fields.rename(raw_name, self.renames)
        record[KEY_RAW_NAME] = raw_name
        record[KEY_PAGE] = fields.lookup_page(raw_name, self.pages)

        for key, cleaner in FIELD_CLEANERS:
            text = record.get(key)
            if not isinstance(text, str):
                raise UnparsedPattern(key, f"missing for spell '{raw_name}'")
            record[key] = cleaner(text).model_dump()

        return record

    def clean_all(self, spells: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """
        Clean every spell, dropping the ones that fail.

        Returns:
            Cleaned records in input order
        """
        cleaned: list[dict[str, Any]] = []
        failures = 0

        for spell in spells:
            try:
                cleaned.append(self.clean(spell))
            except ExtractError as e:
                failures += 1
                logger.warning(f"Failed to clean spell [{spell.get(KEY_NAME)}]: {e}", exc_info=True)

        logger.info(f"Cleaned {len(cleaned)} spells ({failures} failed)")
        return cleaned


def read_spells(path: Path) -> list[dict[str, Any]]:
    """
    Read a JSON array of raw spell records.

    Raises:
        ExtractError: If the file is unreadable or not an array of objects
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ExtractError(f"Cannot read spells from {path}: {e}") from e

    if not isinstance(data, list) or not all(isinstance(spell, dict) for spell in data):
        raise ExtractError(f"{path} must contain a JSON array of spell objects")
    return data


def write_spells(spells: list[dict[str, Any]], out_path: Path) -> None:
    out_path.write_text(json.dumps(spells, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


__all__ = ["SpellCleaner", "FIELD_CLEANERS", "read_spells", "write_spells"]
