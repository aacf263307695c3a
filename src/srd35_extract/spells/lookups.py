"""
Tab-separated lookup tables for the spell pipeline.

Both files hold one ``name<TAB>value`` pair per line; blank lines are ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from ..errors import ExtractError

logger = logging.getLogger("srd35-extract")


class LookupFileError(ExtractError):
    """A lookup file is missing or malformed."""


def load_lookup(path: Path) -> Mapping[str, str]:
    """
    Load a tab-separated name -> value table.

    Args:
        path: Lookup file

    Returns:
        Read-only mapping of stripped names to stripped values

    Raises:
        LookupFileError: If the file cannot be read or a line has no value
    """
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise LookupFileError(f"Cannot read lookup file {path}: {e}") from e

    table: dict[str, str] = {}
    for number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        parts = [part.strip() for part in line.split("\t")]
        if len(parts) < 2:
            raise LookupFileError(f"{path}:{number}: expected 'name<TAB>value', got '{line}'")
        table[parts[0]] = parts[1]

    logger.debug(f"Loaded {len(table)} entries from {path}")
    return MappingProxyType(table)


def load_pages(path: Path) -> Mapping[str, str]:
    """Spell name -> SRD page reference."""
    return load_lookup(path)


def load_renames(path: Path) -> Mapping[str, str]:
    """Spell name -> canonical spell name."""
    return load_lookup(path)


__all__ = ["LookupFileError", "load_lookup", "load_pages", "load_renames"]
