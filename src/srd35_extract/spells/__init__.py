"""
Spell extraction: raw records from dndsrd.net spell list pages and the
cleaning pipeline that rewrites their fields into raw/structured pairs.
"""

from .cleaner import FIELD_CLEANERS, SpellCleaner, read_spells, write_spells
from .lookups import LookupFileError, load_lookup, load_pages, load_renames
from .pages import crawl_spell_pages, extract_spells

__all__ = [
    "SpellCleaner",
    "FIELD_CLEANERS",
    "read_spells",
    "write_spells",
    "LookupFileError",
    "load_lookup",
    "load_pages",
    "load_renames",
    "crawl_spell_pages",
    "extract_spells",
]
