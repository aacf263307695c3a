"""
Monster statblock extraction from dnd-wiki.org SRD pages.
"""

from .crawler import MonsterCrawler, read_links, write_monsters
from .fields import FIELD_PARSERS, parse_field
from .statblock import StatblockParser
from .tables import SKIP_PAGES

__all__ = [
    "MonsterCrawler",
    "StatblockParser",
    "FIELD_PARSERS",
    "SKIP_PAGES",
    "parse_field",
    "read_links",
    "write_monsters",
]
