"""
Monster crawl orchestration.

Reads a list of page URLs, fetches each page through the cache, parses its
statblock and collects the records. A page that fails to parse is logged and
dropped; the run carries on with the next page.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from ..errors import ExtractError
from ..fetch import PageFetcher
from ..models import MonsterRecord
from ..vocabulary import DEFAULT_VOCABULARIES, Vocabularies
from .statblock import StatblockParser
from .tables import SKIP_PAGES

logger = logging.getLogger("srd35-extract")


def read_links(path: Path) -> list[str]:
    """Read one URL per line, ignoring blank lines."""
    return [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


class MonsterCrawler:
    """Crawls monster pages into MonsterRecords."""

    def __init__(
        self,
        fetcher: PageFetcher,
        vocabularies: Vocabularies = DEFAULT_VOCABULARIES,
        skip_pages: Iterable[str] = SKIP_PAGES,
    ):
        self.fetcher = fetcher
        self.parser = StatblockParser(vocabularies)
        self.skip_pages = frozenset(skip_pages)

    def crawl_page(self, url: str) -> MonsterRecord:
        """
        Fetch and parse one page.

        Raises:
            ExtractError: If the page cannot be fetched or parsed
        """
        content = self.fetcher.fetch(url)
        return self.parser.parse_page(content, source=url)

    def crawl(self, links: Iterable[str]) -> list[MonsterRecord]:
        """
        Crawl every link in order, skipping known-unparseable pages.

        Returns:
            Records for the pages that parsed completely
        """
        monsters: list[MonsterRecord] = []
        failures = 0

        for link in links:
            link = link.strip()
            if not link or link in self.skip_pages:
                continue

            try:
                monster = self.crawl_page(link)
            except ExtractError as e:
                failures += 1
                logger.warning(f"Failed to create monster [{link}]: {e}", exc_info=True)
                continue

            monsters.append(monster)

        logger.info(f"Crawled {len(monsters)} monsters ({failures} failed)")
        return monsters


def write_monsters(monsters: list[MonsterRecord], out_path: Path) -> None:
    """Write records as a pretty-printed JSON array."""
    data = [monster.to_json() for monster in monsters]
    out_path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


__all__ = ["MonsterCrawler", "read_links", "write_monsters"]
