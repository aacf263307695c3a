"""
Tests for the monster crawl orchestration.
"""

import json

import httpx

from srd35_extract.fetch import PageFetcher
from srd35_extract.models import MonsterRecord
from srd35_extract.monsters.crawler import MonsterCrawler, read_links, write_monsters
from srd35_extract.monsters.tables import SKIP_PAGES

GOBLIN_URL = "https://dnd-wiki.org/wiki/SRD:Goblin"
MISSING_URL = "https://dnd-wiki.org/wiki/SRD:Missing"
UNTITLED_URL = "https://dnd-wiki.org/wiki/SRD:Untitled"
SKIPPED_URL = "https://dnd-wiki.org/wiki/SRD:Psicrystal"


class TestReadLinks:
    """Tests for read_links()."""

    def test_strips_and_skips_blank_lines(self, tmp_path):
        links_file = tmp_path / "links.txt"
        links_file.write_text(f"{GOBLIN_URL}\n\n  {MISSING_URL}  \n")
        assert read_links(links_file) == [GOBLIN_URL, MISSING_URL]


class TestMonsterCrawler:
    """Tests for MonsterCrawler."""

    def test_skip_list_is_verbatim(self):
        assert SKIPPED_URL in SKIP_PAGES
        assert len(SKIP_PAGES) == 11

    def test_crawl_skips_failures(self, goblin_page, fake_fetcher_factory, caplog):
        fetcher = fake_fetcher_factory({
            GOBLIN_URL: goblin_page,
            UNTITLED_URL: "<html><body></body></html>",
            SKIPPED_URL: goblin_page,
        })
        crawler = MonsterCrawler(fetcher)

        monsters = crawler.crawl([GOBLIN_URL, "", MISSING_URL, UNTITLED_URL, SKIPPED_URL])

        assert [monster.name for monster in monsters] == ["Goblin"]
        assert SKIPPED_URL not in fetcher.requested
        assert fetcher.requested == [GOBLIN_URL, MISSING_URL, UNTITLED_URL]
        assert f"Failed to create monster [{MISSING_URL}]" in caplog.text
        assert f"Failed to create monster [{UNTITLED_URL}]" in caplog.text

    def test_custom_skip_list(self, goblin_page, fake_fetcher_factory):
        fetcher = fake_fetcher_factory({GOBLIN_URL: goblin_page})
        crawler = MonsterCrawler(fetcher, skip_pages=[GOBLIN_URL])
        assert crawler.crawl([GOBLIN_URL]) == []
        assert fetcher.requested == []

    def test_malformed_url_is_skipped(self, tmp_path, goblin_page, caplog):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text=goblin_page))

        with PageFetcher(tmp_path, transport=transport) as fetcher:
            monsters = MonsterCrawler(fetcher).crawl(["http://[bad", GOBLIN_URL])

        assert [monster.name for monster in monsters] == ["Goblin"]
        assert "Failed to create monster [http://[bad]" in caplog.text


class TestWriteMonsters:
    """Tests for write_monsters()."""

    def test_writes_pretty_json(self, tmp_path):
        out_path = tmp_path / "monsters.json"
        write_monsters([MonsterRecord(name="Dragon")], out_path)

        text = out_path.read_text(encoding="utf-8")
        assert json.loads(text) == [{"name": "Dragon"}]
        assert '\n  {\n    "name": "Dragon"' in text
