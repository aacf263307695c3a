"""
Pytest configuration and fixtures for srd35-extract tests.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing srd35_extract
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


class FakeFetcher:
    """In-memory stand-in for PageFetcher keyed by URL."""

    def __init__(self, pages: dict):
        self.pages = pages
        self.requested: list[str] = []

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return None

    def fetch(self, url: str) -> bytes:
        from srd35_extract.errors import FetchError

        self.requested.append(url)
        page = self.pages.get(url)
        if page is None:
            raise FetchError(f"HTTP error fetching {url}: 404")
        return page.encode("utf-8") if isinstance(page, str) else page


@pytest.fixture
def fake_fetcher_factory():
    """Build a FakeFetcher from a url -> html mapping."""
    return FakeFetcher


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every SRD35_* variable from the environment."""
    for name in (
        "SRD35_CACHE_DIR",
        "SRD35_LOG_LEVEL",
        "SRD35_HTTP_TIMEOUT",
        "SRD35_INSECURE_HOSTS",
        "SRD35_SPELL_PAGES",
        "SRD35_SPELL_RENAMES",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


GOBLIN_PAGE = """<!DOCTYPE html>
<html>
<head><title>SRD:Goblin - D&amp;D Wiki</title></head>
<body>
<h1 id="firstHeading" class="firstHeading">SRD:Goblin</h1>
<div id="mw-content-text">
<table class="monstats">
<tr><th></th><th>Goblin, 1st-Level Warrior</th></tr>
<tr><th>Size/Type:</th><td>Small Humanoid (Goblinoid)</td></tr>
<tr><th>Hit Dice:</th><td>1d8+1 (5 hp)</td></tr>
<tr><th>Initiative:</th><td>+1</td></tr>
<tr><th>Speed:</th><td>30 ft. (6 squares)</td></tr>
<tr><th>Armor Class:</th><td>15 (+1 size, +1 Dex, +2 leather armor, +1 light shield), touch 12, flat-footed 14</td></tr>
<tr><th>Base Attack/Grapple:</th><td>+1/&#8211;3</td></tr>
<tr><th>Attack:</th><td>Morningstar +2 melee (1d6) or javelin +3 ranged (1d4)</td></tr>
<tr><th>Full Attack:</th><td>Morningstar +2 melee (1d6) or javelin +3 ranged (1d4)</td></tr>
<tr><th>Space/Reach:</th><td>5 ft./5 ft.</td></tr>
<tr><th>Special Attacks:</th><td>&#8212;</td></tr>
<tr><th>Special Qualities:</th><td>Darkvision 60 ft.</td></tr>
<tr><th>Saves:</th><td>Fort +3, Ref +1, Will &#8722;1</td></tr>
<tr><th>Abilities:</th><td>Str 11, Dex 13, Con 12, Int 10, Wis 9, Cha 6</td></tr>
<tr><th>Skills:</th><td>Hide +5, Listen +2, Move Silently +5, Ride +4, Spot +2</td></tr>
<tr><th>Feats:</th><td>Alertness</td></tr>
<tr><th>Environment:</th><td>Temperate plains</td></tr>
<tr><th>Organization:</th><td>Gang (4&#8211;9), band (10&#8211;100), or tribe (40&#8211;400)</td></tr>
<tr><th>Challenge Rating:</th><td>1/3</td></tr>
<tr><th>Treasure:</th><td>Standard</td></tr>
<tr><th>Alignment:</th><td>Usually neutral evil</td></tr>
<tr><th>Advancement:</th><td>By character class</td></tr>
<tr><th>Level Adjustment:</th><td>+0</td></tr>
</table>
<p>Goblins are small humanoids that many consider little more than a nuisance.</p>
</div>
</body>
</html>
"""


@pytest.fixture
def goblin_page() -> str:
    return GOBLIN_PAGE
