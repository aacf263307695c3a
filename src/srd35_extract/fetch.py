"""
Page fetcher with a local disk cache.

Pages are stored one file per URL so repeated runs never hit the network for
a page they have already seen. Some SRD mirrors serve broken certificate
chains; hosts listed as insecure are fetched without TLS verification.
"""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlsplit

import httpx

from .config import DEFAULT_INSECURE_HOSTS, DEFAULT_TIMEOUT
from .errors import FetchError

logger = logging.getLogger("srd35-extract")


class PageFetcher:
    """
    Fetch source pages through a whole-file disk cache.

    Usage:
        with PageFetcher(Path("cache")) as fetcher:
            html = fetcher.fetch("https://dnd-wiki.org/wiki/SRD:Goblin")
    """

    def __init__(
        self,
        cache_dir: Path,
        timeout: float = DEFAULT_TIMEOUT,
        insecure_hosts: frozenset[str] | set[str] = frozenset(DEFAULT_INSECURE_HOSTS),
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            cache_dir: Directory holding cached pages
            timeout: HTTP timeout in seconds
            insecure_hosts: Hosts fetched with certificate verification disabled
            transport: Optional httpx transport (used by tests)
        """
        self.cache_dir = cache_dir
        self.timeout = timeout
        self.insecure_hosts = frozenset(host.lower() for host in insecure_hosts)
        self._transport = transport
        self._client: httpx.Client | None = None
        self._insecure_client: httpx.Client | None = None

    def __enter__(self) -> "PageFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close any open HTTP clients."""
        for client in (self._client, self._insecure_client):
            if client is not None:
                client.close()
        self._client = None
        self._insecure_client = None

    # =========================================================================
    # Cache
    # =========================================================================

    def cache_path(self, url: str) -> Path:
        """Deterministic cache file for a URL."""
        # https://dnd-wiki.org/wiki/SRD:Goblin -> https:__dnd-wiki.org_wiki_SRD:Goblin
        return self.cache_dir / url.replace("/", "_")

    def _read_cache(self, url: str) -> bytes | None:
        cache_file = self.cache_path(url)
        if not cache_file.exists():
            return None
        try:
            contents = cache_file.read_bytes()
        except OSError as e:
            raise FetchError(f"Cannot read cache file {cache_file}: {e}") from e
        if not contents.strip():
            logger.warning(f"Empty cache file: {cache_file}, refetching")
            cache_file.unlink()
            return None
        logger.debug(f"Cache hit: {url}")
        return contents

    def _write_cache(self, url: str, contents: bytes) -> None:
        cache_file = self.cache_path(url)
        try:
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            cache_file.write_bytes(contents)
        except OSError as e:
            raise FetchError(f"Cannot write cache file {cache_file}: {e}") from e

    # =========================================================================
    # HTTP
    # =========================================================================

    def _client_for(self, url: str) -> httpx.Client:
        host = (urlsplit(url).hostname or "").lower()
        if host in self.insecure_hosts:
            if self._insecure_client is None:
                self._insecure_client = self._make_client(verify=False)
            return self._insecure_client
        if self._client is None:
            self._client = self._make_client(verify=True)
        return self._client

    def _make_client(self, verify: bool) -> httpx.Client:
        if self._transport is not None:
            return httpx.Client(transport=self._transport, timeout=self.timeout, follow_redirects=True)
        return httpx.Client(verify=verify, timeout=self.timeout, follow_redirects=True)

    def fetch(self, url: str) -> bytes:
        """
        Return the page body for a URL, from cache when available.

        Args:
            url: Absolute http(s) URL

        Returns:
            Raw page bytes

        Raises:
            FetchError: If the request fails or the cache cannot be used
        """
        cached = self._read_cache(url)
        if cached is not None:
            return cached

        logger.debug(f"Fetching {url}")
        try:
            response = self._client_for(url).get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"HTTP error fetching {url}: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e
        except (httpx.InvalidURL, ValueError) as e:
            raise FetchError(f"Invalid URL {url}: {e}") from e

        contents = response.content
        self._write_cache(url, contents)
        return contents


__all__ = ["PageFetcher"]
