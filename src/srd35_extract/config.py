"""
Runtime configuration.

Values come from the environment (optionally via a .env file in the working
directory); command-line flags override them in main.py.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger("srd35-extract")

DEFAULT_CACHE_DIR = "cache"
DEFAULT_TIMEOUT = 30.0
DEFAULT_INSECURE_HOSTS = ("dnd-wiki.org",)
DEFAULT_SPELL_PAGES = "spells-pages.txt"
DEFAULT_SPELL_RENAMES = "spells-renames.txt"


class Settings(BaseModel):
    """Settings shared by the crawl and clean commands."""
    cache_dir: Path = Field(default=Path(DEFAULT_CACHE_DIR), description="Directory for cached source pages")
    log_level: str = Field(default="INFO", description="Root logging level name")
    http_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="HTTP timeout in seconds")
    insecure_hosts: frozenset[str] = Field(
        default=frozenset(DEFAULT_INSECURE_HOSTS),
        description="Hosts fetched without TLS certificate verification",
    )
    spell_pages_path: Path = Field(default=Path(DEFAULT_SPELL_PAGES), description="Spell name -> page lookup")
    spell_renames_path: Path = Field(default=Path(DEFAULT_SPELL_RENAMES), description="Spell name -> rename lookup")


def _split_hosts(raw: str) -> frozenset[str]:
    return frozenset(host.strip().lower() for host in raw.split(",") if host.strip())


def load_settings(env_file: str | Path | None = None) -> Settings:
    """Build Settings from the environment.

    Args:
        env_file: Explicit .env path; the default search is used when omitted.
    """
    if not load_dotenv(env_file):
        logger.debug("No .env file loaded, using process environment only")

    hosts = os.getenv("SRD35_INSECURE_HOSTS")
    return Settings(
        cache_dir=Path(os.getenv("SRD35_CACHE_DIR", DEFAULT_CACHE_DIR)),
        log_level=os.getenv("SRD35_LOG_LEVEL", "INFO").upper(),
        http_timeout=float(os.getenv("SRD35_HTTP_TIMEOUT", DEFAULT_TIMEOUT)),
        insecure_hosts=_split_hosts(hosts) if hosts is not None else frozenset(DEFAULT_INSECURE_HOSTS),
        spell_pages_path=Path(os.getenv("SRD35_SPELL_PAGES", DEFAULT_SPELL_PAGES)),
        spell_renames_path=Path(os.getenv("SRD35_SPELL_RENAMES", DEFAULT_SPELL_RENAMES)),
    )


__all__ = ["Settings", "load_settings"]
