"""
srd35-extract command line.

Commands:
    monsters <links> <out>       Crawl dnd-wiki.org monster pages into JSON
    spell-pages <links> <out>    Extract raw spells from dndsrd.net list pages
    spells <in> <out>            Clean raw spell records
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import Settings, load_settings
from .errors import ExtractError
from .fetch import PageFetcher
from .monsters import MonsterCrawler, read_links, write_monsters
from .spells import SpellCleaner, crawl_spell_pages, load_pages, load_renames, read_spells, write_spells

logger = logging.getLogger("srd35-extract")

HELP_WORD = "help"
HELP_FLAG = "-h"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per pipeline."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--cache-dir",
        type=Path,
        default=None,
        help="Directory for cached pages (default: $SRD35_CACHE_DIR or ./cache)"
    )
    common.add_argument(
        "--log-level",
        default=None,
        help="Logging level name (default: $SRD35_LOG_LEVEL or INFO)"
    )

    parser = argparse.ArgumentParser(
        prog="srd35-extract",
        description="Extract D&D 3.5 SRD monsters and spells into structured JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
Examples:
  srd35-extract monsters monster-links.txt monsters.json
  srd35-extract spell-pages spell-links.txt spells-raw.json
  srd35-extract spells spells-raw.json spells.json --pages spells-pages.txt
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    monsters = subparsers.add_parser("monsters", parents=[common], add_help=False, help="Crawl monster pages")
    monsters.add_argument("links", type=Path, help="File with one monster page URL per line")
    monsters.add_argument("out", type=Path, help="Output JSON path")
    monsters.set_defaults(handler=run_monsters)

    pages = subparsers.add_parser("spell-pages", parents=[common], add_help=False, help="Extract raw spells")
    pages.add_argument("links", type=Path, help="File with one spell list page URL per line")
    pages.add_argument("out", type=Path, help="Output JSON path")
    pages.set_defaults(handler=run_spell_pages)

    spells = subparsers.add_parser("spells", parents=[common], add_help=False, help="Clean raw spell records")
    spells.add_argument("input", type=Path, help="JSON array of raw spell records")
    spells.add_argument("out", type=Path, help="Output JSON path")
    spells.add_argument("--pages", type=Path, default=None, help="Spell name -> page lookup file")
    spells.add_argument("--renames", type=Path, default=None, help="Spell name -> rename lookup file")
    spells.set_defaults(handler=run_spells)

    return parser


def wants_help(argv: list[str]) -> bool:
    """True when any argument is '-h' or 'help' with optional leading dashes."""
    return any(arg == HELP_FLAG or arg.lstrip("-").lower() == HELP_WORD for arg in argv)


def configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _fetcher(args: argparse.Namespace, settings: Settings) -> PageFetcher:
    return PageFetcher(
        cache_dir=args.cache_dir or settings.cache_dir,
        timeout=settings.http_timeout,
        insecure_hosts=settings.insecure_hosts,
    )


# =============================================================================
# Commands
# =============================================================================

def run_monsters(args: argparse.Namespace, settings: Settings) -> int:
    links = read_links(args.links)
    logger.info(f"Crawling {len(links)} monster links from {args.links}")

    with _fetcher(args, settings) as fetcher:
        monsters = MonsterCrawler(fetcher).crawl(links)

    write_monsters(monsters, args.out)
    logger.info(f"Wrote {len(monsters)} monsters to {args.out}")
    return 0


def run_spell_pages(args: argparse.Namespace, settings: Settings) -> int:
    links = read_links(args.links)
    logger.info(f"Extracting spells from {len(links)} pages listed in {args.links}")

    with _fetcher(args, settings) as fetcher:
        spells = crawl_spell_pages(links, fetcher)

    write_spells(spells, args.out)
    logger.info(f"Wrote {len(spells)} raw spells to {args.out}")
    return 0


def run_spells(args: argparse.Namespace, settings: Settings) -> int:
    pages = load_pages(args.pages or settings.spell_pages_path)
    renames = load_renames(args.renames or settings.spell_renames_path)
    spells = read_spells(args.input)

    cleaned = SpellCleaner(pages, renames).clean_all(spells)

    write_spells(cleaned, args.out)
    logger.info(f"Wrote {len(cleaned)} spells to {args.out}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point; returns the process exit status."""
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()

    if wants_help(argv):
        parser.print_help()
        return 1

    try:
        args = parser.parse_args(argv)
    except SystemExit:
        # argparse has already printed the usage error.
        return 1

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(args.log_level or settings.log_level)

    try:
        return args.handler(args, settings)
    except (OSError, ExtractError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
