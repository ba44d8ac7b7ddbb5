#!/usr/bin/env python3
"""
wiktioparse: parse a Wiktionary article into a structured word record.

Fetches the article, resolves translation subpages, and prints the record
as JSON (or writes it to a file).

Usage:
    wiktioparse palabra                       # Print the record
    wiktioparse palabra -o palabra.json       # Write it to a file
    wiktioparse palabra --ipa-dir data/ipa    # Add IPA to translations
    wiktioparse palabra --strict              # Fail on unresolved subpages
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import orjson
from rich.console import Console

from wiktioparse.errors import SchemaError, SpliceError
from wiktioparse.fetch import REQUEST_TIMEOUT, WIKTIONARY_API_URL, WiktionaryClient
from wiktioparse.pipeline import DEFAULT_MAX_DEPTH, WiktioParser
from wiktioparse.resolver import SPLICE_KEEP, SPLICE_RAISE
from wiktioparse.taxonomy import load_taxonomy
from wiktioparse.transliteration import NullTransliterator, TableTransliterator

logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    """argparse type for counts that may be zero but not negative."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {number}")
    return number


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Parse a Wiktionary article into a JSON word record",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("word", help="Article title to parse")

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Write the record to this JSON file instead of the console",
    )

    parser.add_argument(
        "--ipa-dir",
        type=Path,
        default=None,
        help="Directory of <lang>_ipa.yaml tables used to transliterate translations",
    )

    parser.add_argument(
        "--taxonomy",
        type=Path,
        default=None,
        help="Section taxonomy YAML file (default: packaged taxonomy)",
    )

    parser.add_argument(
        "--max-depth",
        type=non_negative_int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Nested translation subpages to follow (default: {DEFAULT_MAX_DEPTH})",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when a translation subpage cannot be spliced in",
    )

    parser.add_argument(
        "--api-url",
        default=WIKTIONARY_API_URL,
        help=f"MediaWiki API endpoint (default: {WIKTIONARY_API_URL})",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=REQUEST_TIMEOUT,
        help=f"Request timeout in seconds (default: {REQUEST_TIMEOUT})",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output",
    )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the wiktioparse CLI."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    try:
        taxonomy = load_taxonomy(args.taxonomy)
        if args.ipa_dir:
            transliterator = TableTransliterator.from_directory(args.ipa_dir)
        else:
            transliterator = NullTransliterator()
    except SchemaError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    logger.debug(f"Taxonomy: {taxonomy.summary()}")

    parser = WiktioParser(
        WiktionaryClient(api_url=args.api_url, timeout=args.timeout),
        transliterator=transliterator,
        taxonomy=taxonomy,
        max_depth=args.max_depth,
        on_splice_failure=SPLICE_RAISE if args.strict else SPLICE_KEEP,
    )

    try:
        record = parser.process(args.word)
    except SpliceError as e:
        logger.error(str(e))
        return 1

    if record is None:
        logger.error(f"No article found for {args.word!r}")
        return 1

    data = orjson.dumps(record, option=orjson.OPT_INDENT_2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_bytes(data + b"\n")
        logger.info(f"Wrote {args.output}")
    else:
        Console().print_json(data.decode("utf-8"))

    return 0


if __name__ == "__main__":
    sys.exit(main())
