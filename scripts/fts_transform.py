#!/usr/bin/env python3
"""Convert Google-like search expressions to full-text search conditions.

Writes a JSON array of ``{"query", "condition"}`` records to stdout with a
summary on stderr.  Queries come from the command line, or one per line
from stdin when none are given.

Usage::

    python3 scripts/fts_transform.py 'abc or -def' '<+abc +def>'
    python3 scripts/fts_transform.py --standard-stop-words --tree < queries.txt
    python3 scripts/fts_transform.py --stop-words custom_stop_words.json "the abc"
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from ftsquery.io_utils import dump_json_bytes, load_stop_words
from ftsquery.nodes import node_to_json, render
from ftsquery.query import FtsQuery

log = logging.getLogger("fts_transform")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert search expressions to SQL Server full-text conditions."
    )
    parser.add_argument(
        "query",
        nargs="*",
        help="Search expression(s); read one per line from stdin if omitted",
    )
    parser.add_argument(
        "--standard-stop-words",
        action="store_true",
        help="Load the built-in English stop-word list",
    )
    parser.add_argument(
        "--stop-words",
        type=Path,
        default=None,
        help="Extra stop words: JSON array or one word per line",
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Include the normalized expression tree in each record",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def convert(engine: FtsQuery, query: str, *, include_tree: bool = False) -> dict[str, Any]:
    """Transform one query into an output record."""
    if not include_tree:
        return {"query": query, "condition": engine.transform(query)}
    root = engine.fix_up_expression_tree(engine.parse_node(query, "And"), is_root=True)
    return {
        "query": query,
        "condition": render(root),
        "tree": node_to_json(root),
    }


def main() -> None:
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    extra_stop_words: list[str] = []
    if args.stop_words is not None:
        if not args.stop_words.exists():
            print(f"Error: stop-word file not found: {args.stop_words}", file=sys.stderr)
            sys.exit(1)
        try:
            extra_stop_words = load_stop_words(args.stop_words)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        log.info("Loaded %d stop words from %s", len(extra_stop_words), args.stop_words)

    engine = FtsQuery(args.standard_stop_words, extra_stop_words)

    queries: list[str] = args.query or [
        line.rstrip("\r\n") for line in sys.stdin if line.strip()
    ]
    records = [convert(engine, q, include_tree=args.tree) for q in queries]

    sys.stdout.buffer.write(dump_json_bytes(records))
    sys.stdout.buffer.write(b"\n")

    empty = sum(1 for r in records if not r["condition"])
    print(
        f"Transformed {len(records)} queries ({empty} with no valid condition)",
        file=sys.stderr,
    )


if __name__ == "__main__":
    main()
