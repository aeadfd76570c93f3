#!/usr/bin/env python3
"""
Export the content graph as a navigation map, a linear document, static-site
pages or wiki pages.

Usage examples:
  python scripts/export_catalog.py map --output heap/content/minemap.json
  python scripts/export_catalog.py linear --output docs.md --toc-depth 2 --no-toc-h1
  python scripts/export_catalog.py site heap --min-length 3
  python scripts/export_catalog.py wiki --space-key DOCS --parent-id 164094 --exclude audience:internal
  python scripts/export_catalog.py linear --graph-json dump.json -o out.md

Without --graph-json the graph is read from Neo4j (NEO4J_URI/NEO4J_USER/NEO4J_PASSWORD).
Defaults come from MINECART_* environment variables (a .env file is honoured).
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

# Ensure project root is importable for the `minecart` package
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from dotenv import find_dotenv, load_dotenv  # noqa: E402

from minecart.catalog import ContentCatalog, build_map, write_map  # noqa: E402
from minecart.config import ExportSettings  # noqa: E402
from minecart.errors import CatalogError, GraphUnavailableError  # noqa: E402
from minecart.graph import InMemoryGraphSource, Neo4jGraphSource  # noqa: E402
from minecart.graph.base import managed_driver  # noqa: E402
from minecart.publish import SiteExporter, WikiClient, WikiPublishError, render_linear_document  # noqa: E402

logger = logging.getLogger("minecart.export")


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"value [{value}] is not valid")
    if number < 0:
        raise argparse.ArgumentTypeError(f"value [{value}] is not valid")
    return number


def build_parser(defaults: ExportSettings) -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--graph-json", help="Read the graph from a JSON dump instead of Neo4j")
    common.add_argument("--root", default=defaults.root_key, help="Key of the root (adit) node")
    common.add_argument("--max-depth", type=_non_negative_int, default=defaults.max_depth)
    common.add_argument("-m", "--min-length", type=_non_negative_int, default=defaults.min_length,
                        help="Markdown body content below this length will not be extracted")
    common.add_argument("--include", action="append", default=[str(p) for p in defaults.includes], metavar="NAME:VALUE",
                        help="Only export nodes whose attribute matches (repeatable, adds to MINECART_INCLUDE)")
    common.add_argument("--exclude", action="append", default=[str(p) for p in defaults.excludes], metavar="NAME:VALUE",
                        help="Skip nodes whose attribute matches (repeatable, adds to MINECART_EXCLUDE)")
    common.add_argument("-v", "--verbose", action="store_true")

    parser = argparse.ArgumentParser(description="Export the content graph")
    sub = parser.add_subparsers(dest="command", required=True)

    p_map = sub.add_parser("map", parents=[common], help="Write the navigation map")
    p_map.add_argument("-o", "--output", default="minemap.json")

    p_linear = sub.add_parser("linear", parents=[common], help="Write one markdown document with a TOC")
    p_linear.add_argument("-o", "--output", default="output.md")
    p_linear.add_argument("-d", "--toc-depth", type=_non_negative_int, default=defaults.toc_depth)
    p_linear.add_argument("--no-toc-h1", dest="toc_h1", action="store_false", default=defaults.toc_h1,
                          help="Leave level-1 headings out of the TOC")

    p_site = sub.add_parser("site", parents=[common], help="Write per-node pages and the map")
    p_site.add_argument("directory")

    p_wiki = sub.add_parser("wiki", parents=[common], help="Publish pages to Confluence")
    p_wiki.add_argument("-k", "--space-key", required=True)
    p_wiki.add_argument("-p", "--parent-id", required=True)

    return parser


@contextmanager
def open_source(args) -> Iterator[object]:
    if args.graph_json:
        yield InMemoryGraphSource.from_json(args.graph_json)
        return
    with managed_driver() as driver:
        if driver is None:
            raise GraphUnavailableError("Neo4j driver unavailable. Check NEO4J_URI/NEO4J_USER/NEO4J_PASSWORD.")
        yield Neo4jGraphSource(driver)


def run(args) -> None:
    with open_source(args) as source:
        catalog = ContentCatalog(
            source,
            root_key=args.root,
            includes=args.include,
            excludes=args.exclude,
            min_length=args.min_length,
            max_depth=args.max_depth,
        )
        catalog.init()

        if args.command == "map":
            write_map(build_map(catalog.get_tree()), args.output)
        elif args.command == "linear":
            chunks = catalog.get_composite_markdown()
            text = render_linear_document(chunks, toc_depth=args.toc_depth, include_h1=args.toc_h1)
            Path(args.output).write_text(text, encoding="utf-8")
            logger.info("wrote %d chunks to %s", len(chunks), args.output)
        elif args.command == "site":
            SiteExporter(catalog, source).export(args.directory)
        elif args.command == "wiki":
            root = catalog.get_composite_tree()
            ids = WikiClient.from_env().publish_tree(root, args.space_key, args.parent_id)
            logger.info("published %d wiki pages under %s", len(ids), args.parent_id)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(find_dotenv(usecwd=True), override=False)
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING").upper(),
                        format="%(asctime)s %(levelname)s %(name)s %(message)s")

    try:
        defaults = ExportSettings.from_env()
        args = build_parser(defaults).parse_args(argv)
        if args.verbose:
            logging.getLogger().setLevel(logging.INFO)
        run(args)
    except (CatalogError, GraphUnavailableError, WikiPublishError, ValueError, OSError) as exc:
        logger.error("ERROR: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
