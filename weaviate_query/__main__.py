"""
@file: __main__.py
Command-line entry point for the Weaviate query client.

Builds a Get query from flags, then either prints the rendered GraphQL document
(--render-only) or runs it against the configured server and prints the rows as JSON.

Example:
    python -m weaviate_query config/config.yaml --collection Article --fields title content \
        --near-text "artificial intelligence" --certainty 0.7 --limit 5 --additional certainty
"""

#!/usr/bin/env python3

import argparse
import json
import logging
import sys
from typing import List, Optional

from weaviate_query.client import QueryClient
from weaviate_query.config import DEFAULT_CONFIG_PATH, get_config
from weaviate_query.exceptions import WeaviateQueryError
from weaviate_query.filter import Text, all_of, equal
from weaviate_query.logging_setup import setup_logging
from weaviate_query.query import QueryDescriptor, render_query
from weaviate_query.render_config import RendererConfig

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Weaviate Query - render and run GraphQL Get queries"
    )
    parser.add_argument(
        "config_file",
        nargs="?",
        default=DEFAULT_CONFIG_PATH,
        help="Path to configuration file"
    )
    parser.add_argument("--collection", required=True, help="Collection to query")
    parser.add_argument("--fields", nargs="+", default=[], help="Properties to return")

    search_group = parser.add_mutually_exclusive_group()
    search_group.add_argument("--near-text", metavar="CONCEPT", help="Semantic search concept")
    search_group.add_argument("--bm25", metavar="QUERY", help="Keyword search query")
    search_group.add_argument("--hybrid", metavar="QUERY", help="Hybrid search query")

    parser.add_argument("--certainty", type=float, help="Minimum certainty for --near-text")
    parser.add_argument("--alpha", type=float, help="Keyword/vector balance for --hybrid")
    parser.add_argument("--limit", type=int, help="Maximum number of results")
    parser.add_argument("--offset", type=int, help="Pagination offset")
    parser.add_argument(
        "--where-equal",
        action="append",
        default=[],
        metavar="PROP=VALUE",
        help="Text equality filter; repeat to combine with AND"
    )
    parser.add_argument("--additional", nargs="+", default=[], help="_additional fields (id, certainty, ...)")
    parser.add_argument("--render-only", action="store_true", help="Print the GraphQL document without running it")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_descriptor(args: argparse.Namespace) -> QueryDescriptor:
    """Translate parsed arguments into a QueryDescriptor."""
    descriptor = QueryDescriptor(args.collection).with_fields(*args.fields)
    if args.near_text:
        descriptor = descriptor.near_text(args.near_text, certainty=args.certainty)
    elif args.bm25:
        descriptor = descriptor.bm25(args.bm25)
    elif args.hybrid:
        descriptor = descriptor.hybrid(args.hybrid, alpha=args.alpha)

    predicates = []
    for item in args.where_equal:
        prop, sep, value = item.partition("=")
        if not sep:
            raise WeaviateQueryError(f"--where-equal expects PROP=VALUE, got {item!r}")
        predicates.append(equal(prop, Text(value)))
    if len(predicates) == 1:
        descriptor = descriptor.with_filter(predicates[0])
    elif predicates:
        descriptor = descriptor.with_filter(all_of(*predicates))

    return (descriptor
            .with_limit(args.limit)
            .with_offset(args.offset)
            .with_additional_fields(*args.additional))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = parse_args(argv)
    try:
        config = get_config(args.config_file)
        setup_logging(LEVEL="DEBUG" if args.debug else None, config=config)

        descriptor = build_descriptor(args)
        if args.render_only:
            print(render_query(descriptor, RendererConfig.from_config(config)), end="")
            return 0

        with QueryClient.from_config(config) as client:
            rows, errors = client.get(descriptor)
        print(json.dumps({"rows": rows, "errors": errors}, indent=2, ensure_ascii=False))
        return 1 if errors and not rows else 0
    except (WeaviateQueryError, FileNotFoundError) as e:
        logger.error(f"Error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
