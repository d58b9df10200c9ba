#!/usr/bin/env python3
"""Command line entry point: validate content, emit static params, serve the API."""

import argparse
import json
import logging
import sys
from functools import partial
from typing import List, Optional

import uvicorn

from .config import Config, load_config_sync
from .exceptions import ContentRootError, TaxonomyError
from .loader import build_content_index
from .routing.static_paths import StaticPathPlanner

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lesson-index",
        description="Index the lesson content tree",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to settings YAML (default: configs/settings.yaml)",
    )
    parser.add_argument(
        "--content",
        type=str,
        default=None,
        help="Content root containing topics/ (default: from config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: from config)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("check", help="Build the index and fail on any taxonomy error")

    paths = sub.add_parser("paths", help="Print static generation params as JSON")
    paths.add_argument(
        "--topics",
        action="store_true",
        help="Emit (category, topic) pairs instead of categories",
    )

    serve = sub.add_parser("serve", help="Run the read-only content API")
    serve.add_argument("--host", type=str, default=None, help="Host to bind to (default: from config)")
    serve.add_argument("--port", type=int, default=None, help="Port to bind to (default: from config)")
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload for development")

    return parser


def _configure_logging(config: Config) -> None:
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format=config.logging.format,
    )


def cmd_check(config: Config) -> int:
    try:
        index = build_content_index(config)
    except ContentRootError as e:
        logger.error("Content tree unreadable: %s", e)
        return 1
    except TaxonomyError as e:
        logger.error("Invalid taxonomy: %s", e)
        return 1

    for skipped in index.skipped:
        print(f"  skipped {skipped.path}: {skipped.reason}")
    for category in index.get_categories():
        print(f"{category.slug:<32} {len(category.topics):>4} topics  {category.title}")
    print(f"{len(index)} categories, {index.topic_count} topics, {len(index.skipped)} skipped")
    return 0


def cmd_paths(config: Config, topics: bool) -> int:
    planner = StaticPathPlanner(
        index_provider=partial(build_content_index, config),
        reserved_routes=config.reserved_routes,
    )
    try:
        params = planner.topic_params() if topics else planner.category_params()
    except TaxonomyError as e:
        logger.error("Invalid taxonomy: %s", e)
        return 1
    json.dump(params, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def cmd_serve(config: Config, host: Optional[str], port: Optional[int], reload: bool) -> int:
    host = host or config.api.host
    port = port or config.api.port

    print(f"Starting Lesson Index API on http://{host}:{port}")
    print(f"  - Swagger UI: http://{host}:{port}/docs")
    print(f"  - Health: http://{host}:{port}/health")

    log_level = config.logging.level.lower()
    if reload:
        # The reloader imports the app itself, so settings come from the
        # config file and environment rather than this process.
        uvicorn.run(
            "lesson_index.api.main:create_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            log_level=log_level,
        )
    else:
        from .api.main import create_app

        uvicorn.run(create_app(config), host=host, port=port, log_level=log_level)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config = load_config_sync(args.config)
    except Exception as e:
        print(f"Failed to load config: {e}", file=sys.stderr)
        return 2

    if args.content:
        config.content.path = args.content
    if args.log_level:
        config.logging.level = args.log_level.upper()

    _configure_logging(config)

    if args.command == "check":
        return cmd_check(config)
    if args.command == "paths":
        return cmd_paths(config, args.topics)
    return cmd_serve(config, args.host, args.port, args.reload)


if __name__ == "__main__":
    sys.exit(main())
