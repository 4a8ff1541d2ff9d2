"""Command-line entry point: run the JSON handlers and print their bodies."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from exabrowser import __version__, api
from exabrowser.aggregator import SEARCH_CHANNELS
from exabrowser.config import load_config
from exabrowser.config.schema import Config


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="exabrowser", description=__doc__)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, default=None, help="path to config.json")
    parser.add_argument("--verbose", action="store_true", help="log debug output to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="fan a query out across result channels")
    search.add_argument("query")
    search.add_argument("--mode", choices=("auto", "fast"), default="auto")
    search.add_argument(
        "--type",
        dest="result_types",
        action="append",
        default=None,
        help=f"result channel, repeatable (known: {', '.join(SEARCH_CHANNELS)})",
    )

    entity = sub.add_parser("entity", help="resolve an entity and its social profiles")
    entity.add_argument("query")

    socials = sub.add_parser("socials", help="search every platform for an entity")
    socials.add_argument("name")

    summary = sub.add_parser("summary", help="summarize recent mentions of an entity")
    summary.add_argument("name")
    summary.add_argument("--days", type=int, default=30)

    sub.add_parser("mentions", help="print the X/Reddit mentions ticker")
    return parser


async def _run(args: argparse.Namespace, config: Config) -> tuple[int, Any]:
    if args.command == "search":
        payload: dict[str, Any] = {"query": args.query, "mode": args.mode}
        if args.result_types:
            payload["resultTypes"] = args.result_types
        return await api.handle_search(payload, config)
    if args.command == "entity":
        return await api.handle_entity_search({"query": args.query}, config)
    if args.command == "socials":
        return await api.handle_entity_socials({"entityName": args.name}, config)
    if args.command == "summary":
        status, body = await api.handle_entity_socials({"entityName": args.name}, config)
        if status != 200:
            return status, body
        if not body["results"]:
            return 404, {"error": f"No mentions found for {args.name}"}
        return await api.handle_summary(
            {"results": body["results"], "entityName": args.name, "dateRange": [0, args.days]},
            config,
        )
    return await api.handle_mentions(config)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    config = load_config(args.config)

    status, body = asyncio.run(_run(args, config))
    print(json.dumps(body, indent=2, ensure_ascii=False))
    return 0 if status == 200 else 1


if __name__ == "__main__":
    raise SystemExit(main())
