# src/main.py — v1
"""CLI entry point: run, path, resolve commands.

Usage:
    relocator run <event.json>
    relocator path <identity>
    relocator resolve <digest> [--max-results N]

Settings come from the environment / .env, as for the serverless handler.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from relocator.version import __version__

logger = logging.getLogger(__name__)

EXIT_TASK_FAILED = 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="relocator",
        description=f"relocator v{__version__}: content-addressed FileSet relocation",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- run ---
    p_run = subparsers.add_parser(
        "run", help="Process a batch invocation event file",
    )
    p_run.add_argument("event", type=Path, help="Path to invocation JSON")
    p_run.set_defaults(func=_cmd_run)

    # --- path ---
    p_path = subparsers.add_parser(
        "path", help="Print the canonical destination key for an identity",
    )
    p_path.add_argument("identity", help="FileSet identity")
    p_path.set_defaults(func=_cmd_path)

    # --- resolve ---
    p_resolve = subparsers.add_parser(
        "resolve", help="Look up the identities matching a content digest",
    )
    p_resolve.add_argument("digest", help="sha256 content digest")
    p_resolve.add_argument(
        "--max-results", type=int, default=None,
        help="Hit cap (default: SEARCH_MAX_RESULTS)",
    )
    p_resolve.set_defaults(func=_cmd_resolve)

    return parser


async def _cmd_run(args: argparse.Namespace) -> int:
    """Process one event file and print the reply."""
    from relocator.config.settings import load_settings
    from relocator.core.models import InvocationEnvelope
    from relocator.pipeline.processor import TaskProcessor

    event_path: Path = args.event
    if not event_path.is_file():
        logger.error("File not found: %s", event_path)
        return 1

    envelope = InvocationEnvelope.model_validate_json(event_path.read_text("utf-8"))
    processor = TaskProcessor.from_settings(load_settings())
    response = await processor.process(envelope)

    print(json.dumps(response.to_wire(), indent=2))
    if response.results[0].result_code != "Succeeded":
        return EXIT_TASK_FAILED
    return 0


async def _cmd_path(args: argparse.Namespace) -> int:
    """Print the canonical path for an identity."""
    from relocator.storage.layout import canonical_path

    try:
        print(canonical_path(args.identity))
    except ValueError as exc:
        logger.error("%s", exc)
        return 1
    return 0


async def _cmd_resolve(args: argparse.Namespace) -> int:
    """Print the identities the search index returns for a digest."""
    from relocator.config.settings import load_settings
    from relocator.search.client_factory import create_search_client
    from relocator.search.resolver import IdentityResolver
    from relocator.storage.layout import canonical_path

    settings = load_settings()
    client = create_search_client(settings)
    max_results = args.max_results or settings.search_max_results
    identities = await IdentityResolver(client).resolve(args.digest, max_results)

    if not identities:
        print(f"No FileSet found for {args.digest}")
        return EXIT_TASK_FAILED
    for identity in identities:
        print(f"{identity}  {canonical_path(identity)}")
    return 0


def _setup_logging(verbose: bool) -> None:
    """Configure text logging for CLI usage."""
    from relocator.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else "INFO", log_format="text", stream=sys.stderr,
    )


if __name__ == "__main__":
    sys.exit(main())
