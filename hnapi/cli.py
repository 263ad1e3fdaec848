"""Command line entry point.

Collects every feed category and prints the first few stories of each.
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from hnapi.client import PRINT_ORDER, HackerNewsAPI, HackerNewsApiError, StoryType
from hnapi.utils.logging_config import get_logger, setup_logging

DEFAULT_AMOUNT = 5


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hnapi",
        description="Fetch Hacker News feed categories and print their first stories.",
    )
    parser.add_argument(
        "--amount",
        type=_non_negative_int,
        default=DEFAULT_AMOUNT,
        help=f"Stories to print per category (default: {DEFAULT_AMOUNT}).",
    )
    parser.add_argument(
        "--story-type",
        choices=["all"] + [story_type.name.lower() for story_type in PRINT_ORDER],
        default="all",
        help="Category to print (default: all).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort without printing if any category fails to load.",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines on stderr.",
    )
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    logger = get_logger(__name__)

    async with HackerNewsAPI() as api:
        response = await api.collect_all_stories()

        for error in response.errors.values():
            print(f"Error: {error}", file=sys.stderr)
        if args.strict and not response.ok:
            logger.error("Aborting: not every category could be fetched")
            return 1

        try:
            if args.story_type == "all":
                await api.debug_print_stories(response, args.amount)
            else:
                story_type = StoryType[args.story_type.upper()]
                await api.debug_print_story(response, story_type, args.amount)
        except HackerNewsApiError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    return 0 if response.ok else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(use_json=args.json_logs)
    return asyncio.run(_run(args))


def run() -> None:
    """Console script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
