"""Command-line entry point for fetching Chromecast backgrounds."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import time
from pathlib import Path
from typing import List, Sequence

from .backgrounds import merge_backgrounds, update_size
from .config import DEFAULT_SOURCE_URL, FetchConfig
from .fetcher import fetch_backgrounds
from .images import download_backgrounds
from .models import BackgroundEntry
from .storage import load_backgrounds, save_backgrounds, write_markdown

logger = logging.getLogger("cast_backgrounds.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cast-backgrounds",
        description="Fetch the Chromecast home screen backgrounds and optionally save or download them.",
    )
    parser.add_argument(
        "--size",
        help="Size token to request for every image, e.g. s1920",
    )
    parser.add_argument(
        "--load",
        type=Path,
        help="JSON file of previously saved backgrounds to merge with",
    )
    parser.add_argument(
        "--save",
        type=Path,
        help="Write the backgrounds as JSON to this file",
    )
    parser.add_argument(
        "--writemd",
        type=Path,
        help="Write the backgrounds as inline Markdown images to this file",
    )
    parser.add_argument(
        "--download",
        type=Path,
        help="Directory to download the background images into",
    )
    parser.add_argument(
        "--url",
        default=DEFAULT_SOURCE_URL,
        help="Page to read the background list from",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout in seconds for fetching the page (default: none)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging and print the background list",
    )
    return parser.parse_args(argv)


def _dump(entries: List[BackgroundEntry]) -> str:
    return json.dumps([entry.to_dict() for entry in entries], indent=4, ensure_ascii=False)


def run(args: argparse.Namespace) -> List[BackgroundEntry]:
    """Run the pipeline stages enabled by ``args`` in their fixed order."""
    config = FetchConfig(source_url=args.url, timeout=args.timeout)

    logger.info("Parsing Chromecast Home...")
    backgrounds = fetch_backgrounds(config)

    if args.size:
        logger.info("Updating sizes to %s", args.size)
        update_size(args.size, backgrounds)

    if args.load:
        logger.info("Loading previous backgrounds from %s", args.load)
        saved = load_backgrounds(args.load)
        backgrounds, new_count = merge_backgrounds(backgrounds, saved)
        if new_count > 0:
            logger.info("%d new backgrounds!", new_count)

    if args.save:
        logger.info("Writing backgrounds JSON to %s", args.save)
        save_backgrounds(args.save, backgrounds)

    if args.writemd:
        logger.info("Writing backgrounds as inline markdown to %s", args.writemd)
        write_markdown(args.writemd, backgrounds)

    if args.verbose:
        logger.debug("%s", _dump(backgrounds))

    if args.download:
        logger.info("Downloading background images...")
        start = time.perf_counter()
        report = asyncio.run(download_backgrounds(backgrounds, args.download))
        logger.info(
            "Downloaded %d/%d background(s) in %.2fs (%d failed)",
            len(report.saved),
            len(report.results),
            time.perf_counter() - start,
            len(report.failures),
        )

    logger.info("Done!")
    return backgrounds


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    run(args)


if __name__ == "__main__":
    main()
