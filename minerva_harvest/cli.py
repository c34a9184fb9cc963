"""Command-line entry point for the exhibit harvester."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import Sequence

from .config import (
    DEFAULT_JSON_ROOT,
    DEFAULT_PUBLIC_DOMAIN,
    DEFAULT_URLS_FILE,
    DEFAULT_YAML_ROOT,
    HarvestConfig,
)
from .crawler import read_locations, run_harvester
from .errors import BatchError

logger = logging.getLogger("minerva_harvest.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Extract Minerva exhibit configurations from published story pages "
            "and write JSON configs plus Jekyll front-matter stubs."
        ),
    )
    parser.add_argument(
        "urls_file",
        nargs="?",
        default=DEFAULT_URLS_FILE,
        type=Path,
        help="File listing one story page URL per line (default: urls.txt)",
    )
    parser.add_argument(
        "--json-root",
        default=DEFAULT_JSON_ROOT,
        type=Path,
        help="Directory where exhibit JSON configs should be written",
    )
    parser.add_argument(
        "--yaml-root",
        default=DEFAULT_YAML_ROOT,
        type=Path,
        help="Directory where front-matter stubs should be written",
    )
    parser.add_argument(
        "--domain",
        default=DEFAULT_PUBLIC_DOMAIN,
        help="Public site used to report where each story will be served",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = HarvestConfig(
        json_root=Path(args.json_root).resolve(),
        yaml_root=Path(args.yaml_root).resolve(),
        public_domain=args.domain,
        request_timeout=args.timeout,
    )

    locations = read_locations(args.urls_file)
    overall_start = time.perf_counter()
    try:
        emitted = asyncio.run(run_harvester(locations, config))
    except BatchError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    total_elapsed = time.perf_counter() - overall_start

    for story in emitted:
        sys.stdout.write(story.progress_line + "\n")
    sys.stdout.flush()

    successes = len(emitted)
    total_urls = len(locations)
    logger.info(
        "Finished in %.2fs (%d/%d succeeded, %d failed)",
        total_elapsed,
        successes,
        total_urls,
        total_urls - successes,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
