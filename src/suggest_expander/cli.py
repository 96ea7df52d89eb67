"""Command line entry point.

  suggest-expander "pizza" --country us --language en --csv out.csv
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .aggregator import build_aggregator
from .config import Settings, TemporalPolicy
from .env import load_env, setup_logging
from .errors import ValidationError
from .export import results_to_csv
from .locales import SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="suggest-expander",
        description="Expand a keyword into query variants and collect autocomplete suggestions.",
    )
    p.add_argument("keyword")
    p.add_argument("--country", "-c", required=True, help="2-letter country code, e.g. ar, mx, us")
    p.add_argument(
        "--language", "-l", required=True,
        help=f"one of {', '.join(SUPPORTED_LANGUAGES)} (others use the Spanish word lists)",
    )
    p.add_argument("--csv", type=Path, help="write results to this CSV file")
    p.add_argument("--client", help="suggest client tag: chrome, firefox or toolbar")
    p.add_argument("--workers", type=int, help="concurrent lookups")
    p.add_argument("--policy", choices=[t.value for t in TemporalPolicy], help="month/year expansion")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    load_env()
    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)

    overrides = {}
    if args.client:
        overrides["client"] = args.client.strip().lower()
    if args.workers and args.workers > 0:
        overrides["max_workers"] = args.workers
    if args.policy:
        overrides["temporal_policy"] = TemporalPolicy(args.policy)
    settings = replace(settings, **overrides)

    try:
        aggregator = build_aggregator(settings)
    except ValueError as e:
        logger.error("%s", e)
        return 2
    try:
        with aggregator:
            result = aggregator.aggregate(args.keyword.strip(), args.country, args.language)
    except ValidationError as e:
        logger.error("%s", e)
        return 2

    print(f"{len(result.results)} suggestions")
    for s in result.summary:
        print(f"  {s.category.value}: {s.count}")
    for item in result.results:
        print(f"{item.category.value}\t{item.suggestion}")

    if args.csv:
        args.csv.write_bytes(results_to_csv(result.results))
        logger.info("wrote %s", args.csv)
    return 0


if __name__ == "__main__":
    sys.exit(main())
