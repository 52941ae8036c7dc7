#!/usr/bin/env python
"""Command-line entry point: print the news sentiment digest for one asset."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from newspulse.config import create_from_config, get_default_config_path, load_config
from newspulse.data import AggregateResult, Query
from newspulse.errors import NewsPulseError

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    asset: str
    price_change: float | None = None
    config: Path
    log: bool = False
    log_dir: str | None = None
    as_json: bool = False

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.is_file():
            raise ValueError(f"Config file not found: {v}")
        return v


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Summarize the current news sentiment for a stock or crypto asset."
    )
    parser.add_argument("asset", help="Ticker or crypto name, e.g. AAPL, BTC, bitcoin")
    parser.add_argument(
        "--price-change",
        type=float,
        help="Recent price move in percent; adds a price/sentiment note",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument("--log", action="store_true", help="Write a JSON trace of the run")
    parser.add_argument("--log-dir", help="Directory for run traces (overrides config)")
    parser.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the raw API payload"
    )
    return parser


def print_digest(result: AggregateResult) -> None:
    print(f"{result.symbol} [{result.asset_class}] {result.mood} {result.sentiment_score}/100")
    print(result.summary)
    print(result.explanation)
    print(result.price_correlation)
    for i, article in enumerate(result.articles, 1):
        when = article.published_at.strftime("%Y-%m-%d %H:%M") if article.published_at else "undated"
        print(f"\n{i}. {article.title}")
        print(f"   {article.source or article.provider} | {when} | {article.url}")
    if result.failed_sources:
        print(f"\nUnavailable sources: {', '.join(result.failed_sources)}")


async def run(args: CLIArgs) -> AggregateResult:
    """Build the pipeline from config and answer one query."""
    config = load_config(args.config)
    pipeline = create_from_config(
        config,
        log_override=True if args.log else None,
        log_dir_override=args.log_dir,
    )
    query = Query.from_symbol(args.asset, price_change=args.price_change)
    logger.info(f"Fetching news for {query.symbol} using {', '.join(pipeline.adapter_names)}")
    return await pipeline.run(query)


def main() -> None:
    """Entry point for the CLI."""
    ns = build_parser().parse_args()

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s", stream=sys.stderr)

    try:
        args = CLIArgs(
            asset=ns.asset,
            price_change=ns.price_change,
            config=ns.config or get_default_config_path(),
            log=ns.log,
            log_dir=ns.log_dir,
            as_json=ns.as_json,
        )
    except ValueError as e:
        logger.error(str(e))
        sys.exit(2)

    try:
        result = asyncio.run(run(args))
    except (NewsPulseError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)

    if args.as_json:
        print(json.dumps(result.to_payload(), indent=2))
    else:
        print_digest(result)


if __name__ == "__main__":
    main()
