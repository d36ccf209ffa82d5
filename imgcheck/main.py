"""
Command-line entry point.

    imgcheck [--env-file .env] [--match-policy substring|exact] [--settle-ms 1500]

Exit status: 0 when the image is verified visible, 1 otherwise.
"""

import argparse
import asyncio
from typing import List, Optional

from dotenv import load_dotenv

from imgcheck.config import CheckerConfig
from imgcheck.errors import ConfigError
from imgcheck.schema import MatchPolicy
from imgcheck.utils.logger import get_logger, setup_logging
from imgcheck.workflow import run_check

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imgcheck",
        description="Log in to a site and verify that an image renders on a target page",
    )
    parser.add_argument("--env-file", default=None, help="dotenv file to load before reading the environment")
    parser.add_argument(
        "--match-policy",
        choices=[p.value for p in MatchPolicy],
        default=None,
        help="Image lookup strategy (default: MATCH_POLICY or substring)",
    )
    parser.add_argument("--settle-ms", type=int, default=None, help="Pause after loading the target page")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.env_file:
        load_dotenv(args.env_file, override=False)

    setup_logging(args.log_level)

    try:
        config = CheckerConfig.from_env(
            match_policy=args.match_policy,
            settle_ms=args.settle_ms,
        )
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return 1

    return asyncio.run(run_check(config))


def cli():
    raise SystemExit(main())


if __name__ == "__main__":
    cli()
