"""Top up users of valid companies and write a report of the changes.

Usage examples:
  # Defaults: ./companies.json, ./users.json -> ./output.txt
  token-topup

  # Explicit paths
  token-topup --cf data/companies.json --uf data/users.json --of report.txt

  # Without installing the console script
  python -m services.topup_service.cli --companies-file companies.json
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from libs.common.config import Settings, get_settings
from libs.common.logging import configure_logging, get_logger
from pydantic import ValidationError
from services.topup_service.exceptions import TopupError
from services.topup_service.services.pipeline import top_up_and_report

logger = get_logger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="token-topup",
        description="Top up active users of valid companies and report the changes.",
    )
    parser.add_argument(
        "--companies-file",
        "--cf",
        dest="companies_file",
        metavar="PATH_TO_COMPANIES_FILE",
        default=settings.COMPANIES_FILE,
        help="Path to companies file (default: %(default)s).",
    )
    parser.add_argument(
        "--users-file",
        "--uf",
        dest="users_file",
        metavar="PATH_TO_USERS_FILE",
        default=settings.USERS_FILE,
        help="Path to users file (default: %(default)s).",
    )
    parser.add_argument(
        "--output-file",
        "--of",
        dest="output_file",
        metavar="PATH_TO_OUTPUT_FILE",
        default=settings.OUTPUT_FILE,
        help="Path to output file (default: %(default)s).",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help="Logging level for console output (default: %(default)s).",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1
    args = build_parser(settings).parse_args(argv)

    configure_logging(args.log_level)

    try:
        top_up_and_report(args.companies_file, args.users_file, args.output_file)
    except TopupError as e:
        logger.error("Top up run aborted: %s", e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
