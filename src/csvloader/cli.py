"""CLI entry point for loading a typed CSV into a database table.

Usage:
    csvload --source gcs --bucket my-bucket --path data/users.csv \\
        --spanner-project-id p --spanner-instance-id i --spanner-database-id d \\
        --spanner-table Users [--delimiter tab] [--lazyquotes false]

    csvload --source users.csv --db-url sqlite:///data.db --spanner-table users

Set DEBUG to any non-empty value to log the full traceback on failure.
"""

import argparse
import logging
import os
import sys

from csvloader.coerce import parse_bool
from csvloader.config import LoadConfig
from csvloader.errors import LoaderError, ParseError
from csvloader.pipeline import run

logger = logging.getLogger(__name__)


def _flag_bool(text: str) -> bool:
    try:
        return parse_bool(text)
    except ParseError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Load a typed CSV file into a database table")
    parser.add_argument("--source", default="gcs", help="Set source type: gcs or csv filepath")
    parser.add_argument("--bucket", default="", help="Set Google Cloud Storage bucket name")
    parser.add_argument("--path", default="", help="Set Google Cloud Storage object path")
    parser.add_argument("--spanner-project-id", default="", help="Set Spanner project-id")
    parser.add_argument("--spanner-instance-id", default="", help="Set Spanner instance-id")
    parser.add_argument("--spanner-database-id", default="", help="Set Spanner database-id")
    parser.add_argument(
        "--spanner-table", default="", help="Set table name that the csv will be loaded into"
    )
    parser.add_argument("--delimiter", default="comma", help="Set delimiter type: comma or tab")
    parser.add_argument(
        "--lazyquotes", type=_flag_bool, nargs="?", const=True, default=True,
        help="If true, tolerate stray quotes",
    )
    parser.add_argument(
        "--trimleadingspace", type=_flag_bool, nargs="?", const=True, default=True,
        help="If true, ignore leading whitespace in fields",
    )
    parser.add_argument(
        "--db-url", default="",
        help="Load into sqlite:/// or postgresql:// instead of Spanner",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)

    try:
        total = run(LoadConfig.from_args(args))
    except LoaderError as e:
        if os.environ.get("DEBUG"):
            logger.exception("error: %s", e)
        else:
            logger.error("error: %s", e)
        return 1

    logger.info("Done. %d rows loaded.", total)
    return 0


if __name__ == "__main__":
    sys.exit(main())
