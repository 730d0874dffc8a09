"""Command-line parsing and validation for the org report."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..retrieval.config import MAX_WORKERS, TOKEN_ENV_VAR

DEFAULT_CSV_NAME = "Findings-example.csv"
CSV_SUFFIX = ".csv"
MIN_CSV_NAME_LENGTH = 5


@dataclass(frozen=True)
class ReportSettings:
    """Resolved runtime settings for one report run."""

    csv_path: Path
    org: str
    workers: int = MAX_WORKERS


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the report entry point."""

    parser = argparse.ArgumentParser(
        prog="ghorg2csv",
        description="Export the repositories of a GitHub organization and their admins to CSV.",
        epilog=(
            f"The token used to authenticate with the GitHub API must be passed as an "
            f"environmental variable named '{TOKEN_ENV_VAR}'. "
            'Example: ghorg2csv --csv "org-info.csv" --org "my-github-org"'
        ),
    )
    parser.add_argument("--csv", "-csv", default=DEFAULT_CSV_NAME,
                        help="name of the CSV to create")
    parser.add_argument("--org", "-org", default="",
                        help="name of the GitHub organization to report on (required)")
    parser.add_argument("--workers", type=int, default=MAX_WORKERS,
                        help="maximum number of concurrent API requests")
    parser.add_argument("--version", "-v", action="version",
                        version=f"ghorg2csv version {__version__}")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    parser = build_arg_parser()
    return parser.parse_args(argv)


def validate_args(args: argparse.Namespace) -> List[str]:
    """Return every problem with the parsed arguments (empty when valid)."""

    problems: List[str] = []
    csv_name = args.csv or ""
    if len(csv_name) < MIN_CSV_NAME_LENGTH:
        problems.append("CSV name is too short, smallest possible length is 5 characters e.g. a.csv")
    if not csv_name.endswith(CSV_SUFFIX):
        problems.append("CSV name should end in '.csv' e.g. my-GH-Org.csv")
    if not (args.org or "").strip():
        problems.append("Please provide a GitHub org with the --org argument")
    if args.workers < 1:
        problems.append("--workers must be at least 1")
    return problems


def resolve_settings(args: argparse.Namespace) -> ReportSettings:
    """Return immutable settings; call validate_args first."""

    return ReportSettings(
        csv_path=Path(args.csv),
        org=args.org.strip(),
        workers=int(args.workers),
    )


__all__ = [
    "DEFAULT_CSV_NAME",
    "ReportSettings",
    "build_arg_parser",
    "parse_args",
    "validate_args",
    "resolve_settings",
]
