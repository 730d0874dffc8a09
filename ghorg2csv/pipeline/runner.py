"""Entry points for generating the organization CSV report."""

from __future__ import annotations

import sys
import time
from typing import List, Optional

from ..credentials import load_github_token
from ..errors import ReportError
from ..report.rows import ReportRecord, build_report_records
from ..report.writer import write_report_csv
from ..retrieval.collectors import get_org_info, get_org_repos, get_user_detail
from ..retrieval.fanout import fetch_all_collaborators, resolve_admin_details
from ..retrieval.http_client import GitHubGateway
from ..retrieval.lookup import LookupCache
from .config import ReportSettings, build_arg_parser, parse_args, resolve_settings, validate_args


def _elapsed(started: float) -> str:
    return f"{time.monotonic() - started:.2f}s"


def generate_report(settings: ReportSettings, gateway: GitHubGateway) -> List[ReportRecord]:
    """Fetch everything for ``settings.org`` and write the CSV report."""
    print(f"\n=== {settings.org} ===")

    started = time.monotonic()
    organization = get_org_info(gateway, settings.org)
    org = organization.login
    print(f"  get org info done in {_elapsed(started)}")

    started = time.monotonic()
    repos = get_org_repos(gateway, org)
    print(f"  get org repos done in {_elapsed(started)} ({len(repos)} repos)")

    started = time.monotonic()
    index = fetch_all_collaborators(gateway, org, repos, max_workers=settings.workers)
    print(f"  get repo collaborators done in {_elapsed(started)} ({len(index.admin_logins())} distinct admins)")

    started = time.monotonic()
    cache = LookupCache(lambda login: get_user_detail(gateway, login))
    details = resolve_admin_details(cache, index.admins, max_workers=settings.workers)
    print(f"  get user detail done in {_elapsed(started)} ({cache.fetch_count} profiles)")

    started = time.monotonic()
    records = build_report_records(repos, index.admins, details)
    rows = write_report_csv(settings.csv_path, records)
    print(f"  write csv done in {_elapsed(started)} ({rows} rows) -> {settings.csv_path}")
    return records


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns the process exit status."""
    args = parse_args(argv)
    problems = validate_args(args)
    if problems:
        for problem in problems:
            print(f"ERROR: {problem}")
        build_arg_parser().print_usage()
        return 2

    settings = resolve_settings(args)
    try:
        token = load_github_token()
        gateway = GitHubGateway(token, pool_size=settings.workers)
        try:
            generate_report(settings, gateway)
        finally:
            gateway.close()
    except ReportError as exc:
        print(f"[error] {exc}")
        return exc.exit_code
    print("\nReport complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
