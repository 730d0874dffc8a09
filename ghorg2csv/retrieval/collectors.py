"""Fetchers for the organization, repository, collaborator and user resources.

Every list fetcher walks its resource page by page. The cursor for the walk is
a local immutable value recomputed from each response, so several fetchers can
run on the same gateway from different threads.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple
from urllib.parse import quote

from ..errors import ConsistencyError, DecodeError, HTTPStatusError, PaginationError
from .config import BASE_URL, PER_PAGE
from .http_client import GitHubGateway
from .models import Collaborator, Organization, PageCursor, Repository, UserDetail
from .pagination import resolve_cursor

COLLABORATOR_TEMPLATE_SUFFIX = "{/collaborator}"


def org_url(org: str, base_url: str = BASE_URL) -> str:
    return f"{base_url}/orgs/{quote(org, safe='')}"


def org_repos_url(org: str, base_url: str = BASE_URL) -> str:
    return f"{org_url(org, base_url)}/repos"


def collaborators_url(org: str, repo: str, base_url: str = BASE_URL) -> str:
    return f"{base_url}/repos/{quote(org, safe='')}/{quote(repo, safe='')}/collaborators"


def user_url(login: str, base_url: str = BASE_URL) -> str:
    return f"{base_url}/users/{quote(login, safe='')}"


def fetch_json(gateway: GitHubGateway, url: str, stage: str,
               params: Optional[Dict[str, Any]] = None) -> Tuple[Any, str]:
    """Issue one GET and return the decoded body plus the raw Link header."""
    resp = gateway.get(url, params=params, stage=stage)
    if not resp.ok:
        raise HTTPStatusError(resp.status, url, stage)
    try:
        payload = json.loads(resp.body)
    except ValueError as exc:
        raise DecodeError(f"Problem decoding JSON from {url}: {exc}", stage) from exc
    return payload, resp.link_header


def _next_cursor(link_header: str, stage: str) -> PageCursor:
    try:
        return resolve_cursor(link_header)
    except PaginationError as exc:
        raise PaginationError(f"Problem determining pagination: {exc.message}", stage) from exc


def walk_pages(gateway: GitHubGateway, url: str, stage: str,
               per_page: int = 0) -> Iterator[Any]:
    """Yield the decoded body of every page until the cursor runs past the last page."""
    page: Optional[int] = None
    seen: Set[int] = set()
    while True:
        params: Dict[str, Any] = {}
        if per_page:
            params["per_page"] = per_page
        if page is not None:
            params["page"] = page
        payload, link_header = fetch_json(gateway, url, stage, params or None)
        cursor = _next_cursor(link_header, stage)
        yield payload

        if not cursor.should_continue():
            return
        if cursor.next_page in seen:
            raise PaginationError(f"page {cursor.next_page} of {url} was advertised twice", stage)
        seen.add(cursor.next_page)
        page = cursor.next_page


def _as_list(payload: Any, url: str, stage: str) -> List[Any]:
    if not isinstance(payload, list):
        raise DecodeError(f"expected a JSON array from {url}, got {type(payload).__name__}", stage)
    return payload


def get_org_info(gateway: GitHubGateway, org: str, base_url: str = BASE_URL) -> Organization:
    """Fetch the organization record, insisting on exactly one result."""
    stage = "org"
    url = org_url(org, base_url)
    found: List[Organization] = []
    # The endpoint is a singleton; a Link header is still honoured if one shows up.
    for payload in walk_pages(gateway, url, stage):
        records = payload if isinstance(payload, list) else [payload]
        found.extend(Organization.from_api(record) for record in records)

    if not found:
        raise ConsistencyError(f"No GitHub organization returned for '{org}'", stage)
    if len(found) > 1:
        raise ConsistencyError(
            f"Multiple GitHub organizations returned for '{org}' ({len(found)}), which makes no sense",
            stage,
        )
    return found[0]


def get_org_repos(gateway: GitHubGateway, org: str, base_url: str = BASE_URL,
                  per_page: int = PER_PAGE) -> List[Repository]:
    """Return every repository of the organization across all pages."""
    stage = "repos"
    url = org_repos_url(org, base_url)
    repos: List[Repository] = []
    for payload in walk_pages(gateway, url, stage, per_page=per_page):
        repos.extend(Repository.from_api(entry) for entry in _as_list(payload, url, stage))
    return repos


def check_collaborators_url(repo: Repository, expected: str) -> None:
    """Make sure the URL the repository advertises matches the one we built."""
    if not repo.collaborators_url:
        return
    advertised = repo.collaborators_url.replace(COLLABORATOR_TEMPLATE_SUFFIX, "")
    if advertised != expected:
        raise ConsistencyError(
            f"Problem preparing collaborators link: {advertised} != {expected}",
            f"collaborators {repo.name}",
        )


def get_collaborators(gateway: GitHubGateway, org: str, repo: Repository,
                      base_url: str = BASE_URL,
                      per_page: int = PER_PAGE) -> Tuple[List[Collaborator], List[Collaborator]]:
    """Return ``(collaborators, admins)`` for one repository.

    Admins stay in the full collaborator list; the second list is a view of
    the entries whose role name is exactly ``admin``.
    """
    stage = f"collaborators {repo.name}"
    url = collaborators_url(org, repo.name, base_url)
    check_collaborators_url(repo, url)

    collaborators: List[Collaborator] = []
    admins: List[Collaborator] = []
    for payload in walk_pages(gateway, url, stage, per_page=per_page):
        for entry in _as_list(payload, url, stage):
            collaborator = Collaborator.from_api(entry, repo.name)
            collaborators.append(collaborator)
            if collaborator.is_admin:
                admins.append(collaborator)
    return collaborators, admins


def get_user_detail(gateway: GitHubGateway, login: str, base_url: str = BASE_URL) -> UserDetail:
    """Fetch one user's public profile (display name and email)."""
    stage = f"user {login}"
    url = user_url(login, base_url)
    payload, _ = fetch_json(gateway, url, stage)
    return UserDetail.from_api(payload, login)


__all__ = [
    "org_url",
    "org_repos_url",
    "collaborators_url",
    "user_url",
    "fetch_json",
    "walk_pages",
    "get_org_info",
    "get_org_repos",
    "check_collaborators_url",
    "get_collaborators",
    "get_user_detail",
]
