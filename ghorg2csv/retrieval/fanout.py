"""Concurrent fan-out of collaborator and admin profile fetches."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping, Sequence, Tuple, TypeVar

from .collectors import get_collaborators
from .config import BASE_URL, MAX_WORKERS, PER_PAGE
from .http_client import GitHubGateway
from .lookup import LookupCache
from .models import Collaborator, Repository, UserDetail

K = TypeVar("K")
V = TypeVar("V")


@dataclass
class CollaboratorIndex:
    """Collaborators of every repository, plus the admin view, keyed by repo name."""

    collaborators: Dict[str, List[Collaborator]] = field(default_factory=dict)
    admins: Dict[str, List[Collaborator]] = field(default_factory=dict)

    def admin_logins(self) -> List[str]:
        """Distinct admin logins in first-seen order."""
        return distinct_logins(self.admins)


def distinct_logins(members_by_repo: Mapping[str, Sequence[Collaborator]]) -> List[str]:
    seen: Dict[str, None] = {}
    for members in members_by_repo.values():
        for member in members:
            seen.setdefault(member.login, None)
    return list(seen)


def run_wave(items: Iterable[K], task: Callable[[K], V],
             max_workers: int = MAX_WORKERS) -> Dict[K, V]:
    """Run ``task`` for every item on a bounded pool and join the whole wave.

    Results are collected by the calling thread only. The first failure
    cancels whatever has not started yet and is re-raised.
    """
    keys = list(items)
    results: Dict[K, V] = {}
    if not keys:
        return results

    workers = max(1, min(max_workers, len(keys)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures: Dict[Future, K] = {executor.submit(task, key): key for key in keys}
        try:
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        except BaseException:
            for future in futures:
                future.cancel()
            raise
    return results


def fetch_all_collaborators(gateway: GitHubGateway, org: str,
                            repos: Sequence[Repository],
                            max_workers: int = MAX_WORKERS,
                            base_url: str = BASE_URL,
                            per_page: int = PER_PAGE) -> CollaboratorIndex:
    """Fetch collaborators for every repository concurrently."""

    def task(repo_name: str) -> Tuple[List[Collaborator], List[Collaborator]]:
        return get_collaborators(gateway, org, by_name[repo_name], base_url=base_url, per_page=per_page)

    by_name: Dict[str, Repository] = {repo.name: repo for repo in repos}
    fetched = run_wave(by_name, task, max_workers=max_workers)

    index = CollaboratorIndex()
    for repo in repos:
        collaborators, admins = fetched[repo.name]
        index.collaborators[repo.name] = collaborators
        index.admins[repo.name] = admins
    return index


def resolve_admin_details(cache: LookupCache,
                          admins: Mapping[str, Sequence[Collaborator]],
                          max_workers: int = MAX_WORKERS) -> Dict[str, UserDetail]:
    """Resolve each distinct admin login through the lookup cache."""
    return run_wave(distinct_logins(admins), cache.resolve, max_workers=max_workers)


__all__ = [
    "CollaboratorIndex",
    "distinct_logins",
    "run_wave",
    "fetch_all_collaborators",
    "resolve_admin_details",
]
