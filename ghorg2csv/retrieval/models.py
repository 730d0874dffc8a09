"""Typed snapshots of the GitHub payloads the report is built from."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..errors import DecodeError
from .config import ADMIN_ROLE


def _require_mapping(payload: Any, what: str, stage: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise DecodeError(f"expected a JSON object for {what}, got {type(payload).__name__}", stage)
    return payload


def _require_str(payload: Dict[str, Any], key: str, what: str, stage: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise DecodeError(f"{what} is missing '{key}'", stage)
    return value


def parse_github_timestamp(raw: Optional[str], stage: str = "repos") -> Optional[dt.datetime]:
    """Parse an ISO-8601 timestamp such as 2022-06-13T07:59:05Z into an aware datetime."""
    if raw is None or raw == "":
        return None
    if not isinstance(raw, str):
        raise DecodeError(f"timestamp must be a string, got {type(raw).__name__}", stage)
    try:
        value = dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"unparsable timestamp {raw!r}: {exc}", stage) from exc
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return value


def format_github_timestamp(value: Optional[dt.datetime]) -> str:
    """Render a datetime the way GitHub does (RFC 3339, UTC as 'Z')."""
    if value is None:
        return ""
    return (
        value.astimezone(dt.timezone.utc)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z")
    )


@dataclass(frozen=True)
class PageCursor:
    """Pagination decision derived from one response's Link header."""

    has_more: bool = False
    next_page: int = 0
    last_page: int = 0

    def should_continue(self) -> bool:
        return self.has_more and self.next_page <= self.last_page


NO_MORE_PAGES = PageCursor()


@dataclass(frozen=True)
class Organization:
    login: str
    name: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Any) -> "Organization":
        data = _require_mapping(payload, "organization", "org")
        return cls(
            login=_require_str(data, "login", "organization", "org"),
            name=data.get("name") or None,
        )


@dataclass(frozen=True)
class Repository:
    """Immutable view of one entry from /orgs/{org}/repos."""

    id: int
    full_name: str
    name: str
    description: str = ""
    private: bool = False
    fork: bool = False
    visibility: str = ""
    updated_at: Optional[dt.datetime] = None
    collaborators_url: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Any) -> "Repository":
        data = _require_mapping(payload, "repository", "repos")
        name = _require_str(data, "name", "repository", "repos")
        private = bool(data.get("private", False))
        try:
            repo_id = int(data.get("id") or 0)
        except (TypeError, ValueError) as exc:
            raise DecodeError(f"repository {name} has an invalid id {data.get('id')!r}", "repos") from exc
        return cls(
            id=repo_id,
            full_name=data.get("full_name") or name,
            name=name,
            description=data.get("description") or "",
            private=private,
            fork=bool(data.get("fork", False)),
            visibility=data.get("visibility") or ("private" if private else "public"),
            updated_at=parse_github_timestamp(data.get("updated_at")),
            collaborators_url=data.get("collaborators_url") or None,
        )


@dataclass(frozen=True)
class Collaborator:
    login: str
    role_name: str
    repo: str

    @property
    def is_admin(self) -> bool:
        return self.role_name == ADMIN_ROLE

    @classmethod
    def from_api(cls, payload: Any, repo: str) -> "Collaborator":
        data = _require_mapping(payload, f"collaborator of {repo}", "collaborators")
        return cls(
            login=_require_str(data, "login", f"collaborator of {repo}", "collaborators"),
            role_name=data.get("role_name") or "",
            repo=repo,
        )


@dataclass(frozen=True)
class UserDetail:
    """Profile fields used to label an admin in the report."""

    login: str
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Any, login: str) -> "UserDetail":
        data = _require_mapping(payload, f"user {login}", "user")
        return cls(
            login=login,
            name=data.get("name") or None,
            email=data.get("email") or None,
        )


__all__ = [
    "PageCursor",
    "NO_MORE_PAGES",
    "Organization",
    "Repository",
    "Collaborator",
    "UserDetail",
    "parse_github_timestamp",
    "format_github_timestamp",
]
