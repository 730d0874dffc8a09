"""Assemble one report record per repository."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from ..retrieval.models import Collaborator, Repository, UserDetail, format_github_timestamp

DESCRIPTION_LIMIT = 46
DESCRIPTION_KEEP = 45
ADMIN_SEPARATOR = ", "

HEADER = [
    "Full Name",
    "Name",
    "Short Description",
    "Private",
    "Fork",
    "Visibility",
    "Last Update",
    "Repo Admins",
]


@dataclass(frozen=True)
class ReportRecord:
    full_name: str
    name: str
    description: str
    private: bool
    fork: bool
    visibility: str
    last_update: Optional[dt.datetime]
    admins: str

    def as_row(self) -> List[str]:
        return [
            self.full_name,
            self.name,
            self.description,
            "true" if self.private else "false",
            "true" if self.fork else "false",
            self.visibility,
            format_github_timestamp(self.last_update),
            self.admins,
        ]


def short_description(description: Optional[str]) -> str:
    """Descriptions longer than 46 characters keep their first 45."""
    description = description or ""
    if len(description) > DESCRIPTION_LIMIT:
        return description[:DESCRIPTION_KEEP]
    return description


def format_admin_identity(login: str, detail: Optional[UserDetail]) -> str:
    """Render ``login (name - email)``, dropping whichever part is unknown."""
    name = detail.name if detail else None
    email = detail.email if detail else None
    if name and email:
        return f"{login} ({name} - {email})"
    if name:
        return f"{login} ({name})"
    if email:
        return f"{login} ({email})"
    return login


def admin_cell(admins: Sequence[Collaborator], details: Mapping[str, UserDetail]) -> str:
    return ADMIN_SEPARATOR.join(
        format_admin_identity(admin.login, details.get(admin.login)) for admin in admins
    )


def build_report_records(repos: Sequence[Repository],
                         admins: Mapping[str, Sequence[Collaborator]],
                         details: Mapping[str, UserDetail]) -> List[ReportRecord]:
    """Return one record per repository, in repository order."""
    records: List[ReportRecord] = []
    for repo in repos:
        records.append(
            ReportRecord(
                full_name=repo.full_name,
                name=repo.name,
                description=short_description(repo.description),
                private=repo.private,
                fork=repo.fork,
                visibility=repo.visibility,
                last_update=repo.updated_at,
                admins=admin_cell(admins.get(repo.name, []), details),
            )
        )
    return records


__all__ = [
    "HEADER",
    "ReportRecord",
    "short_description",
    "format_admin_identity",
    "admin_cell",
    "build_report_records",
]
