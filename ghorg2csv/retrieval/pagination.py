"""Turn GitHub Link headers into explicit page cursors.

GitHub advertises further pages of a list resource with a header such as::

    <https://api.github.com/orgs/x/repos?page=2>; rel="next",
    <https://api.github.com/orgs/x/repos?page=5>; rel="last"

The header is parsed into ordered ``(rel, url)`` pairs and relations are
matched by exact name. A broken ``next`` link ends the walk quietly, while a
broken ``last`` link is an error because the walk could not be bounded.
"""

from __future__ import annotations

from typing import List, Optional, Tuple
from urllib.parse import parse_qs, urlsplit

from requests.utils import parse_header_links

from ..errors import PaginationError
from .models import NO_MORE_PAGES, PageCursor

NEXT_REL = "next"
LAST_REL = "last"


def parse_link_header(link_header: Optional[str]) -> List[Tuple[str, str]]:
    """Return ``(rel, url)`` pairs in header order; multi-valued rels are split."""
    if not link_header or not link_header.strip():
        return []
    pairs: List[Tuple[str, str]] = []
    for link in parse_header_links(link_header):
        url = (link.get("url") or "").strip()
        for rel in (link.get("rel") or "").split():
            pairs.append((rel, url))
    return pairs


def _find_rel(pairs: List[Tuple[str, str]], rel: str) -> Optional[str]:
    found = None
    for name, url in pairs:
        if name == rel:
            found = url
    return found


def parse_page(url: str) -> int:
    """Extract the single integer ``page`` query parameter from ``url``."""
    values = parse_qs(urlsplit(url).query, keep_blank_values=True).get("page", [])
    if not values:
        raise ValueError("Page query parameter missing but link header present")
    if len(values) != 1:
        raise ValueError("Multiple values for page query parameter")
    try:
        return int(values[0])
    except ValueError as exc:
        raise ValueError(f"Unable to convert page query parameter {values[0]!r} to an int") from exc


def resolve_cursor(link_header: Optional[str]) -> PageCursor:
    """Decide whether another page exists and which pages bound the walk."""
    pairs = parse_link_header(link_header)
    if not pairs:
        return NO_MORE_PAGES

    next_url = _find_rel(pairs, NEXT_REL)
    if next_url is None:
        return NO_MORE_PAGES

    try:
        next_page = parse_page(next_url)
    except ValueError:
        return NO_MORE_PAGES

    last_url = _find_rel(pairs, LAST_REL)
    if last_url is None:
        raise PaginationError("Link header advertises a next page without a last page")
    try:
        last_page = parse_page(last_url)
    except ValueError as exc:
        raise PaginationError(f"Unable to parse page query parameter used in pagination: {exc}") from exc

    return PageCursor(has_more=True, next_page=next_page, last_page=last_page)


__all__ = ["NEXT_REL", "LAST_REL", "parse_link_header", "parse_page", "resolve_cursor"]
