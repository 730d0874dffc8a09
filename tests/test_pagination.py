"""Tests for ghorg2csv.retrieval.pagination covering Link header resolution.

Run with coverage:
    pytest tests/test_pagination.py --maxfail=1 -v --cov=ghorg2csv.retrieval.pagination --cov-report=term-missing
"""

import pytest

from ghorg2csv.errors import ErrorKind, PaginationError
from ghorg2csv.retrieval import pagination
from ghorg2csv.retrieval.models import PageCursor

BASE = "https://api.github.com/orgs/acme/repos"


def _link(rel, page=None, url=BASE):
    query = "" if page is None else f"?page={page}"
    return f'<{url}{query}>; rel="{rel}"'


def test_empty_header_means_no_more_pages():
    assert pagination.resolve_cursor("") == PageCursor(False, 0, 0)
    assert pagination.resolve_cursor(None).has_more is False
    assert pagination.resolve_cursor("   ").has_more is False


def test_next_and_last_relations_are_extracted():
    header = ", ".join([_link("next", 2), _link("last", 5)])
    cursor = pagination.resolve_cursor(header)
    assert cursor == PageCursor(has_more=True, next_page=2, last_page=5)
    assert cursor.should_continue()


def test_prev_and_first_relations_are_ignored():
    header = ", ".join([_link("prev", 1), _link("next", 3), _link("last", 4), _link("first", 1)])
    cursor = pagination.resolve_cursor(header)
    assert (cursor.next_page, cursor.last_page) == (3, 4)


def test_last_without_next_stops_the_walk():
    cursor = pagination.resolve_cursor(", ".join([_link("prev", 4), _link("last", 5)]))
    assert cursor.has_more is False


def test_bad_last_page_is_an_error():
    header = ", ".join([_link("next", 2), _link("last")])
    with pytest.raises(PaginationError) as excinfo:
        pagination.resolve_cursor(header)
    assert excinfo.value.kind is ErrorKind.PAGINATION


def test_non_integer_last_page_is_an_error():
    header = ", ".join([_link("next", 2), _link("last", "five")])
    with pytest.raises(PaginationError):
        pagination.resolve_cursor(header)


def test_next_without_last_is_an_error():
    with pytest.raises(PaginationError):
        pagination.resolve_cursor(_link("next", 2))


def test_bad_next_page_fails_open():
    header = ", ".join([_link("next"), _link("last", 5)])
    assert pagination.resolve_cursor(header).has_more is False

    header = ", ".join([_link("next", "x"), _link("last", 5)])
    assert pagination.resolve_cursor(header).has_more is False


def test_relations_match_exactly_not_by_substring():
    # rel names that merely contain next/last
    header = ", ".join([_link("nextgen", 2), _link("lastfm", 9)])
    assert pagination.resolve_cursor(header).has_more is False

    header = ", ".join([_link("next", 2), _link("lastfm", 9), _link("last", 3)])
    assert pagination.resolve_cursor(header).last_page == 3


def test_multi_valued_rel_counts_for_each_name():
    header = f'<{BASE}?page=2>; rel="next last"'
    assert pagination.resolve_cursor(header) == PageCursor(True, 2, 2)


def test_parse_link_header_keeps_order():
    header = ", ".join([_link("next", 2), _link("last", 5)])
    assert pagination.parse_link_header(header) == [
        ("next", f"{BASE}?page=2"),
        ("last", f"{BASE}?page=5"),
    ]


def test_parse_page_rejects_duplicates_and_missing():
    assert pagination.parse_page(f"{BASE}?per_page=100&page=7") == 7
    with pytest.raises(ValueError):
        pagination.parse_page(f"{BASE}?page=1&page=2")
    with pytest.raises(ValueError):
        pagination.parse_page(f"{BASE}?page=5&page=")
    with pytest.raises(ValueError):
        pagination.parse_page(BASE)


def test_cursor_stops_past_last_page():
    assert PageCursor(True, 6, 5).should_continue() is False
    assert PageCursor(True, 5, 5).should_continue() is True


def test_blank_duplicate_last_page_is_an_error():
    header = f'<{BASE}?page=2>; rel="next", <{BASE}?page=5&page=>; rel="last"'
    with pytest.raises(PaginationError):
        pagination.resolve_cursor(header)


def test_blank_duplicate_next_page_fails_open():
    header = f'<{BASE}?page=2&page=>; rel="next", <{BASE}?page=5>; rel="last"'
    assert pagination.resolve_cursor(header).has_more is False
