"""Tests for ghorg2csv.retrieval.fanout covering the concurrent collaborator/admin waves.

Run with coverage:
    pytest tests/test_fanout.py --maxfail=1 -v --cov=ghorg2csv.retrieval.fanout --cov-report=term-missing
"""

import threading
import time

import pytest

from conftest import ok, status
from ghorg2csv.errors import HTTPStatusError
from ghorg2csv.retrieval import collectors, fanout
from ghorg2csv.retrieval.lookup import LookupCache
from ghorg2csv.retrieval.models import Collaborator, Repository, UserDetail

ORG = "acme"


def _repos(*names):
    return [Repository(id=i, full_name=f"{ORG}/{n}", name=n) for i, n in enumerate(names)]


def test_run_wave_returns_results_keyed_by_item():
    assert fanout.run_wave([1, 2, 3], lambda x: x * 10, max_workers=2) == {1: 10, 2: 20, 3: 30}
    assert fanout.run_wave([], lambda x: x) == {}


def test_run_wave_actually_overlaps_tasks():
    active = []
    peak = []
    lock = threading.Lock()

    def task(item):
        with lock:
            active.append(item)
            peak.append(len(active))
        time.sleep(0.05)
        with lock:
            active.remove(item)
        return item

    fanout.run_wave(range(4), task, max_workers=4)
    assert max(peak) > 1


def test_run_wave_respects_concurrency_cap():
    active = []
    peak = []
    lock = threading.Lock()

    def task(item):
        with lock:
            active.append(item)
            peak.append(len(active))
        time.sleep(0.02)
        with lock:
            active.remove(item)

    fanout.run_wave(range(10), task, max_workers=2)
    assert max(peak) <= 2


def test_run_wave_propagates_first_failure():
    def task(item):
        if item == 3:
            raise HTTPStatusError(500, "u", "collaborators c")
        return item

    with pytest.raises(HTTPStatusError):
        fanout.run_wave(range(6), task, max_workers=2)


def test_scenario_two_repos_share_one_admin(fake_gateway):
    url_a = collectors.collaborators_url(ORG, "A")
    url_b = collectors.collaborators_url(ORG, "B")
    alice_url = collectors.user_url("alice")
    gateway = fake_gateway({
        (url_a, None): ok([{"login": "alice", "role_name": "admin"}, {"login": "bob", "role_name": "push"}]),
        (url_b, None): ok([{"login": "alice", "role_name": "admin"}]),
        (alice_url, None): ok({"login": "alice", "name": "Alice", "email": "a@example.com"}),
    })

    index = fanout.fetch_all_collaborators(gateway, ORG, _repos("A", "B"), max_workers=4)
    assert {k: [c.login for c in v] for k, v in index.admins.items()} == {"A": ["alice"], "B": ["alice"]}
    assert [c.login for c in index.collaborators["A"]] == ["alice", "bob"]
    assert index.admin_logins() == ["alice"]

    cache = LookupCache(lambda login: collectors.get_user_detail(gateway, login))
    details = fanout.resolve_admin_details(cache, index.admins, max_workers=4)
    assert details == {"alice": UserDetail("alice", "Alice", "a@example.com")}
    assert gateway.urls().count(alice_url) == 1


def test_collaborator_index_keeps_repository_order(fake_gateway):
    names = ["z", "m", "a", "q"]
    routes = {(collectors.collaborators_url(ORG, n), None): ok([]) for n in names}
    index = fanout.fetch_all_collaborators(fake_gateway(routes), ORG, _repos(*names), max_workers=3)
    assert list(index.collaborators) == names
    assert list(index.admins) == names


def test_collaborator_failure_aborts_the_wave(fake_gateway):
    routes = {
        (collectors.collaborators_url(ORG, "A"), None): ok([]),
        (collectors.collaborators_url(ORG, "B"), None): status(403),
    }
    with pytest.raises(HTTPStatusError) as excinfo:
        fanout.fetch_all_collaborators(fake_gateway(routes), ORG, _repos("A", "B"))
    assert excinfo.value.stage == "collaborators B"


def test_resolve_admin_details_dedupes_logins():
    seen = []
    cache = LookupCache(lambda login: seen.append(login) or UserDetail(login))
    admins = {
        "A": [Collaborator("alice", "admin", "A"), Collaborator("carol", "admin", "A")],
        "B": [Collaborator("alice", "admin", "B")],
        "C": [],
    }
    details = fanout.resolve_admin_details(cache, admins, max_workers=3)
    assert set(details) == {"alice", "carol"}
    assert sorted(seen) == ["alice", "carol"]


def test_distinct_logins_keeps_first_seen_order():
    index = fanout.CollaboratorIndex(admins={
        "A": [Collaborator("carol", "admin", "A"), Collaborator("alice", "admin", "A")],
        "B": [Collaborator("alice", "admin", "B"), Collaborator("bob", "admin", "B")],
    })
    assert index.admin_logins() == ["carol", "alice", "bob"]
    assert fanout.distinct_logins(index.admins) == index.admin_logins()
