"""Run-scoped cache guaranteeing one profile fetch per login."""

from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Callable, Dict, Optional

from .models import UserDetail


class LookupCache:
    """Map login -> UserDetail, filled lazily through ``fetch``.

    Safe to share between worker threads: a login requested by two workers at
    the same time is fetched once and the second worker waits for the first.
    Failures are not cached.
    """

    def __init__(self, fetch: Callable[[str], UserDetail]) -> None:
        self._fetch = fetch
        self._lock = threading.Lock()
        self._entries: Dict[str, UserDetail] = {}
        self._inflight: Dict[str, Future] = {}
        self.fetch_count = 0

    def resolve(self, login: str) -> UserDetail:
        with self._lock:
            cached = self._entries.get(login)
            if cached is not None:
                return cached
            pending = self._inflight.get(login)
            if pending is None:
                pending = Future()
                self._inflight[login] = pending
                owner = True
                self.fetch_count += 1
            else:
                owner = False

        if not owner:
            return pending.result()

        try:
            detail = self._fetch(login)
        except BaseException as exc:
            with self._lock:
                self._inflight.pop(login, None)
            pending.set_exception(exc)
            raise

        with self._lock:
            self._entries[login] = detail
            self._inflight.pop(login, None)
        pending.set_result(detail)
        return detail

    def get(self, login: str) -> Optional[UserDetail]:
        with self._lock:
            return self._entries.get(login)

    def snapshot(self) -> Dict[str, UserDetail]:
        with self._lock:
            return dict(self._entries)

    def __contains__(self, login: object) -> bool:
        with self._lock:
            return login in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["LookupCache"]
