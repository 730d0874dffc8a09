"""Shared fakes for exercising the retrieval code without network access."""

import json
import threading
from typing import Any, Dict, Optional, Tuple

import pytest

from ghorg2csv.retrieval.http_client import GatewayResponse


def ok(payload: Any, link: str = "", url: str = "") -> GatewayResponse:
    return GatewayResponse(body=json.dumps(payload), status=200, link_header=link, url=url)


def status(code: int, body: str = "{}", url: str = "") -> GatewayResponse:
    return GatewayResponse(body=body, status=code, link_header="", url=url)


class FakeGateway:
    """Serve canned responses keyed by ``(url, page)``; records every call."""

    def __init__(self, routes: Dict[Tuple[str, Optional[int]], Any]) -> None:
        self.routes = routes
        self.calls = []
        self._lock = threading.Lock()

    def get(self, url, params=None, stage="request"):
        page = (params or {}).get("page")
        with self._lock:
            self.calls.append((url, page))
        result = self.routes[(url, page)]
        if isinstance(result, BaseException):
            raise result
        return result

    def close(self):
        pass

    def urls(self):
        return [url for url, _ in self.calls]


@pytest.fixture
def fake_gateway():
    return FakeGateway
