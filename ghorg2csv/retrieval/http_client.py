"""Authenticated GET helper for the GitHub REST API.

The gateway never retries: any non-2xx status is handed back to the caller,
which decides how to fail. Only transport problems are raised here.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests.adapters import DEFAULT_POOLSIZE, HTTPAdapter

from ..errors import TransportError
from .config import ACCEPT_HEADER, REQUEST_TIMEOUT, USER_AGENT


@dataclass(frozen=True)
class GatewayResponse:
    """Raw result of one request: body text, status code and Link header."""

    body: str
    status: int
    link_header: str
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def log_http_error(resp: GatewayResponse) -> None:
    """Print a short, human-readable message when GitHub returns an error."""
    msg = (resp.body or "")[:300]
    try:
        payload = json.loads(resp.body or "{}")
        if isinstance(payload, dict):
            msg = payload.get("message") or payload.get("error") or msg
    except ValueError:
        pass
    print(f"[error] HTTP {resp.status} for {resp.url}\n  -> {msg}")


class GitHubGateway:
    """Thin wrapper around a requests.Session carrying the GitHub token."""

    def __init__(self, token: str, timeout: Optional[float] = REQUEST_TIMEOUT,
                 session: Optional[requests.Session] = None,
                 pool_size: int = DEFAULT_POOLSIZE) -> None:
        self.session = session or requests.Session()
        if pool_size > DEFAULT_POOLSIZE:
            # one pooled connection per worker thread
            adapter = HTTPAdapter(pool_maxsize=pool_size)
            self.session.mount("https://", adapter)
            self.session.mount("http://", adapter)
        self.session.headers.update(
            {
                "Accept": ACCEPT_HEADER,
                "User-Agent": USER_AGENT,
                "Authorization": f"token {token}",
            }
        )
        self.timeout = timeout or None

    def issue(self, method: str, url: str,
              headers: Optional[Dict[str, str]] = None,
              params: Optional[Dict[str, Any]] = None,
              stage: str = "request") -> GatewayResponse:
        """Send one request and return its body, status and Link header."""
        try:
            resp = self.session.request(
                method, url, headers=headers, params=params, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise TransportError(f"Problem sending request to {url}: {exc}", stage) from exc

        result = GatewayResponse(
            body=resp.text or "",
            status=resp.status_code,
            link_header=(resp.headers or {}).get("Link", "") or "",
            url=url,
        )
        if not result.ok:
            log_http_error(result)
        return result

    def get(self, url: str, params: Optional[Dict[str, Any]] = None,
            stage: str = "request") -> GatewayResponse:
        return self.issue("GET", url, params=params, stage=stage)

    def close(self) -> None:
        self.session.close()


__all__ = ["GatewayResponse", "GitHubGateway", "log_http_error"]
