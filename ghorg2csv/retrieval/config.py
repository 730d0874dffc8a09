"""Central configuration constants for the GitHub organization retrieval."""

from __future__ import annotations

import os

TOKEN_ENV_VAR = "GHTOKEN"
USER_AGENT = "ghorg2csv/0.2"
BASE_URL = os.getenv("GHORG_BASE_URL", "https://api.github.com").rstrip("/")
ACCEPT_HEADER = "application/vnd.github.v3+json"
PER_PAGE = int(os.getenv("GHORG_PER_PAGE", "100"))  # 0 = let the API decide
REQUEST_TIMEOUT = int(os.getenv("GHORG_REQUEST_TIMEOUT", "90"))  # 0 = no timeout
MAX_WORKERS = max(1, int(os.getenv("GHORG_MAX_WORKERS", "8")))
ADMIN_ROLE = "admin"

__all__ = [
    "TOKEN_ENV_VAR",
    "USER_AGENT",
    "BASE_URL",
    "ACCEPT_HEADER",
    "PER_PAGE",
    "REQUEST_TIMEOUT",
    "MAX_WORKERS",
    "ADMIN_ROLE",
]
