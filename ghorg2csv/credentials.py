"""Utilities for loading the GitHub API credential from the environment."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from .errors import ConfigError
from .retrieval.config import TOKEN_ENV_VAR


def load_github_token(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the token from GHTOKEN; raise ConfigError when unset or blank."""

    env = os.environ if environ is None else environ
    token = (env.get(TOKEN_ENV_VAR) or "").strip()
    if not token:
        raise ConfigError(f"Required environmental variable '{TOKEN_ENV_VAR}' not found")
    return token


__all__ = ["load_github_token"]
