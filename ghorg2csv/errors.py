"""Error taxonomy shared by every stage of the org report run."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Machine-readable tag carried by every ReportError."""

    CONFIG = "config"
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    DECODE = "decode"
    PAGINATION = "pagination"
    CONSISTENCY = "consistency"
    OUTPUT = "output"


EXIT_CODES = {
    ErrorKind.CONFIG: 2,
}


class ReportError(Exception):
    """Base exception for all failures raised while building the report."""

    kind: ErrorKind = ErrorKind.CONSISTENCY

    def __init__(self, message: str, stage: str = "run") -> None:
        self.message = message
        self.stage = stage
        super().__init__(f"[{stage}] {message}")

    @property
    def exit_code(self) -> int:
        return EXIT_CODES.get(self.kind, 1)


class ConfigError(ReportError):
    """Raised when required configuration (e.g. the API token) is missing."""

    kind = ErrorKind.CONFIG

    def __init__(self, message: str, stage: str = "config") -> None:
        super().__init__(message, stage)


class TransportError(ReportError):
    """Raised when the HTTP request itself could not be completed."""

    kind = ErrorKind.TRANSPORT


class HTTPStatusError(ReportError):
    """Raised when GitHub answers with a non-success status."""

    kind = ErrorKind.HTTP_STATUS

    def __init__(self, status: int, url: str, stage: str = "run", detail: Optional[str] = None) -> None:
        self.status = status
        self.url = url
        message = f"API response code was {status} for {url}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, stage)


class DecodeError(ReportError):
    """Raised when a response body is not the JSON shape we expect."""

    kind = ErrorKind.DECODE


class PaginationError(ReportError):
    """Raised when the last-page relation of a Link header is unusable."""

    kind = ErrorKind.PAGINATION

    def __init__(self, message: str, stage: str = "pagination") -> None:
        super().__init__(message, stage)


class ConsistencyError(ReportError):
    """Raised when the API returns data that contradicts the org/repo model."""

    kind = ErrorKind.CONSISTENCY


class OutputError(ReportError):
    """Raised when the CSV report cannot be written."""

    kind = ErrorKind.OUTPUT

    def __init__(self, message: str, stage: str = "csv") -> None:
        super().__init__(message, stage)


__all__ = [
    "ErrorKind",
    "ReportError",
    "ConfigError",
    "TransportError",
    "HTTPStatusError",
    "DecodeError",
    "PaginationError",
    "ConsistencyError",
    "OutputError",
]
