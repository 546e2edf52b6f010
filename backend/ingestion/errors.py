"""
Remote-source error taxonomy and classification.

Remote sources raise the structured errors below; classify_error maps any
exception (structured, raw httpx, or unknown) to one ErrorKind so the
fallback layer can pick the user-facing notification.
"""

from __future__ import annotations

import json
from enum import Enum

import httpx


class ErrorKind(str, Enum):
    ACCESS_DENIED = "access_denied"
    TIMEOUT = "timeout"
    NETWORK = "network"
    GENERIC = "generic"


class RemoteSourceError(Exception):
    """Raised when the remote highlights source fails."""

    kind: ErrorKind = ErrorKind.GENERIC


class AccessDeniedError(RemoteSourceError):
    """Raised when the remote source rejects our token (401/403)."""

    kind = ErrorKind.ACCESS_DENIED


class NetworkError(RemoteSourceError):
    """Raised on transport failures or unparseable responses."""

    kind = ErrorKind.NETWORK


class FetchTimeoutError(RemoteSourceError):
    """Raised when the remote call does not settle before the deadline."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"Request timed out after {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds


# Last resort for exceptions that carry no structure.
_ACCESS_DENIED_MARKERS = ("403", "401", "forbidden", "unauthorized", "access denied")
_TIMEOUT_MARKERS = ("timed out", "timeout")
_NETWORK_MARKERS = ("failed to fetch", "network", "connection refused", "json")


def _classify_message(message: str) -> ErrorKind:
    text = message.lower()
    if any(m in text for m in _ACCESS_DENIED_MARKERS):
        return ErrorKind.ACCESS_DENIED
    if any(m in text for m in _TIMEOUT_MARKERS):
        return ErrorKind.TIMEOUT
    if any(m in text for m in _NETWORK_MARKERS):
        return ErrorKind.NETWORK
    return ErrorKind.GENERIC


def classify_error(exc: BaseException) -> ErrorKind:
    """Map an exception from the remote path to an ErrorKind."""
    if isinstance(exc, RemoteSourceError) and exc.kind is not ErrorKind.GENERIC:
        return exc.kind
    if isinstance(exc, httpx.TimeoutException):
        return ErrorKind.TIMEOUT
    if isinstance(exc, httpx.HTTPStatusError):
        if exc.response.status_code in (401, 403):
            return ErrorKind.ACCESS_DENIED
        return ErrorKind.GENERIC
    if isinstance(exc, (httpx.RequestError, json.JSONDecodeError)):
        return ErrorKind.NETWORK
    return _classify_message(str(exc))
