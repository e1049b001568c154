"""Error taxonomy for fetching and resolving GotSport pages.

Parsing never raises: a parser that finds nothing returns an empty result.
Only transport failures, non-2xx responses and unresolved team identities are
exceptions, and all of them derive from ``ScraperError``.
"""
from __future__ import annotations

from typing import Optional


class ScraperError(Exception):
    """Base class for all errors surfaced to callers of the scraping layer."""


class NetworkError(ScraperError):
    """The host could not be reached (DNS, connection reset, timeout...)."""

    def __init__(self, url: str, reason: Optional[str] = None):
        self.url = url
        self.reason = reason
        super().__init__("Could not reach GotSport. Check your connection and try again.")


class HttpStatusError(ScraperError):
    def __init__(self, url: str, status: int, message: str):
        self.url = url
        self.status = status
        super().__init__(message)


class UpstreamUnavailable(HttpStatusError):
    def __init__(self, url: str, status: int):
        super().__init__(url, status, "GotSport is temporarily unavailable. Please try again later.")


class PageNotFound(HttpStatusError):
    def __init__(self, url: str, status: int = 404):
        super().__init__(url, status, "Page not found. The event or group may have changed.")


class UpstreamError(HttpStatusError):
    def __init__(self, url: str, status: int):
        super().__init__(url, status, f"GotSport returned {status}. Please try again.")


class IdentityUnresolved(ScraperError):
    """No ``group=`` link could be found for a team."""

    def __init__(self, team_id: str):
        self.team_id = team_id
        super().__init__(
            "Could not find the league for this team. Refresh the team list and choose your team again."
        )


def error_for_status(url: str, status: int) -> HttpStatusError:
    """Map a non-2xx status code onto the matching error class."""
    if status >= 500:
        return UpstreamUnavailable(url, status)
    if status == 404:
        return PageNotFound(url, status)
    return UpstreamError(url, status)


__all__ = [
    "ScraperError",
    "NetworkError",
    "HttpStatusError",
    "UpstreamUnavailable",
    "PageNotFound",
    "UpstreamError",
    "IdentityUnresolved",
    "error_for_status",
]
