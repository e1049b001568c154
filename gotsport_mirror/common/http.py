"""Async page fetcher for GotSport HTML pages.

One GET per call, no retries: refresh is user-initiated, so retry policy
belongs to the caller. Non-2xx responses are mapped onto the error classes in
``gotsport_mirror.common.errors``.
"""
from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Optional, Protocol

import aiohttp

from ..core.config import Settings, settings as default_settings
from .errors import NetworkError, error_for_status
from .logging_utils import get_logger

ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class TextFetcher(Protocol):
    async def fetch_text(self, url: str) -> str: ...


def build_headers(user_agent: str, accept_language: str) -> dict[str, str]:
    return {
        "User-Agent": user_agent,
        "Accept": ACCEPT_HTML,
        "Accept-Language": accept_language,
    }


class PageFetcher:
    """Lädt GotSport-Seiten über eine gemeinsame aiohttp Session"""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[aiohttp.ClientSession] = None):
        self.settings = settings or default_settings
        self.session = session
        self._owns_session = session is None
        self.logger = get_logger("gotsport.fetcher")

    async def initialize(self) -> None:
        if self.session is None:
            self.session = aiohttp.ClientSession(
                headers=build_headers(self.settings.user_agent, self.settings.accept_language),
                timeout=aiohttp.ClientTimeout(total=self.settings.request_timeout_seconds),
            )
            self._owns_session = True

    async def cleanup(self) -> None:
        if self.session is not None and self._owns_session:
            await self.session.close()
        self.session = None

    async def __aenter__(self) -> "PageFetcher":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()

    async def fetch_text(self, url: str) -> str:
        """Return the body of *url*; raise a typed error on failure."""
        if self.session is None:
            await self.initialize()
        t0 = perf_counter()
        self.logger.debug("GET %s", url)
        try:
            async with self.session.get(url) as response:
                if not 200 <= response.status < 300:
                    self.logger.warning("GET %s -> HTTP %s", url, response.status)
                    raise error_for_status(url, response.status)
                text = await response.text(errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.warning("GET %s failed: %s", url, e)
            raise NetworkError(url, str(e) or e.__class__.__name__) from e
        self.logger.debug("Fetched %s in %.0f ms (%d chars)", url, (perf_counter() - t0) * 1000, len(text))
        return text


__all__ = ["TextFetcher", "PageFetcher", "build_headers", "ACCEPT_HTML"]
