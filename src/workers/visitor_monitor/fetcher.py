"""
Status page fetcher.

One ``httpx.AsyncClient`` is kept open for the whole run; the token is
appended verbatim to the configured base URL.
"""

from __future__ import annotations

import logging

import httpx

from core.exceptions import FetchError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/121.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "de-DE,de;q=0.9,en;q=0.8",
}
REQUEST_TIMEOUT = 30.0


class PageFetcher:
    """Downloads the client counter page for a location token."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            headers=DEFAULT_HEADERS,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def url_for(self, token: str) -> str:
        return f"{self.base_url}{token}"

    async def fetch(self, token: str, *, location: str = "") -> str:
        """
        Fetch the page for ``token`` and return its HTML text.

        Raises:
            FetchError: network failure, timeout, non-2xx status or a body
                that does not decode with the declared charset.
        """
        url = self.url_for(token)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"HTTP {exc.response.status_code} fetching page for {location or 'token'}",
                location=location,
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(
                f"Request failed for {location or 'token'}: {exc!r}",
                location=location,
            ) from exc

        encoding = response.charset_encoding or "utf-8"
        try:
            html = response.content.decode(encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            raise FetchError(
                f"Undecodable body ({encoding}) for {location or 'token'}",
                location=location,
                status_code=response.status_code,
            ) from exc

        logger.debug("Fetched %d chars for %s", len(html), location or url)
        return html

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> PageFetcher:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
