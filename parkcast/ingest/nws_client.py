"""NWS (api.weather.gov) HTTP client with pacing and rate limit handling."""

import asyncio
import logging
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

import httpx

from parkcast.ingest.errors import MalformedResponse, NetworkError, RateLimited, UpstreamError
from parkcast.ingest.pacer import RequestPacer

logger = logging.getLogger(__name__)

NWS_BASE_URL = "https://api.weather.gov"
DEFAULT_USER_AGENT = "parkcast/0.1.0 (contact@example.com)"
GEO_JSON_ACCEPT = "application/geo+json, application/json;q=0.9, */*;q=0.8"


class NwsClient:
    def __init__(
        self,
        base_url: str = NWS_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        max_attempts: int = 3,
        retry_base_delay: float = 1.0,
        request_delay: float = 1.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_base_delay = retry_base_delay
        self.pacer = RequestPacer(request_delay)
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": GEO_JSON_ACCEPT}

    async def fetch(self, url: str) -> Any:
        """GET url and return the decoded JSON body.

        Retries on 429, honoring Retry-After when the server sends one.
        """
        for attempt in range(self.max_attempts):
            await self.pacer.wait()
            try:
                resp = await self._http.get(
                    url, headers=self.headers, timeout=self.timeout
                )
            except httpx.RequestError as e:
                raise NetworkError(url, str(e) or type(e).__name__) from e

            if resp.status_code == 429:
                if attempt < self.max_attempts - 1:
                    delay = self._retry_delay(resp, attempt)
                    logger.warning(
                        "NWS %s returned 429, retrying in %.1fs (attempt %d/%d)",
                        url, delay, attempt + 1, self.max_attempts,
                    )
                    await asyncio.sleep(delay)
                    continue
                break

            if not resp.is_success:
                raise UpstreamError(resp.status_code, url)

            try:
                return resp.json()
            except ValueError as e:
                raise MalformedResponse("Response body is not valid JSON", url) from e

        raise RateLimited(url, self.max_attempts)

    def _retry_delay(self, resp: httpx.Response, attempt: int) -> float:
        retry_after = parse_retry_after(resp.headers.get("Retry-After"))
        if retry_after is not None:
            return retry_after
        return self.retry_base_delay * (2**attempt)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "NwsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def parse_retry_after(value: str | None, now: datetime | None = None) -> float | None:
    """Seconds to wait for a Retry-After header (delta-seconds or HTTP date)."""
    if not value:
        return None
    value = value.strip()
    if value.isdigit():
        return float(value)
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=UTC)
    if now is None:
        now = datetime.now(UTC)
    return max(0.0, (when - now).total_seconds())
