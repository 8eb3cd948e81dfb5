"""Typed errors raised by the NWS data-access layer."""


class WeatherApiError(Exception):
    """Base class for every failure surfaced by the forecast layer."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class RateLimited(WeatherApiError):
    """The upstream kept answering 429 until the retry budget ran out."""

    def __init__(self, url: str, attempts: int):
        super().__init__(
            f"Request to {url} failed due to repeated rate limiting "
            f"({attempts} attempts)",
            url,
        )
        self.attempts = attempts


class UpstreamError(WeatherApiError):
    def __init__(self, status_code: int, url: str):
        super().__init__(f"Request to {url} failed with status {status_code}", url)
        self.status_code = status_code


class MalformedResponse(WeatherApiError):
    def __init__(self, detail: str, url: str | None = None):
        message = detail if url is None else f"{detail} (from {url})"
        super().__init__(message, url)
        self.detail = detail


class NetworkError(WeatherApiError):
    """Transport failure before any HTTP status was received."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Request to {url} failed: {reason}", url)
