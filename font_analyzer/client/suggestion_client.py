# ─────────────────────────────────────────────────────────────────────────────
# Suggestion Client — one remote call with bounded retry + backoff
# ─────────────────────────────────────────────────────────────────────────────
# POST {"prompt": title} → {"font_name", "reason"}
#
#   2xx            → return immediately
#   404 or >= 500  → retry after 2**i * base seconds (no wait after the last)
#   other status   → stop at once, no backoff
#   transport error→ retry with the same backoff; on the last attempt raise
#                    TransientNetworkFailure
#
# Stateless: retry bookkeeping lives in the local frame of one call.
# ─────────────────────────────────────────────────────────────────────────────


import asyncio
from collections.abc import Awaitable, Callable

import httpx
import structlog

from font_analyzer.config import Settings
from font_analyzer.exceptions import TransientNetworkFailure, UpstreamError
from font_analyzer.logging_config import truncate_title
from font_analyzer.schemas import Suggestion

logger = structlog.get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


def is_retryable_status(status_code: int) -> bool:
    """404 and every 5xx are retried; all other failures are final."""
    return status_code == 404 or status_code >= 500


def error_message_from_response(response: httpx.Response | None) -> str:
    """Pick the most useful message out of a failed response."""
    if response is None:
        return "HTTP error! status: Network Error"
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("details", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return f"HTTP error! status: {response.status_code}"


class SuggestionClient:
    """Fetches a font suggestion for a title from the suggestion endpoint.

    The HTTP client and the sleep primitive are injectable so callers can
    share a connection pool and tests can observe backoff delays without
    waiting for them.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        max_retries: int = 3,
        backoff_base_seconds: float = 0.5,
        timeout_seconds: float | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._endpoint = endpoint
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout_seconds)
        self._max_retries = max_retries
        self._backoff_base = backoff_base_seconds
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "SuggestionClient":
        return cls(
            settings.suggestion_endpoint,
            max_retries=settings.max_retries,
            backoff_base_seconds=settings.backoff_base_seconds,
            timeout_seconds=settings.request_timeout_seconds,
            **kwargs,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def backoff(self, attempt: int) -> float:
        """Delay in seconds after 0-based ``attempt``: 0.5, 1.0, 2.0, ..."""
        return (2**attempt) * self._backoff_base

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "SuggestionClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def fetch_suggestion(self, title: str) -> Suggestion:
        """POST ``title`` and return the parsed Suggestion.

        Raises TransientNetworkFailure when the last attempt could not reach
        the service, and UpstreamError for every other failure.
        """
        response: httpx.Response | None = None

        for attempt in range(self._max_retries):
            is_last = attempt == self._max_retries - 1
            logger.debug(
                "suggestion_attempt",
                attempt=attempt + 1,
                max_attempts=self._max_retries,
                title=truncate_title(title),
            )
            try:
                response = await self._http.post(self._endpoint, json={"prompt": title})
            except httpx.TransportError as exc:
                if is_last:
                    raise TransientNetworkFailure(self._endpoint, type(exc).__name__) from exc
                delay = self.backoff(attempt)
                logger.warning(
                    "suggestion_retry_scheduled",
                    attempt=attempt + 1,
                    reason=type(exc).__name__,
                    delay_s=delay,
                )
                await self._sleep(delay)
                continue

            if response.is_success:
                break
            if not is_retryable_status(response.status_code):
                break
            if not is_last:
                delay = self.backoff(attempt)
                logger.warning(
                    "suggestion_retry_scheduled",
                    attempt=attempt + 1,
                    status=response.status_code,
                    delay_s=delay,
                )
                await self._sleep(delay)

        if response is None or not response.is_success:
            status = response.status_code if response is not None else None
            raise UpstreamError(error_message_from_response(response), status_code=status)

        try:
            return Suggestion.model_validate(response.json())
        except ValueError as exc:
            # Covers both malformed JSON and a body missing either field.
            raise UpstreamError(
                f"Unexpected suggestion payload: {exc}", status_code=response.status_code
            ) from exc
