# ─────────────────────────────────────────────────────────────────────────────
# Request Orchestrator — decides whether to ask, and what to show
# ─────────────────────────────────────────────────────────────────────────────
# Owns:
#   - the in-flight latch (one submission at a time)
#   - dedup memory (last title that produced a result, real or fallback)
#   - the observable fields: error, loading, result
#   - the network-failure fallback to a canned suggestion
#
# Short-circuits, in order: empty title → in flight → same as last title.
# Runs on one asyncio loop; the latch is set before the first await, so
# check-and-set cannot interleave with another submit().
# ─────────────────────────────────────────────────────────────────────────────


import asyncio
from collections.abc import Callable

import structlog

from font_analyzer.client.state import RequestState
from font_analyzer.client.suggestion_client import SleepFunc, SuggestionClient
from font_analyzer.exceptions import (
    FontAnalyzerError,
    TitleValidationError,
    is_network_failure,
)
from font_analyzer.logging_config import truncate_title
from font_analyzer.schemas import Suggestion

logger = structlog.get_logger(__name__)

FALLBACK_SUGGESTION = Suggestion(
    font_name="Press Start 2P",
    reason=(
        "Network connection failed. Showing mock response for debugging. "
        "The title suggests a clear, nostalgic 8-bit style."
    ),
)

ResultListener = Callable[[Suggestion], None]


class RequestOrchestrator:
    """Single entry point between user input and the suggestion client.

    ``error``, ``loading`` and ``result`` are the fields a presentation
    layer reads after each ``submit``. Result listeners fire only when the
    displayed suggestion actually changes.
    """

    def __init__(
        self,
        client: SuggestionClient,
        *,
        fallback_delay_seconds: float = 0.5,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._client = client
        self._fallback_delay = fallback_delay_seconds
        self._sleep = sleep

        self.error: str | None = None
        self.loading: bool = False
        self.result: Suggestion | None = None

        self._in_flight = False
        self._last_title: str | None = None
        self._listeners: list[ResultListener] = []

    @property
    def state(self) -> RequestState:
        return RequestState.derive(loading=self.loading, error=self.error, result=self.result)

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def last_title(self) -> str | None:
        return self._last_title

    def add_result_listener(self, listener: ResultListener) -> None:
        self._listeners.append(listener)

    async def submit(self, title: str | None, is_explicit_submission: bool = True) -> RequestState:
        """Validate, dedup, then fetch a suggestion for ``title``.

        Never raises: every outcome is reflected in ``error``/``result``
        and the returned state snapshot.
        """
        current = (title or "").strip()
        if not current:
            self.error = TitleValidationError().message
            return self.state

        if self._in_flight:
            logger.debug("submit_ignored", reason="in_flight", title=truncate_title(current))
            return self.state

        if self._last_title == current:
            logger.debug("submit_ignored", reason="unchanged_title", title=truncate_title(current))
            return self.state

        self._in_flight = True
        self.loading = True
        self.error = None
        logger.info(
            "suggestion_requested",
            title=truncate_title(current),
            trigger="form" if is_explicit_submission else "programmatic",
        )

        try:
            suggestion = await self._client.fetch_suggestion(current)
            self._show(suggestion)
            self._last_title = current
        except Exception as exc:
            if is_network_failure(exc):
                await self._fall_back(current)
            else:
                message = (exc.message if isinstance(exc, FontAnalyzerError) else str(exc)).rstrip(".")
                logger.error("suggestion_failed", error=message or "Unknown error")
                self.error = f"Server Error: {message or 'Unknown error'}."
        finally:
            self._in_flight = False
            self.loading = False

        return self.state

    async def _fall_back(self, title: str) -> None:
        logger.warning(
            "network_failure_fallback",
            endpoint=self._client.endpoint,
            font_name=FALLBACK_SUGGESTION.font_name,
        )
        await self._sleep(self._fallback_delay)
        self._show(FALLBACK_SUGGESTION)
        self.error = (
            f"[MOCK ACTIVE] API server not found at {self._client.endpoint}. "
            f"Displaying mock font: {FALLBACK_SUGGESTION.font_name}."
        )
        # The mock counts as a result, so the same title is not retried.
        self._last_title = title

    def _show(self, suggestion: Suggestion) -> bool:
        """Replace the displayed result unless it is field-wise identical."""
        if suggestion.same_as(self.result):
            return False
        self.result = suggestion
        for listener in self._listeners:
            try:
                listener(suggestion)
            except Exception:
                logger.exception("result_listener_failed", font_name=suggestion.font_name)
        return True
