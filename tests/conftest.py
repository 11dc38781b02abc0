# ─────────────────────────────────────────────────────────────────────────────
# Test Fixtures — shared across all tests
# ─────────────────────────────────────────────────────────────────────────────


from collections.abc import Callable

import httpx
import pytest
from fakes import ENDPOINT, Handler, SleepRecorder

from font_analyzer.client.suggestion_client import SuggestionClient
from font_analyzer.config import Settings


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_client(sleeper: SleepRecorder) -> Callable[..., SuggestionClient]:
    """Build a SuggestionClient whose HTTP traffic goes to ``handler``."""

    def _make(handler: Handler, max_retries: int = 3) -> SuggestionClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return SuggestionClient(
            ENDPOINT,
            http_client=http,
            max_retries=max_retries,
            backoff_base_seconds=0.5,
            sleep=sleeper,
        )

    return _make


@pytest.fixture
def test_settings() -> Settings:
    """Settings configured for testing — fake provider key, console logs."""
    return Settings(
        gemini_api_key="test-key",
        gemini_model="gemini-test",
        gemini_api_base="http://gemini.test/v1beta",
        log_json=False,
        log_level="DEBUG",
    )
