# ─────────────────────────────────────────────────────────────────────────────
# Test Helpers — scripted HTTP handlers and a recording sleep
# ─────────────────────────────────────────────────────────────────────────────


import json
from collections.abc import Callable

import httpx

ENDPOINT = "http://suggest.test/api/suggest-font"

Handler = Callable[[httpx.Request], httpx.Response]


class SleepRecorder:
    """Stand-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def suggestion_response(font_name: str = "Playfair Display", reason: str = "Elegant serif.") -> httpx.Response:
    return httpx.Response(200, json={"font_name": font_name, "reason": reason})


def scripted(*steps: httpx.Response | Exception) -> tuple[Handler, list[httpx.Request]]:
    """Handler that plays ``steps`` in order (exceptions are raised)."""
    queue = list(steps)
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        step = queue.pop(0)
        if isinstance(step, Exception):
            raise step
        return step

    return handler, seen


def connect_error(message: str = "All connection attempts failed") -> httpx.ConnectError:
    return httpx.ConnectError(message)


def request_body(request: httpx.Request) -> dict:
    return json.loads(request.content)
