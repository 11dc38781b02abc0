# ─────────────────────────────────────────────────────────────────────────────
# Custom Exceptions + FastAPI Exception Handlers
# ─────────────────────────────────────────────────────────────────────────────
# Client side: TitleValidationError, TransientNetworkFailure, UpstreamError.
# Server side: MissingPromptError, AIProviderError, AIResponseFormatError.
# Every error carries a message and an HTTP status; server errors may also
# carry extra JSON fields (``details``, ``raw_response``) for the client.
# ─────────────────────────────────────────────────────────────────────────────


from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)

# Transport error markers that identify a network-level failure by message.
NETWORK_FAILURE_MARKERS: tuple[str, ...] = ("Failed to fetch", "NetworkError")


# ── Exception hierarchy ──────────────────────────────────────────────────────


class FontAnalyzerError(Exception):
    """Base exception for all font analyzer errors."""

    def __init__(self, message: str, status_code: int = 500, **extra: Any):
        self.message = message
        self.status_code = status_code
        self.extra = extra
        super().__init__(message)

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message, "type": type(self).__name__, **self.extra}


class ConfigurationError(FontAnalyzerError):
    """Raised at startup when required configuration is missing."""


# ── Client side ──────────────────────────────────────────────────────────────


class TitleValidationError(FontAnalyzerError):
    """Raised for an empty or whitespace-only title."""

    def __init__(self) -> None:
        super().__init__("Please enter a title to analyze.", status_code=400)


class TransientNetworkFailure(FontAnalyzerError):
    """The suggestion service could not be reached at the transport level."""

    def __init__(self, endpoint: str, cause: str):
        super().__init__(
            f"NetworkError: failed to reach {endpoint} ({cause})",
            status_code=503,
        )
        self.endpoint = endpoint


class UpstreamError(FontAnalyzerError):
    """The suggestion service answered, but not with a usable suggestion."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message, status_code=status_code or 502)
        self.upstream_status = status_code


def is_network_failure(exc: BaseException) -> bool:
    """Whether ``exc`` signals transport unreachability rather than an HTTP error."""
    if isinstance(exc, TransientNetworkFailure):
        return True
    if isinstance(exc, UpstreamError):
        return False
    text = str(exc)
    return any(marker in text for marker in NETWORK_FAILURE_MARKERS)


# ── Server side ──────────────────────────────────────────────────────────────


class MissingPromptError(FontAnalyzerError):
    """Raised when the request body has no usable ``prompt``."""

    def __init__(self) -> None:
        super().__init__(
            'Missing "prompt" in request body. Please provide the title text.',
            status_code=400,
        )


class PromptTooLongError(FontAnalyzerError):
    """Raised when the title exceeds the configured maximum length."""

    def __init__(self, max_length: int):
        super().__init__(
            f'"prompt" must be at most {max_length} characters.',
            status_code=400,
        )


class AIProviderError(FontAnalyzerError):
    """Raised when the generative-AI provider call fails."""

    def __init__(self, details: str):
        super().__init__(
            "Failed to generate content from AI.",
            status_code=500,
            details=details,
        )


class AIResponseFormatError(FontAnalyzerError):
    """Raised when the provider answers with text that is not the expected JSON."""

    def __init__(self, raw_response: str):
        super().__init__(
            "AI returned non-JSON data.",
            status_code=500,
            raw_response=raw_response,
        )


# ── Handler registration ────────────────────────────────────────────────────


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app.

    Endpoints raise FontAnalyzerError subclasses; these handlers catch them
    and return structured JSON.
    """

    @app.exception_handler(FontAnalyzerError)
    async def font_analyzer_error_handler(request: Request, exc: FontAnalyzerError) -> JSONResponse:
        logger.error(
            "font_analyzer_error",
            error=exc.message,
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_error", error=str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "type": "UnhandledError"},
        )
