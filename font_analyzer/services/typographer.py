# ─────────────────────────────────────────────────────────────────────────────
# Typographer Service — title → Gemini generateContent → Suggestion
# ─────────────────────────────────────────────────────────────────────────────
# Endpoints delegate here. This owns:
#   - the provider HTTP call (REST, API key header)
#   - extracting the model's text from the candidate envelope
#   - parsing that text as the {font_name, reason} JSON object
# Failures become AIProviderError / AIResponseFormatError; the exception
# handlers turn them into JSON responses.
# ─────────────────────────────────────────────────────────────────────────────


import json

import httpx
import structlog
from opentelemetry import trace
from pydantic import ValidationError

from font_analyzer.config import Settings
from font_analyzer.exceptions import AIProviderError, AIResponseFormatError
from font_analyzer.logging_config import truncate_title
from font_analyzer.pipeline.prompt_templates import build_generate_content_body
from font_analyzer.schemas import Suggestion

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)


def _provider_error_message(response: httpx.Response) -> str:
    """Gemini wraps errors as {"error": {"message": ...}}."""
    try:
        body = response.json()
    except ValueError:
        return f"Provider returned status {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return f"Provider returned status {response.status_code}"


class TypographerService:
    """Asks the generative-AI provider to pick a Google Font for a title.

    Created once in the app lifespan and stored in app.state; the HTTP
    client is shared across requests.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.provider_timeout_seconds)
        )

    @property
    def configured(self) -> bool:
        return bool(self._settings.gemini_api_key.get_secret_value())

    @property
    def model(self) -> str:
        return self._settings.gemini_model

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def suggest(self, title: str) -> Suggestion:
        """Return the provider's font suggestion for ``title``."""
        with tracer.start_as_current_span("suggest_font") as span:
            span.set_attribute("title_length", len(title))
            span.set_attribute("model", self.model)
            text = await self._generate(title)

        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            logger.error("ai_response_not_json", raw_response=text)
            raise AIResponseFormatError(text) from None

        try:
            suggestion = Suggestion.model_validate(parsed)
        except ValidationError:
            logger.error("ai_response_missing_fields", raw_response=text)
            raise AIResponseFormatError(text) from None

        logger.info(
            "font_suggested",
            title=truncate_title(title),
            font_name=suggestion.font_name,
        )
        return suggestion

    async def _generate(self, title: str) -> str:
        url = f"{self._settings.gemini_api_base}/models/{self.model}:generateContent"
        headers = {"x-goog-api-key": self._settings.gemini_api_key.get_secret_value()}

        try:
            response = await self._http.post(
                url, headers=headers, json=build_generate_content_body(title)
            )
        except httpx.HTTPError as exc:
            logger.error("ai_provider_unreachable", error=str(exc), error_type=type(exc).__name__)
            raise AIProviderError(str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            message = _provider_error_message(response)
            logger.error("ai_provider_error", status=response.status_code, error=message)
            raise AIProviderError(message)

        try:
            data = response.json()
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError):
            raise AIProviderError("Provider response contained no text candidate") from None

        return str(text).strip()
