# ─────────────────────────────────────────────────────────────────────────────
# FastAPI Application Factory + Lifespan
# ─────────────────────────────────────────────────────────────────────────────
# Entrypoint: uvicorn font_analyzer.main:create_app --factory --port 3000
# ─────────────────────────────────────────────────────────────────────────────

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.requests import Request
from starlette.responses import JSONResponse

from font_analyzer.config import Settings, get_settings
from font_analyzer.exceptions import ConfigurationError, register_exception_handlers
from font_analyzer.logging_config import configure_logging
from font_analyzer.rate_limit import limiter
from font_analyzer.routes import health, suggest
from font_analyzer.services.typographer import TypographerService

logger = structlog.get_logger(__name__)


async def _rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Return a structured JSON 429 consistent with FontAnalyzerError responses."""
    logger.warning(
        "rate_limit_exceeded",
        path=request.url.path,
        method=request.method,
        detail=str(exc.detail),
    )
    return JSONResponse(
        status_code=429,
        content={"error": f"Rate limit exceeded: {exc.detail}", "type": "RateLimitExceeded"},
    )


def _configure_otel(exporter_type: str) -> None:
    """Install a console span exporter; other exporter names are ignored."""
    if exporter_type != "console":
        logger.warning("unknown_otel_exporter", exporter=exporter_type)
        return

    from opentelemetry import trace
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

    provider = TracerProvider()
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)
    logger.info("otel_configured", exporter=exporter_type)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the typographer service on startup and close it on shutdown.

    A missing provider key is fatal: the server refuses to start rather
    than answer every request with a provider error.
    """
    import os

    settings = get_settings()

    otel_exporter = os.environ.get("OTEL_EXPORTER", "")
    if otel_exporter:
        _configure_otel(otel_exporter)

    if not settings.gemini_api_key.get_secret_value():
        logger.critical("missing_api_key", hint="Set GEMINI_API_KEY in the environment or .env")
        raise ConfigurationError("GEMINI_API_KEY is not set.")

    typographer = TypographerService(settings)
    app.state.settings = settings
    app.state.typographer = typographer

    logger.info(
        "server_started",
        port=settings.port,
        model=settings.gemini_model,
        endpoint=f"http://localhost:{settings.port}/api/suggest-font",
    )

    yield

    await typographer.aclose()


def _parse_origins(settings: Settings) -> list[str]:
    """Comma-separated origins → list. Production allows no cross origin."""
    if settings.is_production:
        return []
    return [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]


def create_app() -> FastAPI:
    """Application factory. Invoked by: uvicorn font_analyzer.main:create_app --factory"""
    settings = get_settings()
    configure_logging(log_level=settings.log_level, json_output=settings.log_json)

    app = FastAPI(
        title="Font Analyzer",
        description="Suggests a Google Font for a title",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_parse_origins(settings),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(suggest.router, tags=["suggest"])

    return app
