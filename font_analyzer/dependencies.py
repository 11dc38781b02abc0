# ─────────────────────────────────────────────────────────────────────────────
# Dependency Injection — FastAPI Depends() providers
# ─────────────────────────────────────────────────────────────────────────────
# State flows: lifespan creates → app.state stores → Depends() injects.
# ─────────────────────────────────────────────────────────────────────────────


from fastapi import Request

from font_analyzer.config import Settings
from font_analyzer.services.typographer import TypographerService


def get_typographer(request: Request) -> TypographerService:
    """Inject TypographerService into endpoints via Depends()."""
    return request.app.state.typographer


def get_settings_dep(request: Request) -> Settings:
    """Inject Settings into endpoints via Depends()."""
    return request.app.state.settings
