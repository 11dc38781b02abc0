# ─────────────────────────────────────────────────────────────────────────────
# POST /api/suggest-font — font suggestion endpoint (THIN)
# ─────────────────────────────────────────────────────────────────────────────


import structlog
from fastapi import APIRouter, Depends, Request

from font_analyzer.config import Settings
from font_analyzer.dependencies import get_settings_dep, get_typographer
from font_analyzer.exceptions import MissingPromptError, PromptTooLongError
from font_analyzer.logging_config import truncate_title
from font_analyzer.rate_limit import limiter, suggest_limit
from font_analyzer.schemas import Suggestion, SuggestRequest
from font_analyzer.services.typographer import TypographerService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/api/suggest-font", response_model=Suggestion)
@limiter.limit(suggest_limit)
async def suggest_font(
    request: Request,
    body: SuggestRequest,
    typographer: TypographerService = Depends(get_typographer),
    settings: Settings = Depends(get_settings_dep),
) -> Suggestion:
    """Suggest a Google Font for the title in ``body.prompt``.

    Expects ``{"prompt": "The title text to analyze"}`` and returns
    ``{"font_name": "...", "reason": "..."}``.
    """
    prompt = (body.prompt or "").strip()
    if not prompt:
        raise MissingPromptError()
    if len(prompt) > settings.max_prompt_length:
        raise PromptTooLongError(settings.max_prompt_length)

    logger.info("title_received", title=truncate_title(prompt))
    return await typographer.suggest(prompt)
