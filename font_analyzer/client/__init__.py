"""Client side: suggestion fetching, request orchestration and font preview."""

from font_analyzer.client.font_loader import FontLinkLoader, FontPreview, google_fonts_stylesheet_url
from font_analyzer.client.orchestrator import FALLBACK_SUGGESTION, RequestOrchestrator
from font_analyzer.client.state import RequestState, RequestStatus
from font_analyzer.client.suggestion_client import SuggestionClient

__all__ = [
    "FALLBACK_SUGGESTION",
    "FontLinkLoader",
    "FontPreview",
    "RequestOrchestrator",
    "RequestState",
    "RequestStatus",
    "SuggestionClient",
    "google_fonts_stylesheet_url",
]
