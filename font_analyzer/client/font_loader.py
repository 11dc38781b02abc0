# ─────────────────────────────────────────────────────────────────────────────
# Font-Link Loader — keeps exactly one Google Fonts stylesheet link active
# ─────────────────────────────────────────────────────────────────────────────


from dataclasses import dataclass
from urllib.parse import quote

import structlog

from font_analyzer.schemas import Suggestion

logger = structlog.get_logger(__name__)

GOOGLE_FONTS_CSS_URL = "https://fonts.googleapis.com/css2"
FONT_LINK_ID = "google-font-link"


def google_fonts_stylesheet_url(font_name: str) -> str:
    """Stylesheet URL for ``font_name`` at weights 400/700/900.

    Spaces become ``+`` as Google Fonts expects ("Press Start 2P" →
    "Press+Start+2P").
    """
    family = "+".join(quote(part, safe="") for part in font_name.split())
    return f"{GOOGLE_FONTS_CSS_URL}?family={family}:wght@400;700;900&display=swap"


@dataclass(frozen=True)
class FontLink:
    href: str
    font_name: str
    id: str = FONT_LINK_ID
    rel: str = "stylesheet"


class FontLinkLoader:
    """Holds the single active font link; replaces it when the font changes."""

    def __init__(self) -> None:
        self._link: FontLink | None = None
        self.loads = 0

    @property
    def active_link(self) -> FontLink | None:
        return self._link

    def ensure_font_loaded(self, font_name: str) -> None:
        if not font_name:
            return
        if self._link is not None and self._link.font_name == font_name:
            return

        self._link = FontLink(href=google_fonts_stylesheet_url(font_name), font_name=font_name)
        self.loads += 1
        logger.info("font_link_replaced", font_name=font_name, href=self._link.href)


class FontPreview:
    """Result listener that loads a font only when a different one arrives."""

    def __init__(self, loader: FontLinkLoader) -> None:
        self._loader = loader
        self.current_font: str | None = None

    def __call__(self, suggestion: Suggestion) -> None:
        next_font = suggestion.font_name.strip()
        if not next_font or next_font == self.current_font:
            return
        self._loader.ensure_font_loaded(next_font)
        self.current_font = next_font
