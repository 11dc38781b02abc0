# ─────────────────────────────────────────────────────────────────────────────
# Rate Limiting — slowapi limiter keyed by client IP
# ─────────────────────────────────────────────────────────────────────────────
# Every suggestion costs a provider call; the limit is read from settings at
# request time so tests and deployments can change it through the env.
# ─────────────────────────────────────────────────────────────────────────────


from slowapi import Limiter
from slowapi.util import get_remote_address

from font_analyzer.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def suggest_limit() -> str:
    return get_settings().suggest_rate_limit
