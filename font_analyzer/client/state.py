# ─────────────────────────────────────────────────────────────────────────────
# Request State — what the presentation layer renders
# ─────────────────────────────────────────────────────────────────────────────


from dataclasses import dataclass
from enum import Enum

from font_analyzer.schemas import Suggestion


class RequestStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class RequestState:
    """Snapshot of the orchestrator's observable fields.

    ``suggestion`` may be set on a FAILED state: after a network failure the
    fallback suggestion is shown alongside an advisory message.
    """

    status: RequestStatus
    suggestion: Suggestion | None = None
    message: str | None = None

    @classmethod
    def derive(cls, *, loading: bool, error: str | None, result: Suggestion | None) -> "RequestState":
        if loading:
            return cls(RequestStatus.LOADING, suggestion=result)
        if error is not None:
            return cls(RequestStatus.FAILED, suggestion=result, message=error)
        if result is not None:
            return cls(RequestStatus.SUCCEEDED, suggestion=result)
        return cls(RequestStatus.IDLE)
