# ─────────────────────────────────────────────────────────────────────────────
# Pydantic Schemas — wire formats shared by client and server
# ─────────────────────────────────────────────────────────────────────────────


from pydantic import BaseModel, ConfigDict, Field


class Suggestion(BaseModel):
    """A font name plus the rationale for choosing it.

    Frozen so a displayed suggestion is never mutated in place; equality is
    field-wise, which is what the orchestrator relies on to skip updates.
    """

    model_config = ConfigDict(frozen=True)

    font_name: str = Field(..., description="The exact name of the chosen Google Font.")
    reason: str = Field(
        ..., description="A brief, one-sentence typographic rationale for the choice."
    )

    def same_as(self, other: "Suggestion | None") -> bool:
        """Field-wise comparison on font_name and reason."""
        return (
            other is not None
            and self.font_name == other.font_name
            and self.reason == other.reason
        )


class SuggestRequest(BaseModel):
    """Body of POST /api/suggest-font.

    ``prompt`` is optional at the schema level so a missing value becomes the
    service's own 400 error instead of a generic 422.
    """

    prompt: str | None = None


class LivenessResponse(BaseModel):
    status: str


class ReadinessResponse(BaseModel):
    status: str
    provider_configured: bool
    model: str
