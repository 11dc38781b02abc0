# ─────────────────────────────────────────────────────────────────────────────
# Prompt Templates — typographer persona + structured-output schema
# ─────────────────────────────────────────────────────────────────────────────


from typing import Any

FONT_SYSTEM_PROMPT = (
    "You are an expert typographer and graphic designer specializing in Google Fonts. "
    "Your task is to select the single most appropriate Google Font (by name) for a "
    "given title, based on the title's content and implied mood. You must only respond "
    "with a single JSON object. Do not include any other text, explanation, or "
    "conversational filler."
)

# Gemini's OpenAPI-subset schema: upper-case type names.
FONT_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "font_name": {
            "type": "STRING",
            "description": "The exact name of the chosen Google Font.",
        },
        "reason": {
            "type": "STRING",
            "description": (
                "A brief, one-sentence string explaining the typographic "
                "rationale for the choice."
            ),
        },
    },
    "required": ["font_name", "reason"],
}


def build_generate_content_body(title: str) -> dict[str, Any]:
    """Build a ``generateContent`` request body for one title.

    The title goes in verbatim as the single user part; the persona rides
    in ``systemInstruction`` and JSON output is forced through
    ``generationConfig``.

    Args:
        title: The user's title, already trimmed.

    Returns:
        A JSON-serializable request body.
    """
    return {
        "systemInstruction": {"parts": [{"text": FONT_SYSTEM_PROMPT}]},
        "contents": [{"role": "user", "parts": [{"text": title}]}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": FONT_RESPONSE_SCHEMA,
        },
    }
