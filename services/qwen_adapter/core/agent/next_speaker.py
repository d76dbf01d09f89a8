"""Text heuristic deciding who speaks after a model turn.

Used instead of asking the model for a JSON verdict, which the adapted
provider answers unreliably. The phrase lists come from
NextSpeakerSettings, so deployments can tune them without code changes.
"""

from typing import Literal

import structlog
from pydantic import BaseModel

from services.qwen_adapter.core.config.settings import NextSpeakerSettings, get_settings
from shared.protocol.content_models import Content, TextPart

logger = structlog.get_logger(__name__)


class NextSpeakerResponse(BaseModel):
    """Who should speak next, and why."""

    reasoning: str
    next_speaker: Literal["user", "model"]


def _last_model_text(message: Content) -> str:
    return " ".join(p.text for p in message.parts if isinstance(p, TextPart)).strip()


def check_next_speaker(
    history: list[Content],
    settings: NextSpeakerSettings | None = None,
) -> NextSpeakerResponse | None:
    """Decide whether the model should continue or wait for the user.

    Args:
        history: Conversation so far, oldest first.
        settings: Phrase lists. Uses get_settings().next_speaker if not provided.

    Returns:
        NextSpeakerResponse, or None when the history has no model turn to judge.
    """
    if not history:
        return None

    settings = settings or get_settings().next_speaker
    last = history[-1]

    if last.is_function_response():
        return NextSpeakerResponse(
            reasoning="The last message was a function response, so the model should speak next.",
            next_speaker="model",
        )

    if last.role in ("model", "assistant") and not last.parts:
        return NextSpeakerResponse(
            reasoning="The last message was a filler model message with no content, model should speak next.",
            next_speaker="model",
        )

    if last.role not in ("model", "assistant"):
        return None

    text = _last_model_text(last)

    if text.endswith("?"):
        return NextSpeakerResponse(
            reasoning="Last model message ended with a question, user should respond",
            next_speaker="user",
        )

    indicator = next((phrase for phrase in settings.continue_indicators if phrase in text), None)
    if indicator is not None:
        logger.debug("next_speaker_continue_indicator", indicator=indicator)
        return NextSpeakerResponse(
            reasoning="Model message indicates continuation, model should speak next",
            next_speaker="model",
        )

    if text and text[-1] not in settings.terminal_punctuation:
        return NextSpeakerResponse(
            reasoning="Model message appears incomplete, model should continue",
            next_speaker="model",
        )

    return NextSpeakerResponse(
        reasoning="Model message completed, user should speak next",
        next_speaker="user",
    )
