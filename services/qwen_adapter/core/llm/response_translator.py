"""OpenAI-compatible chat completion response -> generic response."""

from typing import Any

import structlog

from services.qwen_adapter.core.config.constants import DEFAULT_FINISH_REASON
from services.qwen_adapter.core.llm.argument_repair import repair_arguments
from shared.protocol.common import Usage
from shared.protocol.content_models import (
    FunctionCall,
    FunctionCallPart,
    GenerateResponse,
    Part,
    TextPart,
)
from shared.validators.id_generators import generate_function_call_id, normalize_wire_id

logger = structlog.get_logger(__name__)


def _int(value: Any) -> int:
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def usage_from_wire(usage: Any, model_name: str) -> Usage | None:
    """Map OpenAI usage counters to Usage, or None if absent."""
    if not isinstance(usage, dict):
        return None
    return Usage(
        input_tokens=_int(usage.get("prompt_tokens")),
        output_tokens=_int(usage.get("completion_tokens")),
        total_tokens=_int(usage.get("total_tokens")),
        model_name=model_name or "unknown",
    )


def _function_call_from_wire(tool_call: Any) -> FunctionCall | None:
    if not isinstance(tool_call, dict):
        return None
    function = tool_call.get("function")
    if not isinstance(function, dict):
        function = {}
    name = function.get("name")
    if not isinstance(name, str) or not name:
        logger.warning("tool_call_without_name_skipped", tool_call_id=tool_call.get("id"))
        return None

    raw_arguments = function.get("arguments")
    if isinstance(raw_arguments, dict):
        args = raw_arguments
    else:
        args = repair_arguments(raw_arguments if isinstance(raw_arguments, str) else None)

    return FunctionCall(
        id=normalize_wire_id(tool_call.get("id")) or generate_function_call_id(name),
        name=name,
        args=args,
    )


def from_wire_response(payload: dict[str, Any], *, model_name: str = "") -> GenerateResponse:
    """Translate a complete (non-streaming) chat completion.

    Args:
        payload: Decoded response body.
        model_name: Model to report in usage when the body does not name one.

    Returns:
        GenerateResponse with a leading text part (if any content) followed by
        one function call part per tool call, in order.
    """
    choices = payload.get("choices")
    choice = choices[0] if isinstance(choices, list) and choices and isinstance(choices[0], dict) else {}
    message = choice.get("message")
    if not isinstance(message, dict):
        message = {}

    parts: list[Part] = []
    function_calls: list[FunctionCall] = []

    content = message.get("content")
    if isinstance(content, str) and content:
        parts.append(TextPart(text=content))

    tool_calls = message.get("tool_calls")
    for tool_call in tool_calls if isinstance(tool_calls, list) else []:
        function_call = _function_call_from_wire(tool_call)
        if function_call is None:
            continue
        parts.append(FunctionCallPart(function_call=function_call))
        function_calls.append(function_call)

    if function_calls:
        logger.debug(
            "tool_calls_translated",
            count=len(function_calls),
            names=[fc.name for fc in function_calls],
        )

    return GenerateResponse(
        parts=parts,
        function_calls=function_calls,
        finish_reason=_str(choice.get("finish_reason")) or DEFAULT_FINISH_REASON,
        usage=usage_from_wire(payload.get("usage"), _str(payload.get("model")) or model_name),
    )
