"""Generic request model -> OpenAI-compatible chat completion request.

The target API has no native tool-result role usable without a preceding
``tool_calls`` message, so function responses (and the calls that
produced them) are rendered into the message text as readable markers.
"""

import json
from typing import Any

from shared.protocol.content_models import (
    Content,
    FunctionCallPart,
    FunctionResponse,
    FunctionResponsePart,
    GenerateRequest,
    TextPart,
    ToolDeclaration,
)

_ROLE_MAP = {"model": "assistant"}

JSON_MODE_INSTRUCTION = (
    "Respond with a single valid JSON object only. "
    "Do not wrap it in markdown code fences and do not add any text before or after it."
)


def format_function_response(response: FunctionResponse) -> str:
    """Render a tool result as the marker text sent to the model."""
    result = response.result
    if isinstance(result, dict | list):
        body = json.dumps(result, indent=2, ensure_ascii=False)
    elif result is None:
        body = ""
    else:
        body = str(result)
    return f"Tool {response.name or 'unknown'} ({response.id or 'no-id'}) executed successfully:\n{body}"


def _render_content(content: Content) -> str:
    texts: list[str] = []
    responses: list[str] = []
    calls: list[str] = []
    for part in content.parts:
        if isinstance(part, TextPart):
            texts.append(part.text)
        elif isinstance(part, FunctionResponsePart):
            responses.append(format_function_response(part.function_response))
        elif isinstance(part, FunctionCallPart):
            calls.append(f"[Tool Call: {part.function_call.name}]")
    return "\n".join(s for s in (*texts, *responses, *calls) if s)


def to_wire_messages(contents: list[Content]) -> list[dict[str, Any]]:
    """Convert generic contents to OpenAI-format messages.

    Messages that render to an empty string are dropped.
    """
    messages: list[dict[str, Any]] = []
    for content in contents:
        text = _render_content(content)
        if not text:
            continue
        messages.append({"role": _ROLE_MAP.get(content.role, content.role), "content": text})
    return messages


def convert_tools(tools: list[ToolDeclaration] | None) -> list[dict[str, Any]] | None:
    """Convert tool declarations to OpenAI tool format, or None if no tools."""
    if not tools:
        return None

    converted = []
    for tool in tools:
        function: dict[str, Any] = {"name": tool.name, "description": tool.description}
        if tool.parameters is not None:
            function["parameters"] = tool.parameters
        converted.append({"type": "function", "function": function})
    return converted


def _json_instruction(schema: dict[str, Any] | None) -> str:
    if schema is None:
        return JSON_MODE_INSTRUCTION
    schema_text = json.dumps(schema, indent=2, ensure_ascii=False)
    return f"{JSON_MODE_INSTRUCTION}\nThe JSON object must conform to this JSON schema:\n{schema_text}"


def _apply_json_mode(messages: list[dict[str, Any]], schema: dict[str, Any] | None) -> None:
    instruction = _json_instruction(schema)
    for message in reversed(messages):
        if message["role"] == "user":
            message["content"] = f"{message['content']}\n\n{instruction}"
            return
    messages.append({"role": "user", "content": instruction})


def to_wire_request(request: GenerateRequest, *, stream: bool) -> dict[str, Any]:
    """Build the chat completion request body.

    Args:
        request: The generic request.
        stream: Whether the body is for a streaming call.

    Returns:
        JSON-serializable request body.
    """
    messages = to_wire_messages(request.messages)
    if request.json_mode:
        # Some deployments ignore response_format, so the prose carries the schema too.
        _apply_json_mode(messages, request.json_schema)

    body: dict[str, Any] = {
        "model": request.model,
        "messages": messages,
        "stream": stream,
    }

    config = request.generation_config
    if config.temperature is not None:
        body["temperature"] = config.temperature
    if config.top_p is not None:
        body["top_p"] = config.top_p
    if config.max_tokens is not None:
        body["max_tokens"] = config.max_tokens
    if config.stop_sequences is not None:
        body["stop"] = config.stop_sequences

    tools = convert_tools(request.tools)
    if tools:
        body["tools"] = tools

    if request.json_mode:
        body["response_format"] = {"type": "json_object"}

    # The backend rejects enable_thinking on non-streaming calls.
    if stream and request.enable_thinking is not None:
        body["enable_thinking"] = request.enable_thinking

    return body
