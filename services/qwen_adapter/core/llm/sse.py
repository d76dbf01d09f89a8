"""Decoding of OpenAI-style Server-Sent Events bodies.

The body is newline-delimited ``data: <json>`` lines terminated by
``data: [DONE]``. Other SSE fields (``event:``, ``id:``, comments) carry
nothing the adapter needs and are ignored.
"""

import json
from collections.abc import AsyncIterator
from typing import Any

from services.qwen_adapter.core.config.constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from services.qwen_adapter.core.llm.exceptions import MalformedChunkError

DONE = SSE_DONE_SENTINEL


def parse_sse_line(line: str) -> str | None:
    """Extract the payload of a ``data:`` line.

    Returns:
        The stripped payload, or None for blank lines, comments and
        non-data fields.
    """
    line = line.strip()
    if not line or not line.startswith(SSE_DATA_PREFIX):
        return None
    return line[len(SSE_DATA_PREFIX) :].strip()


async def iter_sse_payloads(lines: AsyncIterator[str]) -> AsyncIterator[str]:
    """Yield the data payloads of an SSE line stream, including the DONE sentinel."""
    async for line in lines:
        payload = parse_sse_line(line)
        if payload:
            yield payload


def decode_event(payload: str) -> dict[str, Any]:
    """Decode one data payload.

    Raises:
        MalformedChunkError: If the payload is not a JSON object.
    """
    try:
        event = json.loads(payload)
    except ValueError as e:
        raise MalformedChunkError(payload, str(e)) from e
    if not isinstance(event, dict):
        raise MalformedChunkError(payload, f"expected a JSON object, got {type(event).__name__}")
    return event
