"""Builders for streamed chunks and an in-memory transport."""

from collections.abc import AsyncIterator
from typing import Any


def tool_delta(
    index: int | None = None,
    call_id: str | None = None,
    name: str | None = None,
    arguments: str | None = None,
    finish_reason: str | None = None,
) -> dict[str, Any]:
    """Build one streamed chunk carrying a single tool call fragment."""
    fragment: dict[str, Any] = {"function": {}}
    if index is not None:
        fragment["index"] = index
    if call_id is not None:
        fragment["id"] = call_id
    if name is not None:
        fragment["function"]["name"] = name
    if arguments is not None:
        fragment["function"]["arguments"] = arguments
    return {"choices": [{"delta": {"tool_calls": [fragment]}, "finish_reason": finish_reason}]}


def text_delta(text: str, finish_reason: str | None = None) -> dict[str, Any]:
    """Build one streamed chunk carrying text."""
    return {"choices": [{"delta": {"content": text}, "finish_reason": finish_reason}]}


def finish_delta(finish_reason: str = "stop") -> dict[str, Any]:
    """Build an empty chunk carrying only a finish reason."""
    return {"choices": [{"delta": {}, "finish_reason": finish_reason}]}


class FakeTransport:
    """In-memory Transport that replays scripted responses."""

    def __init__(
        self,
        payloads: list[str] | None = None,
        response: dict[str, Any] | None = None,
        error: BaseException | None = None,
    ) -> None:
        self.payloads = payloads or []
        self.response = response or {}
        self.error = error
        self.requests: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    async def post_json(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        self.requests.append((path, body))
        if self.error is not None:
            raise self.error
        return self.response

    async def stream_events(self, path: str, body: dict[str, Any]) -> AsyncIterator[str]:
        self.requests.append((path, body))
        for payload in self.payloads:
            yield payload
        if self.error is not None:
            raise self.error

    async def close(self) -> None:
        self.closed = True
