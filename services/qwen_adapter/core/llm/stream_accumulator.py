"""Per-turn assembly of streamed tool calls.

A tool call's name and JSON arguments may arrive split across many
``choices[0].delta.tool_calls`` fragments, interleaved with text and with
ids that are often present only on a call's first fragment.
``StreamAccumulator`` correlates fragments by slot, forwards text
immediately and emits all assembled calls exactly once per turn:

- as soon as every tracked call has a name and arguments that parse as a
  JSON object (early completion, so the agent can start executing before
  the physical stream closes);
- otherwise on the finish signal, the ``[DONE]`` sentinel, stream
  exhaustion, or (best effort) a transport error or cancellation.

Tool fragments that arrive after the emission are ignored.

One instance serves exactly one streaming turn. It is synchronous; the
caller drives it from the loop reading the HTTP stream.

Usage:
    accumulator = StreamAccumulator(model_name="qwen-plus")
    for chunk in chunks:
        for response in accumulator.feed(chunk):
            yield response
    for response in accumulator.finish():
        yield response
"""

import json
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import structlog

from services.qwen_adapter.core.config.constants import DEFAULT_FINISH_REASON
from services.qwen_adapter.core.llm.argument_repair import is_complete_object, repair_arguments
from shared.protocol.content_models import (
    FunctionCall,
    FunctionCallPart,
    GenerateResponse,
    TextPart,
)
from shared.validators.id_generators import normalize_wire_id, slot_function_call_id

logger = structlog.get_logger(__name__)

SlotKey = int | str


@dataclass
class PendingToolCall:
    """A tool call under assembly.

    Attributes:
        slot: Positional index of the call, or the provider id when the
            fragments carry no index.
        name: Function name; set by the first fragment that supplies one.
        arguments: Concatenated argument text; only ever appended to.
        call_id: Provider id, when one was supplied.
    """

    slot: SlotKey
    name: str = ""
    arguments: str = ""
    call_id: str | None = None

    def set_name(self, name: str) -> None:
        if name and not self.name:
            self.name = name

    def append_arguments(self, text: str) -> None:
        self.arguments += text

    def is_ready(self) -> bool:
        """True when the call could be executed as-is."""
        return bool(self.name) and is_complete_object(self.arguments)

    def finalize(self) -> FunctionCall:
        return FunctionCall(
            id=self.call_id or slot_function_call_id(self.name, self.slot),
            name=self.name,
            args=repair_arguments(self.arguments),
        )


class StreamAccumulator:
    """Assembles one turn's streamed deltas into text fragments and tool calls."""

    def __init__(self, model_name: str = "", correlation_id: str | None = None) -> None:
        self._pending: dict[SlotKey, PendingToolCall] = {}
        self._last_slot: SlotKey | None = None
        self._emitted = False
        self._log = logger.bind(model=model_name, correlation_id=correlation_id)

    @property
    def emitted(self) -> bool:
        """True once the turn's tool calls have been emitted."""
        return self._emitted

    @property
    def pending_count(self) -> int:
        """Number of tool calls currently under assembly."""
        return len(self._pending)

    def feed(self, chunk: dict[str, Any]) -> list[GenerateResponse]:
        """Process one decoded stream event.

        Args:
            chunk: A decoded ``data:`` payload.

        Returns:
            Responses to forward, in order. Text fragments are returned
            immediately; the tool call emission appears at most once per turn.
        """
        choices = chunk.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return []
        choice = choices[0]
        delta = choice.get("delta")
        if not isinstance(delta, dict):
            delta = {}
        finish_reason = choice.get("finish_reason")
        if not isinstance(finish_reason, str):
            finish_reason = None

        content = delta.get("content")
        text = content if isinstance(content, str) else ""
        fragments = delta.get("tool_calls")
        if not isinstance(fragments, list):
            fragments = []

        for fragment in fragments:
            self._upsert(fragment)

        out: list[GenerateResponse] = []
        if finish_reason:
            out.extend(self._flush("finish_reason"))
            if text:
                out.append(self._text_response(text, finish_reason))
            return out

        if text:
            out.append(self._text_response(text))
        if fragments and self._all_ready():
            out.extend(self._flush("early_completion"))
        return out

    def finish(self) -> list[GenerateResponse]:
        """Flush at the end-of-stream sentinel or when the stream is exhausted."""
        return self._flush("end_of_stream")

    def abort(self) -> list[GenerateResponse]:
        """Best-effort flush before a transport error or cancellation propagates."""
        if self._pending and not self._emitted:
            self._log.warning("stream_aborted_flushing_partial_tool_calls", pending=len(self._pending))
        return self._flush("aborted")

    @staticmethod
    def _text_response(text: str, finish_reason: str | None = None) -> GenerateResponse:
        return GenerateResponse(parts=[TextPart(text=text)], finish_reason=finish_reason)

    def _resolve_slot(self, fragment: dict[str, Any]) -> SlotKey:
        index = fragment.get("index")
        if isinstance(index, int) and not isinstance(index, bool):
            return index

        call_id = normalize_wire_id(fragment.get("id"))
        if call_id:
            for pending in self._pending.values():
                if pending.call_id == call_id:
                    return pending.slot
            return call_id

        if self._last_slot is not None:
            return self._last_slot
        numeric = [slot for slot in self._pending if isinstance(slot, int)]
        return max(numeric) + 1 if numeric else 0

    def _upsert(self, fragment: Any) -> None:
        if not isinstance(fragment, dict):
            return
        if self._emitted:
            self._log.warning(
                "tool_call_fragment_after_emit_ignored",
                index=fragment.get("index"),
                tool_call_id=fragment.get("id"),
            )
            return

        slot = self._resolve_slot(fragment)
        pending = self._pending.get(slot)
        if pending is None:
            pending = PendingToolCall(slot=slot)
            self._pending[slot] = pending
            self._log.debug("tool_call_slot_opened", slot=slot)

        call_id = normalize_wire_id(fragment.get("id"))
        if call_id and not pending.call_id:
            pending.call_id = call_id

        function = fragment.get("function")
        if not isinstance(function, dict):
            function = {}
        name = function.get("name")
        if isinstance(name, str):
            pending.set_name(name)
        arguments = function.get("arguments")
        if isinstance(arguments, dict):
            # Some endpoints send the whole argument object at once.
            arguments = json.dumps(arguments)
        if isinstance(arguments, str) and arguments:
            pending.append_arguments(arguments)

        self._last_slot = slot

    def _all_ready(self) -> bool:
        return bool(self._pending) and all(p.is_ready() for p in self._pending.values())

    def _ordered_pending(self) -> Iterator[PendingToolCall]:
        numeric = sorted(slot for slot in self._pending if isinstance(slot, int))
        keyed = [slot for slot in self._pending if not isinstance(slot, int)]
        for slot in (*numeric, *keyed):
            yield self._pending[slot]

    def _flush(self, reason: str) -> list[GenerateResponse]:
        if self._emitted or not self._pending:
            return []

        calls: list[FunctionCall] = []
        for pending in self._ordered_pending():
            if not pending.name:
                self._log.warning(
                    "tool_call_without_name_dropped",
                    slot=pending.slot,
                    arguments_length=len(pending.arguments),
                )
                continue
            if pending.arguments and not is_complete_object(pending.arguments):
                self._log.warning(
                    "tool_call_arguments_repaired",
                    name=pending.name,
                    slot=pending.slot,
                    arguments_length=len(pending.arguments),
                )
            calls.append(pending.finalize())

        self._pending.clear()
        self._last_slot = None
        if not calls:
            return []

        self._emitted = True
        self._log.info(
            "tool_calls_flushed",
            reason=reason,
            count=len(calls),
            names=[call.name for call in calls],
        )
        return [
            GenerateResponse(
                parts=[FunctionCallPart(function_call=call) for call in calls],
                function_calls=calls,
                finish_reason=DEFAULT_FINISH_REASON,
            )
        ]
