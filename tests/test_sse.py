"""Tests for SSE decoding."""

import pytest

from services.qwen_adapter.core.llm.exceptions import MalformedChunkError
from services.qwen_adapter.core.llm.sse import DONE, decode_event, iter_sse_payloads, parse_sse_line


async def _lines(lines):
    for line in lines:
        yield line


class TestParseSseLine:
    """Tests for parse_sse_line."""

    def test_data_line(self):
        """Test the payload of a data line is extracted."""
        assert parse_sse_line('data: {"a": 1}') == '{"a": 1}'
        assert parse_sse_line('data:{"a": 1}\r') == '{"a": 1}'

    def test_done(self):
        """Test the sentinel is passed through."""
        assert parse_sse_line("data: [DONE]") == DONE

    @pytest.mark.parametrize("line", ["", "   ", ": keep-alive", "event: result", "id: 3"])
    def test_non_data_lines(self, line):
        """Test blank lines, comments and other fields are ignored."""
        assert parse_sse_line(line) is None


class TestIterSsePayloads:
    """Tests for iter_sse_payloads."""

    @pytest.mark.asyncio
    async def test_yields_payloads_in_order(self):
        """Test payloads are yielded in order, skipping noise."""
        lines = ['data: {"n": 1}', "", ": ping", 'data: {"n": 2}', "data:", "data: [DONE]"]
        payloads = [p async for p in iter_sse_payloads(_lines(lines))]
        assert payloads == ['{"n": 1}', '{"n": 2}', DONE]


class TestDecodeEvent:
    """Tests for decode_event."""

    def test_object(self):
        """Test a JSON object decodes."""
        assert decode_event('{"choices": []}') == {"choices": []}

    def test_invalid_json(self):
        """Test invalid JSON raises MalformedChunkError."""
        with pytest.raises(MalformedChunkError) as exc_info:
            decode_event('{"choices": [')
        assert exc_info.value.code == "MALFORMED_CHUNK"
        assert exc_info.value.details["payload_length"] == 13

    def test_non_object(self):
        """Test JSON that is not an object raises MalformedChunkError."""
        with pytest.raises(MalformedChunkError, match="expected a JSON object"):
            decode_event("[1, 2]")
