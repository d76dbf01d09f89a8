"""Best-effort recovery of tool-call argument strings.

Streamed arguments can be cut short (cancellation, a flush on the finish
signal) or carry small syntax slips. Repair is attempted in order, first
success wins:

1. parse as-is;
2. strip a trailing comma (including a dangling ``",``) and retry;
3. if the text opens with ``{`` or ``[`` and is not closed, append the
   missing closing characters and retry;
4. fall back to ``{"_raw_arguments": raw}``, or ``{}`` for empty input.

Nothing in this module raises.
"""

import json
import re
from typing import Any

from services.qwen_adapter.core.config.constants import RAW_ARGUMENTS_KEY

_TRAILING_COMMA = re.compile(r",\s*$")
_CLOSERS = {"{": "}", "[": "]"}


def _loads(text: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(text)
    except (ValueError, RecursionError):
        return False, None


def missing_closers(text: str) -> str:
    """Closing characters needed to balance the brackets of ``text``.

    Brackets inside string literals are ignored. Returns an empty string
    when the brackets are balanced or the nesting is inconsistent.
    """
    stack: list[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in ("}", "]"):
            if not stack or stack[-1] != ch:
                return ""
            stack.pop()
    return "".join(reversed(stack))


def repair_json(raw: str) -> Any | None:
    """Parse ``raw`` as JSON, repairing common truncation damage.

    Args:
        raw: Possibly partial or malformed JSON text.

    Returns:
        The parsed value, or None when no repair step succeeds.
    """
    if not raw or not raw.strip():
        return None

    ok, value = _loads(raw)
    if ok:
        return value

    text = raw.strip()
    if text.endswith(","):
        text = _TRAILING_COMMA.sub("", text)
        ok, value = _loads(text)
        if ok:
            return value

    if text[:1] in _CLOSERS:
        closers = missing_closers(text)
        if closers:
            ok, value = _loads(text + closers)
            if ok:
                return value

    return None


def repair_arguments(raw: str | None) -> dict[str, Any]:
    """Turn a tool call's argument text into an argument mapping.

    Args:
        raw: The accumulated argument text, possibly empty or None.

    Returns:
        The parsed object; ``{}`` for empty input; otherwise
        ``{"_raw_arguments": raw}`` when the text cannot be recovered or
        does not hold a JSON object.
    """
    if raw is None or not raw.strip():
        return {}
    value = repair_json(raw)
    if isinstance(value, dict):
        return value
    return {RAW_ARGUMENTS_KEY: raw}


def is_complete_object(raw: str) -> bool:
    """True when ``raw`` is non-empty and already parses as a JSON object."""
    if not raw:
        return False
    ok, value = _loads(raw)
    return ok and isinstance(value, dict)
