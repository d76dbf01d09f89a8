"""ID generators for adapter protocol types.

- correlation_id: corr_[A-Za-z0-9_-]+ (one per streaming turn, for logs)
- function call id, non-streaming without a provider id: <name>-<ulid>
- function call id, streaming without a provider id: <name>-slot-<index>

Function call ids only need to be stable within a turn. Slot ids are
deterministic so that every flush of the same turn names a call the same
way.
"""

import re

from ulid import ULID

_SAFE_NAME_PATTERN = re.compile(r"[^A-Za-z0-9_.-]")


def _generate_ulid() -> str:
    """Generate a ULID string."""
    return str(ULID())


def generate_correlation_id() -> str:
    """Generate a unique correlation ID (corr_<ulid>)."""
    return f"corr_{_generate_ulid()}"


def _safe_name(name: str) -> str:
    sanitized = _SAFE_NAME_PATTERN.sub("_", name.strip())
    return sanitized or "call"


def generate_function_call_id(name: str) -> str:
    """Generate a function call ID (<name>-<ulid>) for a call the provider left unnamed."""
    return f"{_safe_name(name)}-{_generate_ulid()}"


def slot_function_call_id(name: str, slot: int | str) -> str:
    """Deterministic function call ID (<name>-slot-<slot>) for a streamed call.

    Args:
        name: The function name.
        slot: The slot position of the call within the turn.

    Returns:
        An ID that is stable for the same (name, slot) pair.
    """
    return f"{_safe_name(name)}-slot-{slot}"


def normalize_wire_id(value: object) -> str | None:
    """Provider-supplied id as a string, or None when missing or empty.

    Some compatible endpoints send numeric ids; they are kept, stringified.
    """
    if value is None or value == "":
        return None
    return value if isinstance(value, str) else str(value)
