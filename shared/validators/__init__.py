"""Shared validators and utilities."""

from shared.validators.id_generators import (
    generate_correlation_id,
    generate_function_call_id,
    normalize_wire_id,
    slot_function_call_id,
)

__all__ = [
    "generate_correlation_id",
    "generate_function_call_id",
    "normalize_wire_id",
    "slot_function_call_id",
]
