"""Helper functions for rendering trace options as text."""

from __future__ import annotations

from typing import Optional

from tracewire.errors import ValidationError
from tracewire.tracer.trace_options import TraceOptions


def format_trace_options(options: TraceOptions) -> str:
    """
    Format TraceOptions as a hex string.

    Args:
        options: TraceOptions instance

    Returns:
        8-character hex string of the 4-byte encoding
    """
    return options.get_bytes().hex()


def parse_trace_options(hex_string: Optional[str]) -> TraceOptions:
    """
    Parse a hex string into TraceOptions.

    Args:
        hex_string: 8-character hex string

    Returns:
        TraceOptions, or TraceOptions.DEFAULT for an empty string
    """
    if not hex_string:
        return TraceOptions.DEFAULT
    try:
        buffer = bytes.fromhex(hex_string)
    except ValueError as exc:
        raise ValidationError("Invalid hex trace options", {"value": hex_string}) from exc
    return TraceOptions.from_bytes(buffer)
