"""OpenTelemetry context utilities for trace options."""

from tracewire.context.flags import (
    from_span_context,
    from_trace_flags,
    get_current_trace_options,
    to_trace_flags,
    with_trace_options,
)

__all__ = [
    "to_trace_flags",
    "from_trace_flags",
    "from_span_context",
    "with_trace_options",
    "get_current_trace_options",
]
