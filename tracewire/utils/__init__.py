"""Utility functions for Tracewire."""

from tracewire.utils.helpers import (
    format_trace_options,
    parse_trace_options,
)

__all__ = [
    "format_trace_options",
    "parse_trace_options",
]
