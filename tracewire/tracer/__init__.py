"""Trace option components for Tracewire."""

from tracewire.tracer.trace_options import (
    IS_SAMPLED,
    Builder,
    TraceOptions,
)

__all__ = [
    "TraceOptions",
    "Builder",
    "IS_SAMPLED",
]
