"""Conversion between TraceOptions and OpenTelemetry trace flags."""

from __future__ import annotations

import logging
from typing import Any, Optional

from opentelemetry.trace import get_current_span
from opentelemetry.trace import SpanContext as OTelSpanContext, TraceFlags

from tracewire import runtime_config
from tracewire.errors import ConversionError
from tracewire.tracer.trace_options import TraceOptions

logger = logging.getLogger(__name__)

# W3C trace flags only carry the low byte of the options word.
_TRACE_FLAGS_MASK = 0xFF


def _low_byte(value: int, source: str) -> int:
    """Keep the low byte of value, applying the strict conversion policy to the rest."""
    dropped = value & ~_TRACE_FLAGS_MASK
    if dropped:
        if runtime_config.get_strict_flag_conversion():
            raise ConversionError(
                f"{source} do not fit in trace flags",
                {"value": f"{value:08x}", "dropped": f"{dropped:08x}"},
            )
        level = logging.WARNING if runtime_config.get_debug() else logging.DEBUG
        logger.log(level, "Dropping %s bits %08x outside trace flags", source.lower(), dropped)
    return value & _TRACE_FLAGS_MASK


def to_trace_flags(options: TraceOptions) -> TraceFlags:
    """
    Convert TraceOptions to OpenTelemetry TraceFlags.

    Bits above bit 7 do not fit in TraceFlags. They are dropped, or
    ConversionError is raised when strict flag conversion is enabled.
    """
    return TraceFlags(_low_byte(options.options, "Trace options"))


def from_trace_flags(flags: int) -> TraceOptions:
    """
    Convert OpenTelemetry TraceFlags (or a raw flags byte) to TraceOptions.

    The flags occupy the low byte of the options word, so reserved W3C
    bits are carried over unchanged. A raw value wider than a byte is
    handled like in ``to_trace_flags``.
    """
    return TraceOptions(_low_byte(int(flags), "Raw flags"))


def from_span_context(span_context: Optional[OTelSpanContext]) -> TraceOptions:
    """Return the TraceOptions carried by an OTel SpanContext."""
    if span_context is None:
        return TraceOptions.DEFAULT
    return from_trace_flags(span_context.trace_flags)


def with_trace_options(span_context: OTelSpanContext, options: TraceOptions) -> OTelSpanContext:
    """
    Return a copy of an OTel SpanContext with its trace flags replaced.

    Ids, remoteness and trace state are kept as they are.
    """
    return OTelSpanContext(
        trace_id=span_context.trace_id,
        span_id=span_context.span_id,
        is_remote=span_context.is_remote,
        trace_flags=to_trace_flags(options),
        trace_state=span_context.trace_state,
    )


def get_current_trace_options(context: Optional[Any] = None) -> TraceOptions:
    """
    Return the TraceOptions of the active span.

    Uses OpenTelemetry's context API. Falls back to ``TraceOptions.DEFAULT``
    when there is no valid span in the context.
    """
    span = get_current_span(context=context)
    span_context = span.get_span_context()
    if not span_context.is_valid:
        logger.debug("No valid span in context, using default trace options")
        return TraceOptions.DEFAULT
    return from_span_context(span_context)
