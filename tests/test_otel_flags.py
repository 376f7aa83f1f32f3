"""Tests for converting TraceOptions to and from OpenTelemetry trace flags."""

import logging

import pytest
from opentelemetry.trace import (
    NonRecordingSpan,
    SpanContext as OTelSpanContext,
    TraceFlags,
    TraceState,
    set_span_in_context,
)

from tracewire import ConversionError, TraceOptions, runtime_config
from tracewire.context import (
    from_span_context,
    from_trace_flags,
    get_current_trace_options,
    to_trace_flags,
    with_trace_options,
)

TRACE_ID = 0x0AF7651916CD43DD8448EB211C80319C
SPAN_ID = 0xB7AD6B7169203331
SAMPLED = TraceOptions.builder().set_is_sampled().build()


def _span_context(flags: int = 0) -> OTelSpanContext:
    return OTelSpanContext(
        trace_id=TRACE_ID,
        span_id=SPAN_ID,
        is_remote=True,
        trace_flags=TraceFlags(flags),
        trace_state=TraceState([("vendor", "value")]),
    )


@pytest.fixture
def strict_conversion():
    runtime_config.set_strict_flag_conversion(True)
    try:
        yield
    finally:
        runtime_config.set_strict_flag_conversion(False)


def test_to_trace_flags_sampled():
    flags = to_trace_flags(SAMPLED)

    assert isinstance(flags, TraceFlags)
    assert flags.sampled
    assert flags == TraceFlags.SAMPLED


def test_to_trace_flags_default():
    flags = to_trace_flags(TraceOptions.DEFAULT)

    assert not flags.sampled
    assert flags == TraceFlags.DEFAULT


def test_to_trace_flags_drops_high_bits(caplog):
    caplog.set_level(logging.DEBUG, logger="tracewire.context.flags")
    options = TraceOptions.from_bytes(bytes([0x00, 0x01, 0x00, 0x03]))

    flags = to_trace_flags(options)

    assert flags == 0x03
    assert any("00010000" in record.getMessage() for record in caplog.records)


def test_to_trace_flags_debug_logs_warning(caplog):
    caplog.set_level(logging.DEBUG, logger="tracewire.context.flags")
    runtime_config.set_debug(True)
    try:
        to_trace_flags(TraceOptions.from_bytes(bytes([0x80, 0x00, 0x00, 0x00])))
    finally:
        runtime_config.set_debug(False)

    assert [record.levelno for record in caplog.records] == [logging.WARNING]


def test_to_trace_flags_strict(strict_conversion):
    with pytest.raises(ConversionError) as exc_info:
        to_trace_flags(TraceOptions.from_bytes(bytes([0x00, 0x00, 0x01, 0x01])))

    assert exc_info.value.details["dropped"] == "00000100"
    # Options that fit are still converted.
    assert to_trace_flags(SAMPLED).sampled


def test_from_trace_flags():
    assert from_trace_flags(TraceFlags.SAMPLED) == SAMPLED
    assert from_trace_flags(TraceFlags.DEFAULT) == TraceOptions.DEFAULT


def test_from_trace_flags_keeps_reserved_bits():
    options = from_trace_flags(0x03)

    assert options.is_sampled()
    assert options.get_bytes() == bytes([0x00, 0x00, 0x00, 0x03])


def test_from_span_context():
    assert from_span_context(_span_context(0x01)).is_sampled()
    assert not from_span_context(_span_context(0x00)).is_sampled()
    assert from_span_context(None) is TraceOptions.DEFAULT


def test_with_trace_options():
    original = _span_context(0x00)

    updated = with_trace_options(original, SAMPLED)

    assert updated.trace_flags.sampled
    assert updated.trace_id == original.trace_id
    assert updated.span_id == original.span_id
    assert updated.is_remote is True
    assert updated.trace_state == original.trace_state
    assert not original.trace_flags.sampled


def test_get_current_trace_options_from_context():
    ctx = set_span_in_context(NonRecordingSpan(_span_context(0x01)))

    assert get_current_trace_options(ctx) == SAMPLED


def test_get_current_trace_options_without_span():
    assert get_current_trace_options() is TraceOptions.DEFAULT


def test_from_trace_flags_drops_bits_above_a_byte(caplog):
    caplog.set_level(logging.DEBUG, logger="tracewire.context.flags")

    options = from_trace_flags(0x101)

    assert options == from_trace_flags(0x01)
    assert any("00000100" in record.getMessage() for record in caplog.records)


def test_from_trace_flags_strict(strict_conversion):
    with pytest.raises(ConversionError) as exc_info:
        from_trace_flags(0x101)

    assert exc_info.value.details["dropped"] == "00000100"
    assert from_trace_flags(TraceFlags.SAMPLED) == SAMPLED
