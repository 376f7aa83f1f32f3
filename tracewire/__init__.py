"""Tracewire: trace options and their wire encoding for distributed tracing."""

from tracewire.errors import (
    ConversionError,
    InvalidSizeError,
    MissingInputError,
    TracewireError,
    ValidationError,
)
from tracewire.tracer.trace_options import (
    IS_SAMPLED,
    Builder,
    TraceOptions,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "TraceOptions",
    "Builder",
    "IS_SAMPLED",
    "TracewireError",
    "ValidationError",
    "MissingInputError",
    "InvalidSizeError",
    "ConversionError",
]
