"""Immutable trace options and their 4-byte wire encoding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, MutableSequence, Optional, Sequence

from tracewire.errors import InvalidSizeError, MissingInputError

# Default options. Nothing set.
_DEFAULT_OPTIONS = 0
# Mask to extract a byte value.
_BYTE_MASK = 0xFF
# Mask to keep an options word within 32 bits.
_WORD_MASK = 0xFFFFFFFF
_BYTE_SIZE = 8
# Bit to represent whether trace is sampled or not.
IS_SAMPLED = 0x1


@dataclass(frozen=True)
class TraceOptions:
    """
    Global trace options, propagated unchanged to all child spans.

    The options are a 32-bit bitmask. Only ``IS_SAMPLED`` (bit 0) is
    interpreted; every other bit is reserved and preserved through
    encoding and decoding.

    Instances are immutable and may be shared between threads. Use
    :meth:`from_bytes`, :meth:`from_bytes_at`, :meth:`builder` or
    :data:`DEFAULT` to obtain one.
    """

    options: int = _DEFAULT_OPTIONS

    SIZE: ClassVar[int] = 4
    DEFAULT: ClassVar["TraceOptions"]

    def __post_init__(self) -> None:
        # Out-of-range ints wrap to 32 bits, as the wire form does.
        object.__setattr__(self, "options", self.options & _WORD_MASK)

    @classmethod
    def from_bytes(cls, buffer: Optional[Sequence[int]]) -> "TraceOptions":
        """
        Decode trace options from a standalone buffer.

        Equivalent to ``TraceOptions.from_bytes_at(buffer, 0)`` once the
        buffer has been validated.

        Args:
            buffer: Exactly ``SIZE`` bytes, big-endian

        Returns:
            TraceOptions represented by the buffer

        Raises:
            MissingInputError: If buffer is None
            InvalidSizeError: If len(buffer) is not ``SIZE``
        """
        if buffer is None:
            raise MissingInputError("buffer must not be None")
        if len(buffer) != cls.SIZE:
            raise InvalidSizeError(cls.SIZE, len(buffer))
        return cls(_int_from_bytes(buffer, 0))

    @classmethod
    def from_bytes_at(cls, src: Sequence[int], src_offset: int) -> "TraceOptions":
        """
        Decode trace options from ``src`` beginning at ``src_offset``.

        The capacity of ``src`` is not checked up front; reading past its
        end raises ``IndexError``.
        """
        return cls(_int_from_bytes(src, src_offset))

    def get_bytes(self) -> bytes:
        """Return the 4-byte big-endian representation."""
        dest = bytearray(self.SIZE)
        _int_to_bytes(self.options, dest, 0)
        return bytes(dest)

    def copy_bytes_to(self, dest: MutableSequence[int], dest_offset: int) -> None:
        """
        Write the 4-byte representation into ``dest`` at ``dest_offset``.

        Same result as copying ``get_bytes()`` into ``dest`` without the
        intermediate allocation. Raises ``IndexError`` if ``dest`` has fewer
        than ``dest_offset + SIZE`` elements.
        """
        _int_to_bytes(self.options, dest, dest_offset)

    @staticmethod
    def builder(trace_options: Optional["TraceOptions"] = None) -> "Builder":
        """
        Return a new Builder.

        Args:
            trace_options: Options to start from (default: nothing set)
        """
        if trace_options is None:
            return Builder(_DEFAULT_OPTIONS)
        return Builder(trace_options.options)

    def is_sampled(self) -> bool:
        """Whether the trace is sampled and should be exported to a persistent store."""
        return self._has_option(IS_SAMPLED)

    def _has_option(self, mask: int) -> bool:
        return (self.options & mask) != 0

    def __repr__(self) -> str:
        return f"TraceOptions(sampled={self.is_sampled()})"

    __str__ = __repr__


class Builder:
    """Mutable accumulator for TraceOptions. Not thread-safe."""

    def __init__(self, options: int) -> None:
        self._options = options & _WORD_MASK

    def set_is_sampled(self) -> "Builder":
        """Mark the trace as sampled."""
        self._options |= IS_SAMPLED
        return self

    def build(self) -> TraceOptions:
        """Return a TraceOptions snapshot of the current options."""
        return TraceOptions(self._options)


TraceOptions.DEFAULT = TraceOptions(_DEFAULT_OPTIONS)


def _check_offset(offset: int) -> None:
    # Negative indexes would wrap around instead of failing.
    if offset < 0:
        raise IndexError(f"offset out of range: {offset}")


def _int_from_bytes(src: Sequence[int], src_offset: int) -> int:
    """Read the unsigned big-endian int stored in 4 bytes of src at src_offset."""
    _check_offset(src_offset)
    # Every byte is masked so signed byte values never leak into higher bits.
    return (
        (src[src_offset] & _BYTE_MASK) << (3 * _BYTE_SIZE)
        | (src[src_offset + 1] & _BYTE_MASK) << (2 * _BYTE_SIZE)
        | (src[src_offset + 2] & _BYTE_MASK) << _BYTE_SIZE
        | (src[src_offset + 3] & _BYTE_MASK)
    )


def _int_to_bytes(value: int, dest: MutableSequence[int], dest_offset: int) -> None:
    """Write value as 4 big-endian bytes into dest at dest_offset."""
    _check_offset(dest_offset)
    # Index the last byte first so a short buffer is left untouched.
    dest[dest_offset + 3] = value & _BYTE_MASK
    dest[dest_offset] = (value >> (3 * _BYTE_SIZE)) & _BYTE_MASK
    dest[dest_offset + 1] = (value >> (2 * _BYTE_SIZE)) & _BYTE_MASK
    dest[dest_offset + 2] = (value >> _BYTE_SIZE) & _BYTE_MASK
