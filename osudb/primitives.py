"""
Primitive decoders for osu!.db

Every decoder takes the buffer and a read offset and returns a
``(value, new_offset)`` tuple. All multi-byte values are little-endian.
"""

import struct
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple, Union

from .errors import MalformedValueError, TruncatedError

Buffer = Union[bytes, bytearray, memoryview]

# .NET DateTime ticks: 100ns intervals since 0001-01-01 00:00:00
TICKS_PER_MICROSECOND = 10
TICKS_EPOCH = datetime(1, 1, 1, tzinfo=timezone.utc)

# Presence flag in front of every string that carries text
STRING_PRESENT = 0x0b

# A u64 never needs more than 10 groups of 7 bits
ULEB128_MAX_BYTES = 10


def ensure_available(data: Buffer, offset: int, size: int, field: Optional[str] = None) -> None:
    """
    Check that ``size`` bytes can be read at ``offset``

    Raises:
        TruncatedError: if the buffer ends before ``offset + size``
    """
    available = len(data) - offset
    if available < size:
        raise TruncatedError(offset, size, max(available, 0), field)


def _unpack(fmt: str, data: Buffer, offset: int, field: Optional[str]):
    size = struct.calcsize(fmt)
    ensure_available(data, offset, size, field)
    return struct.unpack_from(fmt, data, offset)[0], offset + size


def decode_u8(data: Buffer, offset: int, field: Optional[str] = None) -> Tuple[int, int]:
    return _unpack('<B', data, offset, field)


def decode_u16(data: Buffer, offset: int, field: Optional[str] = None) -> Tuple[int, int]:
    return _unpack('<H', data, offset, field)


def decode_u32(data: Buffer, offset: int, field: Optional[str] = None) -> Tuple[int, int]:
    return _unpack('<I', data, offset, field)


def decode_u64(data: Buffer, offset: int, field: Optional[str] = None) -> Tuple[int, int]:
    return _unpack('<Q', data, offset, field)


def decode_f32(data: Buffer, offset: int, field: Optional[str] = None) -> Tuple[float, int]:
    return _unpack('<f', data, offset, field)


def decode_f64(data: Buffer, offset: int, field: Optional[str] = None) -> Tuple[float, int]:
    return _unpack('<d', data, offset, field)


def decode_bool(data: Buffer, offset: int, field: Optional[str] = None) -> Tuple[bool, int]:
    """Decode a single byte; any non-zero value is True"""
    value, offset = decode_u8(data, offset, field)
    return value != 0, offset


def decode_datetime(data: Buffer, offset: int, field: str = "timestamp") -> Tuple[datetime, int]:
    """
    Decode a Windows tick timestamp into an aware UTC datetime

    The value is a signed 64-bit count of 100ns ticks since 0001-01-01.
    osu! writes 0 for "never", which decodes to ``datetime.min`` in UTC.

    Raises:
        TruncatedError: if fewer than 8 bytes remain
        MalformedValueError: if the tick count is outside datetime's range
    """
    ticks, new_offset = _unpack('<q', data, offset, field)

    if ticks < 0:
        raise MalformedValueError(field, f"negative tick count {ticks}", offset)

    try:
        value = TICKS_EPOCH + timedelta(microseconds=ticks // TICKS_PER_MICROSECOND)
    except OverflowError as error:
        raise MalformedValueError(field, f"tick count {ticks} out of range", offset) from error

    return value, new_offset


def decode_uleb128(data: Buffer, offset: int, field: str = "length") -> Tuple[int, int]:
    """Decode an unsigned LEB128 integer (7 bits per byte, low group first)"""
    start = offset
    result = 0
    shift = 0

    for _ in range(ULEB128_MAX_BYTES):
        byte, offset = decode_u8(data, offset, field)
        result |= (byte & 0x7f) << shift

        if not byte & 0x80:
            return result, offset

        shift += 7

    raise MalformedValueError(field, f"ULEB128 longer than {ULEB128_MAX_BYTES} bytes", start)


def decode_string(data: Buffer, offset: int, field: str = "string") -> Tuple[Optional[str], int]:
    """
    Decode a presence-tagged osu! string

    Layout: one flag byte (0x0b = present, anything else = absent), then for
    present strings a ULEB128 byte count followed by that many UTF-8 bytes.
    The text is copied out of the buffer, so the result does not keep it alive.

    Returns:
        (text or None, new offset)
    """
    flag, new_offset = decode_u8(data, offset, field)

    if flag != STRING_PRESENT:
        return None, new_offset

    length, new_offset = decode_uleb128(data, new_offset, field)
    ensure_available(data, new_offset, length, field)
    raw = bytes(data[new_offset:new_offset + length])

    try:
        text = raw.decode('utf-8')
    except UnicodeDecodeError as error:
        raise MalformedValueError(field, f"invalid UTF-8 ({error.reason})", new_offset) from error

    return text, new_offset + length
