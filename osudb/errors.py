"""
Decode errors raised while reading osu!.db buffers

Every error carries the byte offset where decoding stopped, so a caller can
report exactly which part of the file is damaged.
"""

from typing import Optional


class DecodeError(Exception):
    """Base class for all osu!.db decode failures"""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} (at offset {offset})")
        self.offset = offset


class TruncatedError(DecodeError):
    """Fewer bytes remain in the buffer than a field needs"""

    def __init__(self, offset: int, needed: int, available: int, field: Optional[str] = None):
        what = field or "value"
        super().__init__(
            f"Unexpected end of buffer reading {what}: needed {needed} byte(s), {available} available",
            offset
        )
        self.field = field
        self.needed = needed
        self.available = available


class InvalidDiscriminantError(DecodeError):
    """An enum, marker or flag byte is not one of its accepted values"""

    def __init__(self, field: str, value: int, offset: int):
        super().__init__(f"Unrecognized {field} byte 0x{value:02x}", offset)
        self.field = field
        self.value = value


class MalformedValueError(DecodeError):
    """A value has the right width but cannot be represented"""

    def __init__(self, field: str, reason: str, offset: int):
        super().__init__(f"Malformed {field}: {reason}", offset)
        self.field = field
        self.reason = reason
