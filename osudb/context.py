"""
Version-dependent layout of osu!.db entries

The header version decides the shape of a few entry fields. The decision is
made once per listing and handed to every entry decode as a FormatContext.
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from .primitives import Buffer, decode_f32, decode_u8

# Difficulty statistics switched from byte to float and the trailing
# unused float was dropped in this version
FLOAT_DIFFICULTY_VERSION = 20140609

# Per-entry size prefix was removed in this version
NO_ENTRY_SIZE_VERSION = 20191106


def decode_byte_difficulty(data: Buffer, offset: int, field: str = "difficulty") -> Tuple[float, int]:
    """Legacy difficulty statistic: one byte, widened to float"""
    value, offset = decode_u8(data, offset, field)
    return float(value), offset


def decode_float_difficulty(data: Buffer, offset: int, field: str = "difficulty") -> Tuple[float, int]:
    return decode_f32(data, offset, field)


@dataclass(frozen=True)
class FormatContext:
    """Layout switches resolved from a single osu!.db version"""
    version: int
    has_entry_size: bool
    byte_difficulty: bool
    has_legacy_float: bool

    @classmethod
    def from_version(cls, version: int) -> 'FormatContext':
        """
        Resolve all layout switches for a file version

        Args:
            version: Format version from the listing header (e.g. 20150203)

        Returns:
            FormatContext shared by every entry of that listing
        """
        legacy = version < FLOAT_DIFFICULTY_VERSION
        return cls(
            version=version,
            has_entry_size=version < NO_ENTRY_SIZE_VERSION,
            byte_difficulty=legacy,
            has_legacy_float=legacy,
        )

    @property
    def decode_difficulty(self) -> Callable:
        """Decoder used for AR, CS, HP and OD under this version"""
        if self.byte_difficulty:
            return decode_byte_difficulty
        return decode_float_difficulty
