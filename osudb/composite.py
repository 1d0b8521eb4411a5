"""
Composite and collection decoders for osu!.db
"""

from typing import Callable, Tuple, TypeVar

from .errors import InvalidDiscriminantError
from .models import StarRating, TimingPoint
from .primitives import Buffer, decode_bool, decode_f64, decode_u8, decode_u32

T = TypeVar('T')

# Type markers framing each (mods, rating) pair: Int32 then Double
STAR_RATING_MODS_MARKER = 0x08
STAR_RATING_VALUE_MARKER = 0x0d


def expect_marker(data: Buffer, offset: int, marker: int, field: str) -> int:
    """Consume one byte that must equal ``marker``"""
    value, new_offset = decode_u8(data, offset, field)

    if value != marker:
        raise InvalidDiscriminantError(field, value, offset)

    return new_offset


def decode_star_rating(data: Buffer, offset: int) -> Tuple[StarRating, int]:
    """Decode a framed (modifier bitmask, star rating) pair"""
    offset = expect_marker(data, offset, STAR_RATING_MODS_MARKER, "star rating mods marker")
    mods, offset = decode_u32(data, offset, "star rating mods")
    offset = expect_marker(data, offset, STAR_RATING_VALUE_MARKER, "star rating value marker")
    rating, offset = decode_f64(data, offset, "star rating")

    return StarRating(mods, rating), offset


def decode_timing_point(data: Buffer, offset: int) -> Tuple[TimingPoint, int]:
    bpm, offset = decode_f64(data, offset, "timing point bpm")
    song_offset, offset = decode_f64(data, offset, "timing point offset")
    inherited, offset = decode_bool(data, offset, "timing point inherited")

    return TimingPoint(bpm=bpm, song_offset=song_offset, inherited=inherited), offset


def decode_list(
    data: Buffer,
    offset: int,
    decode_element: Callable[..., Tuple[T, int]],
    field: str = "list count"
) -> Tuple[Tuple[T, ...], int]:
    """
    Decode a u32 count followed by exactly that many elements

    Args:
        data: Buffer being decoded
        offset: Position of the count
        decode_element: Decoder called as ``decode_element(data, offset)``
        field: Name used in errors for the count itself

    Returns:
        (elements in stream order, new offset)
    """
    count, offset = decode_u32(data, offset, field)

    elements = []
    for _ in range(count):
        element, offset = decode_element(data, offset)
        elements.append(element)

    return tuple(elements), offset
