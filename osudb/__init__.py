"""
Decoder for osu!'s beatmap database (osu!.db)
"""

from .config import Config
from .context import FormatContext
from .enums import GameplayMode, Mods, RankedStatus
from .errors import (
    DecodeError,
    InvalidDiscriminantError,
    MalformedValueError,
    TruncatedError
)
from .listing import decode, decode_file, decode_listing
from .logger import setup_logger
from .models import BeatmapEntry, Listing, StarRating, TimingPoint

__all__ = [
    'Config',
    'FormatContext',
    'GameplayMode',
    'Mods',
    'RankedStatus',
    'DecodeError',
    'InvalidDiscriminantError',
    'MalformedValueError',
    'TruncatedError',
    'decode',
    'decode_file',
    'decode_listing',
    'setup_logger',
    'BeatmapEntry',
    'Listing',
    'StarRating',
    'TimingPoint'
]
