"""
Discriminant types stored in osu!.db and their decoders
"""

from enum import IntEnum, IntFlag
from typing import Tuple

from .errors import InvalidDiscriminantError
from .primitives import Buffer, decode_u8


class RankedStatus(IntEnum):
    """Submission state of a beatmap (3 is unused by the client)"""
    UNKNOWN = 0
    UNSUBMITTED = 1
    PENDING = 2     # Pending / WIP / Graveyard
    RANKED = 4
    APPROVED = 5
    QUALIFIED = 6
    LOVED = 7


class GameplayMode(IntEnum):
    """Ruleset a beatmap is played under"""
    STANDARD = 0
    TAIKO = 1
    CATCH = 2
    MANIA = 3


class Mods(IntFlag):
    """Modifier bits used as keys of the star rating lists"""
    NONE = 0
    NO_FAIL = 1 << 0
    EASY = 1 << 1
    TOUCH_DEVICE = 1 << 2
    HIDDEN = 1 << 3
    HARD_ROCK = 1 << 4
    SUDDEN_DEATH = 1 << 5
    DOUBLE_TIME = 1 << 6
    RELAX = 1 << 7
    HALF_TIME = 1 << 8
    NIGHTCORE = 1 << 9
    FLASHLIGHT = 1 << 10
    AUTOPLAY = 1 << 11
    SPUN_OUT = 1 << 12
    AUTOPILOT = 1 << 13
    PERFECT = 1 << 14
    KEY4 = 1 << 15
    KEY5 = 1 << 16
    KEY6 = 1 << 17
    KEY7 = 1 << 18
    KEY8 = 1 << 19
    FADE_IN = 1 << 20
    RANDOM = 1 << 21
    CINEMA = 1 << 22
    TARGET = 1 << 23
    KEY9 = 1 << 24
    KEY_COOP = 1 << 25
    KEY1 = 1 << 26
    KEY3 = 1 << 27
    KEY2 = 1 << 28
    SCORE_V2 = 1 << 29
    MIRROR = 1 << 30


# Byte code -> member lookups, built once
RANKED_STATUS_CODES = {status.value: status for status in RankedStatus}
GAMEPLAY_MODE_CODES = {mode.value: mode for mode in GameplayMode}


def decode_ranked_status(data: Buffer, offset: int) -> Tuple[RankedStatus, int]:
    code, new_offset = decode_u8(data, offset, "ranked status")

    if code not in RANKED_STATUS_CODES:
        raise InvalidDiscriminantError("ranked status", code, offset)

    return RANKED_STATUS_CODES[code], new_offset


def decode_gameplay_mode(data: Buffer, offset: int) -> Tuple[GameplayMode, int]:
    code, new_offset = decode_u8(data, offset, "gameplay mode")

    if code not in GAMEPLAY_MODE_CODES:
        raise InvalidDiscriminantError("gameplay mode", code, offset)

    return GAMEPLAY_MODE_CODES[code], new_offset
