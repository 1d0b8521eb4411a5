"""
Listing decoder: the entry point for whole osu!.db buffers
"""

from functools import partial
from pathlib import Path
from typing import Tuple, Union

from .composite import decode_list
from .config import Config
from .context import FormatContext
from .entry import decode_beatmap_entry
from .errors import DecodeError
from .logger import get_decoder_logger, log_exception
from .models import Listing
from .primitives import Buffer, decode_bool, decode_datetime, decode_string, decode_u32


def decode_listing(data: Buffer, offset: int = 0) -> Tuple[Listing, int]:
    """
    Decode the osu!.db header, all beatmap entries and the trailing permissions

    Args:
        data: Buffer holding the file contents
        offset: Position of the header

    Returns:
        (Listing, offset just past the permissions field)
    """
    version, offset = decode_u32(data, offset, "version")
    folder_count, offset = decode_u32(data, offset, "folder count")
    account_unlocked, offset = decode_bool(data, offset, "account unlocked")
    account_unlock_date, offset = decode_datetime(data, offset, "account unlock date")
    player_name, offset = decode_string(data, offset, "player name")

    # Resolved once, shared by every entry
    context = FormatContext.from_version(version)
    decode_entry = partial(decode_beatmap_entry, context=context)
    beatmaps, offset = decode_list(data, offset, decode_entry, "beatmap count")

    user_permissions, offset = decode_u32(data, offset, "user permissions")

    listing = Listing(
        version=version,
        folder_count=folder_count,
        account_unlocked=account_unlocked,
        account_unlock_date=account_unlock_date,
        player_name=player_name,
        beatmaps=beatmaps,
        user_permissions=user_permissions,
    )

    return listing, offset


def decode(buffer: Buffer) -> Tuple[Listing, bytes]:
    """
    Decode a complete osu!.db buffer

    Bytes after the permissions field are returned untouched; whether they
    are acceptable is up to the caller.

    Args:
        buffer: bytes, bytearray or memoryview with the file contents

    Returns:
        (Listing, leftover bytes)

    Raises:
        DecodeError: if the buffer is not a valid osu!.db
        ValueError: if the buffer exceeds OSUDB_MAX_BUFFER_SIZE
    """
    logger = get_decoder_logger()

    if Config.MAX_BUFFER_SIZE and len(buffer) > Config.MAX_BUFFER_SIZE:
        raise ValueError(
            f"Buffer of {len(buffer)} bytes exceeds OSUDB_MAX_BUFFER_SIZE ({Config.MAX_BUFFER_SIZE})"
        )

    try:
        listing, offset = decode_listing(buffer)
    except DecodeError as error:
        log_exception(logger, "Failed to decode osu!.db", error)
        raise

    logger.debug(
        f"Decoded osu!.db version {listing.version} for '{listing.player_name}' "
        f"with {len(listing.beatmaps)} beatmaps"
    )

    leftover = bytes(buffer[offset:])
    if leftover:
        logger.debug(f"{len(leftover)} byte(s) left after user permissions")

    return listing, leftover


def decode_file(path: Union[str, Path]) -> Tuple[Listing, bytes]:
    """Read an osu!.db file fully into memory and decode it"""
    with open(path, 'rb') as f:
        content = f.read()

    return decode(content)
