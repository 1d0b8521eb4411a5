"""
Beatmap entry decoder

Reads one BeatmapEntry in on-disk field order. Fields whose layout depends on
the file version consult the FormatContext resolved from the listing header.
"""

from typing import Tuple

from .composite import decode_list, decode_star_rating, decode_timing_point
from .context import FormatContext
from .enums import decode_gameplay_mode, decode_ranked_status
from .models import BeatmapEntry
from .primitives import (
    Buffer,
    decode_bool,
    decode_datetime,
    decode_f32,
    decode_f64,
    decode_string,
    decode_u8,
    decode_u16,
    decode_u32,
)


def decode_beatmap_entry(data: Buffer, offset: int, context: FormatContext) -> Tuple[BeatmapEntry, int]:
    """
    Decode a single beatmap entry

    Args:
        data: Buffer being decoded
        offset: Position of the entry's first byte
        context: Layout switches of the enclosing listing

    Returns:
        (BeatmapEntry, offset just past the entry)

    Raises:
        DecodeError: on the first field that cannot be decoded
    """
    size = None
    if context.has_entry_size:
        size, offset = decode_u32(data, offset, "entry size")

    artist_name, offset = decode_string(data, offset, "artist name")
    artist_name_unicode, offset = decode_string(data, offset, "artist name (unicode)")
    song_title, offset = decode_string(data, offset, "song title")
    song_title_unicode, offset = decode_string(data, offset, "song title (unicode)")
    creator_name, offset = decode_string(data, offset, "creator name")
    difficulty, offset = decode_string(data, offset, "difficulty name")
    audio_filename, offset = decode_string(data, offset, "audio filename")
    md5, offset = decode_string(data, offset, "md5")
    beatmap_filename, offset = decode_string(data, offset, "beatmap filename")
    ranked_status, offset = decode_ranked_status(data, offset)

    hitcircle_count, offset = decode_u16(data, offset, "hitcircle count")
    slider_count, offset = decode_u16(data, offset, "slider count")
    spinner_count, offset = decode_u16(data, offset, "spinner count")
    last_modification_time, offset = decode_datetime(data, offset, "last modification time")

    # Byte before 20140609, float after
    decode_difficulty = context.decode_difficulty
    approach_rate, offset = decode_difficulty(data, offset, "approach rate")
    circle_size, offset = decode_difficulty(data, offset, "circle size")
    hp_drain, offset = decode_difficulty(data, offset, "hp drain")
    overall_difficulty, offset = decode_difficulty(data, offset, "overall difficulty")
    slider_velocity, offset = decode_f64(data, offset, "slider velocity")

    star_ratings_std, offset = decode_list(data, offset, decode_star_rating, "std star rating count")
    star_ratings_taiko, offset = decode_list(data, offset, decode_star_rating, "taiko star rating count")
    star_ratings_ctb, offset = decode_list(data, offset, decode_star_rating, "ctb star rating count")
    star_ratings_mania, offset = decode_list(data, offset, decode_star_rating, "mania star rating count")

    drain_time, offset = decode_u32(data, offset, "drain time")
    total_time, offset = decode_u32(data, offset, "total time")
    audio_preview_time, offset = decode_u32(data, offset, "audio preview time")
    timing_points, offset = decode_list(data, offset, decode_timing_point, "timing point count")

    difficulty_id, offset = decode_u32(data, offset, "difficulty id")
    beatmap_id, offset = decode_u32(data, offset, "beatmap id")
    thread_id, offset = decode_u32(data, offset, "thread id")
    grade_std, offset = decode_u8(data, offset, "std grade")
    grade_taiko, offset = decode_u8(data, offset, "taiko grade")
    grade_catch, offset = decode_u8(data, offset, "catch grade")
    grade_mania, offset = decode_u8(data, offset, "mania grade")
    local_offset, offset = decode_u16(data, offset, "local offset")
    stack_leniency, offset = decode_f32(data, offset, "stack leniency")
    gameplay_mode, offset = decode_gameplay_mode(data, offset)

    song_source, offset = decode_string(data, offset, "song source")
    song_tags, offset = decode_string(data, offset, "song tags")
    online_offset, offset = decode_u16(data, offset, "online offset")
    font, offset = decode_string(data, offset, "font")
    is_unplayed, offset = decode_bool(data, offset, "unplayed flag")
    last_played, offset = decode_datetime(data, offset, "last played")
    is_osz2, offset = decode_bool(data, offset, "osz2 flag")
    folder_name, offset = decode_string(data, offset, "folder name")
    last_checked_online, offset = decode_datetime(data, offset, "last checked online")

    ignore_beatmap_hitsounds, offset = decode_bool(data, offset, "ignore hitsounds flag")
    ignore_beatmap_skin, offset = decode_bool(data, offset, "ignore skin flag")
    disable_storyboard, offset = decode_bool(data, offset, "disable storyboard flag")
    disable_video, offset = decode_bool(data, offset, "disable video flag")

    # Unused, only written before 20140609
    if context.has_legacy_float:
        _, offset = decode_f32(data, offset, "legacy unused float")

    # Unused (appears to repeat the modification time)
    _, offset = decode_u32(data, offset, "unused u32")

    mania_scroll_speed, offset = decode_u8(data, offset, "mania scroll speed")

    entry = BeatmapEntry(
        size=size,
        artist_name=artist_name,
        artist_name_unicode=artist_name_unicode,
        song_title=song_title,
        song_title_unicode=song_title_unicode,
        creator_name=creator_name,
        difficulty=difficulty,
        audio_filename=audio_filename,
        md5=md5,
        beatmap_filename=beatmap_filename,
        ranked_status=ranked_status,
        hitcircle_count=hitcircle_count,
        slider_count=slider_count,
        spinner_count=spinner_count,
        last_modification_time=last_modification_time,
        approach_rate=approach_rate,
        circle_size=circle_size,
        hp_drain=hp_drain,
        overall_difficulty=overall_difficulty,
        slider_velocity=slider_velocity,
        star_ratings_std=star_ratings_std,
        star_ratings_taiko=star_ratings_taiko,
        star_ratings_ctb=star_ratings_ctb,
        star_ratings_mania=star_ratings_mania,
        drain_time=drain_time,
        total_time=total_time,
        audio_preview_time=audio_preview_time,
        timing_points=timing_points,
        difficulty_id=difficulty_id,
        beatmap_id=beatmap_id,
        thread_id=thread_id,
        grade_std=grade_std,
        grade_taiko=grade_taiko,
        grade_catch=grade_catch,
        grade_mania=grade_mania,
        local_offset=local_offset,
        stack_leniency=stack_leniency,
        gameplay_mode=gameplay_mode,
        song_source=song_source,
        song_tags=song_tags,
        online_offset=online_offset,
        font=font,
        is_unplayed=is_unplayed,
        last_played=last_played,
        is_osz2=is_osz2,
        folder_name=folder_name,
        last_checked_online=last_checked_online,
        ignore_beatmap_hitsounds=ignore_beatmap_hitsounds,
        ignore_beatmap_skin=ignore_beatmap_skin,
        disable_storyboard=disable_storyboard,
        disable_video=disable_video,
        mania_scroll_speed=mania_scroll_speed,
    )

    return entry, offset
