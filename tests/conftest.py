"""Shared pytest fixtures: byte builders for osu!.db buffers."""

import struct
from datetime import datetime, timedelta, timezone

import pytest

from osudb.primitives import TICKS_EPOCH

FLOAT_DIFFICULTY_VERSION = 20140609
NO_ENTRY_SIZE_VERSION = 20191106

LAST_MODIFIED = datetime(2020, 1, 1, tzinfo=timezone.utc)
LAST_CHECKED = datetime(2021, 6, 15, 12, 30, tzinfo=timezone.utc)


class BufferBuilder:
    """Assembles osu!.db byte layouts field by field"""

    def __init__(self):
        self.data = bytearray()

    def raw(self, value: bytes) -> 'BufferBuilder':
        self.data += value
        return self

    def u8(self, value: int) -> 'BufferBuilder':
        return self.raw(struct.pack('<B', value))

    def u16(self, value: int) -> 'BufferBuilder':
        return self.raw(struct.pack('<H', value))

    def u32(self, value: int) -> 'BufferBuilder':
        return self.raw(struct.pack('<I', value))

    def i64(self, value: int) -> 'BufferBuilder':
        return self.raw(struct.pack('<q', value))

    def f32(self, value: float) -> 'BufferBuilder':
        return self.raw(struct.pack('<f', value))

    def f64(self, value: float) -> 'BufferBuilder':
        return self.raw(struct.pack('<d', value))

    def boolean(self, value: bool) -> 'BufferBuilder':
        return self.u8(1 if value else 0)

    def uleb128(self, value: int) -> 'BufferBuilder':
        while True:
            byte = value & 0x7f
            value >>= 7
            if value:
                self.u8(byte | 0x80)
            else:
                return self.u8(byte)

    def string(self, value) -> 'BufferBuilder':
        if value is None:
            return self.u8(0x00)
        encoded = value.encode('utf-8')
        return self.u8(0x0b).uleb128(len(encoded)).raw(encoded)

    def timestamp(self, value: datetime) -> 'BufferBuilder':
        return self.i64((value - TICKS_EPOCH) // timedelta(microseconds=1) * 10)

    def star_rating(self, mods: int, rating: float) -> 'BufferBuilder':
        return self.u8(0x08).u32(mods).u8(0x0d).f64(rating)

    def star_ratings(self, ratings) -> 'BufferBuilder':
        self.u32(len(ratings))
        for mods, rating in ratings:
            self.star_rating(mods, rating)
        return self

    def timing_point(self, bpm: float, offset: float, inherited: bool) -> 'BufferBuilder':
        return self.f64(bpm).f64(offset).boolean(inherited)

    def build(self) -> bytes:
        return bytes(self.data)


ENTRY_DEFAULTS = {
    'size': 0,
    'artist_name': 'Camellia',
    'artist_name_unicode': 'かめりあ',
    'song_title': 'Exit This Earth',
    'song_title_unicode': 'Exit This Earth',
    'creator_name': 'Realazy',
    'difficulty': 'Evolution',
    'audio_filename': 'audio.mp3',
    'md5': '0123456789abcdef0123456789abcdef',
    'beatmap_filename': 'Camellia - Exit This Earth (Realazy) [Evolution].osu',
    'ranked_status': 4,
    'hitcircle_count': 500,
    'slider_count': 300,
    'spinner_count': 2,
    'last_modification_time': LAST_MODIFIED,
    'difficulty_stats': (9, 4, 6, 8),
    'slider_velocity': 1.4,
    'star_ratings_std': [(0, 5.25), (64, 7.5)],
    'star_ratings_taiko': [],
    'star_ratings_ctb': [],
    'star_ratings_mania': [],
    'drain_time': 120,
    'total_time': 150000,
    'audio_preview_time': 40000,
    'timing_points': [(333.25, 1000.0, True), (-50.0, 2000.0, False)],
    'difficulty_id': 12345,
    'beatmap_id': 678,
    'thread_id': 90,
    'grades': (9, 9, 9, 9),
    'local_offset': 0,
    'stack_leniency': 0.5,
    'gameplay_mode': 0,
    'song_source': None,
    'song_tags': 'camellia tech',
    'online_offset': 0,
    'font': None,
    'is_unplayed': True,
    'last_played': TICKS_EPOCH,
    'is_osz2': False,
    'folder_name': '123 Camellia - Exit This Earth',
    'last_checked_online': LAST_CHECKED,
    'flags': (False, True, False, True),
    'mania_scroll_speed': 12,
}


def write_entry(builder: BufferBuilder, version: int, **overrides) -> BufferBuilder:
    """Append one beatmap entry laid out for ``version``"""
    fields = dict(ENTRY_DEFAULTS, **overrides)

    if version < NO_ENTRY_SIZE_VERSION:
        builder.u32(fields['size'])

    for name in ('artist_name', 'artist_name_unicode', 'song_title', 'song_title_unicode',
                 'creator_name', 'difficulty', 'audio_filename', 'md5', 'beatmap_filename'):
        builder.string(fields[name])

    builder.u8(fields['ranked_status'])
    builder.u16(fields['hitcircle_count']).u16(fields['slider_count']).u16(fields['spinner_count'])
    builder.timestamp(fields['last_modification_time'])

    for stat in fields['difficulty_stats']:
        if version < FLOAT_DIFFICULTY_VERSION:
            builder.u8(stat)
        else:
            builder.f32(stat)

    builder.f64(fields['slider_velocity'])
    builder.star_ratings(fields['star_ratings_std'])
    builder.star_ratings(fields['star_ratings_taiko'])
    builder.star_ratings(fields['star_ratings_ctb'])
    builder.star_ratings(fields['star_ratings_mania'])
    builder.u32(fields['drain_time']).u32(fields['total_time']).u32(fields['audio_preview_time'])

    builder.u32(len(fields['timing_points']))
    for bpm, offset, inherited in fields['timing_points']:
        builder.timing_point(bpm, offset, inherited)

    builder.u32(fields['difficulty_id']).u32(fields['beatmap_id']).u32(fields['thread_id'])
    for grade in fields['grades']:
        builder.u8(grade)
    builder.u16(fields['local_offset']).f32(fields['stack_leniency']).u8(fields['gameplay_mode'])
    builder.string(fields['song_source']).string(fields['song_tags'])
    builder.u16(fields['online_offset']).string(fields['font'])
    builder.boolean(fields['is_unplayed']).timestamp(fields['last_played'])
    builder.boolean(fields['is_osz2']).string(fields['folder_name'])
    builder.timestamp(fields['last_checked_online'])
    for flag in fields['flags']:
        builder.boolean(flag)

    if version < FLOAT_DIFFICULTY_VERSION:
        builder.f32(0.0)

    builder.u32(0xdeadbeef)
    return builder.u8(fields['mania_scroll_speed'])


def write_listing(builder: BufferBuilder, version: int, entries=(), player_name='peppy',
                  permissions=1, unlocked=True) -> BufferBuilder:
    """Append a complete listing; ``entries`` is a list of override dicts"""
    builder.u32(version).u32(len(entries)).boolean(unlocked)
    builder.timestamp(TICKS_EPOCH).string(player_name)
    builder.u32(len(entries))
    for overrides in entries:
        write_entry(builder, version, **overrides)
    return builder.u32(permissions)


@pytest.fixture
def builder() -> BufferBuilder:
    return BufferBuilder()


@pytest.fixture
def entry_bytes():
    """Factory building a single entry buffer for a version"""
    def make(version: int, **overrides) -> bytes:
        return write_entry(BufferBuilder(), version, **overrides).build()
    return make


@pytest.fixture
def listing_bytes():
    """Factory building a whole osu!.db buffer"""
    def make(version: int, entries=(), trailing: bytes = b'', **kwargs) -> bytes:
        return write_listing(BufferBuilder(), version, entries, **kwargs).raw(trailing).build()
    return make
