"""
Data models for the decoded osu!.db listing
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, NamedTuple, Optional, Tuple

from .enums import GameplayMode, Mods, RankedStatus


class StarRating(NamedTuple):
    """Star rating computed for one modifier combination"""
    mods: int       # Raw modifier bitmask
    rating: float

    @property
    def modifiers(self) -> Mods:
        return Mods(self.mods)


@dataclass(frozen=True)
class TimingPoint:
    """Tempo marker of a beatmap"""
    bpm: float
    song_offset: float
    inherited: bool


@dataclass(frozen=True)
class BeatmapEntry:
    """One beatmap difficulty as recorded in osu!.db"""
    size: Optional[int]     # Only present before version 20191106

    # Metadata
    artist_name: Optional[str]
    artist_name_unicode: Optional[str]
    song_title: Optional[str]
    song_title_unicode: Optional[str]
    creator_name: Optional[str]
    difficulty: Optional[str]
    audio_filename: Optional[str]
    md5: Optional[str]
    beatmap_filename: Optional[str]
    ranked_status: RankedStatus

    # Object counts (sliders and spinners are counted in every mode)
    hitcircle_count: int
    slider_count: int
    spinner_count: int
    last_modification_time: datetime

    # Difficulty settings
    approach_rate: float
    circle_size: float
    hp_drain: float
    overall_difficulty: float
    slider_velocity: float

    # Star ratings per mode, keyed by modifier bitmask
    star_ratings_std: Tuple[StarRating, ...]
    star_ratings_taiko: Tuple[StarRating, ...]
    star_ratings_ctb: Tuple[StarRating, ...]
    star_ratings_mania: Tuple[StarRating, ...]

    drain_time: int             # Seconds
    total_time: int             # Milliseconds
    audio_preview_time: int     # Milliseconds
    timing_points: Tuple[TimingPoint, ...]

    # Online identifiers
    difficulty_id: int
    beatmap_id: int
    thread_id: int

    # Best grade achieved per mode
    grade_std: int
    grade_taiko: int
    grade_catch: int
    grade_mania: int

    local_offset: int
    stack_leniency: float
    gameplay_mode: GameplayMode
    song_source: Optional[str]
    song_tags: Optional[str]
    online_offset: int
    font: Optional[str]
    is_unplayed: bool
    last_played: datetime
    is_osz2: bool
    folder_name: Optional[str]      # Relative to the Songs folder
    last_checked_online: datetime

    # Per-beatmap user settings
    ignore_beatmap_hitsounds: bool
    ignore_beatmap_skin: bool
    disable_storyboard: bool
    disable_video: bool
    mania_scroll_speed: int

    def star_ratings(self, mode: GameplayMode) -> Tuple[StarRating, ...]:
        """Get the star rating list recorded for a gameplay mode"""
        return {
            GameplayMode.STANDARD: self.star_ratings_std,
            GameplayMode.TAIKO: self.star_ratings_taiko,
            GameplayMode.CATCH: self.star_ratings_ctb,
            GameplayMode.MANIA: self.star_ratings_mania,
        }[GameplayMode(mode)]

    def nomod_star_rating(self, mode: Optional[GameplayMode] = None) -> Optional[float]:
        """
        Get the star rating without any modifiers

        Args:
            mode: Mode to look up (defaults to the beatmap's own mode)

        Returns:
            Rating for the empty modifier set, or None if osu! has not computed it
        """
        if mode is None:
            mode = self.gameplay_mode

        for star_rating in self.star_ratings(mode):
            if star_rating.mods == Mods.NONE:
                return star_rating.rating

        return None


@dataclass(frozen=True)
class Listing:
    """Complete osu!.db contents"""
    version: int
    folder_count: int
    account_unlocked: bool      # False only while the account is locked or banned
    account_unlock_date: datetime
    player_name: Optional[str]
    beatmaps: Tuple[BeatmapEntry, ...]
    user_permissions: int

    def find_by_md5(self, md5: str) -> Optional[BeatmapEntry]:
        """Find the first beatmap with the given checksum"""
        md5 = md5.lower()
        for beatmap in self.beatmaps:
            if beatmap.md5 is not None and beatmap.md5.lower() == md5:
                return beatmap
        return None

    def beatmapsets(self) -> Dict[Optional[str], List[BeatmapEntry]]:
        """
        Group beatmaps by their folder

        Returns:
            Dictionary mapping folder name to its beatmaps, in first-seen order
        """
        sets: Dict[Optional[str], List[BeatmapEntry]] = {}
        for beatmap in self.beatmaps:
            sets.setdefault(beatmap.folder_name, []).append(beatmap)
        return sets
