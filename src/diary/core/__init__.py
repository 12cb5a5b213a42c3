"""Functional core - pure business logic with no I/O."""

from .entries import (
    DiaryEntry,
    UserProfile,
    all_tags,
    filter_entries,
    parse_mood,
    parse_tags,
    sample_entries,
    split_pinned,
)
from .rewards import (
    MissionStatus,
    RewardState,
    apply_reward_for_event,
    calendar_day_difference,
    claim_tag_mission,
    claim_write_today,
    evaluate_badges,
    mission_statuses,
)
from .color import parse_color_hex, to_rgb_hex

__all__ = [
    # Entries
    "DiaryEntry",
    "UserProfile",
    "all_tags",
    "filter_entries",
    "parse_mood",
    "parse_tags",
    "sample_entries",
    "split_pinned",
    # Rewards
    "MissionStatus",
    "RewardState",
    "apply_reward_for_event",
    "calendar_day_difference",
    "claim_tag_mission",
    "claim_write_today",
    "evaluate_badges",
    "mission_statuses",
    # Color
    "parse_color_hex",
    "to_rgb_hex",
]
