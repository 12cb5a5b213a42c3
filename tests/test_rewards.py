"""Tests for core rewards logic."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from diary.core.entries import DiaryEntry
from diary.core.rewards import (
    CENTURION,
    SEVEN_DAY_STREAK,
    TAG_THREE,
    THIRTY_ENTRIES,
    RewardState,
    apply_reward_for_event,
    calendar_day_difference,
    claim_tag_mission,
    claim_write_today,
    evaluate_badges,
    has_written_today,
    mission_statuses,
)


@pytest.fixture
def day():
    return datetime(2025, 1, 15, 9, 30)


def tagged(n: int, untagged: int = 0) -> list[DiaryEntry]:
    entries = [DiaryEntry(title=f"t{i}", body="", tags=["x"]) for i in range(n)]
    entries += [DiaryEntry(title=f"u{i}", body="") for i in range(untagged)]
    return entries


class TestCalendarDayDifference:
    def test_same_day(self, day):
        assert calendar_day_difference(day.replace(hour=23), day.replace(hour=0)) == 0

    def test_across_midnight(self, day):
        late = day.replace(hour=23, minute=59)
        early_next = late + timedelta(minutes=2)
        assert calendar_day_difference(early_next, late) == 1

    def test_signed(self, day):
        assert calendar_day_difference(day - timedelta(days=2), day) == -2

    def test_aware_datetimes_use_zone(self):
        toronto = ZoneInfo("America/Toronto")
        a = datetime(2025, 1, 15, 23, 30, tzinfo=toronto)
        b = datetime(2025, 1, 16, 1, 0, tzinfo=toronto)
        assert calendar_day_difference(b, a, toronto) == 1
        # Both fall on Jan 16 in UTC
        assert calendar_day_difference(b, a, timezone.utc) == 0


class TestApplyRewardForEvent:
    def test_first_event(self, day):
        state = apply_reward_for_event(RewardState(), day, entry_count=1)
        assert state.points == 10
        assert state.current_streak == 1
        assert state.last_entry_date == day

    def test_consecutive_days_sequence(self, day):
        state = RewardState()
        for offset in range(3):
            state = apply_reward_for_event(state, day + timedelta(days=offset), entry_count=offset + 1)
        assert state.points == 30
        assert state.current_streak == 3

        state = apply_reward_for_event(state, day + timedelta(days=2, hours=3), entry_count=4)
        assert state.points == 40
        assert state.current_streak == 3

        state = apply_reward_for_event(state, day + timedelta(days=10), entry_count=5)
        assert state.points == 50
        assert state.current_streak == 1

    def test_backdated_event_resets_streak(self, day):
        state = RewardState(points=50, current_streak=4, last_entry_date=day)
        state = apply_reward_for_event(state, day - timedelta(days=1), entry_count=6)
        assert state.current_streak == 1
        assert state.last_entry_date == day - timedelta(days=1)

    def test_does_not_mutate_input(self, day):
        original = RewardState(points=10, current_streak=1, last_entry_date=day)
        apply_reward_for_event(original, day + timedelta(days=1), entry_count=2)
        assert original.points == 10
        assert original.current_streak == 1

    def test_same_input_twice_awards_twice(self, day):
        state = RewardState()
        state = apply_reward_for_event(state, day, entry_count=1)
        state = apply_reward_for_event(state, day, entry_count=2)
        assert state.points == 20
        assert state.current_streak == 1


class TestBadges:
    def test_centurion_awarded_once(self, day):
        state = RewardState()
        for i in range(15):
            state = apply_reward_for_event(state, day, entry_count=i + 1)
        assert state.points == 150
        assert state.badges.count(CENTURION) == 1

    def test_centurion_threshold(self, day):
        state = RewardState(points=80, current_streak=1, last_entry_date=day)
        state = apply_reward_for_event(state, day, entry_count=1)
        assert CENTURION not in state.badges
        state = apply_reward_for_event(state, day, entry_count=1)
        assert CENTURION in state.badges

    def test_seven_day_streak(self, day):
        state = RewardState()
        for offset in range(7):
            state = apply_reward_for_event(state, day + timedelta(days=offset), entry_count=offset + 1)
        assert state.current_streak == 7
        assert SEVEN_DAY_STREAK in state.badges

    def test_thirty_entries(self, day):
        state = apply_reward_for_event(RewardState(), day, entry_count=30)
        assert THIRTY_ENTRIES in state.badges

    def test_badges_never_revoked(self):
        state = RewardState(points=10, current_streak=1, badges=(THIRTY_ENTRIES, SEVEN_DAY_STREAK))
        state = evaluate_badges(state, entry_count=2)
        assert state.badges == (THIRTY_ENTRIES, SEVEN_DAY_STREAK)

    def test_badges_keep_earned_order(self, day):
        state = RewardState(points=90, current_streak=6, last_entry_date=day)
        state = apply_reward_for_event(state, day + timedelta(days=1), entry_count=30)
        assert state.badges == (CENTURION, SEVEN_DAY_STREAK, THIRTY_ENTRIES)


class TestWriteTodayMission:
    def test_not_written_yet(self, day):
        assert not has_written_today(RewardState(), day)

    def test_already_written_today_is_noop(self, day):
        state = RewardState(points=10, current_streak=1, last_entry_date=day.replace(hour=7))
        new_state, awarded = claim_write_today(state, day, entry_count=1)
        assert not awarded
        assert new_state == state

    def test_claim_extends_streak(self, day):
        state = RewardState(points=40, current_streak=4, last_entry_date=day - timedelta(days=1))
        new_state, awarded = claim_write_today(state, day, entry_count=4)
        assert awarded
        assert new_state.points == 50
        assert new_state.current_streak == 5
        assert new_state.last_entry_date == day

    def test_claim_after_gap_restarts_streak(self, day):
        state = RewardState(points=40, current_streak=4, last_entry_date=day - timedelta(days=5))
        new_state, awarded = claim_write_today(state, day, entry_count=4)
        assert awarded
        assert new_state.current_streak == 1


class TestTagMission:
    def test_requires_three_tagged_entries(self):
        state, awarded = claim_tag_mission(RewardState(), tagged(2, untagged=5))
        assert not awarded
        assert state.points == 0

    def test_awards_once(self):
        entries = tagged(3)
        state, awarded = claim_tag_mission(RewardState(), entries)
        assert awarded
        assert state.points == 20
        assert TAG_THREE in state.claimed_missions

        state, awarded = claim_tag_mission(state, entries)
        assert not awarded
        assert state.points == 20

    def test_bonus_can_earn_centurion(self):
        state, _ = claim_tag_mission(RewardState(points=90), tagged(3))
        assert state.points == 110
        assert CENTURION in state.badges


class TestMissionStatuses:
    def test_statuses(self, day):
        state = RewardState(
            points=30,
            current_streak=1,
            last_entry_date=day,
            claimed_missions=(TAG_THREE,),
        )
        statuses = mission_statuses(state, tagged(3), day)
        assert [(s.title, s.reward, s.completed) for s in statuses] == [
            ("Write an entry today", 10, True),
            ("Tag 3 entries", 20, True),
        ]

    def test_nothing_completed(self, day):
        statuses = mission_statuses(RewardState(), [], day)
        assert not any(s.completed for s in statuses)


class TestRewardStateSerialization:
    def test_to_dict(self, day):
        state = RewardState(points=30, current_streak=2, last_entry_date=day, badges=(CENTURION,))
        assert state.to_dict() == {
            "points": 30,
            "currentStreak": 2,
            "lastEntryDate": "2025-01-15T09:30:00",
            "badges": ["Centurion"],
            "claimedMissions": [],
        }

    def test_from_dict_defaults_optional_fields(self):
        state = RewardState.from_dict({"points": 10, "currentStreak": 1})
        assert state.last_entry_date is None
        assert state.badges == ()
        assert state.claimed_missions == ()

    def test_from_dict_drops_duplicate_badges(self):
        state = RewardState.from_dict(
            {"points": 100, "currentStreak": 1, "badges": ["Centurion", "Centurion"]}
        )
        assert state.badges == ("Centurion",)

    @pytest.mark.parametrize("points", [-5, "10", True, 1.5])
    def test_from_dict_rejects_bad_points(self, points):
        with pytest.raises(ValueError):
            RewardState.from_dict({"points": points, "currentStreak": 0})

    def test_from_dict_rejects_zero_streak_with_last_entry(self, day):
        with pytest.raises(ValueError):
            RewardState.from_dict(
                {"points": 10, "currentStreak": 0, "lastEntryDate": day.isoformat()}
            )

    def test_from_dict_allows_zero_streak_without_last_entry(self):
        assert RewardState.from_dict({"points": 0, "currentStreak": 0, "lastEntryDate": None}) == RewardState()

    def test_from_dict_rejects_bad_badges(self):
        with pytest.raises(TypeError):
            RewardState.from_dict({"points": 0, "currentStreak": 0, "badges": "Centurion"})
