"""Pure rewards logic - points, streaks, badges and missions."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, tzinfo

from .entries import DiaryEntry, count_tagged

ENTRY_POINTS = 10
WRITE_TODAY_POINTS = 10
TAG_MISSION_POINTS = 20
TAG_MISSION_THRESHOLD = 3

CENTURION = "Centurion"
SEVEN_DAY_STREAK = "7-Day Streak"
THIRTY_ENTRIES = "30 Entries"

WRITE_TODAY = "write-today"
TAG_THREE = "tag-3-entries"


@dataclass(frozen=True)
class RewardState:
    """Gamified writing counters."""

    points: int = 0
    current_streak: int = 0
    last_entry_date: datetime | None = None
    badges: tuple[str, ...] = ()
    claimed_missions: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "points": self.points,
            "currentStreak": self.current_streak,
            "lastEntryDate": self.last_entry_date.isoformat() if self.last_entry_date else None,
            "badges": list(self.badges),
            "claimedMissions": list(self.claimed_missions),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RewardState":
        """
        Build a state from its persisted form.

        Raises KeyError, TypeError or ValueError on malformed documents.
        """
        points = data["points"]
        streak = data["currentStreak"]
        for name, value in (("points", points), ("currentStreak", streak)):
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

        last = data.get("lastEntryDate")
        last_entry_date = datetime.fromisoformat(last) if last else None
        if last_entry_date is not None and streak < 1:
            raise ValueError("currentStreak must be at least 1 once an entry has been recorded")

        badges = data.get("badges", [])
        claimed = data.get("claimedMissions", [])
        for name, value in (("badges", badges), ("claimedMissions", claimed)):
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise TypeError(f"{name} must be a list of strings, got {value!r}")

        return cls(
            points=points,
            current_streak=streak,
            last_entry_date=last_entry_date,
            badges=_unique(badges),
            claimed_missions=_unique(claimed),
        )


@dataclass
class MissionStatus:
    """A mission as shown to the user."""

    id: str
    title: str
    reward: int
    completed: bool


def _unique(values: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def local_day(moment: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of a datetime. Naive values are taken as local time."""
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(tz).date()


def calendar_day_difference(a: datetime, b: datetime, tz: tzinfo | None = None) -> int:
    """Signed whole calendar days from b to a."""
    return (local_day(a, tz) - local_day(b, tz)).days


def evaluate_badges(state: RewardState, entry_count: int) -> RewardState:
    """Add any newly earned badges. Earned badges are never removed."""
    earned = list(state.badges)
    if state.points >= 100 and CENTURION not in earned:
        earned.append(CENTURION)
    if state.current_streak >= 7 and SEVEN_DAY_STREAK not in earned:
        earned.append(SEVEN_DAY_STREAK)
    if entry_count >= 30 and THIRTY_ENTRIES not in earned:
        earned.append(THIRTY_ENTRIES)
    return replace(state, badges=tuple(earned))


def apply_reward_for_event(
    state: RewardState,
    event_date: datetime,
    entry_count: int,
    tz: tzinfo | None = None,
) -> RewardState:
    """
    Record one qualifying writing event.

    Not idempotent: every call is a new event worth ENTRY_POINTS.
    A backdated event (negative day difference) resets the streak.
    """
    if state.last_entry_date is None:
        streak = 1
    else:
        days = calendar_day_difference(event_date, state.last_entry_date, tz)
        if days == 1:
            streak = state.current_streak + 1
        elif days == 0:
            streak = state.current_streak
        else:
            streak = 1

    new_state = replace(
        state,
        points=state.points + ENTRY_POINTS,
        current_streak=streak,
        last_entry_date=event_date,
    )
    return evaluate_badges(new_state, entry_count)


# ============== Missions ==============


def has_written_today(state: RewardState, now: datetime, tz: tzinfo | None = None) -> bool:
    if state.last_entry_date is None:
        return False
    return calendar_day_difference(now, state.last_entry_date, tz) == 0


def has_tagged_three(entries: list[DiaryEntry]) -> bool:
    return count_tagged(entries) >= TAG_MISSION_THRESHOLD


def claim_write_today(
    state: RewardState,
    now: datetime,
    entry_count: int,
    tz: tzinfo | None = None,
) -> tuple[RewardState, bool]:
    """Claim the daily writing mission. Returns (state, awarded)."""
    if has_written_today(state, now, tz):
        return state, False
    return apply_reward_for_event(state, now, entry_count, tz), True


def claim_tag_mission(state: RewardState, entries: list[DiaryEntry]) -> tuple[RewardState, bool]:
    """Claim the one-shot tagging mission. Returns (state, awarded)."""
    if TAG_THREE in state.claimed_missions or not has_tagged_three(entries):
        return state, False
    new_state = replace(
        state,
        points=state.points + TAG_MISSION_POINTS,
        claimed_missions=state.claimed_missions + (TAG_THREE,),
    )
    return evaluate_badges(new_state, len(entries)), True


def mission_statuses(
    state: RewardState,
    entries: list[DiaryEntry],
    now: datetime,
    tz: tzinfo | None = None,
) -> list[MissionStatus]:
    return [
        MissionStatus(
            id=WRITE_TODAY,
            title="Write an entry today",
            reward=WRITE_TODAY_POINTS,
            completed=has_written_today(state, now, tz),
        ),
        MissionStatus(
            id=TAG_THREE,
            title="Tag 3 entries",
            reward=TAG_MISSION_POINTS,
            completed=TAG_THREE in state.claimed_missions,
        ),
    ]
