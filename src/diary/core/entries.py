"""Pure diary entry and profile logic - no I/O dependencies."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta

DEFAULT_NAME = "You"
DEFAULT_COLOR_HEX = "#4F46E5"


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class DiaryEntry:
    """A single diary record."""

    title: str
    body: str
    date: datetime = field(default_factory=datetime.now)
    tags: list[str] = field(default_factory=list)
    mood: str | None = None  # single emoji, not validated
    pinned: bool = False
    id: str = field(default_factory=_new_id)

    @property
    def has_tags(self) -> bool:
        return len(self.tags) >= 1

    def matches(self, search: str = "", tag: str | None = None) -> bool:
        """Check tag membership and case-insensitive text match."""
        if tag is not None and tag not in self.tags:
            return False
        if not search:
            return True
        needle = search.casefold()
        return needle in self.title.casefold() or needle in self.body.casefold()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "date": self.date.isoformat(),
            "tags": list(self.tags),
            "mood": self.mood,
            "pinned": self.pinned,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DiaryEntry":
        """
        Build an entry from its persisted form.

        Raises KeyError, TypeError or ValueError on malformed records.
        """
        tags = data["tags"]
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise TypeError(f"tags must be a list of strings, got {tags!r}")

        mood = data.get("mood")
        if mood is not None and not isinstance(mood, str):
            raise TypeError(f"mood must be a string or null, got {mood!r}")

        for key in ("id", "title", "body"):
            if not isinstance(data[key], str):
                raise TypeError(f"{key} must be a string, got {data[key]!r}")

        pinned = data.get("pinned", False)
        if not isinstance(pinned, bool):
            raise TypeError(f"pinned must be a boolean, got {pinned!r}")

        return cls(
            id=data["id"],
            title=data["title"],
            body=data["body"],
            date=datetime.fromisoformat(data["date"]),
            tags=list(tags),
            mood=mood,
            pinned=pinned,
        )


@dataclass
class UserProfile:
    """Display preferences for the diary owner."""

    name: str = DEFAULT_NAME
    preferred_color_hex: str = DEFAULT_COLOR_HEX

    def to_dict(self) -> dict:
        return {"name": self.name, "preferredColorHex": self.preferred_color_hex}

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        name = data["name"]
        color = data["preferredColorHex"]
        if not isinstance(name, str) or not isinstance(color, str):
            raise TypeError("profile fields must be strings")
        return cls(name=name, preferred_color_hex=color)


def parse_tags(raw: str) -> list[str]:
    """Split comma-separated editor input into tags, trimming whitespace."""
    return [t.strip() for t in raw.split(",") if t.strip()]


def parse_mood(raw: str) -> str | None:
    """Empty editor input means no mood."""
    raw = raw.strip()
    return raw or None


def filter_entries(
    entries: list[DiaryEntry],
    search: str = "",
    tag: str | None = None,
) -> list[DiaryEntry]:
    """Filter entries by tag and search text, preserving list order."""
    return [e for e in entries if e.matches(search, tag)]


def split_pinned(entries: list[DiaryEntry]) -> tuple[list[DiaryEntry], list[DiaryEntry]]:
    """Split entries into (pinned, unpinned), preserving order within each."""
    pinned = [e for e in entries if e.pinned]
    unpinned = [e for e in entries if not e.pinned]
    return pinned, unpinned


def all_tags(entries: list[DiaryEntry]) -> list[str]:
    """Sorted unique tags across all entries."""
    return sorted({tag for e in entries for tag in e.tags})


def count_tagged(entries: list[DiaryEntry]) -> int:
    """Number of entries carrying at least one tag."""
    return sum(1 for e in entries if e.has_tags)


def sample_entries(now: datetime | None = None) -> list[DiaryEntry]:
    """Starter entries shown on first launch."""
    now = now or datetime.now()
    return [
        DiaryEntry(
            title="Welcome to Your Diary",
            body=(
                "This is your private space to capture thoughts, goals, and memories. "
                "Write something today to earn points and build your streak!"
            ),
            date=now - timedelta(hours=1),
            tags=["intro"],
            mood="🙂",
            pinned=True,
        ),
        DiaryEntry(
            title="Morning run",
            body="Felt energetic after breakfast. 5km in 30 minutes.",
            date=now - timedelta(days=1),
            tags=["health", "run"],
            mood="😅",
        ),
        DiaryEntry(
            title="Idea: Side project",
            body="Sketching an app to help small teams plan sprints.",
            date=now - timedelta(days=3),
            tags=["work", "ideas"],
            mood="🤔",
        ),
    ]
