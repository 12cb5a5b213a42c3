"""In-memory diary state with write-through persistence."""

import json
import logging
from dataclasses import replace
from datetime import datetime, tzinfo
from typing import Callable

from .core.entries import (
    DiaryEntry,
    UserProfile,
    all_tags,
    filter_entries,
    sample_entries,
    split_pinned,
)
from .core.rewards import (
    MissionStatus,
    RewardState,
    apply_reward_for_event,
    claim_tag_mission,
    claim_write_today,
    mission_statuses,
)
from .ports.diary_storage import DiaryStorage

logger = logging.getLogger(__name__)


class DiaryStore:
    """
    Owns entries, profile and reward state for the process lifetime.

    Every mutation saves the affected documents before returning.
    """

    def __init__(
        self,
        storage: DiaryStorage,
        entries: list[DiaryEntry] | None = None,
        profile: UserProfile | None = None,
        rewards: RewardState | None = None,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.storage = storage
        self.entries: list[DiaryEntry] = list(entries or [])
        self.profile = profile or UserProfile()
        self.rewards = rewards or RewardState()
        self.tz = tz
        self.clock = clock

    @classmethod
    def open(
        cls,
        storage: DiaryStorage,
        seed_samples: bool = True,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "DiaryStore":
        """Load all documents, seeding sample entries into an empty diary."""
        store = cls(
            storage,
            entries=storage.load_entries(),
            profile=storage.load_user(),
            rewards=storage.load_rewards(),
            tz=tz,
            clock=clock,
        )
        if not store.entries and seed_samples:
            logger.info("No entries found, seeding sample entries")
            store.entries = sample_entries(clock())
            store._save_entries()
        return store

    # ============== Persistence ==============

    def _save_entries(self) -> None:
        self.storage.save_entries(self.entries)

    def _save_rewards(self) -> None:
        self.storage.save_rewards(self.rewards)

    # ============== Entries ==============

    def get(self, entry_id: str) -> DiaryEntry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def add(self, entry: DiaryEntry) -> None:
        """Insert a new entry at the front and reward the writing event."""
        self.entries.insert(0, entry)
        self.rewards = apply_reward_for_event(self.rewards, entry.date, len(self.entries), self.tz)
        logger.debug(f"Added entry {entry.id}, points now {self.rewards.points}")
        self._save_entries()
        self._save_rewards()

    def update(self, entry: DiaryEntry) -> bool:
        """Replace the entry with the same id in place. Unknown ids are ignored."""
        for idx, existing in enumerate(self.entries):
            if existing.id == entry.id:
                self.entries[idx] = entry
                logger.debug(f"Updated entry {entry.id} at index {idx}")
                self._save_entries()
                return True
        return False

    def delete(self, entry: DiaryEntry) -> int:
        """Remove every entry with the same id. Returns how many were removed."""
        before = len(self.entries)
        self.entries = [e for e in self.entries if e.id != entry.id]
        removed = before - len(self.entries)
        logger.debug(f"Deleted {removed} entries with id {entry.id}")
        self._save_entries()
        return removed

    def toggle_pin(self, entry: DiaryEntry) -> bool:
        return self.update(replace(entry, pinned=not entry.pinned))

    def save_entry(self, entry: DiaryEntry) -> None:
        """Editor save: update an existing entry, otherwise add it."""
        if self.get(entry.id) is not None:
            self.update(entry)
        else:
            self.add(entry)

    # ============== Queries ==============

    def filter(self, search: str = "", tag: str | None = None) -> list[DiaryEntry]:
        return filter_entries(self.entries, search, tag)

    def sections(self, search: str = "", tag: str | None = None) -> tuple[list[DiaryEntry], list[DiaryEntry]]:
        """(pinned, unpinned) entries matching the filters."""
        return split_pinned(self.filter(search, tag))

    def all_tags(self) -> list[str]:
        return all_tags(self.entries)

    # ============== Profile ==============

    def set_profile(self, profile: UserProfile) -> None:
        self.profile = profile
        self.storage.save_user(self.profile)

    def update_profile(self, name: str = "", color_hex: str = "") -> UserProfile:
        """Profile form save: empty fields keep their current values."""
        profile = UserProfile(
            name=name or self.profile.name,
            preferred_color_hex=color_hex or self.profile.preferred_color_hex,
        )
        self.set_profile(profile)
        return profile

    # ============== Missions ==============

    def missions(self) -> list[MissionStatus]:
        return mission_statuses(self.rewards, self.entries, self.clock(), self.tz)

    def claim_write_today(self) -> bool:
        self.rewards, awarded = claim_write_today(self.rewards, self.clock(), len(self.entries), self.tz)
        if awarded:
            logger.debug("Claimed write-today mission")
            self._save_rewards()
        return awarded

    def claim_tag_mission(self) -> bool:
        self.rewards, awarded = claim_tag_mission(self.rewards, self.entries)
        if awarded:
            logger.debug("Claimed tag mission")
            self._save_rewards()
        return awarded

    # ============== Export ==============

    def export_entries(self, preview_chars: int = 1000) -> str:
        """Serialize all entries to JSON and log a truncated preview."""
        exported = json.dumps([e.to_dict() for e in self.entries], ensure_ascii=False)
        logger.info(f"Exported entries JSON:\n{exported[:preview_chars]}")
        return exported
