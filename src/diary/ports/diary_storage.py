"""Diary storage interface."""

from typing import Protocol

from diary.core.entries import DiaryEntry, UserProfile
from diary.core.rewards import RewardState


class DiaryStorage(Protocol):
    """
    Interface for persisting diary documents.

    Loads never raise: a missing or undecodable document yields an empty
    or default value. Saves never raise: failures are logged.
    """

    def load_entries(self) -> list[DiaryEntry]:
        """Load all entries, or an empty list."""
        ...

    def save_entries(self, entries: list[DiaryEntry]) -> None:
        """Atomically overwrite the entries document."""
        ...

    def load_user(self) -> UserProfile:
        """Load the profile, or a default one."""
        ...

    def save_user(self, profile: UserProfile) -> None:
        """Atomically overwrite the profile document."""
        ...

    def load_rewards(self) -> RewardState:
        """Load reward counters, or a fresh state."""
        ...

    def save_rewards(self, state: RewardState) -> None:
        """Atomically overwrite the rewards document."""
        ...
