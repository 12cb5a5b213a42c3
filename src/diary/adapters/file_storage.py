"""File-based diary storage adapter."""

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, TypeVar

from diary.core.entries import DiaryEntry, UserProfile
from diary.core.rewards import RewardState

logger = logging.getLogger(__name__)

ENTRIES_FILE = "diary_entries.json"
USER_FILE = "diary_user.json"
REWARDS_FILE = "diary_rewards.json"

T = TypeVar("T")


class DecodeFailure(Exception):
    """A persisted document is missing or malformed."""


class WriteFailure(Exception):
    """A document could not be written."""


def _decode_entries(data: Any) -> list[DiaryEntry]:
    if not isinstance(data, list):
        raise TypeError(f"expected a list of entries, got {type(data).__name__}")
    return [DiaryEntry.from_dict(item) for item in data]


class FileDiaryStorage:
    """
    File-based diary storage.

    Implements DiaryStorage protocol. Each document is one JSON file,
    replaced atomically on save. Loads and saves never raise.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()

    def _path(self, filename: str) -> Path:
        return self.data_dir / filename

    def _read_document(self, filename: str, decode: Callable[[Any], T]) -> T:
        """Read, parse and decode a JSON document. Raises DecodeFailure."""
        path = self._path(filename)
        if not path.exists():
            raise DecodeFailure(f"{path} does not exist")
        try:
            return decode(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
            raise DecodeFailure(f"{path}: {e}") from e
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodeFailure(f"{path}: invalid record: {e!r}") from e

    def _write_document(self, filename: str, data: Any) -> None:
        """Write a JSON document via temp file + fsync + replace. Raises WriteFailure."""
        path = self._path(filename)
        try:
            serialized = json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8")
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        except (OSError, TypeError, ValueError) as e:
            raise WriteFailure(f"{path}: {e}") from e

        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(serialized)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise WriteFailure(f"{path}: {e}") from e

    def _load(self, filename: str, decode: Callable[[Any], T], default: Callable[[], T], label: str) -> T:
        if not self._path(filename).exists():
            logger.debug(f"No {label} document yet, using defaults")
            return default()
        try:
            return self._read_document(filename, decode)
        except DecodeFailure as e:
            logger.warning(f"Could not load {label}: {e}")
            return default()

    def _save(self, filename: str, data: Any, label: str) -> None:
        try:
            self._write_document(filename, data)
        except WriteFailure as e:
            logger.error(f"Failed to save {label}: {e}")

    def load_entries(self) -> list[DiaryEntry]:
        """Load all entries. Returns [] if missing or undecodable."""
        return self._load(ENTRIES_FILE, _decode_entries, list, "entries")

    def save_entries(self, entries: list[DiaryEntry]) -> None:
        self._save(ENTRIES_FILE, [e.to_dict() for e in entries], "entries")

    def load_user(self) -> UserProfile:
        """Load the profile. Returns the default profile if missing or undecodable."""
        return self._load(USER_FILE, UserProfile.from_dict, UserProfile, "user profile")

    def save_user(self, profile: UserProfile) -> None:
        self._save(USER_FILE, profile.to_dict(), "user profile")

    def load_rewards(self) -> RewardState:
        """Load reward counters. Returns a fresh state if missing or undecodable."""
        return self._load(REWARDS_FILE, RewardState.from_dict, RewardState, "rewards")

    def save_rewards(self, state: RewardState) -> None:
        self._save(REWARDS_FILE, state.to_dict(), "rewards")
