"""Shared wiring between the CLI and the store.

Builds one DiaryStore per process from configuration and hands it to
whatever needs it.
"""

from .adapters.file_storage import FileDiaryStorage
from .config import Config
from .store import DiaryStore


def get_storage(config: Config) -> FileDiaryStorage:
    """Resolve the storage directory from config."""
    return FileDiaryStorage(config.resolved_data_dir())


def get_store(config: Config) -> DiaryStore:
    """Open the diary store described by config."""
    return DiaryStore.open(
        get_storage(config),
        seed_samples=config.seed_samples,
        tz=config.tz(),
    )
