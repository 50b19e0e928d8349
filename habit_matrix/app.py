# habit_matrix/app.py
from typing import Optional

from habit_matrix.config import StoreConfig
from habit_matrix.logger import setup_logger
from habit_matrix.storage import FileKeyValueStore, HabitPersistence, KeyValueStore
from habit_matrix.store import HabitStore


def create_store(config: Optional[StoreConfig] = None, kv: Optional[KeyValueStore] = None) -> HabitStore:
    """Build the session's single store. Call once at start-up and hand the
    result to whatever presents it."""
    config = config or StoreConfig()
    setup_logger(config.log_file, level=config.log_level)
    if kv is None:
        kv = FileKeyValueStore(config.data_dir)
    return HabitStore(HabitPersistence(kv, key=config.storage_key))
