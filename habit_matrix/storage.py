# habit_matrix/storage.py
"""Key-value persistence for the habit collection.

The store only needs ``load()``/``save()`` on one well-known key. Neither
call raises: failures are logged and reported as ``None``/``False`` so the
in-memory state stays authoritative for the session.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol

from loguru import logger

from habit_matrix.models import Habit

STORAGE_KEY = "habits"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, raw: str) -> None: ...


class FileKeyValueStore:
    """One ``<key>.json`` file per key inside ``directory``."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, raw: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_name(path.name + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(raw)
            os.replace(tmp, path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise


class MemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, raw: str) -> None:
        self.data[key] = raw


class HabitPersistence:
    def __init__(self, kv: KeyValueStore, key: str = STORAGE_KEY):
        self.kv = kv
        self.key = key

    def load(self) -> Optional[str]:
        try:
            return self.kv.get(self.key)
        except Exception:
            logger.exception(f"[STORAGE] Failed to read '{self.key}'")
            return None

    def save(self, raw: str) -> bool:
        try:
            self.kv.set(self.key, raw)
        except Exception:
            logger.exception(f"[STORAGE] Failed to write '{self.key}'")
            return False
        return True


# -------- Codec --------
def encode_habits(habits: Iterable[Habit]) -> str:
    return json.dumps([h.to_dict() for h in habits], ensure_ascii=False, indent=2)


def decode_habits(raw: str) -> List[Habit]:
    """Parse the persisted list. Malformed JSON or a non-list payload raises
    ValueError; individual unreadable records are skipped."""
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"expected a list of habits, got {type(data).__name__}")
    habits: List[Habit] = []
    for idx, record in enumerate(data):
        try:
            habits.append(Habit.from_dict(record))
        except (TypeError, ValueError, OverflowError) as exc:
            logger.warning(f"[STORAGE] Skipping habit record #{idx}: {exc}")
    return habits
