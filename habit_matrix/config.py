# habit_matrix/config.py

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from habit_matrix.storage import STORAGE_KEY


@dataclass
class StoreConfig:
    """Where habits are stored and how the session logs."""
    data_dir: Path = Path("data")
    storage_key: str = STORAGE_KEY
    log_file: Optional[Path] = None
    log_level: str = "INFO"

    @property
    def storage_path(self) -> Path:
        return Path(self.data_dir) / f"{self.storage_key}.json"
