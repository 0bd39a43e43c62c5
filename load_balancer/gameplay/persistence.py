"""
Key-value port for the durable high score.
NO UI DEPENDENCIES.

Stores may raise; callers decide whether that matters. The session
treats every store failure as "no stored value".
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    """Anything that can get and set an integer by key."""

    def get(self, key: str) -> Optional[int]:
        ...

    def set(self, key: str, value: int) -> None:
        ...


class MemoryStore:
    """In-process store for tests and environments without storage."""

    def __init__(self, initial: Optional[Dict[str, int]] = None):
        self.values: Dict[str, int] = dict(initial or {})

    def get(self, key: str) -> Optional[int]:
        return self.values.get(key)

    def set(self, key: str, value: int) -> None:
        self.values[key] = int(value)


class JsonFileStore:
    """
    Values kept as a flat JSON object on disk.

    A missing file reads as empty. Unreadable or malformed content
    raises (OSError / ValueError) on get(); set() replaces it.
    Writes go to a temporary file that is renamed over the target.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, int]:
        if not self.path.exists():
            return {}
        with open(self.path, encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Invalid store format in {self.path}")
        return data

    def get(self, key: str) -> Optional[int]:
        value = self._load().get(key)
        return int(value) if value is not None else None

    def set(self, key: str, value: int) -> None:
        try:
            data = self._load()
        except ValueError as e:
            logger.warning(f"Discarding unreadable store {self.path}: {e}")
            data = {}
        data[key] = int(value)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise
