"""Key-value storage backends for store snapshots"""
import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9._-]+$")


class KeyValueStorage(ABC):
    """Named string slots, like a browser's local storage"""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Get value stored under key"""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value"""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove key if present"""
        pass


class MemoryStorage(KeyValueStorage):
    """Process-local storage"""

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage(KeyValueStorage):
    """One JSON file per key inside a directory"""

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def ensure_dir(self) -> Path:
        """Ensure storage directory exists"""
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.warning("Discarding unreadable storage file %s", path)
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        self.ensure_dir()
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(value)
        os.replace(tmp_path, path)
        logger.debug("Wrote %d bytes to %s", len(value), path)

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
