"""
Storage - the durable key-value store behind the vault.

Every record is a string (JSON for the asset and category lists, plain text
for the preferences). Writes never raise: a failed write is logged and the
in-memory state stays authoritative for the rest of the session.
"""

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Interface shared by the on-disk and in-memory stores."""

    def load(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def save(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class FileStore(KeyValueStore):
    """
    One file per key inside a directory, named after the key.

    Values are stored verbatim: the asset and category records are JSON,
    the preferences are plain strings.

    Files are replaced atomically (temp file + rename), so readers only ever
    see the previous record or the new one. The directory is created on the
    first write.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / key

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not read {path.name}: {e}")
            return None

    def save(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_name(f"{key}.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
            logger.debug(f"Saved {key} ({len(value)} chars)")
        except OSError as e:
            logger.error(f"Failed to save {key}: {e}")

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to remove {key}: {e}")
