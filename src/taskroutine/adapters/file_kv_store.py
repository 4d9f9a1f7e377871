"""File-based key-value storage adapter."""

import os
import tempfile
from pathlib import Path

from taskroutine.core.errors import StorageError


class FileKeyValueStore:
    """
    File-based key-value storage.

    Implements KeyValueStore protocol. Each key gets a JSON file in the data
    directory; writes replace the file atomically.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a given key."""
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        """Read the value for a key. Returns None if not found."""
        path = self._path_for_key(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        """Write/overwrite the value for a key."""
        path = self._path_for_key(key)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.data_dir, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def keys(self) -> list[str]:
        """List stored keys."""
        return sorted(p.stem for p in self.data_dir.glob("*.json"))
