"""Key-value storage interface."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Interface for a string blob store keyed by name."""

    def get(self, key: str) -> str | None:
        """Read a value. Returns None if the key was never set."""
        ...

    def set(self, key: str, value: str) -> None:
        """Write/overwrite a value."""
        ...
