"""Key-value storage protocol."""

from typing import Protocol


class IKeyValueStorage(Protocol):
    """A string-keyed slot store holding opaque text blobs.

    Implementations may raise ``StorageUnavailableError`` when the backend
    cannot be reached; callers decide whether to contain it.
    """

    def get_item(self, key: str) -> str | None:
        """Return the blob stored under ``key``, or None if the slot is empty."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Overwrite the slot ``key`` with ``value``."""
        ...

    def remove_item(self, key: str) -> None:
        """Empty the slot ``key``; a missing slot is not an error."""
        ...
