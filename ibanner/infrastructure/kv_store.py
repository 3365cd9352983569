"""Key-value blob storage.

Collections are stored as JSON text under fixed keys. ``KeyValueStore`` is the
protocol the data manager talks to; ``QSettingsKeyValueStore`` is the
production backend.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from PySide6.QtCore import QByteArray, QSettings


class KeyValueStoreError(OSError):
    """Raised when a value cannot be written to or removed from the store."""


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal string blob store."""

    def get(self, key: str) -> str | None:
        """Return the stored text for *key*, or None if missing."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*. Raises KeyValueStoreError on failure."""
        ...

    def remove(self, key: str) -> None:
        """Remove *key*. Missing keys are ignored."""
        ...


class QSettingsKeyValueStore:
    """KeyValueStore backed by QSettings."""

    _GROUP = "BannerData"

    def __init__(self, settings: QSettings | None = None):
        self._settings = settings if settings is not None else QSettings()

    def _key(self, key: str) -> str:
        return f"{self._GROUP}/{key}"

    def get(self, key: str) -> str | None:
        value = self._settings.value(self._key(key), None)
        if value is None:
            return None
        if isinstance(value, QByteArray):
            return bytes(value.data()).decode("utf-8")
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str) -> None:
        self._settings.setValue(self._key(key), value)
        self._sync()

    def remove(self, key: str) -> None:
        self._settings.remove(self._key(key))
        self._sync()

    def _sync(self) -> None:
        self._settings.sync()
        status = self._settings.status()
        if status != QSettings.Status.NoError:
            raise KeyValueStoreError(f"QSettings sync failed: {status}")
