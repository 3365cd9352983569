"""Shared fixtures: offscreen Qt, in-memory store and a controllable clock."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from datetime import datetime, timedelta, timezone

import pytest

from ibanner.services.banner_data_manager import BannerDataManager
from ibanner.utils.i18n import init_language


class MemoryKeyValueStore:
    """KeyValueStore kept in a dict (nothing is written to disk)."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FakeClock:
    """Returns the current fake time; advance() moves it forward."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 7, 13, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


@pytest.fixture(autouse=True)
def _english():
    init_language("en")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def data_manager(store, clock, tmp_path):
    return BannerDataManager(store, data_dir=tmp_path / "data", clock=clock)
