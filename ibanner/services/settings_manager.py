"""Settings manager for application preferences."""

from typing import Any

from PySide6.QtCore import QSettings

from ibanner.utils.config import MAX_HISTORY_COUNT, PREMIUM_GATING_ENABLED


class SettingsManager:
    """Wrapper around QSettings for type-safe preference management."""

    def __init__(self, settings: QSettings | None = None):
        self._settings = settings if settings is not None else QSettings()

    # ---------------------------------------------------- General Settings

    def get_max_history_count(self) -> int:
        """Get the maximum number of history entries to keep (default: 10)."""
        value = self._settings.value("history/max_count", MAX_HISTORY_COUNT, int)
        return value if value > 0 else MAX_HISTORY_COUNT

    def set_max_history_count(self, count: int) -> None:
        """Set the maximum number of history entries to keep."""
        self._settings.setValue("history/max_count", max(1, int(count)))

    # ---------------------------------------------------- UI Settings

    def get_ui_language(self) -> str:
        """Get the UI language code (default: en)."""
        return self._settings.value("ui/language", "en", str)

    def set_ui_language(self, lang: str) -> None:
        """Set the UI language code ('en', 'zh')."""
        self._settings.setValue("ui/language", lang)

    # ---------------------------------------------------- Premium

    def get_premium_gating_enabled(self) -> bool:
        """Whether premium features require a purchase (default: off)."""
        return self._settings.value("premium/gating_enabled", PREMIUM_GATING_ENABLED, bool)

    def set_premium_gating_enabled(self, enabled: bool) -> None:
        self._settings.setValue("premium/gating_enabled", bool(enabled))

    # ---------------------------------------------------- General Methods

    def reset_to_defaults(self) -> None:
        """Reset all preferences to default values (banner data is kept)."""
        for group in ("history", "ui", "premium"):
            self._settings.remove(group)

    def sync(self) -> None:
        """Force synchronization of settings to disk."""
        self._settings.sync()

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value by key."""
        return self._settings.value(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value by key."""
        self._settings.setValue(key, value)
