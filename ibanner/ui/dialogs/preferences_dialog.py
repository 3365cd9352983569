"""Preferences dialog for application settings."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QGroupBox,
    QLabel,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)

from ibanner.services.banner_data_manager import BannerDataManager
from ibanner.services.settings_manager import SettingsManager
from ibanner.services.subscription_manager import SubscriptionManager
from ibanner.utils.i18n import SUPPORTED_LANGUAGES, tr


class PreferencesDialog(QDialog):
    """Dialog for editing application preferences."""

    def __init__(
        self,
        settings: SettingsManager,
        data_manager: BannerDataManager,
        subscription: SubscriptionManager | None = None,
        parent=None,
    ):
        super().__init__(parent)
        self.setWindowTitle(tr("Preferences"))
        self.setMinimumWidth(420)

        self._settings = settings
        self._data = data_manager
        self._subscription = subscription
        self._build_ui()
        self._load_settings()

    def _build_ui(self):
        layout = QVBoxLayout(self)

        # History group
        history_group = QGroupBox(tr("History"))
        history_layout = QFormLayout(history_group)

        self._history_max = QSpinBox()
        self._history_max.setRange(1, 100)
        self._history_max.setSuffix(f" {tr('entries')}")
        history_layout.addRow(tr("Maximum History Entries:"), self._history_max)

        stats = self._data.usage_statistics()
        stats_label = QLabel(
            f"{tr('History')}: {stats.history_count}  "
            f"{tr('Custom')}: {stats.custom_template_count}  "
            f"{tr('Favorites')}: {stats.favorite_count}"
        )
        stats_label.setStyleSheet("color: gray;")
        history_layout.addRow("", stats_label)

        layout.addWidget(history_group)

        # UI group
        ui_group = QGroupBox(tr("User Interface"))
        ui_layout = QFormLayout(ui_group)

        self._ui_language = QComboBox()
        for code, name in SUPPORTED_LANGUAGES.items():
            self._ui_language.addItem(name, code)
        ui_layout.addRow(tr("Language:"), self._ui_language)

        info_label = QLabel(tr("Note: Language changes require restart"))
        info_label.setStyleSheet("color: gray; font-style: italic;")
        ui_layout.addRow("", info_label)

        layout.addWidget(ui_group)

        # Premium group
        premium_group = QGroupBox(tr("Premium"))
        premium_layout = QFormLayout(premium_group)
        self._gating_check = QCheckBox(tr("Require purchase for premium features"))
        premium_layout.addRow("", self._gating_check)
        layout.addWidget(premium_group)

        reset_btn = QPushButton(tr("Reset to Defaults"))
        reset_btn.clicked.connect(self._reset_to_defaults)
        layout.addWidget(reset_btn)

        reset_data_btn = QPushButton(tr("Reset All Data..."))
        reset_data_btn.clicked.connect(self._reset_all_data)
        layout.addWidget(reset_data_btn)

        layout.addStretch()

        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        button_box.accepted.connect(self._save_and_accept)
        button_box.rejected.connect(self.reject)
        layout.addWidget(button_box)

    def _load_settings(self):
        self._history_max.setValue(self._settings.get_max_history_count())
        index = self._ui_language.findData(self._settings.get_ui_language())
        self._ui_language.setCurrentIndex(max(0, index))
        self._gating_check.setChecked(self._settings.get_premium_gating_enabled())

    def _save_and_accept(self):
        self._settings.set_max_history_count(self._history_max.value())
        self._settings.set_ui_language(self._ui_language.currentData())
        self._settings.set_premium_gating_enabled(self._gating_check.isChecked())
        self._settings.sync()
        self._data.max_history_count = self._history_max.value()
        if self._subscription is not None:
            self._subscription.set_gating_enabled(self._gating_check.isChecked())
        self.accept()

    def _reset_to_defaults(self):
        reply = QMessageBox.question(
            self,
            tr("Reset to Defaults"),
            tr("Reset all preferences to default values?"),
        )
        if reply == QMessageBox.StandardButton.Yes:
            self._settings.reset_to_defaults()
            self._load_settings()

    def _reset_all_data(self):
        reply = QMessageBox.question(
            self,
            tr("Reset All Data..."),
            tr("Delete all history, custom templates, favorites and background images?"),
        )
        if reply == QMessageBox.StandardButton.Yes:
            self._data.reset_all_data()
