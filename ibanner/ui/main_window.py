"""Main application window."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QButtonGroup,
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from ibanner.models.banner_history import BannerHistory
from ibanner.models.banner_style import (
    BLUE,
    GREEN,
    PINK,
    RED,
    WHITE,
    YELLOW,
    AnimationType,
    BannerStyle,
    Color,
)
from ibanner.models.banner_template import BannerTemplate
from ibanner.services.banner_data_manager import BannerDataManager
from ibanner.services.settings_manager import SettingsManager
from ibanner.services.subscription_manager import SubscriptionManager
from ibanner.services.template_catalog import TemplateCatalog
from ibanner.ui.banner_display_widget import BannerDisplayWidget, to_qcolor
from ibanner.ui.dialogs.preferences_dialog import PreferencesDialog
from ibanner.ui.dialogs.premium_dialog import PremiumDialog
from ibanner.ui.dialogs.style_dialog import StyleDialog
from ibanner.ui.history_panel import HistoryPanel
from ibanner.ui.templates_panel import TemplatesPanel
from ibanner.utils.config import APP_NAME, APP_VERSION, MAX_TEXT_LENGTH
from ibanner.utils.i18n import tr

logger = logging.getLogger(__name__)

_QUICK_COLORS: tuple[Color, ...] = (WHITE, RED, YELLOW, GREEN, BLUE, PINK)
_QUICK_ANIMATIONS = (
    AnimationType.NONE,
    AnimationType.SCROLL,
    AnimationType.BLINK,
    AnimationType.GRADIENT,
)


class MainWindow(QMainWindow):
    def __init__(
        self,
        data_manager: BannerDataManager,
        catalog: TemplateCatalog,
        subscription: SubscriptionManager,
        settings: SettingsManager,
    ) -> None:
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(420, 640)
        self.resize(480, 760)

        self._data = data_manager
        self._catalog = catalog
        self._subscription = subscription
        self._settings = settings
        self._style = self._data.load_last_used_style() or BannerStyle()
        self._display: BannerDisplayWidget | None = None

        self._build_ui()
        self._build_menu()
        self._sync_controls()
        self.statusBar().showMessage(tr("Ready"))

    # ------------------------------------------------------------------ UI

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        # Text input
        input_group = QGroupBox(tr("Banner Text"))
        input_layout = QVBoxLayout(input_group)

        self._text_edit = QLineEdit()
        self._text_edit.setMaxLength(MAX_TEXT_LENGTH)
        self._text_edit.setPlaceholderText(tr("Enter banner text..."))
        self._text_edit.setStyleSheet("font-size: 18px; padding: 6px;")
        self._text_edit.textChanged.connect(self._on_text_changed)
        self._text_edit.returnPressed.connect(self._on_show_banner)
        input_layout.addWidget(self._text_edit)

        self._counter_label = QLabel()
        self._counter_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        self._counter_label.setStyleSheet("color: #999; font-size: 11px;")
        input_layout.addWidget(self._counter_label)

        # Quick colors
        color_row = QHBoxLayout()
        color_row.setSpacing(4)
        color_row.addWidget(QLabel(tr("Text Color:")))
        for color in _QUICK_COLORS:
            btn = QPushButton()
            btn.setFixedSize(28, 28)
            btn.setStyleSheet(
                f"background-color: {to_qcolor(color).name()}; "
                "border: 1px solid #666; border-radius: 14px;"
            )
            btn.clicked.connect(lambda checked=False, c=color: self._on_quick_color(c))
            color_row.addWidget(btn)
        color_row.addStretch()
        input_layout.addLayout(color_row)

        # Quick animations
        anim_row = QHBoxLayout()
        anim_row.setSpacing(2)
        self._anim_group = QButtonGroup(self)
        self._anim_group.setExclusive(True)
        self._anim_buttons: dict[AnimationType, QPushButton] = {}
        for animation in _QUICK_ANIMATIONS:
            btn = QPushButton(animation.display_name)
            btn.setCheckable(True)
            btn.setToolTip(animation.description)
            btn.setStyleSheet(
                "QPushButton { border: 1px solid #555; border-radius: 3px; "
                "padding: 4px 8px; color: #ccc; background: #333; font-size: 11px; }"
                "QPushButton:checked { background: #00bcd4; color: white; border-color: #00bcd4; }"
            )
            btn.clicked.connect(lambda checked, a=animation: self._on_quick_animation(a))
            self._anim_group.addButton(btn)
            self._anim_buttons[animation] = btn
            anim_row.addWidget(btn)
        input_layout.addLayout(anim_row)

        style_btn = QPushButton(tr("Style Settings..."))
        style_btn.clicked.connect(self._on_style_settings)
        input_layout.addWidget(style_btn)

        layout.addWidget(input_group)

        # Templates / history
        self._tabs = QTabWidget()
        self._templates_panel = TemplatesPanel(self._data, self._catalog)
        self._templates_panel.template_applied.connect(self._on_template_applied)
        self._tabs.addTab(self._templates_panel, tr("Templates"))

        self._history_panel = HistoryPanel(self._data)
        self._history_panel.history_selected.connect(self._on_history_selected)
        self._tabs.addTab(self._history_panel, tr("History"))
        layout.addWidget(self._tabs, 1)

        # Show
        self._show_btn = QPushButton(tr("Show Banner"))
        self._show_btn.setStyleSheet(
            "QPushButton { background-color: #00bcd4; color: white; "
            "border: none; border-radius: 4px; padding: 12px; "
            "font-size: 16px; font-weight: bold; }"
            "QPushButton:hover { background-color: #00acc1; }"
            "QPushButton:disabled { background-color: #555; color: #888; }"
        )
        self._show_btn.clicked.connect(self._on_show_banner)
        layout.addWidget(self._show_btn)

    def _build_menu(self) -> None:
        menubar = self.menuBar()

        file_menu = menubar.addMenu(tr("&File"))

        export_action = QAction(tr("&Export Data..."), self)
        export_action.setShortcut(QKeySequence("Ctrl+E"))
        export_action.triggered.connect(self._on_export_data)
        file_menu.addAction(export_action)

        reset_action = QAction(tr("&Reset All Data..."), self)
        reset_action.triggered.connect(self._on_reset_data)
        file_menu.addAction(reset_action)

        file_menu.addSeparator()

        quit_action = QAction(tr("&Quit"), self)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        edit_menu = menubar.addMenu(tr("&Edit"))

        prefs_action = QAction(tr("&Preferences..."), self)
        prefs_action.setShortcut(QKeySequence("Ctrl+,"))
        prefs_action.triggered.connect(self._on_preferences)
        edit_menu.addAction(prefs_action)

        help_menu = menubar.addMenu(tr("&Help"))

        premium_action = QAction(tr("&Premium..."), self)
        premium_action.triggered.connect(self._on_premium)
        help_menu.addAction(premium_action)

    # ------------------------------------------------------------------ Style

    def current_style(self) -> BannerStyle:
        return self._style.copy()

    def _set_style(self, style: BannerStyle) -> None:
        self._style = style.copy()
        self._sync_controls()

    def _sync_controls(self) -> None:
        if self._text_edit.text() != self._style.text:
            self._text_edit.blockSignals(True)
            self._text_edit.setText(self._style.text)
            self._text_edit.blockSignals(False)
        self._update_counter()
        btn = self._anim_buttons.get(self._style.animation_type)
        if btn is not None:
            btn.setChecked(True)
        else:
            # effect set in the style dialog has no quick button
            self._anim_group.setExclusive(False)
            for b in self._anim_buttons.values():
                b.setChecked(False)
            self._anim_group.setExclusive(True)

    def _update_counter(self) -> None:
        length = len(self._text_edit.text())
        self._counter_label.setText(f"{length}/{MAX_TEXT_LENGTH}")
        self._show_btn.setEnabled(bool(self._text_edit.text().strip()))

    # ------------------------------------------------------------------ Actions

    def _on_text_changed(self, text: str) -> None:
        self._style.text = text
        self._update_counter()

    def _on_quick_color(self, color: Color) -> None:
        self._style.text_color = color
        self.statusBar().showMessage(tr("Text color changed"), 2000)

    def _on_quick_animation(self, animation: AnimationType) -> None:
        self._style.animation_type = animation

    def _on_style_settings(self) -> None:
        dialog = StyleDialog(self._style, self._data, self)
        if dialog.exec():
            self._set_style(dialog.result_style())

    def _on_template_applied(self, template: BannerTemplate) -> None:
        self._set_style(template.style)
        self.statusBar().showMessage(f"{tr('Template applied')}: {template.name}", 3000)

    def _on_history_selected(self, entry: BannerHistory) -> None:
        self._set_style(entry.style)
        self._on_show_banner()

    def _on_show_banner(self) -> None:
        if not self._style.text.strip():
            return
        if not self._subscription.can_use_preview():
            self._on_premium()
            if not self._subscription.can_use_preview():
                return
        style = self.current_style()
        self._data.add_history(style)
        self._data.save_last_used_style(style)

        if self._display is not None:
            self._display.close()
        self._display = BannerDisplayWidget(style, self._data)
        self._display.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        self._display.dismissed.connect(self._on_banner_dismissed)
        self._display.show_banner()
        logger.info("Showing banner (%s)", style.animation_type.value)

    def _on_banner_dismissed(self) -> None:
        self._display = None
        self.activateWindow()

    def _on_export_data(self) -> None:
        payload = self._data.export_user_data()
        if payload is None:
            QMessageBox.warning(self, tr("Export Data"), tr("Failed to export data."))
            return
        path, _ = QFileDialog.getSaveFileName(
            self, tr("Export Data"), "ibanner_data.json", "JSON (*.json)"
        )
        if not path:
            return
        try:
            Path(path).write_text(payload, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write export file %s: %s", path, e)
            QMessageBox.warning(self, tr("Export Data"), f"{tr('Failed to export data.')}\n{e}")
            return
        self.statusBar().showMessage(f"{tr('Data exported')}: {path}", 5000)

    def _on_reset_data(self) -> None:
        reply = QMessageBox.question(
            self,
            tr("Reset All Data..."),
            tr("Delete all history, custom templates, favorites and background images?"),
        )
        if reply == QMessageBox.StandardButton.Yes:
            self._data.reset_all_data()
            self.statusBar().showMessage(tr("All data reset"), 3000)

    def _on_preferences(self) -> None:
        PreferencesDialog(self._settings, self._data, self._subscription, self).exec()

    def _on_premium(self) -> None:
        PremiumDialog(self._subscription, self).exec()

    def closeEvent(self, event) -> None:
        if self._display is not None:
            self._display.close()
        self._data.save_last_used_style(self._style)
        super().closeEvent(event)
