"""History list panel."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ibanner.models.banner_history import BannerHistory
from ibanner.services.banner_data_manager import BannerDataManager
from ibanner.utils.i18n import tr


class HistoryPanel(QWidget):
    """Recently displayed banners, newest first."""

    history_selected = Signal(object)   # BannerHistory

    def __init__(self, data_manager: BannerDataManager, parent=None):
        super().__init__(parent)
        self._data = data_manager
        self._build_ui()
        self._refresh()
        self._data.history_changed.connect(self._refresh)

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        self._search_edit = QLineEdit()
        self._search_edit.setPlaceholderText(tr("Search history..."))
        self._search_edit.setClearButtonEnabled(True)
        self._search_edit.textChanged.connect(self._refresh)
        layout.addWidget(self._search_edit)

        self._list = QListWidget()
        self._list.itemDoubleClicked.connect(lambda _item: self._on_show_again())
        self._list.currentItemChanged.connect(lambda *_: self._update_buttons())
        layout.addWidget(self._list, 1)

        self._empty_label = QLabel(tr("No history yet"))
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label.setStyleSheet("color: #888; padding: 20px;")
        layout.addWidget(self._empty_label)

        btn_row = QHBoxLayout()
        self._show_btn = QPushButton(tr("Show Again"))
        self._show_btn.clicked.connect(self._on_show_again)
        btn_row.addWidget(self._show_btn)

        self._delete_btn = QPushButton(tr("Delete"))
        self._delete_btn.clicked.connect(self._on_delete)
        btn_row.addWidget(self._delete_btn)

        btn_row.addStretch()

        self._clear_btn = QPushButton(tr("Clear All"))
        self._clear_btn.clicked.connect(self._on_clear_all)
        btn_row.addWidget(self._clear_btn)
        layout.addLayout(btn_row)

    # ------------------------------------------------------------------ Actions

    def selected_entry(self) -> BannerHistory | None:
        item = self._list.currentItem()
        return item.data(Qt.ItemDataRole.UserRole) if item else None

    def _on_show_again(self) -> None:
        entry = self.selected_entry()
        if entry is not None:
            self.history_selected.emit(entry)

    def _on_delete(self) -> None:
        entry = self.selected_entry()
        if entry is not None:
            self._data.delete_history(entry.history_id)

    def _on_clear_all(self) -> None:
        if not self._data.history:
            return
        reply = QMessageBox.question(
            self, tr("Clear All"), tr("Clear all history?"),
        )
        if reply == QMessageBox.StandardButton.Yes:
            self._data.clear_all_history()

    def _update_buttons(self) -> None:
        has_selection = self._list.currentItem() is not None
        self._show_btn.setEnabled(has_selection)
        self._delete_btn.setEnabled(has_selection)
        self._clear_btn.setEnabled(bool(self._data.history))

    # ------------------------------------------------------------------ Refresh

    def _refresh(self) -> None:
        self._list.clear()
        entries = self._data.search_history(self._search_edit.text())
        for entry in entries:
            when = entry.timestamp.astimezone().strftime("%m-%d %H:%M")
            item = QListWidgetItem(f"{entry.text}    {when}")
            item.setData(Qt.ItemDataRole.UserRole, entry)
            item.setToolTip(entry.style.animation_type.display_name)
            self._list.addItem(item)
        self._empty_label.setVisible(not entries)
        self._update_buttons()

    def entry_count(self) -> int:
        return self._list.count()
