"""Template browser panel with a card grid for banner templates."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import (
    QButtonGroup,
    QCheckBox,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from ibanner.models.banner_template import BannerTemplate, TemplateCategory
from ibanner.services.banner_data_manager import BannerDataManager
from ibanner.services.template_catalog import TemplateCatalog
from ibanner.ui.banner_display_widget import to_qcolor
from ibanner.utils.i18n import tr


class _TemplateCard(QWidget):
    """Single card in the template grid: a styled text swatch and the name."""

    clicked = Signal(str)           # template_id
    double_clicked = Signal(str)    # template_id

    CARD_WIDTH = 150

    def __init__(self, template: BannerTemplate, favorite: bool, parent=None):
        super().__init__(parent)
        self.template = template
        self.setFixedSize(self.CARD_WIDTH + 10, 100)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(2)

        style = template.style
        swatch = QLabel(style.text)
        swatch.setFixedSize(self.CARD_WIDTH, 60)
        swatch.setAlignment(Qt.AlignmentFlag.AlignCenter)
        swatch.setWordWrap(True)
        weight = "bold" if style.is_bold else "normal"
        swatch.setStyleSheet(
            f"background-color: {to_qcolor(style.background_color).name()}; "
            f"color: {to_qcolor(style.text_color).name()}; "
            f"font-size: 13px; font-weight: {weight}; "
            "border: 1px solid #444; border-radius: 4px;"
        )
        swatch.setToolTip(style.animation_type.display_name)
        layout.addWidget(swatch)

        star = "★ " if favorite else ""
        name_label = QLabel(f"{star}{template.category.icon} {template.name}")
        name_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        name_label.setStyleSheet("color: #ccc; font-size: 10px;")
        name_label.setMaximumWidth(self.CARD_WIDTH)
        layout.addWidget(name_label)

    def set_selected(self, selected: bool) -> None:
        if selected:
            self.setStyleSheet("border: 2px solid #00bcd4; border-radius: 6px;")
        else:
            self.setStyleSheet("")

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit(self.template.template_id)
        super().mouseReleaseEvent(event)

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        self.double_clicked.emit(self.template.template_id)
        super().mouseDoubleClickEvent(event)


class TemplatesPanel(QWidget):
    """Panel for browsing, searching and applying banner templates."""

    template_applied = Signal(object)   # BannerTemplate

    GRID_COLUMNS = 2

    def __init__(self, data_manager: BannerDataManager, catalog: TemplateCatalog, parent=None):
        super().__init__(parent)
        self._data = data_manager
        self._catalog = catalog
        self._category = TemplateCategory.ALL
        self._selected_id: str | None = None
        self._cards: list[_TemplateCard] = []
        self._build_ui()
        self._refresh()

        self._data.templates_changed.connect(self._refresh)
        self._data.favorites_changed.connect(self._refresh)

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(6)

        # Search
        search_row = QHBoxLayout()
        self._search_edit = QLineEdit()
        self._search_edit.setPlaceholderText(tr("Search templates..."))
        self._search_edit.setClearButtonEnabled(True)
        self._search_edit.textChanged.connect(self._refresh)
        search_row.addWidget(self._search_edit, 1)

        self._favorites_check = QCheckBox(tr("Favorites only"))
        self._favorites_check.toggled.connect(self._refresh)
        search_row.addWidget(self._favorites_check)
        layout.addLayout(search_row)

        # Category filter tabs
        category_row = QHBoxLayout()
        category_row.setSpacing(2)
        self._category_group = QButtonGroup(self)
        self._category_group.setExclusive(True)

        for category in TemplateCategory:
            btn = QPushButton(f"{category.icon} {category.display_name}")
            btn.setCheckable(True)
            btn.setStyleSheet(
                "QPushButton { border: 1px solid #555; border-radius: 3px; "
                "padding: 4px 8px; color: #ccc; background: #333; font-size: 11px; }"
                "QPushButton:checked { background: #00bcd4; color: white; border-color: #00bcd4; }"
            )
            btn.clicked.connect(lambda checked, c=category: self._on_category_changed(c))
            self._category_group.addButton(btn)
            category_row.addWidget(btn)
            if category is TemplateCategory.ALL:
                btn.setChecked(True)

        layout.addLayout(category_row)

        # Scroll area for cards
        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self._scroll.setStyleSheet("QScrollArea { border: none; background: #1e1e1e; }")

        self._grid_container = QWidget()
        self._grid_layout = QGridLayout(self._grid_container)
        self._grid_layout.setContentsMargins(4, 4, 4, 4)
        self._grid_layout.setSpacing(6)
        self._grid_layout.setAlignment(Qt.AlignmentFlag.AlignTop | Qt.AlignmentFlag.AlignLeft)

        self._scroll.setWidget(self._grid_container)
        layout.addWidget(self._scroll, 1)

        # Action buttons
        btn_row = QHBoxLayout()
        btn_row.setSpacing(6)

        apply_btn = QPushButton(tr("Apply"))
        apply_btn.setStyleSheet(
            "QPushButton { background-color: #00bcd4; color: white; "
            "border: none; border-radius: 4px; padding: 8px; font-weight: bold; }"
            "QPushButton:hover { background-color: #00acc1; }"
        )
        apply_btn.clicked.connect(self._on_apply)
        btn_row.addWidget(apply_btn)

        self._favorite_btn = QPushButton(tr("Favorite"))
        self._favorite_btn.clicked.connect(self._on_toggle_favorite)
        btn_row.addWidget(self._favorite_btn)

        self._delete_btn = QPushButton(tr("Delete"))
        self._delete_btn.setStyleSheet(
            "QPushButton { background-color: #555; color: white; "
            "border: none; border-radius: 4px; padding: 8px; }"
            "QPushButton:hover { background-color: #c62828; }"
        )
        self._delete_btn.clicked.connect(self._on_delete)
        btn_row.addWidget(self._delete_btn)

        layout.addLayout(btn_row)

        self._count_label = QLabel()
        self._count_label.setStyleSheet("color: #999; font-size: 11px; padding: 2px;")
        layout.addWidget(self._count_label)

    # ------------------------------------------------------------------ Actions

    def _on_category_changed(self, category: TemplateCategory) -> None:
        self._category = category
        self._selected_id = None
        self._refresh()

    def _on_card_clicked(self, template_id: str) -> None:
        self._selected_id = template_id
        for card in self._cards:
            card.set_selected(card.template.template_id == template_id)
        self._update_buttons()

    def _on_card_double_clicked(self, template_id: str) -> None:
        self._on_card_clicked(template_id)
        self._on_apply()

    def _on_apply(self) -> None:
        template = self.selected_template()
        if template is not None:
            self.template_applied.emit(template)

    def _on_toggle_favorite(self) -> None:
        if self._selected_id:
            self._data.toggle_favorite(self._selected_id)

    def _on_delete(self) -> None:
        template = self.selected_template()
        if template is None or template.is_built_in:
            return
        reply = QMessageBox.question(
            self, tr("Delete"),
            tr("Delete template") + f' "{template.name}"?',
        )
        if reply == QMessageBox.StandardButton.Yes:
            self._data.delete_custom_template(template.template_id)

    def _update_buttons(self) -> None:
        template = self.selected_template()
        self._favorite_btn.setEnabled(template is not None)
        self._delete_btn.setEnabled(template is not None and not template.is_built_in)
        if template is not None and self._data.is_favorite(template.template_id):
            self._favorite_btn.setText(tr("Unfavorite"))
        else:
            self._favorite_btn.setText(tr("Favorite"))

    # ------------------------------------------------------------------ Query

    def selected_template(self) -> BannerTemplate | None:
        if not self._selected_id:
            return None
        return self._catalog.get(self._selected_id)

    def visible_templates(self) -> list[BannerTemplate]:
        return [card.template for card in self._cards]

    def set_search_text(self, text: str) -> None:
        self._search_edit.setText(text)

    def set_category(self, category: TemplateCategory) -> None:
        for btn, c in zip(self._category_group.buttons(), TemplateCategory):
            btn.setChecked(c is category)
        self._on_category_changed(category)

    def set_favorites_only(self, enabled: bool) -> None:
        self._favorites_check.setChecked(enabled)

    # ------------------------------------------------------------------ Refresh

    def _refresh(self) -> None:
        """Rebuild the card grid."""
        self._cards.clear()
        while self._grid_layout.count():
            child = self._grid_layout.takeAt(0)
            if child.widget():
                child.widget().deleteLater()

        templates = self._catalog.query(
            category=self._category,
            keyword=self._search_edit.text(),
            favorites_only=self._favorites_check.isChecked(),
        )
        if self._selected_id and all(t.template_id != self._selected_id for t in templates):
            self._selected_id = None

        for index, template in enumerate(templates):
            card = _TemplateCard(template, self._data.is_favorite(template.template_id))
            card.clicked.connect(self._on_card_clicked)
            card.double_clicked.connect(self._on_card_double_clicked)
            card.set_selected(template.template_id == self._selected_id)
            self._cards.append(card)
            row, col = divmod(index, self.GRID_COLUMNS)
            self._grid_layout.addWidget(card, row, col)

        self._count_label.setText(f"{tr('Templates')} ({len(templates)})")
        self._update_buttons()
