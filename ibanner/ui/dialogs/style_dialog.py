"""Banner style editing dialog."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QCheckBox,
    QColorDialog,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QDoubleSpinBox,
    QFileDialog,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QInputDialog,
    QLabel,
    QMessageBox,
    QPushButton,
    QSlider,
    QSpinBox,
    QVBoxLayout,
)

from ibanner.models.banner_style import (
    AnimationType,
    BackgroundType,
    BannerStyle,
    Color,
    FontStyle,
)
from ibanner.models.banner_template import TemplateCategory
from ibanner.services.banner_data_manager import BannerDataManager
from ibanner.ui.banner_display_widget import BannerDisplayWidget, to_qcolor
from ibanner.utils.config import (
    FONT_SIZE_MAX,
    FONT_SIZE_MIN,
    FONT_SIZE_STEP,
    IMAGE_FILTER,
    SPEED_SLIDER_MAX,
    SPEED_SLIDER_MIN,
)
from ibanner.utils.i18n import tr


class StyleDialog(QDialog):
    """Dialog for editing a BannerStyle with a live animated preview."""

    def __init__(self, style: BannerStyle, data_manager: BannerDataManager, parent=None):
        super().__init__(parent)
        self.setWindowTitle(tr("Banner Style"))
        self.setMinimumWidth(520)
        self._style = style.copy()
        self._data = data_manager

        layout = QVBoxLayout(self)

        # Preview
        self._preview = BannerDisplayWidget(self._style, data_manager, preview=True)
        self._preview.setFixedHeight(160)
        layout.addWidget(self._preview)

        # Text group
        text_group = QGroupBox(tr("Text"))
        text_layout = QFormLayout(text_group)

        self._size_spin = QSpinBox()
        self._size_spin.setRange(FONT_SIZE_MIN, FONT_SIZE_MAX)
        self._size_spin.setSingleStep(FONT_SIZE_STEP)
        self._size_spin.setValue(int(self._style.font_size))
        self._size_spin.valueChanged.connect(self._update_preview)
        text_layout.addRow(tr("Font Size:"), self._size_spin)

        self._bold_check = QCheckBox(tr("Bold"))
        self._bold_check.setChecked(self._style.is_bold)
        self._bold_check.toggled.connect(self._update_preview)
        text_layout.addRow("", self._bold_check)

        self._font_style_combo = QComboBox()
        for fs in FontStyle:
            self._font_style_combo.addItem(fs.display_name, fs)
        self._font_style_combo.setCurrentIndex(list(FontStyle).index(self._style.font_style))
        self._font_style_combo.currentIndexChanged.connect(self._update_preview)
        text_layout.addRow(tr("Font Style:"), self._font_style_combo)

        layout.addWidget(text_group)

        # Colors group
        color_group = QGroupBox(tr("Colors"))
        color_layout = QFormLayout(color_group)

        self._text_color_btn = self._make_color_button(self._style.text_color)
        self._text_color_btn.clicked.connect(lambda: self._pick_color(self._text_color_btn))
        color_layout.addRow(tr("Text Color:"), self._text_color_btn)

        self._bg_color_btn = self._make_color_button(self._style.background_color)
        self._bg_color_btn.clicked.connect(lambda: self._pick_color(self._bg_color_btn))
        color_layout.addRow(tr("Background Color:"), self._bg_color_btn)

        layout.addWidget(color_group)

        # Background group
        bg_group = QGroupBox(tr("Background"))
        bg_layout = QFormLayout(bg_group)

        self._bg_type_combo = QComboBox()
        for bt in BackgroundType:
            self._bg_type_combo.addItem(bt.display_name, bt)
        self._bg_type_combo.setCurrentIndex(list(BackgroundType).index(self._style.background_type))
        self._bg_type_combo.currentIndexChanged.connect(self._update_preview)
        bg_layout.addRow(tr("Type:"), self._bg_type_combo)

        image_row = QHBoxLayout()
        self._choose_image_btn = QPushButton(tr("Choose Image..."))
        self._choose_image_btn.clicked.connect(self._choose_image)
        image_row.addWidget(self._choose_image_btn)
        self._remove_image_btn = QPushButton(tr("Remove Image"))
        self._remove_image_btn.clicked.connect(self._remove_image)
        image_row.addWidget(self._remove_image_btn)
        self._image_label = QLabel()
        self._image_label.setStyleSheet("color: #888; font-size: 10px;")
        image_row.addWidget(self._image_label, 1)
        bg_layout.addRow("", image_row)

        self._image_opacity_slider = QSlider(Qt.Orientation.Horizontal)
        self._image_opacity_slider.setRange(10, 100)
        self._image_opacity_slider.setValue(round(self._style.background_image_opacity * 100))
        self._image_opacity_slider.valueChanged.connect(self._update_preview)
        bg_layout.addRow(tr("Opacity:"), self._image_opacity_slider)

        layout.addWidget(bg_group)

        # Animation group
        anim_group = QGroupBox(tr("Animation"))
        anim_layout = QFormLayout(anim_group)

        self._animation_combo = QComboBox()
        for at in AnimationType:
            self._animation_combo.addItem(at.display_name, at)
            self._animation_combo.setItemData(
                self._animation_combo.count() - 1, at.description, Qt.ItemDataRole.ToolTipRole
            )
        self._animation_combo.setCurrentIndex(list(AnimationType).index(self._style.animation_type))
        self._animation_combo.currentIndexChanged.connect(self._update_preview)
        anim_layout.addRow(tr("Effect:"), self._animation_combo)

        self._speed_spin = QDoubleSpinBox()
        self._speed_spin.setRange(SPEED_SLIDER_MIN, SPEED_SLIDER_MAX)
        self._speed_spin.setSingleStep(0.1)
        self._speed_spin.setDecimals(1)
        self._speed_spin.setSuffix("x")
        self._speed_spin.setValue(self._style.effective_speed())
        self._speed_spin.valueChanged.connect(self._update_preview)
        anim_layout.addRow(tr("Speed:"), self._speed_spin)

        layout.addWidget(anim_group)

        # Buttons
        btn_row = QHBoxLayout()
        save_template_btn = QPushButton(tr("Save as Template..."))
        save_template_btn.clicked.connect(self._save_as_template)
        btn_row.addWidget(save_template_btn)
        btn_row.addStretch()

        button_box = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        button_box.accepted.connect(self.accept)
        button_box.rejected.connect(self.reject)
        btn_row.addWidget(button_box)
        layout.addLayout(btn_row)

        self._update_image_controls()

    # ------------------------------------------------------------------ Colors

    def _make_color_button(self, color: Color) -> QPushButton:
        btn = QPushButton()
        btn.setFixedSize(60, 25)
        btn.banner_color = color
        self._apply_button_color(btn, color)
        return btn

    @staticmethod
    def _apply_button_color(btn: QPushButton, color: Color) -> None:
        btn.setStyleSheet(
            f"background-color: {to_qcolor(color).name(QColor.NameFormat.HexArgb)}; "
            "border: 1px solid #888;"
        )

    def _pick_color(self, btn: QPushButton) -> None:
        current = to_qcolor(btn.banner_color)
        color = QColorDialog.getColor(
            current, self, tr("Colors"), QColorDialog.ColorDialogOption.ShowAlphaChannel
        )
        if color.isValid():
            picked = Color(color.redF(), color.greenF(), color.blueF(), color.alphaF())
            btn.banner_color = picked
            self._apply_button_color(btn, picked)
            self._update_preview()

    # ------------------------------------------------------------------ Background image

    def _choose_image(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, tr("Choose Image..."), "", IMAGE_FILTER)
        if not path:
            return
        try:
            raw = Path(path).read_bytes()
        except OSError:
            raw = b""
        rel_path = self._data.save_background_image(raw) if raw else None
        if rel_path is None:
            QMessageBox.warning(self, tr("Background"), tr("Failed to save image."))
            return
        self._style.background_image_path = rel_path
        self._bg_type_combo.setCurrentIndex(list(BackgroundType).index(BackgroundType.IMAGE))
        self._update_preview()

    def _remove_image(self) -> None:
        if self._style.background_image_path:
            self._data.delete_background_image(self._style.background_image_path)
        self._style.background_image_path = None
        self._bg_type_combo.setCurrentIndex(list(BackgroundType).index(BackgroundType.COLOR))
        self._update_preview()

    def _update_image_controls(self) -> None:
        is_image = self._bg_type_combo.currentData() is BackgroundType.IMAGE
        self._choose_image_btn.setEnabled(is_image)
        self._remove_image_btn.setEnabled(is_image and bool(self._style.background_image_path))
        self._image_opacity_slider.setEnabled(is_image)
        path = self._style.background_image_path or ""
        self._image_label.setText(Path(path).name if path else "")

    # ------------------------------------------------------------------ Style

    def _update_preview(self) -> None:
        self._style = self.result_style()
        self._update_image_controls()
        self._preview.set_style(self._style)

    def result_style(self) -> BannerStyle:
        """Return the style as currently edited."""
        style = self._style.copy()
        style.font_size = float(self._size_spin.value())
        style.is_bold = self._bold_check.isChecked()
        style.font_style = self._font_style_combo.currentData()
        style.text_color = self._text_color_btn.banner_color
        style.background_color = self._bg_color_btn.banner_color
        style.background_type = self._bg_type_combo.currentData()
        style.background_image_opacity = self._image_opacity_slider.value() / 100.0
        style.animation_type = self._animation_combo.currentData()
        style.animation_speed = round(self._speed_spin.value(), 1)
        return style

    def _save_as_template(self) -> None:
        style = self.result_style()
        name, ok = QInputDialog.getText(self, tr("Save as Template..."), tr("Template name:"))
        if not ok or not name.strip():
            return
        categories = [c for c in TemplateCategory if c is not TemplateCategory.ALL]
        labels = [c.display_name for c in categories]
        label, ok = QInputDialog.getItem(
            self, tr("Save as Template..."), tr("Category:"),
            labels, labels.index(TemplateCategory.CUSTOM.display_name), False,
        )
        if not ok:
            return
        self._data.add_custom_template(name.strip(), style, categories[labels.index(label)])
