"""Premium unlock dialog."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
)

from ibanner.models.subscription import PREMIUM_FEATURES, SubscriptionDuration
from ibanner.services.subscription_manager import SubscriptionManager
from ibanner.utils.i18n import tr


class PremiumDialog(QDialog):
    """Lists the premium features and offers purchase and restore."""

    def __init__(self, subscription: SubscriptionManager, parent=None):
        super().__init__(parent)
        self.setWindowTitle(tr("Premium"))
        self.setMinimumWidth(380)
        self._subscription = subscription

        layout = QVBoxLayout(self)

        title = QLabel(SubscriptionDuration.LIFETIME.display_name)
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("font-size: 18px; font-weight: bold; padding: 8px;")
        layout.addWidget(title)

        subtitle = QLabel(SubscriptionDuration.LIFETIME.description)
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        subtitle.setStyleSheet("color: gray;")
        layout.addWidget(subtitle)

        for feature in PREMIUM_FEATURES:
            row = QLabel(f"{feature.icon}  <b>{feature.display_name}</b><br>"
                         f"<span style='color: gray;'>{feature.description}</span>")
            row.setTextFormat(Qt.TextFormat.RichText)
            layout.addWidget(row)

        self._free_label = QLabel(tr("All features are free in this version."))
        self._free_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._free_label.setStyleSheet("color: #4caf50;")
        layout.addWidget(self._free_label)

        self._status_label = QLabel()
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._status_label)

        self._error_label = QLabel()
        self._error_label.setWordWrap(True)
        self._error_label.setStyleSheet("color: #e57373;")
        layout.addWidget(self._error_label)

        btn_row = QHBoxLayout()
        self._purchase_btn = QPushButton()
        self._purchase_btn.setStyleSheet(
            "QPushButton { background-color: #00bcd4; color: white; "
            "border: none; border-radius: 4px; padding: 8px; font-weight: bold; }"
            "QPushButton:disabled { background-color: #555; }"
        )
        self._purchase_btn.clicked.connect(self._subscription.purchase)
        btn_row.addWidget(self._purchase_btn, 1)

        restore_btn = QPushButton(tr("Restore Purchases"))
        restore_btn.clicked.connect(self._subscription.restore_purchases)
        btn_row.addWidget(restore_btn)

        close_btn = QPushButton(tr("Close"))
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        layout.addLayout(btn_row)

        self._subscription.entitlement_changed.connect(self._refresh)
        self._subscription.error_changed.connect(self._refresh)
        self._subscription.load_products()
        self._refresh()

    def _refresh(self, *_args) -> None:
        owned = self._subscription.is_subscribed
        self._status_label.setText(self._subscription.status_description())
        self._purchase_btn.setEnabled(not owned)
        self._purchase_btn.setText(
            tr("Purchased") if owned
            else f"{tr('Purchase')} {self._subscription.product_price()}"
        )
        self._error_label.setText(self._subscription.error_message or "")
        self._free_label.setVisible(not self._subscription.gating_enabled)
