"""Premium entitlement state over an injected purchase backend."""

from __future__ import annotations

import logging
from enum import Enum

from PySide6.QtCore import QObject, Signal

from ibanner.infrastructure.purchase_backend import PurchaseBackend, PurchaseOutcome, StoreProduct
from ibanner.models.subscription import LIFETIME_PRICE, LIFETIME_PRODUCT_ID
from ibanner.utils.i18n import tr

logger = logging.getLogger(__name__)


class SubscriptionStatus(Enum):
    NOT_SUBSCRIBED = "not_subscribed"
    SUBSCRIBED = "subscribed"
    EXPIRED = "expired"
    IN_GRACE_PERIOD = "in_grace_period"
    UNKNOWN = "unknown"


_STATUS_TEXT = {
    SubscriptionStatus.SUBSCRIBED: "Purchased lifetime unlock",
    SubscriptionStatus.NOT_SUBSCRIBED: "Not purchased",
    SubscriptionStatus.EXPIRED: "Purchase expired",
    SubscriptionStatus.IN_GRACE_PERIOD: "Purchase grace period",
    SubscriptionStatus.UNKNOWN: "Status unknown",
}


class SubscriptionManager(QObject):
    """Tracks whether the lifetime unlock is owned.

    Backend errors are turned into ``error_message`` and never raised. With
    gating disabled every premium check passes regardless of ownership.
    """

    entitlement_changed = Signal(bool)
    error_changed = Signal(str)

    def __init__(
        self,
        backend: PurchaseBackend | None = None,
        gating_enabled: bool = False,
        product_id: str = LIFETIME_PRODUCT_ID,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._backend = backend
        self._gating_enabled = gating_enabled
        self._product_id = product_id
        self._is_subscribed = False
        self._status = SubscriptionStatus.UNKNOWN if backend is None else SubscriptionStatus.NOT_SUBSCRIBED
        self._products: list[StoreProduct] = []
        self._error: str | None = None

    # ------------------------------------------------------------------ State

    @property
    def is_subscribed(self) -> bool:
        return self._is_subscribed

    @property
    def status(self) -> SubscriptionStatus:
        return self._status

    @property
    def gating_enabled(self) -> bool:
        return self._gating_enabled

    @property
    def current_product(self) -> StoreProduct | None:
        return self._products[0] if self._products else None

    @property
    def error_message(self) -> str | None:
        return self._error

    def set_gating_enabled(self, enabled: bool) -> None:
        self._gating_enabled = bool(enabled)

    def can_use_preview(self) -> bool:
        return not self._gating_enabled or self._is_subscribed

    def status_description(self) -> str:
        return tr(_STATUS_TEXT[self._status])

    def product_price(self) -> str:
        product = self.current_product
        return product.display_price if product else LIFETIME_PRICE

    def clear_error(self) -> None:
        self._set_error(None)

    def _set_error(self, message: str | None) -> None:
        self._error = message
        self.error_changed.emit(message or "")

    def _set_subscribed(self, subscribed: bool, status: SubscriptionStatus) -> None:
        changed = subscribed != self._is_subscribed
        self._is_subscribed = subscribed
        self._status = status
        if changed:
            self.entitlement_changed.emit(subscribed)

    # ------------------------------------------------------------------ Store

    def load_products(self) -> list[StoreProduct]:
        if self._backend is None:
            return []
        try:
            products = self._backend.load_products([self._product_id])
        except Exception as e:  # store SDK errors are not typed
            logger.error("Failed to load products: %s", e)
            self._set_error(tr("Product information unavailable"))
            return []
        self._products = [p for p in products if p.product_id == self._product_id]
        if not self._products:
            logger.warning("Product %s not found in store", self._product_id)
            self._set_error(tr("Product information unavailable"))
        else:
            self.clear_error()
        return list(self._products)

    def check_entitlement(self) -> bool:
        if self._backend is None:
            return self._is_subscribed
        try:
            owned = self._backend.current_entitlements()
        except Exception as e:
            logger.error("Failed to check entitlements: %s", e)
            self._status = SubscriptionStatus.UNKNOWN
            return self._is_subscribed
        if self._product_id in owned:
            self._set_subscribed(True, SubscriptionStatus.SUBSCRIBED)
        else:
            self._set_subscribed(False, SubscriptionStatus.NOT_SUBSCRIBED)
        return self._is_subscribed

    def purchase(self) -> bool:
        if self._backend is None or self.current_product is None:
            self._set_error(tr("Product information unavailable"))
            return False
        try:
            outcome = self._backend.purchase(self._product_id)
        except Exception as e:
            logger.error("Purchase failed: %s", e)
            self._set_error(f"{tr('Purchase failed')}: {e}")
            return False

        if outcome is PurchaseOutcome.SUCCESS:
            self._set_subscribed(True, SubscriptionStatus.SUBSCRIBED)
            self.clear_error()
            logger.info("Purchase of %s completed", self._product_id)
            return True
        if outcome is PurchaseOutcome.CANCELLED:
            self.clear_error()
        elif outcome is PurchaseOutcome.PENDING:
            self._set_error(tr("Purchase is pending, please check later"))
        else:
            self._set_error(tr("Purchase verification failed"))
        return False

    def restore_purchases(self) -> bool:
        if self._backend is None:
            return False
        try:
            self._backend.sync()
        except Exception as e:
            logger.error("Restore failed: %s", e)
            self._set_error(f"{tr('Restore failed')}: {e}")
            return False
        return self.check_entitlement()
