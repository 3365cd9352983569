"""Store purchase backend abstraction.

The app never talks to a store directly. A platform integration implements
``PurchaseBackend`` and is injected into the SubscriptionManager.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class PurchaseOutcome(Enum):
    SUCCESS = "success"
    VERIFICATION_FAILED = "verification_failed"
    CANCELLED = "cancelled"
    PENDING = "pending"


@dataclass(slots=True)
class StoreProduct:
    """Product information as reported by the store."""

    product_id: str
    display_price: str
    description: str = ""


@runtime_checkable
class PurchaseBackend(Protocol):
    """Platform purchase service. Any method may raise on store errors."""

    def load_products(self, product_ids: list[str]) -> list[StoreProduct]:
        ...

    def purchase(self, product_id: str) -> PurchaseOutcome:
        ...

    def current_entitlements(self) -> list[str]:
        """Return product ids the user currently owns (verified only)."""
        ...

    def sync(self) -> None:
        """Refresh purchases from the store (restore)."""
        ...
