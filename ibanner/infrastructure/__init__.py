"""Infrastructure layer: storage, image codecs and the purchase backend.

The services depend on these protocols rather than on a concrete backend.
"""

from ibanner.infrastructure.image_codec import (
    ImageCodec,
    ImageCodecError,
    PillowImageCodec,
    QtImageCodec,
)
from ibanner.infrastructure.kv_store import (
    KeyValueStore,
    KeyValueStoreError,
    QSettingsKeyValueStore,
)
from ibanner.infrastructure.purchase_backend import PurchaseBackend, PurchaseOutcome, StoreProduct

__all__ = [
    "ImageCodec",
    "ImageCodecError",
    "PillowImageCodec",
    "QtImageCodec",
    "KeyValueStore",
    "KeyValueStoreError",
    "QSettingsKeyValueStore",
    "PurchaseBackend",
    "PurchaseOutcome",
    "StoreProduct",
]
