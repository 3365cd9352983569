"""Premium purchase descriptors (pure Python, no Qt dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ibanner.utils.i18n import tr

LIFETIME_PRODUCT_ID = "com.thankl.premium.lifetime"
LIFETIME_PRICE = "¥19.90"


class SubscriptionDuration(Enum):
    LIFETIME = "lifetime"

    @property
    def display_name(self) -> str:
        return tr("Lifetime Unlock")

    @property
    def description(self) -> str:
        return tr("One purchase, use forever")


class PremiumFeature(Enum):
    """Features listed on the premium screen."""
    UNLIMITED_PREVIEW = "unlimited_preview"
    ADVANCED_ANIMATIONS = "advanced_animations"
    CUSTOM_FONTS = "custom_fonts"
    BACKGROUND_IMAGES = "background_images"
    EXPORT_FEATURES = "export_features"
    PRIORITY_SUPPORT = "priority_support"

    @property
    def display_name(self) -> str:
        return tr(_FEATURE_INFO[self][0])

    @property
    def description(self) -> str:
        return tr(_FEATURE_INFO[self][1])

    @property
    def icon(self) -> str:
        return _FEATURE_INFO[self][2]


_FEATURE_INFO = {
    PremiumFeature.UNLIMITED_PREVIEW: (
        "Unlimited Preview", "Use the preview without limits", "👁"),
    PremiumFeature.ADVANCED_ANIMATIONS: (
        "Advanced Animations", "Unlock every animation effect", "✨"),
    PremiumFeature.CUSTOM_FONTS: (
        "Custom Fonts", "Use artistic and neon font styles", "🔤"),
    PremiumFeature.BACKGROUND_IMAGES: (
        "Background Images", "Set custom background images", "🖼"),
    PremiumFeature.EXPORT_FEATURES: (
        "Export Features", "Export banners as images or videos", "⤴"),
    PremiumFeature.PRIORITY_SUPPORT: (
        "Priority Support", "Get priority technical support", "🎧"),
}

PREMIUM_FEATURES = list(PremiumFeature)


@dataclass(slots=True)
class SubscriptionProduct:
    """A purchasable product as shown in the UI."""

    product_id: str
    display_name: str
    description: str
    price: str
    duration: SubscriptionDuration
    features: list[str] = field(default_factory=list)


def subscription_products() -> list[SubscriptionProduct]:
    return [
        SubscriptionProduct(
            product_id=LIFETIME_PRODUCT_ID,
            display_name=f"{tr('Premium')} - {tr('Lifetime Unlock')}",
            description=tr("One purchase, use forever"),
            price=LIFETIME_PRICE,
            duration=SubscriptionDuration.LIFETIME,
            features=[f.display_name for f in PREMIUM_FEATURES],
        )
    ]
