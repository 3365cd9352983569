"""Banner template model and built-in template table (pure Python, no Qt dependency)."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ibanner.models.banner_style import (
    AnimationType,
    BLACK,
    BLUE,
    BannerStyle,
    GREEN,
    ORANGE,
    PINK,
    PURPLE,
    RED,
    WHITE,
    YELLOW,
)
from ibanner.utils.i18n import tr

# Namespace for deterministic built-in template ids
_BUILTIN_NAMESPACE = uuid.UUID("6f1c0a52-2f0e-4a53-9d1e-3a8f2b7c9e10")
_BUILTIN_CREATED_AT = datetime(2024, 7, 13, tzinfo=timezone.utc)


class TemplateCategory(Enum):
    """Template grouping. ``ALL`` is only a UI filter and never stored on a template."""
    ALL = "all"
    SUPPORT = "support"
    PARTY = "party"
    TRANSPORT = "transport"
    CELEBRATION = "celebration"
    COMMUNICATION = "communication"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return tr(self.value.capitalize())

    @property
    def icon(self) -> str:
        return _CATEGORY_ICONS[self]


_CATEGORY_ICONS = {
    TemplateCategory.ALL: "▦",
    TemplateCategory.SUPPORT: "♥",
    TemplateCategory.PARTY: "🎉",
    TemplateCategory.TRANSPORT: "🚗",
    TemplateCategory.CELEBRATION: "🎁",
    TemplateCategory.COMMUNICATION: "💬",
    TemplateCategory.CUSTOM: "★",
}


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(slots=True)
class BannerTemplate:
    """A named, reusable banner preset."""

    name: str
    text: str
    style: BannerStyle
    category: TemplateCategory
    is_built_in: bool = True
    template_id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict:
        return {
            "template_id": self.template_id,
            "name": self.name,
            "text": self.text,
            "style": self.style.to_dict(),
            "category": self.category.value,
            "is_built_in": self.is_built_in,
        }

    @classmethod
    def from_dict(cls, data: dict) -> BannerTemplate:
        try:
            category = TemplateCategory(data.get("category", "custom"))
        except ValueError:
            category = TemplateCategory.CUSTOM
        return cls(
            template_id=str(data["template_id"]),
            name=str(data["name"]),
            text=str(data.get("text", "")),
            style=BannerStyle.from_dict(data["style"]),
            category=category,
            is_built_in=bool(data.get("is_built_in", False)),
        )


# (name, text, font size, text color, background color, animation, speed, category)
_BUILTIN_TABLE = [
    ("Concert Cheer", "❤️ I Love You ❤️", 56, WHITE, RED,
     AnimationType.BLINK, 1.5, TemplateCategory.SUPPORT),
    ("Fan Support", "🌟 Go Go Go 🌟", 48, YELLOW, PURPLE,
     AnimationType.BREATHING, 1.0, TemplateCategory.SUPPORT),
    ("Happy Birthday", "🎂 Happy Birthday 🎂", 52, WHITE, PINK,
     AnimationType.GRADIENT, 1.2, TemplateCategory.CELEBRATION),
    ("Party Time", "🎉 Party Time 🎉", 50, WHITE, ORANGE,
     AnimationType.SCROLL, 1.0, TemplateCategory.PARTY),
    ("Airport Pickup", "✈️ Pickup ✈️", 60, BLACK, WHITE,
     AnimationType.NONE, 1.0, TemplateCategory.TRANSPORT),
    ("Designated Driver", "🚗 Driver 🚗", 54, WHITE, BLUE,
     AnimationType.BREATHING, 0.8, TemplateCategory.TRANSPORT),
    ("Thank You", "🙏 Thank You 🙏", 58, WHITE, GREEN,
     AnimationType.NONE, 1.0, TemplateCategory.COMMUNICATION),
    ("Please Wait", "⏰ Please Wait ⏰", 50, BLACK, YELLOW,
     AnimationType.BLINK, 1.0, TemplateCategory.COMMUNICATION),
]


def builtin_templates() -> list[BannerTemplate]:
    """Build the built-in template list.

    Ids derive from the template name, so the list is identical on every run.
    """
    templates = []
    for name, text, size, fg, bg, animation, speed, category in _BUILTIN_TABLE:
        style = BannerStyle(
            text=text,
            font_size=float(size),
            text_color=fg,
            background_color=bg,
            animation_type=animation,
            animation_speed=speed,
            is_bold=True,
            created_at=_BUILTIN_CREATED_AT,
        )
        templates.append(BannerTemplate(
            template_id=str(uuid.uuid5(_BUILTIN_NAMESPACE, name)),
            name=name,
            text=text,
            style=style,
            category=category,
            is_built_in=True,
        ))
    return templates
