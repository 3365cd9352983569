"""Banner style model (pure Python, no Qt dependency)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from ibanner.utils.config import (
    DEFAULT_ANIMATION_SPEED,
    DEFAULT_FONT_SIZE,
    SPEED_MAX,
    SPEED_MIN,
)
from ibanner.utils.i18n import tr


def _clamp01(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


@dataclass(frozen=True, slots=True)
class Color:
    """RGBA color, each channel in 0..1."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 1.0

    def __post_init__(self) -> None:
        # frozen dataclass: normalize through object.__setattr__
        for name in ("red", "green", "blue", "alpha"):
            object.__setattr__(self, name, _clamp01(getattr(self, name)))

    def with_alpha(self, alpha: float) -> Color:
        return replace(self, alpha=alpha)

    def to_hex(self, include_alpha: bool = False) -> str:
        """Return ``#RRGGBB`` (or ``#RRGGBBAA``)."""
        channels = [self.red, self.green, self.blue]
        if include_alpha:
            channels.append(self.alpha)
        return "#" + "".join(f"{round(c * 255):02X}" for c in channels)

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#RRGGBB`` or ``#RRGGBBAA``.

        Raises:
            ValueError: if the string is not a valid hex color.
        """
        text = value.strip().lstrip("#")
        if len(text) not in (6, 8):
            raise ValueError(f"Invalid hex color: {value!r}")
        parts = [int(text[i:i + 2], 16) / 255.0 for i in range(0, len(text), 2)]
        if len(parts) == 3:
            parts.append(1.0)
        return cls(*parts)

    def to_dict(self) -> dict:
        return {
            "red": self.red,
            "green": self.green,
            "blue": self.blue,
            "alpha": self.alpha,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Color:
        return cls(
            red=float(data["red"]),
            green=float(data["green"]),
            blue=float(data["blue"]),
            alpha=float(data["alpha"]),
        )


# Palette used by the built-in templates and the quick color swatches.
WHITE = Color(1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)
RED = Color(1.0, 0.231, 0.188)
ORANGE = Color(1.0, 0.584, 0.0)
YELLOW = Color(1.0, 0.8, 0.0)
GREEN = Color(0.204, 0.78, 0.349)
BLUE = Color(0.0, 0.478, 1.0)
PURPLE = Color(0.686, 0.322, 0.871)
PINK = Color(1.0, 0.176, 0.333)
CLEAR = Color(0.0, 0.0, 0.0, 0.0)


class BackgroundType(Enum):
    """How the banner background is filled."""
    COLOR = "color"
    IMAGE = "image"

    @property
    def display_name(self) -> str:
        return tr({"color": "Solid Color", "image": "Image"}[self.value])


class AnimationType(Enum):
    """Animation effect applied while the banner is displayed."""
    NONE = "none"
    SCROLL = "scroll"
    BLINK = "blink"
    GRADIENT = "gradient"
    BREATHING = "breathing"
    TYPEWRITER = "typewriter"
    RANDOM_FLASH = "random_flash"

    @property
    def display_name(self) -> str:
        return tr(_ANIMATION_NAMES[self])

    @property
    def description(self) -> str:
        return tr(_ANIMATION_DESCRIPTIONS[self])


_ANIMATION_NAMES = {
    AnimationType.NONE: "None",
    AnimationType.SCROLL: "Scroll",
    AnimationType.BLINK: "Blink",
    AnimationType.GRADIENT: "Gradient",
    AnimationType.BREATHING: "Breathing",
    AnimationType.TYPEWRITER: "Typewriter",
    AnimationType.RANDOM_FLASH: "Random Flash",
}

_ANIMATION_DESCRIPTIONS = {
    AnimationType.NONE: "Static display without animation",
    AnimationType.SCROLL: "Text scrolls from right to left",
    AnimationType.BLINK: "Text blinks like a light sign",
    AnimationType.GRADIENT: "Rainbow gradient background",
    AnimationType.BREATHING: "Breathing light, opacity pulses",
    AnimationType.TYPEWRITER: "Characters appear one by one",
    AnimationType.RANDOM_FLASH: "Text flashes at random positions",
}


class FontStyle(Enum):
    """Decorative rendering applied to the banner text."""
    NORMAL = "normal"
    ARTISTIC = "artistic"  # gradient fill + drop shadow
    NEON = "neon"          # layered glow

    @property
    def display_name(self) -> str:
        return tr({"normal": "Normal", "artistic": "Artistic", "neon": "Neon"}[self.value])


def _enum_value(enum_cls, raw, default):
    """Look up an enum member by value, falling back to *default* for unknown values."""
    try:
        return enum_cls(raw)
    except ValueError:
        return default


def clamp_speed(speed: float) -> float:
    """Apply the animation speed policy.

    Non-finite or non-positive speeds fall back to the default; everything else
    is clamped into ``[SPEED_MIN, SPEED_MAX]``.
    """
    try:
        value = float(speed)
    except (TypeError, ValueError):
        return DEFAULT_ANIMATION_SPEED
    if not math.isfinite(value) or value <= 0:
        return DEFAULT_ANIMATION_SPEED
    return min(SPEED_MAX, max(SPEED_MIN, value))


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    stamp = datetime.fromisoformat(value)
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class BannerStyle:
    """Visual and animation parameters for one banner."""

    text: str = ""
    font_size: float = DEFAULT_FONT_SIZE
    text_color: Color = WHITE
    background_color: Color = BLACK
    background_type: BackgroundType = BackgroundType.COLOR
    background_image_path: str | None = None  # relative to the data dir
    background_image_opacity: float = 1.0
    animation_type: AnimationType = AnimationType.NONE
    animation_speed: float = DEFAULT_ANIMATION_SPEED
    is_bold: bool = False
    font_style: FontStyle = FontStyle.NORMAL
    created_at: datetime = field(default_factory=utc_now)

    def copy(self) -> BannerStyle:
        """Return an independent copy (Color is immutable)."""
        return replace(self)

    def without_text(self) -> BannerStyle:
        """Return a copy with the text cleared."""
        return replace(self, text="")

    def effective_speed(self) -> float:
        return clamp_speed(self.animation_speed)

    def uses_background_image(self) -> bool:
        return (
            self.background_type is BackgroundType.IMAGE
            and bool(self.background_image_path)
        )

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "font_size": self.font_size,
            "text_color": self.text_color.to_dict(),
            "background_color": self.background_color.to_dict(),
            "background_type": self.background_type.value,
            "background_image_path": self.background_image_path,
            "background_image_opacity": self.background_image_opacity,
            "animation_type": self.animation_type.value,
            "animation_speed": self.animation_speed,
            "is_bold": self.is_bold,
            "font_style": self.font_style.value,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> BannerStyle:
        created_at = data.get("created_at")
        return cls(
            text=str(data.get("text", "")),
            font_size=float(data.get("font_size", DEFAULT_FONT_SIZE)),
            text_color=Color.from_dict(data["text_color"]) if "text_color" in data else WHITE,
            background_color=(
                Color.from_dict(data["background_color"])
                if "background_color" in data else BLACK
            ),
            background_type=_enum_value(
                BackgroundType, data.get("background_type"), BackgroundType.COLOR
            ),
            background_image_path=data.get("background_image_path") or None,
            background_image_opacity=_clamp01(data.get("background_image_opacity", 1.0)),
            animation_type=_enum_value(
                AnimationType, data.get("animation_type"), AnimationType.NONE
            ),
            animation_speed=float(data.get("animation_speed", DEFAULT_ANIMATION_SPEED)),
            is_bold=bool(data.get("is_bold", False)),
            font_style=_enum_value(FontStyle, data.get("font_style"), FontStyle.NORMAL),
            created_at=parse_timestamp(created_at) if created_at else utc_now(),
        )
