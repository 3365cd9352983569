"""Tests for data models."""

import json
import math
from datetime import datetime, timezone

import pytest

from ibanner.models.banner_history import BannerHistory
from ibanner.models.banner_style import (
    RED,
    WHITE,
    AnimationType,
    BackgroundType,
    BannerStyle,
    Color,
    FontStyle,
    clamp_speed,
    parse_timestamp,
)
from ibanner.models.banner_template import BannerTemplate, TemplateCategory, builtin_templates
from ibanner.models.subscription import LIFETIME_PRODUCT_ID, PREMIUM_FEATURES, subscription_products


class TestColor:
    def test_channels_clamped(self):
        c = Color(1.5, -0.2, 0.5, 2.0)
        assert c.red == 1.0
        assert c.green == 0.0
        assert c.blue == 0.5
        assert c.alpha == 1.0

    def test_hex(self):
        assert WHITE.to_hex() == "#FFFFFF"
        assert Color(0, 0, 0, 0).to_hex(include_alpha=True) == "#00000000"

    def test_from_hex(self):
        c = Color.from_hex("#FF0000")
        assert (c.red, c.green, c.blue, c.alpha) == (1.0, 0.0, 0.0, 1.0)
        assert Color.from_hex("00FF0080").alpha == pytest.approx(128 / 255)

    def test_from_hex_invalid(self):
        with pytest.raises(ValueError):
            Color.from_hex("#12")
        with pytest.raises(ValueError):
            Color.from_hex("#GGGGGG")

    def test_with_alpha(self):
        c = RED.with_alpha(0.5)
        assert c.alpha == 0.5
        assert c.red == RED.red


class TestClampSpeed:
    def test_in_range_kept(self):
        assert clamp_speed(1.5) == 1.5

    def test_upper_and_lower_bounds(self):
        assert clamp_speed(50) == 10.0
        assert clamp_speed(0.01) == 0.1

    def test_invalid_falls_back_to_default(self):
        assert clamp_speed(0) == 1.0
        assert clamp_speed(-2) == 1.0
        assert clamp_speed(math.nan) == 1.0
        assert clamp_speed(math.inf) == 1.0
        assert clamp_speed("fast") == 1.0

    def test_effective_speed(self):
        assert BannerStyle(animation_speed=0).effective_speed() == 1.0


class TestBannerStyle:
    def test_defaults(self):
        style = BannerStyle()
        assert style.text == ""
        assert style.font_size == 48.0
        assert style.animation_type is AnimationType.NONE
        assert style.background_type is BackgroundType.COLOR
        assert style.font_style is FontStyle.NORMAL

    def test_round_trip(self):
        style = BannerStyle(
            text="Hello",
            font_size=64,
            text_color=RED,
            background_type=BackgroundType.IMAGE,
            background_image_path="BackgroundImages/bg_x.jpg",
            background_image_opacity=0.4,
            animation_type=AnimationType.RANDOM_FLASH,
            animation_speed=2.5,
            is_bold=True,
            font_style=FontStyle.NEON,
        )
        restored = BannerStyle.from_dict(json.loads(json.dumps(style.to_dict())))
        assert restored == style

    def test_unknown_enum_values_fall_back(self):
        data = BannerStyle(text="x").to_dict()
        data["animation_type"] = "spin"
        data["font_style"] = "gothic"
        restored = BannerStyle.from_dict(data)
        assert restored.animation_type is AnimationType.NONE
        assert restored.font_style is FontStyle.NORMAL

    def test_copy_is_independent(self):
        style = BannerStyle(text="a")
        other = style.copy()
        other.text = "b"
        assert style.text == "a"

    def test_without_text(self):
        style = BannerStyle(text="hi", is_bold=True)
        stripped = style.without_text()
        assert stripped.text == ""
        assert stripped.is_bold

    def test_uses_background_image(self):
        assert not BannerStyle(background_type=BackgroundType.IMAGE).uses_background_image()
        assert BannerStyle(
            background_type=BackgroundType.IMAGE, background_image_path="BackgroundImages/a.jpg"
        ).uses_background_image()

    def test_naive_timestamp_is_utc(self):
        stamp = parse_timestamp("2024-07-13T10:00:00")
        assert stamp.tzinfo == timezone.utc


class TestBannerHistory:
    def test_round_trip(self):
        entry = BannerHistory(
            text="Hi", style=BannerStyle(text="Hi"),
            timestamp=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        )
        restored = BannerHistory.from_dict(entry.to_dict())
        assert restored.history_id == entry.history_id
        assert restored.timestamp == entry.timestamp
        assert restored.style.text == "Hi"

    def test_ids_unique(self):
        style = BannerStyle()
        assert BannerHistory("a", style).history_id != BannerHistory("a", style).history_id


class TestBannerTemplate:
    def test_builtins(self):
        templates = builtin_templates()
        assert len(templates) == 8
        assert all(t.is_built_in for t in templates)
        assert templates[0].name == "Concert Cheer"
        assert all(t.category is not TemplateCategory.ALL for t in templates)

    def test_builtin_ids_stable(self):
        first = [t.template_id for t in builtin_templates()]
        second = [t.template_id for t in builtin_templates()]
        assert first == second
        assert len(set(first)) == len(first)

    def test_unknown_category_becomes_custom(self):
        data = BannerTemplate("n", "t", BannerStyle(text="t"), TemplateCategory.PARTY).to_dict()
        data["category"] = "sports"
        assert BannerTemplate.from_dict(data).category is TemplateCategory.CUSTOM

    def test_round_trip(self):
        template = BannerTemplate(
            "Mine", "Go", BannerStyle(text="Go"), TemplateCategory.SUPPORT, is_built_in=False
        )
        restored = BannerTemplate.from_dict(template.to_dict())
        assert restored.template_id == template.template_id
        assert restored.category is TemplateCategory.SUPPORT
        assert restored.is_built_in is False

    def test_category_display_name(self):
        assert TemplateCategory.TRANSPORT.display_name == "Transport"


class TestSubscriptionDescriptors:
    def test_features(self):
        assert len(PREMIUM_FEATURES) == 6
        assert all(f.display_name and f.icon for f in PREMIUM_FEATURES)

    def test_products(self):
        products = subscription_products()
        assert products[0].product_id == LIFETIME_PRODUCT_ID
