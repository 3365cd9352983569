"""Tests for the animation engine state machines (no timers involved)."""

import math
import random

import pytest

from ibanner.models.banner_style import AnimationType, BannerStyle
from ibanner.models.banner_template import builtin_templates
from ibanner.services.animation_engine import (
    BLINK_MIN_OPACITY,
    FLASH_MARGIN_X,
    FLASH_MARGIN_Y,
    GRADIENT_COLORS,
    AnimationEngine,
    AnimationFrame,
    ease_in_out,
    grapheme_ends,
)

W, H = 1000, 800


def _start(animation, text="Hello", speed=1.0, text_width=200.0, rng=None):
    engine = AnimationEngine(rng=rng)
    engine.start(
        BannerStyle(text=text, animation_type=animation, animation_speed=speed),
        W, H, text_width,
    )
    return engine


class TestEaseInOut:
    def test_endpoints(self):
        assert ease_in_out(0.0) == pytest.approx(0.0)
        assert ease_in_out(1.0) == pytest.approx(1.0)
        assert ease_in_out(0.5) == pytest.approx(0.5)

    def test_quadratic_shape(self):
        assert ease_in_out(0.25) == pytest.approx(0.125)

    def test_out_of_range_clamped(self):
        assert ease_in_out(-1.0) == pytest.approx(0.0)
        assert ease_in_out(3.0) == pytest.approx(1.0)


class TestLifecycle:
    def test_idle_engine(self):
        engine = AnimationEngine()
        assert not engine.is_running
        assert engine.tick(0.5) == AnimationFrame()

    def test_stop_is_idempotent(self):
        engine = _start(AnimationType.BLINK)
        engine.stop()
        engine.stop()
        assert not engine.is_running
        assert engine.animation_type is AnimationType.NONE
        assert engine.frame == AnimationFrame()

    @pytest.mark.parametrize("dt", [0.0, -1.0, math.nan, math.inf])
    def test_invalid_dt_ignored(self, dt):
        engine = _start(AnimationType.TYPEWRITER)
        engine.tick(0.1)
        assert engine.tick(dt).revealed_text == "H"

    def test_restart_replaces_session(self):
        engine = _start(AnimationType.TYPEWRITER)
        engine.tick(0.3)
        engine.start(BannerStyle(text="Hi", animation_type=AnimationType.TYPEWRITER), W, H)
        assert engine.frame.revealed_text == ""

    def test_static_needs_no_ticks(self):
        engine = _start(AnimationType.NONE)
        assert engine.is_running
        assert not engine.needs_ticks
        frame = engine.tick(1.0)
        assert frame.opacity == 1.0
        assert frame.revealed_text is None


class TestTypewriter:
    def test_reveal_pause_reset(self):
        engine = _start(AnimationType.TYPEWRITER, text="Hello")
        assert engine.frame.revealed_text == ""

        revealed = [engine.tick(0.1).revealed_text for _ in range(5)]
        assert revealed == ["H", "He", "Hel", "Hell", "Hello"]

        assert engine.tick(1.9).revealed_text == "Hello"
        assert engine.tick(0.1).revealed_text == ""
        assert engine.tick(0.1).revealed_text == "H"

    def test_large_step_catches_up(self):
        engine = _start(AnimationType.TYPEWRITER, text="Hello")
        assert engine.tick(0.4).revealed_text == "Hell"

    def test_speed_scales_interval(self):
        engine = _start(AnimationType.TYPEWRITER, text="Hello", speed=2.0)
        assert engine.tick(0.05).revealed_text == "H"

    def test_speed_clamped(self):
        fast = _start(AnimationType.TYPEWRITER, text="Hello", speed=100.0)
        assert fast.tick(0.01).revealed_text == "H"
        invalid = _start(AnimationType.TYPEWRITER, text="Hello", speed=0.0)
        assert invalid.tick(0.05).revealed_text == ""
        assert invalid.tick(0.05).revealed_text == "H"

    def test_empty_text(self):
        engine = _start(AnimationType.TYPEWRITER, text="")
        assert engine.tick(5.0).revealed_text == ""

    def test_emoji_revealed_whole(self):
        text = builtin_templates()[0].text
        assert text == "\u2764\ufe0f I Love You \u2764\ufe0f"
        engine = _start(AnimationType.TYPEWRITER, text=text)

        revealed = [engine.tick(0.1).revealed_text for _ in range(3)]
        assert revealed == ["\u2764\ufe0f", "\u2764\ufe0f ", "\u2764\ufe0f I"]

        engine.tick(1.15)
        assert engine.frame.revealed_text == text

    def test_grapheme_ends(self):
        family = "\U0001F468\u200d\U0001F469\u200d\U0001F467"
        assert grapheme_ends("") == []
        assert grapheme_ends("ab") == [1, 2]
        assert grapheme_ends(family + "!") == [len(family), len(family) + 1]
        assert grapheme_ends("\U0001F31F x") == [1, 2, 3]


class TestContinuousEffects:
    def test_scroll(self):
        engine = _start(AnimationType.SCROLL, text_width=200.0)
        assert engine.frame.text_offset_x == pytest.approx(0.0)
        # distance = text width + half the screen, covered in 8 s
        assert engine.tick(4.0).text_offset_x == pytest.approx(-350.0)
        assert engine.tick(4.0).text_offset_x == pytest.approx(0.0)

    def test_blink(self):
        engine = _start(AnimationType.BLINK)
        assert engine.frame.opacity == pytest.approx(1.0)
        assert engine.tick(0.8).opacity == pytest.approx(BLINK_MIN_OPACITY)
        assert engine.tick(0.4).opacity == pytest.approx(0.65)
        assert engine.tick(0.4).opacity == pytest.approx(1.0)

    def test_blink_speed(self):
        engine = _start(AnimationType.BLINK, speed=2.0)
        assert engine.tick(0.4).opacity == pytest.approx(BLINK_MIN_OPACITY)

    def test_breathing(self):
        engine = _start(AnimationType.BREATHING)
        frame = engine.tick(1.0)
        assert frame.opacity == pytest.approx(0.75)
        assert frame.scale == pytest.approx(0.75)
        frame = engine.tick(1.0)
        assert frame.opacity == pytest.approx(0.5)
        assert frame.scale == pytest.approx(0.5)

    def test_gradient(self):
        engine = _start(AnimationType.GRADIENT)
        frame = engine.tick(1.5)
        assert frame.gradient_offset_x == pytest.approx(-W / 2)
        assert frame.gradient_colors == GRADIENT_COLORS
        assert len(frame.gradient_colors) == 7


class TestRandomFlash:
    def test_slots_start_hidden(self):
        engine = _start(AnimationType.RANDOM_FLASH, rng=random.Random(1))
        flashes = engine.frame.flashes
        assert len(flashes) == 5
        assert all(s.opacity == 0.0 for s in flashes)

    def test_one_slot_fades_in(self):
        engine = _start(AnimationType.RANDOM_FLASH, rng=random.Random(7))
        engine.tick(0.3)
        frame = engine.tick(0.25)
        lit = [s for s in frame.flashes if s.opacity > 0]
        assert len(lit) == 1
        assert lit[0].opacity == pytest.approx(0.5)
        assert lit[0].scale == lit[0].opacity

    def test_positions_and_opacity_bounded(self):
        engine = _start(AnimationType.RANDOM_FLASH, rng=random.Random(3))
        for _ in range(600):
            frame = engine.tick(1 / 60)
            for slot in frame.flashes:
                assert 0.0 <= slot.opacity <= 1.0
                assert FLASH_MARGIN_X <= slot.x <= W - FLASH_MARGIN_X
                assert FLASH_MARGIN_Y <= slot.y <= H - FLASH_MARGIN_Y

    def test_deterministic_with_seed(self):
        a = _start(AnimationType.RANDOM_FLASH, rng=random.Random(11))
        b = _start(AnimationType.RANDOM_FLASH, rng=random.Random(11))
        for _ in range(50):
            assert a.tick(0.05) == b.tick(0.05)

    def test_step_size_does_not_change_result(self):
        a = _start(AnimationType.RANDOM_FLASH, rng=random.Random(5))
        b = _start(AnimationType.RANDOM_FLASH, rng=random.Random(5))
        a.tick(1.0)
        for _ in range(4):
            b.tick(0.25)
        for sa, sb in zip(a.frame.flashes, b.frame.flashes):
            assert sa.opacity == pytest.approx(sb.opacity)
            assert (sa.x, sa.y) == pytest.approx((sb.x, sb.y))

    def test_small_screen_centers_slots(self):
        engine = AnimationEngine(rng=random.Random(2))
        engine.start(BannerStyle(text="x", animation_type=AnimationType.RANDOM_FLASH), 80, 150)
        assert all((s.x, s.y) == (40, 75) for s in engine.frame.flashes)
