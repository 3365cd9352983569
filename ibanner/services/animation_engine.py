"""Banner animation engine.

Each animation type is a small state machine advanced by ``tick(dt)`` with the
elapsed time in seconds. The engine owns no timers: ``AnimationDriver`` (or a
test) decides when to tick, so every effect can be stepped deterministically.

Timings at speed 1.0 (all divided by the clamped speed):

- scroll: offset 0 → -(text width + screen width / 2) in 8.0 s, looping
- blink: opacity 1.0 ↔ 0.3, 0.8 s per leg, ease-in-out
- gradient: spectrum offset 0 → -screen width in 3.0 s, looping
- breathing: opacity and scale 1.0 ↔ 0.5, 2.0 s per leg, ease-in-out
- typewriter: one character per 0.1 s, 2.0 s pause when complete
- random flash: a random slot lights up every 0.3 s
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field, replace

from PySide6.QtCore import QEasingCurve, QTextBoundaryFinder

from ibanner.models.banner_style import (
    AnimationType,
    BLUE,
    BannerStyle,
    Color,
    GREEN,
    ORANGE,
    PINK,
    PURPLE,
    RED,
    YELLOW,
    clamp_speed,
)
from ibanner.utils.config import (
    BLINK_DURATION,
    BREATHING_DURATION,
    FLASH_FADE_IN,
    FLASH_FADE_OUT,
    FLASH_FADE_OUT_DELAY,
    FLASH_INTERVAL,
    FLASH_SLOT_COUNT,
    GRADIENT_DURATION,
    SCROLL_DURATION,
    TYPEWRITER_INTERVAL,
    TYPEWRITER_PAUSE,
)

_EPSILON = 1e-9

GRADIENT_COLORS: tuple[Color, ...] = (RED, ORANGE, YELLOW, GREEN, BLUE, PURPLE, PINK)
GRADIENT_OPACITY = 0.8

BLINK_MIN_OPACITY = 0.3
BREATHING_MIN_VALUE = 0.5

# Flash slots stay inside these margins
FLASH_MARGIN_X = 50.0
FLASH_MARGIN_Y = 100.0
FLASH_FONT_SCALE = 0.8

_EASE_IN_OUT = QEasingCurve(QEasingCurve.Type.InOutQuad)


def ease_in_out(progress: float) -> float:
    return _EASE_IN_OUT.valueForProgress(min(1.0, max(0.0, progress)))


def _lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


def grapheme_ends(text: str) -> list[int]:
    """End index of every user-perceived character in *text*.

    Qt reports boundaries in UTF-16 units; they are mapped back to ``str``
    indices so emoji with selectors or joiners stay in one piece.
    """
    index_of_unit = {}
    units = 0
    for index, char in enumerate(text):
        index_of_unit[units] = index
        units += 2 if ord(char) > 0xFFFF else 1
    index_of_unit[units] = len(text)

    finder = QTextBoundaryFinder(QTextBoundaryFinder.BoundaryType.Grapheme, text)
    ends = []
    position = finder.toNextBoundary()
    while position != -1:
        ends.append(index_of_unit[position])
        position = finder.toNextBoundary()
    return ends


def _reversing_progress(elapsed: float, leg: float) -> float:
    """Progress 0→1→0→1… where each leg lasts *leg* seconds."""
    legs, rest = divmod(elapsed, leg)
    frac = rest / leg
    return frac if int(legs) % 2 == 0 else 1.0 - frac


@dataclass(slots=True)
class FlashSlot:
    """One random-flash text instance."""

    x: float
    y: float
    opacity: float = 0.0

    @property
    def scale(self) -> float:
        return self.opacity


@dataclass(slots=True)
class AnimationFrame:
    """Visual parameters for one rendered frame."""

    text_offset_x: float = 0.0
    opacity: float = 1.0
    scale: float = 1.0
    revealed_text: str | None = None       # None = show the full text
    gradient_offset_x: float = 0.0
    gradient_colors: tuple[Color, ...] = ()
    flashes: tuple[FlashSlot, ...] = ()


@dataclass(slots=True)
class AnimationContext:
    text: str
    speed: float
    screen_width: float
    screen_height: float
    text_width: float
    rng: random.Random


# ---------------------------------------------------------------------- States


class _AnimationState:
    needs_ticks = True

    def __init__(self, ctx: AnimationContext):
        self._ctx = ctx
        self._elapsed = 0.0

    def tick(self, dt: float) -> None:
        self._elapsed += dt

    def apply(self, frame: AnimationFrame) -> None:
        pass


class _StaticState(_AnimationState):
    needs_ticks = False

    def tick(self, dt: float) -> None:
        pass


class _ScrollState(_AnimationState):
    def __init__(self, ctx: AnimationContext):
        super().__init__(ctx)
        self._duration = SCROLL_DURATION / ctx.speed
        self._distance = ctx.text_width + ctx.screen_width * 0.5

    def apply(self, frame: AnimationFrame) -> None:
        progress = (self._elapsed % self._duration) / self._duration
        frame.text_offset_x = -self._distance * progress


class _BlinkState(_AnimationState):
    def __init__(self, ctx: AnimationContext):
        super().__init__(ctx)
        self._leg = BLINK_DURATION / ctx.speed

    def apply(self, frame: AnimationFrame) -> None:
        t = ease_in_out(_reversing_progress(self._elapsed, self._leg))
        frame.opacity = _lerp(1.0, BLINK_MIN_OPACITY, t)


class _GradientState(_AnimationState):
    def __init__(self, ctx: AnimationContext):
        super().__init__(ctx)
        self._duration = GRADIENT_DURATION / ctx.speed

    def apply(self, frame: AnimationFrame) -> None:
        progress = (self._elapsed % self._duration) / self._duration
        frame.gradient_offset_x = -self._ctx.screen_width * progress
        frame.gradient_colors = GRADIENT_COLORS


class _BreathingState(_AnimationState):
    def __init__(self, ctx: AnimationContext):
        super().__init__(ctx)
        self._leg = BREATHING_DURATION / ctx.speed

    def apply(self, frame: AnimationFrame) -> None:
        t = ease_in_out(_reversing_progress(self._elapsed, self._leg))
        value = _lerp(1.0, BREATHING_MIN_VALUE, t)
        frame.opacity = value
        frame.scale = value


class _TypewriterState(_AnimationState):
    """Reveal one grapheme per interval, pause when complete, start over."""

    TYPING = "typing"
    PAUSED = "paused"

    def __init__(self, ctx: AnimationContext):
        super().__init__(ctx)
        self._interval = TYPEWRITER_INTERVAL / ctx.speed
        self._pause = TYPEWRITER_PAUSE / ctx.speed
        self._ends = grapheme_ends(ctx.text)
        self._length = len(self._ends)
        self.revealed = 0
        if self._length == 0:
            self.phase = self.PAUSED
            self._countdown = self._pause
        else:
            self.phase = self.TYPING
            self._countdown = self._interval

    def tick(self, dt: float) -> None:
        self._countdown -= dt
        while self._countdown <= _EPSILON:
            self._countdown += self._advance()

    def _advance(self) -> float:
        """Fire one timer event and return the delay until the next one."""
        if self.phase == self.TYPING:
            self.revealed += 1
            if self.revealed >= self._length:
                self.phase = self.PAUSED
                return self._pause
            return self._interval

        self.revealed = 0
        if self._length == 0:
            return self._pause
        self.phase = self.TYPING
        return self._interval

    def apply(self, frame: AnimationFrame) -> None:
        end = self._ends[self.revealed - 1] if self.revealed else 0
        frame.revealed_text = self._ctx.text[:end]


class _Tween:
    __slots__ = ("start", "end", "duration", "elapsed")

    def __init__(self, start: float, end: float, duration: float):
        self.start = start
        self.end = end
        self.duration = duration
        self.elapsed = 0.0

    @property
    def done(self) -> bool:
        return self.elapsed >= self.duration - _EPSILON

    def value(self) -> float:
        if self.duration <= 0:
            return self.end
        return _lerp(self.start, self.end, ease_in_out(self.elapsed / self.duration))


class _FlashSlotState:
    __slots__ = ("slot", "tween", "fade_delay")

    def __init__(self, slot: FlashSlot):
        self.slot = slot
        self.tween: _Tween | None = None
        self.fade_delay: float | None = None

    def advance(self, step: float, fade_out: float) -> None:
        if self.tween is not None:
            self.tween.elapsed += step
            self.slot.opacity = self.tween.value()
            if self.tween.done:
                self.tween = None
        if self.fade_delay is not None:
            self.fade_delay -= step
            if self.fade_delay <= _EPSILON:
                self.fade_delay = None
                self.tween = _Tween(self.slot.opacity, 0.0, fade_out)


class _RandomFlashState(_AnimationState):
    """Five text slots; every interval one of them flashes in and out."""

    def __init__(self, ctx: AnimationContext):
        super().__init__(ctx)
        self._interval = FLASH_INTERVAL / ctx.speed
        self._fade_in = FLASH_FADE_IN / ctx.speed
        self._fade_out_delay = FLASH_FADE_OUT_DELAY / ctx.speed
        self._fade_out = FLASH_FADE_OUT / ctx.speed
        self._countdown = self._interval
        self.slots = [
            _FlashSlotState(FlashSlot(*self._random_position()))
            for _ in range(FLASH_SLOT_COUNT)
        ]

    def _random_position(self) -> tuple[float, float]:
        w, h = self._ctx.screen_width, self._ctx.screen_height
        rng = self._ctx.rng
        x = rng.uniform(FLASH_MARGIN_X, w - FLASH_MARGIN_X) if w > 2 * FLASH_MARGIN_X else w / 2
        y = rng.uniform(FLASH_MARGIN_Y, h - FLASH_MARGIN_Y) if h > 2 * FLASH_MARGIN_Y else h / 2
        return x, y

    def tick(self, dt: float) -> None:
        remaining = dt
        while remaining > _EPSILON:
            # split the step at every scheduled event so tweens start on time
            pending = [s.fade_delay for s in self.slots if s.fade_delay is not None]
            step = max(0.0, min([remaining, self._countdown, *pending]))
            for state in self.slots:
                state.advance(step, self._fade_out)
            self._countdown -= step
            remaining -= step
            if self._countdown <= _EPSILON:
                self._flash()
                self._countdown += self._interval

    def _flash(self) -> None:
        rng = self._ctx.rng
        state = self.slots[rng.randrange(len(self.slots))]
        state.tween = _Tween(state.slot.opacity, 1.0, self._fade_in)
        state.fade_delay = self._fade_out_delay
        if rng.random() < 0.5:
            state.slot.x, state.slot.y = self._random_position()

    def apply(self, frame: AnimationFrame) -> None:
        frame.flashes = tuple(replace(s.slot) for s in self.slots)


_STATES = {
    AnimationType.NONE: _StaticState,
    AnimationType.SCROLL: _ScrollState,
    AnimationType.BLINK: _BlinkState,
    AnimationType.GRADIENT: _GradientState,
    AnimationType.BREATHING: _BreathingState,
    AnimationType.TYPEWRITER: _TypewriterState,
    AnimationType.RANDOM_FLASH: _RandomFlashState,
}


# ---------------------------------------------------------------------- Engine


class AnimationEngine:
    """Runs the animation for one display session at a time."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()
        self._state: _AnimationState | None = None
        self._animation_type = AnimationType.NONE
        self._frame = AnimationFrame()

    @property
    def is_running(self) -> bool:
        return self._state is not None

    @property
    def needs_ticks(self) -> bool:
        return self._state is not None and self._state.needs_ticks

    @property
    def animation_type(self) -> AnimationType:
        return self._animation_type

    @property
    def frame(self) -> AnimationFrame:
        return self._frame

    def start(
        self,
        style: BannerStyle,
        screen_width: float,
        screen_height: float,
        text_width: float = 0.0,
    ) -> AnimationFrame:
        """Start a session for *style*, replacing any running one."""
        self.stop()
        ctx = AnimationContext(
            text=style.text,
            speed=clamp_speed(style.animation_speed),
            screen_width=max(0.0, float(screen_width)),
            screen_height=max(0.0, float(screen_height)),
            text_width=max(0.0, float(text_width)),
            rng=self._rng,
        )
        self._animation_type = style.animation_type
        self._state = _STATES.get(style.animation_type, _StaticState)(ctx)
        self._render()
        return self._frame

    def tick(self, dt: float) -> AnimationFrame:
        """Advance the running animation by *dt* seconds."""
        if self._state is None or not math.isfinite(dt) or dt <= 0:
            return self._frame
        self._state.tick(dt)
        self._render()
        return self._frame

    def stop(self) -> None:
        """Tear down the session. Safe to call repeatedly."""
        self._state = None
        self._animation_type = AnimationType.NONE
        self._frame = AnimationFrame()

    def _render(self) -> None:
        frame = AnimationFrame()
        self._state.apply(frame)
        self._frame = frame
