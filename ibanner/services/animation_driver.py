"""QTimer-based scheduler for the animation engine."""

from __future__ import annotations

import logging

from PySide6.QtCore import QElapsedTimer, QObject, Qt, QTimer, Signal

from ibanner.models.banner_style import BannerStyle
from ibanner.services.animation_engine import AnimationEngine, AnimationFrame
from ibanner.utils.config import FRAME_INTERVAL_MS, MAX_TICK_SECONDS

logger = logging.getLogger(__name__)


class AnimationDriver(QObject):
    """Ticks an AnimationEngine from the UI event loop.

    Only one session runs at a time: ``start`` cancels the previous timer
    before scheduling a new one, and ``stop`` is safe to call repeatedly.
    """

    frame_changed = Signal(object)  # AnimationFrame
    running_changed = Signal(bool)

    def __init__(self, engine: AnimationEngine | None = None, parent: QObject | None = None):
        super().__init__(parent)
        self._engine = engine or AnimationEngine()
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.setInterval(FRAME_INTERVAL_MS)
        self._timer.timeout.connect(self._on_tick)
        self._elapsed_timer = QElapsedTimer()
        self._last_tick_ms = 0

    @property
    def engine(self) -> AnimationEngine:
        return self._engine

    @property
    def frame(self) -> AnimationFrame:
        return self._engine.frame

    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(
        self,
        style: BannerStyle,
        screen_width: float,
        screen_height: float,
        text_width: float = 0.0,
    ) -> None:
        self.stop()
        frame = self._engine.start(style, screen_width, screen_height, text_width)
        logger.debug(
            "Animation %s started (speed=%.2f, screen=%dx%d)",
            style.animation_type.value, style.effective_speed(), screen_width, screen_height,
        )
        if self._engine.needs_ticks:
            self._elapsed_timer.start()
            self._last_tick_ms = 0
            self._timer.start()
            self.running_changed.emit(True)
        self.frame_changed.emit(frame)

    def stop(self) -> None:
        was_active = self._timer.isActive()
        self._timer.stop()
        self._engine.stop()
        if was_active:
            self.running_changed.emit(False)

    def _on_tick(self) -> None:
        now_ms = self._elapsed_timer.elapsed()
        dt = min((now_ms - self._last_tick_ms) / 1000.0, MAX_TICK_SECONDS)
        self._last_tick_ms = now_ms
        self.frame_changed.emit(self._engine.tick(dt))
