"""
Logo Motion — Animation Driver
Host-agnostic frame loop. The host supplies a scheduler with Tk's
`after(delay_ms, callback)` signature; the driver hands each frame the
elapsed time in seconds since its first tick.
"""

import time
import logging
from typing import Callable, Optional, Tuple

from logomotion.config import PREVIEW_FPS, PREVIEW_MIN_DELAY_MS, PREVIEW_MAX_SIZE
from logomotion.mathutils import merge_params
from logomotion.sampler import output_size
from logomotion.surface import Surface

logger = logging.getLogger(__name__)

# Back-off after a frame raised.
ERROR_DELAY_MS = 66


class AnimationDriver:
    """
    Repeatedly calls on_frame(elapsed_seconds) at roughly `fps`.

    Scheduling is adaptive: the next tick is delayed by the frame budget
    minus the time the frame took, never less than 16 ms.

    Args:
        schedule: after-style scheduler, returns an id accepted by `cancel`.
        on_frame: Frame callback.
        fps: Target frame rate.
        clock: Monotonic seconds source.
        cancel: Optional after_cancel-style callable for pending ticks.
    """

    def __init__(
        self,
        schedule: Callable[[int, Callable], object],
        on_frame: Callable[[float], None],
        fps: int = PREVIEW_FPS,
        clock: Callable[[], float] = time.monotonic,
        cancel: Optional[Callable[[object], None]] = None,
    ):
        self._schedule = schedule
        self._on_frame = on_frame
        self._interval_ms = 1000 // max(1, int(fps))
        self._clock = clock
        self._cancel = cancel
        self._start: Optional[float] = None
        self._paused_at: Optional[float] = None
        self._running = False
        self._pending = None
        self.last_delay_ms: Optional[int] = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def elapsed(self) -> float:
        """Seconds of animation time shown so far (frozen while paused)."""
        if self._start is None:
            return 0.0
        now = self._paused_at if self._paused_at is not None else self._clock()
        return now - self._start

    def start(self):
        if self._running:
            return
        self._running = True
        self._paused_at = None
        self._tick()

    def pause(self):
        if not self._running:
            return
        self._running = False
        self._paused_at = self._clock()
        self._cancel_pending()

    def resume(self):
        if self._running:
            return
        if self._paused_at is not None and self._start is not None:
            self._start += self._clock() - self._paused_at
        self._paused_at = None
        self._running = True
        self._tick()

    def stop(self):
        """Tear down; a later start() begins again at t = 0."""
        self._running = False
        self._cancel_pending()
        self._start = None
        self._paused_at = None

    def _cancel_pending(self):
        if self._pending is not None and self._cancel is not None:
            try:
                self._cancel(self._pending)
            except Exception as e:
                logger.debug("Cancel of pending tick failed: %s", e)
        self._pending = None

    def _tick(self):
        self._pending = None
        if not self._running:
            return

        now = self._clock()
        if self._start is None:
            self._start = now

        try:
            self._on_frame(now - self._start)
            render_ms = int((self._clock() - now) * 1000)
            delay = max(PREVIEW_MIN_DELAY_MS, self._interval_ms - render_ms)
        except Exception as e:
            logger.debug("Preview frame error: %s", e)
            delay = ERROR_DELAY_MS

        self.last_delay_ms = delay
        if self._running:
            self._pending = self._schedule(delay, self._tick)


def fit_scale(width, height, max_size: Tuple[int, int] = PREVIEW_MAX_SIZE) -> float:
    """Scale that fits a logical width×height inside max_size."""
    return min(max_size[0] / width, max_size[1] / height)


class PreviewController:
    """
    Owns the live preview's single surface and effect state.

    rebuild() replaces the state wholesale whenever the effect, grid, params
    or size change; render() only draws.
    """

    def __init__(self, effect, scale: Optional[float] = None):
        self.effect = effect
        self.scale = scale
        self.params = effect.get_default_params()
        self.surface: Optional[Surface] = None
        self.state: Optional[dict] = None

    @property
    def has_state(self) -> bool:
        return self.state is not None

    def set_effect(self, effect, sample, params=None):
        self.effect = effect
        self.rebuild(sample, params)

    def rebuild(self, sample, params=None, width=None, height=None):
        """Re-run init for the current effect. A None grid clears the preview."""
        self.params = merge_params(self.effect.get_default_params(), params)
        if sample is None:
            self.state = None
            self.surface = None
            return

        if width is None or height is None:
            width, height = output_size(sample)
        scale = self.scale if self.scale is not None else fit_scale(width, height)

        self.state = self.effect.init(sample, self.params, width, height)
        surface = self.surface
        if surface is None or (surface.width, surface.height, surface.scale) != (width, height, scale):
            self.surface = Surface(width, height, scale)
        logger.debug("Preview rebuilt for %s at %dx%d", self.effect.title, width, height)

    def render(self, t: float) -> Optional[Surface]:
        """Draw the frame at t. Returns None when there is nothing to show."""
        if self.state is None or self.surface is None:
            return None
        self.effect.draw_frame(self.surface, self.state, t)
        return self.surface
