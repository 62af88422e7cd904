"""
playback.py — Step-by-Step Playback Controller
===============================================
The PlaybackController is the ONLY object a view talks to during
playback. It holds a finished Trace, an index into it, and the
transport state, and exposes play / pause / step / seek / speed.

State machine:
    PAUSED  →  play()   →  PLAYING      (unless already at the last step)
    PLAYING →  pause()  →  PAUSED
    PLAYING →  tick reaches last step  →  PAUSED + on_complete
    any     →  reset(trace)  →  PAUSED at index 0

Timing:
  Autoplay asks the scheduler for one callback at a time. Scheduling a
  tick always cancels the previous handle, so a controller never has
  two ticks in flight. play() while already playing does nothing.

Thread safety:
  This class is NOT thread-safe. All calls, and the scheduler's
  callbacks, must happen on one thread. play() / pause() / reset() may
  be called from inside on_step / on_complete.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

from algorithms.step import Step, Trace
from engine.scheduler import PollingScheduler


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step) and mode multipliers
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1200,   # teaching mode
    "medium": 600,
    "fast":   250,
    "turbo":  80,     # demo mode
}

DEFAULT_SPEED_MS = SPEED_PRESETS["medium"]
MIN_SPEED_MS     = 20

MODE_FACTORS = {
    "beginner":  1.0,
    "expert":    0.5,
    "interview": 0.5,
}


@dataclass
class PlaybackState:
    current_index: int  = 0
    is_playing:    bool = False
    speed_ms:      int  = DEFAULT_SPEED_MS
    mode:          str  = "beginner"


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        trace       : The Trace being played (None until reset()).
        scheduler   : Anything with call_later(delay_ms, callback) -> handle.
        on_step     : Optional callback(Step) fired every time the current step changes.
        on_complete : Optional callback(Step) fired when autoplay reaches the
                      last step, and when play() is refused because the trace
                      is already exhausted.
    """

    def __init__(
        self,
        trace: Optional[Trace] = None,
        scheduler: Any = None,
        speed_ms: int = DEFAULT_SPEED_MS,
        mode: str = "beginner",
        on_step: Optional[Callable[[Step], None]] = None,
        on_complete: Optional[Callable[[Step], None]] = None,
    ):
        self.scheduler   = scheduler if scheduler is not None else PollingScheduler()
        self.on_step     = on_step
        self.on_complete = on_complete
        self.trace: Optional[Trace] = None

        self._state   = PlaybackState(speed_ms=_clamp_speed(speed_ms), mode=_check_mode(mode))
        self._pending = None

        if trace is not None:
            self.reset(trace)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self, trace: Trace) -> None:
        """Swap in a new trace: index 0, paused, pending tick cancelled."""
        self._cancel_pending()
        self.trace = trace
        self._state.current_index = 0
        self._state.is_playing    = False
        logger.debug("playback reset: %d steps", self.total_steps)
        self._notify()

    def close(self) -> None:
        """Stop for good; a stray tick must not touch a discarded state."""
        self._cancel_pending()
        self._state.is_playing = False

    # ------------------------------------------------------------------
    # Navigation  (always clamped, never raises)
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """Advance one step. Returns False if already at the end."""
        return self._goto(self._state.current_index + 1)

    def step_back(self) -> bool:
        """Rewind one step. Returns False if already at the start."""
        return self._goto(self._state.current_index - 1)

    def goto(self, idx: int) -> bool:
        """Jump to `idx`, clamped into the trace."""
        return self._goto(idx)

    def rewind(self) -> bool:
        return self._goto(0)

    def jump_to_end(self) -> bool:
        return self._goto(self.total_steps - 1)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> bool:
        """Start autoplay. Returns False if there is nothing left to play."""
        if not self.total_steps:
            return False
        if self.is_finished:
            self._state.is_playing = False
            self._fire_complete()
            return False
        if self._state.is_playing:
            return True
        self._state.is_playing = True
        self._schedule()
        return True

    def pause(self) -> None:
        self._state.is_playing = False
        self._cancel_pending()

    def toggle_play(self) -> bool:
        if self._state.is_playing:
            self.pause()
            return False
        return self.play()

    # ------------------------------------------------------------------
    # Speed / mode  (take effect on the next scheduled tick)
    # ------------------------------------------------------------------
    def set_speed(self, ms: float) -> None:
        self._state.speed_ms = _clamp_speed(ms)

    def set_speed_preset(self, preset: str) -> None:
        self._state.speed_ms = SPEED_PRESETS.get(preset, DEFAULT_SPEED_MS)

    def set_mode(self, mode: str) -> None:
        self._state.mode = _check_mode(mode)

    @property
    def interval_ms(self) -> float:
        return self._state.speed_ms * MODE_FACTORS[self._state.mode]

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def speed_ms(self) -> int:
        return self._state.speed_ms

    @property
    def mode(self) -> str:
        return self._state.mode

    @property
    def state(self) -> PlaybackState:
        return replace(self._state)

    @property
    def total_steps(self) -> int:
        return len(self.trace.steps) if self.trace is not None else 0

    @property
    def current_step(self) -> Optional[Step]:
        if self.total_steps:
            return self.trace.steps[self._state.current_index]
        return None

    @property
    def is_finished(self) -> bool:
        return self.total_steps > 0 and self._state.current_index >= self.total_steps - 1

    @property
    def has_pending_tick(self) -> bool:
        return self._pending is not None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _tick(self) -> None:
        self._pending = None
        if not self._state.is_playing or not self.total_steps:
            return

        if not self.is_finished:
            self._state.current_index += 1
            self._notify()

        # a callback may have paused, reset or re-armed us
        if not self._state.is_playing:
            return
        if self.is_finished:
            self._state.is_playing = False
            self._cancel_pending()
            logger.debug("playback complete at step %d", self._state.current_index)
            self._fire_complete()
        elif self._pending is None:
            self._schedule()

    def _schedule(self) -> None:
        self._cancel_pending()
        self._pending = self.scheduler.call_later(self.interval_ms, self._tick)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _goto(self, idx: int) -> bool:
        if not self.total_steps:
            return False
        idx = max(0, min(idx, self.total_steps - 1))
        if idx == self._state.current_index:
            return False
        self._state.current_index = idx
        self._notify()
        return True

    def _notify(self) -> None:
        step = self.current_step
        if self.on_step and step is not None:
            self.on_step(step)

    def _fire_complete(self) -> None:
        if self.on_complete:
            self.on_complete(self.current_step)


def _clamp_speed(ms: float) -> int:
    return max(MIN_SPEED_MS, int(ms))


def _check_mode(mode: str) -> str:
    return mode if mode in MODE_FACTORS else "beginner"
