"""An on/off timer that alternates between an active and an inactive state."""

from __future__ import annotations

import time
from enum import Enum
from typing import Callable, Optional

Clock = Callable[[], int]

_TIME_MASK = 0xFFFFFFFF


def monotonic_ms() -> int:
    """Milliseconds from a monotonic clock."""
    return time.monotonic_ns() // 1_000_000


def elapsed_ms(now: int, since: int) -> int:
    """Milliseconds between two readings of a 32-bit wrapping clock."""
    return (now - since) & _TIME_MASK


class ActivityCycleState(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class ActivityCycle:
    """Toggles between active and inactive after configured durations."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock or monotonic_ms
        self._state = ActivityCycleState.ACTIVE
        self._active_time_ms = 0
        self._inactive_time_ms = 0
        self._last_time_ms = 0
        self._enabled = False
        self._state_changed = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def state(self) -> ActivityCycleState:
        return self._state

    def has_state_changed(self) -> bool:
        """Report whether the last update toggled the state, and clear that mark."""
        result = self._state_changed
        self._state_changed = False
        return result

    def set_times(self, active_time_ms: int, inactive_time_ms: int) -> None:
        self._active_time_ms = active_time_ms
        self._inactive_time_ms = inactive_time_ms

    def enable(self) -> None:
        """Start in the active state, timing from now."""
        self._enabled = True
        self._state_changed = False
        self._state = ActivityCycleState.ACTIVE
        self._last_time_ms = self._clock()

    def disable(self) -> None:
        self._enabled = False
        self._state = ActivityCycleState.ACTIVE

    def update(self) -> None:
        """Toggle the state once its duration has elapsed."""
        self._state_changed = False
        if not self._enabled:
            return

        now = self._clock()
        target = (
            self._active_time_ms
            if self._state is ActivityCycleState.ACTIVE
            else self._inactive_time_ms
        )
        if elapsed_ms(now, self._last_time_ms) < target:
            return

        self._state = (
            ActivityCycleState.INACTIVE
            if self._state is ActivityCycleState.ACTIVE
            else ActivityCycleState.ACTIVE
        )
        self._state_changed = True
        self._last_time_ms = now