"""A timed sequence of light patterns, optionally repeated a fixed number of times."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from trafficlight.activity_cycle import Clock, elapsed_ms, monotonic_ms


@dataclass(frozen=True)
class Phase:
    """Which lights (red, yellow, green) are on, and for how long."""

    pattern: tuple[bool, bool, bool]
    duration_ms: int

    def __post_init__(self) -> None:
        pattern = tuple(bool(light) for light in self.pattern)
        if len(pattern) != 3:
            raise ValueError("a phase pattern has exactly three lights")
        object.__setattr__(self, "pattern", pattern)


class Cycle:
    """Steps through phases as their durations elapse."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock or monotonic_ms
        self._phases: tuple[Phase, ...] = ()
        self._phase_index = 0
        self.repetitions_limit = 0
        self._repetitions_count = 0
        self._last_time_ms = 0
        self._enabled = False
        self._phase_changed = False
        self._finished = False
        self._reached_limit = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def phase(self) -> Optional[Phase]:
        """The current phase, or None when disabled or without phases."""
        if not self._enabled or self._phase_index >= len(self._phases):
            return None
        return self._phases[self._phase_index]

    @property
    def phase_count(self) -> int:
        return len(self._phases)

    def has_phase_changed(self) -> bool:
        result = self._phase_changed
        self._phase_changed = False
        return result

    def has_finished(self) -> bool:
        result = self._finished
        self._finished = False
        return result

    def has_reached_repetitions_limit(self) -> bool:
        result = self._reached_limit
        self._reached_limit = False
        return result

    def set_phases(self, phases: Iterable[Phase]) -> None:
        """Replace the phases and restart from the first one."""
        new_phases = tuple(phases)
        if not new_phases:
            self._phases = ()
            return
        self._phases = new_phases
        self._phase_index = 0
        if self._enabled:
            self._last_time_ms = self._clock()

    def enable(self) -> None:
        """Start from the first phase with the repetition count reset."""
        self._enabled = True
        self._phase_changed = False
        self._finished = False
        self._reached_limit = False
        self._repetitions_count = 0
        self._phase_index = 0
        self._last_time_ms = self._clock()

    def disable(self) -> None:
        self._enabled = False
        self._phase_index = 0

    def update(self) -> None:
        """Advance to the next phase once the current one has elapsed."""
        self._phase_changed = False
        self._finished = False
        self._reached_limit = False

        if not self._enabled or not self._phases:
            return

        now = self._clock()
        if elapsed_ms(now, self._last_time_ms) < self._phases[self._phase_index].duration_ms:
            return

        self._phase_changed = True
        self._phase_index += 1
        self._last_time_ms = now

        if self._phase_index >= len(self._phases):
            self._finished = True
            self._phase_index = 0
            self._repetitions_count += 1
            if 0 < self.repetitions_limit <= self._repetitions_count:
                self._reached_limit = True
                self.disable()