"""A three-light traffic light driven by a timed cycle and an on/off activity cycle."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable, Optional, Protocol

from trafficlight.activity_cycle import (
    ActivityCycle,
    ActivityCycleState,
    Clock,
    elapsed_ms,
    monotonic_ms,
)
from trafficlight.cycle import Cycle, Phase
from trafficlight.events import EventManager, EventName

NUM_LIGHTS = 3
INVALID_PIN = -1
DEFECT_THRESHOLD = 1000
TEST_INTERVAL_MS = 100

_DEFECT_EVENTS = (
    EventName.RED_LIGHT_DEFECT,
    EventName.YELLOW_LIGHT_DEFECT,
    EventName.GREEN_LIGHT_DEFECT,
)
_RECOVERED_EVENTS = (
    EventName.RED_LIGHT_RECOVERED,
    EventName.YELLOW_LIGHT_RECOVERED,
    EventName.GREEN_LIGHT_RECOVERED,
)


class PinMode(Enum):
    INPUT = "input"
    OUTPUT = "output"


class Board(Protocol):
    """The pin operations a traffic light needs from its hardware."""

    def pin_mode(self, pin: int, mode: PinMode) -> None: ...

    def digital_write(self, pin: int, value: bool) -> None: ...

    def analog_read(self, pin: int) -> int: ...


class SimulatedBoard:
    """An in-memory board: records modes and outputs, serves set analog values."""

    def __init__(self) -> None:
        self.modes: dict[int, PinMode] = {}
        self.outputs: dict[int, bool] = {}
        self.analog_values: dict[int, int] = {}

    def pin_mode(self, pin: int, mode: PinMode) -> None:
        self.modes[pin] = PinMode(mode)

    def digital_write(self, pin: int, value: bool) -> None:
        self.outputs[pin] = bool(value)

    def analog_read(self, pin: int) -> int:
        return self.analog_values.get(pin, 0)


def _normalise_pin(pin: Optional[int]) -> Optional[int]:
    return None if pin is None or pin == INVALID_PIN else pin


class TrafficLight:
    """Red, yellow and green lights with cycles, events and defect detection."""

    def __init__(
        self,
        red_pin: int,
        yellow_pin: int,
        green_pin: int,
        board: Optional[Board] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._board: Board = board if board is not None else SimulatedBoard()
        self._clock: Clock = clock or monotonic_ms
        self._light_pins = (red_pin, yellow_pin, green_pin)
        self._test_pins: list[Optional[int]] = [None] * NUM_LIGHTS
        self._intact_lights = [True] * NUM_LIGHTS
        self._pattern = [False] * NUM_LIGHTS
        self._cycle = Cycle(self._clock)
        self._activity_cycle = ActivityCycle(self._clock)
        self._events = EventManager()
        self._last_test_time_ms = 0
        self.auto_lights_off = True
        self.auto_recovery = False

        for pin in self._light_pins:
            self._board.pin_mode(pin, PinMode.OUTPUT)
            self._board.digital_write(pin, False)

    @property
    def cycle_enabled(self) -> bool:
        return self._cycle.enabled

    @property
    def activity_cycle_enabled(self) -> bool:
        return self._activity_cycle.enabled

    @property
    def pattern(self) -> tuple[bool, bool, bool]:
        """The current (red, yellow, green) pattern."""
        red, yellow, green = self._pattern
        return red, yellow, green

    def set_test_pin(self, index: int, pin: Optional[int]) -> None:
        """Set the analog test pin for light ``index``; -1 or None disables it.

        An index outside 0..2 is ignored.
        """
        if not 0 <= index < NUM_LIGHTS:
            return
        pin = _normalise_pin(pin)
        self._test_pins[index] = pin
        if pin is not None:
            self._board.pin_mode(pin, PinMode.INPUT)

    def set_test_pins(
        self, red_pin: Optional[int], yellow_pin: Optional[int], green_pin: Optional[int]
    ) -> None:
        for index, pin in enumerate((red_pin, yellow_pin, green_pin)):
            self.set_test_pin(index, pin)

    def set_pattern(self, red_light: bool, yellow_light: bool, green_light: bool) -> None:
        self._pattern = [bool(red_light), bool(yellow_light), bool(green_light)]

    def set_cycle_repetitions_limit(self, repetitions_limit: int = 0) -> None:
        """Stop the cycle after this many repetitions; 0 means never."""
        self._cycle.repetitions_limit = repetitions_limit

    def set_cycle_phases(self, phases: Iterable[Phase]) -> None:
        self._cycle.set_phases(phases)

    def set_activity_cycle_times(self, active_time_ms: int, inactive_time_ms: int) -> None:
        self._activity_cycle.set_times(active_time_ms, inactive_time_ms)

    def enable_cycle(self) -> None:
        self._cycle.enable()
        phase = self._cycle.phase
        if phase is not None:
            self.set_pattern(*phase.pattern)

    def disable_cycle(self) -> None:
        self._cycle.disable()
        if self.auto_lights_off:
            self.set_pattern(False, False, False)

    def enable_activity_cycle(self) -> None:
        self._activity_cycle.enable()

    def disable_activity_cycle(self) -> None:
        self._activity_cycle.disable()

    def register_event(self, name: EventName, callback: Callable[[], None]) -> None:
        self._events.connect(name, callback)

    def unregister_event(self, name: EventName) -> None:
        self._events.disconnect(name)

    def update(self) -> None:
        """Advance both cycles, drive the lights and check for defects."""
        self._activity_cycle.update()
        if self._activity_cycle.has_state_changed():
            self._on_activity_cycle_state_changed()

        self._cycle.update()
        if self._cycle.has_phase_changed():
            self._on_cycle_phase_changed()
        if self._cycle.has_finished():
            self._events.emit(EventName.CYCLE_FINISHED)
        if self._cycle.has_reached_repetitions_limit():
            self._on_cycle_reached_repetitions_limit()

        for pin, on in zip(self._light_pins, self._pattern):
            self._board.digital_write(pin, on)

        if any(pin is not None for pin in self._test_pins):
            self._test_for_defective_lights()

    def _on_activity_cycle_state_changed(self) -> None:
        if self._activity_cycle.state is ActivityCycleState.ACTIVE:
            self.enable_cycle()
            self._events.emit(EventName.ACTIVITY_CYCLE_TO_ACTIVE)
        else:
            self.disable_cycle()
            self._events.emit(EventName.ACTIVITY_CYCLE_TO_INACTIVE)
        self._events.emit(EventName.ACTIVITY_CYCLE_STATE_CHANGED)

    def _on_cycle_phase_changed(self) -> None:
        phase = self._cycle.phase
        if phase is None:
            return
        self.set_pattern(*phase.pattern)
        self._events.emit(EventName.CYCLE_PHASE_CHANGED)

    def _on_cycle_reached_repetitions_limit(self) -> None:
        if self.auto_lights_off:
            self.set_pattern(False, False, False)
        self._events.emit(EventName.CYCLE_REACHED_REPETITIONS_LIMIT)

    def _test_for_defective_lights(self) -> None:
        now = self._clock()
        if elapsed_ms(now, self._last_test_time_ms) < TEST_INTERVAL_MS:
            return
        self._last_test_time_ms = now

        for index, (pin, on) in enumerate(zip(self._test_pins, self._pattern)):
            if pin is None or not on:
                continue
            is_defect = self._board.analog_read(pin) > DEFECT_THRESHOLD
            if is_defect and self._intact_lights[index]:
                self._intact_lights[index] = False
                self._events.emit(_DEFECT_EVENTS[index])
            elif not is_defect and not self._intact_lights[index] and self.auto_recovery:
                self._intact_lights[index] = True
                self._events.emit(_RECOVERED_EVENTS[index])