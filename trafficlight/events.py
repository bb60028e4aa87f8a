"""Named events and a manager that dispatches one callback per event."""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable, Optional

Callback = Callable[[], None]


class EventName(Enum):
    """Every event a traffic light can emit."""

    RED_LIGHT_DEFECT = auto()
    YELLOW_LIGHT_DEFECT = auto()
    GREEN_LIGHT_DEFECT = auto()
    RED_LIGHT_RECOVERED = auto()
    YELLOW_LIGHT_RECOVERED = auto()
    GREEN_LIGHT_RECOVERED = auto()
    CYCLE_PHASE_CHANGED = auto()
    CYCLE_FINISHED = auto()
    CYCLE_REACHED_REPETITIONS_LIMIT = auto()
    ACTIVITY_CYCLE_STATE_CHANGED = auto()
    ACTIVITY_CYCLE_TO_ACTIVE = auto()
    ACTIVITY_CYCLE_TO_INACTIVE = auto()


class EventManager:
    """Holds at most one callback per event and calls it on emit."""

    def __init__(self) -> None:
        self._callbacks: dict[EventName, Optional[Callback]] = {
            name: None for name in EventName
        }

    def connect(self, name: EventName, callback: Callback) -> None:
        """Attach ``callback`` to ``name``, replacing any earlier one."""
        self._callbacks[EventName(name)] = callback

    def disconnect(self, name: EventName) -> None:
        """Remove the callback attached to ``name``, if any."""
        self._callbacks[EventName(name)] = None

    def emit(self, name: EventName) -> None:
        """Call the callback attached to ``name``; do nothing if there is none."""
        callback = self._callbacks[EventName(name)]
        if callback is not None:
            callback()