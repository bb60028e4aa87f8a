# trafficlight

A small traffic light controller. It drives red, yellow and green lights
through a board interface. It has four modules.

- `trafficlight.cycle` has `Phase` and `Cycle`.
  - A `Phase` is a `(red, yellow, green)` pattern together with a
    `duration_ms`.
  - A `Cycle` steps through its phases as their durations elapse.
  - It can stop itself after `repetitions_limit` passes. A limit of `0` means
    it never stops.
- `trafficlight.activity_cycle` has `ActivityCycle` and `ActivityCycleState`.
  - The activity cycle alternates between `ACTIVE` and `INACTIVE`.
  - Each state lasts for its own configured time.
- `trafficlight.events` has `EventName` and `EventManager`.
  - The manager holds at most one callback per event.
  - Connecting a new callback replaces the old one.
- `trafficlight.traffic_light` ties the parts together and has these names:
  - `TrafficLight`
  - the `Board` protocol: `pin_mode`, `digital_write` and `analog_read`
  - `SimulatedBoard`, which keeps modes, outputs and analog values in
    dictionaries
  - `PinMode`

## How a traffic light behaves

Call `TrafficLight.update()` regularly. Each call does the following, in this
order:

1. It advances the activity cycle.
   - When the activity cycle becomes active, the phase cycle is enabled.
   - When it becomes inactive, the phase cycle is disabled.
   - Either way, `ACTIVITY_CYCLE_TO_ACTIVE` or `ACTIVITY_CYCLE_TO_INACTIVE` is
     emitted, followed by `ACTIVITY_CYCLE_STATE_CHANGED`.
2. It advances the phase cycle. Depending on what happened, it emits
   `CYCLE_PHASE_CHANGED`, `CYCLE_FINISHED` and
   `CYCLE_REACHED_REPETITIONS_LIMIT`.
3. It writes the current pattern to the three light pins.
4. If any test pin is set, it checks the lights for defects, at most once
   every 100 ms. Only lights that should be on are checked.
   - A light whose test pin reads above 1000 is marked defective, and a
     `*_LIGHT_DEFECT` event is emitted.
   - If `auto_recovery` is true, a defective light that reads normally again
     is marked intact, and a `*_LIGHT_RECOVERED` event is emitted.

`auto_lights_off` is true by default. While it is true, all lights are switched
off when the phase cycle is disabled or reaches its repetition limit.

A test pin of `-1` or `None` means the light has no test pin. Test pin indices
outside 0–2 are ignored.

All timing comes from a clock callable that returns milliseconds. Elapsed time
wraps at 32 bits. If no clock is given, a monotonic clock is used. If no board
is given, a `SimulatedBoard` is used.

## Installation

```
pip install .
```

## Example

```python
from trafficlight.cycle import Phase
from trafficlight.events import EventName
from trafficlight.traffic_light import SimulatedBoard, TrafficLight

now = 0
def clock():
    return now

board = SimulatedBoard()
light = TrafficLight(2, 3, 4, board, clock)

light.set_cycle_phases([
    Phase((True, False, False), 5000),   # red
    Phase((True, True, False), 1000),    # red + yellow
    Phase((False, False, True), 5000),   # green
    Phase((False, True, False), 1000),   # yellow
])
light.set_cycle_repetitions_limit(3)
light.register_event(EventName.CYCLE_FINISHED, lambda: print("cycle done"))
light.enable_cycle()

for now in range(0, 40000, 50):
    light.update()

print(light.pattern, board.outputs)
```

## What it does not do

The package is a library only. It has no command-line program. It has no
driver for real hardware. To drive physical pins, provide your own object that
implements `Board`.

## Running the tests

```
pip install .[test]
pytest
```