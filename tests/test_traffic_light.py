import pytest

from trafficlight.cycle import Phase
from trafficlight.events import EventName
from trafficlight.traffic_light import PinMode, SimulatedBoard, TrafficLight

RED, YELLOW, GREEN = 2, 3, 4
RED_TEST, YELLOW_TEST, GREEN_TEST = 10, 11, 12


class FakeClock:
    def __init__(self) -> None:
        self.now = 0

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def board():
    return SimulatedBoard()


@pytest.fixture
def light(board, clock):
    return TrafficLight(RED, YELLOW, GREEN, board, clock)


def recorder(light):
    seen = []
    for name in EventName:
        light.register_event(name, lambda name=name: seen.append(name))
    return seen


PHASES = [
    Phase((True, False, False), 1000),
    Phase((False, False, True), 500),
]


def test_constructor_configures_outputs_low(board, light):
    for pin in (RED, YELLOW, GREEN):
        assert board.modes[pin] is PinMode.OUTPUT
        assert board.outputs[pin] is False
    assert light.pattern == (False, False, False)
    assert not light.cycle_enabled
    assert not light.activity_cycle_enabled


def test_update_writes_pattern_to_pins(board, light):
    light.set_pattern(True, False, True)
    light.update()
    assert board.outputs == {RED: True, YELLOW: False, GREEN: True}


def test_enable_cycle_applies_first_phase(light):
    light.set_cycle_phases(PHASES)
    light.enable_cycle()
    assert light.cycle_enabled
    assert light.pattern == PHASES[0].pattern


def test_cycle_advances_and_emits(light, clock, board):
    seen = recorder(light)
    light.set_cycle_phases(PHASES)
    light.enable_cycle()
    clock.now = 999
    light.update()
    assert light.pattern == PHASES[0].pattern
    assert seen == []
    clock.now = 1000
    light.update()
    assert light.pattern == PHASES[1].pattern
    assert board.outputs[GREEN] is True
    assert seen == [EventName.CYCLE_PHASE_CHANGED]
    clock.now = 1500
    light.update()
    assert light.pattern == PHASES[0].pattern
    assert seen[1:] == [EventName.CYCLE_PHASE_CHANGED, EventName.CYCLE_FINISHED]


def test_repetitions_limit_turns_lights_off(light, clock):
    seen = recorder(light)
    light.set_cycle_phases(PHASES)
    light.set_cycle_repetitions_limit(1)
    light.enable_cycle()
    clock.now = 1000
    light.update()
    clock.now = 1500
    light.update()
    assert not light.cycle_enabled
    assert light.pattern == (False, False, False)
    assert seen[-1] is EventName.CYCLE_REACHED_REPETITIONS_LIMIT
    assert EventName.CYCLE_FINISHED in seen


def test_repetitions_limit_keeps_lights_without_auto_off(light, clock):
    light.auto_lights_off = False
    light.set_cycle_phases(PHASES)
    light.set_cycle_repetitions_limit(1)
    light.enable_cycle()
    clock.now = 1000
    light.update()
    clock.now = 1500
    light.update()
    assert not light.cycle_enabled
    assert light.pattern == PHASES[1].pattern


def test_disable_cycle_turns_lights_off(light):
    light.set_cycle_phases(PHASES)
    light.enable_cycle()
    light.disable_cycle()
    assert not light.cycle_enabled
    assert light.pattern == (False, False, False)


def test_activity_cycle_toggles_cycle(light, clock):
    seen = recorder(light)
    light.set_cycle_phases(PHASES)
    light.set_activity_cycle_times(2000, 500)
    light.enable_cycle()
    light.enable_activity_cycle()
    assert light.activity_cycle_enabled

    clock.now = 2000
    light.update()
    assert not light.cycle_enabled
    assert light.pattern == (False, False, False)
    assert EventName.ACTIVITY_CYCLE_TO_INACTIVE in seen
    assert EventName.ACTIVITY_CYCLE_STATE_CHANGED in seen

    seen.clear()
    clock.now = 2500
    light.update()
    assert light.cycle_enabled
    assert light.pattern == PHASES[0].pattern
    assert seen == [
        EventName.ACTIVITY_CYCLE_TO_ACTIVE,
        EventName.ACTIVITY_CYCLE_STATE_CHANGED,
    ]


def test_disable_activity_cycle(light):
    light.enable_activity_cycle()
    light.disable_activity_cycle()
    assert not light.activity_cycle_enabled


def test_set_test_pins_configures_inputs(board, light):
    light.set_test_pins(RED_TEST, -1, GREEN_TEST)
    assert board.modes[RED_TEST] is PinMode.INPUT
    assert board.modes[GREEN_TEST] is PinMode.INPUT
    assert -1 not in board.modes


def test_set_test_pin_ignores_bad_index(board, light):
    before = dict(board.modes)
    light.set_test_pin(3, RED_TEST)
    light.set_test_pin(-1, RED_TEST)
    assert board.modes == before


def test_defect_detected_once(light, clock, board):
    seen = recorder(light)
    light.set_test_pin(0, RED_TEST)
    light.set_pattern(True, False, False)
    board.analog_values[RED_TEST] = 1001
    clock.now = 200
    light.update()
    assert seen == [EventName.RED_LIGHT_DEFECT]
    clock.now = 400
    light.update()
    assert seen == [EventName.RED_LIGHT_DEFECT]


def test_threshold_reading_is_not_defect(light, clock, board):
    seen = recorder(light)
    light.set_test_pin(1, YELLOW_TEST)
    light.set_pattern(False, True, False)
    board.analog_values[YELLOW_TEST] = 1000
    clock.now = 200
    light.update()
    assert seen == []


def test_lights_off_are_not_tested(light, clock, board):
    seen = recorder(light)
    light.set_test_pin(2, GREEN_TEST)
    board.analog_values[GREEN_TEST] = 1023
    clock.now = 200
    light.update()
    assert seen == []


def test_defect_test_is_throttled(light, clock, board):
    seen = recorder(light)
    light.set_test_pin(0, RED_TEST)
    light.set_pattern(True, False, False)
    board.analog_values[RED_TEST] = 1023
    clock.now = 50
    light.update()
    assert seen == []
    clock.now = 100
    light.update()
    assert seen == [EventName.RED_LIGHT_DEFECT]


def test_recovery_requires_auto_recovery(light, clock, board):
    seen = recorder(light)
    light.set_test_pin(0, RED_TEST)
    light.set_pattern(True, False, False)
    board.analog_values[RED_TEST] = 1023
    clock.now = 200
    light.update()
    board.analog_values[RED_TEST] = 0
    clock.now = 400
    light.update()
    assert seen == [EventName.RED_LIGHT_DEFECT]
    light.auto_recovery = True
    clock.now = 600
    light.update()
    assert seen == [EventName.RED_LIGHT_DEFECT, EventName.RED_LIGHT_RECOVERED]


def test_unregister_event(light, clock):
    seen = []
    light.register_event(EventName.CYCLE_PHASE_CHANGED, lambda: seen.append(1))
    light.unregister_event(EventName.CYCLE_PHASE_CHANGED)
    light.set_cycle_phases(PHASES)
    light.enable_cycle()
    clock.now = 1000
    light.update()
    assert seen == []
    assert light.pattern == PHASES[1].pattern