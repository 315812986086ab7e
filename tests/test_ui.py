import pytest

from disyn.catalog import ALGORITHM_COUNT, TEST_ALGORITHM_INDEX, get_algorithm_info
from disyn.controls import StatusMessage
from disyn.ui import MENU_LABELS, STATUS_INDEX, UiController

QUIET = [4095, 4095, 4095, 0, 0, 0]


def _tick(ctrl, now, *, raw=QUIET, position=0, pressed=False, down=False):
    return ctrl.update(raw, position, pressed, down, now)


def _go_to_status(ctrl):
    frame = None
    for step in range(STATUS_INDEX):
        frame = _tick(ctrl, 10 + step, pressed=True)
    return frame


def test_initial_screen_shows_algorithm_name():
    ctrl = UiController()
    frame = _tick(ctrl, 0)
    info = get_algorithm_info(0)
    assert frame.lines[0] == f">Alg {info.name}"
    assert len(frame.lines) == 4
    assert frame.lines[1].startswith(" Atk ")


def test_algorithm_selection_wraps():
    ctrl = UiController()
    ctrl.adjust(-1)
    assert ctrl.params.algorithm == ALGORITHM_COUNT - 1
    ctrl.adjust(1)
    assert ctrl.params.algorithm == 0


def test_cursor_scrolling_keeps_current_visible():
    ctrl = UiController()
    for step in range(len(MENU_LABELS)):
        _tick(ctrl, step, pressed=True)
        assert ctrl.top_index <= ctrl.current_index < ctrl.top_index + 4
    assert ctrl.current_index == 0
    assert ctrl.top_index == 0


def test_encoder_turn_adjusts_attack_once_per_tick():
    ctrl = UiController()
    _tick(ctrl, 0, pressed=True)
    before = ctrl.params.attack
    frame = _tick(ctrl, 1, position=5)
    assert frame.params.attack == pytest.approx(before + 0.01)
    frame = _tick(ctrl, 2, position=3)
    assert frame.params.attack == pytest.approx(before)


def test_adjust_stays_in_range():
    ctrl = UiController()
    ctrl.current_index = 7
    for _ in range(200):
        ctrl.adjust(1)
    assert ctrl.params.master_gain == 1.0
    for _ in range(200):
        ctrl.adjust(-1)
    assert ctrl.params.master_gain == 0.0


def test_unused_parameter_is_locked_and_shown_as_dash():
    ctrl = UiController()
    ctrl.params.algorithm = 7
    assert get_algorithm_info(7).param2.unused
    before = ctrl.params.param2
    ctrl.current_index = 6
    ctrl.adjust(1)
    assert ctrl.params.param2 == before
    assert ctrl.format_value(6) == "-"


def test_integer_parameter_formatting_uses_range_ends():
    ctrl = UiController()
    info = get_algorithm_info(0).param1
    ctrl.params.param1 = 0.0
    assert ctrl.format_value(5) == str(int(info.min_value))
    ctrl.params.param1 = 1.0
    assert ctrl.format_value(5) == str(int(info.max_value))
    assert ctrl.format_value(STATUS_INDEX) == "-"


def test_status_screen_shows_underruns_and_failure():
    ctrl = UiController()
    _go_to_status(ctrl)
    ctrl.receive_status(StatusMessage(underruns=3, audio_ok=True))
    assert _tick(ctrl, 100).lines[0] == "Und 3"
    ctrl.receive_status(StatusMessage(underruns=3, audio_ok=False))
    frame = _tick(ctrl, 101)
    assert frame.lines[0] == "AUD FAIL"
    assert len(frame.lines) == 4
    assert all(len(line) <= 21 for line in frame.lines)


def test_long_press_resets_calibration_range():
    ctrl = UiController()
    _go_to_status(ctrl)
    _tick(ctrl, 100, raw=[0] * 6)
    _tick(ctrl, 200, raw=[4000] * 6)
    assert ctrl.min_inputs != ctrl.max_inputs

    _tick(ctrl, 5000, raw=[4000] * 6, down=True)
    frame = _tick(ctrl, 6001, raw=[4000] * 6, down=True, pressed=True)
    assert "CAL RESET" in frame.messages
    assert frame.lines[0] == "CAL RESET"
    assert ctrl.min_inputs == ctrl.max_inputs == ctrl.raw_inputs
    assert ctrl.current_index == STATUS_INDEX

    assert _tick(ctrl, 6500, raw=[4000] * 6).lines[0] == "CAL RESET"
    assert _tick(ctrl, 7100, raw=[4000] * 6).lines[0] != "CAL RESET"


def test_test_algorithm_shows_calibration_page():
    ctrl = UiController()
    _go_to_status(ctrl)
    ctrl.params.algorithm = TEST_ALGORITHM_INDEX
    raw = [11, 22, 33, 44, 55, 66]
    frame = _tick(ctrl, 2500, raw=raw)
    assert frame.lines[0] == "CAL C2"
    assert frame.lines[1] == f"Cur {raw[2]}"


def test_inputs_are_smoothed_towards_target():
    ctrl = UiController()
    raw = [0, 4095, 4095, 4095, 0, 0]
    values = [(_tick(ctrl, n, raw=raw).params.cv0, ctrl.params.pot0) for n in range(30)]
    cv0 = [v[0] for v in values]
    pot0 = [v[1] for v in values]
    assert cv0 == sorted(cv0)
    assert pot0 == sorted(pot0)
    assert 0.0 < cv0[-1] < 1.0
    assert ctrl.params.cv1 == 0.0


def test_input_report_is_rate_limited():
    ctrl = UiController()
    raw = [4095, 4095, 4095, 4095, 0, 0]
    frame = _tick(ctrl, 500, raw=raw)
    assert len(frame.messages) == 1
    assert frame.messages[0].startswith("Inputs ")
    assert "P0=" in frame.messages[0]
    assert "CV0=" not in frame.messages[0]
    assert _tick(ctrl, 510, raw=raw).messages == ()


def test_wrong_number_of_inputs_is_rejected():
    ctrl = UiController()
    with pytest.raises(ValueError):
        ctrl.update([0, 0, 0], 0, False, False, 0)


def test_frame_params_are_a_copy():
    ctrl = UiController()
    frame = _tick(ctrl, 0)
    frame.params.attack = 0.0
    assert ctrl.params.attack != frame.params.attack