import pytest

from disyn.engine import DisynEngine
from disyn.utils import AlgorithmType

SR = 44100.0


def _render(engine, count):
    return [engine.process() for _ in range(count)]


def test_silent_before_note_on():
    engine = DisynEngine(SR)
    assert engine.process() == (0.0, 0.0)
    assert engine.is_playing is False


def test_defaults():
    engine = DisynEngine()
    assert engine.algorithm == AlgorithmType.TANH_SQUARE
    assert engine.param1 == pytest.approx(0.55)
    assert engine.master_gain == pytest.approx(0.8)


def test_note_on_produces_sound():
    engine = DisynEngine(SR)
    engine.note_on(440.0)
    samples = _render(engine, 2000)
    assert engine.is_playing
    assert max(abs(s.primary) for s in samples) > 0.0


def test_out_of_range_algorithm_is_ignored():
    engine = DisynEngine(SR)
    engine.algorithm = 7
    engine.algorithm = 19
    engine.algorithm = -1
    assert engine.algorithm == AlgorithmType.COMBINATION_1_HYBRID_FORMANT


@pytest.mark.parametrize("name", ["param1", "param2", "param3", "master_gain"])
def test_parameters_are_clamped(name):
    engine = DisynEngine(SR)
    setattr(engine, name, 3.0)
    assert getattr(engine, name) == 1.0
    setattr(engine, name, -2.0)
    assert getattr(engine, name) == 0.0


def test_velocity_is_clamped():
    a = DisynEngine(SR)
    b = DisynEngine(SR)
    a.note_on(440.0, 5.0)
    b.note_on(440.0, 1.0)
    assert a.velocity == 1.0
    assert _render(a, 200) == _render(b, 200)


def test_zero_master_gain_is_silent_while_playing():
    engine = DisynEngine(SR)
    engine.master_gain = 0.0
    engine.note_on(440.0)
    assert all(s == (0.0, 0.0) for s in _render(engine, 100))


def test_voice_stops_after_release():
    engine = DisynEngine(SR)
    engine.attack = 0.0
    engine.release = 0.0
    engine.reverb_level = 0.0
    engine.attack = 0.1
    engine.note_on(220.0)
    _render(engine, 500)
    engine.note_off()
    for _ in range(20000):
        engine.process()
        if not engine.is_playing:
            break
    assert engine.is_playing is False
    assert engine.process() == (0.0, 0.0)


def test_zero_attack_and_release_holds_note():
    engine = DisynEngine(SR)
    engine.attack = 0.0
    engine.release = 0.0
    engine.note_on(220.0)
    engine.note_off()
    samples = _render(engine, 5000)
    assert engine.is_playing
    assert max(abs(s.primary) for s in samples[-500:]) > 0.01


def test_note_on_resets_state():
    engine = DisynEngine(SR)
    engine.note_on(330.0, 0.7)
    first = _render(engine, 300)
    engine.note_on(330.0, 0.7)
    second = _render(engine, 300)
    assert first == second


def test_reverb_controls_apply_to_both_channels():
    engine = DisynEngine(SR)
    engine.reverb_size = 1.5
    engine.reverb_level = 0.25
    assert engine.reverb_size == 1.0
    assert engine.reverb_level == 0.25