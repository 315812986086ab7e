import math

import pytest

from disyn.novel import (
    Novel1MultistageAlgorithm,
    Novel2FreqAsymmetryAlgorithm,
    Novel3CrossModAlgorithm,
    Novel4TaylorAlgorithm,
)

SAMPLE_RATE = 44100.0


def run(algorithm, count, pitch=220.0, params=(0.4, 0.6, 0.3)):
    return [algorithm.process(pitch, *params) for _ in range(count)]


def test_reset_restarts_sequence():
    algorithms = [
        Novel1MultistageAlgorithm(SAMPLE_RATE),
        Novel2FreqAsymmetryAlgorithm(SAMPLE_RATE),
        Novel3CrossModAlgorithm(SAMPLE_RATE),
        Novel4TaylorAlgorithm(SAMPLE_RATE),
    ]
    for algorithm in algorithms:
        first = [algorithm.process(220.0, 0.4, 0.6, 0.3) for _ in range(64)]
        algorithm.reset()
        second = [algorithm.process(220.0, 0.4, 0.6, 0.3) for _ in range(64)]
        assert second == first, type(algorithm).__name__


@pytest.mark.parametrize("pitch", [110.0, 1000.0, 3000.0])
def test_outputs_are_finite(pitch):
    algorithms = [
        Novel1MultistageAlgorithm(SAMPLE_RATE),
        Novel2FreqAsymmetryAlgorithm(SAMPLE_RATE),
        Novel3CrossModAlgorithm(SAMPLE_RATE),
        Novel4TaylorAlgorithm(SAMPLE_RATE),
    ]
    for algorithm in algorithms:
        samples = run(algorithm, 300, pitch=pitch, params=(1.0, 1.0, 1.0))
        values = [value for sample in samples for value in (sample.primary, sample.secondary)]
        assert len(values) == 600
        peak = max(abs(value) for value in values)
        assert math.isfinite(peak), type(algorithm).__name__
        assert peak < 1e6, type(algorithm).__name__


def test_multistage_silent_at_zero_pitch():
    algorithm = Novel1MultistageAlgorithm(SAMPLE_RATE)
    for out in run(algorithm, 10, pitch=0.0):
        assert out == (0.0, 0.0)


def test_multistage_ring_mod_at_most_doubles():
    algorithm = Novel1MultistageAlgorithm(SAMPLE_RATE)
    for out in run(algorithm, 400, params=(0.7, 0.5, 0.9)):
        assert abs(out.primary) <= 2.0 * abs(out.secondary) + 1e-12


def test_freq_asymmetry_secondary_bounded():
    algorithm = Novel2FreqAsymmetryAlgorithm(SAMPLE_RATE)
    for out in run(algorithm, 400, pitch=800.0):
        assert abs(out.secondary) <= 0.5 + 1e-12


def test_freq_asymmetry_low_pitch_ignores_high_ratio():
    low_a = Novel2FreqAsymmetryAlgorithm(SAMPLE_RATE)
    low_b = Novel2FreqAsymmetryAlgorithm(SAMPLE_RATE)
    assert run(low_a, 50, 200.0, (0.3, 0.0, 0.5)) == run(low_b, 50, 200.0, (0.3, 1.0, 0.5))


def test_freq_asymmetry_high_pitch_ignores_low_ratio():
    high_a = Novel2FreqAsymmetryAlgorithm(SAMPLE_RATE)
    high_b = Novel2FreqAsymmetryAlgorithm(SAMPLE_RATE)
    assert run(high_a, 50, 2500.0, (0.0, 0.4, 0.5)) == run(high_b, 50, 2500.0, (1.0, 0.4, 0.5))


def test_cross_mod_mix_extremes_differ_by_secondary():
    dry = Novel3CrossModAlgorithm(SAMPLE_RATE)
    wet = Novel3CrossModAlgorithm(SAMPLE_RATE)
    for a, b in zip(run(dry, 100, params=(0.3, 0.6, 0.0)), run(wet, 100, params=(0.3, 0.6, 1.0))):
        assert a.primary - b.primary == pytest.approx(a.secondary)


def test_taylor_output_clamped():
    algorithm = Novel4TaylorAlgorithm(SAMPLE_RATE)
    for out in run(algorithm, 400, params=(0.0, 0.2, 0.5)):
        assert -1.0 <= out.primary <= 1.0
        assert -1.0 <= out.secondary <= 1.0


def test_taylor_full_blend_is_second_harmonic():
    algorithm = Novel4TaylorAlgorithm(SAMPLE_RATE)
    for out in run(algorithm, 100, params=(0.2, 0.8, 1.0)):
        assert out.primary == pytest.approx(out.secondary)


def test_taylor_many_terms_matches_sine():
    algorithm = Novel4TaylorAlgorithm(SAMPLE_RATE)
    out = algorithm.process(441.0, 1.0, 1.0, 0.0)
    assert out.primary == pytest.approx(math.sin(2.0 * math.pi * 441.0 / SAMPLE_RATE), abs=1e-6)