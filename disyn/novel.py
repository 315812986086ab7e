"""Experimental oscillator algorithms extending the primitives."""

from __future__ import annotations

import math

from disyn.utils import (
    EPSILON,
    TWO_PI,
    AlgorithmOutput,
    asymmetric_fm,
    expo_map,
    step_phase,
    taylor_sine,
)


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(max(value, low), high)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class Novel1MultistageAlgorithm:
    """Tanh saturation, exponential shaping, then ring modulation."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self._phase = 0.0
        self._mod_phase = 0.0

    def reset(self) -> None:
        self._phase = 0.0
        self._mod_phase = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        tanh_drive = expo_map(param1, 0.1, 10.0)
        exp_depth = expo_map(param2, 0.1, 1.5)
        ring_ratio = 0.5 + param3 * 4.5

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        source = math.sin(TWO_PI * self._phase)

        stage1 = math.tanh(tanh_drive * source)
        stage2 = stage1 * math.exp(exp_depth * stage1)

        self._mod_phase = step_phase(self._mod_phase, pitch * ring_ratio, self.sample_rate)
        carrier = math.sin(TWO_PI * self._mod_phase)
        stage3 = stage2 * (1.0 + carrier)
        return AlgorithmOutput(stage3 * 0.25, stage2 * 0.25)


class Novel2FreqAsymmetryAlgorithm:
    """Asymmetric FM whose ratio follows the played frequency."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self._phase = 0.0
        self._mod_phase = 0.0

    def reset(self) -> None:
        self._phase = 0.0
        self._mod_phase = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        low_r = 0.5 + param1 * 0.5
        high_r = 1.0 + param2 * 1.0
        index = 0.2 + _clamp(param3) * 0.8

        if pitch < 500.0:
            r = low_r
        elif pitch > 2000.0:
            r = high_r
        else:
            alpha = (pitch - 500.0) / 1500.0
            r = low_r * (1.0 - alpha) + high_r * alpha

        output, self._phase, self._mod_phase = asymmetric_fm(
            index, r / 2.0, pitch, self.sample_rate, self._phase, self._mod_phase
        )
        mod = math.sin(TWO_PI * self._mod_phase)
        secondary = math.cos(TWO_PI * self._phase + index * mod) * 0.5
        return AlgorithmOutput(output, secondary)


class Novel3CrossModAlgorithm:
    """DSF and ModFM sources modulating each other's parameters."""

    _BASE_DSF_DECAY = 0.7
    _BASE_DSF_RATIO = 1.5
    _BASE_MODFM_INDEX = 0.25

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self._phase = 0.0
        self._mod_phase = 0.0
        self._secondary_phase = 0.0

    def reset(self) -> None:
        self._phase = 0.0
        self._mod_phase = 0.0
        self._secondary_phase = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        mix = _clamp(param3)
        decay = self._BASE_DSF_DECAY
        dsf_ratio = self._BASE_DSF_RATIO + param2 * self._BASE_MODFM_INDEX * 0.5
        modfm_index = self._BASE_MODFM_INDEX + param1 * decay

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        theta = TWO_PI * dsf_ratio
        denom = 1.0 - 2.0 * decay * math.cos(theta) + decay * decay
        angle = TWO_PI * self._phase
        dsf = (math.sin(angle) - decay * math.sin(angle - theta)) / (denom + EPSILON)

        self._mod_phase = step_phase(self._mod_phase, pitch, self.sample_rate)
        self._secondary_phase = step_phase(self._secondary_phase, pitch, self.sample_rate)
        mod = math.cos(TWO_PI * self._secondary_phase)
        modfm = math.cos(TWO_PI * self._mod_phase) * math.exp(modfm_index * (mod - 1.0))

        output = (dsf * (1.0 - mix) + modfm * mix) * 0.7
        secondary = (dsf - modfm) * 0.7
        return AlgorithmOutput(output, secondary)


class Novel4TaylorAlgorithm:
    """Sines built from truncated Taylor series for controlled distortion."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self._phase = 0.0

    def reset(self) -> None:
        self._phase = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        first_terms = max(1, _round_half_away(1.0 + param1 * 9.0))
        second_terms = max(1, _round_half_away(1.0 + param2 * 9.0))
        blend = _clamp(param3)

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        theta = self._phase * TWO_PI

        fundamental = taylor_sine(theta, first_terms)
        second_harmonic = taylor_sine(2.0 * theta, second_terms)

        output = fundamental * (1.0 - blend) + second_harmonic * blend
        return AlgorithmOutput(_clamp(output, -1.0, 1.0), _clamp(second_harmonic, -1.0, 1.0))