"""The primitive oscillator algorithms."""

from __future__ import annotations

import math

from disyn.utils import (
    EPSILON,
    TWO_PI,
    AlgorithmOutput,
    compute_dsf_component,
    expo_map,
    step_phase,
)


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(max(value, low), high)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class DirichletPulseAlgorithm:
    """Band-limited pulse built from the Dirichlet kernel."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self._phase = 0.0

    def reset(self) -> None:
        self._phase = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        harmonics = max(1, _round_half_away(1.0 + param1 * 63.0))
        tilt = -3.0 + param2 * 18.0
        shape = _clamp(param3)

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        theta = self._phase * TWO_PI

        numerator = math.sin((2.0 * harmonics + 1.0) * theta * 0.5)
        denominator = math.sin(theta * 0.5)
        if abs(denominator) < EPSILON:
            value = 1.0
        else:
            value = numerator / denominator - 1.0

        tilt_factor = 10.0 ** (tilt / 20.0)
        base = (value / harmonics) * tilt_factor
        shaped = math.tanh(base * (1.0 + shape * 4.0))
        output = base * (1.0 - shape) + shaped * shape
        return AlgorithmOutput(output, base)


class DSFSingleAlgorithm:
    """One-sided discrete summation formula oscillator."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self._phase = 0.0
        self._secondary_phase = 0.0

    def reset(self) -> None:
        self._phase = 0.0
        self._secondary_phase = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        decay = min(param1 * 0.98, 0.98)
        ratio = expo_map(param2, 0.5, 4.0)
        mix = _clamp(param3)

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        self._secondary_phase = step_phase(self._secondary_phase, pitch * ratio, self.sample_rate)

        w = self._phase * TWO_PI
        t = self._secondary_phase * TWO_PI

        dsf = compute_dsf_component(w, t, decay) * 0.5
        sine = math.sin(w) * 0.5
        output = dsf * (1.0 - mix) + sine * mix
        return AlgorithmOutput(output, dsf)


class DSFDoubleAlgorithm:
    """Two-sided discrete summation formula oscillator."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self._phase = 0.0
        self._secondary_phase = 0.0
        self._secondary_phase_neg = 0.0

    def reset(self) -> None:
        self._phase = 0.0
        self._secondary_phase = 0.0
        self._secondary_phase_neg = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        decay = min(param1 * 0.96, 0.96)
        ratio = expo_map(param2, 0.5, 4.5)
        balance = _clamp(param3) * 2.0 - 1.0
        weight_pos = 0.5 + balance * 0.5
        weight_neg = 1.0 - weight_pos

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        self._secondary_phase = step_phase(self._secondary_phase, pitch * ratio, self.sample_rate)
        self._secondary_phase_neg = step_phase(
            self._secondary_phase_neg, pitch * ratio, self.sample_rate
        )

        w = self._phase * TWO_PI
        t_pos = self._secondary_phase * TWO_PI
        t_neg = -self._secondary_phase_neg * TWO_PI

        positive = compute_dsf_component(w, t_pos, decay)
        negative = compute_dsf_component(w, t_neg, decay)

        output = 0.5 * (positive * weight_pos + negative * weight_neg)
        secondary = 0.5 * (positive - negative)
        return AlgorithmOutput(output, secondary)


class TanhSquareAlgorithm:
    """Square-like wave from a tanh-saturated sine."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self._phase = 0.0

    def reset(self) -> None:
        self._phase = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        drive = expo_map(param1, 0.05, 5.0)
        trim = expo_map(param2, 0.2, 1.2)
        bias = (_clamp(param3) - 0.5) * 0.8

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        sine = math.sin(self._phase * TWO_PI)
        output = math.tanh((sine + bias) * drive) * trim
        secondary = math.tanh(sine * drive) * trim
        return AlgorithmOutput(output, secondary)


class TanhSawAlgorithm:
    """Saw-like wave derived from a tanh square and a cosine."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self._phase = 0.0
        self._secondary_phase = 0.0

    def reset(self) -> None:
        self._phase = 0.0
        self._secondary_phase = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        drive = expo_map(param1, 0.05, 4.5)
        blend = _clamp(param2)
        edge = 0.5 + _clamp(param3) * 1.5

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        square = math.tanh(math.sin(self._phase * TWO_PI) * drive)

        self._secondary_phase = step_phase(self._secondary_phase, pitch, self.sample_rate)
        cosine = math.cos(self._secondary_phase * TWO_PI)
        saw = square + cosine * (1.0 - square * square) * edge

        output = square * (1.0 - blend) + saw * blend
        return AlgorithmOutput(output, square)


class PAFAlgorithm:
    """Phase-aligned formant style oscillator."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self._phase = 0.0
        self._secondary_phase = 0.0
        self._mod_state = 0.0

    def reset(self) -> None:
        self._phase = 0.0
        self._secondary_phase = 0.0
        self._mod_state = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        ratio = expo_map(param1, 0.5, 6.0)
        bandwidth = expo_map(param2, 50.0, 3000.0)
        depth = 0.2 + _clamp(param3) * 0.8

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        self._secondary_phase = step_phase(self._secondary_phase, pitch * ratio, self.sample_rate)

        carrier = math.sin(self._secondary_phase * TWO_PI)
        mod = math.sin(self._phase * TWO_PI)
        decay = math.exp(-bandwidth / self.sample_rate)
        self._mod_state = decay * self._mod_state + (1.0 - decay) * mod

        output = carrier * ((1.0 - depth) + depth * self._mod_state) * 0.5
        secondary = carrier * (0.5 + 0.5 * self._mod_state) * 0.5
        return AlgorithmOutput(output, secondary)


class ModFMAlgorithm:
    """Modified FM oscillator with modulator self-feedback."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self._phase = 0.0
        self._mod_phase = 0.0

    def reset(self) -> None:
        self._phase = 0.0
        self._mod_phase = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        index = expo_map(param1, 0.01, 8.0)
        ratio = expo_map(param2, 0.25, 6.0)
        feedback = _clamp(param3) * 0.8

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        self._mod_phase = step_phase(self._mod_phase, pitch * ratio, self.sample_rate)

        carrier = math.cos(self._phase * TWO_PI)
        mod_radians = self._mod_phase * TWO_PI
        modulator = math.cos(mod_radians + feedback * math.sin(mod_radians))
        envelope = math.exp(-index)

        output = carrier * math.exp(index * (modulator - 1.0)) * envelope * 0.6
        secondary = carrier * modulator * envelope * 0.6
        return AlgorithmOutput(output, secondary)