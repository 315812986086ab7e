"""Oscillator algorithms that combine several primitive techniques."""

from __future__ import annotations

import math

from disyn.utils import (
    EPSILON,
    TWO_PI,
    AlgorithmOutput,
    asymmetric_fm,
    expo_map,
    step_phase,
)


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(max(value, low), high)


def _dsf_fixed_ratio(phase: float, decay: float, theta: float) -> float:
    """DSF sample for a fixed partial-spacing angle ``theta``."""
    denom = 1.0 - 2.0 * decay * math.cos(theta) + decay * decay
    angle = TWO_PI * phase
    return (math.sin(angle) - decay * math.sin(angle - theta)) / (denom + EPSILON)


def _modfm(carrier_phase: float, mod_phase: float, index: float) -> float:
    """Modified FM sample with equal carrier and modulator frequencies."""
    mod = math.cos(TWO_PI * mod_phase)
    return math.cos(TWO_PI * carrier_phase) * math.exp(index * (mod - 1.0))


class Combination1HybridFormantAlgorithm:
    """ModFM body mixed with three fixed formant sines."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self.reset()

    def reset(self) -> None:
        self._phase = 0.0
        self._mod_phase = 0.0
        self._formant_phases = [0.0, 0.0, 0.0]

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        modfm_index = expo_map(param1, 0.01, 3.0)
        spacing = 0.8 + param3 * 0.4

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        self._mod_phase = step_phase(self._mod_phase, pitch, self.sample_rate)
        modulator = math.sin(TWO_PI * self._mod_phase)
        carrier = math.sin(TWO_PI * self._phase)
        base = carrier * math.exp(-modfm_index * (abs(modulator) - 1.0)) * 0.4

        self._formant_phases = [
            step_phase(phase, centre * spacing, self.sample_rate)
            for phase, centre in zip(self._formant_phases, (800.0, 1200.0, 2400.0))
        ]
        formants = sum(math.sin(TWO_PI * phase) * 0.5 for phase in self._formant_phases)

        output = (base + formants) * 0.25
        return AlgorithmOutput(output, base * 0.5)


class Combination2CascadedAlgorithm:
    """DSF feeding asymmetric FM, then tanh saturation."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self.reset()

    def reset(self) -> None:
        self._phase = 0.0
        self._cascade1_phase = 0.0
        self._cascade2_phase = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        dsf_decay = 0.5 + param1 * 0.45
        tanh_drive = param3 * 5.0

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        stage1 = _dsf_fixed_ratio(self._phase, dsf_decay, TWO_PI * 1.5)

        stage2, self._cascade1_phase, self._cascade2_phase = asymmetric_fm(
            abs(stage1),
            param2,
            pitch,
            self.sample_rate,
            self._cascade1_phase,
            self._cascade2_phase,
        )

        stage3 = math.tanh(stage2 * tanh_drive)
        return AlgorithmOutput(stage3 * 0.6, stage2 * 0.6)


class Combination3ParallelBankAlgorithm:
    """Three ModFM voices in parallel, cross-faded with two formant sines."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self.reset()

    def reset(self) -> None:
        self._carrier_phases = [0.0, 0.0, 0.0]
        self._mod_phases = [0.0, 0.0, 0.0]
        self._formant_phases = [0.0, 0.0]

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        modfm_index = expo_map(param1, 0.01, 8.0)
        mix_balance = param3

        voices = []
        for voice, ratio in enumerate((1.0, 1.5, 1.333)):
            self._carrier_phases[voice] = step_phase(
                self._carrier_phases[voice], pitch, self.sample_rate
            )
            self._mod_phases[voice] = step_phase(
                self._mod_phases[voice], pitch * ratio, self.sample_rate
            )
            voices.append(
                _modfm(self._carrier_phases[voice], self._mod_phases[voice], modfm_index)
            )

        self._formant_phases = [
            step_phase(phase, centre, self.sample_rate)
            for phase, centre in zip(self._formant_phases, (800.0, 2400.0))
        ]
        pafs = [math.sin(TWO_PI * phase) * 0.5 for phase in self._formant_phases]

        modfm_mix = sum(voices) / 3.0
        paf_mix = sum(pafs) / 2.0
        output = (modfm_mix * (1.0 - mix_balance) + paf_mix * mix_balance) * 0.5
        secondary = (paf_mix - modfm_mix) * 0.5
        return AlgorithmOutput(output, secondary)


class Combination4FeedbackAlgorithm:
    """ModFM whose frequency is pushed around by its own previous output."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self.reset()

    def reset(self) -> None:
        self._phase = 0.0
        self._mod_phase = 0.0
        self._feedback_sample = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        modfm_index = expo_map(param1, 0.01, 8.0)
        feedback_gain = param2 * 0.95
        drive = 1.0 + _clamp(param3) * 4.0

        modified_freq = pitch + self._feedback_sample * feedback_gain * pitch

        self._phase = step_phase(self._phase, modified_freq, self.sample_rate)
        self._mod_phase = step_phase(self._mod_phase, modified_freq, self.sample_rate)
        output = _modfm(self._phase, self._mod_phase, modfm_index)

        self._feedback_sample = output

        shaped = math.tanh(output * drive)
        return AlgorithmOutput(shaped * 0.5, output * 0.5)


class Combination5MorphingAlgorithm:
    """Cross-fade from DSF through ModFM to a formant sine."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self.reset()

    def reset(self) -> None:
        self._phase = 0.0
        self._mod_phase = 0.0
        self._secondary_phase = 0.0
        self._formant_phase = 0.0

    def _step_modfm(self, pitch: float, character: float) -> float:
        self._mod_phase = step_phase(self._mod_phase, pitch, self.sample_rate)
        self._secondary_phase = step_phase(self._secondary_phase, pitch, self.sample_rate)
        index = expo_map(character, 0.01, 8.0)
        return _modfm(self._mod_phase, self._secondary_phase, index)

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        morph_curve = 0.5 + _clamp(param3) * 1.5
        morph_pos = _clamp(param1) ** morph_curve
        character = param2

        if morph_pos < 0.5:
            alpha = morph_pos * 2.0
            self._phase = step_phase(self._phase, pitch, self.sample_rate)
            dsf = _dsf_fixed_ratio(self._phase, 0.5 + character * 0.4, TWO_PI * 1.5)
            modfm = self._step_modfm(pitch, character)
            output = dsf * (1.0 - alpha) + modfm * alpha
            secondary = modfm
        else:
            alpha = (morph_pos - 0.5) * 2.0
            modfm = self._step_modfm(pitch, character)
            self._formant_phase = step_phase(self._formant_phase, pitch * 2.0, self.sample_rate)
            paf = math.sin(TWO_PI * self._formant_phase) * 0.5
            output = modfm * (1.0 - alpha) + paf * alpha
            secondary = paf

        return AlgorithmOutput(output * 0.6, secondary * 0.6)


class Combination6InharmonicAlgorithm:
    """Golden-ratio DSF mixed with a shifted formant sine."""

    PHI_RATIO = 1.618034

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self.reset()

    def reset(self) -> None:
        self._phase = 0.0
        self._formant_phase = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        paf_shift = expo_map(param2, 5.0, 50.0)
        dsf_decay = 0.5 + param1 * 0.4
        mix = _clamp(param3)

        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        dsf = _dsf_fixed_ratio(self._phase, dsf_decay, TWO_PI * self.PHI_RATIO)

        formant_freq = pitch * 2.0 + paf_shift
        self._formant_phase = step_phase(self._formant_phase, formant_freq, self.sample_rate)
        paf = math.sin(TWO_PI * self._formant_phase) * 0.5

        output = dsf * (1.0 - mix) + paf * mix
        return AlgorithmOutput(output, dsf)


class Combination7AdaptiveFilterAlgorithm:
    """DSF and ModFM mixed to imitate a resonant filter sweep."""

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self.reset()

    def reset(self) -> None:
        self._phase = 0.0
        self._mod_phase = 0.0
        self._secondary_phase = 0.0

    def process(self, pitch: float, param1: float, param2: float, param3: float) -> AlgorithmOutput:
        cutoff = param1
        resonance = param2
        mix = _clamp(param3)

        dsf_decay = 0.5 + resonance * 0.49
        self._phase = step_phase(self._phase, pitch, self.sample_rate)
        dsf = _dsf_fixed_ratio(self._phase, dsf_decay, TWO_PI * (1.0 + cutoff * 2.0))

        modfm_index = expo_map(cutoff, 0.01, 2.0)
        self._mod_phase = step_phase(self._mod_phase, pitch, self.sample_rate)
        self._secondary_phase = step_phase(self._secondary_phase, pitch, self.sample_rate)
        modfm = _modfm(self._mod_phase, self._secondary_phase, modfm_index)

        output = (dsf * (1.0 - mix) + modfm * mix) * 0.3
        return AlgorithmOutput(output, modfm * 0.3)