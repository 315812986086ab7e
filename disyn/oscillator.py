"""Dispatch from an algorithm identifier to the matching oscillator."""

from __future__ import annotations

import math

from disyn.combinations import (
    Combination1HybridFormantAlgorithm,
    Combination2CascadedAlgorithm,
    Combination3ParallelBankAlgorithm,
    Combination4FeedbackAlgorithm,
    Combination5MorphingAlgorithm,
    Combination6InharmonicAlgorithm,
    Combination7AdaptiveFilterAlgorithm,
)
from disyn.novel import (
    Novel1MultistageAlgorithm,
    Novel2FreqAsymmetryAlgorithm,
    Novel3CrossModAlgorithm,
    Novel4TaylorAlgorithm,
)
from disyn.primitives import (
    DirichletPulseAlgorithm,
    DSFDoubleAlgorithm,
    DSFSingleAlgorithm,
    ModFMAlgorithm,
    PAFAlgorithm,
    TanhSawAlgorithm,
    TanhSquareAlgorithm,
)
from disyn.trajectory import TrajectoryAlgorithm
from disyn.utils import TWO_PI, AlgorithmOutput, AlgorithmType, step_phase

_ALGORITHM_CLASSES = {
    AlgorithmType.DIRICHLET_PULSE: DirichletPulseAlgorithm,
    AlgorithmType.DSF_SINGLE: DSFSingleAlgorithm,
    AlgorithmType.DSF_DOUBLE: DSFDoubleAlgorithm,
    AlgorithmType.TANH_SQUARE: TanhSquareAlgorithm,
    AlgorithmType.TANH_SAW: TanhSawAlgorithm,
    AlgorithmType.PAF: PAFAlgorithm,
    AlgorithmType.MOD_FM: ModFMAlgorithm,
    AlgorithmType.COMBINATION_1_HYBRID_FORMANT: Combination1HybridFormantAlgorithm,
    AlgorithmType.COMBINATION_2_CASCADED: Combination2CascadedAlgorithm,
    AlgorithmType.COMBINATION_3_PARALLEL_BANK: Combination3ParallelBankAlgorithm,
    AlgorithmType.COMBINATION_4_FEEDBACK: Combination4FeedbackAlgorithm,
    AlgorithmType.COMBINATION_5_MORPHING: Combination5MorphingAlgorithm,
    AlgorithmType.COMBINATION_6_INHARMONIC: Combination6InharmonicAlgorithm,
    AlgorithmType.COMBINATION_7_ADAPTIVE_FILTER: Combination7AdaptiveFilterAlgorithm,
    AlgorithmType.NOVEL_1_MULTISTAGE: Novel1MultistageAlgorithm,
    AlgorithmType.NOVEL_2_FREQ_ASYMMETRY: Novel2FreqAsymmetryAlgorithm,
    AlgorithmType.NOVEL_3_CROSS_MOD: Novel3CrossModAlgorithm,
    AlgorithmType.NOVEL_4_TAYLOR: Novel4TaylorAlgorithm,
    AlgorithmType.TRAJECTORY: TrajectoryAlgorithm,
}


class OscillatorModule:
    """Holds one instance of every algorithm and runs the selected one.

    An identifier that names no algorithm produces a plain sine.
    """

    def __init__(self, sample_rate: float = 44100.0) -> None:
        self.sample_rate = sample_rate
        self._fallback_phase = 0.0
        self._algorithms = {
            kind: factory(sample_rate) for kind, factory in _ALGORITHM_CLASSES.items()
        }

    def reset(self) -> None:
        self._fallback_phase = 0.0
        for algorithm in self._algorithms.values():
            algorithm.reset()

    def process(
        self,
        algorithm: int,
        pitch: float,
        param1: float,
        param2: float,
        param3: float = 0.5,
    ) -> AlgorithmOutput:
        """Produce one sample from the algorithm with the given identifier."""
        selected = self._algorithms.get(algorithm)
        if selected is None:
            return self._process_sine(pitch)
        return selected.process(pitch, param1, param2, param3)

    def _process_sine(self, pitch: float) -> AlgorithmOutput:
        self._fallback_phase = step_phase(self._fallback_phase, pitch, self.sample_rate)
        value = math.sin(self._fallback_phase * TWO_PI)
        return AlgorithmOutput(value, value)