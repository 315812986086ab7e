"""Shared maths helpers and basic types for the oscillator algorithms."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import NamedTuple

TWO_PI = 2.0 * math.pi
EPSILON = 1e-8


class AlgorithmType(IntEnum):
    """Identifiers of the synthesis algorithms."""

    DIRICHLET_PULSE = 0
    DSF_SINGLE = 1
    DSF_DOUBLE = 2
    TANH_SQUARE = 3
    TANH_SAW = 4
    PAF = 5
    MOD_FM = 6

    COMBINATION_1_HYBRID_FORMANT = 7
    COMBINATION_2_CASCADED = 8
    COMBINATION_3_PARALLEL_BANK = 9
    COMBINATION_4_FEEDBACK = 10
    COMBINATION_5_MORPHING = 11
    COMBINATION_6_INHARMONIC = 12
    COMBINATION_7_ADAPTIVE_FILTER = 13

    NOVEL_1_MULTISTAGE = 14
    NOVEL_2_FREQ_ASYMMETRY = 15
    NOVEL_3_CROSS_MOD = 16
    NOVEL_4_TAYLOR = 17
    TRAJECTORY = 18


class AlgorithmOutput(NamedTuple):
    """A stereo pair of samples produced by one algorithm step."""

    primary: float
    secondary: float


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def step_phase(current_phase: float, frequency: float, sample_rate: float) -> float:
    """Advance a normalised phase by one sample and wrap it into [0, 1)."""
    following = current_phase + frequency / sample_rate
    return following - math.floor(following)


def expo_map(value: float, minimum: float, maximum: float) -> float:
    """Map a normalised value exponentially onto [minimum, maximum]."""
    clamped = _clamp(value, 0.0, 1.0)
    return minimum * (maximum / minimum) ** clamped


def compute_dsf_component(w: float, t: float, decay: float) -> float:
    """One discrete-summation-formula term, normalised for unit power."""
    denominator = 1.0 - 2.0 * decay * math.cos(t) + decay * decay
    if abs(denominator) < EPSILON:
        return 0.0
    numerator = math.sin(w) - decay * math.sin(w - t)
    normalise = math.sqrt(1.0 - decay * decay)
    return (numerator / denominator) * normalise


def asymmetric_fm(
    param1: float,
    param2: float,
    frequency: float,
    sample_rate: float,
    carrier_phase: float,
    mod_phase: float,
) -> tuple[float, float, float]:
    """Compute one asymmetric FM sample.

    Returns the sample together with the advanced carrier and modulator phases.
    """
    k = expo_map(param1, 0.01, 10.0)
    r = expo_map(param2, 0.5, 2.0)

    carrier_phase = step_phase(carrier_phase, frequency, sample_rate)
    mod_phase = step_phase(mod_phase, frequency, sample_rate)

    modulator = math.sin(TWO_PI * mod_phase)
    asymmetry = math.exp(k * (r - 1.0 / r) * math.cos(TWO_PI * mod_phase) / 2.0)
    carrier = math.cos(TWO_PI * carrier_phase + k * modulator)
    return carrier * asymmetry * 0.5, carrier_phase, mod_phase


def wrap_angle(x: float) -> float:
    """Bring an angle into the range [-pi, pi]."""
    if not math.isfinite(x):
        raise ValueError(f"cannot wrap non-finite angle {x!r}")
    wrapped = x
    while wrapped > math.pi:
        wrapped -= TWO_PI
    while wrapped < -math.pi:
        wrapped += TWO_PI
    return wrapped


def taylor_sine(x: float, num_terms: int) -> float:
    """Approximate sin(x) with a truncated Taylor series, clamped to +-1.5."""
    wrapped = wrap_angle(x)
    result = 0.0
    term = wrapped
    x_squared = wrapped * wrapped
    for n in range(num_terms):
        result += term
        term *= -x_squared / float((2 * n + 2) * (2 * n + 3))
    return _clamp(result, -1.5, 1.5)