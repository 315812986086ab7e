"""Control settings: input calibration, modulation amounts and the parameter set."""

from __future__ import annotations

from dataclasses import dataclass

SAMPLE_RATE = 44100

PARAM_MOD_AMOUNT = 0.5
PITCH_CV_MIX = 0.7
PITCH_POT_MIX = 0.3
REVERB_SIZE_CV_AMOUNT = 0.2
REVERB_SIZE_POT_AMOUNT = 0.2
REVERB_LEVEL_CV_AMOUNT = 0.2
REVERB_LEVEL_POT_AMOUNT = 0.2
MASTER_CV_AMOUNT = 0.1
MASTER_POT_AMOUNT = 0.1


@dataclass(frozen=True)
class AdcCalibration:
    """Raw reading range of an analogue input and whether it runs backwards."""

    min_value: int
    max_value: int
    invert: bool


CV0_CAL = AdcCalibration(0, 4095, True)
CV1_CAL = AdcCalibration(0, 4095, True)
CV2_CAL = AdcCalibration(0, 4095, True)
POT0_CAL = AdcCalibration(0, 4095, False)
POT1_CAL = AdcCalibration(0, 4095, False)
POT2_CAL = AdcCalibration(0, 4095, False)


def normalize_adc(value: int, calibration: AdcCalibration) -> float:
    """Scale a raw reading into [0, 1]; a degenerate range gives 0."""
    if calibration.max_value <= calibration.min_value:
        return 0.0
    normalized = (value - calibration.min_value) / (
        calibration.max_value - calibration.min_value
    )
    normalized = min(max(normalized, 0.0), 1.0)
    if calibration.invert:
        normalized = 1.0 - normalized
    return normalized


@dataclass
class Parameters:
    """Complete set of voice settings and the latest control input values."""

    algorithm: int = 0
    attack: float = 0.5
    decay: float = 0.5
    reverb_size: float = 0.5
    reverb_level: float = 0.3
    param1: float = 0.55
    param2: float = 0.5
    master_gain: float = 0.8
    cv0: float = 0.0
    cv1: float = 0.0
    cv2: float = 0.0
    pot0: float = 0.0
    pot1: float = 0.0
    pot2: float = 0.0


@dataclass
class StatusMessage:
    """Audio health reported by the sound-producing side."""

    underruns: int = 0
    audio_ok: bool = True