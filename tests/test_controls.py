import dataclasses

import pytest

from disyn.controls import (
    CV0_CAL,
    POT0_CAL,
    AdcCalibration,
    Parameters,
    StatusMessage,
    normalize_adc,
)


def test_pot_full_range():
    assert normalize_adc(0, POT0_CAL) == 0.0
    assert normalize_adc(4095, POT0_CAL) == 1.0


def test_cv_is_inverted():
    assert normalize_adc(0, CV0_CAL) == 1.0
    assert normalize_adc(4095, CV0_CAL) == 0.0


def test_inversion_mirrors_plain_reading():
    for raw in (0, 1000, 2048, 4095):
        assert normalize_adc(raw, CV0_CAL) == pytest.approx(1.0 - normalize_adc(raw, POT0_CAL))


def test_degenerate_calibration_gives_zero():
    assert normalize_adc(500, AdcCalibration(100, 100, False)) == 0.0
    assert normalize_adc(500, AdcCalibration(200, 100, True)) == 0.0


@pytest.mark.parametrize("raw, expected", [(50, 0.0), (300, 1.0), (150, 0.5)])
def test_clamping_to_calibrated_range(raw, expected):
    assert normalize_adc(raw, AdcCalibration(100, 200, False)) == pytest.approx(expected)


def test_parameters_defaults():
    params = Parameters()
    assert params.algorithm == 0
    assert params.param1 == 0.55
    assert params.master_gain == 0.8
    assert params.reverb_level == 0.3


def test_parameters_replace_keeps_other_fields():
    params = dataclasses.replace(Parameters(), algorithm=5)
    assert params.algorithm == 5
    assert params.attack == Parameters().attack


def test_status_defaults():
    status = StatusMessage()
    assert status.underruns == 0
    assert status.audio_ok is True