"""Block-based audio rendering driven by the current parameter set and gate."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from disyn.catalog import TEST_ALGORITHM_INDEX, get_algorithm_info, map_normalized
from disyn.controls import (
    MASTER_CV_AMOUNT,
    MASTER_POT_AMOUNT,
    PARAM_MOD_AMOUNT,
    PITCH_CV_MIX,
    PITCH_POT_MIX,
    REVERB_LEVEL_CV_AMOUNT,
    REVERB_LEVEL_POT_AMOUNT,
    REVERB_SIZE_CV_AMOUNT,
    REVERB_SIZE_POT_AMOUNT,
    SAMPLE_RATE,
    Parameters,
    StatusMessage,
)
from disyn.engine import DisynEngine

BLOCK_SIZE = 64
_PITCH_ALPHA = 0.05
_MIN_FREQUENCY = 55.0
_MAX_FREQUENCY = 880.0

Frame = tuple[int, int]
AudioSink = Callable[[Sequence[Frame]], int]


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def soft_clip(value: float) -> float:
    """Hard-limit to [-1, 1] then round off with a tanh curve."""
    return math.tanh(min(max(value, -1.0), 1.0) * 1.2)


def sample_to_dac(sample: float) -> int:
    """Convert a sample in [-1, 1] to a 16-bit word carrying an 8-bit DAC value."""
    normalized = _clamp01(sample * 0.5 + 0.5)
    return int(normalized * 255.0) << 8


class DspVoice:
    """Turns parameters and a gate into blocks of stereo DAC frames.

    ``output``, if given, receives every rendered block and returns how many
    frames it accepted; it may raise ``OSError`` when the write fails. Short or
    failed writes are counted as underruns.
    """

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE,
        block_size: int = BLOCK_SIZE,
        output: AudioSink | None = None,
    ) -> None:
        self.sample_rate = sample_rate
        self.block_size = block_size
        self._output = output
        self._engine = DisynEngine(float(sample_rate))
        self.effective_param1 = 0.0
        self.effective_param2 = 0.0
        self.frequency = _MIN_FREQUENCY
        self.underruns = 0
        self.audio_ok = True
        self._smooth_pitch = 0.0
        self._test_phase = 0.0
        self._last_gate = False
        self._last_algorithm = 0

    @property
    def status(self) -> StatusMessage:
        return StatusMessage(underruns=self.underruns, audio_ok=self.audio_ok)

    @staticmethod
    def _modulated(base: float, cv: float, pot: float, cv_amount: float, pot_amount: float) -> float:
        return _clamp01(base + (cv - 0.5) * cv_amount + (pot - 0.5) * pot_amount)

    def tick(self, params: Parameters, gate_high: bool) -> list[Frame]:
        """Render one block and return it as (left, right) DAC words."""
        info = get_algorithm_info(params.algorithm)
        if info.param1.unused:
            self.effective_param1 = 0.5
        else:
            self.effective_param1 = self._modulated(
                params.param1, params.cv0, params.pot0, PARAM_MOD_AMOUNT, PARAM_MOD_AMOUNT
            )
        if info.param2.unused:
            self.effective_param2 = 0.5
        else:
            self.effective_param2 = self._modulated(
                params.param2, params.cv1, params.pot1, PARAM_MOD_AMOUNT, PARAM_MOD_AMOUNT
            )

        pitch_control = _clamp01(
            _clamp01(params.cv2) * PITCH_CV_MIX + _clamp01(params.pot2) * PITCH_POT_MIX
        )
        self._smooth_pitch += _PITCH_ALPHA * (pitch_control - self._smooth_pitch)
        self.frequency = _MIN_FREQUENCY + self._smooth_pitch * (_MAX_FREQUENCY - _MIN_FREQUENCY)

        force_continuous = params.attack <= 0.0 and params.decay <= 0.0
        engine_gate = gate_high or force_continuous
        is_test = params.algorithm == TEST_ALGORITHM_INDEX

        if params.algorithm != self._last_algorithm:
            self._last_gate = False
            self._test_phase = 0.0
            self._last_algorithm = params.algorithm

        reverb_size = self._modulated(
            params.reverb_size, params.cv2, params.pot2,
            REVERB_SIZE_CV_AMOUNT, REVERB_SIZE_POT_AMOUNT,
        )
        reverb_level = self._modulated(
            params.reverb_level, params.cv2, params.pot2,
            REVERB_LEVEL_CV_AMOUNT, REVERB_LEVEL_POT_AMOUNT,
        )
        master_gain = self._modulated(
            params.master_gain, params.cv2, params.pot2, MASTER_CV_AMOUNT, MASTER_POT_AMOUNT
        )

        if not is_test:
            engine = self._engine
            engine.algorithm = params.algorithm
            engine.param1 = self.effective_param1
            engine.param2 = self.effective_param2
            engine.attack = params.attack
            engine.release = params.decay
            engine.reverb_size = reverb_size
            engine.reverb_level = reverb_level
            engine.master_gain = master_gain
            engine.frequency = self.frequency
            if engine_gate and not self._last_gate:
                engine.note_on(self.frequency, 1.0)
            elif not engine_gate and self._last_gate:
                engine.note_off()
        self._last_gate = engine_gate

        if is_test:
            frames = self._render_test_tone(engine_gate, master_gain)
        else:
            frames = self._render_engine(master_gain)

        self._deliver(frames)
        return frames

    def _render_engine(self, gain: float) -> list[Frame]:
        frames = []
        for _ in range(self.block_size):
            sample = self._engine.process()
            frames.append(
                (
                    sample_to_dac(soft_clip(sample.primary * gain)),
                    sample_to_dac(soft_clip(sample.secondary * gain)),
                )
            )
        return frames

    def _render_test_tone(self, gate: bool, gain: float) -> list[Frame]:
        info = get_algorithm_info(TEST_ALGORITHM_INDEX)
        test_freq = map_normalized(info.param1, self.effective_param1)
        test_level = map_normalized(info.param2, self.effective_param2)
        gate_level = 1.0 if gate else 0.0
        step = test_freq / self.sample_rate
        frames = []
        for _ in range(self.block_size):
            self._test_phase += step
            if self._test_phase >= 1.0:
                self._test_phase -= 1.0
            tone = math.sin(self._test_phase * 2.0 * math.pi)
            word = sample_to_dac(soft_clip(tone * test_level * gate_level * gain))
            frames.append((word, word))
        return frames

    def _deliver(self, frames: list[Frame]) -> None:
        if self._output is None:
            return
        try:
            written = self._output(frames)
        except OSError:
            self.underruns += 1
            written = 0
        if written < len(frames):
            self.underruns += 1