"""One synthesiser voice: oscillator, envelope, gain and stereo reverb."""

from __future__ import annotations

from disyn.envelope import EnvelopeModule
from disyn.oscillator import OscillatorModule
from disyn.reverb import ReverbModule
from disyn.utils import AlgorithmOutput, AlgorithmType

_SILENCE = 1e-5


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(max(value, low), high)


class DisynEngine:
    """A monophonic voice driven by note on/off events and normalised controls."""

    def __init__(self, sample_rate: float = 44100.0) -> None:
        self.sample_rate = sample_rate
        self._oscillator = OscillatorModule(sample_rate)
        self._envelope = EnvelopeModule(sample_rate)
        self._reverb_left = ReverbModule(sample_rate)
        self._reverb_right = ReverbModule(sample_rate)
        self.frequency = 440.0
        self._algorithm = AlgorithmType.TANH_SQUARE
        self._param1 = 0.55
        self._param2 = 0.5
        self._param3 = 0.5
        self._master_gain = 0.8
        self._velocity = 1.0
        self._gate = False
        self._playing = False

    @property
    def algorithm(self) -> AlgorithmType:
        return self._algorithm

    @algorithm.setter
    def algorithm(self, value: int) -> None:
        """Select an algorithm; identifiers outside the known range are ignored."""
        if 0 <= value <= AlgorithmType.TRAJECTORY:
            self._algorithm = AlgorithmType(value)

    @property
    def param1(self) -> float:
        return self._param1

    @param1.setter
    def param1(self, value: float) -> None:
        self._param1 = _clamp(value)

    @property
    def param2(self) -> float:
        return self._param2

    @param2.setter
    def param2(self, value: float) -> None:
        self._param2 = _clamp(value)

    @property
    def param3(self) -> float:
        return self._param3

    @param3.setter
    def param3(self, value: float) -> None:
        self._param3 = _clamp(value)

    @property
    def attack(self) -> float:
        return self._envelope.attack

    @attack.setter
    def attack(self, value: float) -> None:
        self._envelope.attack = value

    @property
    def release(self) -> float:
        return self._envelope.release

    @release.setter
    def release(self, value: float) -> None:
        self._envelope.release = value

    @property
    def reverb_size(self) -> float:
        return self._reverb_left.size

    @reverb_size.setter
    def reverb_size(self, value: float) -> None:
        self._reverb_left.size = value
        self._reverb_right.size = value

    @property
    def reverb_level(self) -> float:
        return self._reverb_left.level

    @reverb_level.setter
    def reverb_level(self, value: float) -> None:
        self._reverb_left.level = value
        self._reverb_right.level = value

    @property
    def master_gain(self) -> float:
        return self._master_gain

    @master_gain.setter
    def master_gain(self, value: float) -> None:
        self._master_gain = _clamp(value)

    @property
    def velocity(self) -> float:
        return self._velocity

    @property
    def is_playing(self) -> bool:
        return self._playing

    def note_on(self, frequency: float, velocity: float = 1.0) -> None:
        """Start a note, clearing all voice state."""
        self.frequency = frequency
        self._velocity = _clamp(velocity)
        self._gate = True
        self._playing = True

        self._oscillator.reset()
        self._envelope.reset()
        self._reverb_left.reset()
        self._reverb_right.reset()

        self._envelope.set_gate(True)

    def note_off(self) -> None:
        self._gate = False
        self._envelope.set_gate(False)

    def process(self) -> AlgorithmOutput:
        """Render one stereo sample; silence once the voice has finished."""
        if not self._playing:
            return AlgorithmOutput(0.0, 0.0)

        osc = self._oscillator.process(
            self._algorithm, self.frequency, self._param1, self._param2, self._param3
        )
        env = self._envelope.process()
        gain = env * self._velocity * self._master_gain

        left = self._reverb_left.process(osc.primary * gain)
        right = self._reverb_right.process(osc.secondary * gain)

        if not self._envelope.is_playing() and max(abs(left), abs(right)) < _SILENCE:
            self._playing = False

        return AlgorithmOutput(left, right)