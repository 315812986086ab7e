"""Small Schroeder reverb: four parallel combs followed by two all-passes."""

from __future__ import annotations

_COMB_SECONDS = (0.0297, 0.0371, 0.0411, 0.0437)
_ALLPASS_SECONDS = (0.005, 0.0017)
_ALLPASS_GAIN = 0.5


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(max(value, low), high)


class _DelayLine:
    """Circular buffer holding a fixed number of samples."""

    def __init__(self, length: int) -> None:
        self.buffer = [0.0] * length
        self.index = 0

    def read(self) -> float:
        return self.buffer[self.index]

    def write_and_advance(self, value: float) -> None:
        self.buffer[self.index] = value
        self.index = (self.index + 1) % len(self.buffer)

    def clear(self) -> None:
        self.buffer = [0.0] * len(self.buffer)
        self.index = 0


class ReverbModule:
    """Mono reverb with normalised ``size`` and wet ``level`` controls."""

    def __init__(self, sample_rate: float = 44100.0) -> None:
        self.sample_rate = sample_rate
        comb_lengths = [int(seconds * sample_rate) for seconds in _COMB_SECONDS]
        allpass_lengths = [int(seconds * sample_rate) for seconds in _ALLPASS_SECONDS]
        if min(comb_lengths + allpass_lengths) < 1:
            raise ValueError(f"sample rate {sample_rate!r} is too low for the reverb delays")
        self._combs = [_DelayLine(n) for n in comb_lengths]
        self._allpasses = [_DelayLine(n) for n in allpass_lengths]
        self._size = 0.5
        self._level = 0.3

    @property
    def size(self) -> float:
        return self._size

    @size.setter
    def size(self, value: float) -> None:
        self._size = _clamp(value)

    @property
    def level(self) -> float:
        return self._level

    @level.setter
    def level(self, value: float) -> None:
        self._level = _clamp(value)

    def process(self, sample: float) -> float:
        """Feed one input sample and return the dry/wet mix."""
        feedback = 0.7 + self._size * 0.28

        comb_sum = 0.0
        for comb in self._combs:
            delayed = comb.read()
            comb.write_and_advance(sample + delayed * feedback)
            comb_sum += delayed

        output = comb_sum / len(self._combs)

        for allpass in self._allpasses:
            delayed = allpass.read()
            new_output = -output * _ALLPASS_GAIN + delayed
            allpass.write_and_advance(output + delayed * _ALLPASS_GAIN)
            output = new_output

        return sample * (1.0 - self._level) + output * self._level

    def reset(self) -> None:
        for line in (*self._combs, *self._allpasses):
            line.clear()