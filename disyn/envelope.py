"""Attack/release envelope generator."""

from __future__ import annotations


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(max(value, low), high)


class EnvelopeModule:
    """Linear attack/release envelope with exponentially mapped times.

    ``attack`` and ``release`` take normalised values in [0, 1]. When both are
    zero the envelope is held fully open.
    """

    _ATTACK_MIN, _ATTACK_MAX = 0.001, 1.0
    _RELEASE_MIN, _RELEASE_MAX = 0.01, 3.0

    def __init__(self, sample_rate: float = 44100.0) -> None:
        self.sample_rate = sample_rate
        self._attack_time = 0.2
        self._release_time = 0.4
        self._attack_norm = 0.5
        self._release_norm = 0.5
        self._level = 0.0
        self._gate = False
        self._active = False

    @property
    def attack(self) -> float:
        return self._attack_norm

    @attack.setter
    def attack(self, value: float) -> None:
        self._attack_norm = _clamp(value)
        self._attack_time = self._ATTACK_MIN * (
            self._ATTACK_MAX / self._ATTACK_MIN
        ) ** self._attack_norm

    @property
    def release(self) -> float:
        return self._release_norm

    @release.setter
    def release(self, value: float) -> None:
        self._release_norm = _clamp(value)
        self._release_time = self._RELEASE_MIN * (
            self._RELEASE_MAX / self._RELEASE_MIN
        ) ** self._release_norm

    @property
    def level(self) -> float:
        """Current envelope value."""
        return self._level

    def set_gate(self, gate: bool) -> None:
        self._gate = gate
        if gate:
            self._active = True

    def process(self) -> float:
        """Advance one sample and return the envelope value."""
        if self._attack_norm <= 0.0 and self._release_norm <= 0.0:
            self._level = 1.0
            self._active = True
            return self._level

        if self._gate:
            rate = 1.0 / max(self._attack_time * self.sample_rate, 1.0)
            self._level = min(self._level + rate, 1.0)
        else:
            rate = 1.0 / max(self._release_time * self.sample_rate, 1.0)
            self._level -= rate
            if self._level < 0.0:
                self._level = 0.0
                self._active = False
        return self._level

    def is_playing(self) -> bool:
        return self._active

    def reset(self) -> None:
        self._level = 0.0
        self._active = True