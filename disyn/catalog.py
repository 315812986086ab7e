"""Descriptions of the algorithms and their two user-facing parameters."""

from __future__ import annotations

from dataclasses import dataclass

UNUSED_LABEL = "Unused"


@dataclass(frozen=True)
class AlgorithmParamInfo:
    """Display label and value range of one algorithm parameter."""

    label: str
    min_value: float
    max_value: float
    integer: bool = False

    @property
    def unused(self) -> bool:
        """True when the algorithm ignores this parameter."""
        return self.label == UNUSED_LABEL


@dataclass(frozen=True)
class AlgorithmInfo:
    """Display name of an algorithm and the ranges of its two parameters."""

    name: str
    param1: AlgorithmParamInfo
    param2: AlgorithmParamInfo


DEFAULT_ALGORITHM_INFO = AlgorithmInfo(
    "ALG",
    AlgorithmParamInfo("P1", 0.0, 1.0),
    AlgorithmParamInfo("P2", 0.0, 1.0),
)


def _info(name: str, param1: tuple, param2: tuple) -> AlgorithmInfo:
    return AlgorithmInfo(name, AlgorithmParamInfo(*param1), AlgorithmParamInfo(*param2))


ALGORITHM_INFO: tuple[AlgorithmInfo, ...] = (
    _info("Dir Pulse", ("Harm", 1.0, 64.0, True), ("Tilt", -3.0, 15.0)),
    _info("DSF S", ("Dec", 0.0, 0.98), ("Rat", 0.5, 4.0)),
    _info("DSF D", ("Dec", 0.0, 0.96), ("Rat", 0.5, 4.5)),
    _info("Tanh Sq", ("Drv", 0.05, 5.0), ("Trim", 0.2, 1.2)),
    _info("Tanh Saw", ("Drv", 0.05, 4.5), ("Blend", 0.0, 1.0)),
    _info("PAF", ("Form", 0.5, 6.0), ("BW", 50.0, 3000.0)),
    _info("Mod FM", ("Idx", 0.01, 8.0), ("Rat", 0.25, 6.0)),
    _info("C1 Hyb", ("Idx", 0.01, 3.0), (UNUSED_LABEL, 0.0, 1.0)),
    _info("C2 Cas", ("DSF Dec", 0.5, 0.95), ("Asym", 0.5, 2.0)),
    _info("C3 Par", ("Idx", 0.01, 8.0), (UNUSED_LABEL, 0.0, 1.0)),
    _info("C4 Fdb", ("Idx", 0.01, 8.0), ("Fb", 0.0, 0.95)),
    _info("C5 Mor", ("Morph", 0.0, 1.0), ("Char", 0.0, 1.0)),
    _info("C6 Inh", ("DSF Dec", 0.5, 0.9), ("PAF Sh", 5.0, 50.0)),
    _info("C7 Flt", ("Cut", 0.0, 1.0), ("Res", 0.0, 1.0)),
    _info("N1 Mul", ("Tanh", 0.1, 10.0), ("Exp", 0.1, 1.5)),
    _info("N2 Asy", ("LowR", 0.5, 1.0), ("HiR", 1.0, 2.0)),
    _info("N3 XMod", ("M1", 0.0, 1.0), ("M2", 0.0, 1.0)),
    _info("N4 Tay", ("T1", 1.0, 10.0, True), ("T2", 1.0, 10.0, True)),
    _info("Traj", ("Sides", 3.0, 12.0, True), ("Ang", 0.0, 360.0)),
    _info("TEST", ("Freq", 50.0, 2000.0), ("Level", 0.0, 1.0)),
)

ALGORITHM_COUNT = len(ALGORITHM_INFO)
TEST_ALGORITHM_INDEX = ALGORITHM_COUNT - 1


def get_algorithm_info(algorithm: int) -> AlgorithmInfo:
    """Description of an algorithm, or a generic one for unknown indices."""
    if 0 <= algorithm < ALGORITHM_COUNT:
        return ALGORITHM_INFO[algorithm]
    return DEFAULT_ALGORITHM_INFO


def map_normalized(info: AlgorithmParamInfo, normalized: float) -> float:
    """Map a value in [0, 1] (clamped) onto the parameter's display range."""
    normalized = min(max(normalized, 0.0), 1.0)
    return info.min_value + (info.max_value - info.min_value) * normalized