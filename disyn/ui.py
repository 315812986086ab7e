"""Menu, calibration and status screens driven by an encoder and analogue inputs."""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass, field

from disyn.catalog import (
    ALGORITHM_COUNT,
    TEST_ALGORITHM_INDEX,
    get_algorithm_info,
    map_normalized,
)
from disyn.controls import (
    CV0_CAL,
    CV1_CAL,
    CV2_CAL,
    POT0_CAL,
    POT1_CAL,
    POT2_CAL,
    Parameters,
    StatusMessage,
    normalize_adc,
)

MENU_LABELS = ("Alg", "Atk", "Dec", "Rev Sz", "Rev Lv", "P1", "P2", "Mast", "Stat")
STATUS_INDEX = 8
VISIBLE_ROWS = 4
INPUT_COUNT = 6
ADC_MAX = 4095

INPUT_LABELS = ("C0", "C1", "C2", "P0", "P1", "P2")
_REPORT_LABELS = ("CV0", "CV1", "CV2", "P0", "P1", "P2")
_PARAM_FIELDS = ("cv0", "cv1", "cv2", "pot0", "pot1", "pot2")
_CALIBRATIONS = (CV0_CAL, CV1_CAL, CV2_CAL, POT0_CAL, POT1_CAL, POT2_CAL)

_SMOOTH_ALPHA = 0.1
_CHANGE_THRESHOLD = 0.02
_REPORT_INTERVAL_MS = 200
_LONG_PRESS_MS = 1000
_RESET_NOTICE_MS = 1000
_LINE_WIDTH = 21
_STEP = 0.01

# Menu positions that edit a plain normalised field of the parameter set.
_PLAIN_FIELDS = {
    1: "attack",
    2: "decay",
    3: "reverb_size",
    4: "reverb_level",
    7: "master_gain",
}


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True)
class UiFrame:
    """What one update produced: screen lines, parameters to send, log lines."""

    lines: tuple[str, ...]
    params: Parameters
    messages: tuple[str, ...] = ()


@dataclass
class UiController:
    """Keeps the menu state and turns control input into parameters and screens."""

    params: Parameters = field(default_factory=Parameters)
    current_index: int = 0
    top_index: int = 0
    status: StatusMessage = field(default_factory=StatusMessage)

    def __post_init__(self) -> None:
        self._last_position = 0
        self._smoothed = [0.0] * INPUT_COUNT
        self._last_values = [0.0] * INPUT_COUNT
        self.changed = [False] * INPUT_COUNT
        self._last_report_ms = 0
        self._press_start_ms: int | None = None
        self._long_press_handled = False
        self._reset_notice_until_ms: int | None = None
        self.raw_inputs = [0] * INPUT_COUNT
        self.min_inputs = [ADC_MAX] * INPUT_COUNT
        self.max_inputs = [0] * INPUT_COUNT

    def adjust(self, delta: int) -> None:
        """Change the value under the cursor by ``delta`` steps."""
        index = self.current_index
        params = self.params
        info = get_algorithm_info(params.algorithm)
        if index == 0:
            algorithm = params.algorithm + delta
            if algorithm < 0:
                algorithm = ALGORITHM_COUNT - 1
            if algorithm > ALGORITHM_COUNT - 1:
                algorithm = 0
            params.algorithm = algorithm
        elif index in _PLAIN_FIELDS:
            name = _PLAIN_FIELDS[index]
            setattr(params, name, _clamp01(getattr(params, name) + delta * _STEP))
        elif index == 5:
            if not info.param1.unused:
                params.param1 = _clamp01(params.param1 + delta * _STEP)
        elif index == 6:
            if not info.param2.unused:
                params.param2 = _clamp01(params.param2 + delta * _STEP)

    def format_value(self, index: int) -> str:
        """Text shown next to the menu entry at ``index``."""
        params = self.params
        info = get_algorithm_info(params.algorithm)
        if index == 0:
            return info.name
        if index in _PLAIN_FIELDS:
            return f"{getattr(params, _PLAIN_FIELDS[index]):.2f}"
        if index in (5, 6):
            param_info = info.param1 if index == 5 else info.param2
            if param_info.unused:
                return "-"
            normalized = params.param1 if index == 5 else params.param2
            value = map_normalized(param_info, normalized)
            if param_info.integer:
                return str(int(value + 0.5))
            return f"{value:.2f}"
        return "-"

    def receive_status(self, status: StatusMessage) -> None:
        """Take the latest audio status for the status screen."""
        self.status = status

    def update(
        self,
        raw_inputs: Sequence[int],
        encoder_position: int,
        pressed: bool,
        down: bool,
        now_ms: int,
    ) -> UiFrame:
        """Process one round of input and render the screen.

        ``raw_inputs`` holds the six raw readings in the order C0, C1, C2, P0,
        P1, P2. ``pressed`` is a fresh button press, ``down`` the button state.
        """
        if len(raw_inputs) != INPUT_COUNT:
            raise ValueError(f"expected {INPUT_COUNT} raw inputs, got {len(raw_inputs)}")

        messages: list[str] = []
        self._read_inputs(raw_inputs, now_ms, messages)

        if encoder_position != self._last_position:
            self.adjust(1 if encoder_position > self._last_position else -1)
            self._last_position = encoder_position

        suppress_click = self._handle_long_press(down, now_ms, messages)
        if pressed and not suppress_click:
            self._advance_cursor()

        lines = self._render(now_ms)
        return UiFrame(
            lines=tuple(line[:_LINE_WIDTH] for line in lines),
            params=dataclasses.replace(self.params),
            messages=tuple(messages),
        )

    def _read_inputs(self, raw_inputs: Sequence[int], now_ms: int, messages: list[str]) -> None:
        for i, (raw, calibration) in enumerate(zip(raw_inputs, _CALIBRATIONS)):
            self.raw_inputs[i] = raw
            self.min_inputs[i] = min(self.min_inputs[i], raw)
            self.max_inputs[i] = max(self.max_inputs[i], raw)
            target = normalize_adc(raw, calibration)
            self._smoothed[i] += _SMOOTH_ALPHA * (target - self._smoothed[i])
            setattr(self.params, _PARAM_FIELDS[i], self._smoothed[i])

        self.changed = [
            abs(value - last) > _CHANGE_THRESHOLD
            for value, last in zip(self._smoothed, self._last_values)
        ]
        if any(self.changed) and now_ms - self._last_report_ms > _REPORT_INTERVAL_MS:
            self._last_report_ms = now_ms
            parts = [
                f"{label}={value:.3f} "
                for label, value, changed in zip(_REPORT_LABELS, self._smoothed, self.changed)
                if changed
            ]
            messages.append("Inputs " + "".join(parts))
        self._last_values = list(self._smoothed)

    def _handle_long_press(self, down: bool, now_ms: int, messages: list[str]) -> bool:
        if down:
            if self._press_start_ms is None:
                self._press_start_ms = now_ms
                self._long_press_handled = False
        else:
            self._press_start_ms = None
            self._long_press_handled = False

        if (
            self.current_index == STATUS_INDEX
            and down
            and not self._long_press_handled
            and self._press_start_ms is not None
            and now_ms - self._press_start_ms > _LONG_PRESS_MS
        ):
            self.min_inputs = list(self.raw_inputs)
            self.max_inputs = list(self.raw_inputs)
            self._reset_notice_until_ms = now_ms + _RESET_NOTICE_MS
            messages.append("CAL RESET")
            self._long_press_handled = True
            return True
        return False

    def _advance_cursor(self) -> None:
        self.current_index = (self.current_index + 1) % len(MENU_LABELS)
        if self.current_index < self.top_index:
            self.top_index = self.current_index
        if self.current_index >= self.top_index + VISIBLE_ROWS:
            self.top_index = self.current_index - (VISIBLE_ROWS - 1)

    def _render(self, now_ms: int) -> list[str]:
        if self.current_index == STATUS_INDEX:
            return self._render_status(now_ms)
        info = get_algorithm_info(self.params.algorithm)
        lines = []
        last = min(self.top_index + VISIBLE_ROWS, len(MENU_LABELS))
        for item in range(self.top_index, last):
            label = MENU_LABELS[item]
            if item == 5:
                label = info.param1.label
            elif item == 6:
                label = info.param2.label
            marker = ">" if item == self.current_index else " "
            lines.append(f"{marker}{label} {self.format_value(item)}")
        return lines

    def _render_status(self, now_ms: int) -> list[str]:
        if self._reset_notice_until_ms is not None and now_ms < self._reset_notice_until_ms:
            return ["CAL RESET", "Hold to clear", "min/max", " "]

        if self.params.algorithm == TEST_ALGORITHM_INDEX:
            page = (now_ms // 1000) % INPUT_COUNT
            return [
                f"CAL {INPUT_LABELS[page]}",
                f"Cur {self.raw_inputs[page]}",
                f"Min {self.min_inputs[page]}",
                f"Max {self.max_inputs[page]}",
            ]

        header = "AUD FAIL" if not self.status.audio_ok else f"Und {self.status.underruns}"
        lines = [header]
        for first in range(0, INPUT_COUNT, 2):
            pair = []
            for i in (first, first + 1):
                flag = "*" if self.changed[i] else " "
                pair.append(f"{INPUT_LABELS[i]}{flag} {self._smoothed[i]:.2f}")
            lines.append(" ".join(pair))
        return lines