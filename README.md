# disyn

A monophonic distortion-synthesis voice in pure Python, with no third-party
dependencies. It offers nineteen oscillator algorithms, an attack/release
envelope and a stereo comb/all-pass reverb. It also holds the control logic
of a small synthesizer: parameter mapping, analogue-input calibration, a
block-based render loop and a four-line menu.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Playing a note

```python
from disyn.engine import DisynEngine
from disyn.utils import AlgorithmType

engine = DisynEngine(44100.0)
engine.algorithm = AlgorithmType.MOD_FM
engine.param1 = 0.4
engine.param2 = 0.5
engine.attack = 0.2
engine.release = 0.5

engine.note_on(220.0, 1.0)
samples = [engine.process() for _ in range(44100)]
engine.note_off()

left = [s.primary for s in samples]
right = [s.secondary for s in samples]
```

`DisynEngine` settings are properties: `algorithm`, `param1`, `param2`,
`param3`, `attack`, `release`, `reverb_size`, `reverb_level`, `master_gain`
and `frequency`. Normalised settings are clamped to the range 0 to 1. If you
assign an `algorithm` outside 0 to 18, the engine ignores it. `velocity` and
`is_playing` are read-only.

Each call to `process()` returns an `AlgorithmOutput`. This is a named tuple
of `primary` (left) and `secondary` (right). When no note is sounding, both
values are `0.0`. The voice stops by itself once the envelope has been
released and the reverb tail falls below audibility.

## Using the building blocks

Each algorithm can be used on its own. It keeps its own phase state and takes
a pitch in Hz plus three normalised parameters:

```python
from disyn.primitives import TanhSquareAlgorithm

osc = TanhSquareAlgorithm(48000.0)
out = osc.process(110.0, 0.55, 0.5, 0.5)
osc.reset()
```

The algorithms live in these modules:

- `disyn.primitives`: `DirichletPulseAlgorithm`, `DSFSingleAlgorithm`,
  `DSFDoubleAlgorithm`, `TanhSquareAlgorithm`, `TanhSawAlgorithm`,
  `PAFAlgorithm`, `ModFMAlgorithm`.
- `disyn.combinations`: `Combination1HybridFormantAlgorithm` through
  `Combination7AdaptiveFilterAlgorithm`.
- `disyn.novel`: `Novel1MultistageAlgorithm`,
  `Novel2FreqAsymmetryAlgorithm`, `Novel3CrossModAlgorithm`,
  `Novel4TaylorAlgorithm`.
- `disyn.trajectory`: `TrajectoryAlgorithm`, a point bouncing inside a
  regular polygon. Its parameters set the number of sides, the launch angle
  and the bounce jitter.

`disyn.oscillator.OscillatorModule` holds one instance of every algorithm.
Its `process(algorithm, pitch, param1, param2, param3=0.5)` runs the
algorithm selected by an `AlgorithmType` value. For an unknown identifier it
falls back to a plain sine.

`disyn.utils` holds the shared helpers: `step_phase`, `expo_map`,
`compute_dsf_component`, `asymmetric_fm`, `wrap_angle` and `taylor_sine`.

`disyn.envelope.EnvelopeModule` and `disyn.reverb.ReverbModule` can also be
used on their own:

- `EnvelopeModule` has `attack` and `release` properties, plus `set_gate`,
  `process`, `is_playing` and `reset`.
- `ReverbModule` has `size` and `level` properties, plus `process(sample)`
  and `reset`.

## Control logic

- `disyn.catalog` gives each algorithm's display name and parameter ranges,
  through `get_algorithm_info` and `map_normalized`. Index 19 is a test tone.
- `disyn.controls` holds the `Parameters` and `StatusMessage` dataclasses,
  the modulation amounts and the input calibration. `normalize_adc` maps a
  raw 12-bit reading to the range 0 to 1.
- `disyn.dsp.DspVoice(sample_rate=44100, block_size=64, output=None)` renders
  audio blocks:
  - `tick(params, gate_high)` returns one block as a list of (left, right)
    16-bit words, each carrying an 8-bit DAC value (see `sample_to_dac` and
    `soft_clip`).
  - If you pass an `output` callable, it receives each block and returns the
    number of frames it accepted. A short write, or an `OSError`, is counted
    in `underruns`.
- `disyn.ui.UiController` runs the menu:
  - `update(raw_inputs, encoder_position, pressed, down, now_ms)` takes the
    six raw input readings and the encoder state. It returns a `UiFrame`,
    which holds the screen lines, a copy of the parameters and any log
    messages.
  - `adjust`, `format_value` and `receive_status` are available directly.

## What this package does not do

The package does not read pins, encoders or analogue inputs. It does not drive
a display or a DAC, and it has no command-line program. You supply the
readings and the time to `UiController.update` yourself. Rendered blocks come
back as data, or go to an `output` callable that you supply.