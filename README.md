# phantomsynth

A small phase-distortion synthesizer engine. Each voice runs two cosine
wavetable oscillators. A phasor bends the phase they read at, and the
oscillators are mixed with ring modulation and noise. The mix goes through a
driven state-variable filter, and an amplitude envelope shapes the result.
Four ADSR envelopes and two LFOs supply the modulation. The parameter state
is saved and loaded as XML presets.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Usage

`AudioProcessor` in `phantomsynth.processor` ties the engine together. It
holds the `ParameterState`, a four-voice `Synth`, the output `Amplifier` and
a `PresetManager`. Buffers are numpy arrays shaped `(channels, samples)` (or
one-dimensional for mono); `process_block` overwrites the buffer with the
next block of audio.

```python
import numpy as np

from phantomsynth.processor import AudioProcessor
from phantomsynth.synth import NoteOff, NoteOn

processor = AudioProcessor(preset_directory="presets")
processor.prepare_to_play(sample_rate=44100.0, samples_per_block=512, num_channels=2)

buffer = np.zeros((2, 512), dtype=np.float32)
processor.process_block(buffer, [NoteOn(note=60, velocity=1.0, sample_position=0)])
processor.process_block(buffer, [NoteOff(note=60, sample_position=256)])
```

Note events are `NoteOn(note, velocity=1.0, sample_position=0)` and
`NoteOff(note, velocity=0.0, sample_position=0, allow_tail_off=True)`. The
synth applies each event at its sample position within the block. When all
four voices are busy, the oldest voice is stolen, keeping the lowest and
highest held notes where possible.

`get_state_information()` returns the whole state, with preset metadata, as
bytes; `set_state_information(data)` restores it and ignores blobs it cannot
read.

### Parameters

`phantomsynth.params.create_parameter_layout()` returns a `ParameterSpec`
for every parameter: its identifier, display name, `NormalisableRange` and
default. A `ParameterState` holds the current values, indexed by identifier;
values set on it are snapped to the range's interval and clamped to its
bounds.

```python
from phantomsynth.params import ParameterState, create_parameter_layout

state = ParameterState(create_parameter_layout(), "Phantom")
state["filterCutoff"] = 2500.0
element = state.to_xml()
state.replace_state(element)
```

The parameter identifiers, defaults and the `EnvelopeType` enum live in
`phantomsynth.constants`.

### Presets

`PresetManager(parameters, preset_directory=None)` reads and writes XML
presets below a preset directory, creating it if needed. Without a directory
it uses `default_preset_directory()`, a per-user data location. It can:

- step through the `*.xml` files with `load_preset_file(increment)`, wrapping
  around at either end,
- save the current state with `save_state_to_file(path)`, taking the file
  name as the preset name,
- write a preset element into a type sub-directory with
  `save_xml_to_file(element, directory)`,
- round-trip state as text with `save_state_to_text()` and
  `load_state_from_text(text)`.

A preset whose version differs from the package's triggers a warning but is
still loaded.

### Building blocks

Each component can be used on its own:

| Module | Contents |
| --- | --- |
| `waveshaper` | `fexp2`, `atsr`, `cube`, `htan`, `hclip`, `clip`, `sign` |
| `phasor` | `Phasor`, `sawtooth` |
| `oscillator` | `Oscillator`, `midi_note_to_frequency` |
| `envelope` | `ADSRParameters`, `ADSR`, `Envelope` |
| `lfo` | `LFO` |
| `mixer` | `Mixer` |
| `filters` | `FilterType`, `StateVariableTPTFilter`, `Filter` |
| `amplifier` | `Amplifier` |
| `voice` | `Voice` |
| `synth` | `Synth`, `NoteOn`, `NoteOff` |

## What it does not do

phantomsynth is an engine only. It has no graphical editor, oscilloscope or
spectrum display, no command-line program, and does not load as a plugin in
an audio host. It does not read MIDI or talk to audio devices: notes come in
as `NoteOn` and `NoteOff` objects and audio goes out as numpy arrays. No
factory presets ship with it; the preset directory starts empty until
presets are saved into it.