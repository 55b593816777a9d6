"""Cosine wavetable oscillator with phase distortion, pitch modulation and shaping."""

from __future__ import annotations

import math

from phantomsynth import constants as c
from phantomsynth.params import ParameterState
from phantomsynth.phasor import Phasor
from phantomsynth.waveshaper import atsr

_MOD_EXPO_THRESHOLD = 5

_PARAMETER_IDS = {
    1: (
        c.OSC_01_RANGE_PARAM_ID,
        c.OSC_01_COARSE_TUNE_PARAM_ID,
        c.OSC_01_FINE_TUNE_PARAM_ID,
        c.OSC_01_MOD_DEPTH_PARAM_ID,
        c.OSC_01_MOD_SOURCE_PARAM_ID,
        c.OSC_01_SHAPE_INT_PARAM_ID,
    ),
    2: (
        c.OSC_02_RANGE_PARAM_ID,
        c.OSC_02_COARSE_TUNE_PARAM_ID,
        c.OSC_02_FINE_TUNE_PARAM_ID,
        c.OSC_02_MOD_DEPTH_PARAM_ID,
        c.OSC_02_MOD_SOURCE_PARAM_ID,
        c.OSC_02_SHAPE_INT_PARAM_ID,
    ),
}

_WAVETABLE = tuple(
    math.cos(2.0 * math.pi * i / c.WAVETABLE_SIZE) for i in range(c.WAVETABLE_SIZE)
)


def midi_note_to_frequency(midi_note: float) -> float:
    """Convert a (possibly fractional) MIDI note number to Hz, A4 = 440 Hz."""
    return math.exp((midi_note - 69) * math.log(2) / 12.0) * 440.0


class Oscillator:
    """Reads a cosine wavetable through a phasor; the phasor supplies the timbre."""

    def __init__(self, parameters: ParameterState, osc_number: int = 1) -> None:
        self.parameters = parameters
        self.osc_number = osc_number
        self.phasor = Phasor(parameters, osc_number)
        (
            self._range_id,
            self._coarse_id,
            self._fine_id,
            self._mod_depth_id,
            self._mod_source_id,
            self._shape_int_id,
        ) = _PARAMETER_IDS.get(osc_number, _PARAMETER_IDS[1])
        self.wavetable = _WAVETABLE
        self.sample_rate: float | None = None
        self.phase = 0.0
        self.phase_delta = 0.0
        self.midi_note_number = -1
        self.frequency = 0.0

    def reset(self) -> None:
        """Return phase, note and frequency to their initial state."""
        self.phase = 0.0
        self.phase_delta = 0.0
        self.midi_note_number = -1
        self.frequency = 0.0

    def update(self, midi_note_number: int, sample_rate: float) -> None:
        """Set the note and sample rate, recomputing frequency and phase step."""
        if not sample_rate > 0:
            raise ValueError("sample rate must be positive")
        self.midi_note_number = midi_note_number
        self.sample_rate = float(sample_rate)

        note = (
            self.midi_note_number
            + self.parameters[self._coarse_id]
            + self.parameters[self._fine_id] / 100.0
        )
        octave = 2.0 ** (int(self.parameters[self._range_id]) - 2)
        self.frequency = midi_note_to_frequency(note) * octave
        self._update_phase_delta(self.frequency)

    def evaluate(
        self,
        osc_eg_mod: float,
        osc_lfo_mod: float,
        phase_eg_mod: float,
        phase_lfo_mod: float,
    ) -> float:
        """Return the next sample, applying phase distortion, pitch mod and shaping."""
        if self.sample_rate is None:
            raise RuntimeError("update() must be called before evaluate()")

        position = self.phasor.apply(self.phase, phase_eg_mod, phase_lfo_mod)
        index = int(position)
        value = self.wavetable[index] if 0 <= index < len(self.wavetable) else 0.0

        self.phase = math.fmod(self.phase + self.phase_delta, c.WAVETABLE_SIZE)

        mod = osc_lfo_mod if int(self.parameters[self._mod_source_id]) else osc_eg_mod
        exponent = self.parameters[self._mod_depth_id] * mod * _MOD_EXPO_THRESHOLD
        self._update_phase_delta(self.frequency * 2.0**exponent)

        shape_int = self.parameters[self._shape_int_id]
        return shape_int * atsr(value) + (1.0 - shape_int) * value

    def _update_phase_delta(self, frequency: float) -> None:
        self.phase_delta = frequency / self.sample_rate * c.WAVETABLE_SIZE