"""A single synthesiser voice: oscillators, mixer, filter, envelopes and LFOs."""

from __future__ import annotations

import numpy as np

from phantomsynth import constants as c
from phantomsynth.constants import EnvelopeType
from phantomsynth.envelope import Envelope
from phantomsynth.filters import Filter
from phantomsynth.lfo import LFO
from phantomsynth.mixer import Mixer
from phantomsynth.oscillator import Oscillator
from phantomsynth.params import ParameterState

_OSC_SYNC_PHASE_THRESHOLD = 0.2
_TAIL_OFF_FACTOR = 0.99
_TAIL_OFF_SILENCE = 0.001
_DEFAULT_NOTE = 60


def _as_channels(buffer: np.ndarray) -> np.ndarray:
    """Return a (channels, samples) view of ``buffer`` that writes through."""
    if not isinstance(buffer, np.ndarray):
        raise TypeError("buffer must be a numpy array")
    if buffer.ndim == 1:
        return buffer[np.newaxis, :]
    if buffer.ndim == 2:
        return buffer
    raise ValueError("buffer must have one or two dimensions")


class Voice:
    """Renders one note through the full signal chain into an audio buffer."""

    def __init__(self, parameters: ParameterState, sample_rate: float) -> None:
        if not sample_rate > 0:
            raise ValueError("sample rate must be positive")
        self.parameters = parameters
        self.sample_rate = float(sample_rate)

        self.amp_envelope = Envelope(parameters, EnvelopeType.AMP)
        self.phase_envelope = Envelope(parameters, EnvelopeType.PHASOR)
        self.filter_envelope = Envelope(parameters, EnvelopeType.FILTER)
        self.mod_envelope = Envelope(parameters, EnvelopeType.MOD)
        self._envelopes = (
            self.amp_envelope,
            self.phase_envelope,
            self.filter_envelope,
            self.mod_envelope,
        )

        self.lfo1 = LFO(parameters, 1)
        self.lfo2 = LFO(parameters, 2)

        self.primary_oscillator = Oscillator(parameters, 1)
        self.secondary_oscillator = Oscillator(parameters, 2)
        self.mixer = Mixer(parameters)
        self.filter = Filter(parameters, self.sample_rate)

        self.midi_note_number = _DEFAULT_NOTE
        self.currently_playing_note = -1
        self.key_down = False
        self.velocity = 0.0
        self.note_on_time = 0
        self.tail_off = 0.0
        self._note_on = False
        self._note_cleared = True

    @property
    def is_active(self) -> bool:
        """True while the voice is assigned to a note."""
        return self.currently_playing_note >= 0

    @property
    def is_playing_but_released(self) -> bool:
        """True when the voice holds a note whose key has been let go."""
        return self.is_active and not self.key_down

    def start_note(self, midi_note_number: int, velocity: float) -> None:
        """Begin playing ``midi_note_number``: tune the oscillators and open the envelopes."""
        self.currently_playing_note = midi_note_number
        self.key_down = True
        self.velocity = velocity
        self._note_on = True
        self._note_cleared = False

        self.midi_note_number = midi_note_number
        self.primary_oscillator.update(midi_note_number, self.sample_rate)
        self.secondary_oscillator.update(midi_note_number, self.sample_rate)

        for envelope in self._envelopes:
            envelope.note_on()

    def stop_note(self, velocity: float, allow_tail_off: bool) -> None:
        """Release the envelopes, or silence the voice at once without a tail."""
        if not allow_tail_off:
            self.clear()
            return
        self._note_on = False
        for envelope in self._envelopes:
            envelope.note_off()

    def release_key(self) -> None:
        """Record that the key holding this voice's note was let go."""
        self.key_down = False

    def clear(self) -> None:
        """Free the voice and return envelopes and oscillators to rest."""
        self.currently_playing_note = -1
        for envelope in self._envelopes:
            envelope.reset()
        self.primary_oscillator.reset()
        self.secondary_oscillator.reset()
        self._note_cleared = True

    def render_next_block(
        self, buffer: np.ndarray, start_sample: int, num_samples: int
    ) -> None:
        """Add ``num_samples`` samples to every channel of ``buffer`` from ``start_sample``."""
        channels = _as_channels(buffer)
        if num_samples < 0 or start_sample < 0:
            raise ValueError("start sample and sample count must not be negative")
        if start_sample + num_samples > channels.shape[1]:
            raise ValueError("block extends past the end of the buffer")
        if num_samples == 0:
            return

        if self._note_on and not self.key_down:
            self.stop_note(0.0, True)

        for envelope in self._envelopes:
            envelope.update(self.sample_rate)
        self.lfo1.update(self.sample_rate)
        self.lfo2.update(self.sample_rate)
        self.primary_oscillator.update(self.midi_note_number, self.sample_rate)
        self.secondary_oscillator.update(self.midi_note_number, self.sample_rate)
        self.filter.update()

        values = [self._next_sample() for _ in range(num_samples)]
        channels[:, start_sample : start_sample + num_samples] += np.asarray(
            values, dtype=channels.dtype
        )

    def _next_sample(self) -> float:
        amp_mod = self.amp_envelope.evaluate()
        phase_mod = self.phase_envelope.evaluate()
        filter_mod = self.filter_envelope.evaluate()
        mod_mod = self.mod_envelope.evaluate()

        lfo1_mod = self.lfo1.evaluate()
        lfo2_mod = self.lfo2.evaluate()

        self._handle_osc_sync(self.primary_oscillator.phase)

        primary = self.primary_oscillator.evaluate(mod_mod, lfo2_mod, phase_mod, lfo2_mod)
        secondary = self.secondary_oscillator.evaluate(
            mod_mod, lfo2_mod, phase_mod, lfo2_mod
        )
        mixed = self.mixer.evaluate(primary, secondary)
        filtered = self.filter.evaluate(mixed, filter_mod, lfo1_mod)
        amplified = filtered * amp_mod

        if self.is_active:
            self.tail_off = 1.0
        value = amplified * self.tail_off

        self.tail_off *= _TAIL_OFF_FACTOR
        if not self._note_cleared and self.tail_off < _TAIL_OFF_SILENCE:
            self.clear()
        return value

    def _handle_osc_sync(self, phase: float) -> None:
        if not self.parameters[c.OSC_SYNC_PARAM_ID]:
            return
        if phase <= _OSC_SYNC_PHASE_THRESHOLD:
            self.secondary_oscillator.phase = phase