"""The polyphonic synthesiser: voice allocation and note event handling."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from phantomsynth.params import ParameterState
from phantomsynth.voice import Voice

NUM_VOICES = 4


@dataclass(frozen=True)
class NoteOn:
    """A key press at ``sample_position`` within the buffer being rendered."""

    note: int
    velocity: float = 1.0
    sample_position: int = 0


@dataclass(frozen=True)
class NoteOff:
    """A key release at ``sample_position`` within the buffer being rendered."""

    note: int
    velocity: float = 0.0
    sample_position: int = 0
    allow_tail_off: bool = True


class Synth:
    """Owns a fixed pool of voices and dispatches note events to them.

    Every voice plays every note on every channel; when all voices are busy
    the oldest unprotected one is stolen, keeping the lowest and highest held
    notes where possible.
    """

    def __init__(self, parameters: ParameterState) -> None:
        self.parameters = parameters
        self.voices: list[Voice] = []
        self.sample_rate: float | None = None
        self.samples_per_block = 0
        self.num_channels = 0
        self._note_on_counter = 0

    def init(self, sample_rate: float, samples_per_block: int, num_channels: int) -> None:
        """Rebuild the voice pool for the given playback settings."""
        if not sample_rate > 0:
            raise ValueError("sample rate must be positive")
        self.clear()
        self.sample_rate = float(sample_rate)
        self.samples_per_block = samples_per_block
        self.num_channels = num_channels
        self.voices = [Voice(self.parameters, self.sample_rate) for _ in range(NUM_VOICES)]

    def clear(self) -> None:
        """Remove every voice."""
        self.voices = []

    def note_on(self, midi_note_number: int, velocity: float) -> Voice | None:
        """Start a note on a free (or stolen) voice and return that voice."""
        for voice in self.voices:
            if voice.currently_playing_note == midi_note_number:
                voice.stop_note(1.0, True)

        voice = self._find_free_voice()
        if voice is None:
            return None
        if voice.is_active:
            voice.stop_note(0.0, False)
        self._note_on_counter += 1
        voice.note_on_time = self._note_on_counter
        voice.start_note(midi_note_number, velocity)
        return voice

    def note_off(
        self, midi_note_number: int, velocity: float = 0.0, allow_tail_off: bool = True
    ) -> None:
        """Release every voice playing ``midi_note_number``."""
        for voice in self.voices:
            if voice.currently_playing_note == midi_note_number:
                voice.release_key()
                voice.stop_note(velocity, allow_tail_off)

    def render_next_block(
        self,
        buffer: np.ndarray,
        events: Iterable[NoteOn | NoteOff] = (),
        start_sample: int = 0,
        num_samples: int | None = None,
    ) -> None:
        """Render all voices into ``buffer``, applying events at their sample positions."""
        if not isinstance(buffer, np.ndarray):
            raise TypeError("buffer must be a numpy array")
        length = buffer.shape[-1] if buffer.ndim else 0
        if num_samples is None:
            num_samples = length - start_sample
        if start_sample < 0 or num_samples < 0 or start_sample + num_samples > length:
            raise ValueError("block lies outside the buffer")

        end = start_sample + num_samples
        position = start_sample
        for event in sorted(events, key=lambda e: e.sample_position):
            at = min(max(event.sample_position, position), end)
            if at > position:
                self._render_voices(buffer, position, at - position)
                position = at
            self._handle_event(event)
        if position < end:
            self._render_voices(buffer, position, end - position)

    def _render_voices(self, buffer: np.ndarray, start: int, count: int) -> None:
        for voice in self.voices:
            voice.render_next_block(buffer, start, count)

    def _handle_event(self, event: NoteOn | NoteOff) -> None:
        if isinstance(event, NoteOn):
            self.note_on(event.note, event.velocity)
        elif isinstance(event, NoteOff):
            self.note_off(event.note, event.velocity, event.allow_tail_off)
        else:
            raise TypeError(f"unsupported event {event!r}")

    def _find_free_voice(self) -> Voice | None:
        for voice in self.voices:
            if not voice.is_active:
                return voice
        return self._find_voice_to_steal()

    def _find_voice_to_steal(self) -> Voice | None:
        usable = sorted(self.voices, key=lambda v: v.note_on_time)
        if not usable:
            return None

        low: Voice | None = None
        top: Voice | None = None
        for voice in usable:
            if voice.is_playing_but_released:
                continue
            note = voice.currently_playing_note
            if low is None or note < low.currently_playing_note:
                low = voice
            if top is None or note > top.currently_playing_note:
                top = voice
        if top is low:
            top = None

        unprotected = [v for v in usable if v is not low and v is not top]
        for voice in unprotected:
            if voice.is_playing_but_released:
                return voice
        for voice in unprotected:
            if not voice.key_down:
                return voice
        if unprotected:
            return unprotected[0]
        return top if top is not None else low