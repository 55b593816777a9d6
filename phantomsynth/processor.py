"""The top-level audio processor: parameter state, presets, synthesis and output level."""

from __future__ import annotations

import struct
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from pathlib import Path

import numpy as np

from phantomsynth import constants as c
from phantomsynth.amplifier import Amplifier
from phantomsynth.params import ParameterState, create_parameter_layout
from phantomsynth.presets import PresetManager
from phantomsynth.synth import NoteOff, NoteOn, Synth

# State blobs start with this little-endian marker, then the UTF-8 length of
# the XML text, then the text itself and a terminating zero byte.
STATE_MAGIC = 0x21324356
_HEADER = struct.Struct("<II")


class AudioProcessor:
    """Ties the parameter state, preset manager, synthesiser and amplifier together."""

    name = c.PLUGIN_NAME
    accepts_midi = True
    produces_midi = False
    is_midi_effect = False
    tail_length_seconds = 0.0

    def __init__(self, preset_directory: str | Path | None = None) -> None:
        self.parameters = ParameterState(create_parameter_layout(), c.PLUGIN_NAME)
        self.preset_manager = PresetManager(self.parameters, preset_directory)
        self.synth = Synth(self.parameters)
        self.amplifier = Amplifier(self.parameters)

    def prepare_to_play(
        self, sample_rate: float, samples_per_block: int, num_channels: int = 2
    ) -> None:
        """Prepare the synthesiser for playback at the given settings."""
        self.synth.init(float(sample_rate), samples_per_block, num_channels)

    def process_block(
        self, buffer: np.ndarray, events: Iterable[NoteOn | NoteOff] = ()
    ) -> None:
        """Overwrite ``buffer`` with the next block of audio; samples run along its last axis."""
        if not isinstance(buffer, np.ndarray):
            raise TypeError("buffer must be a numpy array")
        buffer[...] = 0
        num_samples = buffer.shape[-1] if buffer.ndim else 0
        self.synth.render_next_block(buffer, events, 0, num_samples)
        self.amplifier.apply(buffer)

    def get_state_information(self) -> bytes:
        """Return the current state, with preset metadata, as a binary blob."""
        element = self.preset_manager.save_metadata_to_xml(self.parameters.to_xml())
        text = ET.tostring(element, encoding="unicode").encode("utf-8")
        return _HEADER.pack(STATE_MAGIC, len(text)) + text + b"\0"

    def set_state_information(self, data: bytes) -> None:
        """Restore state from a blob made by :meth:`get_state_information`.

        Blobs that are too short, carry the wrong marker or hold unparsable
        XML are ignored.
        """
        data = bytes(data)
        if len(data) <= _HEADER.size:
            return
        magic, length = _HEADER.unpack_from(data)
        if magic != STATE_MAGIC or length == 0:
            return
        payload = data[_HEADER.size : _HEADER.size + length].rstrip(b"\0")
        try:
            element = ET.fromstring(payload.decode("utf-8"))
        except (ET.ParseError, UnicodeDecodeError):
            return
        self.preset_manager.load_state_from_xml(element)