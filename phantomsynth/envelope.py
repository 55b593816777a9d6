"""ADSR envelope generation bound to the synthesiser's parameter state."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass

from phantomsynth import constants as c
from phantomsynth.constants import EnvelopeType
from phantomsynth.params import ParameterState


@dataclass
class ADSRParameters:
    """Attack, decay and release times in seconds; sustain as a level in [0, 1]."""

    attack: float = 0.1
    decay: float = 0.1
    sustain: float = 1.0
    release: float = 0.1


class _Stage(enum.Enum):
    IDLE = enum.auto()
    ATTACK = enum.auto()
    DECAY = enum.auto()
    SUSTAIN = enum.auto()
    RELEASE = enum.auto()


def _rate(distance: float, seconds: float, sample_rate: float) -> float:
    return distance / (seconds * sample_rate) if seconds > 0.0 else -1.0


class ADSR:
    """A linear attack-decay-sustain-release envelope stepped one sample at a time."""

    def __init__(self) -> None:
        self.settings = ADSRParameters()
        self.sample_rate = 44100.0
        self.stage = _Stage.IDLE
        self.value = 0.0
        self._attack_rate = 0.0
        self._decay_rate = 0.0
        self._release_rate = 0.0
        self._recalculate_rates()

    def set_parameters(self, parameters: ADSRParameters) -> None:
        """Replace the envelope's times and sustain level."""
        if parameters.attack < 0 or parameters.decay < 0 or parameters.release < 0:
            raise ValueError("envelope times must not be negative")
        if not 0.0 <= parameters.sustain <= 1.0:
            raise ValueError("sustain level must lie in [0, 1]")
        self.settings = dataclasses.replace(parameters)
        self._recalculate_rates()

    def set_sample_rate(self, sample_rate: float) -> None:
        """Set the rate at which samples are drawn."""
        if not sample_rate > 0:
            raise ValueError("sample rate must be positive")
        self.sample_rate = float(sample_rate)
        self._recalculate_rates()

    def note_on(self) -> None:
        """Start the envelope from its attack (or the first stage with a length)."""
        if self._attack_rate > 0.0:
            self.stage = _Stage.ATTACK
        elif self._decay_rate > 0.0:
            self.value = 1.0
            self.stage = _Stage.DECAY
        else:
            self.value = self.settings.sustain
            self.stage = _Stage.SUSTAIN

    def note_off(self) -> None:
        """Move into the release stage from wherever the envelope is."""
        if self.stage is _Stage.IDLE:
            return
        if self.settings.release > 0.0:
            self._release_rate = self.value / (self.settings.release * self.sample_rate)
            self.stage = _Stage.RELEASE
        else:
            self.reset()

    def reset(self) -> None:
        """Return to silence immediately."""
        self.value = 0.0
        self.stage = _Stage.IDLE

    def get_next_sample(self) -> float:
        """Advance one sample and return the envelope level."""
        if self.stage is _Stage.IDLE:
            return 0.0
        if self.stage is _Stage.ATTACK:
            self.value += self._attack_rate
            if self.value >= 1.0:
                self.value = 1.0
                self._go_to_next_stage()
        elif self.stage is _Stage.DECAY:
            self.value -= self._decay_rate
            if self.value <= self.settings.sustain:
                self.value = self.settings.sustain
                self._go_to_next_stage()
        elif self.stage is _Stage.SUSTAIN:
            self.value = self.settings.sustain
        elif self.stage is _Stage.RELEASE:
            self.value -= self._release_rate
            if self.value <= 0.0:
                self._go_to_next_stage()
        return self.value

    def is_active(self) -> bool:
        """True while the envelope is anywhere but idle."""
        return self.stage is not _Stage.IDLE

    def _recalculate_rates(self) -> None:
        s = self.settings
        self._attack_rate = _rate(1.0, s.attack, self.sample_rate)
        self._decay_rate = _rate(1.0 - s.sustain, s.decay, self.sample_rate)
        self._release_rate = _rate(s.sustain, s.release, self.sample_rate)

        if (
            (self.stage is _Stage.ATTACK and self._attack_rate <= 0.0)
            or (
                self.stage is _Stage.DECAY
                and (self._decay_rate <= 0.0 or self.value <= s.sustain)
            )
            or (self.stage is _Stage.RELEASE and self._release_rate <= 0.0)
        ):
            self._go_to_next_stage()

    def _go_to_next_stage(self) -> None:
        if self.stage is _Stage.ATTACK:
            self.stage = _Stage.DECAY if self._decay_rate > 0.0 else _Stage.SUSTAIN
        elif self.stage is _Stage.DECAY:
            self.stage = _Stage.SUSTAIN
        elif self.stage is _Stage.RELEASE:
            self.reset()


_PARAMETER_IDS = {
    EnvelopeType.AMP: (
        c.AMP_EG_ATK_PARAM_ID,
        c.AMP_EG_DEC_PARAM_ID,
        c.AMP_EG_SUS_PARAM_ID,
        c.AMP_EG_REL_PARAM_ID,
    ),
    EnvelopeType.PHASOR: (
        c.PHASOR_EG_ATK_PARAM_ID,
        c.PHASOR_EG_DEC_PARAM_ID,
        c.PHASOR_EG_SUS_PARAM_ID,
        c.PHASOR_EG_REL_PARAM_ID,
    ),
    EnvelopeType.FILTER: (
        c.FLTR_EG_ATK_PARAM_ID,
        c.FLTR_EG_DEC_PARAM_ID,
        c.FLTR_EG_SUS_PARAM_ID,
        c.FLTR_EG_REL_PARAM_ID,
    ),
    EnvelopeType.MOD: (
        c.MOD_EG_ATK_PARAM_ID,
        c.MOD_EG_DEC_PARAM_ID,
        c.MOD_EG_SUS_PARAM_ID,
        c.MOD_EG_REL_PARAM_ID,
    ),
}


def _db_to_gain(level_db: float) -> float:
    return 2.0 ** (level_db / 6.0)


class Envelope(ADSR):
    """An ADSR envelope reading its settings from the parameter state.

    Sustain is given in decibels and glides towards new values; the output is
    averaged with the previous sample to soften discontinuities.
    """

    def __init__(self, parameters: ParameterState, envelope_type: EnvelopeType) -> None:
        super().__init__()
        self.parameters = parameters
        self.envelope_type = EnvelopeType(envelope_type)
        (
            self._attack_id,
            self._decay_id,
            self._sustain_id,
            self._release_id,
        ) = _PARAMETER_IDS[self.envelope_type]
        self._previous_sustain = parameters[self._sustain_id]
        self._sustain_gain = _db_to_gain(self._previous_sustain)
        self._previous_sample = 0.0
        self._apply_parameters()

    def update(self, sample_rate: float) -> None:
        """Pick up the current ADSR parameters and the sample rate."""
        self._apply_parameters()
        self.set_sample_rate(sample_rate)

    def evaluate(self) -> float:
        """Return the next smoothed envelope value."""
        result = (self.get_next_sample() + self._previous_sample) / 2.0
        self._previous_sample = result
        return result

    def _apply_parameters(self) -> None:
        sustain_db = self.parameters[self._sustain_id]
        if sustain_db != self._previous_sustain:
            self._previous_sustain = (self._previous_sustain + sustain_db) / 2.0
            self._sustain_gain = _db_to_gain(self._previous_sustain)
        self.set_parameters(
            ADSRParameters(
                attack=self.parameters[self._attack_id],
                decay=self.parameters[self._decay_id],
                sustain=self._sustain_gain,
                release=self.parameters[self._release_id],
            )
        )