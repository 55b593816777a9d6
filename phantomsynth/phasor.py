"""Phase distortion applied to an oscillator's wavetable read position."""

from __future__ import annotations

from phantomsynth import constants as c
from phantomsynth.params import ParameterState

_BREAKPOINT = 0.01

_PARAMETER_IDS = {
    1: (
        c.PHASOR_01_SHAPE_PARAM_ID,
        c.PHASOR_01_EG_INT_PARAM_ID,
        c.PHASOR_01_LFO_INT_PARAM_ID,
    ),
    2: (
        c.PHASOR_02_SHAPE_PARAM_ID,
        c.PHASOR_02_EG_INT_PARAM_ID,
        c.PHASOR_02_LFO_INT_PARAM_ID,
    ),
}


def sawtooth(phase: float) -> float:
    """Distort a normalised phase so that a cosine reads like a sawtooth.

    The first half of the output is covered within a short breakpoint, the
    second half over the rest of the cycle.
    """
    if phase <= _BREAKPOINT:
        return (0.5 / _BREAKPOINT) * phase
    return (0.5 / (1.0 - _BREAKPOINT)) * (phase - _BREAKPOINT) + 0.5


class Phasor:
    """Bends an oscillator's phase, with envelope and LFO controlled intensity."""

    def __init__(self, parameters: ParameterState, phasor_number: int = 1) -> None:
        self.parameters = parameters
        self.phasor_number = phasor_number
        self._shape_id, self._eg_int_id, self._lfo_int_id = _PARAMETER_IDS.get(
            phasor_number, _PARAMETER_IDS[1]
        )

    def apply(self, phase: float, eg_mod: float, lfo_mod: float) -> float:
        """Return the distorted wavetable position for ``phase``."""
        eg_int = self.parameters[self._eg_int_id]
        lfo_int = self.parameters[self._lfo_int_id]

        envelope = eg_int * eg_mod * (lfo_int * -0.5 + 1.0)
        lfo = lfo_int * (lfo_mod * 0.5 + 0.5) * (eg_int * -0.5 + 1.0)
        mod = envelope + lfo

        normalised = phase / c.WAVETABLE_SIZE
        shaped = self._evaluate(normalised)
        normalised = shaped * mod + normalised * (1.0 - mod)
        return normalised * c.WAVETABLE_SIZE

    def _evaluate(self, phase: float) -> float:
        if int(self.parameters[self._shape_id]) == 1:
            return 1.0 - sawtooth(phase)
        return sawtooth(phase)