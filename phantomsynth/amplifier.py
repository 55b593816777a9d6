"""Output level stage applying a (ramped when changed) gain to audio buffers."""

from __future__ import annotations

import numpy as np

from phantomsynth import constants as c
from phantomsynth.params import ParameterState


def _level_to_gain(level_db: float) -> float:
    return 2.0 ** (level_db / 6.0)


class Amplifier:
    """Applies the level parameter as gain, ramping between changes to avoid clicks."""

    def __init__(self, parameters: ParameterState) -> None:
        self.parameters = parameters
        self.previous_gain = _level_to_gain(parameters[c.LEVEL_PARAM_ID])

    def apply(self, buffer: np.ndarray) -> None:
        """Scale ``buffer`` in place; samples run along its last axis."""
        if not isinstance(buffer, np.ndarray):
            raise TypeError("buffer must be a numpy array")
        gain = _level_to_gain(self.parameters[c.LEVEL_PARAM_ID])
        if gain != self.previous_gain:
            num_samples = buffer.shape[-1] if buffer.ndim else 0
            if num_samples:
                step = (gain - self.previous_gain) / num_samples
                buffer *= self.previous_gain + step * np.arange(num_samples)
            self.previous_gain = gain
        else:
            buffer *= gain