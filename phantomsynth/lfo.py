"""Wavetable low-frequency oscillator used for modulation."""

from __future__ import annotations

import math
import random

from phantomsynth import constants as c
from phantomsynth.params import ParameterState

_PARAMETER_IDS = {
    1: (c.LFO_01_RATE_PARAM_ID, c.LFO_01_SHAPE_PARAM_ID),
    2: (c.LFO_02_RATE_PARAM_ID, c.LFO_02_SHAPE_PARAM_ID),
}

_RANDOM_SHAPE = 4


def _shape_value(shape: int, position: float) -> float:
    if shape == 1:
        return 2.0 * abs(position * 2.0 - 1.0) - 1.0
    if shape == 2:
        return position * 2.0 - 1.0
    if shape == 3:
        return 1.0 if position <= 0.5 else -1.0
    return math.sin(2.0 * math.pi * position)


def _build_wavetable(shape: int) -> tuple[float, ...]:
    size = c.WAVETABLE_SIZE
    return tuple(_shape_value(shape, i / size) for i in range(size))


def _lookup(table: tuple[float, ...], phase: float) -> float:
    index = int(phase)
    return table[index] if 0 <= index < len(table) else 0.0


class LFO:
    """Bipolar modulation source: sine, triangle, saw, square or sample-and-hold."""

    def __init__(
        self,
        parameters: ParameterState,
        lfo_number: int = 1,
        rng: random.Random | None = None,
    ) -> None:
        self.parameters = parameters
        self.lfo_number = lfo_number
        self.rng = rng if rng is not None else random.Random()
        self._rate_id, self._shape_id = _PARAMETER_IDS.get(lfo_number, _PARAMETER_IDS[1])
        self.sample_rate: float | None = None
        self.phase = 0.0
        self.phase_delta = 0.0
        self.sample_value = 0.0
        self._previous_shape = parameters[self._shape_id]
        self.wavetable = _build_wavetable(int(self._previous_shape))

    def update(self, sample_rate: float) -> None:
        """Pick up rate and shape; rebuild the wavetable if the shape changed."""
        if not sample_rate > 0:
            raise ValueError("sample rate must be positive")
        self.sample_rate = float(sample_rate)
        cycles_per_sample = self.parameters[self._rate_id] / self.sample_rate
        self.phase_delta = cycles_per_sample * c.WAVETABLE_SIZE

        shape = self.parameters[self._shape_id]
        if shape != self._previous_shape:
            self.wavetable = _build_wavetable(int(shape))
            self._previous_shape = shape

    def evaluate(self) -> float:
        """Return the next value in [-1, 1] and advance the phase."""
        if int(self.parameters[self._shape_id]) != _RANDOM_SHAPE:
            self.sample_value = _lookup(self.wavetable, self.phase)
        elif int(self.phase) <= 1:
            self.sample_value = self.rng.random() * 2.0 - 1.0

        self.phase = math.fmod(self.phase + self.phase_delta, c.WAVETABLE_SIZE)
        return self.sample_value