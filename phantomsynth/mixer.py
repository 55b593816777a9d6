"""Mixes two oscillator outputs with ring modulation and smoothed noise."""

from __future__ import annotations

import math
import random

from phantomsynth import constants as c
from phantomsynth.params import ParameterState

_NORMALISER = math.sqrt(3.0)


class Mixer:
    """Blends the oscillators and adds ring modulation and noise."""

    def __init__(
        self, parameters: ParameterState, rng: random.Random | None = None
    ) -> None:
        self.parameters = parameters
        self.rng = rng if rng is not None else random.Random()
        self.previous_noise = 0.0

    def evaluate(self, osc1_value: float, osc2_value: float) -> float:
        """Return the mixed sample for one pair of oscillator values."""
        balance = self.parameters[c.MIXER_OSC_BAL_PARAM_ID]
        osc = osc1_value * (1.0 - balance) + osc2_value * balance

        ring_mod = osc1_value * osc2_value * self.parameters[c.MIXER_RING_MOD_PARAM_ID]

        smoothed = (self.rng.random() + self.previous_noise) / 2.0
        noise = (smoothed * 2.0 - 1.0) * self.parameters[c.MIXER_NOISE_PARAM_ID]
        self.previous_noise = smoothed

        mixed = (osc + osc + ring_mod + noise) / _NORMALISER
        return mixed * self.parameters[c.MIXER_AMP_GAIN_PARAM_ID]