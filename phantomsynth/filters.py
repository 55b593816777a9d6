"""State-variable filter and the modulated, driven filter stage built on it."""

from __future__ import annotations

import enum
import math

from phantomsynth import constants as c
from phantomsynth.params import ParameterState
from phantomsynth.waveshaper import clip, htan

_CUTOFF_MODULATION_MULTIPLIER = 3000.0
_CUTOFF_LOWER_BOUND = 0.0
_CUTOFF_UPPER_BOUND = 11000.0
_CHANNEL = 0


class FilterType(enum.IntEnum):
    """Response of the state-variable filter."""

    LOWPASS = 0
    BANDPASS = 1
    HIGHPASS = 2


class StateVariableTPTFilter:
    """Topology-preserving-transform state-variable filter with per-channel state."""

    def __init__(self, sample_rate: float, num_channels: int = 1) -> None:
        if not sample_rate > 0:
            raise ValueError("sample rate must be positive")
        if num_channels < 1:
            raise ValueError("at least one channel is required")
        self.sample_rate = float(sample_rate)
        self.filter_type = FilterType.LOWPASS
        self.cutoff = 1000.0
        self.resonance = 1.0 / math.sqrt(2.0)
        self._s1 = [0.0] * num_channels
        self._s2 = [0.0] * num_channels
        self._update()

    def set_cutoff_frequency(self, frequency: float) -> None:
        """Set the cutoff in Hz; it must lie in [0, sample_rate / 2)."""
        if not 0.0 <= frequency < self.sample_rate * 0.5:
            raise ValueError(
                f"cutoff {frequency!r} Hz outside [0, {self.sample_rate * 0.5!r})"
            )
        self.cutoff = float(frequency)
        self._update()

    def set_resonance(self, resonance: float) -> None:
        """Set the resonance (Q); it must be positive."""
        if not resonance > 0:
            raise ValueError("resonance must be positive")
        self.resonance = float(resonance)
        self._update()

    def reset(self) -> None:
        """Clear the internal state of every channel."""
        self._s1 = [0.0] * len(self._s1)
        self._s2 = [0.0] * len(self._s2)

    def process_sample(self, channel: int, sample: float) -> float:
        """Filter one sample on ``channel`` and return the selected response."""
        s1 = self._s1[channel]
        s2 = self._s2[channel]
        g, r2, h = self._g, self._r2, self._h

        high = h * (sample - s1 * (g + r2) - s2)
        band = high * g + s1
        self._s1[channel] = high * g + band
        low = band * g + s2
        self._s2[channel] = band * g + low

        if self.filter_type == FilterType.BANDPASS:
            return band
        if self.filter_type == FilterType.HIGHPASS:
            return high
        return low

    def _update(self) -> None:
        self._g = math.tan(math.pi * self.cutoff / self.sample_rate)
        self._r2 = 1.0 / self.resonance
        self._h = 1.0 / (1.0 + self._r2 * self._g + self._g * self._g)


class Filter:
    """Driven state-variable filter with envelope and LFO cutoff modulation."""

    def __init__(self, parameters: ParameterState, sample_rate: float) -> None:
        self.parameters = parameters
        self.svf = StateVariableTPTFilter(sample_rate, 1)
        self.previous_frequency = 0.0
        self.update()

    def update(self) -> None:
        """Pick up the filter mode and resonance from the parameters."""
        self.svf.filter_type = FilterType(int(self.parameters[c.FLTR_MODE_PARAM_ID]))
        self.svf.set_resonance(self.parameters[c.FLTR_RESO_PARAM_ID])

    def evaluate(self, sample: float, eg_mod: float, lfo_mod: float) -> float:
        """Drive, then filter ``sample`` with the modulated cutoff."""
        params = self.parameters
        eg_depth = params[c.FLTR_EG_MOD_DEPTH_PARAM_ID]
        lfo_depth = params[c.FLTR_LFO_MOD_DEPTH_PARAM_ID]
        drive = params[c.FLTR_DRIVE_PARAM_ID]

        envelope = eg_depth * eg_mod * (abs(lfo_depth) * -0.5 + 1.0)
        lfo = lfo_depth * (lfo_mod * 0.5 + 0.5) * (abs(eg_depth) * -0.5 + 1.0)
        offset = _CUTOFF_MODULATION_MULTIPLIER * (envelope + lfo)

        frequency = clip(
            params[c.FLTR_CUTOFF_PARAM_ID] + offset,
            _CUTOFF_LOWER_BOUND,
            _CUTOFF_UPPER_BOUND,
        )
        self.svf.set_cutoff_frequency((self.previous_frequency + frequency) * 0.5)
        self.previous_frequency = frequency

        distortion = htan(drive, sample)
        driven = drive * distortion + (1.0 - drive) * sample
        return self.svf.process_sample(_CHANNEL, driven)