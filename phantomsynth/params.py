"""Parameter ranges, the plugin's parameter layout and the live parameter state."""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from phantomsynth import constants as c
from phantomsynth.constants import calculate_skew_factor


@dataclass(frozen=True)
class NormalisableRange:
    """A value range with optional snapping interval and skew."""

    start: float
    end: float
    interval: float = 0.0
    skew: float = 1.0
    symmetric_skew: bool = False

    def __post_init__(self) -> None:
        if not self.end > self.start:
            raise ValueError("range end must be greater than its start")
        if self.interval < 0:
            raise ValueError("interval must not be negative")
        if not self.skew > 0:
            raise ValueError("skew must be positive")

    def snap(self, value: float) -> float:
        """Round ``value`` to the nearest legal step and clamp it to the range."""
        if self.interval > 0:
            value = self.start + self.interval * math.floor(
                (value - self.start) / self.interval + 0.5
            )
        if value <= self.start:
            return self.start
        if value >= self.end:
            return self.end
        return value

    def convert_to_0to1(self, value: float) -> float:
        """Map a value in the range to a proportion in [0, 1]."""
        proportion = min(max((value - self.start) / (self.end - self.start), 0.0), 1.0)
        if self.skew == 1.0:
            return proportion
        if not self.symmetric_skew:
            return proportion**self.skew
        distance = 2.0 * proportion - 1.0
        shaped = abs(distance) ** self.skew * (-1.0 if distance < 0 else 1.0)
        return (1.0 + shaped) / 2.0

    def convert_from_0to1(self, proportion: float) -> float:
        """Map a proportion in [0, 1] back to a value in the range."""
        proportion = min(max(proportion, 0.0), 1.0)
        if not self.symmetric_skew:
            if self.skew != 1.0 and proportion > 0.0:
                proportion = math.exp(math.log(proportion) / self.skew)
        else:
            distance = 2.0 * proportion - 1.0
            if self.skew != 1.0 and distance != 0.0:
                distance = math.copysign(
                    math.exp(math.log(abs(distance)) / self.skew), distance
                )
            proportion = (1.0 + distance) / 2.0
        return self.start + (self.end - self.start) * proportion


@dataclass(frozen=True)
class ParameterSpec:
    """A single automatable parameter: identifier, display name, range and default."""

    parameter_id: str
    name: str
    range: NormalisableRange
    default: float


def _spec(parameter_id, name, start, end, interval, default, center=None):
    skew = 1.0 if center is None else calculate_skew_factor(*center)
    return ParameterSpec(
        parameter_id, name, NormalisableRange(start, end, interval, skew), default
    )


def create_parameter_layout() -> tuple[ParameterSpec, ...]:
    """Return every parameter of the synthesiser in declaration order."""
    attack = (0.01, 10.0, 0.01)
    decay = (0.01, 2.0, 0.01)
    sustain = (-60.0, 0.0, 0.1)
    release = (0.01, 20.0, 0.01)
    attack_center = (0.01, 10.0, 1.0)
    decay_center = (0.01, 2.0, 0.5)
    sustain_center = (-90.0, 0.0, -15.0)
    release_center = (0.01, 20.0, 1.0)
    lfo_rate_center = (0.1, 100.0, 20.0)

    return (
        _spec(c.LEVEL_PARAM_ID, c.LEVEL_PARAM_NAME, -30.0, 6.0, 0.1,
              c.LEVEL_DEFAULT_VAL, (-30.0, 6.0, 0.0)),
        _spec(c.OSC_SYNC_PARAM_ID, c.OSC_SYNC_PARAM_NAME, 0.0, 1.0, 1.0,
              c.OSC_SYNC_DEFAULT_VAL),
        _spec(c.OSC_01_RANGE_PARAM_ID, c.OSC_01_RANGE_PARAM_NAME, 0.0, 3.0, 1.0,
              c.OSC_01_RANGE_DEFAULT_VAL),
        _spec(c.OSC_01_COARSE_TUNE_PARAM_ID, c.OSC_01_COARSE_TUNE_PARAM_NAME,
              -12.0, 12.0, 0.1, c.OSC_01_COARSE_TUNE_DEFAULT_VAL),
        _spec(c.OSC_01_FINE_TUNE_PARAM_ID, c.OSC_01_FINE_TUNE_PARAM_NAME,
              -100.0, 100.0, 0.1, c.OSC_01_FINE_TUNE_DEFAULT_VAL),
        _spec(c.OSC_01_SHAPE_INT_PARAM_ID, c.OSC_01_SHAPE_INT_PARAM_NAME,
              0.0, 1.0, 0.01, c.OSC_01_SHAPE_INT_DEFAULT_VAL),
        _spec(c.OSC_01_MOD_DEPTH_PARAM_ID, c.OSC_01_MOD_DEPTH_PARAM_NAME,
              -1.0, 1.0, 0.01, c.OSC_01_MOD_DEPTH_DEFAULT_VAL),
        _spec(c.OSC_01_MOD_SOURCE_PARAM_ID, c.OSC_01_MOD_SOURCE_PARAM_NAME,
              0.0, 1.0, 1.0, c.OSC_01_MOD_SOURCE_DEFAULT_VAL),
        _spec(c.OSC_02_RANGE_PARAM_ID, c.OSC_02_RANGE_PARAM_NAME, 0.0, 3.0, 1.0,
              c.OSC_02_RANGE_DEFAULT_VAL),
        _spec(c.OSC_02_COARSE_TUNE_PARAM_ID, c.OSC_02_COARSE_TUNE_PARAM_NAME,
              -12.0, 12.0, 0.1, c.OSC_02_COARSE_TUNE_DEFAULT_VAL),
        _spec(c.OSC_02_FINE_TUNE_PARAM_ID, c.OSC_02_FINE_TUNE_PARAM_NAME,
              -100.0, 100.0, 0.1, c.OSC_02_FINE_TUNE_DEFAULT_VAL),
        _spec(c.OSC_02_SHAPE_INT_PARAM_ID, c.OSC_02_SHAPE_INT_PARAM_NAME,
              0.0, 1.0, 0.01, c.OSC_02_SHAPE_INT_DEFAULT_VAL),
        _spec(c.OSC_02_MOD_DEPTH_PARAM_ID, c.OSC_02_MOD_DEPTH_PARAM_NAME,
              -1.0, 1.0, 0.01, c.OSC_02_MOD_DEPTH_DEFAULT_VAL),
        _spec(c.OSC_02_MOD_SOURCE_PARAM_ID, c.OSC_02_MOD_SOURCE_PARAM_NAME,
              0.0, 1.0, 1.0, c.OSC_02_MOD_SOURCE_DEFAULT_VAL),
        _spec(c.PHASOR_01_SHAPE_PARAM_ID, c.PHASOR_01_SHAPE_PARAM_NAME,
              0.0, 1.0, 1.0, c.PHASOR_01_SHAPE_DEFAULT_VAL),
        _spec(c.PHASOR_01_EG_INT_PARAM_ID, c.PHASOR_01_EG_INT_PARAM_NAME,
              0.0, 1.0, 0.01, c.PHASOR_01_EG_INT_DEFAULT_VAL),
        _spec(c.PHASOR_01_LFO_INT_PARAM_ID, c.PHASOR_01_LFO_INT_PARAM_NAME,
              0.0, 1.0, 0.01, c.PHASOR_01_LFO_INT_DEFAULT_VAL),
        _spec(c.PHASOR_02_SHAPE_PARAM_ID, c.PHASOR_02_SHAPE_PARAM_NAME,
              0.0, 1.0, 1.0, c.PHASOR_02_SHAPE_DEFAULT_VAL),
        _spec(c.PHASOR_02_EG_INT_PARAM_ID, c.PHASOR_02_EG_INT_PARAM_NAME,
              0.0, 1.0, 0.01, c.PHASOR_02_EG_INT_DEFAULT_VAL),
        _spec(c.PHASOR_02_LFO_INT_PARAM_ID, c.PHASOR_02_LFO_INT_PARAM_NAME,
              0.0, 1.0, 0.01, c.PHASOR_02_LFO_INT_DEFAULT_VAL),
        _spec(c.MIXER_OSC_BAL_PARAM_ID, c.MIXER_OSC_BAL_PARAM_NAME,
              0.0, 1.0, 0.01, c.MIXER_OSC_BAL_DEFAULT_VAL),
        _spec(c.MIXER_AMP_GAIN_PARAM_ID, c.MIXER_AMP_GAIN_PARAM_NAME,
              0.0, 1.2, 0.01, c.MIXER_AMP_GAIN_DEFAULT_VAL),
        _spec(c.MIXER_RING_MOD_PARAM_ID, c.MIXER_RING_MOD_PARAM_NAME,
              0.0, 1.0, 0.01, c.MIXER_RING_MOD_DEFAULT_VAL),
        _spec(c.MIXER_NOISE_PARAM_ID, c.MIXER_NOISE_PARAM_NAME,
              0.0, 1.0, 0.01, c.MIXER_NOISE_DEFAULT_VAL),
        _spec(c.FLTR_MODE_PARAM_ID, c.FLTR_MODE_PARAM_NAME, 0.0, 2.0, 1.0,
              c.FLTR_MODE_DEFAULT_VAL),
        _spec(c.FLTR_CUTOFF_PARAM_ID, c.FLTR_CUTOFF_PARAM_NAME, 20.0, 20000.0, 0.1,
              c.FLTR_CUTOFF_DEFAULT_VAL, (20.0, 20000.0, 2000.0)),
        _spec(c.FLTR_RESO_PARAM_ID, c.FLTR_RESO_PARAM_NAME, 0.1, 8.4, 0.01,
              c.FLTR_RESO_DEFAULT_VAL, (0.1, 8.4, 1.4)),
        _spec(c.FLTR_DRIVE_PARAM_ID, c.FLTR_DRIVE_PARAM_NAME, 0.0, 1.0, 0.01,
              c.FLTR_DRIVE_DEFAULT_VAL),
        _spec(c.FLTR_EG_MOD_DEPTH_PARAM_ID, c.FLTR_EG_MOD_DEPTH_PARAM_NAME,
              -1.0, 1.0, 0.01, c.FLTR_EG_MOD_DEPTH_DEFAULT_VAL),
        _spec(c.FLTR_LFO_MOD_DEPTH_PARAM_ID, c.FLTR_LFO_MOD_DEPTH_PARAM_NAME,
              -1.0, 1.0, 0.01, c.FLTR_LFO_MOD_DEPTH_DEFAULT_VAL),
        _spec(c.LFO_01_RATE_PARAM_ID, c.LFO_01_RATE_PARAM_NAME, 0.1, 100.0, 0.01,
              c.LFO_01_RATE_DEFAULT_VAL, lfo_rate_center),
        _spec(c.LFO_01_SHAPE_PARAM_ID, c.LFO_01_SHAPE_PARAM_NAME, 0.0, 4.0, 1.0,
              c.LFO_01_SHAPE_DEFAULT_VAL),
        _spec(c.LFO_02_RATE_PARAM_ID, c.LFO_02_RATE_PARAM_NAME, 0.1, 100.0, 0.01,
              c.LFO_02_RATE_DEFAULT_VAL, lfo_rate_center),
        _spec(c.LFO_02_SHAPE_PARAM_ID, c.LFO_02_SHAPE_PARAM_NAME, 0.0, 4.0, 1.0,
              c.LFO_02_SHAPE_DEFAULT_VAL),
        _spec(c.AMP_EG_ATK_PARAM_ID, c.AMP_EG_ATK_PARAM_NAME, *attack,
              c.AMP_EG_ATK_DEFAULT_VAL, attack_center),
        _spec(c.AMP_EG_DEC_PARAM_ID, c.AMP_EG_DEC_PARAM_NAME, *decay,
              c.AMP_EG_DEC_DEFAULT_VAL, decay_center),
        _spec(c.AMP_EG_SUS_PARAM_ID, c.AMP_EG_SUS_PARAM_NAME, *sustain,
              c.AMP_EG_SUS_DEFAULT_VAL, sustain_center),
        _spec(c.AMP_EG_REL_PARAM_ID, c.AMP_EG_REL_PARAM_NAME, *release,
              c.AMP_EG_REL_DEFAULT_VAL, release_center),
        _spec(c.PHASOR_EG_ATK_PARAM_ID, c.PHASOR_EG_ATK_PARAM_NAME, *attack,
              c.PHASOR_EG_ATK_DEFAULT_VAL, attack_center),
        _spec(c.PHASOR_EG_DEC_PARAM_ID, c.PHASOR_EG_DEC_PARAM_NAME, *decay,
              c.PHASOR_EG_DEC_DEFAULT_VAL, decay_center),
        _spec(c.PHASOR_EG_SUS_PARAM_ID, c.PHASOR_EG_SUS_PARAM_NAME, *sustain,
              c.PHASOR_EG_SUS_DEFAULT_VAL, sustain_center),
        _spec(c.PHASOR_EG_REL_PARAM_ID, c.PHASOR_EG_REL_PARAM_NAME, *release,
              c.PHASOR_EG_REL_DEFAULT_VAL, release_center),
        _spec(c.FLTR_EG_ATK_PARAM_ID, c.FLTR_EG_ATK_PARAM_NAME, *attack,
              c.FLTR_EG_ATK_DEFAULT_VAL, attack_center),
        _spec(c.FLTR_EG_DEC_PARAM_ID, c.FLTR_EG_DEC_PARAM_NAME, *decay,
              c.FLTR_EG_DEC_DEFAULT_VAL, decay_center),
        _spec(c.FLTR_EG_SUS_PARAM_ID, c.FLTR_EG_SUS_PARAM_NAME, *sustain,
              c.FLTR_EG_SUS_DEFAULT_VAL, sustain_center),
        _spec(c.FLTR_EG_REL_PARAM_ID, c.FLTR_EG_REL_PARAM_NAME, *release,
              c.FLTR_EG_REL_DEFAULT_VAL, release_center),
        _spec(c.MOD_EG_ATK_PARAM_ID, c.MOD_EG_ATK_PARAM_NAME, *attack,
              c.MOD_EG_ATK_DEFAULT_VAL, attack_center),
        _spec(c.MOD_EG_DEC_PARAM_ID, c.MOD_EG_DEC_PARAM_NAME, *decay,
              c.MOD_EG_DEC_DEFAULT_VAL, decay_center),
        _spec(c.MOD_EG_SUS_PARAM_ID, c.MOD_EG_SUS_PARAM_NAME, *sustain,
              c.MOD_EG_SUS_DEFAULT_VAL, sustain_center),
        _spec(c.MOD_EG_REL_PARAM_ID, c.MOD_EG_REL_PARAM_NAME, *release,
              c.MOD_EG_REL_DEFAULT_VAL, release_center),
    )


PARAM_TAG = "PARAM"


class ParameterState:
    """The current value of every parameter, serialisable to and from XML."""

    def __init__(
        self,
        layout: Iterable[ParameterSpec],
        state_type: str = c.PLUGIN_NAME,
    ) -> None:
        self.specs: dict[str, ParameterSpec] = {}
        for spec in layout:
            if spec.parameter_id in self.specs:
                raise ValueError(f"duplicate parameter id {spec.parameter_id!r}")
            self.specs[spec.parameter_id] = spec
        self.state_type = state_type
        self.attributes: dict[str, str] = {}
        self._values = {pid: spec.default for pid, spec in self.specs.items()}

    def __getitem__(self, parameter_id: str) -> float:
        return self._values[parameter_id]

    def __setitem__(self, parameter_id: str, value: float) -> None:
        spec = self.specs[parameter_id]
        self._values[parameter_id] = spec.range.snap(float(value))

    def __contains__(self, parameter_id: object) -> bool:
        return parameter_id in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def to_xml(self) -> ET.Element:
        """Return a fresh XML element holding the state."""
        root = ET.Element(self.state_type, dict(self.attributes))
        for parameter_id, value in self._values.items():
            ET.SubElement(root, PARAM_TAG, {"id": parameter_id, "value": repr(value)})
        return root

    def replace_state(self, element: ET.Element) -> None:
        """Replace the whole state with the one held by ``element``.

        Parameters the element does not mention fall back to their defaults.
        """
        stored = {
            child.get("id"): child.get("value")
            for child in element
            if child.tag == PARAM_TAG and child.get("id") is not None
        }
        new_values = {}
        for parameter_id, spec in self.specs.items():
            raw = stored.get(parameter_id)
            if raw is None:
                new_values[parameter_id] = spec.default
            else:
                new_values[parameter_id] = spec.range.snap(float(raw))
        self._values = new_values
        self.state_type = element.tag
        self.attributes = dict(element.attrib)