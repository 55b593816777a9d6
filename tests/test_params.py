import xml.etree.ElementTree as ET

import pytest

from phantomsynth import constants as c
from phantomsynth.params import (
    NormalisableRange,
    ParameterSpec,
    ParameterState,
    create_parameter_layout,
)


@pytest.fixture
def state():
    return ParameterState(create_parameter_layout())


def test_layout_ids_are_unique_and_complete():
    ids = [spec.parameter_id for spec in create_parameter_layout()]
    assert len(ids) == len(set(ids))
    assert ids[0] == c.LEVEL_PARAM_ID
    assert ids[-1] == c.MOD_EG_REL_PARAM_ID
    assert c.FLTR_CUTOFF_PARAM_ID in ids


def test_layout_defaults_lie_within_ranges():
    for spec in create_parameter_layout():
        assert spec.range.start <= spec.default <= spec.range.end


def test_cutoff_range_centers_at_two_khz():
    spec = next(
        s for s in create_parameter_layout() if s.parameter_id == c.FLTR_CUTOFF_PARAM_ID
    )
    assert spec.range.convert_from_0to1(0.5) == pytest.approx(2000.0)
    assert spec.range.convert_to_0to1(2000.0) == pytest.approx(0.5)


def test_range_round_trip_with_skew():
    rng = NormalisableRange(0.01, 10.0, 0.01, c.calculate_skew_factor(0.01, 10.0, 1.0))
    for value in (0.01, 0.5, 1.0, 3.3, 10.0):
        assert rng.convert_from_0to1(rng.convert_to_0to1(value)) == pytest.approx(value)


def test_symmetric_skew_round_trip_and_midpoint():
    rng = NormalisableRange(-1.0, 1.0, 0.0, 2.0, symmetric_skew=True)
    assert rng.convert_to_0to1(0.0) == pytest.approx(0.5)
    for value in (-0.8, -0.1, 0.3, 0.9):
        assert rng.convert_from_0to1(rng.convert_to_0to1(value)) == pytest.approx(value)


def test_range_clamps_proportions():
    rng = NormalisableRange(20.0, 200.0)
    assert rng.convert_from_0to1(-1.0) == 20.0
    assert rng.convert_from_0to1(2.0) == 200.0
    assert rng.convert_to_0to1(500.0) == 1.0


def test_snap_rounds_and_clamps():
    rng = NormalisableRange(0.0, 3.0, 1.0)
    assert rng.snap(1.4) == 1.0
    assert rng.snap(1.6) == 2.0
    assert rng.snap(10.0) == 3.0
    assert rng.snap(-5.0) == 0.0


def test_invalid_range_rejected():
    with pytest.raises(ValueError):
        NormalisableRange(1.0, 1.0)
    with pytest.raises(ValueError):
        NormalisableRange(0.0, 1.0, skew=0.0)


def test_state_starts_at_defaults(state):
    assert state[c.FLTR_CUTOFF_PARAM_ID] == c.FLTR_CUTOFF_DEFAULT_VAL
    assert state[c.AMP_EG_SUS_PARAM_ID] == c.AMP_EG_SUS_DEFAULT_VAL
    assert len(list(state)) == len(create_parameter_layout())


def test_state_set_snaps_and_clamps(state):
    state[c.OSC_01_RANGE_PARAM_ID] = 2.7
    assert state[c.OSC_01_RANGE_PARAM_ID] == 3.0
    state[c.LEVEL_PARAM_ID] = 99.0
    assert state[c.LEVEL_PARAM_ID] == 6.0


def test_state_unknown_parameter(state):
    assert "nope" not in state
    with pytest.raises(KeyError):
        state["nope"]
    with pytest.raises(KeyError):
        state["nope"] = 1.0


def test_duplicate_ids_rejected():
    spec = ParameterSpec("a", "A", NormalisableRange(0.0, 1.0), 0.0)
    with pytest.raises(ValueError):
        ParameterState([spec, spec])


def test_to_xml_structure(state):
    root = state.to_xml()
    assert root.tag == c.PLUGIN_NAME
    params = root.findall("PARAM")
    assert [p.get("id") for p in params] == list(state)


def test_xml_round_trip(state):
    state[c.FLTR_DRIVE_PARAM_ID] = 0.5
    state[c.LFO_01_SHAPE_PARAM_ID] = 3.0
    text = ET.tostring(state.to_xml(), encoding="unicode")

    other = ParameterState(create_parameter_layout())
    other.replace_state(ET.fromstring(text))
    assert {pid: other[pid] for pid in other} == {pid: state[pid] for pid in state}


def test_replace_state_resets_missing_and_keeps_attributes(state):
    state[c.MIXER_NOISE_PARAM_ID] = 0.7
    element = ET.Element(c.PLUGIN_NAME, {"presetName": "Lead"})
    ET.SubElement(element, "PARAM", {"id": c.MIXER_RING_MOD_PARAM_ID, "value": "0.25"})
    state.replace_state(element)
    assert state[c.MIXER_NOISE_PARAM_ID] == c.MIXER_NOISE_DEFAULT_VAL
    assert state[c.MIXER_RING_MOD_PARAM_ID] == pytest.approx(0.25)
    assert state.to_xml().get("presetName") == "Lead"