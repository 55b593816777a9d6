import pytest

from phantomsynth.constants import WAVETABLE_SIZE
from phantomsynth.params import ParameterState, create_parameter_layout
from phantomsynth.phasor import Phasor, sawtooth


def _state():
    return ParameterState(create_parameter_layout())


def test_sawtooth_breakpoints():
    assert sawtooth(0.0) == 0.0
    assert sawtooth(0.01) == pytest.approx(0.5)
    assert sawtooth(1.0) == pytest.approx(1.0)


def test_sawtooth_is_monotonic():
    points = [i / 100 for i in range(101)]
    values = [sawtooth(p) for p in points]
    assert values == sorted(values)


def test_no_modulation_leaves_phase_unchanged():
    phasor = Phasor(_state(), 1)
    assert phasor.apply(100.0, 0.0, 0.0) == pytest.approx(100.0)


def test_full_envelope_gives_sawtooth_phase():
    phasor = Phasor(_state(), 1)
    phase = 512.0
    expected = sawtooth(phase / WAVETABLE_SIZE) * WAVETABLE_SIZE
    assert phasor.apply(phase, 1.0, 0.0) == pytest.approx(expected)


def test_inverted_shape():
    state = _state()
    state["phasor01Shape"] = 1.0
    phasor = Phasor(state, 1)
    phase = 300.0
    expected = (1.0 - sawtooth(phase / WAVETABLE_SIZE)) * WAVETABLE_SIZE
    assert phasor.apply(phase, 1.0, 0.0) == pytest.approx(expected)


def test_second_phasor_reads_its_own_parameters():
    state = _state()
    state["phasor02EgInt"] = 0.0
    first = Phasor(state, 1)
    second = Phasor(state, 2)
    assert second.apply(700.0, 1.0, 0.0) == pytest.approx(700.0)
    assert first.apply(700.0, 1.0, 0.0) != pytest.approx(700.0)


def test_unknown_number_falls_back_to_first_phasor():
    state = _state()
    state["phasor02EgInt"] = 0.0
    assert Phasor(state, 7).apply(700.0, 1.0, 0.0) == pytest.approx(
        Phasor(state, 1).apply(700.0, 1.0, 0.0)
    )


def test_lfo_at_trough_gives_no_modulation():
    state = _state()
    state["phasor01EgInt"] = 0.0
    state["phasor01LfoInt"] = 1.0
    phasor = Phasor(state, 1)
    assert phasor.apply(250.0, 0.0, -1.0) == pytest.approx(250.0)
    assert phasor.apply(250.0, 0.0, 1.0) == pytest.approx(
        sawtooth(250.0 / WAVETABLE_SIZE) * WAVETABLE_SIZE
    )


def test_parameter_changes_are_seen_live():
    state = _state()
    phasor = Phasor(state, 1)
    distorted = phasor.apply(400.0, 1.0, 0.0)
    state["phasor01EgInt"] = 0.0
    assert phasor.apply(400.0, 1.0, 0.0) == pytest.approx(400.0)
    assert distorted != pytest.approx(400.0)