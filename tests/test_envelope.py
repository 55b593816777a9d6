import pytest

from phantomsynth import constants as c
from phantomsynth.constants import EnvelopeType
from phantomsynth.envelope import ADSR, ADSRParameters, Envelope
from phantomsynth.params import ParameterState, create_parameter_layout


def make_state():
    return ParameterState(create_parameter_layout())


def make_adsr(attack, decay, sustain, release, sample_rate=100.0):
    adsr = ADSR()
    adsr.set_sample_rate(sample_rate)
    adsr.set_parameters(ADSRParameters(attack, decay, sustain, release))
    return adsr


def test_idle_adsr_outputs_silence():
    adsr = ADSR()
    assert adsr.get_next_sample() == 0.0
    assert not adsr.is_active()


def test_attack_decay_sustain_shape():
    adsr = make_adsr(0.1, 0.1, 0.5, 0.1)
    adsr.note_on()
    values = [adsr.get_next_sample() for _ in range(40)]
    peak = values.index(max(values))
    assert max(values) == 1.0
    assert all(a < b for a, b in zip(values[:peak], values[1 : peak + 1]))
    assert all(a >= b for a, b in zip(values[peak:], values[peak + 1 :]))
    assert values[-1] == 0.5
    assert adsr.is_active()


def test_release_falls_to_silence():
    adsr = make_adsr(0.1, 0.1, 0.5, 0.1)
    adsr.note_on()
    for _ in range(40):
        adsr.get_next_sample()
    adsr.note_off()
    values = [adsr.get_next_sample() for _ in range(30)]
    assert all(a >= b for a, b in zip(values, values[1:]))
    assert values[-1] == 0.0
    assert not adsr.is_active()


def test_zero_attack_starts_in_decay():
    adsr = make_adsr(0.0, 0.1, 0.5, 0.1)
    adsr.note_on()
    first = adsr.get_next_sample()
    assert 0.5 < first < 1.0


def test_zero_attack_and_decay_jump_to_sustain():
    adsr = make_adsr(0.0, 0.0, 0.25, 0.1)
    adsr.note_on()
    assert adsr.get_next_sample() == 0.25


def test_zero_release_resets_immediately():
    adsr = make_adsr(0.1, 0.1, 0.5, 0.0)
    adsr.note_on()
    adsr.get_next_sample()
    adsr.note_off()
    assert not adsr.is_active()
    assert adsr.get_next_sample() == 0.0


def test_reset_returns_to_idle():
    adsr = make_adsr(0.1, 0.1, 0.5, 0.1)
    adsr.note_on()
    adsr.get_next_sample()
    adsr.reset()
    assert not adsr.is_active()
    assert adsr.value == 0.0


def test_invalid_settings_rejected():
    adsr = ADSR()
    with pytest.raises(ValueError):
        adsr.set_parameters(ADSRParameters(attack=-1.0))
    with pytest.raises(ValueError):
        adsr.set_parameters(ADSRParameters(sustain=1.5))
    with pytest.raises(ValueError):
        adsr.set_sample_rate(0.0)


def test_envelope_type_selects_parameters():
    state = make_state()
    state[c.AMP_EG_ATK_PARAM_ID] = 2.0
    state[c.FLTR_EG_ATK_PARAM_ID] = 3.0
    amp = Envelope(state, EnvelopeType.AMP)
    flt = Envelope(state, EnvelopeType.FILTER)
    amp.update(48000.0)
    flt.update(48000.0)
    assert amp.settings.attack == state[c.AMP_EG_ATK_PARAM_ID]
    assert flt.settings.attack == state[c.FLTR_EG_ATK_PARAM_ID]
    assert amp.settings.attack == pytest.approx(2.0)
    assert amp.sample_rate == 48000.0


def test_sustain_glides_towards_new_level():
    state = make_state()
    env = Envelope(state, EnvelopeType.MOD)
    env.update(44100.0)
    initial = env.settings.sustain
    state[c.MOD_EG_SUS_PARAM_ID] = 0.0
    env.update(44100.0)
    assert initial < env.settings.sustain < 1.0
    for _ in range(200):
        env.update(44100.0)
    assert env.settings.sustain == pytest.approx(1.0)


def test_envelope_silent_before_note_on():
    env = Envelope(make_state(), EnvelopeType.AMP)
    env.update(44100.0)
    assert env.evaluate() == 0.0


def test_envelope_output_is_smoothed():
    env = Envelope(make_state(), EnvelopeType.AMP)
    env.update(44100.0)
    reference = ADSR()
    reference.set_sample_rate(44100.0)
    reference.set_parameters(env.settings)
    env.note_on()
    reference.note_on()
    first = env.evaluate()
    raw = reference.get_next_sample()
    assert first == pytest.approx(raw / 2.0)
    second = env.evaluate()
    raw2 = reference.get_next_sample()
    assert second == pytest.approx((raw2 + first) / 2.0)


def test_envelope_stays_within_unit_range():
    env = Envelope(make_state(), EnvelopeType.PHASOR)
    env.update(1000.0)
    env.note_on()
    values = [env.evaluate() for _ in range(3000)]
    env.note_off()
    values += [env.evaluate() for _ in range(3000)]
    assert all(0.0 <= v <= 1.0 for v in values)
    assert max(values) > 0.5