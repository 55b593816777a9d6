import numpy as np
import pytest

from phantomsynth.params import ParameterState, create_parameter_layout
from phantomsynth.synth import NUM_VOICES, NoteOff, NoteOn, Synth

RATE = 16000.0


def make_synth():
    synth = Synth(ParameterState(create_parameter_layout()))
    synth.init(RATE, 512, 2)
    return synth


def playing_notes(synth):
    return sorted(v.currently_playing_note for v in synth.voices if v.is_active)


def test_init_creates_voice_pool():
    synth = make_synth()
    assert len(synth.voices) == NUM_VOICES
    assert synth.sample_rate == RATE


def test_init_twice_keeps_pool_size():
    synth = make_synth()
    synth.init(RATE, 256, 2)
    assert len(synth.voices) == NUM_VOICES


def test_init_rejects_bad_sample_rate():
    synth = Synth(ParameterState(create_parameter_layout()))
    with pytest.raises(ValueError):
        synth.init(0.0, 512, 2)


def test_clear_removes_voices():
    synth = make_synth()
    synth.clear()
    assert synth.voices == []


def test_render_before_init_is_silent():
    synth = Synth(ParameterState(create_parameter_layout()))
    buffer = np.zeros((2, 64))
    synth.render_next_block(buffer, [NoteOn(60)], 0, 64)
    assert np.all(buffer == 0.0)
    assert synth.voices == []


def test_note_on_assigns_one_voice():
    synth = make_synth()
    voice = synth.note_on(60, 1.0)
    assert voice.currently_playing_note == 60
    assert playing_notes(synth) == [60]


def test_repeated_note_uses_new_voice():
    synth = make_synth()
    first = synth.note_on(60, 1.0)
    second = synth.note_on(60, 1.0)
    assert first is not second
    assert playing_notes(synth) == [60, 60]


def test_stealing_protects_lowest_and_highest_notes():
    synth = make_synth()
    for note in (60, 62, 64, 65, 67):
        synth.note_on(note, 1.0)
    assert playing_notes(synth) == [60, 64, 65, 67]


def test_stealing_prefers_released_voice():
    synth = make_synth()
    for note in (60, 62, 64, 65):
        synth.note_on(note, 1.0)
    synth.note_off(64, 0.0, True)
    synth.note_on(70, 1.0)
    assert playing_notes(synth) == [60, 62, 65, 70]


def test_note_off_releases_key():
    synth = make_synth()
    voice = synth.note_on(60, 1.0)
    synth.note_off(60, 0.0, True)
    assert not voice.key_down
    assert voice.is_playing_but_released


def test_note_off_without_tail_frees_voice():
    synth = make_synth()
    synth.note_on(60, 1.0)
    synth.note_off(60, 0.0, False)
    assert playing_notes(synth) == []


def test_event_starts_sound_at_its_position():
    synth = make_synth()
    buffer = np.zeros((2, 512))
    synth.render_next_block(buffer, [NoteOn(60, 1.0, 256)], 0, 512)
    assert np.all(buffer[:, :256] == 0.0)
    assert np.any(buffer[:, 256:] != 0.0)
    assert np.array_equal(buffer[0], buffer[1])


def test_events_are_applied_in_sample_order():
    synth = make_synth()
    buffer = np.zeros((1, 400))
    events = [NoteOff(60, sample_position=300), NoteOn(60, sample_position=100)]
    synth.render_next_block(buffer, events)
    released = [v for v in synth.voices if v.currently_playing_note == 60]
    assert len(released) == 1
    assert not released[0].key_down


def test_event_beyond_block_is_still_handled():
    synth = make_synth()
    buffer = np.zeros((1, 100))
    synth.render_next_block(buffer, [NoteOn(72, sample_position=500)], 0, 100)
    assert np.all(buffer == 0.0)
    assert playing_notes(synth) == [72]


def test_unknown_event_rejected():
    synth = make_synth()
    with pytest.raises(TypeError):
        synth.render_next_block(np.zeros((1, 10)), ["note"], 0, 10)


def test_block_outside_buffer_rejected():
    synth = make_synth()
    with pytest.raises(ValueError):
        synth.render_next_block(np.zeros((1, 10)), [], 5, 10)