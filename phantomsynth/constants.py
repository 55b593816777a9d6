"""Shared constants: parameter identifiers, display names, defaults and helpers."""

from __future__ import annotations

import enum
import math

# Amplifier

LEVEL_PARAM_ID = "level"
LEVEL_PARAM_NAME = "Level"
LEVEL_DEFAULT_VAL = 0.0

# Oscillators

OSC_SYNC_PARAM_ID = "oscSync"
OSC_SYNC_PARAM_NAME = "Osc Sync"
OSC_SYNC_DEFAULT_VAL = 0.0
OSC_01_RANGE_PARAM_ID = "osc01Range"
OSC_01_RANGE_PARAM_NAME = "Osc 1 Range"
OSC_01_RANGE_DEFAULT_VAL = 2.0
OSC_01_COARSE_TUNE_PARAM_ID = "osc01CoarseTune"
OSC_01_COARSE_TUNE_PARAM_NAME = "Osc 1 Coarse Tune"
OSC_01_COARSE_TUNE_DEFAULT_VAL = 0.0
OSC_01_FINE_TUNE_PARAM_ID = "osc01FineTune"
OSC_01_FINE_TUNE_PARAM_NAME = "Osc 1 Fine Tune"
OSC_01_FINE_TUNE_DEFAULT_VAL = 0.0
OSC_01_SHAPE_INT_PARAM_ID = "osc01ShapeInt"
OSC_01_SHAPE_INT_PARAM_NAME = "Osc 1 Shape Int"
OSC_01_SHAPE_INT_DEFAULT_VAL = 0.0
OSC_01_MOD_DEPTH_PARAM_ID = "osc01ModDepth"
OSC_01_MOD_DEPTH_PARAM_NAME = "Osc 1 Mod Depth"
OSC_01_MOD_DEPTH_DEFAULT_VAL = 0.0
OSC_01_MOD_SOURCE_PARAM_ID = "osc01ModSource"
OSC_01_MOD_SOURCE_PARAM_NAME = "Osc 1 Mod Source"
OSC_01_MOD_SOURCE_DEFAULT_VAL = 0.0
OSC_02_RANGE_PARAM_ID = "osc02Range"
OSC_02_RANGE_PARAM_NAME = "Osc 2 Range"
OSC_02_RANGE_DEFAULT_VAL = 2.0
OSC_02_COARSE_TUNE_PARAM_ID = "osc02CoarseTune"
OSC_02_COARSE_TUNE_PARAM_NAME = "Osc 2 Coarse Tune"
OSC_02_COARSE_TUNE_DEFAULT_VAL = 0.0
OSC_02_FINE_TUNE_PARAM_ID = "osc02FineTune"
OSC_02_FINE_TUNE_PARAM_NAME = "Osc 2 Fine Tune"
OSC_02_FINE_TUNE_DEFAULT_VAL = 0.0
OSC_02_SHAPE_INT_PARAM_ID = "osc02ShapeInt"
OSC_02_SHAPE_INT_PARAM_NAME = "Osc 2 Shape Int"
OSC_02_SHAPE_INT_DEFAULT_VAL = 0.0
OSC_02_MOD_DEPTH_PARAM_ID = "osc02ModDepth"
OSC_02_MOD_DEPTH_PARAM_NAME = "Osc 2 Mod Depth"
OSC_02_MOD_DEPTH_DEFAULT_VAL = 0.0
OSC_02_MOD_SOURCE_PARAM_ID = "osc02ModSource"
OSC_02_MOD_SOURCE_PARAM_NAME = "Osc 2 Mod Source"
OSC_02_MOD_SOURCE_DEFAULT_VAL = 0.0

# Phasors

PHASOR_01_SHAPE_PARAM_ID = "phasor01Shape"
PHASOR_01_SHAPE_PARAM_NAME = "Phasor 1 Shape"
PHASOR_01_SHAPE_DEFAULT_VAL = 0.0
PHASOR_01_EG_INT_PARAM_ID = "phasor01EgInt"
PHASOR_01_EG_INT_PARAM_NAME = "Phasor 1 EG Int"
PHASOR_01_EG_INT_DEFAULT_VAL = 1.0
PHASOR_01_LFO_INT_PARAM_ID = "phasor01LfoInt"
PHASOR_01_LFO_INT_PARAM_NAME = "Phasor 1 LFO Int"
PHASOR_01_LFO_INT_DEFAULT_VAL = 0.0
PHASOR_02_SHAPE_PARAM_ID = "phasor02Shape"
PHASOR_02_SHAPE_PARAM_NAME = "Phasor 2 Shape"
PHASOR_02_SHAPE_DEFAULT_VAL = 0.0
PHASOR_02_EG_INT_PARAM_ID = "phasor02EgInt"
PHASOR_02_EG_INT_PARAM_NAME = "Phasor 2 EG Int"
PHASOR_02_EG_INT_DEFAULT_VAL = 1.0
PHASOR_02_LFO_INT_PARAM_ID = "phasor02LfoInt"
PHASOR_02_LFO_INT_PARAM_NAME = "Phasor 2 LFO Int"
PHASOR_02_LFO_INT_DEFAULT_VAL = 0.0

# Mixer

MIXER_OSC_BAL_PARAM_ID = "mixerOscBalance"
MIXER_OSC_BAL_PARAM_NAME = "Mixer Osc Balance"
MIXER_OSC_BAL_DEFAULT_VAL = 0.5
MIXER_AMP_GAIN_PARAM_ID = "mixerAmpGain"
MIXER_AMP_GAIN_PARAM_NAME = "Mixer Amp Gain"
MIXER_AMP_GAIN_DEFAULT_VAL = 1.0
MIXER_RING_MOD_PARAM_ID = "mixerRingMod"
MIXER_RING_MOD_PARAM_NAME = "Mixer Ring Mod"
MIXER_RING_MOD_DEFAULT_VAL = 0.0
MIXER_NOISE_PARAM_ID = "mixerNoise"
MIXER_NOISE_PARAM_NAME = "Mixer Noise"
MIXER_NOISE_DEFAULT_VAL = 0.0

# Filter

FLTR_CUTOFF_PARAM_ID = "filterCutoff"
FLTR_CUTOFF_PARAM_NAME = "Filter Cutoff"
FLTR_CUTOFF_DEFAULT_VAL = 1000.0
FLTR_RESO_PARAM_ID = "filterReso"
FLTR_RESO_PARAM_NAME = "Filter Resonance"
FLTR_RESO_DEFAULT_VAL = 0.70710678
FLTR_DRIVE_PARAM_ID = "filterDrive"
FLTR_DRIVE_PARAM_NAME = "Filter Drive"
FLTR_DRIVE_DEFAULT_VAL = 0.0
FLTR_MODE_PARAM_ID = "filterMode"
FLTR_MODE_PARAM_NAME = "Filter Mode"
FLTR_MODE_DEFAULT_VAL = 0.0
FLTR_EG_MOD_DEPTH_PARAM_ID = "filterEgModDepth"
FLTR_EG_MOD_DEPTH_PARAM_NAME = "Filter EG Mod Depth"
FLTR_EG_MOD_DEPTH_DEFAULT_VAL = 0.0
FLTR_LFO_MOD_DEPTH_PARAM_ID = "filterLfoModDepth"
FLTR_LFO_MOD_DEPTH_PARAM_NAME = "Filter LFO Mod Depth"
FLTR_LFO_MOD_DEPTH_DEFAULT_VAL = 0.0

# LFOs

LFO_01_RATE_PARAM_ID = "lfo01Rate"
LFO_01_RATE_PARAM_NAME = "LFO 1 Rate"
LFO_01_RATE_DEFAULT_VAL = 20.0
LFO_01_SHAPE_PARAM_ID = "lfo01Shape"
LFO_01_SHAPE_PARAM_NAME = "LFO 1 Shape"
LFO_01_SHAPE_DEFAULT_VAL = 0.0
LFO_02_RATE_PARAM_ID = "lfo02Rate"
LFO_02_RATE_PARAM_NAME = "LFO 2 Rate"
LFO_02_RATE_DEFAULT_VAL = 20.0
LFO_02_SHAPE_PARAM_ID = "lfo02Shape"
LFO_02_SHAPE_PARAM_NAME = "LFO 2 Shape"
LFO_02_SHAPE_DEFAULT_VAL = 0.0

# Envelope generators

AMP_EG_ATK_PARAM_ID = "ampEgAtk"
AMP_EG_ATK_PARAM_NAME = "Amp EG Attack"
AMP_EG_ATK_DEFAULT_VAL = 0.02
AMP_EG_DEC_PARAM_ID = "ampEgDec"
AMP_EG_DEC_PARAM_NAME = "Amp EG Decay"
AMP_EG_DEC_DEFAULT_VAL = 0.2
AMP_EG_SUS_PARAM_ID = "ampEgSus"
AMP_EG_SUS_PARAM_NAME = "Amp EG Sustain"
AMP_EG_SUS_DEFAULT_VAL = -15.0
AMP_EG_REL_PARAM_ID = "ampEgRel"
AMP_EG_REL_PARAM_NAME = "Amp EG Release"
AMP_EG_REL_DEFAULT_VAL = 0.6

PHASOR_EG_ATK_PARAM_ID = "phaseEgAtk"
PHASOR_EG_ATK_PARAM_NAME = "Phase EG Attack"
PHASOR_EG_ATK_DEFAULT_VAL = 0.1
PHASOR_EG_DEC_PARAM_ID = "phaseEgDec"
PHASOR_EG_DEC_PARAM_NAME = "Phase EG Decay"
PHASOR_EG_DEC_DEFAULT_VAL = 0.25
PHASOR_EG_SUS_PARAM_ID = "phaseEgSus"
PHASOR_EG_SUS_PARAM_NAME = "Phase EG Sustain"
PHASOR_EG_SUS_DEFAULT_VAL = -15.0
PHASOR_EG_REL_PARAM_ID = "phaseEgRel"
PHASOR_EG_REL_PARAM_NAME = "Phase EG Release"
PHASOR_EG_REL_DEFAULT_VAL = 1.2

FLTR_EG_ATK_PARAM_ID = "fltrEgAtk"
FLTR_EG_ATK_PARAM_NAME = "Filter EG Attack"
FLTR_EG_ATK_DEFAULT_VAL = 0.01
FLTR_EG_DEC_PARAM_ID = "fltrEgDec"
FLTR_EG_DEC_PARAM_NAME = "Filter EG Decay"
FLTR_EG_DEC_DEFAULT_VAL = 0.4
FLTR_EG_SUS_PARAM_ID = "fltrEgSus"
FLTR_EG_SUS_PARAM_NAME = "Filter EG Sustain"
FLTR_EG_SUS_DEFAULT_VAL = -15.0
FLTR_EG_REL_PARAM_ID = "fltrEgRel"
FLTR_EG_REL_PARAM_NAME = "Filter EG Release"
FLTR_EG_REL_DEFAULT_VAL = 0.8

MOD_EG_ATK_PARAM_ID = "modEgAtk"
MOD_EG_ATK_PARAM_NAME = "Mod EG Attack"
MOD_EG_ATK_DEFAULT_VAL = 0.01
MOD_EG_DEC_PARAM_ID = "modEgDec"
MOD_EG_DEC_PARAM_NAME = "Mod EG Decay"
MOD_EG_DEC_DEFAULT_VAL = 0.15
MOD_EG_SUS_PARAM_ID = "modEgSus"
MOD_EG_SUS_PARAM_NAME = "Mod EG Sustain"
MOD_EG_SUS_DEFAULT_VAL = -15.0
MOD_EG_REL_PARAM_ID = "modEgRel"
MOD_EG_REL_PARAM_NAME = "Mod EG Release"
MOD_EG_REL_DEFAULT_VAL = 0.2

WAVETABLE_SIZE = 1 << 11

# Colours as (red, green, blue, alpha).
WHITE_COLOUR = (233, 251, 245, 255)
PRIMARY_COLOUR = (38, 217, 157, 255)
SECONDARY_COLOUR = (147, 236, 206, 255)
INACTIVE_COLOUR = (58, 69, 63, 255)
BLACK_COLOUR = (4, 12, 8, 255)

TEXT_BOX_WIDTH = 80
TEXT_BOX_HEIGHT = 20

COMPANY_NAME = "Black Box Audio"
PLUGIN_NAME = "Phantom"
PLUGIN_VERSION = "0.1.0"


class EnvelopeType(enum.IntEnum):
    """The kinds of envelope generator a voice carries."""

    AMP = 0
    PHASOR = 1
    FILTER = 2
    MOD = 3


def calculate_skew_factor(start: float, end: float, center: float) -> float:
    """Return the skew that maps the normalised midpoint of [start, end] to ``center``."""
    if not min(start, end) < center < max(start, end):
        raise ValueError(
            f"center {center!r} must lie strictly between {start!r} and {end!r}"
        )
    return math.log(0.5) / math.log((center - start) / (end - start))