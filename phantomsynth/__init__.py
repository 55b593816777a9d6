"""A phase-distortion synthesizer engine with XML presets."""

__version__ = "0.1.0"