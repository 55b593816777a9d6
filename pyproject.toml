[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "phantomsynth"
version = "0.1.0"
description = "A phase-distortion synthesizer engine: oscillators, envelopes, LFOs, filter, mixer and XML presets."
requires-python = ">=3.10"
keywords = ["synthesizer", "audio", "dsp", "phase distortion", "presets"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]
dependencies = [
    "numpy",
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["phantomsynth"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
