"""Preset handling: saving, loading and stepping through XML preset files."""

from __future__ import annotations

import warnings
import xml.etree.ElementTree as ET
from pathlib import Path

import platformdirs

from phantomsynth import constants as c
from phantomsynth.params import ParameterState

_INIT_NAME = "Init"
_INITIAL_INDEX = -3


def default_preset_directory() -> Path:
    """Return the per-user directory holding preset files, whether it exists or not."""
    base = Path(platformdirs.user_data_dir())
    return base / "Black Box DSP" / "Phantom" / "Presets"


def _write_xml(element: ET.Element, path: Path) -> None:
    ET.ElementTree(element).write(path, encoding="utf-8", xml_declaration=True)


class PresetManager:
    """Loads and saves the parameter state as named XML presets."""

    def __init__(
        self,
        parameters: ParameterState,
        preset_directory: str | Path | None = None,
    ) -> None:
        self.parameters = parameters
        self.preset_directory = (
            Path(preset_directory)
            if preset_directory is not None
            else default_preset_directory()
        )
        self.preset_name = _INIT_NAME
        self.preset_index = _INITIAL_INDEX
        self.preset_file_paths: list[Path] = []

        self.init()
        self.preset_directory.mkdir(parents=True, exist_ok=True)
        self.load_preset_file_paths()

    def init(self) -> None:
        """Reset the current preset name and navigation index."""
        self.preset_name = _INIT_NAME
        self.preset_index = _INITIAL_INDEX

    def preset_files(self) -> list[Path]:
        """Return every ``*.xml`` file below the preset directory, sorted by path."""
        if not self.preset_directory.is_dir():
            return []
        return sorted(p for p in self.preset_directory.rglob("*.xml") if p.is_file())

    def load_preset_file_paths(self) -> None:
        """Refresh the cached list of preset file paths."""
        self.preset_file_paths = self.preset_files()

    def set_preset_index(self) -> bool:
        """Point the index at the file named like the current preset.

        Returns True when such a file was found.
        """
        for index, path in enumerate(self.preset_files()):
            if path.stem == self.preset_name:
                self.preset_index = index
                return True
        return False

    def load_preset_file(self, increment: bool) -> None:
        """Load the next (or previous) preset file, wrapping around at the ends."""
        self.preset_index += 1 if increment else -1

        if -4 <= self.preset_index <= -2:
            previous = self.preset_index
            if not self.set_preset_index():
                self.preset_index = 0
            elif previous == -4:
                self.preset_index -= 1
            else:
                self.preset_index += 1

        if not self.preset_file_paths:
            return

        if self.preset_index < 0:
            self.preset_index = len(self.preset_file_paths) - 1
        elif self.preset_index >= len(self.preset_file_paths):
            self.preset_index = 0

        self.load_state_from_file(self.preset_file_paths[self.preset_index])

    def load_state_from_xml(self, element: ET.Element) -> ET.Element:
        """Replace the parameter state with the one in ``element`` and return it.

        Elements of another tag are ignored. An unnamed or "Init" preset only
        takes effect while no preset name is set.
        """
        if element.tag != c.PLUGIN_NAME:
            return element

        version = element.get("pluginVersion", "")
        if version.lower() != c.PLUGIN_VERSION.lower():
            warnings.warn(
                f"preset version {version!r} differs from {c.PLUGIN_VERSION!r}",
                stacklevel=2,
            )

        preset_name = element.get("presetName", "")
        if not preset_name or preset_name.lower() == _INIT_NAME.lower():
            if self.preset_name:
                return element
            self.preset_name = _INIT_NAME
        else:
            self.preset_name = preset_name

        self.parameters.replace_state(element)
        return element

    def save_metadata_to_xml(
        self, element: ET.Element, preset_name: str | None = None
    ) -> ET.Element:
        """Stamp the plugin version and preset name onto ``element`` and return it."""
        element.set("pluginVersion", c.PLUGIN_VERSION)
        element.set(
            "presetName", self.preset_name if preset_name is None else preset_name
        )
        return element

    def save_state_to_text(self) -> str:
        """Return the current state, with metadata, as an XML string."""
        element = self.save_metadata_to_xml(self.parameters.to_xml())
        return ET.tostring(element, encoding="unicode")

    def load_state_from_text(self, text: str) -> None:
        """Load state from an XML string; unparsable text is ignored."""
        try:
            element = ET.fromstring(text)
        except ET.ParseError:
            return
        self.load_state_from_xml(element)

    def save_state_to_file(self, path: str | Path) -> None:
        """Write the current state to ``path``; the file stem becomes the preset name."""
        path = Path(path)
        self.preset_name = path.stem
        element = self.save_metadata_to_xml(self.parameters.to_xml())
        _write_xml(element, path)

    def save_xml_to_file(self, element: ET.Element, directory: str | Path) -> Path:
        """Write a preset element to ``directory/<presetType>/<presetName>.xml``.

        The element must carry non-empty ``presetType`` and ``presetName``
        attributes; ``presetType`` is dropped from what is written.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise NotADirectoryError(str(directory))

        preset_type = element.get("presetType", "")
        preset_name = element.get("presetName", "")
        if not preset_type or not preset_name:
            raise ValueError("preset element needs presetType and presetName")
        del element.attrib["presetType"]

        type_directory = directory / preset_type
        type_directory.mkdir(exist_ok=True)
        path = type_directory / f"{preset_name}.xml"
        _write_xml(self.save_metadata_to_xml(element, preset_name), path)
        return path

    def load_state_from_file(self, path: str | Path) -> None:
        """Load state from a preset file; unreadable or foreign files are ignored."""
        try:
            element = ET.parse(path).getroot()
        except (OSError, ET.ParseError):
            return
        if element.tag == c.PLUGIN_NAME:
            self.load_state_from_xml(element)