"""A small XML store recording which custom sounds have been initialised."""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path

_log = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".config" / "customAudio.xml"
_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
_REMOVED_CHARS = " /()"
_FIRST_RUN_NODE = "firstRun"
# The first-run query looks for this name, which differs from the node written.
_FIRST_RUN_QUERY = "first-run"


def normalize_node_name(name: str) -> str:
    """Turn a sound name into the element name used in the store."""
    cleaned = "".join(ch for ch in name if ch not in _REMOVED_CHARS)
    if not cleaned:
        raise ValueError(f"sound name {name!r} has no usable characters")
    if cleaned[0] in "0123456789":
        cleaned = "Audio_" + cleaned
    return cleaned


def _first_child_text(element: ET.Element) -> str | None:
    child = next(iter(element), None)
    return None if child is None else child.text


class CustomSound:
    """Records custom sounds as child elements of one XML document."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_PATH

    def _save(self, root: ET.Element) -> None:
        ET.indent(root, space="    ")
        text = _DECLARATION + ET.tostring(root, encoding="unicode") + "\n"
        self.path.write_text(text, encoding="utf-8")

    def create_audio_file(self) -> bool:
        """Create the store with its first-run marker if it does not exist."""
        if self.path.exists():
            return True
        root = ET.Element("root")
        node = ET.SubElement(root, _FIRST_RUN_NODE)
        ET.SubElement(node, "init").text = "true"
        try:
            self._save(root)
        except OSError:
            return False
        return True

    def is_exist(self, node_name: str) -> bool:
        """Tell whether a sound is already recorded, creating the store if needed."""
        name = normalize_node_name(node_name)
        if not self.path.exists():
            self.create_audio_file()
        try:
            root = ET.parse(self.path).getroot()
        except OSError:
            return False
        except ET.ParseError as exc:
            _log.debug("cannot parse %s: %s", self.path, exc)
            return False
        return any(element.tag == name for element in root)

    def add_xml_node(self, node_name: str, init_state: bool) -> None:
        """Record a sound and clear the first-run marker.

        Raises OSError if the store cannot be read or written and
        xml.etree.ElementTree.ParseError if it is not well formed.
        """
        root = ET.parse(self.path).getroot()
        node = ET.SubElement(root, normalize_node_name(node_name))
        ET.SubElement(node, "init").text = "true" if init_state else "false"
        for element in root:
            if element.tag != _FIRST_RUN_NODE:
                continue
            init = next(iter(element), None)
            if init is not None and init.text == "true":
                init.text = "false"
        self._save(root)

    def is_first_run(self) -> bool:
        """Tell whether the store marks this as the first run."""
        if not self.path.exists():
            self.create_audio_file()
        try:
            root = ET.parse(self.path).getroot()
        except (OSError, ET.ParseError):
            return False
        first = next(iter(root), None)
        _log.debug("first element: %s", None if first is None else first.tag)
        if first is None or first.tag != _FIRST_RUN_QUERY:
            return False
        return _first_child_text(first) == "true"