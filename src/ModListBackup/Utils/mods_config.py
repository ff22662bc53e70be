"""
mods_config.py
Read and write RimWorld's ModsConfig.xml — the game's own list of active mods.

Format (1.x):
  <?xml version="1.0" encoding="utf-8"?>
  <ModsConfigData>
    <version>1.4.3901 rev70</version>
    <activeMods>
      <li>brrainz.harmony</li>
      <li>ludeon.rimworld</li>
    </activeMods>
    <knownExpansions>
      <li>ludeon.rimworld.royalty</li>
    </knownExpansions>
  </ModsConfigData>

Pre-1.0 builds wrote <buildNumber>2009</buildNumber> instead of <version>.
Order of <li> entries under <activeMods> is the load order. Package IDs are
case-insensitive in game; the spelling first seen is kept.

Elements other than <activeMods> are carried through untouched on save().
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

log = logging.getLogger(__name__)

CORE_MOD_IDENTIFIER = "ludeon.rimworld"

_ROOT_TAG = "ModsConfigData"
_ACTIVE_TAG = "activeMods"
_VERSION_RE = re.compile(r"^\s*\d+\.\d+\.(\d+)")


class ModsConfigError(Exception):
    """Raised when ModsConfig.xml exists but cannot be parsed."""


def parse_build_number(version: str) -> int:
    """'1.4.3901 rev70' -> 3901. Returns -1 when the string has no build part."""
    m = _VERSION_RE.match(version or "")
    return int(m.group(1)) if m else -1


class ModsConfig:
    """In-memory view of ModsConfig.xml. Changes reach disk only on save()."""

    def __init__(self, path: Path):
        self.path = path
        self._root: ET.Element = ET.Element(_ROOT_TAG)
        self._active: list[str] = [CORE_MOD_IDENTIFIER]
        self.load()

    # ------------------------------------------------------------------
    # File I/O
    # ------------------------------------------------------------------

    def load(self) -> None:
        """(Re)read the file. A missing file gives the reset state."""
        if not self.path.is_file():
            log.debug("No ModsConfig at %s, starting with core only", self.path)
            self._root = ET.Element(_ROOT_TAG)
            self._active = [CORE_MOD_IDENTIFIER]
            return
        try:
            root = ET.fromstring(self.path.read_bytes())
        except ET.ParseError as exc:
            raise ModsConfigError(f"{self.path}: {exc}") from exc
        if root.tag != _ROOT_TAG:
            raise ModsConfigError(f"{self.path}: expected <{_ROOT_TAG}>, found <{root.tag}>")
        self._root = root
        self._active = []
        active = root.find(_ACTIVE_TAG)
        if active is not None:
            for li in active.findall("li"):
                if li.text and li.text.strip():
                    self._append(li.text.strip())

    def save(self) -> None:
        """Write the active list back, keeping every other element as read."""
        active = self._root.find(_ACTIVE_TAG)
        if active is None:
            active = ET.SubElement(self._root, _ACTIVE_TAG)
        for child in list(active):
            active.remove(child)
        for mod_id in self._active:
            ET.SubElement(active, "li").text = mod_id
        ET.indent(self._root)
        data = ET.tostring(self._root, encoding="utf-8", xml_declaration=True) + b"\n"
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(data)
        log.debug("Wrote %d active mod(s) to %s", len(self._active), self.path)

    # ------------------------------------------------------------------
    # Activation API
    # ------------------------------------------------------------------

    @property
    def build_number(self) -> int:
        version = self._root.find("version")
        if version is not None and version.text:
            return parse_build_number(version.text)
        legacy = self._root.find("buildNumber")
        if legacy is not None and legacy.text:
            try:
                return int(legacy.text.strip())
            except ValueError:
                return -1
        return -1

    def active_mods_in_load_order(self) -> list[str]:
        return list(self._active)

    def is_active(self, mod_id: str) -> bool:
        return self._index_of(mod_id) is not None

    def set_active(self, mod_id: str, active: bool) -> None:
        """Activate (append to the end of the load order) or deactivate a mod."""
        idx = self._index_of(mod_id)
        if active:
            if idx is None:
                self._append(mod_id)
        elif idx is not None:
            del self._active[idx]

    def reset(self) -> None:
        """Back to defaults: only the core mod active."""
        self._active = [CORE_MOD_IDENTIFIER]

    # ------------------------------------------------------------------

    def _index_of(self, mod_id: str) -> int | None:
        key = mod_id.lower()
        for i, existing in enumerate(self._active):
            if existing.lower() == key:
                return i
        return None

    def _append(self, mod_id: str) -> None:
        if self._index_of(mod_id) is None:
            self._active.append(mod_id)
