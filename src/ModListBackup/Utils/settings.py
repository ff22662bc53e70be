"""
settings.py
User settings stored as JSON in the config directory (settings.json).

  {
    "sync_to_steam": false,
    "state_count": 10,
    "state_names": ["Vanilla+", "", "Combat overhaul"],
    "debug_logging": false
  }

A missing or unreadable file gives the defaults; fields with the wrong type
fall back to their default so one bad hand edit doesn't lose the rest.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from ModListBackup.Utils.config_paths import get_settings_path

log = logging.getLogger(__name__)

DEFAULT_STATE_NAME = "Unnamed state"
DEFAULT_STATE_COUNT = 10
MAX_STATE_COUNT = 99


@dataclass
class Settings:
    # When on, slot files get an extra suffix so Steam Cloud picks them up
    sync_to_steam: bool = False
    state_count: int = DEFAULT_STATE_COUNT
    # Index 0 holds the name of slot 1
    state_names: list[str] = field(default_factory=list)
    debug_logging: bool = False
    path: Path | None = field(default=None, repr=False, compare=False)

    @classmethod
    def load(cls, path: Path | None = None) -> Settings:
        """Read settings from *path* (default: config dir). Never raises."""
        path = path or get_settings_path()
        settings = cls(path=path)
        if not path.is_file():
            return settings
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            log.warning("Could not read settings from %s, using defaults: %s", path, exc)
            return settings
        if not isinstance(data, dict):
            log.warning("Ignoring settings file %s: not a JSON object", path)
            return settings

        if isinstance(data.get("sync_to_steam"), bool):
            settings.sync_to_steam = data["sync_to_steam"]
        if isinstance(data.get("debug_logging"), bool):
            settings.debug_logging = data["debug_logging"]
        count = data.get("state_count")
        if isinstance(count, int) and not isinstance(count, bool) and 1 <= count <= MAX_STATE_COUNT:
            settings.state_count = count
        names = data.get("state_names")
        if isinstance(names, list):
            settings.state_names = [n if isinstance(n, str) else "" for n in names]
        return settings

    def save(self, path: Path | None = None) -> None:
        """Write settings as pretty JSON. Raises OSError on failure."""
        path = path or self.path or get_settings_path()
        data = asdict(self)
        data.pop("path")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        self.path = path

    def get_state_name(self, state: int) -> str:
        """Raw user-assigned name for slot *state* (1-based); "" when unset."""
        if state < 1 or state > len(self.state_names):
            return ""
        return self.state_names[state - 1]

    def set_state_name(self, state: int, name: str) -> None:
        if state < 1:
            raise ValueError(f"Slot index must be >= 1, got {state}")
        while len(self.state_names) < state:
            self.state_names.append("")
        self.state_names[state - 1] = name.strip()
