from pathlib import Path

import pytest

from ModListBackup.Handlers.mods_config_handler import ModsConfigHandler
from ModListBackup.Handlers.slot_store import SlotStore
from ModListBackup.Utils.mods_config import ModsConfig
from ModListBackup.Utils.settings import Settings


def write_mods_config(path: Path, mods, version="1.4.3901 rev70") -> Path:
    items = "".join(f"    <li>{m}</li>\n" for m in mods)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        '<?xml version="1.0" encoding="utf-8"?>\n'
        "<ModsConfigData>\n"
        f"  <version>{version}</version>\n"
        f"  <activeMods>\n{items}  </activeMods>\n"
        "  <knownExpansions>\n    <li>ludeon.rimworld.royalty</li>\n  </knownExpansions>\n"
        "</ModsConfigData>\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("MODLISTBACKUP_BACKUPS_DIR", raising=False)
    monkeypatch.delenv("RIMWORLD_CONFIG_DIR", raising=False)


@pytest.fixture
def host_config(tmp_path) -> Path:
    return write_mods_config(tmp_path / "Config" / "ModsConfig.xml", ["A", "B"])


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(path=tmp_path / "settings.json")


@pytest.fixture
def store(tmp_path, host_config, settings) -> SlotStore:
    return SlotStore(tmp_path / "Backups", host_config, settings)


@pytest.fixture
def handler(host_config, store, settings) -> ModsConfigHandler:
    return ModsConfigHandler(ModsConfig(host_config), store, settings)
