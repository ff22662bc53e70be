"""
config_paths.py
Central helpers for resolving user-writable config directories.

Follows the XDG Base Directory Specification:
  Config lives in $XDG_CONFIG_HOME/ModListBackup  (default: ~/.config/ModListBackup)

Slot files live under <config>/Backups unless $MODLISTBACKUP_BACKUPS_DIR
points somewhere else. The host's ModsConfig.xml is found through
$RIMWORLD_CONFIG_DIR, falling back to the Linux location RimWorld uses.
"""

import os
from pathlib import Path

APP_NAME = "ModListBackup"
BACKUPS_DIR_NAME = "Backups"
SETTINGS_FILE_NAME = "settings.json"
MODS_CONFIG_FILE_NAME = "ModsConfig.xml"

_RIMWORLD_LINUX_CONFIG = (
    Path("unity3d") / "Ludeon Studios" / "RimWorld by Ludeon Studios" / "Config"
)


def _xdg_config_home() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else Path.home() / ".config"


def get_config_dir() -> Path:
    """Return the app config directory, creating it if it doesn't exist.

    Respects $XDG_CONFIG_HOME; falls back to ~/.config/ModListBackup.
    """
    config_dir = _xdg_config_home() / APP_NAME
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_backups_dir() -> Path:
    """Return the directory holding the numbered slot files.

    Result: $MODLISTBACKUP_BACKUPS_DIR, or ~/.config/ModListBackup/Backups/
    """
    env = os.environ.get("MODLISTBACKUP_BACKUPS_DIR")
    d = Path(env) if env else get_config_dir() / BACKUPS_DIR_NAME
    d.mkdir(parents=True, exist_ok=True)
    return d


def get_settings_path() -> Path:
    """Result: ~/.config/ModListBackup/settings.json"""
    return get_config_dir() / SETTINGS_FILE_NAME


def get_host_config_path() -> Path:
    """Return the path of the game's live ModsConfig.xml (may not exist yet).

    Result: $RIMWORLD_CONFIG_DIR/ModsConfig.xml, or
    ~/.config/unity3d/Ludeon Studios/RimWorld by Ludeon Studios/Config/ModsConfig.xml
    """
    env = os.environ.get("RIMWORLD_CONFIG_DIR")
    base = Path(env) if env else _xdg_config_home() / _RIMWORLD_LINUX_CONFIG
    return base / MODS_CONFIG_FILE_NAME
