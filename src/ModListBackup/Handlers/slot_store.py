"""
slot_store.py
Numbered mod-list slots on disk, plus the ModsConfig.xml safety copy.

Each slot is one XML file in the backups directory:
  <backups>/3.xml        — slot 3
  <backups>/3.xml.rws    — slot 3 when "Sync to Steam" is on

Every operation returns a SlotResult instead of raising, so the handler
decides how to recover. result.unwrap() re-raises the carried error for
callers that prefer exceptions.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Generic, TypeVar

from ModListBackup.Handlers.snapshot import SNAPSHOT_ROOT_TAG, Snapshot
from ModListBackup.Utils.config_paths import MODS_CONFIG_FILE_NAME
from ModListBackup.Utils.xml_data import XmlDataError, item_from_xml_file, save_data_object

if TYPE_CHECKING:
    from ModListBackup.Utils.settings import Settings

log = logging.getLogger(__name__)

XML_FILE_EXTENSION = ".xml"
STEAM_SYNC_SUFFIX = ".rws"

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class SlotError(Exception):
    """Base for slot store failures. Carries the slot (if any) and path."""

    def __init__(self, message: str, slot: int | None = None, path: Path | None = None):
        super().__init__(message)
        self.slot = slot
        self.path = path


class CorruptOrMissingSlot(SlotError):
    """The slot file could not be read back as a Snapshot."""


class SlotNotFound(CorruptOrMissingSlot):
    """No file exists for the slot."""


class IOFailure(SlotError):
    """Copy, write or delete failed at the OS level."""


@dataclass(frozen=True)
class SlotResult(Generic[T]):
    value: T | None = None
    error: SlotError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T | None:
        if self.error is not None:
            raise self.error
        return self.value


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class SlotStore:
    """
    Maps slot indices to files under *backups_dir*.

    *settings* is read on every path computation so toggling sync mode takes
    effect immediately. *host_config_path* is the game's live ModsConfig.xml.
    """

    def __init__(self, backups_dir: Path, host_config_path: Path, settings: Settings):
        self.backups_dir = backups_dir
        self.host_config_path = host_config_path
        self.settings = settings

    @property
    def host_config_backup_path(self) -> Path:
        return self.backups_dir / MODS_CONFIG_FILE_NAME

    def slot_path(self, index: int) -> Path:
        if index < 1:
            raise ValueError(f"Slot index must be >= 1, got {index}")
        name = f"{index}{XML_FILE_EXTENSION}"
        if self.settings.sync_to_steam:
            name += STEAM_SYNC_SUFFIX
        return self.backups_dir / name

    def slot_exists(self, index: int) -> bool:
        return self.slot_path(index).is_file()

    def list_slots(self, count: int) -> list[int]:
        """Indices in 1..count that currently hold a file."""
        return [i for i in range(1, count + 1) if self.slot_exists(i)]

    def read_slot(self, index: int) -> SlotResult[Snapshot]:
        path = self.slot_path(index)
        try:
            snapshot = item_from_xml_file(Snapshot, path, SNAPSHOT_ROOT_TAG)
        except FileNotFoundError:
            return SlotResult(error=SlotNotFound(f"Slot {index} is not set ({path})", index, path))
        except (OSError, XmlDataError) as exc:
            return SlotResult(error=CorruptOrMissingSlot(
                f"Slot {index} could not be read: {exc}", index, path))
        log.debug("Read slot %d: build %d, %d mod(s)",
                  index, snapshot.build_number, len(snapshot.active_mods))
        return SlotResult(value=snapshot)

    def write_snapshot(self, snapshot: Snapshot, index: int) -> SlotResult[Path]:
        path = self.slot_path(index)
        try:
            save_data_object(snapshot, path, SNAPSHOT_ROOT_TAG)
        except OSError as exc:
            return SlotResult(error=IOFailure(f"Could not write slot {index}: {exc}", index, path))
        log.debug("Wrote slot %d (%d mod(s)) to %s", index, len(snapshot.active_mods), path)
        return SlotResult(value=path)

    def delete_slot(self, index: int) -> SlotResult[Path]:
        path = self.slot_path(index)
        try:
            path.unlink()
        except FileNotFoundError:
            return SlotResult(error=SlotNotFound(f"Slot {index} is not set ({path})", index, path))
        except OSError as exc:
            return SlotResult(error=IOFailure(f"Could not delete slot {index}: {exc}", index, path))
        log.debug("Deleted slot %d (%s)", index, path)
        return SlotResult(value=path)

    # ------------------------------------------------------------------
    # ModsConfig.xml safety copy
    # ------------------------------------------------------------------

    def backup_host_config(self) -> SlotResult[Path]:
        """Copy the live ModsConfig.xml into the backups directory."""
        return self._copy(self.host_config_path, self.host_config_backup_path)

    def restore_host_config(self) -> SlotResult[Path]:
        """Copy the saved ModsConfig.xml back over the live one."""
        return self._copy(self.host_config_backup_path, self.host_config_path)

    @staticmethod
    def _copy(src: Path, dst: Path) -> SlotResult[Path]:
        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dst)
        except OSError as exc:
            return SlotResult(error=IOFailure(f"Could not copy {src} to {dst}: {exc}", path=src))
        log.debug("Copied %s -> %s", src, dst)
        return SlotResult(value=dst)
