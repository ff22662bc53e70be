"""
mods_config_handler.py
Save the active mod list into a numbered slot, load a slot back into the
active mod list, and undo the most recent save/load.

Before every save or load the handler records what it needs to reverse that
one action:

  save_state(n)  -> PendingBackup(n, <slot n's old snapshot or None>)
  load_state(n)  -> PendingRestore(n, <active mods before the load>)

undo_last_action() replays that reversal. Only the latest action is kept,
and it is not consumed: undoing twice replays the same reversal.

save_state and load_state re-read ModsConfig.xml first, so the game (or
another tool) may change it between calls.

Failures during save/load are logged and recovered by putting the live mod
list back to the core-only baseline; nothing is raised to the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from ModListBackup.Handlers.slot_store import SlotNotFound, SlotStore
from ModListBackup.Handlers.snapshot import (
    Mode,
    NoPendingUndo,
    PendingBackup,
    PendingRestore,
    PendingUndo,
    Snapshot,
)
from ModListBackup.Utils.app_log import app_log
from ModListBackup.Utils.config_paths import get_backups_dir, get_host_config_path
from ModListBackup.Utils.mods_config import CORE_MOD_IDENTIFIER, ModsConfig, ModsConfigError
from ModListBackup.Utils.settings import DEFAULT_STATE_NAME, Settings

log = logging.getLogger(__name__)


class ModsConfigHandler:
    """
    One instance per session. Holds the mode, the last captured snapshot and
    the pending undo; all slot and activation work goes through *store* and
    *mods_config*.
    """

    def __init__(self, mods_config: ModsConfig, store: SlotStore, settings: Settings):
        self.mods_config = mods_config
        self.store = store
        self.settings = settings
        self._mode = Mode.INACTIVE
        self._pending: PendingUndo = NoPendingUndo()
        self._can_undo = False
        self.data: Snapshot = self.capture_current()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def pending_undo(self) -> PendingUndo:
        return self._pending

    @property
    def can_undo(self) -> bool:
        return self._can_undo

    def capture_current(self) -> Snapshot:
        """Snapshot of the live build number and active mods (load order)."""
        return Snapshot(
            build_number=self.mods_config.build_number,
            active_mods=self.mods_config.active_mods_in_load_order(),
        )

    def _set_pending(self, pending: PendingUndo) -> None:
        log.debug("Creating last action type %s for state %s",
                  pending.action.value, getattr(pending, "slot", None))
        self._pending = pending
        self._can_undo = True

    # ------------------------------------------------------------------
    # Save / load
    # ------------------------------------------------------------------

    def save_state(self, state: int) -> bool:
        """Write the live mod list into slot *state*. Returns False on failure."""
        self._mode = Mode.SAVING
        if not self._refresh_live("save_state"):
            return False
        self._set_pending(PendingBackup(state, self._prior_content(state)))

        path = self.store.slot_path(state)
        log.debug("Saving state to %s", path)
        self.data = self.capture_current()
        result = self.store.write_snapshot(self.data, state)
        if not result.ok:
            self._recover("save_state", result.error)
            return False
        app_log(f"Saved {len(self.data.active_mods)} mod(s) to {self.get_display_name(state)} ({state})")
        return True

    def load_state(self, state: int) -> bool:
        """Replace the live mod list with slot *state*. Returns False on failure."""
        self._mode = Mode.LOADING
        if not self._refresh_live("load_state"):
            return False
        self._set_pending(PendingRestore(state, self.capture_current()))

        log.debug("Loading state from %s", self.store.slot_path(state))
        result = self.store.read_slot(state)
        if not result.ok:
            self._recover("load_state", result.error)
            return False
        self.data = result.value
        try:
            self.set_active_mods(self.data.active_mods)
        except OSError as exc:
            self._recover("load_state", exc)
            return False
        app_log(f"Loaded {len(self.data.active_mods)} mod(s) from {self.get_display_name(state)} ({state})")
        return True

    def _prior_content(self, state: int) -> Snapshot | None:
        """What slot *state* holds now, for undoing a save. None when unset."""
        if not self.store.slot_exists(state):
            return None
        result = self.store.read_slot(state)
        if not result.ok:
            log.warning("Slot %d is unreadable; undoing this save will delete it: %s",
                        state, result.error)
            return None
        return result.value

    def _refresh_live(self, operation: str) -> bool:
        """Re-read ModsConfig.xml so captures see changes made outside this session."""
        try:
            self.mods_config.load()
        except ModsConfigError as exc:
            self._recover(operation, exc)
            return False
        return True

    def _recover(self, operation: str, error: BaseException) -> None:
        log.debug("%s failed", operation, exc_info=error)
        app_log(f"Error: {error}. Active mods were reset to core only.", logging.ERROR)
        self.clear_loaded_mods()

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def set_active_mods(self, mods_to_activate: Iterable[str]) -> None:
        """Clear everything (core included), activate *mods_to_activate* in order, persist.

        Raises OSError if ModsConfig.xml cannot be written.
        """
        self.clear_loaded_mods(remove_core=True)
        for mod_id in mods_to_activate:
            self.mods_config.set_active(mod_id, True)
        self.mods_config.save()

    def clear_loaded_mods(self, remove_core: bool = False) -> None:
        self.mods_config.reset()
        if remove_core:
            self.mods_config.set_active(CORE_MOD_IDENTIFIER, False)

    # ------------------------------------------------------------------
    # Undo
    # ------------------------------------------------------------------

    def undo_last_action(self) -> bool:
        pending = self._pending
        if not self._can_undo or isinstance(pending, NoPendingUndo):
            log.warning("undo_last_action was called but no undo action was set")
            return False

        log.debug("Undoing last action type %s for state %d", pending.action.value, pending.slot)
        if isinstance(pending, PendingRestore):
            log.debug("Restoring %d active mods", len(pending.snapshot.active_mods))
            try:
                self.set_active_mods(pending.snapshot.active_mods)
            except OSError as exc:
                log.debug("Undo failed", exc_info=exc)
                app_log(f"Undo failed: {exc}", logging.ERROR)
                return False
            app_log(f"Undo: restored the mod list from before loading state {pending.slot}")
            return True

        if pending.prior is not None:
            result = self.store.write_snapshot(pending.prior, pending.slot)
            if not result.ok:
                app_log(f"Undo failed: {result.error}", logging.ERROR)
                return False
            app_log(f"Undo: restored state {pending.slot}'s previous contents")
            return True

        log.debug("Attempting to delete %d", pending.slot)
        result = self.store.delete_slot(pending.slot)
        if not result.ok and not isinstance(result.error, SlotNotFound):
            app_log(f"Undo failed: {result.error}", logging.ERROR)
            return False
        app_log(f"Undo: state {pending.slot} is empty again")
        return True

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def state_is_set(self, state: int) -> bool:
        return self.store.slot_exists(state)

    def get_display_name(self, state: int) -> str:
        name = self.settings.get_state_name(state).strip()
        return name or DEFAULT_STATE_NAME

    def rename_state(self, state: int, name: str) -> bool:
        """Store a name for slot *state*; blank resets it to the default."""
        self.settings.set_state_name(state, name)
        try:
            self.settings.save()
        except OSError as exc:
            app_log(f"Could not save state name: {exc}", logging.ERROR)
            return False
        return True

    def delete_state(self, state: int) -> bool:
        """Remove slot *state*'s file. Not undoable."""
        result = self.store.delete_slot(state)
        if not result.ok:
            app_log(str(result.error), logging.WARNING)
            return False
        app_log(f"Deleted state {state}")
        return True

    # ------------------------------------------------------------------
    # ModsConfig.xml safety copy
    # ------------------------------------------------------------------

    def backup_current(self) -> bool:
        """Copy the game's ModsConfig.xml aside."""
        result = self.store.backup_host_config()
        if not result.ok:
            app_log(f"Backup of ModsConfig.xml failed: {result.error}", logging.ERROR)
            return False
        app_log(f"Backed up ModsConfig.xml to {result.value}")
        return True

    def restore_current(self) -> bool:
        """Put the saved ModsConfig.xml back and reload the live list from it."""
        result = self.store.restore_host_config()
        if not result.ok:
            app_log(f"Restore of ModsConfig.xml failed: {result.error}", logging.ERROR)
            return False
        try:
            self.mods_config.load()
        except ModsConfigError as exc:
            app_log(f"Restored ModsConfig.xml is unreadable: {exc}", logging.ERROR)
            return False
        app_log("Restored ModsConfig.xml from backup")
        return True


def open_session(
    host_config_path: Path | None = None,
    backups_dir: Path | None = None,
    settings_path: Path | None = None,
) -> ModsConfigHandler:
    """Build a handler from the default (or given) config locations.

    Raises ModsConfigError if the game's ModsConfig.xml is malformed.
    """
    settings = Settings.load(settings_path)
    host_config_path = host_config_path or get_host_config_path()
    store = SlotStore(backups_dir or get_backups_dir(), host_config_path, settings)
    return ModsConfigHandler(ModsConfig(host_config_path), store, settings)
