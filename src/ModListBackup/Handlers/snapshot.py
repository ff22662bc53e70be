"""
snapshot.py
The persisted mod-list record and the single pending-undo descriptor.

A Snapshot is what a slot file holds: the game build that produced it and
the active mod IDs in load order. PendingUndo is one of three variants;
each carries only what is needed to reverse the action it describes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union

SNAPSHOT_ROOT_TAG = "ModsConfigData"
UNKNOWN_BUILD = -1


@dataclass(frozen=True)
class Snapshot:
    build_number: int = field(default=UNKNOWN_BUILD, metadata={"xml": "buildNumber"})
    # load order, first entry loads first
    active_mods: tuple[str, ...] = field(default=(), metadata={"xml": "activeMods"})

    def __post_init__(self):
        # accept any iterable (e.g. a list from a caller) but store a tuple
        object.__setattr__(self, "active_mods", tuple(self.active_mods))


class Mode(Enum):
    """What the handler is doing (or last did)."""
    INACTIVE = auto()
    SAVING   = auto()
    LOADING  = auto()


class LastActionType(Enum):
    restore = "restore"
    backup  = "backup"
    none    = "none"


@dataclass(frozen=True)
class NoPendingUndo:
    action = LastActionType.none


@dataclass(frozen=True)
class PendingRestore:
    """A slot was loaded; *snapshot* is the live state from before the load."""
    slot: int
    snapshot: Snapshot
    action = LastActionType.restore


@dataclass(frozen=True)
class PendingBackup:
    """A slot was saved; *prior* is its earlier content, None if it was unset."""
    slot: int
    prior: Snapshot | None
    action = LastActionType.backup


PendingUndo = Union[NoPendingUndo, PendingRestore, PendingBackup]
