"""ModListBackup — save, load and undo RimWorld mod-list states."""

from ModListBackup.version import __version__

__all__ = ["__version__"]
