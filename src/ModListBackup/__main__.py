"""
Run:
  python -m ModListBackup list                  # show every slot and its name
  python -m ModListBackup save 3                # active mods -> slot 3
  python -m ModListBackup load 3                # slot 3 -> active mods
  python -m ModListBackup delete 3
  python -m ModListBackup rename 3 "Combat overhaul"
  python -m ModListBackup backup-config         # copy ModsConfig.xml aside
  python -m ModListBackup restore-config        # put that copy back
  python -m ModListBackup gui

  --config PATH   use this ModsConfig.xml instead of the game's
  --backups DIR   keep slot files in DIR
  -v              debug logging

Undo only lives for one session, so it is only offered in the GUI.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ModListBackup.Handlers.mods_config_handler import open_session
from ModListBackup.Utils.app_log import configure_logging
from ModListBackup.Utils.mods_config import ModsConfigError


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ModListBackup",
        description="Save and load RimWorld mod lists in numbered slots.",
    )
    ap.add_argument("--config", type=Path, help="Path to ModsConfig.xml (default: the game's)")
    ap.add_argument("--backups", type=Path, help="Directory holding slot files")
    ap.add_argument("--settings", type=Path, help="Path to settings.json")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List slots")
    for name, text in (("save", "Save active mods into a slot"),
                       ("load", "Load a slot into active mods"),
                       ("delete", "Delete a slot")):
        p = sub.add_parser(name, help=text)
        p.add_argument("state", type=int)
    p = sub.add_parser("rename", help="Name a slot (empty name resets it)")
    p.add_argument("state", type=int)
    p.add_argument("name")
    sub.add_parser("backup-config", help="Copy ModsConfig.xml into the backups directory")
    sub.add_parser("restore-config", help="Copy the ModsConfig.xml backup over the live file")
    sub.add_parser("gui", help="Open the slot panel")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        handler = open_session(args.config, args.backups, args.settings)
    except ModsConfigError as exc:
        print(f"Error: cannot read ModsConfig.xml: {exc}", file=sys.stderr)
        return 1
    if handler.settings.debug_logging:
        configure_logging(True)

    if getattr(args, "state", 1) < 1:
        print(f"Error: slot index must be 1 or higher, got {args.state}", file=sys.stderr)
        return 1

    cmd = args.command
    if cmd == "list":
        count = max([handler.settings.state_count, *handler.store.list_slots(99)])
        for state in range(1, count + 1):
            mark = "*" if handler.state_is_set(state) else " "
            print(f"{mark} {state:>2}  {handler.get_display_name(state)}")
        return 0
    if cmd == "gui":
        from ModListBackup.gui.app import App
        App(handler).mainloop()
        return 0

    if cmd == "save":
        ok = handler.save_state(args.state)
    elif cmd == "load":
        if not handler.state_is_set(args.state):
            print(f"Error: slot {args.state} is not set", file=sys.stderr)
            return 1
        ok = handler.load_state(args.state)
    elif cmd == "delete":
        ok = handler.delete_state(args.state)
    elif cmd == "rename":
        ok = handler.rename_state(args.state, args.name)
    elif cmd == "backup-config":
        ok = handler.backup_current()
    else:
        ok = handler.restore_current()

    if not ok:
        print(f"Error: {cmd} failed (see log above)", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
