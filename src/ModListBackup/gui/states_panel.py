"""
states_panel.py
Panel listing the numbered states with Save / Load / Rename per row, and
Undo plus ModsConfig.xml Backup / Restore buttons along the bottom.
"""

from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from ModListBackup.Handlers.mods_config_handler import ModsConfigHandler
from ModListBackup.gui.theme import (
    ACCENT,
    ACCENT_HOV,
    BG_HEADER,
    BG_HOVER,
    BG_PANEL,
    BG_ROW,
    BG_ROW_ALT,
    BORDER,
    FONT_BOLD,
    FONT_NORMAL,
    FONT_SMALL,
    RED_BTN,
    RED_HOV,
    TEXT_DIM,
    TEXT_MAIN,
    TEXT_OK,
)


class StatesPanel(ctk.CTkFrame):
    """
    One row per state (1..settings.state_count). on_changed() is called after
    any action that may have changed the active mod list.
    """

    def __init__(
        self,
        parent,
        handler: ModsConfigHandler,
        on_changed: Optional[Callable[[], None]] = None,
    ):
        super().__init__(parent, fg_color=BG_PANEL, corner_radius=0)
        self._handler = handler
        self._on_changed = on_changed or (lambda: None)
        self._rows: dict[int, tuple[ctk.CTkLabel, ctk.CTkLabel, ctk.CTkButton]] = {}
        self._build()
        self.refresh()

    def _build(self):
        ctk.CTkLabel(
            self, text="Mod list states", font=FONT_BOLD, text_color=TEXT_MAIN,
        ).pack(padx=12, pady=(10, 2), anchor="w")
        ctk.CTkLabel(
            self,
            text="Save the active mods into a state, or load a state to replace them.",
            font=FONT_SMALL, text_color=TEXT_DIM,
        ).pack(padx=12, pady=(0, 8), anchor="w")
        ctk.CTkFrame(self, fg_color=BORDER, height=1).pack(fill="x", padx=12, pady=2)

        rows = ctk.CTkScrollableFrame(self, fg_color="transparent")
        rows.pack(fill="both", expand=True, padx=8, pady=4)
        rows.grid_columnconfigure(1, weight=1)

        for state in range(1, self._handler.settings.state_count + 1):
            bg = BG_ROW if state % 2 else BG_ROW_ALT
            num = ctk.CTkLabel(rows, text=f"{state:>2}", font=FONT_NORMAL,
                               text_color=TEXT_DIM, width=28, fg_color=bg)
            num.grid(row=state, column=0, sticky="nsew", pady=1)
            name = ctk.CTkLabel(rows, text="", font=FONT_NORMAL, anchor="w",
                                text_color=TEXT_MAIN, fg_color=bg)
            name.grid(row=state, column=1, sticky="nsew", pady=1, padx=(4, 4))
            ctk.CTkButton(
                rows, text="Save", width=60, height=26, font=FONT_SMALL,
                fg_color=ACCENT, hover_color=ACCENT_HOV,
                command=lambda s=state: self._on_save(s),
            ).grid(row=state, column=2, padx=2, pady=1)
            load_btn = ctk.CTkButton(
                rows, text="Load", width=60, height=26, font=FONT_SMALL,
                fg_color=BG_HEADER, hover_color=BG_HOVER,
                command=lambda s=state: self._on_load(s),
            )
            load_btn.grid(row=state, column=3, padx=2, pady=1)
            ctk.CTkButton(
                rows, text="Rename", width=70, height=26, font=FONT_SMALL,
                fg_color=BG_HEADER, hover_color=BG_HOVER,
                command=lambda s=state: self._on_rename(s),
            ).grid(row=state, column=4, padx=2, pady=1)
            self._rows[state] = (num, name, load_btn)

        bar = ctk.CTkFrame(self, fg_color="transparent")
        bar.pack(fill="x", padx=12, pady=(4, 10))
        self._undo_btn = ctk.CTkButton(
            bar, text="Undo", width=80, font=FONT_SMALL,
            fg_color=RED_BTN, hover_color=RED_HOV, command=self._on_undo,
        )
        self._undo_btn.pack(side="left")
        ctk.CTkButton(
            bar, text="Restore ModsConfig", width=140, font=FONT_SMALL,
            fg_color=BG_HEADER, hover_color=BG_HOVER, command=self._on_restore_config,
        ).pack(side="right", padx=(4, 0))
        ctk.CTkButton(
            bar, text="Backup ModsConfig", width=140, font=FONT_SMALL,
            fg_color=BG_HEADER, hover_color=BG_HOVER, command=self._on_backup_config,
        ).pack(side="right")

    def refresh(self):
        for state, (num, name, load_btn) in self._rows.items():
            is_set = self._handler.state_is_set(state)
            name.configure(text=self._handler.get_display_name(state))
            num.configure(text_color=TEXT_OK if is_set else TEXT_DIM)
            load_btn.configure(state="normal" if is_set else "disabled")
        self._undo_btn.configure(state="normal" if self._handler.can_undo else "disabled")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _on_save(self, state: int):
        self._handler.save_state(state)
        self.refresh()

    def _on_load(self, state: int):
        self._handler.load_state(state)
        self.refresh()
        self._on_changed()

    def _on_undo(self):
        self._handler.undo_last_action()
        self.refresh()
        self._on_changed()

    def _on_rename(self, state: int):
        dialog = ctk.CTkInputDialog(
            title=f"Rename state {state}",
            text=f"New name for state {state} (leave empty for the default):",
        )
        name = dialog.get_input()
        if name is None:
            return
        self._handler.rename_state(state, name)
        self.refresh()

    def _on_backup_config(self):
        self._handler.backup_current()

    def _on_restore_config(self):
        self._handler.restore_current()
        self._on_changed()
