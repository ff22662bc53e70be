"""
Main window: StatesPanel on top, the application log below it.
"""

from __future__ import annotations

from datetime import datetime

import customtkinter as ctk

from ModListBackup.Handlers.mods_config_handler import ModsConfigHandler
from ModListBackup.Utils.app_log import set_app_log
from ModListBackup.gui.states_panel import StatesPanel
from ModListBackup.gui.theme import BG_DEEP, FONT_MONO, TEXT_MAIN
from ModListBackup.version import __version__


class App(ctk.CTk):
    WIDTH = 560
    HEIGHT = 620

    def __init__(self, handler: ModsConfigHandler):
        super().__init__(fg_color=BG_DEEP)
        ctk.set_appearance_mode("dark")
        self.title(f"ModListBackup {__version__}")
        self.geometry(f"{self.WIDTH}x{self.HEIGHT}")
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self._handler = handler

        self._panel = StatesPanel(self, handler, on_changed=self._on_mods_changed)
        self._panel.pack(fill="both", expand=True)

        self._textbox = ctk.CTkTextbox(
            self, height=120, font=FONT_MONO, fg_color=BG_DEEP,
            text_color=TEXT_MAIN, state="disabled", wrap="word", corner_radius=0,
        )
        self._textbox.pack(fill="x", side="bottom")
        set_app_log(self._log, self.after)

        active = handler.mods_config.active_mods_in_load_order()
        self._log(f"{len(active)} active mod(s) in {handler.mods_config.path}")

    def _log(self, message: str):
        ts = datetime.now().strftime("%H:%M:%S")
        self._textbox.configure(state="normal")
        self._textbox.insert("end", f"[{ts}] {message}\n")
        self._textbox.see("end")
        self._textbox.configure(state="disabled")

    def _on_mods_changed(self):
        active = self._handler.mods_config.active_mods_in_load_order()
        self._log(f"Active mods now: {len(active)}")

    def _on_close(self):
        set_app_log(None)
        self.destroy()
