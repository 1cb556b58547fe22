from __future__ import annotations

import logging
import os
import tkinter as tk

import customtkinter as ctk

from school_attendance.config.settings import Settings, settings as default_settings
from school_attendance.data import JsonKeyValueStore
from school_attendance.services import AttendanceStore, EditSession
from school_attendance.ui.daily_attendance_view import DailyAttendanceView
from school_attendance.ui.theme import VS_BG

logger = logging.getLogger(__name__)


class AttendanceApp:
    def __init__(self, app_settings: Settings | None = None) -> None:
        self._settings = app_settings or default_settings
        self._settings.ensure_directories()
        logger.info("Starting with %s", self._settings)

        try:
            from ctypes import windll
            windll.shcore.SetProcessDpiAwareness(1)
        except (ImportError, AttributeError):
            pass

        ctk.set_appearance_mode("dark")

        self._root = ctk.CTk()
        self._root.title(self._settings.app_name)
        self._root.geometry("1280x720")
        self._root.minsize(1080, 640)
        self._root.configure(fg_color=VS_BG)

        self._root.grid_rowconfigure(0, weight=1)
        self._root.grid_columnconfigure(0, weight=1)

        self._store = AttendanceStore(JsonKeyValueStore(self._settings.attendance_data_file))
        self._store.load()
        self._session = EditSession(self._store)

        self._view = DailyAttendanceView(
            self._root,
            self._store,
            self._session,
            export_dir=self._settings.export_dir,
        )
        self._view.grid(row=0, column=0, sticky="nsew")

        self._root.after(0, self._maximize_window)

    def run(self) -> None:
        self._root.mainloop()

    def _maximize_window(self) -> None:
        try:
            if os.name == "nt":
                self._root.state("zoomed")
            else:
                self._root.attributes("-zoomed", True)
        except tk.TclError:
            # Ignore platforms that don't support zoomed state
            pass
