from __future__ import annotations

import logging
from pathlib import Path
from tkinter import filedialog
from typing import Any

import customtkinter as ctk

from school_attendance.models import GRADE_CONFIGS, Grade, format_percentage, summarize_day
from school_attendance.reports import csv_filename, pdf_filename, write_csv, write_pdf
from school_attendance.reports.pdf_report import SCHOOL_SUBTITLE, SCHOOL_TITLE
from school_attendance.services import AttendanceStore, EditSession
from school_attendance.ui.theme import (
    ABSENT_TEXT,
    BULK_ACCENT,
    BULK_ACCENT_HOVER,
    EXPORT_PDF,
    EXPORT_PDF_HOVER,
    PRESENT_TEXT,
    ROW_TEXT,
    VS_ACCENT,
    VS_ACCENT_HOVER,
    VS_BG,
    VS_DIVIDER,
    VS_SUCCESS,
    VS_SURFACE,
    VS_SURFACE_ALT,
    VS_TEXT,
    VS_TEXT_MUTED,
    VS_WARNING,
)

logger = logging.getLogger(__name__)

TABLE_HEADINGS: tuple[str, ...] = (
    "Class Grade",
    "Class Strength",
    "Present",
    "Absent",
    "Present %",
    "Absent %",
    "",
)


class DailyAttendanceView(ctk.CTkFrame):
    """Attendance table for one selected date, with row and bulk editing plus exports."""

    def __init__(
        self,
        master,
        store: AttendanceStore,
        session: EditSession,
        *,
        export_dir: Path,
    ) -> None:
        super().__init__(master, fg_color=VS_BG)
        self._store = store
        self._session = session
        self._export_dir = export_dir

        self._date_var = ctk.StringVar(value="")
        self._status_var = ctk.StringVar(value="Choose a day and edit a class row to record attendance.")
        self._entry_vars: dict[tuple[Grade, str], ctk.StringVar] = {}

        self._heading_font = ctk.CTkFont(size=28, weight="bold")
        self._subheading_font = ctk.CTkFont(size=16)
        self._section_font = ctk.CTkFont(size=20, weight="bold")
        self._table_header_font = ctk.CTkFont(size=14, weight="bold")
        self._table_body_font = ctk.CTkFont(size=15)
        self._button_font = ctk.CTkFont(size=15, weight="bold")

        self._build_layout()
        self.refresh()

    # ------------------------------------------------------------------
    # Layout construction
    # ------------------------------------------------------------------
    def _build_layout(self) -> None:
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        header = ctk.CTkFrame(self, fg_color=VS_SURFACE, corner_radius=16)
        header.grid(row=0, column=0, sticky="ew", padx=24, pady=(24, 12))
        header.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(header, text=SCHOOL_TITLE, font=self._heading_font, text_color=VS_TEXT).grid(
            row=0, column=0, pady=(18, 4)
        )
        ctk.CTkLabel(header, text=SCHOOL_SUBTITLE, font=self._subheading_font, text_color=VS_TEXT_MUTED).grid(
            row=1, column=0, pady=(0, 18)
        )

        container = ctk.CTkScrollableFrame(self, fg_color=VS_SURFACE, corner_radius=16)
        container.grid(row=1, column=0, sticky="nsew", padx=24, pady=12)
        container.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            container,
            text="Daily Class Attendance",
            font=self._section_font,
            text_color=VS_TEXT,
        ).grid(row=0, column=0, pady=(18, 8))

        self._build_date_navigation(container)

        self._bulk_actions = ctk.CTkFrame(container, fg_color="transparent")
        self._bulk_actions.grid(row=2, column=0, pady=(4, 12))

        self._table = ctk.CTkFrame(container, fg_color=VS_SURFACE_ALT, corner_radius=12)
        self._table.grid(row=3, column=0, sticky="ew", padx=18, pady=(0, 18))
        self._table.grid_columnconfigure(0, weight=1)

        self._build_export_actions(container)

        self._status_label = ctk.CTkLabel(
            self,
            textvariable=self._status_var,
            text_color=VS_TEXT_MUTED,
            anchor="w",
        )
        self._status_label.grid(row=2, column=0, sticky="ew", padx=32, pady=(0, 18))

    def _build_date_navigation(self, parent: ctk.CTkFrame) -> None:
        navigation = ctk.CTkFrame(parent, fg_color="transparent")
        navigation.grid(row=1, column=0, pady=(4, 12))

        ctk.CTkButton(
            navigation,
            text="← Previous Day",
            command=self._go_to_previous_day,
            fg_color=VS_ACCENT,
            hover_color=VS_ACCENT_HOVER,
            font=self._button_font,
            height=40,
        ).grid(row=0, column=0, padx=8)

        ctk.CTkLabel(
            navigation,
            textvariable=self._date_var,
            font=ctk.CTkFont(size=18, weight="bold"),
            text_color=VS_TEXT,
        ).grid(row=0, column=1, padx=16)

        ctk.CTkButton(
            navigation,
            text="Next Day →",
            command=self._go_to_next_day,
            fg_color=VS_ACCENT,
            hover_color=VS_ACCENT_HOVER,
            font=self._button_font,
            height=40,
        ).grid(row=0, column=2, padx=8)

    def _build_export_actions(self, parent: ctk.CTkFrame) -> None:
        exports = ctk.CTkFrame(parent, fg_color="transparent")
        exports.grid(row=4, column=0, pady=(6, 18))

        ctk.CTkLabel(
            exports,
            text="Export Attendance Data",
            font=self._section_font,
            text_color=VS_TEXT,
        ).grid(row=0, column=0, columnspan=2, pady=(0, 10))

        ctk.CTkButton(
            exports,
            text="Export to CSV",
            command=self._export_csv,
            fg_color=VS_SUCCESS,
            hover_color=VS_ACCENT_HOVER,
            font=self._button_font,
            height=44,
            width=160,
        ).grid(row=1, column=0, padx=6)

        ctk.CTkButton(
            exports,
            text="Export to PDF",
            command=self._export_pdf,
            fg_color=EXPORT_PDF,
            hover_color=EXPORT_PDF_HOVER,
            font=self._button_font,
            height=44,
            width=160,
        ).grid(row=1, column=1, padx=6)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        self._date_var.set(f"Attendance for {self._session.selected_date}")
        self._render_bulk_actions()
        self._render_table()

    def _render_bulk_actions(self) -> None:
        for child in self._bulk_actions.winfo_children():
            child.destroy()

        if self._session.is_bulk:
            ctk.CTkButton(
                self._bulk_actions,
                text="Save All Changes",
                command=self._save_all,
                fg_color=VS_SUCCESS,
                hover_color=VS_ACCENT_HOVER,
                font=self._button_font,
                height=40,
            ).grid(row=0, column=0, padx=6)
            ctk.CTkButton(
                self._bulk_actions,
                text="Cancel Bulk Edit",
                command=self._cancel_edit,
                fg_color=VS_SURFACE_ALT,
                hover_color=VS_DIVIDER,
                font=self._button_font,
                height=40,
            ).grid(row=0, column=1, padx=6)
        else:
            ctk.CTkButton(
                self._bulk_actions,
                text="Bulk Edit Today's Attendance",
                command=self._begin_bulk,
                fg_color=BULK_ACCENT,
                hover_color=BULK_ACCENT_HOVER,
                font=self._button_font,
                height=40,
            ).grid(row=0, column=0, padx=6)

    def _render_table(self) -> None:
        for child in self._table.winfo_children():
            child.destroy()
        self._entry_vars.clear()

        header = ctk.CTkFrame(self._table, fg_color="transparent")
        header.grid(row=0, column=0, sticky="ew", padx=4, pady=(6, 2))
        self._configure_columns(header)
        for column, heading in enumerate(TABLE_HEADINGS):
            ctk.CTkLabel(
                header,
                text=heading.upper(),
                font=self._table_header_font,
                text_color=VS_TEXT_MUTED,
            ).grid(row=0, column=column, sticky="ew", padx=6, pady=6)

        for index, config in enumerate(GRADE_CONFIGS, start=1):
            self._render_grade_row(index, config.grade, config.strength, config.display_color)

        self._render_totals_row(len(GRADE_CONFIGS) + 1)

    def _render_grade_row(self, index: int, grade: Grade, strength: int, row_color: str) -> None:
        row = ctk.CTkFrame(self._table, fg_color=row_color, corner_radius=8)
        row.grid(row=index, column=0, sticky="ew", padx=4, pady=2)
        self._configure_columns(row)

        stored = self._session.stored_record(grade)
        editing = self._session.is_editing(grade)

        self._cell(row, 0, grade.label, anchor="w")
        self._cell(row, 1, str(strength))

        if editing:
            shown = self._session.displayed_record(grade)
            self._entry(row, 2, grade, "present", shown.present)
            self._entry(row, 3, grade, "absent", shown.absent)
        else:
            self._cell(row, 2, str(stored.present))
            self._cell(row, 3, str(stored.absent))

        self._cell(row, 4, format_percentage(stored.present_percentage), color=PRESENT_TEXT)
        self._cell(row, 5, format_percentage(stored.absent_percentage), color=ABSENT_TEXT)

        if self._session.is_bulk:
            return

        actions = ctk.CTkFrame(row, fg_color="transparent")
        actions.grid(row=0, column=6, padx=6, pady=4)
        if editing:
            ctk.CTkButton(
                actions,
                text="Save",
                width=64,
                command=lambda g=grade: self._commit_row(g),
                fg_color=VS_SUCCESS,
                hover_color=VS_ACCENT_HOVER,
            ).grid(row=0, column=0, padx=2)
            ctk.CTkButton(
                actions,
                text="Cancel",
                width=64,
                command=self._cancel_edit,
                fg_color=VS_SURFACE_ALT,
                hover_color=VS_DIVIDER,
            ).grid(row=0, column=1, padx=2)
        else:
            ctk.CTkButton(
                actions,
                text="Edit",
                width=64,
                command=lambda g=grade: self._begin_row(g),
                fg_color=VS_ACCENT,
                hover_color=VS_ACCENT_HOVER,
            ).grid(row=0, column=0, padx=2)

    def _render_totals_row(self, index: int) -> None:
        summary = summarize_day(self._store.data, self._session.selected_date)

        row = ctk.CTkFrame(self._table, fg_color=VS_SURFACE, corner_radius=8)
        row.grid(row=index, column=0, sticky="ew", padx=4, pady=(2, 6))
        self._configure_columns(row)

        values = (
            "Total",
            str(summary.total_strength),
            str(summary.present),
            str(summary.absent),
            format_percentage(summary.present_percentage),
            format_percentage(summary.absent_percentage),
        )
        for column, value in enumerate(values):
            self._cell(row, column, value, anchor="w" if column == 0 else "center", color=VS_TEXT, bold=True)

    def _configure_columns(self, frame: ctk.CTkFrame) -> None:
        frame.grid_columnconfigure(0, weight=2, minsize=140, uniform="attendance")
        for column in range(1, len(TABLE_HEADINGS)):
            frame.grid_columnconfigure(column, weight=1, minsize=100, uniform="attendance")

    def _cell(
        self,
        parent: ctk.CTkFrame,
        column: int,
        text: str,
        *,
        anchor: str = "center",
        color: str = ROW_TEXT,
        bold: bool = False,
    ) -> ctk.CTkLabel:
        label = ctk.CTkLabel(
            parent,
            text=text,
            anchor=anchor,
            text_color=color,
            font=ctk.CTkFont(size=15, weight="bold" if bold else "normal"),
        )
        label.grid(row=0, column=column, sticky="ew", padx=(12, 6), pady=6)
        return label

    def _entry(self, parent: ctk.CTkFrame, column: int, grade: Grade, field_name: str, value: int) -> None:
        var = ctk.StringVar(value=str(value))
        entry = ctk.CTkEntry(
            parent,
            textvariable=var,
            justify="center",
            width=80,
            fg_color=VS_BG,
            border_color=VS_ACCENT,
            text_color=VS_TEXT,
            font=self._table_body_font,
        )
        entry.grid(row=0, column=column, padx=6, pady=4)
        var.trace_add(
            "write",
            lambda *_args, g=grade, f=field_name, v=var: self._handle_entry_change(g, f, v),
        )
        self._entry_vars[(grade, field_name)] = var

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _handle_entry_change(self, grade: Grade, field_name: Any, var: ctk.StringVar) -> None:
        self._session.edit_field(grade, field_name, var.get())

    def _go_to_previous_day(self) -> None:
        self._session.go_to_previous_day()
        self.refresh()

    def _go_to_next_day(self) -> None:
        self._session.go_to_next_day()
        self.refresh()

    def _begin_row(self, grade: Grade) -> None:
        self._session.begin_row(grade)
        self.refresh()

    def _commit_row(self, grade: Grade) -> None:
        self._session.commit_row(grade)
        self._set_status(f"Saved {grade.label} for {self._session.selected_date}.", tone="success")
        self.refresh()

    def _begin_bulk(self) -> None:
        self._session.begin_bulk()
        self.refresh()

    def _save_all(self) -> None:
        self._session.save_all()
        self._set_status(f"Saved all classes for {self._session.selected_date}.", tone="success")
        self.refresh()

    def _cancel_edit(self) -> None:
        self._session.cancel()
        self.refresh()

    # ------------------------------------------------------------------
    # Export helpers
    # ------------------------------------------------------------------
    def _export_csv(self) -> None:
        file_name = filedialog.asksaveasfilename(
            title="Export attendance to CSV",
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv"), ("All files", "*.*")],
            initialdir=str(self._export_dir),
            initialfile=csv_filename(),
        )
        if not file_name:
            return

        try:
            path = write_csv(self._store.data, Path(file_name))
        except OSError as exc:
            logger.exception("CSV export failed")
            self._set_status(f"Failed to export CSV: {exc}", tone="warning")
            return

        self._set_status(f"Exported attendance to {path.name}.", tone="success")

    def _export_pdf(self) -> None:
        file_name = filedialog.asksaveasfilename(
            title="Export attendance to PDF",
            defaultextension=".pdf",
            filetypes=[("PDF files", "*.pdf"), ("All files", "*.*")],
            initialdir=str(self._export_dir),
            initialfile=pdf_filename(),
        )
        if not file_name:
            return

        try:
            path = write_pdf(self._store.data, Path(file_name))
        except OSError as exc:
            logger.exception("PDF export failed")
            self._set_status(f"Failed to export PDF: {exc}", tone="warning")
            return

        self._set_status(f"Exported attendance to {path.name}.", tone="success")

    def _set_status(self, message: str, tone: str = "info") -> None:
        self._status_var.set(message)
        color_map = {
            "info": VS_TEXT_MUTED,
            "warning": VS_WARNING,
            "success": VS_SUCCESS,
        }
        self._status_label.configure(text_color=color_map.get(tone, VS_TEXT_MUTED))
