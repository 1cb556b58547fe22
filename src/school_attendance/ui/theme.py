from __future__ import annotations

# Core surfaces
VS_BG = "#1E1E1E"
VS_SURFACE = "#252526"
VS_SURFACE_ALT = "#2D2D30"

# Borders and outlines
VS_DIVIDER = "#2F2F2F"

# Accent colors
VS_ACCENT = "#0E639C"
VS_ACCENT_HOVER = "#1177BB"
BULK_ACCENT = "#7C3AED"
BULK_ACCENT_HOVER = "#6D28D9"
EXPORT_PDF = "#DC2626"
EXPORT_PDF_HOVER = "#B91C1C"

# Text colors
VS_TEXT = "#F3F3F3"
VS_TEXT_MUTED = "#9DA5B4"
ROW_TEXT = "#111827"

# Status colors
VS_SUCCESS = "#6A9955"
VS_WARNING = "#F48771"
PRESENT_TEXT = "#15803D"
ABSENT_TEXT = "#B91C1C"
