# installer/ui/tui_constants.py
# -*- coding: utf-8 -*-
"""
Constants for the TUI.
"""

# --- Palette Definition ---
palette = [
    ("header", "white", "dark blue", "standout"),
    ("footer", "white", "dark blue", "standout"),
    ("body", "black", "light gray"),
    ("button", "black", "dark cyan"),
    ("button_focus", "white", "dark blue", "standout"),
    ("checklist", "black", "light gray"),
    ("checklist_focus", "black", "dark cyan", "standout"),
    ("pane_border", "black", "light gray"),
]

TITLE = "Apps Bootstrap"
PROMPT = "Select components to install/remove (Space to toggle, Enter on OK):"
FOOTER = "Space: toggle | Tab: buttons | Esc or q: cancel"

CANCEL_KEYS = ("esc", "q", "Q")
