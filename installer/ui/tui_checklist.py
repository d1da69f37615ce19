# installer/ui/tui_checklist.py
# -*- coding: utf-8 -*-
"""
Urwid checklist for picking the components to apply.
"""

from typing import List, Optional, Sequence, Tuple

import urwid  # type: ignore[import-untyped]

from .tui_constants import CANCEL_KEYS, FOOTER, PROMPT, TITLE, palette

# (identifier, label, checked by default)
ChecklistItem = Tuple[str, str, bool]


class ComponentChecklist:
    """
    A full-screen checklist with one checkbox per component and OK/Cancel
    buttons.

    `run()` blocks until the user confirms or cancels and returns the
    identifiers that were checked, in the order the items were given, or
    None when the checklist was cancelled.
    """

    def __init__(self, items: Sequence[ChecklistItem]) -> None:
        self.items = list(items)
        self.cancelled = False
        self.checkboxes: List[Tuple[str, urwid.CheckBox]] = [
            (identifier, urwid.CheckBox(f"{identifier}  {label}", state=checked))
            for identifier, label, checked in self.items
        ]

        body: List[urwid.Widget] = [urwid.Text(PROMPT), urwid.Divider()]
        for _, checkbox in self.checkboxes:
            body.append(urwid.AttrMap(checkbox, "checklist", "checklist_focus"))
        body.append(urwid.Divider())
        ok_button = urwid.Button("OK", on_press=self._on_ok)
        cancel_button = urwid.Button("Cancel", on_press=self._on_cancel)
        body.append(
            urwid.GridFlow(
                [
                    urwid.AttrMap(ok_button, "button", "button_focus"),
                    urwid.AttrMap(cancel_button, "button", "button_focus"),
                ],
                cell_width=10,
                h_sep=2,
                v_sep=0,
                align="center",
            )
        )

        self.listbox = urwid.ListBox(urwid.SimpleFocusListWalker(body))
        self.frame = urwid.Frame(
            body=urwid.AttrMap(
                urwid.LineBox(self.listbox, title=TITLE), "body"
            ),
            header=urwid.AttrMap(urwid.Text(TITLE, align="center"), "header"),
            footer=urwid.AttrMap(urwid.Text(FOOTER, align="center"), "footer"),
        )

    def selected(self) -> List[str]:
        return [
            identifier
            for identifier, checkbox in self.checkboxes
            if checkbox.get_state()
        ]

    def _on_ok(self, button: Optional[urwid.Button] = None) -> None:
        self.cancelled = False
        raise urwid.ExitMainLoop()

    def _on_cancel(self, button: Optional[urwid.Button] = None) -> None:
        self.cancelled = True
        raise urwid.ExitMainLoop()

    def _handle_keys(self, key: str) -> None:
        if key in CANCEL_KEYS:
            self._on_cancel()

    def run(self) -> Optional[List[str]]:
        urwid.MainLoop(
            self.frame, palette=palette, unhandled_input=self._handle_keys
        ).run()
        if self.cancelled:
            return None
        return self.selected()
