"""
Selection front-ends: turn user input into ordered lists of component
identifiers.

Three front-ends are provided: a direct whitespace-separated list (for
--apps), a numbered text menu that yields one selection per valid choice,
and an urwid checklist used on capable terminals.
"""

import logging
import os
import sys
from typing import Callable, Iterator, List, Optional

from installer import config
from installer.registry import ComponentRegistry
from installer.ui.tui_checklist import ComponentChecklist

module_logger = logging.getLogger(__name__)

ALL_CHOICE_LABEL = "All"
QUIT_CHOICE_LABEL = "Quit"
MENU_PROMPT = "Select an option: "


def parse_app_list(apps: str) -> List[str]:
    """
    Split a whitespace-separated identifier list, dropping repeats while
    keeping the first occurrence of each. Identifiers are not validated
    here; the dispatcher warns about and skips unknown ones.
    """
    selection: List[str] = []
    for identifier in apps.split():
        if identifier not in selection:
            selection.append(identifier)
    return selection


def canonical_selection() -> List[str]:
    """The components selected by --all and the menu's "All" option."""
    return list(config.COMPONENT_GROUPS["all"])


def menu_options() -> List[str]:
    """Labels of the numbered menu, in display order."""
    labels = [
        component_class.label or identifier
        for identifier, component_class in ComponentRegistry.get_all_components().items()
    ]
    return labels + [ALL_CHOICE_LABEL, QUIT_CHOICE_LABEL]


def numbered_menu_choices(
    input_func: Callable[[str], str] = input,
    output_func: Callable[[str], None] = print,
    current_logger: Optional[logging.Logger] = None,
) -> Iterator[List[str]]:
    """
    Runs the numbered menu, yielding the selection for each valid choice.

    The options are printed once, then the prompt repeats after each
    choice until "Quit" is picked or the input ends.
    """
    logger_to_use = current_logger if current_logger else module_logger
    identifiers = list(ComponentRegistry.get_all_components())
    options = menu_options()
    all_choice = len(identifiers) + 1
    quit_choice = len(identifiers) + 2

    for number, label in enumerate(options, 1):
        output_func(f"{number}) {label}")

    while True:
        try:
            reply = input_func(MENU_PROMPT).strip()
        except EOFError:
            return
        if not reply.isdigit():
            logger_to_use.warning("Invalid choice")
            continue
        choice = int(reply)
        if choice == quit_choice:
            return
        if choice == all_choice:
            yield canonical_selection()
        elif 1 <= choice <= len(identifiers):
            yield [identifiers[choice - 1]]
        else:
            logger_to_use.warning("Invalid choice")


def checklist_available(text_menu: bool = False) -> bool:
    """
    True if the urwid checklist can be shown: both stdin and stdout are
    terminals, TERM is usable, and the text menu was not requested.
    """
    if text_menu:
        return False
    if os.environ.get("TERM", "dumb") == "dumb":
        return False
    return sys.stdin.isatty() and sys.stdout.isatty()


def run_checklist_selection() -> Optional[List[str]]:
    """
    Shows the checklist of every component with its default state.

    Returns:
        The checked identifiers in declaration order, or None if the user
        cancelled.
    """
    items = [
        (identifier, component_class.label, component_class.default_selected)
        for identifier, component_class in ComponentRegistry.get_all_components().items()
    ]
    return ComponentChecklist(items).run()
