# !/usr/bin/env python3
# filename: install.py
# -*- coding: utf-8 -*-
"""
Entry point for the apps bootstrapper.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

import installer.components  # noqa: F401  registers every component
from common.core_utils import setup_logging
from common.errors import FatalError
from installer import config
from installer.config_loader import DEFAULT_CONFIG_FILE, load_app_settings
from installer.orchestrator import ComponentDispatcher
from installer.registry import ComponentRegistry
from installer.selection import (
    canonical_selection,
    checklist_available,
    numbered_menu_choices,
    parse_app_list,
    run_checklist_selection,
)

logger = logging.getLogger("apps_bootstrap")


def components_help() -> str:
    """The component table shown at the end of --help."""
    lines = ["Components:"]
    components = ComponentRegistry.get_all_components()
    width = max(len(name) for name in components) + 2
    for identifier, component_class in components.items():
        lines.append(f"  {identifier:<{width}}{component_class.label}")
    lines.append("")
    lines.append(
        "--all installs: " + " ".join(config.COMPONENT_GROUPS["all"])
    )
    lines.append("")
    lines.append(
        "Environment: IL_VERSION, IL_DEB_URL, TS_AUTHKEY_EPHEMERAL, "
        "TS_AUTHKEY_PERSISTENT, APPS_* settings"
    )
    return "\n".join(lines)


def parse_args(
    args: Optional[List[str]] = None,
) -> Tuple[argparse.Namespace, List[str]]:
    """Parse command-line arguments, returning unrecognized ones separately."""
    parser = argparse.ArgumentParser(
        prog="install.py",
        description="Install optional apps (Input Leap, Tailscale) on a fresh Debian-family host.",
        epilog=components_help(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Install the default set of components without prompting.",
    )
    parser.add_argument(
        "--apps",
        metavar='"ID ..."',
        help="Space-separated component identifiers to apply, in order. Takes precedence over --all.",
    )
    parser.add_argument(
        "--text-menu",
        action="store_true",
        help="Use the numbered text menu instead of the checklist.",
    )
    parser.add_argument(
        "--strict-platform",
        action="store_true",
        help="Abort on a non Debian/Ubuntu host instead of warning.",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        metavar="PATH",
        help=f"Optional YAML settings file (default: {DEFAULT_CONFIG_FILE}).",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    return parser.parse_known_args(args)


def interactive_selections(text_menu: bool):
    """
    The selections made interactively: one from the checklist, or one per
    valid numbered-menu choice. Returns None if the checklist was cancelled.
    """
    if checklist_available(text_menu):
        selection = run_checklist_selection()
        if selection is None:
            return None
        return [selection]
    if not text_menu:
        logger.warning(
            "Checklist unavailable (no interactive terminal); "
            "falling back to text menu."
        )
    return numbered_menu_choices(current_logger=logger)


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the apps bootstrapper."""
    parsed_args, unknown_args = parse_args(args)
    log_level = logging.DEBUG if parsed_args.verbose else logging.INFO
    setup_logging(log_level=log_level)

    for unknown in unknown_args:
        logger.warning(f"Unknown option: {unknown}")

    try:
        app_settings = load_app_settings(
            parsed_args, parsed_args.config, current_logger=logger
        )
        setup_logging(
            log_level=log_level,
            log_prefix=app_settings.log_prefix,
            symbols=app_settings.symbols,
        )
        logger.info(
            f"{app_settings.symbols['rocket']} apps bootstrap {config.SCRIPT_VERSION} starting..."
        )

        if parsed_args.apps is not None:
            selections = [parse_app_list(parsed_args.apps)]
        elif parsed_args.all:
            selections = [canonical_selection()]
        else:
            selections = interactive_selections(parsed_args.text_menu)
            if selections is None:
                logger.warning("Menu cancelled.")
                return config.EXIT_OK

        dispatcher = ComponentDispatcher(app_settings, logger=logger)
        outcomes = []
        for selection in selections:
            outcomes.extend(dispatcher.run(selection))
        dispatcher.summarize(outcomes)
    except FatalError as e:
        logger.critical(f"{e}")
        return config.EXIT_FATAL
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return config.EXIT_INTERRUPTED

    logger.info("Done.")
    if any(outcome.failed for outcome in outcomes):
        return config.EXIT_COMPONENT_FAILURE
    return config.EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
