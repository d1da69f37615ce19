# bootstrap_installer/bs_prereqs.py
# -*- coding: utf-8 -*-
"""
Ensures the command-line tools needed to fetch and install components are
available, installing the apt packages that provide them when missing.
"""

import logging
from typing import Dict, Optional

from bootstrap_installer.bs_utils import get_bs_logger, missing_commands
from common.command_utils import get_symbols
from common.debian.apt_manager import AptManager
from common.errors import PrerequisiteError
from installer.config_models import AppSettings

logger = get_bs_logger("Prereqs")


def ensure_tools(
    context: dict,
    app_settings: AppSettings,
    tools: Optional[Dict[str, str]] = None,
    current_logger: Optional[logging.Logger] = None,
    **kwargs,
) -> None:
    """
    Checks for each prerequisite command and installs the packages providing
    the missing ones.

    This function interacts with the prober context to manage state:
    - Reads 'apt_updated_this_run' to see if 'apt-get update' is needed.
    - Sets 'any_install_attempted' to True if an installation is performed.
    - Adds each command found or installed to 'ensured_tools'.

    Args:
        context (dict): The prober's shared context dictionary.
        app_settings: The application settings.
        tools: Command name -> apt package. Defaults to
            app_settings.prerequisite_tools.
        current_logger: Optional logger instance.
        **kwargs: Catches any other arguments the prober might pass.

    Raises:
        PrerequisiteError: If apt is unavailable, the install fails, or a
            command is still missing afterwards.
    """
    logger_to_use = current_logger if current_logger else logger
    symbols = get_symbols(app_settings)
    tools = tools if tools is not None else app_settings.prerequisite_tools

    missing = missing_commands(tools)
    if not missing:
        logger_to_use.debug(
            f"Prerequisite tools already available: {', '.join(tools)}"
        )
        context.setdefault("ensured_tools", set()).update(tools)
        return

    packages = []
    for name in missing:
        if tools[name] not in packages:
            packages.append(tools[name])
    logger_to_use.info(
        f"{symbols.get('package', '📦')} Installing prerequisites: {' '.join(packages)}"
    )
    context["any_install_attempted"] = True

    try:
        apt_manager = AptManager(logger=logger_to_use)
    except FileNotFoundError as e:
        raise PrerequisiteError(
            f"Cannot install prerequisites ({', '.join(packages)}): {e}"
        ) from e

    if not context.get("apt_updated_this_run", False):
        # a failed refresh is tolerated; the install below decides
        apt_manager.update(app_settings)
        context["apt_updated_this_run"] = True

    if not apt_manager.install(packages, app_settings, update_first=False):
        raise PrerequisiteError(
            f"Could not install prerequisite packages: {', '.join(packages)}"
        )

    still_missing = missing_commands(missing)
    if still_missing:
        raise PrerequisiteError(
            f"Prerequisite tools still missing after install: {', '.join(still_missing)}"
        )

    logger_to_use.info(
        f"{symbols.get('success', '✅')} Prerequisites available: {', '.join(missing)}"
    )
    context.setdefault("ensured_tools", set()).update(tools)
