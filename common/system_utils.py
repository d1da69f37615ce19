# common/system_utils.py
# -*- coding: utf-8 -*-
"""
System-level utility functions for the bootstrapper.

This module includes reading the distribution identity from os-release and
enabling/starting systemd units.
"""

import logging
import subprocess
from pathlib import Path
from typing import Dict, Optional, Union

from common.command_utils import (
    command_exists,
    get_symbols,
    log_installer,
    run_command,
    run_elevated_command,
)
from installer.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def read_os_release(path: Union[str, Path]) -> Dict[str, str]:
    """
    Parse an os-release file into a dict (ID, ID_LIKE, VERSION_ID, ...).

    Raises:
        OSError: If the file cannot be read.
    """
    values: Dict[str, str] = {}
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            values[key.strip()] = value.strip().strip("'\"")
    return values


def unit_file_exists(
    unit: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """True if systemd knows a unit file named `unit`."""
    if not command_exists("systemctl"):
        return False
    result = run_command(
        ["systemctl", "list-unit-files", unit, "--no-legend"],
        app_settings,
        check=False,
        capture_output=True,
        current_logger=current_logger,
    )
    return any(
        line.split()[0] == unit
        for line in (result.stdout or "").splitlines()
        if line.strip()
    )


def enable_service_now(
    unit: str,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Enable and start a systemd unit if it is installed.

    A unit unknown to systemd (or a host without systemctl) is a warning and
    a no-op, as is a failure to enable it.

    Returns:
        True if the unit was enabled and started, False otherwise.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if not unit_file_exists(unit, app_settings, logger_to_use):
        log_installer(
            f"{symbols.get('warning', '!')} Service {unit} not found; skipping enable/start.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return False

    try:
        run_elevated_command(
            ["systemctl", "enable", "--now", unit],
            app_settings,
            current_logger=logger_to_use,
        )
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        log_installer(
            f"{symbols.get('warning', '!')} Failed to enable/start {unit}: {e}",
            "warning",
            logger_to_use,
            app_settings,
        )
        return False

    log_installer(
        f"{symbols.get('success', '✅')} Service {unit} enabled and started.",
        "success",
        logger_to_use,
        app_settings,
    )
    return True
