# bootstrap_installer/bs_privileges.py
# -*- coding: utf-8 -*-
import logging
import os
import subprocess
from typing import Optional

from bootstrap_installer.bs_utils import bootstrap_cmd_exists, get_bs_logger
from common.command_utils import run_command
from common.errors import PermissionDenied
from installer.config_models import AppSettings

logger = get_bs_logger("Privileges")


def ensure_elevated_access(
    context: dict,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    **kwargs,
) -> None:
    """
    Verifies that package installation steps can run with root privileges:
    either the process is root, or 'sudo -v' succeeds (which may prompt for
    a password once and caches the credential).

    Raises:
        PermissionDenied: If neither is the case.
    """
    logger_to_use = current_logger if current_logger else logger

    if os.geteuid() == 0:
        logger_to_use.debug("Running as root; sudo not required.")
        context["elevated"] = True
        return

    if not bootstrap_cmd_exists("sudo"):
        raise PermissionDenied(
            "sudo permission required, but 'sudo' is not installed."
        )

    try:
        run_command(["sudo", "-v"], app_settings, current_logger=logger_to_use)
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        raise PermissionDenied("sudo permission required.") from e

    context["elevated"] = True
