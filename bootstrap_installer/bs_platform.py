# bootstrap_installer/bs_platform.py
# -*- coding: utf-8 -*-
"""
Checks that the host belongs to the Debian family of distributions.

The ID_LIKE field of /etc/os-release (or ID when ID_LIKE is absent) must
mention debian or ubuntu. A mismatch is a warning in lenient mode and an
UnsupportedPlatform error in strict mode; a missing os-release file is
always an error.
"""

import logging
from typing import Optional

from bootstrap_installer.bs_utils import get_bs_logger
from common.command_utils import get_symbols
from common.errors import UnsupportedPlatform
from common.system_utils import read_os_release
from installer import config as static_config
from installer.config_models import AppSettings

logger = get_bs_logger("Platform")


def is_supported_family(os_release: dict) -> bool:
    family = os_release.get("ID_LIKE") or os_release.get("ID", "")
    family = family.lower()
    return any(
        name in family for name in static_config.SUPPORTED_PLATFORM_FAMILIES
    )


def assert_supported_platform(
    context: dict,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    **kwargs,
) -> None:
    """
    Validates the distribution family and records the parsed os-release in
    context['os_release'].

    Raises:
        UnsupportedPlatform: If os-release is unreadable, or the family does
            not match and app_settings.strict_platform is set.
    """
    logger_to_use = current_logger if current_logger else logger
    symbols = get_symbols(app_settings)
    path = app_settings.os_release_path

    try:
        os_release = read_os_release(path)
    except OSError as e:
        raise UnsupportedPlatform(
            f"{path} missing or unreadable; unsupported base system."
        ) from e
    context["os_release"] = os_release

    if is_supported_family(os_release):
        logger_to_use.debug(
            f"Debian-family host detected: {os_release.get('PRETTY_NAME', os_release.get('ID', 'unknown'))}"
        )
        return

    message = f"Non Debian/Ubuntu base detected ({os_release.get('ID', 'unknown')})."
    if app_settings.strict_platform:
        raise UnsupportedPlatform(message)
    logger_to_use.warning(
        f"{symbols.get('warning', '!')} {message} Continuing anyway; installs may fail."
    )
