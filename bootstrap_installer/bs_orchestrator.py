# bootstrap_installer/bs_orchestrator.py
# -*- coding: utf-8 -*-
"""
Environment prober: the preflight checks run once per invocation before any
component, and the lazily-run prerequisite tool check.

Results are cached in a shared context dictionary so each check runs at
most once however many components ask for it.
"""

import logging
from typing import Dict, Optional

from bootstrap_installer.bs_platform import assert_supported_platform
from bootstrap_installer.bs_prereqs import ensure_tools
from bootstrap_installer.bs_privileges import ensure_elevated_access
from bootstrap_installer.bs_utils import get_bs_logger
from common.command_utils import get_symbols
from installer.config_models import AppSettings


class EnvironmentProber:
    """
    Verifies the host can run installs: elevated access, a Debian-family
    platform and the command-line tools the installers rely on.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.logger = logger or get_bs_logger("Prober")
        self.context: Dict = {
            "apt_updated_this_run": False,
            "any_install_attempted": False,
            "app_settings": app_settings,
        }

    def ensure_elevated_access(self) -> None:
        if self.context.get("elevated"):
            return
        ensure_elevated_access(
            self.context, self.app_settings, current_logger=self.logger
        )

    def assert_supported_platform(self) -> None:
        if "os_release" in self.context:
            return
        assert_supported_platform(
            self.context, self.app_settings, current_logger=self.logger
        )

    def ensure_tools(self, tools: Optional[Dict[str, str]] = None) -> None:
        """
        Make sure the prerequisite commands exist, installing them if not.
        Commands already ensured during this run are not checked again.
        """
        wanted = (
            tools if tools is not None else self.app_settings.prerequisite_tools
        )
        if set(wanted) <= self.context.get("ensured_tools", set()):
            return
        ensure_tools(
            self.context,
            self.app_settings,
            tools=tools,
            current_logger=self.logger,
        )

    def preflight(self) -> None:
        """
        Runs the checks required before the first component: elevated
        access first, then the platform family.

        Raises:
            PermissionDenied, UnsupportedPlatform
        """
        symbols = get_symbols(self.app_settings)
        self.logger.debug(
            f"{symbols.get('step', '->')} Running preflight checks..."
        )
        self.ensure_elevated_access()
        self.assert_supported_platform()
