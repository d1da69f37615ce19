"""
Input Leap installer module.

Installs the Input Leap keyboard/mouse sharing tool from the upstream .deb
release, letting apt resolve its dependencies.
"""

import os
import subprocess
from pathlib import Path
from urllib.parse import urlparse

from common.command_utils import command_path, run_command
from common.debian.apt_manager import AptManager
from common.errors import InstallError
from common.network_utils import download_file
from installer import config
from installer.base_component import (
    BaseComponent,
    ComponentOutcome,
    OutcomeStatus,
)
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="inputleap",
    metadata={
        "label": "Input Leap (.deb from GitHub)",
        "kind": "install",
        "default_selected": True,
    },
)
class InputLeapInstaller(BaseComponent):
    """
    Installer for Input Leap.

    Nothing is downloaded when the input-leap binary is already on PATH.
    """

    def apply(self) -> ComponentOutcome:
        existing = command_path(config.INPUTLEAP_BINARY)
        if existing:
            self.log(
                f"{self.symbols['warning']} Input Leap already installed at {existing}",
                "warning",
            )
            return self.outcome(
                OutcomeStatus.ALREADY_INSTALLED,
                f"Input Leap already installed at {existing}",
            )

        self.log(
            f"{self.symbols['info']} Installing Input Leap {self.app_settings.inputleap_version}...",
        )
        self.prober.ensure_tools()

        deb_path = self._deb_path()
        try:
            download_file(
                self.app_settings.inputleap_download_url,
                deb_path,
                timeout=self.app_settings.download_timeout,
                current_logger=self.logger,
            )
            apt_manager = AptManager(logger=self.logger)
            if not apt_manager.install_local_package(
                deb_path, self.app_settings
            ):
                raise InstallError(
                    f"apt could not install {deb_path.name}",
                    component=self.identifier,
                )
        finally:
            self._cleanup(deb_path)

        version = self._installed_version()
        self.log(
            f"{self.symbols['success']} Input Leap installed: {version}",
            "success",
        )
        return self.outcome(
            OutcomeStatus.INSTALLED, f"Input Leap installed: {version}"
        )

    def _deb_path(self) -> Path:
        url_path = urlparse(self.app_settings.inputleap_download_url).path
        file_name = os.path.basename(url_path) or "inputleap.deb"
        return Path(self.app_settings.scratch_dir) / file_name

    def _cleanup(self, deb_path: Path) -> None:
        try:
            deb_path.unlink(missing_ok=True)
        except OSError as e:
            self.log(
                f"{self.symbols['warning']} Could not remove {deb_path}: {e}",
                "warning",
            )

    def _installed_version(self) -> str:
        try:
            result = run_command(
                [config.INPUTLEAP_BINARY, "--version"],
                self.app_settings,
                capture_output=True,
                check=True,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, FileNotFoundError):
            return "unknown"
        lines = (result.stdout or "").strip().splitlines()
        return lines[0] if lines else "unknown"
