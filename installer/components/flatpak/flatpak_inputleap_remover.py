"""
Removes the Flatpak build of Input Leap so it does not conflict with the
native package.
"""

import subprocess

from common.command_utils import command_exists, run_command
from installer import config
from installer.base_component import (
    BaseComponent,
    ComponentOutcome,
    OutcomeStatus,
)
from installer.registry import ComponentRegistry


@ComponentRegistry.register(
    name="remove-flatpak-inputleap",
    metadata={
        "label": "Remove Flatpak Input Leap",
        "kind": "remove",
        "default_selected": True,
    },
)
class FlatpakInputLeapRemover(BaseComponent):
    """A failed uninstall is reported as a warning, never as a failure."""

    app_id = config.INPUTLEAP_FLATPAK_APP_ID

    def apply(self) -> ComponentOutcome:
        if not self.is_present():
            self.log(f"Flatpak {self.app_id} not present. Nothing to remove.")
            return self.outcome(
                OutcomeStatus.NOT_PRESENT, f"Flatpak {self.app_id} not present"
            )

        self.log(
            f"{self.symbols['info']} Removing Flatpak Input Leap to avoid conflicts..."
        )
        try:
            run_command(
                ["flatpak", "uninstall", "-y", self.app_id],
                self.app_settings,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, FileNotFoundError):
            self.log(
                f"{self.symbols['warning']} Flatpak uninstall failed (non-fatal).",
                "warning",
            )
            return self.outcome(
                OutcomeStatus.WARNING, "Flatpak uninstall failed (non-fatal)"
            )

        self.log(
            f"{self.symbols['success']} Flatpak {self.app_id} removed.",
            "success",
        )
        return self.outcome(
            OutcomeStatus.REMOVED, f"Flatpak {self.app_id} removed"
        )

    def is_present(self) -> bool:
        if not command_exists("flatpak"):
            return False
        try:
            result = run_command(
                ["flatpak", "list", "--app", "--columns=application"],
                self.app_settings,
                check=False,
                capture_output=True,
                current_logger=self.logger,
            )
        except FileNotFoundError:
            return False
        wanted = self.app_id.lower()
        return any(
            line.strip().lower() == wanted
            for line in (result.stdout or "").splitlines()
        )
