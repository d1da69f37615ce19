"""
Tailscale installer module.

Installs the Tailscale client with the vendor install script, starts the
tailscaled service and joins the tailnet with an auth key, either as an
ephemeral node or a persistent one.
"""

import json
import subprocess
from typing import ClassVar, List, Optional

from common.command_utils import (
    command_exists,
    run_command,
    run_elevated_command,
)
from common.errors import ActivationError, InstallError
from common.network_utils import fetch_text
from common.system_utils import enable_service_now
from installer import config
from installer.base_component import (
    BaseComponent,
    ComponentOutcome,
    OutcomeStatus,
)
from installer.registry import ComponentRegistry


class TailscaleInstallerBase(BaseComponent):
    """
    Shared install and activation steps for both Tailscale modes.

    Subclasses choose the auth key setting and the extra `tailscale up`
    flags for their mode.
    """

    mode: ClassVar[str] = ""
    authkey_setting: ClassVar[str] = ""
    up_flags: ClassVar[List[str]] = ["--ssh"]

    def apply(self) -> ComponentOutcome:
        if command_exists(config.TAILSCALE_BINARY) and self.is_logged_in():
            return self._already_logged_in()

        self.install_client()
        enable_service_now(
            config.TAILSCALE_SERVICE_UNIT, self.app_settings, self.logger
        )

        if self.is_logged_in():
            return self._already_logged_in()

        self.bring_up()
        addresses = self.ipv4_addresses()
        message = (
            f"Tailscale UP ({self.mode}). IPv4: {addresses or 'unknown'}"
        )
        self.log(f"{self.symbols['success']} {message}", "success")
        return self.outcome(OutcomeStatus.INSTALLED, message)

    def install_client(self) -> None:
        """
        Installs the client with the vendor script unless it is already on
        PATH.

        Raises:
            FetchError: If the script cannot be downloaded.
            InstallError: If the script fails.
        """
        if command_exists(config.TAILSCALE_BINARY):
            self.log(
                f"{self.symbols['warning']} Tailscale already installed: {self.client_version()}",
                "warning",
            )
            return

        self.prober.ensure_tools()
        self.log(
            f"{self.symbols['info']} Installing Tailscale (official script)..."
        )
        script = fetch_text(
            self.app_settings.tailscale_install_script_url,
            timeout=self.app_settings.download_timeout,
            current_logger=self.logger,
        )
        try:
            # the vendor script elevates itself with sudo where needed
            run_command(
                ["sh", "-"],
                self.app_settings,
                cmd_input=script,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            raise InstallError(
                "Tailscale install script failed.",
                component=self.identifier,
                original_error=e,
            ) from e

    def is_logged_in(self) -> bool:
        """True if the local tailscaled backend is authenticated and running."""
        try:
            result = run_command(
                [config.TAILSCALE_BINARY, "status", "--json"],
                self.app_settings,
                check=False,
                capture_output=True,
                current_logger=self.logger,
            )
        except FileNotFoundError:
            return False
        try:
            status = json.loads(result.stdout or "")
        except ValueError:
            return config.TAILSCALE_LOGGED_IN_MARKER in (result.stdout or "")
        return (
            isinstance(status, dict)
            and status.get("BackendState") == "Running"
        )

    def bring_up(self) -> None:
        """
        Runs `tailscale up` with the mode's auth key.

        Raises:
            ActivationError: If the command fails.
        """
        secret = getattr(self.app_settings, self.authkey_setting)
        key = secret.get_secret_value() if secret is not None else ""
        self.log(
            f"{self.symbols['step']} Bringing up Tailscale ({self.mode.upper()}) with SSH..."
        )
        command = [config.TAILSCALE_BINARY, "up", f"--auth-key={key}"]
        command.extend(self.up_flags)
        try:
            run_elevated_command(
                command,
                self.app_settings,
                current_logger=self.logger,
                secrets=[key],
            )
        except (subprocess.CalledProcessError, FileNotFoundError):
            # the command line holds the key; keep it out of the message
            raise ActivationError(
                f"tailscale up ({self.mode}) failed.",
                component=self.identifier,
            ) from None

    def ipv4_addresses(self) -> Optional[str]:
        try:
            result = run_command(
                [config.TAILSCALE_BINARY, "ip", "-4"],
                self.app_settings,
                check=True,
                capture_output=True,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, FileNotFoundError):
            return None
        addresses = " ".join((result.stdout or "").split())
        return addresses or None

    def client_version(self) -> str:
        try:
            result = run_command(
                [config.TAILSCALE_BINARY, "--version"],
                self.app_settings,
                check=True,
                capture_output=True,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, FileNotFoundError):
            return "unknown"
        lines = (result.stdout or "").strip().splitlines()
        return lines[0] if lines else "unknown"

    def _already_logged_in(self) -> ComponentOutcome:
        self.log(
            f"{self.symbols['warning']} Tailscale already logged in. Skipping 'tailscale up'.",
            "warning",
        )
        addresses = self.ipv4_addresses()
        if addresses:
            self.log(f"Tailscale IPv4: {addresses}")
        return self.outcome(
            OutcomeStatus.ALREADY_INSTALLED,
            f"Tailscale already logged in. IPv4: {addresses or 'unknown'}",
        )


@ComponentRegistry.register(
    name="tailscale-ephemeral",
    metadata={
        "label": "Tailscale (Ephemeral)",
        "kind": "install",
        "default_selected": False,
        "required_settings": ["tailscale_authkey_ephemeral"],
    },
)
class TailscaleEphemeralInstaller(TailscaleInstallerBase):
    """Joins the tailnet as an ephemeral node, removed when it goes offline."""

    mode = "ephemeral"
    authkey_setting = "tailscale_authkey_ephemeral"
    up_flags = ["--ephemeral", "--ssh"]


@ComponentRegistry.register(
    name="tailscale-persistent",
    metadata={
        "label": "Tailscale (Persistent)",
        "kind": "install",
        "default_selected": True,
        "required_settings": ["tailscale_authkey_persistent"],
    },
)
class TailscalePersistentInstaller(TailscaleInstallerBase):
    mode = "persistent"
    authkey_setting = "tailscale_authkey_persistent"
    up_flags = ["--ssh"]
