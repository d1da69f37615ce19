# installer/config.py
# -*- coding: utf-8 -*-
"""
Centralized static constants and definitions for the apps bootstrapper.

This module defines truly static values, such as component groups, vendor
identifiers and service unit names. Mutable runtime configuration (versions,
URLs, auth keys) is handled by 'installer/config_models.py' and
'installer/config_loader.py'.
"""

SCRIPT_VERSION: str = "1.0"

# Order matters: --all runs these in exactly this sequence.
COMPONENT_GROUPS: dict[str, list[str]] = {
    "all": [
        "inputleap",
        "remove-flatpak-inputleap",
        "tailscale-persistent",
    ],
}

INPUTLEAP_BINARY: str = "input-leap"
INPUTLEAP_FLATPAK_APP_ID: str = "io.github.input_leap.input-leap"

TAILSCALE_BINARY: str = "tailscale"
TAILSCALE_SERVICE_UNIT: str = "tailscaled.service"
TAILSCALE_LOGGED_IN_MARKER: str = "Logged in as"

SUPPORTED_PLATFORM_FAMILIES: list[str] = ["debian", "ubuntu"]

EXIT_OK: int = 0
EXIT_FATAL: int = 1
EXIT_COMPONENT_FAILURE: int = 2
EXIT_INTERRUPTED: int = 130
