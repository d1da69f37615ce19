# installer/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the bootstrapper,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import (
    AliasChoices,
    Field,
    HttpUrl,
    SecretStr,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
INPUTLEAP_VERSION_DEFAULT: str = "3.0.2"
INPUTLEAP_DEB_URL_DEFAULT: str = (
    "https://github.com/input-leap/input-leap/releases/download/"
    "v{version}/InputLeap_{version}_debian12_amd64.deb"
)
TAILSCALE_INSTALL_SCRIPT_URL_DEFAULT: str = "https://tailscale.com/install.sh"
SCRATCH_DIR_DEFAULT: Path = Path("/tmp")
DOWNLOAD_TIMEOUT_DEFAULT: int = 120
OS_RELEASE_PATH_DEFAULT: Path = Path("/etc/os-release")
LOG_PREFIX_DEFAULT: str = "[APPS]"

# command on PATH -> apt package providing it
PREREQUISITE_TOOLS_DEFAULT: Dict[str, str] = {
    "curl": "curl",
    "wget": "wget",
    "grep": "grep",
    "sed": "sed",
    "awk": "gawk",
}

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}

_HTTP_URL = TypeAdapter(HttpUrl)


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APPS_", extra="ignore", populate_by_name=True
    )

    inputleap_version: str = Field(
        default=INPUTLEAP_VERSION_DEFAULT,
        validation_alias=AliasChoices("inputleap_version", "IL_VERSION"),
        description="Input Leap release to install.",
    )
    inputleap_deb_url: str = Field(
        default=INPUTLEAP_DEB_URL_DEFAULT,
        validation_alias=AliasChoices("inputleap_deb_url", "IL_DEB_URL"),
        description="Download URL of the Input Leap .deb. '{version}' is replaced by inputleap_version.",
    )
    tailscale_authkey_ephemeral: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices(
            "tailscale_authkey_ephemeral", "TS_AUTHKEY_EPHEMERAL"
        ),
        description="Tailscale auth key used for the ephemeral mode.",
    )
    tailscale_authkey_persistent: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices(
            "tailscale_authkey_persistent", "TS_AUTHKEY_PERSISTENT"
        ),
        description="Tailscale auth key used for the persistent mode.",
    )
    tailscale_install_script_url: str = Field(
        default=TAILSCALE_INSTALL_SCRIPT_URL_DEFAULT,
        description="Vendor install script piped to sh when tailscale is missing.",
    )
    strict_platform: bool = Field(
        default=False,
        description="Abort instead of warning when the host is not Debian/Ubuntu based.",
    )
    scratch_dir: Path = Field(
        default=SCRATCH_DIR_DEFAULT,
        description="Directory for downloaded package files.",
    )
    download_timeout: int = Field(
        default=DOWNLOAD_TIMEOUT_DEFAULT,
        gt=0,
        description="Network timeout in seconds for downloads.",
    )
    os_release_path: Path = Field(
        default=OS_RELEASE_PATH_DEFAULT,
        description="os-release file used to identify the distribution.",
    )
    log_prefix: str = Field(
        default=LOG_PREFIX_DEFAULT,
        description="Prefix for log messages from the installer.",
    )
    prerequisite_tools: Dict[str, str] = Field(
        default_factory=lambda: dict(PREREQUISITE_TOOLS_DEFAULT),
        description="Commands required before installing, mapped to the apt package providing them.",
    )

    # Static symbols, could also be loaded from a separate static config if preferred
    symbols: Dict[str, str] = Field(
        default_factory=lambda: dict(SYMBOLS_DEFAULT)
    )

    @field_validator("inputleap_version")
    @classmethod
    def _version_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Input Leap version must not be empty.")
        return value

    @field_validator(
        "tailscale_authkey_ephemeral",
        "tailscale_authkey_persistent",
        mode="before",
    )
    @classmethod
    def _check_auth_key(cls, value):
        if value is None:
            return None
        raw = (
            value.get_secret_value()
            if isinstance(value, SecretStr)
            else str(value)
        ).strip()
        if not raw:
            return None
        if not raw.startswith("tskey-") or any(c.isspace() for c in raw):
            raise ValueError(
                "Tailscale auth keys must start with 'tskey-' and contain no whitespace."
            )
        return raw

    @model_validator(mode="after")
    def _check_urls(self) -> "AppSettings":
        for label, url in (
            ("Input Leap download URL", self.inputleap_download_url),
            ("Tailscale install script URL", self.tailscale_install_script_url),
        ):
            try:
                _HTTP_URL.validate_python(url)
            except ValidationError as e:
                raise ValueError(
                    f"{label} '{url}' is not a valid http(s) URL."
                ) from e
        return self

    @property
    def inputleap_download_url(self) -> str:
        """The .deb URL with the configured version substituted in."""
        return self.inputleap_deb_url.replace(
            "{version}", self.inputleap_version
        )

    def missing_settings(self, names: Iterable[str]) -> List[str]:
        """Return the names among `names` whose value is unset or empty."""
        missing = []
        for name in names:
            value = getattr(self, name, None)
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            if value is None or (isinstance(value, str) and not value):
                missing.append(name)
        return missing
