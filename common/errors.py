# common/errors.py
# -*- coding: utf-8 -*-
"""
Exception types shared by the prober, the components and the dispatcher.

Fatal errors end the whole run. Component errors are caught at the
component boundary by the dispatcher and reported as a failed outcome.
"""

from typing import Optional


class AppsBootstrapError(Exception):
    """Base class for all errors raised by the bootstrapper."""


class FatalError(AppsBootstrapError):
    """An error that aborts the entire run with a non-zero exit code."""


class PermissionDenied(FatalError):
    """Elevated privileges (root or sudo) are not available."""


class UnsupportedPlatform(FatalError):
    """The host is not a Debian-family system (or cannot be identified)."""


class PrerequisiteError(FatalError):
    """A prerequisite tool could not be made available."""


class ConfigurationError(FatalError):
    """Settings failed validation or a required value is missing."""


class ComponentError(AppsBootstrapError):
    """Custom exception for failures inside a single component."""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.component = component
        self.original_error = original_error
        super().__init__(message)


class FetchError(ComponentError):
    """Downloading an artifact or install script failed."""


class InstallError(ComponentError):
    """The package manager or vendor install script failed."""


class ActivationError(ComponentError):
    """Bringing a VPN connection up failed."""


class UnknownComponent(AppsBootstrapError):
    """No component is registered under the requested identifier."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"No component registered with name '{identifier}'")
