"""
Base component class for all component modules.

This module provides the base class that all component modules must inherit
from, and the outcome record every component returns from `apply()`.
"""

import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, List, Optional

from bootstrap_installer.bs_orchestrator import EnvironmentProber
from common.command_utils import get_symbols, log_installer
from installer.config_models import AppSettings


class OutcomeStatus(str, enum.Enum):
    INSTALLED = "installed"
    ALREADY_INSTALLED = "already-installed"
    REMOVED = "removed"
    NOT_PRESENT = "not-present"
    WARNING = "warning"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class ComponentOutcome:
    """The result of applying one component."""

    identifier: str
    status: OutcomeStatus
    message: str = ""

    @property
    def failed(self) -> bool:
        return self.status is OutcomeStatus.FAILED


class BaseComponent(ABC):
    """
    Base class for all component modules.

    Subclasses set the class-level metadata below and implement `apply()`,
    which detects whether the component is already in the desired state and
    acts only when it is not. Per-component failures are raised as
    ComponentError subclasses; fatal conditions as FatalError subclasses.
    """

    identifier: ClassVar[str] = ""
    label: ClassVar[str] = ""
    kind: ClassVar[str] = "install"  # "install" or "remove"
    default_selected: ClassVar[bool] = False
    # AppSettings fields that must be set before this component may run
    required_settings: ClassVar[List[str]] = []

    def __init__(
        self,
        app_settings: AppSettings,
        prober: EnvironmentProber,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the component.

        Args:
            app_settings: The application settings.
            prober: The environment prober shared by every component in
                the run.
            logger: Optional logger instance. If not provided, a new logger will be created.
        """
        self.app_settings = app_settings
        self.prober = prober
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.symbols = get_symbols(app_settings)

    @abstractmethod
    def apply(self) -> ComponentOutcome:
        """
        Bring the component to its desired state (installed or removed).

        Returns:
            The outcome of the operation.
        """

    def outcome(
        self, status: OutcomeStatus, message: str = ""
    ) -> ComponentOutcome:
        return ComponentOutcome(self.identifier, status, message)

    def log(self, message: str, level: str = "info") -> None:
        log_installer(message, level, self.logger, self.app_settings)
