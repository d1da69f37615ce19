"""
Dispatcher for the component framework.

This module provides the ComponentDispatcher class, which runs a selection
of components strictly in order and isolates the failure of one component
from the rest of the run.
"""

import logging
from typing import Iterable, List, Optional

from bootstrap_installer.bs_orchestrator import EnvironmentProber
from common.command_utils import get_symbols, log_installer
from common.errors import ComponentError, ConfigurationError, FatalError
from installer.base_component import ComponentOutcome, OutcomeStatus
from installer.config_models import AppSettings
from installer.registry import ComponentRegistry

SUCCESS_STATUSES = {
    OutcomeStatus.INSTALLED,
    OutcomeStatus.ALREADY_INSTALLED,
    OutcomeStatus.REMOVED,
    OutcomeStatus.NOT_PRESENT,
}


class ComponentDispatcher:
    """
    Maps selected identifiers to registered components and applies them.

    A FatalError raised by the prober or a component ends the run and is
    propagated. Any other error is logged and recorded as a failed outcome.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        prober: Optional[EnvironmentProber] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.prober = prober or EnvironmentProber(app_settings, self.logger)
        self.symbols = get_symbols(app_settings)

    def run(self, selection: Iterable[str]) -> List[ComponentOutcome]:
        """
        Apply each selected component in order.

        Args:
            selection: Component identifiers, in the order to run them.

        Returns:
            One outcome per selected identifier.

        Raises:
            ConfigurationError: If a selected component lacks a required
                setting. Raised before any component runs.
            FatalError: From preflight checks or prerequisite installs.
        """
        identifiers = self._known_identifiers(selection)
        if not identifiers:
            log_installer(
                "Nothing selected.", "info", self.logger, self.app_settings
            )
            return []

        self.validate_settings(identifiers)
        self.prober.preflight()

        outcomes = []
        for identifier in identifiers:
            outcome = self.apply_component(identifier)
            self._log_outcome(outcome)
            outcomes.append(outcome)
        return outcomes

    def validate_settings(self, identifiers: Iterable[str]) -> None:
        missing_messages = []
        for identifier in identifiers:
            component_class = ComponentRegistry.get_component(identifier)
            missing = self.app_settings.missing_settings(
                component_class.required_settings
            )
            if missing:
                missing_messages.append(
                    f"{identifier} requires {', '.join(missing)}"
                )
        if missing_messages:
            raise ConfigurationError(
                "Missing required settings: " + "; ".join(missing_messages)
            )

    def apply_component(self, identifier: str) -> ComponentOutcome:
        component_class = ComponentRegistry.get_component(identifier)
        component = component_class(self.app_settings, self.prober, self.logger)
        log_installer(
            f"{self.symbols.get('step', '->')} {component_class.label or identifier}",
            "info",
            self.logger,
            self.app_settings,
        )
        try:
            return component.apply()
        except FatalError:
            raise
        except ComponentError as e:
            return ComponentOutcome(identifier, OutcomeStatus.FAILED, str(e))
        except Exception as e:
            log_installer(
                f"{self.symbols.get('error', 'x')} Unexpected error in {identifier}: {e}",
                "error",
                self.logger,
                self.app_settings,
                exc_info=True,
            )
            return ComponentOutcome(
                identifier, OutcomeStatus.FAILED, f"Unexpected error: {e}"
            )

    def summarize(self, outcomes: List[ComponentOutcome]) -> None:
        """Logs a table of the outcome of every component in the run."""
        if not outcomes:
            return
        col_width = (
            max(max(len(o.identifier) for o in outcomes), len("Component"))
            + 2
        )
        header = f"{'Component':<{col_width}}{'Status':<20}"
        self.logger.info("Summary:")
        self.logger.info(header)
        self.logger.info("-" * len(header))
        for outcome in outcomes:
            self.logger.info(
                f"{outcome.identifier:<{col_width}}{self._symbol_for(outcome)} {outcome.status.value}"
            )

    def _known_identifiers(self, selection: Iterable[str]) -> List[str]:
        identifiers: List[str] = []
        for identifier in selection:
            if identifier in identifiers:
                continue
            if not ComponentRegistry.is_registered(identifier):
                log_installer(
                    f"{self.symbols.get('warning', '!')} Unknown app: {identifier}",
                    "warning",
                    self.logger,
                    self.app_settings,
                )
                continue
            identifiers.append(identifier)
        return identifiers

    def _symbol_for(self, outcome: ComponentOutcome) -> str:
        if outcome.status in SUCCESS_STATUSES:
            return self.symbols.get("success", "ok")
        if outcome.failed:
            return self.symbols.get("error", "x")
        return self.symbols.get("warning", "!")

    def _log_outcome(self, outcome: ComponentOutcome) -> None:
        message = f"{self._symbol_for(outcome)} {outcome.identifier}: {outcome.message or outcome.status.value}"
        if outcome.failed:
            level = "error"
        elif outcome.status in SUCCESS_STATUSES:
            level = "success"
        else:
            level = "warning"
        log_installer(message, level, self.logger, self.app_settings)
