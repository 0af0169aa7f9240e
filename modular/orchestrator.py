"""
Orchestrator for the provisioning steps.

This module provides the ProvisionOrchestrator class, which imports the step
modules, resolves the run order, and executes the steps one after another,
halting on the first failure.
"""

import importlib
import logging
import pkgutil
import subprocess
from typing import List, Optional

from common.download_utils import ProvisioningError
from modular.base_step import BaseStep, ProvisionReport, StepOutcome, StepStatus
from modular.registry import StepRegistry
from setup import config as static_config
from setup.config_models import AppSettings, StepSummary


class ProvisionOrchestrator:
    """
    Runs provisioning steps sequentially.

    A failing step (one that raises or returns False) stops the run: no later
    step is checked or applied, and nothing already applied is rolled back.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
        step_names: Optional[List[str]] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            app_settings: The application settings.
            logger: Optional logger instance. If not provided, a new logger will be created.
            step_names: Steps to run. Defaults to the standard sequence.
        """
        self.app_settings = app_settings
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.step_names = list(step_names or static_config.DEFAULT_STEP_SEQUENCE)

        # Import all step modules to ensure they are registered
        self._import_step_modules()

    def _import_step_modules(self) -> None:
        import modular.steps

        for _, module_name, _ in pkgutil.iter_modules(modular.steps.__path__):
            importlib.import_module(f"modular.steps.{module_name}")
            self.logger.debug(f"Imported step module: {module_name}")

    def build_steps(self) -> List[BaseStep]:
        """
        Instantiate the configured steps in run order.

        Raises:
            KeyError: A step name is not registered.
            ValueError: The dependencies form a cycle.
        """
        ordered_names = StepRegistry.resolve_order(self.step_names)
        self.logger.debug(f"Step order: {', '.join(ordered_names)}")
        return [
            StepRegistry.get_step(name)(self.app_settings, self.logger)
            for name in ordered_names
        ]

    def run(self) -> ProvisionReport:
        """
        Execute every step in order and report what each one did.

        Returns:
            A ProvisionReport. If a step failed it is the last outcome.
        """
        symbols = self.app_settings.symbols
        steps = self.build_steps()
        outcomes: List[StepOutcome] = []

        self.logger.info(
            f"{symbols.get('rocket', '🚀')} Provisioning started ({len(steps)} steps)."
        )
        for index, step in enumerate(steps, start=1):
            self.logger.info(f"--- Stage {index}: {step.name} ---")
            try:
                outcome = step.run()
            except Exception as e:
                self.logger.critical(
                    f"{symbols.get('critical', '🔥')} Step '{step.name}' failed: {e}",
                    exc_info=True,
                )
                outcome = StepOutcome(step.name, StepStatus.FAILED, str(e))

            outcomes.append(outcome)
            if outcome.status is StepStatus.FAILED:
                self.logger.error(
                    f"{symbols.get('error', '❌')} Halting provisioning after failed step '{step.name}'."
                )
                break

        report = ProvisionReport(outcomes)
        if report.succeeded:
            self.logger.info(
                f"{symbols.get('sparkles', '✨')} Provisioning finished. "
                f"Applied: {report.names_with_status(StepStatus.APPLIED) or 'none'}; "
                f"skipped: {report.names_with_status(StepStatus.SKIPPED) or 'none'}."
            )
        return report

    def _evaluate(self, step: BaseStep) -> StepSummary:
        summary = StepSummary(
            name=step.name,
            description=step.get_description(),
            enabled=step.is_enabled(),
            always_runs=bool(step.metadata.get("always_runs", False)),
        )
        if not summary.enabled or summary.always_runs:
            return summary
        try:
            summary.satisfied = bool(step.is_satisfied())
        except (subprocess.CalledProcessError, ProvisioningError, OSError) as e:
            # Checks may fail before earlier steps ran, e.g. with the database stopped.
            self.logger.debug(f"Check for '{step.name}' failed: {e}")
            summary.satisfied = False
            summary.error = str(e)
        return summary

    def check_status(self) -> List[StepSummary]:
        """
        Evaluate every enabled step's check without applying anything.

        Steps whose metadata sets `always_runs` have no check and are
        reported without a satisfied state. A check that cannot complete
        marks its step as not satisfied.
        """
        return [self._evaluate(step) for step in self.build_steps()]
