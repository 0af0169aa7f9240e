"""
Base class for provisioning steps.

A step checks whether its effect is already present and, if not, applies it.
The orchestrator drives steps through `run()`, which turns the check/apply
pair into a StepOutcome.
"""

import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from setup.config_models import AppSettings


class StepStatus(str, enum.Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"
    DISABLED = "disabled"
    FAILED = "failed"


@dataclass
class StepOutcome:
    name: str
    status: StepStatus
    message: str = ""


@dataclass
class ProvisionReport:
    """Ordered outcomes of a provisioning run."""

    outcomes: List[StepOutcome]

    @property
    def succeeded(self) -> bool:
        return all(o.status is not StepStatus.FAILED for o in self.outcomes)

    @property
    def failed_step(self) -> Optional[str]:
        for outcome in self.outcomes:
            if outcome.status is StepStatus.FAILED:
                return outcome.name
        return None

    def status_of(self, name: str) -> Optional[StepStatus]:
        for outcome in self.outcomes:
            if outcome.name == name:
                return outcome.status
        return None

    def names_with_status(self, status: StepStatus) -> List[str]:
        return [o.name for o in self.outcomes if o.status is status]


class BaseStep(ABC):
    """
    Base class for all provisioning steps.

    Subclasses implement `is_satisfied` (the sentinel check) and `apply`
    (the side-effecting action). `apply` signals failure by raising; a False
    return value is treated as failure as well.
    """

    # Class-level metadata that can be overridden by subclasses or set by the registry decorator
    name: str = ""
    metadata: Dict[str, Any] = {
        "dependencies": [],  # Names of steps that must run before this one
        "description": "",
    }

    def __init__(
        self,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the step.

        Args:
            app_settings: The application settings.
            logger: Optional logger instance. If not provided, a new logger will be created.
        """
        self.app_settings = app_settings
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.symbols = app_settings.symbols

    def is_enabled(self) -> bool:
        """Steps switched off by configuration are neither checked nor applied."""
        return True

    @abstractmethod
    def is_satisfied(self) -> bool:
        """Return True if the step's effect is already present."""

    @abstractmethod
    def apply(self) -> Optional[bool]:
        """Bring the system into the state checked by `is_satisfied`."""

    def get_description(self) -> str:
        return str(self.metadata.get("description", "")) or self.name

    def run(self) -> StepOutcome:
        """
        Check, then apply if needed.

        Exceptions from `is_satisfied` or `apply` propagate so the caller can
        log them with a traceback and halt.
        """
        description = self.get_description()

        if not self.is_enabled():
            self.logger.info(
                f"{self.symbols.get('info', 'ℹ️')} {description} is disabled in configuration. Skipping."
            )
            return StepOutcome(self.name, StepStatus.DISABLED, "disabled in configuration")

        if self.is_satisfied():
            self.logger.info(
                f"{self.symbols.get('info', 'ℹ️')} {description}: already satisfied, skipping."
            )
            return StepOutcome(self.name, StepStatus.SKIPPED, "already satisfied")

        self.logger.info(
            f"--- {self.symbols.get('step', '➡️')} Executing: {description} ({self.name}) ---"
        )
        if self.apply() is False:
            return StepOutcome(self.name, StepStatus.FAILED, "step returned False")

        self.logger.info(
            f"--- {self.symbols.get('success', '✅')} Successfully completed: {description} ({self.name}) ---"
        )
        return StepOutcome(self.name, StepStatus.APPLIED)
