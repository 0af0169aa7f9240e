"""
Modular provisioning framework.

This package provides the steps that set up the local WordPress development
environment and the orchestrator that runs them.
"""

from modular.base_step import BaseStep, ProvisionReport, StepOutcome, StepStatus
from modular.orchestrator import ProvisionOrchestrator
from modular.registry import StepRegistry

__all__ = [
    "BaseStep",
    "ProvisionOrchestrator",
    "ProvisionReport",
    "StepOutcome",
    "StepRegistry",
    "StepStatus",
]
