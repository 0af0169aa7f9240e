"""
Service steps: start the database engine, web server and PHP runtime at the
beginning of a run and restart the web tier at the end.
"""

from typing import List

from common.system_utils import inactive_services, restart_service, start_service
from modular.base_step import BaseStep
from modular.registry import StepRegistry


@StepRegistry.register(
    name="start_services",
    metadata={
        "dependencies": [],
        "description": "Start database, web server and PHP services",
    },
)
class StartServicesStep(BaseStep):
    """Starts every configured service that is not already active."""

    def _services(self) -> List[str]:
        return self.app_settings.services.start_order()

    def is_satisfied(self) -> bool:
        return not inactive_services(self._services(), self.app_settings, self.logger)

    def apply(self) -> None:
        for service_name in inactive_services(self._services(), self.app_settings, self.logger):
            start_service(service_name, self.app_settings, self.logger)


@StepRegistry.register(
    name="restart_services",
    metadata={
        "dependencies": ["start_services"],
        "description": "Restart web server and PHP runtime",
        "always_runs": True,
    },
)
class RestartServicesStep(BaseStep):
    """
    Restarts the web tier so new files and php.ini changes are picked up.

    A restart has no observable marker, so this step is never satisfied.
    """

    def is_satisfied(self) -> bool:
        return False

    def apply(self) -> None:
        for service_name in self.app_settings.services.restart_order():
            restart_service(service_name, self.app_settings, self.logger)
