"""
Database step: the WordPress schema, its account and grants.
"""

from common.db_utils import create_database_and_user, database_exists
from modular.base_step import BaseStep
from modular.registry import StepRegistry


@StepRegistry.register(
    name="wordpress_database",
    metadata={
        "dependencies": ["start_services"],
        "description": "Create WordPress database and user",
    },
)
class WordPressDatabaseStep(BaseStep):
    # The schema is the sentinel: once it exists the account and grants are
    # assumed to exist too, and nothing is recreated.
    def is_satisfied(self) -> bool:
        return database_exists(self.app_settings.db.name, self.app_settings, self.logger)

    def apply(self) -> None:
        create_database_and_user(self.app_settings, self.logger)
