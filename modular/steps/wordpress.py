"""
WordPress install step.

Mirrors the manual procedure: fetch latest.tar.gz, copy the contents of its
wordpress/ directory into the web root, then hand the web root to the web
server user.
"""

from pathlib import Path

from common.download_utils import ProvisioningError
from common.file_utils import copy_directory_contents, set_ownership, set_permissions
from modular.registry import StepRegistry
from modular.steps.release import ReleaseInstallStep


@StepRegistry.register(
    name="wordpress",
    metadata={
        "dependencies": ["wordpress_database"],
        "description": "Install WordPress",
    },
)
class WordPressInstallStep(ReleaseInstallStep):
    staging_name = "wordpress"

    @property
    def download_url(self) -> str:
        return str(self.app_settings.wordpress.download_url)

    def sentinel_path(self) -> Path:
        return self.app_settings.web_root / self.app_settings.wordpress.sentinel_file

    def is_enabled(self) -> bool:
        return self.app_settings.wordpress.install

    def is_satisfied(self) -> bool:
        return self.sentinel_path().is_file()

    def install_from(self, release_root: Path) -> None:
        settings = self.app_settings
        expected_root = settings.wordpress.archive_root
        if release_root.name != expected_root:
            raise ProvisioningError(
                f"WordPress archive root is '{release_root.name}', expected '{expected_root}'"
            )

        copy_directory_contents(release_root, settings.web_root, settings, self.logger)
        set_ownership(settings.web_root, settings.web_owner, settings, self.logger)
        set_permissions(settings.web_root, settings.web_root_mode, settings, self.logger)

        if not self.sentinel_path().is_file():
            raise ProvisioningError(
                f"WordPress copied to {settings.web_root} but {self.sentinel_path()} is missing"
            )
        self.logger.info(
            f"{self.symbols.get('success', '✅')} WordPress installed at {settings.web_root}"
        )
