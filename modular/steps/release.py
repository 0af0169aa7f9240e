"""
Shared behaviour for steps that install a downloaded release tarball into
the web root.
"""

from abc import abstractmethod
from pathlib import Path

from common.download_utils import download_file, extract_tarball, remove_staging_paths
from modular.base_step import BaseStep


class ReleaseInstallStep(BaseStep):
    """
    Downloads a release tarball to the staging directory, extracts it and
    hands the archive's top-level directory to `install_from`. Staging files
    are removed afterwards whether or not the install succeeded.
    """

    staging_name: str = "release"

    @property
    @abstractmethod
    def download_url(self) -> str:
        """URL of the release tarball."""

    @abstractmethod
    def install_from(self, release_root: Path) -> None:
        """Copy the extracted release into place and fix up permissions."""

    def staging_archive(self) -> Path:
        return self.app_settings.staging_dir / f"devenv-{self.staging_name}.tar.gz"

    def staging_extract_dir(self) -> Path:
        return self.app_settings.staging_dir / f"devenv-{self.staging_name}"

    def apply(self) -> None:
        archive = self.staging_archive()
        extract_dir = self.staging_extract_dir()
        self.logger.info(
            f"{self.symbols.get('package', '📦')} Downloading {self.get_description()} from {self.download_url}..."
        )
        try:
            download_file(
                self.download_url,
                archive,
                timeout=self.app_settings.download_timeout,
                current_logger=self.logger,
            )
            release_root = extract_tarball(archive, extract_dir, self.logger)
            self.install_from(release_root)
        finally:
            remove_staging_paths(archive, extract_dir, current_logger=self.logger)
