"""
phpMyAdmin install step.

The release is copied with its versioned top-level directory stripped into
<web_root>/phpMyAdmin, and config.inc.php is written from the bundled sample
with a cookie encryption secret filled in.
"""

import re
import secrets
from pathlib import Path
from typing import Optional

from common.download_utils import ProvisioningError
from common.file_utils import copy_directory_contents, set_ownership, write_file_elevated
from modular.registry import StepRegistry
from modular.steps.release import ReleaseInstallStep
from setup import config as static_config

BLOWFISH_SECRET_RE = re.compile(
    r"^(\s*\$cfg\['blowfish_secret'\]\s*=\s*)'[^']*'(\s*;.*)$", re.MULTILINE
)


def generate_blowfish_secret() -> str:
    # phpMyAdmin expects exactly 32 bytes for sodium; 16 random bytes hex-encoded.
    return secrets.token_hex(16)


def render_config(sample_text: str, blowfish_secret: str) -> str:
    """
    Returns `sample_text` with the blowfish_secret assignment set.

    If the sample has no such assignment, one is appended.
    """
    replacement = f"'{blowfish_secret}'"
    rendered, count = BLOWFISH_SECRET_RE.subn(
        lambda m: m.group(1) + replacement + m.group(2), sample_text
    )
    if count:
        return rendered
    if not rendered.endswith("\n"):
        rendered += "\n"
    return rendered + f"$cfg['blowfish_secret'] = {replacement};\n"


@StepRegistry.register(
    name="phpmyadmin",
    metadata={
        "dependencies": ["start_services"],
        "description": "Install phpMyAdmin",
    },
)
class PhpMyAdminInstallStep(ReleaseInstallStep):
    staging_name = "phpmyadmin"

    @property
    def download_url(self) -> str:
        return str(self.app_settings.phpmyadmin.download_url)

    def is_enabled(self) -> bool:
        return self.app_settings.phpmyadmin.install

    def is_satisfied(self) -> bool:
        return self.app_settings.phpmyadmin_path.is_dir()

    def install_from(self, release_root: Path) -> None:
        settings = self.app_settings
        target = settings.phpmyadmin_path

        copy_directory_contents(release_root, target, settings, self.logger)
        self.write_config(release_root, target)
        set_ownership(target, settings.web_owner, settings, self.logger)
        self.logger.info(
            f"{self.symbols.get('success', '✅')} phpMyAdmin installed at {target}"
        )

    def write_config(self, release_root: Path, target: Path) -> None:
        sample = release_root / static_config.PHPMYADMIN_SAMPLE_CONFIG
        if not sample.is_file():
            raise ProvisioningError(
                f"phpMyAdmin release is missing {static_config.PHPMYADMIN_SAMPLE_CONFIG}"
            )
        secret: Optional[str] = self.app_settings.phpmyadmin.blowfish_secret
        content = render_config(
            sample.read_text(encoding="utf-8"), secret or generate_blowfish_secret()
        )
        write_file_elevated(
            target / static_config.PHPMYADMIN_CONFIG,
            content,
            self.app_settings,
            mode="640",
            current_logger=self.logger,
        )
