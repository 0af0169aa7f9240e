# setup/config.py
"""
Centralized static constants for the dev environment provisioner.

Values that users are expected to change live in the Pydantic models in
setup/config_models.py; this module only holds what is fixed for a given
release of the scripts.
"""

from pathlib import Path

# Represents the version of the provisioning logic.
SCRIPT_VERSION: str = "1.0.0"

# Root directory of the project, used to locate config.yaml.
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

CONFIG_FILE_DEFAULT: str = "config.yaml"

# Order in which steps run when no explicit list is given.
DEFAULT_STEP_SEQUENCE: list[str] = [
    "start_services",
    "wordpress_database",
    "wordpress",
    "phpmyadmin",
    "php_ini",
    "restart_services",
]

# phpMyAdmin configuration files, relative to its install directory.
PHPMYADMIN_SAMPLE_CONFIG: str = "config.sample.inc.php"
PHPMYADMIN_CONFIG: str = "config.inc.php"

DOWNLOAD_CHUNK_SIZE: int = 8192
