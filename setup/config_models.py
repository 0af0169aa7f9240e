# setup/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the dev environment
provisioner, including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
LOG_PREFIX_DEFAULT: str = "[DEVENV-SETUP]"
SITE_HOST_DEFAULT: str = "localhost"

WEB_ROOT_DEFAULT: str = "/var/www/html"
WEB_USER_DEFAULT: str = "apache"
WEB_GROUP_DEFAULT: str = "apache"
WEB_ROOT_MODE_DEFAULT: str = "755"
STAGING_DIR_DEFAULT: str = "/tmp"
DOWNLOAD_TIMEOUT_DEFAULT: int = 300

DB_SERVICE_DEFAULT: str = "mariadb"
WEB_SERVICE_DEFAULT: str = "httpd"
PHP_SERVICE_DEFAULT: str = "php-fpm"

DB_NAME_DEFAULT: str = "wordpress"
DB_USER_DEFAULT: str = "wordpressuser"
# IMPORTANT: Development-only credential.
DB_PASSWORD_DEFAULT: str = "password"
DB_HOST_DEFAULT: str = "localhost"
DB_CLIENT_DEFAULT: str = "mysql"

WORDPRESS_URL_DEFAULT: str = "https://wordpress.org/latest.tar.gz"
WORDPRESS_SENTINEL_DEFAULT: str = "wp-login.php"
WORDPRESS_ARCHIVE_DIR_DEFAULT: str = "wordpress"

PHPMYADMIN_URL_DEFAULT: str = (
    "https://www.phpmyadmin.net/downloads/phpMyAdmin-latest-all-languages.tar.gz"
)
PHPMYADMIN_DIR_DEFAULT: str = "phpMyAdmin"

PHP_INI_PATH_DEFAULT: str = "/etc/php.ini"
PHP_INI_TWEAKS_DEFAULT: Dict[str, str] = {
    "upload_max_filesize": "64M",
    "post_max_size": "64M",
    "memory_limit": "256M",
    "max_execution_time": "300",
}

SQL_IDENTIFIER_PATTERN: str = r"^[A-Za-z0-9_]+$"

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}


class ServiceSettings(BaseSettings):
    """Names of the OS services managed through systemctl."""
    model_config = SettingsConfigDict(env_prefix="SERVICE_", extra="ignore")

    database: str = Field(default=DB_SERVICE_DEFAULT, description="Database engine service.")
    web_server: str = Field(default=WEB_SERVICE_DEFAULT, description="Web server service.")
    php: str = Field(default=PHP_SERVICE_DEFAULT, description="PHP runtime service.")
    restart: Optional[List[str]] = Field(
        default=None,
        description="Services restarted at the end of the run. Defaults to the web server and PHP runtime.",
    )

    def start_order(self) -> List[str]:
        return [self.database, self.web_server, self.php]

    def restart_order(self) -> List[str]:
        if self.restart is not None:
            return list(self.restart)
        return [self.web_server, self.php]


class DatabaseSettings(BaseSettings):
    """WordPress database and user created in the local database engine."""
    model_config = SettingsConfigDict(env_prefix="DB_", extra="ignore")

    name: str = Field(
        default=DB_NAME_DEFAULT,
        pattern=SQL_IDENTIFIER_PATTERN,
        description="Database (schema) name.",
    )
    user: str = Field(
        default=DB_USER_DEFAULT,
        pattern=SQL_IDENTIFIER_PATTERN,
        description="Database user granted all privileges on the schema.",
    )
    password: str = Field(default=DB_PASSWORD_DEFAULT, description="Database user password.")
    host: str = Field(default=DB_HOST_DEFAULT, description="Host part of the database account.")
    client_command: str = Field(
        default=DB_CLIENT_DEFAULT,
        description="Client binary run with elevated privileges (e.g., mysql, mariadb).",
    )


class WordPressSettings(BaseSettings):
    """WordPress download and install location."""
    model_config = SettingsConfigDict(env_prefix="WORDPRESS_", extra="ignore")

    install: bool = Field(default=True, description="Install WordPress if missing.")
    download_url: Union[HttpUrl, str] = Field(
        default=WORDPRESS_URL_DEFAULT, description="URL of the WordPress release tarball."
    )
    sentinel_file: str = Field(
        default=WORDPRESS_SENTINEL_DEFAULT,
        description="File under the web root whose presence marks WordPress as installed.",
    )
    archive_root: str = Field(
        default=WORDPRESS_ARCHIVE_DIR_DEFAULT,
        description="Top-level directory inside the release tarball.",
    )


class PhpMyAdminSettings(BaseSettings):
    """phpMyAdmin download and install location."""
    model_config = SettingsConfigDict(env_prefix="PHPMYADMIN_", extra="ignore")

    install: bool = Field(default=True, description="Install phpMyAdmin if missing.")
    download_url: Union[HttpUrl, str] = Field(
        default=PHPMYADMIN_URL_DEFAULT, description="URL of the phpMyAdmin release tarball."
    )
    directory: str = Field(
        default=PHPMYADMIN_DIR_DEFAULT, description="Directory name under the web root."
    )
    blowfish_secret: Optional[str] = Field(
        default=None,
        min_length=32,
        pattern=r"^[^'\\]+$",
        description="Cookie encryption secret for config.inc.php. Generated when unset.",
    )


class PhpSettings(BaseSettings):
    """php.ini location and the directives enforced in it."""
    model_config = SettingsConfigDict(
        env_prefix="PHP_INI_", extra="ignore", coerce_numbers_to_str=True
    )

    apply_tweaks: bool = Field(default=True, description="Apply the php.ini tweaks.")
    ini_path: Path = Field(default=Path(PHP_INI_PATH_DEFAULT), description="Path to php.ini.")
    tweaks: Dict[str, str] = Field(
        default_factory=lambda: dict(PHP_INI_TWEAKS_DEFAULT),
        description="Directive name to value, written as 'name = value'.",
    )


class AppSettings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(env_prefix="DEVENV_", extra="ignore")

    log_prefix: str = Field(default=LOG_PREFIX_DEFAULT,
                            description="Prefix for log messages from the provisioner.")
    site_host: str = Field(default=SITE_HOST_DEFAULT,
                           description="Host name used in the summary URLs.")
    web_root: Path = Field(default=Path(WEB_ROOT_DEFAULT), description="Web server document root.")
    web_user: str = Field(default=WEB_USER_DEFAULT, description="Owner of files under the web root.")
    web_group: str = Field(default=WEB_GROUP_DEFAULT, description="Group of files under the web root.")
    web_root_mode: str = Field(default=WEB_ROOT_MODE_DEFAULT, pattern=r"^[0-7]{3,4}$",
                               description="Mode applied recursively to the WordPress web root.")
    staging_dir: Path = Field(default=Path(STAGING_DIR_DEFAULT),
                              description="Scratch directory for downloads and extraction.")
    download_timeout: int = Field(default=DOWNLOAD_TIMEOUT_DEFAULT, gt=0,
                                  description="Timeout in seconds for release downloads.")

    services: ServiceSettings = Field(default_factory=ServiceSettings)
    db: DatabaseSettings = Field(default_factory=DatabaseSettings)
    wordpress: WordPressSettings = Field(default_factory=WordPressSettings)
    phpmyadmin: PhpMyAdminSettings = Field(default_factory=PhpMyAdminSettings)
    php: PhpSettings = Field(default_factory=PhpSettings)

    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))

    @property
    def web_owner(self) -> str:
        return f"{self.web_user}:{self.web_group}"

    @property
    def phpmyadmin_path(self) -> Path:
        return self.web_root / self.phpmyadmin.directory


class StepSummary(BaseModel):
    """Serializable view of a step for status listings."""

    name: str
    description: str
    enabled: bool
    satisfied: Optional[bool] = None
    always_runs: bool = False
    error: Optional[str] = None
