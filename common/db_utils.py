# common/db_utils.py
# -*- coding: utf-8 -*-
"""
MariaDB/MySQL helpers driven through the privileged command-line client.

The local engine authenticates the OS root account over the unix socket, so
statements run as `sudo mysql` rather than through a network connection.
"""

import logging
from typing import List, Optional

from common.command_utils import get_symbols, log_devenv, run_elevated_command
from setup.config_models import AppSettings, DatabaseSettings

module_logger = logging.getLogger(__name__)


def quote_identifier(identifier: str) -> str:
    return "`" + identifier.replace("`", "``") + "`"


def quote_literal(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def list_databases(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> List[str]:
    """
    Returns the schema names reported by SHOW DATABASES.

    Raises:
        subprocess.CalledProcessError: The client exited non-zero (for
            example, the engine is not running).
    """
    logger_to_use = current_logger if current_logger else module_logger
    result = run_elevated_command(
        [app_settings.db.client_command, "--batch", "--skip-column-names", "-e", "SHOW DATABASES;"],
        app_settings,
        capture_output=True,
        current_logger=logger_to_use,
    )
    return [line.strip() for line in (result.stdout or "").splitlines() if line.strip()]


def database_exists(
    database_name: str,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    return database_name in list_databases(app_settings, current_logger)


def build_create_statements(db_settings: DatabaseSettings) -> str:
    """
    Renders the SQL that creates the schema, the account and its grants.

    Every statement is safe to repeat, so a run interrupted after some of
    them converges on the next attempt.
    """
    database = quote_identifier(db_settings.name)
    account = f"{quote_literal(db_settings.user)}@{quote_literal(db_settings.host)}"
    statements = [
        f"CREATE DATABASE IF NOT EXISTS {database};",
        f"CREATE USER IF NOT EXISTS {account} IDENTIFIED BY {quote_literal(db_settings.password)};",
        f"GRANT ALL PRIVILEGES ON {database}.* TO {account};",
        "FLUSH PRIVILEGES;",
    ]
    return "\n".join(statements) + "\n"


def create_database_and_user(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    db_settings = app_settings.db

    log_devenv(
        f"{symbols.get('gear', '⚙️')} Creating database '{db_settings.name}' and user '{db_settings.user}'@'{db_settings.host}'...",
        "info",
        logger_to_use,
        app_settings,
    )
    run_elevated_command(
        [db_settings.client_command],
        app_settings,
        cmd_input=build_create_statements(db_settings),
        capture_output=True,
        current_logger=logger_to_use,
        log_input=False,
    )
    log_devenv(
        f"{symbols.get('success', '✅')} Database '{db_settings.name}' and user '{db_settings.user}' created.",
        "success",
        logger_to_use,
        app_settings,
    )
