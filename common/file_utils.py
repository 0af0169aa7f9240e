# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions: backups, privileged copies and writes,
ownership and permissions.

Paths under the web root and /etc are owned by root or the web server
user, so every mutation goes through run_elevated_command.
"""

import datetime
import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Optional, Union

from common.command_utils import get_symbols, log_devenv, run_elevated_command
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def backup_file(
    file_path: PathLike,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Backup a specified file to a timestamped backup file.

    Parameters:
        file_path: The path of the file to be backed up.
        app_settings (Optional[AppSettings]): Application-specific settings,
            which may include customized symbols for log messages.
        current_logger (Optional[logging.Logger]): Logger instance to use for
            logging messages. If not provided, a module-level logger is used.

    Returns:
        bool: True if the backup succeeded or no backup was needed (the file
            does not exist). False if an error occurred.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    file_path = str(file_path)

    try:
        run_elevated_command(
            ["test", "-f", file_path],
            app_settings,
            check=True,
            capture_output=True,
            current_logger=logger_to_use,
        )
    except subprocess.CalledProcessError:
        log_devenv(
            f"{symbols.get('info', 'ℹ️')} File {file_path} does not exist or is not a regular file. No backup needed.",
            "info",
            logger_to_use,
            app_settings,
        )
        return True
    except Exception as e:
        log_devenv(
            f"{symbols.get('error', '❌')} Error pre-checking file existence for backup of {file_path}: {e}",
            "error",
            logger_to_use,
            app_settings,
        )
        return False

    timestamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
    backup_path = f"{file_path}.bak.{timestamp}"
    try:
        run_elevated_command(
            ["cp", "-a", file_path, backup_path],
            app_settings,
            current_logger=logger_to_use,
        )
        log_devenv(
            f"{symbols.get('success', '✅')} Backed up {file_path} to {backup_path}",
            "success",
            logger_to_use,
            app_settings,
        )
        return True
    except Exception as e:
        log_devenv(
            f"{symbols.get('error', '❌')} Failed to backup {file_path} to {backup_path}: {e}",
            "error",
            logger_to_use,
            app_settings,
        )
        return False


def ensure_directory(
    directory: PathLike,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    run_elevated_command(
        ["mkdir", "-p", str(directory)],
        app_settings,
        current_logger=current_logger,
    )


def copy_directory_contents(
    source_dir: PathLike,
    destination_dir: PathLike,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Copies everything inside `source_dir` (dotfiles included) into
    `destination_dir`, overwriting files that already exist there.
    """
    ensure_directory(destination_dir, app_settings, current_logger)
    run_elevated_command(
        ["cp", "-rf", f"{source_dir}{os.sep}.", str(destination_dir)],
        app_settings,
        current_logger=current_logger,
    )


def set_ownership(
    path: PathLike,
    owner: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    run_elevated_command(
        ["chown", "-R", owner, str(path)],
        app_settings,
        current_logger=current_logger,
    )


def set_permissions(
    path: PathLike,
    mode: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    run_elevated_command(
        ["chmod", "-R", mode, str(path)],
        app_settings,
        current_logger=current_logger,
    )


def write_file_elevated(
    destination: PathLike,
    content: str,
    app_settings: Optional[AppSettings],
    mode: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Writes `content` to a root-owned location by staging it in a temporary
    file and copying it into place with elevated privileges.
    """
    logger_to_use = current_logger if current_logger else module_logger
    temp_file_path = ""
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            delete=False,
            prefix="devenv_",
            suffix=".tmp",
            encoding="utf-8",
        ) as temp_f:
            temp_f.write(content)
            temp_file_path = temp_f.name
        run_elevated_command(
            ["cp", temp_file_path, str(destination)],
            app_settings,
            current_logger=logger_to_use,
        )
        if mode:
            run_elevated_command(
                ["chmod", mode, str(destination)],
                app_settings,
                current_logger=logger_to_use,
            )
    finally:
        if temp_file_path and os.path.exists(temp_file_path):
            os.unlink(temp_file_path)
