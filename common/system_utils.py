# common/system_utils.py
# -*- coding: utf-8 -*-
"""
System-level helpers: systemd service state and transitions.
"""

import logging
import subprocess
from typing import Iterable, List, Optional

from common.command_utils import get_symbols, log_devenv, run_command, run_elevated_command
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def is_service_active(
    service_name: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Returns True when `systemctl is-active` reports the unit as active.

    A missing systemctl binary is an environment problem rather than an
    inactive service, so FileNotFoundError propagates.
    """
    logger_to_use = current_logger if current_logger else module_logger
    result = run_command(
        ["systemctl", "is-active", "--quiet", service_name],
        app_settings,
        check=False,
        capture_output=True,
        current_logger=logger_to_use,
    )
    return result.returncode == 0


def inactive_services(
    service_names: Iterable[str],
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> List[str]:
    return [
        name
        for name in service_names
        if not is_service_active(name, app_settings, current_logger)
    ]


def _systemctl(
    action: str,
    service_name: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_devenv(
        f"{symbols.get('gear', '⚙️')} Running systemctl {action} {service_name}...",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        run_elevated_command(
            ["systemctl", action, service_name],
            app_settings,
            current_logger=logger_to_use,
        )
    except subprocess.CalledProcessError:
        log_devenv(
            f"{symbols.get('error', '❌')} Failed to {action} service '{service_name}'.",
            "error",
            logger_to_use,
            app_settings,
        )
        raise
    log_devenv(
        f"{symbols.get('success', '✅')} Service '{service_name}' {action}ed.",
        "success",
        logger_to_use,
        app_settings,
    )


def start_service(
    service_name: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    _systemctl("start", service_name, app_settings, current_logger)


def restart_service(
    service_name: str,
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> None:
    _systemctl("restart", service_name, app_settings, current_logger)
