# setup/cli_handler.py
# -*- coding: utf-8 -*-
"""
Handles Command Line Interface (CLI) output for the provisioner: the
effective configuration, step status listings and the final summary.
"""

import datetime
import logging
from typing import List, Optional

from common.command_utils import log_devenv
from setup import config as static_config
from setup.config_models import DB_PASSWORD_DEFAULT, AppSettings, StepSummary

module_logger = logging.getLogger(__name__)


def view_configuration(
    app_config: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    """
    Displays the current effective configuration values. Secrets are never
    printed; the password line only says where the value came from.

    Parameters:
        app_config (AppSettings): The resolved application settings.
        current_logger (Optional[logging.Logger]): Logger to use. Defaults to
            the module logger.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = app_config.symbols

    config_text = f"{symbols.get('info', 'ℹ️')} Current effective configuration values (CLI > YAML > ENV > Defaults):\n\n"
    config_text += f"  Log Prefix:                    {app_config.log_prefix}\n"
    config_text += f"  Site Host:                     {app_config.site_host}\n"
    config_text += f"  Web Root:                      {app_config.web_root}\n"
    config_text += f"  Web Owner:                     {app_config.web_owner}\n"
    config_text += f"  Staging Directory:             {app_config.staging_dir}\n"
    config_text += f"  Download Timeout (s):          {app_config.download_timeout}\n\n"

    config_text += "  Services (services.*):\n"
    config_text += f"    Start:                       {', '.join(app_config.services.start_order())}\n"
    config_text += f"    Restart:                     {', '.join(app_config.services.restart_order())}\n\n"

    config_text += "  Database (db.*):\n"
    config_text += f"    Name:                        {app_config.db.name}\n"
    config_text += f"    User:                        {app_config.db.user}@{app_config.db.host}\n"
    if app_config.db.password == DB_PASSWORD_DEFAULT:
        password_display = "[DEFAULT - development only]"
    elif not app_config.db.password:
        password_display = "[NOT SET or EMPTY - Check Configuration]"
    else:
        password_display = "[FROM CONFIGURATION (ENV/YAML)]"
    config_text += f"    Password:                    {password_display}\n"
    config_text += f"    Client:                      {app_config.db.client_command}\n\n"

    config_text += "  WordPress (wordpress.*):\n"
    config_text += f"    Install:                     {app_config.wordpress.install}\n"
    config_text += f"    Download URL:                {app_config.wordpress.download_url}\n"
    config_text += f"    Sentinel:                    {app_config.web_root / app_config.wordpress.sentinel_file}\n\n"

    config_text += "  phpMyAdmin (phpmyadmin.*):\n"
    config_text += f"    Install:                     {app_config.phpmyadmin.install}\n"
    config_text += f"    Download URL:                {app_config.phpmyadmin.download_url}\n"
    config_text += f"    Directory:                   {app_config.phpmyadmin_path}\n"
    secret_display = "[CONFIGURED]" if app_config.phpmyadmin.blowfish_secret else "[GENERATED AT INSTALL]"
    config_text += f"    Blowfish Secret:             {secret_display}\n\n"

    config_text += "  PHP (php.*):\n"
    config_text += f"    Apply Tweaks:                {app_config.php.apply_tweaks}\n"
    config_text += f"    php.ini:                     {app_config.php.ini_path}\n"
    for name, value in app_config.php.tweaks.items():
        config_text += f"      {name} = {value}\n"
    config_text += "\n"

    config_text += f"  Script Version (static):       {static_config.SCRIPT_VERSION}\n"
    config_text += f"  Timestamp (current view):      {datetime.datetime.now().strftime('%Y-%m-%d-%H%M%S')}\n\n"
    config_text += "Configuration is loaded with precedence: CLI > YAML File > Environment Variables > Model Defaults."

    log_devenv(
        "Displaying current configuration:", "info", logger_to_use, app_config
    )
    log_devenv(f"\n{config_text}\n", "info", logger_to_use, app_config)


def show_status(
    summaries: List[StepSummary],
    app_config: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Logs one line per step and returns True if every enabled step with a
    check is satisfied. Steps that run every time are listed but not counted.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = app_config.symbols
    all_satisfied = True

    log_devenv("Step status:", "info", logger_to_use, app_config)
    for summary in summaries:
        if not summary.enabled:
            state = "disabled"
        elif summary.always_runs:
            state = f"{symbols.get('info', 'ℹ️')} runs every time"
        elif summary.satisfied:
            state = f"{symbols.get('success', '✅')} satisfied"
        else:
            state = f"{symbols.get('warning', '⚠️')} pending"
            if summary.error:
                state += f" (check failed: {summary.error})"
            all_satisfied = False
        log_devenv(
            f"  {summary.name:<20} {state}  ({summary.description})",
            "info",
            logger_to_use,
            app_config,
        )
    return all_satisfied


def log_summary(
    app_config: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    logger_to_use = current_logger if current_logger else module_logger
    base_url = f"http://{app_config.site_host}"
    lines = ["", "============================================", " Setup complete!"]
    if app_config.wordpress.install:
        lines.append(f" WordPress  : {base_url}/")
    if app_config.phpmyadmin.install:
        lines.append(f" phpMyAdmin : {base_url}/{app_config.phpmyadmin.directory}")
    lines.append("============================================")
    log_devenv("\n".join(lines), "info", logger_to_use, app_config)
