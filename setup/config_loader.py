# setup/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the provisioner.

Handles loading settings from Pydantic model defaults, a YAML file,
environment variables, and command-line arguments, applying a specific
order of precedence:
1. Pydantic Model Defaults
2. Environment Variables (read by Pydantic's BaseSettings)
3. YAML Configuration File
4. Command-Line Arguments
"""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from setup import config as static_config

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)

# CLI argument name -> dotted settings path.
CLI_ARGUMENT_MAP: Dict[str, str] = {
    "log_prefix": "log_prefix",
    "site_host": "site_host",
    "web_root": "web_root",
    "staging_dir": "staging_dir",
    "skip_wordpress": "wordpress.install",
    "skip_phpmyadmin": "phpmyadmin.install",
    "skip_php_ini": "php.apply_tweaks",
}

# Flags that switch a feature off rather than carrying a value.
NEGATING_CLI_ARGUMENTS = {"skip_wordpress", "skip_phpmyadmin", "skip_php_ini"}


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates `source` with values from `overrides`.

    Nested dictionaries are merged key by key; any other value replaces the
    one in `source`. `None` values in `overrides` never replace an existing
    value.

    Parameters:
        source: Dict[str, Any]
            The dictionary to be updated. Modified in place.
        overrides: Dict[str, Any]
            The dictionary containing values to update or add to `source`.

    Returns:
        Dict[str, Any]: The updated `source` dictionary.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
        elif key not in source:
            source[key] = value
    return source


def _set_dotted(target: Dict[str, Any], dotted_key: str, value: Any) -> None:
    parts = dotted_key.split(".")
    node = target
    for part in parts[:-1]:
        if not isinstance(node.get(part), dict):
            node[part] = {}
        node = node[part]
    node[parts[-1]] = value


def _resolve_config_path(config_file_path: str) -> Path:
    """Absolute paths are used as given; relative ones are looked up in the
    working directory first, then in the project root."""
    candidate = Path(config_file_path)
    if candidate.is_absolute():
        return candidate
    cwd_candidate = Path.cwd() / candidate
    if cwd_candidate.exists():
        return cwd_candidate
    return static_config.PROJECT_ROOT / candidate


def load_yaml_config(
    yaml_config_path: Path, current_logger: Optional[logging.Logger] = None
) -> Dict[str, Any]:
    """
    Reads a YAML mapping from disk.

    A missing file, a file that is not a mapping, or a file that cannot be
    parsed yields an empty dictionary and a log message; the caller then
    continues with defaults and environment variables.
    """
    logger_to_use = current_logger if current_logger else module_logger

    if not (yaml_config_path.exists() and yaml_config_path.is_file()):
        logger_to_use.info(
            f"Configuration file '{yaml_config_path}' not found. Using defaults, environment variables, and CLI args."
        )
        return {}

    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except IOError as e:
        logger_to_use.warning(
            f"Could not read config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
        return {}

    logger_to_use.info(f"Loaded configuration from {yaml_config_path}")
    return yaml_data


def cli_overrides(cli_args: argparse.Namespace) -> Dict[str, Any]:
    """Maps parsed CLI arguments onto a nested settings dictionary."""
    overrides: Dict[str, Any] = {}
    for cli_key, cli_value in vars(cli_args).items():
        if cli_key not in CLI_ARGUMENT_MAP or cli_value is None:
            continue
        if cli_key in NEGATING_CLI_ARGUMENTS:
            if not cli_value:
                continue
            cli_value = False
        _set_dotted(overrides, CLI_ARGUMENT_MAP[cli_key], cli_value)
    return overrides


def load_app_settings(
    cli_args: Optional[argparse.Namespace] = None,
    config_file_path: str = static_config.CONFIG_FILE_DEFAULT,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings with the following precedence:
    1. Pydantic Model Defaults.
    2. Environment Variables (loaded by BaseSettings on construction).
    3. Values from the YAML configuration file.
    4. Command-Line Arguments (highest precedence, overrides all else).

    Args:
        cli_args: Parsed command-line arguments (from argparse).
        config_file_path: Path to the YAML configuration file.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        SystemExit: If the merged configuration fails validation.
    """
    logger_to_use = current_logger if current_logger else module_logger

    # Defaults < environment variables
    settings_after_env_and_defaults = AppSettings()
    current_values_dict = settings_after_env_and_defaults.model_dump(
        exclude_defaults=False
    )

    yaml_config_path = _resolve_config_path(config_file_path)
    yaml_data = load_yaml_config(yaml_config_path, logger_to_use)
    if yaml_data:
        current_values_dict = _deep_update(current_values_dict, yaml_data)

    if cli_args:
        current_values_dict = _deep_update(
            current_values_dict, cli_overrides(cli_args)
        )

    try:
        final_settings = AppSettings(**current_values_dict)
    except Exception as e:  # Catch Pydantic validation errors etc.
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    logger_to_use.info(
        "Successfully loaded and validated application settings"
    )

    return final_settings
