# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Utilities for executing shell commands and logging their output.
"""

import logging
import os
import subprocess
from typing import Dict, List, Optional, Tuple, Union

from setup.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)


def log_devenv(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Logs a provisioning message at the given level.

    Args:
        message (str): The log message to be recorded.
        level (str): The severity level of the log message. One of "debug",
            "info", "success", "warning", "error" and "critical". "success"
            and unknown levels are logged at INFO.
        current_logger (Optional[logging.Logger]): A logger instance to use for
            logging. If not provided, a module-level logger will be used.
        app_settings (Optional[AppSettings]): Application settings, accepted so
            callers can pass them uniformly.
        exc_info (bool): Include exception details in the log record.
    """
    effective_logger = current_logger if current_logger else module_logger

    if level == "warning":
        effective_logger.warning(message, exc_info=exc_info)
    elif level == "error":
        effective_logger.error(message, exc_info=exc_info)
    elif level == "critical":
        effective_logger.critical(message, exc_info=exc_info)
    elif level == "debug":
        effective_logger.debug(message, exc_info=exc_info)
    else:
        effective_logger.info(message, exc_info=exc_info)


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    if app_settings and app_settings.symbols:
        return app_settings.symbols
    return SYMBOLS_DEFAULT


def _get_elevated_command_prefix() -> List[str]:
    """
    Returns ["sudo"] unless the process already runs as root.
    """
    return [] if os.geteuid() == 0 else ["sudo"]


def _prepare_command(
    command: Union[List[str], str], shell: bool
) -> Tuple[Union[List[str], str], str]:
    """Returns the command in the form subprocess expects and its log text."""
    if shell:
        joined = " ".join(command) if isinstance(command, list) else command
        return joined, joined
    if isinstance(command, str):
        return command.split(), command
    return command, subprocess.list2cmdline(command)


def _stream_text(stream) -> str:
    if stream and hasattr(stream, "strip"):
        return stream.strip()
    return ""


def _log_failed_command(
    error: subprocess.CalledProcessError,
    symbols: Dict[str, str],
    logger_to_use: logging.Logger,
    app_settings: Optional[AppSettings],
) -> None:
    cmd_executed_str = (
        subprocess.list2cmdline(error.cmd)
        if isinstance(error.cmd, list)
        else str(error.cmd)
    )
    log_devenv(
        f"{symbols.get('error', '❌')} Command `{cmd_executed_str}` failed (rc {error.returncode}).",
        "error",
        logger_to_use,
        app_settings,
    )
    for label, stream in (("stdout", error.stdout), ("stderr", error.stderr)):
        output = _stream_text(stream)
        if output:
            log_devenv(f"   {label}: {output}", "error", logger_to_use, app_settings)


def run_command(
    command: Union[List[str], str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    shell: bool = False,
    capture_output: bool = False,
    text: bool = True,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
    log_input: bool = True,
) -> subprocess.CompletedProcess:
    """
    Executes a system command and logs the process details and results.

    Args:
        command (Union[List[str], str]): The command to execute. A list is
            joined into one string when shell mode is enabled.
        app_settings (Optional[AppSettings]): Settings providing the logging
            symbols. Defaults are used when None.
        check (bool): Raise CalledProcessError on a non-zero exit code.
        shell (bool): Run the command through the shell.
        capture_output (bool): Capture stdout and stderr.
        text (bool): Treat the output streams as text.
        cmd_input (Optional[str]): Data passed to the command's stdin.
        current_logger (Optional[logging.Logger]): Logger to use.
        cwd (Optional[str]): Working directory for the command.
        env (Optional[Dict[str, str]]): Environment for the command.
        log_input (bool): Whether `cmd_input` may appear in debug logs. Pass
            False when stdin carries credentials.

    Returns:
        subprocess.CompletedProcess: The completed process.

    Raises:
        subprocess.CalledProcessError: Non-zero exit code with check=True.
        FileNotFoundError: The executable was not found.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if isinstance(command, str) and not shell:
        log_devenv(
            f"{symbols.get('warning', '!')} Running string command '{command}' without shell=True. Consider list format.",
            "warning",
            logger_to_use,
            app_settings,
        )
    command_to_run, command_to_log = _prepare_command(command, shell)

    location = f" (in {cwd})" if cwd else ""
    log_devenv(
        f"{symbols.get('gear', '⚙️')} Executing: {command_to_log}{location}",
        "info",
        logger_to_use,
        app_settings,
    )
    if cmd_input is not None:
        shown_input = cmd_input.strip() if log_input else "[hidden]"
        log_devenv(f"   stdin: {shown_input}", "debug", logger_to_use, app_settings)

    try:
        result = subprocess.run(
            command_to_run,
            check=check,
            shell=shell,
            capture_output=capture_output,
            text=text,
            input=cmd_input,
            cwd=cwd,
            env=env,
        )
    except subprocess.CalledProcessError as e:
        _log_failed_command(e, symbols, logger_to_use, app_settings)
        raise
    except FileNotFoundError as e:
        log_devenv(
            f"{symbols.get('error', '❌')} Command not found: {e.filename}. Ensure it's installed and in PATH.",
            "error",
            logger_to_use,
            app_settings,
        )
        raise

    if capture_output:
        stdout = _stream_text(result.stdout)
        if stdout:
            log_devenv(f"   stdout: {stdout}", "debug", logger_to_use, app_settings)
        stderr = _stream_text(result.stderr)
        if stderr:
            log_devenv(f"   stderr: {stderr}", "info", logger_to_use, app_settings)
    return result


def run_elevated_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
    log_input: bool = True,
) -> subprocess.CompletedProcess:
    """
    Executes a command with elevated permissions, prefixing it with sudo
    when the process is not already root. See run_command for the
    arguments.
    """
    return run_command(
        _get_elevated_command_prefix() + list(command),
        app_settings,
        check=check,
        shell=False,
        capture_output=capture_output,
        text=True,
        cmd_input=cmd_input,
        current_logger=current_logger,
        cwd=cwd,
        env=env,
        log_input=log_input,
    )
