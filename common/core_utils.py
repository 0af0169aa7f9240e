#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core utility functions for the project.

This module provides the logging setup shared by the provisioner entry
point and its tests.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from setup.config_models import SYMBOLS_DEFAULT

module_logger = logging.getLogger(__name__)

SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER = "{log_prefix}%(asctime)s - %(levelname)s - %(symbol)s %(name)s - %(message)s"
SIMPLE_LOG_FORMAT_NO_PREFIX = (
    "%(asctime)s - %(levelname)s - %(symbol)s %(name)s - %(message)s"
)
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log level -> key in the symbols mapping.
LEVEL_SYMBOL_KEYS: Dict[int, str] = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "critical",
}


class SymbolFormatter(logging.Formatter):
    """
    A formatter that exposes a per-level symbol as `%(symbol)s`.

    Symbols missing from the mapping it was given fall back to the
    built-in defaults; levels without a symbol get an empty string.
    """

    def __init__(
        self,
        fmt=None,
        datefmt=None,
        style="%",
        validate=True,
        symbols: Optional[Dict[str, str]] = None,
    ):
        super().__init__(fmt, datefmt, style, validate)
        self.symbols = symbols or SYMBOLS_DEFAULT

    def format(self, record):
        key = LEVEL_SYMBOL_KEYS.get(record.levelno)
        if key is None:
            record.symbol = ""
        else:
            record.symbol = self.symbols.get(key, SYMBOLS_DEFAULT[key])
        return super().format(record)


def _build_handlers(
    log_file: Optional[str], log_to_console: bool
) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if log_file:
        try:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file_path, mode="a"))
        except Exception as e:
            # Logging is not configured yet, so report on stderr directly.
            print(
                f"Warning: Could not create file handler for log file {log_file}: {e}",
                file=sys.stderr,
            )
    if log_to_console:
        handlers.append(logging.StreamHandler(sys.stdout))
    return handlers


def _build_format_string(
    log_format_str: Optional[str], log_prefix: Optional[str]
) -> str:
    prefix = (log_prefix.strip() + " ") if log_prefix and log_prefix.strip() else ""
    if log_format_str:
        if "{log_prefix}" in log_format_str:
            return log_format_str.format(log_prefix=prefix)
        return prefix + log_format_str
    if prefix:
        return SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER.format(log_prefix=prefix)
    return SIMPLE_LOG_FORMAT_NO_PREFIX


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_format_str: Optional[str] = None,
    log_prefix: Optional[str] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configures the root logger.

    Existing root handlers are replaced so that repeated calls (for example
    once with defaults and again after the configuration is loaded) do not
    duplicate output.

    Parameters:
    log_level: int
        The logging level to configure. Defaults to logging.INFO.
    log_file: Optional[str]
        If given, records are also appended to this file. Its parent
        directory is created when missing.
    log_to_console: bool
        Whether to log to stdout. Defaults to True.
    log_format_str: Optional[str]
        Custom format string. May contain a "{log_prefix}" placeholder;
        otherwise the prefix is prepended.
    log_prefix: Optional[str]
        Optional string prefixed to every record.
    symbols: Optional[Dict[str, str]]
        Level symbols for the SymbolFormatter.
    """
    handlers = _build_handlers(log_file, log_to_console)
    if not handlers:  # pragma: no cover
        handlers.append(logging.StreamHandler(sys.stdout))
        log_level = min(log_level, logging.INFO)

    final_format_str = _build_format_string(log_format_str, log_prefix)
    formatter = SymbolFormatter(
        fmt=final_format_str,
        datefmt=LOG_DATE_FORMAT,
        symbols=symbols,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    module_logger.debug(
        f"Logging configured. Level: {logging.getLevelName(log_level)}. Format: '{final_format_str}'"
    )
