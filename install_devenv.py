#!/usr/bin/env python3
"""
Entry point for the local WordPress development environment provisioner.

Running it without arguments starts the services, creates the WordPress
database, installs WordPress and phpMyAdmin if they are missing, applies the
php.ini tweaks and restarts the web tier. Every step checks whether its
effect is already present first, so the script can be re-run at any time.
"""

import argparse
import logging
import sys
from typing import List, Optional

from common.core_utils import setup_logging
from modular.orchestrator import ProvisionOrchestrator
from setup import config as static_config
from setup.cli_handler import log_summary, show_status, view_configuration
from setup.config_loader import load_app_settings

logger = logging.getLogger("devenv_setup")


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Command-line arguments. If None, sys.argv[1:] is used.

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Provision a local WordPress + phpMyAdmin development environment."
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--config-file",
        default=static_config.CONFIG_FILE_DEFAULT,
        help="YAML configuration file (default: %(default)s)",
    )
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--view-config",
        action="store_true",
        help="Show the effective configuration and exit",
    )
    mode.add_argument(
        "--status",
        action="store_true",
        help="Report which steps are already satisfied without changing anything",
    )

    overrides = parser.add_argument_group("configuration overrides")
    overrides.add_argument("--site-host", default=None, help="Host name used in the summary URLs")
    overrides.add_argument("--web-root", default=None, help="Web server document root")
    overrides.add_argument("--staging-dir", default=None, help="Scratch directory for downloads")
    overrides.add_argument("--log-prefix", default=None, help="Prefix for log lines")
    overrides.add_argument(
        "--skip-wordpress", action="store_true", default=None, help="Do not install WordPress"
    )
    overrides.add_argument(
        "--skip-phpmyadmin", action="store_true", default=None, help="Do not install phpMyAdmin"
    )
    overrides.add_argument(
        "--skip-php-ini", action="store_true", default=None, help="Do not modify php.ini"
    )

    return parser.parse_args(args)


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the provisioner.

    Args:
        args: Command-line arguments. If None, sys.argv[1:] is used.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parsed_args = parse_args(args)
    log_level = logging.DEBUG if parsed_args.verbose else logging.INFO

    setup_logging(log_level=log_level, log_file=parsed_args.log_file)

    # Raises SystemExit("Configuration error: ...") on invalid settings.
    app_settings = load_app_settings(
        cli_args=parsed_args,
        config_file_path=parsed_args.config_file,
        current_logger=logger,
    )
    setup_logging(
        log_level=log_level,
        log_file=parsed_args.log_file,
        log_prefix=app_settings.log_prefix,
        symbols=app_settings.symbols,
    )

    if parsed_args.view_config:
        view_configuration(app_settings, logger)
        return 0

    orchestrator = ProvisionOrchestrator(app_settings, logger)

    try:
        if parsed_args.status:
            return 0 if show_status(orchestrator.check_status(), app_settings, logger) else 1

        report = orchestrator.run()
    except (KeyError, ValueError) as e:
        logger.error(f"Invalid step configuration: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Error: {str(e)}")
        return 1

    if not report.succeeded:
        logger.error(f"Provisioning failed at step '{report.failed_step}'.")
        return 1

    log_summary(app_settings, logger)
    return 0


if __name__ == "__main__":
    sys.exit(main())
