import subprocess
from unittest.mock import MagicMock

import pytest

from common.system_utils import (
    inactive_services,
    is_service_active,
    restart_service,
    start_service,
)


def test_is_service_active(mocker, app_settings):
    mock_run = mocker.patch(
        "common.system_utils.run_command", return_value=MagicMock(returncode=0)
    )

    assert is_service_active("mariadb", app_settings) is True
    assert mock_run.call_args.args[0] == ["systemctl", "is-active", "--quiet", "mariadb"]
    assert mock_run.call_args.kwargs["check"] is False


def test_is_service_active_inactive(mocker, app_settings):
    mocker.patch(
        "common.system_utils.run_command", return_value=MagicMock(returncode=3)
    )

    assert is_service_active("httpd", app_settings) is False


def test_inactive_services_keeps_order(mocker, app_settings):
    active = {"httpd"}
    mocker.patch(
        "common.system_utils.is_service_active",
        side_effect=lambda name, *args, **kwargs: name in active,
    )

    assert inactive_services(["mariadb", "httpd", "php-fpm"], app_settings) == [
        "mariadb",
        "php-fpm",
    ]


def test_start_and_restart_service(mocker, app_settings, mock_logger):
    mock_run = mocker.patch("common.system_utils.run_elevated_command")

    start_service("mariadb", app_settings, mock_logger)
    restart_service("httpd", app_settings, mock_logger)

    assert [c.args[0] for c in mock_run.call_args_list] == [
        ["systemctl", "start", "mariadb"],
        ["systemctl", "restart", "httpd"],
    ]


def test_start_service_failure_is_logged_and_raised(mocker, app_settings, mock_logger):
    mocker.patch(
        "common.system_utils.run_elevated_command",
        side_effect=subprocess.CalledProcessError(1, ["systemctl", "start", "mariadb"]),
    )

    with pytest.raises(subprocess.CalledProcessError):
        start_service("mariadb", app_settings, mock_logger)

    assert "Failed to start service 'mariadb'" in mock_logger.error.call_args.args[0]
