import logging
import subprocess
from unittest.mock import MagicMock, Mock

import pytest
from pytest_mock import MockerFixture

from common.command_utils import (
    get_symbols,
    log_devenv,
    run_command,
    run_elevated_command,
)
from setup.config_models import SYMBOLS_DEFAULT, AppSettings


@pytest.mark.parametrize(
    "level, method",
    [
        ("debug", "debug"),
        ("info", "info"),
        ("success", "info"),
        ("warning", "warning"),
        ("error", "error"),
        ("critical", "critical"),
        ("unknown", "info"),
    ],
)
def test_log_devenv_levels(mock_logger, level, method):
    log_devenv("message", level, mock_logger)
    getattr(mock_logger, method).assert_called_once_with(
        "message", exc_info=False
    )


def test_get_symbols_falls_back_to_defaults():
    assert get_symbols(None) == SYMBOLS_DEFAULT
    settings = AppSettings(symbols={"success": "OK"})
    assert get_symbols(settings) == {"success": "OK"}


def test_run_command_success(mocker: MockerFixture, app_settings):
    """Test successful execution of run_command."""
    mock_subprocess_run = mocker.patch("subprocess.run")
    mock_subprocess_run.return_value = subprocess.CompletedProcess(
        args=["echo", "test"], returncode=0, stdout="test", stderr=""
    )

    result = run_command(
        ["echo", "test"],
        app_settings,
        capture_output=True,
        current_logger=logging.getLogger("test_logger"),
    )

    assert result.returncode == 0
    assert result.stdout == "test"
    mock_subprocess_run.assert_called_once_with(
        ["echo", "test"],
        check=True,
        shell=False,
        capture_output=True,
        text=True,
        input=None,
        cwd=None,
        env=None,
    )


def test_run_command_joins_list_in_shell_mode(mocker: MockerFixture, app_settings):
    mock_subprocess_run = mocker.patch("subprocess.run")

    run_command(["echo", "a", "b"], app_settings, shell=True)

    assert mock_subprocess_run.call_args.args[0] == "echo a b"


def test_run_command_hides_sensitive_stdin(mocker: MockerFixture, app_settings, mock_logger):
    mocker.patch("subprocess.run")
    mock_log = mocker.patch("common.command_utils.log_devenv")

    run_command(
        ["mysql"],
        app_settings,
        cmd_input="CREATE USER 'u' IDENTIFIED BY 'secret';",
        current_logger=mock_logger,
        log_input=False,
    )

    messages = [c.args[0] for c in mock_log.call_args_list]
    assert "   stdin: [hidden]" in messages
    assert not any("secret" in m for m in messages)


def test_run_command_failure(mocker: MockerFixture, app_settings, mock_logger):
    """Test failure when run_command returns a non-zero exit code."""
    mocker.patch(
        "subprocess.run",
        side_effect=subprocess.CalledProcessError(
            returncode=1, cmd=["fail_cmd"], output="", stderr="error occurred"
        ),
    )

    with pytest.raises(subprocess.CalledProcessError):
        run_command(["fail_cmd"], app_settings, current_logger=mock_logger)

    error_messages = [c.args[0] for c in mock_logger.error.call_args_list]
    assert any("failed (rc 1)" in m for m in error_messages)
    assert "   stderr: error occurred" in error_messages


def test_run_command_file_not_found(mocker: MockerFixture, app_settings, mock_logger):
    """Test file not found error in run_command."""
    error = FileNotFoundError(2, "No such file", "missing_cmd")
    mocker.patch("subprocess.run", side_effect=error)

    with pytest.raises(FileNotFoundError):
        run_command(["missing_cmd"], app_settings, current_logger=mock_logger)

    assert "missing_cmd" in mock_logger.error.call_args.args[0]


def test_run_elevated_command_uses_sudo(mocker: MockerFixture):
    """Test that a non-root process prefixes the command with sudo."""
    mocker.patch("common.command_utils.os.geteuid", return_value=1000)
    mock_run_command = mocker.patch("common.command_utils.run_command")
    mock_run_command.return_value = subprocess.CompletedProcess(
        args=["sudo", "cat"], returncode=0, stdout="input\n", stderr=""
    )

    logger = logging.getLogger("test_logger")
    app_settings_mock = Mock(spec=AppSettings)
    result = run_elevated_command(
        ["cat"],
        app_settings_mock,
        capture_output=True,
        cmd_input="input",
        current_logger=logger,
    )

    mock_run_command.assert_called_once_with(
        ["sudo", "cat"],
        app_settings_mock,
        check=True,
        shell=False,
        capture_output=True,
        text=True,
        cmd_input="input",
        current_logger=logger,
        cwd=None,
        env=None,
        log_input=True,
    )
    assert result.stdout.strip() == "input"


def test_run_elevated_command_as_root_skips_sudo(mocker: MockerFixture):
    mocker.patch("common.command_utils.os.geteuid", return_value=0)
    mock_run_command = mocker.patch("common.command_utils.run_command")

    run_elevated_command(["systemctl", "start", "httpd"], MagicMock())

    assert mock_run_command.call_args.args[0] == ["systemctl", "start", "httpd"]


def test_run_elevated_command_failure_propagates(mocker: MockerFixture):
    mocker.patch("common.command_utils.os.geteuid", return_value=1000)
    mocker.patch(
        "common.command_utils.run_command",
        side_effect=subprocess.CalledProcessError(1, ["sudo", "false"]),
    )

    with pytest.raises(subprocess.CalledProcessError):
        run_elevated_command(["false"], Mock(spec=AppSettings))
