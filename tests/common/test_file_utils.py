import os
from pathlib import Path
from subprocess import CalledProcessError

import pytest
from pytest_mock import MockerFixture

from common.file_utils import (
    backup_file,
    copy_directory_contents,
    set_ownership,
    set_permissions,
    write_file_elevated,
)
from setup.config_models import AppSettings


def test_backup_file_success(mocker: MockerFixture):
    """Test successful backup of a file."""
    mock_run_elevated_command = mocker.patch(
        "common.file_utils.run_elevated_command"
    )
    mock_log_devenv = mocker.patch("common.file_utils.log_devenv")

    app_settings = AppSettings()
    file_path = "/etc/php.ini"

    # Mock successful file existence and backup
    mock_run_elevated_command.side_effect = [
        None,  # File existence check
        None,  # Backup operation
    ]

    result = backup_file(file_path, app_settings)

    assert result is True
    backup_command = mock_run_elevated_command.call_args_list[1].args[0]
    assert backup_command[:3] == ["cp", "-a", file_path]
    assert backup_command[3].startswith(f"{file_path}.bak.")
    mock_log_devenv.assert_called_with(
        mocker.ANY, "success", mocker.ANY, app_settings
    )


def test_backup_file_nonexistent(mocker: MockerFixture):
    """Test when file doesn't exist, no backup needed."""
    mock_run_elevated_command = mocker.patch(
        "common.file_utils.run_elevated_command"
    )
    mock_log_devenv = mocker.patch("common.file_utils.log_devenv")

    app_settings = AppSettings()
    file_path = "/path/to/nonexistent_file.txt"

    mock_run_elevated_command.side_effect = [
        CalledProcessError(1, ["test", "-f", file_path])
    ]

    result = backup_file(file_path, app_settings)

    mock_run_elevated_command.assert_called_once()
    mock_log_devenv.assert_called_with(
        mocker.ANY, "info", mocker.ANY, app_settings
    )
    assert result is True


def test_backup_file_failure(mocker: MockerFixture):
    """Test backup failure due to an error."""
    mock_run_elevated_command = mocker.patch(
        "common.file_utils.run_elevated_command"
    )
    mock_log_devenv = mocker.patch("common.file_utils.log_devenv")

    app_settings = AppSettings()
    mock_run_elevated_command.side_effect = [
        None,
        CalledProcessError(1, ["cp"]),
    ]

    result = backup_file("/etc/php.ini", app_settings)

    mock_log_devenv.assert_called_with(
        mocker.ANY, "error", mocker.ANY, app_settings
    )
    assert result is False


def test_copy_directory_contents_includes_dotfiles(mocker: MockerFixture):
    mock_run_elevated_command = mocker.patch(
        "common.file_utils.run_elevated_command"
    )
    app_settings = AppSettings()

    copy_directory_contents("/tmp/release", "/var/www/html", app_settings)

    commands = [c.args[0] for c in mock_run_elevated_command.call_args_list]
    assert commands == [
        ["mkdir", "-p", "/var/www/html"],
        ["cp", "-rf", f"/tmp/release{os.sep}.", "/var/www/html"],
    ]


def test_set_ownership_and_permissions(mocker: MockerFixture):
    mock_run_elevated_command = mocker.patch(
        "common.file_utils.run_elevated_command"
    )
    app_settings = AppSettings()

    set_ownership(Path("/var/www/html"), "apache:apache", app_settings)
    set_permissions(Path("/var/www/html"), "755", app_settings)

    commands = [c.args[0] for c in mock_run_elevated_command.call_args_list]
    assert commands == [
        ["chown", "-R", "apache:apache", "/var/www/html"],
        ["chmod", "-R", "755", "/var/www/html"],
    ]


def test_write_file_elevated_copies_temp_file(mocker: MockerFixture):
    staged = {}

    def fake_elevated(command, *args, **kwargs):
        if command[0] == "cp":
            staged["path"] = command[1]
            staged["content"] = Path(command[1]).read_text(encoding="utf-8")

    mock_run_elevated_command = mocker.patch(
        "common.file_utils.run_elevated_command", side_effect=fake_elevated
    )

    write_file_elevated(
        "/etc/php.ini", "memory_limit = 256M\n", AppSettings(), mode="644"
    )

    assert staged["content"] == "memory_limit = 256M\n"
    commands = [c.args[0] for c in mock_run_elevated_command.call_args_list]
    assert commands == [
        ["cp", staged["path"], "/etc/php.ini"],
        ["chmod", "644", "/etc/php.ini"],
    ]
    assert not os.path.exists(staged["path"])


def test_write_file_elevated_removes_temp_file_on_failure(mocker: MockerFixture):
    staged = {}

    def failing_copy(command, *args, **kwargs):
        staged["path"] = command[1]
        raise CalledProcessError(1, command)

    mocker.patch(
        "common.file_utils.run_elevated_command", side_effect=failing_copy
    )

    with pytest.raises(CalledProcessError):
        write_file_elevated("/etc/php.ini", "x", AppSettings())

    assert not os.path.exists(staged["path"])
