import subprocess
from pathlib import Path

import pytest

from common.debian.apt_manager import AptManager


def completed(stdout=""):
    return subprocess.CompletedProcess(
        args=[], returncode=0, stdout=stdout, stderr=""
    )


@pytest.fixture
def apt_manager(mocker, mock_logger):
    mocker.patch(
        "common.debian.apt_manager.command_exists", return_value=True
    )
    return AptManager(logger=mock_logger)


@pytest.fixture
def mock_run_command(mocker):
    return mocker.patch("common.debian.apt_manager.run_command")


@pytest.fixture
def mock_run_elevated_command(mocker):
    return mocker.patch("common.debian.apt_manager.run_elevated_command")


def test_init_without_apt_get(mocker, mock_logger):
    mocker.patch(
        "common.debian.apt_manager.command_exists", return_value=False
    )
    with pytest.raises(FileNotFoundError):
        AptManager(logger=mock_logger)


def test_update_failure_returns_false(
    apt_manager, mock_run_elevated_command, app_settings
):
    mock_run_elevated_command.side_effect = subprocess.CalledProcessError(
        100, ["apt-get", "update"]
    )

    assert apt_manager.update(app_settings) is False
    with pytest.raises(subprocess.CalledProcessError):
        apt_manager.update(app_settings, raise_error=True)


def test_is_installed(apt_manager, mock_run_command, app_settings):
    mock_run_command.return_value = completed("installed")
    assert apt_manager.is_installed("curl", app_settings) is True

    mock_run_command.return_value = completed("not-installed")
    assert apt_manager.is_installed("curl", app_settings) is False

    mock_run_command.side_effect = subprocess.CalledProcessError(
        1, ["dpkg-query"]
    )
    assert apt_manager.is_installed("nosuchpkg", app_settings) is False


def test_is_installed_without_dpkg_query(
    apt_manager, mock_run_command, app_settings
):
    mock_run_command.side_effect = FileNotFoundError("dpkg-query")
    assert apt_manager.is_installed("curl", app_settings) is False


def test_install_skips_installed_packages(
    apt_manager, mocker, mock_run_elevated_command, app_settings
):
    mocker.patch.object(
        apt_manager,
        "is_installed",
        side_effect=lambda pkg, settings: pkg == "curl",
    )

    assert (
        apt_manager.install(
            ["curl", "gawk"], app_settings, update_first=False
        )
        is True
    )
    mock_run_elevated_command.assert_called_once()
    assert mock_run_elevated_command.call_args.args[0] == [
        "apt-get",
        "install",
        "-yq",
        "gawk",
    ]


def test_install_nothing_to_do(
    apt_manager, mocker, mock_run_elevated_command, app_settings
):
    mocker.patch.object(apt_manager, "is_installed", return_value=True)

    assert apt_manager.install("curl", app_settings, update_first=False)
    mock_run_elevated_command.assert_not_called()


def test_install_failure_returns_false(
    apt_manager, mocker, mock_run_elevated_command, app_settings
):
    mocker.patch.object(apt_manager, "is_installed", return_value=False)
    mock_run_elevated_command.side_effect = subprocess.CalledProcessError(
        100, ["apt-get"]
    )

    assert (
        apt_manager.install(["gawk"], app_settings, update_first=False)
        is False
    )


def test_install_local_package_uses_absolute_path(
    apt_manager, mock_run_elevated_command, app_settings, tmp_path
):
    deb = tmp_path / "InputLeap.deb"

    assert apt_manager.install_local_package(deb, app_settings) is True
    command = mock_run_elevated_command.call_args.args[0]
    assert command[:3] == ["apt-get", "install", "-yq"]
    assert Path(command[3]).is_absolute()
    assert command[3].endswith("InputLeap.deb")
