import subprocess

import pytest

from installer.base_component import OutcomeStatus
from installer.components.flatpak.flatpak_inputleap_remover import (
    FlatpakInputLeapRemover,
)

MODULE = "installer.components.flatpak.flatpak_inputleap_remover"


def completed(stdout=""):
    return subprocess.CompletedProcess(
        args=[], returncode=0, stdout=stdout, stderr=""
    )


@pytest.fixture
def remover(app_settings, mock_prober, mock_logger):
    return FlatpakInputLeapRemover(app_settings, mock_prober, mock_logger)


def test_no_flatpak_binary_is_not_present(mocker, remover):
    mocker.patch(f"{MODULE}.command_exists", return_value=False)
    mock_run = mocker.patch(f"{MODULE}.run_command")

    outcome = remover.apply()

    assert outcome.status is OutcomeStatus.NOT_PRESENT
    assert not outcome.failed
    mock_run.assert_not_called()


def test_app_not_installed_is_not_present(mocker, remover):
    mocker.patch(f"{MODULE}.command_exists", return_value=True)
    mock_run = mocker.patch(
        f"{MODULE}.run_command",
        return_value=completed("org.mozilla.firefox\n"),
    )

    outcome = remover.apply()

    assert outcome.status is OutcomeStatus.NOT_PRESENT
    mock_run.assert_called_once()


def test_installed_app_is_removed(mocker, remover):
    mocker.patch(f"{MODULE}.command_exists", return_value=True)
    mock_run = mocker.patch(
        f"{MODULE}.run_command",
        side_effect=[
            completed("IO.GitHub.Input_Leap.Input-Leap\n"),
            completed(),
        ],
    )

    outcome = remover.apply()

    assert outcome.status is OutcomeStatus.REMOVED
    assert mock_run.call_args.args[0] == [
        "flatpak",
        "uninstall",
        "-y",
        "io.github.input_leap.input-leap",
    ]


def test_uninstall_failure_is_a_warning(mocker, remover):
    mocker.patch(f"{MODULE}.command_exists", return_value=True)
    mocker.patch(
        f"{MODULE}.run_command",
        side_effect=[
            completed("io.github.input_leap.input-leap\n"),
            subprocess.CalledProcessError(1, ["flatpak", "uninstall"]),
        ],
    )

    outcome = remover.apply()

    assert outcome.status is OutcomeStatus.WARNING
    assert not outcome.failed


def test_second_apply_is_a_no_op(mocker, remover):
    mocker.patch(f"{MODULE}.command_exists", return_value=True)
    installed = {"io.github.input_leap.input-leap"}
    uninstalls = []

    def fake_run_command(cmd, *args, **kwargs):
        if cmd[1] == "uninstall":
            uninstalls.append(cmd)
            installed.discard(cmd[-1])
            return completed()
        return completed("".join(f"{app}\n" for app in installed))

    mocker.patch(f"{MODULE}.run_command", side_effect=fake_run_command)

    first = remover.apply()
    second = remover.apply()

    assert first.status is OutcomeStatus.REMOVED
    assert second.status is OutcomeStatus.NOT_PRESENT
    assert len(uninstalls) == 1
