"""Tests for CLI module."""

from pathlib import Path
from unittest.mock import patch

import pytest

from vhdl_test import __version__
from vhdl_test.cli import execute


def write_config(tmp_path: Path, files: list[str], tests: list[str]) -> Path:
    lines = ["files:", *(f"  - {f}" for f in files), "tests:"]
    lines.extend(f"  - {t}" for t in tests)
    if not tests:
        lines[-1] = "tests: []"
    path = tmp_path / "test.yaml"
    path.write_text("\n".join(lines) + "\n")
    return path


def test_passing_tests_exit_zero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A run where every test passes succeeds."""
    config = write_config(tmp_path, ["a.vhd"], ["a_pass_tb", "b_pass_tb"])

    exit_code = execute(["--simulator", "mock", "--config", str(config)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.startswith(f"VHDL Test Bench Runner (VHDLTest) {__version__}\n")
    assert "Building with Mock..." in out
    assert "Build Passed" in out
    assert "Passed 2 of 2 tests" in out


def test_failing_test_exit_one(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A failing test fails the run."""
    config = write_config(tmp_path, ["a.vhd"], ["a_pass_tb", "b_fail_tb"])

    exit_code = execute(["-s", "mock", "-c", str(config)])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "Failure: b_fail_tb" in out
    assert "Passed 1 of 2 tests" in out
    assert "Failed 1 of 2 tests" in out


def test_exit_zero_override(tmp_path: Path) -> None:
    """The exit-0 option reports success despite failing tests."""
    config = write_config(tmp_path, ["a.vhd"], ["b_fail_tb"])

    assert execute(["-s", "mock", "-c", str(config), "--exit-0"]) == 0


def test_build_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """A build error fails the run without running tests."""
    config = write_config(tmp_path, ["a_error_.vhd"], ["a_pass_tb"])

    exit_code = execute(["-s", "mock", "-c", str(config), "-0"])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "Error: Build Failed" in out
    assert "Starting a_pass_tb" not in out


def test_no_tests_pass(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """A configuration without tests passes."""
    config = write_config(tmp_path, ["a.vhd"], [])

    assert execute(["-s", "mock", "-c", str(config)]) == 0
    assert "Build Passed" in capsys.readouterr().out


def test_custom_tests_replace_configured(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Tests named on the command line replace the configured ones."""
    config = write_config(tmp_path, ["a.vhd"], ["a_fail_tb"])

    exit_code = execute(["-s", "mock", "-c", str(config), "--", "z_tb", "y_tb"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "a_fail_tb" not in out
    assert out.index("Starting z_tb") < out.index("Starting y_tb")


def test_results_and_log_files(tmp_path: Path) -> None:
    """Results and a log of the console output are written."""
    config = write_config(tmp_path, ["a.vhd"], ["a_pass_tb"])
    results = tmp_path / "results.trx"
    log = tmp_path / "output.log"

    exit_code = execute(
        [
            "-s",
            "mock",
            "-c",
            str(config),
            "-r",
            str(results),
            "-l",
            str(log),
            "--silent",
        ]
    )

    assert exit_code == 0
    assert "TestRun" in results.read_text()
    assert "Passed a_pass_tb" in log.read_text()


def test_silent(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Silent runs print nothing."""
    config = write_config(tmp_path, ["a.vhd"], ["a_pass_tb"])

    assert execute(["-s", "mock", "-c", str(config), "--silent"]) == 0
    assert capsys.readouterr().out == ""


def test_no_arguments(capsys: pytest.CaptureFixture[str]) -> None:
    """Running without arguments prints usage and fails."""
    assert execute([]) == 1

    out = capsys.readouterr().out
    assert "Error: No arguments specified" in out
    assert "Usage: vhdltest" in out


def test_help(capsys: pytest.CaptureFixture[str]) -> None:
    """Help prints usage and succeeds."""
    assert execute(["--help"]) == 0
    assert "Usage: vhdltest" in capsys.readouterr().out


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    """Version prints only the version."""
    assert execute(["--version"]) == 0
    assert capsys.readouterr().out == f"{__version__}\n"


def test_unsupported_argument(capsys: pytest.CaptureFixture[str]) -> None:
    """Unsupported arguments print usage and fail."""
    assert execute(["--bogus"]) == 1

    out = capsys.readouterr().out
    assert out.startswith("Error: ")
    assert "Usage: vhdltest" in out


def test_missing_config(capsys: pytest.CaptureFixture[str]) -> None:
    """A configuration file is required to run tests."""
    assert execute(["-s", "mock"]) == 1
    assert "Error: Configuration file not specified" in capsys.readouterr().out


def test_unknown_simulator(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """An unknown simulator name fails the run."""
    config = write_config(tmp_path, ["a.vhd"], [])

    assert execute(["-s", "xcelium", "-c", str(config)]) == 1
    assert "Error: Simulator 'xcelium' not found" in capsys.readouterr().out


def test_unexpected_error(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Unexpected exceptions are reported with their traceback and fail the run."""
    config = write_config(tmp_path, ["a.vhd"], [])

    with patch("vhdl_test.cli.load_simulator", side_effect=RuntimeError("boom")):
        exit_code = execute(["-s", "mock", "-c", str(config)])

    assert exit_code == 1
    assert "Error: boom" in capsys.readouterr().out
    assert "Traceback" in caplog.text
