"""Tests for self-validation."""

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from vhdl_test.arguments import Arguments
from vhdl_test.models.run import Severity
from vhdl_test.output import Output
from vhdl_test.validation import CHECKS, extract_validation_files, header, run, validate

PASSING_OUTPUT = (
    "Passed full_adder_pass_tb (0.1 seconds)\n"
    "Passed half_adder_pass_tb (0.1 seconds)\n"
    "Failed full_adder_fail_tb (0.1 seconds)\n"
    "Failed half_adder_fail_tb (0.1 seconds)\n"
)


@pytest.fixture
def stream() -> io.StringIO:
    """Console stream capturing the report."""
    return io.StringIO()


@pytest.fixture
def output(stream: io.StringIO) -> Output:
    """Output writing to the captured stream."""
    return Output(stream=stream, color=False)


def test_header() -> None:
    """The header is a markdown table at the requested depth."""
    text = header(2)

    assert text.startswith("## VHDLTest\n")
    assert "| VHDLTest Version    |" in text
    assert text.endswith("Tests:\n")


def test_extract_validation_files(tmp_path: Path) -> None:
    """The bundled sources and configuration are extracted."""
    extract_validation_files(tmp_path)

    assert (tmp_path / "validate.yaml").exists()
    assert (tmp_path / "half_adder.vhd").exists()
    assert (tmp_path / "full_adder_fail_tb.vhd").exists()


def test_validate_check_passes() -> None:
    """A check passes when every expected line was reported."""
    with patch(
        "vhdl_test.validation.run_validation", return_value=(PASSING_OUTPUT, 0)
    ) as run_validation:
        result = validate(CHECKS[0], "mock")

    run_validation.assert_called_once_with("mock")
    assert result.test_name == "VHDLTest_TestPasses"
    assert result.class_name == "VHDLTest.Validation"
    assert result.passed


@pytest.mark.parametrize(
    ("output", "exit_code"),
    [
        ("Passed full_adder_pass_tb (0.1 seconds)\n", 0),
        (PASSING_OUTPUT, 1),
    ],
)
def test_validate_check_fails(output: str, exit_code: int) -> None:
    """Missing lines or a failing tool run fail the check."""
    with patch(
        "vhdl_test.validation.run_validation", return_value=(output, exit_code)
    ):
        result = validate(CHECKS[0], None)

    assert result.failed
    assert result.run_results.summary == Severity.ERROR


def test_run_passes(output: Output, stream: io.StringIO, tmp_path: Path) -> None:
    """All checks passing reports validation success and saves results."""
    results_file = tmp_path / "validation.trx"
    arguments = Arguments(validate=True, simulator="mock", results_file=results_file)

    with patch("vhdl_test.validation.run_validation", return_value=(PASSING_OUTPUT, 0)):
        exit_code = run(arguments, output)

    text = stream.getvalue()
    assert exit_code == 0
    assert "- TestPasses: Passed" in text
    assert "- TestFails: Passed" in text
    assert text.rstrip().endswith("Validation Passed")
    assert 'passed="2"' in results_file.read_text()


def test_run_fails(output: Output, stream: io.StringIO) -> None:
    """Any failing check fails validation."""
    arguments = Arguments(validate=True)

    with patch("vhdl_test.validation.run_validation", return_value=("", 0)):
        exit_code = run(arguments, output)

    text = stream.getvalue()
    assert exit_code == 1
    assert "- TestPasses: Failed" in text
    assert "Validation Passed" not in text
