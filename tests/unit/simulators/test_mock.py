"""Tests for the mock simulator."""

from pathlib import Path

import pytest

from vhdl_test.config import ConfigDocument, Options
from vhdl_test.models.run import Severity
from vhdl_test.simulators.mock import MockSimulator, compile_output, simulation_output


def make_options(tmp_path: Path, files: list[str]) -> Options:
    return Options(
        working_directory=tmp_path, config=ConfigDocument(files=files), tests=[]
    )


def test_always_available() -> None:
    """The mock simulator needs no executable."""
    simulator = MockSimulator.create()

    assert simulator.name == "Mock"
    assert simulator.available()


def test_compile_output() -> None:
    """Compile output reflects markers in the file names."""
    output, exit_code = compile_output(["a.vhd", "b_warning_.vhd", "c_error_.vhd"])

    assert output == "Compiled a.vhd\nWarning: b_warning_.vhd\nError: c_error_.vhd\n"
    assert exit_code == 1


@pytest.mark.parametrize(
    ("files", "expected"),
    [
        (["a.vhd"], Severity.TEXT),
        (["a_info_.vhd"], Severity.INFO),
        (["a_warning_.vhd", "b.vhd"], Severity.WARNING),
        (["a_error_.vhd"], Severity.ERROR),
    ],
)
def test_compile(tmp_path: Path, files: list[str], expected: Severity) -> None:
    """The build summary follows the worst marker."""
    results = MockSimulator().compile(make_options(tmp_path, files))

    assert results.summary == expected


def test_simulation_output() -> None:
    """Simulation output reflects markers in the test name."""
    assert simulation_output("a_tb") == ("Passed: a_tb\n", 0)
    assert simulation_output("a_fail_tb") == ("Failure: a_fail_tb\n", 0)
    assert simulation_output("a_error_tb") == ("Error: a_error_tb\n", 1)
    assert simulation_output("a_warning_info_tb") == (
        "Warning: a_warning_info_tb\n"
        "Info: a_warning_info_tb\n"
        "Passed: a_warning_info_tb\n",
        0,
    )


@pytest.mark.parametrize(
    ("test", "passed"),
    [
        ("adder_pass_tb", True),
        ("adder_warning_tb", True),
        ("adder_fail_tb", False),
        ("adder_error_tb", False),
    ],
)
def test_test(tmp_path: Path, test: str, passed: bool) -> None:
    """Failures and errors fail the test."""
    result = MockSimulator().test(make_options(tmp_path, []), test)

    assert result.test_name == test
    assert result.passed is passed
