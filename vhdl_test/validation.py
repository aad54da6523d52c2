"""Self-validation of the installed tool.

Runs the tool against a bundled set of passing and failing test benches and
checks that each is reported correctly.
"""

import logging
import platform
import subprocess
import sys
import tempfile
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from importlib import resources
from pathlib import Path

from vhdl_test import __version__
from vhdl_test.arguments import Arguments
from vhdl_test.models.result import TestResult, TestResults
from vhdl_test.models.run import RunLine, RunResults, Severity
from vhdl_test.output import Output
from vhdl_test.report import save_results

log = logging.getLogger(__name__)

VALIDATION_CLASS = "VHDLTest.Validation"


@dataclass(frozen=True, kw_only=True)
class ValidationCheck:
    """A validation run and the lines its output must contain."""

    name: str
    expected: Sequence[str]


CHECKS = (
    ValidationCheck(
        name="TestPasses",
        expected=("Passed full_adder_pass_tb", "Passed half_adder_pass_tb"),
    ),
    ValidationCheck(
        name="TestFails",
        expected=("Failed full_adder_fail_tb", "Failed half_adder_fail_tb"),
    ),
)


def header(depth: int) -> str:
    """Markdown header describing the validation environment."""
    rows = [
        ("VHDLTest Version", __version__),
        ("Machine Name", platform.node()),
        ("OS Version", platform.platform()),
        ("Python Runtime", platform.python_version()),
        ("Time Stamp", datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%SZ")),
    ]
    table = "\n".join(f"| {name:<19} | {value:<50} |" for name, value in rows)
    return (
        f"{'#' * depth} VHDLTest\n"
        "\n"
        "| Information         | Value                                              |\n"
        "| :------------------ | :------------------------------------------------- |\n"
        f"{table}\n"
        "\n"
        "Tests:\n"
    )


def extract_validation_files(target: Path) -> None:
    """Copy the bundled validation sources into a directory."""
    files = resources.files("vhdl_test").joinpath("validation_files")
    for entry in files.iterdir():
        if entry.is_file():
            (target / entry.name).write_bytes(entry.read_bytes())


def run_validation(simulator: str | None) -> tuple[str, int]:
    """Run the tool on the validation files in a scratch directory.

    Returns:
        The tool's logged output and its exit code

    """
    with tempfile.TemporaryDirectory(prefix="vhdltest-validation-") as scratch:
        work = Path(scratch)
        extract_validation_files(work)

        command = [
            sys.executable,
            "-m",
            "vhdl_test",
            "--log",
            "output.log",
            "--silent",
            "--config",
            "validate.yaml",
            "--exit-0",
        ]
        if simulator is not None:
            command.extend(["--simulator", simulator])

        log.debug("Running validation: %s", " ".join(command))
        completed = subprocess.run(command, cwd=work, capture_output=True, check=False)

        log_file = work / "output.log"
        output = log_file.read_text() if log_file.exists() else ""
        return output, completed.returncode


def validate(check: ValidationCheck, simulator: str | None) -> TestResult:
    """Perform one validation check and record its outcome."""
    start = datetime.now(UTC)
    output, exit_code = run_validation(simulator)
    duration = (datetime.now(UTC) - start).total_seconds()

    succeeded = exit_code == 0 and all(text in output for text in check.expected)
    if succeeded:
        line = RunLine(Severity.INFO, f"{check.name} Passed")
    else:
        line = RunLine(Severity.ERROR, f"{check.name} Failed")

    return TestResult(
        class_name=VALIDATION_CLASS,
        test_name=f"VHDLTest_{check.name}",
        run_results=RunResults(
            summary=line.type,
            start=start,
            duration=duration,
            exit_code=exit_code,
            output=output,
            lines=(line,),
        ),
    )


def run(arguments: Arguments, output: Output) -> int:
    """Run self-validation and report the outcome.

    Returns:
        0 when every check passed, otherwise 1

    """
    output.write_line(header(arguments.depth))

    results = TestResults(run_name="Validation", code_base="VHDLTest")
    for check in CHECKS:
        result = validate(check, arguments.simulator)
        results.add(result)
        if result.passed:
            output.write_line(f"- {check.name}: Passed")
        else:
            output.write_error(f"- {check.name}: Failed")

    if arguments.results_file is not None:
        save_results(results, arguments.results_file)

    if output.errors == 0:
        output.write_line()
        output.write_line("Validation Passed")

    return output.exit_code
