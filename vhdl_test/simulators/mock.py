"""Mock simulator that fabricates output from file and test names.

Names containing ``_error_``, ``_fail_``, ``_warning_`` or ``_info_``
produce the corresponding messages, which makes every classification path
reachable without a real simulator installed.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Self

from vhdl_test.config import Options
from vhdl_test.models.result import TestResult
from vhdl_test.models.run import RunLineRule, RunResults, Severity
from vhdl_test.run.processor import RunProcessor
from vhdl_test.simulators.base import Simulator

log = logging.getLogger(__name__)

COMPILE_PROCESSOR = RunProcessor(
    [
        RunLineRule.create(Severity.INFO, r"Info:"),
        RunLineRule.create(Severity.WARNING, r"Warning:"),
        RunLineRule.create(Severity.ERROR, r"Error:"),
    ]
)

TEST_PROCESSOR = RunProcessor(
    [
        RunLineRule.create(Severity.INFO, r"Info:"),
        RunLineRule.create(Severity.WARNING, r"Warning:"),
        RunLineRule.create(Severity.ERROR, r"Failure:"),
        RunLineRule.create(Severity.ERROR, r"Error:"),
    ]
)


def compile_output(files: Sequence[str]) -> tuple[str, int]:
    """Compiler output and exit code for the given source files."""
    lines: list[str] = []
    exit_code = 0
    for file in files:
        if "_error_" in file:
            lines.append(f"Error: {file}")
            exit_code = 1
        elif "_warning_" in file:
            lines.append(f"Warning: {file}")
        elif "_info_" in file:
            lines.append(f"Info: {file}")
        else:
            lines.append(f"Compiled {file}")
    return "".join(f"{line}\n" for line in lines), exit_code


def simulation_output(test: str) -> tuple[str, int]:
    """Simulation output and exit code for the given test bench."""
    lines: list[str] = []
    exit_code = 0
    if "_warning_" in test:
        lines.append(f"Warning: {test}")
    if "_info_" in test:
        lines.append(f"Info: {test}")

    if "_error_" in test:
        lines.append(f"Error: {test}")
        exit_code = 1
    elif "_fail_" in test:
        lines.append(f"Failure: {test}")
    else:
        lines.append(f"Passed: {test}")
    return "".join(f"{line}\n" for line in lines), exit_code


@dataclass(frozen=True, kw_only=True)
class MockSimulator(Simulator):
    """Simulator stand-in used for testing; always available."""

    name: str = "Mock"

    @classmethod
    def create(cls) -> Self:
        """Create the mock simulator; there is no executable to locate."""
        return cls()

    def available(self) -> bool:
        """The mock simulator is always available."""
        return True

    def compile(self, options: Options) -> RunResults:
        """Pretend to compile the configured files."""
        log.debug("Starting Mock compile...")
        output, exit_code = compile_output(options.config.files)
        now = datetime.now()
        return COMPILE_PROCESSOR.parse(now, now, output, exit_code)

    def test(self, options: Options, test: str) -> TestResult:
        """Pretend to run a test bench."""
        log.debug("Starting Mock test %s...", test)
        output, exit_code = simulation_output(test)
        now = datetime.now()
        return TestResult(
            class_name=test,
            test_name=test,
            run_results=TEST_PROCESSOR.parse(now, now, output, exit_code),
        )
