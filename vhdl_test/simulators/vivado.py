"""Xilinx Vivado simulator backend."""

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from vhdl_test.config import Options
from vhdl_test.models.result import TestResult
from vhdl_test.models.run import RunLineRule, RunResults, Severity
from vhdl_test.run.processor import RunProcessor
from vhdl_test.simulators.base import Simulator

log = logging.getLogger(__name__)

COMPILE_PROCESSOR = RunProcessor(
    [
        RunLineRule.create(Severity.ERROR, r"Error: "),
    ]
)

TEST_PROCESSOR = RunProcessor(
    [
        RunLineRule.create(Severity.INFO, r"Note: "),
        RunLineRule.create(Severity.WARNING, r"Warning: "),
        RunLineRule.create(Severity.ERROR, r"Error: "),
        RunLineRule.create(Severity.ERROR, r"Failure: "),
    ]
)


def compile_options(files: Sequence[str]) -> str:
    """Option file for xvhdl; paths are relative to the library directory."""
    lines = ["-2008", "-nolog", "-work work"]
    lines.extend(f"../../{file}" for file in files)
    return "".join(f"{line}\n" for line in lines)


def run_options(test: str) -> str:
    """Option file for xelab elaborating and running one test bench."""
    lines = ["-nolog", "-standalone", "-runall", test]
    return "".join(f"{line}\n" for line in lines)


def tool_command(tool: Path) -> tuple[str, ...]:
    """Command prefix for a Vivado tool; on Windows the tools are batch files."""
    if sys.platform == "win32":
        return ("cmd", "/c", str(tool))
    return (str(tool),)


@dataclass(frozen=True, kw_only=True)
class VivadoSimulator(Simulator):
    """Vivado simulator using xvhdl and xelab."""

    ENVIRONMENT_VARIABLE = "VHDLTEST_VIVADO_PATH"
    APPLICATION = "vivado"

    name: str = "Vivado"

    def compile(self, options: Options) -> RunResults:
        """Compile all sources with xvhdl."""
        log.debug("Starting Vivado compile...")
        sim_path = self.require_path()

        library = self.library_directory(options)
        library.mkdir(parents=True, exist_ok=True)
        self.write_script(library / "compile.do", compile_options(options.config.files))

        application, *prefix = tool_command(sim_path / "xvhdl")
        return self.execute(
            COMPILE_PROCESSOR,
            application,
            library,
            *prefix,
            "-file",
            "compile.do",
        )

    def test(self, options: Options, test: str) -> TestResult:
        """Elaborate and run a test bench with xelab."""
        log.debug("Starting Vivado test %s...", test)
        sim_path = self.require_path()

        library = self.library_directory(options)
        self.write_script(library / "test.do", run_options(test))

        application, *prefix = tool_command(sim_path / "xelab")
        results = self.execute(
            TEST_PROCESSOR,
            application,
            library,
            *prefix,
            "-file",
            "test.do",
        )
        return TestResult(class_name=test, test_name=test, run_results=results)
