"""Active-HDL simulator backend."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from vhdl_test.config import Options
from vhdl_test.models.result import TestResult
from vhdl_test.models.run import RunLineRule, RunResults, Severity
from vhdl_test.run.processor import RunProcessor
from vhdl_test.simulators.base import Simulator

log = logging.getLogger(__name__)

COMPILE_PROCESSOR = RunProcessor(
    [
        RunLineRule.create(Severity.WARNING, r"KERNEL:\s*Warning:"),
        RunLineRule.create(Severity.ERROR, r"Error:"),
        RunLineRule.create(Severity.ERROR, r"RUNTIME:\s*Fatal Error"),
    ]
)

# The Lattice edition licence banners are reported as kernel warnings on
# every run; they must stay ahead of the general kernel warning rule.
TEST_PROCESSOR = RunProcessor(
    [
        RunLineRule.create(
            Severity.TEXT,
            r"KERNEL:\s*Warning:\s*You are using the Active-HDL Lattice Edition",
        ),
        RunLineRule.create(
            Severity.TEXT,
            r"KERNEL:\s*Warning:\s*Contact Aldec for available upgrade options",
        ),
        RunLineRule.create(Severity.WARNING, r"KERNEL:\s*Warning:"),
        RunLineRule.create(Severity.WARNING, r"KERNEL:\s*WARNING:"),
        RunLineRule.create(Severity.INFO, r"EXECUTION::\s*NOTE"),
        RunLineRule.create(Severity.WARNING, r"EXECUTION::\s*WARNING"),
        RunLineRule.create(Severity.ERROR, r"EXECUTION::\s*ERROR"),
        RunLineRule.create(Severity.ERROR, r"EXECUTION::\s*FAILURE"),
        RunLineRule.create(Severity.ERROR, r"KERNEL:\s*ERROR"),
        RunLineRule.create(Severity.ERROR, r"RUNTIME:\s*Fatal Error:"),
        RunLineRule.create(Severity.ERROR, r"VSIM:\s*Error:"),
    ]
)


def compile_script(files: Sequence[str]) -> str:
    """Do-file compiling the sources into the work library."""
    lines = [
        "onerror {exit -code 1}",
        "alib work VHDLTest.out/ActiveHDL",
        "set worklib work",
    ]
    lines.extend(f"acom -2008 -dbg {file}" for file in files)
    return "".join(f"{line}\n" for line in lines)


def run_script(test: str) -> str:
    """Do-file simulating one test bench to completion."""
    lines = [
        "onerror {exit -code 1}",
        "set worklib work",
        f"asim {test}",
        "run -all",
        "endsim",
        "exit -code 0",
    ]
    return "".join(f"{line}\n" for line in lines)


@dataclass(frozen=True, kw_only=True)
class ActiveHdlSimulator(Simulator):
    """Aldec Active-HDL simulator driven through vsimsa."""

    ENVIRONMENT_VARIABLE = "VHDLTEST_ACTIVEHDL_PATH"
    APPLICATION = "vsimsa"

    name: str = "ActiveHDL"

    def compile(self, options: Options) -> RunResults:
        """Compile all sources into the work library."""
        log.debug("Starting ActiveHDL compile...")
        sim_path = self.require_path()

        library = self.library_directory(options)
        library.mkdir(parents=True, exist_ok=True)
        self.write_script(library / "compile.do", compile_script(options.config.files))

        return self.execute(
            COMPILE_PROCESSOR,
            sim_path / self.APPLICATION,
            options.working_directory,
            "-do",
            "VHDLTest.out/ActiveHDL/compile.do",
        )

    def test(self, options: Options, test: str) -> TestResult:
        """Simulate a test bench."""
        log.debug("Starting ActiveHDL test %s...", test)
        sim_path = self.require_path()

        library = self.library_directory(options)
        self.write_script(library / "test.do", run_script(test))

        results = self.execute(
            TEST_PROCESSOR,
            sim_path / self.APPLICATION,
            options.working_directory,
            "-do",
            "VHDLTest.out/ActiveHDL/test.do",
        )
        return TestResult(class_name=test, test_name=test, run_results=results)
