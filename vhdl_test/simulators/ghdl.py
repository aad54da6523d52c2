"""GHDL simulator backend."""

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
        RunLineRule.create(Severity.WARNING, r".*:\d+:\d+:warning:"),
        RunLineRule.create(Severity.ERROR, r".*:\d+:\d+: "),
        RunLineRule.create(Severity.ERROR, r".*:error:"),
        RunLineRule.create(Severity.ERROR, r".*: cannot open"),
    ]
)

TEST_PROCESSOR = RunProcessor(
    [
        RunLineRule.create(Severity.INFO, r".*:\(assertion note\):"),
        RunLineRule.create(Severity.INFO, r".*:\(report note\):"),
        RunLineRule.create(Severity.WARNING, r".*:\(assertion warning\):"),
        RunLineRule.create(Severity.WARNING, r".*:\(report warning\):"),
        RunLineRule.create(Severity.ERROR, r".*:\(assertion error\):"),
        RunLineRule.create(Severity.ERROR, r".*:\(report error\):"),
        RunLineRule.create(Severity.ERROR, r".*:\(assertion failure\):"),
        RunLineRule.create(Severity.ERROR, r".*:\(report failure\):"),
        RunLineRule.create(Severity.ERROR, r".*:error:"),
    ]
)


def compile_response_file(files: Sequence[str]) -> str:
    """Response file listing the sources to analyze."""
    return "".join(f"{file}\n" for file in files)


@dataclass(frozen=True, kw_only=True)
class GhdlSimulator(Simulator):
    """GHDL simulator."""

    ENVIRONMENT_VARIABLE = "VHDLTEST_GHDL_PATH"
    APPLICATION = "ghdl"

    name: str = "GHDL"

    def compile(self, options: Options) -> RunResults:
        """Analyze all sources into the GHDL work library."""
        log.debug("Starting GHDL compile...")
        sim_path = self.require_path()

        library = self.library_directory(options)
        library.mkdir(parents=True, exist_ok=True)
        self.write_script(
            library / "compile.rsp", compile_response_file(options.config.files)
        )

        return self.execute(
            COMPILE_PROCESSOR,
            sim_path / self.APPLICATION,
            options.working_directory,
            "-a",
            "--std=08",
            "--workdir=VHDLTest.out/GHDL",
            "@VHDLTest.out/GHDL/compile.rsp",
        )

    def test(self, options: Options, test: str) -> TestResult:
        """Elaborate and run a test bench."""
        log.debug("Starting GHDL test %s...", test)
        sim_path = self.require_path()

        results = self.execute(
            TEST_PROCESSOR,
            sim_path / self.APPLICATION,
            options.working_directory,
            "-r",
            "--std=08",
            "--workdir=VHDLTest.out/GHDL",
            test,
        )
        return TestResult(class_name=test, test_name=test, run_results=results)
