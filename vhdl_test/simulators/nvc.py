"""NVC simulator backend."""

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
        RunLineRule.create(Severity.INFO, r".* Note:"),
        RunLineRule.create(Severity.WARNING, r".* Warning:"),
        RunLineRule.create(Severity.ERROR, r".* Error:"),
        RunLineRule.create(Severity.ERROR, r".* Failure:"),
        RunLineRule.create(Severity.ERROR, r".* Fatal:"),
    ]
)

TEST_PROCESSOR = RunProcessor(
    [
        RunLineRule.create(Severity.INFO, r".* Note:"),
        RunLineRule.create(Severity.WARNING, r".* Warning:"),
        RunLineRule.create(Severity.ERROR, r".* Error:"),
        RunLineRule.create(Severity.ERROR, r".* Failure:"),
        RunLineRule.create(Severity.ERROR, r".* Fatal:"),
    ]
)

WORK_LIBRARY = "--work=work:VHDLTest.out/NVC/lib"


def compile_response_file(files: Sequence[str]) -> str:
    """Response file listing the sources to analyze."""
    return "".join(f"{file}\n" for file in files)


@dataclass(frozen=True, kw_only=True)
class NvcSimulator(Simulator):
    """NVC simulator."""

    ENVIRONMENT_VARIABLE = "VHDLTEST_NVC_PATH"
    APPLICATION = "nvc"

    name: str = "NVC"

    def compile(self, options: Options) -> RunResults:
        """Analyze all sources into the NVC work library."""
        log.debug("Starting NVC compile...")
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
            "--std=08",
            WORK_LIBRARY,
            "-a",
            "@VHDLTest.out/NVC/compile.rsp",
        )

    def test(self, options: Options, test: str) -> TestResult:
        """Elaborate and run a test bench."""
        log.debug("Starting NVC test %s...", test)
        sim_path = self.require_path()

        results = self.execute(
            TEST_PROCESSOR,
            sim_path / self.APPLICATION,
            options.working_directory,
            "--std=2008",
            WORK_LIBRARY,
            "-e",
            test,
            "-r",
            test,
        )
        return TestResult(class_name=test, test_name=test, run_results=results)
