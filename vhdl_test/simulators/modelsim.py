"""ModelSim and QuestaSim simulator backends."""

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
        RunLineRule.create(Severity.ERROR, r".*Error: "),
    ]
)

TEST_PROCESSOR = RunProcessor(
    [
        RunLineRule.create(Severity.INFO, r".*Note: "),
        RunLineRule.create(Severity.WARNING, r".*Warning: "),
        RunLineRule.create(Severity.ERROR, r".*Error: "),
        RunLineRule.create(Severity.ERROR, r".*Failure: "),
    ]
)


def compile_script(files: Sequence[str]) -> str:
    """Do-file compiling the sources into the work library.

    The script runs inside the library directory, two levels below the
    working directory.
    """
    lines = ["onerror {exit -code 1}", "vlib work", "set worklib work"]
    lines.extend(f"vcom -2008 ../../{file}" for file in files)
    lines.append("exit -code 0")
    return "".join(f"{line}\n" for line in lines)


def run_script(test: str) -> str:
    """Do-file simulating one test bench to completion."""
    lines = [
        "onerror {exit -code 1}",
        "set worklib work",
        f"vsim -quiet {test}",
        "run -all",
        "endsim",
        "exit -code 0",
    ]
    return "".join(f"{line}\n" for line in lines)


@dataclass(frozen=True, kw_only=True)
class ModelSimSimulator(Simulator):
    """ModelSim simulator driven through vsim batch mode."""

    ENVIRONMENT_VARIABLE = "VHDLTEST_MODELSIM_PATH"
    APPLICATION = "vsim"

    name: str = "ModelSim"

    def compile(self, options: Options) -> RunResults:
        """Compile all sources into the work library."""
        log.debug("Starting %s compile...", self.name)
        sim_path = self.require_path()

        library = self.library_directory(options)
        library.mkdir(parents=True, exist_ok=True)
        self.write_script(library / "compile.do", compile_script(options.config.files))

        return self.execute(
            COMPILE_PROCESSOR,
            sim_path / self.APPLICATION,
            library,
            "-c",
            "-do",
            "compile.do",
        )

    def test(self, options: Options, test: str) -> TestResult:
        """Simulate a test bench."""
        log.debug("Starting %s test %s...", self.name, test)
        sim_path = self.require_path()

        library = self.library_directory(options)
        self.write_script(library / "test.do", run_script(test))

        results = self.execute(
            TEST_PROCESSOR,
            sim_path / self.APPLICATION,
            library,
            "-c",
            "-do",
            "test.do",
        )
        return TestResult(class_name=test, test_name=test, run_results=results)


@dataclass(frozen=True, kw_only=True)
class QuestaSimSimulator(ModelSimSimulator):
    """QuestaSim simulator; shares ModelSim's commands and output format."""

    ENVIRONMENT_VARIABLE = "VHDLTEST_QUESTASIM_PATH"

    name: str = "QuestaSim"
