"""Test orchestrator coordinating the build and test runs on one simulator."""

import getpass
import logging
import platform
from dataclasses import dataclass
from datetime import datetime

from vhdl_test.config import Options
from vhdl_test.errors import BuildFailedError
from vhdl_test.models.result import TestResults
from vhdl_test.models.run import Severity
from vhdl_test.output import (
    Output,
    ReportLine,
    Style,
    format_run_results,
    format_test_result,
)
from vhdl_test.simulators.base import Simulator

log = logging.getLogger(__name__)


def default_run_name() -> str:
    """Run name identifying who ran the tests, where, and when."""
    try:
        user = getpass.getuser()
    except OSError:
        user = "unknown"
    return f"{user}@{platform.node()} {datetime.now():%Y-%m-%d %H:%M:%S}"


@dataclass(frozen=True, kw_only=True)
class TestOrchestrator:
    """Builds the sources and then runs each test in turn."""

    __test__ = False

    simulator: Simulator
    output: Output

    def run_tests(self, options: Options, run_name: str | None = None) -> TestResults:
        """Compile the sources and run every requested test.

        Tests run sequentially in the order given. A failing test does not
        stop the remaining tests.

        Args:
            options: Resolved run options
            run_name: Name recorded in the results (defaults to user, host
                and time)

        Returns:
            Build and test results

        Raises:
            BuildFailedError: If the compile step reported an error; no tests
                are run in that case

        """
        results = TestResults(
            run_name=run_name or default_run_name(),
            code_base=str(options.working_directory),
        )

        self.output.write_line(f"Building with {self.simulator.name}...")
        build_results = self.simulator.compile(options)
        results.set_build_results(build_results)
        self.output.write_lines(format_run_results(build_results, options.verbose))

        if build_results.summary >= Severity.ERROR:
            log.info("Build failed with exit code %d", build_results.exit_code)
            raise BuildFailedError("Build Failed")

        self.output.write_line(ReportLine.styled("Build Passed", Style.PASSED))
        self.output.write_line()

        log.info("Running %d test(s)...", len(options.tests))
        for test in options.tests:
            self.output.write_line(f"Starting {test}")

            test_result = self.simulator.test(options, test)
            self.output.write_lines(
                format_run_results(test_result.run_results, options.verbose)
            )
            results.add(test_result)

            self.output.write_line(format_test_result(test_result))
            self.output.write_line()

        return results
