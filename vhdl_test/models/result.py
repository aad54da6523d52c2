"""Models for test execution results."""

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field

from vhdl_test.models.run import RunResults, Severity


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Result of running a single test bench."""

    __test__ = False

    class_name: str
    test_name: str
    run_results: RunResults
    test_id: uuid.UUID = field(default_factory=uuid.uuid4)
    execution_id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def passed(self) -> bool:
        """Whether the run completed without errors."""
        return self.run_results.summary < Severity.ERROR

    @property
    def failed(self) -> bool:
        """Whether the run reported an error."""
        return self.run_results.summary >= Severity.ERROR


@dataclass(kw_only=True)
class TestResults:
    """Build results and test results collected over one invocation.

    The build results are set once after compiling, and test results are
    appended in execution order. Nothing else mutates the collection.
    """

    __test__ = False

    run_name: str
    code_base: str
    run_id: uuid.UUID = field(default_factory=uuid.uuid4)
    build_results: RunResults | None = None
    tests: list[TestResult] = field(default_factory=list)

    @property
    def passes(self) -> Sequence[TestResult]:
        """Tests that passed."""
        return [test for test in self.tests if test.passed]

    @property
    def fails(self) -> Sequence[TestResult]:
        """Tests that failed."""
        return [test for test in self.tests if test.failed]

    @property
    def total(self) -> int:
        """Number of tests run."""
        return len(self.tests)

    @property
    def executed(self) -> int:
        """Number of tests executed; every recorded test was executed."""
        return len(self.tests)

    @property
    def passed(self) -> int:
        """Number of passing tests."""
        return len(self.passes)

    @property
    def failed(self) -> int:
        """Number of failing tests."""
        return len(self.fails)

    def set_build_results(self, build_results: RunResults) -> None:
        """Record the outcome of the compile step."""
        if self.build_results is not None:
            raise RuntimeError("Build results already recorded")
        self.build_results = build_results

    def add(self, test_result: TestResult) -> None:
        """Append a test result in execution order."""
        self.tests.append(test_result)
