"""Run a process and classify its output into severity-tagged lines."""

import logging
import time
from collections.abc import Sequence
from datetime import datetime, timedelta
from pathlib import Path

from vhdl_test.models.run import RunLine, RunLineRule, RunResults, Severity
from vhdl_test.run.program import run_program

log = logging.getLogger(__name__)


class RunProcessor:
    """Classifies process output using an ordered table of rules.

    The first rule whose pattern matches a line decides its severity, so a
    narrow rule placed ahead of a broad one can downgrade known-benign lines.
    Lines matching no rule are plain text.
    """

    def __init__(self, rules: Sequence[RunLineRule]) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> Sequence[RunLineRule]:
        """The classification rules in evaluation order."""
        return self._rules

    def execute(
        self,
        application: str | Path,
        working_directory: str | Path | None = None,
        *arguments: str,
    ) -> RunResults:
        """Run a program and classify its output.

        Raises:
            ProcessStartError: If the program could not be launched

        """
        start = datetime.now()
        started = time.monotonic()

        output, exit_code = run_program(application, working_directory, *arguments)

        end = start + timedelta(seconds=time.monotonic() - started)
        results = self.parse(start, end, output, exit_code)
        log.debug(
            "%s exited with %d (summary=%s, %.1fs)",
            application,
            exit_code,
            results.summary.name,
            results.duration,
        )
        return results

    def parse(
        self,
        start: datetime,
        end: datetime,
        output: str,
        exit_code: int,
    ) -> RunResults:
        """Classify the output of a completed run."""
        lines = [
            RunLine(self.classify(text), text)
            for text in output.replace("\r\n", "\n").split("\n")
        ]

        summary = Severity.ERROR if exit_code != 0 else Severity.TEXT
        summary = max([summary, *(line.type for line in lines)])

        return RunResults(
            summary=summary,
            start=start,
            duration=(end - start).total_seconds(),
            exit_code=exit_code,
            output=output,
            lines=tuple(lines),
        )

    def classify(self, line: str) -> Severity:
        """Return the severity of the first matching rule, or TEXT."""
        for rule in self._rules:
            if rule.matches(line):
                return rule.type
        return Severity.TEXT
