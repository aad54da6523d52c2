"""Console report formatting and the output sink that writes it.

Formatting functions are pure: they turn results into ReportLine values.
Only Output touches the console or the log file.
"""

import os
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from types import TracebackType
from typing import IO, Self

from vhdl_test.models.result import TestResult, TestResults
from vhdl_test.models.run import RunResults, Severity


class Style(StrEnum):
    """Presentation style of a span of text."""

    PLAIN = "plain"
    PASSED = "passed"
    FAILED = "failed"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


SEVERITY_STYLES = {
    Severity.TEXT: Style.PLAIN,
    Severity.INFO: Style.INFO,
    Severity.WARNING: Style.WARNING,
    Severity.ERROR: Style.ERROR,
}

ANSI_CODES = {
    Style.PLAIN: "",
    Style.PASSED: "\033[32m",
    Style.FAILED: "\033[31m",
    Style.INFO: "\033[97m",
    Style.WARNING: "\033[33m",
    Style.ERROR: "\033[31m",
}
ANSI_RESET = "\033[0m"


@dataclass(frozen=True)
class Span:
    """Run of text sharing one style."""

    text: str
    style: Style = Style.PLAIN


@dataclass(frozen=True)
class ReportLine:
    """One line of report output made of styled spans."""

    spans: tuple[Span, ...] = ()

    @classmethod
    def plain(cls, text: str = "") -> Self:
        """Create an unstyled line."""
        return cls((Span(text),))

    @classmethod
    def styled(cls, text: str, style: Style) -> Self:
        """Create a line in a single style."""
        return cls((Span(text, style),))

    @property
    def text(self) -> str:
        """The line text without styling."""
        return "".join(span.text for span in self.spans)


def format_run_results(results: RunResults, verbose: bool) -> Sequence[ReportLine]:
    """Format run output, hiding plain text lines unless verbose."""
    return [
        ReportLine.styled(line.text, SEVERITY_STYLES[line.type])
        for line in results.lines
        if verbose or line.type != Severity.TEXT
    ]


def format_test_result(result: TestResult) -> ReportLine:
    """Format the pass/fail line for a single test."""
    if result.passed:
        outcome = Span("Passed", Style.PASSED)
    else:
        outcome = Span("Failed", Style.FAILED)
    return ReportLine(
        (
            outcome,
            Span(f" {result.test_name} ({result.run_results.duration:.1f} seconds)"),
        )
    )


def format_summary(results: TestResults) -> Sequence[ReportLine]:
    """Format the summary table and totals for a whole run."""
    lines = [ReportLine.plain("==== summary ===========================")]
    lines.extend(format_test_result(test) for test in results.tests)
    lines.append(ReportLine.plain("========================================"))

    if results.passed > 0:
        lines.append(
            ReportLine(
                (
                    Span("Passed", Style.PASSED),
                    Span(f" {results.passed} of {results.total} tests"),
                )
            )
        )
    if results.failed > 0:
        lines.append(
            ReportLine(
                (
                    Span("Failed", Style.FAILED),
                    Span(f" {results.failed} of {results.total} tests"),
                )
            )
        )
    return lines


def color_enabled(stream: IO[str]) -> bool:
    """Colour only interactive terminals, and never when NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return False
    return stream.isatty()


class Output:
    """Writes report lines to the console and an optional log file."""

    def __init__(
        self,
        silent: bool = False,
        log_file: Path | None = None,
        stream: IO[str] | None = None,
        color: bool | None = None,
    ) -> None:
        self.silent = silent
        self.errors = 0
        self._stream = stream if stream is not None else sys.stdout
        self._color = color_enabled(self._stream) if color is None else color
        self._log: IO[str] | None = (
            log_file.open("w", encoding="utf-8") if log_file is not None else None
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def exit_code(self) -> int:
        """1 once any error has been written, otherwise 0."""
        return 1 if self.errors > 0 else 0

    def close(self) -> None:
        """Close the log file if one is open."""
        if self._log is not None:
            self._log.close()
            self._log = None

    def write_line(self, line: ReportLine | str = "") -> None:
        """Write a single line."""
        if isinstance(line, str):
            line = ReportLine.plain(line)

        if not self.silent:
            self._stream.write(self._render(line) + "\n")
            self._stream.flush()

        if self._log is not None:
            self._log.write(line.text + "\n")

    def write_lines(self, lines: Iterable[ReportLine | str]) -> None:
        """Write several lines in order."""
        for line in lines:
            self.write_line(line)

    def write_error(self, message: str) -> None:
        """Write an error message and count it towards the exit code."""
        self.write_line(ReportLine.styled(message, Style.ERROR))
        self.errors += 1

    def _render(self, line: ReportLine) -> str:
        if not self._color:
            return line.text
        return "".join(
            f"{ANSI_CODES[span.style]}{span.text}{ANSI_RESET}"
            if ANSI_CODES[span.style]
            else span.text
            for span in line.spans
        )
