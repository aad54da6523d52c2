"""Models describing the classified output of a single process run."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Self

import regex

log = logging.getLogger(__name__)

# Upper bound on the time a single rule may spend matching one line.
MATCH_TIMEOUT = 0.1


class Severity(IntEnum):
    """Severity of an output line, ordered from least to most severe."""

    TEXT = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class RunLineRule:
    """Assigns a severity to any line matching the pattern."""

    type: Severity
    pattern: regex.Pattern

    @classmethod
    def create(cls, type: Severity, pattern: str) -> Self:
        """Create a rule from a pattern string."""
        return cls(type, regex.compile(pattern))

    def matches(self, line: str) -> bool:
        """Check whether the pattern occurs anywhere in the line.

        A match that exceeds MATCH_TIMEOUT is treated as no match.
        """
        try:
            return self.pattern.search(line, timeout=MATCH_TIMEOUT) is not None
        except TimeoutError:
            log.warning(
                "Pattern %r timed out on line %r", self.pattern.pattern, line[:80]
            )
            return False


@dataclass(frozen=True)
class RunLine:
    """Line of output text with its classified severity."""

    type: Severity
    text: str


@dataclass(frozen=True, kw_only=True)
class RunResults:
    """Classified outcome of one process invocation."""

    summary: Severity
    start: datetime
    duration: float
    exit_code: int
    output: str
    lines: Sequence[RunLine]

    @property
    def error_lines(self) -> Sequence[str]:
        """Text of every error line, in output order."""
        return [line.text for line in self.lines if line.type == Severity.ERROR]

    @property
    def error_message(self) -> str:
        """Newline-joined text of the error lines."""
        return "\n".join(self.error_lines)
