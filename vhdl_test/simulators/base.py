"""Abstract base class for simulator backends."""

import logging
import os
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Self

from vhdl_test.config import Options
from vhdl_test.errors import SimulatorUnavailableError
from vhdl_test.models.result import TestResult
from vhdl_test.models.run import RunResults
from vhdl_test.run.processor import RunProcessor

log = logging.getLogger(__name__)

# Build products are written below the working directory.
OUTPUT_DIRECTORY = "VHDLTest.out"


def find_path(environment_variable: str, application: str) -> Path | None:
    """Locate the directory holding a simulator executable.

    An explicit environment variable wins over searching PATH.
    """
    if (override := os.environ.get(environment_variable)) is not None:
        return Path(override)

    if (found := shutil.which(application)) is None:
        return None

    return Path(found).parent


@dataclass(frozen=True, kw_only=True)
class Simulator(ABC):
    """A simulator backend.

    Each backend supplies the command lines for compiling the configured
    sources and running one test bench, plus the rule tables used to classify
    the simulator's output.
    """

    ENVIRONMENT_VARIABLE: ClassVar[str]
    APPLICATION: ClassVar[str]

    name: str
    path: Path | None = None

    @classmethod
    def create(cls) -> Self:
        """Create the simulator, locating its executable."""
        return cls(path=find_path(cls.ENVIRONMENT_VARIABLE, cls.APPLICATION))

    def available(self) -> bool:
        """Whether the simulator executable was found."""
        return self.path is not None

    def require_path(self) -> Path:
        """Return the simulator directory or fail if it is unknown.

        Raises:
            SimulatorUnavailableError: If the simulator was not found

        """
        if self.path is None:
            raise SimulatorUnavailableError(f"{self.name} Simulator not available")
        log.debug("Simulator Path: %s", self.path)
        return self.path

    def library_directory(self, options: Options) -> Path:
        """Directory holding this simulator's libraries and scripts."""
        library = options.working_directory / OUTPUT_DIRECTORY / self.name
        log.debug("Library Directory: %s", library)
        return library

    @abstractmethod
    def compile(self, options: Options) -> RunResults:
        """Compile the configured source files.

        Args:
            options: Resolved run options

        Returns:
            Classified output of the compiler

        """

    @abstractmethod
    def test(self, options: Options, test: str) -> TestResult:
        """Run a single test bench.

        Args:
            options: Resolved run options
            test: Name of the test bench entity

        Returns:
            Result of the test

        """

    def write_script(self, path: Path, content: str) -> None:
        """Write a generated script file."""
        log.debug("Script File: %s", path)
        path.write_text(content)

    def execute(
        self,
        processor: RunProcessor,
        application: Path | str,
        working_directory: Path,
        *arguments: str,
    ) -> RunResults:
        """Run a simulator command and classify its output."""
        log.debug("Run Directory: %s", working_directory)
        log.debug("Run Command: %s %s", application, " ".join(arguments))
        return processor.execute(application, working_directory, *arguments)
