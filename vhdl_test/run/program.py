"""Launch external programs and collect their output."""

import logging
import subprocess
from pathlib import Path

from vhdl_test.errors import ProcessStartError

log = logging.getLogger(__name__)


def run_program(
    application: str | Path,
    working_directory: str | Path | None = None,
    *arguments: str,
) -> tuple[str, int]:
    """Run a program to completion.

    Standard error is merged into standard output. The call blocks until the
    process exits; no timeout is applied.

    Args:
        application: Path or name of the program to run
        working_directory: Directory to run in (None for the current one)
        arguments: Program arguments

    Returns:
        Combined output text and the process exit code

    Raises:
        ProcessStartError: If the program could not be launched

    """
    command = [str(application), *arguments]
    log.debug("Running %s in %s", " ".join(command), working_directory or ".")

    try:
        completed = subprocess.run(
            command,
            cwd=working_directory or None,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as e:
        raise ProcessStartError(f"Failed to start {application}: {e}") from e

    return completed.stdout, completed.returncode
