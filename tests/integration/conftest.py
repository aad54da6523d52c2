"""Fixtures for integration tests."""

import os
import subprocess
import sys
from pathlib import Path
from typing import Protocol

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class RunCliFn(Protocol):
    """Protocol for running the installed command line tool."""

    def __call__(self, *args: str) -> subprocess.CompletedProcess[str]:
        """Run the tool with the given arguments."""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a project with passing and failing test benches."""
    (tmp_path / "test.yaml").write_text(
        "files:\n"
        "  - src/adder.vhd\n"
        "  - test/adder_tb.vhd\n"
        "tests:\n"
        "  - adder_pass_tb\n"
        "  - adder_warning_tb\n"
        "  - adder_fail_tb\n"
    )
    return tmp_path


@pytest.fixture
def run_cli(project: Path) -> RunCliFn:
    """Run ``python -m vhdl_test`` in the project directory."""
    env = {
        name: value
        for name, value in os.environ.items()
        if not name.startswith("VHDLTEST_")
    }
    env.update(PATH="", NO_COLOR="1", PYTHONPATH=str(PROJECT_ROOT))

    def run(*args: str) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            [sys.executable, "-m", "vhdl_test", *args],
            cwd=project,
            capture_output=True,
            text=True,
            check=False,
            env=env,
        )

    return run
