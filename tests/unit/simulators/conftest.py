"""Fixtures for simulator tests."""

from pathlib import Path

import pytest

from vhdl_test.config import ConfigDocument, Options


@pytest.fixture
def options(tmp_path: Path) -> Options:
    """Options for a small design in a temporary working directory."""
    return Options(
        working_directory=tmp_path,
        config=ConfigDocument(files=["src/adder.vhd", "test/adder_tb.vhd"]),
        tests=["adder_tb"],
    )
