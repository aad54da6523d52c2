"""Configuration document and resolved run options."""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Self

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vhdl_test.errors import ConfigurationError


class ConfigDocument(BaseModel):
    """Configuration loaded from a YAML file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    files: Sequence[str] = Field(
        default_factory=list, description="VHDL source files in compile order"
    )
    tests: Sequence[str] = Field(
        default_factory=list, description="Test bench entities to run"
    )


def load_config(path: Path) -> ConfigDocument:
    """Load and validate a configuration file.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid

    """
    try:
        content = path.read_text()
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Configuration document {path} invalid: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration document {path} invalid")

    try:
        return ConfigDocument.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration document {path} invalid: {e}") from e


@dataclass(frozen=True, kw_only=True)
class Options:
    """Everything a simulator needs to build and run the tests."""

    working_directory: Path
    config: ConfigDocument
    tests: Sequence[str]
    verbose: bool = False

    @classmethod
    def load(
        cls,
        config_file: Path | None,
        custom_tests: Sequence[str] | None = None,
        verbose: bool = False,
    ) -> Self:
        """Load options from a configuration file.

        Custom tests replace the tests listed in the configuration.
        """
        if config_file is None:
            raise ConfigurationError("Configuration file not specified")

        config = load_config(config_file)
        tests = list(custom_tests) if custom_tests is not None else list(config.tests)

        return cls(
            working_directory=config_file.resolve().parent,
            config=config,
            tests=tests,
            verbose=verbose,
        )
