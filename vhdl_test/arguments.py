"""Command line argument parsing."""

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Self

from vhdl_test.errors import ConfigurationError

USAGE = """\
Usage: vhdltest [options] [tests]

Options:
  -h|-?|--help                 Display help
  -v|--version                 Display version
  --silent                     Silence console output
  --verbose                    Verbose output
  --validate                   Perform self-validation
  --depth <depth>              Self-validation depth
  -l|--log <log-file>          Log output to file
  -c|--config <config.yaml>    Specify configuration
  -r|--results <out.trx>       Specify test results file
  -s|--simulator <name>        Specify simulator
  -0|--exit-0                  Exit with code 0 if test fail
  --                           End of options"""


class _ArgumentParser(argparse.ArgumentParser):
    """Parser that reports problems as ConfigurationError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise ConfigurationError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="vhdltest", add_help=False, allow_abbrev=False)
    parser.add_argument("-h", "-?", "--help", action="store_true", dest="help")
    parser.add_argument("-v", "--version", action="store_true", dest="version")
    parser.add_argument("--silent", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--validate", action="store_true")
    parser.add_argument("--depth", type=int, default=1)
    parser.add_argument("-l", "--log", type=Path, dest="log_file")
    parser.add_argument("-c", "--config", type=Path, dest="config_file")
    parser.add_argument("-r", "--results", type=Path, dest="results_file")
    parser.add_argument("-s", "--simulator")
    parser.add_argument("-0", "--exit-0", action="store_true", dest="exit_zero")
    parser.add_argument("tests", nargs="*")
    return parser


@dataclass(frozen=True, kw_only=True)
class Arguments:
    """Parsed program arguments."""

    help: bool = False
    version: bool = False
    silent: bool = False
    verbose: bool = False
    validate: bool = False
    depth: int = 1
    exit_zero: bool = False
    log_file: Path | None = None
    config_file: Path | None = None
    results_file: Path | None = None
    simulator: str | None = None
    custom_tests: Sequence[str] | None = None

    @classmethod
    def parse(cls, args: Sequence[str]) -> Self:
        """Parse program arguments.

        Non-option arguments anywhere among the options, and everything
        after ``--``, are custom tests.

        Raises:
            ConfigurationError: On unsupported options or missing values

        """
        namespace = _build_parser().parse_intermixed_args(list(args))
        return cls(
            help=namespace.help,
            version=namespace.version,
            silent=namespace.silent,
            verbose=namespace.verbose,
            validate=namespace.validate,
            depth=namespace.depth,
            exit_zero=namespace.exit_zero,
            log_file=namespace.log_file,
            config_file=namespace.config_file,
            results_file=namespace.results_file,
            simulator=namespace.simulator,
            custom_tests=namespace.tests or None,
        )
