"""CLI entry point for the VHDL test bench runner."""

import logging
import sys
from collections.abc import Sequence

from vhdl_test import __version__, validation
from vhdl_test.arguments import USAGE, Arguments
from vhdl_test.config import Options
from vhdl_test.errors import (
    ConfigurationError,
    SimulatorUnavailableError,
    VhdlTestError,
)
from vhdl_test.orchestrator import TestOrchestrator
from vhdl_test.output import Output, format_summary
from vhdl_test.report import save_results
from vhdl_test.simulators.loading import load_simulator

log = logging.getLogger("vhdl_test")


def run(arguments: Arguments, output: Output) -> int:
    """Build and run the tests and return the exit code."""
    if arguments.validate:
        return validation.run(arguments, output)

    simulator = load_simulator(arguments.simulator)
    log.info("Selected simulator: %s", simulator.name)

    options = Options.load(
        arguments.config_file,
        custom_tests=arguments.custom_tests,
        verbose=arguments.verbose,
    )

    if not simulator.available():
        raise SimulatorUnavailableError(f"{simulator.name} Simulator not available")

    results = TestOrchestrator(simulator=simulator, output=output).run_tests(options)

    output.write_lines(format_summary(results))

    if arguments.results_file is not None:
        save_results(results, arguments.results_file)

    if results.fails and not arguments.exit_zero:
        return 1
    return 0


def configure_logging(arguments: Arguments) -> None:
    """Configure diagnostic logging to stderr."""
    if arguments.verbose:
        level = logging.DEBUG
    elif arguments.silent:
        level = logging.ERROR
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def execute(args: Sequence[str]) -> int:
    """Run the program with the given arguments and return the exit code."""
    with Output() as console:
        try:
            arguments = Arguments.parse(args)
        except ConfigurationError as e:
            console.write_error(f"Error: {e}")
            console.write_line()
            console.write_line(USAGE)
            return 1

        if arguments.version:
            console.write_line(__version__)
            return 0

    configure_logging(arguments)

    with Output(silent=arguments.silent, log_file=arguments.log_file) as output:
        output.write_line(f"VHDL Test Bench Runner (VHDLTest) {__version__}")
        output.write_line()

        if not args:
            output.write_error("Error: No arguments specified")
            output.write_line()
            output.write_line(USAGE)
            return 1

        if arguments.help:
            output.write_line(USAGE)
            return 0

        try:
            return run(arguments, output)
        except VhdlTestError as e:
            output.write_error(f"Error: {e}")
            return 1
        except Exception as e:
            log.exception("Unexpected error")
            output.write_error(f"Error: {e}")
            return 1


def main() -> None:
    """CLI entry point."""
    sys.exit(execute(sys.argv[1:]))


if __name__ == "__main__":  # pragma: no cover
    main()
