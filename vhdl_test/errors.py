"""Errors reported to the user by the test runner."""


class VhdlTestError(Exception):
    """Base for expected failures that are reported without a traceback."""


class ConfigurationError(VhdlTestError):
    """Raised when arguments or the configuration file are invalid."""


class SimulatorNotFoundError(VhdlTestError):
    """Raised when no simulator matches the requested name."""


class SimulatorUnavailableError(VhdlTestError):
    """Raised when the selected simulator executable cannot be located."""


class BuildFailedError(VhdlTestError):
    """Raised when compiling the sources produced an error."""


class ProcessStartError(VhdlTestError):
    """Raised when a simulator process could not be launched."""
