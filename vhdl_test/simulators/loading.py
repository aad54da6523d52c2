"""Selection of a simulator backend by name."""

import logging
from collections.abc import Sequence

from vhdl_test.errors import SimulatorNotFoundError
from vhdl_test.simulators.activehdl import ActiveHdlSimulator
from vhdl_test.simulators.base import Simulator
from vhdl_test.simulators.ghdl import GhdlSimulator
from vhdl_test.simulators.mock import MockSimulator
from vhdl_test.simulators.modelsim import ModelSimSimulator, QuestaSimSimulator
from vhdl_test.simulators.nvc import NvcSimulator
from vhdl_test.simulators.vivado import VivadoSimulator

log = logging.getLogger(__name__)

# Order of preference when no simulator is requested. The mock simulator is
# only ever selected by name.
SIMULATOR_TYPES: Sequence[type[Simulator]] = (
    GhdlSimulator,
    ModelSimSimulator,
    QuestaSimSimulator,
    VivadoSimulator,
    ActiveHdlSimulator,
    NvcSimulator,
)


def create_simulators() -> Sequence[Simulator]:
    """Create every known simulator, locating their executables."""
    return [*(cls.create() for cls in SIMULATOR_TYPES), MockSimulator.create()]


def load_simulator(
    name: str | None = None,
    simulators: Sequence[Simulator] | None = None,
) -> Simulator:
    """Select a simulator.

    Args:
        name: Simulator name, matched case-insensitively. When omitted the
              first available simulator is chosen.
        simulators: Candidate simulators (defaults to create_simulators())

    Returns:
        The selected simulator

    Raises:
        SimulatorNotFoundError: If no simulator matches

    """
    if simulators is None:
        simulators = create_simulators()

    if name is not None:
        for simulator in simulators:
            if simulator.name.casefold() == name.casefold():
                return simulator
        available = [s.name for s in simulators]
        raise SimulatorNotFoundError(
            f"Simulator '{name}' not found. Available simulators: {available}"
        )

    for simulator in simulators:
        if simulator.available() and not isinstance(simulator, MockSimulator):
            log.info("Using %s simulator at %s", simulator.name, simulator.path)
            return simulator

    raise SimulatorNotFoundError("No simulator found")
