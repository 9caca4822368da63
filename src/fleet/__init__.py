"""Fleet state, call handling and the step simulator."""

from .config import DispatchSettings
from .control import Control
from .elevator import Direction, Elevator
from .errors import (
    DuplicateElevatorError,
    EmptyFleetError,
    FleetError,
    SimulationLimitError,
    UnknownElevatorError,
)
from .registry import Fleet
from .simulation import Motion, Simulation, StepReport

__all__ = [
    "Control",
    "Direction",
    "DispatchSettings",
    "DuplicateElevatorError",
    "Elevator",
    "EmptyFleetError",
    "Fleet",
    "FleetError",
    "Motion",
    "Simulation",
    "SimulationLimitError",
    "StepReport",
    "UnknownElevatorError",
]
