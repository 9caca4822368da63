from __future__ import annotations

from typing import Hashable


class FleetError(Exception):
    """Base class for recoverable fleet control errors."""


class UnknownElevatorError(FleetError, LookupError):
    def __init__(self, elevator_id: Hashable) -> None:
        super().__init__(f"Elevator {elevator_id!r} is not registered")
        self.elevator_id = elevator_id


class DuplicateElevatorError(FleetError):
    def __init__(self, elevator_id: Hashable) -> None:
        super().__init__(f"Elevator {elevator_id!r} is already registered")
        self.elevator_id = elevator_id


class EmptyFleetError(FleetError):
    def __init__(self) -> None:
        super().__init__("There are no elevators operating")


class SimulationLimitError(FleetError):
    def __init__(self, max_steps: int) -> None:
        super().__init__(f"Fleet still moving after {max_steps} steps")
        self.max_steps = max_steps
