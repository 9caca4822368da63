from __future__ import annotations

from typing import Dict, Iterator, List

from dispatch import ElevatorId

from .elevator import Elevator
from .errors import DuplicateElevatorError, UnknownElevatorError


class Fleet:
    """Elevators keyed by id, always iterated in ascending id order.

    Elevators cannot be removed once registered.
    """

    def __init__(self) -> None:
        self._elevators: Dict[ElevatorId, Elevator] = {}

    def add(self, elevator: Elevator) -> None:
        if elevator.elevator_id in self._elevators:
            raise DuplicateElevatorError(elevator.elevator_id)
        self._elevators[elevator.elevator_id] = elevator

    def get(self, elevator_id: ElevatorId) -> Elevator:
        try:
            return self._elevators[elevator_id]
        except KeyError:
            raise UnknownElevatorError(elevator_id) from None

    def ids(self) -> List[ElevatorId]:
        return sorted(self._elevators)

    def __iter__(self) -> Iterator[Elevator]:
        for elevator_id in self.ids():
            yield self._elevators[elevator_id]

    def __len__(self) -> int:
        return len(self._elevators)
