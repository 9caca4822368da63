from __future__ import annotations

import logging
from typing import Dict, Optional

from dispatch import ElevatorId, ElevatorSnapshot, Scheduler, get_scheduler

from .config import DispatchSettings
from .elevator import Elevator
from .errors import EmptyFleetError
from .registry import Fleet

logger = logging.getLogger(__name__)


class Control:
    """Owns the fleet and turns cab and hall calls into queued stops."""

    def __init__(self, settings: Optional[DispatchSettings] = None) -> None:
        self.settings = settings or DispatchSettings()
        self.fleet = Fleet()
        self.scheduler_name = self.settings.scheduler_name
        self.scheduler: Scheduler = get_scheduler(
            self.settings.scheduler_name, **self.settings.scheduler_options
        )

    def set_scheduler(self, name: str, **options) -> None:
        self.scheduler = get_scheduler(name, **options)
        self.scheduler_name = name

    def add_elevator(self, elevator_id: ElevatorId, floor: int) -> Elevator:
        elevator = Elevator(elevator_id=elevator_id, current=floor)
        self.fleet.add(elevator)
        logger.debug("elevator %s added on floor %s", elevator_id, floor)
        return elevator

    def request_floor(self, elevator_id: ElevatorId, floor: int) -> Elevator:
        """Cab call: queue ``floor`` for one elevator and re-order its stops."""
        elevator = self.fleet.get(elevator_id)
        elevator.enqueue(floor)
        elevator.sort()
        return elevator

    def pickup(self, floor: int) -> ElevatorId:
        """Hall call: assign ``floor`` to the cheapest elevator and return its id."""
        if not len(self.fleet):
            raise EmptyFleetError()
        # Evaluation works on snapshots so no elevator changes until the commit below.
        chosen = self.scheduler.select_elevator(self._snapshot_elevators(), floor)
        self.request_floor(chosen, floor)
        logger.info("elevator %s to pickup on floor %s", chosen, floor)
        return chosen

    @property
    def busy(self) -> bool:
        return any(elevator.queue for elevator in self.fleet)

    def status(self) -> Dict[ElevatorId, ElevatorSnapshot]:
        return {elevator.elevator_id: elevator.snapshot() for elevator in self.fleet}

    def snapshot(self) -> dict:
        return {
            str(elevator.elevator_id): {
                "current": elevator.current,
                "queue": list(elevator.queue),
                "direction": elevator.direction.name.lower(),
                "remaining_distance": elevator.total_distance(),
            }
            for elevator in self.fleet
        }

    def _snapshot_elevators(self):
        return [elevator.snapshot() for elevator in self.fleet]
