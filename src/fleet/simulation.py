from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from dispatch import ElevatorId

from .control import Control
from .elevator import Direction, Elevator
from .errors import SimulationLimitError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Motion:
    """What one elevator reports at the start of a tick."""

    elevator_id: ElevatorId
    direction: Direction
    floor: int

    def describe(self) -> str:
        if self.direction is Direction.UP:
            return f"elevator {self.elevator_id} goes up to floor {self.floor}"
        if self.direction is Direction.DOWN:
            return f"elevator {self.elevator_id} goes down to floor {self.floor}"
        return f"elevator {self.elevator_id} is stopped on floor {self.floor}"


@dataclass(frozen=True)
class StepReport:
    step: int
    moved: bool
    motions: Tuple[Motion, ...]

    def as_dict(self) -> dict:
        return {
            "step": self.step,
            "moved": self.moved,
            "motions": [
                {
                    "elevator_id": motion.elevator_id,
                    "direction": motion.direction.name.lower(),
                    "floor": motion.floor,
                }
                for motion in self.motions
            ],
        }


class Simulation:
    """Discrete stepper that walks every elevator through its queue."""

    def __init__(self, control: Optional[Control] = None) -> None:
        self.control = control or Control()
        self.current_step: int = 0
        self.last_report: Optional[StepReport] = None
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}

    def add_elevator(self, elevator_id: ElevatorId, floor: int) -> Elevator:
        return self.control.add_elevator(elevator_id, floor)

    def request_floor(self, elevator_id: ElevatorId, floor: int) -> Elevator:
        return self.control.request_floor(elevator_id, floor)

    def pickup(self, floor: int) -> ElevatorId:
        elevator_id = self.control.pickup(floor)
        cost = self.control.fleet.get(elevator_id).total_distance()
        self._emit("pickup", {"elevator_id": elevator_id, "floor": floor, "cost": cost})
        return elevator_id

    def status(self):
        return self.control.status()

    def step(self) -> bool:
        self.current_step += 1
        moved = False
        motions: List[Motion] = []
        for elevator in self.control.fleet:
            motion = self._motion(elevator)
            logger.debug("step #%d: %s", self.current_step, motion.describe())
            motions.append(motion)
            if elevator.advance():
                moved = True

        report = StepReport(step=self.current_step, moved=moved, motions=tuple(motions))
        self.last_report = report
        self._emit("step", report)
        return moved

    def run(self, steps: int) -> None:
        for _ in range(steps):
            self.step()

    def run_until_idle(self, max_steps: Optional[int] = None) -> List[StepReport]:
        """Step until ``step()`` reports no movement; return every step's report.

        The final, motionless step is included. Raises ``SimulationLimitError``
        only if the fleet still has queued stops once ``max_steps`` ticks ran.
        """
        reports: List[StepReport] = []
        while max_steps is None or len(reports) < max_steps:
            moved = self.step()
            reports.append(self.last_report)
            if not moved:
                return reports
        if self.control.busy:
            raise SimulationLimitError(max_steps)
        return reports

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def snapshot(self) -> dict:
        return {
            "step": self.current_step,
            "moving": self.control.busy,
            "scheduler": self.control.scheduler_name,
            "fleet": self.control.snapshot(),
        }

    def _motion(self, elevator: Elevator) -> Motion:
        direction = elevator.direction
        floor = elevator.current if direction is Direction.STOPPED else elevator.next_stop
        return Motion(elevator_id=elevator.elevator_id, direction=direction, floor=floor)

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
