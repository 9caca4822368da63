from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List

from dispatch import ElevatorId, ElevatorSnapshot, order_stops, total_distance


class Direction(IntEnum):
    UP = 1
    DOWN = -1
    STOPPED = 0


@dataclass
class Elevator:
    """One car of the fleet: where it is and the stops it still owes."""

    elevator_id: ElevatorId
    current: int
    queue: List[int] = field(default_factory=list)

    @property
    def next_stop(self) -> int:
        if not self.queue:
            return self.current
        return self.queue[0]

    @property
    def direction(self) -> Direction:
        delta = self.next_stop - self.current
        if delta > 0:
            return Direction.UP
        if delta < 0:
            return Direction.DOWN
        return Direction.STOPPED

    def enqueue(self, floor: int) -> bool:
        if floor in self.queue:
            return False
        self.queue.append(floor)
        return True

    def sort(self) -> None:
        self.queue = order_stops(self.current, self.queue)

    def total_distance(self) -> int:
        return total_distance(self.current, self.queue)

    def advance(self) -> bool:
        """Move to the head of the queue. Only the simulator calls this."""
        if not self.queue:
            return False
        self.current = self.queue.pop(0)
        return True

    def snapshot(self) -> ElevatorSnapshot:
        return ElevatorSnapshot(
            elevator_id=self.elevator_id,
            current=self.current,
            queue=tuple(self.queue),
        )
