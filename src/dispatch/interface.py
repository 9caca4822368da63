from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Iterable, Protocol, Tuple

ElevatorId = Hashable


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Read-only view of an elevator for dispatch decisions and status."""

    elevator_id: ElevatorId
    current: int
    queue: Tuple[int, ...]

    @property
    def next_stop(self) -> int:
        return self.queue[0] if self.queue else self.current

    def as_dict(self) -> dict:
        return {"current": self.current, "queue": list(self.queue)}


class Scheduler(Protocol):
    """Strategy interface for answering a pickup (hall call)."""

    def select_elevator(self, snapshots: Iterable[ElevatorSnapshot], floor: int) -> ElevatorId:
        """
        Return the id of the elevator that should serve a pickup at ``floor``.

        Implementations must not mutate anything; the caller commits the
        assignment. Raise ``ValueError`` when ``snapshots`` is empty.
        """
        ...
