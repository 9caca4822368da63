from __future__ import annotations

from typing import Dict, Iterable, List

from .interface import ElevatorId, ElevatorSnapshot
from .ordering import order_stops, total_distance


class MarginalCostScheduler:
    """Sends a pickup to the elevator whose re-ordered queue stays shortest.

    Every elevator is evaluated as if the pickup floor were added to its
    queue and the queue re-ordered from its current floor. The candidate
    with the lowest total remaining distance wins; equal costs go to the
    lowest elevator id.
    """

    def select_elevator(self, snapshots: Iterable[ElevatorSnapshot], floor: int) -> ElevatorId:
        costs = self.candidate_costs(snapshots, floor)
        if not costs:
            raise ValueError("No elevators available to serve a pickup")
        return min(sorted(costs), key=lambda elevator_id: costs[elevator_id])

    def candidate_costs(self, snapshots: Iterable[ElevatorSnapshot], floor: int) -> Dict[ElevatorId, int]:
        return {snapshot.elevator_id: self.candidate_cost(snapshot, floor) for snapshot in snapshots}

    def candidate_cost(self, snapshot: ElevatorSnapshot, floor: int) -> int:
        pending: List[int] = list(snapshot.queue)
        if floor not in pending:
            pending.append(floor)
        return total_distance(snapshot.current, order_stops(snapshot.current, pending))
