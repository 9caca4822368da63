from __future__ import annotations

from typing import Dict, Type

from .interface import ElevatorId, ElevatorSnapshot, Scheduler
from .marginal_cost import MarginalCostScheduler
from .ordering import distance, order_stops, total_distance

__all__ = [
    "ElevatorId",
    "ElevatorSnapshot",
    "MarginalCostScheduler",
    "Scheduler",
    "distance",
    "get_scheduler",
    "order_stops",
    "total_distance",
]


SCHEDULER_REGISTRY: Dict[str, Type[Scheduler]] = {
    "marginal_cost": MarginalCostScheduler,
}


def get_scheduler(name: str, **kwargs) -> Scheduler:
    cls = SCHEDULER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown scheduler '{name}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
    return cls(**kwargs)
