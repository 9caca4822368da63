from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DispatchSettings:
    """Knobs shared by the control loop, the CLI and the HTTP service."""

    scheduler_name: str = "marginal_cost"
    scheduler_options: dict = field(default_factory=dict)
    tick_interval_seconds: float = 0.5
    auto_step: bool = True
