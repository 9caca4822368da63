"""CLI for replaying fleet dispatch scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from fleet import Control, DispatchSettings, FleetError, Simulation, StepReport


def build_simulation(config: Dict, echo: Optional[Callable[[str], None]] = None) -> Simulation:
    scheduler_cfg = config.get("scheduler", {})
    settings = DispatchSettings(
        scheduler_name=scheduler_cfg.get("name", "marginal_cost"),
        scheduler_options=scheduler_cfg.get("options", {}),
    )
    simulation = Simulation(Control(settings))
    if echo is not None:
        simulation.on_event(
            "pickup",
            lambda event: echo(f"elevator {event['elevator_id']} to pickup on floor {event['floor']}"),
        )

    for elevator_cfg in config.get("elevators", []):
        simulation.add_elevator(elevator_cfg["id"], elevator_cfg.get("floor", 0))

    for call in config.get("calls", []):
        _apply_call(simulation, call)
    return simulation


def _apply_call(simulation: Simulation, call: Dict) -> None:
    call_type = call.get("type")
    if call_type == "floor":
        simulation.request_floor(call["elevator_id"], call["floor"])
    elif call_type == "pickup":
        simulation.pickup(call["floor"])
    else:
        raise ValueError(f"Unknown call type '{call_type}'. Available: floor, pickup")


def run_simulation(
    simulation: Simulation,
    max_steps: Optional[int] = None,
    echo: Optional[Callable[[str], None]] = None,
) -> List[StepReport]:
    if echo is not None:
        simulation.on_event("step", lambda report: _echo_report(report, echo))
    return simulation.run_until_idle(max_steps)


def _echo_report(report: StepReport, echo: Callable[[str], None]) -> None:
    echo(f"step #{report.step}")
    for motion in report.motions:
        echo(f"\t{motion.describe()}")


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write step reports and final status as JSON",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Abort if the fleet is still moving after this many steps",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = json.loads(args.config.read_text())
    print(f"Scenario: {config.get('name', args.config.stem)}")
    if config.get("description"):
        print(config["description"])

    try:
        simulation = build_simulation(config, echo=print)
        reports = run_simulation(simulation, max_steps=args.max_steps, echo=print)
    except FleetError as exc:
        parser.exit(1, f"error: {exc}\n")

    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "scheduler": simulation.control.scheduler_name,
        "steps": [report.as_dict() for report in reports],
        "final_status": {
            str(elevator_id): snapshot.as_dict()
            for elevator_id, snapshot in simulation.status().items()
        },
    }
    save_results(args.output, results)
    if args.output:
        print(f"Saved step reports to {args.output}")


if __name__ == "__main__":
    main()
