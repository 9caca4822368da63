import json
from pathlib import Path

import pytest

import run_scenario

SCENARIOS = Path(__file__).resolve().parent.parent / "scenarios"


def load(name):
    return json.loads((SCENARIOS / name).read_text())


def test_two_elevator_scenario_output():
    lines = []
    simulation = run_scenario.build_simulation(load("two_elevators.json"), echo=lines.append)
    run_scenario.run_simulation(simulation, echo=lines.append)

    assert lines == [
        "elevator 2 to pickup on floor 4",
        "elevator 2 to pickup on floor 9",
        "step #1",
        "\televator 1 goes down to floor 1",
        "\televator 2 goes up to floor 4",
        "step #2",
        "\televator 1 goes up to floor 10",
        "\televator 2 goes up to floor 9",
        "step #3",
        "\televator 1 is stopped on floor 10",
        "\televator 2 is stopped on floor 9",
    ]


def test_repeated_calls_scenario_reaches_top_floor():
    simulation = run_scenario.build_simulation(load("repeated_calls.json"))
    reports = run_scenario.run_simulation(simulation)
    assert len(reports) == 5
    assert simulation.status()[1].current == 100


def test_unknown_call_type_is_rejected():
    config = {"elevators": [{"id": 1, "floor": 0}], "calls": [{"type": "teleport", "floor": 3}]}
    with pytest.raises(ValueError, match="teleport"):
        run_scenario.build_simulation(config)


def test_main_writes_results(tmp_path, capsys):
    output = tmp_path / "out" / "results.json"
    run_scenario.main([str(SCENARIOS / "two_elevators.json"), "--output", str(output)])

    results = json.loads(output.read_text())
    assert results["scenario"] == "two_elevators"
    assert results["scheduler"] == "marginal_cost"
    assert [step["moved"] for step in results["steps"]] == [True, True, False]
    assert results["final_status"] == {
        "1": {"current": 10, "queue": []},
        "2": {"current": 9, "queue": []},
    }
    assert "step #3" in capsys.readouterr().out


def test_main_exits_cleanly_when_step_limit_is_hit(tmp_path, capsys):
    output = tmp_path / "results.json"
    with pytest.raises(SystemExit) as excinfo:
        run_scenario.main(
            [str(SCENARIOS / "repeated_calls.json"), "--max-steps", "2", "--output", str(output)]
        )
    assert excinfo.value.code == 1
    assert "still moving after 2 steps" in capsys.readouterr().err
    assert not output.exists()
