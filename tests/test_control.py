import logging

import pytest

from dispatch import MarginalCostScheduler, get_scheduler
from fleet import (
    Control,
    DispatchSettings,
    DuplicateElevatorError,
    EmptyFleetError,
    UnknownElevatorError,
)


@pytest.fixture
def control():
    control = Control()
    control.add_elevator("A", 5)
    control.request_floor("A", 10)
    control.request_floor("A", 1)
    control.add_elevator("B", 1)
    return control


def test_floor_requests_are_ordered_nearest_first(control):
    elevator = control.fleet.get("A")
    assert elevator.queue == [1, 10]
    assert elevator.total_distance() == 13


def test_repeated_floor_request_is_queued_once(control):
    control.request_floor("A", 100)
    control.request_floor("A", 100)
    assert control.fleet.get("A").queue.count(100) == 1
    assert control.fleet.get("A").queue == [1, 10, 100]


def test_every_distinct_request_queued_exactly_once():
    control = Control()
    control.add_elevator(1, 0)
    calls = [4, 9, 4, -1, 9, 9, 0, 12]
    for floor in calls:
        control.request_floor(1, floor)
    queue = control.fleet.get(1).queue
    assert sorted(queue) == sorted(set(calls))


def test_pickup_goes_to_cheapest_elevator(control):
    costs = MarginalCostScheduler().candidate_costs(control.status().values(), 4)
    assert costs == {"A": 13, "B": 3}

    assert control.pickup(4) == "B"
    assert control.fleet.get("B").queue == [4]
    assert control.fleet.get("A").queue == [1, 10]


def test_pickup_floor_lands_in_winner_queue(control):
    for floor in (7, 2, 15, 1):
        chosen = control.pickup(floor)
        assert floor in control.fleet.get(chosen).queue


def test_pickup_tie_goes_to_lowest_id():
    control = Control()
    control.add_elevator(2, 3)
    control.add_elevator(1, 3)
    assert control.pickup(5) == 1
    assert control.fleet.get(2).queue == []


def test_pickup_on_empty_fleet_fails_without_mutation():
    control = Control()
    with pytest.raises(EmptyFleetError):
        control.pickup(4)
    assert control.status() == {}
    assert len(control.fleet) == 0


def test_unknown_elevator_is_a_recoverable_error(control):
    with pytest.raises(UnknownElevatorError) as excinfo:
        control.request_floor("Z", 3)
    assert excinfo.value.elevator_id == "Z"
    assert isinstance(excinfo.value, LookupError)


def test_re_registering_an_elevator_is_rejected(control):
    with pytest.raises(DuplicateElevatorError):
        control.add_elevator("A", 0)
    elevator = control.fleet.get("A")
    assert (elevator.current, elevator.queue) == (5, [1, 10])


def test_status_is_a_read_only_copy(control):
    status = control.status()
    control.request_floor("B", 8)
    assert status["B"].queue == ()
    assert list(status) == ["A", "B"]


def test_snapshot_is_json_ready(control):
    assert control.snapshot()["A"] == {
        "current": 5,
        "queue": [1, 10],
        "direction": "down",
        "remaining_distance": 13,
    }


def test_busy_tracks_pending_stops():
    control = Control()
    control.add_elevator(1, 0)
    assert not control.busy
    control.request_floor(1, 3)
    assert control.busy


def test_pickup_is_logged(control, caplog):
    with caplog.at_level(logging.INFO, logger="fleet.control"):
        control.pickup(4)
    assert "elevator B to pickup on floor 4" in caplog.text


def test_unknown_scheduler_name():
    with pytest.raises(ValueError, match="marginal_cost"):
        get_scheduler("round_robin")
    with pytest.raises(ValueError):
        Control(DispatchSettings(scheduler_name="round_robin"))


def test_set_scheduler_by_name(control):
    control.set_scheduler("MARGINAL_COST")
    assert isinstance(control.scheduler, MarginalCostScheduler)
    assert control.scheduler_name == "MARGINAL_COST"


def test_scheduler_refuses_empty_snapshot_list():
    with pytest.raises(ValueError):
        MarginalCostScheduler().select_elevator([], 3)
