from __future__ import annotations

from typing import Iterable, List, Sequence


def distance(a: int, b: int) -> int:
    """Number of floors between two floors."""
    return abs(a - b)


def total_distance(start: int, stops: Sequence[int]) -> int:
    """Floors traveled walking from ``start`` through ``stops`` in order."""

    total = 0
    last = start
    for stop in stops:
        total += distance(last, stop)
        last = stop
    return total


def order_stops(start: int, pending: Iterable[int]) -> List[int]:
    """Order pending floors by repeatedly visiting the nearest one.

    This is a greedy nearest-neighbor walk, not an optimal tour: from the
    current anchor the closest remaining floor is chosen, with the lower
    floor winning a tie, and it becomes the next anchor. Duplicate floors in
    ``pending`` collapse into a single stop.
    """

    remaining = sorted(set(pending))
    ordered: List[int] = []
    anchor = start
    while remaining:
        pick = _nearest(anchor, remaining)
        remaining.remove(pick)
        ordered.append(pick)
        anchor = pick
    return ordered


def _nearest(anchor: int, floors: List[int]) -> int:
    # floors is ascending, so the first strict improvement keeps the lower floor on ties
    best = floors[0]
    best_distance = distance(anchor, best)
    for floor in floors[1:]:
        d = distance(anchor, floor)
        if d < best_distance:
            best, best_distance = floor, d
    return best
