"""
Bridge editing operations.

Each operation changes the given solution in place, so callers pass a clone
they own. Bridges themselves are immutable; strengthening a bridge replaces
its entry in the list.
"""

from .errors import InvalidWeight
from .solution import Bridge, Solution


def ensure_one_bridge(solution: Solution, a: int, b: int) -> bool:
    """Add a single bridge unless the pair is already bridged"""
    if solution.find(a, b) is not None:
        return False
    solution.bridges.append(Bridge.between(a, b, 1, emphasis=1))
    return True


def ensure_two_bridges(solution: Solution, a: int, b: int) -> bool:
    """Make the pair a double bridge; False when it already is one"""
    i = solution.find(a, b)
    if i is None:
        solution.bridges.append(Bridge.between(a, b, 2, emphasis=2))
        return True
    if solution.bridges[i].count == 2:
        return False
    solution.bridges[i] = Bridge.between(a, b, 2, emphasis=1)
    return True


def add_bridge(solution: Solution, a: int, b: int):
    """Add one unit of weight between two islands"""
    i = solution.find(a, b)
    if i is None:
        solution.bridges.append(Bridge.between(a, b, 1, emphasis=1))
        return
    if solution.bridges[i].count == 2:
        raise InvalidWeight(f"Tried to add a third bridge between {a} and {b}")
    solution.bridges[i] = Bridge.between(a, b, 2, emphasis=1)


def toggle_bridge(solution: Solution, a: int, b: int):
    """Cycle the pair through none, single and double"""
    i = solution.find(a, b)
    if i is None:
        solution.bridges.append(Bridge.between(a, b, 1, emphasis=1))
    elif solution.bridges[i].count == 1:
        solution.bridges[i] = Bridge.between(a, b, 2, emphasis=1)
    else:
        del solution.bridges[i]
