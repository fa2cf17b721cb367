"""
Deduction rules for the Hashiwokakero solver.

A tactic looks at one island of an analyzed solution and either proves one or
more bridges (writing them into the solution it was given) or reports that it
could not make progress. Tactics only ever add bridges or turn singles into
doubles, so repeated application always terminates.

``TACTICS`` is ordered: the cheaper and more local rules come first and the
solver always uses the first rule that makes progress.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List

from ..config import MAX_BRIDGE_COUNT
from ..core import editor
from ..core.errors import Contradiction
from ..core.puzzle import Puzzle
from ..core.solution import Solution
from .analyzer import IslandMeta, SolutionContext


@dataclass(frozen=True)
class TacticQuery:
    puzzle: Puzzle
    solution: Solution  # a clone owned by the tactic
    context: SolutionContext
    index: int
    meta: IslandMeta

    def metas(self, indices: Iterable[int]) -> List[IslandMeta]:
        return [self.context.metas[i] for i in indices]


@dataclass(frozen=True)
class Tactic:
    name: str
    label: str
    is_applicable: Callable[[TacticQuery], bool]
    apply: Callable[[TacticQuery], bool]  # True when a bridge was added or strengthened

    def __repr__(self):
        return f"Tactic({self.name})"


# --------------
# Helpers
# --------------

def _capacity(query: TacticQuery, other: int) -> int:
    """How much more weight the island can put on its pair with ``other``"""
    return min(
        MAX_BRIDGE_COUNT - query.meta.weight_to(other),
        query.context.metas[other].remaining_value,
        query.meta.remaining_value,
    )


def _raise_all(query: TacticQuery, targets: Iterable[int], minimum: int) -> bool:
    """Make sure every target pair carries at least ``minimum`` weight"""
    meta = query.meta
    plan = []
    for other in targets:
        missing = minimum - meta.weight_to(other)
        if missing <= 0:
            continue
        if missing > query.context.metas[other].remaining_value:
            raise Contradiction(
                f"Island {other} cannot take {missing} more bridge(s) from island {meta.index}"
            )
        plan.append(other)

    if sum(minimum - meta.weight_to(other) for other in plan) > meta.remaining_value:
        raise Contradiction(f"Island {meta.index} would exceed its value {meta.desired_value}")

    changed = False
    for other in plan:
        if minimum == 1:
            changed |= editor.ensure_one_bridge(query.solution, meta.index, other)
        else:
            changed |= editor.ensure_two_bridges(query.solution, meta.index, other)
    return changed


def _add_one(query: TacticQuery, other: int) -> bool:
    if _capacity(query, other) < 1:
        raise Contradiction(f"No room for another bridge between {query.index} and {other}")
    editor.add_bridge(query.solution, query.index, other)
    return True


# --------------
# Basic tactics
# --------------

def _forced_completion_applicable(query: TacticQuery) -> bool:
    meta = query.meta
    return len(meta.active_neighbours) == 1 and meta.remaining_value > 0


def _forced_completion(query: TacticQuery) -> bool:
    meta = query.meta
    other = meta.active_neighbours[0]
    needed = meta.remaining_value
    neighbour = query.context.metas[other]
    if needed > neighbour.remaining_value or meta.weight_to(other) + needed > MAX_BRIDGE_COUNT:
        raise Contradiction(
            f"Island {meta.index} needs {needed} more bridge(s) but its only "
            f"open neighbour {other} can take {_capacity(query, other)}"
        )
    for _ in range(needed):
        editor.add_bridge(query.solution, meta.index, other)
    return True


FORCED_COMPLETION = Tactic(
    name="forced_completion",
    label="Add remaining bridges for a node with one active neighbour",
    is_applicable=_forced_completion_applicable,
    apply=_forced_completion,
)


_COUNT_WORDS = {2: "two", 3: "three", 4: "four"}


def _exact_coverage(value: int, neighbour_count: int) -> Tactic:
    """A value that leaves no slack over its neighbours.

    With n neighbours an island takes at most 2n. A value of 2n needs a
    double bridge everywhere, a value of 2n - 1 at least a single everywhere.
    """
    per_neighbour = value - 2 * neighbour_count + 2
    article = "An" if value == 8 else "A"
    if per_neighbour == 2:
        label = (f"{article} '{value}' with {_COUNT_WORDS[neighbour_count]} "
                 f"neighbours must have two bridges to each.")
    else:
        label = (f"{article} '{value}' with {_COUNT_WORDS[neighbour_count]} "
                 f"neighbours must have at least one bridge to each.")

    def is_applicable(query: TacticQuery) -> bool:
        meta = query.meta
        return len(meta.neighbours) == neighbour_count and meta.desired_value == value

    def apply(query: TacticQuery) -> bool:
        return _raise_all(query, query.meta.neighbours, per_neighbour)

    return Tactic(
        name=f"exact_coverage_{value}_{neighbour_count}",
        label=label,
        is_applicable=is_applicable,
        apply=apply,
    )


# --------------
# Propagation
# --------------

def _saturated_singles(query: TacticQuery) -> List[int]:
    metas = query.context.metas
    return [to for to, count in query.meta.bridges if count == 1 and metas[to].satisfied]


def _saturation_applicable(query: TacticQuery) -> bool:
    meta = query.meta
    return (len(meta.neighbours) == 3 and meta.desired_value == 4
            and bool(_saturated_singles(query)))


def _saturation(query: TacticQuery) -> bool:
    saturated = set(_saturated_singles(query))
    others = [n for n in query.meta.neighbours if n not in saturated]
    return _raise_all(query, others, 1)


SATURATION = Tactic(
    name="saturation",
    label=("A '4' with three neighbours that has exactly one bridge in a direction "
           "must have at least one bridge in two remaining directions."),
    is_applicable=_saturation_applicable,
    apply=_saturation,
)


def _three_with_small_neighbours(query: TacticQuery) -> bool:
    # 1 + 2 would close the '3' together with its '1' and '2' neighbours
    metas = query.context.metas
    non_one = [n for n in query.meta.neighbours if metas[n].desired_value != 1]
    if len(non_one) != 2:
        return False
    changed = False
    if metas[non_one[0]].desired_value == 2:
        changed |= _raise_all(query, [non_one[1]], 1)
    if metas[non_one[1]].desired_value == 2:
        changed |= _raise_all(query, [non_one[0]], 1)
    return changed


THREE_WITH_ONE_AND_TWO = Tactic(
    name="three_with_one_and_two",
    label=("A '3' that has three neighbours, where two of them are '1' and '2', "
           "should have at least one bridge to the third one."),
    is_applicable=lambda q: len(q.meta.neighbours) == 3 and q.meta.desired_value == 3,
    apply=_three_with_small_neighbours,
)


def _two_with_small_neighbour(query: TacticQuery) -> bool:
    # A double to a '1' is impossible, a double to a '2' closes the pair
    metas = query.context.metas
    first, second = query.meta.neighbours
    targets = []
    if metas[first].desired_value <= 2:
        targets.append(second)
    if metas[second].desired_value <= 2:
        targets.append(first)
    return _raise_all(query, targets, 1)


TWO_WITH_SMALL_NEIGHBOUR = Tactic(
    name="two_with_small_neighbour",
    label="A '2' that has a neighbour '1' or '2' needs one bridge to another neighbour.",
    is_applicable=lambda q: len(q.meta.neighbours) == 2 and q.meta.desired_value == 2,
    apply=_two_with_small_neighbour,
)


def _two_active_counting(query: TacticQuery) -> bool:
    first, second = query.meta.active_neighbours
    if _capacity(query, first) == 1:
        return _add_one(query, second)
    if _capacity(query, second) == 1:
        return _add_one(query, first)
    return False


TWO_ACTIVE_COUNTING = Tactic(
    name="two_active_counting",
    label=("A node that has two open neighbours remaining and at least two bridges "
           "to assign, must assign one bridge to neighbour B if neighbour A could only accept one"),
    is_applicable=lambda q: len(q.meta.active_neighbours) == 2 and q.meta.remaining_value > 1,
    apply=_two_active_counting,
)


# --------------
# Topology
# --------------

def _closes_dragon(query: TacticQuery, other: int, weight: int) -> bool:
    """Would ``weight`` more between the island and ``other`` seal off a finished group?"""
    context = query.context
    mine = context.dragon_of(query.index)
    theirs = context.dragon_of(other)

    heads, size = mine.heads, mine.size
    if theirs.id != mine.id:
        heads += theirs.heads
        size += theirs.size
    if query.meta.remaining_value == weight:
        heads -= 1
    if context.metas[other].remaining_value == weight:
        heads -= 1
    return heads == 0 and size < len(context.metas)


def _topology_capacities(query: TacticQuery) -> Dict[int, int]:
    capacities = {}
    for other in query.meta.active_neighbours:
        capacity = _capacity(query, other)
        if capacity >= 1 and _closes_dragon(query, other, 1):
            capacity = 0
        elif capacity == 2 and _closes_dragon(query, other, 2):
            capacity = 1
        capacities[other] = capacity
    return capacities


def _isolation_applicable(query: TacticQuery) -> bool:
    if query.meta.remaining_value <= 0:
        return False
    capacities = _topology_capacities(query)
    return any(capacities[n] < _capacity(query, n) for n in capacities)


def _avoid_isolation(query: TacticQuery) -> bool:
    meta = query.meta
    capacities = _topology_capacities(query)
    total = sum(capacities.values())
    if total < meta.remaining_value:
        raise Contradiction(
            f"Island {meta.index} needs {meta.remaining_value} more bridge(s) "
            f"without isolating a group, only {total} possible"
        )
    for other in meta.active_neighbours:
        if capacities[other] == 0:
            continue
        if meta.remaining_value - (total - capacities[other]) >= 1:
            return _add_one(query, other)
    return False


AVOID_ISOLATION = Tactic(
    name="avoid_isolation",
    label=("A bridge that would close a finished group off from the rest of the board "
           "is impossible, so the remaining bridges must go to the other neighbours."),
    is_applicable=_isolation_applicable,
    apply=_avoid_isolation,
)


TACTICS: List[Tactic] = [
    FORCED_COMPLETION,
    _exact_coverage(3, 2),
    _exact_coverage(4, 2),
    _exact_coverage(5, 3),
    _exact_coverage(6, 3),
    _exact_coverage(7, 4),
    _exact_coverage(8, 4),
    SATURATION,
    THREE_WITH_ONE_AND_TWO,
    TWO_WITH_SMALL_NEIGHBOUR,
    TWO_ACTIVE_COUNTING,
    AVOID_ISOLATION,
]

TACTICS_BY_NAME: Dict[str, Tactic] = {t.name: t for t in TACTICS}
