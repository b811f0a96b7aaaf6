"""
Feasibility rule for binary selections.
Two numerically adjacent indices may never be selected together.
"""

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class AdjacencyViolation:
    """A pair of selected indices with right == left + 1."""
    left: int
    right: int

    @property
    def message(self) -> str:
        return f"Indices {self.left} and {self.right} are both selected"


def is_adjacent(left: int, right: int) -> bool:
    """True if ``right`` directly follows ``left``."""
    return left + 1 == right


def find_adjacency_violations(elements: Iterable[int]) -> List[AdjacencyViolation]:
    """
    Scan the selection in ascending order and report every adjacent pair.

    Overlapping runs are reported pairwise, so {3, 4, 5} yields (3, 4) and (4, 5).
    """
    ordered = sorted(elements)
    violations = []
    for left, right in zip(ordered, ordered[1:]):
        if is_adjacent(left, right):
            violations.append(AdjacencyViolation(left=left, right=right))
    return violations


def is_feasible(elements: Iterable[int]) -> bool:
    """Check the adjacency rule for a selection."""
    return not find_adjacency_violations(elements)
