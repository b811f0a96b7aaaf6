"""
Core data models for the QBF local search.
Solution container, per-index pool state and the local search result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


class IndexState(str, Enum):
    """Where a domain index currently lives."""
    CANDIDATE = "candidate"
    TRASH = "trash"
    SELECTED = "selected"


@dataclass
class Solution:
    """Ordered, duplicate-free selection of domain indices with a cached cost."""
    elements: List[int] = field(default_factory=list)
    cost: float = 0.0

    @classmethod
    def empty(cls) -> "Solution":
        """All variables off, which costs exactly zero for a QBF."""
        return cls(elements=[], cost=0.0)

    def __contains__(self, index: int) -> bool:
        return index in self.elements

    def __iter__(self) -> Iterator[int]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, position: int) -> int:
        return self.elements[position]

    def add(self, index: int) -> None:
        self.elements.append(index)

    def remove(self, index: int) -> None:
        self.elements.remove(index)

    def view(self) -> Tuple[int, ...]:
        """Read-only snapshot handed to the objective function."""
        return tuple(self.elements)

    def copy(self) -> "Solution":
        return Solution(elements=list(self.elements), cost=self.cost)

    def __str__(self) -> str:
        return f"Solution(cost={self.cost:.4f}, size={len(self.elements)}, elements={sorted(self.elements)})"


class CandidatePools:
    """
    Tagged state for every domain index.

    An index is exactly one of SELECTED (in the solution), CANDIDATE (in the
    active candidate list) or TRASH (removed by repair and held back from the
    candidate list). Keeping a single state per index makes the three pools
    disjoint by construction.
    """

    def __init__(self, domain_size: int, selected: Iterable[int] = ()):
        """Build the candidate list as every index not in ``selected``."""
        self.domain_size = domain_size
        self._state: List[IndexState] = [IndexState.CANDIDATE] * domain_size

        for index in selected:
            if not 0 <= index < domain_size:
                raise ValueError(f"Index {index} outside domain of size {domain_size}")
            if self._state[index] is IndexState.SELECTED:
                raise ValueError(f"Index {index} appears more than once in the solution")
            self._state[index] = IndexState.SELECTED

    def state(self, index: int) -> IndexState:
        return self._state[index]

    def candidates(self) -> List[int]:
        """Active candidate list, in ascending index order."""
        return [i for i, s in enumerate(self._state) if s is IndexState.CANDIDATE]

    def trash(self) -> List[int]:
        """Indices held out by repair, in ascending index order."""
        return [i for i, s in enumerate(self._state) if s is IndexState.TRASH]

    def selected(self) -> List[int]:
        return [i for i, s in enumerate(self._state) if s is IndexState.SELECTED]

    def update(self) -> None:
        # Every unselected index stays a viable candidate, nothing to filter.
        pass

    def select(self, index: int) -> IndexState:
        """Move a candidate or trashed index into the solution; returns its previous state."""
        previous = self._state[index]
        self._state[index] = IndexState.SELECTED
        return previous

    def release(self, index: int) -> None:
        """A selected index leaves the solution and rejoins the candidate list."""
        self._state[index] = IndexState.CANDIDATE

    def discard(self, index: int) -> None:
        """A selected index removed by repair is parked in the trash."""
        self._state[index] = IndexState.TRASH

    def counts(self) -> Dict[IndexState, int]:
        totals = {state: 0 for state in IndexState}
        for s in self._state:
            totals[s] += 1
        return totals


@dataclass
class LocalSearchResult:
    """Outcome of a single local search call."""
    solution: Solution
    rounds: int
    moves_applied: int
    insertions_applied: int
    repairs_run: int
    repair_removals: int
    computation_time_seconds: float
    feasible: bool
    trace_data: Optional[List[Dict]] = None

    @property
    def cost(self) -> float:
        return self.solution.cost
