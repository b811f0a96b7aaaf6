"""
Objective functions for binary-variable local search.
Quadratic binary function (QBF) and its inverse, with incremental move costs.
"""

import logging
import random
from abc import ABC, abstractmethod
from typing import List, Sequence


logger = logging.getLogger(__name__)


class ObjectiveFunction(ABC):
    """
    Cost oracle queried by the local search.

    Every method receives a read-only snapshot of the solution (a tuple of
    selected indices) and returns a number; none of them touch the solution.
    """

    @property
    @abstractmethod
    def domain_size(self) -> int:
        """Number of binary variables."""

    @abstractmethod
    def evaluate(self, view: Sequence[int]) -> float:
        """Full objective value of the selection."""

    @abstractmethod
    def insertion_cost(self, candidate: int, view: Sequence[int]) -> float:
        """Change in cost from switching ``candidate`` on."""

    @abstractmethod
    def removal_cost(self, element: int, view: Sequence[int]) -> float:
        """Change in cost from switching ``element`` off."""

    @abstractmethod
    def exchange_cost(self, candidate: int, element: int, view: Sequence[int]) -> float:
        """Change in cost from switching ``element`` off and ``candidate`` on."""


class QBF(ObjectiveFunction):
    """
    Quadratic binary function f(x) = x'.A.x.

    Only the upper triangle of ``matrix`` is used; entries below the diagonal
    are zeroed on construction.
    """

    def __init__(self, matrix: Sequence[Sequence[float]]):
        size = len(matrix)
        if size == 0:
            raise ValueError("QBF matrix must have at least one row")
        for row in matrix:
            if len(row) != size:
                raise ValueError(f"QBF matrix must be square, got a row of length {len(row)} for size {size}")

        self._size = size
        self.A: List[List[float]] = [
            [float(matrix[i][j]) if j >= i else 0.0 for j in range(size)]
            for i in range(size)
        ]

    @property
    def domain_size(self) -> int:
        return self._size

    def evaluate(self, view: Sequence[int]) -> float:
        total = 0.0
        for i in view:
            row = self.A[i]
            for j in view:
                total += row[j]
        return total

    def _contribution(self, index: int, view: Sequence[int]) -> float:
        """Interaction of ``index`` with the selection, plus its diagonal term."""
        total = 0.0
        for j in view:
            if j != index:
                total += self.A[index][j] + self.A[j][index]
        return total + self.A[index][index]

    def insertion_cost(self, candidate: int, view: Sequence[int]) -> float:
        if candidate in view:
            return 0.0
        return self._contribution(candidate, view)

    def removal_cost(self, element: int, view: Sequence[int]) -> float:
        if element not in view:
            return 0.0
        return -self._contribution(element, view)

    def exchange_cost(self, candidate: int, element: int, view: Sequence[int]) -> float:
        if candidate == element:
            return 0.0
        if candidate in view:
            return self.removal_cost(element, view)
        if element not in view:
            return self.insertion_cost(candidate, view)

        total = self._contribution(candidate, view)
        total -= self._contribution(element, view)
        total -= self.A[candidate][element] + self.A[element][candidate]
        return total


class InverseQBF(QBF):
    """Negated QBF, so that minimising it maximises the original function."""

    def evaluate(self, view: Sequence[int]) -> float:
        return -super().evaluate(view)

    def insertion_cost(self, candidate: int, view: Sequence[int]) -> float:
        return -super().insertion_cost(candidate, view)

    def removal_cost(self, element: int, view: Sequence[int]) -> float:
        return -super().removal_cost(element, view)

    def exchange_cost(self, candidate: int, element: int, view: Sequence[int]) -> float:
        return -super().exchange_cost(candidate, element, view)


def generate_instance(size: int, seed: int = 0, low: int = -10, high: int = 10) -> List[List[float]]:
    """Random upper-triangular integer matrix for a QBF of ``size`` variables."""
    if size < 1:
        raise ValueError(f"Instance size must be positive, got {size}")
    if low > high:
        raise ValueError(f"Coefficient range is empty: [{low}, {high}]")

    rng = random.Random(seed)
    matrix = [
        [float(rng.randint(low, high)) if j >= i else 0.0 for j in range(size)]
        for i in range(size)
    ]
    logger.debug(f"Generated QBF instance of size {size} (seed={seed}, range=[{low}, {high}])")
    return matrix
