"""
Repair of adjacency violations.
Removes one index from every adjacent pair in the solution and parks it in the trash.
"""

import logging
import random
from enum import Enum
from typing import List

from .constraints import is_adjacent
from .models import CandidatePools, Solution
from .objective import ObjectiveFunction


logger = logging.getLogger(__name__)


class RepairStrategy(str, Enum):
    """How to pick which index of an adjacent pair is dropped."""
    DETERMINISTIC = "deterministic"  # always the right-hand index
    WINDOW = "window"                # the one whose removal is cheaper
    RANDOMIZED = "randomized"        # coin flip


class RepairEngine:
    """Restores feasibility of a solution after moves have broken it."""

    def __init__(
        self,
        objective: ObjectiveFunction,
        rng: random.Random,
        strategy: RepairStrategy = RepairStrategy.RANDOMIZED,
        left_probability: float = 0.5
    ):
        """Initialize with the cost oracle, the shared generator and a strategy."""
        self.objective = objective
        self.rng = rng
        self.strategy = RepairStrategy(strategy)
        self.left_probability = left_probability

    def repair(self, solution: Solution, pools: CandidatePools) -> List[int]:
        """
        Drop one index of every adjacent pair and re-evaluate the solution.

        The scan walks a sorted copy of the solution. After a removal the same
        position is checked again, so a run such as {3, 4, 5} is fully resolved
        in one pass. Removed indices go to the trash.

        Args:
            solution: Solution to repair in place
            pools: Pools of the running local search

        Returns:
            Removed indices, in removal order
        """
        ordered = sorted(solution)
        removed = []

        index = 0
        while index < len(ordered) - 1:
            if not is_adjacent(ordered[index], ordered[index + 1]):
                index += 1
                continue

            position = index + self._pick_offset(ordered[index], ordered[index + 1], solution)
            value = ordered.pop(position)
            solution.remove(value)
            pools.discard(value)
            removed.append(value)

        solution.cost = self.objective.evaluate(solution.view())

        if removed:
            logger.debug(f"Repair ({self.strategy.value}) removed {removed}, cost now {solution.cost:.4f}")
        return removed

    def _pick_offset(self, left: int, right: int, solution: Solution) -> int:
        """
        0 to drop ``left``, 1 to drop ``right``.

        Window drops the index with the lower removal delta so the kept
        solution is the cheaper one; this intentionally reverses the older
        lookahead, which dropped the higher-delta index.
        """
        if self.strategy is RepairStrategy.DETERMINISTIC:
            return 1

        if self.strategy is RepairStrategy.WINDOW:
            view = solution.view()
            left_cost = self.objective.removal_cost(left, view)
            right_cost = self.objective.removal_cost(right, view)
            return 0 if left_cost <= right_cost else 1

        return 0 if self.rng.random() <= self.left_probability else 1
