"""
Neighborhood moves for binary local search.
Evaluates insertion, removal and exchange moves under best- or first-improvement.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .models import CandidatePools, Solution
from .objective import ObjectiveFunction


logger = logging.getLogger(__name__)


class MoveKind(str, Enum):
    """Neighborhood move types."""
    INSERTION = "insertion"
    TRASH_INSERTION = "trash_insertion"
    REMOVAL = "removal"
    EXCHANGE = "exchange"


class ImprovementPolicy(str, Enum):
    """Which move of a round is returned."""
    BEST = "best"
    FIRST = "first"


@dataclass
class Move:
    """A proposed change to the solution and its cost delta."""
    kind: MoveKind
    delta: float
    cand_in: Optional[int] = None
    cand_out: Optional[int] = None

    def __str__(self) -> str:
        parts = []
        if self.cand_out is not None:
            parts.append(f"out={self.cand_out}")
        if self.cand_in is not None:
            parts.append(f"in={self.cand_in}")
        return f"Move({self.kind.value}: {', '.join(parts)}, delta={self.delta:.4f})"


class MoveEvaluator:
    """Scans the neighborhood of a solution for the move to apply."""

    def __init__(
        self,
        objective: ObjectiveFunction,
        policy: ImprovementPolicy = ImprovementPolicy.BEST,
        epsilon: float = 1e-9
    ):
        """Initialize with the cost oracle, a policy and the improvement tolerance."""
        self.objective = objective
        self.policy = ImprovementPolicy(policy)
        self.epsilon = epsilon

    def is_improving(self, delta: float) -> bool:
        """A delta counts as improving only below -epsilon; zero never does."""
        return delta < -self.epsilon

    def find_move(
        self,
        solution: Solution,
        pools: CandidatePools,
        include_trash: bool = False
    ) -> Optional[Move]:
        """
        Pick the move of this round.

        Args:
            solution: Current solution, read only
            pools: Candidate and trash pools, read only
            include_trash: Also consider re-inserting trashed indices
                (best-improvement only)

        Returns:
            The selected move, or None if the neighborhood is empty. The move
            is not necessarily improving; callers check ``is_improving``.
        """
        view = solution.view()
        candidates = pools.candidates()

        if self.policy is ImprovementPolicy.FIRST:
            return self._first_improving(view, candidates)

        trash = pools.trash() if include_trash else []
        return self._best_improving(view, candidates, trash)

    def _best_improving(self, view: Sequence[int], candidates, trash) -> Optional[Move]:
        """Full scan; the first minimum found wins ties."""
        best = None
        min_delta = math.inf

        # Evaluate insertions
        for cand_in in candidates:
            delta = self.objective.insertion_cost(cand_in, view)
            if delta < min_delta:
                min_delta = delta
                best = Move(MoveKind.INSERTION, delta, cand_in=cand_in)

        # Evaluate insertions from the trash
        for cand_in in trash:
            delta = self.objective.insertion_cost(cand_in, view)
            if delta < min_delta:
                min_delta = delta
                best = Move(MoveKind.TRASH_INSERTION, delta, cand_in=cand_in)

        # Evaluate removals
        for cand_out in view:
            delta = self.objective.removal_cost(cand_out, view)
            if delta < min_delta:
                min_delta = delta
                best = Move(MoveKind.REMOVAL, delta, cand_out=cand_out)

        # Evaluate exchanges
        for cand_in in candidates:
            for cand_out in view:
                delta = self.objective.exchange_cost(cand_in, cand_out, view)
                if delta < min_delta:
                    min_delta = delta
                    best = Move(MoveKind.EXCHANGE, delta, cand_in=cand_in, cand_out=cand_out)

        return best

    def _first_improving(self, view: Sequence[int], candidates) -> Optional[Move]:
        """
        Scan insertion, removal, exchange in that order and return the first
        move whose delta beats the running minimum (initially +infinity).

        The first move scanned always qualifies, so the round ends on it and
        the acceptance rule decides whether it is applied. The trash is never
        consulted.
        """
        min_delta = math.inf

        # Evaluate insertions
        for cand_in in candidates:
            delta = self.objective.insertion_cost(cand_in, view)
            if delta < min_delta:
                return Move(MoveKind.INSERTION, delta, cand_in=cand_in)

        # Evaluate removals
        for cand_out in view:
            delta = self.objective.removal_cost(cand_out, view)
            if delta < min_delta:
                return Move(MoveKind.REMOVAL, delta, cand_out=cand_out)

        # Evaluate exchanges
        for cand_in in candidates:
            for cand_out in view:
                delta = self.objective.exchange_cost(cand_in, cand_out, view)
                if delta < min_delta:
                    return Move(MoveKind.EXCHANGE, delta, cand_in=cand_in, cand_out=cand_out)

        return None
