"""
Local search driver for binary-variable QBF problems.
Repeats insertion/removal/exchange moves with periodic repair and trash re-admission.
"""

import logging
import random
from datetime import datetime
from typing import Dict, List, Optional

from .constraints import is_feasible
from .models import CandidatePools, IndexState, LocalSearchResult, Solution
from .moves import ImprovementPolicy, Move, MoveEvaluator
from .objective import ObjectiveFunction
from .repair import RepairEngine, RepairStrategy
from .schemas import RepairConfig, SearchConfig


logger = logging.getLogger(__name__)


class LocalSearchSolver:
    """Local search with periodic adjacency repair."""

    def __init__(
        self,
        objective: ObjectiveFunction,
        rng: random.Random,
        search_config: Optional[SearchConfig] = None,
        repair_config: Optional[RepairConfig] = None
    ):
        """
        Initialize solver.

        Args:
            objective: Cost oracle for the instance
            rng: Generator shared with the enclosing driver
            search_config: Move policy, tolerance and frequency settings
            repair_config: Repair strategy settings
        """
        self.objective = objective
        self.rng = rng
        self.config = search_config or SearchConfig()
        repair_config = repair_config or RepairConfig()

        self.evaluator = MoveEvaluator(
            objective,
            policy=ImprovementPolicy(self.config.policy),
            epsilon=self.config.improvement_epsilon
        )
        self.repair_engine = RepairEngine(
            objective,
            rng,
            strategy=RepairStrategy(repair_config.strategy),
            left_probability=repair_config.left_probability
        )

    def local_search(self, solution: Solution, trace: bool = False) -> LocalSearchResult:
        """
        Improve ``solution`` in place until no improving move remains.

        Args:
            solution: Starting solution, owned by the search for the call
            trace: Whether to record one trace entry per round

        Returns:
            Result wrapping the improved, repaired solution
        """
        start_time = datetime.now()

        pools = CandidatePools(self.objective.domain_size, solution)
        solution.cost = self.objective.evaluate(solution.view())
        trace_data: Optional[List[Dict]] = [] if trace else None

        logger.info(f"Starting local search ({self.evaluator.policy.value}-improvement, "
                    f"{self.repair_engine.strategy.value} repair) on {self.objective.domain_size} variables, "
                    f"initial cost {solution.cost:.4f}")

        use_trash = self.evaluator.policy is ImprovementPolicy.BEST
        repair_count = 0
        trash_count = 0
        repair_frequency = self._draw_repair_frequency()
        trash_frequency = self._draw_trash_frequency()

        rounds = 0
        moves_applied = 0
        insertions_applied = 0
        repairs_run = 0
        repair_removals = 0

        while True:
            if self.config.max_rounds is not None and rounds >= self.config.max_rounds:
                logger.warning(f"Local search stopped at max_rounds={self.config.max_rounds}")
                break

            rounds += 1
            pools.update()
            repair_count += 1
            trash_count += 1

            admit_trash = False
            if use_trash and trash_count == trash_frequency:
                admit_trash = True
                trash_count = 0
                trash_frequency = self._next_trash_frequency()

            move = self.evaluator.find_move(solution, pools, include_trash=admit_trash)
            accepted = move is not None and self.evaluator.is_improving(move.delta)

            entry = None
            if trace_data is not None:
                entry = {
                    "round": rounds,
                    "move": move.kind.value if move else None,
                    "cand_in": move.cand_in if move else None,
                    "cand_out": move.cand_out if move else None,
                    "delta": move.delta if move else None,
                    "accepted": accepted,
                    "trash_admitted": admit_trash,
                    "cost_before": solution.cost,
                }
                trace_data.append(entry)

            if not accepted:
                break

            self._apply_move(move, solution, pools)
            moves_applied += 1
            if move.cand_in is not None:
                insertions_applied += 1
            solution.cost = self.objective.evaluate(solution.view())

            logger.debug(f"Round {rounds}: applied {move}, cost now {solution.cost:.4f}")
            if entry is not None:
                entry["cost_after_move"] = solution.cost

            if repair_count == repair_frequency:
                removed = self.repair_engine.repair(solution, pools)
                repairs_run += 1
                repair_removals += len(removed)
                repair_count = 0
                repair_frequency = self._draw_repair_frequency()
                if entry is not None:
                    entry["repair_removed"] = removed

        removed = self.repair_engine.repair(solution, pools)
        repairs_run += 1
        repair_removals += len(removed)

        computation_time = (datetime.now() - start_time).total_seconds()
        logger.debug(f"Final pools: {', '.join(f'{state.value}={count}' for state, count in pools.counts().items())}")

        logger.info(f"Local search completed in {computation_time:.2f}s after {rounds} rounds: "
                    f"{moves_applied} moves, {repairs_run} repairs, cost {solution.cost:.4f}")

        return LocalSearchResult(
            solution=solution,
            rounds=rounds,
            moves_applied=moves_applied,
            insertions_applied=insertions_applied,
            repairs_run=repairs_run,
            repair_removals=repair_removals,
            computation_time_seconds=computation_time,
            feasible=is_feasible(solution),
            trace_data=trace_data
        )

    def _apply_move(self, move: Move, solution: Solution, pools: CandidatePools) -> None:
        """Apply the removal half, then the insertion half, keeping pools in sync."""
        if move.cand_out is not None:
            solution.remove(move.cand_out)
            pools.release(move.cand_out)

        if move.cand_in is not None:
            previous = pools.select(move.cand_in)
            if previous is IndexState.TRASH:
                logger.debug(f"Index {move.cand_in} re-admitted from trash")
            solution.add(move.cand_in)

    def _draw_repair_frequency(self) -> int:
        """Rounds until the next repair, uniform on [1, repair_frequency_max]."""
        return self.rng.randrange(self.config.repair_frequency_max) + 1

    def _draw_trash_frequency(self) -> int:
        """Rounds until the next trash admission, uniform on [min, max)."""
        span = self.config.trash_frequency_max - self.config.trash_frequency_min
        return self.rng.randrange(span) + self.config.trash_frequency_min

    def _next_trash_frequency(self) -> int:
        """Usually the fixed constant, occasionally a fresh draw."""
        if self.rng.random() < self.config.trash_constant_probability:
            return self.config.trash_frequency_constant
        return self._draw_trash_frequency()
