"""
QBF local search package.
Insertion/removal/exchange local search with adjacency repair for binary problems.
"""

__version__ = "0.1.0"

from .models import Solution, CandidatePools, IndexState, LocalSearchResult
from .objective import ObjectiveFunction, QBF, InverseQBF, generate_instance
from .repair import RepairEngine, RepairStrategy
from .moves import Move, MoveKind, MoveEvaluator, ImprovementPolicy
from .solver_local import LocalSearchSolver
from .service import QBFSearchService

__all__ = [
    "Solution",
    "CandidatePools",
    "IndexState",
    "LocalSearchResult",
    "ObjectiveFunction",
    "QBF",
    "InverseQBF",
    "generate_instance",
    "RepairEngine",
    "RepairStrategy",
    "Move",
    "MoveKind",
    "MoveEvaluator",
    "ImprovementPolicy",
    "LocalSearchSolver",
    "QBFSearchService",
]
