"""
Service layer for QBF local search.
Loads configuration, builds the objective and runs the solver.
"""

import logging
import random
from typing import Any, Dict, Iterable, Optional

import yaml

from .models import LocalSearchResult, Solution
from .objective import QBF, InverseQBF, ObjectiveFunction, generate_instance
from .schemas import AppConfig, Settings
from .solver_local import LocalSearchSolver


logger = logging.getLogger(__name__)


class QBFSearchService:
    """Main entry point for running local search on a generated instance."""

    def __init__(self, config_path: Optional[str] = None, settings: Optional[Settings] = None):
        """Initialize service with configuration."""
        self.settings = settings or Settings()
        self.config_path = config_path or self.settings.config_path
        self.config = self._load_config(self.config_path)

        if self.settings.log_level:
            self.config.logging.level = self.settings.log_level

        self._setup_logging()

    def _load_config(self, config_path: str) -> AppConfig:
        """Load configuration from YAML file."""
        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}
            return AppConfig(**config_data)
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

    def _setup_logging(self) -> None:
        """Setup logging configuration."""
        logging.basicConfig(
            level=getattr(logging, self.config.logging.level),
            format=self.config.logging.format
        )

    def apply_overrides(self, overrides: Dict[str, Any]) -> None:
        """Apply dot-path overrides onto loaded config (CLI > YAML)."""
        if not overrides:
            return
        data = self.config.model_dump()
        for path, value in overrides.items():
            parts = path.split('.')
            cur = data
            for p in parts[:-1]:
                if p not in cur or not isinstance(cur[p], dict):
                    raise KeyError(f"Unknown configuration key: {path}")
                cur = cur[p]
            if parts[-1] not in cur:
                raise KeyError(f"Unknown configuration key: {path}")
            cur[parts[-1]] = value
        # Re-validate so overrides go through the same checks as the YAML.
        self.config = AppConfig(**data)

    def build_objective(self) -> ObjectiveFunction:
        """Generate the configured instance and wrap it in an objective."""
        instance = self.config.instance
        matrix = generate_instance(instance.size, seed=instance.seed, low=instance.low, high=instance.high)
        objective_cls = InverseQBF if instance.maximize else QBF
        logger.info(f"Built {objective_cls.__name__} with {instance.size} variables (seed={instance.seed})")
        return objective_cls(matrix)

    def run(self, start: Optional[Iterable[int]] = None, trace: bool = False) -> LocalSearchResult:
        """
        Run one local search call from ``start`` (empty solution by default).

        Args:
            start: Indices switched on in the starting solution
            trace: Whether to record the per-round trace

        Returns:
            Local search result
        """
        objective = self.build_objective()
        rng = random.Random(self.config.search.random_seed)
        solver = LocalSearchSolver(objective, rng, self.config.search, self.config.repair)

        solution = Solution.empty() if start is None else Solution(elements=list(start))
        result = solver.local_search(solution, trace=trace)
        logger.debug(f"Final {result.solution}")
        return result
