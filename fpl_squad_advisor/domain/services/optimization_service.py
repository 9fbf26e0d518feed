"""Optimization service for FPL lineup and transfer decisions.

This service contains the core decision algorithms:
- Starting XI selection with formation optimization
- Bench ordering and the bench boost lineup
- Captain selection
- Greedy transfer recommendations and single-swap evaluation

This is a thin facade that composes all optimization mixins.
"""

from typing import Optional

from fpl_squad_advisor.config import FPLConfig, config

from .optimization import CaptainServiceMixin, TransferOptimizationMixin
from .scoring_service import PerformanceScoringService


class OptimizationService(
    TransferOptimizationMixin,
    CaptainServiceMixin,
):
    """Service for FPL optimization algorithms and constraint satisfaction.

    This class composes all optimization functionality through mixins:
    - OptimizationBaseMixin: Shared utilities (inherited via other mixins)
    - SquadSelectionMixin: Starting XI and bench (inherited via TransferOptimizationMixin)
    - CaptainServiceMixin: Captain recommendations
    - TransferOptimizationMixin: Greedy transfer search
    """

    def __init__(
        self,
        settings: Optional[FPLConfig] = None,
        scoring: Optional[PerformanceScoringService] = None,
    ):
        """Initialize optimization service.

        Args:
            settings: Optional configuration override
            scoring: Optional scorer; one bound to the same config is created otherwise
        """
        self.config = settings or config
        self.scoring = scoring or PerformanceScoringService(self.config)
