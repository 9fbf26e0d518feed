"""Domain services for business logic."""

from .chip_assessment_service import ChipAssessmentService
from .data_orchestration_service import DataOrchestrationService, GameweekSnapshot
from .fixture_analysis_service import FixtureAnalysisService, FixtureLookup
from .optimization_service import OptimizationService
from .recommendation_service import Recommendation, RecommendationService
from .scoring_service import PerformanceScoringService

__all__ = [
    "ChipAssessmentService",
    "DataOrchestrationService",
    "GameweekSnapshot",
    "FixtureAnalysisService",
    "FixtureLookup",
    "OptimizationService",
    "PerformanceScoringService",
    "Recommendation",
    "RecommendationService",
]
