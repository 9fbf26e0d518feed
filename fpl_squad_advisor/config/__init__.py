"""
FPL Squad Advisor Configuration Module

Provides centralized configuration management for the entire application.
Import the global config instance to access all configuration values.

Usage:
    from fpl_squad_advisor.config import config

    # Access scoring weights
    form_weight = config.scoring.form_weight

    # Access rank penalty thresholds
    elite_rank = config.rank_penalty.elite_rank

    # Access transfer search limits
    pool_size = config.transfers.candidate_pool_size
"""

from .settings import (
    APIConfig,
    ChipCalendarConfig,
    FixtureConfig,
    FPLConfig,
    RankPenaltyConfig,
    ScoringConfig,
    TransferConfig,
    config,
    load_config,
)

__all__ = [
    "FPLConfig",
    "ScoringConfig",
    "RankPenaltyConfig",
    "FixtureConfig",
    "TransferConfig",
    "ChipCalendarConfig",
    "APIConfig",
    "config",
    "load_config",
]
