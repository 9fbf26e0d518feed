"""Optimization module for FPL lineup, captaincy and transfer decisions.

This module provides:
- Starting XI and bench selection
- Captain and vice-captain selection
- Greedy transfer recommendations

Usage:
    from fpl_squad_advisor.domain.services.optimization_service import OptimizationService

    service = OptimizationService()
    selection = service.select_optimal_starting_11(squad, fixture_lookup)
"""

from .optimization_base import OptimizationBaseMixin
from .squad_selection import SquadSelectionMixin
from .captain_service import CaptainServiceMixin
from .transfer_core import TransferOptimizationMixin

__all__ = [
    "OptimizationBaseMixin",
    "SquadSelectionMixin",
    "CaptainServiceMixin",
    "TransferOptimizationMixin",
]
