"""
FPL Squad Advisor Interfaces

This package contains the presentation layer:
- DataFrame builders for lineups, transfers and chip plans
- The Typer command line application
"""

__all__ = []
