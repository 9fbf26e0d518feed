"""
FPL Squad Advisor Package

A Fantasy Premier League (FPL) decision-support engine. Scores every player from a
snapshot of the official data feed, picks the best starting 11 across all legal
formations, recommends greedy budget- and quota-aware transfers, selects captain and
vice-captain, and schedules the one-time chips across both halves of the season.
"""

__version__ = "0.3.0"
