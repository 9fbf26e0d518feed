"""Domain models with strict data contracts for frontend-agnostic architecture."""

from .chip import ChipKind, ChipStrategy, ChipSuggestion, ChipUsage
from .fixture import FixtureDomain, PlayerFixture
from .player import AvailabilityStatus, PlayerDomain, Position
from .scoring import PenaltyTier, RankedPlayer, ScoredPlayer
from .selection import (
    BENCH_BOOST_LABEL,
    VALID_FORMATIONS,
    CaptainSelection,
    Formation,
    TeamSelection,
)
from .squad import SquadSlot, SquadSnapshot
from .team import TeamDomain
from .transfer import Transfer, TransferEvaluation, TransferKind

__all__ = [
    "PlayerDomain",
    "Position",
    "AvailabilityStatus",
    "TeamDomain",
    "FixtureDomain",
    "PlayerFixture",
    "ScoredPlayer",
    "RankedPlayer",
    "PenaltyTier",
    "Formation",
    "VALID_FORMATIONS",
    "BENCH_BOOST_LABEL",
    "TeamSelection",
    "CaptainSelection",
    "Transfer",
    "TransferKind",
    "TransferEvaluation",
    "ChipKind",
    "ChipUsage",
    "ChipSuggestion",
    "ChipStrategy",
    "SquadSlot",
    "SquadSnapshot",
]
