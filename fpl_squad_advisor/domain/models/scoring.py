"""Scored and ranked player models produced by the scoring pipeline."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .fixture import PlayerFixture
from .player import PlayerDomain, Position


class PenaltyTier(str, Enum):
    """Rank-based fixture penalty applied to a player's base score."""

    ELITE = "NONE (Top 10 - Elite)"
    MODERATE = "MODERATE (-30%)"
    HARD = "HARD (-60%)"
    IMMUNE = "NONE (Top 20 - Immune to hard fixtures)"
    NONE = "NONE"


class ScoredPlayer(BaseModel):
    """A player with the base performance score for one computation cycle."""

    model_config = ConfigDict(frozen=True)

    player: PlayerDomain
    base_score: float = Field(..., description="Deterministic performance score")
    next_fixture: Optional[PlayerFixture] = Field(
        None, description="First upcoming fixture, if any"
    )
    fixture_bonus: float = Field(default=0.0, description="Next fixture bonus")
    difficulty: Optional[int] = Field(
        None, ge=1, le=5, description="Next fixture difficulty"
    )
    fixtures: List[PlayerFixture] = Field(
        default_factory=list, description="Upcoming fixtures in round order"
    )

    @property
    def player_id(self) -> int:
        return self.player.player_id

    @property
    def web_name(self) -> str:
        return self.player.web_name

    @property
    def position(self) -> Position:
        return self.player.position

    @property
    def team_id(self) -> int:
        return self.player.team_id


class RankedPlayer(ScoredPlayer):
    """A scored player after the pool-relative rank penalty pass."""

    rank: int = Field(..., ge=1, description="1-indexed rank by base score")
    final_score: float = Field(..., description="Base score after rank penalty")
    penalty_applied: PenaltyTier = Field(..., description="Penalty tier applied")
