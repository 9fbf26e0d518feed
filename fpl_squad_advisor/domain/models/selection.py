"""Lineup selection models: formations, team selections and captaincy."""

from typing import List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .player import Position
from .scoring import RankedPlayer


class Formation(NamedTuple):
    """Outfield shape of a starting 11 (the goalkeeper is implied)."""

    defenders: int
    midfielders: int
    forwards: int

    @property
    def label(self) -> str:
        return f"{self.defenders}-{self.midfielders}-{self.forwards}"

    def count_for(self, position: Position) -> int:
        """Number of starters the formation fields at a position."""
        return {
            Position.GKP: 1,
            Position.DEF: self.defenders,
            Position.MID: self.midfielders,
            Position.FWD: self.forwards,
        }[position]


# Search order matters: the first formation wins ties
VALID_FORMATIONS: List[Formation] = [
    Formation(3, 4, 3),
    Formation(3, 5, 2),
    Formation(4, 3, 3),
    Formation(4, 4, 2),
    Formation(4, 5, 1),
    Formation(5, 3, 2),
    Formation(5, 4, 1),
    Formation(5, 2, 3),
]

BENCH_BOOST_LABEL = "Bench Boost"


class TeamSelection(BaseModel):
    """
    Starting lineup and bench chosen from a squad.

    In bench-boost mode every squad player starts, the bench is empty and no
    formation applies.
    """

    model_config = ConfigDict(frozen=True)

    starting: List[RankedPlayer] = Field(..., description="Starting players")
    bench: List[RankedPlayer] = Field(
        default_factory=list, description="Bench, best first"
    )
    formation: Optional[Formation] = Field(None, description="Chosen formation")
    formation_score: float = Field(..., description="Sum of starters' final scores")
    is_bench_boost: bool = Field(default=False)

    @model_validator(mode="after")
    def validate_lineup(self):
        starting_ids = {p.player_id for p in self.starting}
        bench_ids = {p.player_id for p in self.bench}
        if len(starting_ids) != len(self.starting):
            raise ValueError("Starting lineup contains duplicate players")
        if starting_ids & bench_ids:
            raise ValueError("Starting lineup and bench must be disjoint")

        if self.is_bench_boost:
            if self.bench:
                raise ValueError("Bench boost selection has no bench")
            if self.formation is not None:
                raise ValueError("Bench boost selection has no formation")
            return self

        if len(self.starting) != 11:
            raise ValueError(
                f"Starting lineup must have 11 players, got {len(self.starting)}"
            )
        if self.formation is None:
            raise ValueError("A starting 11 requires a formation")
        for position in Position:
            count = sum(1 for p in self.starting if p.position == position)
            if count != self.formation.count_for(position):
                raise ValueError(
                    f"Formation {self.formation.label} needs "
                    f"{self.formation.count_for(position)} {position.value}, got {count}"
                )
        return self

    @property
    def formation_label(self) -> str:
        if self.is_bench_boost:
            return BENCH_BOOST_LABEL
        return self.formation.label

    @property
    def squad(self) -> List[RankedPlayer]:
        return self.starting + self.bench

    def is_starting(self, player_id: int) -> bool:
        return any(p.player_id == player_id for p in self.starting)


class CaptainSelection(BaseModel):
    """Captain and vice-captain chosen from a starting lineup."""

    model_config = ConfigDict(frozen=True)

    captain: RankedPlayer
    vice_captain: RankedPlayer
    reasoning: str = Field(..., min_length=1)
    ranked_starters: List[RankedPlayer] = Field(
        default_factory=list, description="Starters sorted by final score"
    )
