"""Fixture domain models."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FixtureDomain(BaseModel):
    """Domain model for FPL fixtures."""

    model_config = ConfigDict(frozen=True)

    fixture_id: int = Field(..., gt=0, description="Unique fixture ID")
    event: Optional[int] = Field(
        None, ge=1, le=38, description="Gameweek number (None when unscheduled)"
    )
    home_team_id: int = Field(..., ge=1, description="Home team ID")
    away_team_id: int = Field(..., ge=1, description="Away team ID")
    home_difficulty: int = Field(..., ge=1, le=5, description="FDR for the home side")
    away_difficulty: int = Field(..., ge=1, le=5, description="FDR for the away side")
    finished: bool = Field(default=False, description="Whether the match is over")

    @model_validator(mode="after")
    def validate_distinct_teams(self):
        if self.home_team_id == self.away_team_id:
            raise ValueError("A team cannot play itself")
        return self

    @classmethod
    def from_api(cls, fixture: Dict[str, Any]) -> "FixtureDomain":
        """Build a fixture from an FPL /fixtures/ entry."""
        return cls(
            fixture_id=fixture["id"],
            event=fixture.get("event"),
            home_team_id=fixture["team_h"],
            away_team_id=fixture["team_a"],
            home_difficulty=fixture["team_h_difficulty"],
            away_difficulty=fixture["team_a_difficulty"],
            finished=bool(fixture.get("finished", False)),
        )

    @property
    def involves_team(self) -> set[int]:
        """Get set of team IDs involved in this fixture."""
        return {self.home_team_id, self.away_team_id}

    def is_home_fixture(self, team_id: int) -> bool:
        """Check if the given team is playing at home."""
        return self.home_team_id == team_id

    def get_opponent(self, team_id: int) -> int:
        """Get the opponent team ID for the given team."""
        if team_id == self.home_team_id:
            return self.away_team_id
        elif team_id == self.away_team_id:
            return self.home_team_id
        else:
            raise ValueError(f"Team {team_id} is not involved in this fixture")

    def get_difficulty(self, team_id: int) -> int:
        """Get the side-specific difficulty rating for the given team."""
        if team_id == self.home_team_id:
            return self.home_difficulty
        elif team_id == self.away_team_id:
            return self.away_difficulty
        else:
            raise ValueError(f"Team {team_id} is not involved in this fixture")


class PlayerFixture(BaseModel):
    """An upcoming fixture seen from one player's side."""

    model_config = ConfigDict(frozen=True)

    opponent: str = Field(..., description="Opponent short name ('TBD' if unknown)")
    difficulty: int = Field(..., ge=1, le=5, description="Difficulty for the player")
    is_home: bool = Field(..., description="Player's club is at home")
    event: Optional[int] = Field(None, description="Gameweek number")
