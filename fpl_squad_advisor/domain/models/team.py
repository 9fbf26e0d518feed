"""Team domain model."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class TeamDomain(BaseModel):
    """Domain model for FPL teams."""

    model_config = ConfigDict(frozen=True)

    team_id: int = Field(..., ge=1, description="Club ID")
    name: str = Field(..., min_length=1, max_length=100, description="Full team name")
    short_name: str = Field(
        ..., min_length=2, max_length=4, description="3-letter team code"
    )

    @classmethod
    def from_api(cls, team: Dict[str, Any]) -> "TeamDomain":
        """Build a team from an FPL bootstrap-static team entry."""
        return cls(
            team_id=team["id"],
            name=team.get("name") or team["short_name"],
            short_name=team["short_name"],
        )
