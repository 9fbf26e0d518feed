"""Player domain model with lenient FPL feed parsing."""

from enum import Enum
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...utils.helpers import parse_decimal, parse_int, parse_optional_int


class Position(str, Enum):
    """FPL player positions."""

    GKP = "GKP"
    DEF = "DEF"
    MID = "MID"
    FWD = "FWD"

    @classmethod
    def from_element_type(cls, element_type: int) -> "Position":
        """Map the FPL element_type code (1-4) to a position."""
        mapping = {1: cls.GKP, 2: cls.DEF, 3: cls.MID, 4: cls.FWD}
        try:
            return mapping[int(element_type)]
        except (KeyError, TypeError, ValueError):
            raise ValueError(f"Unknown element_type: {element_type!r}")


class AvailabilityStatus(str, Enum):
    """Player availability status."""

    AVAILABLE = "a"
    DOUBTFUL = "d"
    INJURED = "i"
    SUSPENDED = "s"
    UNAVAILABLE = "u"
    UNKNOWN = "n"  # Sometimes appears in FPL data


# Doubtful players keep playing time in the combined chance
FLAGGED_STATUSES = frozenset(
    {
        AvailabilityStatus.INJURED,
        AvailabilityStatus.SUSPENDED,
        AvailabilityStatus.UNAVAILABLE,
        AvailabilityStatus.UNKNOWN,
    }
)


class PlayerDomain(BaseModel):
    """
    Domain model for an FPL player as published in the bootstrap feed.

    Numeric fields are parsed leniently: malformed or missing values become 0
    instead of raising, because the feed publishes several figures as strings.
    """

    model_config = ConfigDict(frozen=True)

    player_id: int = Field(..., gt=0, description="Unique FPL player ID")
    web_name: str = Field(..., min_length=1, max_length=50, description="Display name")
    team_id: int = Field(..., ge=1, description="Club ID")
    position: Position = Field(..., description="Player position")
    now_cost: int = Field(default=0, description="Price in tenths of a million")
    total_points: int = Field(default=0, description="Season points")
    goals_scored: int = Field(default=0, description="Season goals")
    assists: int = Field(default=0, description="Season assists")
    minutes: int = Field(default=0, description="Season minutes")
    clean_sheets: int = Field(default=0, description="Season clean sheets")
    form: str = Field(default="0.0", description="Recent form as published")
    points_per_game: str = Field(default="0.0", description="Points per game")
    selected_by_percent: str = Field(default="0.0", description="Ownership %")
    chance_of_playing_next_round: Optional[int] = Field(
        None, description="Chance of playing next round (%), None when unflagged"
    )
    status: AvailabilityStatus = Field(
        default=AvailabilityStatus.AVAILABLE, description="Availability status"
    )

    @field_validator(
        "now_cost",
        "total_points",
        "goals_scored",
        "assists",
        "minutes",
        "clean_sheets",
        mode="before",
    )
    @classmethod
    def parse_counts(cls, v: Any) -> int:
        return parse_int(v)

    @field_validator("form", "points_per_game", "selected_by_percent", mode="before")
    @classmethod
    def parse_decimal_strings(cls, v: Any) -> str:
        if v is None:
            return "0.0"
        return str(v)

    @field_validator("chance_of_playing_next_round", mode="before")
    @classmethod
    def parse_chance(cls, v: Any) -> Optional[int]:
        return parse_optional_int(v)

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v: Any) -> AvailabilityStatus:
        """Unknown status codes are treated as available."""
        try:
            return AvailabilityStatus(v)
        except ValueError:
            return AvailabilityStatus.AVAILABLE

    @field_validator("web_name")
    @classmethod
    def validate_web_name(cls, v: str) -> str:
        trimmed = v.strip()
        if not trimmed:
            raise ValueError("web_name must not be blank")
        return trimmed

    @classmethod
    def from_api(cls, element: Dict[str, Any]) -> "PlayerDomain":
        """Build a player from an FPL bootstrap-static element."""
        return cls(
            player_id=element["id"],
            web_name=element.get("web_name") or f"Player {element['id']}",
            team_id=element["team"],
            position=Position.from_element_type(element["element_type"]),
            now_cost=element.get("now_cost"),
            total_points=element.get("total_points"),
            goals_scored=element.get("goals_scored"),
            assists=element.get("assists"),
            minutes=element.get("minutes"),
            clean_sheets=element.get("clean_sheets"),
            form=element.get("form"),
            points_per_game=element.get("points_per_game"),
            selected_by_percent=element.get("selected_by_percent"),
            chance_of_playing_next_round=element.get("chance_of_playing_next_round"),
            status=element.get("status", "a"),
        )

    @property
    def price(self) -> float:
        """Price in millions."""
        return self.now_cost / 10

    @property
    def form_value(self) -> float:
        return parse_decimal(self.form)

    @property
    def ppg_value(self) -> float:
        return parse_decimal(self.points_per_game)

    @property
    def ownership(self) -> float:
        return parse_decimal(self.selected_by_percent)

    @property
    def is_flagged(self) -> bool:
        """Whether the player is injured, suspended or otherwise unavailable."""
        return self.status in FLAGGED_STATUSES

    @property
    def availability_chance(self) -> int:
        """Combined availability signal used by scoring and transfers."""
        return self.combined_chance()

    def combined_chance(self, flagged_statuses: Optional[Iterable[str]] = None) -> int:
        """
        Combine status and chance of playing into a single 0-100 signal.

        Flagged players take their published chance at face value, with a
        missing chance read as 0. Unflagged players count as fully available.

        Args:
            flagged_statuses: Status codes treated as flagged (default: injured,
                suspended, unavailable and unknown)
        """
        if flagged_statuses is None:
            flagged = self.is_flagged
        else:
            flagged = self.status.value in set(flagged_statuses)
        if flagged:
            if self.chance_of_playing_next_round is None:
                return 0
            return self.chance_of_playing_next_round
        return 100
