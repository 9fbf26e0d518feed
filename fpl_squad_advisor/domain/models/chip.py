"""Chip usage and chip timing models."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChipKind(str, Enum):
    """FPL chips, named as the API reports them."""

    WILDCARD = "wildcard"
    FREE_HIT = "freehit"
    BENCH_BOOST = "bboost"
    TRIPLE_CAPTAIN = "3xc"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower()
            aliases = {"benchboost": cls.BENCH_BOOST, "triplecaptain": cls.TRIPLE_CAPTAIN}
            if normalized in aliases:
                return aliases[normalized]
            for member in cls:
                if member.value == normalized:
                    return member
        return None

    @property
    def display_name(self) -> str:
        return {
            ChipKind.WILDCARD: "Wildcard",
            ChipKind.FREE_HIT: "Free Hit",
            ChipKind.BENCH_BOOST: "Bench Boost",
            ChipKind.TRIPLE_CAPTAIN: "Triple Captain",
        }[self]


class ChipUsage(BaseModel):
    """A chip played in a given gameweek."""

    model_config = ConfigDict(frozen=True)

    chip: ChipKind
    event: int = Field(..., ge=1, le=38, description="Gameweek the chip was played")

    @classmethod
    def from_api(cls, entry: Dict[str, Any]) -> Optional["ChipUsage"]:
        """Build a usage from an entry history 'chips' item; unknown chips give None."""
        try:
            return cls(chip=ChipKind(entry.get("name")), event=entry.get("event"))
        except ValueError:
            return None


class ChipSuggestion(BaseModel):
    """Suggested gameweek for an unused chip."""

    model_config = ConfigDict(frozen=True)

    chip: ChipKind
    suggested_round: int = Field(..., ge=1, le=38)
    justification: str = Field(..., min_length=1)
    urgent: bool = Field(default=False)
    phase: int = Field(..., ge=1, le=2, description="1 = first chip set, 2 = second")


class ChipStrategy(BaseModel):
    """Timing plan for every chip still available in the current phase."""

    model_config = ConfigDict(frozen=True)

    current_event: int = Field(..., ge=1, le=38)
    phase: int = Field(..., ge=1, le=2)
    reset_round: int = Field(..., description="Last gameweek of the first chip set")
    suggestions: List[ChipSuggestion] = Field(default_factory=list)
    expiring: List[ChipKind] = Field(
        default_factory=list, description="Unused chips with no free round left"
    )

    @field_validator("suggestions")
    @classmethod
    def validate_distinct_rounds(cls, v: List[ChipSuggestion]) -> List[ChipSuggestion]:
        rounds = [s.suggested_round for s in v]
        if len(rounds) != len(set(rounds)):
            raise ValueError("Chip suggestions must target distinct rounds")
        return v

    @property
    def available_chips(self) -> List[ChipKind]:
        return [s.chip for s in self.suggestions] + list(self.expiring)
