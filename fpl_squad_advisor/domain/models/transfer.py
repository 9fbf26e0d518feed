"""Transfer recommendation domain models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .scoring import RankedPlayer


class TransferKind(str, Enum):
    """Why a transfer was recommended."""

    INJURY_REPLACEMENT = "injury_replacement"
    UPGRADE = "upgrade"


class Transfer(BaseModel):
    """Single recommended player transfer."""

    model_config = ConfigDict(frozen=True)

    player_out: RankedPlayer = Field(..., description="Player being sold")
    player_in: RankedPlayer = Field(..., description="Player being bought")
    price_diff: float = Field(
        ..., description="Price difference in millions (positive = more expensive)"
    )
    score_improvement: float = Field(..., description="Final score gain")
    reasoning: str = Field(..., min_length=1, description="Why this transfer")
    kind: TransferKind = Field(..., description="Injury replacement or upgrade")

    @property
    def position(self) -> str:
        return self.player_out.position.value


class TransferEvaluation(BaseModel):
    """Before/after comparison of the optimal lineup for one swap."""

    model_config = ConfigDict(frozen=True)

    improves: bool = Field(
        ..., description="Lineup score rises and the incoming player starts"
    )
    score_improvement: float
    player_out_was_starting: bool
    player_in_will_start: bool
    score_before: float
    score_after: float
