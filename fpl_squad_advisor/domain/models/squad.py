"""Manager squad snapshot models."""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...utils.helpers import parse_int


class SquadSlot(BaseModel):
    """One pick in the manager's squad; slots 1-11 start, 12-15 are the bench."""

    model_config = ConfigDict(frozen=True)

    player_id: int = Field(..., gt=0)
    slot_position: int = Field(..., ge=1, le=15)
    is_captain: bool = Field(default=False)
    is_vice_captain: bool = Field(default=False)
    multiplier: int = Field(default=1, ge=0, le=3)

    @classmethod
    def from_api(cls, pick: Dict[str, Any]) -> "SquadSlot":
        """Build a slot from an entry picks item."""
        return cls(
            player_id=pick["element"],
            slot_position=pick["position"],
            is_captain=bool(pick.get("is_captain", False)),
            is_vice_captain=bool(pick.get("is_vice_captain", False)),
            multiplier=parse_int(pick.get("multiplier"), default=1),
        )

    @property
    def is_starting(self) -> bool:
        return self.slot_position <= 11


class SquadSnapshot(BaseModel):
    """The manager's current squad, bank and transfer allowance."""

    model_config = ConfigDict(frozen=True)

    manager_id: int = Field(..., gt=0)
    current_event: int = Field(..., ge=1, le=38)
    slots: List[SquadSlot] = Field(..., description="15 squad slots")
    bank: int = Field(default=0, ge=0, description="Money in the bank (tenths)")
    free_transfers: int = Field(default=1, ge=0, le=5)

    @field_validator("slots")
    @classmethod
    def validate_slots(cls, v: List[SquadSlot]) -> List[SquadSlot]:
        if len(v) != 15:
            raise ValueError(f"Squad must have 15 slots, got {len(v)}")
        if len({s.player_id for s in v}) != 15:
            raise ValueError("Squad contains duplicate players")
        if len({s.slot_position for s in v}) != 15:
            raise ValueError("Squad contains duplicate slot positions")
        return sorted(v, key=lambda s: s.slot_position)

    @property
    def player_ids(self) -> List[int]:
        return [s.player_id for s in self.slots]

    @property
    def starting_ids(self) -> List[int]:
        return [s.player_id for s in self.slots if s.is_starting]
