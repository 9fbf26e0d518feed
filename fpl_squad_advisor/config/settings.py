"""
Global Configuration System for FPL Squad Advisor

Centralized configuration for the scoring weights, rank penalties, transfer search
limits, chip calendar and API access. Provides type-safe configuration with
validation and environment variable support.
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, Field, field_validator, model_validator


class ScoringConfig(BaseModel):
    """Performance Score Configuration"""

    # Season and form weights
    total_points_weight: float = Field(
        default=3.0, description="Season quality indicator", ge=0.0
    )
    form_weight: float = Field(default=20.0, description="Recent performance", ge=0.0)
    price_weight: float = Field(
        default=15.0, description="Price in millions (managers' assessment)", ge=0.0
    )
    points_per_game_weight: float = Field(
        default=10.0, description="Consistency metric", ge=0.0
    )
    goals_weight: float = Field(default=8.0, description="Attacking output", ge=0.0)
    assists_weight: float = Field(default=5.0, description="Creativity", ge=0.0)

    # Next fixture
    fixture_bonuses: Dict[int, float] = Field(
        default_factory=lambda: {1: 40.0, 2: 25.0, 3: 5.0, 4: -15.0, 5: -30.0},
        description="Bonus/penalty by next fixture difficulty (1=easiest)",
    )
    home_bonus: float = Field(default=8.0, description="Next fixture at home")

    # Ownership
    ownership_threshold: float = Field(
        default=50.0, description=">= 50% ownership earns the bonus", ge=0.0, le=100.0
    )
    ownership_bonus: float = Field(default=10.0, description="Template player bonus")

    # Availability
    availability_penalties: Dict[int, float] = Field(
        default_factory=lambda: {0: -500.0, 25: -200.0, 50: -100.0, 75: -25.0},
        description="Penalty by combined chance of playing (exact match, else 0)",
    )
    flagged_statuses: List[str] = Field(
        default_factory=lambda: ["i", "s", "u", "n"],
        description="Status codes whose chance of playing is taken at face value",
    )

    @field_validator("fixture_bonuses")
    @classmethod
    def validate_fixture_bonuses(cls, v):
        if set(v.keys()) - {1, 2, 3, 4, 5}:
            raise ValueError("fixture_bonuses keys must be difficulties 1-5")
        return v

    @field_validator("availability_penalties")
    @classmethod
    def validate_availability_penalties(cls, v):
        if any(chance < 0 or chance > 100 for chance in v):
            raise ValueError("availability_penalties keys must be 0-100")
        if any(penalty > 0 for penalty in v.values()):
            raise ValueError("availability_penalties values must not be positive")
        return v


class RankPenaltyConfig(BaseModel):
    """Rank-Based Fixture Penalty Configuration"""

    elite_rank: int = Field(
        default=10, description="Top 10 never penalised (elite players)", ge=1
    )
    hard_fixture_immune_rank: int = Field(
        default=20, description="Top 20 immune to hard fixture penalties", ge=1
    )
    moderate_difficulty: int = Field(
        default=3, description="Difficulty treated as moderate", ge=1, le=5
    )
    hard_difficulties: List[int] = Field(
        default_factory=lambda: [4, 5], description="Difficulties treated as hard"
    )
    moderate_multiplier: float = Field(
        default=0.7, description="-30% for moderate fixtures", ge=0.0, le=1.0
    )
    hard_multiplier: float = Field(
        default=0.4, description="-60% for hard fixtures", ge=0.0, le=1.0
    )


class FixtureConfig(BaseModel):
    """Fixture Resolution Configuration"""

    fixture_window: int = Field(
        default=5, description="Upcoming fixtures kept per player", ge=1, le=10
    )
    max_upcoming_fixtures: int = Field(
        default=50, description="Upcoming fixtures considered overall", ge=10, le=380
    )
    unknown_opponent: str = Field(
        default="TBD", description="Opponent label for unknown teams"
    )


class TransferConfig(BaseModel):
    """Transfer Recommendation Configuration"""

    max_free_transfers_used: int = Field(
        default=2, description="Free transfers used per round at most", ge=0, le=5
    )
    candidate_pool_size: int = Field(
        default=150, description="Top candidates evaluated per search", ge=10, le=800
    )
    max_players_per_team: int = Field(
        default=3, description="FPL club quota", ge=1, le=15
    )
    max_banked_transfers: int = Field(
        default=5, description="Most free transfers that can be banked", ge=1, le=15
    )
    default_free_transfers: int = Field(
        default=1, description="Free transfers assumed when history is unusable", ge=0
    )
    forced_removal_threshold: int = Field(
        default=50,
        description="Chance below which a player is sold even without score gain",
        ge=0,
        le=100,
    )
    injury_reasoning_threshold: int = Field(
        default=75,
        description="Chance below which a sale is described as an injury replacement",
        ge=0,
        le=100,
    )
    emergency_unavailable_starters: int = Field(
        default=2,
        description="Unavailable starters needed to justify a hit with 0 free transfers",
        ge=1,
        le=11,
    )

    # Weak player flags (recommendation summary)
    weak_form_threshold: float = Field(
        default=3.0, description="Form below this flags a weak starter", ge=0.0
    )
    weak_score_threshold: float = Field(
        default=200.0, description="Final score below this flags a weak starter"
    )
    recent_form_multiplier: float = Field(
        default=3.0,
        description="Recent points fallback: form x 3 when history is unavailable",
        ge=0.0,
    )


class ChipCalendarConfig(BaseModel):
    """Chip Calendar Configuration (two chip sets per season)"""

    reset_round: int = Field(
        default=19, description="Last gameweek of the first chip set", ge=1, le=37
    )
    final_round: int = Field(
        default=38, description="Last gameweek of the season", ge=2, le=38
    )
    urgency_threshold: int = Field(
        default=3,
        description="Suggestions become urgent when fewer rounds remain in the phase",
        ge=1,
        le=10,
    )
    first_half_offsets: Dict[str, int] = Field(
        default_factory=lambda: {
            "wildcard": 2,
            "3xc": 3,
            "freehit": 4,
            "bboost": 5,
        },
        description="Rounds after the current one to target each chip (phase 1)",
    )
    second_half_targets: Dict[str, int] = Field(
        default_factory=lambda: {
            "freehit": 29,
            "wildcard": 30,
            "3xc": 34,
            "bboost": 37,
        },
        description="Typical blank/double gameweeks targeted in phase 2",
    )

    @field_validator("first_half_offsets", "second_half_targets")
    @classmethod
    def validate_chip_keys(cls, v):
        if set(v.keys()) != {"wildcard", "3xc", "freehit", "bboost"}:
            raise ValueError("chip calendar needs exactly wildcard, 3xc, freehit, bboost")
        return v

    @field_validator("first_half_offsets")
    @classmethod
    def validate_offsets(cls, v):
        if any(offset < 1 for offset in v.values()):
            raise ValueError("chip offsets must be at least 1")
        if len(set(v.values())) != len(v):
            raise ValueError("chip offsets must be distinct")
        return v

    @model_validator(mode="after")
    def validate_second_half_targets(self):
        for chip, target in self.second_half_targets.items():
            if not self.reset_round < target <= self.final_round:
                raise ValueError(
                    f"second_half_targets[{chip}] must fall after the reset round"
                )
        return self


class APIConfig(BaseModel):
    """FPL API Access Configuration"""

    base_url: str = Field(
        default="https://fantasy.premierleague.com/api",
        description="Public FPL API root",
    )
    timeout_seconds: float = Field(
        default=20.0, description="Per-request timeout", gt=0.0, le=120.0
    )
    max_retries: int = Field(
        default=1, description="Retries for timeouts and network errors", ge=0, le=5
    )
    retry_backoff_seconds: float = Field(
        default=1.0, description="Linear back-off step between retries", ge=0.0
    )
    recent_points_limit: int = Field(
        default=15, description="Players whose recent history is fetched", ge=0, le=50
    )
    recent_points_batch_size: int = Field(
        default=5, description="Player histories fetched per batch", ge=1, le=15
    )
    recent_points_rounds: int = Field(
        default=3, description="Rounds summed for recent points", ge=1, le=10
    )


class FPLConfig(BaseModel):
    """Master FPL Configuration Container"""

    scoring: ScoringConfig = Field(
        default_factory=ScoringConfig, description="Performance Score Configuration"
    )
    rank_penalty: RankPenaltyConfig = Field(
        default_factory=RankPenaltyConfig,
        description="Rank-Based Penalty Configuration",
    )
    fixtures: FixtureConfig = Field(
        default_factory=FixtureConfig, description="Fixture Configuration"
    )
    transfers: TransferConfig = Field(
        default_factory=TransferConfig, description="Transfer Configuration"
    )
    chip_calendar: ChipCalendarConfig = Field(
        default_factory=ChipCalendarConfig, description="Chip Calendar Configuration"
    )
    api: APIConfig = Field(default_factory=APIConfig, description="API Configuration")

    @model_validator(mode="after")
    def validate_config_consistency(self):
        """Validate cross-field consistency"""
        if (
            self.rank_penalty.hard_fixture_immune_rank
            < self.rank_penalty.elite_rank
        ):
            raise ValueError(
                "rank_penalty.hard_fixture_immune_rank must be >= elite_rank"
            )

        if self.chip_calendar.final_round <= self.chip_calendar.reset_round:
            raise ValueError(
                "chip_calendar.final_round must be greater than reset_round"
            )

        return self


SECTION_NAMES = sorted(FPLConfig.model_fields.keys(), key=len, reverse=True)


def _coerce_env_value(value: str):
    """Convert an environment string to bool, int, float or leave it as text."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    if "." in value:
        try:
            return float(value)
        except ValueError:
            return value
    return value


def _env_overrides(environ) -> Dict[str, Dict]:
    """Collect FPL_{SECTION}_{FIELD} overrides from the environment."""
    overrides: Dict[str, Dict] = {}
    for env_var, value in environ.items():
        if not env_var.startswith("FPL_"):
            continue
        key = env_var[len("FPL_"):].lower()
        # Longest section first so "rank_penalty" wins over any shorter prefix
        for section in SECTION_NAMES:
            if key.startswith(section + "_"):
                field = key[len(section) + 1:]
                overrides.setdefault(section, {})[field] = _coerce_env_value(value)
                break
    return overrides


def load_config(
    config_path: Optional[Path] = None, config_data: Optional[Dict] = None
) -> FPLConfig:
    """
    Load configuration with environment variable overrides and optional config file

    Args:
        config_path: Optional path to JSON configuration file
        config_data: Optional dictionary of configuration data

    Environment variables can override any config value using the pattern:
    FPL_{SECTION}_{FIELD} = value

    Example: FPL_TRANSFERS_CANDIDATE_POOL_SIZE=200
    """
    config_dict: Dict = {}

    if config_path and config_path.exists():
        try:
            with open(config_path, "r") as f:
                if config_path.suffix.lower() == ".json":
                    config_dict = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"⚠️ Failed to load config file {config_path}: {e}")

    if config_data:
        for section, fields in config_data.items():
            if isinstance(fields, dict):
                config_dict.setdefault(section, {}).update(fields)
            else:
                config_dict[section] = fields

    for section, fields in _env_overrides(os.environ).items():
        config_dict.setdefault(section, {}).update(fields)

    try:
        return FPLConfig(**config_dict)
    except ValueError as e:
        logger.warning(f"⚠️ Configuration validation failed: {e}")
        logger.warning("Using default configuration...")
        return FPLConfig()


# Global configuration instance
config = load_config()
