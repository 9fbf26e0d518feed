"""Performance scoring and rank-based fixture penalties.

Two passes turn raw players into comparable numbers:
- Performance score: a deterministic weighted sum of season stats, form, price,
  next fixture, ownership and availability
- Rank penalty: pool-relative re-weighting that protects the best players from
  fixture difficulty and discounts everyone else facing a tough run
"""

from typing import Callable, Iterable, List, Optional

from loguru import logger

from fpl_squad_advisor.config import FPLConfig, config
from fpl_squad_advisor.domain.models.fixture import PlayerFixture
from fpl_squad_advisor.domain.models.player import PlayerDomain
from fpl_squad_advisor.domain.models.scoring import (
    PenaltyTier,
    RankedPlayer,
    ScoredPlayer,
)

FixtureLookupFn = Callable[[int], List[PlayerFixture]]


class PerformanceScoringService:
    """Service computing base scores and pool-relative final scores."""

    def __init__(self, settings: Optional[FPLConfig] = None):
        self.config = settings or config

    def combined_chance(self, player: PlayerDomain) -> int:
        """Combined availability signal under the configured flagged statuses."""
        return player.combined_chance(self.config.scoring.flagged_statuses)

    def availability_penalty(self, player: PlayerDomain) -> float:
        """Penalty for the combined chance; only exact tier values are penalised."""
        chance = self.combined_chance(player)
        return self.config.scoring.availability_penalties.get(chance, 0.0)

    def score_player(
        self, player: PlayerDomain, fixtures: List[PlayerFixture]
    ) -> ScoredPlayer:
        """
        Compute the deterministic base score for one player.

        Args:
            player: Player from the feed
            fixtures: The player's upcoming fixtures in round order

        Returns:
            ScoredPlayer carrying the base score and next-fixture details
        """
        weights = self.config.scoring

        score = (
            player.total_points * weights.total_points_weight
            + player.form_value * weights.form_weight
            + player.price * weights.price_weight
            + player.ppg_value * weights.points_per_game_weight
            + player.goals_scored * weights.goals_weight
            + player.assists * weights.assists_weight
        )

        next_fixture = fixtures[0] if fixtures else None
        fixture_bonus = 0.0
        if next_fixture is not None:
            fixture_bonus = weights.fixture_bonuses.get(next_fixture.difficulty, 0.0)
            score += fixture_bonus
            if next_fixture.is_home:
                score += weights.home_bonus

        if player.ownership >= weights.ownership_threshold:
            score += weights.ownership_bonus

        score += self.availability_penalty(player)

        return ScoredPlayer(
            player=player,
            base_score=score,
            next_fixture=next_fixture,
            fixture_bonus=fixture_bonus,
            difficulty=next_fixture.difficulty if next_fixture else None,
            fixtures=list(fixtures),
        )

    def score_players(
        self, players: Iterable[PlayerDomain], fixture_lookup: FixtureLookupFn
    ) -> List[ScoredPlayer]:
        """Score every player against its resolved fixtures."""
        return [self.score_player(p, fixture_lookup(p.player_id)) for p in players]

    def _penalty_for(self, rank: int, difficulty: Optional[int]):
        """Return (multiplier, tier) for a rank and next-fixture difficulty."""
        penalties = self.config.rank_penalty
        if rank <= penalties.elite_rank:
            return 1.0, PenaltyTier.ELITE
        if difficulty == penalties.moderate_difficulty:
            return penalties.moderate_multiplier, PenaltyTier.MODERATE
        if difficulty in penalties.hard_difficulties:
            if rank > penalties.hard_fixture_immune_rank:
                return penalties.hard_multiplier, PenaltyTier.HARD
            return 1.0, PenaltyTier.IMMUNE
        return 1.0, PenaltyTier.NONE

    def apply_rank_penalties(self, scored: List[ScoredPlayer]) -> List[RankedPlayer]:
        """
        Attach rank, final score and penalty tier to a pool sorted by base score.

        Args:
            scored: Pool sorted by base_score descending

        Returns:
            New RankedPlayer objects in the same order

        Raises:
            ValueError: If the pool is not sorted by base_score descending
        """
        for higher, lower in zip(scored, scored[1:]):
            if lower.base_score > higher.base_score:
                raise ValueError(
                    "apply_rank_penalties requires players sorted by base_score "
                    f"descending ({higher.web_name} {higher.base_score:.1f} before "
                    f"{lower.web_name} {lower.base_score:.1f})"
                )

        ranked = []
        for rank, entry in enumerate(scored, start=1):
            multiplier, tier = self._penalty_for(rank, entry.difficulty)
            ranked.append(
                RankedPlayer(
                    player=entry.player,
                    base_score=entry.base_score,
                    next_fixture=entry.next_fixture,
                    fixture_bonus=entry.fixture_bonus,
                    difficulty=entry.difficulty,
                    fixtures=entry.fixtures,
                    rank=rank,
                    final_score=entry.base_score * multiplier,
                    penalty_applied=tier,
                )
            )
        return ranked

    def rank_pool(self, scored: Iterable[ScoredPlayer]) -> List[RankedPlayer]:
        """Sort a pool by base score (stable) and apply rank penalties once."""
        ordered = sorted(scored, key=lambda s: s.base_score, reverse=True)
        ranked = self.apply_rank_penalties(ordered)
        penalised = sum(
            1
            for r in ranked
            if r.penalty_applied in (PenaltyTier.MODERATE, PenaltyTier.HARD)
        )
        logger.debug(f"📊 Ranked pool of {len(ranked)} players ({penalised} penalised)")
        return ranked

    def score_and_rank(
        self, players: Iterable[PlayerDomain], fixture_lookup: FixtureLookupFn
    ) -> List[RankedPlayer]:
        """Score players and rank them as one pool."""
        return self.rank_pool(self.score_players(players, fixture_lookup))
