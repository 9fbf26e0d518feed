"""Core transfer recommendation logic for FPL.

This module provides:
- The transfer count policy (free transfers, emergency hits)
- A greedy multi-round transfer search over a ranked candidate pool
- A single-swap evaluator comparing the optimal lineup before and after

The greedy search commits to the best swap of each round and never revisits
earlier choices.
"""

from typing import Dict, Iterable, List, Optional, Set

from loguru import logger

from fpl_squad_advisor.domain.models.player import PlayerDomain
from fpl_squad_advisor.domain.models.scoring import RankedPlayer
from fpl_squad_advisor.domain.models.transfer import (
    Transfer,
    TransferEvaluation,
    TransferKind,
)
from fpl_squad_advisor.domain.services.scoring_service import FixtureLookupFn

from .squad_selection import SquadSelectionMixin


class TransferOptimizationMixin(SquadSelectionMixin):
    """Mixin providing greedy transfer recommendations."""

    def determine_transfer_count(
        self, free_transfers: int, starting: Iterable[RankedPlayer]
    ) -> int:
        """Decide how many transfers to search for.

        Uses at most the configured number of free transfers. With none left,
        a single hit is allowed only when enough starters are unlikely to play.

        Args:
            free_transfers: Free transfers available
            starting: Current starting lineup

        Returns:
            Number of transfers to search for
        """
        transfers = self.config.transfers
        if free_transfers > 0:
            return min(free_transfers, transfers.max_free_transfers_used)

        unavailable = sum(
            1
            for p in starting
            if self.combined_chance(p.player) < transfers.forced_removal_threshold
        )
        if unavailable >= transfers.emergency_unavailable_starters:
            logger.info(
                f"🚑 {unavailable} starters unlikely to play, allowing one hit transfer"
            )
            return 1
        return 0

    def _build_transfer(
        self, player_out: RankedPlayer, player_in: RankedPlayer, gain: float
    ) -> Transfer:
        if (
            self.combined_chance(player_out.player)
            < self.config.transfers.injury_reasoning_threshold
        ):
            kind = TransferKind.INJURY_REPLACEMENT
            reasoning = (
                f"{player_out.web_name} is injured/uncertain. "
                f"Replaced with higher-performing {player_in.web_name}."
            )
        else:
            kind = TransferKind.UPGRADE
            reasoning = (
                f"Upgrade: {player_in.web_name} (+{gain:.0f} points) "
                f"replaces {player_out.web_name}."
            )
        return Transfer(
            player_out=player_out,
            player_in=player_in,
            price_diff=(player_in.player.now_cost - player_out.player.now_cost) / 10,
            score_improvement=gain,
            reasoning=reasoning,
            kind=kind,
        )

    def _violates_team_quota(
        self,
        player_out: RankedPlayer,
        player_in: RankedPlayer,
        team_counts: Dict[int, int],
    ) -> bool:
        if player_in.team_id == player_out.team_id:
            return False
        return (
            team_counts.get(player_in.team_id, 0)
            >= self.config.transfers.max_players_per_team
        )

    def generate_transfer_suggestions(
        self,
        squad: List[PlayerDomain],
        candidate_pool: Iterable[PlayerDomain],
        budget: int,
        free_transfers: int,
        fixture_lookup: FixtureLookupFn,
        user_override_count: Optional[int] = None,
    ) -> List[Transfer]:
        """Greedy, round-by-round transfer search.

        Each round re-ranks the working squad together with the unused
        candidates, then accepts the single best (sell, buy) pair. A pair is
        eligible when both play the same position, the buy has not already been
        bought this session, the buy is affordable with the sale proceeds and
        the club quota still holds after the swap. The search stops as soon as
        a round finds nothing worth doing.

        Args:
            squad: Current squad players
            candidate_pool: Every player that could be bought (squad members are ignored)
            budget: Money in the bank, in tenths of a million
            free_transfers: Free transfers available
            fixture_lookup: player_id -> upcoming fixtures
            user_override_count: Transfer count chosen by the user, overriding the policy

        Returns:
            Accepted transfers in the order they were found (possibly empty)
        """
        transfer_settings = self.config.transfers

        if user_override_count is not None:
            transfer_count = max(0, user_override_count)
        else:
            current = self.select_optimal_starting_11(squad, fixture_lookup)
            transfer_count = self.determine_transfer_count(
                free_transfers, current.starting
            )

        if transfer_count == 0:
            logger.info("🔒 No transfers to make this round")
            return []

        squad_ids = {p.player_id for p in squad}
        candidates_by_id: Dict[int, PlayerDomain] = {}
        for player in candidate_pool:
            if player.player_id not in squad_ids:
                candidates_by_id.setdefault(player.player_id, player)

        # Base scores are computed once and reused by every ranking pass
        scored = {
            s.player_id: s
            for s in self.scorer.score_players(
                list(squad) + list(candidates_by_id.values()), fixture_lookup
            )
        }
        initial = self.scorer.rank_pool(scored.values())
        candidates = sorted(
            (r for r in initial if r.player_id in candidates_by_id),
            key=lambda r: r.final_score,
            reverse=True,
        )
        candidate_ids = [
            r.player_id for r in candidates[: transfer_settings.candidate_pool_size]
        ]

        working_ids = [p.player_id for p in squad]
        bought: Set[int] = set()
        remaining_budget = budget
        transfers: List[Transfer] = []

        logger.info(
            f"🔄 Searching {transfer_count} transfer(s) over "
            f"{len(candidate_ids)} candidates, bank £{budget / 10:.1f}m"
        )

        for round_number in range(1, transfer_count + 1):
            pool_ids = working_ids + [
                pid for pid in candidate_ids if pid not in bought
            ]
            ranked = {
                r.player_id: r
                for r in self.scorer.rank_pool(scored[pid] for pid in pool_ids)
            }
            working = [ranked[pid] for pid in working_ids]
            buyable = [
                ranked[pid]
                for pid in candidate_ids
                if pid not in bought and pid not in working_ids
            ]
            team_counts = self._count_players_per_team(working)

            best_pair = None
            best_gain = float("-inf")
            for sell in working:
                sell_unavailable = (
                    self.combined_chance(sell.player)
                    < transfer_settings.forced_removal_threshold
                )
                for buy in buyable:
                    if buy.position != sell.position:
                        continue
                    if buy.player.now_cost > remaining_budget + sell.player.now_cost:
                        continue
                    if self._violates_team_quota(sell, buy, team_counts):
                        continue
                    gain = buy.final_score - sell.final_score
                    if gain > best_gain and (gain > 0 or sell_unavailable):
                        best_gain = gain
                        best_pair = (sell, buy)

            if best_pair is None:
                logger.debug(f"Round {round_number}: no beneficial transfer found")
                break

            sell, buy = best_pair
            remaining_budget += sell.player.now_cost - buy.player.now_cost
            working_ids = [
                buy.player_id if pid == sell.player_id else pid for pid in working_ids
            ]
            bought.add(buy.player_id)

            transfer = self._build_transfer(sell, buy, best_gain)
            transfers.append(transfer)
            logger.info(
                f"✅ Transfer {round_number}: {sell.web_name} → {buy.web_name} "
                f"({best_gain:+.0f}), bank £{remaining_budget / 10:.1f}m"
            )

        return transfers

    def apply_transfers(
        self, squad: List[PlayerDomain], transfers: Iterable[Transfer]
    ) -> List[PlayerDomain]:
        """Return a new squad list with every transfer applied in order."""
        result = list(squad)
        for transfer in transfers:
            out_id = transfer.player_out.player_id
            result = [
                transfer.player_in.player if p.player_id == out_id else p
                for p in result
            ]
        return result

    def evaluate_transfer(
        self,
        player_out: PlayerDomain,
        player_in: PlayerDomain,
        squad: List[PlayerDomain],
        fixture_lookup: FixtureLookupFn,
    ) -> TransferEvaluation:
        """Compare the optimal lineup before and after a single swap.

        Args:
            player_out: Squad player being sold
            player_in: Player being bought
            squad: Current squad
            fixture_lookup: player_id -> upcoming fixtures

        Returns:
            TransferEvaluation; ``improves`` needs a strictly higher lineup
            score with the incoming player in the new starting 11

        Raises:
            ValueError: If player_out is not in the squad
        """
        if all(p.player_id != player_out.player_id for p in squad):
            raise ValueError(f"{player_out.web_name} is not in the squad")

        before = self.select_optimal_starting_11(squad, fixture_lookup)
        swapped = [player_in if p.player_id == player_out.player_id else p for p in squad]
        after = self.select_optimal_starting_11(swapped, fixture_lookup)

        improvement = after.formation_score - before.formation_score
        player_in_will_start = after.is_starting(player_in.player_id)
        return TransferEvaluation(
            improves=improvement > 0 and player_in_will_start,
            score_improvement=improvement,
            player_out_was_starting=before.is_starting(player_out.player_id),
            player_in_will_start=player_in_will_start,
            score_before=before.formation_score,
            score_after=after.formation_score,
        )
