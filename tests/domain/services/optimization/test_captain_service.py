"""Unit tests for captain and vice-captain selection."""

import pytest


class TestSelectCaptainAndVice:
    """Captaincy is a straight ranking of starters by final score."""

    def test_top_two_starters(self, optimization_service, standard_squad, no_fixtures):
        selection = optimization_service.select_optimal_starting_11(
            standard_squad, no_fixtures
        )

        captaincy = optimization_service.select_captain_and_vice(selection.starting)

        assert captaincy.captain.player_id == 13
        assert captaincy.vice_captain.player_id == 14
        assert captaincy.captain.final_score >= captaincy.vice_captain.final_score
        assert len(captaincy.ranked_starters) == 11

    def test_reasoning_text(self, optimization_service, standard_squad, no_fixtures):
        ranked = optimization_service.rank_players(standard_squad, no_fixtures)

        captaincy = optimization_service.select_captain_and_vice(ranked[:11])

        assert captaincy.reasoning == (
            "Player13 (315 score, Rank #1) is your captain. "
            "Player14 (309 score, Rank #2) is vice-captain."
        )

    def test_input_order_does_not_matter(
        self, optimization_service, standard_squad, no_fixtures
    ):
        ranked = optimization_service.rank_players(standard_squad, no_fixtures)

        captaincy = optimization_service.select_captain_and_vice(list(reversed(ranked)))

        assert captaincy.captain.player_id == 13

    def test_single_starter_is_also_vice(
        self, optimization_service, make_player, no_fixtures
    ):
        ranked = optimization_service.rank_players([make_player(1)], no_fixtures)

        captaincy = optimization_service.select_captain_and_vice(ranked)

        assert captaincy.captain.player_id == 1
        assert captaincy.vice_captain.player_id == 1

    def test_equal_scores_keep_lineup_order(
        self, optimization_service, make_player, no_fixtures
    ):
        ranked = optimization_service.rank_players(
            [make_player(i, total_points=40) for i in (5, 6, 7)], no_fixtures
        )

        captaincy = optimization_service.select_captain_and_vice(ranked)

        assert captaincy.captain.player_id == 5
        assert captaincy.vice_captain.player_id == 6

    def test_empty_lineup(self, optimization_service):
        with pytest.raises(ValueError, match="No players provided"):
            optimization_service.select_captain_and_vice([])
