"""Tests for ChipAssessmentService chip timing."""

import pytest

from fpl_squad_advisor.config import FPLConfig
from fpl_squad_advisor.domain.models.chip import ChipKind, ChipUsage
from fpl_squad_advisor.domain.services.chip_assessment_service import (
    ChipAssessmentService,
)

WC = ChipKind.WILDCARD
FH = ChipKind.FREE_HIT
BB = ChipKind.BENCH_BOOST
TC = ChipKind.TRIPLE_CAPTAIN


@pytest.fixture
def chip_service():
    """Create chip assessment service."""
    return ChipAssessmentService(FPLConfig())


def _plan(strategy):
    return [(s.chip, s.suggested_round) for s in strategy.suggestions]


class TestPhases:
    def test_phase_boundaries(self, chip_service):
        assert chip_service.phase_for(1) == 1
        assert chip_service.phase_for(19) == 1
        assert chip_service.phase_for(20) == 2

    def test_chips_reset_after_phase_one(self, chip_service):
        history = [ChipUsage(chip=WC, event=5)]
        assert WC not in chip_service.available_chips(history, 10)
        assert WC in chip_service.available_chips(history, 20)

    def test_available_chips_in_fixed_order(self, chip_service):
        assert chip_service.available_chips([], 3) == [WC, FH, BB, TC]


class TestPhaseOneSchedule:
    """First half: offsets from the current gameweek."""

    def test_season_start(self, chip_service):
        strategy = chip_service.generate_chip_strategy([], 1)

        assert _plan(strategy) == [(WC, 3), (TC, 4), (FH, 5), (BB, 6)]
        assert strategy.phase == 1
        assert not any(s.urgent for s in strategy.suggestions)
        assert strategy.expiring == []

    def test_collisions_at_phase_end_move_backward(self, chip_service):
        strategy = chip_service.generate_chip_strategy([], 15)

        assert _plan(strategy) == [(BB, 16), (WC, 17), (TC, 18), (FH, 19)]

    def test_urgent_near_reset(self, chip_service):
        strategy = chip_service.generate_chip_strategy([], 17)

        assert _plan(strategy) == [(BB, 17), (WC, 18), (FH, 19)]
        assert strategy.expiring == [TC]
        assert all(s.urgent for s in strategy.suggestions)
        assert strategy.suggestions[1].justification.startswith(
            "URGENT - use before GW19 reset!"
        )

    def test_urgency_only_pulls_the_wildcard_forward(self):
        service = ChipAssessmentService(FPLConfig(chip_calendar={"urgency_threshold": 5}))

        strategy = service.generate_chip_strategy([], 15)

        # Wildcard 15+1, triple captain 15+3, free hit and bench boost clamped to 19
        assert _plan(strategy) == [(WC, 16), (BB, 17), (TC, 18), (FH, 19)]
        assert all(s.urgent for s in strategy.suggestions)

    def test_used_chips_are_skipped(self, chip_service):
        history = [ChipUsage(chip=WC, event=2), ChipUsage(chip=TC, event=3)]

        strategy = chip_service.generate_chip_strategy(history, 4)

        assert _plan(strategy) == [(FH, 8), (BB, 9)]
        assert strategy.suggestions[0].justification == "Navigate blank or difficult gameweek"

    def test_wildcard_reason_names_the_reset(self, chip_service):
        strategy = chip_service.generate_chip_strategy([], 1)
        wildcard = next(s for s in strategy.suggestions if s.chip == WC)
        assert wildcard.justification == "Must use before GW19 reset"


class TestPhaseTwoSchedule:
    """Second half: typical blank and double gameweeks."""

    def test_targets(self, chip_service):
        strategy = chip_service.generate_chip_strategy([], 20)

        assert _plan(strategy) == [(FH, 29), (WC, 30), (TC, 34), (BB, 37)]
        assert all(s.phase == 2 for s in strategy.suggestions)

    def test_passed_targets_move_to_next_round(self, chip_service):
        strategy = chip_service.generate_chip_strategy([], 31)

        assert _plan(strategy) == [(WC, 32), (FH, 33), (TC, 34), (BB, 37)]

    def test_end_of_season(self, chip_service):
        strategy = chip_service.generate_chip_strategy([], 37)

        assert _plan(strategy) == [(BB, 37), (WC, 38)]
        assert strategy.expiring == [FH, TC]
        assert strategy.available_chips == [BB, WC, FH, TC]

    def test_all_chips_used(self, chip_service):
        history = [ChipUsage(chip=c, event=20 + i) for i, c in enumerate(ChipKind)]

        strategy = chip_service.generate_chip_strategy(history, 30)

        assert strategy.suggestions == []
        assert strategy.expiring == []


class TestValidation:
    @pytest.mark.parametrize("event", [0, 39])
    def test_out_of_range(self, chip_service, event):
        with pytest.raises(ValueError):
            chip_service.generate_chip_strategy([], event)

    def test_custom_calendar(self):
        service = ChipAssessmentService(
            FPLConfig(chip_calendar={"reset_round": 10, "urgency_threshold": 1})
        )
        strategy = service.generate_chip_strategy([], 8)

        assert _plan(strategy) == [(BB, 8), (FH, 9), (WC, 10)]
        assert strategy.expiring == [TC]
        assert not any(s.urgent for s in strategy.suggestions)
