"""Chip assessment service for FPL chip timing recommendations.

Each chip can be played once per half of the season: the first set expires at
the reset gameweek and a fresh set covers the run-in. Timing is rule-based:
- Phase 1: each unused chip targets the current gameweek plus a fixed offset,
  with the wildcard pulled forward to next gameweek when the reset is close
- Phase 2: each unused chip targets the typical blank/double gameweek for it
- Suggestions never share a gameweek; collisions move forward, then backward

No scoring is involved, only offsets and collision avoidance.
"""

from typing import Dict, Iterable, List, Optional, Set, Tuple

from loguru import logger

from fpl_squad_advisor.config import FPLConfig, config
from fpl_squad_advisor.domain.models.chip import (
    ChipKind,
    ChipStrategy,
    ChipSuggestion,
    ChipUsage,
)

_PHASE_ONE_REASONS: Dict[ChipKind, str] = {
    ChipKind.WILDCARD: "Must use before GW{reset} reset",
    ChipKind.TRIPLE_CAPTAIN: "Use on premium player with excellent fixture",
    ChipKind.FREE_HIT: "Navigate blank or difficult gameweek",
    ChipKind.BENCH_BOOST: "When your full squad has good fixtures",
}

_PHASE_TWO_REASONS: Dict[ChipKind, str] = {
    ChipKind.WILDCARD: "Refresh team for final run-in",
    ChipKind.FREE_HIT: "Navigate blank gameweek",
    ChipKind.TRIPLE_CAPTAIN: "Premium asset Double Gameweek",
    ChipKind.BENCH_BOOST: "Maximize points in big Double Gameweek",
}


class ChipAssessmentService:
    """Service for scheduling unused chips across the two halves of the season."""

    def __init__(self, settings: Optional[FPLConfig] = None):
        """Initialize the service with configuration.

        Args:
            settings: Configuration override (defaults to the global config)
        """
        self.config = settings or config

    def phase_for(self, event: int) -> int:
        """Chip phase of a gameweek: 1 up to the reset round, 2 afterwards."""
        return 1 if event <= self.config.chip_calendar.reset_round else 2

    def used_chips(self, history: Iterable[ChipUsage], phase: int) -> Set[ChipKind]:
        """Chips already played in the given phase."""
        return {usage.chip for usage in history if self.phase_for(usage.event) == phase}

    def available_chips(
        self, history: Iterable[ChipUsage], current_event: int
    ) -> List[ChipKind]:
        """Chips still playable in the current phase."""
        used = self.used_chips(history, self.phase_for(current_event))
        return [chip for chip in ChipKind if chip not in used]

    def _preferred_rounds(
        self, chips: List[ChipKind], current_event: int, phase: int
    ) -> Tuple[List[Tuple[ChipKind, int]], bool]:
        """Preferred round per chip, plus whether the phase end is close."""
        calendar = self.config.chip_calendar
        phase_end = calendar.reset_round if phase == 1 else calendar.final_round
        urgent = phase_end - current_event < calendar.urgency_threshold

        preferred = []
        for chip in chips:
            if phase == 1:
                offset = calendar.first_half_offsets[chip.value]
                if urgent and chip == ChipKind.WILDCARD:
                    # The other chips stay clamped to the reset round
                    offset = 1
                target = current_event + offset
            else:
                anchor = calendar.second_half_targets[chip.value]
                target = anchor if anchor >= current_event else current_event + 1
            preferred.append((chip, min(target, phase_end)))

        return preferred, urgent

    def _deconflict(
        self, preferred: int, taken: Set[int], lower: int, upper: int
    ) -> Optional[int]:
        """First free round searching forward from preferred, then backward."""
        for candidate in range(preferred, upper + 1):
            if candidate not in taken:
                return candidate
        for candidate in range(preferred - 1, lower - 1, -1):
            if candidate not in taken:
                return candidate
        return None

    def _justification(self, chip: ChipKind, phase: int, urgent: bool) -> str:
        reset = self.config.chip_calendar.reset_round
        reasons = _PHASE_ONE_REASONS if phase == 1 else _PHASE_TWO_REASONS
        reason = reasons[chip].format(reset=reset)
        if urgent:
            deadline = f"GW{reset} reset" if phase == 1 else "the end of the season"
            return f"URGENT - use before {deadline}! {reason}"
        return reason

    def generate_chip_strategy(
        self, history: Iterable[ChipUsage], current_event: int
    ) -> ChipStrategy:
        """Propose a distinct gameweek for every chip unused in the current phase.

        Args:
            history: Chips already played this season
            current_event: Current gameweek (1-38)

        Returns:
            ChipStrategy with suggestions sorted by round; chips that cannot be
            placed before the phase ends are listed as expiring
        """
        calendar = self.config.chip_calendar
        if not 1 <= current_event <= calendar.final_round:
            raise ValueError(f"current_event out of range: {current_event}")

        history = list(history)
        phase = self.phase_for(current_event)
        phase_end = calendar.reset_round if phase == 1 else calendar.final_round
        unused = self.available_chips(history, current_event)

        preferred, urgent = self._preferred_rounds(unused, current_event, phase)
        # Stable sort keeps the configured chip order for equal preferences
        preferred.sort(key=lambda item: item[1])

        taken: Set[int] = set()
        suggestions: List[ChipSuggestion] = []
        expiring: List[ChipKind] = []
        for chip, target in preferred:
            placed = self._deconflict(target, taken, current_event, phase_end)
            if placed is None:
                expiring.append(chip)
                continue
            taken.add(placed)
            suggestions.append(
                ChipSuggestion(
                    chip=chip,
                    suggested_round=placed,
                    justification=self._justification(chip, phase, urgent),
                    urgent=urgent,
                    phase=phase,
                )
            )

        if expiring:
            names = ", ".join(c.display_name for c in expiring)
            logger.warning(f"⏳ No free gameweek left for {names} before GW{phase_end}")

        suggestions.sort(key=lambda s: s.suggested_round)
        plan = ", ".join(
            f"{s.chip.display_name} GW{s.suggested_round}" for s in suggestions
        )
        logger.info(
            f"🃏 Chip plan for GW{current_event} (phase {phase}): "
            f"{plan or 'no chips left'}"
        )
        return ChipStrategy(
            current_event=current_event,
            phase=phase,
            reset_round=calendar.reset_round,
            suggestions=suggestions,
            expiring=expiring,
        )
