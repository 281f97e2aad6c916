"""Coordinator play-calling tendencies."""

from dataclasses import dataclass, field
from typing import Literal


@dataclass
class ScoreSituationTendency:
    """Run-rate shift (percentage points) for a score or weather situation."""

    run_modifier: int = 0


@dataclass
class OffensiveSituationalTendencies:
    ahead_by_14_plus: ScoreSituationTendency = field(
        default_factory=lambda: ScoreSituationTendency(run_modifier=15)
    )
    behind_by_14_plus: ScoreSituationTendency = field(
        default_factory=lambda: ScoreSituationTendency(run_modifier=-15)
    )
    bad_weather: ScoreSituationTendency = field(
        default_factory=lambda: ScoreSituationTendency(run_modifier=10)
    )
    third_and_short: Literal["run", "pass", "balanced"] = "balanced"
    red_zone: Literal["run", "pass", "balanced"] = "balanced"


@dataclass
class OffensiveTendencies:
    """How an offensive coordinator calls plays. Rates are percentages."""

    run_rate: int = 45
    play_action_rate: int = 20
    deep_shot_rate: int = 15
    situational: OffensiveSituationalTendencies = field(
        default_factory=OffensiveSituationalTendencies
    )

    @property
    def pass_rate(self) -> int:
        return 100 - self.run_rate


@dataclass
class DefensiveSituationalTendencies:
    red_zone: Literal["aggressive", "conservative"] = "conservative"
    two_minute_drill: Literal["prevent", "blitz", "normal"] = "normal"
    third_and_long: Literal["blitz", "coverage", "normal"] = "normal"


@dataclass
class DefensiveTendencies:
    """How a defensive coordinator calls plays. Rates are percentages."""

    blitz_rate: int = 30
    man_coverage_rate: int = 45
    press_rate: int = 35
    situational: DefensiveSituationalTendencies = field(
        default_factory=DefensiveSituationalTendencies
    )
