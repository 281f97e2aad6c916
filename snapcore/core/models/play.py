"""Per-play inputs and outputs.

Everything here is created and discarded within a single play. A
``PlayResult`` is the only structure that leaves the engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Optional
from uuid import UUID

from snapcore.core.enums import (
    CoverageType,
    DefensivePersonnel,
    InjurySeverity,
    InjuryType,
    OffensiveFormation,
    OffensivePersonnel,
    PermanentInjuryEffect,
    PlayOutcome,
    PlayType,
)
from snapcore.core.models.conditions import WeatherCondition

if TYPE_CHECKING:
    from snapcore.simulation.pass_rush import PhaseResult
    from snapcore.simulation.presnap import PresnapReadResult

# Quarter number used for overtime
OVERTIME = 5


@dataclass
class PlayCallContext:
    """Game situation at the snap."""

    down: int = 1
    distance: int = 10
    field_position: int = 25  # Yards from own goal line (0-100)
    time_remaining: int = 900  # Seconds left on the clock
    quarter: int = 1  # 1-4, OVERTIME for overtime
    score_differential: int = 0  # Positive = offense leading
    weather: WeatherCondition = field(default_factory=WeatherCondition.default)
    is_red_zone: bool = False
    is_two_minute_warning: bool = False

    @property
    def is_overtime(self) -> bool:
        return self.quarter >= OVERTIME

    @property
    def yards_to_endzone(self) -> int:
        return 100 - self.field_position

    @classmethod
    def create(
        cls,
        down: int = 1,
        distance: int = 10,
        field_position: int = 25,
        time_remaining: int = 900,
        quarter: int = 1,
        score_differential: int = 0,
        weather: Optional[WeatherCondition] = None,
    ) -> "PlayCallContext":
        """Build a context, deriving the red-zone and two-minute flags."""
        two_minute = quarter in (2, 4) and time_remaining <= 120
        return cls(
            down=down,
            distance=distance,
            field_position=field_position,
            time_remaining=time_remaining,
            quarter=quarter,
            score_differential=score_differential,
            weather=weather or WeatherCondition.default(),
            is_red_zone=field_position >= 80,
            is_two_minute_warning=two_minute,
        )


@dataclass
class OffensivePlayCall:
    play_type: PlayType
    target_position: str = "WR1"  # WR1, RB, TE, ...
    formation: OffensiveFormation = OffensiveFormation.SHOTGUN


@dataclass
class DefensivePlayCall:
    coverage: CoverageType = CoverageType.ZONE
    blitz: bool = False
    press_rate: float = 0.0


@dataclass
class InjuryResult:
    """Outcome of an injury roll for one player."""

    occurred: bool = False
    type: Optional[InjuryType] = None
    severity: Optional[InjurySeverity] = None
    weeks_out: int = 0
    permanent_effects: list[PermanentInjuryEffect] = field(default_factory=list)

    @classmethod
    def none(cls) -> "InjuryResult":
        return cls()


@dataclass
class PenaltyDetails:
    team: Literal["offense", "defense"]
    type: str
    yards: int
    player_id: Optional[UUID] = None
    declined: bool = False


@dataclass
class Substitution:
    """A fatigue substitution made before the snap."""

    out_id: UUID
    in_id: UUID
    position: str


@dataclass
class KeyMatchup:
    offense_player: str
    defense_player: str
    winner: str  # Display name of whichever player won


@dataclass
class PlayResult:
    """What happened on a play, and the state it leaves behind."""

    play_type: PlayType
    outcome: PlayOutcome
    yards_gained: int

    # Who was involved
    primary_offensive_player: Optional[UUID]
    primary_defensive_player: Optional[UUID]  # Tackler or defender in coverage

    # Game state changes
    new_down: int
    new_distance: int
    new_field_position: int
    turnover: bool = False
    touchdown: bool = False
    first_down: bool = False
    safety: bool = False

    # Side effects
    injury_occurred: bool = False
    injured_player_id: Optional[UUID] = None
    injury: Optional[InjuryResult] = None
    penalty_occurred: bool = False
    penalty_details: Optional[PenaltyDetails] = None

    target_player: Optional[UUID] = None  # Receiver on pass plays
    substitutions: list[Substitution] = field(default_factory=list)
    key_matchup: Optional[KeyMatchup] = None

    @property
    def is_scoring_play(self) -> bool:
        return self.touchdown or self.safety or self.outcome == PlayOutcome.FIELD_GOAL_MADE


@dataclass
class PersonnelMatchup:
    offense: OffensivePersonnel
    defense: DefensivePersonnel
    mismatch_modifier: float


@dataclass
class SchemeEffect:
    overall_advantage: float
    play_type_modifier: float


@dataclass
class EnhancedPlayResult(PlayResult):
    """PlayResult plus the diagnostics of the layered model."""

    personnel_matchup: Optional[PersonnelMatchup] = None
    scheme_effect: Optional[SchemeEffect] = None
    pass_rush_result: Optional["PhaseResult"] = None
    presnap_read: Optional["PresnapReadResult"] = None
    play_action_bonus: float = 0.0
    situational_modifier: float = 0.0
    weak_link_exploited: bool = False
