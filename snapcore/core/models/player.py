"""Player model."""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID, uuid4

from snapcore.core.enums import (
    ConsistencyTier,
    HiddenTrait,
    InjurySeverity,
    Position,
    RoleType,
    StreakState,
)


@dataclass
class SkillRating:
    """
    A single skill.

    The true value drives simulation and is never shown to the user.
    The perceived range is what scouting reports expose.
    """

    true_value: int
    perceived_min: int = 0
    perceived_max: int = 0

    def __post_init__(self) -> None:
        self.true_value = max(1, min(100, self.true_value))
        if not self.perceived_min and not self.perceived_max:
            self.perceived_min = max(1, self.true_value - 5)
            self.perceived_max = min(100, self.true_value + 5)

    @property
    def perceived_midpoint(self) -> float:
        return (self.perceived_min + self.perceived_max) / 2


# Performance multiplier when playing through an injury
_INJURY_PERFORMANCE = {
    None: 1.0,
    InjurySeverity.MINOR: 0.95,
    InjurySeverity.MODERATE: 0.9,
    InjurySeverity.SIGNIFICANT: 0.85,
    InjurySeverity.SEVERE: 0.8,
    InjurySeverity.SEASON_ENDING: 0.75,
}


@dataclass
class InjuryStatus:
    """Current injury status on the roster."""

    severity: Optional[InjurySeverity] = None
    weeks_remaining: int = 0

    @property
    def is_injured(self) -> bool:
        return self.severity is not None

    @property
    def performance_multiplier(self) -> float:
        return _INJURY_PERFORMANCE[self.severity]


@dataclass
class RoleFit:
    """How well the player's usage matches the role they are best at."""

    current_role: RoleType = RoleType.STARTER
    ideal_role: RoleType = RoleType.STARTER
    role_effectiveness: int = 50  # 0-100

    @property
    def multiplier(self) -> float:
        """Role effectiveness as a multiplier in [0.9, 1.1]."""
        effectiveness = max(0, min(100, self.role_effectiveness))
        return 0.9 + (effectiveness / 100) * 0.2


@dataclass
class ConsistencyProfile:
    """Week-to-week consistency and the streak the player is riding."""

    tier: ConsistencyTier = ConsistencyTier.AVERAGE
    current_streak: StreakState = StreakState.NEUTRAL
    streak_games_remaining: int = 0


@dataclass
class Player:
    """
    Represents an individual football player.

    Skills are keyed by snake_case name ("pass_block", "route_running").
    In-game fatigue lives on TeamGameState and is mirrored onto the
    ``fatigue`` field here whenever it changes.
    """

    id: UUID = field(default_factory=uuid4)
    first_name: str = ""
    last_name: str = ""
    position: Position = Position.QB
    skills: dict[str, SkillRating] = field(default_factory=dict)
    hidden_traits: set[HiddenTrait] = field(default_factory=set)

    age: int = 25
    experience_years: int = 0

    fatigue: float = 0.0  # 0-100
    morale: int = 50  # 0-100
    injury_status: InjuryStatus = field(default_factory=InjuryStatus)
    role_fit: RoleFit = field(default_factory=RoleFit)
    consistency: ConsistencyProfile = field(default_factory=ConsistencyProfile)
    it_factor: int = 50  # 1-100, clutch tendency

    @property
    def full_name(self) -> str:
        """Full name of the player."""
        return f"{self.first_name} {self.last_name}"

    @property
    def display_name(self) -> str:
        """Short display name (e.g., 'T. Brady')."""
        if not self.first_name:
            return self.last_name or "Unknown"
        return f"{self.first_name[0]}. {self.last_name}"

    @property
    def clutch_multiplier(self) -> float:
        """It-factor as a multiplier in [0.85, 1.15]."""
        value = max(0, min(100, self.it_factor))
        return 0.85 + (value / 100) * 0.3

    def has_trait(self, trait: HiddenTrait) -> bool:
        return trait in self.hidden_traits

    def skill_value(self, skill: str) -> Optional[int]:
        """True value of a skill, or None when the player lacks it."""
        rating = self.skills.get(skill)
        return rating.true_value if rating else None

    def skill_or(self, skill: str, default: float = 50) -> float:
        value = self.skill_value(skill)
        return default if value is None else value

    def perceived_skill(self, skill: str, default: float = 50) -> float:
        """Midpoint of the scouted range, used where only public info applies."""
        rating = self.skills.get(skill)
        return rating.perceived_midpoint if rating else default

    def average_skill(self) -> float:
        """Mean true value across all skills, or 50 with no skills."""
        if not self.skills:
            return 50
        return sum(s.true_value for s in self.skills.values()) / len(self.skills)

    def __str__(self) -> str:
        return f"{self.position.value} {self.full_name}"
