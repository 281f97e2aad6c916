"""Penalty tables and enforcement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Sequence

from snapcore.core.models import PenaltyDetails, Player
from snapcore.core.rng import Rng
from snapcore.simulation.stat_distribution import weighted_random_choice

Team = Literal["offense", "defense"]


@dataclass(frozen=True)
class PenaltyDefinition:
    type: str
    yards: int
    rate: float  # Relative frequency within the team's table
    automatic_first_down: bool = False


OFFENSIVE_PENALTIES = (
    PenaltyDefinition("Holding", 10, 0.4),
    PenaltyDefinition("False Start", 5, 0.2),
    PenaltyDefinition("Illegal Formation", 5, 0.1),
    PenaltyDefinition("Offensive Pass Interference", 10, 0.15),
    PenaltyDefinition("Intentional Grounding", 10, 0.1),
    PenaltyDefinition("Delay of Game", 5, 0.05),
)

DEFENSIVE_PENALTIES = (
    PenaltyDefinition("Pass Interference", 15, 0.35, automatic_first_down=True),
    PenaltyDefinition("Defensive Holding", 5, 0.25, automatic_first_down=True),
    PenaltyDefinition("Roughing the Passer", 15, 0.1, automatic_first_down=True),
    PenaltyDefinition("Offsides", 5, 0.15),
    PenaltyDefinition("Unnecessary Roughness", 15, 0.1),
    PenaltyDefinition("Encroachment", 5, 0.05),
)


@dataclass
class PenaltyEnforcement:
    """Where the ball ends up after walking off a penalty."""

    yards: int  # Signed, from the offense's point of view
    new_field_position: int
    first_down: bool


def penalty_table(team: Team) -> Sequence[PenaltyDefinition]:
    return OFFENSIVE_PENALTIES if team == "offense" else DEFENSIVE_PENALTIES


def select_penalty(team: Team, rng: Rng) -> PenaltyDefinition:
    """Weighted pick from the team's penalty table."""
    table = penalty_table(team)
    return weighted_random_choice(table, [p.rate for p in table], rng) or table[0]


def grants_automatic_first_down(penalty_type: str) -> bool:
    return any(p.type == penalty_type and p.automatic_first_down for p in DEFENSIVE_PENALTIES)


def enforce_penalty(penalty: PenaltyDefinition, team: Team, field_position: int) -> PenaltyEnforcement:
    """Walk off the yardage, keeping the ball between the 1 and the 99."""
    if team == "offense":
        return PenaltyEnforcement(
            yards=-penalty.yards,
            new_field_position=max(1, field_position - penalty.yards),
            first_down=False,
        )
    return PenaltyEnforcement(
        yards=penalty.yards,
        new_field_position=min(99, field_position + penalty.yards),
        first_down=penalty.automatic_first_down,
    )


def build_penalty_details(
    penalty: PenaltyDefinition,
    team: Team,
    players: Sequence[Player],
    rng: Rng,
) -> PenaltyDetails:
    """Penalty record with a randomly flagged player from the offending side."""
    flagged: Optional[Player] = rng.pick(players) if players else None
    return PenaltyDetails(
        team=team,
        type=penalty.type,
        yards=penalty.yards,
        player_id=flagged.id if flagged else None,
        declined=False,
    )
