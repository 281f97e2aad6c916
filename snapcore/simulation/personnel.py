"""Personnel Packages - Offensive groupings vs defensive sub-packages.

Mismatches appear when the defense's personnel doesn't suit what the
offense has on the field (heavy sets against a light box, tight ends
against nickel corners).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from snapcore.core.enums import DefensivePersonnel, OffensivePersonnel, PlayType
from snapcore.core.mathutil import round_half_up
from snapcore.core.rng import Rng


# =============================================================================
# Package Data
# =============================================================================

@dataclass(frozen=True)
class OffensivePersonnelInfo:
    package: OffensivePersonnel
    run_tendency: int  # Expected run %, 0-100
    description: str
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()


@dataclass(frozen=True)
class DefensivePersonnelInfo:
    package: DefensivePersonnel
    dl_count: int
    lb_count: int
    db_count: int
    run_defense_modifier: int  # -20 to +20
    pass_defense_modifier: int  # -20 to +20
    blitz_effectiveness: float  # 0.5 to 1.5


OFFENSIVE_PERSONNEL = {
    OffensivePersonnel.P10: OffensivePersonnelInfo(
        OffensivePersonnel.P10, 15, "4 WR Empty",
        strengths=("spread defense", "mismatches in coverage", "quick passing"),
        weaknesses=("no run threat", "vulnerable to blitz", "predictable"),
    ),
    OffensivePersonnel.P11: OffensivePersonnelInfo(
        OffensivePersonnel.P11, 40, "3 WR Standard",
        strengths=("balanced attack", "versatile", "keeps defense guessing"),
        weaknesses=("no heavy run support",),
    ),
    OffensivePersonnel.P12: OffensivePersonnelInfo(
        OffensivePersonnel.P12, 50, "2 TE Balanced",
        strengths=("play action", "run/pass balance", "TE mismatches"),
        weaknesses=("fewer deep threats",),
    ),
    OffensivePersonnel.P13: OffensivePersonnelInfo(
        OffensivePersonnel.P13, 75, "3 TE Heavy",
        strengths=("power run", "short yardage", "play action deep"),
        weaknesses=("limited passing options", "predictable run"),
    ),
    OffensivePersonnel.P20: OffensivePersonnelInfo(
        OffensivePersonnel.P20, 25, "2 RB Spread",
        strengths=("RB screens", "check-down options", "delayed run"),
        weaknesses=("no TE blocking", "pass heavy tendency"),
    ),
    OffensivePersonnel.P21: OffensivePersonnelInfo(
        OffensivePersonnel.P21, 60, "2 RB Power",
        strengths=("power run", "lead blocking", "play action"),
        weaknesses=("limited passing tree", "slower tempo"),
    ),
    OffensivePersonnel.P22: OffensivePersonnelInfo(
        OffensivePersonnel.P22, 70, "2 RB Heavy",
        strengths=("goal line run", "short yardage", "clock control"),
        weaknesses=("very limited passing", "easy to stack box"),
    ),
    OffensivePersonnel.P23: OffensivePersonnelInfo(
        OffensivePersonnel.P23, 90, "Jumbo Package",
        strengths=("goal line push", "QB sneak setup", "maximum blocking"),
        weaknesses=("no passing threat", "one dimensional"),
    ),
}

DEFENSIVE_PERSONNEL = {
    DefensivePersonnel.BASE: DefensivePersonnelInfo(DefensivePersonnel.BASE, 4, 3, 4, 5, 0, 1.0),
    DefensivePersonnel.NICKEL: DefensivePersonnelInfo(DefensivePersonnel.NICKEL, 4, 2, 5, -5, 8, 1.1),
    DefensivePersonnel.DIME: DefensivePersonnelInfo(DefensivePersonnel.DIME, 4, 1, 6, -12, 15, 0.9),
    DefensivePersonnel.QUARTER: DefensivePersonnelInfo(DefensivePersonnel.QUARTER, 3, 1, 7, -20, 20, 0.5),
    DefensivePersonnel.GOAL_LINE: DefensivePersonnelInfo(DefensivePersonnel.GOAL_LINE, 5, 4, 2, 15, -15, 1.3),
    DefensivePersonnel.BIG_NICKEL: DefensivePersonnelInfo(DefensivePersonnel.BIG_NICKEL, 4, 2, 5, 0, 5, 1.0),
}

TE_HEAVY = (OffensivePersonnel.P12, OffensivePersonnel.P13)


@dataclass
class PersonnelMismatch:
    type: Literal["run", "pass", "none"]
    advantage: Literal["offense", "defense", "neutral"]
    modifier: float  # Rating points, positive favors offense
    description: str


# =============================================================================
# Mismatch Rules
# =============================================================================

def calculate_personnel_mismatch(
    offense_package: OffensivePersonnel,
    defense_package: DefensivePersonnel,
    is_run_play: bool,
) -> PersonnelMismatch:
    """Advantage from personnel alone. Rules are checked in order; first match wins."""
    offense = OFFENSIVE_PERSONNEL[offense_package]
    defense = DEFENSIVE_PERSONNEL[defense_package]
    heavy = offense.run_tendency >= 60
    spread = offense.run_tendency <= 30

    if heavy and defense_package == DefensivePersonnel.DIME:
        return PersonnelMismatch(
            "run", "offense", 12 + abs(defense.run_defense_modifier) / 2,
            "Heavy personnel vs light box - running lanes open",
        )
    if heavy and defense_package == DefensivePersonnel.QUARTER:
        return PersonnelMismatch(
            "run", "offense", 18 + abs(defense.run_defense_modifier) / 2,
            "Jumbo vs prevent - massive run advantage",
        )
    if spread and defense_package == DefensivePersonnel.GOAL_LINE:
        return PersonnelMismatch(
            "pass", "offense", 15 + abs(defense.pass_defense_modifier) / 2,
            "Spread vs goal line - DBs in coverage mismatches",
        )
    if spread and defense_package == DefensivePersonnel.BASE:
        return PersonnelMismatch("pass", "offense", 8, "LB covering slot WR - mismatch in coverage")

    # Defense read the tendency correctly
    if is_run_play and heavy and defense_package == DefensivePersonnel.GOAL_LINE:
        return PersonnelMismatch(
            "run", "defense", -8 - defense.run_defense_modifier / 2,
            "Defense loaded box against obvious run",
        )
    if not is_run_play and spread and defense_package == DefensivePersonnel.DIME:
        return PersonnelMismatch(
            "pass", "defense", -5 - defense.pass_defense_modifier / 2,
            "Defense in pass coverage vs pass-heavy personnel",
        )

    if offense_package in TE_HEAVY and defense_package == DefensivePersonnel.NICKEL:
        return PersonnelMismatch("pass", "offense", 10, "TE mismatch against nickel DB")

    # Balanced: the defense's own strength against this play type
    defense_modifier = defense.run_defense_modifier if is_run_play else defense.pass_defense_modifier
    base_modifier = -defense_modifier / 4
    if abs(base_modifier) >= 2:
        kind = "run" if is_run_play else "pass"
        strength = "strong" if defense_modifier > 0 else "weak"
        return PersonnelMismatch(
            kind,
            "offense" if base_modifier > 0 else "defense",
            round_half_up(base_modifier),
            f"Defense personnel {strength} against {kind}",
        )

    return PersonnelMismatch("none", "neutral", 0, "Personnel evenly matched")


# =============================================================================
# Selection
# =============================================================================

def select_defensive_personnel(
    offense_package: OffensivePersonnel,
    down: int,
    distance: int,
    field_position: int,
) -> DefensivePersonnel:
    """Defensive coordinator's answer to the offense's personnel."""
    run_tendency = OFFENSIVE_PERSONNEL[offense_package].run_tendency

    if field_position >= 97 or (down >= 3 and distance <= 1):
        return DefensivePersonnel.GOAL_LINE if run_tendency >= 60 else DefensivePersonnel.BASE

    if down == 3 and distance > 10:
        return DefensivePersonnel.DIME
    if run_tendency >= 70:
        return DefensivePersonnel.BASE
    if run_tendency <= 25:
        return DefensivePersonnel.NICKEL
    if offense_package in TE_HEAVY:
        return DefensivePersonnel.BIG_NICKEL
    return DefensivePersonnel.NICKEL


def select_offensive_personnel(
    play_type: PlayType,
    down: int,
    distance: int,
    field_position: int,
    rng: Rng,
) -> OffensivePersonnel:
    """Personnel grouping for a called play."""
    is_run = play_type.is_designed_run

    if field_position >= 98:
        return OffensivePersonnel.P23 if is_run else OffensivePersonnel.P13

    if distance <= 1 and down >= 3:
        return OffensivePersonnel.P22 if is_run else OffensivePersonnel.P12

    if play_type.is_deep:
        return OffensivePersonnel.P11 if rng.next() < 0.6 else OffensivePersonnel.P10

    if play_type == PlayType.PASS_SCREEN:
        return OffensivePersonnel.P11 if rng.next() < 0.5 else OffensivePersonnel.P20

    roll = rng.next()
    if is_run:
        if roll < 0.4:
            return OffensivePersonnel.P11
        if roll < 0.7:
            return OffensivePersonnel.P12
        return OffensivePersonnel.P21

    if roll < 0.5:
        return OffensivePersonnel.P11
    if roll < 0.75:
        return OffensivePersonnel.P12
    return OffensivePersonnel.P10


def personnel_tendency_adjustment(offense_package: OffensivePersonnel) -> tuple[float, float]:
    """(run, pass) adjustment, -10 to +10, for how loudly personnel signals the call."""
    run_signal = OFFENSIVE_PERSONNEL[offense_package].run_tendency / 100
    pass_signal = 1 - run_signal
    return (run_signal - 0.5) * 20, (pass_signal - 0.5) * 20
