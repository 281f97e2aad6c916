"""
Team composite ratings.

Aggregates individual effective ratings into unit strengths (pass
protection, run blocking, receiving, rushing, pass rush, run stopping,
pass coverage). Each unit is a position-weighted average minus a
penalty for its weakest link. Never shown to the user.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from snapcore.core.enums import GameStakes, Position
from snapcore.core.mathutil import clamp
from snapcore.core.models.conditions import WeatherCondition
from snapcore.core.models.player import Player
from snapcore.core.models.team_state import TeamGameState
from snapcore.ratings.effective import calculate_effective_rating
from snapcore.ratings.weights import DEFAULT_WEIGHT_TABLES, OL_KEYS, PositionWeightTables

logger = logging.getLogger(__name__)


@dataclass
class UnitRating:
    """One unit's strength for one play."""

    average: float = 50.0
    weighted_average: float = 50.0
    floor: float = 50.0
    weak_link_position: str = "Unknown"
    weak_link_penalty: float = 0.0
    effective: float = 50.0

    @classmethod
    def neutral(cls, weak_link_position: str = "Unknown") -> "UnitRating":
        """Rating used when a unit doesn't have enough players."""
        return cls(weak_link_position=weak_link_position)

    @classmethod
    def empty(cls) -> "UnitRating":
        """Placeholder for units a side doesn't field on this play."""
        return cls(0.0, 0.0, 0.0, "", 0.0, 0.0)


@dataclass
class TeamCompositeRatings:
    # Offensive units
    pass_protection: UnitRating = field(default_factory=UnitRating.empty)
    run_blocking: UnitRating = field(default_factory=UnitRating.empty)
    receiving: UnitRating = field(default_factory=UnitRating.empty)
    rushing: UnitRating = field(default_factory=UnitRating.empty)

    # Defensive units
    pass_rush: UnitRating = field(default_factory=UnitRating.empty)
    run_stopping: UnitRating = field(default_factory=UnitRating.empty)
    pass_coverage: UnitRating = field(default_factory=UnitRating.empty)


@dataclass
class CompositeMatchup:
    offense: TeamCompositeRatings
    defense: TeamCompositeRatings


def calculate_weak_link_penalty(weighted_average: float, floor: float, floor_weight: float = 1.0) -> float:
    """Penalty for the gap between the unit and its weakest weighted player.

    Tiered: gaps over 20 pay half, over 10 pay 30%, smaller gaps 15%.
    """
    gap = weighted_average - floor * floor_weight
    if gap > 20:
        return gap * 0.5
    if gap > 10:
        return gap * 0.3
    return gap * 0.15


def player_effective_rating(
    player: Player,
    skill: str,
    team: TeamGameState,
    weather: WeatherCondition,
    stakes: GameStakes,
    is_offense: bool,
) -> int:
    """Effective rating using the team's coach, scheme and weekly variance for the player."""
    return calculate_effective_rating(
        player,
        skill,
        position_coach=team.get_position_coach(player.position),
        team_scheme=team.offensive_scheme if is_offense else team.defensive_scheme,
        assigned_role=player.role_fit.current_role,
        weather=weather,
        game_stakes=stakes,
        weekly_variance=team.get_weekly_variance(player.id),
    )


def _aggregate(
    entries: list[tuple[str, float, float]],
    weak_link_multiplier: float,
    weighted_floor: bool = True,
) -> UnitRating:
    """Fold (position, rating, weight) entries into a UnitRating.

    With ``weighted_floor`` the weak link is the lowest rating x weight
    and its weight scales the floor; otherwise it is the lowest raw rating.
    """
    total_weight = 0.0
    weighted_sum = 0.0
    simple_sum = 0.0
    min_rating = 100.0
    min_position = ""
    min_weight = 1.0

    for position, rating, weight in entries:
        weighted_sum += rating * weight
        total_weight += weight
        simple_sum += rating

        if weighted_floor:
            if rating * weight < min_rating * min_weight:
                min_rating, min_position, min_weight = rating, position, weight
        elif rating < min_rating:
            min_rating, min_position = rating, position

    weighted_average = weighted_sum / total_weight
    floor_weight = min_weight if weighted_floor else 1.0
    penalty = calculate_weak_link_penalty(weighted_average, min_rating, floor_weight) * weak_link_multiplier

    return UnitRating(
        average=simple_sum / len(entries),
        weighted_average=weighted_average,
        floor=min_rating,
        weak_link_position=min_position,
        weak_link_penalty=penalty,
        effective=clamp(weighted_average - penalty, 1, 100),
    )


def _top_by_weighted(entries: list[tuple[str, float, float]], count: int) -> list[tuple[str, float, float]]:
    return sorted(entries, key=lambda e: e[1] * e[2], reverse=True)[:count]


# =============================================================================
# Offensive Units
# =============================================================================

def calculate_pass_protection_rating(
    team: TeamGameState,
    weather: WeatherCondition,
    stakes: GameStakes,
    tables: PositionWeightTables = DEFAULT_WEIGHT_TABLES,
) -> UnitRating:
    linemen = team.offense.ol
    if len(linemen) < 5:
        logger.warning(f"{team.name}: only {len(linemen)} offensive linemen, pass protection neutral")
        return UnitRating.neutral()

    entries = [
        (slot, player_effective_rating(p, "pass_block", team, weather, stakes, True), tables.pass_protection[slot])
        for slot, p in zip(OL_KEYS, linemen)
    ]
    return _aggregate(entries, tables.weak_link.pass_protection)


def calculate_run_blocking_rating(
    team: TeamGameState,
    weather: WeatherCondition,
    stakes: GameStakes,
    direction: Optional[str] = None,
    tables: PositionWeightTables = DEFAULT_WEIGHT_TABLES,
) -> UnitRating:
    linemen = team.offense.ol
    if len(linemen) < 5:
        logger.warning(f"{team.name}: only {len(linemen)} offensive linemen, run blocking neutral")
        return UnitRating.neutral()

    weights = tables.run_blocking_for(direction)
    entries = [
        (slot, player_effective_rating(p, "run_block", team, weather, stakes, True), weights[slot])
        for slot, p in zip(OL_KEYS, linemen)
    ]
    return _aggregate(entries, tables.weak_link.run_blocking)


def calculate_receiving_rating(
    team: TeamGameState,
    weather: WeatherCondition,
    stakes: GameStakes,
    tables: PositionWeightTables = DEFAULT_WEIGHT_TABLES,
) -> UnitRating:
    """Top receivers by rating, weighted primary > secondary > tertiary."""
    receivers: list[tuple[str, float]] = []
    for wr in team.offense.wr:
        receivers.append((wr.position.value, player_effective_rating(wr, "route_running", team, weather, stakes, True)))
    for te in team.offense.te:
        receivers.append((te.position.value, player_effective_rating(te, "catching", team, weather, stakes, True)))
    for rb in team.offense.rb:
        rating = player_effective_rating(rb, "catching", team, weather, stakes, True)
        receivers.append((rb.position.value, rating * tables.rb_receiving_discount))

    if not receivers:
        logger.warning(f"{team.name}: no receivers, receiving neutral")
        return UnitRating.neutral()

    receivers.sort(key=lambda r: r[1], reverse=True)
    entries = [
        (position, rating, weight)
        for (position, rating), weight in zip(receivers, tables.receiving_depth)
    ]
    return _aggregate(entries, tables.weak_link.receiving, weighted_floor=False)


def calculate_rushing_rating(
    team: TeamGameState,
    weather: WeatherCondition,
    stakes: GameStakes,
    direction: Optional[str] = None,
    tables: PositionWeightTables = DEFAULT_WEIGHT_TABLES,
) -> UnitRating:
    """Lead back blended with run blocking; a great back can't fix a bad line."""
    if not team.offense.rb:
        logger.warning(f"{team.name}: no running back, rushing neutral")
        return UnitRating.neutral(weak_link_position="RB")

    rb_rating = player_effective_rating(team.offense.rb[0], "vision", team, weather, stakes, True)
    blocking = calculate_run_blocking_rating(team, weather, stakes, direction, tables)

    share = tables.rushing_rb_share
    weighted_average = rb_rating * share + blocking.effective * (1 - share)
    floor = min(rb_rating, blocking.floor)
    weak_link_position = "RB" if rb_rating < blocking.floor else blocking.weak_link_position
    penalty = calculate_weak_link_penalty(weighted_average, floor) * tables.weak_link.rushing

    return UnitRating(
        average=(rb_rating + blocking.average) / 2,
        weighted_average=weighted_average,
        floor=floor,
        weak_link_position=weak_link_position,
        weak_link_penalty=penalty,
        effective=clamp(weighted_average - penalty, 1, 100),
    )


# =============================================================================
# Defensive Units
# =============================================================================

def calculate_pass_rush_rating(
    team: TeamGameState,
    weather: WeatherCondition,
    stakes: GameStakes,
    tables: PositionWeightTables = DEFAULT_WEIGHT_TABLES,
) -> UnitRating:
    rushers = []
    for p in team.defense.dl:
        weight = tables.pass_rush.get(p.position.value, tables.default_weight)
        rushers.append((p.position.value, player_effective_rating(p, "pass_rush", team, weather, stakes, False), weight))
    for p in team.defense.lb:
        if p.position == Position.OLB:
            rating = player_effective_rating(p, "blitzing", team, weather, stakes, False)
            rushers.append((p.position.value, rating, tables.pass_rush["OLB"]))

    if not rushers:
        logger.warning(f"{team.name}: no pass rushers, pass rush neutral")
        return UnitRating.neutral()

    top = _top_by_weighted(rushers, tables.pass_rush_unit_size)
    return _aggregate(top, tables.weak_link.pass_rush, weighted_floor=False)


def calculate_run_stopping_rating(
    team: TeamGameState,
    weather: WeatherCondition,
    stakes: GameStakes,
    tables: PositionWeightTables = DEFAULT_WEIGHT_TABLES,
) -> UnitRating:
    """Front seven against the run; backs find the weak gap."""
    defenders = []
    for p in team.defense.dl:
        weight = tables.run_stopping.get(p.position.value, tables.default_weight)
        defenders.append((p.position.value, player_effective_rating(p, "run_defense", team, weather, stakes, False), weight))
    for p in team.defense.lb:
        weight = tables.run_stopping.get(p.position.value, tables.default_weight)
        defenders.append((p.position.value, player_effective_rating(p, "tackling", team, weather, stakes, False), weight))

    if not defenders:
        logger.warning(f"{team.name}: no front seven, run stopping neutral")
        return UnitRating.neutral()

    top = _top_by_weighted(defenders, tables.run_stopping_unit_size)
    return _aggregate(top, tables.weak_link.run_stopping)


def calculate_pass_coverage_rating(
    team: TeamGameState,
    weather: WeatherCondition,
    stakes: GameStakes,
    tables: PositionWeightTables = DEFAULT_WEIGHT_TABLES,
) -> UnitRating:
    """Coverage players; the weakest corner gets targeted hardest."""
    defenders = []
    for p in team.defense.db:
        weight = tables.pass_coverage.get(p.position.value, tables.default_weight)
        defenders.append((p.position.value, player_effective_rating(p, "man_coverage", team, weather, stakes, False), weight))
    for p in team.defense.lb:
        weight = tables.pass_coverage.get(p.position.value, tables.linebacker_coverage_default)
        defenders.append((p.position.value, player_effective_rating(p, "coverage", team, weather, stakes, False), weight))

    if not defenders:
        logger.warning(f"{team.name}: no coverage players, pass coverage neutral")
        return UnitRating.neutral()

    top = _top_by_weighted(defenders, tables.pass_coverage_unit_size)
    return _aggregate(top, tables.weak_link.pass_coverage)


# =============================================================================
# Team Level
# =============================================================================

def calculate_team_composite_ratings(
    offense_team: TeamGameState,
    defense_team: TeamGameState,
    weather: WeatherCondition,
    stakes: GameStakes,
    direction: Optional[str] = None,
    tables: PositionWeightTables = DEFAULT_WEIGHT_TABLES,
) -> CompositeMatchup:
    """Offensive units for the team with the ball, defensive units for the other."""
    offense = TeamCompositeRatings(
        pass_protection=calculate_pass_protection_rating(offense_team, weather, stakes, tables),
        run_blocking=calculate_run_blocking_rating(offense_team, weather, stakes, direction, tables),
        receiving=calculate_receiving_rating(offense_team, weather, stakes, tables),
        rushing=calculate_rushing_rating(offense_team, weather, stakes, direction, tables),
    )
    defense = TeamCompositeRatings(
        pass_rush=calculate_pass_rush_rating(defense_team, weather, stakes, tables),
        run_stopping=calculate_run_stopping_rating(defense_team, weather, stakes, tables),
        pass_coverage=calculate_pass_coverage_rating(defense_team, weather, stakes, tables),
    )
    return CompositeMatchup(offense=offense, defense=defense)


def get_matchup_advantage(offense: TeamCompositeRatings, defense: TeamCompositeRatings, is_pass: bool) -> float:
    """Unit-vs-unit advantage, roughly -40 to +40, positive favors the offense."""
    if is_pass:
        protection_vs_rush = offense.pass_protection.effective - defense.pass_rush.effective
        receiving_vs_coverage = offense.receiving.effective - defense.pass_coverage.effective
        return protection_vs_rush * 0.4 + receiving_vs_coverage * 0.6

    blocking_vs_stopping = offense.run_blocking.effective - defense.run_stopping.effective
    rushing_vs_stopping = offense.rushing.effective - defense.run_stopping.effective
    return blocking_vs_stopping * 0.5 + rushing_vs_stopping * 0.5
