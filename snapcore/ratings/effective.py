"""
Effective rating calculation.

Turns a player's hidden true skill into the number the engine actually
uses for one skill on one play. The value is never shown to the user.

    base true rating
    + scheme fit          (-10 to +10)
    + role fit            (-8 to +10)
    + coach chemistry     (-10 to +10)
    + coach quality       (-5 to +10)
    + weather             (-10 to +2)
    + stakes x it factor  (-15 to +15)
    + weekly variance
    then x injury, - fatigue, + morale, +/- effort traits
    = effective rating (1-100)
"""

from typing import Optional, Sequence

from snapcore.core.enums import GameStakes, HiddenTrait, Precipitation, RoleType
from snapcore.core.mathutil import clamp, round_half_up
from snapcore.core.models.coach import Coach
from snapcore.core.models.conditions import WeatherCondition
from snapcore.core.models.player import Player
from snapcore.ratings.scheme_fit import calculate_scheme_fit_score
from snapcore.ratings.schemes import Scheme

# How much clutch ability matters at each stakes level
STAKES_MULTIPLIERS = {
    GameStakes.PRESEASON: 0.0,
    GameStakes.REGULAR: 0.5,
    GameStakes.RIVALRY: 0.75,
    GameStakes.PLAYOFF: 1.0,
    GameStakes.CHAMPIONSHIP: 1.25,
}

# Game-day IQ floor -> fractional modifier, best first
COACH_GAME_DAY_LADDER = (
    (90, 0.10),
    (80, 0.07),
    (70, 0.04),
    (60, 0.02),
    (50, 0.0),
    (40, -0.02),
)
COACH_GAME_DAY_FLOOR = -0.05


def true_skill_value(player: Player, skill: str) -> float:
    """True value of a skill, falling back to the player's skill average."""
    value = player.skill_value(skill)
    if value is not None:
        return value
    return player.average_skill()


def calculate_scheme_fit_modifier(player: Player, scheme: Optional[Scheme], years_in_scheme: int = 1) -> int:
    """Scheme fit in rating points, -10 to +10."""
    if scheme is None:
        return 0
    fit = calculate_scheme_fit_score(player, scheme, years_in_scheme)
    return round_half_up(fit.fit_level.modifier * 100)


def calculate_role_fit_modifier(player: Player, role: RoleType) -> float:
    """Role fit in rating points, -8 to +10. Playing out of role costs extra."""
    base_points = (player.role_fit.multiplier - 1) * 100
    if player.role_fit.current_role != role:
        return max(base_points - 3, -8)
    return min(base_points, 10)


def calculate_coach_chemistry_modifier(player: Player, coach: Optional[Coach]) -> int:
    if coach is None:
        return 0
    return coach.chemistry_with(player.id)


def game_day_coach_modifier(coach: Coach) -> float:
    for floor, modifier in COACH_GAME_DAY_LADDER:
        if coach.game_day_iq >= floor:
            return modifier
    return COACH_GAME_DAY_FLOOR


def calculate_coach_quality_modifier(coach: Optional[Coach]) -> int:
    """Coach game-day quality in rating points, -5 to +10."""
    if coach is None:
        return 0
    return round_half_up(game_day_coach_modifier(coach) * 100)


def calculate_weather_modifier(player: Player, weather: WeatherCondition) -> float:
    """Weather penalty, -10 to +2. Domes negate weather entirely."""
    if weather.is_dome:
        return 0

    modifier = 0
    if weather.temperature < 32:
        modifier -= 3
    elif weather.temperature < 45:
        modifier -= 1
    elif weather.temperature > 90:
        modifier -= 2

    if weather.precipitation == Precipitation.RAIN:
        modifier -= 2
    elif weather.precipitation == Precipitation.SNOW:
        modifier -= 4

    if weather.wind > 20:
        modifier -= 3
    elif weather.wind > 15:
        modifier -= 2
    elif weather.wind > 10:
        modifier -= 1

    if player.has_trait(HiddenTrait.IRON_MAN):
        modifier = min(modifier + 2, 2)

    return clamp(modifier, -10, 2)


def calculate_stakes_modifier(player: Player, stakes: GameStakes) -> float:
    """It factor and pressure traits scaled by stakes, -15 to +15."""
    stakes_multiplier = STAKES_MULTIPLIERS[stakes]
    base_points = (player.clutch_multiplier - 1) * 100

    modifier = base_points * stakes_multiplier
    if player.has_trait(HiddenTrait.CLUTCH):
        modifier += 5 * stakes_multiplier
    if player.has_trait(HiddenTrait.CHOKES):
        modifier -= 5 * stakes_multiplier
    if player.has_trait(HiddenTrait.COOL_UNDER_PRESSURE):
        modifier += 3 * stakes_multiplier

    return clamp(modifier, -15, 15)


def calculate_effective_rating(
    player: Player,
    skill: str,
    position_coach: Optional[Coach] = None,
    team_scheme: Optional[Scheme] = None,
    assigned_role: RoleType = RoleType.STARTER,
    weather: Optional[WeatherCondition] = None,
    game_stakes: GameStakes = GameStakes.REGULAR,
    weekly_variance: float = 0.0,
) -> int:
    """Effective rating for one skill in the current context, 1-100."""
    weather = weather or WeatherCondition.default()

    rating = (
        true_skill_value(player, skill)
        + calculate_scheme_fit_modifier(player, team_scheme)
        + calculate_role_fit_modifier(player, assigned_role)
        + calculate_coach_chemistry_modifier(player, position_coach)
        + calculate_coach_quality_modifier(position_coach)
        + calculate_weather_modifier(player, weather)
        + calculate_stakes_modifier(player, game_stakes)
        + weekly_variance
    )

    rating *= player.injury_status.performance_multiplier
    rating -= int(player.fatigue // 25)
    rating += (player.morale - 50) / 25

    if player.has_trait(HiddenTrait.MOTOR):
        rating += 2
    if player.has_trait(HiddenTrait.LAZY):
        rating -= 3

    return int(clamp(round_half_up(rating), 1, 100))


def calculate_average_effective_rating(player: Player, skills: Sequence[str], **context) -> int:
    """Mean effective rating across several skills, 50 with none."""
    if not skills:
        return 50
    total = sum(calculate_effective_rating(player, skill, **context) for skill in skills)
    return round_half_up(total / len(skills))
