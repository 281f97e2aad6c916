"""
Scheme fit scoring.

Scores how well a player's true skills meet the requirements a scheme
places on their position, then discounts players still learning it.
Scores are hidden from the user.
"""

from dataclasses import dataclass

from snapcore.core.enums import SchemeFitLevel, Side
from snapcore.core.mathutil import clamp
from snapcore.core.models.player import Player, SkillRating
from snapcore.ratings.schemes import (
    PositionRequirements,
    Scheme,
    get_position_requirements,
    is_offensive_scheme,
)

# Minimum adjusted score for each fit level, best first
FIT_LEVEL_THRESHOLDS = (
    (90, SchemeFitLevel.PERFECT),
    (75, SchemeFitLevel.GOOD),
    (50, SchemeFitLevel.NEUTRAL),
    (25, SchemeFitLevel.POOR),
)

NEUTRAL_FIT_SCORE = 50.0


@dataclass
class SchemeFitScore:
    scheme: Scheme
    raw_score: float  # 0-100
    fit_level: SchemeFitLevel
    years_in_scheme: int
    transition_penalty: float
    adjusted_score: float


def _skill_fit_score(skills: dict[str, SkillRating], requirements: PositionRequirements) -> float:
    total_score = 0.0
    total_weight = 0

    for req in requirements.skills:
        skill = skills.get(req.skill)
        if skill is None:
            continue

        weight = req.importance.weight
        if skill.true_value >= req.minimum + 10:
            score = 100.0
        elif skill.true_value >= req.minimum:
            score = 75.0
        else:
            deficit = req.minimum - skill.true_value
            score = max(0.0, 50 - deficit * 2)

        total_score += score * weight
        total_weight += weight

    if total_weight == 0:
        return NEUTRAL_FIT_SCORE
    return total_score / total_weight


def calculate_raw_scheme_fit_score(player: Player, scheme: Scheme) -> float:
    """Raw 0-100 fit before any transition penalty."""
    side = player.position.side
    if side == Side.SPECIAL_TEAMS:
        return NEUTRAL_FIT_SCORE

    # Wrong side of the ball
    if is_offensive_scheme(scheme) != (side == Side.OFFENSE):
        return NEUTRAL_FIT_SCORE

    requirements = get_position_requirements(scheme, player.position)
    if requirements is None:
        return NEUTRAL_FIT_SCORE

    skill_score = _skill_fit_score(player.skills, requirements)
    weighted = 50 + (skill_score - 50) * requirements.weight * 2
    return clamp(weighted, 0, 100)


def score_to_fit_level(score: float) -> SchemeFitLevel:
    for threshold, level in FIT_LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return SchemeFitLevel.TERRIBLE


def transition_penalty(years_in_scheme: int) -> float:
    """Deterministic penalty for players new to a scheme (midpoint of the yearly range)."""
    if years_in_scheme >= 3:
        return 0.0
    if years_in_scheme == 2:
        return -3.5
    return -7.5


def calculate_scheme_fit_score(player: Player, scheme: Scheme, years_in_scheme: int = 0) -> SchemeFitScore:
    raw = calculate_raw_scheme_fit_score(player, scheme)
    penalty = transition_penalty(years_in_scheme)
    adjusted = clamp(raw + penalty, 0, 100)
    return SchemeFitScore(
        scheme=scheme,
        raw_score=raw,
        fit_level=score_to_fit_level(adjusted),
        years_in_scheme=years_in_scheme,
        transition_penalty=penalty,
        adjusted_score=adjusted,
    )
