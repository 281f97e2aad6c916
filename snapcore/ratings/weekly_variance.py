"""
Weekly performance variance.

Pre-rolls one variance value per player per game week from the player's
consistency tier, including hot and cold streaks. The value stays fixed
for every play of that week's game.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Optional
from uuid import UUID

from snapcore.core.enums import ConsistencyTier, StreakState
from snapcore.core.mathutil import clamp
from snapcore.core.models.player import ConsistencyProfile, Player
from snapcore.core.rng import Rng

# Rating-point variance range per tier
VARIANCE_RANGES: dict[ConsistencyTier, tuple[float, float]] = {
    ConsistencyTier.METRONOME: (-1, 1),
    ConsistencyTier.STEADY: (-3, 3),
    ConsistencyTier.AVERAGE: (-5, 5),
    ConsistencyTier.STREAKY: (-7, 7),
    ConsistencyTier.VOLATILE: (-10, 10),
    ConsistencyTier.CHAOTIC: (-15, 15),
}

STREAK_MODIFIERS = {
    StreakState.HOT: 3,
    StreakState.COLD: -3,
    StreakState.NEUTRAL: 0,
}

STREAK_PROBABILITY = {
    ConsistencyTier.METRONOME: 0.02,
    ConsistencyTier.STEADY: 0.05,
    ConsistencyTier.AVERAGE: 0.1,
    ConsistencyTier.STREAKY: 0.25,
    ConsistencyTier.VOLATILE: 0.2,
    ConsistencyTier.CHAOTIC: 0.15,
}

# (minimum, extra games) - length is minimum + floor(rand * extra)
STREAK_LENGTH = {
    ConsistencyTier.METRONOME: (1, 0),
    ConsistencyTier.STEADY: (1, 2),
    ConsistencyTier.AVERAGE: (1, 3),
    ConsistencyTier.STREAKY: (2, 4),
    ConsistencyTier.VOLATILE: (1, 3),
    ConsistencyTier.CHAOTIC: (1, 2),
}


@dataclass
class WeeklyVarianceResult:
    variance: float
    new_streak_state: StreakState
    streak_games_remaining: int


def normal_in_range(low: float, high: float, rng: Rng) -> float:
    """Box-Muller draw centered in [low, high], sd = range / 4, clamped."""
    u1 = 1.0 - rng.next()  # (0, 1] keeps log finite
    u2 = rng.next()
    z = math.sqrt(-2 * math.log(u1)) * math.cos(2 * math.pi * u2)

    mean = (low + high) / 2
    std_dev = (high - low) / 4
    return clamp(mean + z * std_dev, low, high)


def _streak_length(tier: ConsistencyTier, rng: Rng) -> int:
    minimum, extra = STREAK_LENGTH[tier]
    if extra == 0:
        return minimum
    return minimum + int(rng.next() * extra)


def _pick_streak_direction(previous_week_variance: Optional[float], rng: Rng) -> StreakState:
    # Streaks tend to continue the way last week went
    if previous_week_variance is not None and previous_week_variance > 3:
        return StreakState.HOT if rng.next() < 0.7 else StreakState.COLD
    if previous_week_variance is not None and previous_week_variance < -3:
        return StreakState.COLD if rng.next() < 0.7 else StreakState.HOT
    return StreakState.HOT if rng.next() < 0.5 else StreakState.COLD


def calculate_weekly_variance(
    consistency: ConsistencyProfile,
    rng: Rng,
    previous_week_variance: Optional[float] = None,
) -> WeeklyVarianceResult:
    """Roll this week's variance and the streak state it leaves behind."""
    low, high = VARIANCE_RANGES[consistency.tier]

    if consistency.streak_games_remaining > 0:
        streak = consistency.current_streak
        if streak == StreakState.HOT:
            base = normal_in_range(high * 0.5, high, rng)
        elif streak == StreakState.COLD:
            base = normal_in_range(low, low * 0.5, rng)
        else:
            base = normal_in_range(low, high, rng)

        return WeeklyVarianceResult(
            variance=clamp(base + STREAK_MODIFIERS[streak], low - 5, high + 5),
            new_streak_state=streak,
            streak_games_remaining=consistency.streak_games_remaining - 1,
        )

    if rng.next() < STREAK_PROBABILITY[consistency.tier]:
        streak = _pick_streak_direction(previous_week_variance, rng)
        length = _streak_length(consistency.tier, rng)
        if streak == StreakState.HOT:
            base = normal_in_range(high * 0.3, high, rng)
        else:
            base = normal_in_range(low, low * 0.3, rng)

        return WeeklyVarianceResult(
            variance=clamp(base + STREAK_MODIFIERS[streak], low - 5, high + 5),
            new_streak_state=streak,
            streak_games_remaining=length - 1,  # This game counts
        )

    return WeeklyVarianceResult(
        variance=normal_in_range(low, high, rng),
        new_streak_state=StreakState.NEUTRAL,
        streak_games_remaining=0,
    )


def calculate_team_weekly_variances(players: Iterable[Player], rng: Rng) -> dict[UUID, float]:
    """Roll variances for a roster. Call once at the start of each game week."""
    return {p.id: calculate_weekly_variance(p.consistency, rng).variance for p in players}


def update_consistency_after_game(player: Player, result: WeeklyVarianceResult) -> None:
    """Carry the streak state into next week."""
    player.consistency.current_streak = result.new_streak_state
    player.consistency.streak_games_remaining = result.streak_games_remaining


def variance_description(variance: float) -> str:
    """Debug label for a variance value. Not for display."""
    if variance >= 10:
        return "significantly above normal"
    if variance >= 5:
        return "above normal"
    if variance >= 2:
        return "slightly above normal"
    if variance >= -2:
        return "normal"
    if variance >= -5:
        return "slightly below normal"
    if variance >= -10:
        return "below normal"
    return "significantly below normal"
