"""
Play-action effectiveness.

A fake only works if the defense respects the run. Tracks a rolling
window of recent runs and grades how hard linebackers and safeties
bite on the fake.
"""

from collections import deque
from dataclasses import dataclass
from typing import Optional

from snapcore.core.mathutil import clamp
from snapcore.core.rng import Rng

RUN_GAME_WINDOW = 10
SUCCESS_YARDS = 4
BIG_RUN_YARDS = 15
LEAGUE_AVERAGE_SUCCESS_RATE = 0.45


@dataclass
class RunGameStats:
    attempts: int = 0
    yards: int = 0
    successful_runs: int = 0
    big_runs: int = 0
    ypc: float = 0.0


@dataclass
class PlayActionEffectiveness:
    route_bonus: float  # defenders biting on the fake
    extra_pocket_time: float  # seconds
    deep_completion_bonus: float  # safety late to the deep third
    overall_multiplier: float  # 0.7 to 1.5
    description: str


@dataclass
class PlayActionRecommendation:
    recommended: bool
    reason: str


class RunGameTracker:
    """Rolling record of a team's most recent runs."""

    def __init__(self, window: int = RUN_GAME_WINDOW):
        self._runs: deque[tuple[int, bool]] = deque(maxlen=window)

    def record_run(self, yards_gained: int, yards_needed: int) -> None:
        # A run is a success if it gets the distance or 4 yards
        success = yards_gained >= min(yards_needed, SUCCESS_YARDS)
        self._runs.append((yards_gained, success))

    def get_stats(self) -> RunGameStats:
        if not self._runs:
            return RunGameStats()
        attempts = len(self._runs)
        yards = sum(y for y, _ in self._runs)
        return RunGameStats(
            attempts=attempts,
            yards=yards,
            successful_runs=sum(1 for _, ok in self._runs if ok),
            big_runs=sum(1 for y, _ in self._runs if y >= BIG_RUN_YARDS),
            ypc=yards / attempts,
        )

    def get_success_rate(self) -> float:
        if not self._runs:
            return LEAGUE_AVERAGE_SUCCESS_RATE
        return sum(1 for _, ok in self._runs if ok) / len(self._runs)

    def reset(self) -> None:
        self._runs.clear()

    def __len__(self) -> int:
        return len(self._runs)


# (min ypc, min success rate, route, pocket time, deep bonus, multiplier, description)
# Both minimums must be met, best tier first
_TIERS = (
    (5.0, 0.6, 15, 0.5, 20, 1.4, "Elite run game - defense selling out to stop run, PA devastating"),
    (4.5, 0.5, 10, 0.35, 15, 1.25, "Good run game - LBs hesitating, PA very effective"),
    (4.0, 0.45, 5, 0.2, 8, 1.1, "Average run game - PA getting some effect"),
)


def calculate_play_action_effectiveness(stats: RunGameStats) -> PlayActionEffectiveness:
    """Grade play action from recent run production."""
    if stats.attempts < 3:
        return PlayActionEffectiveness(0, 0, 0, 1.0, "Insufficient run attempts - defense not respecting run")

    success_rate = stats.successful_runs / stats.attempts

    for min_ypc, min_success, route, pocket, deep, multiplier, description in _TIERS:
        if stats.ypc >= min_ypc and success_rate >= min_success:
            break
    else:
        if stats.ypc >= 3.5 or success_rate >= 0.4:
            route, pocket, deep, multiplier = 2, 0.1, 3, 1.0
            description = "Mediocre run game - defense not fully respecting run"
        else:
            # Defense keys pass immediately; QB wastes time on the fake
            route, pocket, deep, multiplier = -3, -0.1, -5, 0.85
            description = "Poor run game - defense ignoring run fake entirely"

    # Backs breaking long runs get real respect
    if stats.big_runs >= 2:
        route += 5
        deep += 5
        multiplier *= 1.1

    return PlayActionEffectiveness(
        route_bonus=route,
        extra_pocket_time=pocket,
        deep_completion_bonus=deep,
        overall_multiplier=clamp(multiplier, 0.7, 1.5),
        description=description,
    )


def get_play_action_modifier(effectiveness: PlayActionEffectiveness, is_deep_pass: bool) -> float:
    """Rating points added to the offense on a play-action pass."""
    if is_deep_pass:
        return effectiveness.route_bonus + effectiveness.deep_completion_bonus
    return effectiveness.route_bonus * 0.7


def adjust_sack_probability(base_sack_rate: float, effectiveness: PlayActionEffectiveness) -> float:
    """Extra pocket time cuts sacks; a fake nobody bought adds them."""
    extra = effectiveness.extra_pocket_time
    if extra > 0:
        return base_sack_rate * (1 - extra * 0.3)
    return base_sack_rate * (1 - extra * 0.5)


def should_use_play_action(
    run_stats: RunGameStats,
    defense_aggressive_vs_run: bool,
    down: int,
    distance: int,
    rng: Optional[Rng] = None,
) -> PlayActionRecommendation:
    """Recommend play action for a situation.

    The neutral case is a 40% coin flip; without an rng it is not recommended.
    """
    effectiveness = calculate_play_action_effectiveness(run_stats)

    if down == 3 and distance > 10 and run_stats.ypc < 4.0:
        return PlayActionRecommendation(False, "Obvious passing down, defense won't bite on fake")

    if effectiveness.overall_multiplier >= 1.25 and defense_aggressive_vs_run:
        return PlayActionRecommendation(True, "Elite run game and aggressive defense - PA will be devastating")

    if down in (1, 2) and distance <= 10 and run_stats.ypc >= 4.0:
        return PlayActionRecommendation(True, "Early down situation with effective run game")

    if effectiveness.overall_multiplier >= 1.0:
        recommended = rng is not None and rng.next() < 0.4
        return PlayActionRecommendation(recommended, "Moderate PA effectiveness")

    return PlayActionRecommendation(False, "Run game not effective enough for PA")
