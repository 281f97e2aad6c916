"""
Fatigue accumulation and recovery during a game.

Fatigue (0-100) builds with every snap and costs rating points past 30.
The per-game values live on TeamGameState; these functions only compute.
"""

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional
from uuid import UUID

from snapcore.core.enums import HiddenTrait, PlayIntensity, PlayOutcome, PlayType, Position
from snapcore.core.models.conditions import WeatherCondition
from snapcore.core.models.player import Player
from snapcore.core.rng import Rng

BASE_FATIGUE_INCREASE = {
    PlayIntensity.LOW: 1.0,
    PlayIntensity.NORMAL: 2.0,
    PlayIntensity.HIGH: 3.5,
}

POSITION_FATIGUE_MULTIPLIERS = {
    Position.QB: 0.8,
    Position.RB: 1.3,
    Position.WR: 1.1,
    Position.TE: 1.15,
    Position.LT: 1.0,
    Position.LG: 1.0,
    Position.C: 1.0,
    Position.RG: 1.0,
    Position.RT: 1.0,
    Position.DE: 1.2,
    Position.DT: 1.25,
    Position.OLB: 1.2,
    Position.ILB: 1.15,
    Position.CB: 1.1,
    Position.FS: 1.05,
    Position.SS: 1.1,
    Position.K: 0.3,
    Position.P: 0.3,
}

HIGH_INTENSITY_OUTCOMES = (
    PlayOutcome.BIG_GAIN,
    PlayOutcome.TOUCHDOWN,
    PlayOutcome.BIG_LOSS,
    PlayOutcome.SACK,
    PlayOutcome.FUMBLE,
    PlayOutcome.FUMBLE_LOST,
)

LOW_INTENSITY_OUTCOMES = (
    PlayOutcome.INCOMPLETE,
    PlayOutcome.PENALTY_OFFENSE,
    PlayOutcome.PENALTY_DEFENSE,
)


@dataclass
class FatigueParams:
    player: Player
    current_fatigue: float
    snap_count: int  # snaps this game
    weather: WeatherCondition
    play_intensity: PlayIntensity


def calculate_fatigue_increase(params: FatigueParams) -> float:
    """Fatigue added by one snap (0-10 typical)."""
    player = params.player
    increase = BASE_FATIGUE_INCREASE[params.play_intensity]
    increase *= POSITION_FATIGUE_MULTIPLIERS.get(player.position, 1.0)

    if player.age >= 34:
        increase *= 1.4
    elif player.age >= 32:
        increase *= 1.25
    elif player.age >= 30:
        increase *= 1.1
    elif player.age <= 24:
        increase *= 0.9

    # Wears down as the game goes on
    if params.snap_count > 60:
        increase *= 1.3
    elif params.snap_count > 45:
        increase *= 1.2
    elif params.snap_count > 30:
        increase *= 1.1

    if params.current_fatigue > 80:
        increase *= 1.25
    elif params.current_fatigue > 60:
        increase *= 1.1

    weather = params.weather
    if not weather.is_dome:
        if weather.temperature > 85:
            increase *= 1.3
        elif weather.temperature > 80:
            increase *= 1.15
        if weather.temperature < 40:
            increase *= 0.95

    if player.has_trait(HiddenTrait.MOTOR):
        increase *= 0.85
    if player.has_trait(HiddenTrait.LAZY):
        increase *= 1.1
    if player.has_trait(HiddenTrait.IRON_MAN):
        increase *= 0.8

    return max(0.0, increase)


def get_fatigue_penalty(fatigue: float) -> float:
    """Rating points lost to fatigue, 0 to about 13.7."""
    if fatigue < 30:
        return 0
    if fatigue < 60:
        return (fatigue - 30) / 10
    if fatigue < 80:
        return 3 + (fatigue - 60) / 5
    return 7 + (fatigue - 80) / 3


def calculate_fatigue_recovery(current_fatigue: float, plays_since_last_snap: int, player_condition: float) -> float:
    """Fatigue after resting on the sideline for some plays."""
    if current_fatigue <= 0:
        return 0
    condition_multiplier = 0.7 + (player_condition / 100) * 0.6
    recovery = 3 * condition_multiplier * plays_since_last_snap
    # Very tired bodies recover a little faster
    bonus = 0.5 * plays_since_last_snap if current_fatigue > 70 else 0
    return max(0.0, current_fatigue - recovery - bonus)


def calculate_halftime_recovery(current_fatigue: float, player_condition: float) -> float:
    recovery_percent = 0.4 + (player_condition / 100) * 0.2
    return max(0.0, current_fatigue * (1 - recovery_percent))


def calculate_between_play_recovery(current_fatigue: float, rng: Rng) -> float:
    """Small recovery while staying on the field, 0.5-1 point."""
    return max(0.0, current_fatigue - (0.5 + rng.next() * 0.5))


def determine_play_intensity(play_type: PlayType, outcome: PlayOutcome) -> PlayIntensity:
    if outcome in HIGH_INTENSITY_OUTCOMES:
        return PlayIntensity.HIGH
    if outcome in LOW_INTENSITY_OUTCOMES or play_type in (PlayType.FIELD_GOAL, PlayType.PUNT):
        return PlayIntensity.LOW
    return PlayIntensity.NORMAL


def should_sub_for_fatigue(fatigue: float, position: Position) -> bool:
    """Fatigue threshold past which a player comes off the field."""
    if position == Position.QB:
        return fatigue > 90
    if position in (Position.K, Position.P):
        return False
    # Linemen rotate the most
    if position in (Position.DE, Position.DT):
        return fatigue > 65
    if position == Position.RB:
        return fatigue > 70
    return fatigue > 75


def select_fatigue_substitute(
    all_players: Mapping[UUID, Player],
    active_player_ids: Iterable[UUID],
    fatigued_player: Player,
) -> Optional[Player]:
    """Freshest same-position player who isn't on the field, if the starter needs a blow."""
    if not should_sub_for_fatigue(fatigued_player.fatigue, fatigued_player.position):
        return None

    active = set(active_player_ids)
    best: Optional[Player] = None
    for player_id, player in all_players.items():
        if player_id == fatigued_player.id or player_id in active:
            continue
        if player.position != fatigued_player.position:
            continue
        if best is None or player.fatigue < best.fatigue:
            best = player
    return best


def get_fatigue_description(fatigue: float) -> str:
    """Debug label. Not for display."""
    if fatigue < 20:
        return "Fresh"
    if fatigue < 40:
        return "Good"
    if fatigue < 60:
        return "Normal"
    if fatigue < 75:
        return "Tired"
    if fatigue < 90:
        return "Very Tired"
    return "Exhausted"


def initialize_fatigue_levels(player_ids: Iterable[UUID]) -> dict[UUID, float]:
    return {player_id: 0.0 for player_id in player_ids}
