"""Matchup resolution.

Pairs offensive and defensive players, decides each individual battle,
and rolls them up into one weighted advantage for the play.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from snapcore.core.models import Player
from snapcore.core.rng import Rng

Winner = Literal["offense", "defense", "neutral"]

# Adjusted differences inside this band are a draw
NEUTRAL_BAND = 3
SIMPLE_NEUTRAL_BAND = 2

PRIMARY_WEIGHT = 0.4
SECONDARY_WEIGHT = 0.3


@dataclass
class MatchupResult:
    """One offense-vs-defense battle."""

    winner: Winner
    margin_of_victory: float  # 0-40 typical
    offensive_rating: float
    defensive_rating: float

    @property
    def signed_margin(self) -> float:
        """Margin with offense positive, zero for a draw."""
        if self.winner == "offense":
            return self.margin_of_victory
        if self.winner == "defense":
            return -self.margin_of_victory
        return 0.0


@dataclass
class PlayerWithEffective:
    player: Player
    effective: float


@dataclass
class KeyMatchupSummary:
    offense: str
    defense: str
    result: str
    winner: Winner = "neutral"


@dataclass
class PlayMatchupResult:
    overall_winner: Literal["offense", "defense"]
    aggregate_margin: float
    key_matchup: KeyMatchupSummary

    @property
    def signed_margin(self) -> float:
        return self.aggregate_margin if self.overall_winner == "offense" else -self.aggregate_margin


def resolve_matchup(offensive_effective: float, defensive_effective: float, rng: Rng) -> MatchupResult:
    """Decide one battle. A +/-5 jitter keeps close matchups uncertain."""
    difference = offensive_effective - defensive_effective
    adjusted = difference + (rng.next() - 0.5) * 10

    if abs(adjusted) < NEUTRAL_BAND:
        winner: Winner = "neutral"
    elif adjusted > 0:
        winner = "offense"
    else:
        winner = "defense"

    return MatchupResult(winner, abs(adjusted), offensive_effective, defensive_effective)


def resolve_simple_matchup(offensive_rating: float, defensive_rating: float, rng: Rng) -> MatchupResult:
    """Quick check for plays without a lineup battle (kicks)."""
    adjusted = offensive_rating - defensive_rating + (rng.next() - 0.5) * 8

    if adjusted > SIMPLE_NEUTRAL_BAND:
        winner: Winner = "offense"
    elif adjusted < -SIMPLE_NEUTRAL_BAND:
        winner = "defense"
    else:
        winner = "neutral"

    return MatchupResult(winner, abs(adjusted), offensive_rating, defensive_rating)


def describe_matchup(margin: float, winner: Winner) -> str:
    """Phrase a result from the offensive player's point of view."""
    if winner == "neutral":
        return "fought to a draw"

    offense_won = winner == "offense"
    if margin >= 20:
        return "completely dominated" if offense_won else "was completely dominated by"
    if margin >= 15:
        return "clearly won against" if offense_won else "clearly lost to"
    if margin >= 10:
        return "had the advantage over" if offense_won else "was beaten by"
    if margin >= 5:
        return "edged out" if offense_won else "was edged by"
    return "slightly won against" if offense_won else "barely lost to"


def matchup_weights(count: int) -> list[float]:
    """Primary 40%, secondary 30%, the rest split the last 30%."""
    remainder = SECONDARY_WEIGHT / ((count - 2) or 1)
    weights = []
    for index in range(count):
        if index == 0:
            weights.append(PRIMARY_WEIGHT)
        elif index == 1:
            weights.append(SECONDARY_WEIGHT)
        else:
            weights.append(remainder)
    return weights


def calculate_weighted_margin(
    matchups: list[MatchupResult],
    weights: list[float],
) -> tuple[float, Literal["offense", "defense"]]:
    """(absolute margin, winner) of the weighted signed margins."""
    if not matchups or not weights:
        return 0.0, "offense"

    weighted_sum = 0.0
    total_weight = 0.0
    for matchup, weight in zip(matchups, weights):
        weighted_sum += matchup.signed_margin * weight
        total_weight += weight

    margin = weighted_sum / total_weight if total_weight > 0 else 0.0
    return abs(margin), "offense" if margin >= 0 else "defense"


def find_key_matchup(
    offensive_players: list[PlayerWithEffective],
    defensive_players: list[PlayerWithEffective],
    matchups: list[MatchupResult],
) -> KeyMatchupSummary:
    """The most lopsided battle; ties keep the earliest pairing."""
    key_index = 0
    largest = 0.0
    for index, matchup in enumerate(matchups):
        if matchup.margin_of_victory > largest:
            largest = matchup.margin_of_victory
            key_index = index

    key = matchups[key_index]
    return KeyMatchupSummary(
        offense=offensive_players[key_index].player.display_name,
        defense=defensive_players[key_index].player.display_name,
        result=describe_matchup(key.margin_of_victory, key.winner),
        winner=key.winner,
    )


def resolve_play_matchup(
    offensive_players: list[PlayerWithEffective],
    defensive_players: list[PlayerWithEffective],
    rng: Rng,
) -> PlayMatchupResult:
    """Aggregate index-paired battles into the play's overall advantage.

    Pairing is positional: the first offensive player faces the first
    defender, and so on, up to the shorter list.
    """
    if not offensive_players or not defensive_players:
        return PlayMatchupResult(
            "offense", 0.0, KeyMatchupSummary("Unknown", "Unknown", "no contest")
        )

    matchups = [
        resolve_matchup(off.effective, dfn.effective, rng)
        for off, dfn in zip(offensive_players, defensive_players)
    ]
    margin, winner = calculate_weighted_margin(matchups, matchup_weights(len(matchups)))

    return PlayMatchupResult(
        overall_winner=winner,
        aggregate_margin=margin,
        key_matchup=find_key_matchup(offensive_players, defensive_players, matchups),
    )


def calculate_group_effective_rating(players: list[PlayerWithEffective]) -> float:
    if not players:
        return 50.0
    return sum(p.effective for p in players) / len(players)
