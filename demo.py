#!/usr/bin/env python3
"""Demo script: kick off and run drives between two generated teams."""

import argparse

from rich.console import Console
from rich.table import Table
from rich.text import Text

from snapcore.config import EngineConfig, configure_logging, set_config
from snapcore.core.enums import (
    Aggressiveness,
    DefensiveScheme,
    OffensiveScheme,
    PlayOutcome,
    PlayType,
    Position,
)
from snapcore.core.models import (
    Coach,
    CoachingStaff,
    DefensiveLineup,
    DefensivePlayCall,
    OffensiveLineup,
    OffensivePlayCall,
    PlayCallContext,
    Player,
    PlayResult,
    SkillRating,
    SpecialTeamsUnit,
    TeamGameState,
)
from snapcore.core.rng import Rng, seeded
from snapcore.simulation import (
    EnhancedPlayResolver,
    SpecialTeamsResolver,
    StandardPlayResolver,
    select_defensive_play,
    select_offensive_play,
    should_attempt_field_goal,
    should_punt,
)

console = Console()

SKILLS = (
    "accuracy", "arm_strength", "mobility", "decision_making", "awareness",
    "vision", "power", "catching", "route_running", "tracking", "speed",
    "blocking", "run_block", "pass_block", "run_defense", "pass_rush",
    "blitzing", "tackling", "man_coverage", "zone_coverage", "coverage",
    "kick_accuracy", "kick_power", "stamina", "fumble_protection",
)

# Drive cap so a stalemate can't loop forever
MAX_PLAYS_PER_DRIVE = 20

OUTCOME_STYLES = {
    PlayOutcome.TOUCHDOWN: "bold #4caf50",
    PlayOutcome.FIELD_GOAL_MADE: "bold #4caf50",
    PlayOutcome.INTERCEPTION: "bold #f44336",
    PlayOutcome.FUMBLE_LOST: "bold #f44336",
    PlayOutcome.SACK: "#f57c00",
    PlayOutcome.INCOMPLETE: "#666666",
}


# =============================================================================
# Team Generation
# =============================================================================

def generate_player(position: Position, overall: int, rng: Rng, last_name: str) -> Player:
    skills = {name: SkillRating(true_value=overall + rng.randint(-8, 8)) for name in SKILLS}
    return Player(
        first_name=position.value,
        last_name=last_name,
        position=position,
        age=rng.randint(22, 34),
        skills=skills,
    )


def generate_team(name: str, overall: int, rng: Rng) -> TeamGameState:
    """Build an 11-on-11 team with specialists around an overall rating."""

    def player(position: Position, suffix: str = "") -> Player:
        return generate_player(position, overall, rng, f"{name} {position.value}{suffix}")

    offense = OffensiveLineup(
        qb=player(Position.QB),
        rb=[player(Position.RB, "1"), player(Position.RB, "2")],
        wr=[player(Position.WR, str(i)) for i in range(1, 4)],
        te=[player(Position.TE)],
        ol=[player(p) for p in (Position.LT, Position.LG, Position.C, Position.RG, Position.RT)],
    )
    defense = DefensiveLineup(
        dl=[player(Position.DE, "1"), player(Position.DT, "1"), player(Position.DT, "2"), player(Position.DE, "2")],
        lb=[player(Position.OLB, "1"), player(Position.ILB), player(Position.OLB, "2")],
        db=[player(Position.CB, "1"), player(Position.CB, "2"), player(Position.FS), player(Position.SS)],
    )
    team = TeamGameState(
        name=name,
        offense=offense,
        defense=defense,
        special_teams=SpecialTeamsUnit(k=player(Position.K), p=player(Position.P), returner=offense.wr[2]),
        coaches=CoachingStaff(head_coach=Coach(name=f"{name} HC", game_day_iq=overall)),
        offensive_scheme=OffensiveScheme.WEST_COAST,
        defensive_scheme=DefensiveScheme.FOUR_THREE_UNDER,
    )
    # Depth for fatigue substitutions
    for position in (Position.RB, Position.WR, Position.DE, Position.DT):
        backup = player(position, " (backup)")
        team.all_players[backup.id] = backup
    return team


def kicker_range(team: TeamGameState) -> int:
    kicker = team.special_teams.k
    if kicker is None:
        return 0
    return 40 + int(kicker.skill_or("kick_power")) // 5


# =============================================================================
# Play-by-Play
# =============================================================================

def player_name(offense: TeamGameState, defense: TeamGameState, player_id) -> str:
    for team in (offense, defense):
        player = team.all_players.get(player_id)
        if player is not None:
            return player.display_name
    return "?"


def describe(result: PlayResult, offense: TeamGameState, defense: TeamGameState, context: PlayCallContext) -> Text:
    text = Text()
    text.append(f"{context.down}&{context.distance} @{context.field_position:>2}  ", style="#666666")
    text.append(f"{result.play_type.value:<16}", style="bold")

    actor = player_name(offense, defense, result.primary_offensive_player)
    line = f"{actor}: {result.outcome.value} for {result.yards_gained}"
    if result.target_player:
        line += f" (to {player_name(offense, defense, result.target_player)})"
    text.append(line, style=OUTCOME_STYLES.get(result.outcome, ""))

    if result.first_down and not result.touchdown:
        text.append("  FIRST DOWN", style="#42a5f5")
    if result.penalty_details:
        text.append(f"  FLAG: {result.penalty_details.type}", style="bold #f57c00")
    if result.injury_occurred:
        text.append(f"  INJURY: {player_name(offense, defense, result.injured_player_id)}", style="bold #f44336")
    return text


class DriveSimulator:
    """Alternate possessions with a play caller and a scrimmage resolver."""

    def __init__(self, home: TeamGameState, away: TeamGameState, resolver, rng: Rng):
        self.score = {home.name: 0, away.name: 0}
        self.resolver = resolver
        self.special_teams = SpecialTeamsResolver(resolver.config, rng)
        self.rng = rng

    def kickoff(self, kicking: TeamGameState, receiving: TeamGameState) -> int:
        context = PlayCallContext.create(field_position=35)
        result = self.special_teams.resolve_play(
            kicking, receiving, OffensivePlayCall(PlayType.KICKOFF), DefensivePlayCall(), context
        )
        console.print(Text(f"{kicking.name} kicks off, {receiving.name} start at the {result.new_field_position}",
                           style="#666666"))
        return result.new_field_position

    def run_drive(self, offense: TeamGameState, defense: TeamGameState, start: int) -> int:
        """Play one possession. Returns where the other team takes over."""
        console.rule(f"[bold]{offense.name} ball")
        context = PlayCallContext.create(field_position=start, score_differential=self._differential(offense))

        for _ in range(MAX_PLAYS_PER_DRIVE):
            if should_attempt_field_goal(context, kicker_range(offense)):
                return self._kick(offense, defense, context, PlayType.FIELD_GOAL)
            if should_punt(context, offense.coaches.head_coach.aggressiveness):
                return self._kick(offense, defense, context, PlayType.PUNT)

            offensive_call = select_offensive_play(offense.offensive_tendencies, context, self.rng)
            defensive_call = select_defensive_play(
                defense.defensive_tendencies, context, offensive_call.formation, self.rng
            )
            result = self.resolver.resolve_play(offense, defense, offensive_call, defensive_call, context)
            console.print(describe(result, offense, defense, context))

            if result.touchdown:
                scorer = defense if result.turnover else offense
                self.score[scorer.name] += 7
                return 25
            if result.safety:
                self.score[defense.name] += 2
                return 25
            if result.turnover or (context.down == 4 and not result.first_down):
                return result.new_field_position

            context = PlayCallContext.create(
                down=result.new_down,
                distance=result.new_distance,
                field_position=result.new_field_position,
                score_differential=self._differential(offense),
            )

        return 100 - context.field_position

    def _kick(self, offense: TeamGameState, defense: TeamGameState, context: PlayCallContext, play_type: PlayType) -> int:
        result = self.special_teams.resolve_play(
            offense, defense, OffensivePlayCall(play_type), DefensivePlayCall(), context
        )
        console.print(describe(result, offense, defense, context))
        if result.outcome == PlayOutcome.FIELD_GOAL_MADE:
            self.score[offense.name] += 3
        elif result.touchdown:
            self.score[defense.name] += 7
        return result.new_field_position

    def _differential(self, offense: TeamGameState) -> int:
        other = next(name for name in self.score if name != offense.name)
        return self.score[offense.name] - self.score[other]


def print_scoreboard(score: dict[str, int]) -> None:
    table = Table(title="Score", show_header=True, header_style="bold #f57c00")
    table.add_column("Team")
    table.add_column("Points", justify="right")
    for name, points in score.items():
        table.add_row(name, str(points))
    console.print(table)


def main():
    """Run a short series of drives."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--drives", type=int, default=4)
    parser.add_argument("--standard", action="store_true", help="use the standard resolver")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    config = EngineConfig(seed=args.seed, log_level=args.log_level)
    set_config(config)
    configure_logging(args.log_level)

    console.print("=" * 60)
    console.print("[bold]SNAPCORE - Play Resolution Demo[/bold]")
    console.print("=" * 60)

    rng = seeded(args.seed)
    home = generate_team("Eagles", 78, rng)
    away = generate_team("Cowboys", 74, rng)
    home.coaches.head_coach.aggressiveness = Aggressiveness.AGGRESSIVE

    resolver_class = StandardPlayResolver if args.standard else EnhancedPlayResolver
    simulator = DriveSimulator(home, away, resolver_class(config, rng), rng)
    console.print(f"Resolver: {resolver_class.__name__}, seed {args.seed}")

    offense, defense = away, home
    start = simulator.kickoff(home, away)
    for _ in range(args.drives):
        start = simulator.run_drive(offense, defense, start)
        offense, defense = defense, offense

    print_scoreboard(simulator.score)


if __name__ == "__main__":
    main()
