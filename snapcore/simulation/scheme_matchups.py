"""
Scheme matchup effects.

Gradient offense x defense interactions with play-category specific
modifiers, instead of a binary "this scheme counters that one".
All effect values are percentage modifiers.
"""

from dataclasses import dataclass

from snapcore.core.enums import DefensiveScheme, OffensiveScheme, PlayOutcome, PlayType


@dataclass(frozen=True)
class PlayTypeEffects:
    completion: float = 0
    yards: float = 0
    sack: float = 0
    interception: float = 0
    big_play: float = 0
    fumble: float = 0

    def merged(self, other: "PlayTypeEffects") -> "PlayTypeEffects":
        """Average of two effect sets (play action over its base category)."""
        return PlayTypeEffects(
            completion=(self.completion + other.completion) / 2,
            yards=(self.yards + other.yards) / 2,
            sack=(self.sack + other.sack) / 2,
            interception=(self.interception + other.interception) / 2,
            big_play=(self.big_play + other.big_play) / 2,
            fumble=(self.fumble + other.fumble) / 2,
        )


NO_EFFECT = PlayTypeEffects()


@dataclass(frozen=True)
class SchemeMatchupEffect:
    offense: OffensiveScheme
    defense: DefensiveScheme
    deep_pass: PlayTypeEffects = NO_EFFECT
    short_pass: PlayTypeEffects = NO_EFFECT
    run_inside: PlayTypeEffects = NO_EFFECT
    run_outside: PlayTypeEffects = NO_EFFECT
    play_action: PlayTypeEffects = NO_EFFECT
    screen: PlayTypeEffects = NO_EFFECT
    overall_advantage: float = 0  # -20 to +20, positive favors offense
    description: str = "Neutral matchup"


E = PlayTypeEffects
O = OffensiveScheme
D = DefensiveScheme

_MATCHUPS = [
    # West Coast
    SchemeMatchupEffect(
        O.WEST_COAST, D.COVER_TWO,
        deep_pass=E(completion=-15, yards=-20, interception=10),
        short_pass=E(completion=5, yards=10, big_play=-5),
        run_inside=E(yards=-5), run_outside=E(yards=-5),
        play_action=E(completion=-10, yards=-15),
        screen=E(yards=15, big_play=10),
        overall_advantage=-2,
        description="Cover 2 takes away deep shots, forces underneath throws",
    ),
    SchemeMatchupEffect(
        O.WEST_COAST, D.MAN_PRESS,
        deep_pass=E(completion=-5, yards=5, big_play=15),
        short_pass=E(completion=-10, yards=-15, sack=10),
        run_inside=E(yards=5), run_outside=E(yards=10),
        play_action=E(completion=10, yards=15, big_play=20),
        screen=E(yards=-10, interception=5),
        overall_advantage=-3,
        description="Press coverage disrupts timing routes",
    ),
    SchemeMatchupEffect(
        O.WEST_COAST, D.BLITZ_HEAVY,
        deep_pass=E(completion=-20, sack=25, interception=15),
        short_pass=E(completion=10, yards=15, big_play=10),
        run_inside=E(yards=-10, fumble=10), run_outside=E(yards=5),
        play_action=E(sack=20, completion=-15),
        screen=E(yards=25, big_play=30),
        overall_advantage=5,
        description="Quick passes exploit blitz, screens devastating",
    ),
    SchemeMatchupEffect(
        O.WEST_COAST, D.COVER_THREE,
        deep_pass=E(completion=-5, yards=-10),
        short_pass=E(completion=10, yards=5),
        run_inside=E(yards=-5), run_outside=E(yards=0),
        play_action=E(completion=5, yards=10),
        screen=E(yards=5),
        overall_advantage=3,
        description="Soft zones allow timing routes underneath",
    ),
    # Air Raid
    SchemeMatchupEffect(
        O.AIR_RAID, D.COVER_TWO,
        deep_pass=E(completion=-20, yards=-25, interception=15),
        short_pass=E(completion=0, yards=5),
        # Light boxes
        run_inside=E(yards=10), run_outside=E(yards=15),
        play_action=E(completion=-10, yards=-10),
        screen=E(yards=10, big_play=5),
        overall_advantage=-5,
        description="Two deep safeties bracket vertical routes",
    ),
    SchemeMatchupEffect(
        O.AIR_RAID, D.BLITZ_HEAVY,
        deep_pass=E(completion=-15, sack=30, big_play=20),
        short_pass=E(completion=5, yards=10, big_play=15),
        run_inside=E(yards=-15, fumble=15), run_outside=E(yards=-10),
        play_action=E(sack=25, interception=10),
        screen=E(yards=30, big_play=35),
        overall_advantage=8,
        description="High risk/reward - big sacks or big plays",
    ),
    SchemeMatchupEffect(
        O.AIR_RAID, D.MAN_PRESS,
        deep_pass=E(completion=-10, yards=10, big_play=25, interception=10),
        short_pass=E(completion=-15, yards=-20, sack=15),
        run_inside=E(yards=5), run_outside=E(yards=10),
        play_action=E(big_play=20, completion=5),
        screen=E(yards=-15, interception=10),
        overall_advantage=0,
        description="Coin flip - either deep shot connects or disruption",
    ),
    SchemeMatchupEffect(
        O.AIR_RAID, D.COVER_THREE,
        deep_pass=E(completion=5, yards=10, big_play=10),
        short_pass=E(completion=10, yards=5),
        run_inside=E(yards=5), run_outside=E(yards=0),
        play_action=E(completion=10, yards=15, big_play=15),
        screen=E(yards=5),
        overall_advantage=8,
        description="Four verticals stress single high safety",
    ),
    # Spread Option
    SchemeMatchupEffect(
        O.SPREAD_OPTION, D.FOUR_THREE_UNDER,
        deep_pass=E(completion=-5, yards=0),
        short_pass=E(completion=5, yards=5),
        run_inside=E(yards=-10, fumble=5), run_outside=E(yards=5, big_play=10),
        play_action=E(completion=10, yards=15),
        screen=E(yards=10, big_play=5),
        overall_advantage=2,
        description="Designed runs struggle vs gap integrity",
    ),
    SchemeMatchupEffect(
        O.SPREAD_OPTION, D.THREE_FOUR,
        deep_pass=E(completion=5, yards=5),
        short_pass=E(completion=10, yards=10),
        run_inside=E(yards=-15, fumble=10), run_outside=E(yards=-5),
        play_action=E(completion=15, yards=20),
        screen=E(yards=5),
        overall_advantage=-3,
        description="3-4 OLBs read option keys, multiple gaps filled",
    ),
    SchemeMatchupEffect(
        O.SPREAD_OPTION, D.MAN_PRESS,
        deep_pass=E(completion=5, yards=10, big_play=15),
        short_pass=E(completion=-5, yards=-5),
        run_inside=E(yards=10, big_play=15), run_outside=E(yards=15, big_play=20),
        play_action=E(completion=10, yards=10),
        screen=E(yards=-5),
        overall_advantage=7,
        description="Man coverage leaves run lanes open, no extra eyes",
    ),
    # Power Run
    SchemeMatchupEffect(
        O.POWER_RUN, D.FOUR_THREE_UNDER,
        deep_pass=E(completion=0, yards=0),
        short_pass=E(completion=5, yards=5),
        run_inside=E(yards=-10, fumble=5), run_outside=E(yards=-5),
        play_action=E(completion=15, yards=20, big_play=15),
        screen=E(yards=5),
        overall_advantage=-4,
        description="Under front built to stop power, but PA kills",
    ),
    SchemeMatchupEffect(
        O.POWER_RUN, D.BLITZ_HEAVY,
        deep_pass=E(completion=-10, sack=20),
        short_pass=E(completion=5, yards=5),
        run_inside=E(yards=15, big_play=20), run_outside=E(yards=10, big_play=15),
        play_action=E(sack=15, big_play=25),
        screen=E(yards=20, big_play=25),
        overall_advantage=10,
        description="Blitzes leave gaping holes for power run",
    ),
    SchemeMatchupEffect(
        O.POWER_RUN, D.COVER_TWO,
        deep_pass=E(completion=-10, yards=-15),
        short_pass=E(completion=5, yards=5),
        run_inside=E(yards=10, big_play=10), run_outside=E(yards=15, big_play=15),
        play_action=E(completion=10, yards=15),
        screen=E(yards=5),
        overall_advantage=5,
        description="Cover 2 shell leaves light boxes",
    ),
    # Zone Run
    SchemeMatchupEffect(
        O.ZONE_RUN, D.THREE_FOUR,
        deep_pass=E(completion=5, yards=5),
        short_pass=E(completion=5, yards=5),
        run_inside=E(yards=-15), run_outside=E(yards=-10),
        play_action=E(completion=10, yards=10),
        screen=E(yards=5),
        overall_advantage=-6,
        description="3-4 two-gapping disrupts zone blocking angles",
    ),
    SchemeMatchupEffect(
        O.ZONE_RUN, D.COVER_THREE,
        deep_pass=E(completion=0, yards=0),
        short_pass=E(completion=5, yards=5),
        run_inside=E(yards=-5), run_outside=E(yards=-5),
        play_action=E(completion=5, yards=10),
        screen=E(yards=5),
        overall_advantage=-3,
        description="Single high = extra defender in box",
    ),
    SchemeMatchupEffect(
        O.ZONE_RUN, D.MAN_PRESS,
        deep_pass=E(completion=5, yards=10, big_play=10),
        short_pass=E(completion=5, yards=5),
        run_inside=E(yards=10, big_play=10), run_outside=E(yards=15, big_play=20),
        play_action=E(completion=15, yards=20, big_play=20),
        screen=E(yards=0),
        overall_advantage=8,
        description="Man coverage pulls defenders out of box",
    ),
    # Play Action
    SchemeMatchupEffect(
        O.PLAY_ACTION, D.COVER_TWO,
        deep_pass=E(completion=5, yards=10, big_play=15),
        short_pass=E(completion=10, yards=10),
        run_inside=E(yards=-5), run_outside=E(yards=0),
        play_action=E(completion=15, yards=20, big_play=25),
        screen=E(yards=5),
        overall_advantage=5,
        description="PA freezes safeties, opens deep middle",
    ),
    SchemeMatchupEffect(
        O.PLAY_ACTION, D.MAN_PRESS,
        deep_pass=E(completion=10, yards=15, big_play=20),
        short_pass=E(completion=-5, yards=0),
        run_inside=E(yards=5), run_outside=E(yards=10),
        play_action=E(completion=20, yards=25, big_play=30),
        screen=E(yards=-5),
        overall_advantage=10,
        description="Man defenders turn backs, miss PA fake",
    ),
    SchemeMatchupEffect(
        O.PLAY_ACTION, D.BLITZ_HEAVY,
        deep_pass=E(completion=-15, sack=25),
        short_pass=E(completion=0, yards=5),
        run_inside=E(yards=10, big_play=10), run_outside=E(yards=5),
        play_action=E(sack=20, big_play=30, yards=20),
        screen=E(yards=15, big_play=20),
        overall_advantage=3,
        description="PA needs time, blitz gets home or gives up bomb",
    ),
]

SCHEME_MATCHUPS: dict[tuple[OffensiveScheme, DefensiveScheme], SchemeMatchupEffect] = {
    (m.offense, m.defense): m for m in _MATCHUPS
}

del E, O, D

COMPLETION_OUTCOMES = (
    PlayOutcome.TOUCHDOWN,
    PlayOutcome.BIG_GAIN,
    PlayOutcome.GOOD_GAIN,
    PlayOutcome.MODERATE_GAIN,
    PlayOutcome.SHORT_GAIN,
)


def get_scheme_matchup_effects(offense: OffensiveScheme, defense: DefensiveScheme) -> SchemeMatchupEffect:
    """Matchup for a scheme pair; unlisted pairs are neutral."""
    matchup = SCHEME_MATCHUPS.get((offense, defense))
    if matchup is not None:
        return matchup
    return SchemeMatchupEffect(offense=offense, defense=defense)


def get_play_type_effects(matchup: SchemeMatchupEffect, play_type: PlayType) -> PlayTypeEffects:
    """Effect category that applies to a play type."""
    if play_type == PlayType.PASS_DEEP:
        return matchup.deep_pass
    if play_type == PlayType.PLAY_ACTION_DEEP:
        return matchup.deep_pass.merged(matchup.play_action)
    if play_type in (PlayType.PASS_SHORT, PlayType.PASS_MEDIUM):
        return matchup.short_pass
    if play_type == PlayType.PLAY_ACTION_SHORT:
        return matchup.short_pass.merged(matchup.play_action)
    if play_type == PlayType.PASS_SCREEN:
        return matchup.screen
    if play_type in (PlayType.RUN_INSIDE, PlayType.RUN_DRAW, PlayType.QB_SNEAK):
        return matchup.run_inside
    # Scrambles play like outside runs
    if play_type in (PlayType.RUN_OUTSIDE, PlayType.RUN_SWEEP, PlayType.QB_SCRAMBLE):
        return matchup.run_outside
    return NO_EFFECT


def _scale(probabilities: dict[PlayOutcome, float], outcome: PlayOutcome, factor: float) -> None:
    # Outcomes absent or at zero stay that way
    if probabilities.get(outcome):
        probabilities[outcome] *= factor


def apply_scheme_effects(
    base_probabilities: dict[PlayOutcome, float],
    effects: PlayTypeEffects,
    is_pass_play: bool,
) -> dict[PlayOutcome, float]:
    """Return a copy of an outcome -> probability map with scheme effects applied.

    The result is not renormalized; generate_outcome_table does that.
    """
    modified = dict(base_probabilities)

    if is_pass_play:
        if effects.completion:
            for outcome in COMPLETION_OUTCOMES:
                _scale(modified, outcome, 1 + effects.completion / 100)
            _scale(modified, PlayOutcome.INCOMPLETE, 1 - effects.completion / 100)
        if effects.sack:
            _scale(modified, PlayOutcome.SACK, 1 + effects.sack / 100)
        if effects.interception:
            _scale(modified, PlayOutcome.INTERCEPTION, 1 + effects.interception / 100)

    if effects.yards:
        # Shifts weight between big/good gains and short gains
        _scale(modified, PlayOutcome.BIG_GAIN, 1 + effects.yards / 100)
        _scale(modified, PlayOutcome.GOOD_GAIN, 1 + effects.yards / 150)
        _scale(modified, PlayOutcome.SHORT_GAIN, 1 - effects.yards / 200)

    if effects.big_play:
        _scale(modified, PlayOutcome.BIG_GAIN, 1 + effects.big_play / 100)
        _scale(modified, PlayOutcome.TOUCHDOWN, 1 + effects.big_play / 100)

    if effects.fumble:
        _scale(modified, PlayOutcome.FUMBLE, 1 + effects.fumble / 100)
        _scale(modified, PlayOutcome.FUMBLE_LOST, 1 + effects.fumble / 100)

    return modified


def get_run_success_modifier(offense: OffensiveScheme, defense: DefensiveScheme, is_inside_run: bool) -> float:
    """Yards modifier (%) for a run against this scheme pairing."""
    matchup = get_scheme_matchup_effects(offense, defense)
    effects = matchup.run_inside if is_inside_run else matchup.run_outside
    return effects.yards


def get_pass_success_modifier(
    offense: OffensiveScheme,
    defense: DefensiveScheme,
    is_deep_pass: bool,
    is_play_action: bool,
) -> float:
    """Mean of completion and yards modifiers (%) for a pass."""
    matchup = get_scheme_matchup_effects(offense, defense)
    effects = matchup.deep_pass if is_deep_pass else matchup.short_pass
    if is_play_action:
        effects = effects.merged(matchup.play_action)
    return (effects.completion + effects.yards) / 2
