"""
Match simulation engine for Football Career Mode.

Resolves one fixture (club vs club, or national team vs national team) into a
score, plus a detailed performance line for the tracked player when they take
part.  Key design goals:

1. **Strength vs strength**: each side's strength comes from its fit players'
   skill and form (and chemistry for clubs, reputation for nations); goals are
   a random roll scaled by the strength ratio.  No tick-by-tick play.
2. **Attribute-driven individual line**: the tracked player's shots, key
   passes and tackles depend on their position, attributes, form, tactical
   instruction and unlocked traits.  Each attempt is resolved on its own.
3. **Reproducible**: every roll comes from the ``rng`` passed in.
"""
from __future__ import annotations

import random
from dataclasses import dataclass

from models.enums import Foot, Position, TacticalInstruction, TraitId
from models.game_result import MatchResult, PlayerMatchPerformance
from models.national_team import NationalTeam
from models.player import Player
from models.ratings import primary_skill
from models.team import Team

CLUB_HOME_ADVANTAGE = 1.10
INTERNATIONAL_HOME_ADVANTAGE = 1.05
CLUB_SCORE_RANDOMNESS = 3.0
INTERNATIONAL_SCORE_RANDOMNESS = 2.5
MAX_GOALS = 7
NO_FIT_PLAYERS_STRENGTH = 30.0

WEAK_FOOT_ATTEMPT_CHANCE = 0.3
MIN_RATING = 3.0
MAX_RATING = 10.0
BASE_RATING = 5.0

# Small multiplicative bonuses on the performance roll
TRAIT_ROLL_MULTIPLIERS: dict[TraitId, float] = {
    TraitId.SEASONED_PRO: 1.02,
    TraitId.WORKHORSE: 1.02,
    TraitId.SPEED_DEMON: 1.01,
}


# ===================================================================
# Strength
# ===================================================================

def club_strength(team: Team) -> float:
    """avg(skill + form) over fit signed players x (0.8 + chemistry/500); 30 if nobody is fit."""
    fit = [p for p in team.players if p.team_id == team.id and not p.is_injured]
    if not fit:
        return NO_FIT_PLAYERS_STRENGTH
    chemistry_factor = 0.8 + team.team_chemistry / 500
    return sum(p.attributes.skill + p.attributes.form for p in fit) / len(fit) * chemistry_factor


def nation_strength(nation: NationalTeam, players_by_id: dict[str, Player]) -> float:
    """avg(skill + form + 0.5 x reputation) over fit squad members; reputation x 0.8 for an empty squad."""
    fit = [
        players_by_id[pid] for pid in nation.squad
        if pid in players_by_id and not players_by_id[pid].is_injured
    ]
    if not fit:
        return nation.reputation * 0.8
    return sum(
        p.attributes.skill + p.attributes.form + p.attributes.reputation * 0.5 for p in fit
    ) / len(fit)


# ===================================================================
# Tracked player performance
# ===================================================================

@dataclass
class TacticalModifiers:
    shot_bonus: int = 0
    key_pass_bonus: int = 0
    tackle_bonus: int = 0
    forward_factor: float = 1.0
    dribble_factor: float = 1.0
    roll_multiplier: float = 1.0
    rating_bonus: float = 0.0
    tackle_quality: float = 1.0
    extra_key_pass: int = 0
    extra_interception_chance: float = 0.0


def tactical_modifiers(player: Player, rng: random.Random) -> TacticalModifiers:
    """Translate the player's active instruction into volume and roll adjustments."""
    mods = TacticalModifiers()
    attrs = player.attributes
    instruction = player.active_tactical_instruction

    if instruction == TacticalInstruction.SHOOT_ON_SIGHT:
        mods.shot_bonus = 2 + attrs.shooting // 30
    elif instruction == TacticalInstruction.LOOK_FOR_THROUGH_BALLS:
        mods.key_pass_bonus = 1 + attrs.passing // 35
    elif instruction == TacticalInstruction.AGGRESSIVE_TACKLING:
        mods.tackle_bonus = 2 + attrs.tackle // 30
        mods.tackle_quality = 1.05
    elif instruction == TacticalInstruction.MAKE_FORWARD_RUNS:
        mods.forward_factor = 1.15
        mods.roll_multiplier = 1.05
    elif instruction == TacticalInstruction.DRIBBLE_MORE:
        mods.dribble_factor = 1.2 * (attrs.skill_moves / 3)
        mods.roll_multiplier = 1.0 + (attrs.skill_moves - 1) * 0.015
    elif instruction == TacticalInstruction.STAY_BACK_DEFENDING:
        mods.roll_multiplier = 0.9
        mods.rating_bonus = 0.2
        mods.extra_interception_chance = 0.2
    elif instruction == TacticalInstruction.HOLD_UP_PLAY:
        mods.roll_multiplier = 0.95
        mods.extra_key_pass = 1 if rng.random() < 0.1 else 0
    return mods


def _attempt(player: Player, chance: float, weak_foot_penalty: float, rng: random.Random) -> bool:
    """Resolve one attempt; 30% of attempts go on the weaker foot unless ambidextrous."""
    if player.preferred_foot != Foot.AMBIDEXTROUS and rng.random() < WEAK_FOOT_ATTEMPT_CHANCE:
        modifier = 1.0 - (5 - player.attributes.weak_foot_accuracy) * weak_foot_penalty
        chance *= max(0.1, modifier)
    return rng.random() * 100 < chance


def generate_performance(
    player: Player,
    is_win: bool,
    opponent_factor: float,
    is_international: bool,
    rng: random.Random,
) -> PlayerMatchPerformance:
    """Build the tracked player's stat line and rating for one match.

    ``opponent_factor`` is opponent strength / own strength.
    """
    attrs = player.attributes
    perf = PlayerMatchPerformance(is_international=is_international)
    rating = BASE_RATING

    rep_weight = 0.3 if is_international else 0.1
    base = (primary_skill(player) + attrs.skill + attrs.speed + attrs.reputation * rep_weight) / 3.3
    roll = rng.random() * base * (attrs.form / 100) * opponent_factor

    mods = tactical_modifiers(player, rng)
    roll *= mods.roll_multiplier
    rating += mods.rating_bonus
    for trait_id, multiplier in TRAIT_ROLL_MULTIPLIERS.items():
        if player.has_trait(trait_id):
            roll *= multiplier

    position = player.preferred_position
    if position in (Position.FORWARD, Position.MIDFIELDER):
        shot_div = 18 if is_international else 20
        perf.shots = int(rng.random() * (roll / shot_div) * mods.forward_factor) + mods.shot_bonus
        if player.has_trait(TraitId.GOAL_POACHER):
            poacher_div = 13 if is_international else 15
            perf.shots = max(perf.shots, int(rng.random() * (roll / poacher_div) * mods.forward_factor))

        for _ in range(perf.shots):
            quality = attrs.shooting * (attrs.form / 100)
            if player.has_trait(TraitId.CLINICAL_FINISHER):
                quality *= 1.1
            if player.active_tactical_instruction == TacticalInstruction.SHOOT_ON_SIGHT and attrs.shooting < 70:
                quality *= 0.9
            if _attempt(player, quality * 0.7, 0.15, rng):
                perf.shots_on_target += 1
            if _attempt(player, quality * 0.3, 0.25, rng):
                perf.goals += 1
                rating += 1.5

        pass_div = 22 if is_international else 25
        perf.key_passes = int(rng.random() * (attrs.passing / pass_div) * mods.dribble_factor)
        perf.key_passes += mods.key_pass_bonus + mods.extra_key_pass
        if player.has_trait(TraitId.PLAYMAKER_VISION):
            vision_div = 16 if is_international else 18
            perf.key_passes = max(perf.key_passes, int(rng.random() * (attrs.passing / vision_div)))
        for _ in range(perf.key_passes):
            if _attempt(player, attrs.passing * 0.2, 0.20, rng):
                perf.assists += 1
                rating += 1.0
    else:
        perf.key_passes = mods.extra_key_pass

    if position in (Position.DEFENDER, Position.MIDFIELDER):
        tackle_div = 13 if is_international else 15
        perf.tackles_attempted = int(rng.random() * (attrs.tackle / tackle_div)) + mods.tackle_bonus
        for _ in range(perf.tackles_attempted):
            quality = attrs.tackle * (attrs.form / 100) * mods.tackle_quality
            if player.has_trait(TraitId.DEFENSIVE_ROCK):
                quality *= 1.1
            if rng.random() * 100 < quality:
                perf.tackles_won += 1
        interception_div = 18 if is_international else 20
        perf.interceptions = int(rng.random() * (attrs.tackle / interception_div))
        if mods.extra_interception_chance and rng.random() < mods.extra_interception_chance:
            perf.interceptions += 1
        rating += perf.tackles_won * 0.3 + perf.interceptions * 0.2

    if position == Position.GOALKEEPER:
        rating += max(0, 3 - rng.randint(0, 3))

    rating += roll / (25 if is_international else 30)
    if is_win:
        rating += 0.7 if is_international else 0.5
        if player.has_trait(TraitId.FAN_FAVOURITE):
            rating += 0.2
    else:
        rating -= 0.3 if is_international else 0.2

    rating += rng.uniform(-0.5, 0.5)
    perf.rating = round(max(MIN_RATING, min(MAX_RATING, rating)), 1)
    return perf


# ===================================================================
# Public API
# ===================================================================

def _side_strengths(home, away, players_by_id: dict[str, Player]) -> tuple[float, float, bool]:
    if isinstance(home, NationalTeam):
        home_strength = nation_strength(home, players_by_id) * INTERNATIONAL_HOME_ADVANTAGE
        away_strength = nation_strength(away, players_by_id)
        return home_strength, away_strength, True
    home_strength = club_strength(home) * CLUB_HOME_ADVANTAGE
    away_strength = club_strength(away)
    return home_strength, away_strength, False


def _tracked_side(player: Player | None, home, away, is_international: bool) -> str | None:
    """'home' / 'away' if the tracked player is fit and plays for that side, else None."""
    if player is None or player.is_injured:
        return None
    if is_international:
        if not player.is_on_national_team:
            return None
        if player.id in home.squad:
            return "home"
        if player.id in away.squad:
            return "away"
        return None
    if player.team_id is None:
        return None
    if player.team_id == home.id:
        return "home"
    if player.team_id == away.id:
        return "away"
    return None


def simulate_match(
    home: Team | NationalTeam,
    away: Team | NationalTeam,
    tracked_player: Player | None,
    players_by_id: dict[str, Player],
    rng: random.Random,
    match_id: str = "",
) -> MatchResult:
    """Simulate a single fixture between two clubs or two national teams.

    Parameters
    ----------
    home, away : Team | NationalTeam
        Both sides must be the same kind.
    tracked_player : Player | None
        The user's player; gets a performance line if fit and on either side.
    players_by_id : dict[str, Player]
        Every player in the world, used to resolve national squads.
    rng : random.Random
        Source of every roll.
    match_id : str
        Stored on the result and on the performance line.

    Returns
    -------
    MatchResult
        Score, names, and the tracked player's performance keyed by player id.
    """
    home_strength, away_strength, is_international = _side_strengths(home, away, players_by_id)
    k = INTERNATIONAL_SCORE_RANDOMNESS if is_international else CLUB_SCORE_RANDOMNESS
    home_score = min(MAX_GOALS, int(rng.random() * (home_strength / (away_strength or 1)) * k))
    away_score = min(MAX_GOALS, int(rng.random() * (away_strength / (home_strength or 1)) * k))

    result = MatchResult(
        match_id=match_id,
        home_id=home.id,
        away_id=away.id,
        home_name=home.name,
        away_name=away.name,
        home_score=home_score,
        away_score=away_score,
        is_international=is_international,
    )

    side = _tracked_side(tracked_player, home, away, is_international)
    if side is not None:
        is_home = side == "home"
        own_score, opp_score = (home_score, away_score) if is_home else (away_score, home_score)
        own_strength, opp_strength = (home_strength, away_strength) if is_home else (away_strength, home_strength)
        perf = generate_performance(
            tracked_player,
            own_score > opp_score,
            opp_strength / (own_strength or 1),
            is_international,
            rng,
        )
        perf.match_id = match_id
        perf.team_name = home.name if is_home else away.name
        perf.opponent_name = away.name if is_home else home.name
        perf.team_score = own_score
        perf.opponent_score = opp_score
        result.performances[tracked_player.id] = perf
    return result
