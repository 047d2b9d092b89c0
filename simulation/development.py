"""
Player development for Football Career Mode.

Three concerns live here:

- Training: the user's weekly training session (``apply_training``).  Costs
  stamina, scales the option's improvement by morale, form and age, and
  re-checks trait unlocks afterwards.
- Injuries: the per-match injury roll and the weekly recovery tick.
- NPC development: the once-a-season age-band growth/decline applied at
  rollover, read from the NPC_AGE_BAND_CURVES table (growth under 25, plateau
  25-30, decline beyond, with extra speed/stamina decay after 30).
"""
from __future__ import annotations

import logging
import random

from models.constants import (
    AgeBandCurve,
    DEVELOPABLE_ATTRIBUTES,
    GK_DECLINE_AGE,
    GK_GROWTH_AGE_LIMIT,
    GK_GROWTH_CAP,
    GK_MAX_DECLINE,
    INJURY_BASE_CHANCE_PER_MATCH,
    INJURY_CHANCE_AGE_FACTOR,
    INJURY_CHANCE_STAMINA_FACTOR,
    INJURY_SEVERITY_TABLE,
    INJURY_TRAIT_REDUCTION,
    INJURY_TYPES,
    MAX_ATTRIBUTE_VALUE,
    MIN_ATTRIBUTE_VALUE_NPC_DEV,
    NPC_AGE_BAND_CURVES,
    PHYSICAL_ATTRIBUTES,
    PHYSIO_OPTION_ID,
    PHYSIO_RECOVERY_BOOST_CHANCE,
    REST_OPTION_ID,
    STAR_ATTRIBUTES,
    TRAINING_OPTIONS_BY_ID,
)
from models.enums import Attr, Division, Position, TraitId
from models.game_state import GameState
from models.player import Injury, Player
from models.ratings import calculate_player_value, calculate_team_chemistry
from simulation.traits import unlock_traits

logger = logging.getLogger(__name__)

# Recovery boosts
RECOVERY_FORM_BOOST = 20
RECOVERY_MORALE_BOOST = 10
PHYSIO_HEAL_FORM_BOOST = 15
PHYSIO_HEAL_MORALE_BOOST = 10
PHYSIO_LIGHT_SESSION_STAMINA = 5


# ===================================================================
# Injuries
# ===================================================================

def injury_chance(player: Player) -> float:
    """Per-match chance: base plus low-stamina and age penalties, reduced by Seasoned Pro / Workhorse."""
    attrs = player.attributes
    chance = INJURY_BASE_CHANCE_PER_MATCH
    if attrs.stamina < 50:
        chance += (50 - attrs.stamina) * INJURY_CHANCE_STAMINA_FACTOR
    if attrs.age > 30:
        chance += (attrs.age - 30) * INJURY_CHANCE_AGE_FACTOR
    if player.has_trait(TraitId.SEASONED_PRO) or player.has_trait(TraitId.WORKHORSE):
        chance *= INJURY_TRAIT_REDUCTION
    return chance


def roll_injury(
    player: Player,
    season: int,
    week: int,
    rng: random.Random,
) -> str | None:
    """Maybe injure player in place. Returns the log line, or None if nothing happened.

    Already injured players are never injured again.
    """
    if player.is_injured:
        return None
    if rng.random() >= injury_chance(player):
        return None

    injury_type = rng.choice(INJURY_TYPES)
    severity_roll = rng.random()
    for severity, threshold, min_weeks, max_weeks, form_hit, morale_hit in INJURY_SEVERITY_TABLE:
        if severity_roll < threshold:
            break
    duration = rng.randint(min_weeks, max_weeks)

    player.current_injury = Injury(
        id=f"inj-{player.id}-S{season}-W{week}",
        type=injury_type,
        description="Sustained during a match.",
        severity=severity,
        duration_weeks=duration,
        weeks_remaining=duration,
        recovery_progress=0,
        diagnosed_season=season,
        diagnosed_week=week,
    )
    player.attributes.adjust(Attr.FORM, -form_hit)
    player.attributes.adjust(Attr.MORALE, -morale_hit)
    return f"{player.name} has suffered a {severity.value.lower()} {injury_type} ({duration} weeks)!"


def tick_recovery(player: Player) -> list[str]:
    """One week of recovery, in place. Heals (form +20, morale +10) when no weeks remain."""
    injury = player.current_injury
    if injury is None:
        return []
    injury.weeks_remaining -= 1
    if injury.weeks_remaining <= 0:
        player.current_injury = None
        player.attributes.adjust(Attr.FORM, RECOVERY_FORM_BOOST)
        player.attributes.adjust(Attr.MORALE, RECOVERY_MORALE_BOOST)
        return [f"{player.name} has recovered from their {injury.type}!"]
    injury.update_progress()
    return [f"{player.name} is still recovering from {injury.type} ({injury.weeks_remaining} weeks left)."]


# ===================================================================
# Training
# ===================================================================

def _training_improvement(player: Player, base: int) -> int:
    attrs = player.attributes
    improvement = float(base)
    if attrs.morale > 75:
        improvement *= 1.2
    if attrs.form > 75:
        improvement *= 1.2
    if attrs.morale < 40:
        improvement *= 0.8
    if attrs.form < 40:
        improvement *= 0.8
    if attrs.age < 20:
        improvement *= 1.3
    elif attrs.age > 30:
        improvement *= 0.7
    return round(improvement)


def _physio_session(player: Player, rng: random.Random) -> list[str]:
    injury = player.current_injury
    if injury is None:
        player.attributes.adjust(Attr.STAMINA, PHYSIO_LIGHT_SESSION_STAMINA)
        return [f"{player.name} had a light physio session. No specific injury to treat."]

    logs: list[str] = []
    if rng.random() < PHYSIO_RECOVERY_BOOST_CHANCE:
        injury.weeks_remaining = max(0, injury.weeks_remaining - 1)
        logs.append(f"{player.name} had a good physio session. Recovery time for {injury.type} slightly reduced!")
    else:
        logs.append(f"{player.name} completed a physio session for their {injury.type}.")

    if injury.weeks_remaining > 0:
        injury.update_progress()
    else:
        logs.append(f"{player.name} has fully recovered from {injury.type} after the physio session!")
        player.current_injury = None
        player.attributes.adjust(Attr.FORM, PHYSIO_HEAL_FORM_BOOST)
        player.attributes.adjust(Attr.MORALE, PHYSIO_HEAL_MORALE_BOOST)
    return logs


def apply_training(
    state: GameState,
    option_id: str,
    rng: random.Random | None = None,
) -> GameState:
    """Run one training session for the user's player.

    Parameters
    ----------
    state : GameState
        Current snapshot; never modified.
    option_id : str
        One of the ids in AVAILABLE_TRAINING_OPTIONS.  Unknown ids are a no-op.
    rng : random.Random | None
        Used for the physio recovery roll.

    Returns
    -------
    GameState
        New snapshot.  Rejected sessions (injured, not enough stamina) only add a log line.
    """
    option = TRAINING_OPTIONS_BY_ID.get(option_id)
    if option is None or state.user_player is None:
        logger.debug("Ignoring training request %r", option_id)
        return state
    rng = rng or random.Random()

    new_state = state.copy()
    player = new_state.user_player
    is_recovery = option.id in (REST_OPTION_ID, PHYSIO_OPTION_ID)

    if player.is_injured and not is_recovery:
        new_state.log(
            f"{player.name} cannot perform '{option.name}' training while injured. Only Rest or Physio allowed."
        )
        return new_state
    # Equality permits training
    if not is_recovery and player.attributes.stamina < option.cost:
        new_state.log(f"Not enough stamina to train {option.name}. Rest or choose lighter training.")
        return new_state

    player.attributes.adjust(Attr.STAMINA, -option.cost)

    if option.id == PHYSIO_OPTION_ID:
        new_state.log(*_physio_session(player, rng))
    else:
        improvement = _training_improvement(player, option.improvement)
        player.attributes.adjust(option.attribute, improvement)
        if option.attribute == Attr.REPUTATION:
            player.attributes.adjust(Attr.PRESS_RELATIONS, round(improvement * 0.5))
        trait_logs = unlock_traits(player, new_state.season)
        new_state.log(
            f"{player.name} trained {option.name}. {option.id} +{improvement}. "
            f"Stamina: {player.attributes.stamina}.",
            *trait_logs,
        )

    team = new_state.find_team(player.team_id)
    if team is not None:
        team.team_chemistry = calculate_team_chemistry(team)
    return new_state


# ===================================================================
# NPC development (season rollover)
# ===================================================================

def age_band_curve(age: int) -> AgeBandCurve:
    """The NPC_AGE_BAND_CURVES entry covering age."""
    for curve in NPC_AGE_BAND_CURVES:
        if curve.max_age is None or age < curve.max_age:
            return curve
    return NPC_AGE_BAND_CURVES[-1]


def _star_change(curve: AgeBandCurve, current: int, rng: random.Random) -> int:
    if curve.star_growth_cap is not None:
        return rng.randint(0, 1) if current < curve.star_growth_cap else 0
    if curve.star_down_chance and rng.random() < curve.star_down_chance:
        return -1
    if curve.star_up_chance and rng.random() < curve.star_up_chance:
        return 1
    return 0


def _skill_change(curve: AgeBandCurve, attr: Attr, current: int, rng: random.Random) -> int:
    if curve.soft_cap is not None and current >= curve.soft_cap:
        return rng.randint(0, 1) if current < MAX_ATTRIBUTE_VALUE else 0
    low, high = curve.physical if attr in PHYSICAL_ATTRIBUTES else curve.skill
    return rng.randint(low, high)


def develop_npc_attributes(player: Player, division: Division, rng: random.Random) -> Player:
    """One season of age-band growth or decline for an NPC, in place.

    The user's player and injured NPCs are left alone.  Skills never drop below
    MIN_ATTRIBUTE_VALUE_NPC_DEV; star ratings stay within 1-5.  Value is recomputed.
    """
    if player.is_user_player or player.is_injured:
        return player
    attrs = player.attributes
    age = attrs.age
    curve = age_band_curve(age)
    for attr in DEVELOPABLE_ATTRIBUTES:
        current = attrs.get(attr)
        if attr in STAR_ATTRIBUTES:
            change = _star_change(curve, current, rng)
        else:
            change = _skill_change(curve, attr, current, rng)
            if player.preferred_position == Position.GOALKEEPER and attr == Attr.GOALKEEPING:
                if age < GK_GROWTH_AGE_LIMIT and current < GK_GROWTH_CAP:
                    change = max(change, rng.randint(0, 1))
                if age > GK_DECLINE_AGE and change < 0:
                    change = max(change, -GK_MAX_DECLINE)
        new_value = current + change
        if attr not in STAR_ATTRIBUTES:
            new_value = max(MIN_ATTRIBUTE_VALUE_NPC_DEV, new_value)
        attrs.set(attr, new_value)
    attrs.value = calculate_player_value(attrs, division)
    return player
