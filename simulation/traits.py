"""
Trait and achievement rules for Football Career Mode.

Traits unlock once every condition in their AVAILABLE_PLAYER_TRAITS entry holds.
Career milestones are granted for every threshold the player's cumulative stat
has reached; an award is identified by (award_id_base, name) and is never
granted twice, so both checks are safe to repeat.

The check_* functions return a new player; unlock_traits and
grant_career_milestones work in place on a player the caller already owns
(the week orchestrator's copy).
"""
from __future__ import annotations

import copy
import re
from typing import Callable

from models.constants import (
    AVAILABLE_PLAYER_TRAITS,
    CAREER_MILESTONE_DEFINITIONS,
    TraitCondition,
)
from models.enums import Attr, AwardIdBase, AwardType
from models.player import Award, Player

# Reputation / fan-support bumps by award type
AWARD_REPUTATION_GAIN: dict[AwardType, int] = {
    AwardType.CAREER_MILESTONE: 2,
    AwardType.SEASONAL_LEAGUE: 5,
    AwardType.SEASONAL_TEAM: 5,
    AwardType.SEASONAL_INTERNATIONAL: 7,
}
AWARD_FAN_SUPPORT_GAIN: dict[AwardType, int] = {
    AwardType.CAREER_MILESTONE: 1,
    AwardType.SEASONAL_LEAGUE: 3,
    AwardType.SEASONAL_TEAM: 3,
    AwardType.SEASONAL_INTERNATIONAL: 4,
}

_SEASON_STATS: dict[str, Callable[[Player], int]] = {
    "goals": lambda p: p.stats.goals,
    "assists": lambda p: p.stats.assists,
    "appearances": lambda p: p.stats.appearances,
}

_MILESTONE_STATS: dict[str, Callable[[Player], int]] = {
    "total_goals": lambda p: p.career_stats.total_goals,
    "total_assists": lambda p: p.career_stats.total_assists,
    "total_appearances": lambda p: p.career_stats.total_appearances,
    "traits_unlocked": lambda p: len(p.unlocked_traits),
    "international_caps": lambda p: p.career_stats.total_international_caps,
    "international_goals": lambda p: p.career_stats.total_international_goals,
}


def milestone_stat_value(player: Player, stat: str) -> int:
    return _MILESTONE_STATS[stat](player)


def condition_met(player: Player, condition: TraitCondition) -> bool:
    if condition.kind == "attribute":
        return player.attributes.get(condition.attribute) >= condition.threshold
    if condition.kind == "age":
        return player.attributes.age >= condition.threshold
    if condition.kind == "season_stat":
        return _SEASON_STATS[condition.stat](player) >= condition.threshold
    return False


def _slug(text: str) -> str:
    return re.sub(r"[^A-Za-z0-9]+", "", text)


def grant_award(
    player: Player,
    award_id_base: AwardIdBase,
    name: str,
    description: str,
    award_type: AwardType,
    season: int,
    division: str | None = None,
    value=None,
    nationality: str | None = None,
) -> Award:
    """Append an award to player (in place) and apply its reputation/fan-support bump."""
    award = Award(
        id=f"{award_id_base.value}_{player.id}_S{season}_{_slug(name)}",
        award_id_base=award_id_base,
        name=name,
        description=description,
        type=award_type,
        season_achieved=season,
        division=division,
        value=value,
        for_player_id=player.id,
        nationality=nationality,
    )
    player.awards.append(award)
    player.attributes.adjust(Attr.REPUTATION, AWARD_REPUTATION_GAIN[award_type])
    player.attributes.adjust(Attr.FAN_SUPPORT, AWARD_FAN_SUPPORT_GAIN[award_type])
    if award_type != AwardType.CAREER_MILESTONE:
        player.career_stats.career_awards_count += 1
    return award


def grant_career_milestones(
    player: Player,
    season: int,
    only_base: AwardIdBase | None = None,
) -> list[str]:
    logs: list[str] = []
    for definition in CAREER_MILESTONE_DEFINITIONS:
        if only_base is not None and definition.id_base != only_base:
            continue
        current = milestone_stat_value(player, definition.stat)
        for threshold in definition.thresholds:
            if current < threshold:
                continue
            name = definition.name_template.replace("{X}", str(threshold))
            if player.has_award(definition.id_base, name):
                continue
            grant_award(
                player,
                definition.id_base,
                name,
                definition.description_template.replace("{X}", str(threshold)),
                AwardType.CAREER_MILESTONE,
                season,
            )
            logs.append(f"{player.name} achieved a career milestone: {name}!")
    return logs


def unlock_traits(player: Player, season: int) -> list[str]:
    logs: list[str] = []
    for trait in AVAILABLE_PLAYER_TRAITS:
        if player.has_trait(trait.id):
            continue
        if not all(condition_met(player, c) for c in trait.conditions):
            continue
        player.unlocked_traits.append(trait.id)
        logs.append(f"{player.name} has unlocked a new trait: {trait.name}! ({trait.description})")
        logs.extend(grant_career_milestones(player, season, AwardIdBase.CAREER_TRAITS_UNLOCKED_MILESTONE))
    return logs


def check_trait_unlocks(player: Player, season: int) -> tuple[Player, list[str]]:
    """Return (player', logs) with every newly qualified trait added once."""
    updated = copy.deepcopy(player)
    return updated, unlock_traits(updated, season)


def check_career_milestones(
    player: Player,
    season: int,
    only_base: AwardIdBase | None = None,
) -> tuple[Player, list[str]]:
    """Return (player', logs) with every reached, not yet granted milestone awarded."""
    updated = copy.deepcopy(player)
    return updated, grant_career_milestones(updated, season, only_base)
