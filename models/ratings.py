"""
Derived numbers for players and teams: market value, division bands, chemistry.
Pure functions; nothing here touches a snapshot.
"""
from .constants import (
    BASE_BUDGET_BY_DIVISION,
    BASE_REPUTATION_BY_DIVISION,
    MAX_PLAYER_VALUE,
    MIN_PLAYER_VALUE,
    PRIMARY_SKILL_BY_POSITION,
    WAGE_BY_DIVISION,
)
from .enums import DIVISIONS_ORDERED, Division, division_index


def division_multiplier(division: Division) -> float:
    """1.0 for the bottom tier, +0.2 per tier above it (1.8 for the First Division)."""
    return 1 + (len(DIVISIONS_ORDERED) - 1 - division_index(division)) * 0.2


def calculate_player_value(attrs, division: Division) -> int:
    """Market value from core skills, reputation, star ratings, age and division.
    Floored to a multiple of 100 and kept within [MIN_PLAYER_VALUE, MAX_PLAYER_VALUE]."""
    core = (attrs.skill + attrs.passing + attrs.shooting + attrs.tackle + attrs.speed + attrs.heading) / 6
    value = core * 500 + attrs.reputation * 1000 + attrs.skill_moves * 2000 + attrs.weak_foot_accuracy * 1000

    age = attrs.age
    if age < 22:
        value *= 1.5 - (age - 16) * 0.05
    elif age > 32:
        value *= 0.8 - (age - 32) * 0.07
    elif age > 28:
        value *= 0.9

    value *= division_multiplier(division)
    value = max(MIN_PLAYER_VALUE, int(value // 100) * 100)
    return min(value, MAX_PLAYER_VALUE)


def wage_for_division(division: Division) -> int:
    return WAGE_BY_DIVISION[Division(division)]


def base_reputation_for_division(division: Division) -> int:
    return BASE_REPUTATION_BY_DIVISION[Division(division)]


def base_budget_for_division(division: Division) -> int:
    return BASE_BUDGET_BY_DIVISION[Division(division)]


def calculate_team_chemistry(team) -> int:
    """floor(avg_morale * 0.8 + 20) clamped to [10, 100]; 50 for an empty squad."""
    if not team.players:
        return 50
    avg_morale = sum(p.attributes.morale for p in team.players) / len(team.players)
    return max(10, min(100, int(avg_morale * 0.8 + 20)))


def primary_skill(player) -> int:
    """Match-performance skill for the player's position (goalkeeping/tackle/passing/shooting)."""
    return player.attributes.get(PRIMARY_SKILL_BY_POSITION[player.preferred_position])
