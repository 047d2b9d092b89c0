"""
Weekly fixture generation for Football Career Mode.

There is no season-long calendar.  Every league week each division's teams are
shuffled and paired off in order; each pair gets home/away by a coin flip and
an odd team out sits the week.  Over 38 weeks this averages out to a
round-robin-ish season without having to store a schedule in the snapshot.
"""
from __future__ import annotations

import random

from models.enums import DIVISIONS_ORDERED, Division
from models.league import League


def match_id_for(season: int, week: int, home_id: str, away_id: str) -> str:
    """Deterministic fixture id: ``S{season}-W{week}-{home}-{away}``."""
    return f"S{season}-W{week}-{home_id}-{away_id}"


def pair_division(
    team_ids: list[str],
    rng: random.Random,
) -> list[tuple[str, str]]:
    """Shuffle one division and pair it off.

    Parameters
    ----------
    team_ids : list[str]
        Member team ids of a single division.
    rng : random.Random
        Used for the shuffle and the home/away coin flips.

    Returns
    -------
    list of (home_team_id, away_team_id)
        ``len(team_ids) // 2`` pairs; with an odd count the last team sits out.
    """
    pool = list(team_ids)
    rng.shuffle(pool)
    fixtures: list[tuple[str, str]] = []
    while len(pool) >= 2:
        first = pool.pop()
        second = pool.pop()
        if rng.random() < 0.5:
            fixtures.append((first, second))
        else:
            fixtures.append((second, first))
    return fixtures


def generate_week_fixtures(
    league: League,
    rng: random.Random,
) -> list[tuple[Division, str, str, str]]:
    """Fixtures for the league's current week, top division first.

    Returns
    -------
    list of (division, home_team_id, away_team_id, match_id)
    """
    season, week = league.current_season, league.current_week
    fixtures: list[tuple[Division, str, str, str]] = []
    for division in DIVISIONS_ORDERED:
        for home_id, away_id in pair_division(league.divisions.get(division, []), rng):
            fixtures.append((division, home_id, away_id, match_id_for(season, week, home_id, away_id)))
    return fixtures
