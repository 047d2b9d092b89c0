"""
National-team selection for Football Career Mode.

Squads are a derived view rebuilt on every international week: eligible
players are fit, of the right nationality, reputation >= 65, form >= 60 and
signed to a club (free agents are never called up).  The best 23 by
reputation then form make the squad.  ``Player.is_on_national_team`` is the
source of truth and is cleared again once the international week is over.
"""
from __future__ import annotations

import random

from models.constants import (
    MIN_REPUTATION_FOR_NATIONAL_CALL,
    NATIONAL_TEAM_SELECTION_MIN_FORM,
    NATIONAL_TEAM_SQUAD_SIZE,
)
from models.game_state import GameState
from models.national_team import UpcomingInternationalMatch
from models.player import Player


def is_eligible(player: Player, nationality: str) -> bool:
    return (
        not player.is_injured
        and player.nationality == nationality
        and player.team_id is not None
        and player.attributes.reputation >= MIN_REPUTATION_FOR_NATIONAL_CALL
        and player.attributes.form >= NATIONAL_TEAM_SELECTION_MIN_FORM
    )


def select_squads(state: GameState) -> list[str]:
    """Rebuild every national squad and every player's flag, in place.

    Returns call-up / drop log lines for the user's player only.
    """
    players = list(state.all_players())
    user = state.user_player
    was_selected = user.is_on_national_team if user else False

    selected: set[str] = set()
    for nation in state.national_teams:
        eligible = [p for p in players if is_eligible(p, nation.nationality_represented)]
        eligible.sort(key=lambda p: (-p.attributes.reputation, -p.attributes.form))
        nation.squad = [p.id for p in eligible[:NATIONAL_TEAM_SQUAD_SIZE]]
        selected.update(nation.squad)

    for p in players:
        p.is_on_national_team = p.id in selected

    if user is None:
        return []
    nation = state.national_team_for(user.nationality)
    nation_name = nation.name if nation else "national squad"
    if user.is_on_national_team and not was_selected:
        return [f"{user.name} has been called up to the {nation_name}!"]
    if was_selected and not user.is_on_national_team:
        return [f"{user.name} has been dropped from the {nation_name}."]
    return []


def schedule_international_match(state: GameState, rng: random.Random) -> UpcomingInternationalMatch | None:
    """Set (and return) this week's friendly for the user's nation, in place.

    Only scheduled when the user's player is selected and fit; the opponent is
    a random other nation.  Clears any stale fixture otherwise.
    """
    state.upcoming_international_match = None
    user = state.user_player
    if user is None or not user.is_on_national_team or user.is_injured:
        return None
    home = state.national_team_for(user.nationality)
    if home is None:
        return None
    others = [nt for nt in state.national_teams if nt.id != home.id]
    if not others:
        return None
    away = rng.choice(others)
    state.upcoming_international_match = UpcomingInternationalMatch(
        week=state.week,
        home_national_team_id=home.id,
        away_national_team_id=away.id,
        user_player_involved=True,
        match_type="Friendly",
    )
    return state.upcoming_international_match


def release_national_duty(state: GameState) -> None:
    """Clear every player's national-team flag once the international week is processed."""
    for p in state.all_players():
        p.is_on_national_team = False
