"""
Season/week orchestrator and user commands for Football Career Mode.

``advance_week`` is the state machine: it deep-copies the snapshot once and
runs every weekly step on that working copy in a fixed order:

1. calendar and transfer-window status
2. offer / interaction expiry
3. new offers and interactions for the user's player
4. the club's answer to a transfer request
5. injury recovery
6. international break, or
7. a full round of club fixtures
8. team chemistry
9. season rollover once the last week has been played
10. game-log trim

The caller's snapshot is never modified.  The other public functions are the
user commands exposed to the API layer; each returns a new snapshot.

Club match write-ups are not awaited: the performance is returned with a
"Loading summary..." placeholder and ``narrative_pending`` set, and the
caller fetches the text with ``request_match_narrative`` and patches it in
with ``apply_narrative``.
"""
from __future__ import annotations

import logging
import math
import random

from generation.generate import create_initial_world
from models.constants import NARRATIVE_LOADING, TACTICAL_INSTRUCTIONS_BY_ID, WEEKS_PER_SEASON
from models.custom_player import CustomPlayerData
from models.enums import Attr, TacticalInstruction, TraitId, TransferWindowStatus
from models.game_result import PlayerMatchPerformance
from models.game_state import GameState
from models.league import transfer_window_status
from models.player import Player
from models.ratings import calculate_team_chemistry, division_multiplier
from models.team import Team
from simulation.development import apply_training, roll_injury, tick_recovery
from simulation.engine import simulate_match
from simulation.interactions import expire_interactions, generate_interactions, resolve_interaction
from simulation.narrative import Narrator, match_narrative
from simulation.national import release_national_duty, schedule_international_match, select_squads
from simulation.offseason import run_season_rollover
from simulation.schedule import generate_week_fixtures, match_id_for
from simulation.traits import grant_career_milestones, unlock_traits
from simulation.transfers import (
    expire_offers,
    generate_offers,
    prune_offer_history,
    request_transfer,
    resolve_transfer_request,
    respond_to_offer,
)

logger = logging.getLogger(__name__)

__all__ = [
    "initialize_world",
    "advance_week",
    "apply_training",
    "request_transfer",
    "respond_to_offer",
    "respond_to_interaction",
    "set_tactical_instruction",
    "request_match_narrative",
    "apply_narrative",
]

SEASONED_STAMINA_REFUND = 5
REST_WEEK_FORM = 2
REST_WEEK_STAMINA = 10
FREE_AGENT_FORM = 1
FREE_AGENT_STAMINA = 5


# ===================================================================
# Commands
# ===================================================================

def initialize_world(
    custom: CustomPlayerData | None = None,
    rng: random.Random | None = None,
) -> GameState:
    """A fresh world with the user's player at a bottom-division club."""
    return create_initial_world(custom, rng)


def respond_to_interaction(state: GameState, interaction_id: str, option_id: str) -> GameState:
    return resolve_interaction(state, interaction_id, option_id)


def set_tactical_instruction(state: GameState, instruction_id: TacticalInstruction | str | None) -> GameState:
    """Set or clear the user's tactical instruction for upcoming matches.

    ``None`` and ``NONE`` clear it; unknown ids leave the snapshot unchanged.
    """
    if state.user_player is None:
        return state
    instruction = None
    if instruction_id is not None:
        try:
            instruction = TacticalInstruction(instruction_id)
        except ValueError:
            logger.debug("Ignoring unknown tactical instruction %r", instruction_id)
            return state
        if instruction == TacticalInstruction.NONE:
            instruction = None

    new_state = state.copy()
    player = new_state.user_player
    player.active_tactical_instruction = instruction
    if instruction is None:
        new_state.log(f"{player.name} has cleared their tactical instruction.")
    else:
        new_state.log(f"{player.name} will now focus on: {TACTICAL_INSTRUCTIONS_BY_ID[instruction].name}.")
    return new_state


# ===================================================================
# Narrative side channel
# ===================================================================

async def request_match_narrative(state: GameState, narrator: Narrator | None) -> tuple[str, str] | None:
    """Write-up for the user's last match if it is still pending.

    Returns ``(match_id, text)`` for ``apply_narrative``, or None when nothing
    is pending.  Never raises for narrator failures.
    """
    player = state.user_player
    if player is None:
        return None
    perf = player.last_match_performance
    if perf is None or not perf.narrative_pending:
        return None
    text = await match_narrative(narrator, player.name, perf)
    return perf.match_id, text


def apply_narrative(state: GameState, match_id: str, text: str) -> GameState:
    """New snapshot with the write-up filled in for match_id.

    A no-op when the user's last match is a different one or already has its text.
    """
    player = state.user_player
    perf = player.last_match_performance if player else None
    if perf is None or perf.match_id != match_id or not perf.narrative_pending:
        return state
    new_state = state.copy()
    perf = new_state.user_player.last_match_performance
    perf.narrative_summary = text
    perf.narrative_pending = False
    return new_state


# ===================================================================
# Weekly steps
# ===================================================================

def _sync_window_status(state: GameState) -> list[str]:
    status = transfer_window_status(state.week)
    if status == state.transfer_window_status:
        return []
    state.transfer_window_status = status
    return [f"Transfer window is now {'CLOSED' if status == TransferWindowStatus.CLOSED else 'OPEN'}."]


def _advance_calendar(state: GameState) -> list[str]:
    state.league.current_week += 1
    return _sync_window_status(state)


def _is_international_week(state: GameState) -> bool:
    return state.week in state.international_fixture_weeks


def apply_international_aftermath(
    player: Player,
    perf: PlayerMatchPerformance,
    season: int,
    rng: random.Random,
) -> list[str]:
    """Caps, goals and attribute swings after a friendly, in place."""
    player.international_caps += 1
    player.international_goals += perf.goals
    player.career_stats.total_international_caps += 1
    player.career_stats.total_international_goals += perf.goals

    attrs = player.attributes
    attrs.adjust(Attr.FORM, math.floor(perf.rating) - 5)
    attrs.adjust(Attr.MORALE, math.floor(perf.rating / 1.5) - 3)
    attrs.adjust(Attr.STAMINA, -rng.randint(15, 25))
    if perf.rating > 7:
        attrs.adjust(Attr.REPUTATION, 2)
    elif perf.rating < 5:
        attrs.adjust(Attr.REPUTATION, -1)
    else:
        attrs.adjust(Attr.REPUTATION, 1)

    logs = unlock_traits(player, season)
    logs.extend(grant_career_milestones(player, season))
    return logs


async def play_international_week(state: GameState, narrator: Narrator | None, rng: random.Random) -> list[str]:
    """Select squads, play the user's friendly if they are fit and selected, release everyone."""
    logs = [f"It's an international break! Week {state.week}."]
    logs.extend(select_squads(state))
    fixture = schedule_international_match(state, rng)
    player = state.user_player

    if fixture is not None and player is not None:
        home = state.find_national_team(fixture.home_national_team_id)
        away = state.find_national_team(fixture.away_national_team_id)
        players_by_id = {p.id: p for p in state.all_players()}
        match_id = match_id_for(state.season, state.week, home.id, away.id)
        result = simulate_match(home, away, player, players_by_id, rng, match_id=match_id)
        logs.append(f"International Friendly: {result.summary}")
        perf = result.performances.get(player.id)
        if perf is not None:
            perf.narrative_summary = await match_narrative(narrator, player.name, perf)
            player.last_match_performance = perf
            logs.extend(apply_international_aftermath(player, perf, state.season, rng))
    elif player is not None and player.is_on_national_team and player.is_injured:
        logs.append(f"{player.name} misses the international match for {player.nationality} due to injury.")

    state.upcoming_international_match = None
    release_national_duty(state)
    return logs


def apply_club_aftermath(
    player: Player,
    perf: PlayerMatchPerformance,
    team: Team,
    season: int,
    week: int,
    rng: random.Random,
) -> list[str]:
    """Season stats and attribute swings after a league match, then the injury roll, in place."""
    perf.narrative_summary = NARRATIVE_LOADING
    perf.narrative_pending = True
    player.last_match_performance = perf

    stats = player.stats
    stats.appearances += 1
    stats.goals += perf.goals
    stats.assists += perf.assists
    if perf.rating > 0:
        stats.total_match_rating += perf.rating
        stats.matches_rated_this_season += 1

    attrs = player.attributes
    rating = perf.rating
    attrs.adjust(Attr.FORM, math.floor(rating) - 6)
    attrs.adjust(Attr.MORALE, math.floor(rating / 2) - 2)
    if player.has_trait(TraitId.FAN_FAVOURITE) and rating > 7:
        attrs.adjust(Attr.FAN_SUPPORT, 2)
    else:
        attrs.adjust(Attr.FAN_SUPPORT, 1 if rating > 6 else -1)
    attrs.adjust(Attr.STAMINA, -rng.randint(10, 20))
    if player.has_trait(TraitId.SEASONED_PRO) or player.has_trait(TraitId.WORKHORSE):
        attrs.adjust(Attr.STAMINA, SEASONED_STAMINA_REFUND)

    swing = round(division_multiplier(team.division))
    if rating > 7.5:
        attrs.adjust(Attr.REPUTATION, swing)
    elif rating < 5.5:
        attrs.adjust(Attr.REPUTATION, -swing)
    if rating > 7:
        player.adjust_manager_relationship(1)
    elif rating < 5:
        player.adjust_manager_relationship(-1)

    logs: list[str] = []
    injury_log = roll_injury(player, season, week, rng)
    if injury_log:
        logs.append(injury_log)
    logs.extend(unlock_traits(player, season))
    logs.extend(grant_career_milestones(player, season))
    return logs


def play_club_week(state: GameState, rng: random.Random) -> list[str]:
    """Simulate one fixture for every club and apply the user's match aftermath.

    Results from the user's own division are logged as "Match:" lines; the
    rest only go to the module logger.
    """
    player = state.user_player
    user_team = state.find_team(player.team_id) if player else None
    players_by_id = {p.id: p for p in state.all_players()}
    logs: list[str] = []
    user_perf: PlayerMatchPerformance | None = None

    for division, home_id, away_id, match_id in generate_week_fixtures(state.league, rng):
        home, away = state.find_team(home_id), state.find_team(away_id)
        if home is None or away is None:
            logger.warning("Skipping fixture %s: unknown team", match_id)
            continue
        result = simulate_match(home, away, player, players_by_id, rng, match_id=match_id)
        home.record_result(result.home_score, result.away_score)
        away.record_result(result.away_score, result.home_score)
        if user_team is not None and division == user_team.division:
            logs.append(f"Match: {result.summary}")
        else:
            logger.debug("Match: %s", result.summary)
        if player is not None and player.id in result.performances:
            user_perf = result.performances[player.id]

    if player is None:
        return logs
    if user_team is None or player.is_injured:
        if not player.is_injured:
            player.attributes.adjust(Attr.FORM, FREE_AGENT_FORM)
            player.attributes.adjust(Attr.STAMINA, FREE_AGENT_STAMINA)
        player.last_match_performance = None
    elif user_perf is None:
        player.attributes.adjust(Attr.FORM, REST_WEEK_FORM)
        player.attributes.adjust(Attr.STAMINA, REST_WEEK_STAMINA)
        player.last_match_performance = None
    else:
        logs.extend(apply_club_aftermath(player, user_perf, user_team, state.season, state.week, rng))
    return logs


# ===================================================================
# Orchestrator
# ===================================================================

async def advance_week(
    state: GameState,
    narrator: Narrator | None = None,
    rng: random.Random | None = None,
) -> GameState:
    """Advance the world by one week.

    Parameters
    ----------
    state : GameState
        Current snapshot; never modified.
    narrator : Narrator | None
        Writes media questions and international match write-ups.  Failures
        and absence degrade to placeholder text.
    rng : random.Random | None
        Source of every roll; pass a seeded one for reproducible weeks.

    Returns
    -------
    GameState
        The next snapshot.  After week 38 this is week 1 of the next season.
    """
    rng = rng or random.Random()
    new_state = state.copy()
    logs = _advance_calendar(new_state)

    logs.extend(expire_offers(new_state))
    logs.extend(expire_interactions(new_state))
    prune_offer_history(new_state)

    player = new_state.user_player
    if player is not None:
        logs.extend(generate_offers(new_state, rng))
        new_state.pending_interactions.extend(await generate_interactions(new_state, narrator, rng))
        logs.extend(resolve_transfer_request(new_state, rng))
        logs.extend(tick_recovery(player))

    if _is_international_week(new_state):
        logs.extend(await play_international_week(new_state, narrator, rng))
    else:
        logs.extend(play_club_week(new_state, rng))

    for team in new_state.teams:
        team.team_chemistry = calculate_team_chemistry(team)

    if new_state.week > WEEKS_PER_SEASON:
        logs.extend(run_season_rollover(new_state, rng))
        logs.extend(_sync_window_status(new_state))

    new_state.log(*logs)
    logger.info("Advanced to season %d week %d", new_state.season, new_state.week)
    return new_state
