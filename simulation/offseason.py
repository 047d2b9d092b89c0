"""
Season rollover for Football Career Mode.

Runs once the week counter passes the last week of the season, in this order:
career tallies and seasonal awards, career milestones, promotion/relegation
(with title and promotion achievements for the user's player), then the new
season: records reset, aging, NPC development, retirement with replacements,
contract expiry and the user's clean slate.

Everything here works in place on the week orchestrator's working copy and
returns game-log lines.
"""
from __future__ import annotations

import logging
import random

from generation.generate import assign_kit_number, create_player, release_kit_number
from models.constants import (
    MIN_APPEARANCES_FOR_SEASONAL_AWARDS,
    MIN_AVERAGE_RATING_FOR_AWARD,
    MIN_PLAYERS_PER_TEAM,
    NEUTRAL_MANAGER_RELATIONSHIP,
    NPC_CONTRACT_SEASONS,
    PROMOTION_COUNT,
    RELEGATION_COUNT,
    RETIREMENT_AGE_SPREAD,
    RETIREMENT_START_AGE,
    WEEKS_PER_SEASON,
    YOUNG_PLAYER_AGE_LIMIT,
)
from models.enums import DIVISIONS_ORDERED, AwardIdBase, AwardType, Division, TransferRequestStatus
from models.game_state import GameState
from models.league import League
from models.player import ClubHistoryEntry, Player
from models.ratings import base_budget_for_division, base_reputation_for_division, calculate_team_chemistry
from models.team import Team
from simulation.development import develop_npc_attributes
from simulation.traits import grant_award, grant_career_milestones

logger = logging.getLogger(__name__)

# Form is rerolled into this band at the start of every season
NEW_SEASON_FORM_RANGE: tuple[int, int] = (50, 85)
NEW_SEASON_FORM_SWING = 10
# An injured user starts the season with form squeezed into this band
INJURED_FORM_RANGE: tuple[int, int] = (10, 50)
DIVISION_CHANGE_BUDGET_SWING: tuple[float, float] = (0.85, 1.15)
DIVISION_CHANGE_REPUTATION_SWING: tuple[int, int] = (-5, 10)
TEAM_REPUTATION_RANGE: tuple[int, int] = (10, 100)


def _clamp(value: int, bounds: tuple[int, int]) -> int:
    lo, hi = bounds
    return max(lo, min(hi, value))


# ===================================================================
# Standings
# ===================================================================

def standings(teams: list[Team]) -> list[Team]:
    """Teams ordered points, goal difference, goals for (all descending), then name."""
    return sorted(teams, key=lambda t: (-t.points, -t.goal_difference, -t.goals_for, t.name))


def division_table(state: GameState, division: Division) -> list[Team]:
    return standings([t for t in state.teams if t.division == division])


# ===================================================================
# Awards
# ===================================================================

def tally_career_stats(state: GameState) -> None:
    for p in state.all_players():
        p.career_stats.total_goals += p.stats.goals
        p.career_stats.total_assists += p.stats.assists
        p.career_stats.total_appearances += p.stats.appearances


def _award_leaders(
    candidates: list[Player],
    score,
    award_id_base: AwardIdBase,
    name: str,
    description,
    division: Division,
    season: int,
    value,
) -> list[Player]:
    """Grant the award to every candidate tied on the best score; returns the winners."""
    best = max(score(p) for p in candidates)
    winners = [p for p in candidates if score(p) == best]
    for p in winners:
        grant_award(
            p, award_id_base, name, description(p, best), AwardType.SEASONAL_LEAGUE,
            season, division=division.value, value=value(best),
        )
    return winners


def grant_seasonal_awards(state: GameState) -> list[str]:
    """Top scorer, most assists, player and young player of the season for every division.

    Candidates need MIN_APPEARANCES_FOR_SEASONAL_AWARDS appearances; the rating
    awards also need an average of at least MIN_AVERAGE_RATING_FOR_AWARD.
    Ties all win.
    """
    season = state.season
    logs: list[str] = []
    for division in DIVISIONS_ORDERED:
        div = division.value
        eligible = [
            p
            for t in state.teams if t.division == division
            for p in t.players
            if p.team_id == t.id and p.stats.appearances >= MIN_APPEARANCES_FOR_SEASONAL_AWARDS
        ]
        if not eligible:
            continue

        if max(p.stats.goals for p in eligible) > 0:
            winners = _award_leaders(
                eligible, lambda p: p.stats.goals, AwardIdBase.LEAGUE_TOP_SCORER,
                f"{div} Top Scorer - S{season}", lambda p, n: f"Scored {n} goals.",
                division, season, lambda n: n,
            )
            for w in winners:
                logs.append(f"{w.name} wins {div} Top Scorer with {w.stats.goals} goals! (S{season})")

        if max(p.stats.assists for p in eligible) > 0:
            winners = _award_leaders(
                eligible, lambda p: p.stats.assists, AwardIdBase.LEAGUE_MOST_ASSISTS,
                f"{div} Most Assists - S{season}", lambda p, n: f"Provided {n} assists.",
                division, season, lambda n: n,
            )
            for w in winners:
                logs.append(f"{w.name} wins {div} Most Assists with {w.stats.assists} assists! (S{season})")

        rated = [p for p in eligible if p.stats.matches_rated_this_season > 0]
        if rated and max(p.stats.average_rating for p in rated) >= MIN_AVERAGE_RATING_FOR_AWARD:
            winners = _award_leaders(
                rated, lambda p: p.stats.average_rating, AwardIdBase.LEAGUE_PLAYER_OF_THE_SEASON,
                f"{div} Player of the Season - S{season}", lambda p, r: f"Avg Rating: {r:.2f}",
                division, season, lambda r: round(r, 2),
            )
            for w in winners:
                logs.append(
                    f"{w.name} wins {div} Player of the Season with an average rating of "
                    f"{w.stats.average_rating:.2f}! (S{season})"
                )

        young = [p for p in rated if p.attributes.age <= YOUNG_PLAYER_AGE_LIMIT]
        if young and max(p.stats.average_rating for p in young) >= MIN_AVERAGE_RATING_FOR_AWARD:
            winners = _award_leaders(
                young, lambda p: p.stats.average_rating, AwardIdBase.LEAGUE_YOUNG_PLAYER_OF_THE_SEASON,
                f"{div} Young Player of the Season - S{season}",
                lambda p, r: f"Age: {p.attributes.age}, Avg Rating: {r:.2f}",
                division, season, lambda r: round(r, 2),
            )
            for w in winners:
                logs.append(
                    f"{w.name} (Age {w.attributes.age}) wins {div} Young Player of the Season with an "
                    f"average rating of {w.stats.average_rating:.2f}! (S{season})"
                )
    return logs


def grant_league_milestones(state: GameState) -> list[str]:
    """Career milestones for every player; only the user's lines reach the game log."""
    logs: list[str] = []
    for p in state.all_players():
        lines = grant_career_milestones(p, state.season)
        if p.is_user_player:
            logs.extend(lines)
    return logs


# ===================================================================
# Promotion and relegation
# ===================================================================

def _user_on(state: GameState, team: Team) -> Player | None:
    user = state.user_player
    if user is not None and user.team_id == team.id:
        return user
    return None


def _grant_title(player: Player, team: Team, division: Division, season: int) -> str:
    div = division.value
    grant_award(
        player, AwardIdBase.CAREER_LEAGUE_TITLE_WON, f"Won {div} with {team.name} - S{season}",
        f"Clinched the {div} title.", AwardType.CAREER_MILESTONE, season, division=div, value=team.name,
    )
    player.career_stats.league_titles_won.append(
        {"division": div, "season": season, "team_name": team.name}
    )
    return f"{player.name} has won {div} with {team.name}! (Career Achievement)"


def _grant_promotion(player: Player, team: Team, origin: Division, target: Division, season: int) -> str:
    grant_award(
        player, AwardIdBase.CAREER_PROMOTION_WON, f"Promoted with {team.name} to {target.value} - S{season}",
        f"Achieved promotion from {origin.value} with {team.name}.", AwardType.CAREER_MILESTONE, season,
        division=origin.value, value=team.name,
    )
    player.career_stats.promotions_won.append({
        "from_division": origin.value,
        "to_division": target.value,
        "season": season,
        "team_name": team.name,
    })
    return f"{player.name} has been promoted with {team.name} to {target.value}! (Career Achievement)"


def apply_promotion_relegation(state: GameState, rng: random.Random) -> list[str]:
    """Move the top PROMOTION_COUNT of each division up and the bottom RELEGATION_COUNT down.

    All moves are decided from the final tables before any team changes
    division.  The league's division lists are rebuilt from the new
    assignments, each ordered by final position.

    Parameters
    ----------
    state : GameState
        Working copy at the end of the season (records not yet reset).
    rng : random.Random
        Rolls the new budget and reputation of every team that changes division.

    Returns
    -------
    list[str]
        Game-log lines for the user's achievements and every division change.
    """
    season = state.season
    logs = ["Processing promotions and relegations..."]
    moves: dict[str, Division] = {}
    tables = {division: division_table(state, division) for division in DIVISIONS_ORDERED}

    for idx, division in enumerate(DIVISIONS_ORDERED):
        table = tables[division]
        if not table:
            continue
        champion = table[0]
        user = _user_on(state, champion)
        if user is not None and champion.points > 0:
            logs.append(_grant_title(user, champion, division, season))

        if idx > 0:
            target = DIVISIONS_ORDERED[idx - 1]
            for team in table[:PROMOTION_COUNT]:
                moves[team.id] = target
                user = _user_on(state, team)
                if user is not None:
                    logs.append(_grant_promotion(user, team, division, target, season))
        if idx < len(DIVISIONS_ORDERED) - 1:
            for team in table[-RELEGATION_COUNT:]:
                moves.setdefault(team.id, DIVISIONS_ORDERED[idx + 1])

    for team in state.teams:
        target = moves.get(team.id)
        if target is None or target == team.division:
            continue
        verb = "PROMOTED" if DIVISIONS_ORDERED.index(target) < DIVISIONS_ORDERED.index(team.division) else "RELEGATED"
        logs.append(f"{team.name} has been {verb} from {team.division.value} to {target.value}!")
        team.division = target
        team.budget = int(base_budget_for_division(target) * rng.uniform(*DIVISION_CHANGE_BUDGET_SWING))
        team.reputation = _clamp(
            base_reputation_for_division(target) + rng.randint(*DIVISION_CHANGE_REPUTATION_SWING),
            TEAM_REPUTATION_RANGE,
        )

    league = League(current_season=state.league.current_season, current_week=state.league.current_week)
    for division in DIVISIONS_ORDERED:
        for team in tables[division]:
            league.divisions[team.division].append(team.id)
    state.league = league
    return logs


# ===================================================================
# New season
# ===================================================================

def _retires(player: Player, rng: random.Random) -> bool:
    return player.attributes.age > RETIREMENT_START_AGE + rng.random() * RETIREMENT_AGE_SPREAD


def retire_players(state: GameState, rng: random.Random) -> int:
    """Remove NPCs past their retirement age; refill squads that fall below the minimum.

    Replacements are fresh NPCs of the retiree's position.  Returns the number
    of retirements.
    """
    season = state.season
    retired = 0
    for team in state.teams:
        for p in list(team.players):
            if p.is_user_player or p.team_id != team.id or not _retires(p, rng):
                continue
            logger.info("%s (%d) from %s has retired", p.name, p.attributes.age, team.name)
            release_kit_number(team, p.current_kit_number)
            team.players.remove(p)
            retired += 1
            if len(team.players) < MIN_PLAYERS_PER_TEAM:
                newcomer = create_player(p.preferred_position, team, season, rng)
                assign_kit_number(newcomer, team, newcomer.preferred_kit_number, rng)
                team.players.append(newcomer)
    return retired


def expire_contracts(state: GameState, rng: random.Random) -> list[str]:
    """User contracts that ran out become free agency; NPC contracts renew.

    A free agent keeps their place on the old club's roster list (they
    train there) but has no team reference, wage or kit number.
    """
    season = state.season
    logs: list[str] = []
    for team in state.teams:
        for p in team.players:
            if p.team_id != team.id or p.contract_expiry_season >= season:
                continue
            if not p.is_user_player:
                p.contract_expiry_season = season + rng.randint(*NPC_CONTRACT_SEASONS)
                continue
            logs.append(f"{p.name}'s contract with {team.name} has expired! They are now a free agent.")
            release_kit_number(team, p.current_kit_number)
            p.current_kit_number = None
            p.team_id = None
            p.weekly_wage = 0
            if p.club_history and p.club_history[-1].left_week is None:
                p.club_history[-1].left_week = WEEKS_PER_SEASON
            p.club_history.append(ClubHistoryEntry(team_name="Free Agent", season=season, joined_week=1))
    return logs


def _reroll_form(player: Player, rng: random.Random) -> None:
    form = player.attributes.form + rng.randint(-NEW_SEASON_FORM_SWING, NEW_SEASON_FORM_SWING)
    player.attributes.form = _clamp(form, NEW_SEASON_FORM_RANGE)


def start_new_season(state: GameState, rng: random.Random) -> list[str]:
    """Advance the calendar and reset/age/develop every player for the new season."""
    state.league.current_season += 1
    state.league.current_week = 1
    season = state.season
    logs = [f"Starting new season: {season}."]

    for team in state.teams:
        team.reset_season_record()
        for p in team.players:
            p.stats.goals = 0
            p.stats.assists = 0
            p.stats.appearances = 0
            p.stats.total_match_rating = 0.0
            p.stats.matches_rated_this_season = 0
            if p.is_user_player:
                if not p.is_injured:
                    p.attributes.age += 1
            else:
                p.attributes.age += 1
                develop_npc_attributes(p, team.division, rng)
                _reroll_form(p, rng)
            p.attributes.stamina = 100

    retired = retire_players(state, rng)
    if retired:
        logs.append(f"{retired} players retired across the league.")
    logs.extend(expire_contracts(state, rng))

    for team in state.teams:
        team.team_chemistry = calculate_team_chemistry(team)

    user = state.user_player
    if user is not None:
        if user.team_id is not None:
            user.transfer_request_status = TransferRequestStatus.NONE
            user.is_transfer_listed_by_club = False
        user.manager_relationship = NEUTRAL_MANAGER_RELATIONSHIP
        if user.is_injured:
            user.attributes.form = _clamp(user.attributes.form, INJURED_FORM_RANGE)
        else:
            _reroll_form(user, rng)
    return logs


def run_season_rollover(state: GameState, rng: random.Random) -> list[str]:
    """End the current season and start the next one, in place.

    Parameters
    ----------
    state : GameState
        The week orchestrator's working copy; its week counter has just passed
        the last week of the season.
    rng : random.Random
        Source of every roll (budgets, development, retirement, form).

    Returns
    -------
    list[str]
        Game-log lines in the order the steps ran.
    """
    ended = state.season
    logger.info("Rolling over season %d", ended)
    logs = [f"Season {ended} has ended!"]
    tally_career_stats(state)
    logs.extend(grant_seasonal_awards(state))
    logs.extend(grant_league_milestones(state))
    logs.extend(apply_promotion_relegation(state, rng))
    logs.extend(start_new_season(state, rng))
    return logs
