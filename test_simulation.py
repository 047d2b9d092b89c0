"""
Quick integration test for the match engine and weekly fixtures.

Builds a seeded world, plays fixtures between real clubs and national teams,
and checks scores, the tracked player's line and fixture pairing.

Usage:
    pytest test_simulation.py
    python test_simulation.py      # prints a sample box score
"""
import random
from collections import Counter

from conftest import injure, user_team
from models.constants import TEAMS_PER_DIVISION
from models.enums import DIVISIONS_ORDERED, Position, TacticalInstruction
from models.national_team import NationalTeam
from simulation.engine import (
    MAX_GOALS,
    MAX_RATING,
    MIN_RATING,
    NO_FIT_PLAYERS_STRENGTH,
    club_strength,
    generate_performance,
    nation_strength,
    simulate_match,
)
from simulation.schedule import generate_week_fixtures, match_id_for, pair_division
from simulation.week import initialize_world


def _opponent(state, team):
    return next(t for t in state.teams if t.division == team.division and t.id != team.id)


def _players_by_id(state):
    return {p.id: p for p in state.all_players()}


def test_scores_within_bounds(world):
    rng = random.Random(7)
    team = user_team(world)
    other = _opponent(world, team)
    for i in range(200):
        result = simulate_match(team, other, None, _players_by_id(world), rng, match_id=f"m{i}")
        assert 0 <= result.home_score <= MAX_GOALS
        assert 0 <= result.away_score <= MAX_GOALS
        assert result.performances == {}


def test_tracked_player_gets_a_performance(world):
    rng = random.Random(8)
    player = world.user_player
    team = user_team(world)
    other = _opponent(world, team)
    result = simulate_match(other, team, player, _players_by_id(world), rng, match_id="S1-W2-x-y")

    perf = result.performances[player.id]
    assert MIN_RATING <= perf.rating <= MAX_RATING
    assert perf.match_id == "S1-W2-x-y"
    assert perf.team_name == team.name and perf.opponent_name == other.name
    assert (perf.team_score, perf.opponent_score) == (result.away_score, result.home_score)
    assert perf.shots_on_target <= perf.shots
    assert perf.tackles_won <= perf.tackles_attempted
    assert not perf.is_international


def test_injured_player_has_no_performance(world):
    player = world.user_player
    injure(player)
    team = user_team(world)
    result = simulate_match(team, _opponent(world, team), player, _players_by_id(world), random.Random(1))
    assert player.id not in result.performances


def test_player_not_in_fixture_has_no_performance(world):
    player = world.user_player
    others = [t for t in world.teams if t.id != player.team_id][:2]
    result = simulate_match(others[0], others[1], player, _players_by_id(world), random.Random(2))
    assert result.performances == {}


def test_ratings_stay_in_range_for_every_position_and_tactic(world):
    rng = random.Random(3)
    player = world.user_player
    for position in Position:
        player.preferred_position = position
        for instruction in TacticalInstruction:
            player.active_tactical_instruction = instruction
            for _ in range(10):
                perf = generate_performance(player, rng.random() < 0.5, rng.uniform(0.5, 2.0), False, rng)
                assert MIN_RATING <= perf.rating <= MAX_RATING, f"{position} {instruction} {perf.rating}"
                assert perf.goals >= 0 and perf.assists >= 0


def test_club_strength_ignores_injured_and_unsigned(world):
    team = user_team(world)
    for p in team.players:
        injure(p)
    assert club_strength(team) == NO_FIT_PLAYERS_STRENGTH


def test_empty_national_squad_uses_reputation():
    nation = NationalTeam(id="NATIONAL_TEST", name="Test", nationality_represented="Test", reputation=70)
    assert nation_strength(nation, {}) == 70 * 0.8


def test_international_match_tracks_squad_member(world):
    player = world.user_player
    player.is_on_national_team = True
    home = world.national_team_for(player.nationality)
    away = next(nt for nt in world.national_teams if nt.id != home.id)
    home.squad = [player.id]

    result = simulate_match(home, away, player, _players_by_id(world), random.Random(4), match_id="intl")
    assert result.is_international
    perf = result.performances[player.id]
    assert perf.is_international and perf.team_name == home.name


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

def test_every_team_plays_once_per_week(world):
    fixtures = generate_week_fixtures(world.league, random.Random(5))
    assert len(fixtures) == len(DIVISIONS_ORDERED) * TEAMS_PER_DIVISION // 2
    appearances = Counter()
    for division, home_id, away_id, match_id in fixtures:
        assert home_id != away_id
        assert world.find_team(home_id).division == division == world.find_team(away_id).division
        assert match_id == match_id_for(world.season, world.week, home_id, away_id)
        appearances.update([home_id, away_id])
    assert set(appearances.values()) == {1}
    assert len(appearances) == len(world.teams)


def test_odd_division_leaves_one_team_out():
    fixtures = pair_division(["a", "b", "c"], random.Random(6))
    assert len(fixtures) == 1


def test_match_id_format():
    assert match_id_for(2, 14, "FirstDivision-0", "FirstDivision-3") == "S2-W14-FirstDivision-0-FirstDivision-3"


def main() -> None:
    state = initialize_world(rng=random.Random(1))
    player = state.user_player
    team = user_team(state)
    other = _opponent(state, team)
    result = simulate_match(team, other, player, _players_by_id(state), random.Random(2), match_id="demo")

    print("=" * 60)
    print(f"  {result.home_name:>25}  {result.home_score:>3}")
    print(f"  {result.away_name:>25}  {result.away_score:>3}")
    print("=" * 60)
    perf = result.performances.get(player.id)
    if perf is None:
        print(f"{player.name} did not play.")
        return
    print(f"{player.name} ({player.preferred_position.value}) rating {perf.rating}")
    print(f"  Goals {perf.goals}  Assists {perf.assists}  Shots {perf.shots_on_target}/{perf.shots}")
    print(f"  Tackles {perf.tackles_won}/{perf.tackles_attempted}  Key passes {perf.key_passes}  "
          f"Interceptions {perf.interceptions}")


if __name__ == "__main__":
    main()
