"""
Tests for national-team selection and international fixtures.
"""
import random

from conftest import injure
from models.constants import NATIONAL_TEAM_SQUAD_SIZE
from simulation.national import is_eligible, release_national_duty, schedule_international_match, select_squads


def _make_star(player):
    player.attributes.reputation = 95
    player.attributes.form = 95


def test_eligibility_rules(world):
    player = world.user_player
    _make_star(player)
    nation = player.nationality
    assert is_eligible(player, nation)
    assert not is_eligible(player, "Atlantis")

    player.attributes.form = 59
    assert not is_eligible(player, nation)
    player.attributes.form = 95

    player.attributes.reputation = 64
    assert not is_eligible(player, nation)
    player.attributes.reputation = 95

    injure(player)
    assert not is_eligible(player, nation)
    player.current_injury = None

    player.team_id = None
    assert not is_eligible(player, nation)


def test_squads_are_capped_and_sorted(world):
    for p in world.all_players():
        p.attributes.reputation = 70
        p.attributes.form = 70
    select_squads(world)

    players = {p.id: p for p in world.all_players()}
    for nation in world.national_teams:
        assert len(nation.squad) <= NATIONAL_TEAM_SQUAD_SIZE
        keys = [(-players[pid].attributes.reputation, -players[pid].attributes.form) for pid in nation.squad]
        assert keys == sorted(keys)
        assert all(players[pid].nationality == nation.nationality_represented for pid in nation.squad)
        assert all(players[pid].is_on_national_team for pid in nation.squad)

    selected = {pid for nation in world.national_teams for pid in nation.squad}
    assert {p.id for p in world.all_players() if p.is_on_national_team} == selected


def test_user_call_up_and_drop_are_logged(world):
    player = world.user_player
    _make_star(player)
    logs = select_squads(world)
    assert player.is_on_national_team
    assert logs == [f"{player.name} has been called up to the {player.nationality} National Team!"]

    player.attributes.form = 10
    logs = select_squads(world)
    assert not player.is_on_national_team
    assert logs == [f"{player.name} has been dropped from the {player.nationality} National Team."]


def test_free_agent_is_never_selected(world):
    player = world.user_player
    _make_star(player)
    player.team_id = None
    select_squads(world)
    assert not player.is_on_national_team


def test_friendly_scheduled_only_for_fit_selected_user(world):
    player = world.user_player
    assert schedule_international_match(world, random.Random(1)) is None

    _make_star(player)
    select_squads(world)
    fixture = schedule_international_match(world, random.Random(1))
    home = world.national_team_for(player.nationality)
    assert fixture is world.upcoming_international_match
    assert fixture.home_national_team_id == home.id
    assert fixture.away_national_team_id != home.id
    assert fixture.week == world.week and fixture.user_player_involved

    injure(player)
    assert schedule_international_match(world, random.Random(1)) is None
    assert world.upcoming_international_match is None


def test_release_clears_every_flag(world):
    _make_star(world.user_player)
    select_squads(world)
    release_national_duty(world)
    assert not any(p.is_on_national_team for p in world.all_players())
