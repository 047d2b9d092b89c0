"""
Integration tests for the week orchestrator and the user commands it exposes.

Usage:
    pytest test_week.py
"""
import asyncio
import random

from conftest import (
    FixedNarrator,
    assert_attributes_in_bounds,
    assert_kit_numbers_consistent,
    injure,
    user_team,
)
from models.constants import GAME_LOG_LIMIT, NARRATIVE_LOADING, NARRATIVE_UNAVAILABLE, WEEKS_PER_SEASON
from models.enums import TacticalInstruction, TransferWindowStatus
from simulation.week import (
    advance_week,
    apply_narrative,
    request_match_narrative,
    set_tactical_instruction,
)


def _advance(state, seed=5, narrator=None):
    return asyncio.run(advance_week(state, narrator, random.Random(seed)))


def _match_lines(state, team_name):
    return [line for line in state.game_log if line.startswith("Match:") and team_name in line]


# ---------------------------------------------------------------------------
# Club weeks
# ---------------------------------------------------------------------------

def test_fit_player_plays_once_and_gets_one_match_line(world):
    team = user_team(world)
    appearances = world.user_player.stats.appearances

    after = _advance(world)

    assert after.week == 2
    assert after.user_player.stats.appearances == appearances + 1
    assert len(_match_lines(after, team.name)) == 1
    assert after.find_team(team.id).matches_played == 1
    perf = after.user_player.last_match_performance
    assert perf.match_id.startswith("S1-W2-")
    assert perf.narrative_pending and perf.narrative_summary == NARRATIVE_LOADING


def test_every_club_plays_each_week(world):
    after = _advance(world)
    assert all(t.matches_played == 1 for t in after.teams)
    wins = sum(t.wins for t in after.teams)
    assert wins == sum(t.losses for t in after.teams)
    assert sum(t.goals_for for t in after.teams) == sum(t.goals_against for t in after.teams)


def test_input_snapshot_is_never_modified(world):
    before = world.to_dict()
    _advance(world)
    assert world.to_dict() == before


def test_same_seed_same_week(world):
    assert _advance(world, seed=3).to_dict() == _advance(world, seed=3).to_dict()


def test_injured_player_sits_out_and_recovers(world):
    injure(world.user_player, weeks=3)
    after = _advance(world)
    player = after.user_player
    assert player.stats.appearances == 0
    assert player.last_match_performance is None
    assert player.current_injury.weeks_remaining == 2
    assert any("still recovering" in line for line in after.game_log)


def test_free_agent_does_not_play(world):
    player = world.user_player
    holding = user_team(world)
    holding.used_kit_numbers.remove(player.current_kit_number)
    player.current_kit_number = None
    player.team_id = None

    after = _advance(world)
    assert after.user_player.stats.appearances == 0
    assert after.user_player.last_match_performance is None
    assert not any(line.startswith("Match:") for line in after.game_log)


def test_log_stays_bounded_and_invariants_hold(world):
    state = world
    for seed in range(4):
        state = _advance(state, seed=seed)
        assert len(state.game_log) <= GAME_LOG_LIMIT
    assert state.week == 5
    assert_attributes_in_bounds(state)
    assert_kit_numbers_consistent(state)


def test_transfer_window_closes_after_preseason(world):
    world.league.current_week = 4
    after = _advance(world)
    assert after.transfer_window_status == TransferWindowStatus.CLOSED
    assert "Transfer window is now CLOSED." in after.game_log


# ---------------------------------------------------------------------------
# International week
# ---------------------------------------------------------------------------

def test_international_break_plays_friendly_instead_of_league(world):
    player = world.user_player
    player.attributes.reputation = 95
    player.attributes.form = 95
    world.league.current_week = 7
    narrator = FixedNarrator("A composed debut for the national side.")

    after = _advance(world, narrator=narrator)
    player = after.user_player

    assert after.week == 8
    assert "It's an international break! Week 8." in after.game_log
    assert any(line.startswith("International Friendly:") for line in after.game_log)
    assert not any(line.startswith("Match:") for line in after.game_log)
    assert all(t.matches_played == 0 for t in after.teams)
    assert player.international_caps == 1
    assert player.career_stats.total_international_caps == 1
    perf = player.last_match_performance
    assert perf.is_international and not perf.narrative_pending
    assert perf.narrative_summary == "A composed debut for the national side."
    assert after.upcoming_international_match is None
    assert not any(p.is_on_national_team for p in after.all_players())


def test_unselected_player_has_a_quiet_break(world):
    world.user_player.attributes.reputation = 10
    world.league.current_week = 7
    after = _advance(world)
    assert after.user_player.international_caps == 0
    assert not any(line.startswith("International Friendly:") for line in after.game_log)


# ---------------------------------------------------------------------------
# Season boundary
# ---------------------------------------------------------------------------

def test_last_week_rolls_into_next_season(world):
    world.league.current_week = WEEKS_PER_SEASON
    world.transfer_window_status = TransferWindowStatus.CLOSED
    world.user_player.contract_expiry_season = 5

    after = _advance(world)

    assert (after.season, after.week) == (2, 1)
    assert "Season 1 has ended!" in after.game_log
    assert after.transfer_window_status == TransferWindowStatus.OPEN_PRE_SEASON
    assert after.game_log[-1] == "Transfer window is now OPEN."
    assert all(t.matches_played == 0 for t in after.teams)
    assert_kit_numbers_consistent(after)


# ---------------------------------------------------------------------------
# Narrative side channel
# ---------------------------------------------------------------------------

def test_narrative_is_applied_to_a_new_snapshot(world):
    played = _advance(world)
    narrator = FixedNarrator("Ran the midfield all afternoon.")

    match_id, text = asyncio.run(request_match_narrative(played, narrator))
    assert match_id == played.user_player.last_match_performance.match_id
    assert len(narrator.prompts) == 1

    patched = apply_narrative(played, match_id, text)
    perf = patched.user_player.last_match_performance
    assert perf.narrative_summary == text and not perf.narrative_pending
    assert played.user_player.last_match_performance.narrative_pending

    assert apply_narrative(patched, match_id, "again") is patched
    assert asyncio.run(request_match_narrative(patched, narrator)) is None


def test_stale_narrative_is_ignored(world):
    played = _advance(world)
    assert apply_narrative(played, "S1-W1-old-match", "late text") is played


def test_missing_narrator_gives_placeholder(world):
    played = _advance(world)
    _, text = asyncio.run(request_match_narrative(played, None))
    assert text == NARRATIVE_UNAVAILABLE


# ---------------------------------------------------------------------------
# Tactics
# ---------------------------------------------------------------------------

def test_set_and_clear_tactical_instruction(world):
    name = world.user_player.name
    focused = set_tactical_instruction(world, "SHOOT_ON_SIGHT")
    assert focused.user_player.active_tactical_instruction == TacticalInstruction.SHOOT_ON_SIGHT
    assert focused.game_log[-1] == f"{name} will now focus on: Shoot on Sight."
    assert world.user_player.active_tactical_instruction is None

    cleared = set_tactical_instruction(focused, TacticalInstruction.NONE)
    assert cleared.user_player.active_tactical_instruction is None
    assert cleared.game_log[-1] == f"{name} has cleared their tactical instruction."

    assert set_tactical_instruction(world, "PARK_THE_BUS") is world
