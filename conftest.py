"""
Shared fixtures for the Football Career Mode tests.

Building a world creates ~2000 players, so one seeded world is generated per
session and every test gets its own deep copy.
"""
import random

import pytest

import db.schema as schema
from generation.generate import assign_kit_number, release_kit_number
from models.enums import Division
from models.game_state import GameState
from models.player import ClubHistoryEntry, Injury
from models.team import Team
from simulation.narrative import NarrativeUnavailable
from simulation.week import initialize_world

WORLD_SEED = 20240601


class FixedNarrator:
    """Returns the same text for every prompt and remembers the prompts."""

    def __init__(self, text: str = "A fine afternoon's work."):
        self.text = text
        self.prompts: list[str] = []

    def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.text


class BrokenNarrator:
    def generate_text(self, prompt: str) -> str:
        raise NarrativeUnavailable("connection refused")


@pytest.fixture(scope="session")
def _base_world() -> GameState:
    return initialize_world(rng=random.Random(WORLD_SEED))


@pytest.fixture
def world(_base_world) -> GameState:
    return _base_world.copy()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(99)


@pytest.fixture
def tmp_db(tmp_path, monkeypatch):
    """Point the single save at a temporary directory."""
    monkeypatch.setattr(schema, "get_db_path", lambda: tmp_path / "game.db")
    return tmp_path / "game.db"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def user_team(state: GameState) -> Team:
    return state.find_team(state.user_player.team_id)


def teams_in(state: GameState, division: Division) -> list[Team]:
    return [t for t in state.teams if t.division == division]


def move_user_to(state: GameState, team: Team, rng: random.Random) -> None:
    """Re-sign the user's player at team, in place (test setup only)."""
    player = state.user_player
    holding = state.team_holding(player.id)
    release_kit_number(holding, player.current_kit_number)
    holding.players = [p for p in holding.players if p.id != player.id]
    player.team_id = team.id
    assign_kit_number(player, team, player.preferred_kit_number, rng)
    team.players.append(player)
    player.club_history.append(ClubHistoryEntry(team_name=team.name, season=state.season, joined_week=state.week))


def injure(player, weeks: int = 3) -> Injury:
    player.current_injury = Injury(
        id=f"inj-{player.id}-test",
        type="Pulled Hamstring",
        duration_weeks=weeks,
        weeks_remaining=weeks,
    )
    return player.current_injury


def assert_kit_numbers_consistent(state: GameState) -> None:
    for team in state.teams:
        assert len(team.used_kit_numbers) == len(set(team.used_kit_numbers)), f"duplicate kit numbers at {team.id}"
        for p in team.players:
            if p.team_id == team.id and p.current_kit_number is not None:
                assert p.current_kit_number in team.used_kit_numbers, f"{p.id} kit not registered at {team.id}"


def assert_attributes_in_bounds(state: GameState) -> None:
    from models.constants import ATTRIBUTE_BOUNDS

    for p in state.all_players():
        for attr, (lo, hi) in ATTRIBUTE_BOUNDS.items():
            value = p.attributes.get(attr)
            assert lo <= value <= hi, f"{p.id} {attr.value}={value} outside [{lo}, {hi}]"
