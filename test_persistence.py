"""
Tests for snapshot serialization and the single SQLite save.
"""
import asyncio
import random
import sqlite3

import pytest

import db.schema as schema
from db import delete_save, get_save_summary, init_db, load_game_state, reset_save, save_game_state
from models.game_state import GameState, SnapshotError
from simulation.week import advance_week


def test_round_trip_keeps_ids_and_numbers(world):
    played = asyncio.run(advance_week(world, None, random.Random(2)))
    restored = GameState.from_json(played.to_json())

    assert restored.to_dict() == played.to_dict()
    assert [t.id for t in restored.teams] == [t.id for t in played.teams]
    assert sorted(p.id for p in restored.all_players()) == sorted(p.id for p in played.all_players())
    assert restored.user_player.last_match_performance == played.user_player.last_match_performance
    assert restored.league.divisions == played.league.divisions


def test_save_and_load(world, tmp_db):
    assert load_game_state() is None
    assert get_save_summary() is None

    save_game_state(world)
    loaded = load_game_state()
    assert loaded.to_dict() == world.to_dict()
    summary = get_save_summary()
    assert (summary["season"], summary["week"]) == (1, 1)
    assert tmp_db.exists()


def test_save_replaces_previous(world, tmp_db):
    save_game_state(world)
    world.league.current_week = 9
    save_game_state(world)
    assert load_game_state().week == 9
    conn = schema.get_connection()
    try:
        assert conn.execute("SELECT COUNT(*) FROM saves").fetchone()[0] == 1
    finally:
        conn.close()


def test_reset_and_delete(world, tmp_db):
    save_game_state(world)
    reset_save()
    assert load_game_state() is None

    save_game_state(world)
    delete_save()
    assert load_game_state() is None


def test_corrupt_save_raises_snapshot_error(tmp_db):
    conn = schema.get_connection()
    try:
        init_db(conn)
        conn.execute(
            "INSERT INTO saves (id, season, week, snapshot) VALUES (?, 1, 1, ?)",
            (schema.SAVE_ID, "{not json"),
        )
        conn.commit()
    finally:
        conn.close()
    with pytest.raises(SnapshotError):
        load_game_state()


@pytest.mark.parametrize("text", [
    "[]",
    '{"teams": []}',
    '{"user_player_id": "ghost", "teams": [], "league": {}}',
    '{"user_player_id": "", "teams": [{"id": "t", "division": "Sixth Division"}], "league": {}}',
])
def test_malformed_snapshots_are_rejected(text):
    with pytest.raises(SnapshotError):
        GameState.from_json(text)


def test_snapshot_error_is_a_value_error():
    assert issubclass(SnapshotError, ValueError)


def test_connection_uses_row_factory(tmp_db):
    conn = schema.get_connection()
    try:
        assert conn.row_factory is sqlite3.Row
    finally:
        conn.close()
