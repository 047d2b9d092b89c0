"""
Database operations for Football Career Mode.

The save is a single row: the full GameState as JSON plus the season/week it
was taken at (so a caller can check progress without parsing the snapshot).
"""
import logging
import sqlite3
from typing import Any

from .schema import SAVE_ID, get_connection, init_db
from models.game_state import GameState, SnapshotError

logger = logging.getLogger(__name__)


def save_game_state(state: GameState, conn: sqlite3.Connection | None = None) -> None:
    """Store state as the current save, replacing any previous one."""
    close = False
    if conn is None:
        conn = get_connection()
        close = True
    try:
        init_db(conn)
        conn.execute(
            """
            INSERT INTO saves (id, season, week, snapshot, updated_at)
            VALUES (?, ?, ?, ?, datetime('now'))
            ON CONFLICT(id) DO UPDATE SET
                season = excluded.season,
                week = excluded.week,
                snapshot = excluded.snapshot,
                updated_at = excluded.updated_at
            """,
            (SAVE_ID, state.season, state.week, state.to_json()),
        )
        conn.commit()
    finally:
        if close:
            conn.close()


def load_game_state(conn: sqlite3.Connection | None = None) -> GameState | None:
    """Return the saved snapshot, or None if there is no save.

    Raises SnapshotError when the stored JSON cannot be turned back into a
    GameState; the caller decides whether to discard the save.
    """
    close = False
    if conn is None:
        conn = get_connection()
        close = True
    try:
        init_db(conn)
        row = conn.execute("SELECT snapshot FROM saves WHERE id = ?", (SAVE_ID,)).fetchone()
        if row is None:
            return None
        return GameState.from_json(row["snapshot"])
    finally:
        if close:
            conn.close()


def get_save_summary(conn: sqlite3.Connection | None = None) -> dict[str, Any] | None:
    """Return season, week and updated_at of the save without parsing the snapshot."""
    close = False
    if conn is None:
        conn = get_connection()
        close = True
    try:
        init_db(conn)
        row = conn.execute(
            "SELECT season, week, updated_at FROM saves WHERE id = ?", (SAVE_ID,)
        ).fetchone()
        if row is None:
            return None
        return {"season": row["season"], "week": row["week"], "updated_at": row["updated_at"]}
    finally:
        if close:
            conn.close()


def delete_save(conn: sqlite3.Connection | None = None) -> None:
    close = False
    if conn is None:
        conn = get_connection()
        close = True
    try:
        init_db(conn)
        conn.execute("DELETE FROM saves WHERE id = ?", (SAVE_ID,))
        conn.commit()
        logger.info("Save deleted")
    finally:
        if close:
            conn.close()


__all__ = [
    "SnapshotError",
    "save_game_state",
    "load_game_state",
    "get_save_summary",
    "delete_save",
]
