"""
SQLite schema for Football Career Mode.
Single save: one DB file holding the latest world snapshot as JSON.
New career = reset DB and create fresh.
"""
import sqlite3
from pathlib import Path

# Single save path (relative to project root)
DB_DIR = "data"
DB_FILENAME = "game.db"

# The one save row
SAVE_ID = 1


def get_db_path() -> Path:
    """Return absolute path to the single save DB file."""
    root = Path(__file__).resolve().parent.parent
    return root / DB_DIR / DB_FILENAME


def _ensure_db_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def get_connection() -> sqlite3.Connection:
    """Open a connection to the save DB. Creates dir and file if needed.
    timeout: seconds to wait for lock (the narrative thread writes while requests read).
    """
    path = get_db_path()
    _ensure_db_dir(path)
    conn = sqlite3.connect(str(path), timeout=15.0)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection | None = None) -> None:
    """Create all tables if they do not exist."""
    close = False
    if conn is None:
        conn = get_connection()
        close = True
    try:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS saves (
                id INTEGER PRIMARY KEY,
                season INTEGER NOT NULL,
                week INTEGER NOT NULL,
                snapshot TEXT NOT NULL,
                updated_at TEXT DEFAULT (datetime('now'))
            );
        """)
        conn.commit()
    finally:
        if close:
            conn.close()


def reset_save() -> None:
    """
    Reset the save for a new career: delete DB file and recreate schema.
    Call before storing the freshly generated world.
    """
    path = get_db_path()
    if path.exists():
        path.unlink()
    _ensure_db_dir(path)
    conn = get_connection()
    try:
        init_db(conn)
    finally:
        conn.close()
