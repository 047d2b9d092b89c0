"""
Single-save SQLite persistence for Football Career Mode.
"""
from .schema import get_connection, get_db_path, init_db, reset_save
from .operations import delete_save, get_save_summary, load_game_state, save_game_state

__all__ = [
    "get_connection",
    "get_db_path",
    "init_db",
    "reset_save",
    "save_game_state",
    "load_game_state",
    "get_save_summary",
    "delete_save",
]
