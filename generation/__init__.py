"""
Procedural generation of the world for Football Career Mode: 5 divisions of
20 clubs, their NPC squads, the user's player and the national teams.
"""
from .generate import create_initial_world

__all__ = ["create_initial_world"]
