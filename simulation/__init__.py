"""
Simulation engine for Football Career Mode.
Resolves fixtures, evolves players, runs the transfer market, interactions,
national-team duty and the season rollover, and exposes the user commands.
"""
from .engine import simulate_match
from .schedule import generate_week_fixtures
from .offseason import run_season_rollover
from .week import (
    advance_week,
    apply_narrative,
    apply_training,
    initialize_world,
    request_match_narrative,
    request_transfer,
    respond_to_interaction,
    respond_to_offer,
    set_tactical_instruction,
)

__all__ = [
    "simulate_match",
    "generate_week_fixtures",
    "run_season_rollover",
    "initialize_world",
    "advance_week",
    "apply_training",
    "request_transfer",
    "respond_to_offer",
    "respond_to_interaction",
    "set_tactical_instruction",
    "request_match_narrative",
    "apply_narrative",
]
