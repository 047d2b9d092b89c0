"""
Football Career Mode: Flask JSON app.
JSON API over the week engine: create a career, advance weeks, train, handle
transfers, interactions and tactics.  The world lives in the single SQLite save.
"""
import asyncio
import logging
import os
import random
import threading
from typing import Any

from flask import Flask, jsonify, request

from db import load_game_state, reset_save, save_game_state
from models import CustomPlayerData, GameState, SnapshotError
from models.enums import DIVISIONS_ORDERED, Division
from simulation import (
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
from simulation.narrative import HttpNarrativeProvider
from simulation.offseason import division_table

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-change-in-production")

# Serialize every read-modify-write of the save so spam-clicking cannot run two weeks at once
_sim_week_lock = threading.Lock()

# None when NARRATIVE_ENDPOINT is unset; the engine then uses placeholder text
narrator = HttpNarrativeProvider.from_env()


def _team_summary(team) -> dict[str, Any]:
    return {
        "id": team.id,
        "name": team.name,
        "division": team.division.value,
        "matches_played": team.matches_played,
        "points": team.points,
        "wins": team.wins,
        "draws": team.draws,
        "losses": team.losses,
        "goals_for": team.goals_for,
        "goals_against": team.goals_against,
        "goal_difference": team.goal_difference,
        "budget": team.budget,
        "reputation": team.reputation,
        "team_chemistry": team.team_chemistry,
        "squad_size": len(team.players),
    }


def _game_view(state: GameState) -> dict[str, Any]:
    """What the client needs each turn; the full snapshot is too large to ship."""
    player = state.user_player
    team = state.find_team(player.team_id) if player else None
    return {
        "season": state.season,
        "week": state.week,
        "transfer_window_status": state.transfer_window_status.value,
        "player": player.to_dict() if player else None,
        "team": _team_summary(team) if team else None,
        "pending_transfer_offers": [o.to_dict() for o in state.pending_transfer_offers],
        "pending_interactions": [i.to_dict() for i in state.pending_interactions],
        "upcoming_international_match": (
            state.upcoming_international_match.to_dict() if state.upcoming_international_match else None
        ),
        "game_log": list(state.game_log),
    }


def _load_state() -> GameState | None:
    """Current save; a corrupt save is discarded and replaced by a fresh world."""
    try:
        return load_game_state()
    except SnapshotError as e:
        logger.warning("Discarding corrupt save: %s", e)
        reset_save()
        state = initialize_world()
        save_game_state(state)
        return state


def _no_game():
    return jsonify({"error": "No game. POST /api/game to start a career."}), 404


def _fill_narrative(state: GameState) -> None:
    """Background: fetch the club match write-up and patch it into the latest save."""
    try:
        found = asyncio.run(request_match_narrative(state, narrator))
        if found is None:
            return
        match_id, text = found
        with _sim_week_lock:
            latest = load_game_state()
            if latest is None:
                return
            patched = apply_narrative(latest, match_id, text)
            if patched is not latest:
                save_game_state(patched)
    except Exception:
        logger.exception("Narrative update failed")


def _run_command(command, *args) -> tuple[Any, int]:
    """Load, apply a snapshot -> snapshot command, save, return the new view."""
    with _sim_week_lock:
        state = _load_state()
        if state is None:
            return _no_game()
        new_state = command(state, *args)
        if new_state is not state:
            save_game_state(new_state)
    return jsonify(_game_view(new_state)), 200


@app.route("/api/game", methods=["POST"])
def create_game():
    """Start a new career. Body: optional custom player fields and an integer seed."""
    data = request.get_json(silent=True) or {}
    try:
        custom = CustomPlayerData.from_dict(data.get("player") or {}) if data.get("player") else None
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    seed = data.get("seed")
    rng = random.Random(seed) if seed is not None else None

    state = initialize_world(custom, rng)
    with _sim_week_lock:
        reset_save()
        save_game_state(state)
    logger.info("New career started for %s", state.user_player.name)
    return jsonify(_game_view(state)), 201


@app.route("/api/game", methods=["GET"])
def get_game():
    state = _load_state()
    if state is None:
        return _no_game()
    return jsonify(_game_view(state))


@app.route("/api/league/<division>")
def league_table(division: str):
    try:
        div = Division(division)
    except ValueError:
        try:
            div = DIVISIONS_ORDERED[int(division)]
        except (ValueError, IndexError):
            return jsonify({"error": "Unknown division"}), 404
    state = _load_state()
    if state is None:
        return _no_game()
    return jsonify({
        "division": div.value,
        "season": state.season,
        "table": [_team_summary(t) for t in division_table(state, div)],
    })


@app.route("/api/week/advance", methods=["POST"])
def sim_week():
    """Advance one week; the club match write-up is filled in on a background thread."""
    with _sim_week_lock:
        state = _load_state()
        if state is None:
            return _no_game()
        new_state = asyncio.run(advance_week(state, narrator))
        save_game_state(new_state)

    thread = threading.Thread(target=_fill_narrative, args=(new_state,), daemon=True)
    thread.start()
    return jsonify(_game_view(new_state))


@app.route("/api/training", methods=["POST"])
def train():
    data = request.get_json(silent=True) or {}
    option_id = data.get("option_id")
    if not option_id:
        return jsonify({"error": "Missing option_id"}), 400
    return _run_command(apply_training, option_id)


@app.route("/api/transfer/request", methods=["POST"])
def transfer_request():
    return _run_command(request_transfer)


@app.route("/api/offers/<offer_id>", methods=["POST"])
def offer_response(offer_id: str):
    data = request.get_json(silent=True) or {}
    if "accept" not in data:
        return jsonify({"error": "Missing accept"}), 400
    return _run_command(respond_to_offer, offer_id, bool(data["accept"]))


@app.route("/api/interactions/<interaction_id>", methods=["POST"])
def interaction_response(interaction_id: str):
    data = request.get_json(silent=True) or {}
    option_id = data.get("option_id")
    if not option_id:
        return jsonify({"error": "Missing option_id"}), 400
    return _run_command(respond_to_interaction, interaction_id, option_id)


@app.route("/api/tactics", methods=["POST"])
def tactics():
    """Body: {"instruction": <id or null>}."""
    data = request.get_json(silent=True) or {}
    return _run_command(set_tactical_instruction, data.get("instruction"))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(debug=True, port=5000)
