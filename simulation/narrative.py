"""
Narrative text for Football Career Mode: match write-ups and media questions.

Text comes from an external generative-text service.  A narrator is any
object with a blocking ``generate_text(prompt) -> str`` method;
``HttpNarrativeProvider`` is the HTTP one, configured from the environment:

    NARRATIVE_ENDPOINT   e.g. http://127.0.0.1:11434/api/generate (unset = disabled)
    NARRATIVE_MODEL      model name sent with each request
    NARRATIVE_TIMEOUT    read timeout in seconds

The engine never depends on the service: ``narrate`` runs the call off the
event loop and turns any failure into a fixed placeholder string, logged at
WARNING level and never raised.
"""
from __future__ import annotations

import asyncio
import logging
import os
from typing import Protocol

import requests

from models.constants import MEDIA_QUESTION_FALLBACK, NARRATIVE_FAILED, NARRATIVE_UNAVAILABLE
from models.game_result import PlayerMatchPerformance

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama3.1"
DEFAULT_TIMEOUT = 20


class NarrativeUnavailable(Exception):
    """The narrative service could not produce text."""


class Narrator(Protocol):
    def generate_text(self, prompt: str) -> str:
        ...


class HttpNarrativeProvider:
    """Ollama-style ``/api/generate`` endpoint: POST {model, prompt, stream}, read ``response``."""

    def __init__(self, endpoint: str, model: str = DEFAULT_MODEL, timeout: float = DEFAULT_TIMEOUT):
        self.endpoint = endpoint.rstrip("/")
        self.model = model
        self.timeout = timeout

    @classmethod
    def from_env(cls) -> "HttpNarrativeProvider | None":
        """Provider built from NARRATIVE_* variables, or None when no endpoint is set."""
        endpoint = os.environ.get("NARRATIVE_ENDPOINT", "").strip()
        if not endpoint:
            return None
        try:
            timeout = float(os.environ.get("NARRATIVE_TIMEOUT", DEFAULT_TIMEOUT))
        except ValueError:
            logger.warning("NARRATIVE_TIMEOUT is not a number; using %s", DEFAULT_TIMEOUT)
            timeout = DEFAULT_TIMEOUT
        return cls(endpoint, os.environ.get("NARRATIVE_MODEL", DEFAULT_MODEL), timeout)

    def generate_text(self, prompt: str) -> str:
        payload = {"model": self.model, "prompt": prompt, "stream": False}
        try:
            r = requests.post(
                self.endpoint,
                json=payload,
                timeout=(3, max(4, int(self.timeout))),
                headers={"Connection": "close"},
            )
            r.raise_for_status()
            text = (r.json().get("response") or "").strip()
        except (requests.RequestException, ValueError) as e:
            raise NarrativeUnavailable(str(e)) from e
        if not text:
            raise NarrativeUnavailable("empty response")
        return text


async def narrate(
    narrator: Narrator | None,
    prompt: str,
    fallback: str,
    unavailable: str | None = None,
) -> str:
    """Ask narrator for text without blocking the event loop.

    Returns ``unavailable`` (default: ``fallback``) when there is no narrator
    and ``fallback`` when the narrator fails.
    """
    if narrator is None:
        return unavailable if unavailable is not None else fallback
    try:
        text = await asyncio.to_thread(narrator.generate_text, prompt)
    except Exception as e:
        logger.warning("Narrative generation degraded: %s", e)
        return fallback
    text = (text or "").strip()
    return text or fallback


# ===================================================================
# Prompts
# ===================================================================

def match_prompt(player_name: str, perf: PlayerMatchPerformance) -> str:
    match_type = "international friendly" if perf.is_international else "league match"
    team, opponent = perf.team_name, perf.opponent_name
    return (
        f"Generate a short, engaging pundit-style narrative (1-2 sentences) for a football player named "
        f"{player_name} playing for {team} against {opponent} in an {match_type}.\n"
        f"The match result was {team} {perf.team_score} - {perf.opponent_score} {opponent}.\n"
        f"{player_name}'s key stats: Rating: {perf.rating:.1f}, Goals: {perf.goals}, Assists: {perf.assists}, "
        f"Shots: {perf.shots} ({perf.shots_on_target} on target), "
        f"Tackles Won: {perf.tackles_won}/{perf.tackles_attempted}, Key Passes: {perf.key_passes}, "
        f"Interceptions: {perf.interceptions}.\n"
        f"Focus on their individual contribution and the overall match context. "
        f"Be creative and avoid just listing stats."
    )


def media_question_prompt(player_name: str, team_name: str | None, perf: PlayerMatchPerformance) -> str:
    if perf.rating > 7:
        result_text = "a great result"
    elif perf.rating < 5:
        result_text = "a disappointing outcome"
    else:
        result_text = "a mixed result"
    return (
        f"You are a sports journalist. Generate one concise, open-ended question for football player "
        f"{player_name} of {team_name or 'their club'} after a match which was {result_text} for them. "
        f"Your performance included {perf.goals} goals, {perf.assists} assists, and a rating of {perf.rating:.1f}. "
        f"Ask about their feelings, the team's performance, or future outlook. Avoid yes/no questions."
    )


async def match_narrative(narrator: Narrator | None, player_name: str, perf: PlayerMatchPerformance) -> str:
    return await narrate(narrator, match_prompt(player_name, perf), NARRATIVE_FAILED, NARRATIVE_UNAVAILABLE)


async def media_question(
    narrator: Narrator | None,
    player_name: str,
    team_name: str | None,
    perf: PlayerMatchPerformance,
) -> str:
    return await narrate(narrator, media_question_prompt(player_name, team_name, perf), MEDIA_QUESTION_FALLBACK)
