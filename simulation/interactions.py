"""
Media interviews and manager talks for Football Career Mode.

Each week the user's player may be asked a post-match question by the press
(needs a last-match performance) or called in by the manager.  An interaction
offers a fixed menu of options; the first answer applies its effects and
completes it, later answers are no-ops.  Unanswered interactions expire.
"""
from __future__ import annotations

import logging
import random

from models.constants import (
    INTERACTION_EXPIRY_DURATION_WEEKS,
    INTERACTION_HISTORY_WEEKS,
    MANAGER_TALK_CHANCE,
    MEDIA_INTERVIEW_CHANCE,
    WEEKS_PER_SEASON,
)
from models.enums import Attr, EffectTarget, InteractionStatus, InteractionType
from models.game_state import GameState
from models.interaction import Interaction, InteractionEffect, InteractionOption
from models.player import Player
from models.ratings import calculate_team_chemistry
from simulation.narrative import Narrator, media_question

logger = logging.getLogger(__name__)

MANAGER_PROMPT_DEFAULT = (
    "The manager calls you into their office. "
    "'How are you feeling about your current form and role in the team?'"
)
MANAGER_PROMPT_POOR_FORM = (
    "The manager looks concerned. 'Your recent performances haven't been up to scratch. What's going on?'"
)
MANAGER_PROMPT_GOOD_FORM = (
    "The manager beams. 'Excellent work recently! You're a key part of our success. Anything on your mind?'"
)


def _attr_effect(stat: Attr, change: int, private: str | None = None) -> InteractionEffect:
    return InteractionEffect(target=EffectTarget.PLAYER_ATTRIBUTE, stat=stat, change=change, log_private=private)


def _manager_effect(change: int, private: str | None = None) -> InteractionEffect:
    return InteractionEffect(target=EffectTarget.MANAGER_RELATIONSHIP, change=change, log_private=private)


def media_options() -> list[InteractionOption]:
    return [
        InteractionOption("media_positive", "Praise the team and look forward positively.", [
            _attr_effect(Attr.FAN_SUPPORT, 5, "The fans appreciate your positive attitude."),
            _attr_effect(Attr.PRESS_RELATIONS, 3, "The media noted your positive comments."),
            _attr_effect(Attr.MORALE, 2),
        ]),
        InteractionOption("media_humble", "Acknowledge your role but focus on team effort.", [
            _attr_effect(Attr.FAN_SUPPORT, 3),
            _attr_effect(Attr.PRESS_RELATIONS, 5, "Your humility was well-received by the press."),
            _manager_effect(2, "Your manager appreciates your team-first mentality."),
        ]),
        InteractionOption("media_critical_self", "Critique your own performance, vow to improve.", [
            _attr_effect(Attr.PRESS_RELATIONS, 2),
            _attr_effect(Attr.MORALE, -2, "You feel the pressure to improve."),
            _manager_effect(3, "Your manager respects your self-awareness."),
        ]),
        InteractionOption("media_no_comment", "Offer a polite 'no comment' or a generic statement.", [
            _attr_effect(Attr.PRESS_RELATIONS, -5, "The media were disappointed by your lack of engagement."),
        ]),
    ]


def manager_options(player: Player) -> list[InteractionOption]:
    """The concern option lands well only when the relationship is already above 60."""
    trusted = player.manager_relationship > 60
    return [
        InteractionOption("manager_positive", "Express confidence and commitment.", [
            _manager_effect(5, "Your manager seems pleased with your attitude."),
            _attr_effect(Attr.MORALE, 3),
        ]),
        InteractionOption("manager_ask_feedback", "Ask for specific feedback on how to improve.", [
            _manager_effect(7, "Your manager appreciates your desire to improve."),
        ]),
        InteractionOption(
            "manager_raise_concern",
            "Politely raise a minor concern (e.g., playing time if low, preferred role).",
            [
                _manager_effect(
                    2 if trusted else -3,
                    "Your manager listened to your concern." if trusted
                    else "Your manager seemed a bit defensive about your concern.",
                ),
                _attr_effect(Attr.MORALE, -1),
            ],
        ),
    ]


def manager_prompt(player: Player) -> str:
    if player.attributes.form < 40:
        return MANAGER_PROMPT_POOR_FORM
    if player.attributes.form > 80:
        return MANAGER_PROMPT_GOOD_FORM
    return MANAGER_PROMPT_DEFAULT


def _has_pending(state: GameState, interaction_type: InteractionType) -> bool:
    return any(i.is_pending and i.type == interaction_type for i in state.pending_interactions)


async def generate_interactions(
    state: GameState,
    narrator: Narrator | None,
    rng: random.Random,
) -> list[Interaction]:
    """New interactions for this week; state is not modified.

    Parameters
    ----------
    state : GameState
        Snapshot for the current week.
    narrator : Narrator | None
        Writes the media question; failures fall back to a fixed question.
    rng : random.Random
        Rolls for the 40% media / 20% manager chances.

    Returns
    -------
    list[Interaction]
        At most one of each type, none while the player is injured or while one
        of the same type is still pending.
    """
    player = state.user_player
    if player is None or player.is_injured:
        return []
    season, week = state.season, state.week
    team = state.find_team(player.team_id)
    created: list[Interaction] = []

    perf = player.last_match_performance
    if perf is not None and rng.random() < MEDIA_INTERVIEW_CHANCE:
        if not _has_pending(state, InteractionType.MEDIA_INTERVIEW_POST_MATCH):
            question = await media_question(narrator, player.name, team.name if team else None, perf)
            created.append(Interaction(
                interaction_id=f"media-S{season}-W{week}",
                type=InteractionType.MEDIA_INTERVIEW_POST_MATCH,
                prompt_text=question,
                options=media_options(),
                trigger_season=season,
                trigger_week=week,
                expires_on_week=week + INTERACTION_EXPIRY_DURATION_WEEKS,
                related_match_id=perf.match_id or None,
            ))

    if rng.random() < MANAGER_TALK_CHANCE and not _has_pending(state, InteractionType.MANAGER_TALK_FORM):
        created.append(Interaction(
            interaction_id=f"manager-S{season}-W{week}",
            type=InteractionType.MANAGER_TALK_FORM,
            prompt_text=manager_prompt(player),
            options=manager_options(player),
            trigger_season=season,
            trigger_week=week,
            expires_on_week=week + INTERACTION_EXPIRY_DURATION_WEEKS,
        ))
    return created


def _label(interaction: Interaction) -> str:
    return interaction.type.value.replace("_", " ").lower()


def expire_interactions(state: GameState) -> list[str]:
    """Complete stale pending interactions without applying any effect, in place.

    An interaction is stale once the week reaches its expiry in the season it
    was triggered, or once that season is over.  Completed interactions older
    than INTERACTION_HISTORY_WEEKS are dropped.
    """
    logs: list[str] = []
    season, week = state.season, state.week
    for interaction in state.pending_interactions:
        if not interaction.is_pending:
            continue
        if season > interaction.trigger_season or (
            season == interaction.trigger_season and week >= interaction.expires_on_week
        ):
            interaction.status = InteractionStatus.COMPLETED
            logs.append(f"Interaction opportunity '{_label(interaction)}' has expired.")

    def age(i: Interaction) -> int:
        return (season - i.trigger_season) * WEEKS_PER_SEASON + (week - i.trigger_week)

    state.pending_interactions = [
        i for i in state.pending_interactions if i.is_pending or age(i) <= INTERACTION_HISTORY_WEEKS
    ]
    return logs


def _rejected(state: GameState, message: str) -> GameState:
    new_state = state.copy()
    new_state.log(message)
    return new_state


def resolve_interaction(state: GameState, interaction_id: str, option_id: str) -> GameState:
    """Apply the chosen option's effects and complete the interaction.

    Unknown interaction or option ids, and interactions that are already
    completed, only add a log line.
    """
    interaction = state.find_interaction(interaction_id)
    if interaction is None:
        logger.debug("Ignoring response to unknown interaction %r", interaction_id)
        return _rejected(state, f"Interaction {interaction_id} could not be found.")
    if not interaction.is_pending:
        return _rejected(state, f"The '{_label(interaction)}' opportunity is no longer available.")
    if state.user_player is None:
        return state
    option = interaction.find_option(option_id)
    if option is None:
        logger.debug("Ignoring unknown option %r for %r", option_id, interaction_id)
        return _rejected(state, f"'{option_id}' is not a valid response to '{_label(interaction)}'.")

    new_state = state.copy()
    player = new_state.user_player
    logs: list[str] = []
    for effect in option.effects:
        if effect.target == EffectTarget.PLAYER_ATTRIBUTE and effect.stat is not None:
            player.attributes.adjust(effect.stat, effect.change)
        elif effect.target == EffectTarget.MANAGER_RELATIONSHIP:
            player.adjust_manager_relationship(effect.change)
        if effect.log_public:
            logs.append(effect.log_public)
        if effect.log_private:
            logs.append(f"(Private) {effect.log_private}")

    new_state.find_interaction(interaction_id).status = InteractionStatus.COMPLETED
    team = new_state.find_team(player.team_id)
    if team is not None:
        team.team_chemistry = calculate_team_chemistry(team)
    new_state.log(*logs)
    return new_state
