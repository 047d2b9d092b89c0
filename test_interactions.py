"""
Tests for media interviews and manager talks.
"""
import asyncio

from conftest import BrokenNarrator, FixedNarrator, injure
from models.constants import MEDIA_QUESTION_FALLBACK
from models.enums import InteractionStatus, InteractionType
from models.game_result import PlayerMatchPerformance
from models.interaction import Interaction
from simulation.interactions import (
    MANAGER_PROMPT_GOOD_FORM,
    MANAGER_PROMPT_POOR_FORM,
    expire_interactions,
    generate_interactions,
    manager_options,
    manager_prompt,
    media_options,
    resolve_interaction,
)
from simulation.week import respond_to_interaction


class FixedRoll:
    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


def _media(state, interaction_id="media-test", week=3, expires=5):
    interaction = Interaction(
        interaction_id=interaction_id,
        type=InteractionType.MEDIA_INTERVIEW_POST_MATCH,
        prompt_text="How did it feel out there?",
        options=media_options(),
        trigger_season=state.season,
        trigger_week=week,
        expires_on_week=expires,
    )
    state.pending_interactions.append(interaction)
    return interaction


def _with_last_match(state):
    state.user_player.last_match_performance = PlayerMatchPerformance(
        rating=7.6, goals=1, match_id="S1-W2-a-b", team_name="A", opponent_name="B",
    )


# ---------------------------------------------------------------------------
# Expiry
# ---------------------------------------------------------------------------

def test_interaction_expires_on_its_week_without_effects(world):
    interaction = _media(world, expires=5)
    before = world.user_player.attributes.to_dict()
    relationship = world.user_player.manager_relationship

    world.league.current_week = 4
    assert expire_interactions(world) == []
    assert interaction.is_pending

    world.league.current_week = 5
    logs = expire_interactions(world)
    assert interaction.status == InteractionStatus.COMPLETED
    assert logs == ["Interaction opportunity 'media interview post match' has expired."]
    assert world.user_player.attributes.to_dict() == before
    assert world.user_player.manager_relationship == relationship


def test_interaction_from_last_season_expires(world):
    interaction = _media(world, week=37, expires=39)
    world.league.current_season = 2
    world.league.current_week = 1
    expire_interactions(world)
    assert interaction.status == InteractionStatus.COMPLETED


def test_completed_interactions_are_pruned(world):
    interaction = _media(world, week=1, expires=3)
    interaction.status = InteractionStatus.COMPLETED
    world.league.current_week = 10
    expire_interactions(world)
    assert world.pending_interactions == []


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def test_first_response_applies_effects(world):
    _media(world)
    player = world.user_player
    player.attributes.fan_support = 30
    player.attributes.press_relations = 50
    player.attributes.morale = 60

    after = respond_to_interaction(world, "media-test", "media_positive")
    attrs = after.user_player.attributes
    assert (attrs.fan_support, attrs.press_relations, attrs.morale) == (35, 53, 62)
    assert after.find_interaction("media-test").status == InteractionStatus.COMPLETED
    assert "(Private) The fans appreciate your positive attitude." in after.game_log
    assert world.find_interaction("media-test").is_pending


def test_second_response_only_logs(world):
    _media(world)
    once = resolve_interaction(world, "media-test", "media_humble")
    twice = resolve_interaction(once, "media-test", "media_positive")
    assert twice.user_player.attributes.to_dict() == once.user_player.attributes.to_dict()
    assert twice.game_log[-1] == "The 'media interview post match' opportunity is no longer available."


def test_unknown_ids_only_log(world):
    _media(world)
    before = world.user_player.attributes.to_dict()

    missing = resolve_interaction(world, "missing", "media_positive")
    assert missing.game_log[-1] == "Interaction missing could not be found."
    assert missing.user_player.attributes.to_dict() == before

    bad_option = resolve_interaction(world, "media-test", "bad-option")
    assert bad_option.game_log[-1] == "'bad-option' is not a valid response to 'media interview post match'."
    assert bad_option.find_interaction("media-test").is_pending
    assert len(bad_option.game_log) == len(world.game_log) + 1


def test_manager_relationship_effect(world):
    player = world.user_player
    player.manager_relationship = 50
    world.pending_interactions.append(Interaction(
        interaction_id="manager-test",
        type=InteractionType.MANAGER_TALK_FORM,
        prompt_text=manager_prompt(player),
        options=manager_options(player),
        trigger_season=1,
        trigger_week=1,
        expires_on_week=3,
    ))
    after = resolve_interaction(world, "manager-test", "manager_ask_feedback")
    assert after.user_player.manager_relationship == 57


def test_raising_concern_depends_on_trust(world):
    player = world.user_player
    player.manager_relationship = 70
    trusted = manager_options(player)[2].effects[0].change
    player.manager_relationship = 40
    wary = manager_options(player)[2].effects[0].change
    assert (trusted, wary) == (2, -3)


def test_manager_prompt_follows_form(world):
    player = world.user_player
    player.attributes.form = 30
    assert manager_prompt(player) == MANAGER_PROMPT_POOR_FORM
    player.attributes.form = 90
    assert manager_prompt(player) == MANAGER_PROMPT_GOOD_FORM


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def test_generates_media_question_from_narrator(world):
    _with_last_match(world)
    narrator = FixedNarrator("What was going through your mind on the goal?")
    created = asyncio.run(generate_interactions(world, narrator, FixedRoll(0.0)))

    types = [i.type for i in created]
    assert types == [InteractionType.MEDIA_INTERVIEW_POST_MATCH, InteractionType.MANAGER_TALK_FORM]
    media = created[0]
    assert media.prompt_text == "What was going through your mind on the goal?"
    assert media.related_match_id == "S1-W2-a-b"
    assert media.expires_on_week == world.week + 2
    assert len(narrator.prompts) == 1
    assert world.pending_interactions == []


def test_broken_narrator_falls_back_to_fixed_question(world):
    _with_last_match(world)
    created = asyncio.run(generate_interactions(world, BrokenNarrator(), FixedRoll(0.0)))
    assert created[0].prompt_text == MEDIA_QUESTION_FALLBACK


def test_no_media_without_a_last_match(world):
    world.user_player.last_match_performance = None
    created = asyncio.run(generate_interactions(world, None, FixedRoll(0.0)))
    assert [i.type for i in created] == [InteractionType.MANAGER_TALK_FORM]


def test_nothing_while_injured_or_already_pending(world):
    _with_last_match(world)
    injure(world.user_player)
    assert asyncio.run(generate_interactions(world, None, FixedRoll(0.0))) == []

    world.user_player.current_injury = None
    _media(world)
    created = asyncio.run(generate_interactions(world, None, FixedRoll(0.0)))
    assert [i.type for i in created] == [InteractionType.MANAGER_TALK_FORM]


def test_rolls_can_produce_nothing(world):
    _with_last_match(world)
    assert asyncio.run(generate_interactions(world, None, FixedRoll(0.99))) == []
