"""
Tests for weekly training and the injury model.
"""
import random

import simulation.development as development
from conftest import injure
from models.constants import (
    AGE_BAND_GROWTH,
    AGE_BAND_VETERAN,
    INJURY_BASE_CHANCE_PER_MATCH,
    NPC_AGE_BAND_CURVES,
    TRAINING_OPTIONS_BY_ID,
    AgeBandCurve,
)
from models.enums import Attr, Division, Position, TraitId
from simulation.development import (
    age_band_curve,
    apply_training,
    develop_npc_attributes,
    injury_chance,
    roll_injury,
    tick_recovery,
)


def _prepare(world, stamina):
    player = world.user_player
    player.attributes.stamina = stamina
    player.attributes.age = 24
    player.attributes.morale = 60
    player.attributes.form = 60
    player.attributes.shooting = 50
    return player


def test_training_rejected_when_stamina_below_cost(world):
    cost = TRAINING_OPTIONS_BY_ID["shooting"].cost
    _prepare(world, cost - 1)
    before = world.user_player.attributes.to_dict()

    after = apply_training(world, "shooting", random.Random(1))
    assert after.user_player.attributes.to_dict() == before
    assert "Not enough stamina" in after.game_log[-1]
    assert world.user_player.attributes.to_dict() == before


def test_training_allowed_when_stamina_equals_cost(world):
    option = TRAINING_OPTIONS_BY_ID["shooting"]
    _prepare(world, option.cost)

    after = apply_training(world, "shooting", random.Random(1))
    player = after.user_player
    assert player.attributes.stamina == 0
    assert player.attributes.shooting == 50 + option.improvement
    assert world.user_player.attributes.stamina == option.cost


def test_injured_player_may_only_rest_or_see_physio(world):
    player = _prepare(world, 80)
    injure(player, weeks=3)

    refused = apply_training(world, "passing", random.Random(1))
    assert refused.user_player.attributes.passing == player.attributes.passing
    assert "while injured" in refused.game_log[-1]

    rested = apply_training(world, "stamina", random.Random(1))
    assert rested.user_player.attributes.stamina > 80


def test_physio_can_clear_an_injury(world):
    player = _prepare(world, 80)
    injure(player, weeks=1)
    rng = random.Random(2)
    state = world
    for _ in range(50):
        state = apply_training(state, "physio", rng)
        if not state.user_player.is_injured:
            break
    assert not state.user_player.is_injured
    assert any("fully recovered" in line for line in state.game_log)


def test_light_physio_session_when_fit(world):
    _prepare(world, 50)
    after = apply_training(world, "physio", random.Random(1))
    assert after.user_player.attributes.stamina == 55


def test_unknown_option_returns_same_snapshot(world):
    assert apply_training(world, "juggling") is world


def test_training_can_unlock_trait(world):
    player = _prepare(world, 100)
    player.attributes.speed = 84
    after = apply_training(world, "speed", random.Random(1))
    assert TraitId.SPEED_DEMON in after.user_player.unlocked_traits


# ---------------------------------------------------------------------------
# Injuries
# ---------------------------------------------------------------------------

def test_injury_chance_modifiers(world):
    player = world.user_player
    player.attributes.stamina = 80
    player.attributes.age = 25
    assert injury_chance(player) == INJURY_BASE_CHANCE_PER_MATCH

    player.attributes.stamina = 30
    player.attributes.age = 34
    tired_veteran = injury_chance(player)
    assert tired_veteran > INJURY_BASE_CHANCE_PER_MATCH

    player.unlocked_traits.append(TraitId.SEASONED_PRO)
    assert injury_chance(player) < tired_veteran


def test_roll_injury_never_stacks(world):
    player = world.user_player
    injure(player)
    assert roll_injury(player, 1, 5, random.Random(1)) is None
    assert player.current_injury.id == f"inj-{player.id}-test"


def test_roll_injury_applies_penalties(world):
    player = world.user_player
    player.attributes.stamina = 0
    player.attributes.form = 70
    rng = random.Random(3)
    line = None
    for week in range(200):
        line = roll_injury(player, 1, week, rng)
        if line:
            break
    assert line is not None
    injury = player.current_injury
    assert 1 <= injury.duration_weeks <= 24
    assert injury.weeks_remaining == injury.duration_weeks
    assert player.attributes.form < 70


def test_recovery_tick_heals_with_boost(world):
    player = world.user_player
    player.attributes.form = 40
    player.attributes.morale = 40
    injure(player, weeks=2)

    assert "still recovering" in tick_recovery(player)[0]
    assert player.current_injury.recovery_progress == 50
    assert "has recovered" in tick_recovery(player)[0]
    assert player.current_injury is None
    assert player.attributes.form == 60 and player.attributes.morale == 50
    assert tick_recovery(player) == []


# ---------------------------------------------------------------------------
# NPC development
# ---------------------------------------------------------------------------

def _npc(world):
    return next(p for p in world.all_players() if not p.is_user_player and p.preferred_position != Position.GOALKEEPER)


def test_young_npc_grows(world):
    npc = _npc(world)
    npc.attributes.age = 18
    npc.attributes.passing = 50
    develop_npc_attributes(npc, Division.FIFTH, random.Random(1))
    assert 51 <= npc.attributes.passing <= 53


def test_veteran_npc_declines_but_keeps_floor(world):
    npc = _npc(world)
    npc.attributes.age = 36
    npc.attributes.speed = 21
    npc.attributes.passing = 60
    develop_npc_attributes(npc, Division.FIFTH, random.Random(1))
    assert npc.attributes.speed == 20
    assert 58 <= npc.attributes.passing <= 59
    assert 1 <= npc.attributes.skill_moves <= 5


def test_user_and_injured_npcs_do_not_develop(world):
    user = world.user_player
    before = user.attributes.to_dict()
    develop_npc_attributes(user, Division.FIFTH, random.Random(1))
    assert user.attributes.to_dict() == before

    npc = _npc(world)
    injure(npc)
    before = npc.attributes.to_dict()
    develop_npc_attributes(npc, Division.FIFTH, random.Random(1))
    assert npc.attributes.to_dict() == before


def test_developed_npc_stays_in_bounds(world):
    rng = random.Random(4)
    npc = _npc(world)
    for age in range(17, 40):
        npc.attributes.age = age
        develop_npc_attributes(npc, Division.FIRST, rng)
        for attr in (Attr.PASSING, Attr.SPEED, Attr.STAMINA):
            assert 20 <= npc.attributes.get(attr) <= 100


def test_every_age_maps_to_one_band():
    assert age_band_curve(17) is NPC_AGE_BAND_CURVES[0]
    assert age_band_curve(AGE_BAND_GROWTH) is NPC_AGE_BAND_CURVES[1]
    assert age_band_curve(AGE_BAND_VETERAN - 1) is NPC_AGE_BAND_CURVES[3]
    assert age_band_curve(45) is NPC_AGE_BAND_CURVES[-1]
    assert NPC_AGE_BAND_CURVES[-1].max_age is None


def test_curve_table_drives_development(world, monkeypatch):
    fixed = (AgeBandCurve(None, skill=(4, 4), physical=(-5, -5), star_down_chance=1.0),)
    monkeypatch.setattr(development, "NPC_AGE_BAND_CURVES", fixed)
    npc = _npc(world)
    npc.attributes.age = 30
    npc.attributes.passing = 50
    npc.attributes.speed = 60
    npc.attributes.skill_moves = 3

    develop_npc_attributes(npc, Division.FIFTH, random.Random(1))

    assert npc.attributes.passing == 54
    assert npc.attributes.speed == 55
    assert npc.attributes.skill_moves == 2
