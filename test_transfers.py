"""
Tests for the transfer market: offers, acceptance, rejection, requests and the weekly sweeps.
"""
import random

from conftest import assert_kit_numbers_consistent, injure, user_team
from models.constants import MAX_PLAYERS_PER_TEAM, OFFER_EXPIRY_DURATION_WEEKS
from models.enums import Division, OfferStatus, TransferRequestStatus, TransferWindowStatus
from models.transfer import TransferOffer
from simulation.transfers import (
    expire_offers,
    generate_offers,
    offer_fee,
    prune_offer_history,
    request_transfer,
    resolve_transfer_request,
    respond_to_offer,
)


class FixedRoll:
    """Stands in for random.Random where only random() is consulted."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


def _suitor(state):
    return next(t for t in state.teams if t.division == Division.FOURTH)


def _offer(state, suitor, fee=10_000, bonus=500, offer_id="offer-test", week=None):
    week = state.week if week is None else week
    offer = TransferOffer(
        offer_id=offer_id,
        from_team_id=suitor.id,
        from_team_name=suitor.name,
        from_team_division=suitor.division,
        to_player_id=state.user_player_id,
        transfer_fee=fee,
        offered_wage=900,
        contract_length_years=2,
        signing_bonus=bonus,
        offer_date_season=state.season,
        offer_date_week=week,
        expires_on_season=state.season,
        expires_on_week=week + OFFER_EXPIRY_DURATION_WEEKS,
    )
    state.pending_transfer_offers.append(offer)
    return offer


# ---------------------------------------------------------------------------
# Accepting
# ---------------------------------------------------------------------------

def test_unaffordable_offer_is_withdrawn_and_nothing_moves(world):
    suitor = _suitor(world)
    suitor.budget = 9_000
    _offer(world, suitor, fee=10_000, bonus=500)
    home = user_team(world)
    home_budget, home_size = home.budget, len(home.players)

    after = respond_to_offer(world, "offer-test", True, random.Random(1))

    assert after.find_offer("offer-test").status == OfferStatus.WITHDRAWN_BY_CLUB
    assert after.user_player.team_id == home.id
    assert after.find_team(suitor.id).budget == 9_000
    assert after.find_team(home.id).budget == home_budget
    assert len(after.find_team(home.id).players) == home_size
    assert after.find_team(suitor.id).find_player(after.user_player_id) is None
    assert "cannot afford" in after.game_log[-1]
    # the input snapshot is untouched
    assert world.find_offer("offer-test").is_pending


def test_full_squad_withdraws_offer(world):
    suitor = _suitor(world)
    filler = next(p for p in suitor.players if not p.is_user_player)
    while len(suitor.players) < MAX_PLAYERS_PER_TEAM:
        suitor.players.append(filler)
    _offer(world, suitor, fee=1_000, bonus=0)

    after = respond_to_offer(world, "offer-test", True, random.Random(1))
    assert after.find_offer("offer-test").status == OfferStatus.WITHDRAWN_BY_CLUB
    assert after.user_player.team_id == user_team(world).id


def test_holding_club_can_re_sign_its_free_agent_with_a_full_squad(world):
    home = user_team(world)
    player = world.user_player
    home.used_kit_numbers.remove(player.current_kit_number)
    player.current_kit_number = None
    player.team_id = None
    filler = next(p for p in home.players if not p.is_user_player)
    while len(home.players) < MAX_PLAYERS_PER_TEAM:
        home.players.append(filler)
    home.budget = 1_000_000
    _offer(world, home, fee=0, bonus=0)

    after = respond_to_offer(world, "offer-test", True, random.Random(1))

    assert after.find_offer("offer-test").status == OfferStatus.ACCEPTED_BY_PLAYER
    assert after.user_player.team_id == home.id
    rejoined = after.find_team(home.id)
    assert len(rejoined.players) == MAX_PLAYERS_PER_TEAM
    assert sum(p.id == player.id for p in rejoined.players) == 1
    assert after.user_player.current_kit_number in rejoined.used_kit_numbers


def test_accepted_offer_moves_everything_at_once(world):
    suitor = _suitor(world)
    suitor.budget = 1_000_000
    offer = _offer(world, suitor, fee=10_000, bonus=500)
    _offer(world, next(t for t in world.teams if t.division == Division.THIRD), offer_id="offer-other")
    home = user_team(world)
    home_budget = home.budget
    old_kit = world.user_player.current_kit_number

    after = respond_to_offer(world, "offer-test", True, random.Random(1))
    player = after.user_player
    new_team = after.find_team(suitor.id)
    old_team = after.find_team(home.id)

    assert player.team_id == suitor.id
    assert new_team.find_player(player.id) is player
    assert old_team.find_player(player.id) is None
    assert old_kit not in old_team.used_kit_numbers
    assert player.current_kit_number in new_team.used_kit_numbers
    assert new_team.budget == 1_000_000 - offer.total_cost
    assert old_team.budget == home_budget + offer.transfer_fee
    assert player.weekly_wage == offer.offered_wage
    assert player.contract_expiry_season == after.season + offer.contract_length_years
    assert player.club_history[-1].team_name == suitor.name
    assert player.club_history[-2].left_week == after.week
    assert after.find_offer("offer-test").status == OfferStatus.ACCEPTED_BY_PLAYER
    assert after.find_offer("offer-other").status == OfferStatus.WITHDRAWN_BY_CLUB
    assert_kit_numbers_consistent(after)


def test_injured_player_cannot_accept(world):
    injure(world.user_player)
    _offer(world, _suitor(world))
    after = respond_to_offer(world, "offer-test", True)
    assert after.find_offer("offer-test").is_pending
    assert after.user_player.team_id == world.user_player.team_id
    assert "currently injured" in after.game_log[-1]


def test_rejecting_costs_morale_and_relationship(world):
    player = world.user_player
    player.attributes.morale = 60
    player.manager_relationship = 50
    _offer(world, _suitor(world))

    after = respond_to_offer(world, "offer-test", False)
    assert after.find_offer("offer-test").status == OfferStatus.REJECTED_BY_PLAYER
    assert after.user_player.attributes.morale == 55
    assert after.user_player.manager_relationship == 45


def test_unknown_and_closed_offers_only_log(world):
    after = respond_to_offer(world, "nope", True)
    assert "could not be found" in after.game_log[-1]

    _offer(world, _suitor(world)).close(OfferStatus.EXPIRED)
    after = respond_to_offer(world, "offer-test", True)
    assert after.find_offer("offer-test").status == OfferStatus.EXPIRED
    assert "no longer available" in after.game_log[-1]


# ---------------------------------------------------------------------------
# Transfer requests
# ---------------------------------------------------------------------------

def test_request_transfer_sets_status(world):
    after = request_transfer(world)
    assert after.user_player.transfer_request_status == TransferRequestStatus.REQUESTED_BY_PLAYER
    assert world.user_player.transfer_request_status == TransferRequestStatus.NONE

    again = request_transfer(after)
    assert "already submitted" in again.game_log[-1]


def test_request_transfer_guards(world):
    world.transfer_window_status = TransferWindowStatus.CLOSED
    closed = request_transfer(world)
    assert closed.user_player.transfer_request_status == TransferRequestStatus.NONE
    assert "window is closed" in closed.game_log[-1]

    world.transfer_window_status = TransferWindowStatus.OPEN_PRE_SEASON
    injure(world.user_player)
    hurt = request_transfer(world)
    assert hurt.user_player.transfer_request_status == TransferRequestStatus.NONE
    assert "while injured" in hurt.game_log[-1]


def test_request_transfer_without_club(world):
    world.user_player.team_id = None
    after = request_transfer(world)
    assert "not signed with a club" in after.game_log[-1]


def test_club_approves_request(world):
    player = world.user_player
    player.transfer_request_status = TransferRequestStatus.REQUESTED_BY_PLAYER
    logs = resolve_transfer_request(world, FixedRoll(0.0))
    assert player.transfer_request_status == TransferRequestStatus.APPROVED_BY_CLUB
    assert player.is_transfer_listed_by_club
    assert "APPROVED" in logs[0]


def test_club_rejects_request(world):
    player = world.user_player
    player.transfer_request_status = TransferRequestStatus.REQUESTED_BY_PLAYER
    player.manager_relationship = 50
    player.attributes.morale = 70
    logs = resolve_transfer_request(world, FixedRoll(0.99))
    assert player.transfer_request_status == TransferRequestStatus.REJECTED_BY_CLUB
    assert player.attributes.morale == 60
    assert player.manager_relationship == 35
    assert "REJECTED" in logs[0]
    assert resolve_transfer_request(world, FixedRoll(0.0)) == []


# ---------------------------------------------------------------------------
# Weekly sweeps
# ---------------------------------------------------------------------------

def test_offers_expire_on_their_week(world):
    offer = _offer(world, _suitor(world))
    world.league.current_week = offer.expires_on_week - 1
    assert expire_offers(world) == []
    world.league.current_week = offer.expires_on_week
    logs = expire_offers(world)
    assert offer.status == OfferStatus.EXPIRED
    assert "has expired" in logs[0]


def test_old_terminal_offers_are_pruned(world):
    suitor = _suitor(world)
    old = _offer(world, suitor, offer_id="old", week=1)
    old.close(OfferStatus.REJECTED_BY_PLAYER)
    _offer(world, suitor, offer_id="still-pending", week=1)
    world.league.current_week = 8

    prune_offer_history(world)
    assert [o.offer_id for o in world.pending_transfer_offers] == ["still-pending"]


def test_no_offers_while_window_closed(world):
    world.transfer_window_status = TransferWindowStatus.CLOSED
    assert generate_offers(world, random.Random(1)) == []
    assert world.pending_transfer_offers == []


def test_generated_offers_are_well_formed(world):
    player = world.user_player
    player.attributes.reputation = 90
    player.attributes.value = 400_000

    for seed in range(100):
        state = world.copy()
        logs = generate_offers(state, random.Random(seed))
        if logs:
            break
    assert logs, "no market activity in 100 weeks"

    offers = state.pending_transfer_offers
    assert len(offers) == len(logs)
    suitors = [o.from_team_id for o in offers]
    assert len(suitors) == len(set(suitors))
    assert player.team_id not in suitors
    for o in offers:
        assert o.is_pending and o.to_player_id == player.id
        assert o.expires_on_week == state.week + OFFER_EXPIRY_DURATION_WEEKS
        assert 1 <= o.contract_length_years <= 3
        assert state.find_team(o.from_team_id).budget >= o.transfer_fee

    # a second sweep never duplicates a suitor with a pending offer
    generate_offers(state, random.Random(seed))
    pending = [o.from_team_id for o in state.pending_transfer_offers if o.is_pending]
    assert len(pending) == len(set(pending))


def test_free_agent_costs_no_fee(world):
    player = world.user_player
    player.team_id = None
    assert offer_fee(player, world.season, random.Random(1)) == 0
