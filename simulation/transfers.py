"""
Transfer market for Football Career Mode.

User commands (``request_transfer``, ``respond_to_offer``) take a snapshot and
return a new one.  The weekly sweeps (``generate_offers``, ``expire_offers``,
``resolve_transfer_request``, ``prune_offer_history``) are steps of
``advance_week``: they work in place on the week's working copy and return
the log lines they produced.

Only the user's player receives offers.  Accepting an offer is atomic: the
move is built on a copy of the snapshot, and a failed budget or squad check
returns the original snapshot with nothing but the offer status and a log line
changed.
"""
from __future__ import annotations

import logging
import random

from generation.generate import assign_kit_number, release_kit_number
from models.constants import (
    MARKET_ACTIVITY_CHANCE,
    MAX_PLAYERS_PER_TEAM,
    MIN_TRANSFER_FEE,
    NEUTRAL_MANAGER_RELATIONSHIP,
    OFFER_EXPIRY_DURATION_WEEKS,
    OFFER_HISTORY_WEEKS,
    WEEKS_PER_SEASON,
)
from models.enums import Attr, OfferStatus, TransferRequestStatus, TransferWindowStatus, division_index
from models.game_state import GameState
from models.league import transfer_window_status
from models.player import ClubHistoryEntry, Player
from models.ratings import calculate_team_chemistry, wage_for_division
from models.team import Team
from models.transfer import TransferOffer

logger = logging.getLogger(__name__)

__all__ = [
    "transfer_window_status",
    "generate_offers",
    "expire_offers",
    "prune_offer_history",
    "resolve_transfer_request",
    "request_transfer",
    "respond_to_offer",
]

ACCEPT_MORALE_BOOST = 20
REJECT_MORALE_PENALTY = 5
REJECT_RELATIONSHIP_PENALTY = 5
REQUEST_REJECTED_MORALE_PENALTY = 10
REQUEST_REJECTED_RELATIONSHIP_PENALTY = 15


# ===================================================================
# Offer generation
# ===================================================================

def interest_score(player: Player, current_team: Team | None, suitor: Team, season: int) -> float:
    """How keen suitor is on player.

    reputation x value x team-reputation ratio, boosted for free agents or
    expiring contracts (x1.5), transfer-listed players (x1.3) and suitors in the
    same or a higher division (x1.2, else x0.8).
    """
    reputation_factor = player.attributes.reputation / 100
    value_factor = player.attributes.value / 100_000
    team_reputation_factor = suitor.reputation / ((current_team.reputation if current_team else 0) or 30)
    expiring = player.team_id is None or player.contract_expiry_season - season <= 1
    contract_factor = 1.5 if expiring else 1.0
    listed = (
        player.is_transfer_listed_by_club
        or player.transfer_request_status == TransferRequestStatus.APPROVED_BY_CLUB
    )
    listed_factor = 1.3 if listed else 1.0

    score = reputation_factor * value_factor * team_reputation_factor * contract_factor * listed_factor
    if current_team is None or division_index(suitor.division) <= division_index(current_team.division):
        score *= 1.2
    else:
        score *= 0.8
    return score


def offer_fee(player: Player, season: int, rng: random.Random) -> int:
    """0 for a free agent or a contract that has run out, else value x U(0.5, 1.5) x seasons_left / 3."""
    if player.team_id is None or player.contract_expiry_season <= season:
        return 0
    seasons_left = player.contract_expiry_season - season
    fee = int(player.attributes.value * rng.uniform(0.5, 1.5) * (seasons_left / 3))
    return max(MIN_TRANSFER_FEE, fee)


def _build_offer(
    player: Player,
    suitor: Team,
    current_team: Team | None,
    fee: int,
    season: int,
    week: int,
    rng: random.Random,
) -> TransferOffer:
    reputation_factor = player.attributes.reputation / 100
    team_reputation_factor = suitor.reputation / ((current_team.reputation if current_team else 0) or 30)
    wage = int(
        wage_for_division(suitor.division) * rng.uniform(0.9, 1.3) * (reputation_factor + team_reputation_factor) / 2
    )
    years = rng.randint(1, 3)
    bonus = int(wage * years * rng.uniform(0.05, 0.15))
    return TransferOffer(
        offer_id=f"offer-S{season}-W{week}-{suitor.id}",
        from_team_id=suitor.id,
        from_team_name=suitor.name,
        from_team_division=suitor.division,
        to_player_id=player.id,
        transfer_fee=fee,
        offered_wage=wage,
        contract_length_years=years,
        signing_bonus=bonus,
        status=OfferStatus.PENDING_PLAYER_RESPONSE,
        offer_date_season=season,
        offer_date_week=week,
        expires_on_season=season,
        expires_on_week=week + OFFER_EXPIRY_DURATION_WEEKS,
    )


def generate_offers(state: GameState, rng: random.Random) -> list[str]:
    """Weekly offer sweep for the user's player, in place on state.

    Runs only while the window is open and the player is fit, and then only
    when the weekly market-activity roll comes up.  Each other club whose
    interest beats a U(0.2, 0.5) threshold and whose budget covers the fee makes
    one offer; clubs with a pending offer already are skipped.
    """
    if state.transfer_window_status == TransferWindowStatus.CLOSED:
        return []
    player = state.user_player
    if player is None or player.is_injured:
        return []
    if rng.random() >= MARKET_ACTIVITY_CHANCE:
        return []

    season, week = state.season, state.week
    current_team = state.find_team(player.team_id)
    pending_from = {
        o.from_team_id for o in state.pending_transfer_offers
        if o.is_pending and o.to_player_id == player.id
    }
    logs: list[str] = []
    for suitor in state.teams:
        if suitor.id == player.team_id or suitor.id in pending_from:
            continue
        if interest_score(player, current_team, suitor, season) <= 0.2 + rng.random() * 0.3:
            continue
        fee = offer_fee(player, season, rng)
        if suitor.budget < fee:
            continue
        offer = _build_offer(player, suitor, current_team, fee, season, week, rng)
        state.pending_transfer_offers.append(offer)
        logs.append(f"Transfer Offer: {suitor.name} have made an offer for {player.name}.")
    if logs:
        logger.info("Week %d: %d new offer(s) for %s", week, len(logs), player.name)
    return logs


# ===================================================================
# Weekly sweeps
# ===================================================================

def expire_offers(state: GameState) -> list[str]:
    """Mark pending offers whose (season, week) expiry has been reached as EXPIRED, in place."""
    logs: list[str] = []
    for offer in state.pending_transfer_offers:
        if offer.is_pending and offer.is_expired_at(state.season, state.week):
            offer.close(OfferStatus.EXPIRED)
            player = state.find_player(offer.to_player_id)
            name = player.name if player else offer.to_player_id
            logs.append(f"Offer from {offer.from_team_name} for {name} has expired.")
    return logs


def _weeks_since(season: int, week: int, then_season: int, then_week: int) -> int:
    return (season - then_season) * WEEKS_PER_SEASON + (week - then_week)


def prune_offer_history(state: GameState) -> None:
    """Drop terminal offers made more than OFFER_HISTORY_WEEKS weeks ago, in place."""
    state.pending_transfer_offers = [
        o for o in state.pending_transfer_offers
        if o.is_pending
        or _weeks_since(state.season, state.week, o.offer_date_season, o.offer_date_week) <= OFFER_HISTORY_WEEKS
    ]


def resolve_transfer_request(state: GameState, rng: random.Random) -> list[str]:
    """Club's answer to a pending transfer request, in place.

    Approval chance is 0.4 + manager_relationship / 250.  Approval lists the
    player; rejection costs morale and manager relationship.
    """
    player = state.user_player
    if (
        player is None
        or player.team_id is None
        or player.is_injured
        or player.transfer_request_status != TransferRequestStatus.REQUESTED_BY_PLAYER
    ):
        return []
    club = state.find_team(player.team_id)
    if club is None:
        return []

    if rng.random() < 0.4 + player.manager_relationship / 250:
        player.transfer_request_status = TransferRequestStatus.APPROVED_BY_CLUB
        player.is_transfer_listed_by_club = True
        return [f"{player.name}'s transfer request has been APPROVED by {club.name}. They are now transfer listed."]

    player.transfer_request_status = TransferRequestStatus.REJECTED_BY_CLUB
    player.attributes.adjust(Attr.MORALE, -REQUEST_REJECTED_MORALE_PENALTY)
    player.adjust_manager_relationship(-REQUEST_REJECTED_RELATIONSHIP_PENALTY)
    return [f"{player.name}'s transfer request has been REJECTED by {club.name}."]


# ===================================================================
# User commands
# ===================================================================

def request_transfer(state: GameState) -> GameState:
    """Ask the user's club to be transfer listed.

    No-op with a log line when the player has no club, is injured, the window
    is closed, or a request has already been made or answered.
    """
    new_state = state.copy()
    player = new_state.user_player
    if player is None or player.team_id is None:
        new_state.log("Cannot request transfer: You are currently not signed with a club.")
        return new_state
    if player.is_injured:
        new_state.log("Cannot request transfer while injured.")
        return new_state
    if new_state.transfer_window_status == TransferWindowStatus.CLOSED:
        new_state.log("Cannot request transfer: the transfer window is closed.")
        return new_state
    if player.transfer_request_status != TransferRequestStatus.NONE:
        new_state.log(f"{player.name} has already submitted a transfer request or the club has responded.")
        return new_state

    player.transfer_request_status = TransferRequestStatus.REQUESTED_BY_PLAYER
    club = new_state.find_team(player.team_id)
    new_state.log(f"{player.name} has requested a transfer from {club.name if club else 'their club'}.")
    return new_state


def _withdraw(state: GameState, offer_id: str, message: str) -> GameState:
    """The original snapshot with only the offer withdrawn and a log line added."""
    failed = state.copy()
    failed.find_offer(offer_id).close(OfferStatus.WITHDRAWN_BY_CLUB)
    failed.log(message)
    logger.info("Offer %s withdrawn: %s", offer_id, message)
    return failed


def _complete_move(state: GameState, offer: TransferOffer, player: Player, rng: random.Random) -> str:
    """Move player to the offering club on state (a copy owned by the caller)."""
    season, week = state.season, state.week
    new_team = state.find_team(offer.from_team_id)
    old_team = state.find_team(player.team_id)
    # Free agents still sit on their last roster
    holding = state.team_holding(player.id)
    previous_name = old_team.name if old_team else "Free Agency"

    if holding is not None:
        release_kit_number(holding, player.current_kit_number)
        player.current_kit_number = None
        holding.players = [p for p in holding.players if p.id != player.id]
        holding.team_chemistry = calculate_team_chemistry(holding)
    if old_team is not None:
        old_team.budget += offer.transfer_fee

    player.weekly_wage = offer.offered_wage
    player.contract_expiry_season = season + offer.contract_length_years
    player.attributes.value = int(
        player.attributes.value * 1.05 + offer.transfer_fee * 0.05 + offer.signing_bonus * 0.1
    )
    player.attributes.adjust(Attr.MORALE, ACCEPT_MORALE_BOOST)
    player.transfer_request_status = TransferRequestStatus.NONE
    player.is_transfer_listed_by_club = False
    player.manager_relationship = NEUTRAL_MANAGER_RELATIONSHIP

    if player.club_history and player.club_history[-1].left_week is None:
        player.club_history[-1].left_week = week
    player.club_history.append(
        ClubHistoryEntry(team_name=new_team.name, season=season, joined_week=week, transfer_fee=offer.transfer_fee)
    )

    player.team_id = new_team.id
    assign_kit_number(player, new_team, player.preferred_kit_number, rng)
    new_team.players.append(player)
    new_team.budget -= offer.total_cost
    new_team.team_chemistry = calculate_team_chemistry(new_team)

    return (
        f"{player.name} has accepted the offer from {new_team.name}! "
        f"Fee: ${offer.transfer_fee:,}, Wage: ${offer.offered_wage:,}/wk. Moved from {previous_name}."
    )


def respond_to_offer(
    state: GameState,
    offer_id: str,
    accept: bool,
    rng: random.Random | None = None,
) -> GameState:
    """Accept or reject a pending offer.

    Parameters
    ----------
    state : GameState
        Current snapshot; never modified.
    offer_id : str
        Id of an offer in ``state.pending_transfer_offers``.
    accept : bool
        True to accept, False to reject.
    rng : random.Random | None
        Only used if the kit number has to fall back to the overflow range.

    Returns
    -------
    GameState
        New snapshot.  Unknown or already-closed offers and acceptance while
        injured only add a log line.  If the club cannot afford fee + bonus or
        has a full squad the offer becomes WITHDRAWN_BY_CLUB and nothing else
        changes.
    """
    rng = rng or random.Random()
    offer = state.find_offer(offer_id)
    if offer is None:
        new_state = state.copy()
        new_state.log(f"Transfer offer {offer_id} could not be found.")
        return new_state
    if not offer.is_pending:
        new_state = state.copy()
        new_state.log(f"The offer from {offer.from_team_name} is no longer available.")
        return new_state
    player = state.find_player(offer.to_player_id)
    if player is None:
        return state

    if not accept:
        new_state = state.copy()
        new_state.find_offer(offer_id).close(OfferStatus.REJECTED_BY_PLAYER)
        player = new_state.find_player(offer.to_player_id)
        player.attributes.adjust(Attr.MORALE, -REJECT_MORALE_PENALTY)
        player.adjust_manager_relationship(-REJECT_RELATIONSHIP_PENALTY)
        team = new_state.find_team(player.team_id)
        if team is not None:
            team.team_chemistry = calculate_team_chemistry(team)
        new_state.log(f"{player.name} has rejected the offer from {offer.from_team_name}.")
        return new_state

    if player.is_injured:
        new_state = state.copy()
        new_state.log(
            "Cannot accept transfer offer: You are currently injured. Clubs are hesitant to sign injured players."
        )
        return new_state

    suitor = state.find_team(offer.from_team_id)
    if suitor is None:
        return _withdraw(state, offer_id, f"Transfer failed: Offering team {offer.from_team_name} not found.")
    if suitor.budget < offer.total_cost:
        return _withdraw(
            state,
            offer_id,
            f"Transfer failed: {suitor.name} cannot afford the total cost of ${offer.total_cost:,}. "
            f"Their budget is ${suitor.budget:,}.",
        )
    # A free agent re-signing with the club still holding them is not an extra body
    squad_size = sum(1 for p in suitor.players if p.id != player.id)
    if squad_size >= MAX_PLAYERS_PER_TEAM:
        return _withdraw(
            state,
            offer_id,
            f"Transfer failed: {suitor.name} has a full squad ({squad_size}/{MAX_PLAYERS_PER_TEAM}).",
        )

    new_state = state.copy()
    accepted = new_state.find_offer(offer_id)
    player = new_state.find_player(offer.to_player_id)
    message = _complete_move(new_state, accepted, player, rng)
    accepted.close(OfferStatus.ACCEPTED_BY_PLAYER)
    for other in new_state.pending_transfer_offers:
        if other.to_player_id == player.id and other.is_pending:
            other.close(OfferStatus.WITHDRAWN_BY_CLUB)
    new_state.log(message)
    logger.info("%s moved to %s for %d", player.name, accepted.from_team_name, accepted.transfer_fee)
    return new_state
