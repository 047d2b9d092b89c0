"""
GameState: the world snapshot for Football Career Mode.

The snapshot is the unit every command transforms and the unit of persistence.
Commands never mutate the snapshot they were handed; they work on ``copy()``
and return the copy.
"""
import copy
import json
from dataclasses import dataclass, field
from typing import Dict, Any, Iterator, List

from .constants import GAME_LOG_LIMIT, INTERNATIONAL_FIXTURE_WEEKS_DEFAULT
from .enums import TransferWindowStatus
from .interaction import Interaction
from .league import League
from .national_team import NationalTeam, UpcomingInternationalMatch
from .player import Player
from .team import Team
from .transfer import TransferOffer


class SnapshotError(ValueError):
    """A persisted snapshot could not be parsed back into a GameState."""


@dataclass
class GameState:
    user_player_id: str = ""
    teams: List[Team] = field(default_factory=list)
    league: League = field(default_factory=League)
    game_log: List[str] = field(default_factory=list)
    pending_transfer_offers: List[TransferOffer] = field(default_factory=list)
    transfer_window_status: TransferWindowStatus = TransferWindowStatus.OPEN_PRE_SEASON
    pending_interactions: List[Interaction] = field(default_factory=list)
    national_teams: List[NationalTeam] = field(default_factory=list)
    international_fixture_weeks: List[int] = field(
        default_factory=lambda: list(INTERNATIONAL_FIXTURE_WEEKS_DEFAULT)
    )
    upcoming_international_match: UpcomingInternationalMatch | None = None
    is_player_created: bool = False

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def season(self) -> int:
        return self.league.current_season

    @property
    def week(self) -> int:
        return self.league.current_week

    def all_players(self) -> Iterator[Player]:
        for team in self.teams:
            yield from team.players

    def find_player(self, player_id: str) -> Player | None:
        for p in self.all_players():
            if p.id == player_id:
                return p
        return None

    @property
    def user_player(self) -> Player | None:
        return self.find_player(self.user_player_id)

    def find_team(self, team_id: str | None) -> Team | None:
        if team_id is None:
            return None
        for t in self.teams:
            if t.id == team_id:
                return t
        return None

    def team_holding(self, player_id: str) -> Team | None:
        """The team whose roster physically holds the player (free agents stay on their last roster)."""
        for t in self.teams:
            if t.find_player(player_id) is not None:
                return t
        return None

    def find_national_team(self, national_team_id: str) -> NationalTeam | None:
        for nt in self.national_teams:
            if nt.id == national_team_id:
                return nt
        return None

    def national_team_for(self, nationality: str) -> NationalTeam | None:
        for nt in self.national_teams:
            if nt.nationality_represented == nationality:
                return nt
        return None

    def find_offer(self, offer_id: str) -> TransferOffer | None:
        for o in self.pending_transfer_offers:
            if o.offer_id == offer_id:
                return o
        return None

    def find_interaction(self, interaction_id: str) -> Interaction | None:
        for i in self.pending_interactions:
            if i.interaction_id == interaction_id:
                return i
        return None

    # ------------------------------------------------------------------
    # Log
    # ------------------------------------------------------------------

    def log(self, *entries: str) -> None:
        self.game_log.extend(entries)
        self.trim_log()

    def trim_log(self) -> None:
        if len(self.game_log) > GAME_LOG_LIMIT:
            del self.game_log[:-GAME_LOG_LIMIT]

    def copy(self) -> "GameState":
        return copy.deepcopy(self)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_player_id": self.user_player_id,
            "teams": [t.to_dict() for t in self.teams],
            "league": self.league.to_dict(),
            "game_log": list(self.game_log),
            "pending_transfer_offers": [o.to_dict() for o in self.pending_transfer_offers],
            "transfer_window_status": self.transfer_window_status.value,
            "pending_interactions": [i.to_dict() for i in self.pending_interactions],
            "national_teams": [nt.to_dict() for nt in self.national_teams],
            "international_fixture_weeks": list(self.international_fixture_weeks),
            "upcoming_international_match": (
                self.upcoming_international_match.to_dict() if self.upcoming_international_match else None
            ),
            "is_player_created": self.is_player_created,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        """Rebuild a snapshot. Raises SnapshotError if data is not a valid snapshot."""
        if not isinstance(data, dict):
            raise SnapshotError(f"snapshot must be an object, got {type(data).__name__}")
        try:
            upcoming = data.get("upcoming_international_match")
            state = cls(
                user_player_id=data["user_player_id"],
                teams=[Team.from_dict(t) for t in data["teams"]],
                league=League.from_dict(data["league"]),
                game_log=list(data.get("game_log", [])),
                pending_transfer_offers=[TransferOffer.from_dict(o) for o in data.get("pending_transfer_offers", [])],
                transfer_window_status=TransferWindowStatus(
                    data.get("transfer_window_status", TransferWindowStatus.CLOSED.value)
                ),
                pending_interactions=[Interaction.from_dict(i) for i in data.get("pending_interactions", [])],
                national_teams=[NationalTeam.from_dict(nt) for nt in data.get("national_teams", [])],
                international_fixture_weeks=list(
                    data.get("international_fixture_weeks", INTERNATIONAL_FIXTURE_WEEKS_DEFAULT)
                ),
                upcoming_international_match=UpcomingInternationalMatch.from_dict(upcoming) if upcoming else None,
                is_player_created=data.get("is_player_created", False),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise SnapshotError(f"corrupt snapshot: {e}") from e
        if state.user_player_id and state.user_player is None:
            raise SnapshotError(f"user player {state.user_player_id!r} not found in any roster")
        return state

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> "GameState":
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise SnapshotError(f"snapshot is not valid JSON: {e}") from e
        return cls.from_dict(data)
