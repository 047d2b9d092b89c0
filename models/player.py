"""
Player DTO for Football Career Mode.
Skills are 0-99; morale/stamina/form/reputation/press_relations/fan_support are 0-100;
skill_moves and weak_foot_accuracy are 1-5 star ratings. Bounds live in ATTRIBUTE_BOUNDS.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List

from .constants import ATTRIBUTE_BOUNDS, MAX_KIT_NUMBER
from .enums import (
    Attr,
    AwardIdBase,
    AwardType,
    Foot,
    InjurySeverity,
    Position,
    TacticalInstruction,
    TraitId,
    TransferRequestStatus,
)
from .game_result import PlayerMatchPerformance


def clamp_attr(attr: Attr, value: int) -> int:
    lo, hi = ATTRIBUTE_BOUNDS[attr]
    return max(lo, min(hi, int(value)))


@dataclass
class PlayerAttributes:
    """Numeric attributes. Read and write through get/set/adjust so every change is clamped."""

    goalkeeping: int = 0
    tackle: int = 0
    passing: int = 0
    shooting: int = 0
    heading: int = 0
    speed: int = 0
    skill: int = 0
    morale: int = 50
    stamina: int = 100
    form: int = 50
    reputation: int = 0
    press_relations: int = 50
    fan_support: int = 0
    skill_moves: int = 1
    weak_foot_accuracy: int = 1
    # Not Attr members: age has no ceiling and value is derived
    age: int = 16
    value: int = 0

    def get(self, attr: Attr) -> int:
        return getattr(self, Attr(attr).value)

    def set(self, attr: Attr, value: int) -> int:
        attr = Attr(attr)
        new_value = clamp_attr(attr, value)
        setattr(self, attr.value, new_value)
        return new_value

    def adjust(self, attr: Attr, delta: int) -> int:
        """Add delta to attr, clamped to the attribute's own range. Returns the new value."""
        return self.set(attr, self.get(attr) + delta)

    def to_dict(self) -> Dict[str, Any]:
        return {k: getattr(self, k) for k in self.__dataclass_fields__}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerAttributes":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})


@dataclass
class SeasonStats:
    goals: int = 0
    assists: int = 0
    appearances: int = 0
    total_match_rating: float = 0.0
    matches_rated_this_season: int = 0

    @property
    def average_rating(self) -> float:
        if self.matches_rated_this_season <= 0:
            return 0.0
        return self.total_match_rating / self.matches_rated_this_season

    def to_dict(self) -> Dict[str, Any]:
        return {k: getattr(self, k) for k in self.__dataclass_fields__}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeasonStats":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})


@dataclass
class CareerStats:
    """Cumulative totals. Title/promotion entries are plain dicts (division, season, team_name, ...)."""

    total_goals: int = 0
    total_assists: int = 0
    total_appearances: int = 0
    league_titles_won: List[Dict[str, Any]] = field(default_factory=list)
    promotions_won: List[Dict[str, Any]] = field(default_factory=list)
    career_awards_count: int = 0
    total_international_caps: int = 0
    total_international_goals: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_goals": self.total_goals,
            "total_assists": self.total_assists,
            "total_appearances": self.total_appearances,
            "league_titles_won": [dict(t) for t in self.league_titles_won],
            "promotions_won": [dict(p) for p in self.promotions_won],
            "career_awards_count": self.career_awards_count,
            "total_international_caps": self.total_international_caps,
            "total_international_goals": self.total_international_goals,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CareerStats":
        return cls(
            total_goals=data.get("total_goals", 0),
            total_assists=data.get("total_assists", 0),
            total_appearances=data.get("total_appearances", 0),
            league_titles_won=[dict(t) for t in data.get("league_titles_won", [])],
            promotions_won=[dict(p) for p in data.get("promotions_won", [])],
            career_awards_count=data.get("career_awards_count", 0),
            total_international_caps=data.get("total_international_caps", 0),
            total_international_goals=data.get("total_international_goals", 0),
        )


@dataclass
class ClubHistoryEntry:
    team_name: str = ""
    season: int = 1
    joined_week: int = 1
    left_week: int | None = None
    transfer_fee: int | None = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "team_name": self.team_name,
            "season": self.season,
            "joined_week": self.joined_week,
        }
        if self.left_week is not None:
            d["left_week"] = self.left_week
        if self.transfer_fee is not None:
            d["transfer_fee"] = self.transfer_fee
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClubHistoryEntry":
        return cls(
            team_name=data.get("team_name", ""),
            season=data.get("season", 1),
            joined_week=data.get("joined_week", 1),
            left_week=data.get("left_week"),
            transfer_fee=data.get("transfer_fee"),
        )


@dataclass
class Award:
    id: str = ""
    award_id_base: AwardIdBase = AwardIdBase.CAREER_GOALS_MILESTONE
    name: str = ""
    description: str = ""
    type: AwardType = AwardType.CAREER_MILESTONE
    season_achieved: int = 1
    division: str | None = None
    value: Any = None
    for_player_id: str = ""
    nationality: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "award_id_base": self.award_id_base.value,
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "season_achieved": self.season_achieved,
            "division": self.division,
            "value": self.value,
            "for_player_id": self.for_player_id,
            "nationality": self.nationality,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Award":
        return cls(
            id=data.get("id", ""),
            award_id_base=AwardIdBase(data["award_id_base"]),
            name=data.get("name", ""),
            description=data.get("description", ""),
            type=AwardType(data.get("type", AwardType.CAREER_MILESTONE.value)),
            season_achieved=data.get("season_achieved", 1),
            division=data.get("division"),
            value=data.get("value"),
            for_player_id=data.get("for_player_id", ""),
            nationality=data.get("nationality"),
        )


@dataclass
class Injury:
    id: str = ""
    type: str = ""
    description: str = ""
    severity: InjurySeverity = InjurySeverity.MINOR
    duration_weeks: int = 1
    weeks_remaining: int = 1
    recovery_progress: int = 0  # 0-100
    diagnosed_season: int = 1
    diagnosed_week: int = 1

    def update_progress(self) -> None:
        if self.duration_weeks <= 0:
            self.recovery_progress = 100
            return
        done = self.duration_weeks - self.weeks_remaining
        self.recovery_progress = min(100, int(done / self.duration_weeks * 100))

    def to_dict(self) -> Dict[str, Any]:
        d = {k: getattr(self, k) for k in self.__dataclass_fields__}
        d["severity"] = self.severity.value
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Injury":
        injury = cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})
        injury.severity = InjurySeverity(injury.severity)
        return injury


@dataclass
class Player:
    """One footballer, NPC or the user's own. team_id None means free agent."""

    id: str = ""
    name: str = ""
    attributes: PlayerAttributes = field(default_factory=PlayerAttributes)
    preferred_position: Position = Position.MIDFIELDER
    preferred_foot: Foot = Foot.RIGHT
    nationality: str = ""
    team_id: str | None = None
    is_user_player: bool = False
    preferred_kit_number: int | None = None
    current_kit_number: int | None = None
    # Contract
    weekly_wage: int = 0
    contract_expiry_season: int = 1
    transfer_request_status: TransferRequestStatus = TransferRequestStatus.NONE
    is_transfer_listed_by_club: bool = False
    manager_relationship: int = 50  # 0-100
    # Ledgers
    stats: SeasonStats = field(default_factory=SeasonStats)
    career_stats: CareerStats = field(default_factory=CareerStats)
    club_history: List[ClubHistoryEntry] = field(default_factory=list)
    awards: List[Award] = field(default_factory=list)
    unlocked_traits: List[TraitId] = field(default_factory=list)
    international_caps: int = 0
    international_goals: int = 0
    # Transient
    current_injury: Injury | None = None
    active_tactical_instruction: TacticalInstruction | None = None
    last_match_performance: PlayerMatchPerformance | None = None
    is_on_national_team: bool = False

    def __post_init__(self) -> None:
        if self.preferred_kit_number is not None and not (1 <= self.preferred_kit_number <= MAX_KIT_NUMBER):
            raise ValueError(f"preferred_kit_number must be 1-{MAX_KIT_NUMBER}, got {self.preferred_kit_number}")
        for attr in (Attr.SKILL_MOVES, Attr.WEAK_FOOT_ACCURACY):
            lo, hi = ATTRIBUTE_BOUNDS[attr]
            if not lo <= self.attributes.get(attr) <= hi:
                raise ValueError(f"{attr.value} must be {lo}-{hi}, got {self.attributes.get(attr)}")

    @property
    def is_injured(self) -> bool:
        return self.current_injury is not None

    def has_trait(self, trait_id: TraitId) -> bool:
        return trait_id in self.unlocked_traits

    def has_award(self, award_id_base: AwardIdBase, name: str) -> bool:
        return any(a.award_id_base == award_id_base and a.name == name for a in self.awards)

    def adjust_manager_relationship(self, delta: int) -> int:
        self.manager_relationship = max(0, min(100, self.manager_relationship + delta))
        return self.manager_relationship

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "attributes": self.attributes.to_dict(),
            "preferred_position": self.preferred_position.value,
            "preferred_foot": self.preferred_foot.value,
            "nationality": self.nationality,
            "team_id": self.team_id,
            "is_user_player": self.is_user_player,
            "preferred_kit_number": self.preferred_kit_number,
            "current_kit_number": self.current_kit_number,
            "weekly_wage": self.weekly_wage,
            "contract_expiry_season": self.contract_expiry_season,
            "transfer_request_status": self.transfer_request_status.value,
            "is_transfer_listed_by_club": self.is_transfer_listed_by_club,
            "manager_relationship": self.manager_relationship,
            "stats": self.stats.to_dict(),
            "career_stats": self.career_stats.to_dict(),
            "club_history": [e.to_dict() for e in self.club_history],
            "awards": [a.to_dict() for a in self.awards],
            "unlocked_traits": [t.value for t in self.unlocked_traits],
            "international_caps": self.international_caps,
            "international_goals": self.international_goals,
            "current_injury": self.current_injury.to_dict() if self.current_injury else None,
            "active_tactical_instruction": (
                self.active_tactical_instruction.value if self.active_tactical_instruction else None
            ),
            "last_match_performance": (
                self.last_match_performance.to_dict() if self.last_match_performance else None
            ),
            "is_on_national_team": self.is_on_national_team,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        injury = data.get("current_injury")
        tactic = data.get("active_tactical_instruction")
        perf = data.get("last_match_performance")
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            attributes=PlayerAttributes.from_dict(data.get("attributes", {})),
            preferred_position=Position(data.get("preferred_position", Position.MIDFIELDER.value)),
            preferred_foot=Foot(data.get("preferred_foot", Foot.RIGHT.value)),
            nationality=data.get("nationality", ""),
            team_id=data.get("team_id"),
            is_user_player=data.get("is_user_player", False),
            preferred_kit_number=data.get("preferred_kit_number"),
            current_kit_number=data.get("current_kit_number"),
            weekly_wage=data.get("weekly_wage", 0),
            contract_expiry_season=data.get("contract_expiry_season", 1),
            transfer_request_status=TransferRequestStatus(
                data.get("transfer_request_status", TransferRequestStatus.NONE.value)
            ),
            is_transfer_listed_by_club=data.get("is_transfer_listed_by_club", False),
            manager_relationship=data.get("manager_relationship", 50),
            stats=SeasonStats.from_dict(data.get("stats", {})),
            career_stats=CareerStats.from_dict(data.get("career_stats", {})),
            club_history=[ClubHistoryEntry.from_dict(e) for e in data.get("club_history", [])],
            awards=[Award.from_dict(a) for a in data.get("awards", [])],
            unlocked_traits=[TraitId(t) for t in data.get("unlocked_traits", [])],
            international_caps=data.get("international_caps", 0),
            international_goals=data.get("international_goals", 0),
            current_injury=Injury.from_dict(injury) if injury else None,
            active_tactical_instruction=TacticalInstruction(tactic) if tactic else None,
            last_match_performance=PlayerMatchPerformance.from_dict(perf) if perf else None,
            is_on_national_team=data.get("is_on_national_team", False),
        )
