"""
National team DTOs for Football Career Mode.
A national squad is a derived view (player ids), recomputed on every international week;
Player.is_on_national_team is the source of truth.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List


def national_team_id(nationality: str) -> str:
    return "NATIONAL_" + "_".join(nationality.upper().split())


@dataclass
class NationalTeam:
    id: str = ""
    name: str = ""
    nationality_represented: str = ""
    squad: List[str] = field(default_factory=list)
    reputation: int = 70  # 60-85
    manager_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "nationality_represented": self.nationality_represented,
            "squad": list(self.squad),
            "reputation": self.reputation,
            "manager_name": self.manager_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NationalTeam":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            nationality_represented=data.get("nationality_represented", ""),
            squad=list(data.get("squad", [])),
            reputation=data.get("reputation", 70),
            manager_name=data.get("manager_name", ""),
        )


@dataclass
class UpcomingInternationalMatch:
    week: int = 0
    home_national_team_id: str = ""
    away_national_team_id: str = ""
    user_player_involved: bool = False
    match_type: str = "Friendly"

    def to_dict(self) -> Dict[str, Any]:
        return {k: getattr(self, k) for k in self.__dataclass_fields__}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UpcomingInternationalMatch":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})
