"""
Team DTO for Football Career Mode.
A club owns its roster; used_kit_numbers mirrors the current_kit_number of every rostered player.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List

from .enums import Division
from .player import Player


@dataclass
class Team:
    """A club in one of the five divisions."""

    id: str = ""
    name: str = ""
    division: Division = Division.FIFTH
    players: List[Player] = field(default_factory=list)
    matches_played: int = 0
    points: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    budget: int = 0
    reputation: int = 0  # 0-100
    team_chemistry: int = 50  # 0-100
    used_kit_numbers: List[int] = field(default_factory=list)

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def find_player(self, player_id: str) -> Player | None:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def reset_season_record(self) -> None:
        self.matches_played = 0
        self.points = 0
        self.wins = 0
        self.draws = 0
        self.losses = 0
        self.goals_for = 0
        self.goals_against = 0

    def record_result(self, scored: int, conceded: int) -> None:
        self.matches_played += 1
        self.goals_for += scored
        self.goals_against += conceded
        if scored > conceded:
            self.wins += 1
            self.points += 3
        elif scored < conceded:
            self.losses += 1
        else:
            self.draws += 1
            self.points += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "division": self.division.value,
            "players": [p.to_dict() for p in self.players],
            "matches_played": self.matches_played,
            "points": self.points,
            "wins": self.wins,
            "draws": self.draws,
            "losses": self.losses,
            "goals_for": self.goals_for,
            "goals_against": self.goals_against,
            "budget": self.budget,
            "reputation": self.reputation,
            "team_chemistry": self.team_chemistry,
            "used_kit_numbers": list(self.used_kit_numbers),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            division=Division(data.get("division", Division.FIFTH.value)),
            players=[Player.from_dict(p) for p in data.get("players", [])],
            matches_played=data.get("matches_played", 0),
            points=data.get("points", 0),
            wins=data.get("wins", 0),
            draws=data.get("draws", 0),
            losses=data.get("losses", 0),
            goals_for=data.get("goals_for", 0),
            goals_against=data.get("goals_against", 0),
            budget=data.get("budget", 0),
            reputation=data.get("reputation", 0),
            team_chemistry=data.get("team_chemistry", 50),
            used_kit_numbers=list(data.get("used_kit_numbers", [])),
        )
