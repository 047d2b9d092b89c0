"""
Match result DTOs for Football Career Mode.

PlayerMatchPerformance holds the tracked player's line for a single fixture.
MatchResult holds the score of one fixture (club or international) plus the
tracked player's performance when they took part.
"""
from dataclasses import dataclass, field
from typing import Dict, Any

from .constants import NARRATIVE_PENDING


@dataclass
class PlayerMatchPerformance:
    """The tracked player's stat line for one match.

    ``narrative_pending`` stays True until the narrative text for ``match_id``
    has been applied to the snapshot; the remaining context fields are what a
    narrator needs to write that text later.
    """

    rating: float = 0.0
    goals: int = 0
    assists: int = 0
    shots: int = 0
    shots_on_target: int = 0
    tackles_attempted: int = 0
    tackles_won: int = 0
    key_passes: int = 0
    interceptions: int = 0
    narrative_summary: str = NARRATIVE_PENDING

    match_id: str = ""
    narrative_pending: bool = False
    team_name: str = ""
    opponent_name: str = ""
    team_score: int = 0
    opponent_score: int = 0
    is_international: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {k: getattr(self, k) for k in self.__dataclass_fields__}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerMatchPerformance":
        return cls(**{k: data.get(k, getattr(cls(), k)) for k in cls.__dataclass_fields__})


@dataclass
class MatchResult:
    """Score of one fixture between two clubs or two national teams."""

    match_id: str = ""
    home_id: str = ""
    away_id: str = ""
    home_name: str = ""
    away_name: str = ""
    home_score: int = 0
    away_score: int = 0
    is_international: bool = False
    performances: Dict[str, PlayerMatchPerformance] = field(default_factory=dict)

    @property
    def summary(self) -> str:
        return f"{self.home_name} {self.home_score} - {self.away_score} {self.away_name}"
