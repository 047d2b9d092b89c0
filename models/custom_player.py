"""
Custom player DTO for Football Career Mode character creation.
Everything is optional; missing fields fall back to defaults at world creation.
"""
from dataclasses import dataclass
from typing import Dict, Any

from .constants import AVAILABLE_NATIONALITIES, MAX_KIT_NUMBER, MAX_STAR_RATING, MIN_STAR_RATING
from .enums import Foot, Position


@dataclass
class CustomPlayerData:
    """What the user picks on the creation screen."""

    name: str | None = None
    preferred_position: Position | None = None
    preferred_foot: Foot | None = None
    nationality: str | None = None
    preferred_kit_number: int | None = None
    skill_moves: int = 2
    weak_foot_accuracy: int = 2

    def __post_init__(self) -> None:
        if self.preferred_position is not None:
            self.preferred_position = Position(self.preferred_position)
        if self.preferred_foot is not None:
            self.preferred_foot = Foot(self.preferred_foot)
        for key in ("skill_moves", "weak_foot_accuracy"):
            val = getattr(self, key)
            if not MIN_STAR_RATING <= val <= MAX_STAR_RATING:
                raise ValueError(f"{key} must be between {MIN_STAR_RATING} and {MAX_STAR_RATING}, got {val}")
        if self.preferred_kit_number is not None and not 1 <= self.preferred_kit_number <= MAX_KIT_NUMBER:
            raise ValueError(f"preferred_kit_number must be between 1 and {MAX_KIT_NUMBER}, got {self.preferred_kit_number}")
        if self.nationality is not None and self.nationality not in AVAILABLE_NATIONALITIES:
            raise ValueError(f"unsupported nationality {self.nationality!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "preferred_position": self.preferred_position.value if self.preferred_position else None,
            "preferred_foot": self.preferred_foot.value if self.preferred_foot else None,
            "nationality": self.nationality,
            "preferred_kit_number": self.preferred_kit_number,
            "skill_moves": self.skill_moves,
            "weak_foot_accuracy": self.weak_foot_accuracy,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomPlayerData":
        return cls(
            name=data.get("name") or None,
            preferred_position=data.get("preferred_position") or None,
            preferred_foot=data.get("preferred_foot") or None,
            nationality=data.get("nationality") or None,
            preferred_kit_number=data.get("preferred_kit_number"),
            skill_moves=data.get("skill_moves") or 2,
            weak_foot_accuracy=data.get("weak_foot_accuracy") or 2,
        )
