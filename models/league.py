"""
League DTO for Football Career Mode.
Maps each division to its ordered member team ids and tracks the calendar.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List

from .constants import TRANSFER_WINDOW_MID_SEASON_WEEKS, TRANSFER_WINDOW_PRE_SEASON_WEEKS
from .enums import DIVISIONS_ORDERED, Division, TransferWindowStatus


def transfer_window_status(week: int) -> TransferWindowStatus:
    """Weeks 1-4 pre-season, 18-21 mid-season, closed otherwise."""
    pre_start, pre_end = TRANSFER_WINDOW_PRE_SEASON_WEEKS
    mid_start, mid_end = TRANSFER_WINDOW_MID_SEASON_WEEKS
    if pre_start <= week <= pre_end:
        return TransferWindowStatus.OPEN_PRE_SEASON
    if mid_start <= week <= mid_end:
        return TransferWindowStatus.OPEN_MID_SEASON
    return TransferWindowStatus.CLOSED


def _empty_divisions() -> Dict[Division, List[str]]:
    return {d: [] for d in DIVISIONS_ORDERED}


@dataclass
class League:
    divisions: Dict[Division, List[str]] = field(default_factory=_empty_divisions)
    current_season: int = 1
    current_week: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "divisions": {d.value: list(ids) for d, ids in self.divisions.items()},
            "current_season": self.current_season,
            "current_week": self.current_week,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "League":
        divisions = _empty_divisions()
        for name, ids in data.get("divisions", {}).items():
            divisions[Division(name)] = list(ids)
        return cls(
            divisions=divisions,
            current_season=data.get("current_season", 1),
            current_week=data.get("current_week", 1),
        )
