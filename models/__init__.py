"""
Data models for Football Career Mode.
"""
from .custom_player import CustomPlayerData
from .game_result import MatchResult, PlayerMatchPerformance
from .game_state import GameState, SnapshotError
from .interaction import Interaction, InteractionEffect, InteractionOption
from .league import League
from .national_team import NationalTeam, UpcomingInternationalMatch
from .player import Award, CareerStats, ClubHistoryEntry, Injury, Player, PlayerAttributes, SeasonStats
from .team import Team
from .transfer import TransferOffer

__all__ = [
    "Award",
    "CareerStats",
    "ClubHistoryEntry",
    "CustomPlayerData",
    "GameState",
    "Injury",
    "Interaction",
    "InteractionEffect",
    "InteractionOption",
    "League",
    "MatchResult",
    "NationalTeam",
    "Player",
    "PlayerAttributes",
    "PlayerMatchPerformance",
    "SeasonStats",
    "SnapshotError",
    "Team",
    "TransferOffer",
    "UpcomingInternationalMatch",
]
