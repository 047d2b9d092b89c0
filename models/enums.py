"""
Enumerations for Football Career Mode.
All enums subclass ``str`` so snapshots serialize to plain JSON strings.
"""
from enum import Enum


class Division(str, Enum):
    FIRST = "First Division"
    SECOND = "Second Division"
    THIRD = "Third Division"
    FOURTH = "Fourth Division"
    FIFTH = "Fifth Division"


# Top tier first; index doubles as "rank" (lower = better)
DIVISIONS_ORDERED: list[Division] = [
    Division.FIRST,
    Division.SECOND,
    Division.THIRD,
    Division.FOURTH,
    Division.FIFTH,
]


def division_index(division: "Division | str") -> int:
    return DIVISIONS_ORDERED.index(Division(division))


class Position(str, Enum):
    GOALKEEPER = "Goalkeeper"
    DEFENDER = "Defender"
    MIDFIELDER = "Midfielder"
    FORWARD = "Forward"


class Foot(str, Enum):
    LEFT = "Left"
    RIGHT = "Right"
    AMBIDEXTROUS = "Ambidextrous"


class Attr(str, Enum):
    """Every numeric player attribute. Value is the PlayerAttributes field name."""

    GOALKEEPING = "goalkeeping"
    TACKLE = "tackle"
    PASSING = "passing"
    SHOOTING = "shooting"
    HEADING = "heading"
    SPEED = "speed"
    SKILL = "skill"
    MORALE = "morale"
    STAMINA = "stamina"
    FORM = "form"
    REPUTATION = "reputation"
    PRESS_RELATIONS = "press_relations"
    FAN_SUPPORT = "fan_support"
    SKILL_MOVES = "skill_moves"
    WEAK_FOOT_ACCURACY = "weak_foot_accuracy"


class TransferRequestStatus(str, Enum):
    NONE = "NONE"
    REQUESTED_BY_PLAYER = "REQUESTED_BY_PLAYER"
    APPROVED_BY_CLUB = "APPROVED_BY_CLUB"
    REJECTED_BY_CLUB = "REJECTED_BY_CLUB"


class OfferStatus(str, Enum):
    PENDING_PLAYER_RESPONSE = "PENDING_PLAYER_RESPONSE"
    ACCEPTED_BY_PLAYER = "ACCEPTED_BY_PLAYER"
    REJECTED_BY_PLAYER = "REJECTED_BY_PLAYER"
    EXPIRED = "EXPIRED"
    WITHDRAWN_BY_CLUB = "WITHDRAWN_BY_CLUB"


class TransferWindowStatus(str, Enum):
    OPEN_PRE_SEASON = "OPEN_PRE_SEASON"
    OPEN_MID_SEASON = "OPEN_MID_SEASON"
    CLOSED = "CLOSED"


class InteractionType(str, Enum):
    MANAGER_TALK_FORM = "MANAGER_TALK_FORM"
    MEDIA_INTERVIEW_POST_MATCH = "MEDIA_INTERVIEW_POST_MATCH"


class InteractionStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class EffectTarget(str, Enum):
    PLAYER_ATTRIBUTE = "PLAYER_ATTRIBUTE"
    MANAGER_RELATIONSHIP = "MANAGER_RELATIONSHIP"


class InjurySeverity(str, Enum):
    MINOR = "Minor"
    MODERATE = "Moderate"
    SERIOUS = "Serious"


class AwardType(str, Enum):
    SEASONAL_LEAGUE = "SEASONAL_LEAGUE"
    SEASONAL_TEAM = "SEASONAL_TEAM"
    CAREER_MILESTONE = "CAREER_MILESTONE"
    SEASONAL_INTERNATIONAL = "SEASONAL_INTERNATIONAL"


class AwardIdBase(str, Enum):
    LEAGUE_TOP_SCORER = "LEAGUE_TOP_SCORER"
    LEAGUE_MOST_ASSISTS = "LEAGUE_MOST_ASSISTS"
    LEAGUE_PLAYER_OF_THE_SEASON = "LEAGUE_PLAYER_OF_THE_SEASON"
    LEAGUE_YOUNG_PLAYER_OF_THE_SEASON = "LEAGUE_YOUNG_PLAYER_OF_THE_SEASON"
    CAREER_GOALS_MILESTONE = "CAREER_GOALS_MILESTONE"
    CAREER_ASSISTS_MILESTONE = "CAREER_ASSISTS_MILESTONE"
    CAREER_APPEARANCES_MILESTONE = "CAREER_APPEARANCES_MILESTONE"
    CAREER_LEAGUE_TITLE_WON = "CAREER_LEAGUE_TITLE_WON"
    CAREER_PROMOTION_WON = "CAREER_PROMOTION_WON"
    CAREER_TRAITS_UNLOCKED_MILESTONE = "CAREER_TRAITS_UNLOCKED_MILESTONE"
    CAREER_INTERNATIONAL_CAPS_MILESTONE = "CAREER_INTERNATIONAL_CAPS_MILESTONE"
    CAREER_INTERNATIONAL_GOALS_MILESTONE = "CAREER_INTERNATIONAL_GOALS_MILESTONE"


class TraitId(str, Enum):
    CLINICAL_FINISHER = "CLINICAL_FINISHER"
    PLAYMAKER_VISION = "PLAYMAKER_VISION"
    DEFENSIVE_ROCK = "DEFENSIVE_ROCK"
    FAN_FAVOURITE = "FAN_FAVOURITE"
    SEASONED_PRO = "SEASONED_PRO"
    GOAL_POACHER = "GOAL_POACHER"
    ASSIST_KING = "ASSIST_KING"
    WORKHORSE = "WORKHORSE"
    SPEED_DEMON = "SPEED_DEMON"


class TacticalInstruction(str, Enum):
    NONE = "NONE"
    MAKE_FORWARD_RUNS = "MAKE_FORWARD_RUNS"
    SHOOT_ON_SIGHT = "SHOOT_ON_SIGHT"
    DRIBBLE_MORE = "DRIBBLE_MORE"
    STAY_BACK_DEFENDING = "STAY_BACK_DEFENDING"
    AGGRESSIVE_TACKLING = "AGGRESSIVE_TACKLING"
    LOOK_FOR_THROUGH_BALLS = "LOOK_FOR_THROUGH_BALLS"
    HOLD_UP_PLAY = "HOLD_UP_PLAY"
