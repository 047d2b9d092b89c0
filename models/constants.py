"""
League structure, tuning ranges and static rule tables for Football Career Mode.
Everything here is read-only configuration: tables are tuples of frozen records
and are never mutated at runtime.
"""
from dataclasses import dataclass
from typing import Dict

from .enums import (
    Attr,
    AwardIdBase,
    Division,
    InjurySeverity,
    Position,
    TacticalInstruction,
    TraitId,
)

# ---------------------------------------------------------------------------
# League shape
# ---------------------------------------------------------------------------
TEAMS_PER_DIVISION = 20
WEEKS_PER_SEASON = (TEAMS_PER_DIVISION - 1) * 2  # 38
PROMOTION_COUNT = 3
RELEGATION_COUNT = 3

MIN_PLAYERS_PER_TEAM = 16
MAX_PLAYERS_PER_TEAM = 28
# Generated squads stop short of the cap so clubs have room to sign
GENERATED_SQUAD_MAX = MAX_PLAYERS_PER_TEAM - 5

# Squad mix by cumulative share: first 15% GK, up to 45% DEF, up to 75% MID, rest FWD
SQUAD_POSITION_MIX: tuple[tuple[float, Position], ...] = (
    (0.15, Position.GOALKEEPER),
    (0.45, Position.DEFENDER),
    (0.75, Position.MIDFIELDER),
    (1.00, Position.FORWARD),
)

GAME_LOG_LIMIT = 50

# ---------------------------------------------------------------------------
# Attribute scales
# ---------------------------------------------------------------------------
MAX_ATTRIBUTE_VALUE = 99
MAX_PERCENT_VALUE = 100
MIN_STAR_RATING = 1
MAX_STAR_RATING = 5
MIN_ATTRIBUTE_VALUE_NPC_DEV = 20

# (lo, hi) for every attribute; adjust() clamps into these
ATTRIBUTE_BOUNDS: Dict[Attr, tuple[int, int]] = {
    Attr.GOALKEEPING: (0, MAX_ATTRIBUTE_VALUE),
    Attr.TACKLE: (0, MAX_ATTRIBUTE_VALUE),
    Attr.PASSING: (0, MAX_ATTRIBUTE_VALUE),
    Attr.SHOOTING: (0, MAX_ATTRIBUTE_VALUE),
    Attr.HEADING: (0, MAX_ATTRIBUTE_VALUE),
    Attr.SPEED: (0, MAX_ATTRIBUTE_VALUE),
    Attr.SKILL: (0, MAX_ATTRIBUTE_VALUE),
    Attr.MORALE: (0, MAX_PERCENT_VALUE),
    Attr.STAMINA: (0, MAX_PERCENT_VALUE),
    Attr.FORM: (0, MAX_PERCENT_VALUE),
    Attr.REPUTATION: (0, MAX_PERCENT_VALUE),
    Attr.PRESS_RELATIONS: (0, MAX_PERCENT_VALUE),
    Attr.FAN_SUPPORT: (0, MAX_PERCENT_VALUE),
    Attr.SKILL_MOVES: (MIN_STAR_RATING, MAX_STAR_RATING),
    Attr.WEAK_FOOT_ACCURACY: (MIN_STAR_RATING, MAX_STAR_RATING),
}

SKILL_ATTRIBUTES: tuple[Attr, ...] = (
    Attr.GOALKEEPING, Attr.TACKLE, Attr.PASSING, Attr.SHOOTING,
    Attr.HEADING, Attr.SPEED, Attr.SKILL,
)
STAR_ATTRIBUTES: tuple[Attr, ...] = (Attr.SKILL_MOVES, Attr.WEAK_FOOT_ACCURACY)

# Attributes that age-band development touches for NPCs
DEVELOPABLE_ATTRIBUTES: tuple[Attr, ...] = (
    Attr.GOALKEEPING, Attr.TACKLE, Attr.PASSING, Attr.SHOOTING, Attr.HEADING,
    Attr.STAMINA, Attr.SPEED, Attr.SKILL, Attr.SKILL_MOVES, Attr.WEAK_FOOT_ACCURACY,
)
PHYSICAL_ATTRIBUTES: tuple[Attr, ...] = (Attr.SPEED, Attr.STAMINA)

# Primary skill used for match performance by position
PRIMARY_SKILL_BY_POSITION: Dict[Position, Attr] = {
    Position.GOALKEEPER: Attr.GOALKEEPING,
    Position.DEFENDER: Attr.TACKLE,
    Position.MIDFIELDER: Attr.PASSING,
    Position.FORWARD: Attr.SHOOTING,
}

# ---------------------------------------------------------------------------
# Entity generation ranges
# ---------------------------------------------------------------------------
# Default NPC range per skill; POSITION_SKILL_RANGES overrides per position
NPC_SKILL_RANGES: Dict[Attr, tuple[int, int]] = {
    Attr.GOALKEEPING: (10, 30),
    Attr.TACKLE: (30, 60),
    Attr.PASSING: (40, 70),
    Attr.SHOOTING: (30, 60),
    Attr.HEADING: (40, 70),
    Attr.SPEED: (40, 75),
    Attr.SKILL: (40, 70),
    Attr.MORALE: (60, 90),
    Attr.STAMINA: (50, 80),
    Attr.FORM: (50, 80),
    Attr.PRESS_RELATIONS: (40, 70),
}
POSITION_SKILL_RANGES: Dict[Position, Dict[Attr, tuple[int, int]]] = {
    Position.GOALKEEPER: {Attr.GOALKEEPING: (50, 75), Attr.SHOOTING: (10, 25), Attr.TACKLE: (10, 25)},
    Position.DEFENDER: {Attr.TACKLE: (50, 75), Attr.SHOOTING: (20, 40)},
    Position.MIDFIELDER: {},
    Position.FORWARD: {Attr.SHOOTING: (50, 75), Attr.TACKLE: (20, 40)},
}
NPC_AGE_RANGE: tuple[int, int] = (18, 28)
NPC_STAR_RANGE: tuple[int, int] = (1, 3)
NPC_CONTRACT_SEASONS: tuple[int, int] = (1, 3)

INITIAL_PLAYER_AGE = 16
INITIAL_PLAYER_REPUTATION = 30
INITIAL_USER_PLAYER_NAME = "My Player"
USER_PLAYER_ID = "user-player"
USER_CONTRACT_SEASONS: tuple[int, int] = (1, 2)
# Starting ranges for the user's own player
USER_SKILL_RANGES: Dict[Attr, tuple[int, int]] = {
    Attr.GOALKEEPING: (30, 50),
    Attr.TACKLE: (40, 60),
    Attr.PASSING: (45, 65),
    Attr.SHOOTING: (45, 65),
    Attr.HEADING: (40, 60),
    Attr.SPEED: (45, 65),
}
USER_POSITION_BOOST_RANGE: tuple[int, int] = (50, 65)

# Kit numbers traditionally worn by each position
POSITION_KIT_NUMBERS: Dict[Position, tuple[int, ...]] = {
    Position.GOALKEEPER: (1,),
    Position.DEFENDER: (2, 3, 4, 5, 6),
    Position.MIDFIELDER: (6, 7, 8, 10, 11),
    Position.FORWARD: (7, 9, 10, 11),
}
MAX_KIT_NUMBER = 99
OVERFLOW_KIT_NUMBER_RANGE: tuple[int, int] = (100, 199)

# ---------------------------------------------------------------------------
# Division economics
# ---------------------------------------------------------------------------
WAGE_BY_DIVISION: Dict[Division, int] = {
    Division.FIRST: 5000,
    Division.SECOND: 2500,
    Division.THIRD: 1200,
    Division.FOURTH: 750,
    Division.FIFTH: 250,
}
BASE_REPUTATION_BY_DIVISION: Dict[Division, int] = {
    Division.FIRST: 75,
    Division.SECOND: 60,
    Division.THIRD: 45,
    Division.FOURTH: 30,
    Division.FIFTH: 15,
}
BASE_BUDGET_BY_DIVISION: Dict[Division, int] = {
    Division.FIRST: 50_000_000,
    Division.SECOND: 10_000_000,
    Division.THIRD: 2_000_000,
    Division.FOURTH: 500_000,
    Division.FIFTH: 100_000,
}

MIN_PLAYER_VALUE = 1000
MAX_PLAYER_VALUE = 100_000_000

# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------
TEAM_NAME_PREFIXES = ["United", "City", "Rovers", "Wanderers", "Albion", "Athletic", "Town", "County", "FC", "Sporting"]
TEAM_NAME_SUFFIXES = ["North", "South", "East", "West", "Central", "Metropolitan", "Valley", "Hills", "River", "Coastal"]
FIRST_NAMES = [
    "Alex", "Ben", "Chris", "David", "Ethan", "Finn", "George", "Harry", "Ian", "Jack",
    "Kyle", "Liam", "Max", "Noah", "Oscar", "Paul", "Quinn", "Ryan", "Sam", "Tom",
]
LAST_NAMES = [
    "Smith", "Jones", "Williams", "Brown", "Davis", "Miller", "Wilson", "Moore", "Taylor", "Anderson",
    "Thomas", "Jackson", "White", "Harris", "Martin", "Thompson", "Garcia", "Martinez", "Robinson", "Clark",
]

# ---------------------------------------------------------------------------
# Transfers
# ---------------------------------------------------------------------------
TRANSFER_WINDOW_PRE_SEASON_WEEKS: tuple[int, int] = (1, 4)
TRANSFER_WINDOW_MID_SEASON_WEEKS: tuple[int, int] = (WEEKS_PER_SEASON // 2 - 1, WEEKS_PER_SEASON // 2 + 2)
OFFER_EXPIRY_DURATION_WEEKS = 2
# Terminal offers older than this (by offer date) are dropped from the snapshot
OFFER_HISTORY_WEEKS = 6
MARKET_ACTIVITY_CHANCE = 0.3
MIN_TRANSFER_FEE = 500
NEUTRAL_MANAGER_RELATIONSHIP = 50

# ---------------------------------------------------------------------------
# Interactions
# ---------------------------------------------------------------------------
INTERACTION_EXPIRY_DURATION_WEEKS = 2
INTERACTION_HISTORY_WEEKS = 6
MEDIA_INTERVIEW_CHANCE = 0.4
MANAGER_TALK_CHANCE = 0.2

# ---------------------------------------------------------------------------
# Season awards
# ---------------------------------------------------------------------------
MIN_APPEARANCES_FOR_SEASONAL_AWARDS = WEEKS_PER_SEASON // 2
YOUNG_PLAYER_AGE_LIMIT = 21
MIN_AVERAGE_RATING_FOR_AWARD = 6.0
RETIREMENT_START_AGE = 33
RETIREMENT_AGE_SPREAD = 7

# ---------------------------------------------------------------------------
# International play
# ---------------------------------------------------------------------------
AVAILABLE_NATIONALITIES: list[str] = [
    "England", "Brazil", "Germany", "Argentina", "France",
    "Spain", "Italy", "Netherlands", "Portugal", "Belgium",
    "USA", "Mexico", "Japan", "South Korea", "Australia",
    "Nigeria", "Egypt", "Canada", "Sweden", "Norway",
]
NATIONAL_TEAM_SQUAD_SIZE = 23
MIN_REPUTATION_FOR_NATIONAL_CALL = 65
NATIONAL_TEAM_SELECTION_MIN_FORM = 60
INTERNATIONAL_FIXTURE_WEEKS_DEFAULT: tuple[int, ...] = (8, 12, 26, 30)
NATIONAL_TEAM_REPUTATION_RANGE: tuple[int, int] = (60, 85)

# ---------------------------------------------------------------------------
# Injuries
# ---------------------------------------------------------------------------
INJURY_BASE_CHANCE_PER_MATCH = 0.05
INJURY_CHANCE_STAMINA_FACTOR = 0.001  # per stamina point below 50
INJURY_CHANCE_AGE_FACTOR = 0.0005  # per year over 30
INJURY_TRAIT_REDUCTION = 0.85
INJURY_TYPES = [
    "Sprained Ankle", "Pulled Hamstring", "Bruised Ribs", "Twisted Knee",
    "Strained Groin", "Calf Strain", "Shoulder Dislocation",
]
# severity -> (cumulative roll threshold, min weeks, max weeks, form hit, morale hit)
INJURY_SEVERITY_TABLE: tuple[tuple[InjurySeverity, float, int, int, int, int], ...] = (
    (InjurySeverity.MINOR, 0.6, 1, 2, 10, 5),
    (InjurySeverity.MODERATE, 0.9, 3, 6, 20, 10),
    (InjurySeverity.SERIOUS, 1.0, 8, 24, 30, 15),
)
PHYSIO_RECOVERY_BOOST_CHANCE = 0.3

# ---------------------------------------------------------------------------
# NPC development by age band
# ---------------------------------------------------------------------------
# Youngest band first; upper bound is exclusive. See simulation/development.py.
AGE_BAND_GROWTH = 20
AGE_BAND_YOUNG = 25
AGE_BAND_PRIME = 30
AGE_BAND_VETERAN = 34


@dataclass(frozen=True)
class AgeBandCurve:
    """Once-a-season NPC development for ages below max_age (None: no upper bound).

    skill and physical are inclusive (low, high) deltas for technical skills and
    for speed/stamina.  In a growth band an attribute at or above soft_cap only
    gains 0-1.  Star ratings gain 0-1 below star_growth_cap; otherwise they drop
    one with star_down_chance, else rise one with star_up_chance.
    """

    max_age: int | None
    skill: tuple[int, int]
    physical: tuple[int, int]
    soft_cap: int | None = None
    star_growth_cap: int | None = None
    star_up_chance: float = 0.0
    star_down_chance: float = 0.0


NPC_AGE_BAND_CURVES: tuple[AgeBandCurve, ...] = (
    AgeBandCurve(AGE_BAND_GROWTH, skill=(1, 3), physical=(1, 3), soft_cap=85, star_growth_cap=4),
    AgeBandCurve(AGE_BAND_YOUNG, skill=(0, 2), physical=(0, 2), soft_cap=80),
    AgeBandCurve(AGE_BAND_PRIME, skill=(-1, 1), physical=(-1, 0), star_up_chance=0.2, star_down_chance=0.1),
    AgeBandCurve(AGE_BAND_VETERAN, skill=(-1, 0), physical=(-3, -1), star_down_chance=0.3),
    AgeBandCurve(None, skill=(-2, -1), physical=(-4, -2), star_down_chance=0.5),
)

# Goalkeepers keep their main skill longer
GK_GROWTH_AGE_LIMIT = 27
GK_GROWTH_CAP = 85
GK_DECLINE_AGE = 32
GK_MAX_DECLINE = 2


# ---------------------------------------------------------------------------
# Rule tables (traits, milestones, training, tactics)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TraitCondition:
    """One unlock condition. kind is "attribute", "age" or "season_stat"."""

    kind: str
    threshold: int
    attribute: Attr | None = None
    stat: str = ""


@dataclass(frozen=True)
class TraitDefinition:
    id: TraitId
    name: str
    description: str
    conditions: tuple[TraitCondition, ...]
    effect_description: str = ""


@dataclass(frozen=True)
class MilestoneDefinition:
    id_base: AwardIdBase
    thresholds: tuple[int, ...]
    name_template: str
    description_template: str
    stat: str  # key understood by simulation.traits.milestone_stat_value


@dataclass(frozen=True)
class TrainingOption:
    id: str
    name: str
    description: str
    cost: int
    improvement: int
    attribute: Attr | None = None  # None for physio


@dataclass(frozen=True)
class TacticalInstructionInfo:
    id: TacticalInstruction
    name: str
    description: str
    category: str
    conflicts_with: tuple[TacticalInstruction, ...] = ()


AVAILABLE_PLAYER_TRAITS: tuple[TraitDefinition, ...] = (
    TraitDefinition(
        TraitId.CLINICAL_FINISHER, "Clinical Finisher",
        "Excels at finding the back of the net when an opportunity arises.",
        (TraitCondition("attribute", 80, attribute=Attr.SHOOTING),),
        "Slightly improves shot accuracy and conversion rate.",
    ),
    TraitDefinition(
        TraitId.PLAYMAKER_VISION, "Playmaker Vision",
        "Possesses an uncanny ability to spot and execute defense-splitting passes.",
        (TraitCondition("attribute", 80, attribute=Attr.PASSING),),
        "Slightly increases the likelihood of successful key passes.",
    ),
    TraitDefinition(
        TraitId.DEFENSIVE_ROCK, "Defensive Rock",
        "A formidable presence in defense, consistently winning challenges.",
        (TraitCondition("attribute", 80, attribute=Attr.TACKLE),),
        "Slightly improves tackle success rate.",
    ),
    TraitDefinition(
        TraitId.FAN_FAVOURITE, "Fan Favourite",
        "Adored by the fans, which boosts morale and support.",
        (TraitCondition("attribute", 85, attribute=Attr.FAN_SUPPORT),),
        "Increases fan support gain and provides a small rating boost after wins.",
    ),
    TraitDefinition(
        TraitId.SEASONED_PRO, "Seasoned Pro",
        "Years of experience allow for better game management and stamina conservation.",
        (TraitCondition("age", 28),),
        "Reduces stamina loss from matches and slightly reduces injury risk.",
    ),
    TraitDefinition(
        TraitId.GOAL_POACHER, "Goal Poacher",
        "A natural instinct for being in the right place at the right time to score.",
        (TraitCondition("season_stat", 15, stat="goals"),),
        "Small bonus to shot volume in attacking situations.",
    ),
    TraitDefinition(
        TraitId.ASSIST_KING, "Assist King",
        "Master of the final pass, regularly setting up teammates.",
        (TraitCondition("season_stat", 10, stat="assists"),),
        "Small bonus to assist probability.",
    ),
    TraitDefinition(
        TraitId.WORKHORSE, "Workhorse",
        "Tirelessly covers ground for the team, maintaining high energy levels.",
        (TraitCondition("attribute", 85, attribute=Attr.STAMINA),),
        "Stamina depletes slightly slower during matches.",
    ),
    TraitDefinition(
        TraitId.SPEED_DEMON, "Speed Demon",
        "Blazing pace that leaves opponents in the dust.",
        (TraitCondition("attribute", 85, attribute=Attr.SPEED),),
        "Grants a slight edge in pace-related situations during matches.",
    ),
)

CAREER_MILESTONE_DEFINITIONS: tuple[MilestoneDefinition, ...] = (
    MilestoneDefinition(
        AwardIdBase.CAREER_GOALS_MILESTONE, (10, 25, 50, 100, 150, 200, 300),
        "Goal Machine: {X} Goals", "Celebrated scoring {X} career goals.", "total_goals",
    ),
    MilestoneDefinition(
        AwardIdBase.CAREER_ASSISTS_MILESTONE, (10, 25, 50, 100, 150, 200),
        "Assist Virtuoso: {X} Assists", "Provided {X} career assists for teammates.", "total_assists",
    ),
    MilestoneDefinition(
        AwardIdBase.CAREER_APPEARANCES_MILESTONE, (25, 50, 100, 200, 300, 400, 500),
        "Club Legend: {X} Appearances", "Made {X} professional appearances.", "total_appearances",
    ),
    MilestoneDefinition(
        AwardIdBase.CAREER_TRAITS_UNLOCKED_MILESTONE, (1, 3, 5, 7),
        "Specialist: {X} Traits", "Mastered {X} unique player traits.", "traits_unlocked",
    ),
    MilestoneDefinition(
        AwardIdBase.CAREER_INTERNATIONAL_CAPS_MILESTONE, (1, 5, 10, 25, 50, 75, 100),
        "International Star: {X} Caps", "Earned {X} caps for their national team.", "international_caps",
    ),
    MilestoneDefinition(
        AwardIdBase.CAREER_INTERNATIONAL_GOALS_MILESTONE, (1, 5, 10, 20, 30, 50),
        "National Hero: {X} Int. Goals", "Scored {X} goals for their country.", "international_goals",
    ),
)

PHYSIO_OPTION_ID = "physio"
REST_OPTION_ID = "stamina"

AVAILABLE_TRAINING_OPTIONS: tuple[TrainingOption, ...] = (
    TrainingOption("shooting", "Shooting Practice", "Improve your finishing.", 7, 2, Attr.SHOOTING),
    TrainingOption("passing", "Passing Drills", "Enhance passing accuracy.", 6, 2, Attr.PASSING),
    TrainingOption("tackle", "Defensive Work", "Sharpen tackling skills.", 8, 2, Attr.TACKLE),
    TrainingOption("speed", "Sprint Training", "Increase your pace.", 10, 1, Attr.SPEED),
    TrainingOption("skill", "Skill Drills", "Improve technical ability & general skill.", 5, 2, Attr.SKILL),
    TrainingOption("skill_moves", "Skill Moves Training", "Improve star rating for skill moves (max 5).", 6, 1, Attr.SKILL_MOVES),
    TrainingOption("weak_foot_accuracy", "Weak Foot Training", "Improve star rating for weak foot (max 5).", 6, 1, Attr.WEAK_FOOT_ACCURACY),
    TrainingOption(REST_OPTION_ID, "Endurance Run", "Build up stamina.", 0, 3, Attr.STAMINA),
    TrainingOption("goalkeeping", "GK Training", "For goalkeepers only.", 7, 2, Attr.GOALKEEPING),
    TrainingOption("heading", "Heading Practice", "Improve aerial ability.", 5, 1, Attr.HEADING),
    TrainingOption("reputation", "Media Training", "Improve press relations & reputation.", 3, 1, Attr.REPUTATION),
    TrainingOption(PHYSIO_OPTION_ID, "Physio Session", "Work with medical staff to aid injury recovery.", 0, 0),
)
TRAINING_OPTIONS_BY_ID: Dict[str, TrainingOption] = {o.id: o for o in AVAILABLE_TRAINING_OPTIONS}

AVAILABLE_TACTICAL_INSTRUCTIONS: tuple[TacticalInstructionInfo, ...] = (
    TacticalInstructionInfo(TacticalInstruction.NONE, "Balanced Approach", "No specific tactical emphasis. Play your natural game.", "General"),
    TacticalInstructionInfo(
        TacticalInstruction.MAKE_FORWARD_RUNS, "Make Forward Runs", "Focus on getting into attacking positions more often.", "Attacking",
        (TacticalInstruction.STAY_BACK_DEFENDING, TacticalInstruction.HOLD_UP_PLAY),
    ),
    TacticalInstructionInfo(TacticalInstruction.SHOOT_ON_SIGHT, "Shoot on Sight", "Take more shots when opportunities arise, even from distance.", "Attacking"),
    TacticalInstructionInfo(TacticalInstruction.DRIBBLE_MORE, "Dribble More", "Attempt to take on opponents with the ball more frequently.", "Attacking"),
    TacticalInstructionInfo(TacticalInstruction.LOOK_FOR_THROUGH_BALLS, "Look for Through Balls", "Prioritize trying to play incisive passes to create scoring chances.", "Playmaking"),
    TacticalInstructionInfo(
        TacticalInstruction.HOLD_UP_PLAY, "Hold Up Play", "Focus on retaining possession high up the pitch, bringing teammates into play.", "Playmaking",
        (TacticalInstruction.MAKE_FORWARD_RUNS,),
    ),
    TacticalInstructionInfo(
        TacticalInstruction.STAY_BACK_DEFENDING, "Stay Back Defending", "Prioritize defensive duties and maintain a cautious position.", "Defensive",
        (TacticalInstruction.MAKE_FORWARD_RUNS,),
    ),
    TacticalInstructionInfo(TacticalInstruction.AGGRESSIVE_TACKLING, "Aggressive Tackling", "Attempt more tackles and apply high pressure when defending.", "Defensive"),
)
TACTICAL_INSTRUCTIONS_BY_ID: Dict[TacticalInstruction, TacticalInstructionInfo] = {
    t.id: t for t in AVAILABLE_TACTICAL_INSTRUCTIONS
}

# Placeholder narrative strings
NARRATIVE_LOADING = "Loading summary..."
NARRATIVE_PENDING = "Summary pending..."
NARRATIVE_UNAVAILABLE = "Match summary generation is currently unavailable."
NARRATIVE_FAILED = "Could not retrieve detailed match summary at this time."
MEDIA_QUESTION_FALLBACK = "The media had no specific questions for you after the last game."
