"""
Generate the initial world: 5 divisions x 20 teams of NPC players, the user's player,
and one national team per supported nationality.
Uses an optional seeded RNG for reproducibility.

Procedural logic:
- Attribute ranges are position-biased (NPC_SKILL_RANGES overridden by POSITION_SKILL_RANGES).
- Reputation and fan support sit near the division's base reputation.
- Squads are 16-23 players, filled by roster slot: first 15% GK, then DEF, MID, FWD.
- Kit numbers: requested number, then position-conventional, then first free, then overflow.
"""
from __future__ import annotations

import logging
import random
from itertools import product

from models.constants import (
    AVAILABLE_NATIONALITIES,
    FIRST_NAMES,
    GENERATED_SQUAD_MAX,
    INITIAL_PLAYER_AGE,
    INITIAL_PLAYER_REPUTATION,
    INITIAL_USER_PLAYER_NAME,
    LAST_NAMES,
    MAX_ATTRIBUTE_VALUE,
    MAX_KIT_NUMBER,
    MIN_ATTRIBUTE_VALUE_NPC_DEV,
    MIN_PLAYERS_PER_TEAM,
    NATIONAL_TEAM_REPUTATION_RANGE,
    NPC_AGE_RANGE,
    NPC_CONTRACT_SEASONS,
    NPC_SKILL_RANGES,
    NPC_STAR_RANGE,
    OVERFLOW_KIT_NUMBER_RANGE,
    POSITION_KIT_NUMBERS,
    POSITION_SKILL_RANGES,
    PRIMARY_SKILL_BY_POSITION,
    SQUAD_POSITION_MIX,
    TEAMS_PER_DIVISION,
    TEAM_NAME_PREFIXES,
    TEAM_NAME_SUFFIXES,
    USER_CONTRACT_SEASONS,
    USER_PLAYER_ID,
    USER_POSITION_BOOST_RANGE,
    USER_SKILL_RANGES,
    INTERNATIONAL_FIXTURE_WEEKS_DEFAULT,
)
from models.custom_player import CustomPlayerData
from models.enums import DIVISIONS_ORDERED, Attr, Division, Foot, Position
from models.game_state import GameState
from models.league import League, transfer_window_status
from models.national_team import NationalTeam, national_team_id
from models.player import ClubHistoryEntry, Player, PlayerAttributes
from models.ratings import (
    base_budget_for_division,
    base_reputation_for_division,
    calculate_player_value,
    calculate_team_chemistry,
    wage_for_division,
)
from models.team import Team

logger = logging.getLogger(__name__)


def _random_attr(rng: random.Random, lo: int = 30, hi: int = 70) -> int:
    return rng.randint(lo, hi)


def _random_name(rng: random.Random) -> str:
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"


def _unique_team_names(n: int, rng: random.Random) -> list[str]:
    """Generate n unique "<Prefix> <Suffix>" team names (repeats only once the pool is exhausted)."""
    pairs = list(product(TEAM_NAME_PREFIXES, TEAM_NAME_SUFFIXES))
    rng.shuffle(pairs)
    names = [f"{prefix} {suffix}" for prefix, suffix in pairs]
    while len(names) < n:
        names.append(f"{rng.choice(TEAM_NAME_PREFIXES)} {rng.choice(TEAM_NAME_SUFFIXES)}")
    return names[:n]


def _team_id(division: Division, index: int) -> str:
    return f"{''.join(division.value.split())}-{index}"


def _position_for_slot(slot: int, squad_size: int) -> Position:
    for share, position in SQUAD_POSITION_MIX:
        if slot < int(squad_size * share):
            return position
    return SQUAD_POSITION_MIX[-1][1]


# ---------------------------------------------------------------------------
# Kit numbers
# ---------------------------------------------------------------------------

def assign_kit_number(
    player: Player,
    team: Team,
    preferred: int | None,
    rng: random.Random,
) -> int:
    """Pick a kit number for player on team, record it in used_kit_numbers, return it.

    Order: the requested number if free and in 1-99; position-conventional numbers
    (only for the user or NPCs without a preference); first free 1-99; random 100-199.
    """
    used = set(team.used_kit_numbers)
    number: int | None = None

    if preferred is not None and 1 <= preferred <= MAX_KIT_NUMBER and preferred not in used:
        number = preferred
    else:
        if player.is_user_player or not preferred:
            for candidate in POSITION_KIT_NUMBERS[player.preferred_position]:
                if candidate not in used:
                    number = candidate
                    break
        if number is None:
            for candidate in range(1, MAX_KIT_NUMBER + 1):
                if candidate not in used:
                    number = candidate
                    break

    if number is None:
        lo, hi = OVERFLOW_KIT_NUMBER_RANGE
        free_overflow = [n for n in range(lo, hi + 1) if n not in used]
        number = rng.choice(free_overflow) if free_overflow else hi + len(used)
        logger.warning("Team %s has no free kit numbers; assigned overflow %d", team.id, number)

    team.used_kit_numbers.append(number)
    player.current_kit_number = number
    return number


def release_kit_number(team: Team, number: int | None) -> None:
    if number is None:
        return
    team.used_kit_numbers = [n for n in team.used_kit_numbers if n != number]


# ---------------------------------------------------------------------------
# Players
# ---------------------------------------------------------------------------

def _npc_attributes(position: Position, division: Division, rng: random.Random) -> PlayerAttributes:
    base_rep = base_reputation_for_division(division)
    ranges = dict(NPC_SKILL_RANGES)
    ranges.update(POSITION_SKILL_RANGES[position])

    attrs = PlayerAttributes(age=_random_attr(rng, *NPC_AGE_RANGE))
    for attr, (lo, hi) in ranges.items():
        attrs.set(attr, _random_attr(rng, lo, hi))
    attrs.set(Attr.FAN_SUPPORT, _random_attr(rng, max(10, base_rep - 20), min(100, base_rep + 20)))
    attrs.set(Attr.REPUTATION, _random_attr(rng, max(10, base_rep - 10), min(100, base_rep + 10)))
    attrs.set(Attr.SKILL_MOVES, _random_attr(rng, *NPC_STAR_RANGE))
    attrs.set(Attr.WEAK_FOOT_ACCURACY, _random_attr(rng, *NPC_STAR_RANGE))
    attrs.value = calculate_player_value(attrs, division)
    return attrs


def _next_npc_id(team: Team, season: int) -> str:
    existing = {p.id for p in team.players}
    n = len(team.players)
    while True:
        candidate = f"npc-{team.id}-S{season}-{n}"
        if candidate not in existing:
            return candidate
        n += 1


def create_player(
    position: Position,
    team: Team,
    season: int,
    rng: random.Random,
    player_id: str | None = None,
) -> Player:
    """Build an NPC for team. The player is not added to the roster and has no kit number yet."""
    attrs = _npc_attributes(position, team.division, rng)
    return Player(
        id=player_id or _next_npc_id(team, season),
        name=_random_name(rng),
        attributes=attrs,
        preferred_position=position,
        preferred_foot=rng.choice([Foot.LEFT, Foot.RIGHT]),
        nationality=rng.choice(AVAILABLE_NATIONALITIES),
        team_id=team.id,
        weekly_wage=int(wage_for_division(team.division) * rng.uniform(0.8, 1.2)),
        contract_expiry_season=season + _random_attr(rng, *NPC_CONTRACT_SEASONS),
        club_history=[ClubHistoryEntry(team_name=team.name, season=season, joined_week=1)],
    )


def sign_player(team: Team, player: Player, rng: random.Random) -> Player:
    """Add player to team's roster with a kit number and refresh chemistry."""
    player.team_id = team.id
    assign_kit_number(player, team, player.preferred_kit_number, rng)
    team.players.append(player)
    team.team_chemistry = calculate_team_chemistry(team)
    return player


def create_user_player(
    custom: CustomPlayerData | None,
    team: Team,
    rng: random.Random,
) -> Player:
    """The user's 16-year-old on a bottom-tier wage. Added to team's roster with a kit number."""
    custom = custom or CustomPlayerData()
    position = custom.preferred_position or Position.FORWARD
    skill_moves = custom.skill_moves
    weak_foot = custom.weak_foot_accuracy

    base_skill = _random_attr(rng, 40, 60) + (skill_moves - 2) * 2 + (weak_foot - 2)
    attrs = PlayerAttributes(
        morale=70,
        stamina=80,
        form=75,
        reputation=INITIAL_PLAYER_REPUTATION,
        press_relations=50,
        fan_support=30,
        skill=max(MIN_ATTRIBUTE_VALUE_NPC_DEV + 5, min(MAX_ATTRIBUTE_VALUE - 10, base_skill)),
        skill_moves=skill_moves,
        weak_foot_accuracy=weak_foot,
        age=INITIAL_PLAYER_AGE,
    )
    for attr, (lo, hi) in USER_SKILL_RANGES.items():
        attrs.set(attr, _random_attr(rng, lo, hi))
    attrs.set(PRIMARY_SKILL_BY_POSITION[position], _random_attr(rng, *USER_POSITION_BOOST_RANGE))
    attrs.value = calculate_player_value(attrs, Division.FIFTH)

    player = Player(
        id=USER_PLAYER_ID,
        name=custom.name or INITIAL_USER_PLAYER_NAME,
        attributes=attrs,
        preferred_position=position,
        preferred_foot=custom.preferred_foot or Foot.RIGHT,
        nationality=custom.nationality or rng.choice(AVAILABLE_NATIONALITIES),
        is_user_player=True,
        preferred_kit_number=custom.preferred_kit_number,
        weekly_wage=wage_for_division(Division.FIFTH),
        contract_expiry_season=1 + _random_attr(rng, *USER_CONTRACT_SEASONS),
        club_history=[ClubHistoryEntry(team_name=team.name, season=1, joined_week=1, transfer_fee=0)],
    )
    return sign_player(team, player, rng)


# ---------------------------------------------------------------------------
# Teams and world
# ---------------------------------------------------------------------------

def create_team(
    team_id: str,
    name: str,
    division: Division,
    season: int,
    rng: random.Random,
) -> Team:
    """A club with 16-23 NPCs in a realistic positional mix."""
    team = Team(
        id=team_id,
        name=name,
        division=division,
        budget=int(base_budget_for_division(division) * rng.uniform(0.8, 1.2)),
        reputation=base_reputation_for_division(division) + _random_attr(rng, -10, 10),
    )
    squad_size = _random_attr(rng, MIN_PLAYERS_PER_TEAM, GENERATED_SQUAD_MAX)
    for slot in range(squad_size):
        npc = create_player(_position_for_slot(slot, squad_size), team, season, rng, player_id=f"npc-{team_id}-{slot}")
        assign_kit_number(npc, team, npc.preferred_kit_number, rng)
        team.players.append(npc)
    team.team_chemistry = calculate_team_chemistry(team)
    return team


def create_national_teams(rng: random.Random) -> list[NationalTeam]:
    return [
        NationalTeam(
            id=national_team_id(nation),
            name=f"{nation} National Team",
            nationality_represented=nation,
            reputation=_random_attr(rng, *NATIONAL_TEAM_REPUTATION_RANGE),
            manager_name=f"National Coach {nation[:3]}",
        )
        for nation in AVAILABLE_NATIONALITIES
    ]


def create_initial_world(
    custom: CustomPlayerData | None = None,
    rng: random.Random | None = None,
) -> GameState:
    """Build a fresh snapshot: 5 x 20 teams, the user's player in the bottom division, 20 nations."""
    rng = rng or random.Random()
    league = League()
    teams: list[Team] = []
    names = _unique_team_names(len(DIVISIONS_ORDERED) * TEAMS_PER_DIVISION, rng)

    for div_idx, division in enumerate(DIVISIONS_ORDERED):
        for i in range(TEAMS_PER_DIVISION):
            team = create_team(
                _team_id(division, i),
                names[div_idx * TEAMS_PER_DIVISION + i],
                division,
                1,
                rng,
            )
            teams.append(team)
            league.divisions[division].append(team.id)

    bottom = [t for t in teams if t.division == DIVISIONS_ORDERED[-1]]
    user_team = rng.choice(bottom or teams)
    user = create_user_player(custom, user_team, rng)
    logger.info("Created world: %d teams, user %r at %s", len(teams), user.name, user_team.name)

    return GameState(
        user_player_id=user.id,
        teams=teams,
        league=league,
        game_log=["Game initialized. Welcome to your football career!"],
        transfer_window_status=transfer_window_status(1),
        national_teams=create_national_teams(rng),
        international_fixture_weeks=list(INTERNATIONAL_FIXTURE_WEEKS_DEFAULT),
        is_player_created=custom is not None,
    )
