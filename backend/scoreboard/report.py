from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from scoreboard.coerce import Number

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Player:
    ign: str
    agent: str
    kills: Number = 0
    deaths: Number = 0
    assists: Number = 0
    kd: Number = 0
    acs: Number = 0
    first_kills: Number = 0
    clutches_won: Number = 0
    bomb_plants: Number = 0
    # Source record, kept for later stat lookups (e.g. roundsWon).
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def base_name(self) -> str:
        return self.ign.split("#")[0]

    @property
    def kda(self) -> str:
        return f"{self.kills}/{self.deaths}/{self.assists}"


@dataclass(frozen=True)
class TeamStats:
    first_kills: Number = 0
    post_plants: Number = 0
    clutches: Number = 0
    avg_acs: Number = 0
    rounds_won: Optional[Number] = None


@dataclass(frozen=True)
class Team:
    name: str
    players: Tuple[Player, ...] = ()
    stats: TeamStats = field(default_factory=TeamStats)


@dataclass(frozen=True)
class MatchReport:
    map: str = UNKNOWN
    match_score: str = UNKNOWN
    leaderboard: Tuple[Player, ...] = ()
    teams: Tuple[Team, Team] = (Team(name="TeamA"), Team(name="TeamB"))

    @property
    def players(self) -> Tuple[Player, ...]:
        return tuple(player for team in self.teams for player in team.players)
