from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from scoreboard.coerce import Number
from scoreboard.report import MatchReport


class PlayerLine(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ign: str
    agent: str
    kills: Number = 0
    deaths: Number = 0
    assists: Number = 0
    kd: Number = 0
    kda: str = "0/0/0"
    acs: Number = 0
    first_kills: Number = 0
    clutches_won: Number = 0
    bomb_plants: Number = 0


class TeamStatsSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    first_kills: Number = 0
    post_plants: Number = 0
    clutches: Number = 0
    avg_acs: Number = 0
    rounds_won: Optional[Number] = None


class TeamSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    players: List[PlayerLine] = Field(default_factory=list)
    stats: TeamStatsSummary


class MatchReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    map: str
    match_score: str
    leaderboard: List[PlayerLine] = Field(default_factory=list)
    teams: List[TeamSummary]

    @classmethod
    def from_report(cls, report: MatchReport) -> "MatchReportResponse":
        return cls.model_validate(report)


class HealthResponse(BaseModel):
    status: str = "healthy"
    debug_mode: bool = False
    csv_filename: str
