from __future__ import annotations

from typing import Any, Iterable, List, Sequence

from scoreboard.coerce import display_string, format_fixed, to_number
from scoreboard.report import MatchReport, Player, Team

DEFAULT_CSV_FILENAME = "match_stats.csv"

PLAYER_HEADERS = [
    "Team",
    "IGN",
    "Agent",
    "Kills",
    "Deaths",
    "Assists",
    "K/D",
    "ACS",
    "FirstKills",
    "Clutches",
    "PostPlants",
]
SUMMARY_MARKER = "Team Summary"
SUMMARY_HEADERS = ["Team", "FirstKills", "PostPlants", "Clutches", "AvgTeamACS"]


def _format_kd(player: Player) -> str:
    if player.deaths:
        return format_fixed(to_number(player.kills) / to_number(player.deaths))
    return format_fixed(player.kills)


def player_row(team: Team, player: Player) -> List[Any]:
    return [
        team.name,
        player.ign,
        player.agent,
        player.kills,
        player.deaths,
        player.assists,
        _format_kd(player),
        format_fixed(player.acs),
        to_number(player.first_kills),
        to_number(player.clutches_won),
        to_number(player.bomb_plants),
    ]


def summary_row(team: Team) -> List[Any]:
    stats = team.stats
    return [
        team.name,
        stats.first_kills,
        stats.post_plants,
        stats.clutches,
        format_fixed(stats.avg_acs),
    ]


def report_rows(report: MatchReport) -> List[Sequence[Any]]:
    rows: List[Sequence[Any]] = [PLAYER_HEADERS]
    for team in report.teams:
        rows.extend(player_row(team, player) for player in team.players)
    rows.append([])
    rows.append([SUMMARY_MARKER])
    rows.append(SUMMARY_HEADERS)
    rows.extend(summary_row(team) for team in report.teams)
    return rows


def _join(rows: Iterable[Sequence[Any]]) -> str:
    # Fields are not quoted; names are not expected to contain commas.
    return "\n".join(",".join(display_string(value) for value in row) for row in rows)


def to_csv(report: MatchReport) -> str:
    """Render ``report`` as the scoreboard CSV (player rows, then a team summary)."""
    return _join(report_rows(report))
