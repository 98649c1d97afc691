"""Plain-text scoreboard views: match header, team cards, leaderboard, player tables."""
from __future__ import annotations

from typing import List, Sequence

from scoreboard.coerce import display_string, format_fixed
from scoreboard.report import MatchReport, Player, Team

RULE_WIDTH = 80


def _table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> List[str]:
    widths = [len(header) for header in headers]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]

    def line(cells: Sequence[str]) -> str:
        return " | ".join(f"{cell:<{width}}" for cell, width in zip(cells, widths)).rstrip()

    out = [line(headers), "-+-".join("-" * width for width in widths)]
    out.extend(line(row) for row in rows)
    return out


def render_match_header(report: MatchReport) -> List[str]:
    return [f"Map:   {report.map}", f"Score: {report.match_score}"]


def render_team_card(team: Team) -> List[str]:
    stats = team.stats
    return [
        team.name,
        f"  First kills:  {display_string(stats.first_kills)}",
        f"  Post plants:  {display_string(stats.post_plants)}",
        f"  Clutches:     {display_string(stats.clutches)}",
        f"  Avg team ACS: {format_fixed(stats.avg_acs)}",
    ]


def render_leaderboard(leaderboard: Sequence[Player]) -> List[str]:
    rows = [
        [player.ign, player.agent, player.kda, format_fixed(player.acs)]
        for player in leaderboard
    ]
    return _table(["IGN", "Agent", "K/D/A", "ACS"], rows)


def render_player_table(team: Team) -> List[str]:
    headers = [
        "IGN",
        "Agent",
        "Kills",
        "Deaths",
        "Assists",
        "K/D",
        "ACS",
        "First Kills",
        "Clutches",
        "Post Plants",
    ]
    rows = [
        [
            player.ign,
            player.agent,
            display_string(player.kills),
            display_string(player.deaths),
            display_string(player.assists),
            format_fixed(player.kd),
            format_fixed(player.acs),
            display_string(player.first_kills),
            display_string(player.clutches_won),
            display_string(player.bomb_plants),
        ]
        for player in team.players
    ]
    return [team.name] + _table(headers, rows)


def render_scoreboard(report: MatchReport) -> str:
    lines = ["Match", "=" * RULE_WIDTH]
    lines.extend(render_match_header(report))
    lines.append("")
    lines.append("Teams")
    lines.append("=" * RULE_WIDTH)
    for team in report.teams:
        lines.extend(render_team_card(team))
    lines.append("")
    lines.append("Player Leaderboard (by ACS)")
    lines.append("=" * RULE_WIDTH)
    lines.extend(render_leaderboard(report.leaderboard))
    lines.append("")
    lines.append("All Players")
    lines.append("=" * RULE_WIDTH)
    for team in report.teams:
        lines.extend(render_player_table(team))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
