"""Turn a raw match export into a ``MatchReport``.

The export is a flat JSON object keyed by player PUUID. Each value may carry
``gameName``/``tagLine``, per-side stats under ``side.Total`` and the agent
under ``agent.<agentId>.agent``. A root-level ``map.<id>.map`` names the map.
Every field is optional: missing pieces fall back to zeros and ``"Unknown"``.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, List, Optional, Union

from scoreboard.coerce import display_string, first_key, is_truthy, lookup, to_number
from scoreboard.report import UNKNOWN, MatchReport, Player
from scoreboard.teams import TeamSplitStrategy, build_teams

logger = logging.getLogger(__name__)

STAT_FIELDS = {
    "kills": "kills",
    "deaths": "deaths",
    "assists": "assists",
    "acs": "acs",
    "first_kills": "firstKills",
    "clutches_won": "clutchesWon",
    "bomb_plants": "bombPlants",
}


class ParseError(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_document(raw: Union[str, Any]) -> Any:
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ParseError(f"Invalid JSON: {exc}") from exc


def extract_map_name(data: Any) -> str:
    if not isinstance(data, dict):
        return UNKNOWN
    maps = data.get("map")
    if not isinstance(maps, (dict, list)):
        return UNKNOWN
    key = first_key(maps)
    if key is None:
        return UNKNOWN
    name = lookup(maps, key, "map")
    return display_string(name) if is_truthy(name) else UNKNOWN


def _extract_ign(record: Dict[str, Any]) -> str:
    parts = [
        display_string(record.get(name))
        for name in ("gameName", "tagLine")
        if is_truthy(record.get(name))
    ]
    return "#".join(parts) or UNKNOWN


def _extract_agent(record: Dict[str, Any]) -> str:
    agents = record.get("agent")
    if not isinstance(agents, (dict, list)):
        return UNKNOWN
    key = first_key(agents)
    if key is None:
        return UNKNOWN
    name = lookup(agents, key, "agent")
    return display_string(name) if is_truthy(name) else UNKNOWN


def extract_player(record: Dict[str, Any]) -> Player:
    total = lookup(record, "side", "Total")
    if not is_truthy(total):
        total = {}
    stats = {attr: to_number(lookup(total, key)) for attr, key in STAT_FIELDS.items()}
    kills, deaths = stats["kills"], stats["deaths"]
    kd = kills / deaths if deaths > 0 else kills
    return Player(
        ign=_extract_ign(record),
        agent=_extract_agent(record),
        kd=kd,
        raw=record,
        **stats,
    )


def extract_players(data: Any) -> List[Player]:
    if not isinstance(data, dict):
        return []
    return [extract_player(record) for record in data.values() if isinstance(record, dict)]


def build_leaderboard(players: List[Player]) -> List[Player]:
    # sorted() is stable, ties keep document order.
    return sorted(players, key=lambda player: player.acs, reverse=True)


def match_score(teams) -> str:
    scores = [team.stats.rounds_won for team in teams]
    if any(score is None for score in scores):
        return UNKNOWN
    return "-".join(str(score) for score in scores)


def normalize(raw: Union[str, Any], strategy: Optional[TeamSplitStrategy] = None) -> MatchReport:
    """Build a ``MatchReport`` from JSON text or an already parsed document.

    Raises ``ParseError`` when ``raw`` is text that is not valid JSON. Any
    other shape degrades to defaults instead of raising.
    """
    t0 = time.perf_counter()
    data = parse_document(raw)
    if not isinstance(data, dict):
        logger.debug(f"[NORMALIZE] document is {type(data).__name__}, not an object")

    players = extract_players(data)
    teams = build_teams(players, strategy)
    report = MatchReport(
        map=extract_map_name(data),
        match_score=match_score(teams),
        leaderboard=tuple(build_leaderboard(players)),
        teams=teams,
    )
    logger.debug(
        f"[NORMALIZE] {len(players)} players, map={report.map}, score={report.match_score} "
        f"({time.perf_counter() - t0:.4f}s)"
    )
    return report
