from __future__ import annotations

import json
import math
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from scoreboard.normalizer import ParseError, extract_map_name, normalize


def _build_player(
    game_name: Optional[str],
    tag_line: Optional[str],
    agent_name: Optional[str] = "Jett",
    team: Optional[str] = None,
    **totals: Any,
) -> Dict[str, Any]:
    stats = {
        "kills": 20,
        "deaths": 10,
        "assists": 5,
        "acs": 250,
        "firstKills": 3,
        "clutchesWon": 1,
        "bombPlants": 2,
        "roundsWon": 13,
    }
    stats.update(totals)
    player: Dict[str, Any] = {"side": {"Total": stats}}
    if game_name is not None:
        player["gameName"] = game_name
    if tag_line is not None:
        player["tagLine"] = tag_line
    if agent_name is not None:
        player["agent"] = {"a1": {"agent": agent_name}}
    if team is not None:
        player["team"] = team
    return player


EXAMPLE = (
    '{"p1":{"gameName":"Ana","tagLine":"NA1","side":{"Total":{"kills":20,"deaths":10,'
    '"assists":5,"acs":250,"firstKills":3,"clutchesWon":1,"bombPlants":2,"roundsWon":13}},'
    '"agent":{"a1":{"agent":"Jett"}}}}'
)


def test_single_player_example() -> None:
    report = normalize(EXAMPLE)

    assert len(report.leaderboard) == 1
    player = report.leaderboard[0]
    assert player.ign == "Ana#NA1"
    assert player.agent == "Jett"
    assert player.kd == 2
    assert player.acs == 250
    assert player.raw["gameName"] == "Ana"

    team_a, team_b = report.teams
    assert team_a.players == ()
    assert team_a.name == "TeamA"
    assert [p.ign for p in team_b.players] == ["Ana#NA1"]
    assert team_b.name == "TeamAna"
    assert report.match_score == "Unknown"
    assert report.map == "Unknown"


def test_invalid_json_raises_parse_error() -> None:
    with pytest.raises(ParseError):
        normalize('{"p1": {')
    with pytest.raises(ParseError):
        normalize('{"p1": {"side": {"Total": {"kills": NaN}}}}')


@pytest.mark.parametrize("raw", ["[1, 2, 3]", "42", "null", '"text"', [], None])
def test_non_object_documents_degrade_to_empty_report(raw) -> None:
    report = normalize(raw)
    assert report.leaderboard == ()
    assert [team.name for team in report.teams] == ["TeamA", "TeamB"]
    assert all(team.players == () for team in report.teams)
    assert report.map == "Unknown"
    assert report.match_score == "Unknown"


def test_missing_fields_default_to_zero_and_unknown() -> None:
    report = normalize({"p1": {}, "p2": "not a player", "p3": 17})

    assert len(report.leaderboard) == 1
    player = report.leaderboard[0]
    assert player.ign == "Unknown"
    assert player.agent == "Unknown"
    assert (player.kills, player.deaths, player.assists, player.kd, player.acs) == (0, 0, 0, 0, 0)


def test_ign_uses_whichever_part_is_present() -> None:
    report = normalize(
        {
            "p1": _build_player("Solo", None, acs=300),
            "p2": _build_player(None, "TAG", acs=200),
            "p3": _build_player("", "", acs=100),
        }
    )
    assert [player.ign for player in report.leaderboard] == ["Solo", "TAG", "Unknown"]


def test_kd_uses_kills_when_no_deaths() -> None:
    report = normalize(
        {
            "p1": _build_player("Ana", "NA1", kills=7, deaths=0),
            "p2": _build_player("Bo", "EU", kills=9, deaths=4),
        }
    )
    by_ign = {player.ign: player for player in report.leaderboard}
    assert by_ign["Ana#NA1"].kd == 7
    assert by_ign["Bo#EU"].kd == 2.25


def test_numeric_strings_and_garbage_are_coerced() -> None:
    report = normalize({"p1": _build_player("Ana", "NA1", kills="18", deaths="x", acs="212.5")})
    player = report.leaderboard[0]
    assert player.kills == 18
    assert player.deaths == 0
    assert player.kd == 18
    assert player.acs == 212.5


def test_leaderboard_sorted_by_acs_with_stable_ties() -> None:
    document = {
        "p1": _build_player("Low", "1", acs=120),
        "p2": _build_player("TieFirst", "1", acs=240),
        "p3": _build_player("Top", "1", acs=310),
        "p4": _build_player("TieSecond", "1", acs=240),
    }
    report = normalize(document)

    assert [player.ign for player in report.leaderboard] == [
        "Top#1",
        "TieFirst#1",
        "TieSecond#1",
        "Low#1",
    ]
    scores = [player.acs for player in report.leaderboard]
    assert all(a >= b for a, b in zip(scores, scores[1:]))


def test_map_name_reads_first_map_entry() -> None:
    assert extract_map_name({"map": {"m1": {"map": "Ascent"}, "m2": {"map": "Bind"}}}) == "Ascent"
    assert extract_map_name({"map": {"m1": {}}}) == "Unknown"
    assert extract_map_name({"map": "Ascent"}) == "Unknown"
    assert extract_map_name({"map": {}}) == "Unknown"
    assert extract_map_name([]) == "Unknown"


def test_map_entry_is_read_like_any_other_record() -> None:
    report = normalize(
        {
            "map": {"m1": {"map": "Haven"}},
            "p1": _build_player("Ana", "NA1"),
        }
    )
    assert report.map == "Haven"
    assert sorted(player.ign for player in report.leaderboard) == ["Ana#NA1", "Unknown"]


def test_match_score_from_team_rounds_won() -> None:
    report = normalize(
        {
            "p1": _build_player("Bo", "EU", team="Blue", roundsWon=13),
            "p2": _build_player("Ana", "NA1", team="Red", roundsWon=7),
        }
    )
    team_a, team_b = report.teams
    assert team_a.name == "TeamBo"
    assert team_b.name == "TeamAna"
    assert report.match_score == "13-7"


def test_all_numbers_are_finite() -> None:
    report = normalize(
        {
            "p1": _build_player("Ana", "NA1", kills=1e400, acs="nan"),
            "p2": _build_player("Bo", "EU", deaths=-2),
        }
    )
    for player in report.leaderboard:
        for value in (player.kills, player.deaths, player.assists, player.kd, player.acs):
            assert math.isfinite(value)
    for team in report.teams:
        assert math.isfinite(team.stats.avg_acs)


def test_normalize_is_deterministic_for_text_and_objects() -> None:
    document = {
        "p1": _build_player("Ana", "NA1", acs=180),
        "p2": _build_player("Bo", "EU", acs=220),
        "p3": _build_player("Cy", "EU", acs=90),
    }
    text = json.dumps(document)

    first = normalize(text)
    assert normalize(text) == first
    assert normalize(document) == first
