"""Team inference and per-team aggregation.

Match exports carry no reliable team identity, so players are bucketed by a
deterministic heuristic. The heuristic sits behind ``TeamSplitStrategy`` so
a real team-ID source can be dropped in without touching aggregation.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from scoreboard.coerce import char_code_sum, display_string, is_truthy, lookup, to_number
from scoreboard.report import Player, Team, TeamStats

TEAM_HINT_FIELDS = ("team", "Team", "teamId", "party")
DEFAULT_TEAM_LABELS = ("A", "B")


class TeamSplitStrategy:
    """Split players into two ordered teams."""

    def split(self, players: Sequence[Player]) -> Tuple[List[Player], List[Player]]:
        raise NotImplementedError


def grouping_key(player: Player) -> str:
    for name in TEAM_HINT_FIELDS:
        hint = player.raw.get(name) if isinstance(player.raw, dict) else None
        if is_truthy(hint):
            return display_string(hint)
    return player.ign


class ParityHashSplit(TeamSplitStrategy):
    """Bucket by parity of the grouping key's character-code sum.

    Even sums go to team A, odd sums to team B. This is repeatable for a given
    input but says nothing about real team membership when no hint field is
    present.
    """

    def split(self, players: Sequence[Player]) -> Tuple[List[Player], List[Player]]:
        team_a: List[Player] = []
        team_b: List[Player] = []
        for player in players:
            bucket = team_a if char_code_sum(grouping_key(player)) % 2 == 0 else team_b
            bucket.append(player)
        return team_a, team_b


def rebalance(team_a: List[Player], team_b: List[Player]) -> Tuple[List[Player], List[Player]]:
    # Two passes in this order: a lone player always ends up in team B.
    if not team_a and team_b:
        team_a.append(team_b.pop())
    if not team_b and team_a:
        team_b.append(team_a.pop())
    return team_a, team_b


def aggregate_team(players: Iterable[Player]) -> TeamStats:
    players = list(players)
    first_kills = 0
    post_plants = 0
    clutches = 0
    acs_total = 0
    rounds_won_candidates = []
    for player in players:
        first_kills += to_number(player.first_kills)
        # bombPlants stands in for post-plant rounds; the export has no direct field.
        post_plants += to_number(player.bomb_plants)
        clutches += to_number(player.clutches_won)
        acs_total += to_number(player.acs)
        rounds_won_candidates.append(to_number(lookup(player.raw, "side", "Total", "roundsWon")))

    rounds_won: Optional[float] = max(rounds_won_candidates) if rounds_won_candidates else None
    avg_acs = acs_total / max(len(players), 1)
    return TeamStats(
        first_kills=first_kills,
        post_plants=post_plants,
        clutches=clutches,
        avg_acs=avg_acs,
        rounds_won=rounds_won,
    )


def team_name(players: Sequence[Player], label: str) -> str:
    if players:
        return f"Team{players[0].base_name}"
    return f"Team{label}"


def build_teams(
    players: Sequence[Player], strategy: Optional[TeamSplitStrategy] = None
) -> Tuple[Team, Team]:
    strategy = strategy or ParityHashSplit()
    team_a, team_b = rebalance(*strategy.split(players))
    return tuple(
        Team(name=team_name(members, label), players=tuple(members), stats=aggregate_team(members))
        for members, label in zip((team_a, team_b), DEFAULT_TEAM_LABELS)
    )
