"""Stroke play evaluator: cumulative totals and leaderboard positions."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .ledger import Hole, Team, team_name
from .match_play import invalid_configuration


def team_totals(teams: Sequence[Team], holes: Sequence[Hole]) -> List[Dict[str, Any]]:
    rows = []
    for team in teams:
        strokes = [hole.scores.get(team.id) for hole in holes]
        played = [s for s in strokes if s is not None]
        # Unplayed holes count as zero rather than an estimate.
        total = sum(played)
        rows.append(
            {
                "teamId": team.id,
                "teamName": team_name(teams, team.id),
                "totalScore": total,
                "completedHoles": len(played),
                "average": total / len(played) if played else 0,
            }
        )
    return rows


def rank(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Sort ``rows`` by total and assign shared, non-dense positions."""

    ranked = sorted(rows, key=lambda r: r["totalScore"])
    position = 1
    current = ranked[0]["totalScore"] if ranked else None
    for index, row in enumerate(ranked):
        if row["totalScore"] > current:
            position = index + 1
            current = row["totalScore"]
        row["position"] = position
    return ranked


def summary(teams: Sequence[Team], holes: Sequence[Hole]) -> Dict[str, Any]:
    if len(teams) < 2:
        return invalid_configuration("Stroke play requires at least 2 teams")

    results = rank(team_totals(teams, holes))
    best, second = results[0], results[1]

    if best["totalScore"] == second["totalScore"]:
        status = f"Tied at {best['totalScore']}"
        winner = None
    else:
        margin = second["totalScore"] - best["totalScore"]
        status = f"{best['teamName']} leads by {margin}"
        winner = best["teamId"]

    return {"status": status, "winner": winner, "details": results}
