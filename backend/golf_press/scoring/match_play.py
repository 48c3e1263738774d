"""Match play evaluator: holes won, halved and the overall match status."""

from __future__ import annotations

from typing import Any, Dict, Sequence

from .holes import resolve_hole
from .ledger import HOLE_COUNT, Hole, Team, team_name

INVALID_STATUS = "Invalid"


def invalid_configuration(message: str) -> Dict[str, Any]:
    return {"status": INVALID_STATUS, "winner": None, "details": {"error": message}}


def _play_order(hole: Hole) -> tuple[bool, int, int]:
    return (hole.completedOrder is not None, hole.completedOrder or 0, hole.number)


def summary(teams: Sequence[Team], holes: Sequence[Hole]) -> Dict[str, Any]:
    """Evaluate a two-team match play game.

    Holes are walked in the order they were completed (hole number for
    records that carry no completion order, such as imported cards). The
    first point at which the leader is more holes up than remain decides the
    match, and that result is kept however the remaining holes go.
    """

    if len(teams) != 2:
        return invalid_configuration("Match play requires exactly 2 teams")

    one, two = teams[0], teams[1]
    one_wins = two_wins = halved = completed = 0
    decided: Dict[str, Any] | None = None

    for hole in sorted(holes, key=_play_order):
        result = resolve_hole(hole, teams, "match")
        if result is None:
            continue
        completed += 1
        if result["winner"] == one.id:
            one_wins += 1
        elif result["winner"] == two.id:
            two_wins += 1
        else:
            halved += 1

        diff = one_wins - two_wins
        remaining = HOLE_COUNT - completed
        if decided is None and abs(diff) > remaining:
            decided = {
                "winner": one.id if diff > 0 else two.id,
                "margin": abs(diff),
                "remaining": remaining,
                "hole": hole.number,
            }

    holes_remaining = HOLE_COUNT - completed
    diff = one_wins - two_wins
    leader = one if diff > 0 else two
    winner = None

    if decided is not None:
        winner = decided["winner"]
        status = (
            f"{team_name(teams, winner)} wins {decided['margin']}"
            f" & {decided['remaining']}"
        )
    elif holes_remaining == 0:
        if diff == 0:
            status = "Match Halved"
        else:
            winner = leader.id
            status = f"{team_name(teams, leader.id)} wins {abs(diff)} UP"
    elif diff == 0:
        status = f"All Square through {completed}"
    else:
        status = f"{team_name(teams, leader.id)} {abs(diff)} UP through {completed}"

    return {
        "status": status,
        "winner": winner,
        "details": {
            "teamOneWins": one_wins,
            "teamTwoWins": two_wins,
            "halvedHoles": halved,
            "completedHoles": completed,
            "holesRemaining": holes_remaining,
            "isMatchOver": decided is not None,
            "decidedAt": decided["hole"] if decided else None,
        },
    }
