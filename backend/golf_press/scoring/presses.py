"""Press lifecycle: creating side bets on a completed hole and settling them.

A press is anchored at the hole it was declared on. Settlement is always
recomputed from the live ledger and only ever looks at holes numbered at or
after ``holeStarted``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Sequence
import uuid

from .holes import HOLE_WIN, resolve_hole
from .ledger import (
    Hole,
    Match,
    PlayFormat,
    Press,
    Team,
    get_game_format,
    get_hole,
    get_team,
    team_name,
)

logger = logging.getLogger(__name__)

TIED_STATUS = "Press is tied"


def _new_press_id() -> str:
    return uuid.uuid4().hex


def create_presses(
    match: Match,
    hole_number: int,
    declarations: Iterable[Mapping[str, Any]],
    *,
    id_factory: Callable[[], str] = _new_press_id,
) -> List[Press]:
    """Append one press per declaration to ``hole_number``.

    Each declaration names ``from``, ``to`` and ``type``. The whole batch is
    checked before anything is appended, so a rejected declaration leaves the
    hole untouched. Identical declarations are separate wagers.
    """

    hole = get_hole(match, hole_number)
    if not hole.isComplete:
        raise ValueError(f"presses can only start on a completed hole (hole {hole_number})")

    created: List[Press] = []
    for index, decl in enumerate(declarations, start=1):
        from_id = decl.get("from", decl.get("from_"))
        to_id = decl.get("to")
        game_type = decl.get("type")
        get_team(match, from_id)
        get_team(match, to_id)
        if from_id == to_id:
            raise ValueError(f"press #{index}: a team cannot press itself")
        fmt = get_game_format(match, game_type)
        if fmt is None:
            raise ValueError(
                f"press #{index}: game format '{game_type}' is not enabled"
            )
        created.append(
            Press(
                id=id_factory(),
                from_=from_id,
                to=to_id,
                type=fmt.type,
                amount=fmt.betAmount,
                holeStarted=hole.number,
            )
        )

    hole.presses.extend(created)
    if created:
        logger.info(
            "Created %d press(es) on hole %d of match %s",
            len(created),
            hole.number,
            match.id,
        )
    return created


def _pair(teams: Sequence[Team], press: Press) -> tuple[Team, Team]:
    lookup = {t.id: t for t in teams}
    return lookup[press.from_], lookup[press.to]


def settle_press(
    press: Press,
    teams: Sequence[Team],
    holes: Sequence[Hole],
    play_format: PlayFormat,
) -> Dict[str, Any]:
    """Running result of ``press`` between its two teams."""

    one, two = _pair(teams, press)
    pair = (one, two)
    relevant = [h for h in holes if h.number >= press.holeStarted and h.isComplete]
    one_name = team_name(teams, one.id)
    two_name = team_name(teams, two.id)

    if play_format == "match":
        one_wins = two_wins = 0
        for hole in relevant:
            result = resolve_hole(hole, pair, "match")
            if result is None or result["status"] != HOLE_WIN:
                continue
            if result["winner"] == one.id:
                one_wins += 1
            else:
                two_wins += 1
        if one_wins > two_wins:
            status, winner = f"{one_name} wins {one_wins} to {two_wins}", one.id
        elif two_wins > one_wins:
            status, winner = f"{two_name} wins {two_wins} to {one_wins}", two.id
        else:
            status, winner = TIED_STATUS, None
    elif play_format == "stroke":
        one_total = sum(h.scores.get(one.id) or 0 for h in relevant)
        two_total = sum(h.scores.get(two.id) or 0 for h in relevant)
        if one_total < two_total:
            status, winner = f"{one_name} wins by {two_total - one_total}", one.id
        elif two_total < one_total:
            status, winner = f"{two_name} wins by {one_total - two_total}", two.id
        else:
            status, winner = TIED_STATUS, None
    else:
        raise ValueError(f"unknown play format '{play_format}'")

    return {
        "id": press.id,
        "from": press.from_,
        "to": press.to,
        "type": press.type,
        "amount": press.amount,
        "holeStarted": press.holeStarted,
        "status": status,
        "winner": winner,
    }


def settle_presses(match: Match) -> List[Dict[str, Any]]:
    """Settle every press in the match, in hole order."""

    return [
        settle_press(press, match.teams, match.holes, match.playFormat)
        for hole in sorted(match.holes, key=lambda h: h.number)
        for press in hole.presses
    ]


def press_balances(
    match: Match, settlements: Sequence[Mapping[str, Any]] | None = None
) -> Dict[str, float]:
    """Net amount won (positive) or owed (negative) per team id."""

    if settlements is None:
        settlements = settle_presses(match)
    balances = {team.id: 0.0 for team in match.teams}
    for item in settlements:
        winner = item.get("winner")
        if not winner:
            continue
        loser = item["to"] if winner == item["from"] else item["from"]
        balances[winner] += item["amount"]
        balances[loser] -= item["amount"]
    return balances
