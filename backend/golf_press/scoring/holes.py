"""Single-hole outcome shared by the evaluators and press settlement."""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from .ledger import Hole, PlayFormat, Team

HOLE_WIN = "WIN"
HOLE_HALVED = "HALVED"


def resolve_hole(
    hole: Hole, teams: Sequence[Team], play_format: PlayFormat
) -> Optional[Dict[str, Any]]:
    """Return the outcome of ``hole`` between exactly two teams.

    ``None`` means there is no result yet: the hole is incomplete or the
    roster is not a pair. Match play yields ``{"status", "winner"}``; stroke
    play yields the signed ``difference`` (team one minus team two).
    """

    if not hole.isComplete or len(teams) != 2:
        return None

    one = hole.scores.get(teams[0].id)
    two = hole.scores.get(teams[1].id)
    if one is None or two is None:
        return None

    if play_format == "match":
        if one < two:
            return {"status": HOLE_WIN, "winner": teams[0].id}
        if two < one:
            return {"status": HOLE_WIN, "winner": teams[1].id}
        return {"status": HOLE_HALVED, "winner": None}
    if play_format == "stroke":
        return {"difference": one - two}
    raise ValueError(f"unknown play format '{play_format}'")
