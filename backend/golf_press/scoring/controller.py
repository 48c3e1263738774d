"""Match state controller: applies score writes and reports hole completion."""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional

from .ledger import (
    Hole,
    Match,
    get_hole,
    get_team,
    hole_is_complete,
    next_completion_order,
)

logger = logging.getLogger(__name__)


class ScoreUpdate(NamedTuple):
    match: Match
    hole: Hole
    # True only on the write that completes the hole.
    offer_presses: bool


def apply_score(
    match: Match, hole_number: int, team_id: str, strokes: Optional[int]
) -> ScoreUpdate:
    """Record ``strokes`` for ``team_id`` on ``hole_number``.

    ``strokes`` is expected to be validated already; ``None`` clears an entry.
    A completed hole stays complete, so clearing one of its scores raises
    ``ValueError``.
    """

    hole = get_hole(match, hole_number)
    get_team(match, team_id)
    was_complete = hole.isComplete

    if strokes is None and was_complete:
        raise ValueError(f"hole {hole_number} is complete; scores cannot be cleared")

    hole.scores[team_id] = strokes
    hole.isComplete = hole_is_complete(hole)

    offer_presses = hole.isComplete and not was_complete
    if offer_presses:
        hole.completedOrder = next_completion_order(match)
        logger.info("Hole %d of match %s completed", hole_number, match.id)
    return ScoreUpdate(match, hole, offer_presses)
